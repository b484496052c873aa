from __future__ import annotations

import re
import unicodedata

from .kana_table import KANA_TO_ROMAJI, LONG_VOWEL_MARK

__all__ = [
    "katakana_to_hiragana",
    "is_cjk_char",
    "contains_cjk",
    "is_kana_char",
    "to_hiragana",
]

_KATAKANA_TO_HIRAGANA = str.maketrans(
    {chr(code): chr(code - 0x60) for code in range(ord("ァ"), ord("ヶ") + 1)}
    | {"ヽ": "ゝ", "ヾ": "ゞ"}
)

_HALFWIDTH_KANA_RE = re.compile(r"[｡-ﾟ]+")

_VOWEL_KANA = {
    "a": "あ",
    "i": "い",
    "u": "う",
    "e": "え",
    "o": "お",
}


def katakana_to_hiragana(text: str) -> str:
    return text.translate(_KATAKANA_TO_HIRAGANA)


def is_cjk_char(ch: str) -> bool:
    if not ch:
        return False
    code = ord(ch)
    return (
        0x4E00 <= code <= 0x9FFF
        or 0x3400 <= code <= 0x4DBF
        or 0x20000 <= code <= 0x2A6DF
        or 0xF900 <= code <= 0xFAFF
        or ch in "々〆ヵヶ"
    )


def contains_cjk(text: str) -> bool:
    return any(is_cjk_char(ch) for ch in text)


def is_kana_char(ch: str) -> bool:
    if not ch:
        return False
    code = ord(ch)
    return (
        0x3041 <= code <= 0x309F  # Hiragana
        or 0x30A1 <= code <= 0x30FF  # Katakana
        or ch == LONG_VOWEL_MARK
    )


def _fold_halfwidth_kana(text: str) -> str:
    return _HALFWIDTH_KANA_RE.sub(lambda match: unicodedata.normalize("NFKC", match.group(0)), text)


def _trailing_vowel(kana: str) -> str | None:
    romaji = KANA_TO_ROMAJI.get(kana)
    if not romaji:
        return None
    return _VOWEL_KANA.get(romaji[-1])


def to_hiragana(text: str) -> str:
    """
    Normalize mixed text to hiragana.

    Katakana (including half-width forms) becomes hiragana and a prolonged
    sound mark that follows a kana is spelled out as that kana's vowel, so
    ``ラーメン`` and ``らーめん`` both yield ``らあめん``. Anything that is not
    kana, romaji fragments included, is returned untouched.
    """
    if not text:
        return text
    folded = katakana_to_hiragana(_fold_halfwidth_kana(text))
    chars: list[str] = []
    for ch in folded:
        if ch == LONG_VOWEL_MARK and chars:
            vowel = _trailing_vowel(chars[-1])
            if vowel is not None:
                chars.append(vowel)
                continue
        chars.append(ch)
    return "".join(chars)
