from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from .kana import katakana_to_hiragana, to_hiragana
from .kana_table import KANA_TO_ROMAJI
from .kanji_dict import KANJI_TO_KANA, MAX_KANJI_KEY_LENGTH

__all__ = [
    "LyricLine",
    "kanji_pass",
    "normalize_kana",
    "romanize_kana_text",
    "transliterate",
]


@dataclass(frozen=True)
class LyricLine:
    original: str
    hiragana: str
    romaji: str


def kanji_pass(
    text: str,
    dictionary: Mapping[str, str] = KANJI_TO_KANA,
    max_key_length: int = MAX_KANJI_KEY_LENGTH,
) -> str:
    """
    Greedy longest-match substitution of dictionary entries.

    Shorter keys are only tried when no longer key matches at a position;
    unmatched characters are kept, with katakana folded to hiragana.
    """
    pieces: list[str] = []
    idx = 0
    length = len(text)
    while idx < length:
        for size in range(min(max_key_length, length - idx), 0, -1):
            reading = dictionary.get(text[idx : idx + size])
            if reading is not None:
                pieces.append(reading)
                idx += size
                break
        else:
            pieces.append(katakana_to_hiragana(text[idx]))
            idx += 1
    return "".join(pieces)


def normalize_kana(text: str) -> str:
    return to_hiragana(text)


def romanize_kana_text(kana: str) -> str:
    """
    Romanize kana as space-separated units, trying two-character digraphs first.

    Characters missing from the table pass through as themselves. Whitespace
    in the input is dropped, since the single spaces between units already
    separate the output.
    """
    pieces: list[str] = []
    idx = 0
    length = len(kana)
    while idx < length:
        if idx + 1 < length:
            digraph = KANA_TO_ROMAJI.get(kana[idx : idx + 2])
            if digraph is not None:
                pieces.append(digraph)
                idx += 2
                continue
        ch = kana[idx]
        idx += 1
        if ch.isspace():
            continue
        pieces.append(KANA_TO_ROMAJI.get(ch, ch))
    return " ".join(pieces)


def transliterate(text: str) -> LyricLine:
    """Convert one line without an analyzer: kanji dictionary, kana normalization, romaji."""
    hiragana = normalize_kana(kanji_pass(text))
    return LyricLine(original=text, hiragana=hiragana, romaji=romanize_kana_text(hiragana))
