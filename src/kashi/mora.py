from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from .kana_table import GEMINATE_MARKS, KANA_TO_ROMAJI, LONG_VOWEL_MARK, SMALL_VOWEL_KANA

__all__ = [
    "Mora",
    "MoraCategory",
    "NORMAL",
    "GEMINATE",
    "PALATALIZED",
    "LONG_VOWEL",
    "romanize_kana",
    "romanize_pair",
    "segment_moras",
]

MoraCategory = Literal["Normal", "Geminate", "Palatalized", "LongVowel"]

NORMAL: MoraCategory = "Normal"
GEMINATE: MoraCategory = "Geminate"
PALATALIZED: MoraCategory = "Palatalized"
LONG_VOWEL: MoraCategory = "LongVowel"

WORD_FINAL_GEMINATE = "'"
LONG_VOWEL_ROMAJI = "-"


@dataclass(frozen=True)
class Mora:
    kana: str
    romaji: str
    category: MoraCategory = NORMAL


def romanize_kana(ch: str) -> str:
    return KANA_TO_ROMAJI.get(ch, ch)


def romanize_pair(pair: str) -> str:
    """Romanize a base kana fused with a small kana as one sound."""
    romaji = KANA_TO_ROMAJI.get(pair)
    if romaji is not None:
        return romaji
    return "".join(romanize_kana(ch) for ch in pair)


def _predict_geminate(reading: str, idx: int) -> str:
    # idx points at the small tsu; the doubled consonant comes from what follows.
    nxt = idx + 1
    if nxt >= len(reading):
        return WORD_FINAL_GEMINATE
    if nxt + 1 < len(reading) and reading[nxt + 1] in SMALL_VOWEL_KANA:
        following = romanize_pair(reading[nxt : nxt + 2])
    else:
        following = romanize_kana(reading[nxt])
    return following[:1] or WORD_FINAL_GEMINATE


def segment_moras(reading: str) -> list[Mora]:
    """
    Split a kana reading into moras.

    Small vowel kana fuse with the preceding character, a small tsu takes the
    first letter of the mora after it (or an apostrophe at the end of the
    reading), and the prolonged sound mark romanizes as a hyphen. Characters
    missing from the kana table pass through as their own romaji, so the
    joined ``kana`` fields always reproduce ``reading``.
    """
    moras: list[Mora] = []
    idx = 0
    length = len(reading)
    while idx < length:
        ch = reading[idx]
        if idx + 1 < length and reading[idx + 1] in SMALL_VOWEL_KANA:
            pair = reading[idx : idx + 2]
            moras.append(Mora(pair, romanize_pair(pair), PALATALIZED))
            idx += 2
            continue
        if ch in GEMINATE_MARKS:
            moras.append(Mora(ch, _predict_geminate(reading, idx), GEMINATE))
        elif ch == LONG_VOWEL_MARK:
            moras.append(Mora(ch, LONG_VOWEL_ROMAJI, LONG_VOWEL))
        else:
            moras.append(Mora(ch, romanize_kana(ch), NORMAL))
        idx += 1
    return moras
