from __future__ import annotations

from kashi.kana import (
    contains_cjk,
    is_kana_char,
    katakana_to_hiragana,
    to_hiragana,
)
from kashi.kana_table import GEMINATE_MARKS, GOJUON_ROWS, KANA_TO_ROMAJI, SMALL_VOWEL_KANA


def test_script_conversion() -> None:
    assert katakana_to_hiragana("ヴァイオリン") == "ゔぁいおりん"
    assert katakana_to_hiragana("漢字とabc") == "漢字とabc"


def test_character_classes() -> None:
    assert contains_cjk("君の")
    assert not contains_cjk("きみの")
    assert is_kana_char("ー")
    assert not is_kana_char("a")
    assert not is_kana_char("")


def test_to_hiragana_keeps_leading_long_mark_and_after_n() -> None:
    assert to_hiragana("ーん") == "ーん"
    assert to_hiragana("ンー") == "んー"
    assert to_hiragana("キャー") == "きゃあ"


def test_gojuon_chart_agrees_with_romaji_table() -> None:
    assert len(GOJUON_ROWS) == 11
    for row in GOJUON_ROWS:
        assert len(row) == 5
        for cell in row:
            if cell is None:
                continue
            assert KANA_TO_ROMAJI[cell.hira] == cell.romaji
            assert KANA_TO_ROMAJI[cell.kata] == cell.romaji


def test_katakana_entries_mirror_hiragana_digraphs() -> None:
    assert KANA_TO_ROMAJI["きゃ"] == KANA_TO_ROMAJI["キャ"] == "kya"
    assert KANA_TO_ROMAJI["シ"] == "shi"
    assert KANA_TO_ROMAJI["ヴ"] == "vu"
    assert GEMINATE_MARKS == {"っ", "ッ"}
    assert "ゃ" in SMALL_VOWEL_KANA and "ャ" in SMALL_VOWEL_KANA
