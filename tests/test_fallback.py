from __future__ import annotations

from kashi.fallback import (
    LyricLine,
    kanji_pass,
    normalize_kana,
    romanize_kana_text,
    transliterate,
)
from kashi.kanji_dict import KANJI_TO_KANA, MAX_KANJI_KEY_LENGTH
from kashi.kana import is_kana_char


def test_two_character_entry_beats_single_character_prefix() -> None:
    assert KANJI_TO_KANA["子"] == "こ"
    assert kanji_pass("子供の夢") == "こどものゆめ"


def test_longest_key_wins_over_shorter_overlapping_keys() -> None:
    # 今日は (3) beats 今日 (2) and 今 (1)
    assert kanji_pass("今日は") == "きょうは"
    assert kanji_pass("一期一会") == "いちごいちえ"


def test_unmatched_katakana_is_folded_and_other_chars_pass_through() -> None:
    assert kanji_pass("ラブ Song 鬱") == "らぶ Song 鬱"


def test_custom_dictionary_and_key_length() -> None:
    dictionary = {"ab": "X", "abc": "Y", "a": "Z"}
    assert kanji_pass("abcab", dictionary, max_key_length=3) == "YX"
    assert kanji_pass("abcab", dictionary, max_key_length=2) == "XcX"


def test_normalize_kana_expands_long_vowels_and_keeps_romaji() -> None:
    assert normalize_kana("ラーメン") == "らあめん"
    assert normalize_kana("らーめん") == "らあめん"
    assert normalize_kana("ﾗｰﾒﾝ") == "らあめん"
    assert normalize_kana("ーあ") == "ーあ"
    assert normalize_kana("love ソング") == "love そんぐ"


def test_romanize_prefers_digraphs_and_joins_with_spaces() -> None:
    assert romanize_kana_text("きょうは") == "kyo u ha"
    assert romanize_kana_text("がっこう") == "ga tsu ko u"
    assert romanize_kana_text("あ い") == "a i"
    assert romanize_kana_text("ゆめ　★ x") == "yu me ★ x"
    assert romanize_kana_text("") == ""


def test_transliterate_line() -> None:
    line = transliterate("君の夢")
    assert line == LyricLine(original="君の夢", hiragana="きみのゆめ", romaji="ki mi no yu me")


def test_transliterate_is_deterministic_and_total() -> None:
    text = "夢の鬱★ラー"
    assert transliterate(text) == transliterate(text)
    assert transliterate(text).hiragana == "ゆめの鬱★らあ"


def test_dictionary_shape() -> None:
    assert all(1 <= len(key) <= MAX_KANJI_KEY_LENGTH for key in KANJI_TO_KANA)
    assert all(value and all(is_kana_char(ch) for ch in value) for value in KANJI_TO_KANA.values())
