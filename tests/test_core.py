from __future__ import annotations

import threading
from types import SimpleNamespace

import pytest

from kashi.core import (
    ConverterConfig,
    Line,
    LyricLine,
    convert_line,
    convert_lyrics,
    format_export,
    line_payload,
    split_lyric_lines,
)
from kashi.nlp import AnalyzerError, FuriganaAnalyzer


class _StubAnalyzer:
    """Returns canned markup; kana-only text comes back as a single plain run."""

    markup = {
        "君の名は": "<ruby>君<rt>きみ</rt></ruby>の<ruby>名<rt>な</rt></ruby>は",
        "夢を見ている": "<ruby>夢<rt>ゆめ</rt></ruby>を<ruby>見<rt>み</rt></ruby>ている",
    }

    def __init__(self, fail_on: str | None = None) -> None:
        self.fail_on = fail_on
        self.seen: list[str] = []
        self._lock = threading.Lock()

    def annotate(self, text: str) -> str:
        with self._lock:
            self.seen.append(text)
        if text == self.fail_on:
            raise AnalyzerError("engine timed out")
        return self.markup.get(text, text)


def test_convert_line_builds_words_from_markup() -> None:
    line = convert_line("君の名は", _StubAnalyzer())
    assert isinstance(line, Line)
    assert [w.surface for w in line.words] == ["君", "", "名", ""]
    assert line.hiragana == "きみのなは"
    assert line.romaji == "kimi no na ha"


def test_convert_line_applies_overrides_before_analysis() -> None:
    analyzer = _StubAnalyzer()
    line = convert_line("明日へ", analyzer)
    assert analyzer.seen == ["あしたへ"]
    assert line.original == "明日へ"
    assert line.hiragana == "あしたへ"

    analyzer = _StubAnalyzer()
    convert_line("明日へ", analyzer, apply_overrides=False)
    assert analyzer.seen == ["明日へ"]


def test_long_vowel_and_geminate_render_inside_a_word() -> None:
    line = convert_line("らーめんだっ", _StubAnalyzer())
    assert line.romaji == "ra-menda'"


def test_split_lyric_lines_drops_blank_lines() -> None:
    assert split_lyric_lines("  君の名は \n\n   \n夢を見ている\n") == ["君の名は", "夢を見ている"]


def test_batch_preserves_line_order_across_workers() -> None:
    lines = [f"らいん{'あ' * idx}" for idx in range(12)]
    result = convert_lyrics("\n".join(lines), _StubAnalyzer(), ConverterConfig(mode="analyzer", jobs=4))
    assert [line.original for line in result] == lines


def test_analyzer_mode_aborts_the_whole_batch() -> None:
    analyzer = _StubAnalyzer(fail_on="夢を見ている")
    with pytest.raises(AnalyzerError):
        convert_lyrics("君の名は\n夢を見ている", analyzer, ConverterConfig(mode="analyzer"))


def test_analyzer_mode_without_analyzer_raises() -> None:
    with pytest.raises(AnalyzerError):
        convert_lyrics("君の名は", None, ConverterConfig(mode="analyzer"))


def test_auto_mode_falls_back_for_the_whole_batch() -> None:
    analyzer = _StubAnalyzer(fail_on="夢を見ている")
    result = convert_lyrics("君の名は\n夢を見ている", analyzer, ConverterConfig(mode="auto", jobs=1))
    assert all(isinstance(line, LyricLine) for line in result)
    assert result[1].hiragana == "ゆめをみている"


def test_auto_mode_falls_back_when_reading_lookup_crashes() -> None:
    def _tagger(text: str):
        if len(text) == 1:
            raise RuntimeError("mecab crashed")
        return [SimpleNamespace(surface=text, feature=SimpleNamespace(kana="*"))]

    analyzer = FuriganaAnalyzer(tagger=_tagger, kana_converter=lambda text: text)
    result = convert_lyrics("君の夢", analyzer, ConverterConfig(mode="auto", jobs=1))
    assert result == [LyricLine("君の夢", "きみのゆめ", "ki mi no yu me")]

    with pytest.raises(AnalyzerError, match="mecab crashed"):
        convert_lyrics("君の夢", analyzer, ConverterConfig(mode="analyzer", jobs=1))


def test_fallback_mode_never_calls_the_analyzer() -> None:
    analyzer = _StubAnalyzer()
    result = convert_lyrics("君の夢", analyzer, ConverterConfig(mode="fallback"))
    assert analyzer.seen == []
    assert result == [LyricLine("君の夢", "きみのゆめ", "ki mi no yu me")]


def test_empty_input_converts_to_nothing() -> None:
    assert convert_lyrics(" \n ", _StubAnalyzer()) == []


def test_format_export_matches_three_row_blocks() -> None:
    lines = [
        convert_line("君の名は", _StubAnalyzer()),
        LyricLine("君の夢", "きみのゆめ", "ki mi no yu me"),
    ]
    assert format_export(lines) == (
        "君の名は\nきみのなは\nkimi no na ha\n\n君の夢\nきみのゆめ\nki mi no yu me"
    )


def test_line_payload_includes_moras() -> None:
    payload = line_payload(convert_line("君の名は", _StubAnalyzer()))
    assert payload["source"] == "analyzer"
    first_word = payload["words"][0]
    assert first_word["surface"] == "君"
    assert first_word["moras"][0] == {"kana": "き", "romaji": "ki", "category": "Normal"}
    assert line_payload(LyricLine("a", "a", "a"))["source"] == "fallback"


def test_config_from_env(monkeypatch) -> None:
    monkeypatch.setenv("KASHI_MODE", "Fallback")
    monkeypatch.setenv("KASHI_JOBS", "8")
    config = ConverterConfig.from_env()
    assert config.mode == "fallback"
    assert config.jobs == 8

    monkeypatch.setenv("KASHI_MODE", "bogus")
    with pytest.raises(ValueError):
        ConverterConfig.from_env()
