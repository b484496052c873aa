from __future__ import annotations

import json

import pytest

import kashi.cli as cli
from kashi.nlp import AnalyzerError


class _StubAnalyzer:
    def annotate(self, text: str) -> str:
        return text.replace("君", "<ruby>君<rt>きみ</rt></ruby>")


def _broken_analyzer():
    raise AnalyzerError("fugashi missing")


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    monkeypatch.delenv("KASHI_MODE", raising=False)
    monkeypatch.delenv("KASHI_JOBS", raising=False)


def test_convert_fallback_prints_three_rows(capsys) -> None:
    exit_code = cli.main(["convert", "--mode", "fallback", "君の夢"])
    assert exit_code == 0
    out = capsys.readouterr().out.strip().splitlines()
    assert out == ["君の夢", "きみのゆめ", "ki mi no yu me"]


def test_convert_with_analyzer_outputs_json(monkeypatch, capsys) -> None:
    monkeypatch.setattr(cli, "FuriganaAnalyzer", _StubAnalyzer)
    exit_code = cli.main(["convert", "--mode", "analyzer", "--json", "君と"])
    assert exit_code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload[0]["hiragana"] == "きみと"
    assert payload[0]["words"][0]["surface"] == "君"


def test_convert_analyzer_mode_exits_when_analyzer_missing(monkeypatch) -> None:
    monkeypatch.setattr(cli, "FuriganaAnalyzer", _broken_analyzer)
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["convert", "--mode", "analyzer", "君"])
    assert "fugashi missing" in str(excinfo.value)


def test_convert_auto_mode_degrades_to_fallback(monkeypatch, capsys) -> None:
    monkeypatch.setattr(cli, "FuriganaAnalyzer", _broken_analyzer)
    assert cli.main(["convert", "君の夢"]) == 0
    assert "ki mi no yu me" in capsys.readouterr().out


def test_file_command_writes_export(tmp_path, capsys) -> None:
    source = tmp_path / "lyrics.txt"
    source.write_text("君の夢\n\n子供の歌\n", encoding="utf-8")
    output = tmp_path / "out.txt"
    assert cli.main(["file", str(source), "--mode", "fallback", "-o", str(output)]) == 0
    assert output.read_text(encoding="utf-8") == (
        "君の夢\nきみのゆめ\nki mi no yu me\n\n子供の歌\nこどものうた\nko do mo no u ta\n"
    )
    assert "2 line(s)" in capsys.readouterr().out


def test_file_command_missing_input(tmp_path) -> None:
    with pytest.raises(SystemExit):
        cli.main(["file", str(tmp_path / "nope.txt")])


def test_chart_lists_kana(capsys) -> None:
    assert cli.main(["chart", "--katakana"]) == 0
    out = capsys.readouterr().out
    assert "ア" in out
    assert "shi" in out


def test_tools_requires_subcommand() -> None:
    with pytest.raises(SystemExit):
        cli.main(["tools"])


def test_no_arguments_prints_help(capsys) -> None:
    assert cli.main([]) == 0
    assert "kashi" in capsys.readouterr().out
