from __future__ import annotations

import pytest

import kashi.overrides as overrides
from kashi.overrides import LEXICAL_OVERRIDES, apply_lexical_overrides, find_override_conflicts


def test_known_misreadings_are_replaced() -> None:
    assert apply_lexical_overrides("明日も二人で") == "あしたもふたりで"


def test_every_occurrence_is_replaced() -> None:
    assert apply_lexical_overrides("明日、明日") == "あした、あした"


@pytest.mark.parametrize("text", ["", "こんにちは", "abc"])
def test_no_match_returns_input_unchanged(text: str) -> None:
    assert apply_lexical_overrides(text) == text


def test_shipped_table_has_no_chained_entries() -> None:
    assert find_override_conflicts() == []


@pytest.mark.parametrize("text", ["明日の日々", "行こう故郷へ一番星", "貴方と私達"])
def test_applying_twice_matches_applying_once(text: str) -> None:
    once = apply_lexical_overrides(text)
    assert apply_lexical_overrides(once) == once


def test_entries_apply_in_declaration_order(monkeypatch) -> None:
    monkeypatch.setattr(overrides, "LEXICAL_OVERRIDES", (("甲", "乙"), ("乙", "丙")))
    assert apply_lexical_overrides("甲") == "丙"
    monkeypatch.setattr(overrides, "LEXICAL_OVERRIDES", (("乙", "丙"), ("甲", "乙")))
    assert apply_lexical_overrides("甲") == "乙"


def test_conflict_detection_reports_chained_pairs() -> None:
    table = (("甲", "乙丁"), ("乙", "丙"))
    assert find_override_conflicts(table) == [("甲", "乙")]


def test_table_keys_are_unique() -> None:
    needles = [needle for needle, _ in LEXICAL_OVERRIDES]
    assert len(needles) == len(set(needles))
