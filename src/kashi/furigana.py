from __future__ import annotations

import html
from dataclasses import dataclass
from typing import Iterable, Iterator

from bs4 import BeautifulSoup, NavigableString, Tag  # type: ignore
from bs4.element import PreformattedString  # type: ignore

from .kana import katakana_to_hiragana
from .mora import Mora, segment_moras

__all__ = [
    "Word",
    "parse_furigana_markup",
    "render_furigana_markup",
]

# The analyzer spells voiced-u (ヴ) readings with ゔ; lyrics sing them as ぶ.
_READING_FIXUPS = (("ゔ", "ぶ"),)

_SKIPPED_TAGS = {"rp", "rt", "script", "style"}


@dataclass(frozen=True)
class Word:
    """
    One rendered unit: an annotated analyzer token or a plain run.

    ``surface`` is empty for plain runs; otherwise ``moras`` comes from the
    annotated reading, never from the surface text.
    """

    surface: str
    moras: tuple[Mora, ...]

    @property
    def reading(self) -> str:
        return "".join(mora.kana for mora in self.moras)

    @property
    def romaji(self) -> str:
        return "".join(mora.romaji for mora in self.moras)


def _ruby_base_text(ruby: Tag) -> str:
    rbs = ruby.find_all("rb", recursive=False)
    if rbs:
        return "".join(rb.get_text() for rb in rbs)
    parts: list[str] = []
    for child in ruby.children:
        if isinstance(child, PreformattedString):
            continue
        if isinstance(child, NavigableString):
            parts.append(str(child))
        elif isinstance(child, Tag) and child.name not in ("rt", "rp"):
            parts.append(child.get_text())
    return "".join(parts)


def _ruby_reading_text(ruby: Tag) -> str:
    rts = ruby.find_all("rt", recursive=False)
    return "".join(rt.get_text() for rt in rts)


def _fix_reading(reading: str) -> str:
    for source, target in _READING_FIXUPS:
        reading = reading.replace(source, target)
    return reading


def _plain_word(text: str) -> Word | None:
    run = katakana_to_hiragana(text).strip()
    if not run:
        return None
    return Word(surface="", moras=tuple(segment_moras(run)))


def _annotated_word(ruby: Tag) -> Word | None:
    surface = _ruby_base_text(ruby)
    reading = _fix_reading(_ruby_reading_text(ruby).strip())
    if not surface or not reading:
        return None
    return Word(surface=surface, moras=tuple(segment_moras(reading)))


def _iter_words(node: Tag) -> Iterator[Word]:
    for child in node.children:
        if isinstance(child, PreformattedString):
            continue
        if isinstance(child, NavigableString):
            word = _plain_word(str(child))
        elif isinstance(child, Tag):
            if child.name == "ruby":
                word = _annotated_word(child)
            elif child.name in _SKIPPED_TAGS:
                continue
            else:
                yield from _iter_words(child)
                continue
        else:
            continue
        if word is not None:
            yield word


def parse_furigana_markup(markup: str) -> list[Word]:
    """
    Turn analyzer furigana markup into words, in document order.

    ``<ruby>`` elements become annotated words; text between them becomes
    plain words (katakana folded to hiragana). Anything else is walked for
    text or dropped, so malformed markup never raises.
    """
    if not markup:
        return []
    soup = BeautifulSoup(markup, "html.parser")
    return list(_iter_words(soup))


def render_furigana_markup(pairs: Iterable[tuple[str, str | None]]) -> str:
    """Build furigana markup from ``(surface, reading)`` pairs; ``None`` marks a plain run."""
    parts: list[str] = []
    for surface, reading in pairs:
        if not surface:
            continue
        if reading:
            parts.append(
                "<ruby>{}<rp>(</rp><rt>{}</rt><rp>)</rp></ruby>".format(
                    html.escape(surface, quote=False), html.escape(reading, quote=False)
                )
            )
        else:
            parts.append(html.escape(surface, quote=False))
    return "".join(parts)
