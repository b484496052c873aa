from __future__ import annotations

import logging
import shlex
import threading
import warnings
from typing import Callable, Iterable, Optional, Protocol

from .furigana import render_furigana_markup
from .kana import contains_cjk, is_cjk_char, is_kana_char, katakana_to_hiragana
from .tools import get_unidic_dicdir

__all__ = [
    "Analyzer",
    "AnalyzerError",
    "FuriganaAnalyzer",
    "split_okurigana",
]

logger = logging.getLogger(__name__)

_READING_ATTRS = ("kana", "reading", "reading_form", "pron", "pronunciation")


class AnalyzerError(RuntimeError):
    """Raised when the morphological analyzer is unavailable or fails on a line."""


class Analyzer(Protocol):
    def annotate(self, text: str) -> str: ...


def split_okurigana(surface: str, reading: str) -> list[tuple[str, str | None]]:
    """
    Peel kana shared by the surface and its reading off both ends.

    ``("走った", "はしった")`` becomes ``[("走", "はし"), ("った", None)]`` so the
    ruby only spans the kanji.
    """
    folded = katakana_to_hiragana(surface)
    head = 0
    while (
        head < len(folded) - 1
        and head < len(reading) - 1
        and is_kana_char(folded[head])
        and folded[head] == reading[head]
    ):
        head += 1
    tail = 0
    while (
        tail < len(folded) - head - 1
        and tail < len(reading) - head - 1
        and is_kana_char(folded[-1 - tail])
        and folded[-1 - tail] == reading[-1 - tail]
    ):
        tail += 1
    core_surface = surface[head : len(surface) - tail]
    core_reading = reading[head : len(reading) - tail]
    pairs: list[tuple[str, str | None]] = []
    if head:
        pairs.append((surface[:head], None))
    pairs.append((core_surface, core_reading))
    if tail:
        pairs.append((surface[len(surface) - tail :], None))
    return pairs


class FuriganaAnalyzer:
    """Fugashi-backed analyzer that emits ruby furigana markup for kanji tokens."""

    def __init__(
        self,
        tagger: Optional[Callable[[str], Iterable[object]]] = None,
        kana_converter: Optional[Callable[[str], str]] = None,
    ) -> None:
        self._tagger = tagger if tagger is not None else self._build_tagger()
        self._kana_converter = kana_converter if kana_converter is not None else self._build_kakasi_converter()
        self._lock = threading.Lock()

    def annotate(self, text: str) -> str:
        """Return furigana markup for ``text``; any tagger or kakasi failure surfaces as AnalyzerError."""
        if not text:
            return ""
        try:
            pairs = self._annotate_pairs(text)
        except AnalyzerError:
            raise
        except Exception as exc:
            raise AnalyzerError(f"Analyzer failed on {text!r}: {exc}") from exc
        return render_furigana_markup(pairs)

    def _annotate_pairs(self, text: str) -> list[tuple[str, str | None]]:
        with self._lock:
            raw_tokens = list(self._tagger(text))
        pairs: list[tuple[str, str | None]] = []
        pos = 0
        for raw in raw_tokens:
            surface = getattr(raw, "surface", "")
            if not surface:
                continue
            start = text.find(surface, pos)
            if start == -1:
                start = pos
            if start > pos:
                pairs.append((text[pos:start], None))
            if contains_cjk(surface):
                reading = self._reading_for_token(raw, surface)
                if reading:
                    pairs.extend(split_okurigana(surface, reading))
                else:
                    pairs.append((surface, None))
            else:
                pairs.append((surface, None))
            pos = max(pos, start + len(surface))
        if pos < len(text):
            pairs.append((text[pos:], None))
        return pairs

    def _reading_for_token(self, token, surface: str) -> str:
        reading = self._extract_reading(token)
        if reading and not contains_cjk(reading):
            return reading
        logger.debug("No dictionary reading for %r; resolving per character.", surface)
        chars: list[str] = []
        for ch in surface:
            if is_cjk_char(ch):
                chars.append(self._reading_for_char(ch))
            else:
                chars.append(katakana_to_hiragana(ch))
        return "".join(chars)

    def _reading_for_char(self, ch: str) -> str:
        with self._lock:
            raw_tokens = list(self._tagger(ch))
        for raw in raw_tokens:
            reading = self._extract_reading(raw)
            if reading and not contains_cjk(reading):
                return reading
        converted = katakana_to_hiragana(self._kana_converter(ch))
        return converted or ch

    def _extract_reading(self, token) -> str:
        feature = getattr(token, "feature", None)
        if feature is None:
            return ""
        for attr in _READING_ATTRS:
            if hasattr(feature, attr):
                value = getattr(feature, attr)
            else:
                try:
                    value = feature[attr]
                except (KeyError, IndexError, TypeError):
                    value = None
            if value and value != "*":
                return katakana_to_hiragana(str(value))
        return ""

    @staticmethod
    def _build_tagger() -> Callable[[str], Iterable[object]]:
        try:
            from fugashi import GenericTagger, Tagger  # type: ignore
            from fugashi import fugashi as fugashi_core  # type: ignore
        except ImportError as exc:
            raise AnalyzerError("The analyzer requires 'fugashi' (MeCab) to be installed.") from exc

        dicdir = get_unidic_dicdir()
        if dicdir:
            args = f"-d {shlex.quote(str(dicdir))}"
            feature_wrapper = getattr(fugashi_core, "UnidicFeatures29", None)
            try:
                if feature_wrapper is not None:
                    return GenericTagger(args, feature_wrapper)
                return GenericTagger(args)
            except RuntimeError as exc:
                raise AnalyzerError(
                    f"Failed to initialize UniDic dictionary at '{dicdir}': {exc}"
                ) from exc
        warnings.warn(
            "UniDic not detected; falling back to the default MeCab dictionary.",
            RuntimeWarning,
            stacklevel=3,
        )
        try:
            return Tagger()
        except RuntimeError as exc:
            raise AnalyzerError(f"No MeCab dictionary available: {exc}") from exc

    @staticmethod
    def _build_kakasi_converter() -> Callable[[str], str]:
        try:
            from pykakasi import kakasi  # type: ignore
        except ImportError as exc:
            raise AnalyzerError("The analyzer requires 'pykakasi' for fallback readings.") from exc

        kks = kakasi()

        def _convert(text: str) -> str:
            result = kks.convert(text)
            converted = "".join(item.get("hira") or item.get("orig", "") for item in result)
            return converted or text

        return _convert
