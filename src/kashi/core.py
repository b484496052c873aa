from __future__ import annotations

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Iterable, Literal

from .fallback import LyricLine, transliterate
from .furigana import Word, parse_furigana_markup
from .mora import Mora
from .nlp import Analyzer, AnalyzerError
from .overrides import apply_lexical_overrides

__all__ = [
    "ConverterConfig",
    "Line",
    "LyricLine",
    "convert_line",
    "convert_lyrics",
    "fallback_line",
    "format_export",
    "line_payload",
    "mora_payload",
    "split_lyric_lines",
]

logger = logging.getLogger(__name__)

ConversionMode = Literal["analyzer", "fallback", "auto"]
CONVERSION_MODES: tuple[str, ...] = ("analyzer", "fallback", "auto")
DEFAULT_JOBS = 4


@dataclass(frozen=True)
class ConverterConfig:
    mode: ConversionMode = "auto"
    jobs: int = DEFAULT_JOBS
    apply_overrides: bool = True

    @classmethod
    def from_env(cls) -> "ConverterConfig":
        mode = os.environ.get("KASHI_MODE", "auto").strip().lower()
        if mode not in CONVERSION_MODES:
            raise ValueError(f"KASHI_MODE must be one of {', '.join(CONVERSION_MODES)}; got {mode!r}.")
        raw_jobs = os.environ.get("KASHI_JOBS", "").strip()
        jobs = int(raw_jobs) if raw_jobs.isdigit() and int(raw_jobs) > 0 else DEFAULT_JOBS
        return cls(mode=mode, jobs=jobs)  # type: ignore[arg-type]


@dataclass(frozen=True)
class Line:
    """One converted lyric line from the analyzer pipeline."""

    original: str
    words: tuple[Word, ...]
    source: str = "analyzer"

    @property
    def hiragana(self) -> str:
        return "".join(word.reading for word in self.words)

    @property
    def romaji(self) -> str:
        return " ".join(word.romaji for word in self.words if word.romaji.strip())

    def to_lyric_line(self) -> LyricLine:
        return LyricLine(original=self.original, hiragana=self.hiragana, romaji=self.romaji)


def split_lyric_lines(text: str) -> list[str]:
    return [line.strip() for line in text.splitlines() if line.strip()]


def convert_line(text: str, analyzer: Analyzer, *, apply_overrides: bool = True) -> Line:
    """Run one line through overrides, the analyzer and the markup parser. AnalyzerError propagates."""
    prepared = apply_lexical_overrides(text) if apply_overrides else text
    markup = analyzer.annotate(prepared)
    return Line(original=text, words=tuple(parse_furigana_markup(markup)))


def fallback_line(text: str) -> LyricLine:
    return transliterate(text)


def _map_ordered(func, items: list[str], jobs: int) -> list:
    if len(items) <= 1 or jobs <= 1:
        return [func(item) for item in items]
    with ThreadPoolExecutor(max_workers=min(jobs, len(items)), thread_name_prefix="kashi-line") as executor:
        return list(executor.map(func, items))


def convert_lyrics(
    text: str,
    analyzer: Analyzer | None = None,
    config: ConverterConfig | None = None,
) -> list[Line | LyricLine]:
    """
    Convert every non-blank line of ``text``, preserving line order.

    In ``analyzer`` mode an AnalyzerError on any line aborts the whole batch.
    ``auto`` switches the entire batch to the dictionary fallback when the
    analyzer is missing or fails; results are never mixed within a batch.
    """
    config = config or ConverterConfig()
    lines = split_lyric_lines(text)
    if not lines:
        return []

    if config.mode == "fallback":
        return _map_ordered(fallback_line, lines, config.jobs)

    if analyzer is None:
        if config.mode == "analyzer":
            raise AnalyzerError("No analyzer available for analyzer mode.")
        logger.info("No analyzer configured; using the dictionary fallback for %d line(s).", len(lines))
        return _map_ordered(fallback_line, lines, config.jobs)

    def _convert(line: str) -> Line:
        return convert_line(line, analyzer, apply_overrides=config.apply_overrides)

    try:
        converted = _map_ordered(_convert, lines, config.jobs)
    except AnalyzerError as exc:
        if config.mode == "analyzer":
            raise
        logger.warning("Analyzer failed (%s); converting the batch with the dictionary fallback.", exc)
        return _map_ordered(fallback_line, lines, config.jobs)
    logger.debug("Converted %d line(s) with the analyzer.", len(converted))
    return converted


def _as_lyric_line(line: Line | LyricLine) -> LyricLine:
    return line.to_lyric_line() if isinstance(line, Line) else line


def format_export(lines: Iterable[Line | LyricLine]) -> str:
    blocks: list[str] = []
    for line in lines:
        lyric = _as_lyric_line(line)
        blocks.append(f"{lyric.original}\n{lyric.hiragana}\n{lyric.romaji}")
    return "\n\n".join(blocks).strip()


def mora_payload(mora: Mora) -> dict[str, str]:
    return {"kana": mora.kana, "romaji": mora.romaji, "category": mora.category}


def line_payload(line: Line | LyricLine) -> dict[str, object]:
    lyric = _as_lyric_line(line)
    payload: dict[str, object] = {
        "original": lyric.original,
        "hiragana": lyric.hiragana,
        "romaji": lyric.romaji,
    }
    if isinstance(line, Line):
        payload["source"] = line.source
        payload["words"] = [
            {
                "surface": word.surface,
                "reading": word.reading,
                "moras": [mora_payload(mora) for mora in word.moras],
            }
            for word in line.words
        ]
    else:
        payload["source"] = "fallback"
    return payload
