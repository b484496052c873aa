from .core import (
    ConverterConfig,
    Line,
    LyricLine,
    convert_line,
    convert_lyrics,
    fallback_line,
    format_export,
)
from .fallback import transliterate
from .furigana import Word, parse_furigana_markup
from .mora import Mora, segment_moras
from .nlp import Analyzer, AnalyzerError, FuriganaAnalyzer
from .overrides import apply_lexical_overrides

__all__ = [
    "Analyzer",
    "AnalyzerError",
    "ConverterConfig",
    "FuriganaAnalyzer",
    "Line",
    "LyricLine",
    "Mora",
    "Word",
    "apply_lexical_overrides",
    "convert_line",
    "convert_lyrics",
    "fallback_line",
    "format_export",
    "parse_furigana_markup",
    "segment_moras",
    "transliterate",
]
