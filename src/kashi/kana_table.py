from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType

__all__ = [
    "KANA_TO_ROMAJI",
    "SMALL_VOWEL_KANA",
    "GEMINATE_MARKS",
    "LONG_VOWEL_MARK",
    "GojuonCell",
    "GOJUON_ROWS",
]

LONG_VOWEL_MARK = "ー"
GEMINATE_MARKS = frozenset({"っ", "ッ"})

# Small kana that fuse with the preceding kana into a single mora.
SMALL_VOWEL_KANA = frozenset(
    {
        "ぁ",
        "ぃ",
        "ぅ",
        "ぇ",
        "ぉ",
        "ゃ",
        "ゅ",
        "ょ",
        "ァ",
        "ィ",
        "ゥ",
        "ェ",
        "ォ",
        "ャ",
        "ュ",
        "ョ",
    }
)

_HIRAGANA_ROMAJI = {
    "あ": "a",
    "い": "i",
    "う": "u",
    "え": "e",
    "お": "o",
    "か": "ka",
    "き": "ki",
    "く": "ku",
    "け": "ke",
    "こ": "ko",
    "さ": "sa",
    "し": "shi",
    "す": "su",
    "せ": "se",
    "そ": "so",
    "た": "ta",
    "ち": "chi",
    "つ": "tsu",
    "て": "te",
    "と": "to",
    "な": "na",
    "に": "ni",
    "ぬ": "nu",
    "ね": "ne",
    "の": "no",
    "は": "ha",
    "ひ": "hi",
    "ふ": "fu",
    "へ": "he",
    "ほ": "ho",
    "ま": "ma",
    "み": "mi",
    "む": "mu",
    "め": "me",
    "も": "mo",
    "や": "ya",
    "ゆ": "yu",
    "よ": "yo",
    "ら": "ra",
    "り": "ri",
    "る": "ru",
    "れ": "re",
    "ろ": "ro",
    "わ": "wa",
    "ゐ": "i",
    "ゑ": "e",
    "を": "wo",
    "ん": "n",
    "が": "ga",
    "ぎ": "gi",
    "ぐ": "gu",
    "げ": "ge",
    "ご": "go",
    "ざ": "za",
    "じ": "ji",
    "ず": "zu",
    "ぜ": "ze",
    "ぞ": "zo",
    "だ": "da",
    "ぢ": "ji",
    "づ": "zu",
    "で": "de",
    "ど": "do",
    "ば": "ba",
    "び": "bi",
    "ぶ": "bu",
    "べ": "be",
    "ぼ": "bo",
    "ぱ": "pa",
    "ぴ": "pi",
    "ぷ": "pu",
    "ぺ": "pe",
    "ぽ": "po",
    "ゔ": "vu",
    "ぁ": "a",
    "ぃ": "i",
    "ぅ": "u",
    "ぇ": "e",
    "ぉ": "o",
    "ゃ": "ya",
    "ゅ": "yu",
    "ょ": "yo",
    "ゎ": "wa",
    "っ": "tsu",
    "ゕ": "ka",
    "ゖ": "ke",
    # yoon
    "きゃ": "kya",
    "きゅ": "kyu",
    "きょ": "kyo",
    "しゃ": "sha",
    "しゅ": "shu",
    "しょ": "sho",
    "ちゃ": "cha",
    "ちゅ": "chu",
    "ちょ": "cho",
    "にゃ": "nya",
    "にゅ": "nyu",
    "にょ": "nyo",
    "ひゃ": "hya",
    "ひゅ": "hyu",
    "ひょ": "hyo",
    "みゃ": "mya",
    "みゅ": "myu",
    "みょ": "myo",
    "りゃ": "rya",
    "りゅ": "ryu",
    "りょ": "ryo",
    "ぎゃ": "gya",
    "ぎゅ": "gyu",
    "ぎょ": "gyo",
    "じゃ": "ja",
    "じゅ": "ju",
    "じょ": "jo",
    "ぢゃ": "ja",
    "ぢゅ": "ju",
    "ぢょ": "jo",
    "びゃ": "bya",
    "びゅ": "byu",
    "びょ": "byo",
    "ぴゃ": "pya",
    "ぴゅ": "pyu",
    "ぴょ": "pyo",
    # extended digraphs seen in loanwords
    "しぇ": "she",
    "じぇ": "je",
    "ちぇ": "che",
    "いぇ": "ye",
    "うぃ": "wi",
    "うぇ": "we",
    "うぉ": "wo",
    "くぁ": "kwa",
    "ぐぁ": "gwa",
    "つぁ": "tsa",
    "つぃ": "tsi",
    "つぇ": "tse",
    "つぉ": "tso",
    "てぃ": "ti",
    "でぃ": "di",
    "とぅ": "tu",
    "どぅ": "du",
    "てゅ": "tyu",
    "でゅ": "dyu",
    "ふぁ": "fa",
    "ふぃ": "fi",
    "ふぇ": "fe",
    "ふぉ": "fo",
    "ふゅ": "fyu",
    "ゔぁ": "va",
    "ゔぃ": "vi",
    "ゔぇ": "ve",
    "ゔぉ": "vo",
    "ゔゅ": "vyu",
    # punctuation
    "、": ",",
    "。": ".",
    "「": '"',
    "」": '"',
    "『": '"',
    "』": '"',
    "！": "!",
    "？": "?",
    "〜": "~",
    "～": "~",
}


def _katakana_key(key: str) -> str:
    return "".join(chr(ord(ch) + 0x60) if "ぁ" <= ch <= "ゖ" else ch for ch in key)


_KATAKANA_ROMAJI = {
    _katakana_key(key): value
    for key, value in _HIRAGANA_ROMAJI.items()
    if any("ぁ" <= ch <= "ゖ" for ch in key)
}
_KATAKANA_ROMAJI.update(
    {
        "ヷ": "va",
        "ヸ": "vi",
        "ヹ": "ve",
        "ヺ": "vo",
        "ヵ": "ka",
        "ヶ": "ke",
    }
)

KANA_TO_ROMAJI = MappingProxyType({**_HIRAGANA_ROMAJI, **_KATAKANA_ROMAJI})


@dataclass(frozen=True)
class GojuonCell:
    hira: str
    kata: str
    romaji: str


def _row(*cells: tuple[str, str, str] | None) -> tuple[GojuonCell | None, ...]:
    return tuple(GojuonCell(*cell) if cell else None for cell in cells)


# Reference chart in a/i/u/e/o column order; gaps are None.
GOJUON_ROWS: tuple[tuple[GojuonCell | None, ...], ...] = (
    _row(("あ", "ア", "a"), ("い", "イ", "i"), ("う", "ウ", "u"), ("え", "エ", "e"), ("お", "オ", "o")),
    _row(("か", "カ", "ka"), ("き", "キ", "ki"), ("く", "ク", "ku"), ("け", "ケ", "ke"), ("こ", "コ", "ko")),
    _row(("さ", "サ", "sa"), ("し", "シ", "shi"), ("す", "ス", "su"), ("せ", "セ", "se"), ("そ", "ソ", "so")),
    _row(("た", "タ", "ta"), ("ち", "チ", "chi"), ("つ", "ツ", "tsu"), ("て", "テ", "te"), ("と", "ト", "to")),
    _row(("な", "ナ", "na"), ("に", "ニ", "ni"), ("ぬ", "ヌ", "nu"), ("ね", "ネ", "ne"), ("の", "ノ", "no")),
    _row(("は", "ハ", "ha"), ("ひ", "ヒ", "hi"), ("ふ", "フ", "fu"), ("へ", "ヘ", "he"), ("ほ", "ホ", "ho")),
    _row(("ま", "マ", "ma"), ("み", "ミ", "mi"), ("む", "ム", "mu"), ("め", "メ", "me"), ("も", "モ", "mo")),
    _row(("や", "ヤ", "ya"), None, ("ゆ", "ユ", "yu"), None, ("よ", "ヨ", "yo")),
    _row(("ら", "ラ", "ra"), ("り", "リ", "ri"), ("る", "ル", "ru"), ("れ", "レ", "re"), ("ろ", "ロ", "ro")),
    _row(("わ", "ワ", "wa"), None, None, None, ("を", "ヲ", "wo")),
    _row(("ん", "ン", "n"), None, None, None, None),
)
