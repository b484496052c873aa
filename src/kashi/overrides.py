from __future__ import annotations

__all__ = [
    "LEXICAL_OVERRIDES",
    "apply_lexical_overrides",
    "find_override_conflicts",
]

# Surface forms the analyzer routinely misreads in lyrics, with the sung reading.
# Applied in order; each entry is a single left-to-right replace pass.
LEXICAL_OVERRIDES: tuple[tuple[str, str], ...] = (
    ("明日", "あした"),
    ("今日", "きょう"),
    ("一人", "ひとり"),
    ("二人", "ふたり"),
    ("貴方", "あなた"),
    ("何処", "どこ"),
    ("私達", "わたしたち"),
    ("僕等", "ぼくら"),
    ("故郷", "ふるさと"),
    ("日々", "ひび"),
    ("行こう", "いこう"),
    ("一番星", "いちばんぼし"),
)


def apply_lexical_overrides(text: str) -> str:
    if not text:
        return text
    for needle, replacement in LEXICAL_OVERRIDES:
        if needle in text:
            text = text.replace(needle, replacement)
    return text


def find_override_conflicts(
    overrides: tuple[tuple[str, str], ...] = LEXICAL_OVERRIDES,
) -> list[tuple[str, str]]:
    """
    Return (needle, other_needle) pairs where other_needle occurs inside the
    replacement of needle, i.e. a second pass could rewrite the first one's output.
    """
    conflicts: list[tuple[str, str]] = []
    for needle, replacement in overrides:
        for other_needle, _ in overrides:
            if other_needle in replacement:
                conflicts.append((needle, other_needle))
    return conflicts
