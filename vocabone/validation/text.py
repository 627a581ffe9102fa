"""
String helpers for answer comparison: normalization, edit distance and
prefix matching.
"""

from __future__ import annotations

import re
import unicodedata

PUNCTUATION_RE = re.compile(r"""[.,/#!$%^&*;:{}=\-_`~()'"¿?¡]""")
PUNCTUATION_EXCEPT_APOSTROPHE_RE = re.compile(r"""[.,/#!$%^&*;:{}=\-_`~()"¿?¡]""")
WHITESPACE_RE = re.compile(r"\s+")


def collapse_whitespace(text: str) -> str:
    return WHITESPACE_RE.sub(" ", text).strip()


def strip_diacritics(text: str) -> str:
    """Remove accents: NFD decomposition, then drop combining marks."""
    decomposed = unicodedata.normalize("NFD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def normalize_answer(
    text: str,
    case_sensitive: bool = False,
    accent_sensitive: bool = False,
    punctuation_sensitive: bool = False,
    keep_apostrophes: bool = False
) -> str:
    """
    Normalize an answer for comparison.

    Trims, optionally lowercases, strips diacritics and punctuation, then
    collapses runs of whitespace. With `keep_apostrophes`, typographic
    apostrophes become plain ones and survive punctuation stripping.
    """
    result = text.strip()

    if not case_sensitive:
        result = result.lower()

    if not accent_sensitive:
        result = strip_diacritics(result)

    if keep_apostrophes:
        result = result.replace("\u2019", "'")

    if not punctuation_sensitive:
        pattern = PUNCTUATION_EXCEPT_APOSTROPHE_RE if keep_apostrophes else PUNCTUATION_RE
        result = pattern.sub("", result)

    return collapse_whitespace(result)


def levenshtein_distance(a: str, b: str) -> int:
    """
    Edit distance (insertions, deletions, substitutions) between two strings.

    O(len(a) * len(b)) time, O(len(a)) memory.
    """
    if not a:
        return len(b)
    if not b:
        return len(a)

    previous = list(range(len(a) + 1))
    for i, char_b in enumerate(b, start=1):
        current = [i]
        for j, char_a in enumerate(a, start=1):
            cost = 0 if char_a == char_b else 1
            current.append(min(
                previous[j] + 1,         # deletion
                current[j - 1] + 1,      # insertion
                previous[j - 1] + cost,  # substitution
            ))
        previous = current
    return previous[-1]


def similarity_ratio(a: str, b: str, distance: int) -> float:
    """1 - distance / longest length, 0 for two empty strings."""
    max_length = max(len(a), len(b))
    if max_length == 0:
        return 0.0
    return 1 - distance / max_length


def common_prefix_length(a: str, b: str) -> int:
    length = 0
    for char_a, char_b in zip(a, b):
        if char_a != char_b:
            break
        length += 1
    return length
