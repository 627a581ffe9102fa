"""
Spanish processor: inverted punctuation, articles, contractions and
diminutives.
"""

from __future__ import annotations

import re
from typing import Optional

from vocabone.validation.languages.base import LanguageProcessor, near_miss
from vocabone.validation.text import collapse_whitespace
from vocabone.validation.verdict import ValidationOptions, ValidationVerdict


ARTICLES = frozenset({"el", "la", "los", "las", "un", "una", "unos", "unas"})

CONTRACTIONS: dict[str, list[str]] = {
    "del": ["de el"],
    "al": ["a el"],
}

# (suffix, gender vowel it replaces): perro -> perrito
DIMINUTIVE_SUFFIXES: list[tuple[str, str]] = [
    ("ito", "o"),
    ("ita", "a"),
    ("cito", "o"),
    ("cita", "a"),
    ("illo", "o"),
    ("illa", "a"),
]

INVERTED_PUNCTUATION_RE = re.compile(r"[¿¡]")


class SpanishProcessor(LanguageProcessor):
    """Spanish rules for articles, gender and diminutives."""

    language_code = "es"
    language_name = "Spanish"

    def normalize(self, text: str) -> str:
        return collapse_whitespace(INVERTED_PUNCTUATION_RE.sub("", text))

    def check_special_rules(
        self,
        normalized_user: str,
        normalized_expected: str,
        original_user: str,
        original_expected: str,
        options: Optional[ValidationOptions] = None
    ) -> Optional[ValidationVerdict]:
        return (
            self._check_articles(normalized_user, normalized_expected, original_expected, ARTICLES)
            or self._check_contractions(original_user, original_expected, CONTRACTIONS, options)
            or self._check_diminutives(normalized_user, normalized_expected, original_expected)
        )

    def get_alternate_forms(self, word: str) -> list[str]:
        alternates: list[str] = []
        lower = word.lower()

        without_article = self._remove_article(lower)
        if without_article != lower:
            alternates.append(without_article)

        if not self._has_article(lower):
            alternates.extend(f"{article} {lower}" for article in ("el", "la", "los", "las", "un", "una"))

        # Gender swap: gato <-> gata
        if lower.endswith("o"):
            alternates.append(lower[:-1] + "a")
        elif lower.endswith("a"):
            alternates.append(lower[:-1] + "o")

        # Plurals
        if not lower.endswith("s"):
            alternates.append(lower + "s")
            if lower.endswith("z"):
                alternates.append(lower[:-1] + "ces")  # pez -> peces

        return alternates

    def _check_diminutives(
        self,
        user: str,
        expected: str,
        original_expected: str
    ) -> Optional[ValidationVerdict]:
        for suffix, gender in DIMINUTIVE_SUFFIXES:
            # User used diminutive, expected didn't
            if user.endswith(suffix) and not expected.endswith(suffix):
                base_user = user[:-len(suffix)]
                if base_user and expected in (base_user + gender, base_user):
                    return near_miss(
                        "Almost correct! Diminutive form used.",
                        f"Expected: {original_expected}",
                        edit_distance=len(suffix),
                    )

            # Expected used diminutive, user didn't
            if expected.endswith(suffix) and not user.endswith(suffix):
                base_expected = expected[:-len(suffix)]
                if base_expected and user in (base_expected + gender, base_expected):
                    return near_miss(
                        "Almost correct! Missing diminutive form.",
                        f"Try: {original_expected}",
                        edit_distance=len(suffix),
                    )

        return None

    @staticmethod
    def _has_article(text: str) -> bool:
        return text.split(" ")[0] in ARTICLES

    @staticmethod
    def _remove_article(text: str) -> str:
        words = text.split(" ")
        if len(words) > 1 and words[0] in ARTICLES:
            return " ".join(words[1:])
        return text
