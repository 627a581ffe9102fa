"""
English processor: contractions, British/American spelling and articles.
"""

from __future__ import annotations

from typing import Optional

from vocabone.validation.languages.base import LanguageProcessor, accepted, near_miss
from vocabone.validation.verdict import ValidationOptions, ValidationVerdict


ARTICLES = frozenset({"a", "an", "the"})

CONTRACTIONS: dict[str, list[str]] = {
    "can't": ["cannot", "can not"],
    "won't": ["will not"],
    "don't": ["do not"],
    "doesn't": ["does not"],
    "didn't": ["did not"],
    "isn't": ["is not"],
    "aren't": ["are not"],
    "wasn't": ["was not"],
    "weren't": ["were not"],
    "haven't": ["have not"],
    "hasn't": ["has not"],
    "hadn't": ["had not"],
    "wouldn't": ["would not"],
    "shouldn't": ["should not"],
    "couldn't": ["could not"],
    "it's": ["it is", "it has"],
    "i'm": ["i am"],
    "you're": ["you are"],
    "we're": ["we are"],
    "they're": ["they are"],
    "i've": ["i have"],
    "you've": ["you have"],
    "we've": ["we have"],
    "they've": ["they have"],
    "i'll": ["i will"],
    "you'll": ["you will"],
    "he'll": ["he will"],
    "she'll": ["she will"],
    "we'll": ["we will"],
    "they'll": ["they will"],
}

# Subset offered when pre-expanding accepted answers
COMMON_CONTRACTIONS: dict[str, list[str]] = {
    "can't": ["cannot"],
    "won't": ["will not"],
    "don't": ["do not"],
    "it's": ["it is"],
    "i'm": ["i am"],
}

# (british, american)
SPELLING_VARIANTS: list[tuple[str, str]] = [
    ("our", "or"),    # colour / color
    ("re", "er"),     # centre / center
    ("ise", "ize"),   # realise / realize
    ("yse", "yze"),   # analyse / analyze
    ("ogue", "og"),   # dialogue / dialog
    ("ll", "l"),      # travelling / traveling
]


class EnglishProcessor(LanguageProcessor):
    """English rules for contractions, spelling standards and a/an."""

    language_code = "en"
    language_name = "English"

    def check_special_rules(
        self,
        normalized_user: str,
        normalized_expected: str,
        original_user: str,
        original_expected: str,
        options: Optional[ValidationOptions] = None
    ) -> Optional[ValidationVerdict]:
        return (
            self._check_contractions(original_user, original_expected, CONTRACTIONS, options)
            or self._check_spelling_variants(normalized_user, normalized_expected, original_expected)
            or self._check_articles(normalized_user, normalized_expected, original_expected, ARTICLES)
            or self._check_article_choice(normalized_user, normalized_expected, original_expected)
        )

    def get_alternate_forms(self, word: str) -> list[str]:
        alternates: list[str] = []
        lower = word.lower()

        alternates.extend(self._contraction_expansions(lower))
        alternates.extend(self._spelling_variants(lower))

        # Plurals
        if not lower.endswith("s"):
            if lower.endswith("y"):
                alternates.append(lower[:-1] + "ies")  # city -> cities
            elif lower.endswith(("ch", "sh", "x")):
                alternates.append(lower + "es")  # church -> churches
            else:
                alternates.append(lower + "s")

        return alternates

    def _check_spelling_variants(
        self,
        user: str,
        expected: str,
        original_expected: str
    ) -> Optional[ValidationVerdict]:
        for british, american in SPELLING_VARIANTS:
            if british in user and american in expected:
                if user.replace(british, american) == expected:
                    return accepted("Correct! (British spelling accepted)", original_expected)

            if british in expected and american in user:
                if expected.replace(british, american) == user:
                    return accepted("Correct! (American spelling accepted)", original_expected)

        return None

    def _check_article_choice(
        self,
        user: str,
        expected: str,
        original_expected: str
    ) -> Optional[ValidationVerdict]:
        """Wrong indefinite article: 'a apple' for 'an apple'."""
        user_words = user.split(" ")
        expected_words = expected.split(" ")
        if user_words[1:] != expected_words[1:]:
            return None

        if user_words[0] == "a" and expected_words[0] == "an":
            return near_miss(
                'Almost perfect! Use "an" before vowel sounds.',
                f"Try: {original_expected}",
                confidence=0.98,
            )

        if user_words[0] == "an" and expected_words[0] == "a":
            return near_miss(
                'Almost perfect! Use "a" before consonant sounds.',
                f"Try: {original_expected}",
                confidence=0.98,
            )

        return None

    @staticmethod
    def _contraction_expansions(word: str) -> list[str]:
        expansions: list[str] = []
        for contraction, expanded in COMMON_CONTRACTIONS.items():
            if word == contraction:
                expansions.extend(expanded)
            elif word in expanded:
                expansions.append(contraction)
        return expansions

    @staticmethod
    def _spelling_variants(word: str) -> list[str]:
        variants: list[str] = []

        # British to American
        if "our" in word:
            variants.append(word.replace("our", "or"))  # colour -> color
        if word.endswith("re"):
            variants.append(word[:-2] + "er")  # centre -> center
        if word.endswith("ise"):
            variants.append(word[:-3] + "ize")  # realise -> realize

        # American to British
        if "or" in word and "our" not in word:
            variants.append(word.replace("or", "our"))  # color -> colour
        if word.endswith("er"):
            variants.append(word[:-2] + "re")  # center -> centre
        if word.endswith("ize"):
            variants.append(word[:-3] + "ise")  # realize -> realise

        return variants
