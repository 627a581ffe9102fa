"""
Abstract Language Processor

Defines the interface for language-specific answer rules, plus the
article and contraction checks several languages share.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import Optional

from vocabone.validation.text import collapse_whitespace, normalize_answer
from vocabone.validation.verdict import MatchTier, ValidationOptions, ValidationVerdict


def accepted(feedback: str, matched_answer: str) -> ValidationVerdict:
    """Full-credit verdict for an equivalent form."""
    return ValidationVerdict(
        is_correct=True,
        confidence=1.0,
        tier=MatchTier.ALTERNATE,
        feedback=feedback,
        matched_answer=matched_answer,
        similarity=100,
        edit_distance=0,
    )


def near_miss(
    feedback: str,
    suggestion: str,
    confidence: float = 0.95,
    edit_distance: int = 1
) -> ValidationVerdict:
    """Accepted with reduced confidence (missing article, diminutive...)."""
    return ValidationVerdict(
        is_correct=True,
        confidence=confidence,
        tier=MatchTier.FUZZY,
        feedback=feedback,
        suggestion=suggestion,
        similarity=round(confidence * 100),
        edit_distance=edit_distance,
    )


def _replace_word(text: str, old: str, new: str) -> str:
    """Replace the first whole-word occurrence of `old`."""
    return re.sub(rf"(?<!\w){re.escape(old)}(?!\w)", new, text, count=1)


class LanguageProcessor(ABC):
    """
    Abstract base class for language-specific validation rules.

    Subclasses should implement:
    - language_code / language_name
    - check_special_rules()
    - get_alternate_forms()
    """

    language_code: str = ""
    language_name: str = ""

    def normalize(self, text: str) -> str:
        """
        Language-specific normalization.

        Runs BEFORE the validator's generic normalization.
        """
        return collapse_whitespace(text)

    @abstractmethod
    def check_special_rules(
        self,
        normalized_user: str,
        normalized_expected: str,
        original_user: str,
        original_expected: str,
        options: Optional[ValidationOptions] = None
    ) -> Optional[ValidationVerdict]:
        """Return a verdict if a language rule matches, None otherwise."""
        pass

    @abstractmethod
    def get_alternate_forms(self, word: str) -> list[str]:
        """Other forms of `word` worth accepting (articles, plurals, spellings)."""
        pass

    # ---- Shared rules ----

    def _check_articles(
        self,
        user: str,
        expected: str,
        original_expected: str,
        articles: frozenset[str]
    ) -> Optional[ValidationVerdict]:
        """Article present in one answer and absent in the other."""
        user_words = user.split(" ")
        expected_words = expected.split(" ")

        # User included article, expected didn't
        if len(user_words) > len(expected_words) and user_words[0] in articles:
            if " ".join(user_words[1:]) == expected:
                return accepted("Correct! (Article included but not required)", original_expected)

        # Expected has article, user didn't
        if len(expected_words) > len(user_words) and expected_words[0] in articles:
            if user == " ".join(expected_words[1:]):
                return near_miss(
                    "Almost correct! Consider including the article.",
                    f"More complete: {original_expected}",
                )

        return None

    def _contraction_text(self, text: str, options: ValidationOptions) -> str:
        return normalize_answer(
            self.normalize(text),
            case_sensitive=options.case_sensitive,
            accent_sensitive=options.accent_sensitive,
            punctuation_sensitive=options.punctuation_sensitive,
            keep_apostrophes=True,
        )

    def _check_contractions(
        self,
        original_user: str,
        original_expected: str,
        contractions: dict[str, list[str]],
        options: Optional[ValidationOptions] = None
    ) -> Optional[ValidationVerdict]:
        """
        Contracted form on one side, expanded form on the other.

        Works on the raw answers with apostrophes kept, so a contraction
        never matches the word its letters spell ("we're" vs "were").
        """
        options = options or ValidationOptions()
        user = self._contraction_text(original_user, options)
        expected = self._contraction_text(original_expected, options)

        for contraction, expansions in contractions.items():
            contraction = self._contraction_text(contraction, options)
            for expansion in expansions:
                if _replace_word(user, contraction, expansion) == expected != user:
                    return accepted("Correct! (Contraction accepted)", original_expected)

                if _replace_word(expected, contraction, expansion) == user != expected:
                    return accepted("Correct! (Expanded form accepted)", original_expected)

        return None
