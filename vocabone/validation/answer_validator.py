"""
Answer Validator - tiered grading of typed answers.

Converts free-text input into a verdict with a confidence score. Tiers are
tried strictly in order and the first match wins:

1. Empty input      -> incorrect, "No answer provided"
2. Exact            -> normalized strings equal
3. Alternate        -> matches a configured alternate answer
4. Language rules   -> articles, contractions, diminutives, spelling
5. Fuzzy / partial  -> Levenshtein similarity
6. Incorrect        -> heuristic suggestion

The validator holds no state besides its language registry, so one
instance can be shared freely.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable, Optional

from vocabone.validation.languages import LanguageProcessor, LanguageRegistry, default_registry
from vocabone.validation.text import (
    common_prefix_length,
    levenshtein_distance,
    normalize_answer,
    similarity_ratio,
)
from vocabone.validation.verdict import (
    DEFAULT_OPTIONS,
    MatchTier,
    ValidationOptions,
    ValidationVerdict,
)


# ---- Fuzzy tier configuration ----

SHORT_WORD_MAX_LENGTH = 8        # Edit-distance shortcuts apply up to this length
SINGLE_TYPO_MIN_SIMILARITY = 0.75
TYPO_CONFIDENCE = 0.95
TRANSPOSITION_MAX_LENGTH = 5     # Distance 2 still counts as a typo
PARTIAL_SHORT_MAX_LENGTH = 6     # Distance 2 earns partial credit
COMMON_PREFIX_MIN_LENGTH = 3


@dataclass(frozen=True)
class ValidationStatistics:
    """Aggregate figures over a batch of verdicts."""
    total: int
    correct: int
    incorrect: int
    accuracy: float  # 0.0 to 1.0
    average_confidence: float
    tier_breakdown: dict[str, int] = field(default_factory=dict)


class AnswerValidator:
    """Grades typed answers against an expected answer."""

    def __init__(self, registry: Optional[LanguageRegistry] = None):
        self.registry = registry or default_registry()

    def validate(
        self,
        user_input: str,
        expected: str,
        options: Optional[ValidationOptions] = None
    ) -> ValidationVerdict:
        """
        Validate a learner's answer against the expected answer.

        Args:
            user_input: The answer typed by the learner
            expected: The expected correct answer
            options: Validation options (defaults apply when omitted)

        Returns:
            ValidationVerdict; never raises for bad input
        """
        opts = options or DEFAULT_OPTIONS

        if not user_input or not user_input.strip():
            return ValidationVerdict(
                is_correct=False,
                confidence=0.0,
                tier=MatchTier.INCORRECT,
                feedback="No answer provided",
                suggestion=f"Try typing: {expected}",
            )

        processor: Optional[LanguageProcessor] = None
        user_text, expected_text = user_input, expected
        if opts.language_code:
            processor = self.registry.get(opts.language_code)
            user_text = processor.normalize(user_input)
            expected_text = processor.normalize(expected)

        normalized_user = self._normalize(user_text, opts)
        normalized_expected = self._normalize(expected_text, opts)

        # Tier 1: Exact match
        if normalized_user == normalized_expected:
            return ValidationVerdict(
                is_correct=True,
                confidence=1.0,
                tier=MatchTier.EXACT,
                feedback="Perfect match!",
                similarity=100,
                edit_distance=0,
            )

        # Tier 2: Alternate answers
        for alternate in opts.alternate_answers:
            alternate_text = processor.normalize(alternate) if processor is not None else alternate
            if normalized_user == self._normalize(alternate_text, opts):
                return ValidationVerdict(
                    is_correct=True,
                    confidence=1.0,
                    tier=MatchTier.ALTERNATE,
                    feedback="Correct! (Alternative form accepted)",
                    matched_answer=alternate,
                    similarity=100,
                    edit_distance=0,
                )

        # Tier 3: Language-specific rules
        if processor is not None:
            special = processor.check_special_rules(
                normalized_user,
                normalized_expected,
                user_input,
                expected,
                opts
            )
            if special is not None:
                return special

        distance = levenshtein_distance(normalized_user, normalized_expected)
        similarity = similarity_ratio(normalized_user, normalized_expected, distance)

        # Tier 4: Fuzzy matching
        if opts.enable_fuzzy:
            fuzzy = self._fuzzy_match(
                normalized_user,
                normalized_expected,
                expected,
                distance,
                similarity,
                opts
            )
            if fuzzy is not None:
                return fuzzy

        # Tier 5: No match
        return self._incorrect(normalized_user, normalized_expected, expected, distance, similarity)

    def validate_batch(
        self,
        pairs: Iterable[tuple[str, str]],
        options: Optional[ValidationOptions] = None
    ) -> list[ValidationVerdict]:
        """Validate (user_input, expected) pairs with shared options."""
        return [self.validate(user_input, expected, options) for user_input, expected in pairs]

    @staticmethod
    def get_statistics(verdicts: list[ValidationVerdict]) -> ValidationStatistics:
        total = len(verdicts)
        correct = sum(1 for verdict in verdicts if verdict.is_correct)
        tiers = Counter(verdict.tier.value for verdict in verdicts)

        return ValidationStatistics(
            total=total,
            correct=correct,
            incorrect=total - correct,
            accuracy=correct / total if total else 0.0,
            average_confidence=sum(v.confidence for v in verdicts) / total if total else 0.0,
            tier_breakdown=dict(tiers),
        )

    def expand_alternates(
        self,
        expected: str,
        alternates: Optional[list[str]] = None,
        language_code: Optional[str] = None
    ) -> list[str]:
        """
        Pre-expand accepted answers with the language's alternate forms.

        Keeps the caller's alternates first and drops duplicates.
        """
        expanded = list(alternates or [])
        processor = self.registry.get(language_code)
        for answer in [expected, *expanded]:
            for form in processor.get_alternate_forms(answer):
                if form != expected and form not in expanded:
                    expanded.append(form)
        return expanded

    # ---- Tiers ----

    @staticmethod
    def _normalize(text: str, opts: ValidationOptions) -> str:
        return normalize_answer(
            text,
            case_sensitive=opts.case_sensitive,
            accent_sensitive=opts.accent_sensitive,
            punctuation_sensitive=opts.punctuation_sensitive,
        )

    @staticmethod
    def _fuzzy_match(
        normalized_user: str,
        normalized_expected: str,
        original_expected: str,
        distance: int,
        similarity: float,
        opts: ValidationOptions
    ) -> Optional[ValidationVerdict]:
        """
        Hybrid fuzzy matching.

        Short words use edit-distance shortcuts (only with default options);
        everything else uses the similarity thresholds.
        """
        max_length = max(len(normalized_user), len(normalized_expected))
        similarity_percent = round(similarity * 100)

        def fuzzy(confidence: float) -> ValidationVerdict:
            return ValidationVerdict(
                is_correct=True,
                confidence=confidence,
                tier=MatchTier.FUZZY,
                feedback="Very close! Minor typo detected.",
                suggestion=f"Correct answer: {original_expected}",
                similarity=similarity_percent,
                edit_distance=distance,
            )

        def partial() -> ValidationVerdict:
            return ValidationVerdict(
                is_correct=True,
                confidence=similarity,
                tier=MatchTier.PARTIAL,
                feedback="Partially correct. Close to the right answer.",
                suggestion=f"Try: {original_expected}",
                similarity=similarity_percent,
                edit_distance=distance,
            )

        if (
            max_length <= SHORT_WORD_MAX_LENGTH
            and opts.is_default_sensitivity
            and opts.is_default_thresholds
        ):
            # Single typo, insertion or deletion
            if distance == 1 and similarity >= SINGLE_TYPO_MIN_SIMILARITY:
                return fuzzy(TYPO_CONFIDENCE)

            if distance == 2:
                if max_length <= TRANSPOSITION_MAX_LENGTH:
                    return fuzzy(TYPO_CONFIDENCE)
                if max_length <= PARTIAL_SHORT_MAX_LENGTH:
                    return partial()

        if similarity >= opts.exact_threshold:
            return fuzzy(similarity)

        if similarity >= opts.partial_threshold:
            return partial()

        return None

    @staticmethod
    def _incorrect(
        normalized_user: str,
        normalized_expected: str,
        expected: str,
        distance: int,
        similarity: float
    ) -> ValidationVerdict:
        """Incorrect verdict with a suggestion matched to the kind of error."""
        user_length = len(normalized_user)
        expected_length = len(normalized_expected)

        if 2 <= user_length < expected_length * 0.5:
            suggestion = f"The answer is longer. Try: {expected}"
        elif user_length > expected_length * 1.5:
            suggestion = f"The answer is shorter. Try: {expected}"
        elif similarity > 0.5:
            suggestion = f"You're on the right track! The correct answer is: {expected}"
        elif common_prefix_length(normalized_user, normalized_expected) >= COMMON_PREFIX_MIN_LENGTH:
            suggestion = f"Good start! The complete answer is: {expected}"
        else:
            suggestion = f"The correct answer is: {expected}"

        return ValidationVerdict(
            is_correct=False,
            confidence=0.0,
            tier=MatchTier.INCORRECT,
            feedback="Incorrect answer",
            suggestion=suggestion,
            similarity=round(similarity * 100),
            edit_distance=distance,
        )
