"""Answer validation: tiered matcher and language rule providers."""

from vocabone.validation.answer_validator import AnswerValidator, ValidationStatistics
from vocabone.validation.languages import (
    EnglishProcessor,
    LanguageProcessor,
    LanguageRegistry,
    SpanishProcessor,
    default_registry,
)
from vocabone.validation.text import levenshtein_distance, normalize_answer
from vocabone.validation.verdict import MatchTier, ValidationOptions, ValidationVerdict

__all__ = [
    "AnswerValidator",
    "ValidationStatistics",
    "ValidationOptions",
    "ValidationVerdict",
    "MatchTier",
    "LanguageProcessor",
    "LanguageRegistry",
    "SpanishProcessor",
    "EnglishProcessor",
    "default_registry",
    "levenshtein_distance",
    "normalize_answer",
]
