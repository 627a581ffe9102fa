"""Language-specific answer rules."""

from vocabone.validation.languages.base import LanguageProcessor
from vocabone.validation.languages.english import EnglishProcessor
from vocabone.validation.languages.registry import (
    DEFAULT_LANGUAGE_CODE,
    DefaultProcessor,
    LanguageRegistry,
    default_registry,
)
from vocabone.validation.languages.spanish import SpanishProcessor

__all__ = [
    "LanguageProcessor",
    "SpanishProcessor",
    "EnglishProcessor",
    "DefaultProcessor",
    "LanguageRegistry",
    "default_registry",
    "DEFAULT_LANGUAGE_CODE",
]
