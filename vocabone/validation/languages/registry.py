"""
Language processor registry.

Maps ISO 639-1 codes to processors, falling back to a no-op processor for
languages without specific rules. Registries are plain values: build one
with default_registry() and register extra languages on it.
"""

from __future__ import annotations

from typing import Optional

from loguru import logger

from vocabone.validation.languages.base import LanguageProcessor
from vocabone.validation.languages.english import EnglishProcessor
from vocabone.validation.languages.spanish import SpanishProcessor
from vocabone.validation.verdict import ValidationOptions, ValidationVerdict


DEFAULT_LANGUAGE_CODE = "default"


class DefaultProcessor(LanguageProcessor):
    """Fallback for languages without specific rules."""

    language_code = DEFAULT_LANGUAGE_CODE
    language_name = "Default"

    def check_special_rules(
        self,
        normalized_user: str,
        normalized_expected: str,
        original_user: str,
        original_expected: str,
        options: Optional[ValidationOptions] = None
    ) -> Optional[ValidationVerdict]:
        return None

    def get_alternate_forms(self, word: str) -> list[str]:
        return []


class LanguageRegistry:
    """Lookup table of language processors with a default fallback."""

    def __init__(self, processors: Optional[list[LanguageProcessor]] = None):
        self._processors: dict[str, LanguageProcessor] = {
            DEFAULT_LANGUAGE_CODE: DefaultProcessor()
        }
        for processor in processors or []:
            self.register(processor)

    def register(self, processor: LanguageProcessor) -> None:
        """Add or replace the processor for its language code."""
        self._processors[processor.language_code] = processor

    def get(self, language_code: Optional[str]) -> LanguageProcessor:
        """Processor for `language_code`, or the default processor."""
        if language_code in self._processors:
            return self._processors[language_code]

        if language_code:
            logger.warning("No language processor for '{}', using default rules", language_code)
        return self._processors[DEFAULT_LANGUAGE_CODE]

    def languages(self) -> list[str]:
        """Registered language codes (excluding the default)."""
        return [code for code in self._processors if code != DEFAULT_LANGUAGE_CODE]

    def __contains__(self, language_code: str) -> bool:
        return language_code in self._processors


def default_registry() -> LanguageRegistry:
    """Fresh registry with the built-in Spanish and English processors."""
    return LanguageRegistry([SpanishProcessor(), EnglishProcessor()])
