"""
Tests for language processors and the registry.
"""

from typing import Optional

import pytest

from vocabone.validation import (
    AnswerValidator,
    EnglishProcessor,
    LanguageProcessor,
    LanguageRegistry,
    MatchTier,
    SpanishProcessor,
    ValidationOptions,
    default_registry,
)
from vocabone.validation.languages import DefaultProcessor


@pytest.fixture
def validator():
    return AnswerValidator()


def spanish(**kwargs):
    return ValidationOptions(language_code="es", **kwargs)


def english(**kwargs):
    return ValidationOptions(language_code="en", **kwargs)


class TestSpanishRules:

    def test_article_included_but_not_required(self, validator):
        verdict = validator.validate("el perro", "perro", spanish())

        assert verdict.is_correct
        assert verdict.tier == MatchTier.ALTERNATE
        assert verdict.confidence == 1.0
        assert verdict.feedback == "Correct! (Article included but not required)"

    def test_missing_article(self, validator):
        verdict = validator.validate("perro", "el perro", spanish())

        assert verdict.is_correct
        assert verdict.tier == MatchTier.FUZZY
        assert verdict.confidence == 0.95
        assert verdict.suggestion == "More complete: el perro"

    def test_expanded_contraction(self, validator):
        verdict = validator.validate("de el parque", "del parque", spanish())

        assert verdict.tier == MatchTier.ALTERNATE
        assert verdict.feedback == "Correct! (Expanded form accepted)"

    def test_contracted_form(self, validator):
        verdict = validator.validate("al cine", "a el cine", spanish())

        assert verdict.tier == MatchTier.ALTERNATE
        assert verdict.feedback == "Correct! (Contraction accepted)"

    def test_contraction_does_not_match_inside_words(self):
        processor = SpanishProcessor()

        assert processor.check_special_rules("delgado", "de elgado", "delgado", "de elgado") is None

    def test_diminutive_used(self, validator):
        verdict = validator.validate("perrito", "perro", spanish())

        assert verdict.is_correct
        assert verdict.tier == MatchTier.FUZZY
        assert verdict.confidence == 0.95
        assert verdict.feedback == "Almost correct! Diminutive form used."

    def test_diminutive_missing(self, validator):
        verdict = validator.validate("casa", "casita", spanish())

        assert verdict.tier == MatchTier.FUZZY
        assert verdict.feedback == "Almost correct! Missing diminutive form."

    def test_inverted_punctuation(self, validator):
        verdict = validator.validate("hola", "¡Hola!", spanish())

        assert verdict.tier == MatchTier.EXACT

    def test_rules_need_a_language_code(self, validator):
        verdict = validator.validate("el perro", "perro")

        assert verdict.tier == MatchTier.INCORRECT

    def test_alternate_forms(self):
        processor = SpanishProcessor()

        forms = processor.get_alternate_forms("gato")
        assert {"el gato", "la gato", "gata", "gatos"} <= set(forms)

        assert "gato" in processor.get_alternate_forms("el gato")
        assert "peces" in processor.get_alternate_forms("pez")
        assert "niño" in processor.get_alternate_forms("niña")


class TestEnglishRules:

    def test_british_spelling(self, validator):
        verdict = validator.validate("colour", "color", english())

        assert verdict.tier == MatchTier.ALTERNATE
        assert verdict.feedback == "Correct! (British spelling accepted)"

    def test_american_spelling(self, validator):
        verdict = validator.validate("center", "centre", english())

        assert verdict.tier == MatchTier.ALTERNATE
        assert verdict.feedback == "Correct! (American spelling accepted)"

    @pytest.mark.parametrize("user_input, expected", [
        ("can not", "can't"),
        ("do not", "don't"),
        ("i am", "I'm"),
    ])
    def test_contractions_expanded(self, validator, user_input, expected):
        verdict = validator.validate(user_input, expected, english())

        assert verdict.is_correct
        assert verdict.tier == MatchTier.ALTERNATE

    def test_contraction_typed(self, validator):
        verdict = validator.validate("don't go", "do not go", english())

        assert verdict.tier == MatchTier.ALTERNATE
        assert verdict.feedback == "Correct! (Contraction accepted)"

    def test_typographic_apostrophe_contraction(self, validator):
        verdict = validator.validate("we\u2019re here", "we are here", english())

        assert verdict.tier == MatchTier.ALTERNATE
        assert verdict.feedback == "Correct! (Contraction accepted)"

    @pytest.mark.parametrize("user_input, expected", [
        ("we are", "were"),
        ("well", "we will"),
        ("he will", "hell"),
        ("she will", "shell"),
        ("i will", "ill"),
        ("wont", "will not"),
    ])
    def test_contraction_letters_alone_are_not_a_contraction(self, validator, user_input, expected):
        verdict = validator.validate(user_input, expected, english())

        assert verdict.tier != MatchTier.ALTERNATE
        assert verdict.confidence < 1.0

    def test_article_included(self, validator):
        assert validator.validate("the dog", "dog", english()).tier == MatchTier.ALTERNATE

    def test_wrong_indefinite_article(self, validator):
        verdict = validator.validate("a apple", "an apple", english())

        assert verdict.is_correct
        assert verdict.tier == MatchTier.FUZZY
        assert verdict.confidence == 0.98

    def test_alternate_forms(self):
        processor = EnglishProcessor()

        assert "cities" in processor.get_alternate_forms("city")
        assert "churches" in processor.get_alternate_forms("church")
        assert "color" in processor.get_alternate_forms("colour")
        assert "cannot" in processor.get_alternate_forms("can't")
        assert "don't" in processor.get_alternate_forms("do not")


class TestRegistry:

    def test_default_registry_languages(self):
        registry = default_registry()

        assert registry.languages() == ["es", "en"]
        assert "es" in registry
        assert isinstance(registry.get("es"), SpanishProcessor)

    @pytest.mark.parametrize("code", ["fr", None, ""])
    def test_unknown_language_falls_back(self, code):
        processor = default_registry().get(code)

        assert isinstance(processor, DefaultProcessor)
        assert processor.get_alternate_forms("chat") == []
        assert processor.check_special_rules("chat", "le chat", "chat", "le chat") is None

    def test_unknown_language_validates_generically(self, validator):
        verdict = validator.validate("parro", "perro", ValidationOptions(language_code="fr"))

        assert verdict.tier == MatchTier.FUZZY

    def test_registries_are_independent(self):
        class DutchProcessor(LanguageProcessor):
            language_code = "nl"
            language_name = "Dutch"

            def check_special_rules(self, normalized_user, normalized_expected,
                                    original_user, original_expected,
                                    options: Optional[ValidationOptions] = None):
                return None

            def get_alternate_forms(self, word):
                return [f"de {word}", f"het {word}"]

        custom = default_registry()
        custom.register(DutchProcessor())

        assert "nl" in custom
        assert "nl" not in default_registry()
        assert AnswerValidator(custom).expand_alternates("huis", [], "nl") == ["de huis", "het huis"]

    def test_empty_registry_still_has_default(self):
        registry = LanguageRegistry()

        assert registry.languages() == []
        assert isinstance(registry.get("es"), DefaultProcessor)
