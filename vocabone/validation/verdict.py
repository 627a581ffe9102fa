"""
Verdict and option types shared by the answer validator and the
language processors.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class MatchTier(str, Enum):
    """Matching strategy that produced a verdict, strictest first."""
    EXACT = "exact"
    ALTERNATE = "alternate"
    FUZZY = "fuzzy"
    PARTIAL = "partial"
    INCORRECT = "incorrect"


@dataclass(frozen=True)
class ValidationVerdict:
    """
    Result of grading one typed answer.

    Attributes:
        is_correct: Whether the answer is accepted
        confidence: 0.0 to 1.0
        tier: Which tier matched
        feedback: Message for the learner
        suggestion: Optional hint towards the expected answer
        matched_answer: The alternate (or expected) answer that matched
        similarity: Percentage 0-100
        edit_distance: Levenshtein distance between normalized strings
    """
    is_correct: bool
    confidence: float
    tier: MatchTier
    feedback: str
    suggestion: Optional[str] = None
    matched_answer: Optional[str] = None
    similarity: Optional[int] = None
    edit_distance: Optional[int] = None


class ValidationOptions(BaseModel):
    """Options for customizing validation behavior."""
    model_config = ConfigDict(frozen=True)

    alternate_answers: list[str] = Field(default_factory=list)
    enable_fuzzy: bool = True
    exact_threshold: float = Field(0.9, ge=0.0, le=1.0)
    partial_threshold: float = Field(0.7, ge=0.0, le=1.0)
    case_sensitive: bool = False
    accent_sensitive: bool = False
    punctuation_sensitive: bool = False
    language_code: Optional[str] = None

    @model_validator(mode="after")
    def _check_threshold_order(self) -> "ValidationOptions":
        if self.partial_threshold > self.exact_threshold:
            raise ValueError("partial_threshold must not exceed exact_threshold")
        return self

    @property
    def is_default_sensitivity(self) -> bool:
        return not (self.case_sensitive or self.accent_sensitive or self.punctuation_sensitive)

    @property
    def is_default_thresholds(self) -> bool:
        return self.exact_threshold == 0.9 and self.partial_threshold == 0.7


DEFAULT_OPTIONS = ValidationOptions()
