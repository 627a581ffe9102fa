"""
Pydantic models for learning items and study-session settings.

Items are immutable once loaded; settings are supplied by the caller
(usually from the learner's preferences).
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LearningItem(BaseModel):
    """A single vocabulary entry the learner is asked to recall."""
    model_config = ConfigDict(frozen=True)

    item_id: str = Field(..., min_length=1, description="Stable identifier within the module")
    term: str = Field("", description="Prompt shown to the learner")
    answer: str = Field(..., description="Expected answer")
    alternate_answers: list[str] = Field(default_factory=list, description="Other accepted answers")
    hint: Optional[str] = None
    language_code: Optional[str] = Field(None, description="ISO 639-1 code of the answer language")

    @field_validator("item_id")
    @classmethod
    def _strip_item_id(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("item_id must not be blank")
        return value


class SessionSettings(BaseModel):
    """Configuration for building one study session."""
    model_config = ConfigDict(frozen=True)

    max_new: int = Field(..., ge=0, description="Maximum new items to introduce")
    max_review: int = Field(..., ge=0, description="Maximum due items to review")
    randomize: bool = Field(..., description="Shuffle the selected items")
    prioritize_overdue: bool = Field(False, description="Most urgent reviews first")
    mix_cards: bool = Field(False, description="Interleave new and review items")


DEFAULT_SESSION_SETTINGS = SessionSettings(
    max_new=10,
    max_review=20,
    randomize=True,
    prioritize_overdue=True,
    mix_cards=True,
)
