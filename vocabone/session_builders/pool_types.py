"""
Typed pool models shared across session builders.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum

from vocabone.schemas import LearningItem, SessionSettings


class CardPriority(IntEnum):
    """Review urgency, lowest value first."""
    OVERDUE = 0
    DUE_TODAY = 1
    NEW = 2
    FUTURE = 3


@dataclass(frozen=True)
class StudySession:
    """
    Items selected for one study pass, in presentation order.
    """
    module_id: str
    items: list[LearningItem]
    new_count: int
    review_count: int
    created_at: datetime
    settings: SessionSettings

    def __len__(self) -> int:
        return len(self.items)

    @property
    def item_ids(self) -> list[str]:
        return [item.item_id for item in self.items]


@dataclass
class PhaseBreakdown:
    """
    Items grouped by learning phase.
    """
    new: list[LearningItem] = field(default_factory=list)
    learning: list[LearningItem] = field(default_factory=list)
    mastered: list[LearningItem] = field(default_factory=list)
