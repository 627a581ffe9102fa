"""Session builder modules for vocabulary study."""

from vocabone.session_builders.pool_types import CardPriority, PhaseBreakdown, StudySession
from vocabone.session_builders.vocab_builder import (
    build_session,
    card_priority,
    entries_by_phase,
    get_due_items,
    get_new_items,
    sort_by_priority,
)

__all__ = [
    "CardPriority",
    "PhaseBreakdown",
    "StudySession",
    "build_session",
    "card_priority",
    "entries_by_phase",
    "get_due_items",
    "get_new_items",
    "sort_by_priority",
]
