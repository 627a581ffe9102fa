"""
Scheduler - Vocabulary Session Creation

Creates study sessions from two disjoint pools:
1. Review pool: studied items whose review day has arrived
2. New pool: items never studied (no retention state)

Session Logic:
- Order reviews by urgency (or shuffle them)
- Cap each pool by the session settings
- Interleave new/review items, or reviews first then new
"""

from __future__ import annotations
import random
from datetime import datetime
from typing import Mapping, Optional, Sequence

from loguru import logger

from vocabone.schemas import LearningItem, SessionSettings
from vocabone.session_builders.pool_types import CardPriority, PhaseBreakdown, StudySession
from vocabone.session_builders.pool_utils import interleave, shuffled
from vocabone.sm2.memory_state import RetentionState, days_until_due, is_due, utc_now


StateMap = Mapping[str, RetentionState]


def get_due_items(
    items: Sequence[LearningItem],
    states: StateMap,
    now: Optional[datetime] = None
) -> list[LearningItem]:
    """
    Studied items due today or earlier.

    Items without state are new, not due, so this never overlaps
    get_new_items().
    """
    return [
        item for item in items
        if item.item_id in states and is_due(states[item.item_id], now)
    ]


def get_new_items(
    items: Sequence[LearningItem],
    states: StateMap,
    limit: int = 0
) -> list[LearningItem]:
    """
    Items never studied, in arrival order.

    Args:
        limit: Maximum number of items to return (0 = all)
    """
    new_items = [item for item in items if item.item_id not in states]
    if limit > 0:
        return new_items[:limit]
    return new_items


def card_priority(
    state: Optional[RetentionState],
    now: Optional[datetime] = None
) -> CardPriority:
    """Priority bucket of an item given its state."""
    if state is None:
        return CardPriority.NEW

    days = days_until_due(state, now)
    if days < 0:
        return CardPriority.OVERDUE
    if days == 0:
        return CardPriority.DUE_TODAY
    return CardPriority.FUTURE


def sort_by_priority(
    items: Sequence[LearningItem],
    states: StateMap,
    now: Optional[datetime] = None
) -> list[LearningItem]:
    """
    Sort items by review priority (does not modify the input).

    Priority order:
    1. Overdue (most overdue first)
    2. Due today (longest interval first - older, harder items)
    3. New (arrival order)
    4. Future
    """
    if now is None:
        now = utc_now()

    def sort_key(item: LearningItem) -> tuple[int, int]:
        state = states.get(item.item_id)
        priority = card_priority(state, now)
        if priority == CardPriority.OVERDUE:
            return priority, days_until_due(state, now)
        if priority == CardPriority.DUE_TODAY:
            return priority, -state.interval
        return priority, 0

    return sorted(items, key=sort_key)


def build_session(
    module_id: str,
    items: Sequence[LearningItem],
    states: StateMap,
    settings: SessionSettings,
    now: Optional[datetime] = None,
    rng: Optional[random.Random] = None
) -> StudySession:
    """
    Create a study session from the due and new pools.

    Args:
        module_id: Module the items belong to
        items: All items of the module, in arrival order
        states: Mapping of item_id -> RetentionState (missing = new)
        settings: Caps and ordering flags
        now: Reference time for due checks (defaults to now, UTC)
        rng: Random source for shuffles (for reproducible sessions)

    Returns:
        StudySession with at most max_new + max_review items
    """
    if now is None:
        now = utc_now()

    due_items = get_due_items(items, states, now)
    new_items = get_new_items(items, states)

    if settings.prioritize_overdue:
        due_items = sort_by_priority(due_items, states, now)
    elif settings.randomize:
        due_items = shuffled(due_items, rng)

    selected_review = due_items[:settings.max_review]
    selected_new = new_items[:settings.max_new]

    if settings.randomize:
        selected_new = shuffled(selected_new, rng)

    if settings.mix_cards:
        session_items = interleave(selected_new, selected_review)
        if settings.randomize:
            session_items = shuffled(session_items, rng)
    else:
        session_items = selected_review + selected_new

    logger.debug(
        "Session for {}: {} review (of {} due), {} new (of {} unseen)",
        module_id,
        len(selected_review),
        len(due_items),
        len(selected_new),
        len(new_items),
    )

    return StudySession(
        module_id=module_id,
        items=session_items,
        new_count=len(selected_new),
        review_count=len(selected_review),
        created_at=now,
        settings=settings,
    )


def entries_by_phase(
    items: Sequence[LearningItem],
    states: StateMap
) -> PhaseBreakdown:
    """
    Group items into new / learning / mastered.
    """
    phases = PhaseBreakdown()
    for item in items:
        state = states.get(item.item_id)
        if state is None:
            phases.new.append(item)
        elif state.mastered:
            phases.mastered.append(item)
        else:
            phases.learning.append(item)
    return phases
