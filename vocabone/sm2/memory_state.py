"""
Memory State - SM-2 Retention State and Due Dates

Defines the per-item retention snapshot and the calendar helpers used to
decide whether an item is due.

Key concepts:
- Interval: days between the last review and the next one
- Ease factor: multiplier controlling interval growth
- Due: the scheduled review day is today or earlier
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from vocabone.sm2.constants import DEFAULT_EASE, FIRST_INTERVAL


@dataclass(frozen=True)
class RetentionState:
    """
    Retention snapshot for a single item and learner.

    Snapshots are immutable; every review produces a new one.
    Absence of a snapshot means the item has never been studied.
    """
    interval: int  # Days until the next review
    ease_factor: float  # >= MIN_EASE
    repetitions: int  # Consecutive successes since the last lapse

    last_reviewed_at: Optional[datetime]
    next_due_at: datetime

    # Counters
    total_reviews: int = 0
    correct_count: int = 0
    incorrect_count: int = 0
    streak: int = 0

    mastered: bool = False  # interval >= MASTERY_THRESHOLD


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def start_of_day(timestamp: datetime) -> datetime:
    """Midnight of the timestamp's calendar day, keeping its timezone."""
    return timestamp.replace(hour=0, minute=0, second=0, microsecond=0)


def add_days(timestamp: datetime, days: int) -> datetime:
    return timestamp + timedelta(days=days)


def day_difference(later: datetime, earlier: datetime) -> int:
    """
    Whole calendar days from `earlier` to `later`.

    Both timestamps are compared on the calendar of `earlier`, so a due date
    stored in UTC is judged against the caller's local day.
    """
    if later.tzinfo is not None and earlier.tzinfo is not None:
        later = later.astimezone(earlier.tzinfo)
    return (later.date() - earlier.date()).days


def initial_state(now: Optional[datetime] = None) -> RetentionState:
    """
    Seed state for an item reviewed for the first time.

    The item is due immediately.
    """
    if now is None:
        now = utc_now()

    return RetentionState(
        interval=FIRST_INTERVAL,
        ease_factor=DEFAULT_EASE,
        repetitions=0,
        last_reviewed_at=None,
        next_due_at=now,
        total_reviews=0,
        correct_count=0,
        incorrect_count=0,
        streak=0,
        mastered=False,
    )


def days_until_due(state: RetentionState, now: Optional[datetime] = None) -> int:
    """
    Days until the state's next review.

    Returns:
        Negative when overdue, 0 when due today, positive otherwise
    """
    if now is None:
        now = utc_now()
    return day_difference(state.next_due_at, now)


def is_due(state: Optional[RetentionState], now: Optional[datetime] = None) -> bool:
    """An item is due if it was never studied or its review day has arrived."""
    if state is None:
        return True
    return days_until_due(state, now) <= 0
