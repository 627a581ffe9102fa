"""
Scheduler - SM-2 Algorithm Logic

Pure SM-2 state transitions (no database calls).

Main workflow:
1. Load retention state (caller's responsibility, None for new items)
2. Apply the failure or success branch
3. Return a new RetentionState snapshot

Two deliberate departures from textbook SM-2 are load-bearing:
- the first two successful intervals are fixed (1 and 6 days)
- the ease factor is updated before the third+ interval is computed
"""

from __future__ import annotations
import math
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional

from vocabone.sm2.constants import (
    DEFAULT_EASE,
    FAILURE_EASE_PENALTY,
    FIRST_INTERVAL,
    MASTERY_THRESHOLD,
    MAX_SIMULATED_REVIEWS,
    MIN_EASE,
    SECOND_INTERVAL,
    RecallQuality,
)
from vocabone.sm2.memory_state import (
    RetentionState,
    add_days,
    initial_state,
    start_of_day,
    utc_now,
)


@dataclass(frozen=True)
class EaseAdjustment:
    """How a given quality moves the ease factor."""
    quality_delta: int
    adjustment: float
    description: str


def ease_adjustment(quality: int) -> float:
    """
    SM-2 ease delta.

    Formula: 0.1 - (5 - q) * (0.08 + (5 - q) * 0.02)
    +0.10 for q=5, 0.00 for q=4, -0.14 for q=3.
    """
    delta = 5 - quality
    return 0.1 - delta * (0.08 + delta * 0.02)


def calculate_ease_adjustment(quality: int) -> EaseAdjustment:
    """Describe the ease change a quality rating would cause."""
    adjustment = ease_adjustment(quality)

    if adjustment > 0:
        description = "Ease factor will increase"
    elif adjustment < 0:
        description = "Ease factor will decrease"
    else:
        description = "Ease factor will stay the same"

    return EaseAdjustment(
        quality_delta=5 - quality,
        adjustment=adjustment,
        description=description,
    )


def _round_half_up(value: float) -> int:
    # Python's round() is banker's rounding; intervals round .5 upwards.
    return int(math.floor(value + 0.5))


def advance(
    state: Optional[RetentionState],
    quality: int,
    now: Optional[datetime] = None
) -> RetentionState:
    """
    Apply one review to a retention state.

    This is the core SM-2 transition. No database calls, no mutation:
    the caller persists the returned snapshot.

    Args:
        state: Current state, or None for an item never studied
        quality: Recall quality (RecallQuality or a raw 0-5 integer)
        now: Review timestamp (defaults to now, UTC)

    Returns:
        New RetentionState
    """
    if now is None:
        now = utc_now()
    if state is None:
        state = initial_state(now)

    if quality < RecallQuality.GOOD:
        interval = FIRST_INTERVAL
        repetitions = 0
        streak = 0
        correct_count = state.correct_count
        incorrect_count = state.incorrect_count + 1
        ease = max(MIN_EASE, state.ease_factor - FAILURE_EASE_PENALTY)
    else:
        correct_count = state.correct_count + 1
        incorrect_count = state.incorrect_count
        streak = state.streak + 1

        # Ease first, then the interval uses the updated ease
        ease = max(MIN_EASE, state.ease_factor + ease_adjustment(quality))

        if state.repetitions == 0:
            interval = FIRST_INTERVAL
        elif state.repetitions == 1:
            interval = SECOND_INTERVAL
        else:
            interval = _round_half_up(state.interval * ease)

        repetitions = state.repetitions + 1

    return replace(
        state,
        interval=interval,
        ease_factor=ease,
        repetitions=repetitions,
        last_reviewed_at=now,
        next_due_at=add_days(start_of_day(now), interval),
        total_reviews=state.total_reviews + 1,
        correct_count=correct_count,
        incorrect_count=incorrect_count,
        streak=streak,
        mastered=interval >= MASTERY_THRESHOLD,
    )


def simulate_interval_progression(
    number_of_reviews: int,
    initial_ease: float = DEFAULT_EASE,
    quality: int = RecallQuality.GOOD,
    now: Optional[datetime] = None
) -> list[int]:
    """
    Intervals after each of `number_of_reviews` identical reviews.

    Useful for showing how fast a given rating pushes an item out.
    """
    if now is None:
        now = utc_now()

    state = replace(initial_state(now), ease_factor=initial_ease)
    intervals: list[int] = []
    for _ in range(number_of_reviews):
        state = advance(state, quality, now)
        intervals.append(state.interval)
    return intervals


def estimate_reviews_to_mastery(
    quality: int = RecallQuality.GOOD,
    initial_ease: float = DEFAULT_EASE,
    now: Optional[datetime] = None
) -> int:
    """
    Number of consistent reviews needed to reach the mastery interval.

    Capped at MAX_SIMULATED_REVIEWS (a failing rating never masters).
    """
    if now is None:
        now = utc_now()

    state = replace(initial_state(now), ease_factor=initial_ease)
    reviews = 0
    while state.interval < MASTERY_THRESHOLD and reviews < MAX_SIMULATED_REVIEWS:
        state = advance(state, quality, now)
        reviews += 1
    return reviews
