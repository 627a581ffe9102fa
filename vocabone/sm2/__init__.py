"""
SM-2 - SuperMemo 2 Retention Scheduling

Main API for the vocabulary retention engine.

This package implements the SM-2 variant the app has always used:
- Fixed first/second intervals (1 and 6 days)
- Ease factor updated before the interval is grown
- Mastery once the interval reaches 21 days

Quick start:
    from vocabone import sm2

    # Process a review (algorithm only, no DB calls)
    state = sm2.advance(state, sm2.RecallQuality.GOOD)

    # Persist it
    store = sm2.SqlStateStore("spanish-animals")
    store.init_db()
    store.put("perro-001", state)
"""

# Core scheduler API (algorithm logic)
from vocabone.sm2.scheduler import (
    EaseAdjustment,
    advance,
    calculate_ease_adjustment,
    ease_adjustment,
    estimate_reviews_to_mastery,
    simulate_interval_progression,
)

# Database API
from vocabone.sm2.database import (
    RetentionStoreError,
    SqlStateStore,
    StateStore,
    get_database_url,
    get_default_learner_id,
    is_test_mode,
)

# Constants and parameters
from vocabone.sm2.constants import (
    RecallQuality,
    MIN_EASE,
    DEFAULT_EASE,
    FAILURE_EASE_PENALTY,
    FIRST_INTERVAL,
    SECOND_INTERVAL,
    MASTERY_THRESHOLD,
)

# Memory state
from vocabone.sm2.memory_state import (
    RetentionState,
    days_until_due,
    initial_state,
    is_due,
    start_of_day,
    utc_now,
)


__all__ = [
    # Core algorithm
    "advance",
    "ease_adjustment",
    "calculate_ease_adjustment",
    "EaseAdjustment",
    "simulate_interval_progression",
    "estimate_reviews_to_mastery",

    # Database operations
    "SqlStateStore",
    "StateStore",
    "RetentionStoreError",
    "get_database_url",
    "get_default_learner_id",
    "is_test_mode",

    # Enums
    "RecallQuality",

    # Memory state
    "RetentionState",
    "initial_state",
    "days_until_due",
    "is_due",
    "start_of_day",
    "utc_now",

    # Parameters
    "MIN_EASE",
    "DEFAULT_EASE",
    "FAILURE_EASE_PENALTY",
    "FIRST_INTERVAL",
    "SECOND_INTERVAL",
    "MASTERY_THRESHOLD",
]
