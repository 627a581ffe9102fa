"""
Pytest configuration and shared fixtures.

"Today" is always frozen through explicit timestamps; no test reads the
wall clock.
"""

from datetime import datetime, timedelta, timezone

import pytest

from vocabone.schemas import LearningItem
from vocabone.sm2 import RetentionState, SqlStateStore
from vocabone.sm2.database import get_engine


@pytest.fixture
def now():
    """Fixed review time: mid-afternoon UTC."""
    return datetime(2024, 3, 10, 15, 30, tzinfo=timezone.utc)


@pytest.fixture
def make_state(now):
    """Factory for retention states due a given number of days from `now`."""
    def _make_state(due_in_days=0, interval=1, ease_factor=2.5, repetitions=1, **counters):
        return RetentionState(
            interval=interval,
            ease_factor=ease_factor,
            repetitions=repetitions,
            last_reviewed_at=now - timedelta(days=interval),
            next_due_at=now + timedelta(days=due_in_days),
            mastered=interval >= 21,
            **counters,
        )
    return _make_state


@pytest.fixture
def make_items():
    """Factory for learning items named `<prefix>-<n>`."""
    def _make_items(prefix, count, language_code="es"):
        return [
            LearningItem(
                item_id=f"{prefix}-{i}",
                term=f"term {i}",
                answer=f"answer {i}",
                language_code=language_code,
            )
            for i in range(count)
        ]
    return _make_items


@pytest.fixture
def perro():
    return LearningItem(
        item_id="perro-001",
        term="dog",
        answer="el perro",
        alternate_answers=["el can"],
        language_code="es",
    )


@pytest.fixture
def engine():
    """Fresh in-memory SQLite engine per test."""
    return get_engine("sqlite://")


@pytest.fixture
def store(engine):
    """Initialized retention store for the 'spanish-animals' module."""
    sql_store = SqlStateStore("spanish-animals", learner_id="tester", engine=engine)
    sql_store.init_db()
    return sql_store
