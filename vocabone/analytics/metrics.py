"""
Metric computations for module statistics and review forecasts.
"""

from __future__ import annotations

from datetime import datetime
from typing import Mapping, Optional, Sequence

import pandas as pd

from vocabone.analytics.types import ModuleStatistics
from vocabone.schemas import LearningItem
from vocabone.sm2.memory_state import RetentionState, days_until_due, utc_now


def compute_module_statistics(
    items: Sequence[LearningItem],
    states: Mapping[str, RetentionState],
    now: Optional[datetime] = None
) -> ModuleStatistics:
    """
    Single pass over a module's items producing its statistics.
    """
    if now is None:
        now = utc_now()

    new_entries = learning_entries = mastered_entries = 0
    due_today = overdue = 0
    total_ease = 0.0
    studied = 0
    total_reviews = total_correct = total_incorrect = 0

    for item in items:
        state = states.get(item.item_id)
        if state is None:
            new_entries += 1
            continue

        studied += 1
        total_ease += state.ease_factor
        total_reviews += state.total_reviews
        total_correct += state.correct_count
        total_incorrect += state.incorrect_count

        if state.mastered:
            mastered_entries += 1
        else:
            learning_entries += 1

        days = days_until_due(state, now)
        if days < 0:
            overdue += 1
            due_today += 1  # Overdue items are also due today
        elif days == 0:
            due_today += 1

    attempts = total_correct + total_incorrect

    return ModuleStatistics(
        total_entries=len(items),
        new_entries=new_entries,
        learning_entries=learning_entries,
        mastered_entries=mastered_entries,
        due_today=due_today,
        overdue=overdue,
        average_ease_factor=total_ease / studied if studied else 0.0,
        total_reviews=total_reviews,
        accuracy=total_correct / attempts * 100 if attempts else 0.0,
    )


def forecast(
    items: Sequence[LearningItem],
    states: Mapping[str, RetentionState],
    days: int = 7,
    now: Optional[datetime] = None
) -> list[int]:
    """
    Reviews due on each of the next `days` days (index 0 = today).

    Overdue items and items beyond the range are not counted.
    """
    if now is None:
        now = utc_now()

    buckets = [0] * max(days, 0)
    for item in items:
        state = states.get(item.item_id)
        if state is None:
            continue
        until = days_until_due(state, now)
        if 0 <= until < days:
            buckets[until] += 1
    return buckets


def forecast_series(
    items: Sequence[LearningItem],
    states: Mapping[str, RetentionState],
    days: int = 7,
    now: Optional[datetime] = None
) -> pd.Series:
    """
    Review forecast as a series indexed by calendar day.
    """
    if now is None:
        now = utc_now()

    day_index = pd.date_range(start=now.date(), periods=max(days, 0), freq="D")
    return pd.Series(forecast(items, states, days, now), index=day_index, dtype="int64", name="reviews_due")


def compute_ease_distribution(states_df: pd.DataFrame) -> pd.Series:
    """
    Count of studied items per ease factor, rounded to one decimal.
    """
    if states_df.empty:
        return pd.Series(dtype="int64", name="items")

    studied = states_df.loc[states_df["status"] != "new", "ease_factor"]
    if studied.empty:
        return pd.Series(dtype="int64", name="items")

    return studied.round(1).value_counts().sort_index().astype("int64").rename("items")
