"""
Data-loading helpers for analytics.
"""

from __future__ import annotations

from datetime import datetime
from typing import Mapping, Optional, Sequence

import pandas as pd

from vocabone.schemas import LearningItem
from vocabone.sm2.memory_state import RetentionState, days_until_due, utc_now


STATE_COLUMNS = [
    "item_id",
    "status",
    "interval",
    "ease_factor",
    "repetitions",
    "days_until_due",
    "total_reviews",
    "correct_count",
    "incorrect_count",
]


def states_dataframe(
    items: Sequence[LearningItem],
    states: Mapping[str, RetentionState],
    now: Optional[datetime] = None
) -> pd.DataFrame:
    """
    One row per item with its current retention snapshot.

    New items have NaN scheduling columns and status "new".
    """
    if now is None:
        now = utc_now()

    rows = []
    for item in items:
        state = states.get(item.item_id)
        if state is None:
            rows.append({"item_id": item.item_id, "status": "new"})
            continue
        rows.append({
            "item_id": item.item_id,
            "status": "mastered" if state.mastered else "learning",
            "interval": state.interval,
            "ease_factor": state.ease_factor,
            "repetitions": state.repetitions,
            "days_until_due": days_until_due(state, now),
            "total_reviews": state.total_reviews,
            "correct_count": state.correct_count,
            "incorrect_count": state.incorrect_count,
        })

    return pd.DataFrame(rows, columns=STATE_COLUMNS)
