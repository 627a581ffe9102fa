"""
Service layer to assemble a module's analytics dashboard.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from vocabone.analytics.metrics import (
    compute_ease_distribution,
    compute_module_statistics,
    forecast_series,
)
from vocabone.analytics.queries import states_dataframe
from vocabone.analytics.types import ModuleDashboardData
from vocabone.schemas import LearningItem
from vocabone.sm2.database import StateStore
from vocabone.sm2.memory_state import utc_now


FORECAST_DAYS = 7


def build_module_dashboard(
    store: StateStore,
    module_id: str,
    items: Sequence[LearningItem],
    now: Optional[datetime] = None,
    forecast_days: int = FORECAST_DAYS
) -> ModuleDashboardData:
    """
    Build all KPI values and series needed by the progress page of a module.
    """
    if now is None:
        now = utc_now()

    states = store.get_all(module_id)
    states_df = states_dataframe(items, states, now)

    return ModuleDashboardData(
        module_id=module_id,
        statistics=compute_module_statistics(items, states, now),
        forecast=forecast_series(items, states, forecast_days, now),
        ease_distribution=compute_ease_distribution(states_df),
        states=states_df,
    )
