"""
Types for analytics dashboards.
"""

from __future__ import annotations

from dataclasses import dataclass

import pandas as pd


@dataclass(frozen=True)
class ModuleStatistics:
    """
    Learning progress of one module, recomputed on demand from its states.
    """
    total_entries: int
    new_entries: int
    learning_entries: int
    mastered_entries: int
    due_today: int  # Includes overdue items
    overdue: int
    average_ease_factor: float  # 0 when nothing has been studied
    total_reviews: int
    accuracy: float  # Percentage 0-100, 0 when there were no attempts


@dataclass(frozen=True)
class ModuleDashboardData:
    """
    Precomputed metrics and series for one module's dashboard.
    """
    module_id: str
    statistics: ModuleStatistics
    forecast: pd.Series  # Reviews due per upcoming day
    ease_distribution: pd.Series  # Item count per ease factor (1 decimal)
    states: pd.DataFrame  # One row per item
