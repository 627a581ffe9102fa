"""
Analytics package exports.
"""

from vocabone.analytics.metrics import (
    compute_ease_distribution,
    compute_module_statistics,
    forecast,
    forecast_series,
)
from vocabone.analytics.queries import states_dataframe
from vocabone.analytics.service import build_module_dashboard
from vocabone.analytics.types import ModuleDashboardData, ModuleStatistics

__all__ = [
    "compute_ease_distribution",
    "compute_module_statistics",
    "forecast",
    "forecast_series",
    "states_dataframe",
    "build_module_dashboard",
    "ModuleDashboardData",
    "ModuleStatistics",
]
