"""
Tests for module statistics, forecasts and the dashboard service.
"""

import pandas as pd
import pytest

from vocabone.analytics import (
    build_module_dashboard,
    compute_ease_distribution,
    compute_module_statistics,
    forecast,
    forecast_series,
    states_dataframe,
)
from vocabone.analytics.queries import STATE_COLUMNS


@pytest.fixture
def progress(make_items, make_state):
    """2 new, 3 learning (overdue, due today, future) and 1 mastered item."""
    items = make_items("word", 6)
    states = {
        "word-0": make_state(due_in_days=-2, interval=3, ease_factor=2.2,
                             total_reviews=4, correct_count=3, incorrect_count=1),
        "word-1": make_state(due_in_days=0, interval=1, ease_factor=2.5,
                             total_reviews=1, correct_count=1),
        "word-2": make_state(due_in_days=3, interval=6, ease_factor=2.3,
                             total_reviews=2, correct_count=2),
        "word-3": make_state(due_in_days=10, interval=25, ease_factor=2.6,
                             total_reviews=4, correct_count=4),
    }
    return items, states


class TestModuleStatistics:

    def test_counts(self, progress, now):
        items, states = progress

        stats = compute_module_statistics(items, states, now)

        assert stats.total_entries == 6
        assert stats.new_entries == 2
        assert stats.learning_entries == 3
        assert stats.mastered_entries == 1
        assert stats.due_today == 2
        assert stats.overdue == 1
        assert stats.total_reviews == 11

    def test_averages(self, progress, now):
        items, states = progress

        stats = compute_module_statistics(items, states, now)

        assert stats.average_ease_factor == pytest.approx(2.4)
        assert stats.accuracy == pytest.approx(10 / 11 * 100)

    def test_empty_module(self, make_items, now):
        stats = compute_module_statistics(make_items("word", 3), {}, now)

        assert stats.new_entries == 3
        assert stats.average_ease_factor == 0.0
        assert stats.accuracy == 0.0

    def test_states_of_other_items_are_ignored(self, progress, now):
        items, states = progress

        stats = compute_module_statistics(items[:2], states, now)

        assert stats.total_entries == 2
        assert stats.learning_entries == 2


class TestForecast:

    def test_forecast_buckets(self, progress, now):
        items, states = progress

        # Overdue items and reviews beyond the window are not counted
        assert forecast(items, states, days=7, now=now) == [1, 0, 0, 1, 0, 0, 0]

    def test_longer_window(self, progress, now):
        items, states = progress

        assert sum(forecast(items, states, days=14, now=now)) == 3

    def test_forecast_series(self, progress, now):
        items, states = progress

        series = forecast_series(items, states, days=7, now=now)

        assert len(series) == 7
        assert series.index[0] == pd.Timestamp("2024-03-10")
        assert series.index[-1] == pd.Timestamp("2024-03-16")
        assert series.tolist() == [1, 0, 0, 1, 0, 0, 0]


class TestDataFrames:

    def test_states_dataframe(self, progress, now):
        items, states = progress

        df = states_dataframe(items, states, now)

        assert list(df.columns) == STATE_COLUMNS
        assert len(df) == 6
        assert df["status"].value_counts().to_dict() == {"learning": 3, "new": 2, "mastered": 1}
        assert df.loc[df["item_id"] == "word-0", "days_until_due"].iloc[0] == -2
        assert df.loc[df["status"] == "new", "interval"].isna().all()

    def test_ease_distribution(self, progress, now):
        items, states = progress

        distribution = compute_ease_distribution(states_dataframe(items, states, now))

        assert distribution.to_dict() == {2.2: 1, 2.3: 1, 2.5: 1, 2.6: 1}

    def test_ease_distribution_without_reviews(self, make_items, now):
        distribution = compute_ease_distribution(states_dataframe(make_items("word", 2), {}, now))

        assert distribution.empty


class TestDashboard:

    def test_build_module_dashboard(self, store, progress, now):
        items, states = progress
        store.batch_put(states)

        dashboard = build_module_dashboard(store, "spanish-animals", items, now)

        assert dashboard.module_id == "spanish-animals"
        assert dashboard.statistics == compute_module_statistics(items, states, now)
        assert dashboard.forecast.tolist() == [1, 0, 0, 1, 0, 0, 0]
        assert len(dashboard.states) == 6
        assert dashboard.ease_distribution.sum() == 4
