"""
Tests for study session composition.
"""

import random

import pytest
from pydantic import ValidationError

from vocabone.schemas import DEFAULT_SESSION_SETTINGS, SessionSettings
from vocabone.session_builders import (
    CardPriority,
    build_session,
    card_priority,
    entries_by_phase,
    get_due_items,
    get_new_items,
    sort_by_priority,
)
from vocabone.session_builders.pool_utils import interleave, shuffled


def settings(**overrides):
    values = dict(max_new=10, max_review=20, randomize=False, prioritize_overdue=False, mix_cards=False)
    values.update(overrides)
    return SessionSettings(**values)


@pytest.fixture
def module(make_items, make_state):
    """5 due items (overdue by 0-4 days) followed by 5 new ones."""
    due = make_items("due", 5)
    new = make_items("new", 5)
    states = {item.item_id: make_state(due_in_days=-i) for i, item in enumerate(due)}
    return due + new, states


class TestPools:

    def test_due_and_new_are_disjoint(self, module, make_items, make_state, now):
        items, states = module
        future = make_items("future", 2)
        states = {**states, **{item.item_id: make_state(due_in_days=3) for item in future}}
        items = items + future

        due_ids = {item.item_id for item in get_due_items(items, states, now)}
        new_ids = {item.item_id for item in get_new_items(items, states)}

        assert due_ids == {f"due-{i}" for i in range(5)}
        assert new_ids == {f"new-{i}" for i in range(5)}
        assert not due_ids & new_ids

    def test_new_items_keep_arrival_order(self, module):
        items, states = module

        assert [item.item_id for item in get_new_items(items, states, limit=3)] == ["new-0", "new-1", "new-2"]

    def test_no_states_means_everything_is_new(self, make_items, now):
        items = make_items("word", 4)

        assert get_due_items(items, {}, now) == []
        assert len(get_new_items(items, {})) == 4


class TestPriority:

    def test_card_priority(self, make_state, now):
        assert card_priority(None, now) == CardPriority.NEW
        assert card_priority(make_state(due_in_days=-2), now) == CardPriority.OVERDUE
        assert card_priority(make_state(due_in_days=0), now) == CardPriority.DUE_TODAY
        assert card_priority(make_state(due_in_days=4), now) == CardPriority.FUTURE

    def test_sort_by_priority(self, make_items, make_state, now):
        items = make_items("item", 6)
        states = {
            "item-0": make_state(due_in_days=5),                 # future
            "item-1": make_state(due_in_days=0, interval=3),     # due today
            "item-2": make_state(due_in_days=-1),                # overdue 1
            # item-3 is new
            "item-4": make_state(due_in_days=0, interval=10),    # due today, older
            "item-5": make_state(due_in_days=-7),                # overdue 7
        }

        ordered = [item.item_id for item in sort_by_priority(items, states, now)]

        assert ordered == ["item-5", "item-2", "item-4", "item-1", "item-3", "item-0"]

    def test_sort_does_not_modify_input(self, make_items, make_state, now):
        items = make_items("item", 3)
        states = {"item-2": make_state(due_in_days=-1)}
        original = list(items)

        sort_by_priority(items, states, now)

        assert items == original


class TestBuildSession:

    def test_caps_and_counts(self, module, now):
        items, states = module

        session = build_session(
            "spanish-animals", items, states,
            settings(max_review=3, max_new=2, mix_cards=True),
            now=now,
        )

        assert len(session) == 5
        assert session.review_count == 3
        assert session.new_count == 2
        assert session.module_id == "spanish-animals"
        assert session.created_at == now

    def test_interleaves_starting_with_new(self, module, now):
        items, states = module

        session = build_session("m", items, states, settings(max_review=3, max_new=2, mix_cards=True), now=now)

        assert session.item_ids == ["new-0", "due-0", "new-1", "due-1", "due-2"]

    def test_reviews_before_new_without_mixing(self, module, now):
        items, states = module

        session = build_session("m", items, states, settings(max_review=2, max_new=2), now=now)

        assert session.item_ids == ["due-0", "due-1", "new-0", "new-1"]

    def test_prioritize_overdue(self, module, now):
        items, states = module

        session = build_session(
            "m", items, states,
            settings(max_review=3, max_new=0, prioritize_overdue=True),
            now=now,
        )

        # due-4 is the most overdue
        assert session.item_ids == ["due-4", "due-3", "due-2"]

    @pytest.mark.parametrize("seed", range(5))
    def test_never_exceeds_caps(self, module, now, seed):
        items, states = module
        session_settings = settings(max_review=4, max_new=3, randomize=True, mix_cards=True)

        session = build_session("m", items, states, session_settings, now=now, rng=random.Random(seed))

        assert len(session) <= 7
        assert len(set(session.item_ids)) == len(session)
        assert sum(1 for item_id in session.item_ids if item_id.startswith("new")) == session.new_count

    def test_seeded_sessions_are_reproducible(self, module, now):
        items, states = module

        first = build_session("m", items, states, DEFAULT_SESSION_SETTINGS, now=now, rng=random.Random(42))
        second = build_session("m", items, states, DEFAULT_SESSION_SETTINGS, now=now, rng=random.Random(42))

        assert first.item_ids == second.item_ids

    def test_nothing_due_nothing_new(self, make_items, make_state, now):
        items = make_items("done", 3)
        states = {item.item_id: make_state(due_in_days=10) for item in items}

        session = build_session("m", items, states, DEFAULT_SESSION_SETTINGS, now=now)

        assert len(session) == 0


class TestPhases:

    def test_entries_by_phase(self, make_items, make_state):
        items = make_items("item", 4)
        states = {
            "item-0": make_state(interval=3),
            "item-1": make_state(interval=30),
        }

        phases = entries_by_phase(items, states)

        assert [item.item_id for item in phases.learning] == ["item-0"]
        assert [item.item_id for item in phases.mastered] == ["item-1"]
        assert [item.item_id for item in phases.new] == ["item-2", "item-3"]


class TestPoolUtils:

    def test_interleave_uneven(self):
        assert interleave([1, 2, 3], ["a"]) == [1, "a", 2, 3]
        assert interleave([], ["a", "b"]) == ["a", "b"]

    def test_shuffled_leaves_input(self):
        values = list(range(10))

        result = shuffled(values, random.Random(1))

        assert values == list(range(10))
        assert sorted(result) == values


class TestSettings:

    def test_negative_caps_rejected(self):
        with pytest.raises(ValidationError):
            SessionSettings(max_new=-1, max_review=5, randomize=False)

    def test_defaults(self):
        assert DEFAULT_SESSION_SETTINGS.max_new == 10
        assert DEFAULT_SESSION_SETTINGS.max_review == 20
        assert DEFAULT_SESSION_SETTINGS.prioritize_overdue
        assert DEFAULT_SESSION_SETTINGS.mix_cards
