"""Tests for ColonyState, policies and labor reallocation."""
import dataclasses

import pytest

from hexcolony.state import (
    EXPLORERS, LABOR_ROLES, ColonyState, Policies, initial_state, reallocate, season_for,
)


class TestInitialState:
    def test_population_and_labor(self):
        st = initial_state()
        assert st.population == 50
        assert st.idle == 22
        assert st.workers("gatherers") == 15
        assert st.workers("farmers") == 0
        assert st.workers(EXPLORERS) == 0
        assert st.balanced

    def test_stocks(self):
        st = initial_state()
        assert st.stock("rations") == 100
        assert st.stock("grain") == 20
        assert st.stock("tools") == 5
        assert st.stock("nonexistent") == 0
        assert st.total_food == pytest.approx(120.0)

    def test_day_season_policies(self):
        st = initial_state()
        assert st.day == 1
        assert st.season == "Spring"
        assert st.happiness == 1.0
        assert st.policies == Policies("normal", "balanced")
        assert st.food_shortfall is False

    def test_fresh_instances(self):
        a = initial_state()
        b = initial_state()
        assert a.stocks is not b.stocks


class TestImmutability:
    def test_frozen(self):
        st = initial_state()
        with pytest.raises(dataclasses.FrozenInstanceError):
            st.population = 10  # type: ignore[misc]

    def test_with_stocks_clamps_and_copies(self):
        st = initial_state()
        nxt = st.with_stocks(rations=-5, logs=21)
        assert nxt.stock("rations") == 0
        assert nxt.stock("logs") == 21
        assert st.stock("rations") == 100

    def test_with_labor(self):
        st = initial_state()
        nxt = st.with_labor(idle=20, farmers=2)
        assert nxt.workers("farmers") == 2
        assert nxt.idle == 20
        assert st.workers("farmers") == 0
        assert nxt.with_labor(hunters=4).idle == 20


class TestPolicies:
    def test_unknown_rationing(self):
        with pytest.raises(ValueError):
            Policies(rationing="feast")

    def test_unknown_focus(self):
        with pytest.raises(ValueError):
            Policies(labor_focus="gold")


class TestSeasons:
    @pytest.mark.parametrize("day,season", [
        (1, "Spring"), (30, "Spring"), (31, "Summer"), (61, "Autumn"),
        (91, "Winter"), (121, "Spring"),
    ])
    def test_cycle(self, day, season):
        assert season_for(day) == season

    def test_custom_length(self):
        assert season_for(3, season_length=2) == "Summer"


class TestReallocate:
    def test_assign_from_idle(self):
        st = reallocate(initial_state(), "farmers", 10)
        assert st.workers("farmers") == 10
        assert st.idle == 12
        assert st.balanced

    def test_release_to_idle(self):
        st = reallocate(initial_state(), "gatherers", 5)
        assert st.idle == 32
        assert st.balanced

    def test_not_enough_idle(self):
        assert reallocate(initial_state(), "farmers", 23) is None

    def test_whole_idle_pool(self):
        st = reallocate(initial_state(), "farmers", 22)
        assert st.idle == 0

    def test_negative_count(self):
        assert reallocate(initial_state(), "farmers", -1) is None

    def test_unknown_role(self):
        assert reallocate(initial_state(), "wizards", 1) is None

    def test_explorers_reserved(self):
        assert EXPLORERS not in LABOR_ROLES
        assert reallocate(initial_state(), EXPLORERS, 3) is None

    def test_unbalanced_state_rejected(self):
        st = ColonyState(population=10, labor={"farmers": 3}, idle=3)
        assert reallocate(st, "farmers", 1) is None
