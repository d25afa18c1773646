"""Tests for the individual tick systems, called directly."""
import random
from dataclasses import replace

import pytest

from hexcolony.clock import Clock
from hexcolony.colony import Colony
from hexcolony.config import EconomyConfig
from hexcolony.hexgrid import hexes_in_radius
from hexcolony.hexmap import HexMap, HexTile
from hexcolony.messages import HIGH_MORALE, LOW_MORALE, MESSAGES
from hexcolony.state import ColonyState, Policies, initial_state
from hexcolony.systems import (
    make_consumption_system, make_day_system, make_flavor_system,
    make_production_system, make_purge_system, make_terrain_system,
)
from hexcolony.terrain import FIELD, FOREST
from hexcolony.types import Severity

ECONOMY = EconomyConfig()


def _colony():
    tiles = [
        HexTile(q, r, FOREST if q >= 3 else FIELD) for q, r in hexes_in_radius((0, 0), 5)
    ]
    hexmap = HexMap(tiles, seed=0, radius=5)
    hexmap.reveal(hexes_in_radius((0, 0), 1))
    return Colony(hexmap)


def _ctx(day=2, seed=0):
    return Clock().context(day, lambda: None, random.Random(seed))


def _hungry(population=50, happiness=1.0):
    return ColonyState(population=population, stocks={}, happiness=happiness,
                       labor={}, idle=population)


class TestTerrainSystem:
    def test_refreshes_when_dirty(self):
        colony = _colony()
        system = make_terrain_system()
        assert colony.terrain_dirty
        system(colony, colony.state, _ctx())
        assert not colony.terrain_dirty
        assert colony.terrain_counts == {"field": 7}

    def test_reveal_marks_dirty(self):
        colony = _colony()
        colony.refresh_terrain()
        assert not colony.refresh_terrain()
        colony.hexmap.reveal([(3, 0)])
        assert colony.terrain_dirty
        assert colony.refresh_terrain()
        assert colony.terrain_counts == {"field": 7, "forest": 1}


class TestProductionSystem:
    def test_uses_cached_counts(self):
        colony = _colony()
        state = initial_state().with_labor(idle=12, farmers=10)
        system = make_production_system()
        # counts not refreshed yet, so nothing is produced from terrain
        assert system(colony, state, _ctx()).stock("grain") == 20
        colony.refresh_terrain()
        # 10 farmers * 0.5 * 7/10 field saturation
        assert system(colony, state, _ctx()).stock("grain") == 23


class TestConsumptionSystem:
    def test_fed_colony_gains_happiness(self):
        colony = _colony()
        system = make_consumption_system(ECONOMY)
        state = replace(initial_state(), happiness=0.5)
        after = system(colony, state, _ctx())
        assert after.stock("rations") == 95
        assert after.happiness == pytest.approx(0.51)
        assert after.food_shortfall is False

    def test_happiness_capped(self):
        system = make_consumption_system(ECONOMY)
        after = system(_colony(), initial_state(), _ctx())
        assert after.happiness == 1.0

    def test_rationing_policy(self):
        system = make_consumption_system(ECONOMY)
        state = replace(initial_state(), policies=Policies(rationing="strict"))
        assert system(_colony(), state, _ctx()).stock("rations") == 96
        state = replace(initial_state(), policies=Policies(rationing="generous"))
        assert system(_colony(), state, _ctx()).stock("rations") == 93

    def test_starvation_logged_once_per_episode(self):
        colony = _colony()
        system = make_consumption_system(ECONOMY)
        state = system(colony, _hungry(), _ctx(day=2))
        state = system(colony, state, _ctx(day=3))
        assert state.food_shortfall
        assert state.happiness == pytest.approx(0.9)
        entries = colony.chronicle.query(Severity.DANGER)
        assert [(e.day, e.message) for e in entries] == [(2, MESSAGES["starvation"])]

        fed = state.with_stocks(rations=100)
        fed = system(colony, fed, _ctx(day=4))
        assert not fed.food_shortfall
        system(colony, fed.with_stocks(rations=0), _ctx(day=5))
        assert len(colony.chronicle.query(Severity.DANGER)) == 2

    def test_happiness_floor(self):
        system = make_consumption_system(ECONOMY)
        after = system(_colony(), _hungry(happiness=0.12), _ctx())
        assert after.happiness == pytest.approx(0.1)

    def test_shortfall_eats_nothing(self):
        system = make_consumption_system(ECONOMY)
        state = _hungry().with_stocks(rations=2, berries=3)
        after = system(_colony(), state, _ctx())
        assert after.stocks == state.stocks


class TestDaySystem:
    def test_commits_context_day(self):
        system = make_day_system(ECONOMY)
        after = system(_colony(), initial_state(), _ctx(day=2))
        assert after.day == 2
        assert after.season == "Spring"

    def test_season_rolls_over(self):
        system = make_day_system(ECONOMY)
        assert system(_colony(), initial_state(), _ctx(day=31)).season == "Summer"
        assert system(_colony(), initial_state(), _ctx(day=91)).season == "Winter"


class TestFlavorSystem:
    def test_high_morale_line(self):
        colony = _colony()
        system = make_flavor_system(ECONOMY)
        system(colony, replace(initial_state(), day=10, happiness=0.9), _ctx(day=10))
        entry = colony.chronicle.last()
        assert entry.message in HIGH_MORALE
        assert entry.severity is Severity.INFO

    def test_low_morale_line(self):
        colony = _colony()
        system = make_flavor_system(ECONOMY)
        system(colony, replace(initial_state(), day=20, happiness=0.3), _ctx(day=20))
        entry = colony.chronicle.last()
        assert entry.message in LOW_MORALE
        assert entry.severity is Severity.WARNING

    def test_middling_morale_silent(self):
        colony = _colony()
        system = make_flavor_system(ECONOMY)
        system(colony, replace(initial_state(), day=10, happiness=0.6), _ctx(day=10))
        assert len(colony.chronicle) == 0

    def test_only_on_interval(self):
        colony = _colony()
        system = make_flavor_system(ECONOMY)
        system(colony, replace(initial_state(), day=11, happiness=0.9), _ctx(day=11))
        assert len(colony.chronicle) == 0


class TestPurgeSystem:
    def test_returns_state_unchanged(self):
        colony = _colony()
        state = initial_state()
        assert make_purge_system()(colony, state, _ctx()) is state
