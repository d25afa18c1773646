"""Tests for expedition dispatch, resolution and purge."""
import pytest

from hexcolony.chronicle import Chronicle
from hexcolony.config import ExpeditionConfig
from hexcolony.expedition import ExpeditionManager
from hexcolony.hexgrid import hexes_in_radius
from hexcolony.hexmap import HexMap, HexTile
from hexcolony.state import EXPLORERS, initial_state
from hexcolony.terrain import FIELD, FOREST
from hexcolony.types import ExpeditionStatus, Severity


class _FixedRandom:
    def __init__(self, value):
        self.value = value

    def random(self):
        return self.value


def _make_map(radius=5, reveal=1):
    def terrain(q, r):
        return FOREST if q >= 3 else FIELD

    tiles = [HexTile(q, r, terrain(q, r)) for q, r in hexes_in_radius((0, 0), radius)]
    hexmap = HexMap(tiles, seed=1, radius=radius)
    hexmap.reveal(hexes_in_radius((0, 0), reveal))
    return hexmap


@pytest.fixture
def world():
    return ExpeditionManager(), _make_map(), Chronicle()


class TestFormulas:
    def test_duration(self):
        mgr = ExpeditionManager()
        assert mgr.duration(4) == 4
        assert mgr.duration(1) == 2
        assert mgr.duration(2.5) == 3

    def test_loss_chance(self):
        mgr = ExpeditionManager()
        assert mgr.loss_chance(4) == pytest.approx(0.06)
        assert mgr.loss_chance(0) == pytest.approx(0.02)

    def test_config_validation(self):
        with pytest.raises(ValueError):
            ExpeditionConfig(min_duration=0)
        with pytest.raises(ValueError):
            ExpeditionConfig(retention_days=-1)


class TestDispatch:
    def test_moves_idle_to_explorers(self, world):
        mgr, hexmap, chron = world
        st = mgr.dispatch(initial_state(), hexmap, chron, (4, 0), 5)
        assert st.idle == 17
        assert st.workers(EXPLORERS) == 5
        assert st.balanced
        exp = mgr.expeditions()[0]
        assert exp.id == "exp_1"
        assert exp.target == (4, 0)
        assert (exp.target_q, exp.target_r) == (4, 0)
        assert exp.start_day == 1
        assert exp.arrival_day == 5
        assert exp.status is ExpeditionStatus.IN_PROGRESS
        assert "Day 5" in chron.last().message

    def test_sequential_ids(self, world):
        mgr, hexmap, chron = world
        st = mgr.dispatch(initial_state(), hexmap, chron, (4, 0), 2)
        mgr.dispatch(st, hexmap, chron, (-4, 0), 2)
        assert [e.id for e in mgr.expeditions()] == ["exp_1", "exp_2"]

    def test_not_enough_idle(self, world):
        mgr, hexmap, chron = world
        st = initial_state().with_labor(idle=3, farmers=19)
        assert mgr.dispatch(st, hexmap, chron, (4, 0), 5) is None
        entry = chron.last()
        assert entry.message == "Not enough idle workers for expedition!"
        assert entry.severity is Severity.WARNING
        assert mgr.expeditions() == []

    def test_revealed_target_refused_silently(self, world):
        mgr, hexmap, chron = world
        assert mgr.dispatch(initial_state(), hexmap, chron, (1, 0), 3) is None
        assert len(chron) == 0

    def test_off_map_target_refused(self, world):
        mgr, hexmap, chron = world
        assert mgr.dispatch(initial_state(), hexmap, chron, (20, 0), 3) is None
        assert len(chron) == 0

    def test_zero_workers_refused(self, world):
        mgr, hexmap, chron = world
        assert mgr.dispatch(initial_state(), hexmap, chron, (4, 0), 0) is None
        assert mgr.expeditions() == []


class TestResolve:
    def _dispatched(self, world):
        mgr, hexmap, chron = world
        st = mgr.dispatch(initial_state(), hexmap, chron, (4, 0), 5)
        return mgr, hexmap, chron, st

    def test_not_before_arrival(self, world):
        mgr, hexmap, chron, st = self._dispatched(world)
        after = mgr.resolve(st, hexmap, chron, 4, _FixedRandom(0.99))
        assert after is st
        assert mgr.in_progress()

    def test_success_reveals_and_returns_workers(self, world):
        mgr, hexmap, chron, st = self._dispatched(world)
        after = mgr.resolve(st, hexmap, chron, 5, _FixedRandom(0.99))
        exp = mgr.expeditions()[0]
        assert exp.status is ExpeditionStatus.COMPLETED
        assert exp.resolved_day == 5
        assert after.idle == 22
        assert after.workers(EXPLORERS) == 0
        assert after.population == 50
        assert after.balanced
        for coord in [(2, 0), (3, 0), (4, 0), (5, 0), (4, 1), (3, 1)]:
            assert hexmap.is_revealed(coord)
        entry = chron.last()
        assert "dense woodlands" in entry.message
        assert "revealing 8 hexes" in entry.message
        assert entry.severity is Severity.INFO

    def test_loss_removes_workers(self, world):
        mgr, hexmap, chron, st = self._dispatched(world)
        after = mgr.resolve(st, hexmap, chron, 5, _FixedRandom(0.0))
        assert mgr.expeditions()[0].status is ExpeditionStatus.LOST
        assert after.population == 45
        assert after.idle == 17
        assert after.workers(EXPLORERS) == 0
        assert after.balanced
        assert not hexmap.is_revealed((4, 0))
        entry = chron.last()
        assert entry.severity is Severity.DANGER
        assert "5 souls lost" in entry.message

    def test_late_resolution_still_settles(self, world):
        mgr, hexmap, chron, st = self._dispatched(world)
        mgr.resolve(st, hexmap, chron, 9, _FixedRandom(0.99))
        assert mgr.in_progress() == []
        assert mgr.expeditions()[0].resolved_day == 9

    def test_resolved_once(self, world):
        mgr, hexmap, chron, st = self._dispatched(world)
        st = mgr.resolve(st, hexmap, chron, 5, _FixedRandom(0.99))
        n = len(chron)
        again = mgr.resolve(st, hexmap, chron, 6, _FixedRandom(0.0))
        assert again is st
        assert len(chron) == n


class TestPurge:
    def test_retention_window(self, world):
        mgr, hexmap, chron = world
        st = mgr.dispatch(initial_state(), hexmap, chron, (4, 0), 5)
        mgr.resolve(st, hexmap, chron, 5, _FixedRandom(0.99))
        assert mgr.purge(9) == 0
        assert mgr.get("exp_1") is not None
        assert mgr.purge(10) == 1
        assert mgr.get("exp_1") is None

    def test_in_progress_kept(self, world):
        mgr, hexmap, chron = world
        mgr.dispatch(initial_state(), hexmap, chron, (4, 0), 5)
        assert mgr.purge(100) == 0
        assert len(mgr.in_progress()) == 1
