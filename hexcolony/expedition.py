"""Expeditions - tick-scheduled exploration of unrevealed tiles."""
from __future__ import annotations

import logging
import math
import random as _random_mod
from dataclasses import dataclass, replace

from hexcolony.chronicle import Chronicle
from hexcolony.config import ExpeditionConfig
from hexcolony.hexgrid import hex_distance, hexes_in_radius, path_hexes
from hexcolony.hexmap import HexMap
from hexcolony.messages import message
from hexcolony.state import EXPLORERS, ColonyState
from hexcolony.types import Coord, ExpeditionStatus, Severity

logger = logging.getLogger(__name__)


@dataclass
class Expedition:
    """Runtime record of one expedition."""

    id: str
    target: Coord
    workers: int
    start_day: int
    arrival_day: int
    status: ExpeditionStatus = ExpeditionStatus.IN_PROGRESS
    resolved_day: int | None = None

    @property
    def target_q(self) -> int:
        return self.target[0]

    @property
    def target_r(self) -> int:
        return self.target[1]


class ExpeditionManager:
    """Owns the expedition list: dispatch, arrival resolution and purge."""

    def __init__(self, config: ExpeditionConfig | None = None) -> None:
        self._config = config or ExpeditionConfig()
        self._expeditions: list[Expedition] = []
        self._next_id = 1

    @property
    def config(self) -> ExpeditionConfig:
        return self._config

    # --- Queries ---

    def expeditions(self) -> list[Expedition]:
        return list(self._expeditions)

    def in_progress(self) -> list[Expedition]:
        return [e for e in self._expeditions if e.status is ExpeditionStatus.IN_PROGRESS]

    def get(self, expedition_id: str) -> Expedition | None:
        for e in self._expeditions:
            if e.id == expedition_id:
                return e
        return None

    def duration(self, distance: float) -> int:
        return max(self._config.min_duration, math.ceil(distance))

    def loss_chance(self, distance: float) -> float:
        return self._config.base_loss_chance + distance * self._config.loss_per_hex

    # --- Transitions ---

    def dispatch(
        self,
        state: ColonyState,
        hexmap: HexMap,
        chronicle: Chronicle,
        target: Coord,
        workers: int,
    ) -> ColonyState | None:
        """Send *workers* idle settlers toward *target*.

        Returns the updated state, or None when the dispatch is refused.
        Only the not-enough-workers refusal is written to the chronicle.
        """
        if state.idle < workers:
            chronicle.add(state.day, message("not_enough_workers"), Severity.WARNING)
            return None
        if workers <= 0:
            return None
        tile = hexmap.at(target)
        if tile is None or tile.revealed:
            return None

        distance = hex_distance(hexmap.colony_location, target)
        expedition = Expedition(
            id=f"exp_{self._next_id}",
            target=target,
            workers=workers,
            start_day=state.day,
            arrival_day=state.day + self.duration(distance),
        )
        self._next_id += 1
        self._expeditions.append(expedition)
        logger.debug("Dispatched %s to %s (distance %d)", expedition.id, target, distance)

        chronicle.add(
            state.day,
            message("expedition_departs", workers=workers, arrival_day=expedition.arrival_day),
        )
        return state.with_labor(
            idle=state.idle - workers,
            **{EXPLORERS: state.workers(EXPLORERS) + workers},
        )

    def resolve(
        self,
        state: ColonyState,
        hexmap: HexMap,
        chronicle: Chronicle,
        day: int,
        rng: _random_mod.Random,
    ) -> ColonyState:
        """Settle every in-progress expedition whose arrival day has come."""
        for exp in self.in_progress():
            if exp.arrival_day > day:
                continue
            distance = hex_distance(hexmap.colony_location, exp.target)
            explorers = max(0, state.workers(EXPLORERS) - exp.workers)
            exp.resolved_day = day

            if rng.random() < self.loss_chance(distance):
                exp.status = ExpeditionStatus.LOST
                state = state.with_labor(**{EXPLORERS: explorers})
                state = replace(state, population=max(0, state.population - exp.workers))
                chronicle.add(day, message("expedition_lost", workers=exp.workers), Severity.DANGER)
                logger.debug("%s lost at distance %d", exp.id, distance)
                continue

            exp.status = ExpeditionStatus.COMPLETED
            revealed = hexmap.reveal(self._reveal_area(hexmap.colony_location, exp.target))
            state = state.with_labor(idle=state.idle + exp.workers, **{EXPLORERS: explorers})
            tile = hexmap.at(exp.target)
            terrain = tile.terrain.description if tile is not None else message("unknown_lands")
            chronicle.add(
                day,
                message("expedition_returns", terrain=terrain, revealed=revealed,
                        workers=exp.workers),
            )
            logger.debug("%s returned, %d tiles revealed", exp.id, revealed)
        return state

    def purge(self, day: int) -> int:
        """Drop terminal expeditions past the retention window. Returns count dropped."""
        keep: list[Expedition] = []
        for exp in self._expeditions:
            if (
                exp.status.terminal
                and exp.resolved_day is not None
                and day - exp.resolved_day >= self._config.retention_days
            ):
                continue
            keep.append(exp)
        dropped = len(self._expeditions) - len(keep)
        self._expeditions = keep
        return dropped

    def _reveal_area(self, origin: Coord, target: Coord) -> list[Coord]:
        area = path_hexes(origin, target)
        area.extend(hexes_in_radius(target, self._config.reveal_ring))
        return area
