"""Simulation facade and game wiring."""
from __future__ import annotations

import logging
from dataclasses import replace
from typing import Callable

from hexcolony.chronicle import Chronicle
from hexcolony.colony import Colony
from hexcolony.config import SimConfig
from hexcolony.engine import Engine
from hexcolony.expedition import Expedition
from hexcolony.hexgrid import coord_key
from hexcolony.hexmap import HexMap
from hexcolony.mapgen import generate_map
from hexcolony.messages import message
from hexcolony.state import ColonyState, Policies, initial_state, reallocate
from hexcolony.systems import (
    make_consumption_system, make_day_system, make_expedition_system,
    make_flavor_system, make_production_system, make_purge_system,
    make_terrain_system,
)
from hexcolony.types import Coord

logger = logging.getLogger(__name__)


class Simulation:
    """Player-facing API over an Engine and its Colony.

    The Engine is the only writer of colony state during ticks; the
    commands here run between ticks and publish a replacement state.
    """

    def __init__(self, engine: Engine) -> None:
        self._engine = engine
        self._colony = engine.colony

    # --- Read accessors ---

    @property
    def engine(self) -> Engine:
        return self._engine

    @property
    def colony(self) -> Colony:
        return self._colony

    @property
    def state(self) -> ColonyState:
        return self._colony.state

    @property
    def hexmap(self) -> HexMap:
        return self._colony.hexmap

    @property
    def chronicle(self) -> Chronicle:
        return self._colony.chronicle

    @property
    def expeditions(self) -> list[Expedition]:
        return self._colony.expeditions.expeditions()

    @property
    def colony_location(self) -> Coord:
        return self._colony.hexmap.colony_location

    @property
    def seed(self) -> int:
        return self._colony.hexmap.seed

    @property
    def speed(self) -> str:
        return self._engine.clock.speed

    # --- Commands ---

    def start_expedition(self, target_q: int, target_r: int, workers: int) -> bool:
        state = self._colony.expeditions.dispatch(
            self._colony.state, self._colony.hexmap, self._colony.chronicle,
            coord_key(target_q, target_r), workers,
        )
        if state is None:
            return False
        self._colony.publish(state)
        return True

    def allocate_labor(self, role: str, count: int) -> None:
        state = reallocate(self._colony.state, role, count)
        if state is not None:
            self._colony.publish(state)

    def set_policy(self, name: str, value: str) -> None:
        policies = self._colony.state.policies
        if name == "rationing":
            policies = Policies(rationing=value, labor_focus=policies.labor_focus)
        elif name == "labor_focus":
            policies = Policies(rationing=policies.rationing, labor_focus=value)
        else:
            raise ValueError(f"Unknown policy {name!r}")
        self._colony.publish(replace(self._colony.state, policies=policies))

    # --- Scheduling ---

    def set_tick_rate(self, speed: str) -> None:
        self._engine.set_speed(speed)
        logger.debug("Tick rate set to %s", speed)

    def tick(self) -> ColonyState:
        return self._engine.step()

    def run(self, days: int) -> ColonyState:
        return self._engine.run(days)

    def pump(self, now: float | None = None) -> int:
        return self._engine.pump(now)

    def run_forever(self) -> None:
        self._engine.run_forever()

    def stop(self) -> None:
        self._engine.stop()


def build_simulation(
    seed: int | None = None,
    config: SimConfig | None = None,
    rng_seed: int | None = None,
    state: ColonyState | None = None,
    hexmap: HexMap | None = None,
    time_fn: Callable[[], float] | None = None,
    sleep_fn: Callable[[float], None] | None = None,
) -> Simulation:
    """Generate the map, wire the tick systems and return a Simulation.

    *seed* drives map generation only; *rng_seed* drives gameplay rolls
    (expedition loss, flavor text), so the two never share a random stream.
    """
    config = config or SimConfig()
    if hexmap is None:
        hexmap = generate_map(seed, config.map)
    state = state if state is not None else initial_state()
    colony = Colony(hexmap, config, state)
    colony.chronicle.add(state.day, message("arrival"))

    kwargs: dict = {}
    if time_fn is not None:
        kwargs["time_fn"] = time_fn
    if sleep_fn is not None:
        kwargs["sleep_fn"] = sleep_fn
    engine = Engine(
        colony,
        rates=config.tick_rates,
        speed=config.speed,
        seed=rng_seed,
        max_catchup=config.max_catchup,
        **kwargs,
    )

    # Systems (order matters!)
    engine.add_system(make_terrain_system())                      # 1
    engine.add_system(make_production_system())                   # 2
    engine.add_system(make_consumption_system(config.economy))    # 3
    engine.add_system(make_expedition_system())                   # 4
    engine.add_system(make_day_system(config.economy))            # 5
    engine.add_system(make_flavor_system(config.economy))         # 6
    engine.add_system(make_purge_system())                        # 7

    logger.info("Colony founded at %s on map seed %d", hexmap.colony_location, hexmap.seed)
    return Simulation(engine)
