"""Engine - ordered systems, fixed-rate pacing and lifecycle hooks."""
from __future__ import annotations

import logging
import os
import random
import time
from typing import Callable, Mapping

from hexcolony.clock import Clock
from hexcolony.colony import Colony
from hexcolony.state import ColonyState
from hexcolony.types import System, TickContext

logger = logging.getLogger(__name__)

Hook = Callable[[Colony, TickContext], None]

_PAUSED_POLL = 0.05


class Engine:
    """Drives a Colony one simulated day per tick.

    Each tick threads the published state through every system in
    registration order and publishes the result once, so observers never see
    a half-applied day.
    """

    def __init__(
        self,
        colony: Colony,
        rates: Mapping[str, float] | None = None,
        speed: str = "normal",
        seed: int | None = None,
        time_fn: Callable[[], float] = time.monotonic,
        sleep_fn: Callable[[float], None] = time.sleep,
        max_catchup: int = 8,
    ) -> None:
        self._colony = colony
        self._clock = Clock(rates, speed)
        self._systems: list[System] = []
        self._start_hooks: list[Hook] = []
        self._stop_hooks: list[Hook] = []
        self._tick_hooks: list[Hook] = []
        self._stop_requested: bool = False
        self._time_fn = time_fn
        self._sleep_fn = sleep_fn
        self._max_catchup = max_catchup
        self._next_due: float | None = None

        if seed is None:
            seed = int.from_bytes(os.urandom(8))
        self._seed = seed
        self._rng = random.Random(seed)

    @property
    def colony(self) -> Colony:
        return self._colony

    @property
    def clock(self) -> Clock:
        return self._clock

    @property
    def seed(self) -> int:
        return self._seed

    @property
    def random(self) -> random.Random:
        return self._rng

    def add_system(self, system: System) -> None:
        self._systems.append(system)

    def on_start(self, hook: Hook) -> None:
        self._start_hooks.append(hook)

    def on_stop(self, hook: Hook) -> None:
        self._stop_hooks.append(hook)

    def on_tick(self, hook: Hook) -> None:
        """Register an observer called after each tick's state is published."""
        self._tick_hooks.append(hook)

    def set_speed(self, speed: str) -> None:
        self._clock.set_speed(speed)
        self._next_due = None

    def stop(self) -> None:
        self._stop_requested = True

    def _request_stop(self) -> None:
        self._stop_requested = True

    def _context(self) -> TickContext:
        return self._clock.context(self._colony.state.day, self._request_stop, self._rng)

    def _tick(self) -> ColonyState:
        self._clock.advance()
        state = self._colony.state
        ctx = self._clock.context(state.day + 1, self._request_stop, self._rng)
        for system in self._systems:
            state = system(self._colony, state, ctx)
        self._colony.publish(state)
        logger.debug("Tick %d published day %d", ctx.tick_number, state.day)
        for hook in self._tick_hooks:
            hook(self._colony, ctx)
        return state

    def step(self) -> ColonyState:
        """Run exactly one tick, ignoring pacing and pause."""
        self._stop_requested = False
        return self._tick()

    def run(self, n: int) -> ColonyState:
        self._stop_requested = False
        ctx = self._context()
        for hook in self._start_hooks:
            hook(self._colony, ctx)

        for _ in range(n):
            self._tick()
            if self._stop_requested:
                break

        ctx = self._context()
        for hook in self._stop_hooks:
            hook(self._colony, ctx)
        return self._colony.state

    def pump(self, now: float | None = None) -> int:
        """Run every tick due at time *now*. Returns the number of ticks run.

        The first call after start or a speed change only arms the schedule.
        At most ``max_catchup`` ticks run per call; any larger backlog is
        dropped rather than replayed.
        """
        if now is None:
            now = self._time_fn()
        if self._clock.paused:
            self._next_due = None
            return 0
        interval = self._clock.interval
        if self._next_due is None:
            self._next_due = now + interval
            return 0

        ran = 0
        while now >= self._next_due and ran < self._max_catchup:
            self._tick()
            ran += 1
            self._next_due += interval
            if self._stop_requested:
                return ran
        if now >= self._next_due:
            logger.debug("Dropping tick backlog at tick %d", self._clock.tick_number)
            self._next_due = now + interval
        return ran

    def run_forever(self) -> None:
        self._stop_requested = False
        self._next_due = None
        ctx = self._context()
        for hook in self._start_hooks:
            hook(self._colony, ctx)

        while not self._stop_requested:
            now = self._time_fn()
            self.pump(now)
            if self._stop_requested:
                break
            if self._next_due is None:
                wait = _PAUSED_POLL
            else:
                wait = self._next_due - self._time_fn()
            if wait > 0:
                self._sleep_fn(wait)

        ctx = self._context()
        for hook in self._stop_hooks:
            hook(self._colony, ctx)
