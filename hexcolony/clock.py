"""Clock - tick counting and simulated-day rates."""
from __future__ import annotations

import random
from typing import Callable, Mapping

from hexcolony.config import TICK_RATES
from hexcolony.types import TickContext


class Clock:
    """Counts ticks and holds the selected tick rate.

    A rate is the number of real seconds one simulated day takes. A rate of
    zero means paused.
    """

    def __init__(self, rates: Mapping[str, float] | None = None, speed: str = "normal") -> None:
        self._rates = dict(rates if rates is not None else TICK_RATES)
        for name, interval in self._rates.items():
            if interval < 0:
                raise ValueError(f"tick rate {name!r} must be >= 0, got {interval}")
        self._speed = ""
        self.set_speed(speed)
        self._tick_number = 0

    @property
    def speed(self) -> str:
        return self._speed

    @property
    def rates(self) -> dict[str, float]:
        return dict(self._rates)

    @property
    def interval(self) -> float:
        return self._rates[self._speed]

    @property
    def paused(self) -> bool:
        return self.interval == 0

    @property
    def tick_number(self) -> int:
        return self._tick_number

    def set_speed(self, speed: str) -> None:
        if speed not in self._rates:
            raise ValueError(f"Unknown tick rate {speed!r}, expected one of {sorted(self._rates)}")
        self._speed = speed

    def advance(self) -> int:
        self._tick_number += 1
        return self._tick_number

    def context(self, day: int, stop_fn: Callable[[], None], rng: random.Random) -> TickContext:
        return TickContext(
            tick_number=self._tick_number,
            day=day,
            dt=self.interval,
            request_stop=stop_fn,
            random=rng,
        )

    def reset(self, tick_number: int = 0) -> None:
        self._tick_number = tick_number
