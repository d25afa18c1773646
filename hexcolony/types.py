"""Shared type aliases, enums and errors for hexcolony."""
from __future__ import annotations

import random as _random
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Callable

Coord = tuple[int, int]


class Severity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    DANGER = "danger"


class ExpeditionStatus(str, Enum):
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    LOST = "lost"

    @property
    def terminal(self) -> bool:
        return self is not ExpeditionStatus.IN_PROGRESS


@dataclass(frozen=True, slots=True)
class TickContext:
    tick_number: int
    day: int
    dt: float
    request_stop: Callable[[], None]
    random: _random.Random


class HexColonyError(Exception):
    """Base class for hexcolony errors."""


class MapGenerationError(HexColonyError):
    """Raised when even the fallback map fails terrain ratio validation."""


if TYPE_CHECKING:
    from hexcolony.colony import Colony
    from hexcolony.state import ColonyState

System = Callable[["Colony", "ColonyState", TickContext], "ColonyState"]
