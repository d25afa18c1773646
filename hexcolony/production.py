"""Labor roles and per-tick resource production."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Mapping

from hexcolony.state import ColonyState


@dataclass(frozen=True)
class OutputDef:
    """One resource a role produces.

    Attributes:
        resource: Stock the output is added to.
        rate: Units per effective worker per day at full morale and terrain.
        terrains: Revealed terrain names that feed this output.
        threshold: Revealed tiles needed for the output to saturate.
    """

    resource: str
    rate: float
    terrains: tuple[str, ...]
    threshold: float

    def __post_init__(self) -> None:
        if self.rate < 0:
            raise ValueError(f"rate must be >= 0, got {self.rate}")
        if self.threshold <= 0:
            raise ValueError(f"threshold must be > 0, got {self.threshold}")


@dataclass(frozen=True)
class RoleDef:
    name: str
    outputs: tuple[OutputDef, ...]
    tool_limited: bool = False


_GATHER_TERRAIN = ("field", "forest")

ROLES: tuple[RoleDef, ...] = (
    RoleDef("gatherers", (
        OutputDef("berries", 0.3, _GATHER_TERRAIN, 15),
        OutputDef("sticks", 0.4, _GATHER_TERRAIN, 15),
        OutputDef("rocks", 0.2, _GATHER_TERRAIN, 15),
    )),
    RoleDef("hunters", (
        OutputDef("small_game", 0.4, _GATHER_TERRAIN, 12),
        OutputDef("large_game", 0.2, ("forest",), 5),
    )),
    RoleDef("farmers", (
        OutputDef("grain", 0.5, ("field",), 10),
    )),
    RoleDef("woodcutters", (
        OutputDef("logs", 0.3, ("forest",), 5),
    ), tool_limited=True),
    RoleDef("stone_workers", (
        OutputDef("stone", 0.2, ("mountain",), 3),
    )),
)

# Gatherer rates per labor focus; a focus pours the whole 0.9 into one output.
FOCUS_RATES: dict[str, dict[str, float]] = {
    "balanced": {"berries": 0.3, "sticks": 0.4, "rocks": 0.2},
    "food": {"berries": 0.9, "sticks": 0.0, "rocks": 0.0},
    "wood": {"berries": 0.0, "sticks": 0.9, "rocks": 0.0},
    "stone": {"berries": 0.0, "sticks": 0.0, "rocks": 0.9},
}


def role_def(name: str) -> RoleDef:
    for role in ROLES:
        if role.name == name:
            return role
    raise KeyError(name)


def terrain_multiplier(
    counts: Mapping[str, int], terrains: tuple[str, ...], threshold: float
) -> float:
    available = sum(counts.get(t, 0) for t in terrains)
    return min(1.0, available / threshold)


def effective_workers(state: ColonyState, role: RoleDef) -> int:
    workers = state.workers(role.name)
    if role.tool_limited:
        workers = min(workers, state.stock("tools"))
    return max(0, workers)


def compute_production(state: ColonyState, counts: Mapping[str, int]) -> dict[str, int]:
    """Units produced per resource this tick, from the state's labor and morale."""
    focus = FOCUS_RATES[state.policies.labor_focus]
    produced: dict[str, int] = {}
    for role in ROLES:
        workers = effective_workers(state, role)
        for out in role.outputs:
            rate = focus.get(out.resource, out.rate) if role.name == "gatherers" else out.rate
            mult = terrain_multiplier(counts, out.terrains, out.threshold)
            amount = math.floor(workers * rate * state.happiness * mult)
            produced[out.resource] = produced.get(out.resource, 0) + amount
    return produced


def apply_production(state: ColonyState, produced: Mapping[str, int]) -> ColonyState:
    return state.with_stocks(
        **{name: state.stock(name) + amount for name, amount in produced.items()}
    )
