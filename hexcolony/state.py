"""ColonyState - the immutable per-tick colony snapshot."""
from __future__ import annotations

from dataclasses import dataclass, field, replace

from hexcolony.config import RATIONING
from hexcolony.food import FOOD_VALUES, total_food_value

LABOR_ROLES: tuple[str, ...] = (
    "gatherers", "hunters", "farmers", "woodcutters", "stone_workers",
)
# Workers away on expeditions; only the expedition subsystem moves them.
EXPLORERS = "explorers"

FOOD_STOCKS: tuple[str, ...] = tuple(FOOD_VALUES)
MATERIAL_STOCKS: tuple[str, ...] = ("sticks", "logs", "rocks", "stone", "tools")

SEASONS: tuple[str, ...] = ("Spring", "Summer", "Autumn", "Winter")

LABOR_FOCUS: tuple[str, ...] = ("balanced", "food", "wood", "stone")


def season_for(day: int, season_length: int = 30) -> str:
    return SEASONS[((max(1, day) - 1) // season_length) % len(SEASONS)]


@dataclass(frozen=True)
class Policies:
    rationing: str = "normal"
    labor_focus: str = "balanced"

    def __post_init__(self) -> None:
        if self.rationing not in RATIONING:
            raise ValueError(f"Unknown rationing policy {self.rationing!r}")
        if self.labor_focus not in LABOR_FOCUS:
            raise ValueError(f"Unknown labor focus {self.labor_focus!r}")


@dataclass(frozen=True)
class ColonyState:
    """Colony snapshot. Never mutated; each change produces a new instance.

    Attributes:
        population: Everyone in the colony, including explorers.
        stocks: Resource name -> non-negative quantity.
        happiness: Morale in [0.1, 1.0]; scales all production.
        labor: Role -> assigned workers (includes ``explorers``).
        idle: Unassigned workers.
        day: Simulated day, starting at 1.
        season: Cosmetic season name derived from ``day``.
        policies: Rationing and labor focus choices.
        food_shortfall: True while the colony is in an unfed episode.
    """

    population: int
    stocks: dict[str, int] = field(default_factory=dict)
    happiness: float = 1.0
    labor: dict[str, int] = field(default_factory=dict)
    idle: int = 0
    day: int = 1
    season: str = "Spring"
    policies: Policies = field(default_factory=Policies)
    food_shortfall: bool = False

    def stock(self, name: str) -> int:
        return self.stocks.get(name, 0)

    def workers(self, role: str) -> int:
        return self.labor.get(role, 0)

    @property
    def working(self) -> int:
        return sum(self.labor.values())

    @property
    def balanced(self) -> bool:
        return self.working + self.idle == self.population

    @property
    def total_food(self) -> float:
        return total_food_value(self.stocks)

    def with_stocks(self, **changes: int) -> ColonyState:
        stocks = dict(self.stocks)
        for name, amount in changes.items():
            stocks[name] = max(0, amount)
        return replace(self, stocks=stocks)

    def with_labor(self, idle: int | None = None, **changes: int) -> ColonyState:
        labor = dict(self.labor)
        labor.update(changes)
        return replace(self, labor=labor, idle=self.idle if idle is None else idle)


def initial_state() -> ColonyState:
    """Starting provisions and labor split of a freshly landed colony."""
    return ColonyState(
        population=50,
        stocks={
            "rations": 100, "berries": 0, "small_game": 0, "large_game": 0,
            "grain": 20, "sticks": 50, "logs": 20, "rocks": 30, "stone": 10,
            "tools": 5,
        },
        happiness=1.0,
        labor={
            "gatherers": 15, "hunters": 5, "farmers": 0, "woodcutters": 5,
            "stone_workers": 3, EXPLORERS: 0,
        },
        idle=22,
        day=1,
        season=SEASONS[0],
    )


def reallocate(state: ColonyState, role: str, count: int) -> ColonyState | None:
    """Assign *count* workers to *role*, drawing from or returning to idle.

    Returns None when the request is invalid: unknown or reserved role,
    negative count, not enough idle workers, or an already unbalanced state.
    """
    if role not in LABOR_ROLES or count < 0:
        return None
    if not state.balanced:
        return None
    others = state.working - state.workers(role)
    idle = state.population - others - count
    if idle < 0:
        return None
    return state.with_labor(idle=idle, **{role: count})
