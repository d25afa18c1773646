"""Configuration dataclasses for the colony simulation."""
from __future__ import annotations

from dataclasses import dataclass, field

TICK_RATES: dict[str, float] = {
    "paused": 0.0,
    "slow": 2.0,
    "normal": 1.0,
    "fast": 0.5,
    "very_fast": 0.25,
}

RATIONING: dict[str, float] = {
    "normal": 1.0,
    "generous": 1.25,
    "strict": 0.75,
}


@dataclass(frozen=True)
class MapGenConfig:
    """Immutable map generation tunables.

    Attributes:
        radius: Hex radius of the generated region around the origin.
        max_attempts: Seeds tried before falling back to the built-in map.
        water_threshold: Noise values below this become water.
        mountain_threshold: Noise values below this (and above water) become mountain.
        forest_threshold: Noise values below this (and above mountain) become forest.
        center_bias_radius: Distance at which the spawn bias fades out.
        center_bias_weight: How strongly noise is pulled toward field near spawn.
        mutation_chance: Fraction of land tiles converted to mountain (0 disables).
        reveal_radius: Radius around the colony that starts revealed.
    """

    radius: int = 7
    max_attempts: int = 100
    water_threshold: float = 0.35
    mountain_threshold: float = 0.47
    forest_threshold: float = 0.62
    center_bias_radius: int = 8
    center_bias_weight: float = 0.3
    mutation_chance: float = 0.0
    reveal_radius: int = 2
    water_min: float = 0.05
    water_max: float = 0.20
    field_min: float = 0.25
    forest_min: float = 0.20
    mountain_min: float = 0.10

    def __post_init__(self) -> None:
        if self.radius < 5:
            raise ValueError(f"radius must be >= 5, got {self.radius}")
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be >= 1, got {self.max_attempts}")
        if not (0.0 < self.water_threshold < self.mountain_threshold
                < self.forest_threshold < 1.0):
            raise ValueError("terrain thresholds must be increasing within (0, 1)")
        if not 0.0 <= self.mutation_chance <= 1.0:
            raise ValueError(f"mutation_chance must be in [0, 1], got {self.mutation_chance}")
        if self.water_min > self.water_max:
            raise ValueError("water_min must not exceed water_max")


@dataclass(frozen=True)
class ExpeditionConfig:
    """Immutable expedition tunables."""

    min_duration: int = 2
    base_loss_chance: float = 0.02
    loss_per_hex: float = 0.01
    retention_days: int = 5
    reveal_ring: int = 1

    def __post_init__(self) -> None:
        if self.min_duration < 1:
            raise ValueError(f"min_duration must be >= 1, got {self.min_duration}")
        if self.retention_days < 0:
            raise ValueError(f"retention_days must be >= 0, got {self.retention_days}")


@dataclass(frozen=True)
class EconomyConfig:
    """Immutable economy tunables (food, happiness, flavor text)."""

    food_per_capita: float = 0.1
    happiness_gain: float = 0.01
    happiness_loss: float = 0.05
    happiness_min: float = 0.1
    happiness_max: float = 1.0
    flavor_interval: int = 10
    high_morale: float = 0.8
    low_morale: float = 0.4
    season_length: int = 30
    rationing: dict[str, float] = field(default_factory=lambda: dict(RATIONING))

    def __post_init__(self) -> None:
        if not 0.0 < self.happiness_min <= self.happiness_max:
            raise ValueError("happiness bounds must satisfy 0 < min <= max")
        if self.flavor_interval < 1:
            raise ValueError(f"flavor_interval must be >= 1, got {self.flavor_interval}")
        if self.season_length < 1:
            raise ValueError(f"season_length must be >= 1, got {self.season_length}")


@dataclass(frozen=True)
class SimConfig:
    """Top-level configuration bundle for a Simulation."""

    map: MapGenConfig = field(default_factory=MapGenConfig)
    expedition: ExpeditionConfig = field(default_factory=ExpeditionConfig)
    economy: EconomyConfig = field(default_factory=EconomyConfig)
    tick_rates: dict[str, float] = field(default_factory=lambda: dict(TICK_RATES))
    speed: str = "normal"
    max_catchup: int = 8

    def __post_init__(self) -> None:
        if self.speed not in self.tick_rates:
            raise ValueError(f"Unknown tick rate {self.speed!r}")
        if self.max_catchup < 1:
            raise ValueError(f"max_catchup must be >= 1, got {self.max_catchup}")
