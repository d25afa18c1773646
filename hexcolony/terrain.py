"""Terrain type definitions."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TerrainDef:
    """Immutable terrain type definition.

    Attributes:
        name: Unique identifier for this terrain type.
        habitable: Whether the colony may be founded on it.
        description: Chronicle phrase used when an expedition discovers it.
    """

    name: str
    habitable: bool = True
    description: str = ""

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("TerrainDef name must be non-empty")

    def __str__(self) -> str:
        return self.name


FIELD = TerrainDef(name="field", description="fertile fields")
FOREST = TerrainDef(name="forest", description="dense woodlands")
MOUNTAIN = TerrainDef(name="mountain", description="towering peaks")
WATER = TerrainDef(name="water", habitable=False, description="a great water")

TERRAINS: tuple[TerrainDef, ...] = (FIELD, FOREST, MOUNTAIN, WATER)

_BY_NAME = {t.name: t for t in TERRAINS}


def terrain_by_name(name: str) -> TerrainDef:
    """Look up a terrain. Raises KeyError for unknown names."""
    return _BY_NAME[name]
