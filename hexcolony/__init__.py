"""hexcolony - A tick-driven colony simulation on a procedurally generated hex map."""
from __future__ import annotations

from hexcolony.chronicle import Chronicle, ChronicleEntry
from hexcolony.clock import Clock
from hexcolony.colony import Colony
from hexcolony.config import EconomyConfig, ExpeditionConfig, MapGenConfig, SimConfig
from hexcolony.engine import Engine
from hexcolony.expedition import Expedition, ExpeditionManager
from hexcolony.hexgrid import (
    coord_key, cube_round, hex_distance, hex_to_pixel, hexes_in_radius,
    neighbors, path_hexes, pixel_to_hex, ring,
)
from hexcolony.hexmap import HexMap, HexTile
from hexcolony.mapgen import fallback_map, generate_map, validate_ratios
from hexcolony.simulation import Simulation, build_simulation
from hexcolony.state import ColonyState, Policies, initial_state, reallocate
from hexcolony.terrain import FIELD, FOREST, MOUNTAIN, WATER, TerrainDef
from hexcolony.types import (
    Coord, ExpeditionStatus, HexColonyError, MapGenerationError, Severity, TickContext,
)

__all__ = [
    "Simulation",
    "build_simulation",
    "Engine",
    "Clock",
    "Colony",
    "ColonyState",
    "Policies",
    "initial_state",
    "reallocate",
    "HexMap",
    "HexTile",
    "TerrainDef",
    "FIELD",
    "FOREST",
    "MOUNTAIN",
    "WATER",
    "generate_map",
    "fallback_map",
    "validate_ratios",
    "Expedition",
    "ExpeditionManager",
    "ExpeditionStatus",
    "Chronicle",
    "ChronicleEntry",
    "Severity",
    "SimConfig",
    "MapGenConfig",
    "ExpeditionConfig",
    "EconomyConfig",
    "TickContext",
    "Coord",
    "coord_key",
    "cube_round",
    "hex_distance",
    "hex_to_pixel",
    "pixel_to_hex",
    "path_hexes",
    "hexes_in_radius",
    "neighbors",
    "ring",
    "HexColonyError",
    "MapGenerationError",
]
