"""Procedural hex map generation with terrain ratio validation."""
from __future__ import annotations

import logging
import random as _random_mod

from hexcolony.config import MapGenConfig
from hexcolony.hexgrid import hex_distance, hexes_in_radius, ring
from hexcolony.hexmap import HexMap, HexTile
from hexcolony.terrain import FIELD, FOREST, MOUNTAIN, TERRAINS, WATER, TerrainDef
from hexcolony.types import Coord, MapGenerationError

logger = logging.getLogger(__name__)

_MASK = 0xFFFFFFFF
_SEED_LIMIT = 1_000_000


def _rotl13(h: int) -> int:
    return ((h << 13) | (h >> 19)) & _MASK


def hash_noise(q: int, r: int, seed: int) -> float:
    """Deterministic position + seed hash mapped to [0, 1)."""
    h = seed & _MASK
    h = _rotl13(h ^ ((q * 10000) & _MASK))
    h = _rotl13(h ^ ((r * 10000) & _MASK))
    h = (h * 2654435761) & _MASK
    h ^= h >> 16
    h = (h * 0x85EBCA6B) & _MASK
    h ^= h >> 13
    return h / 4294967296


def terrain_value(q: int, r: int, seed: int, config: MapGenConfig) -> float:
    """Blend three noise scales and pull values near spawn toward field."""
    coarse = hash_noise(q // 2, r // 2, seed)
    medium = hash_noise(q, r, seed + 1000)
    fine = hash_noise(q * 2, r * 2, seed + 2000)
    value = coarse * 0.5 + medium * 0.3 + fine * 0.2

    dist = hex_distance((q, r), (0, 0))
    bias = max(0.0, 1.0 - dist / config.center_bias_radius) * config.center_bias_weight
    return value * (1.0 - bias) + bias


def classify(value: float, config: MapGenConfig) -> TerrainDef:
    if value < config.water_threshold:
        return WATER
    if value < config.mountain_threshold:
        return MOUNTAIN
    if value < config.forest_threshold:
        return FOREST
    return FIELD


def generate_terrain(q: int, r: int, seed: int, config: MapGenConfig | None = None) -> TerrainDef:
    config = config or MapGenConfig()
    terrain = classify(terrain_value(q, r, seed, config), config)
    if (
        config.mutation_chance > 0.0
        and terrain is not WATER
        and hash_noise(q, r, seed + 3000) < config.mutation_chance
    ):
        return MOUNTAIN
    return terrain


def validate_ratios(hexmap: HexMap, config: MapGenConfig | None = None) -> bool:
    """Check every terrain proportion against the configured bounds."""
    config = config or MapGenConfig()
    total = len(hexmap)
    if total == 0:
        return False
    counts = hexmap.terrain_counts()
    if any(counts.get(t.name, 0) == 0 for t in TERRAINS):
        return False
    water = counts[WATER.name] / total
    return (
        config.water_min <= water <= config.water_max
        and counts[FIELD.name] / total >= config.field_min
        and counts[FOREST.name] / total >= config.forest_min
        and counts[MOUNTAIN.name] / total >= config.mountain_min
    )


def select_colony_site(hexmap: HexMap) -> Coord:
    """Pick the origin if habitable, else the nearest habitable tile.

    Searches rings of increasing radius; within a ring the first habitable
    tile in (q, r) order wins. If nothing habitable exists, the origin's
    terrain is forced to field.
    """
    origin: Coord = (0, 0)
    max_radius = max((hex_distance(origin, c) for c in hexmap.tiles), default=0)
    for radius in range(max_radius + 1):
        for coord in ring(origin, radius):
            tile = hexmap.at(coord)
            if tile is not None and tile.terrain.habitable:
                return coord
    if origin in hexmap:
        hexmap.set_terrain(origin, FIELD)
        return origin
    raise MapGenerationError("Map has no tiles to found a colony on")


def _build_tiles(seed: int, config: MapGenConfig) -> list[HexTile]:
    return [
        HexTile(q=q, r=r, terrain=generate_terrain(q, r, seed, config))
        for q, r in hexes_in_radius((0, 0), config.radius)
    ]


def _fallback_terrain(q: int, r: int, radius: int) -> TerrainDef:
    dist = hex_distance((q, r), (0, 0))
    band = (q - r) % 4
    if dist == radius and (q - r) % 3 != 0:
        return WATER
    if dist <= 1:
        return FIELD
    if band == 0:
        return MOUNTAIN
    if band == 2 or (band == 3 and dist >= 5):
        return FIELD
    return FOREST


def fallback_map(seed: int, config: MapGenConfig | None = None) -> HexMap:
    """Hand-built map that satisfies the ratio bounds without sampling."""
    config = config or MapGenConfig()
    tiles = [
        HexTile(q=q, r=r, terrain=_fallback_terrain(q, r, config.radius))
        for q, r in hexes_in_radius((0, 0), config.radius)
    ]
    hexmap = HexMap(tiles, seed=seed, colony_location=(0, 0), radius=config.radius)
    if not validate_ratios(hexmap, config):
        raise MapGenerationError(
            f"Fallback map violates terrain bounds: {hexmap.terrain_counts()}"
        )
    return hexmap


def next_seed(seed: int) -> int:
    """Derive the retry seed deterministically from the previous one."""
    return (seed * 1103515245 + 12345) % _SEED_LIMIT


def generate_map(seed: int | None = None, config: MapGenConfig | None = None) -> HexMap:
    """Generate a validated map.

    The requested seed is tried first, then seeds derived from it, so the
    same input always yields the same map. The returned map's ``seed`` is
    the one that actually produced the accepted terrain.
    """
    config = config or MapGenConfig()
    if seed is None:
        seed = _random_mod.randrange(_SEED_LIMIT)

    candidate = seed
    for attempt in range(config.max_attempts):
        hexmap = HexMap(_build_tiles(candidate, config), seed=candidate, radius=config.radius)
        if validate_ratios(hexmap, config):
            hexmap.set_colony_location(select_colony_site(hexmap))
            logger.info(
                "Accepted map seed %d after %d attempt(s): %s",
                candidate, attempt + 1, hexmap.terrain_counts(),
            )
            return _reveal_start(hexmap, config)
        logger.debug("Rejected map seed %d: %s", candidate, hexmap.terrain_counts())
        candidate = next_seed(candidate)

    logger.warning(
        "Could not generate valid map after %d attempts, using fallback",
        config.max_attempts,
    )
    return _reveal_start(fallback_map(seed, config), config)


def _reveal_start(hexmap: HexMap, config: MapGenConfig) -> HexMap:
    hexmap.reveal(hexes_in_radius(hexmap.colony_location, config.reveal_radius))
    return hexmap
