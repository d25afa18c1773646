"""HexMap - coordinate keyed hex tiles with one-way revelation."""
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Iterable, Iterator, Mapping

from hexcolony.terrain import TerrainDef
from hexcolony.types import Coord


@dataclass(slots=True)
class HexTile:
    q: int
    r: int
    terrain: TerrainDef
    revealed: bool = False

    @property
    def coord(self) -> Coord:
        return (self.q, self.r)


class HexMap:
    """A finite set of hex tiles plus the colony site and generating seed.

    Tile composition and terrain are fixed once the generator hands the map
    over; afterwards only ``revealed`` flags change, and only false -> true.
    Revealed terrain is counted incrementally on every flip.
    """

    def __init__(
        self,
        tiles: Iterable[HexTile],
        seed: int,
        colony_location: Coord = (0, 0),
        radius: int = 0,
    ) -> None:
        self._tiles: dict[Coord, HexTile] = {}
        for tile in tiles:
            if tile.coord in self._tiles:
                raise ValueError(f"Duplicate tile at {tile.coord}")
            self._tiles[tile.coord] = tile
        self._seed = seed
        self._colony_location = colony_location
        self._radius = radius
        self._revealed_counts: Counter[str] = Counter(
            t.terrain.name for t in self._tiles.values() if t.revealed
        )
        self._reveal_listeners: list[Callable[[list[HexTile]], None]] = []

    # --- Properties ---

    @property
    def seed(self) -> int:
        return self._seed

    @property
    def colony_location(self) -> Coord:
        return self._colony_location

    @property
    def radius(self) -> int:
        return self._radius

    @property
    def tiles(self) -> Mapping[Coord, HexTile]:
        return MappingProxyType(self._tiles)

    # --- Queries ---

    def at(self, coord: Coord) -> HexTile | None:
        return self._tiles.get(coord)

    def is_revealed(self, coord: Coord) -> bool:
        tile = self._tiles.get(coord)
        return tile is not None and tile.revealed

    def terrain_counts(self) -> dict[str, int]:
        """Count every tile by terrain, revealed or not."""
        return dict(Counter(t.terrain.name for t in self._tiles.values()))

    def revealed_counts(self) -> dict[str, int]:
        return dict(self._revealed_counts)

    def proportions(self) -> dict[str, float]:
        total = len(self._tiles)
        if total == 0:
            return {}
        return {name: n / total for name, n in self.terrain_counts().items()}

    def __contains__(self, coord: object) -> bool:
        return coord in self._tiles

    def __len__(self) -> int:
        return len(self._tiles)

    def __iter__(self) -> Iterator[HexTile]:
        return iter(self._tiles.values())

    # --- Mutation ---

    def on_reveal(self, listener: Callable[[list[HexTile]], None]) -> None:
        """Register a callback receiving the tiles flipped by each reveal()."""
        self._reveal_listeners.append(listener)

    def reveal(self, coords: Iterable[Coord]) -> int:
        """Reveal tiles at *coords*. Unknown or already revealed coords are skipped.

        Returns the number of newly revealed tiles.
        """
        flipped: list[HexTile] = []
        for coord in coords:
            tile = self._tiles.get(coord)
            if tile is None or tile.revealed:
                continue
            tile.revealed = True
            self._revealed_counts[tile.terrain.name] += 1
            flipped.append(tile)
        if flipped:
            for listener in self._reveal_listeners:
                listener(flipped)
        return len(flipped)

    def set_terrain(self, coord: Coord, terrain: TerrainDef) -> None:
        """Overwrite a tile's terrain. Only the map generator calls this."""
        tile = self._tiles[coord]
        if tile.revealed:
            self._revealed_counts[tile.terrain.name] -= 1
            self._revealed_counts[terrain.name] += 1
        tile.terrain = terrain

    def set_colony_location(self, coord: Coord) -> None:
        if coord not in self._tiles:
            raise KeyError(f"No tile at {coord}")
        self._colony_location = coord
