"""Colony - the owned simulation context every system reads and writes."""
from __future__ import annotations

from hexcolony.chronicle import Chronicle
from hexcolony.config import SimConfig
from hexcolony.expedition import ExpeditionManager
from hexcolony.hexmap import HexMap, HexTile
from hexcolony.state import ColonyState, initial_state


class Colony:
    """Holds the published ColonyState, the map, expeditions and chronicle.

    Revealed terrain counts are cached. Any reveal on the map sets the dirty
    flag; ``refresh_terrain()`` recomputes the counts and clears it.
    """

    def __init__(
        self,
        hexmap: HexMap,
        config: SimConfig | None = None,
        state: ColonyState | None = None,
        chronicle: Chronicle | None = None,
    ) -> None:
        self._config = config or SimConfig()
        self._hexmap = hexmap
        self._state = state if state is not None else initial_state()
        self._chronicle = chronicle if chronicle is not None else Chronicle()
        self._expeditions = ExpeditionManager(self._config.expedition)
        self._terrain_counts: dict[str, int] = {}
        self._terrain_dirty = True
        hexmap.on_reveal(self._on_reveal)

    @property
    def config(self) -> SimConfig:
        return self._config

    @property
    def state(self) -> ColonyState:
        return self._state

    @property
    def hexmap(self) -> HexMap:
        return self._hexmap

    @property
    def chronicle(self) -> Chronicle:
        return self._chronicle

    @property
    def expeditions(self) -> ExpeditionManager:
        return self._expeditions

    @property
    def terrain_dirty(self) -> bool:
        return self._terrain_dirty

    @property
    def terrain_counts(self) -> dict[str, int]:
        return dict(self._terrain_counts)

    def publish(self, state: ColonyState) -> None:
        """Replace the current state in one step."""
        self._state = state

    def refresh_terrain(self) -> bool:
        """Recount revealed terrain if dirty. Returns True when a recount ran."""
        if not self._terrain_dirty:
            return False
        self._terrain_counts = self._hexmap.revealed_counts()
        self._terrain_dirty = False
        return True

    def _on_reveal(self, tiles: list[HexTile]) -> None:
        self._terrain_dirty = True
