"""Caller-owned collection of named LUT grids."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

from .cube_format import SizePolicy, load_cube
from .grid import Lut3DGrid

logger = logging.getLogger(__name__)


class LutLibrary:
    """Ordered mapping of names to grids.

    The engine keeps no global LUT list; hosts create a library and pass
    grids from it into the engine.
    """

    def __init__(self) -> None:
        """Initialize empty library."""
        self._grids: dict[str, Lut3DGrid] = {}

    def add(self, grid: Lut3DGrid, name: str | None = None) -> str:
        """Add grid under ``name`` (default: its title).

        Returns:
            Name the grid was stored under

        Raises:
            ValueError: If the name is already taken
        """
        key = name or grid.title
        if key in self._grids:
            raise ValueError(f"LUT already in library: {key}")
        self._grids[key] = grid
        logger.debug(f"Added LUT '{key}' ({grid.size}^3)")
        return key

    def load(
        self,
        path: str | Path,
        name: str | None = None,
        size_policy: SizePolicy = SizePolicy.STRICT,
    ) -> str:
        """Load a .cube file and add it (default name: the file stem)."""
        path = Path(path)
        return self.add(load_cube(path, size_policy), name or path.stem)

    def get(self, name: str) -> Lut3DGrid:
        """Return grid stored under ``name``.

        Raises:
            KeyError: If no grid has that name
        """
        try:
            return self._grids[name]
        except KeyError:
            raise KeyError(f"No LUT named {name!r}") from None

    def remove(self, name: str) -> Lut3DGrid:
        """Remove and return grid stored under ``name``."""
        grid = self.get(name)
        del self._grids[name]
        return grid

    def names(self) -> list[str]:
        """Names in insertion order."""
        return list(self._grids)

    def __contains__(self, name: object) -> bool:
        return name in self._grids

    def __len__(self) -> int:
        return len(self._grids)

    def __iter__(self) -> Iterator[Lut3DGrid]:
        return iter(self._grids.values())
