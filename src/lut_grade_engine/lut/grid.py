"""3D LUT grid value type."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

import numpy as np

from ..errors import SizeMismatchError

DEFAULT_LUT_SIZE = 33
DEFAULT_TITLE = "Untitled LUT"
IDENTITY_TITLE = "Identity LUT"

# Characters that cannot appear inside TITLE "..."
_TITLE_FORBIDDEN = ('"', "\r", "\n")


class Lut3DGrid:
    """Immutable cubic grid of RGB triples.

    Rows are stored flattened with red varying fastest, then green, then
    blue: ``index = r + g * size + b * size**2``.
    """

    __slots__ = ("_data", "_size", "_title")

    def __init__(
        self,
        size: int,
        data: Any,
        title: str = DEFAULT_TITLE,
        *,
        strict: bool = True,
    ) -> None:
        """Initialize LUT grid.

        Args:
            size: Cube dimension N (>= 2)
            data: Array-like of RGB triples with shape (rows, 3)
            title: Display label, single line without double quotes;
                surrounding whitespace is dropped
            strict: Require exactly size^3 rows (default: True)

        Raises:
            ValueError: If size is below 2, data is not a list of triples
                or the title cannot be written as a .cube TITLE line
            SizeMismatchError: If strict and the row count is not size^3
        """
        size = int(size)
        if size < 2:
            raise ValueError("LUT size must be at least 2")

        title = (title or "").strip()
        if any(char in title for char in _TITLE_FORBIDDEN):
            raise ValueError(
                f"LUT title must be one line without double quotes: {title!r}"
            )

        # Always copy so callers cannot mutate the grid through their array
        rows = np.array(data, dtype=np.float64)
        if rows.size == 0:
            rows = rows.reshape(0, 3)
        if rows.ndim != 2 or rows.shape[1] != 3:
            raise ValueError(f"LUT data must have shape (rows, 3), got {rows.shape}")

        expected = size**3
        if strict and rows.shape[0] != expected:
            raise SizeMismatchError(
                f"LUT_3D_SIZE {size} requires {expected} rows, got {rows.shape[0]}",
                expected=expected,
                actual=rows.shape[0],
            )

        rows.setflags(write=False)
        self._size = size
        self._data = rows
        self._title = title or DEFAULT_TITLE

    @classmethod
    def identity(
        cls, size: int = DEFAULT_LUT_SIZE, title: str = IDENTITY_TITLE
    ) -> Lut3DGrid:
        """Create identity grid where output equals input.

        Args:
            size: Cube dimension (default: 33)
            title: Display label

        Returns:
            Grid whose node (r, g, b) stores (r, g, b) / (size - 1)
        """
        if size < 2:
            raise ValueError("LUT size must be at least 2")

        coords = np.arange(size, dtype=np.float64) / (size - 1)

        # Outer axis blue, inner axis red so flattening puts red fastest
        b_grid, g_grid, r_grid = np.meshgrid(coords, coords, coords, indexing="ij")
        cube = np.stack([r_grid, g_grid, b_grid], axis=-1)

        return cls(size, cube.reshape(-1, 3), title)

    @classmethod
    def from_rows(
        cls,
        rows: Iterable[Sequence[float]],
        size: int | None = None,
        title: str = DEFAULT_TITLE,
    ) -> Lut3DGrid:
        """Create grid from a sequence of triples.

        Args:
            rows: RGB triples in flattening order
            size: Cube dimension; derived from the row count when omitted
            title: Display label
        """
        data = np.array(list(rows), dtype=np.float64).reshape(-1, 3)
        if size is None:
            size = round(len(data) ** (1 / 3))
            if size**3 != len(data):
                raise SizeMismatchError(
                    f"Cannot derive cube size from {len(data)} rows",
                    expected=size**3,
                    actual=len(data),
                )
        return cls(size, data, title)

    @classmethod
    def from_cube(cls, cube: np.ndarray, title: str = DEFAULT_TITLE) -> Lut3DGrid:
        """Create grid from a (size, size, size, 3) array indexed [b, g, r].

        Args:
            cube: 4D array in blue-major layout
            title: Display label
        """
        if cube.ndim != 4 or cube.shape[3] != 3:
            raise ValueError(f"LUT cube must have shape (N, N, N, 3), got {cube.shape}")
        if not cube.shape[0] == cube.shape[1] == cube.shape[2]:
            raise ValueError(f"LUT cube must be cubic, got {cube.shape[:3]}")
        return cls(cube.shape[0], cube.reshape(-1, 3), title)

    @property
    def size(self) -> int:
        """Cube dimension N."""
        return self._size

    @property
    def data(self) -> np.ndarray:
        """Read-only (rows, 3) float array in flattening order."""
        return self._data

    @property
    def title(self) -> str:
        """Display label."""
        return self._title

    @property
    def is_complete(self) -> bool:
        """True when the grid holds exactly size^3 rows."""
        return len(self._data) == self._size**3

    def as_cube(self) -> np.ndarray:
        """Return a read-only (size, size, size, 3) view indexed [b, g, r].

        Raises:
            SizeMismatchError: If the grid does not hold size^3 rows
        """
        if not self.is_complete:
            raise SizeMismatchError(
                "Incomplete grid cannot be viewed as a cube",
                expected=self._size**3,
                actual=len(self._data),
            )
        n = self._size
        return self._data.reshape(n, n, n, 3)

    def with_title(self, title: str) -> Lut3DGrid:
        """Return a copy of this grid with a different title."""
        return Lut3DGrid(self._size, self._data, title, strict=self.is_complete)

    def __len__(self) -> int:
        return len(self._data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Lut3DGrid):
            return NotImplemented
        return (
            self._size == other._size
            and self._title == other._title
            and np.array_equal(self._data, other._data)
        )

    def __repr__(self) -> str:
        return (
            f"Lut3DGrid(size={self._size}, rows={len(self._data)}, "
            f"title={self._title!r})"
        )
