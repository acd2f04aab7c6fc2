# SPDX-FileCopyrightText: 2025 Fuse Technical Group
#
# SPDX-License-Identifier: BSD-3-Clause

"""Blending of colors and LUT grids."""

from __future__ import annotations

import logging
from typing import Any

import numpy as np

from .errors import SizeMismatchError
from .lut.grid import DEFAULT_LUT_SIZE, Lut3DGrid

logger = logging.getLogger(__name__)

Color = tuple[float, float, float]


def _lerp(a: Any, b: Any, t: float) -> Any:
    # Weighted form is exact at t=0 and t=1, unlike a + (b - a) * t
    return a * (1 - t) + b * t


def blend_with_original(original: Color, sampled: Color, intensity: float) -> Color:
    """Blend a LUT-sampled color toward the original by intensity.

    Args:
        original: Input color
        sampled: Color returned by the LUT
        intensity: 0 keeps the original, 1 gives the sampled color

    Returns:
        Blended (r, g, b)
    """
    return (
        _lerp(original[0], sampled[0], intensity),
        _lerp(original[1], sampled[1], intensity),
        _lerp(original[2], sampled[2], intensity),
    )


def blend_array(original: Any, sampled: Any, intensity: float) -> np.ndarray:
    """Vectorized :func:`blend_with_original` for (..., 3) arrays."""
    original = np.asarray(original, dtype=np.float64)
    sampled = np.asarray(sampled, dtype=np.float64)
    return _lerp(original, sampled, intensity)  # type: ignore[no-any-return]


def blend_grids(a: Lut3DGrid, b: Lut3DGrid, t: float) -> Lut3DGrid:
    """Blend two grids node by node.

    Args:
        a: Grid returned at t=0 (typically identity)
        b: Grid returned at t=1 (typically the creative grade)
        t: Blend factor (0-1)

    Returns:
        New grid titled after ``b`` with the blend percentage

    Raises:
        SizeMismatchError: If the grids differ in size or are incomplete
    """
    if a.size != b.size:
        raise SizeMismatchError(
            f"LUT sizes must match: {a.size} != {b.size}",
            expected=a.size,
            actual=b.size,
        )
    for grid in (a, b):
        if not grid.is_complete:
            raise SizeMismatchError(
                f"LUT '{grid.title}' has {len(grid)} rows, expected {grid.size**3}",
                expected=grid.size**3,
                actual=len(grid),
            )

    data = blend_array(a.data, b.data, t)
    title = f"{b.title} ({round(t * 100)}%)"
    logger.debug(f"Blended '{a.title}' and '{b.title}' at {t:.3f}")

    return Lut3DGrid(a.size, data, title)


def identity_grid(size: int = DEFAULT_LUT_SIZE) -> Lut3DGrid:
    """Create an identity grid of the given size."""
    return Lut3DGrid.identity(size)


def apply_intensity(grid: Lut3DGrid, intensity: float) -> Lut3DGrid:
    """Bake an intensity into a grid by blending it with identity.

    Args:
        grid: Creative grid
        intensity: 0 yields identity, 1 yields ``grid``
    """
    return blend_grids(identity_grid(grid.size), grid, intensity)
