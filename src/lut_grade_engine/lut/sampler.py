"""Trilinear sampling of 3D LUT grids."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Any

import numpy as np

if TYPE_CHECKING:
    from .grid import Lut3DGrid

Color = tuple[float, float, float]


def sample(grid: Lut3DGrid | None, r: float, g: float, b: float) -> Color:
    """Sample grid at a normalized color with trilinear interpolation.

    A missing or empty grid passes the color through. Corners whose flat
    index falls outside the stored rows (only possible for a grid parsed
    with a lenient size policy) use the input color instead. The output is
    not clamped.

    Args:
        grid: Grid to sample, or None for no LUT
        r: Red value (0-1)
        g: Green value (0-1)
        b: Blue value (0-1)

    Returns:
        Interpolated (r, g, b)
    """
    if grid is None or len(grid) == 0:
        return (r, g, b)

    size = grid.size
    data = grid.data
    rows = len(data)
    fallback = np.array((r, g, b), dtype=np.float64)

    # Scale input to grid coordinates
    r_scaled = r * (size - 1)
    g_scaled = g * (size - 1)
    b_scaled = b * (size - 1)

    r0 = math.floor(r_scaled)
    g0 = math.floor(g_scaled)
    b0 = math.floor(b_scaled)

    # Clamp at the top edge rather than wrap
    r1 = min(r0 + 1, size - 1)
    g1 = min(g0 + 1, size - 1)
    b1 = min(b0 + 1, size - 1)

    r_frac = r_scaled - r0
    g_frac = g_scaled - g0
    b_frac = b_scaled - b0

    def corner(ri: int, gi: int, bi: int) -> np.ndarray:
        index = ri + gi * size + bi * size * size
        if 0 <= index < rows:
            return data[index]
        return fallback

    c000 = corner(r0, g0, b0)
    c001 = corner(r0, g0, b1)
    c010 = corner(r0, g1, b0)
    c011 = corner(r0, g1, b1)
    c100 = corner(r1, g0, b0)
    c101 = corner(r1, g0, b1)
    c110 = corner(r1, g1, b0)
    c111 = corner(r1, g1, b1)

    # Red axis
    c00 = c000 * (1 - r_frac) + c100 * r_frac
    c01 = c001 * (1 - r_frac) + c101 * r_frac
    c10 = c010 * (1 - r_frac) + c110 * r_frac
    c11 = c011 * (1 - r_frac) + c111 * r_frac

    # Green axis
    c0 = c00 * (1 - g_frac) + c10 * g_frac
    c1 = c01 * (1 - g_frac) + c11 * g_frac

    # Blue axis
    result = c0 * (1 - b_frac) + c1 * b_frac

    return (float(result[0]), float(result[1]), float(result[2]))


def sample_array(grid: Lut3DGrid | None, rgb: Any) -> np.ndarray:
    """Vectorized form of :func:`sample` for arrays of colors.

    Args:
        grid: Grid to sample, or None for no LUT
        rgb: Float array with shape (..., 3), values nominally in [0, 1]

    Returns:
        Float64 array with the same shape as ``rgb``
    """
    colors = np.asarray(rgb, dtype=np.float64)
    if colors.shape[-1:] != (3,):
        raise ValueError(f"Expected (..., 3) color array, got shape {colors.shape}")

    if grid is None or len(grid) == 0:
        return colors.copy()

    original_shape = colors.shape
    flat = colors.reshape(-1, 3)

    size = grid.size
    data = grid.data
    rows = len(data)

    scaled = flat * (size - 1)
    lower = np.floor(scaled).astype(np.int64)
    upper = np.minimum(lower + 1, size - 1)
    frac = scaled - lower

    def corner(ri: np.ndarray, gi: np.ndarray, bi: np.ndarray) -> np.ndarray:
        index = ri + gi * size + bi * size * size
        valid = (index >= 0) & (index < rows)
        values = data[np.clip(index, 0, rows - 1)]
        return np.where(valid[:, np.newaxis], values, flat)

    r0, g0, b0 = lower[:, 0], lower[:, 1], lower[:, 2]
    r1, g1, b1 = upper[:, 0], upper[:, 1], upper[:, 2]
    r_frac, g_frac, b_frac = frac[:, 0:1], frac[:, 1:2], frac[:, 2:3]

    c000 = corner(r0, g0, b0)
    c001 = corner(r0, g0, b1)
    c010 = corner(r0, g1, b0)
    c011 = corner(r0, g1, b1)
    c100 = corner(r1, g0, b0)
    c101 = corner(r1, g0, b1)
    c110 = corner(r1, g1, b0)
    c111 = corner(r1, g1, b1)

    c00 = c000 * (1 - r_frac) + c100 * r_frac
    c01 = c001 * (1 - r_frac) + c101 * r_frac
    c10 = c010 * (1 - r_frac) + c110 * r_frac
    c11 = c011 * (1 - r_frac) + c111 * r_frac

    c0 = c00 * (1 - g_frac) + c10 * g_frac
    c1 = c01 * (1 - g_frac) + c11 * g_frac

    result = c0 * (1 - b_frac) + c1 * b_frac

    return result.reshape(original_shape)  # type: ignore[no-any-return]


class TrilinearSampler:
    """Bind a grid for repeated sampling."""

    def __init__(self, grid: Lut3DGrid | None) -> None:
        """Initialize sampler.

        Args:
            grid: Grid to sample, or None for identity passthrough
        """
        self.grid = grid

    @property
    def is_identity(self) -> bool:
        """True when sampling passes colors through unchanged."""
        return self.grid is None or len(self.grid) == 0

    def __call__(self, r: float, g: float, b: float) -> Color:
        return sample(self.grid, r, g, b)

    def sample_array(self, rgb: Any) -> np.ndarray:
        """Sample an array of colors with shape (..., 3)."""
        return sample_array(self.grid, rgb)
