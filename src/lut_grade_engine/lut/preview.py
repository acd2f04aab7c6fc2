"""Color ramps sampled from a grid, for LUT thumbnails."""

from __future__ import annotations

from collections.abc import Sequence

from .grid import Lut3DGrid
from .sampler import sample

RGB8 = tuple[int, int, int]

FALLBACK_GRADIENT = "linear-gradient(90deg, #000, #888, #fff)"
FALLBACK_LUMA_GRADIENT = "linear-gradient(180deg, #1a1a1a, #4a4a4a, #7a7a7a)"


def _to_rgb8(color: tuple[float, float, float]) -> RGB8:
    r, g, b = (int(max(0.0, min(1.0, c)) * 255 + 0.5) for c in color)
    return (r, g, b)


def _ramp(samples: int) -> list[float]:
    if samples < 2:
        raise ValueError("Preview needs at least 2 samples")
    return [i / (samples - 1) for i in range(samples)]


def gradient_colors(grid: Lut3DGrid | None, samples: int = 10) -> list[RGB8]:
    """Sample a red ramp at mid gray green and blue.

    Returns an empty list when there is no grid to sample.
    """
    if grid is None or len(grid) == 0:
        return []
    return [_to_rgb8(sample(grid, t, 0.5, 0.5)) for t in _ramp(samples)]


def luma_colors(grid: Lut3DGrid | None, samples: int = 8) -> list[RGB8]:
    """Sample a neutral ramp from black to white."""
    if grid is None or len(grid) == 0:
        return []
    return [_to_rgb8(sample(grid, t, t, t)) for t in _ramp(samples)]


def css_gradient(
    colors: Sequence[RGB8], angle: int = 90, fallback: str = FALLBACK_GRADIENT
) -> str:
    """Format colors as a CSS linear-gradient, or the fallback if too few."""
    if len(colors) < 2:
        return fallback
    stops = ", ".join(f"rgb({r}, {g}, {b})" for r, g, b in colors)
    return f"linear-gradient({angle}deg, {stops})"


def thumbnail_gradient(grid: Lut3DGrid | None, samples: int = 10) -> str:
    """Horizontal gradient showing how the grid shifts a red ramp."""
    return css_gradient(gradient_colors(grid, samples), 90, FALLBACK_GRADIENT)


def luma_thumbnail_gradient(grid: Lut3DGrid | None, samples: int = 8) -> str:
    """Vertical gradient showing how the grid maps neutral tones."""
    return css_gradient(luma_colors(grid, samples), 180, FALLBACK_LUMA_GRADIENT)
