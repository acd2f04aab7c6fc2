# SPDX-FileCopyrightText: 2025 Fuse Technical Group
#
# SPDX-License-Identifier: BSD-3-Clause

"""Parametric color grading: temperature, exposure, saturation, contrast."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import numpy as np

from ..lut.grid import Lut3DGrid

logger = logging.getLogger(__name__)

Color = tuple[float, float, float]

# Rec. 709 luma weights
LUMA_WEIGHTS = (0.2126, 0.7152, 0.0722)

# Slider units per full step (exposure: one stop, temperature: full shift)
PARAMETER_SCALE = 50.0
TEMPERATURE_SHIFT = 0.1


@dataclass(frozen=True)
class GradingParameters:
    """Grading controls; 0 is neutral, conventional range is -50 to 50."""

    exposure: float = 0.0
    contrast: float = 0.0
    saturation: float = 0.0
    temperature: float = 0.0

    @property
    def is_neutral(self) -> bool:
        """True when every control is at its neutral value."""
        return (
            self.exposure == 0
            and self.contrast == 0
            and self.saturation == 0
            and self.temperature == 0
        )


NEUTRAL = GradingParameters()


def _clamp(value: float) -> float:
    return max(0.0, min(1.0, value))


class ColorGradingPipeline:
    """Apply grading stages in a fixed order, clamping once at the end.

    Stage order is temperature, exposure, saturation, contrast. Each stage
    works on the output of the previous one and is skipped when its control
    is zero. The same definition is used for image pixels and for whole
    LUT grids.
    """

    def __init__(self, params: GradingParameters | None = None) -> None:
        """Initialize grading pipeline.

        Args:
            params: Grading controls (default: neutral)
        """
        self.params = params or NEUTRAL

    def apply(self, color: Color) -> Color:
        """Grade a single color.

        Args:
            color: (r, g, b) values, nominally 0-1

        Returns:
            Graded (r, g, b) clamped to [0, 1]
        """
        r, g, b = color
        p = self.params

        if p.temperature != 0:
            shift = (p.temperature / PARAMETER_SCALE) * TEMPERATURE_SHIFT
            r += shift
            b -= shift

        if p.exposure != 0:
            gain = 2 ** (p.exposure / PARAMETER_SCALE)
            r *= gain
            g *= gain
            b *= gain

        if p.saturation != 0:
            luma = LUMA_WEIGHTS[0] * r + LUMA_WEIGHTS[1] * g + LUMA_WEIGHTS[2] * b
            factor = 1 + p.saturation / PARAMETER_SCALE
            r = luma + (r - luma) * factor
            g = luma + (g - luma) * factor
            b = luma + (b - luma) * factor

        if p.contrast != 0:
            factor = (100 + p.contrast) / 100
            r = (r - 0.5) * factor + 0.5
            g = (g - 0.5) * factor + 0.5
            b = (b - 0.5) * factor + 0.5

        return (_clamp(r), _clamp(g), _clamp(b))

    def apply_array(self, rgb: Any) -> np.ndarray:
        """Grade an array of colors with shape (..., 3).

        Returns:
            New float64 array clamped to [0, 1]
        """
        out = np.array(rgb, dtype=np.float64)
        p = self.params

        if p.temperature != 0:
            shift = (p.temperature / PARAMETER_SCALE) * TEMPERATURE_SHIFT
            out[..., 0] += shift
            out[..., 2] -= shift

        if p.exposure != 0:
            out *= 2 ** (p.exposure / PARAMETER_SCALE)

        if p.saturation != 0:
            luma = (
                LUMA_WEIGHTS[0] * out[..., 0]
                + LUMA_WEIGHTS[1] * out[..., 1]
                + LUMA_WEIGHTS[2] * out[..., 2]
            )
            factor = 1 + p.saturation / PARAMETER_SCALE
            out = luma[..., np.newaxis] + (out - luma[..., np.newaxis]) * factor

        if p.contrast != 0:
            out = (out - 0.5) * ((100 + p.contrast) / 100) + 0.5

        return np.clip(out, 0.0, 1.0)

    def grade_grid(self, grid: Lut3DGrid) -> Lut3DGrid:
        """Grade every node of a grid.

        Args:
            grid: Source grid (left untouched)

        Returns:
            New grid with the same size and title
        """
        if self.params.is_neutral:
            logger.debug(f"Neutral grading on '{grid.title}', clamping only")
        graded = self.apply_array(grid.data)
        return Lut3DGrid(grid.size, graded, grid.title, strict=grid.is_complete)

    def __call__(self, color: Color) -> Color:
        return self.apply(color)


def apply_grading(color: Color, params: GradingParameters | None = None) -> Color:
    """Grade a single color with the canonical pipeline."""
    return ColorGradingPipeline(params).apply(color)


def grade_grid(grid: Lut3DGrid, params: GradingParameters | None = None) -> Lut3DGrid:
    """Return a new grid with grading applied to every node."""
    return ColorGradingPipeline(params).grade_grid(grid)
