# SPDX-FileCopyrightText: 2025 Fuse Technical Group
#
# SPDX-License-Identifier: BSD-3-Clause

"""LUT Grade Engine - 3D LUT parsing, sampling and color grading.

A Python package for reading and writing .cube LUTs, sampling them with
trilinear interpolation and applying them, together with exposure,
contrast, saturation and temperature controls, to RGBA pixel buffers.

Simple usage:
    import lge
    grid = lge.parse_cube(text)
    lge.transform_image(pixels, grid, intensity=0.8, width=1920)
"""

__version__ = "0.1.0"
__author__ = "Fuse Technical Group"

from .compositor import apply_intensity, blend_grids, blend_with_original, identity_grid
from .errors import FormatError, LutEngineError, SizeMismatchError
from .grading import ColorGradingPipeline, GradingParameters, apply_grading, grade_grid
from .lut import (
    Lut3DGrid,
    LutLibrary,
    SizePolicy,
    TrilinearSampler,
    load_cube,
    parse_cube,
    parse_cube_report,
    sample,
    save_cube,
    serialize_cube,
)
from .transformer import ImageTransformer, transform_image

__all__ = [
    "ColorGradingPipeline",
    "FormatError",
    "GradingParameters",
    "ImageTransformer",
    "Lut3DGrid",
    "LutEngineError",
    "LutLibrary",
    "SizeMismatchError",
    "SizePolicy",
    "TrilinearSampler",
    "apply_grading",
    "apply_intensity",
    "blend_grids",
    "blend_with_original",
    "grade_grid",
    "identity_grid",
    "load_cube",
    "parse_cube",
    "parse_cube_report",
    "sample",
    "save_cube",
    "serialize_cube",
    "transform_image",
]
