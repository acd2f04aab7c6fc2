# SPDX-FileCopyrightText: 2025 Fuse Technical Group
#
# SPDX-License-Identifier: BSD-3-Clause

"""3D LUT grid, .cube codec and trilinear sampling."""

from .cube_format import (
    ParseResult,
    SizePolicy,
    load_cube,
    parse_cube,
    parse_cube_bytes,
    parse_cube_bytes_report,
    parse_cube_report,
    save_cube,
    serialize_cube,
)
from .grid import DEFAULT_LUT_SIZE, DEFAULT_TITLE, Lut3DGrid
from .library import LutLibrary
from .sampler import TrilinearSampler, sample, sample_array

__all__ = [
    "DEFAULT_LUT_SIZE",
    "DEFAULT_TITLE",
    "Lut3DGrid",
    "LutLibrary",
    "ParseResult",
    "SizePolicy",
    "TrilinearSampler",
    "load_cube",
    "parse_cube",
    "parse_cube_bytes",
    "parse_cube_bytes_report",
    "parse_cube_report",
    "sample",
    "sample_array",
    "save_cube",
    "serialize_cube",
]
