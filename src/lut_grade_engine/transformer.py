# SPDX-FileCopyrightText: 2025 Fuse Technical Group
#
# SPDX-License-Identifier: BSD-3-Clause

"""Apply a LUT, intensity blend and grading to RGBA8 pixel buffers."""

from __future__ import annotations

import logging
import math
import os
from concurrent.futures import ThreadPoolExecutor
from typing import Any

import numpy as np

from .compositor import blend_array, blend_with_original
from .grading.pipeline import ColorGradingPipeline, GradingParameters
from .lut.grid import Lut3DGrid
from .lut.sampler import sample, sample_array

logger = logging.getLogger(__name__)

CHANNELS = 4


def _to_byte(value: float) -> int:
    # Round half up, matching floor(x * 255 + 0.5) on the array path
    return int(math.floor(value * 255.0 + 0.5))


def pixel_view(buffer: Any) -> np.ndarray:
    """Return a writable (pixels, 4) uint8 view over an RGBA buffer.

    Args:
        buffer: bytearray, writable memoryview or uint8 numpy array

    Raises:
        TypeError: If the buffer is read-only or not 8-bit
        ValueError: If the length is not a multiple of 4
    """
    if isinstance(buffer, np.ndarray):
        if buffer.dtype != np.uint8:
            raise TypeError(f"Pixel buffer must be uint8, got {buffer.dtype}")
        if not buffer.flags.writeable:
            raise TypeError("Pixel buffer is read-only")
        if not buffer.flags.c_contiguous:
            raise ValueError("Pixel buffer must be C-contiguous")
        flat = buffer.reshape(-1)
    else:
        view = memoryview(buffer)
        if view.readonly:
            raise TypeError("Pixel buffer is read-only")
        if view.nbytes == 0:
            return np.zeros((0, CHANNELS), dtype=np.uint8)
        flat = np.frombuffer(view.cast("B"), dtype=np.uint8)

    if flat.size % CHANNELS != 0:
        raise ValueError(
            f"Pixel buffer length {flat.size} is not a multiple of {CHANNELS}"
        )
    return flat.reshape(-1, CHANNELS)


def transform_pixel(
    rgba: tuple[int, int, int, int],
    grid: Lut3DGrid | None,
    intensity: float = 1.0,
    params: GradingParameters | None = None,
) -> tuple[int, int, int, int]:
    """Transform one RGBA8 pixel; alpha is returned unchanged."""
    r, g, b, a = rgba
    color = (r / 255.0, g / 255.0, b / 255.0)

    if grid is not None and len(grid) > 0:
        color = blend_with_original(color, sample(grid, *color), intensity)

    r_out, g_out, b_out = ColorGradingPipeline(params).apply(color)
    return (_to_byte(r_out), _to_byte(g_out), _to_byte(b_out), a)


class ImageTransformer:
    """Drive RGBA8 buffers through sampling, blending and grading.

    Pixels have no cross dependencies, so the buffer is split into
    disjoint chunks (whole scanlines when the width is known) that are
    processed on a thread pool. The grid and parameters are only read.
    """

    DEFAULT_ROWS_PER_TASK = 64
    DEFAULT_CHUNK_PIXELS = 1 << 16

    def __init__(
        self,
        workers: int | None = None,
        rows_per_task: int = DEFAULT_ROWS_PER_TASK,
    ) -> None:
        """Initialize image transformer.

        Args:
            workers: Thread count (default: CPU count; 1 runs inline)
            rows_per_task: Scanlines per chunk when width is given
        """
        if workers is not None and workers < 1:
            raise ValueError("Worker count must be at least 1")
        if rows_per_task < 1:
            raise ValueError("Rows per task must be at least 1")
        self.workers = workers or os.cpu_count() or 1
        self.rows_per_task = rows_per_task

    def _chunks(self, pixel_count: int, width: int | None) -> list[tuple[int, int]]:
        if width is None:
            step = self.DEFAULT_CHUNK_PIXELS
        else:
            if width < 1:
                raise ValueError(f"Invalid image width: {width}")
            if pixel_count % width != 0:
                raise ValueError(
                    f"Pixel count {pixel_count} is not a multiple of width {width}"
                )
            step = width * self.rows_per_task
        return [
            (start, min(start + step, pixel_count))
            for start in range(0, pixel_count, step)
        ]

    @staticmethod
    def _process_chunk(
        pixels: np.ndarray,
        grid: Lut3DGrid | None,
        intensity: float,
        pipeline: ColorGradingPipeline,
    ) -> None:
        rgb = pixels[:, :3].astype(np.float64) / 255.0

        if grid is not None and len(grid) > 0:
            rgb = blend_array(rgb, sample_array(grid, rgb), intensity)

        rgb = pipeline.apply_array(rgb)
        pixels[:, :3] = np.floor(rgb * 255.0 + 0.5).astype(np.uint8)

    def transform(
        self,
        buffer: Any,
        grid: Lut3DGrid | None,
        intensity: float = 1.0,
        params: GradingParameters | None = None,
        *,
        width: int | None = None,
    ) -> None:
        """Transform an RGBA8 buffer in place.

        Args:
            buffer: Writable RGBA8 buffer (alpha is left untouched)
            grid: LUT to apply, or None to only grade
            intensity: LUT blend factor (0-1)
            params: Grading controls (default: neutral)
            width: Image width in pixels, enables scanline partitioning
        """
        pixels = pixel_view(buffer)
        pixel_count = len(pixels)
        if pixel_count == 0:
            return

        pipeline = ColorGradingPipeline(params)
        chunks = self._chunks(pixel_count, width)

        if grid is None or len(grid) == 0:
            logger.debug("No LUT selected, grading only")

        if self.workers == 1 or len(chunks) == 1:
            for start, stop in chunks:
                self._process_chunk(pixels[start:stop], grid, intensity, pipeline)
            return

        logger.debug(
            f"Transforming {pixel_count} pixels in {len(chunks)} chunks "
            f"on {self.workers} threads"
        )
        with ThreadPoolExecutor(max_workers=self.workers) as executor:
            futures = [
                executor.submit(
                    self._process_chunk, pixels[start:stop], grid, intensity, pipeline
                )
                for start, stop in chunks
            ]
            for future in futures:
                future.result()


def transform_image(
    buffer: Any,
    grid: Lut3DGrid | None,
    intensity: float = 1.0,
    params: GradingParameters | None = None,
    *,
    width: int | None = None,
    workers: int | None = None,
) -> None:
    """Transform an RGBA8 buffer in place with a default transformer."""
    ImageTransformer(workers=workers).transform(
        buffer, grid, intensity, params, width=width
    )
