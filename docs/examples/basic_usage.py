#!/usr/bin/env python3
"""Basic usage examples for lut-grade-engine."""

import numpy as np

from lut_grade_engine import (
    GradingParameters,
    Lut3DGrid,
    blend_grids,
    grade_grid,
    parse_cube,
    sample,
    serialize_cube,
    transform_image,
)


def example_cube_round_trip():
    """Example: Build a LUT, write it as .cube text and read it back."""
    print("=== .cube Round Trip ===")

    # Warm grade baked into a 17^3 LUT
    warm = grade_grid(Lut3DGrid.identity(17), GradingParameters(temperature=25))
    text = serialize_cube(warm.with_title("Warm"))
    print(text.splitlines()[0])
    print(f"Serialized {len(text.splitlines())} lines")

    parsed = parse_cube(text)
    print(f"Parsed: {parsed}")
    print(f"Mid gray maps to {sample(parsed, 0.5, 0.5, 0.5)}")

    return parsed


def example_blend_and_apply(grid):
    """Example: Blend a LUT at 50% and apply it to an RGBA image."""
    print("\n=== Blend and Apply ===")

    half = blend_grids(Lut3DGrid.identity(grid.size), grid, 0.5)
    print(f"Blended LUT: {half.title}")

    # 4x2 gradient image, RGBA8
    width, height = 4, 2
    pixels = np.zeros((height, width, 4), dtype=np.uint8)
    pixels[..., 0] = np.linspace(0, 255, width, dtype=np.uint8)
    pixels[..., 1] = 128
    pixels[..., 2] = 64
    pixels[..., 3] = 255

    transform_image(pixels, half, intensity=1.0, width=width)
    print(f"First row after transform:\n{pixels[0]}")


if __name__ == "__main__":
    lut = example_cube_round_trip()
    example_blend_and_apply(lut)
