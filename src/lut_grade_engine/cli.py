# SPDX-FileCopyrightText: 2025 Fuse Technical Group
#
# SPDX-License-Identifier: BSD-3-Clause

"""Command-line interface for lut-grade-engine."""

from __future__ import annotations

import functools
import logging
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import click

from . import __version__
from .compositor import blend_grids
from .errors import LutEngineError
from .grading.pipeline import GradingParameters, grade_grid
from .lut.cube_format import (
    SizePolicy,
    load_cube,
    parse_cube_bytes_report,
    save_cube,
)
from .lut.grid import DEFAULT_LUT_SIZE, Lut3DGrid
from .transformer import ImageTransformer

logger = logging.getLogger(__name__)

_INPUT_FILE = click.Path(exists=True, dir_okay=False, path_type=Path)
_OUTPUT_FILE = click.Path(dir_okay=False, writable=True, path_type=Path)


def configure_logging(verbose: bool, info_logging: bool) -> None:
    """Configure root logging from CLI flags."""
    if verbose:
        log_level = logging.DEBUG
    elif info_logging:
        log_level = logging.INFO
    else:
        log_level = logging.WARNING

    logging.basicConfig(
        level=log_level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


def handle_errors(func: Callable[..., None]) -> Callable[..., None]:
    """Report engine and I/O errors on stderr and exit with status 1."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> None:
        try:
            func(*args, **kwargs)
        except (LutEngineError, ValueError, OSError) as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(1)

    return wrapper


def grading_options(func: Callable[..., None]) -> Callable[..., None]:
    """Add the four grading controls as options."""
    for name in ("temperature", "saturation", "contrast", "exposure"):
        func = click.option(
            f"--{name}",
            type=float,
            default=0.0,
            show_default=True,
            help=f"{name.capitalize()} adjustment (-50 to 50, 0 = neutral)",
        )(func)
    return func


def _policy(lenient: bool) -> SizePolicy:
    return SizePolicy.LENIENT if lenient else SizePolicy.STRICT


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose (debug) logging")
@click.option("--info-logging", is_flag=True, help="Enable info-level logging")
@click.version_option(version=__version__)
def main(verbose: bool, info_logging: bool) -> None:
    """LUT Grade Engine - parse, blend, grade and apply 3D .cube LUTs."""
    configure_logging(verbose, info_logging)


@main.command()
@click.argument("output", type=_OUTPUT_FILE)
@click.option("--size", default=DEFAULT_LUT_SIZE, show_default=True, help="Cube size")
@click.option("--title", default="Identity LUT", show_default=True, help="LUT title")
@handle_errors
def identity(output: Path, size: int, title: str) -> None:
    """Write an identity LUT to OUTPUT."""
    save_cube(Lut3DGrid.identity(size, title), output)
    click.echo(f"✅ Wrote {size}x{size}x{size} identity LUT to {output}")


@main.command()
@click.argument("lut_file", type=_INPUT_FILE)
@click.option("--lenient", is_flag=True, help="Accept row counts other than size^3")
@handle_errors
def inspect(lut_file: Path, lenient: bool) -> None:
    """Show information about a .cube file."""
    result = parse_cube_bytes_report(lut_file.read_bytes(), _policy(lenient))
    grid = result.grid

    click.echo(f"Title: {grid.title}")
    click.echo(f"Size: {grid.size}")
    click.echo(f"Rows: {len(grid)} (expected {grid.size**3})")
    click.echo(f"Skipped lines: {result.skipped_lines}")
    if len(grid):
        click.echo(f"Range: [{grid.data.min():.6f}, {grid.data.max():.6f}]")
    if result.size_mismatch:
        click.echo("⚠️  Row count does not match LUT_3D_SIZE")


@main.command()
@click.argument("first", type=_INPUT_FILE)
@click.argument("second", type=_INPUT_FILE)
@click.argument("output", type=_OUTPUT_FILE)
@click.option(
    "--amount",
    type=click.FloatRange(0.0, 1.0),
    default=0.5,
    show_default=True,
    help="Blend factor toward SECOND",
)
@handle_errors
def blend(first: Path, second: Path, output: Path, amount: float) -> None:
    """Blend FIRST toward SECOND and write the result to OUTPUT."""
    grid = blend_grids(load_cube(first), load_cube(second), amount)
    save_cube(grid, output)
    click.echo(f"✅ Wrote '{grid.title}' to {output}")


@main.command()
@click.argument("lut_file", type=_INPUT_FILE)
@click.argument("output", type=_OUTPUT_FILE)
@grading_options
@handle_errors
def grade(
    lut_file: Path,
    output: Path,
    exposure: float,
    contrast: float,
    saturation: float,
    temperature: float,
) -> None:
    """Apply grading controls to every node of a LUT."""
    params = GradingParameters(exposure, contrast, saturation, temperature)
    grid = grade_grid(load_cube(lut_file), params)
    save_cube(grid, output)
    click.echo(f"✅ Wrote graded LUT to {output}")


@main.command("apply-raw")
@click.argument("input_file", type=_INPUT_FILE)
@click.argument("output", type=_OUTPUT_FILE)
@click.option("--width", type=click.IntRange(min=1), required=True, help="Image width")
@click.option("--lut", "lut_file", type=_INPUT_FILE, help="LUT to apply")
@click.option(
    "--intensity",
    type=click.FloatRange(0.0, 1.0),
    default=1.0,
    show_default=True,
    help="LUT blend intensity",
)
@click.option("--workers", type=click.IntRange(min=1), help="Worker threads")
@grading_options
@handle_errors
def apply_raw(
    input_file: Path,
    output: Path,
    width: int,
    lut_file: Path | None,
    intensity: float,
    workers: int | None,
    exposure: float,
    contrast: float,
    saturation: float,
    temperature: float,
) -> None:
    """Transform a raw interleaved RGBA8 file."""
    pixels = bytearray(input_file.read_bytes())
    grid = load_cube(lut_file) if lut_file else None
    params = GradingParameters(exposure, contrast, saturation, temperature)

    ImageTransformer(workers=workers).transform(
        pixels, grid, intensity, params, width=width
    )
    output.write_bytes(pixels)
    click.echo(f"✅ Wrote {len(pixels) // 4} pixels to {output}")


if __name__ == "__main__":
    main()
