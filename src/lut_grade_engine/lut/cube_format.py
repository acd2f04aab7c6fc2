"""Reader and writer for the .cube 3D LUT text format."""

from __future__ import annotations

import enum
import logging
import re
from dataclasses import dataclass
from pathlib import Path

from ..errors import FormatError, SizeMismatchError
from .grid import DEFAULT_LUT_SIZE, DEFAULT_TITLE, Lut3DGrid

logger = logging.getLogger(__name__)

_DATA_ROW = re.compile(r"^[\d.]+\s+[\d.]+\s+[\d.]+$")
_TITLE = re.compile(r'^TITLE\s*"?([^"\r]*)"?')
_SIZE_VALUE = re.compile(r"\d+")


class SizePolicy(enum.Enum):
    """How the parser treats a row count that does not match LUT_3D_SIZE."""

    STRICT = "strict"
    LENIENT = "lenient"


@dataclass(frozen=True)
class ParseResult:
    """Parsed grid plus diagnostics about lines that were not used."""

    grid: Lut3DGrid
    skipped_lines: int = 0
    size_mismatch: bool = False


def parse_cube_report(
    text: str, size_policy: SizePolicy = SizePolicy.STRICT
) -> ParseResult:
    """Parse .cube text and report skipped lines.

    Unrecognized lines never abort the parse; they are counted in the
    result instead. That includes a LUT_3D_SIZE line without a usable
    integer of at least 2, which leaves the size unchanged.

    Args:
        text: Raw .cube file content
        size_policy: Treatment of a row count other than size^3

    Returns:
        ParseResult with the grid and diagnostics

    Raises:
        SizeMismatchError: If the row count is wrong and policy is STRICT
    """
    title = DEFAULT_TITLE
    size = DEFAULT_LUT_SIZE
    rows: list[tuple[float, float, float]] = []
    skipped = 0

    for line_number, line in enumerate(text.split("\n"), start=1):
        trimmed = line.strip()

        if not trimmed or trimmed.startswith("#"):
            continue

        if trimmed.startswith("TITLE"):
            match = _TITLE.match(trimmed)
            title = match.group(1).strip() if match and match.group(1) else title
            continue

        if trimmed.startswith("LUT_3D_SIZE"):
            parts = trimmed.split()
            # Leading digits only, so "17.0" and "17abc" read as 17
            match = _SIZE_VALUE.match(parts[1]) if len(parts) > 1 else None
            if match and int(match.group()) >= 2:
                size = int(match.group())
            else:
                logger.warning(
                    f"Ignoring invalid LUT_3D_SIZE on line {line_number}: {trimmed!r}, "
                    f"keeping size {size}"
                )
                skipped += 1
            continue

        if _DATA_ROW.match(trimmed):
            try:
                r, g, b = (float(value) for value in trimmed.split())
            except ValueError:
                # Pattern admits things like "1.2.3" that are not numbers
                logger.debug(f"Skipping malformed data row {line_number}: {trimmed!r}")
                skipped += 1
                continue
            rows.append((r, g, b))
            continue

        logger.debug(f"Skipping unrecognized line {line_number}: {trimmed!r}")
        skipped += 1

    if skipped:
        logger.warning(f"Skipped {skipped} unrecognized line(s) while parsing LUT")

    expected = size**3
    mismatch = len(rows) != expected
    if mismatch:
        if size_policy is SizePolicy.STRICT:
            raise SizeMismatchError(
                f"LUT_3D_SIZE {size} requires {expected} rows, got {len(rows)}",
                expected=expected,
                actual=len(rows),
            )
        logger.warning(
            f"LUT '{title}' declares size {size} ({expected} rows) but has {len(rows)} rows"
        )

    grid = Lut3DGrid(size, rows, title, strict=not mismatch)
    logger.debug(f"Parsed {size}x{size}x{size} LUT '{title}' ({len(rows)} rows)")

    return ParseResult(grid=grid, skipped_lines=skipped, size_mismatch=mismatch)


def parse_cube(text: str, size_policy: SizePolicy = SizePolicy.STRICT) -> Lut3DGrid:
    """Parse .cube text into a grid.

    Args:
        text: Raw .cube file content
        size_policy: Treatment of a row count other than size^3

    Returns:
        Parsed grid
    """
    return parse_cube_report(text, size_policy).grid


def parse_cube_bytes_report(
    content: bytes, size_policy: SizePolicy = SizePolicy.STRICT
) -> ParseResult:
    """Parse UTF-8 encoded .cube content and report skipped lines.

    A leading BOM is tolerated.

    Raises:
        FormatError: If the content is not valid UTF-8
        SizeMismatchError: If the row count is wrong and policy is STRICT
    """
    try:
        text = content.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise FormatError(f"LUT content is not valid UTF-8: {e}") from e
    return parse_cube_report(text, size_policy)


def parse_cube_bytes(
    content: bytes, size_policy: SizePolicy = SizePolicy.STRICT
) -> Lut3DGrid:
    """Parse UTF-8 encoded .cube content (a leading BOM is tolerated)."""
    return parse_cube_bytes_report(content, size_policy).grid


def load_cube(
    path: str | Path, size_policy: SizePolicy = SizePolicy.STRICT
) -> Lut3DGrid:
    """Read and parse a .cube file."""
    path = Path(path)
    logger.info(f"Loading LUT from {path}")
    return parse_cube_bytes(path.read_bytes(), size_policy)


def serialize_cube(grid: Lut3DGrid) -> str:
    """Serialize grid to .cube text.

    Rows are written in storage order (red fastest) with 6 decimal digits.

    Args:
        grid: Grid to serialize

    Returns:
        .cube file content
    """
    lines = [f'TITLE "{grid.title}"', f"LUT_3D_SIZE {grid.size}", ""]
    lines.extend(f"{r:.6f} {g:.6f} {b:.6f}" for r, g, b in grid.data.tolist())
    return "\n".join(lines) + "\n"


def save_cube(grid: Lut3DGrid, path: str | Path) -> Path:
    """Write grid to a .cube file.

    Returns:
        Path that was written
    """
    path = Path(path)
    path.write_text(serialize_cube(grid), encoding="utf-8")
    logger.info(f"Saved {grid.size}x{grid.size}x{grid.size} LUT to {path}")
    return path
