# SPDX-FileCopyrightText: 2025 Fuse Technical Group
#
# SPDX-License-Identifier: BSD-3-Clause

"""Tests for CLI module."""

import logging
from unittest.mock import patch

import numpy as np
from click.testing import CliRunner

from lut_grade_engine import __version__
from lut_grade_engine.cli import configure_logging, main
from lut_grade_engine.lut.cube_format import load_cube, save_cube
from lut_grade_engine.lut.grid import Lut3DGrid


class TestCLI:
    """Test cases for CLI functionality."""

    def test_main_help(self) -> None:
        """Test CLI help output."""
        runner = CliRunner()
        result = runner.invoke(main, ["--help"])

        assert result.exit_code == 0
        assert "LUT Grade Engine" in result.output
        assert "--verbose" in result.output
        assert "--info-logging" in result.output
        for command in ("identity", "inspect", "blend", "grade", "apply-raw"):
            assert command in result.output

    def test_main_version(self) -> None:
        """Test CLI version output."""
        runner = CliRunner()
        result = runner.invoke(main, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    @patch("lut_grade_engine.cli.logging.basicConfig")
    def test_verbose_flag(self, mock_basic_config) -> None:
        """Test --verbose selects debug logging."""
        configure_logging(verbose=True, info_logging=False)
        assert mock_basic_config.call_args.kwargs["level"] == logging.DEBUG

    @patch("lut_grade_engine.cli.logging.basicConfig")
    def test_info_logging_flag(self, mock_basic_config) -> None:
        """Test --info-logging selects info logging."""
        configure_logging(verbose=False, info_logging=True)
        assert mock_basic_config.call_args.kwargs["level"] == logging.INFO

    @patch("lut_grade_engine.cli.logging.basicConfig")
    def test_default_logging(self, mock_basic_config) -> None:
        """Test warnings only by default."""
        configure_logging(verbose=False, info_logging=False)
        assert mock_basic_config.call_args.kwargs["level"] == logging.WARNING

    def test_identity_command(self, tmp_path) -> None:
        """Test writing an identity LUT."""
        output = tmp_path / "id.cube"
        runner = CliRunner()
        result = runner.invoke(main, ["identity", str(output), "--size", "5"])

        assert result.exit_code == 0
        grid = load_cube(output)
        assert grid.size == 5
        assert grid.title == "Identity LUT"
        assert np.allclose(grid.data, Lut3DGrid.identity(5).data, atol=1e-6)

    def test_identity_invalid_size(self, tmp_path) -> None:
        """Test invalid size is reported as an error."""
        runner = CliRunner()
        result = runner.invoke(main, ["identity", str(tmp_path / "x.cube"), "--size", "1"])

        assert result.exit_code == 1
        assert "Error: LUT size must be at least 2" in result.output

    def test_inspect_command(self, tmp_path) -> None:
        """Test inspecting a LUT file."""
        path = save_cube(Lut3DGrid.identity(3, title="Dailies"), tmp_path / "d.cube")
        runner = CliRunner()
        result = runner.invoke(main, ["inspect", str(path)])

        assert result.exit_code == 0
        assert "Title: Dailies" in result.output
        assert "Size: 3" in result.output
        assert "Rows: 27 (expected 27)" in result.output
        assert "Skipped lines: 0" in result.output

    def test_inspect_size_mismatch(self, tmp_path) -> None:
        """Test strict inspect fails and lenient inspect warns."""
        path = tmp_path / "short.cube"
        path.write_text("LUT_3D_SIZE 2\n0 0 0\n1 1 1\n")
        runner = CliRunner()

        strict = runner.invoke(main, ["inspect", str(path)])
        assert strict.exit_code == 1
        assert "requires 8 rows, got 2" in strict.output

        lenient = runner.invoke(main, ["inspect", str(path), "--lenient"])
        assert lenient.exit_code == 0
        assert "Rows: 2 (expected 8)" in lenient.output
        assert "does not match LUT_3D_SIZE" in lenient.output

    def test_inspect_invalid_utf8(self, tmp_path) -> None:
        """Test undecodable files are reported as format errors."""
        path = tmp_path / "latin1.cube"
        path.write_bytes('TITLE "Caf\xe9"\nLUT_3D_SIZE 2\n'.encode("latin-1"))
        runner = CliRunner()
        result = runner.invoke(main, ["inspect", str(path)])

        assert result.exit_code == 1
        assert "Error: LUT content is not valid UTF-8" in result.output

    def test_inspect_counts_bad_size_line(self, tmp_path) -> None:
        """Test a bad LUT_3D_SIZE line is reported as skipped, not fatal."""
        path = tmp_path / "bad_size.cube"
        path.write_text("LUT_3D_SIZE 1\nLUT_3D_SIZE 2\n" + "0 0 0\n" * 8)
        runner = CliRunner()
        result = runner.invoke(main, ["inspect", str(path)])

        assert result.exit_code == 0
        assert "Size: 2" in result.output
        assert "Skipped lines: 1" in result.output

    def test_identity_rejects_quoted_title(self, tmp_path) -> None:
        """Test a title that cannot be written to a .cube file."""
        output = tmp_path / "quoted.cube"
        runner = CliRunner()
        result = runner.invoke(main, ["identity", str(output), "--title", 'My "Look"'])

        assert result.exit_code == 1
        assert "Error: LUT title must be one line" in result.output
        assert not output.exists()

    def test_blend_command(self, tmp_path) -> None:
        """Test blending two LUT files."""
        first = save_cube(Lut3DGrid(2, np.zeros((8, 3)), "Black"), tmp_path / "a.cube")
        second = save_cube(Lut3DGrid(2, np.ones((8, 3)), "White"), tmp_path / "b.cube")
        output = tmp_path / "out.cube"

        runner = CliRunner()
        result = runner.invoke(
            main, ["blend", str(first), str(second), str(output), "--amount", "0.25"]
        )

        assert result.exit_code == 0
        grid = load_cube(output)
        assert grid.title == "White (25%)"
        assert np.allclose(grid.data, 0.25)

    def test_blend_size_mismatch(self, tmp_path) -> None:
        """Test blending different sizes fails without writing output."""
        first = save_cube(Lut3DGrid.identity(2), tmp_path / "a.cube")
        second = save_cube(Lut3DGrid.identity(3), tmp_path / "b.cube")
        output = tmp_path / "out.cube"

        runner = CliRunner()
        result = runner.invoke(main, ["blend", str(first), str(second), str(output)])

        assert result.exit_code == 1
        assert "LUT sizes must match" in result.output
        assert not output.exists()

    def test_grade_command(self, tmp_path) -> None:
        """Test grading a LUT file."""
        source = save_cube(Lut3DGrid.identity(3), tmp_path / "id.cube")
        output = tmp_path / "dark.cube"

        runner = CliRunner()
        result = runner.invoke(
            main, ["grade", str(source), str(output), "--exposure", "-50"]
        )

        assert result.exit_code == 0
        grid = load_cube(output)
        assert np.allclose(grid.data, Lut3DGrid.identity(3).data / 2, atol=1e-6)

    def test_apply_raw_command(self, tmp_path) -> None:
        """Test transforming a raw RGBA file."""
        source = tmp_path / "in.rgba"
        source.write_bytes(bytes([255, 255, 255, 255, 0, 0, 0, 10]))
        output = tmp_path / "out.rgba"

        runner = CliRunner()
        result = runner.invoke(
            main,
            ["apply-raw", str(source), str(output), "--width", "2", "--exposure", "-50"],
        )

        assert result.exit_code == 0
        assert output.read_bytes() == bytes([128, 128, 128, 255, 0, 0, 0, 10])

    def test_apply_raw_with_lut(self, tmp_path) -> None:
        """Test transforming a raw RGBA file through a LUT."""
        invert = Lut3DGrid(2, 1.0 - Lut3DGrid.identity(2).data, "Invert")
        lut = save_cube(invert, tmp_path / "invert.cube")
        source = tmp_path / "in.rgba"
        source.write_bytes(bytes([0, 255, 0, 1]))
        output = tmp_path / "out.rgba"

        runner = CliRunner()
        result = runner.invoke(
            main,
            ["apply-raw", str(source), str(output), "--width", "1", "--lut", str(lut)],
        )

        assert result.exit_code == 0
        assert output.read_bytes() == bytes([255, 0, 255, 1])

    def test_apply_raw_bad_width(self, tmp_path) -> None:
        """Test width that does not divide the pixel count."""
        source = tmp_path / "in.rgba"
        source.write_bytes(bytes(12))

        runner = CliRunner()
        result = runner.invoke(
            main, ["apply-raw", str(source), str(tmp_path / "o.rgba"), "--width", "2"]
        )

        assert result.exit_code == 1
        assert "not a multiple of width 2" in result.output
