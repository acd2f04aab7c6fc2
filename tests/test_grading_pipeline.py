"""Tests for color grading pipeline."""

import numpy as np
import pytest

from lut_grade_engine.grading.pipeline import (
    ColorGradingPipeline,
    GradingParameters,
    apply_grading,
    grade_grid,
)
from lut_grade_engine.lut.grid import Lut3DGrid


class TestGradingParameters:
    """Test cases for GradingParameters."""

    def test_defaults_are_neutral(self) -> None:
        """Test default parameters are neutral."""
        params = GradingParameters()
        assert params.is_neutral
        assert params.exposure == 0.0

    def test_non_neutral(self) -> None:
        """Test any non-zero control is not neutral."""
        assert not GradingParameters(contrast=1).is_neutral

    def test_frozen(self) -> None:
        """Test parameters are passed by value."""
        params = GradingParameters()
        with pytest.raises(AttributeError):
            params.exposure = 10  # type: ignore[misc]


class TestColorGradingPipeline:
    """Test cases for ColorGradingPipeline class."""

    def test_neutral_only_clamps(self) -> None:
        """Test all-zero parameters leave colors unchanged except clamping."""
        assert apply_grading((0.2, 0.5, 0.8)) == (0.2, 0.5, 0.8)
        assert apply_grading((-0.5, 1.5, 0.3), GradingParameters()) == (0.0, 1.0, 0.3)

    def test_temperature_warm(self) -> None:
        """Test warm temperature raises red and lowers blue."""
        result = apply_grading((0.5, 0.5, 0.5), GradingParameters(temperature=50))
        assert result == pytest.approx((0.6, 0.5, 0.4))

    def test_temperature_cool(self) -> None:
        """Test cool temperature lowers red and raises blue."""
        result = apply_grading((0.5, 0.5, 0.5), GradingParameters(temperature=-25))
        assert result == pytest.approx((0.45, 0.5, 0.55))

    def test_exposure_stops(self) -> None:
        """Test exposure of 50 is one photographic stop."""
        up = apply_grading((0.2, 0.3, 0.4), GradingParameters(exposure=50))
        down = apply_grading((0.2, 0.3, 0.4), GradingParameters(exposure=-50))
        assert up == pytest.approx((0.4, 0.6, 0.8))
        assert down == pytest.approx((0.1, 0.15, 0.2))

    def test_saturation_uses_rec709_luma(self) -> None:
        """Test full desaturation collapses to Rec. 709 luma."""
        color = (0.8, 0.4, 0.1)
        luma = 0.2126 * 0.8 + 0.7152 * 0.4 + 0.0722 * 0.1
        result = apply_grading(color, GradingParameters(saturation=-50))
        assert result == pytest.approx((luma, luma, luma))

    def test_saturation_boost(self) -> None:
        """Test positive saturation pushes channels away from luma."""
        color = (0.6, 0.5, 0.4)
        luma = 0.2126 * 0.6 + 0.7152 * 0.5 + 0.0722 * 0.4
        result = apply_grading(color, GradingParameters(saturation=25))
        expected = tuple(luma + (c - luma) * 1.5 for c in color)
        assert result == pytest.approx(expected)

    def test_contrast_pivots_on_mid_gray(self) -> None:
        """Test contrast keeps 0.5 and scales distance from it."""
        result = apply_grading((0.5, 0.25, 0.75), GradingParameters(contrast=20))
        assert result == pytest.approx((0.5, 0.2, 0.8))

    def test_stage_order(self) -> None:
        """Test temperature runs before exposure and contrast runs last."""
        params = GradingParameters(exposure=50, contrast=100, temperature=50)
        # temperature: (0.3, 0.2, 0.2); exposure x2: (0.6, 0.4, 0.4)
        # contrast x2 about 0.5: (0.7, 0.3, 0.3)
        result = apply_grading((0.2, 0.2, 0.3), params)
        assert result == pytest.approx((0.7, 0.3, 0.3))

    def test_clamps_once_at_end(self) -> None:
        """Test intermediate values outside [0, 1] are not clamped early."""
        # Exposure takes 0.8 to 1.6; contrast -90 brings it back inside
        params = GradingParameters(exposure=50, contrast=-90)
        result = apply_grading((0.8, 0.8, 0.8), params)
        expected = (1.6 - 0.5) * 0.1 + 0.5
        assert result == pytest.approx((expected, expected, expected))

    def test_output_clamped(self) -> None:
        """Test result always lies in [0, 1]."""
        result = apply_grading((0.9, 0.1, 0.5), GradingParameters(exposure=50, contrast=50))
        assert all(0.0 <= value <= 1.0 for value in result)

    def test_array_matches_scalar(self) -> None:
        """Test vectorized pipeline agrees with scalar pipeline."""
        params = GradingParameters(exposure=12, contrast=-30, saturation=20, temperature=8)
        pipeline = ColorGradingPipeline(params)
        colors = np.random.default_rng(11).random((40, 3))

        vectorized = pipeline.apply_array(colors)
        scalar = np.array([pipeline.apply(tuple(color)) for color in colors])

        assert np.allclose(vectorized, scalar, atol=1e-12)

    def test_array_does_not_modify_input(self) -> None:
        """Test vectorized pipeline returns a new array."""
        colors = np.array([[0.5, 0.5, 0.5]])
        ColorGradingPipeline(GradingParameters(temperature=50)).apply_array(colors)
        assert np.array_equal(colors, [[0.5, 0.5, 0.5]])

    def test_callable(self) -> None:
        """Test pipeline can be called like a function."""
        pipeline = ColorGradingPipeline(GradingParameters(exposure=50))
        assert pipeline((0.1, 0.1, 0.1)) == pytest.approx((0.2, 0.2, 0.2))


class TestGradeGrid:
    """Test cases for grading whole grids."""

    def test_grade_grid_returns_new_grid(self) -> None:
        """Test grading produces a new grid and leaves the source alone."""
        source = Lut3DGrid.identity(5)
        graded = grade_grid(source, GradingParameters(exposure=-50))

        assert graded is not source
        assert graded.size == 5
        assert graded.title == source.title
        assert np.allclose(graded.data, source.data / 2)
        assert np.allclose(source.data, Lut3DGrid.identity(5).data)

    def test_grade_grid_uses_canonical_pipeline(self) -> None:
        """Test grid grading matches per-color grading node by node."""
        params = GradingParameters(saturation=30, contrast=15)
        source = Lut3DGrid.identity(3)
        graded = grade_grid(source, params)

        for node, expected in zip(source.data, graded.data):
            assert np.allclose(apply_grading(tuple(node), params), expected)

    def test_neutral_grade_clamps_hdr(self) -> None:
        """Test neutral grading still clamps HDR nodes."""
        source = Lut3DGrid(2, np.full((8, 3), 1.5))
        graded = grade_grid(source)
        assert np.allclose(graded.data, 1.0)
