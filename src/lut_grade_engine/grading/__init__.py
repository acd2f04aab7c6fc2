# SPDX-FileCopyrightText: 2025 Fuse Technical Group
#
# SPDX-License-Identifier: BSD-3-Clause

"""Parametric color grading module."""

from .pipeline import (
    ColorGradingPipeline,
    GradingParameters,
    apply_grading,
    grade_grid,
)

__all__ = ["ColorGradingPipeline", "GradingParameters", "apply_grading", "grade_grid"]
