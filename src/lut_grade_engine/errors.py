# SPDX-FileCopyrightText: 2025 Fuse Technical Group
#
# SPDX-License-Identifier: BSD-3-Clause

"""Exceptions raised by the LUT engine."""

from __future__ import annotations


class LutEngineError(Exception):
    """Base exception for LUT engine errors."""

    pass


class FormatError(LutEngineError):
    """Exception raised when LUT content cannot be read as .cube text."""

    pass


class SizeMismatchError(LutEngineError, ValueError):
    """Exception raised when a grid's row count or size does not fit."""

    def __init__(self, message: str, expected: int, actual: int) -> None:
        """Initialize size mismatch error.

        Args:
            message: Description of the problem
            expected: Expected size or row count
            actual: Size or row count actually found
        """
        super().__init__(message)
        self.expected = expected
        self.actual = actual
