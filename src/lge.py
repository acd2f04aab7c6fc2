# SPDX-FileCopyrightText: 2025 Fuse Technical Group
#
# SPDX-License-Identifier: BSD-3-Clause

"""LUT Grade Engine - Short import alias.

This module provides a short import alias for lut_grade_engine.
Users can import as: import lge
"""

# Import everything from the main package
from lut_grade_engine import *  # noqa: F403, F401
