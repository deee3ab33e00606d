# File: utils/__init__.py
"""Pure Python utilities for KidsGoals.

Submodules:
    - dt_utils: Date/time parsing, interval arithmetic, durations
    - math_utils: Clamping, guarded ratios, multiplier truncation

Usage:
    from . import dt_utils
    from .math_utils import clamp
"""

from . import dt_utils, math_utils

__all__ = ["dt_utils", "math_utils"]
