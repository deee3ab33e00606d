# File: utils/math_utils.py
"""Math and calculation utilities for KidsGoals.

Pure Python math functions shared by the engines.

Functions:
    - clamp: Bound a value to a closed range
    - calculate_ratio: Guarded progress ratio (0.0 when target <= 0)
    - apply_multiplier_truncated: Integer points after a multiplier
    - round_down_to_step: Floor an integer to a multiple of a step
"""

from __future__ import annotations

import math


def clamp(value: float, min_val: float, max_val: float) -> float:
    """Clamp a value between minimum and maximum bounds.

    Examples:
        clamp(1.5, 0, 1) → 1
        clamp(-0.2, 0, 1) → 0
        clamp(0.5, 0, 1) → 0.5
    """
    return max(min_val, min(value, max_val))


def calculate_ratio(current: float, target: float) -> float:
    """Calculate a 0.0-1.0 progress ratio with division-by-zero protection.

    Examples:
        calculate_ratio(5, 10) → 0.5
        calculate_ratio(12, 10) → 1.0
        calculate_ratio(5, 0) → 0.0
    """
    if target <= 0:
        return 0.0
    return float(clamp(current / target, 0.0, 1.0))


def apply_multiplier_truncated(base: int, multiplier: float) -> int:
    """Apply a multiplier and truncate toward zero.

    Examples:
        apply_multiplier_truncated(12, 1.0) → 12
        apply_multiplier_truncated(7, 0.5) → 3
        apply_multiplier_truncated(7, 0.25) → 1
    """
    return math.trunc(base * multiplier)


def round_down_to_step(value: int, step: int) -> int:
    """Floor a non-negative integer to a multiple of `step`.

    Examples:
        round_down_to_step(7, 5) → 5
        round_down_to_step(10, 5) → 10
        round_down_to_step(4, 5) → 0
    """
    return (value // step) * step
