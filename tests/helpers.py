"""
Shared floating-point assertion helpers.
"""

from __future__ import annotations

from scalar_kalman.config import FLOAT_TOLERANCE

ZERO_THRESHOLD = 1.0e-12
EQUALITY_THRESHOLD = FLOAT_TOLERANCE


def is_floating_point_zero(x: float) -> bool:
    return abs(x) < ZERO_THRESHOLD


def are_close_enough(first: float, second: float, epsilon: float = EQUALITY_THRESHOLD) -> bool:
    """Relative comparison that also accepts two values that are both ~0."""
    diff = abs(first - second)
    return is_floating_point_zero(diff) or not diff > epsilon * max(abs(first), abs(second))


def is_periodic_approx(
    value: float,
    expected: float,
    lower_value: float,
    period: float,
    tolerance: float = EQUALITY_THRESHOLD,
) -> bool:
    """
    Compare two wrapped values, treating the lower end of the range as equal
    to the upper end.
    """
    if are_close_enough(value, lower_value, tolerance):
        value += period
    if are_close_enough(expected, lower_value, tolerance):
        expected += period
    return are_close_enough(value, expected, tolerance)
