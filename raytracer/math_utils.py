"""Scalar tolerance helpers.

Every approximate equality check in the package goes through
``float_equals``, which accepts two floats as equal when they are within an
absolute epsilon or within a few representable steps (ULPs) of each other.
"""

from __future__ import annotations

import math

import numpy as np

EPSILON = 1e-5
ULPS = 16


def ulp_distance(a: float, b: float) -> int:
    """Number of representable float64 values between ``a`` and ``b``.

    Both values must have the same sign; the distance is taken between
    their IEEE-754 bit patterns.
    """
    bits = np.array([a, b], dtype=np.float64).view(np.int64)
    return abs(int(bits[0]) - int(bits[1]))


def float_equals(a: float, b: float, epsilon: float = EPSILON, ulps: int = ULPS) -> bool:
    """Check whether two scalars are approximately equal.

    Args:
        a: First value
        b: Second value
        epsilon: Absolute tolerance
        ulps: Maximum distance in units in the last place

    Returns:
        True if the values match within either tolerance
    """
    if a == b:
        return True
    if math.isnan(a) or math.isnan(b):
        return False

    if abs(a - b) <= epsilon:
        return True

    # Bit distance is only meaningful between values of the same sign
    if math.copysign(1.0, a) != math.copysign(1.0, b):
        return False
    return ulp_distance(a, b) <= ulps
