"""Homogeneous 4-component tuples.

A ``Tuple`` holds (x, y, z, w). Points carry w=1 and free vectors carry
w=0; any other w is a raw tuple, usually an intermediate result of matrix
multiplication. Tuples are immutable and every operation returns a new one.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator

import numpy as np

from .math_utils import float_equals


@dataclass(frozen=True, eq=False)
class Tuple:
    """Immutable homogeneous (x, y, z, w) value."""

    x: float
    y: float
    z: float
    w: float = 0.0

    # Approximate equality makes hashing meaningless
    __hash__ = None

    @classmethod
    def from_array(cls, values: np.ndarray) -> "Tuple":
        """Build a tuple from the first four entries of an array."""
        return cls(float(values[0]), float(values[1]), float(values[2]), float(values[3]))

    def to_array(self) -> np.ndarray:
        """Return the components as a float64 array of length 4."""
        return np.array([self.x, self.y, self.z, self.w], dtype=np.float64)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z
        yield self.w

    def is_point(self) -> bool:
        return float_equals(self.w, 1.0)

    def is_vector(self) -> bool:
        return float_equals(self.w, 0.0)

    def equals(self, other: "Tuple") -> bool:
        """Component-wise approximate equality over all four components."""
        return (
            float_equals(self.x, other.x)
            and float_equals(self.y, other.y)
            and float_equals(self.z, other.z)
            and float_equals(self.w, other.w)
        )

    def add(self, other: "Tuple") -> "Tuple":
        return Tuple(self.x + other.x, self.y + other.y, self.z + other.z, self.w + other.w)

    def subtract(self, other: "Tuple") -> "Tuple":
        return Tuple(self.x - other.x, self.y - other.y, self.z - other.z, self.w - other.w)

    def negate(self) -> "Tuple":
        return Tuple(-self.x, -self.y, -self.z, -self.w)

    def scale(self, scalar: float) -> "Tuple":
        return Tuple(self.x * scalar, self.y * scalar, self.z * scalar, self.w * scalar)

    def divide(self, scalar: float) -> "Tuple":
        """Divide every component by a scalar.

        Division by zero is not guarded: it produces inf or nan components
        the way IEEE-754 arithmetic does, rather than raising.
        """
        with np.errstate(divide="ignore", invalid="ignore"):
            return Tuple.from_array(self.to_array() / np.float64(scalar))

    def magnitude(self) -> float:
        """Euclidean norm over all four components."""
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z + self.w * self.w)

    def normalize(self) -> "Tuple":
        """Scale to unit length.

        A zero-length tuple yields nan components; callers must check the
        magnitude first if that matters to them.
        """
        return self.divide(self.magnitude())

    def dot(self, other: "Tuple") -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z + self.w * other.w

    def cross(self, other: "Tuple") -> "Tuple":
        """Cross product of the xyz parts; the result is always a vector."""
        return vector(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def __add__(self, other):
        if isinstance(other, Tuple):
            return self.add(other)
        return NotImplemented

    def __sub__(self, other):
        if isinstance(other, Tuple):
            return self.subtract(other)
        return NotImplemented

    def __neg__(self) -> "Tuple":
        return self.negate()

    def __mul__(self, scalar):
        if isinstance(scalar, (int, float, np.floating, np.integer)):
            return self.scale(scalar)
        return NotImplemented

    __rmul__ = __mul__

    def __truediv__(self, scalar):
        if isinstance(scalar, (int, float, np.floating, np.integer)):
            return self.divide(scalar)
        return NotImplemented

    def __eq__(self, other):
        if isinstance(other, Tuple):
            return self.equals(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"Tuple({self.x:.5f}, {self.y:.5f}, {self.z:.5f}, {self.w:.5f})"


def point(x: float, y: float, z: float) -> Tuple:
    """Create a point (w=1)."""
    return Tuple(x, y, z, 1.0)


def vector(x: float, y: float, z: float) -> Tuple:
    """Create a free vector (w=0)."""
    return Tuple(x, y, z, 0.0)
