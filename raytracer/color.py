"""Linear RGB colors.

Colors reuse tuple storage with w fixed at 0. Channels are not clamped
while colors are combined; ``to_rgb255`` clamps them when an image is
written out.
"""

from __future__ import annotations

from typing import Tuple as PyTuple

import numpy as np

from .tuples import Tuple


class Color:
    """Immutable (r, g, b) color backed by a ``Tuple``."""

    __slots__ = ("_tuple",)

    def __init__(self, r: float, g: float, b: float):
        object.__setattr__(self, "_tuple", Tuple(float(r), float(g), float(b), 0.0))

    def __setattr__(self, name, value):
        raise AttributeError("Color is immutable")

    __hash__ = None

    @classmethod
    def black(cls) -> "Color":
        return cls(0.0, 0.0, 0.0)

    @classmethod
    def _from_tuple(cls, t: Tuple) -> "Color":
        return cls(t.x, t.y, t.z)

    @property
    def r(self) -> float:
        return self._tuple.x

    @property
    def g(self) -> float:
        return self._tuple.y

    @property
    def b(self) -> float:
        return self._tuple.z

    def to_array(self) -> np.ndarray:
        """Return the channels as a float64 array of length 3."""
        return np.array([self.r, self.g, self.b], dtype=np.float64)

    def add(self, other: "Color") -> "Color":
        return Color._from_tuple(self._tuple.add(other._tuple))

    def subtract(self, other: "Color") -> "Color":
        return Color._from_tuple(self._tuple.subtract(other._tuple))

    def scale(self, scalar: float) -> "Color":
        return Color._from_tuple(self._tuple.scale(scalar))

    def multiply(self, other: "Color") -> "Color":
        """Hadamard (Schur) product, used to blend a surface with a light."""
        return Color(self.r * other.r, self.g * other.g, self.b * other.b)

    def equals(self, other: "Color") -> bool:
        return self._tuple.equals(other._tuple)

    def to_rgb255(self) -> PyTuple[int, int, int]:
        """Convert to 8-bit channels for output.

        Each channel is scaled by 255, rounded half away from zero and
        clamped to [0, 255]. A nan channel becomes 0.

        Returns:
            Tuple of (r, g, b) integers
        """
        r, g, b = channels_to_rgb255(self.to_array())
        return int(r), int(g), int(b)

    def __add__(self, other):
        if isinstance(other, Color):
            return self.add(other)
        return NotImplemented

    def __sub__(self, other):
        if isinstance(other, Color):
            return self.subtract(other)
        return NotImplemented

    def __mul__(self, other):
        if isinstance(other, Color):
            return self.multiply(other)
        if isinstance(other, (int, float, np.floating, np.integer)):
            return self.scale(other)
        return NotImplemented

    __rmul__ = __mul__

    def __eq__(self, other):
        if isinstance(other, Color):
            return self.equals(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"Color({self.r:.5f}, {self.g:.5f}, {self.b:.5f})"


def channels_to_rgb255(channels: np.ndarray) -> np.ndarray:
    """Clamp-on-output conversion for an array of float channels.

    Args:
        channels: Array of linear channel values of any shape

    Returns:
        Integer array of the same shape with values in [0, 255]
    """
    scaled = np.nan_to_num(np.asarray(channels, dtype=np.float64) * 255.0, nan=0.0)
    # np.round would round halves to even; channels round half away from zero
    rounded = np.sign(scaled) * np.floor(np.abs(scaled) + 0.5)
    return np.clip(rounded, 0, 255).astype(np.int64)
