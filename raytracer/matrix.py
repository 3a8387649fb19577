"""Dense matrices and the cofactor family.

This module implements general R×C matrices with multiplication,
transposition and the recursive determinant machinery (submatrix, minor,
cofactor, Laplace expansion) that later transforms and inversion build on.
Values live in a read-only float64 numpy array; every operation returns a
new ``Matrix``.
"""

from __future__ import annotations

import logging
from typing import List, Sequence

import numpy as np

from .math_utils import float_equals
from .tuples import Tuple

logger = logging.getLogger(__name__)


class Matrix:
    """Immutable dense matrix of float64 values."""

    __slots__ = ("_values",)

    def __init__(self, values: np.ndarray):
        """Wrap a 2-D array.

        Args:
            values: RxC array with R, C >= 1; it is copied and frozen
        """
        values = np.array(values, dtype=np.float64)
        if values.ndim != 2 or values.shape[0] < 1 or values.shape[1] < 1:
            raise ValueError(f"Expected a non-empty 2-D array, got shape {values.shape}")
        values.setflags(write=False)
        self._values = values

    __hash__ = None

    @classmethod
    def zero(cls, rows: int, cols: int) -> "Matrix":
        """Create a rows x cols matrix of zeros."""
        if rows < 1 or cols < 1:
            raise ValueError(f"Matrix dimensions must be positive, got {rows}x{cols}")
        return cls(np.zeros((rows, cols)))

    @classmethod
    def identity(cls) -> "Matrix":
        """Create the 4x4 identity matrix."""
        return cls(np.eye(4))

    @classmethod
    def from_rows(cls, data: Sequence[Sequence[float]]) -> "Matrix":
        """Build a matrix from literal row data.

        Args:
            data: Sequence of rows, each a sequence of numbers

        Returns:
            Matrix whose shape is inferred from the data

        Raises:
            ValueError: If there are no rows, a row is empty or rows differ in length
        """
        if len(data) == 0:
            raise ValueError("Matrix needs at least one row")

        n_cols = len(data[0])
        for i, row in enumerate(data):
            if len(row) != n_cols:
                raise ValueError(
                    f"Ragged matrix data: row {i} has {len(row)} entries, expected {n_cols}"
                )

        return cls(np.array(data, dtype=np.float64))

    @property
    def rows(self) -> int:
        return self._values.shape[0]

    @property
    def cols(self) -> int:
        return self._values.shape[1]

    @property
    def shape(self) -> tuple[int, int]:
        return self._values.shape

    @property
    def values(self) -> np.ndarray:
        """Read-only view of the underlying array."""
        return self._values

    def value(self, row: int, col: int) -> float:
        """Return the entry at (row, col).

        Raises:
            IndexError: If the position lies outside the matrix
        """
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            raise IndexError(
                f"Position ({row}, {col}) outside {self.rows}x{self.cols} matrix"
            )
        return float(self._values[row, col])

    def __getitem__(self, index: tuple[int, int]) -> float:
        row, col = index
        return self.value(row, col)

    def to_list(self) -> List[List[float]]:
        return self._values.tolist()

    def equals(self, other: "Matrix") -> bool:
        """Approximate equality; matrices of different shapes are never equal."""
        if self.shape != other.shape:
            return False

        for a, b in zip(self._values.flat, other._values.flat):
            if not float_equals(float(a), float(b)):
                return False
        return True

    def multiply(self, other: "Matrix") -> "Matrix":
        """Matrix product ``self x other``.

        Raises:
            ValueError: If ``self.cols`` differs from ``other.rows``
        """
        if self.cols != other.rows:
            raise ValueError(
                f"Cannot multiply {self.rows}x{self.cols} by {other.rows}x{other.cols} matrix"
            )
        return Matrix(self._values @ other._values)

    def multiply_tuple(self, t: Tuple) -> Tuple:
        """Apply the matrix to a tuple treated as a 4x1 column.

        The matrix must have exactly 4 columns. A matrix with fewer than 4
        rows fills only that many leading components; the rest stay 0.

        Raises:
            ValueError: If the matrix does not have 4 columns or has more than 4 rows
        """
        if self.cols != 4:
            raise ValueError(f"Tuple multiplication needs 4 columns, got {self.cols}")
        if self.rows > 4:
            raise ValueError(f"Tuple multiplication needs at most 4 rows, got {self.rows}")

        result = np.zeros(4)
        result[: self.rows] = self._values @ t.to_array()
        return Tuple.from_array(result)

    def transpose(self) -> "Matrix":
        return Matrix(self._values.T)

    def determinant(self) -> float:
        """Determinant by Laplace expansion along the first row.

        The 2x2 case is computed directly; larger matrices sum
        ``value(0, j) * cofactor(0, j)`` over the columns, recursing down to
        2x2 submatrices. The cost grows factorially, which is fine for the
        4x4 transforms this is meant for.

        Raises:
            ValueError: If the matrix is not square
        """
        if self.rows != self.cols:
            raise ValueError(f"Determinant needs a square matrix, got {self.rows}x{self.cols}")

        if self.rows == 1:
            return float(self._values[0, 0])

        if self.rows == 2:
            a, b = self._values[0]
            c, d = self._values[1]
            return float(a * d - b * c)

        det = 0.0
        for col in range(self.cols):
            det += float(self._values[0, col]) * self.cofactor(0, col)

        logger.debug(f"Determinant of {self.rows}x{self.cols} matrix: {det:.6g}")
        return det

    def submatrix(self, row: int, col: int) -> "Matrix":
        """Copy of the matrix with one row and one column removed.

        Raises:
            IndexError: If row or col is out of range
            ValueError: If removing them would leave an empty matrix
        """
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            raise IndexError(
                f"Position ({row}, {col}) outside {self.rows}x{self.cols} matrix"
            )
        if self.rows == 1 or self.cols == 1:
            raise ValueError(f"Cannot take a submatrix of a {self.rows}x{self.cols} matrix")

        reduced = np.delete(np.delete(self._values, row, axis=0), col, axis=1)
        return Matrix(reduced)

    def minor(self, row: int, col: int) -> float:
        """Determinant of ``submatrix(row, col)``."""
        return self.submatrix(row, col).determinant()

    def cofactor(self, row: int, col: int) -> float:
        """Minor at (row, col) with sign ``(-1) ** (row + col)``."""
        minor = self.minor(row, col)
        if (row + col) % 2 == 1:
            return -minor
        return minor

    def __matmul__(self, other):
        if isinstance(other, Matrix):
            return self.multiply(other)
        if isinstance(other, Tuple):
            return self.multiply_tuple(other)
        return NotImplemented

    def __eq__(self, other):
        if isinstance(other, Matrix):
            return self.equals(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"Matrix({self.rows}x{self.cols}, {self.to_list()})"
