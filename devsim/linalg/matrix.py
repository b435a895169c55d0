"""
Dense matrix with Gauss-Jordan elimination.

Every operation returns a new ``Matrix``; inputs are never modified. Row
reduction picks its pivot by scanning down the lead column for the first
non-zero entry, not by largest magnitude, so results stay comparable with
the historical calibration runs.
"""

from typing import List, Sequence, Tuple, Union

import numpy as np

from .errors import DimensionMismatchError, SingularMatrixError


# Entries within this fraction of the largest input magnitude count as zero
# when searching for a pivot.
PIVOT_TOLERANCE = 1e-12

MatrixLike = Union["Matrix", np.ndarray, Sequence[Sequence[float]]]


def _zero_threshold(data: np.ndarray) -> float:
    """Scale-relative zero test: an all-zero matrix gets an exact one."""
    return PIVOT_TOLERANCE * float(np.max(np.abs(data)))


def _row_reduce(data: np.ndarray, tol: float) -> Tuple[np.ndarray, List[int]]:
    """
    Reduce a copy of ``data`` to reduced row echelon form.

    Args:
        data: Array to reduce
        tol: Entries with ``|v| <= tol`` are not accepted as pivots

    Returns:
        Tuple of (reduced array, pivot column of each reduced row)
    """
    out = np.array(data, dtype=float, copy=True)
    height, width = out.shape
    pivots: List[int] = []

    lead = 0
    for r in range(height):
        if width <= lead:
            break

        i = r
        while abs(out[i, lead]) <= tol:
            i += 1
            if i == height:
                i = r
                lead += 1
                if lead == width:
                    return out, pivots

        if i != r:
            out[[i, r]] = out[[r, i]]

        out[r] = out[r] / out[r, lead]
        for i in range(height):
            if i != r:
                out[i] = out[i] - out[i, lead] * out[r]

        pivots.append(lead)
        lead += 1

    return out, pivots


class Matrix:
    """Rectangular matrix of floats with explicit height and width."""

    def __init__(self, rows: MatrixLike):
        if isinstance(rows, Matrix):
            data = rows._data.copy()
        else:
            try:
                data = np.array(rows, dtype=float)
            except ValueError as e:
                raise DimensionMismatchError(f"Matrix needs a rectangular numeric layout: {e}") from e

        if data.ndim != 2 or data.shape[0] == 0 or data.shape[1] == 0:
            raise DimensionMismatchError(
                f"Matrix needs a non-empty 2-D layout, got shape {data.shape}"
            )
        self._data = data

    @classmethod
    def identity(cls, n: int) -> "Matrix":
        return cls(np.eye(n))

    @classmethod
    def column_vector(cls, values: Sequence[float]) -> "Matrix":
        return cls([[v] for v in values])

    @property
    def height(self) -> int:
        return self._data.shape[0]

    @property
    def width(self) -> int:
        return self._data.shape[1]

    @property
    def shape(self) -> Tuple[int, int]:
        return self.height, self.width

    def __getitem__(self, index: Tuple[int, int]) -> float:
        return float(self._data[index])

    def __repr__(self) -> str:
        return f"Matrix({self.to_list()!r})"

    def to_list(self) -> List[List[float]]:
        return self._data.tolist()

    def to_numpy(self) -> np.ndarray:
        return self._data.copy()

    def allclose(self, other: MatrixLike, atol: float = 1e-8) -> bool:
        other = other if isinstance(other, Matrix) else Matrix(other)
        return self.shape == other.shape and bool(
            np.allclose(self._data, other._data, rtol=0.0, atol=atol)
        )

    def transpose(self) -> "Matrix":
        return Matrix(self._data.T)

    def multiply(self, other: "Matrix") -> "Matrix":
        """
        Matrix product ``self @ other``.

        Raises:
            DimensionMismatchError: If ``self.width != other.height``
        """
        if self.width != other.height:
            raise DimensionMismatchError(
                f"Cannot multiply {self.height}x{self.width} by "
                f"{other.height}x{other.width} matrix"
            )
        return Matrix(self._data @ other._data)

    def to_reduced_row_echelon_form(self) -> "Matrix":
        reduced, _ = _row_reduce(self._data, _zero_threshold(self._data))
        return Matrix(reduced)

    def invert(self) -> "Matrix":
        """
        Inverse via Gauss-Jordan elimination on ``[self | I]``.

        Raises:
            SingularMatrixError: If the matrix is not square or a column has
                no non-zero pivot
        """
        if self.height != self.width:
            raise SingularMatrixError(
                f"Cannot invert a non-square {self.height}x{self.width} matrix"
            )

        n = self.height
        augmented = np.hstack([self._data, np.eye(n)])
        # Zero is judged against A alone so the identity block does not set the scale
        reduced, pivots = _row_reduce(augmented, _zero_threshold(self._data))

        if pivots[:n] != list(range(n)):
            raise SingularMatrixError(f"{n}x{n} matrix is singular")

        return Matrix(reduced[:, n:])
