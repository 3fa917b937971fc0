"""A naive, iterative PageRank over the osrank network matrix."""

from __future__ import annotations

from fractions import Fraction

import numpy as np

_MAX_ITERATIONS = 100


class NotNormalisedError(ValueError):
    """Raised when a row or column of a matrix does not sum to one."""

    def __init__(self, axis: str, index: int, total) -> None:
        self.axis = axis
        self.index = index
        self.total = total
        super().__init__(
            f"The matrix is not normalised correctly for {axis} {index}. "
            f"Sum was: {float(total)!r}"
        )


def _to_2d(matrix) -> np.ndarray:
    array = np.asarray(matrix)
    if array.ndim != 2:
        raise ValueError(f"expected a 2-dimensional matrix, got {array.ndim} dimension(s)")
    return array


def _within(total, epsilon) -> bool:
    return 1 - epsilon < total < 1 + epsilon


def _row_dot(row: np.ndarray, vector: list[float]) -> float:
    # Only non-zero entries take part, in column order.
    return sum(float(weight) * value for weight, value in zip(row, vector) if weight != 0)


def pagerank_naive_iterative(
    dense, damping_factor: float, outbound_links_factor: float
) -> np.ndarray:
    """Iterate ``rank = d * M @ rank + (1 - d) / n`` until it is stable.

    Starts with every node ranked ``outbound_links_factor`` and stops after
    at most 100 iterations. Returns the ranks as an ``n x 1`` column.
    """
    matrix = _to_2d(dense).astype(np.float64)
    rows, cols = matrix.shape
    if rows != cols:
        raise ValueError(f"expected a square matrix, got {rows}x{cols}")

    teleport = (1.0 - damping_factor) / rows
    rank = [float(outbound_links_factor)] * rows
    for _ in range(_MAX_ITERATIONS):
        updated = [damping_factor * _row_dot(row, rank) + teleport for row in matrix]
        if updated == rank:
            break
        rank = updated
    return np.array(rank, dtype=np.float64).reshape(rows, 1)


def assert_rows_normalised(matrix, epsilon) -> np.ndarray:
    """Check every non-zero row sums to one within ``epsilon``; return the sums."""
    array = _to_2d(matrix)
    sums = array.sum(axis=1)
    for index, total in enumerate(sums):
        if total != 0 and not _within(total, epsilon):
            raise NotNormalisedError("row", index, total)
    return sums


def assert_cols_normalised(dense, epsilon) -> np.ndarray:
    """Check every column sums to one within ``epsilon``; return the sums."""
    array = _to_2d(dense)
    sums = array.sum(axis=0)
    for index, total in enumerate(sums):
        if not _within(total, epsilon):
            raise NotNormalisedError("column", index, total)
    return sums


def pagerank_normalise(matrix, outbound_links_factor) -> np.ndarray:
    """Turn every all-zero column into a uniform distribution.

    Each entry of a column that sums to zero is set to
    ``outbound_links_factor``; other columns are left as they are. The
    input is not modified.
    """
    array = _to_2d(matrix)
    if array.dtype == object or isinstance(outbound_links_factor, Fraction):
        result = np.empty(array.shape, dtype=object)
        for index, value in np.ndenumerate(array):
            result[index] = Fraction(value)
        factor = Fraction(outbound_links_factor)
    else:
        result = array.astype(np.float64)
        factor = float(outbound_links_factor)

    zero_columns = result.sum(axis=0) == 0
    result[:, np.asarray(zero_columns, dtype=bool)] = factor
    return result