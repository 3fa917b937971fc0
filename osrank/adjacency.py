"""Construction of the normalised osrank network adjacency matrix."""

from __future__ import annotations

from fractions import Fraction

import numpy as np

from osrank.hyperparams import HyperParams


def _to_2d(matrix) -> np.ndarray:
    array = np.asarray(matrix)
    if array.ndim != 2:
        raise ValueError(f"expected a 2-dimensional matrix, got {array.ndim} dimension(s)")
    return array


def _is_exact(*matrices: np.ndarray) -> bool:
    return any(m.dtype == object for m in matrices)


def _as_exact(matrix: np.ndarray) -> np.ndarray:
    exact = np.empty(matrix.shape, dtype=object)
    for index, value in np.ndenumerate(matrix):
        exact[index] = Fraction(value)
    return exact


def _coerce(matrix, exact: bool) -> np.ndarray:
    array = _to_2d(matrix)
    return _as_exact(array) if exact else array.astype(np.float64)


def normalise_rows(matrix) -> np.ndarray:
    """Divide every row by its sum; rows summing to zero are left untouched.

    Matrices holding Python objects (e.g. ``Fraction``) are normalised exactly.
    """
    array = _to_2d(matrix)
    exact = array.dtype == object
    sums = array.sum(axis=1)
    divisors = np.array(sums, dtype=object if exact else None)
    one = Fraction(1) if exact else 1
    divisors[divisors == 0] = one
    return array / divisors[:, np.newaxis]


def hadamard_mul(left, right) -> np.ndarray:
    """Element-wise product of two matrices of the same shape."""
    a = _to_2d(left)
    b = _to_2d(right)
    if a.shape != b.shape:
        raise ValueError(f"matrix shapes differ: {a.shape} and {b.shape}")
    return a * b


def new_network_matrix(
    dep_matrix,
    contrib_matrix,
    maintainer_matrix,
    hyperparams: HyperParams | None = None,
) -> np.ndarray:
    """Build the row-normalised network matrix from its three building blocks.

    ``dep_matrix`` is projects x projects, ``contrib_matrix`` and
    ``maintainer_matrix`` are projects x accounts. The result has projects
    first and accounts after them, on both axes.
    """
    params = hyperparams if hyperparams is not None else HyperParams()
    raw = [_to_2d(m) for m in (dep_matrix, contrib_matrix, maintainer_matrix)]
    exact = _is_exact(*raw)
    deps, contribs, maintainers = (_coerce(m, exact) for m in raw)

    def factor(value: Fraction):
        return Fraction(value) if exact else float(value)

    contrib_t_norm = normalise_rows(contribs.T)
    maintainer_t = maintainers.T
    maintainer_norm = normalise_rows(maintainers)

    project_to_project = normalise_rows(deps) * factor(params.depend_factor)
    project_to_account = maintainer_norm * factor(
        params.maintain_factor
    ) + normalise_rows(contribs) * factor(params.contrib_factor)
    account_to_project = hadamard_mul(
        maintainer_t * factor(params.maintain_prime_factor), contrib_t_norm
    ) + contrib_t_norm * factor(params.contrib_prime_factor)

    accounts = contribs.shape[1]
    if exact:
        account_to_account = np.full((accounts, accounts), Fraction(0), dtype=object)
    else:
        account_to_account = np.zeros((accounts, accounts))

    top = np.hstack([project_to_project, project_to_account])
    bottom = np.hstack([account_to_project, account_to_account])
    return normalise_rows(np.vstack([top, bottom]))