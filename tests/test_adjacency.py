from fractions import Fraction as F

import numpy as np
import pytest

from osrank.adjacency import hadamard_mul, new_network_matrix, normalise_rows
from osrank.hyperparams import HyperParams


def _exact(rows):
    return np.array([[F(v) for v in row] for row in rows], dtype=object)


def test_normalise_rows_equal_python():
    matrix = np.array([[10.0, 20.0, 30.0], [7.0, 8.0, 9.0], [5.0, 9.0, 4.0]])
    expected = np.array(
        [
            [0.16666666666666666, 0.3333333333333333, 0.5],
            [0.2916666666666667, 0.3333333333333333, 0.375],
            [0.2777777777777778, 0.5, 0.2222222222222222],
        ]
    )
    assert np.array_equal(normalise_rows(matrix), expected)


def test_normalise_rows_keeps_zero_rows():
    result = normalise_rows(np.array([[0.0, 0.0], [1.0, 3.0]]))
    assert result.tolist() == [[0.0, 0.0], [0.25, 0.75]]


def test_normalise_rows_rejects_vectors():
    with pytest.raises(ValueError):
        normalise_rows(np.array([1.0, 2.0]))


def test_hadamard_mul_works():
    matrix = np.array([[8, 4, 1, 0], [4, 0, 8, 5], [2, 4, 6, 5], [2, 2, 2, 5]])
    expected = np.array(
        [[64, 16, 1, 0], [16, 0, 64, 25], [4, 16, 36, 25], [4, 4, 4, 25]]
    )
    result = hadamard_mul(matrix, matrix.copy())
    assert np.array_equal(result, expected)
    assert not np.array_equal(matrix @ matrix, expected)


def test_hadamard_mul_shape_mismatch():
    with pytest.raises(ValueError):
        hadamard_mul(np.ones((2, 3)), np.ones((3, 2)))


@pytest.mark.parametrize("rows,cols", [(1, 1), (3, 5), (7, 2)])
def test_hadamard_mul_is_elementwise(rows, cols):
    rng = np.random.default_rng(rows * 10 + cols)
    a = rng.integers(-50, 50, size=(rows, cols))
    b = rng.integers(-50, 50, size=(rows, cols))
    result = hadamard_mul(a, b)
    assert result.shape == (rows, cols)
    for (r, c), value in np.ndenumerate(result):
        assert value == a[r, c] * b[r, c]


def test_normalise_after_transpose():
    c = _exact([[100, 0, 0], [0, 30, 0], [0, 60, 20]])
    actual = normalise_rows(c.T)
    assert actual.tolist() == [
        [F(1), F(0), F(0)],
        [F(0), F(1, 3), F(2, 3)],
        [F(0), F(0), F(1)],
    ]


def _basic_model():
    d = _exact([[0, 1, 0], [0, 0, 0], [1, 1, 0]])
    c = _exact([[100, 0, 0], [0, 30, 0], [0, 60, 20]])
    m = _exact([[1, 0, 0], [0, 1, 0], [0, 1, 0]])
    return d, c, m


def test_new_network_equal_basic_model():
    d, c, m = _basic_model()
    network = new_network_matrix(d, c, m, HyperParams())
    z, o = F(0), F(1)
    expected = [
        [z, F(4, 7), z, F(3, 7), z, z],
        [z, z, z, z, o, z],
        [F(2, 7), F(2, 7), z, z, F(11, 28), F(1, 28)],
        [o, z, z, z, z, z],
        [z, F(1, 3), F(2, 3), z, z, z],
        [z, z, o, z, z, z],
    ]
    assert network.tolist() == expected


def test_new_network_default_hyperparams():
    d, c, m = _basic_model()
    assert new_network_matrix(d, c, m).tolist() == new_network_matrix(
        d, c, m, HyperParams()
    ).tolist()


def test_new_network_float_matches_exact():
    d, c, m = _basic_model()
    exact = new_network_matrix(d, c, m)
    floats = new_network_matrix(
        d.astype(float), c.astype(float), m.astype(float)
    )
    assert floats.dtype == np.float64
    assert np.allclose(floats, exact.astype(float))


def test_new_network_rows_are_normalised():
    rng = np.random.default_rng(7)
    deps = rng.integers(0, 2, size=(5, 5)).astype(float)
    contribs = rng.integers(0, 100, size=(5, 4)).astype(float)
    maintainers = np.zeros((5, 4))
    network = new_network_matrix(deps, contribs, maintainers)
    assert network.shape == (9, 9)
    for total in network.sum(axis=1):
        assert total == pytest.approx(0.0) or total == pytest.approx(1.0)