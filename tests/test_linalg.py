# mypy: ignore-errors

import jax.numpy as jnp
import numpy as np
import pytest

from expgram import ShapeError
from expgram.linalg import dims_if_compatible, symmetrize, triu_to_cholesky
from expgram.test_utils import assert_allclose


def test_dims(random):
    A = random.standard_normal((4, 4))
    B = random.standard_normal((4, 3))
    assert dims_if_compatible(A, B) == (4, 3)
    assert dims_if_compatible(jnp.asarray(A), jnp.asarray(B[:, :1])) == (4, 1)


@pytest.mark.parametrize(
    "shape_A,shape_B",
    [
        ((3, 3), (4, 2)),
        ((3, 4), (3, 2)),
        ((4, 3), (4, 2)),
        ((3,), (3, 2)),
        ((3, 3), (3,)),
        ((2, 3, 3), (3, 2)),
    ],
)
def test_dims_mismatch(shape_A, shape_B):
    with pytest.raises(ShapeError):
        dims_if_compatible(jnp.zeros(shape_A), jnp.zeros(shape_B))


def test_dims_mismatch_message():
    with pytest.raises(ShapeError, match="size of A, 3"):
        dims_if_compatible(jnp.zeros((3, 3)), jnp.zeros((4, 2)))


def test_triu_to_cholesky(random):
    M = random.standard_normal((7, 4))
    R = jnp.linalg.qr(M, mode="r")
    U = triu_to_cholesky(R)
    assert U.shape == (4, 4)
    assert np.all(np.diag(U) >= 0)
    assert_allclose(U, jnp.triu(U))
    assert_allclose(U.T @ U, M.T @ M)
    assert_allclose(U, jnp.linalg.cholesky(M.T @ M).T)


def test_triu_to_cholesky_flips_rows():
    R = jnp.array([[-2.0, 1.0, 3.0], [0.0, 1.5, -1.0], [0.0, 0.0, -0.5]])
    U = triu_to_cholesky(R)
    expect = jnp.array([[2.0, -1.0, -3.0], [0.0, 1.5, -1.0], [0.0, 0.0, 0.5]])
    np.testing.assert_array_equal(U, expect)


def test_triu_to_cholesky_wide(random):
    M = random.standard_normal((2, 5))
    R = jnp.linalg.qr(M, mode="r")
    assert R.shape == (2, 5)
    U = triu_to_cholesky(R)
    assert U.shape == (5, 5)
    np.testing.assert_array_equal(U[2:], 0.0)
    assert np.all(np.diag(U) >= 0)
    assert_allclose(U.T @ U, M.T @ M)


def test_triu_to_cholesky_tall():
    R = jnp.concatenate((jnp.triu(jnp.ones((3, 3))), jnp.ones((2, 3))))
    U = triu_to_cholesky(R)
    np.testing.assert_array_equal(U, jnp.triu(jnp.ones((3, 3))))


def test_triu_to_cholesky_idempotent(random):
    R = jnp.linalg.qr(random.standard_normal((6, 6)), mode="r")
    U = triu_to_cholesky(R)
    np.testing.assert_array_equal(triu_to_cholesky(U), U)


def test_symmetrize(random):
    G = jnp.asarray(random.standard_normal((5, 5)))
    S = symmetrize(G)
    np.testing.assert_array_equal(S, S.T)
    assert_allclose(S, 0.5 * (G + G.T))
