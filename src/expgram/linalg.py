from __future__ import annotations

__all__ = ["dims_if_compatible", "triu_to_cholesky", "symmetrize"]

import jax.numpy as jnp

from expgram.helpers import JAXArray, ShapeError


def dims_if_compatible(A: JAXArray, B: JAXArray) -> tuple[int, int]:
    """Check that ``A`` and ``B`` define a linear system and return its sizes

    Only the static shapes are inspected, so this is safe to call on traced
    values and always runs before any arithmetic.

    Args:
        A (n, n): The system matrix.
        B (n, m): The input matrix.

    Returns:
        The state dimension ``n`` and input dimension ``m``.

    Raises:
        ShapeError: If ``A`` is not square or the number of rows of ``B`` is
            not ``n``.
    """
    shape_A = jnp.shape(A)
    shape_B = jnp.shape(B)
    if len(shape_A) != 2 or shape_A[0] != shape_A[1]:
        raise ShapeError(f"A must be a square matrix, got shape {shape_A}")
    if len(shape_B) != 2:
        raise ShapeError(f"B must be a matrix, got shape {shape_B}")
    n, m = shape_B
    if n != shape_A[0]:
        raise ShapeError(
            f"size of A, {shape_A[0]}, incompatible with the size of B, {shape_B}"
        )
    return n, m


def triu_to_cholesky(R: JAXArray) -> JAXArray:
    """Convert the triangular factor of a QR decomposition to a Cholesky factor

    The ``R`` factor of a QR decomposition is only unique up to the sign of
    its rows. This returns the square ``(n, n)`` upper triangular factor with
    a non-negative diagonal: rows past ``n`` are dropped, missing rows are
    filled with zeros, and rows with a negative diagonal are negated. The
    product ``U.T @ U`` is unchanged.

    Args:
        R (r, n): An upper triangular matrix.
    """
    r, n = R.shape
    if r > n:
        R = R[:n]
    elif r < n:
        R = jnp.concatenate((R, jnp.zeros((n - r, n), dtype=R.dtype)), axis=0)
    sign = jnp.where(jnp.diagonal(R) < 0, -1, 1).astype(R.dtype)
    return sign[:, None] * R


def symmetrize(G: JAXArray) -> JAXArray:
    """The symmetric part ``(G + G.T) / 2`` of a square matrix"""
    return 0.5 * (G + G.T)
