"""
Scaling and squaring for the joint computation of the matrix exponential and
the Gramian. For a scaling exponent ``s``, the kernel is run on ``(A / 2^s, B
/ 2^(s/2))``, which gives ``exp(A h)`` and the Gramian over an interval of
length ``h = 2^-s``, and then the interval is doubled ``s`` times using

.. code-block:: text

    Phi(2h) = Phi(h) @ Phi(h)
    G(2h)   = Phi(h) @ G(h) @ Phi(h).T + G(h)

where the Gramian update is carried out on its right Cholesky factor by
re-triangularizing ``[U @ Phi.T; U]``.
"""

from __future__ import annotations

__all__ = [
    "scaling_exponent",
    "exp_and_gram_double",
    "exp_and_gram_chol",
    "exp_and_gram",
    "exp_and_gram_chol_",
    "exp_and_gram_",
]

import logging
import math

import equinox as eqx
import jax
import jax.numpy as jnp

from expgram.algorithms import ExpAndGram
from expgram.helpers import JAXArray
from expgram.linalg import dims_if_compatible, symmetrize, triu_to_cholesky
from expgram.pade import exp_and_gram_chol_init

logger = logging.getLogger(__name__)


def scaling_exponent(A: JAXArray, method: ExpAndGram) -> JAXArray:
    """The number of doubling rounds required for a system matrix

    This is the larger of the exponent needed to bring ``||A||_1`` below the
    norm tolerance of ``method`` and the exponent needed for the factor of
    the kernel (with ``m * (order + 1)`` columns) to reach full rank after
    doubling. Non-positive values are clamped to zero.

    Args:
        A (n, n): The system matrix.
        method: The algorithm.

    Returns:
        An integer scalar array.
    """
    n = jnp.shape(A)[0]
    q = method.order
    norm = jnp.linalg.norm(A, ord=1)
    s_exp = jnp.log2(norm / method.normtol)
    s_gram = 0 if n <= q + 1 else math.ceil(math.log2((n - 1) / q))
    s = jnp.maximum(s_exp, s_gram)
    return jnp.where(s > 0, jnp.ceil(s), 0).astype(int)


def exp_and_gram_double(
    Phi: JAXArray, U: JAXArray, s: int | JAXArray
) -> tuple[JAXArray, JAXArray]:
    """Double the interval of an exponential and Gramian factor ``s`` times

    Args:
        Phi (n, n): The exponential over an interval of length ``h``.
        U (r, n): An upper triangular factor of the Gramian over the same
            interval, with ``r <= n``.
        s: The number of doubling rounds. This can be a traced value.

    Returns:
        The exponential and the ``(n, n)`` Gramian factor over an interval of
        length ``2^s h``. The factor is triangular but its diagonal signs are
        not normalized.
    """
    n = Phi.shape[0]
    r = U.shape[0]
    if r < n:
        # Rows past the rank of the factor stay zero and don't change U.T @ U
        U = jnp.concatenate((U, jnp.zeros((n - r, n), dtype=U.dtype)), axis=0)

    def step(_, carry):  # type: ignore
        Phi, U = carry
        stacked = jnp.concatenate((U @ Phi.T, U), axis=0)
        U = jnp.linalg.qr(stacked, mode="r")
        return Phi @ Phi, U

    return jax.lax.fori_loop(0, s, step, (Phi, U))


def exp_and_gram_chol(
    A: JAXArray, B: JAXArray, method: ExpAndGram
) -> tuple[JAXArray, JAXArray]:
    """The matrix exponential and the right Cholesky factor of the Gramian

    Computes ``Phi = exp(A)`` and an upper triangular ``U`` with non-negative
    diagonal such that ``U.T @ U`` is the controllability Gramian of ``(A,
    B)`` over the unit interval. The input arrays are not modified.

    Args:
        A (n, n): The system matrix.
        B (n, m): The input matrix.
        method: The algorithm, for example ``ExpAndGram(13)``.

    Returns:
        The exponential with shape ``(n, n)`` and the factor with shape ``(n,
        n)``. Rows of the factor past the rank of the Gramian are zero.

    Raises:
        ShapeError: If ``A`` and ``B`` have incompatible shapes.
    """
    return _exp_and_gram_chol(A, B, method)


def exp_and_gram(
    A: JAXArray, B: JAXArray, method: ExpAndGram
) -> tuple[JAXArray, JAXArray]:
    """The matrix exponential and the Gramian over the unit interval

    This is :func:`exp_and_gram_chol` followed by ``G = U.T @ U``, made exactly
    symmetric. The input arrays are not modified.

    Args:
        A (n, n): The system matrix.
        B (n, m): The input matrix.
        method: The algorithm, for example ``ExpAndGram(13)``.

    Returns:
        The exponential and the Gramian, both with shape ``(n, n)``.
    """
    Phi, U = _exp_and_gram_chol(A, B, method)
    return Phi, symmetrize(U.T @ U)


@eqx.filter_jit(donate="all")
def exp_and_gram_chol_(
    A: JAXArray, B: JAXArray, method: ExpAndGram
) -> tuple[JAXArray, JAXArray]:
    """Like :func:`exp_and_gram_chol`, but consumes the buffers of ``A`` and ``B``

    The device buffers of both ``A`` and ``B`` are donated to the computation
    and can be reused for the outputs, so neither array may be used after
    this call. NumPy inputs are copied to the device first and are therefore
    left untouched. On backends that don't support donation (like the CPU)
    this falls back to allocating new buffers.
    """
    return _exp_and_gram_chol(A, B, method, donated=True)


@eqx.filter_jit(donate="all")
def exp_and_gram_(
    A: JAXArray, B: JAXArray, method: ExpAndGram
) -> tuple[JAXArray, JAXArray]:
    """Like :func:`exp_and_gram`, but consumes the buffers of ``A`` and ``B``

    See :func:`exp_and_gram_chol_` for the details of the buffer donation.
    """
    Phi, U = _exp_and_gram_chol(A, B, method, donated=True)
    return Phi, symmetrize(U.T @ U)


def _exp_and_gram_chol(
    A: JAXArray, B: JAXArray, method: ExpAndGram, *, donated: bool = False
) -> tuple[JAXArray, JAXArray]:
    n, m = dims_if_compatible(A, B)
    for name, x in (("A", A), ("B", B)):
        if jnp.iscomplexobj(x):
            raise TypeError(f"{name} must be real, got dtype {jnp.result_type(x)}")
    logger.debug(
        "exp_and_gram with order=%d, n=%d, m=%d, dtype=%s, donated=%s",
        method.order,
        n,
        m,
        method.dtype,
        donated,
    )

    A = jnp.asarray(A, dtype=method.dtype)
    B = jnp.asarray(B, dtype=method.dtype)

    s = scaling_exponent(A, method)
    scale = jnp.exp2(s).astype(method.dtype)
    A = A / scale
    B = B / jnp.sqrt(scale)

    Phi, U = exp_and_gram_chol_init(A, B, method)
    Phi, U = exp_and_gram_double(Phi, U, s)
    return Phi, triu_to_cholesky(U)
