r"""
The fixed order kernel computes the Padé approximation ``exp(A) ~ den(A)^-1
num(A)`` and, from the same powers of ``A``, a factor ``L`` of the Gramian

.. math::

    G = \int_0^1 e^{A\,t}\,B\,B^T\,e^{A^T\,t}\,\mathrm{d}t
      \approx den(A)^{-1}\,L\,L^T\,den(A)^{-T}

where the ``i``-th block of ``L`` is ``A^(i mod 2) sum_k W[i][2k + i mod 2]
A^(2k) B``. One LU factorization of ``den(A)`` is shared by the numerator and
every block of ``L``, and the right Cholesky factor of ``G`` is read off of
a QR decomposition of ``L^T``. No scaling is applied here, so ``A`` is
expected to already satisfy the norm bound of the algorithm.
"""

from __future__ import annotations

__all__ = ["exp_and_gram_chol_init"]

import logging

import equinox as eqx
import jax.numpy as jnp
from jax.scipy import linalg

from expgram.algorithms import ExpAndGram
from expgram.helpers import JAXArray, OrderError
from expgram.linalg import dims_if_compatible, triu_to_cholesky

logger = logging.getLogger(__name__)


@eqx.filter_jit
def exp_and_gram_chol_init(
    A: JAXArray, B: JAXArray, method: ExpAndGram
) -> tuple[JAXArray, JAXArray]:
    """Compute ``exp(A)`` and a right Cholesky factor of the unit Gramian

    Args:
        A (n, n): The system matrix, already scaled to the accuracy region of
            ``method``.
        B (n, m): The input matrix, scaled consistently with ``A``.
        method: The algorithm defining the approximation order.

    Returns:
        The approximation of ``exp(A)`` with shape ``(n, n)``, and the upper
        triangular factor ``U`` with shape ``(n, n)`` and non-negative
        diagonal, such that ``U.T @ U`` approximates the Gramian.
    """
    n, m = dims_if_compatible(A, B)
    q = method.order
    if q % 2 == 0:
        raise OrderError(q, f"The degree {q} must be odd")
    logger.debug("Tracing the order %d kernel with n=%d and m=%d", q, n, m)

    A = jnp.asarray(A, dtype=method.dtype)
    B = jnp.asarray(B, dtype=method.dtype)
    if q == 13:
        num, den, L = _pade_and_factor_13(A, B, method)
    else:
        num, den, L = _pade_and_factor(A, B, method)

    lu_and_piv = linalg.lu_factor(den)
    expA = linalg.lu_solve(lu_and_piv, num)
    L = linalg.lu_solve(lu_and_piv, L)

    # The triangular factor may have fewer than n rows when m * (q + 1) < n
    R = jnp.linalg.qr(L.T, mode="r")
    return expA, triu_to_cholesky(R)


def _pade_and_factor(
    A: JAXArray, B: JAXArray, method: ExpAndGram
) -> tuple[JAXArray, JAXArray, JAXArray]:
    n = A.shape[0]
    q = method.order
    c = method.pade_num
    W = method.gram_coeffs

    ident = jnp.eye(n, dtype=A.dtype)
    A2 = A @ A
    even = c[0] * ident
    odd = c[1] * ident

    # blocks[i] accumulates the terms of the i-th block of L, before the
    # extra factor of A on the odd blocks
    blocks: list[JAXArray | None] = [None] * (q + 1)
    P = ident
    PB = B
    for k in range((q + 1) // 2):
        if k > 0:
            P = A2 if k == 1 else P @ A2
            PB = P @ B
            even = even + c[2 * k] * P
            odd = odd + c[2 * k + 1] * P

        for i in range(q + 1):
            w = W[i][2 * k + i % 2]
            # Structural zero, see expgram.coeffs.gram_sparsity
            if w == 0:
                continue
            term = w * PB
            blocks[i] = term if blocks[i] is None else blocks[i] + term

    odd = A @ odd
    num = even + odd
    den = even - odd
    L = _assemble(A, blocks)
    return num, den, L


def _pade_and_factor_13(
    A: JAXArray, B: JAXArray, method: ExpAndGram
) -> tuple[JAXArray, JAXArray, JAXArray]:
    n = A.shape[0]
    b = method.pade_num
    W = method.gram_coeffs

    ident = jnp.eye(n, dtype=A.dtype)
    A2 = A @ A
    A4 = A2 @ A2
    A6 = A2 @ A4

    odd = A @ (
        A6 @ (b[13] * A6 + b[11] * A4 + b[9] * A2)
        + b[7] * A6
        + b[5] * A4
        + b[3] * A2
        + b[1] * ident
    )
    even = (
        A6 @ (b[12] * A6 + b[10] * A4 + b[8] * A2)
        + b[6] * A6
        + b[4] * A4
        + b[2] * A2
        + b[0] * ident
    )

    # Every block is a combination of these four products, with degrees above
    # six factored as A6 @ (...)
    basis = (B, A2 @ B, A4 @ B, A6 @ B)

    blocks = []
    for i in range(14):
        parity = i % 2
        low = []
        high = []
        for j in range(i, 14, 2):
            w = W[i][j]
            if w == 0:
                continue
            degree = j - parity
            if degree <= 6:
                low.append(w * basis[degree // 2])
            else:
                high.append(w * basis[(degree - 6) // 2])

        block = sum(low[1:], low[0]) if low else None
        if high:
            top = A6 @ sum(high[1:], high[0])
            block = top if block is None else block + top
        blocks.append(block)

    return even + odd, even - odd, _assemble(A, blocks)


def _assemble(A: JAXArray, blocks: list[JAXArray | None]) -> JAXArray:
    """Stack the even blocks followed by ``A`` times the odd blocks"""
    even = jnp.concatenate(blocks[0::2], axis=1)
    odd = A @ jnp.concatenate(blocks[1::2], axis=1)
    return jnp.concatenate((even, odd), axis=1)
