from __future__ import annotations

__all__ = ["ExpAndGram"]

from typing import Any

import equinox as eqx
import jax
import jax.numpy as jnp
import numpy as np

from expgram.coeffs import (
    GRAM_COEFFICIENTS,
    NORM_TOLERANCES,
    PADE_NUMERATORS,
    SUPPORTED_ORDERS,
)
from expgram.helpers import JAXArray, OrderError


class ExpAndGram(eqx.Module):
    """A non-adaptive algorithm for the matrix exponential and Gramian

    This describes a fixed order approximation used to compute ``exp(A)`` and
    the controllability Gramian over the unit interval of the system ``(A,
    B)``. It holds only constant data so the same instance can be reused
    across calls, closed over by jitted functions, or passed to
    :func:`equinox.filter_jit` without being traced.

    Args:
        order: The order of the Padé approximation. Must be one of ``3``,
            ``5``, ``7``, ``9``, or ``13``.
        dtype: The floating point type used for the computations. Defaults to
            the default floating point type of ``jax``, which is ``float64``
            only if ``jax_enable_x64`` has been set.
    """

    order: int = eqx.field(static=True)
    dtype: np.dtype = eqx.field(static=True)
    pade_num: tuple[float, ...] = eqx.field(static=True)
    gram_coeffs: tuple[tuple[float, ...], ...] = eqx.field(static=True)
    normtol: float = eqx.field(static=True)

    def __init__(self, order: int = 13, dtype: Any | None = None):
        if isinstance(order, bool) or not isinstance(order, (int, np.integer)):
            raise OrderError(order, f"The order must be an integer, got {order!r}")
        order = int(order)
        if order % 2 == 0:
            raise OrderError(order, f"The order {order} must be odd")
        if order not in SUPPORTED_ORDERS:
            raise OrderError(
                order,
                f"Unsupported order {order}; expected one of {SUPPORTED_ORDERS}",
            )

        if dtype is None:
            dtype = jnp.float64
        dtype = np.dtype(jax.dtypes.canonicalize_dtype(dtype))
        if not jnp.issubdtype(dtype, jnp.floating):
            raise TypeError(f"The dtype must be a real floating type, got {dtype}")

        self.order = order
        self.dtype = dtype
        self.pade_num = PADE_NUMERATORS[order]
        self.gram_coeffs = GRAM_COEFFICIENTS[order]
        self.normtol = NORM_TOLERANCES[order]

    def pade_num_array(self) -> JAXArray:
        """The Padé numerator coefficients as an array"""
        return jnp.asarray(self.pade_num, dtype=self.dtype)

    def gram_coeffs_array(self) -> JAXArray:
        """The Gramian coefficient matrix as an array"""
        return jnp.asarray(self.gram_coeffs, dtype=self.dtype)

    def __call__(self, A: JAXArray, B: JAXArray) -> tuple[JAXArray, JAXArray]:
        """Shorthand for :func:`expgram.exp_and_gram` with this algorithm"""
        from expgram.core import exp_and_gram

        return exp_and_gram(A, B, self)
