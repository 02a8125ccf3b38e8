from __future__ import annotations

from typing import Any

import jax
import jax.numpy as jnp
from jax._src.public_test_util import check_close
from jax.scipy.linalg import expm

from expgram.helpers import JAXArray


def assert_allclose(
    calculated: JAXArray, expected: JAXArray, *args: Any, **kwargs: Any
):
    kwargs["atol"] = kwargs.get(
        "atol",
        {
            "float32": 5e-4,
            "float64": 5e-7,
        },
    )
    kwargs["rtol"] = kwargs.get(
        "rtol",
        {
            "float32": 5e-4,
            "float64": 5e-7,
        },
    )
    check_close(calculated, expected, *args, **kwargs)


def assert_pytrees_allclose(calculated: Any, expected: Any, *args: Any, **kwargs: Any):
    jax.tree_util.tree_map(
        lambda a, b: assert_allclose(a, b, *args, **kwargs), calculated, expected
    )


def reference_exp_and_gram(A: JAXArray, B: JAXArray) -> tuple[JAXArray, JAXArray]:
    """A reference for ``exp(A)`` and the unit interval Gramian

    This uses the block matrix exponential from `Van Loan (1978)
    <https://doi.org/10.1109/TAC.1978.1101743>`_: if ``C = [[-A, B @ B.T],
    [0, A.T]]`` then ``expm(C) = [[F1, F2], [0, F3]]`` with ``F3 = exp(A.T)``
    and ``G = F3.T @ F2``.
    """
    n = A.shape[0]
    C = jnp.block([[-A, B @ B.T], [jnp.zeros_like(A), A.T]])
    F = expm(C)
    F2 = F[:n, n:]
    F3 = F[n:, n:]
    G = F3.T @ F2
    return F3.T, 0.5 * (G + G.T)


def random_stable_system(
    random: Any, n: int, m: int, *, shift: float = 1.5, norm: float | None = None
) -> tuple[JAXArray, JAXArray]:
    """A random system with ``A`` stable for moderate ``shift``

    If ``norm`` is given, ``A`` is rescaled so that ``||A||_1 = norm``.
    """
    A = random.standard_normal((n, n)) / jnp.sqrt(n) - shift * jnp.eye(n)
    if norm is not None:
        A = norm * A / jnp.linalg.norm(A, ord=1)
    B = random.standard_normal((n, m))
    return jnp.asarray(A), jnp.asarray(B)
