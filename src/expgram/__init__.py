r"""
``expgram`` computes the matrix exponential ``exp(A)`` together with the
controllability Gramian over the unit interval,

.. math::

    G = \int_0^1 e^{A\,t}\,B\,B^T\,e^{A^T\,t}\,\mathrm{d}t \quad,

of a linear time-invariant system ``dx/dt = A x + B u``, built on top of `jax
<https://github.com/google/jax>`_. Both quantities come out of a single fused
Padé approximation with scaling and squaring, and the Gramian is available
either as a dense matrix (:func:`exp_and_gram`) or through its right Cholesky
factor (:func:`exp_and_gram_chol`). The approximation order is selected by
constructing an :class:`ExpAndGram` algorithm.
"""

__all__ = [
    "ExpAndGram",
    "ShapeError",
    "OrderError",
    "exp_and_gram",
    "exp_and_gram_chol",
    "exp_and_gram_",
    "exp_and_gram_chol_",
]

__version__ = "0.1.0"
__author__ = "expgram developers"
__email__ = "expgram@users.noreply.github.com"
__uri__ = "https://github.com/expgram/expgram"
__license__ = "BSD"
__description__ = "Fused matrix exponential and finite horizon Gramians in JAX"

from expgram.algorithms import ExpAndGram as ExpAndGram
from expgram.core import (
    exp_and_gram as exp_and_gram,
    exp_and_gram_ as exp_and_gram_,
    exp_and_gram_chol as exp_and_gram_chol,
    exp_and_gram_chol_ as exp_and_gram_chol_,
)
from expgram.helpers import OrderError as OrderError, ShapeError as ShapeError
