# mypy: ignore-errors

import jax
import jax.numpy as jnp
import numpy as np
import pytest

from expgram import ExpAndGram, OrderError, exp_and_gram
from expgram.coeffs import GRAM_COEFFICIENTS, NORM_TOLERANCES, PADE_NUMERATORS
from expgram.test_utils import assert_allclose, assert_pytrees_allclose


def test_construction(order):
    method = ExpAndGram(order)
    assert method.order == order
    assert method.dtype == np.float64
    assert method.pade_num == PADE_NUMERATORS[order]
    assert method.gram_coeffs == GRAM_COEFFICIENTS[order]
    assert method.normtol == NORM_TOLERANCES[order]


def test_default_order():
    assert ExpAndGram().order == 13


def test_arrays(order):
    method = ExpAndGram(order, dtype=jnp.float32)
    c = method.pade_num_array()
    W = method.gram_coeffs_array()
    assert c.dtype == jnp.float32
    assert c.shape == (order + 1,)
    assert W.dtype == jnp.float32
    assert W.shape == (order + 1, order + 1)


@pytest.mark.parametrize("order", [4, 2, 0, 14])
def test_even_order(order):
    with pytest.raises(OrderError, match="must be odd"):
        ExpAndGram(order)


@pytest.mark.parametrize("order", [1, 11, 15, -3])
def test_unsupported_order(order):
    with pytest.raises(OrderError):
        ExpAndGram(order)


@pytest.mark.parametrize("order", [3.0, "13", None, True])
def test_non_integer_order(order):
    with pytest.raises(OrderError):
        ExpAndGram(order)


def test_order_error_is_value_error():
    with pytest.raises(ValueError):
        ExpAndGram(4)
    try:
        ExpAndGram(4)
    except OrderError as e:
        assert e.order == 4


@pytest.mark.parametrize("dtype", [jnp.int32, jnp.complex128, bool])
def test_invalid_dtype(dtype):
    with pytest.raises(TypeError):
        ExpAndGram(13, dtype=dtype)


def test_equality():
    assert ExpAndGram(7) == ExpAndGram(7)
    assert ExpAndGram(7) != ExpAndGram(9)
    assert ExpAndGram(7) != ExpAndGram(7, dtype=jnp.float32)


def test_not_traced():
    assert jax.tree_util.tree_leaves(ExpAndGram(13)) == []


def test_call(random):
    A = jnp.asarray(random.standard_normal((3, 3)))
    B = jnp.asarray(random.standard_normal((3, 2)))
    method = ExpAndGram(9)
    assert_pytrees_allclose(method(A, B), exp_and_gram(A, B, method))
