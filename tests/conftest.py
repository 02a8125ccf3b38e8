# -*- coding: utf-8 -*-
# mypy: ignore-errors

import jax
import pytest
from numpy import random as np_random

jax.config.update("jax_enable_x64", True)


@pytest.fixture
def random():
    return np_random.default_rng(84930)


@pytest.fixture(params=[3, 5, 7, 9, 13])
def order(request):
    return request.param
