"""Shared fixtures for the Quadrature Lab test suite."""
import math

import matplotlib
matplotlib.use("Agg")

import pytest

from quadrature_lab.constants import METHOD_KEYS
from quadrature_lab.data_model import CalculationRequest


class CountingFunction:
    """Integrand wrapper that records how often it was evaluated."""

    def __init__(self, func):
        self.func = func
        self.calls = 0

    def __call__(self, x):
        self.calls += 1
        return self.func(x)


@pytest.fixture
def square():
    return lambda x: x * x


@pytest.fixture
def counting():
    return CountingFunction


@pytest.fixture
def exp_request():
    return CalculationRequest(
        expression="exp(x)",
        lower=0.0,
        upper=1.0,
        intervals=64,
        samples=2000,
        methods=METHOD_KEYS,
        seed=7,
    )


@pytest.fixture
def exp_exact():
    return math.e - 1.0
