"""
Monte Carlo integration for Quadrature Lab.

Estimates ``(b - a) * mean(f(x_i))`` from uniform samples on ``[a, b]``.
The estimator is unbiased with standard error ``O(1/sqrt(N))``; two
unseeded calls with the same inputs give different answers.

Randomness always comes from a ``numpy.random.Generator`` handed in by
the caller (or created per call), never from process-global state, so
concurrent calls draw independently and a seed makes a run exactly
reproducible.
"""

import time
from typing import Optional, Tuple, Union

import numpy as np
from scipy.stats import norm

from .constants import (
    DEFAULT_CONFIDENCE, METHOD_MONTE_CARLO, METHOD_NAMES, MIN_SAMPLES,
)
from .data_model import IntegrationResult
from .quadrature import Integrand, sample, validate_bounds, validate_count

RandomSource = Union[None, int, np.random.Generator]


def make_rng(rng: RandomSource = None) -> np.random.Generator:
    """Return a Generator for *rng* (``None``, a seed, or a Generator).

    An existing Generator is returned unchanged so a caller can thread
    one stream through several calls.
    """
    return np.random.default_rng(rng)


def draw_points(a: float, b: float, samples: int,
                rng: RandomSource = None) -> np.ndarray:
    """Draw *samples* uniform abscissae on ``[a, b]``."""
    return make_rng(rng).uniform(a, b, size=samples)


def monte_carlo(
    f: Integrand,
    a: float,
    b: float,
    samples: int,
    rng: RandomSource = None,
) -> IntegrationResult:
    """Monte Carlo estimate of the integral of *f* over ``[a, b]``.

    Parameters
    ----------
    f : callable
        Integrand ``float -> float``.
    a, b : float
        Bounds, ``a < b``.
    samples : int
        Number of random samples (at least ``MIN_SAMPLES``).
    rng : None, int or numpy.random.Generator
        Random source.  Pass a seed for a reproducible estimate.

    Returns
    -------
    IntegrationResult
        ``standard_error`` holds ``(b - a) * s / sqrt(N)`` with ``s``
        the sample standard deviation of ``f(x_i)``.
    """
    a, b = validate_bounds(a, b)
    samples = validate_count(samples, MIN_SAMPLES, what="samples")
    generator = make_rng(rng)
    start = time.perf_counter()

    xs = generator.uniform(a, b, size=samples)
    ys = np.array([sample(f, x) for x in xs], dtype=float)

    width = b - a
    value = width * float(np.mean(ys))
    std_error = width * float(np.std(ys, ddof=1)) / np.sqrt(samples)

    elapsed_ms = (time.perf_counter() - start) * 1000.0
    return IntegrationResult(
        method_name=METHOD_NAMES[METHOD_MONTE_CARLO],
        value=value,
        sample_count=samples,
        elapsed_time_ms=elapsed_ms,
        method_key=METHOD_MONTE_CARLO,
        standard_error=std_error,
    )


def confidence_interval(
    result: IntegrationResult,
    confidence: float = DEFAULT_CONFIDENCE,
) -> Tuple[float, float]:
    """Normal-approximation confidence interval for a Monte Carlo result.

    Raises ``ValueError`` if *result* has no standard error (i.e. it was
    not produced by ``monte_carlo``) or *confidence* is outside (0, 1).
    """
    if result.standard_error is None:
        raise ValueError(
            f"{result.method_name} result has no standard error")
    if not 0.0 < confidence < 1.0:
        raise ValueError(
            f"confidence must be in (0, 1), got {confidence}")
    z = float(norm.ppf(0.5 + confidence / 2.0))
    half_width = z * result.standard_error
    return result.value - half_width, result.value + half_width
