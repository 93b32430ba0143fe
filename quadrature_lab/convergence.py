"""
Convergence analysis for Quadrature Lab.

Runs one method at a geometric sequence of counts,
``count_i = 2 ** (i + 2)`` for ``i = 1..steps`` (8, 16, 32, ...), and
records the estimate at each step for log-scale plotting.  Monte Carlo
multiplies each count by ``MONTE_CARLO_CONVERGENCE_SCALE`` to offset its
slower ``1/sqrt(N)`` rate.

Given a reference value, ``observed_order`` fits ``|error| ~ C * N^-p``
by least squares in log-log space and returns ``p``.  Expected values:
2 for the trapezoidal rule, 4 for both Simpson rules, 0.5 for Monte
Carlo.  Like a grid-convergence study, the fit is only meaningful in the
asymptotic range; once the error reaches round-off level the slope
flattens.
"""

import numpy as np
from scipy.stats import linregress

from .constants import (
    CONVERGENCE_BASE_EXPONENT, DEFAULT_CONVERGENCE_STEPS,
    MONTE_CARLO_CONVERGENCE_SCALE,
)
from .data_model import ConvergencePoint, ConvergenceSeries
from .methods import get_method, run_method
from .monte_carlo import RandomSource, make_rng
from .quadrature import Integrand, validate_bounds


def convergence_counts(steps: int, stochastic: bool = False) -> list:
    """Requested counts for each step, before any method adjustment."""
    scale = MONTE_CARLO_CONVERGENCE_SCALE if stochastic else 1
    return [
        scale * 2 ** (i + CONVERGENCE_BASE_EXPONENT)
        for i in range(1, steps + 1)
    ]


def analyze_convergence(
    f: Integrand,
    a: float,
    b: float,
    method: str,
    steps: int = DEFAULT_CONVERGENCE_STEPS,
    rng: RandomSource = None,
) -> ConvergenceSeries:
    """Estimate the integral at ``steps`` geometrically growing counts.

    Parameters
    ----------
    f : callable
        Integrand.
    a, b : float
        Bounds, ``a < b``.
    method : str
        Method key, e.g. ``"simpson"``.
    steps : int
        Number of steps (at least 1).
    rng : None, int or numpy.random.Generator
        Random source for Monte Carlo; one Generator is shared by all
        steps so a seed reproduces the whole series.

    Returns
    -------
    ConvergenceSeries
        One point per step holding the count the method actually used
        (Simpson's 3/8 rounds up to a multiple of 3) and its estimate.
    """
    spec = get_method(method)
    if isinstance(steps, bool) or not isinstance(steps, (int, np.integer)) \
            or steps < 1:
        raise ValueError(f"steps must be a positive integer, got {steps!r}")
    a, b = validate_bounds(a, b)

    generator = make_rng(rng) if spec.is_stochastic else None
    points = []
    for count in convergence_counts(int(steps), spec.is_stochastic):
        result = run_method(spec.key, f, a, b, count, rng=generator)
        points.append(ConvergencePoint(result.sample_count, result.value))

    return ConvergenceSeries(spec.key, spec.name, tuple(points))


def error_series(series: ConvergenceSeries, reference: float) -> np.ndarray:
    """Absolute error of every estimate in *series* against *reference*."""
    return np.abs(series.estimates - reference)


def observed_order(series: ConvergenceSeries, reference: float) -> float:
    """Observed convergence order ``p`` from ``|error| ~ C * N^-p``.

    Points with zero error (exact for this integrand) are dropped.
    Returns NaN when fewer than two usable points remain.
    """
    errors = error_series(series, reference)
    counts = series.counts
    usable = np.isfinite(errors) & (errors > 0.0)
    if np.count_nonzero(usable) < 2:
        return float('nan')
    fit = linregress(np.log(counts[usable]), np.log(errors[usable]))
    return -float(fit.slope)
