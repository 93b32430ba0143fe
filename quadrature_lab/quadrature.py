"""
Composite Newton-Cotes rules for Quadrature Lab.

Trapezoidal, Simpson's 1/3 and Simpson's 3/8 rules over ``n`` equal
sub-intervals of ``[a, b]``.  Each rule is a pure function
``(f, a, b, n) -> IntegrationResult``.

Bounds and counts are validated before the integrand is evaluated even
once.  Simpson's rules round the requested interval count *up* to the
nearest valid value and report the adjusted count.

The shared validators live here and are reused by ``monte_carlo`` and
``visualization``.
"""

import math
import time
import warnings
from typing import Callable, Tuple

import numpy as np

from .constants import (
    LARGE_COUNT_WARNING, METHOD_NAMES, METHOD_SIMPSON, METHOD_SIMPSON_38,
    METHOD_TRAPEZOIDAL, MIN_INTERVALS,
)
from .data_model import IntegrationResult
from .errors import (
    IntegrationWarning, InvalidBounds, InvalidExpression, InvalidSampleCount,
)

Integrand = Callable[[float], float]


# ── Validation ───────────────────────────────────────────────────────────

def validate_bounds(a, b) -> Tuple[float, float]:
    """Return ``(a, b)`` as floats, or raise ``InvalidBounds``.

    Both bounds must be finite and ``a < b`` strictly.
    """
    try:
        a = float(a)
        b = float(b)
    except (TypeError, ValueError) as exc:
        raise InvalidBounds(f"Bounds must be numbers: {exc}") from exc
    if not (math.isfinite(a) and math.isfinite(b)):
        raise InvalidBounds(f"Bounds must be finite, got [{a}, {b}]")
    if a >= b:
        raise InvalidBounds(
            f"Lower bound ({a}) must be less than upper bound ({b})")
    return a, b


def validate_count(n, minimum: int, what: str = "intervals") -> int:
    """Return *n* as an ``int`` of at least *minimum*.

    Integral floats (``100.0``) are accepted; anything else that is not
    an integer raises ``InvalidSampleCount``.  Counts above
    ``LARGE_COUNT_WARNING`` only warn: the computation is synchronous
    and cannot be cancelled, so the caller should know.
    """
    if isinstance(n, float) and n.is_integer():
        n = int(n)
    if isinstance(n, bool) or not isinstance(n, (int, np.integer)):
        raise InvalidSampleCount(
            f"Number of {what} must be an integer, got {n!r}")
    n = int(n)
    if n < minimum:
        raise InvalidSampleCount(
            f"Number of {what} must be at least {minimum}, got {n}")
    if n > LARGE_COUNT_WARNING:
        warnings.warn(
            f"{n:,} {what} requested; this will take a long time.",
            IntegrationWarning,
            stacklevel=3,
        )
    return n


def sample(f: Integrand, x: float) -> float:
    """Evaluate *f* at *x*, rejecting non-finite values.

    ``CompiledFunction`` already raises on its own; this guards plain
    Python callables that return ``nan`` or ``inf``.
    """
    y = f(x)
    if not math.isfinite(y):
        raise InvalidExpression(f"Integrand is not finite at x={x!r}")
    return float(y)


# ── Interval-count adjustment ────────────────────────────────────────────

def even_interval_count(n: int) -> int:
    """Round *n* up to the next even number."""
    return n if n % 2 == 0 else n + 1


def multiple_of_three_interval_count(n: int) -> int:
    """Round *n* up to the next multiple of 3."""
    return ((n + 2) // 3) * 3


def _make_result(key: str, value: float, count: int,
                 start: float) -> IntegrationResult:
    elapsed_ms = (time.perf_counter() - start) * 1000.0
    return IntegrationResult(
        method_name=METHOD_NAMES[key],
        value=value,
        sample_count=count,
        elapsed_time_ms=elapsed_ms,
        method_key=key,
    )


# ── Rules ────────────────────────────────────────────────────────────────

def trapezoidal(f: Integrand, a: float, b: float, n: int) -> IntegrationResult:
    """Composite trapezoidal rule, error ``O(h^2)``.

    ``h/2 * (f(a) + f(b) + 2 * sum(f(a + i*h) for i in 1..n-1))``
    """
    a, b = validate_bounds(a, b)
    n = validate_count(n, MIN_INTERVALS)
    start = time.perf_counter()

    h = (b - a) / n
    total = sample(f, a) + sample(f, b)
    for i in range(1, n):
        total += 2.0 * sample(f, a + i * h)

    return _make_result(METHOD_TRAPEZOIDAL, h / 2.0 * total, n, start)


def simpson_one_third(f: Integrand, a: float, b: float,
                      n: int) -> IntegrationResult:
    """Composite Simpson's 1/3 rule, error ``O(h^4)``.

    An odd *n* is rounded up to ``n + 1``; the result reports the
    adjusted count.  Odd interior points weigh 4, even ones 2.
    """
    a, b = validate_bounds(a, b)
    n = even_interval_count(validate_count(n, MIN_INTERVALS))
    start = time.perf_counter()

    h = (b - a) / n
    total = sample(f, a) + sample(f, b)
    for i in range(1, n):
        weight = 4.0 if i % 2 == 1 else 2.0
        total += weight * sample(f, a + i * h)

    return _make_result(METHOD_SIMPSON, h / 3.0 * total, n, start)


def simpson_three_eighths(f: Integrand, a: float, b: float,
                          n: int) -> IntegrationResult:
    """Composite Simpson's 3/8 rule, error ``O(h^4)``.

    *n* is rounded up to a multiple of 3.  Interior points with
    ``i % 3 == 0`` weigh 2, all other interior points 3.
    """
    a, b = validate_bounds(a, b)
    n = multiple_of_three_interval_count(validate_count(n, MIN_INTERVALS))
    start = time.perf_counter()

    h = (b - a) / n
    total = sample(f, a) + sample(f, b)
    for i in range(1, n):
        weight = 2.0 if i % 3 == 0 else 3.0
        total += weight * sample(f, a + i * h)

    return _make_result(METHOD_SIMPSON_38, 3.0 * h / 8.0 * total, n, start)
