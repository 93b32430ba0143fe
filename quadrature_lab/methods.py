"""
Method registry for Quadrature Lab.

Maps method keys to their implementation and metadata so the pipeline,
the convergence analyzer and the GUI can dispatch by name.
"""

from dataclasses import dataclass
from typing import Callable, Dict

from .constants import (
    METHOD_MONTE_CARLO, METHOD_NAMES, METHOD_SIMPSON, METHOD_SIMPSON_38,
    METHOD_TRAPEZOIDAL, MIN_INTERVALS, MIN_SAMPLES,
)
from .data_model import IntegrationResult
from .monte_carlo import RandomSource, monte_carlo
from .quadrature import (
    Integrand, simpson_one_third, simpson_three_eighths, trapezoidal,
)

KIND_INTERVALS = "intervals"
KIND_SAMPLES = "samples"


@dataclass(frozen=True)
class MethodSpec:
    """Static description of one integration method.

    ``theoretical_order`` is the exponent ``p`` in ``error ~ N^-p``
    (0.5 for Monte Carlo's ``1/sqrt(N)``).
    """
    key: str
    name: str
    kind: str
    minimum_count: int
    theoretical_order: float
    func: Callable[..., IntegrationResult]

    @property
    def is_stochastic(self) -> bool:
        return self.kind == KIND_SAMPLES


METHODS: Dict[str, MethodSpec] = {
    METHOD_TRAPEZOIDAL: MethodSpec(
        METHOD_TRAPEZOIDAL, METHOD_NAMES[METHOD_TRAPEZOIDAL],
        KIND_INTERVALS, MIN_INTERVALS, 2.0, trapezoidal,
    ),
    METHOD_SIMPSON: MethodSpec(
        METHOD_SIMPSON, METHOD_NAMES[METHOD_SIMPSON],
        KIND_INTERVALS, MIN_INTERVALS, 4.0, simpson_one_third,
    ),
    METHOD_SIMPSON_38: MethodSpec(
        METHOD_SIMPSON_38, METHOD_NAMES[METHOD_SIMPSON_38],
        KIND_INTERVALS, MIN_INTERVALS, 4.0, simpson_three_eighths,
    ),
    METHOD_MONTE_CARLO: MethodSpec(
        METHOD_MONTE_CARLO, METHOD_NAMES[METHOD_MONTE_CARLO],
        KIND_SAMPLES, MIN_SAMPLES, 0.5, monte_carlo,
    ),
}


def get_method(key: str) -> MethodSpec:
    """Look up a method by key; raises ``ValueError`` if unknown."""
    try:
        return METHODS[key]
    except KeyError:
        raise ValueError(
            f"Unknown integration method {key!r}; "
            f"expected one of {', '.join(METHODS)}"
        ) from None


def run_method(key: str, f: Integrand, a: float, b: float, count: int,
               rng: RandomSource = None) -> IntegrationResult:
    """Run the method *key* with *count* intervals or samples."""
    spec = get_method(key)
    if spec.is_stochastic:
        return spec.func(f, a, b, count, rng=rng)
    return spec.func(f, a, b, count)
