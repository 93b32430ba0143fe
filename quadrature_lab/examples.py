"""
Built-in example integrands for Quadrature Lab.

Each example has a closed-form integral so the reference value (and
with it every error metric) can be checked by eye.  The GUI lists them
under the Examples menu.
"""

import math
from dataclasses import dataclass
from typing import List

from .constants import METHOD_KEYS
from .data_model import CalculationRequest


@dataclass(frozen=True)
class ExampleIntegral:
    label: str
    expression: str
    lower: float
    upper: float
    exact: float

    def to_request(self, intervals: int = 100, samples: int = 1000,
                   methods=METHOD_KEYS, seed=None) -> CalculationRequest:
        return CalculationRequest(
            expression=self.expression,
            lower=self.lower,
            upper=self.upper,
            intervals=intervals,
            samples=samples,
            methods=tuple(methods),
            seed=seed,
        )


EXAMPLES: List[ExampleIntegral] = [
    ExampleIntegral("Parabola", "x^2", 0.0, 1.0, 1.0 / 3.0),
    ExampleIntegral("Sine half-wave", "sin(x)", 0.0, math.pi, 2.0),
    ExampleIntegral("Exponential", "exp(x)", 0.0, 1.0, math.e - 1.0),
    ExampleIntegral("Reciprocal", "1/x", 1.0, math.e, 1.0),
    ExampleIntegral("Quarter circle", "sqrt(1 - x^2)", 0.0, 1.0,
                    math.pi / 4.0),
    ExampleIntegral("Gaussian", "exp(-x^2)", -2.0, 2.0,
                    math.sqrt(math.pi) * math.erf(2.0)),
    ExampleIntegral("Full sine wave (zero area)", "sin(x)", 0.0,
                    2.0 * math.pi, 0.0),
]

