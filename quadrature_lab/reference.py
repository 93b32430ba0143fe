"""
Reference value and error metrics for Quadrature Lab.

The reference is Simpson's 1/3 rule at a large fixed interval count, a
stand-in for the exact integral rather than a closed form.
"""

import math
import warnings

from .constants import DEFAULT_REFERENCE_INTERVALS
from .data_model import ErrorMetrics, IntegrationResult
from .errors import IntegrationWarning
from .quadrature import Integrand, simpson_one_third


def reference_value(f: Integrand, a: float, b: float,
                    intervals: int = DEFAULT_REFERENCE_INTERVALS) -> float:
    """High-resolution Simpson estimate of the integral of *f*."""
    return simpson_one_third(f, a, b, intervals).value


def compute_error(estimate: float, reference: float) -> ErrorMetrics:
    """Absolute and relative error of *estimate* against *reference*.

    ``relative`` is a percentage of ``|reference|``.  When the reference
    is exactly zero there is nothing to divide by: ``relative`` falls
    back to the absolute error, ``relative_is_absolute`` is set and an
    ``IntegrationWarning`` is emitted.
    """
    absolute = math.fabs(estimate - reference)
    if reference != 0.0:
        return ErrorMetrics(
            absolute=absolute,
            relative=absolute / math.fabs(reference) * 100.0,
            reference_value=reference,
        )
    warnings.warn(
        "Reference value is zero; relative error reported as absolute "
        "error and is not meaningful.",
        IntegrationWarning,
        stacklevel=2,
    )
    return ErrorMetrics(
        absolute=absolute,
        relative=absolute,
        reference_value=reference,
        relative_is_absolute=True,
    )


def attach_error(result: IntegrationResult,
                 reference: float) -> IntegrationResult:
    """Return *result* carrying its error metrics against *reference*."""
    return result.with_error(compute_error(result.value, reference))
