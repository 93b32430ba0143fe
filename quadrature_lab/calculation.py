"""
Calculation pipeline for Quadrature Lab.

One explicit ``CalculationRequest`` in, one self-contained
``CalculationReport`` out.  The pipeline holds no state between calls;
keeping the last report (or a convergence history) is the caller's job.

Order of checks: method set, bounds, counts, expression.  The integrand
is not evaluated until all inputs have been validated.  Any failure
aborts the whole calculation with a single exception.
"""

import datetime
from typing import List

from .constants import (
    DEFAULT_CONVERGENCE_STEPS, MIN_INTERVALS, MIN_SAMPLES,
    MONTE_CARLO_VISUALIZATION_CAP,
)
from .convergence import analyze_convergence
from .data_model import CalculationReport, CalculationRequest, ConvergenceSeries
from .errors import NoMethodSelected
from .expression import compile_expression
from .methods import MethodSpec, get_method, run_method
from .monte_carlo import RandomSource, make_rng
from .quadrature import validate_bounds, validate_count
from .reference import attach_error, reference_value
from .visualization import generate_visualization


def validate_request(request: CalculationRequest) -> List[MethodSpec]:
    """Check everything in *request* that can be checked without ``f``.

    Returns the selected methods (duplicates removed, order kept).

    Raises
    ------
    NoMethodSelected
        ``request.methods`` is empty.
    ValueError
        A method key is unknown.
    InvalidBounds
        ``lower >= upper`` or a bound is not finite.
    InvalidSampleCount
        Intervals below 2 with an interval-based method selected, or
        samples below 10 with Monte Carlo selected.
    """
    if not request.methods:
        raise NoMethodSelected("Select at least one integration method.")
    specs = [get_method(key) for key in dict.fromkeys(request.methods)]
    validate_bounds(request.lower, request.upper)
    if any(not spec.is_stochastic for spec in specs):
        validate_count(request.intervals, MIN_INTERVALS)
    if any(spec.is_stochastic for spec in specs):
        validate_count(request.samples, MIN_SAMPLES, what="samples")
    return specs


def run_calculation(request: CalculationRequest,
                    rng: RandomSource = None) -> CalculationReport:
    """Run every selected method and collect results and geometry.

    Parameters
    ----------
    request : CalculationRequest
    rng : None, int or numpy.random.Generator
        Overrides ``request.seed`` as the Monte Carlo random source.

    Returns
    -------
    CalculationReport
        Results carry error metrics against a Simpson reference at
        ``DEFAULT_REFERENCE_INTERVALS``.  Monte Carlo geometry is capped
        at ``MONTE_CARLO_VISUALIZATION_CAP`` sample points.
    """
    specs = validate_request(request)
    a, b = validate_bounds(request.lower, request.upper)
    f = compile_expression(request.expression, probe=(a + b) / 2.0)

    reference = reference_value(f, a, b)
    generator = make_rng(rng if rng is not None else request.seed)

    results = {}
    visualizations = {}
    for spec in specs:
        if spec.is_stochastic:
            count = request.samples
            viz_count = min(count, MONTE_CARLO_VISUALIZATION_CAP)
        else:
            count = viz_count = request.intervals
        result = run_method(spec.key, f, a, b, count, rng=generator)
        results[spec.key] = attach_error(result, reference)
        visualizations[spec.key] = generate_visualization(
            spec.key, f, a, b, viz_count, rng=generator)

    timestamp = datetime.datetime.now(datetime.timezone.utc).isoformat()
    return CalculationReport(
        request=request,
        reference_value=reference,
        timestamp=timestamp,
        results=results,
        visualizations=visualizations,
    )


def run_convergence(
    request: CalculationRequest,
    method: str,
    steps: int = DEFAULT_CONVERGENCE_STEPS,
    rng: RandomSource = None,
) -> ConvergenceSeries:
    """Convergence series for *method* on the integrand in *request*."""
    get_method(method)
    a, b = validate_bounds(request.lower, request.upper)
    f = compile_expression(request.expression, probe=(a + b) / 2.0)
    return analyze_convergence(
        f, a, b, method, steps,
        rng=rng if rng is not None else request.seed,
    )
