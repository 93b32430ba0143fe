"""
Visualization data for Quadrature Lab.

Produces the geometry a renderer draws for each method: samples of the
integrand curve and one area descriptor per segment.  Nothing here
draws; see ``chart_method`` for the matplotlib renderer.

- Trapezoidal: one ``AreaSegment`` per sub-interval, height the mean of
  the two endpoint values.
- Simpson's 1/3: one segment per pair of sub-intervals (quadratic arc),
  height ``(y1 + 4*ym + y2) / 6``.
- Simpson's 3/8: one segment per triple of sub-intervals (cubic arc),
  height ``(y1 + 3*ym1 + 3*ym2 + y2) / 8``.
- Monte Carlo: one ``SamplePoint`` per random sample.  The curve uses a
  fixed resolution since the samples themselves are scattered.
"""

import numpy as np

from .constants import (
    METHOD_MONTE_CARLO, METHOD_SIMPSON, METHOD_SIMPSON_38,
    METHOD_TRAPEZOIDAL, MIN_INTERVALS, MIN_SAMPLES, MONTE_CARLO_CURVE_POINTS,
)
from .data_model import AreaSegment, SamplePoint, VisualizationData
from .methods import get_method
from .monte_carlo import RandomSource, draw_points
from .quadrature import (
    Integrand, even_interval_count, multiple_of_three_interval_count,
    sample, validate_bounds, validate_count,
)


def _grid(f: Integrand, a: float, b: float, n: int):
    """Abscissae and values at the ``n + 1`` nodes of a uniform grid."""
    h = (b - a) / n
    xs = [a + i * h for i in range(n)] + [b]
    ys = [sample(f, x) for x in xs]
    return xs, ys


def _composite_segments(xs, ys, width: int, weights) -> tuple:
    """One ``AreaSegment`` per run of *width* sub-intervals.

    *weights* has ``width + 1`` entries; the representative height is
    the weighted mean of the node values spanned by the segment.
    """
    total = float(sum(weights))
    segments = []
    for start in range(0, len(xs) - 1, width):
        nodes = ys[start:start + width + 1]
        y_rep = sum(w * y for w, y in zip(weights, nodes)) / total
        segments.append(AreaSegment(xs[start], xs[start + width], y_rep))
    return tuple(segments)


def trapezoidal_visualization(f: Integrand, a: float, b: float,
                              n: int) -> VisualizationData:
    a, b = validate_bounds(a, b)
    n = validate_count(n, MIN_INTERVALS)
    xs, ys = _grid(f, a, b, n)
    return VisualizationData(
        method_name=get_method(METHOD_TRAPEZOIDAL).name,
        method_key=METHOD_TRAPEZOIDAL,
        curve_points=tuple(zip(xs, ys)),
        area_segments=_composite_segments(xs, ys, 1, (1, 1)),
    )


def simpson_visualization(f: Integrand, a: float, b: float,
                          n: int) -> VisualizationData:
    a, b = validate_bounds(a, b)
    n = even_interval_count(validate_count(n, MIN_INTERVALS))
    xs, ys = _grid(f, a, b, n)
    return VisualizationData(
        method_name=get_method(METHOD_SIMPSON).name,
        method_key=METHOD_SIMPSON,
        curve_points=tuple(zip(xs, ys)),
        area_segments=_composite_segments(xs, ys, 2, (1, 4, 1)),
    )


def simpson38_visualization(f: Integrand, a: float, b: float,
                            n: int) -> VisualizationData:
    a, b = validate_bounds(a, b)
    n = multiple_of_three_interval_count(validate_count(n, MIN_INTERVALS))
    xs, ys = _grid(f, a, b, n)
    return VisualizationData(
        method_name=get_method(METHOD_SIMPSON_38).name,
        method_key=METHOD_SIMPSON_38,
        curve_points=tuple(zip(xs, ys)),
        area_segments=_composite_segments(xs, ys, 3, (1, 3, 3, 1)),
    )


def monte_carlo_visualization(f: Integrand, a: float, b: float,
                              samples: int,
                              rng: RandomSource = None) -> VisualizationData:
    a, b = validate_bounds(a, b)
    samples = validate_count(samples, MIN_SAMPLES, what="samples")
    curve_x = np.linspace(a, b, MONTE_CARLO_CURVE_POINTS)
    curve = tuple((float(x), sample(f, x)) for x in curve_x)
    points = tuple(
        SamplePoint(float(x), sample(f, x))
        for x in draw_points(a, b, samples, rng)
    )
    return VisualizationData(
        method_name=get_method(METHOD_MONTE_CARLO).name,
        method_key=METHOD_MONTE_CARLO,
        curve_points=curve,
        area_segments=points,
    )


_GENERATORS = {
    METHOD_TRAPEZOIDAL: trapezoidal_visualization,
    METHOD_SIMPSON: simpson_visualization,
    METHOD_SIMPSON_38: simpson38_visualization,
}


def generate_visualization(
    method: str,
    f: Integrand,
    a: float,
    b: float,
    count: int,
    rng: RandomSource = None,
) -> VisualizationData:
    """Visualization data for *method* at *count* intervals or samples.

    Parameters
    ----------
    method : str
        Method key.
    f : callable
        Integrand.
    a, b : float
        Bounds, ``a < b``.
    count : int
        Interval count (adjusted as the method adjusts it) or Monte
        Carlo sample count.
    rng : None, int or numpy.random.Generator
        Random source for Monte Carlo sample positions.
    """
    spec = get_method(method)
    if spec.key == METHOD_MONTE_CARLO:
        return monte_carlo_visualization(f, a, b, count, rng=rng)
    return _GENERATORS[spec.key](f, a, b, count)
