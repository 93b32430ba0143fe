"""
Data model for Quadrature Lab.

Immutable dataclasses exchanged between the numeric engine and its
consumers (results table, chart renderers, JSON export).  Every record
is created once and never mutated; attaching error metrics to a result
produces a new ``IntegrationResult``.

Visualization records carry geometry only.  Renderers decide how a
segment is drawn; the engine decides where it is.
"""

from dataclasses import dataclass, field, replace
from typing import Dict, Optional, Tuple, Union

import numpy as np


@dataclass(frozen=True)
class ErrorMetrics:
    """Error of one estimate against the reference value.

    Parameters
    ----------
    absolute : float
        ``|estimate - reference|``.
    relative : float
        Percent of ``|reference|``.  When the reference is exactly zero
        this holds the absolute error instead and
        ``relative_is_absolute`` is ``True``.
    reference_value : float
        The reference the estimate was compared against.
    relative_is_absolute : bool
        Flags the zero-reference fallback; a consumer should not print
        ``relative`` with a percent sign when this is set.
    """
    absolute: float
    relative: float
    reference_value: float
    relative_is_absolute: bool = False


@dataclass(frozen=True)
class IntegrationResult:
    """Outcome of a single quadrature or Monte Carlo run.

    ``sample_count`` is the count the method actually used: Simpson's
    rules report the rounded-up interval count, Monte Carlo the number
    of random samples.
    """
    method_name: str
    value: float
    sample_count: int
    elapsed_time_ms: float
    method_key: str = ""
    error: Optional[ErrorMetrics] = None
    standard_error: Optional[float] = None

    def with_error(self, metrics: ErrorMetrics) -> "IntegrationResult":
        """Return a copy of this result carrying *metrics*."""
        return replace(self, error=metrics)


@dataclass(frozen=True)
class AreaSegment:
    """One drawn area piece for an interval-based rule.

    ``y_representative`` sizes the drawn shape: the trapezoid mean for
    the trapezoidal rule, the Simpson-weighted mean for the arcs.
    """
    x1: float
    x2: float
    y_representative: float


@dataclass(frozen=True)
class SamplePoint:
    """One Monte Carlo sample, drawn as-is."""
    x: float
    y: float


Segment = Union[AreaSegment, SamplePoint]


@dataclass(frozen=True)
class VisualizationData:
    """Geometry a renderer needs to draw one method's approximation."""
    method_name: str
    method_key: str
    curve_points: Tuple[Tuple[float, float], ...]
    area_segments: Tuple[Segment, ...]

    @property
    def curve_x(self) -> np.ndarray:
        return np.array([p[0] for p in self.curve_points], dtype=float)

    @property
    def curve_y(self) -> np.ndarray:
        return np.array([p[1] for p in self.curve_points], dtype=float)


@dataclass(frozen=True)
class ConvergencePoint:
    sample_count: int
    estimate: float


@dataclass(frozen=True)
class ConvergenceSeries:
    """Estimates of one method at a geometric sequence of counts."""
    method_key: str
    method_name: str
    points: Tuple[ConvergencePoint, ...]

    @property
    def counts(self) -> np.ndarray:
        return np.array([p.sample_count for p in self.points], dtype=float)

    @property
    def estimates(self) -> np.ndarray:
        return np.array([p.estimate for p in self.points], dtype=float)

    def __len__(self) -> int:
        return len(self.points)


@dataclass(frozen=True)
class CalculationRequest:
    """Everything one calculation needs, passed explicitly.

    Parameters
    ----------
    expression : str
        Integrand source text, e.g. ``"sin(x)^2"``.
    lower, upper : float
        Integration bounds; ``lower < upper``.
    intervals : int
        Requested interval count for the interval-based rules.
    samples : int
        Monte Carlo sample count.
    methods : tuple of str
        Method keys from ``constants.METHOD_KEYS``.
    seed : int or None
        Seed for Monte Carlo.  ``None`` draws fresh OS entropy.
    """
    expression: str
    lower: float
    upper: float
    intervals: int
    samples: int
    methods: Tuple[str, ...]
    seed: Optional[int] = None


@dataclass(frozen=True)
class CalculationReport:
    """Self-contained output of one calculation.

    ``results`` and ``visualizations`` are keyed by method key, in the
    order the methods ran.
    """
    request: CalculationRequest
    reference_value: float
    timestamp: str
    results: Dict[str, IntegrationResult] = field(default_factory=dict)
    visualizations: Dict[str, VisualizationData] = field(default_factory=dict)
