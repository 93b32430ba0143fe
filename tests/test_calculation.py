"""Unit tests for the calculation pipeline."""
import dataclasses
import datetime

import pytest

from quadrature_lab.calculation import (
    run_calculation, run_convergence, validate_request,
)
from quadrature_lab.constants import METHOD_KEYS
from quadrature_lab.data_model import CalculationRequest
from quadrature_lab.errors import (
    IntegrationWarning, InvalidBounds, InvalidExpression, InvalidSampleCount,
    NoMethodSelected,
)


def _request(**overrides):
    base = dict(expression="x^2", lower=0.0, upper=1.0, intervals=10,
                samples=100, methods=("trapezoidal",), seed=None)
    base.update(overrides)
    return CalculationRequest(**base)


class TestValidateRequest:
    def test_no_methods(self):
        with pytest.raises(NoMethodSelected):
            validate_request(_request(methods=()))

    def test_unknown_method(self):
        with pytest.raises(ValueError, match="boole"):
            validate_request(_request(methods=("boole",)))

    def test_duplicates_removed_in_order(self):
        specs = validate_request(_request(
            methods=("simpson", "trapezoidal", "simpson")))
        assert [s.key for s in specs] == ["simpson", "trapezoidal"]

    def test_bounds_checked_before_expression(self):
        with pytest.raises(InvalidBounds):
            run_calculation(_request(expression="bogus(", lower=2.0,
                                     upper=1.0))

    def test_intervals_ignored_without_interval_method(self):
        validate_request(_request(intervals=1, methods=("monte-carlo",)))

    def test_samples_ignored_without_monte_carlo(self):
        validate_request(_request(samples=1))

    def test_intervals_checked(self):
        with pytest.raises(InvalidSampleCount):
            validate_request(_request(intervals=1))

    def test_samples_checked(self):
        with pytest.raises(InvalidSampleCount):
            validate_request(_request(samples=9, methods=("monte-carlo",)))


class TestRunCalculation:
    def test_report_contents(self, exp_request, exp_exact):
        report = run_calculation(exp_request)
        assert list(report.results) == list(METHOD_KEYS)
        assert list(report.visualizations) == list(METHOD_KEYS)
        assert report.reference_value == pytest.approx(exp_exact, abs=1e-12)
        assert report.request is exp_request
        for result in report.results.values():
            assert result.error is not None
            assert result.error.reference_value == report.reference_value
        assert report.results["simpson"].value == pytest.approx(
            exp_exact, abs=1e-7)

    def test_timestamp_is_iso_utc(self, exp_request):
        report = run_calculation(exp_request)
        stamp = datetime.datetime.fromisoformat(report.timestamp)
        assert stamp.utcoffset() == datetime.timedelta(0)

    def test_seed_makes_report_reproducible(self, exp_request):
        first = run_calculation(exp_request)
        second = run_calculation(exp_request)
        assert first.results["monte-carlo"].value == \
            second.results["monte-carlo"].value
        assert first.visualizations["monte-carlo"] == \
            second.visualizations["monte-carlo"]

    def test_rng_overrides_seed(self, exp_request):
        first = run_calculation(exp_request, rng=99)
        second = run_calculation(
            dataclasses.replace(exp_request, seed=None), rng=99)
        assert first.results["monte-carlo"].value == \
            second.results["monte-carlo"].value

    def test_monte_carlo_visualization_capped(self, exp_request):
        report = run_calculation(exp_request)
        assert report.results["monte-carlo"].sample_count == 2000
        assert len(report.visualizations["monte-carlo"].area_segments) == 500

    def test_small_sample_count_not_capped(self):
        report = run_calculation(_request(samples=40,
                                          methods=("monte-carlo",), seed=1))
        assert len(report.visualizations["monte-carlo"].area_segments) == 40

    def test_probe_at_midpoint(self):
        # sqrt(x - 2) is undefined at the default probe point 1.0
        report = run_calculation(_request(expression="sqrt(x - 2)",
                                          lower=2.0, upper=3.0))
        assert report.reference_value == pytest.approx(2.0 / 3.0, abs=1e-5)

    def test_bad_expression(self):
        with pytest.raises(InvalidExpression):
            run_calculation(_request(expression="x +"))

    def test_superscript_power_is_a_parse_error(self):
        with pytest.raises(InvalidExpression):
            run_calculation(_request(expression="x²"))

    def test_evaluation_failure_aborts(self):
        with pytest.raises(InvalidExpression):
            run_calculation(_request(expression="1/x", lower=-1.0,
                                     upper=1.0, intervals=10))

    def test_zero_reference_warns(self):
        with pytest.warns(IntegrationWarning):
            report = run_calculation(_request(expression="0*x"))
        error = report.results["trapezoidal"].error
        assert report.reference_value == 0.0
        assert error.relative_is_absolute
        assert error.relative == error.absolute


class TestRunConvergence:
    def test_delegates(self, exp_exact):
        series = run_convergence(_request(expression="exp(x)"), "simpson",
                                 steps=3)
        assert len(series) == 3
        assert series.estimates[-1] == pytest.approx(exp_exact, abs=1e-6)

    def test_seed_from_request(self):
        request = _request(seed=3)
        first = run_convergence(request, "monte-carlo", steps=2)
        second = run_convergence(request, "monte-carlo", steps=2)
        assert first == second

    def test_unknown_method(self):
        with pytest.raises(ValueError):
            run_convergence(_request(), "gauss")

    def test_bad_expression(self):
        with pytest.raises(InvalidExpression):
            run_convergence(_request(expression="sin"), "trapezoidal")
