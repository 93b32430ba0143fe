"""Unit tests for the composite Newton-Cotes rules and their validation."""
import math

import pytest

from quadrature_lab.errors import (
    IntegrationWarning, InvalidBounds, InvalidExpression, InvalidSampleCount,
)
from quadrature_lab.quadrature import (
    even_interval_count, multiple_of_three_interval_count,
    simpson_one_third, simpson_three_eighths, trapezoidal, validate_bounds,
    validate_count,
)

RULES = [trapezoidal, simpson_one_third, simpson_three_eighths]


class TestAccuracy:
    def test_trapezoidal_square(self, square):
        result = trapezoidal(square, 0.0, 1.0, 1000)
        assert abs(result.value - 1.0 / 3.0) < 1e-6
        assert result.sample_count == 1000

    def test_simpson_square_is_exact(self, square):
        result = simpson_one_third(square, 0.0, 1.0, 100)
        assert abs(result.value - 1.0 / 3.0) < 1e-10

    def test_simpson38_cubic_is_exact(self):
        result = simpson_three_eighths(lambda x: x ** 3, 0.0, 2.0, 6)
        assert result.value == pytest.approx(4.0, abs=1e-12)

    def test_trapezoidal_error_quarters_on_doubling(self):
        exact = math.e - 1.0
        e1 = abs(trapezoidal(math.exp, 0.0, 1.0, 16).value - exact)
        e2 = abs(trapezoidal(math.exp, 0.0, 1.0, 32).value - exact)
        assert e1 / e2 == pytest.approx(4.0, rel=0.02)

    def test_simpson_error_sixteenths_on_doubling(self):
        exact = math.e - 1.0
        e1 = abs(simpson_one_third(math.exp, 0.0, 1.0, 8).value - exact)
        e2 = abs(simpson_one_third(math.exp, 0.0, 1.0, 16).value - exact)
        assert e1 / e2 == pytest.approx(16.0, rel=0.03)

    def test_simpson38_error_sixteenths_on_doubling(self):
        exact = math.e - 1.0
        e1 = abs(simpson_three_eighths(math.exp, 0.0, 1.0, 9).value - exact)
        e2 = abs(simpson_three_eighths(math.exp, 0.0, 1.0, 18).value - exact)
        assert e1 / e2 == pytest.approx(16.0, rel=0.03)

    def test_result_metadata(self, square):
        result = trapezoidal(square, 0.0, 1.0, 10)
        assert result.method_key == "trapezoidal"
        assert result.method_name == "Trapezoidal Rule"
        assert result.elapsed_time_ms >= 0.0
        assert result.error is None
        assert result.standard_error is None


class TestIntervalRounding:
    def test_odd_simpson_reports_adjusted_count(self, square):
        odd = simpson_one_third(square, 0.0, 1.0, 5)
        even = simpson_one_third(square, 0.0, 1.0, 6)
        assert odd.sample_count == 6
        assert odd.value == even.value

    @pytest.mark.parametrize("requested, used", [
        (2, 3), (3, 3), (4, 6), (5, 6), (9, 9), (10, 12),
    ])
    def test_three_eighths_rounds_up(self, square, requested, used):
        result = simpson_three_eighths(square, 0.0, 1.0, requested)
        assert result.sample_count == used

    def test_helpers(self):
        assert even_interval_count(7) == 8
        assert even_interval_count(8) == 8
        assert multiple_of_three_interval_count(7) == 9
        assert multiple_of_three_interval_count(9) == 9


class TestValidation:
    @pytest.mark.parametrize("rule", RULES)
    @pytest.mark.parametrize("a, b", [
        (1.0, 0.0), (1.0, 1.0), (0.0, math.inf), (math.nan, 1.0),
    ])
    def test_bad_bounds_rejected_before_evaluation(self, counting, rule,
                                                   a, b):
        f = counting(lambda x: x)
        with pytest.raises(InvalidBounds):
            rule(f, a, b, 10)
        assert f.calls == 0

    @pytest.mark.parametrize("rule", RULES)
    @pytest.mark.parametrize("n", [1, 0, -4, 2.5, True, "10", None])
    def test_bad_counts_rejected_before_evaluation(self, counting, rule, n):
        f = counting(lambda x: x)
        with pytest.raises(InvalidSampleCount):
            rule(f, 0.0, 1.0, n)
        assert f.calls == 0

    def test_integral_float_count_accepted(self, square):
        assert trapezoidal(square, 0.0, 1.0, 10.0).sample_count == 10

    def test_non_numeric_bounds(self):
        with pytest.raises(InvalidBounds):
            validate_bounds("a", 1.0)

    def test_large_count_warns(self):
        with pytest.warns(IntegrationWarning):
            assert validate_count(10_000_001, 2) == 10_000_001

    def test_non_finite_value_rejected(self):
        with pytest.raises(InvalidExpression):
            trapezoidal(lambda x: math.nan, 0.0, 1.0, 4)

    def test_infinite_value_rejected(self):
        with pytest.raises(InvalidExpression):
            simpson_one_third(lambda x: math.inf if x > 0.5 else x,
                              0.0, 1.0, 4)
