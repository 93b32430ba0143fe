"""Unit tests for the reference value and error metrics."""
import math
import warnings

import pytest

from quadrature_lab.errors import IntegrationWarning
from quadrature_lab.quadrature import trapezoidal
from quadrature_lab.reference import (
    attach_error, compute_error, reference_value,
)


class TestReferenceValue:
    def test_square(self, square):
        assert reference_value(square, 0.0, 1.0) == pytest.approx(
            1.0 / 3.0, abs=1e-12)

    def test_exp(self):
        assert reference_value(math.exp, 0.0, 1.0) == pytest.approx(
            math.e - 1.0, abs=1e-12)

    def test_custom_interval_count(self, square):
        assert reference_value(square, 0.0, 3.0, intervals=2) == \
            pytest.approx(9.0)


class TestComputeError:
    def test_relative_is_percent(self):
        metrics = compute_error(1.1, 1.0)
        assert metrics.absolute == pytest.approx(0.1)
        assert metrics.relative == pytest.approx(10.0)
        assert metrics.reference_value == 1.0
        assert not metrics.relative_is_absolute

    def test_negative_reference(self):
        metrics = compute_error(-2.2, -2.0)
        assert metrics.relative == pytest.approx(10.0)

    def test_no_warning_for_nonzero_reference(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            compute_error(0.5, 0.25)

    def test_zero_reference_falls_back_to_absolute(self):
        with pytest.warns(IntegrationWarning):
            metrics = compute_error(0.003, 0.0)
        assert metrics.absolute == pytest.approx(0.003)
        assert metrics.relative == metrics.absolute
        assert metrics.relative_is_absolute

    def test_zero_reference_exact_estimate(self):
        with pytest.warns(IntegrationWarning):
            metrics = compute_error(0.0, 0.0)
        assert metrics.absolute == 0.0
        assert metrics.relative == 0.0


class TestAttachError:
    def test_returns_new_result(self, square):
        result = trapezoidal(square, 0.0, 1.0, 10)
        with_error = attach_error(result, 1.0 / 3.0)
        assert result.error is None
        assert with_error.error is not None
        assert with_error.value == result.value
        assert with_error.error.absolute == pytest.approx(
            abs(result.value - 1.0 / 3.0))
