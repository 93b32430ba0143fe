"""Unit tests for Monte Carlo integration."""
import math

import numpy as np
import pytest

from quadrature_lab.data_model import IntegrationResult
from quadrature_lab.errors import InvalidBounds, InvalidSampleCount
from quadrature_lab.monte_carlo import (
    confidence_interval, draw_points, make_rng, monte_carlo,
)


class TestReproducibility:
    def test_same_seed_same_result(self, square):
        first = monte_carlo(square, 0.0, 1.0, 1000, rng=42)
        second = monte_carlo(square, 0.0, 1.0, 1000, rng=42)
        assert first.value == second.value
        assert first.standard_error == second.standard_error

    def test_different_seeds_differ(self, square):
        first = monte_carlo(square, 0.0, 1.0, 1000, rng=1)
        second = monte_carlo(square, 0.0, 1.0, 1000, rng=2)
        assert first.value != second.value

    def test_generator_is_passed_through(self):
        generator = np.random.default_rng(3)
        assert make_rng(generator) is generator

    def test_shared_generator_advances(self, square):
        generator = np.random.default_rng(5)
        first = monte_carlo(square, 0.0, 1.0, 100, rng=generator)
        second = monte_carlo(square, 0.0, 1.0, 100, rng=generator)
        assert first.value != second.value

    def test_draw_points_within_bounds(self):
        xs = draw_points(-2.0, 3.0, 500, rng=0)
        assert xs.shape == (500,)
        assert np.all(xs >= -2.0)
        assert np.all(xs < 3.0)


class TestAccuracy:
    def test_estimate_near_exact(self, square):
        result = monte_carlo(square, 0.0, 1.0, 20000, rng=11)
        assert abs(result.value - 1.0 / 3.0) < 5 * result.standard_error

    def test_constant_integrand_is_exact(self):
        result = monte_carlo(lambda x: 2.0, 1.0, 4.0, 50, rng=0)
        assert result.value == pytest.approx(6.0)
        assert result.standard_error == pytest.approx(0.0)

    def test_error_shrinks_like_inverse_sqrt(self, square):
        generator = np.random.default_rng(1234)
        exact = 1.0 / 3.0
        trials = 200

        def rms_error(samples):
            errors = [
                monte_carlo(square, 0.0, 1.0, samples, rng=generator).value
                - exact
                for _ in range(trials)
            ]
            return math.sqrt(np.mean(np.square(errors)))

        ratio = rms_error(100) / rms_error(1600)
        # sqrt(1600 / 100) == 4
        assert 3.0 < ratio < 5.3

    def test_result_metadata(self, square):
        result = monte_carlo(square, 0.0, 1.0, 10, rng=0)
        assert result.method_key == "monte-carlo"
        assert result.method_name == "Monte Carlo"
        assert result.sample_count == 10


class TestValidation:
    def test_too_few_samples(self, square):
        with pytest.raises(InvalidSampleCount):
            monte_carlo(square, 0.0, 1.0, 9)

    def test_bad_bounds_before_evaluation(self, counting):
        f = counting(lambda x: x)
        with pytest.raises(InvalidBounds):
            monte_carlo(f, 2.0, 1.0, 100)
        assert f.calls == 0


class TestConfidenceInterval:
    def test_symmetric_normal_interval(self, square):
        result = monte_carlo(square, 0.0, 1.0, 1000, rng=9)
        low, high = confidence_interval(result)
        assert low < result.value < high
        half_width = (high - low) / 2.0
        assert half_width == pytest.approx(
            1.959964 * result.standard_error, rel=1e-5)

    def test_wider_for_higher_confidence(self, square):
        result = monte_carlo(square, 0.0, 1.0, 1000, rng=9)
        low95, high95 = confidence_interval(result, 0.95)
        low99, high99 = confidence_interval(result, 0.99)
        assert high99 - low99 > high95 - low95

    def test_requires_standard_error(self):
        result = IntegrationResult("Trapezoidal Rule", 1.0, 10, 0.1)
        with pytest.raises(ValueError):
            confidence_interval(result)

    @pytest.mark.parametrize("confidence", [0.0, 1.0, 1.5, -0.1])
    def test_confidence_range(self, square, confidence):
        result = monte_carlo(square, 0.0, 1.0, 100, rng=0)
        with pytest.raises(ValueError):
            confidence_interval(result, confidence)
