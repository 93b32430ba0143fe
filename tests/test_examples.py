"""Unit tests for the built-in example integrals."""
import pytest

from quadrature_lab.calculation import run_calculation
from quadrature_lab.examples import EXAMPLES


class TestExamples:
    @pytest.mark.parametrize("example", EXAMPLES, ids=lambda e: e.label)
    def test_reference_matches_closed_form(self, example):
        report = run_calculation(example.to_request(
            methods=("simpson",), seed=0))
        assert report.reference_value == pytest.approx(
            example.exact, abs=1e-5)

    def test_request_defaults(self):
        request = EXAMPLES[0].to_request()
        assert request.intervals == 100
        assert request.samples == 1000
        assert len(request.methods) == 4
