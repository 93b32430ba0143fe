"""Smoke tests for the matplotlib renderers on headless figures."""
import math

import pytest
from matplotlib.figure import Figure

from quadrature_lab.calculation import run_calculation
from quadrature_lab.chart_convergence import (
    render_convergence, render_error_comparison,
)
from quadrature_lab.chart_method import render_method_visualization
from quadrature_lab.convergence import analyze_convergence
from quadrature_lab.data_model import CalculationRequest, VisualizationData
from quadrature_lab.errors import IntegrationWarning
from quadrature_lab.visualization import generate_visualization


class TestMethodChart:
    @pytest.mark.parametrize("method", [
        "trapezoidal", "simpson", "simpson38", "monte-carlo",
    ])
    def test_renders_each_method(self, method):
        viz = generate_visualization(method, math.sin, 0.0, math.pi, 30,
                                     rng=0)
        fig = Figure()
        render_method_visualization(fig, viz, value=2.0)
        ax = fig.get_axes()[0]
        assert viz.method_name in ax.get_title()
        assert ax.get_legend() is not None

    def test_dense_grid_is_shaded(self):
        viz = generate_visualization("trapezoidal", math.sin, 0.0, math.pi,
                                     1000)
        fig = Figure()
        render_method_visualization(fig, viz)
        assert len(fig.get_axes()[0].patches) == 0

    def test_sparse_grid_draws_bars(self):
        viz = generate_visualization("trapezoidal", math.sin, 0.0, math.pi,
                                     12)
        fig = Figure()
        render_method_visualization(fig, viz)
        assert len(fig.get_axes()[0].patches) == 12

    def test_empty_data(self):
        viz = VisualizationData("Trapezoidal Rule", "trapezoidal", (), ())
        fig = Figure()
        render_method_visualization(fig, viz)
        assert fig.get_axes()[0].texts


class TestConvergenceChart:
    def test_with_reference_has_error_panel(self):
        series = [
            analyze_convergence(math.exp, 0.0, 1.0, key, steps=4, rng=0)
            for key in ("trapezoidal", "simpson", "monte-carlo")
        ]
        fig = Figure()
        render_convergence(fig, series, reference=math.e - 1.0)
        est_ax, err_ax = fig.get_axes()
        assert err_ax.get_xscale() == "log"
        assert err_ax.get_yscale() == "log"
        labels = [t.get_text() for t in err_ax.get_legend().get_texts()]
        assert any("p ≈" in label for label in labels)
        assert any("expected 2" in label for label in labels)
        assert any("expected 4" in label for label in labels)
        assert any("expected 0.5" in label for label in labels)

    def test_without_reference_single_panel(self):
        series = [analyze_convergence(math.exp, 0.0, 1.0, "trapezoidal",
                                      steps=3)]
        fig = Figure()
        render_convergence(fig, series)
        assert len(fig.get_axes()) == 1
        assert fig.get_axes()[0].get_xscale() == "log"

    def test_no_series(self):
        fig = Figure()
        render_convergence(fig, [], reference=None)
        assert fig.get_axes()[0].texts


class TestErrorComparisonChart:
    def test_one_bar_per_method(self, exp_request):
        report = run_calculation(exp_request)
        fig = Figure()
        render_error_comparison(fig, report)
        ax = fig.get_axes()[0]
        assert len(ax.patches) == len(report.results)
        assert ax.get_yscale() == "log"

    def test_zero_error_keeps_linear_scale(self):
        with pytest.warns(IntegrationWarning):
            report = run_calculation(CalculationRequest(
                "0*x", 0.0, 1.0, 10, 100, ("trapezoidal", "simpson")))
        fig = Figure()
        render_error_comparison(fig, report)
        assert fig.get_axes()[0].get_yscale() == "linear"
