"""
Convergence and error charts for Quadrature Lab.

``render_convergence`` plots the estimate against the sample count on a
log x-axis for every analysed method; with a reference value it adds a
log-log panel of absolute error with the observed order in the legend.
``render_error_comparison`` is a bar chart of each method's absolute
error from one calculation.
"""

import numpy as np
from matplotlib.figure import Figure

from .constants import METHOD_PALETTE, REFERENCE_LINE_COLOR
from .convergence import error_series, observed_order
from .methods import get_method
from .data_model import CalculationReport


def _stroke(method_key: str) -> str:
    return METHOD_PALETTE.get(method_key, {}).get('stroke', '#404040')


def render_convergence(
    fig: Figure,
    series_list,
    *,
    reference: float = None,
) -> None:
    """Render convergence series on *fig*.

    Parameters
    ----------
    fig : matplotlib.figure.Figure
        Figure to draw on (will be cleared).
    series_list : iterable of ConvergenceSeries
        One series per method; drawn in order.
    reference : float or None
        Reference value.  Adds a horizontal line on the estimate panel
        and an absolute-error panel.
    """
    fig.clf()
    series_list = [s for s in series_list if len(s) > 0]

    if reference is not None:
        ax_est = fig.add_subplot(121)
        ax_err = fig.add_subplot(122)
    else:
        ax_est = fig.add_subplot(111)
        ax_err = None

    if not series_list:
        ax_est.text(0.5, 0.5, 'Run a convergence analysis to see data',
                    transform=ax_est.transAxes, ha='center', va='center')
        return

    for series in series_list:
        color = _stroke(series.method_key)
        ax_est.semilogx(series.counts, series.estimates, color=color,
                        marker='o', markersize=3, linewidth=1.0,
                        label=series.method_name)

    if reference is not None:
        ax_est.axhline(reference, color=REFERENCE_LINE_COLOR,
                       linewidth=1.0, linestyle='--', label='Reference')

    ax_est.set_xlabel("Intervals / samples", fontsize=8)
    ax_est.set_ylabel("Estimate", fontsize=8)
    ax_est.set_title("Convergence", fontsize=10, fontweight='bold')
    ax_est.grid(which='both', linewidth=0.4, alpha=0.5)
    ax_est.legend(loc='best', fontsize=6.5, framealpha=0.9)

    if ax_err is not None:
        any_error = False
        for series in series_list:
            errors = error_series(series, reference)
            # Zero error cannot be shown on a log axis
            mask = errors > 0.0
            if not np.any(mask):
                continue
            any_error = True
            order = observed_order(series, reference)
            label = series.method_name
            if np.isfinite(order):
                expected = get_method(series.method_key).theoretical_order
                label += f" (p ≈ {order:.2f}, expected {expected:g})"
            ax_err.loglog(series.counts[mask], errors[mask],
                          color=_stroke(series.method_key), marker='o',
                          markersize=3, linewidth=1.0, label=label)
        if any_error:
            ax_err.legend(loc='best', fontsize=6.5, framealpha=0.9)
        else:
            ax_err.text(0.5, 0.5, 'All estimates match the reference',
                        transform=ax_err.transAxes, ha='center',
                        va='center')
        ax_err.set_xlabel("Intervals / samples", fontsize=8)
        ax_err.set_ylabel("|estimate − reference|", fontsize=8)
        ax_err.set_title("Absolute error", fontsize=10, fontweight='bold')
        ax_err.grid(which='both', linewidth=0.4, alpha=0.5)

    fig.tight_layout(pad=1.5)


def render_error_comparison(
    fig: Figure,
    report: CalculationReport,
) -> None:
    """Bar chart of the absolute error of every result in *report*."""
    fig.clf()
    ax = fig.add_subplot(111)

    results = [r for r in report.results.values() if r.error is not None]
    if not results:
        ax.text(0.5, 0.5, 'No results to compare',
                transform=ax.transAxes, ha='center', va='center')
        return

    names = [r.method_name for r in results]
    errors = np.array([r.error.absolute for r in results], dtype=float)
    colors = [_stroke(r.method_key) for r in results]

    positions = np.arange(len(results))
    ax.bar(positions, errors, color=colors, alpha=0.8, zorder=2)
    if np.all(errors > 0.0):
        ax.set_yscale('log')
    for pos, err in zip(positions, errors):
        ax.annotate(f"{err:.2e}", (pos, err), textcoords='offset points',
                    xytext=(0, 3), ha='center', fontsize=6.5)

    ax.set_xticks(positions)
    ax.set_xticklabels(names, fontsize=7)
    ax.set_ylabel("Absolute error", fontsize=8)
    ax.set_title(
        f"Error vs reference ({report.reference_value:.10g})",
        fontsize=10, fontweight='bold',
    )
    ax.grid(axis='y', linewidth=0.4, alpha=0.5)

    fig.tight_layout(pad=1.5)
