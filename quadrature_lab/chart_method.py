"""
Method approximation chart for Quadrature Lab.

Draws one method's ``VisualizationData``: the integrand curve plus
trapezoid / Simpson arc bars, or Monte Carlo sample stems.
"""

import numpy as np
from matplotlib.figure import Figure

from .constants import CURVE_COLOR, METHOD_MONTE_CARLO, METHOD_PALETTE
from .data_model import VisualizationData

# Beyond this many segments individual bars are unreadable; shade the
# area under the curve instead.
_MAX_DRAWN_SEGMENTS = 400


def render_method_visualization(
    fig: Figure,
    viz: VisualizationData,
    *,
    value: float = None,
    for_export: bool = False,
) -> None:
    """Render *viz* on *fig*.

    Parameters
    ----------
    fig : matplotlib.figure.Figure
        Figure to draw on (will be cleared).
    viz : VisualizationData
        Geometry from ``visualization.generate_visualization``.
    value : float or None
        Estimate to show in the title.
    for_export : bool
        If ``True``, use edge colours suited to a white background.
    """
    fig.clf()
    ax = fig.add_subplot(111)
    colors = METHOD_PALETTE.get(
        viz.method_key, {'stroke': '#1f77b4', 'fill': '#66ccff'})

    if not viz.curve_points:
        ax.text(0.5, 0.5, 'No data to display',
                transform=ax.transAxes, ha='center', va='center')
        return

    curve_x = viz.curve_x
    curve_y = viz.curve_y
    segments = viz.area_segments

    if viz.method_key == METHOD_MONTE_CARLO:
        xs = np.array([p.x for p in segments], dtype=float)
        ys = np.array([p.y for p in segments], dtype=float)
        ax.vlines(xs, 0.0, ys, color=colors['fill'], linewidth=0.6,
                  alpha=0.35, zorder=1)
        ax.scatter(xs, ys, s=8, color=colors['stroke'], alpha=0.8,
                   linewidths=0, zorder=3,
                   label=f"{len(segments)} samples")
    elif len(segments) > _MAX_DRAWN_SEGMENTS:
        ax.fill_between(curve_x, curve_y, color=colors['fill'],
                        alpha=0.35, zorder=1,
                        label=f"{len(segments)} segments")
    else:
        lefts = np.array([s.x1 for s in segments], dtype=float)
        widths = np.array([s.x2 - s.x1 for s in segments], dtype=float)
        heights = np.array([s.y_representative for s in segments],
                           dtype=float)
        edge = colors['stroke'] if for_export or len(segments) <= 60 \
            else 'none'
        ax.bar(lefts, heights, width=widths, align='edge',
               color=colors['fill'], alpha=0.35, edgecolor=edge,
               linewidth=0.6, zorder=1,
               label=f"{len(segments)} segments")

    ax.plot(curve_x, curve_y, color=CURVE_COLOR, linewidth=1.6,
            zorder=2, label='f(x)')
    ax.axhline(0.0, color='#888888', linewidth=0.8, zorder=0)

    ax.set_xlim(curve_x.min(), curve_x.max())
    ax.set_xlabel("x", fontsize=8)
    ax.set_ylabel("f(x)", fontsize=8)
    title = viz.method_name
    if value is not None:
        title += f":  ≈ {value:.8g}"
    ax.set_title(title, fontsize=10, fontweight='bold')
    ax.grid(linewidth=0.4, alpha=0.5)
    ax.legend(loc='best', fontsize=7, framealpha=0.9)

    fig.tight_layout(pad=1.5)
