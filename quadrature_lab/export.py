"""
Export utilities for Quadrature Lab.

Two kinds of export:

- Results: ``build_export_document`` turns a ``CalculationReport`` into
  the JSON-ready dict consumed by downstream tools, and
  ``export_results_json`` writes it to disk.
- Charts: PNG export with an automatic switch from the dark GUI theme
  to a white-background theme.  The figure's colours are captured
  first and restored in a ``finally`` block, so a failed save never
  leaves a light-themed chart in the GUI.
"""

import io
import json
import os

from matplotlib.figure import Figure

from .constants import (
    CLIPBOARD_DPI, DARK_COLORS, EXPORT_DPI, EXPORT_WIDTH_INCHES,
    METHOD_MONTE_CARLO, PLOT_STYLE_LIGHT,
)
from .data_model import CalculationReport, IntegrationResult


# ── Results document ─────────────────────────────────────────────────────

def _result_entry(result: IntegrationResult) -> dict:
    count_key = "samples" if result.method_key == METHOD_MONTE_CARLO \
        else "intervals"
    entry = {
        "method": result.method_name,
        "result": result.value,
        count_key: result.sample_count,
        "executionTime": result.elapsed_time_ms,
    }
    if result.error is not None:
        entry["error"] = {
            "absolute": result.error.absolute,
            "relative": result.error.relative,
            "referenceValue": result.error.reference_value,
        }
    return entry


def build_export_document(report: CalculationReport) -> dict:
    """Export document for *report*.

    Shape::

        {
          "timestamp": "2026-10-19T12:00:00+00:00",
          "function": "x**2",
          "bounds": {"lower": 0.0, "upper": 1.0},
          "referenceValue": 0.3333333333,
          "results": [
            {"method": "Trapezoidal Rule", "result": 0.33335,
             "intervals": 100, "executionTime": 0.12,
             "error": {"absolute": ..., "relative": ...,
                       "referenceValue": ...}},
            ...
          ]
        }

    Monte Carlo entries carry ``samples`` instead of ``intervals``.
    """
    request = report.request
    return {
        "timestamp": report.timestamp,
        "function": request.expression,
        "bounds": {"lower": request.lower, "upper": request.upper},
        "referenceValue": report.reference_value,
        "results": [_result_entry(r) for r in report.results.values()],
    }


def export_results_json(report: CalculationReport, filepath: str) -> str:
    """Write the export document for *report* to *filepath*.

    Returns the path written.
    """
    document = build_export_document(report)
    directory = os.path.dirname(filepath)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(filepath, 'w', encoding='utf-8') as fh:
        json.dump(document, fh, indent=2)
    return filepath


# ── Figure theme switching ───────────────────────────────────────────────

def _save_figure_state(fig: Figure) -> dict:
    """Capture every colour ``_apply_light_theme`` changes."""
    state = {'fig_facecolor': fig.get_facecolor(), 'axes': []}
    for ax in fig.get_axes():
        legend = ax.get_legend()
        state['axes'].append({
            'facecolor': ax.get_facecolor(),
            'title': ax.title.get_color(),
            'xlabel': ax.xaxis.label.get_color(),
            'ylabel': ax.yaxis.label.get_color(),
            'spines': {k: s.get_edgecolor() for k, s in ax.spines.items()},
            'xticks': [t.get_color() for t in ax.get_xticklabels()],
            'yticks': [t.get_color() for t in ax.get_yticklabels()],
            'texts': [t.get_color() for t in ax.texts],
            'legend': None if legend is None else (
                legend.get_frame().get_facecolor(),
                legend.get_frame().get_edgecolor(),
                [t.get_color() for t in legend.get_texts()],
            ),
        })
    return state


def _apply_light_theme(fig: Figure) -> None:
    """Recolour *fig* for a white background."""
    light = PLOT_STYLE_LIGHT
    dark_fg = frozenset((
        DARK_COLORS['fg'], DARK_COLORS['fg_dim'], DARK_COLORS['fg_bright'],
    ))
    fig.set_facecolor(light['figure.facecolor'])
    for ax in fig.get_axes():
        ax.set_facecolor(light['axes.facecolor'])
        ax.title.set_color(light['text.color'])
        ax.xaxis.label.set_color(light['axes.labelcolor'])
        ax.yaxis.label.set_color(light['axes.labelcolor'])
        for spine in ax.spines.values():
            spine.set_edgecolor(light['axes.edgecolor'])
        ax.tick_params(axis='x', colors=light['xtick.color'])
        ax.tick_params(axis='y', colors=light['ytick.color'])
        for text in ax.texts:
            if text.get_color() in dark_fg:
                text.set_color(light['text.color'])
        legend = ax.get_legend()
        if legend is not None:
            legend.get_frame().set_facecolor(light['legend.facecolor'])
            legend.get_frame().set_edgecolor(light['legend.edgecolor'])
            for text in legend.get_texts():
                text.set_color(light['text.color'])


def _restore_figure_state(fig: Figure, state: dict) -> None:
    fig.set_facecolor(state['fig_facecolor'])
    for ax, saved in zip(fig.get_axes(), state['axes']):
        ax.set_facecolor(saved['facecolor'])
        ax.title.set_color(saved['title'])
        ax.xaxis.label.set_color(saved['xlabel'])
        ax.yaxis.label.set_color(saved['ylabel'])
        for name, color in saved['spines'].items():
            ax.spines[name].set_edgecolor(color)
        # tick_params recolours marks and labels together; labels are
        # restored individually afterwards.
        if saved['xticks']:
            ax.tick_params(axis='x', colors=saved['xticks'][0])
        if saved['yticks']:
            ax.tick_params(axis='y', colors=saved['yticks'][0])
        for label, color in zip(ax.get_xticklabels(), saved['xticks']):
            label.set_color(color)
        for label, color in zip(ax.get_yticklabels(), saved['yticks']):
            label.set_color(color)
        for text, color in zip(ax.texts, saved['texts']):
            text.set_color(color)
        legend = ax.get_legend()
        if legend is not None and saved['legend'] is not None:
            face, edge, text_colors = saved['legend']
            legend.get_frame().set_facecolor(face)
            legend.get_frame().set_edgecolor(edge)
            for text, color in zip(legend.get_texts(), text_colors):
                text.set_color(color)


# ── PNG export ───────────────────────────────────────────────────────────

def export_png(
    fig: Figure,
    filepath: str,
    *,
    dpi: int = EXPORT_DPI,
    width_inches: float = EXPORT_WIDTH_INCHES,
) -> None:
    """Save *fig* as a light-themed PNG of the given width.

    Size and colours are restored afterwards, even if saving fails.
    """
    state = _save_figure_state(fig)
    current_w = fig.get_figwidth()
    current_h = fig.get_figheight()
    try:
        scale = width_inches / current_w if current_w > 0 else 1.0
        fig.set_size_inches(width_inches, current_h * scale)
        _apply_light_theme(fig)
        fig.savefig(
            filepath,
            dpi=dpi,
            bbox_inches='tight',
            facecolor=fig.get_facecolor(),
            edgecolor='none',
            pad_inches=0.1,
        )
    finally:
        fig.set_size_inches(current_w, current_h)
        _restore_figure_state(fig, state)


def copy_to_clipboard(fig: Figure, dpi: int = CLIPBOARD_DPI) -> bool:
    """Copy *fig* to the system clipboard as a light-themed PNG.

    Returns ``False`` if Qt or the clipboard is unavailable.
    """
    try:
        from PySide6.QtWidgets import QApplication
        from PySide6.QtGui import QImage
    except ImportError:
        return False

    buf = io.BytesIO()
    state = _save_figure_state(fig)
    try:
        _apply_light_theme(fig)
        fig.savefig(buf, format='png', dpi=dpi, bbox_inches='tight',
                    facecolor=fig.get_facecolor(), edgecolor='none')
    finally:
        _restore_figure_state(fig, state)

    img = QImage()
    img.loadFromData(buf.getvalue())
    clipboard = QApplication.clipboard()
    if clipboard is None:
        return False
    clipboard.setImage(img)
    return True


def export_all_charts(
    figures: dict,
    output_dir: str,
    *,
    dpi: int = EXPORT_DPI,
    width_inches: float = EXPORT_WIDTH_INCHES,
) -> list:
    """Export ``{filename_stem: Figure}`` as PNGs into *output_dir*.

    Returns the list of paths written.
    """
    os.makedirs(output_dir, exist_ok=True)
    paths = []
    for name, fig in figures.items():
        safe_name = "".join(
            c if c.isalnum() or c in '-_ ' else '_' for c in name
        ).strip().replace(' ', '_')
        filepath = os.path.join(output_dir, f"{safe_name}.png")
        export_png(fig, filepath, dpi=dpi, width_inches=width_inches)
        paths.append(filepath)
    return paths
