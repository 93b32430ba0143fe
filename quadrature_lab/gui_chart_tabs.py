"""
Chart tabs widget for Quadrature Lab.

One tab per integration method, plus Convergence and Error Comparison
tabs.  Each tab hosts a matplotlib FigureCanvas with a navigation
toolbar and copy / export buttons.
"""

import os

from PySide6.QtWidgets import (
    QTabWidget, QWidget, QVBoxLayout, QHBoxLayout,
    QPushButton, QFileDialog, QMessageBox,
)

import matplotlib
matplotlib.use('QtAgg')
from matplotlib.figure import Figure
from matplotlib.backends.backend_qtagg import (
    FigureCanvasQTAgg as FigureCanvas,
    NavigationToolbar2QT as NavigationToolbar,
)

from .constants import DARK_COLORS, METHOD_KEYS, METHOD_NAMES, PLOT_STYLE_DARK
from .theme import apply_plot_style
from .data_model import CalculationReport
from .export import export_png, copy_to_clipboard
from .chart_method import render_method_visualization
from .chart_convergence import render_convergence, render_error_comparison


class _ChartTab(QWidget):
    """Single chart tab with figure canvas, toolbar and export buttons."""

    def __init__(self, figsize=(7, 4.5), parent=None):
        super().__init__(parent)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(4, 4, 4, 4)
        layout.setSpacing(4)

        toolbar_row = QHBoxLayout()
        self._fig = Figure(figsize=figsize)
        self._fig.set_facecolor(DARK_COLORS['bg_alt'])
        self._canvas = FigureCanvas(self._fig)
        self._toolbar = NavigationToolbar(self._canvas, self)
        toolbar_row.addWidget(self._toolbar)
        toolbar_row.addStretch()

        btn_copy = QPushButton("Copy to Clipboard")
        btn_copy.clicked.connect(lambda *_: self._on_copy())
        toolbar_row.addWidget(btn_copy)
        btn_export = QPushButton("Export PNG...")
        btn_export.clicked.connect(lambda *_: self._on_export())
        toolbar_row.addWidget(btn_export)

        layout.addLayout(toolbar_row)
        layout.addWidget(self._canvas, 1)

    @property
    def fig(self) -> Figure:
        return self._fig

    def refresh(self):
        self._canvas.draw_idle()

    def show_message(self, text: str):
        self._fig.clf()
        ax = self._fig.add_subplot(111)
        ax.set_axis_off()
        ax.text(0.5, 0.5, text, transform=ax.transAxes,
                ha='center', va='center', color=DARK_COLORS['fg_dim'])
        self.refresh()

    def _on_copy(self):
        if copy_to_clipboard(self._fig):
            self.window().statusBar().showMessage(
                "Chart copied to clipboard", 3000)
        else:
            QMessageBox.warning(self, "Copy Failed",
                                "Could not copy chart to clipboard.")

    def _on_export(self):
        path, _ = QFileDialog.getSaveFileName(
            self, "Export Chart as PNG", "",
            "PNG Files (*.png);;All Files (*)",
        )
        if not path:
            return
        if not path.lower().endswith('.png'):
            path += '.png'
        try:
            export_png(self._fig, path)
            self.window().statusBar().showMessage(
                f"Exported to {os.path.basename(path)}", 3000)
        except (OSError, ValueError) as exc:
            QMessageBox.critical(
                self, "Export Error", f"Failed to export: {exc}")


class ChartTabsWidget(QTabWidget):
    """Tabbed container: one chart per method, convergence, comparison."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self._method_tabs = {}
        for key in METHOD_KEYS:
            tab = _ChartTab()
            self._method_tabs[key] = tab
            self.addTab(tab, METHOD_NAMES[key])
        self._tab_convergence = _ChartTab(figsize=(9, 4.5))
        self._tab_comparison = _ChartTab()
        self.addTab(self._tab_convergence, "Convergence")
        self.addTab(self._tab_comparison, "Error Comparison")

        apply_plot_style(PLOT_STYLE_DARK)
        self.clear_all()

    def clear_all(self):
        for key, tab in self._method_tabs.items():
            tab.show_message(f"{METHOD_NAMES[key]}: press Calculate")
        self._tab_convergence.show_message(
            "Run a convergence analysis from the results panel")
        self._tab_comparison.show_message("No results yet")

    def update_report(self, report: CalculationReport) -> None:
        """Redraw every method tab and the comparison tab from *report*."""
        apply_plot_style(PLOT_STYLE_DARK)
        for key, tab in self._method_tabs.items():
            viz = report.visualizations.get(key)
            if viz is None:
                tab.show_message(f"{METHOD_NAMES[key]} was not selected")
                continue
            render_method_visualization(
                tab.fig, viz, value=report.results[key].value)
            tab.refresh()
        render_error_comparison(self._tab_comparison.fig, report)
        self._tab_comparison.refresh()

        first = next(iter(report.visualizations), None)
        if first is not None:
            self.setCurrentWidget(self._method_tabs[first])

    def update_convergence(self, series_list, reference=None) -> None:
        """Redraw the convergence tab and bring it to the front."""
        apply_plot_style(PLOT_STYLE_DARK)
        render_convergence(self._tab_convergence.fig, series_list,
                           reference=reference)
        self._tab_convergence.refresh()
        self.setCurrentWidget(self._tab_convergence)

    def get_all_figures(self, report: CalculationReport, series_list,
                        reference=None) -> dict:
        """Fresh figures for batch export, ``{filename_stem: Figure}``."""
        figures = {}
        for key, viz in report.visualizations.items():
            fig = Figure(figsize=(7, 4.5))
            render_method_visualization(
                fig, viz, value=report.results[key].value, for_export=True)
            figures[key] = fig
        fig_cmp = Figure(figsize=(7, 4.5))
        render_error_comparison(fig_cmp, report)
        figures["error_comparison"] = fig_cmp
        if series_list:
            fig_conv = Figure(figsize=(9, 4.5))
            render_convergence(fig_conv, series_list, reference=reference)
            figures["convergence"] = fig_conv
        return figures
