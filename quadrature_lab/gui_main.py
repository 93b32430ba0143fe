"""
Main window for Quadrature Lab.

Hosts the InputPanel (left) and, on the right, the ResultsPanel above
the ChartTabsWidget, with a menu bar and status bar.  The window keeps
the last ``CalculationReport`` and the convergence history for the
current integrand; the engine itself is stateless.
"""

import os
import sys
import warnings

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QSplitter, QScrollArea,
    QFileDialog, QMessageBox,
)
from PySide6.QtGui import QAction
from PySide6.QtCore import Qt

from . import APP_NAME, APP_VERSION
from .calculation import run_calculation, run_convergence
from .examples import EXAMPLES
from .export import export_all_charts, export_png, export_results_json
from .gui_chart_tabs import ChartTabsWidget
from .gui_input_panel import InputPanel
from .gui_results_panel import ResultsPanel


class QuadratureMainWindow(QMainWindow):
    """Main window for Quadrature Lab."""

    def __init__(self):
        super().__init__()
        self._report = None
        # method key -> ConvergenceSeries, valid for self._report's integrand
        self._convergence = {}

        self.setWindowTitle(f"{APP_NAME} v{APP_VERSION}")
        self.setMinimumSize(1200, 800)

        self._setup_ui()
        self._setup_menu()
        self._connect_signals()

        self.statusBar().showMessage("Ready. Enter a function and press Calculate")

    # ── UI setup ─────────────────────────────────────────────────────

    def _setup_ui(self):
        central = QWidget()
        self.setCentralWidget(central)
        main_layout = QVBoxLayout(central)
        main_layout.setContentsMargins(4, 4, 4, 4)

        splitter = QSplitter(Qt.Orientation.Horizontal)

        self._input_panel = InputPanel()
        scroll = QScrollArea()
        scroll.setWidget(self._input_panel)
        scroll.setWidgetResizable(True)
        scroll.setMinimumWidth(300)
        scroll.setMaximumWidth(460)

        right = QSplitter(Qt.Orientation.Vertical)
        self._results_panel = ResultsPanel()
        self._chart_tabs = ChartTabsWidget()
        right.addWidget(self._results_panel)
        right.addWidget(self._chart_tabs)
        right.setSizes([220, 580])

        splitter.addWidget(scroll)
        splitter.addWidget(right)
        splitter.setStretchFactor(0, 0)
        splitter.setStretchFactor(1, 1)
        splitter.setSizes([340, 860])

        main_layout.addWidget(splitter)

    def _setup_menu(self):
        menubar = self.menuBar()

        # ── File menu ────────────────────────────────────────────────
        file_menu = menubar.addMenu("File")

        act_export_json = QAction("Export Results (JSON)...", self)
        act_export_json.triggered.connect(lambda *_: self._export_results())
        file_menu.addAction(act_export_json)

        act_export_current = QAction("Export Current Chart...", self)
        act_export_current.triggered.connect(
            lambda *_: self._export_current())
        file_menu.addAction(act_export_current)

        act_export_all = QAction("Export All Charts...", self)
        act_export_all.triggered.connect(lambda *_: self._export_all())
        file_menu.addAction(act_export_all)

        file_menu.addSeparator()

        act_exit = QAction("Exit", self)
        act_exit.triggered.connect(self.close)
        file_menu.addAction(act_exit)

        # ── Examples menu ────────────────────────────────────────────
        examples_menu = menubar.addMenu("Examples")
        for example in EXAMPLES:
            act = QAction(
                f"{example.label}:  ∫ {example.expression} dx "
                f"on [{example.lower:.4g}, {example.upper:.4g}]",
                self,
            )
            act.triggered.connect(
                lambda checked=False, ex=example: self._load_example(ex))
            examples_menu.addAction(act)

        # ── Help menu ────────────────────────────────────────────────
        help_menu = menubar.addMenu("Help")
        act_about = QAction("About", self)
        act_about.triggered.connect(lambda *_: self._show_about())
        help_menu.addAction(act_about)

    def _connect_signals(self):
        self._input_panel.calculate_button.clicked.connect(
            lambda *_: self._on_calculate())
        self._input_panel.reset_button.clicked.connect(
            lambda *_: self._on_reset())
        self._input_panel.export_button.clicked.connect(
            lambda *_: self._export_results())
        self._results_panel.convergence_requested.connect(
            self._on_convergence)
        self._results_panel.history_cleared.connect(self._clear_history)

    # ── Slots ────────────────────────────────────────────────────────

    def _on_calculate(self):
        request = self._input_panel.get_request()
        self.statusBar().showMessage("Calculating...")
        try:
            with warnings.catch_warnings(record=True) as caught:
                warnings.simplefilter("always")
                report = run_calculation(request)
        except ValueError as exc:
            self._input_panel.show_status(str(exc), "error")
            self.statusBar().showMessage("Calculation failed")
            QMessageBox.warning(self, "Calculation Error", str(exc))
            return

        previous = self._report.request if self._report else None
        if previous is None or (
            (previous.expression, previous.lower, previous.upper)
            != (request.expression, request.lower, request.upper)
        ):
            self._clear_history()

        self._report = report
        self._results_panel.set_report(report)
        try:
            self._chart_tabs.update_report(report)
        except (ValueError, RuntimeError) as exc:
            # Results are valid even if a chart fails to draw
            print(f"[Quadrature] Chart render warning: {exc}",
                  file=sys.stderr)

        self._input_panel.export_button.setEnabled(True)
        notes = sorted({str(w.message) for w in caught})
        if notes:
            self._input_panel.show_status(" ".join(notes), "warning")
        else:
            self._input_panel.show_status(
                f"Reference value: {report.reference_value:.12g}", "ok")
        self.statusBar().showMessage(
            f"Calculated {len(report.results)} method(s)", 5000)

    def _on_convergence(self, method_key):
        if self._report is None:
            QMessageBox.warning(self, "No Results",
                                "Press Calculate before analysing convergence.")
            return
        self.statusBar().showMessage("Analysing convergence...")
        try:
            series = run_convergence(self._report.request, method_key)
        except ValueError as exc:
            QMessageBox.critical(self, "Convergence Error", str(exc))
            self.statusBar().showMessage("Convergence analysis failed")
            return
        self._convergence[method_key] = series
        self._chart_tabs.update_convergence(
            list(self._convergence.values()),
            reference=self._report.reference_value,
        )
        self.statusBar().showMessage(
            f"Convergence: {series.method_name}, {len(series)} steps", 5000)

    def _clear_history(self):
        self._convergence = {}
        self._chart_tabs.update_convergence([], reference=None)

    def _on_reset(self):
        self._report = None
        self._convergence = {}
        self._results_panel.clear()
        self._chart_tabs.clear_all()
        self.statusBar().showMessage("Reset", 3000)

    def _load_example(self, example):
        self._input_panel.load_example(example)
        self._on_calculate()

    # ── Export ───────────────────────────────────────────────────────

    def _export_results(self):
        if self._report is None:
            QMessageBox.warning(self, "Nothing to Export",
                                "Press Calculate first.")
            return
        default = f"integration-results-{self._report.timestamp[:19]}.json"
        path, _ = QFileDialog.getSaveFileName(
            self, "Export Results as JSON",
            default.replace(':', '-'), "JSON Files (*.json);;All Files (*)",
        )
        if not path:
            return
        if not path.lower().endswith('.json'):
            path += '.json'
        try:
            export_results_json(self._report, path)
        except OSError as exc:
            QMessageBox.critical(self, "Export Error",
                                 f"Failed to export: {exc}")
            return
        self.statusBar().showMessage(
            f"Exported to {os.path.basename(path)}", 5000)

    def _export_current(self):
        current_tab = self._chart_tabs.currentWidget()
        if current_tab is None or not hasattr(current_tab, 'fig'):
            QMessageBox.warning(self, "Nothing to Export",
                                "No chart is currently displayed.")
            return
        path, _ = QFileDialog.getSaveFileName(
            self, "Export Chart as PNG", "",
            "PNG Files (*.png);;All Files (*)",
        )
        if not path:
            return
        if not path.lower().endswith('.png'):
            path += '.png'
        try:
            export_png(current_tab.fig, path)
        except (OSError, ValueError) as exc:
            QMessageBox.critical(self, "Export Error",
                                 f"Failed to export: {exc}")
            return
        self.statusBar().showMessage(
            f"Exported to {os.path.basename(path)}", 5000)

    def _export_all(self):
        if self._report is None:
            QMessageBox.warning(self, "Nothing to Export",
                                "Press Calculate first.")
            return
        folder = QFileDialog.getExistingDirectory(
            self, "Select Output Folder for All Charts")
        if not folder:
            return
        try:
            figures = self._chart_tabs.get_all_figures(
                self._report, list(self._convergence.values()),
                reference=self._report.reference_value,
            )
            paths = export_all_charts(figures, folder)
        except (OSError, ValueError) as exc:
            QMessageBox.critical(self, "Export Error",
                                 f"Failed to export charts:\n\n{exc}")
            return
        QMessageBox.information(
            self, "Export Complete",
            f"Exported {len(paths)} charts to:\n\n{folder}",
        )

    def _show_about(self):
        QMessageBox.about(
            self,
            f"About {APP_NAME}",
            f"<h3>{APP_NAME} v{APP_VERSION}</h3>"
            f"<p>Compares the trapezoidal rule, Simpson's 1/3 and 3/8 "
            f"rules and Monte Carlo integration against a high-resolution "
            f"Simpson reference value.</p>"
            f"<p>Relative error falls back to absolute error when the "
            f"reference value is exactly zero.</p>",
        )
