"""
Results panel for Quadrature Lab.

A table with one row per method (estimate, count, time, absolute and
relative error) above a small convergence toolbar.  The panel only
displays reports; the main window runs the calculations.
"""

from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton, QComboBox,
    QTableWidget, QTableWidgetItem, QHeaderView, QAbstractItemView,
)
from PySide6.QtCore import Qt, Signal

from .constants import DARK_COLORS, METHOD_KEYS, METHOD_NAMES
from .data_model import CalculationReport, IntegrationResult
from .monte_carlo import confidence_interval

_COLUMNS = [
    "Method", "Estimate", "Intervals / samples", "Time (ms)",
    "Abs. error", "Rel. error",
]


def format_relative_error(result: IntegrationResult) -> str:
    """Relative error text, marking the zero-reference fallback."""
    if result.error is None:
        return "—"
    if result.error.relative_is_absolute:
        return f"{result.error.relative:.3e} (abs, ref = 0)"
    return f"{result.error.relative:.4g} %"


class ResultsPanel(QWidget):
    """Results table plus the per-method convergence controls."""

    # Emits the method key to analyse
    convergence_requested = Signal(str)
    history_cleared = Signal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self._setup_ui()
        self._btn_converge.clicked.connect(
            lambda *_: self.convergence_requested.emit(
                self._cmb_method.currentData())
        )
        self._btn_clear.clicked.connect(
            lambda *_: self.history_cleared.emit())

    def _setup_ui(self):
        layout = QVBoxLayout(self)
        layout.setContentsMargins(4, 4, 4, 4)
        layout.setSpacing(4)

        self._lbl_reference = QLabel("Reference value: —")
        self._lbl_reference.setStyleSheet(
            f"color: {DARK_COLORS['accent']}; font-weight: bold;")
        layout.addWidget(self._lbl_reference)

        self._table = QTableWidget(0, len(_COLUMNS))
        self._table.setHorizontalHeaderLabels(_COLUMNS)
        self._table.setAlternatingRowColors(True)
        self._table.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)
        self._table.verticalHeader().setVisible(False)
        self._table.horizontalHeader().setSectionResizeMode(
            QHeaderView.ResizeMode.Stretch)
        layout.addWidget(self._table, 1)

        row = QHBoxLayout()
        row.addWidget(QLabel("Convergence:"))
        self._cmb_method = QComboBox()
        for key in METHOD_KEYS:
            self._cmb_method.addItem(METHOD_NAMES[key], key)
        row.addWidget(self._cmb_method)
        self._btn_converge = QPushButton("Analyze Convergence")
        self._btn_converge.setEnabled(False)
        row.addWidget(self._btn_converge)
        self._btn_clear = QPushButton("Clear History")
        row.addWidget(self._btn_clear)
        row.addStretch()
        layout.addLayout(row)

    def set_report(self, report: CalculationReport) -> None:
        """Fill the table from *report*."""
        self._lbl_reference.setText(
            f"Reference value (Simpson, high resolution): "
            f"{report.reference_value:.12g}"
        )
        self._table.setRowCount(0)
        for result in report.results.values():
            r = self._table.rowCount()
            self._table.insertRow(r)
            error = result.error
            cells = [
                result.method_name,
                f"{result.value:.10g}",
                f"{result.sample_count:,}",
                f"{result.elapsed_time_ms:.3f}",
                "—" if error is None else f"{error.absolute:.3e}",
                format_relative_error(result),
            ]
            for col, text in enumerate(cells):
                item = QTableWidgetItem(text)
                if col > 0:
                    item.setTextAlignment(
                        Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter)
                self._table.setItem(r, col, item)
            if result.standard_error is not None:
                low, high = confidence_interval(result)
                self._table.item(r, 1).setToolTip(
                    f"Standard error {result.standard_error:.3e}\n"
                    f"95% interval [{low:.8g}, {high:.8g}]"
                )
        self._btn_converge.setEnabled(True)

    def clear(self) -> None:
        self._lbl_reference.setText("Reference value: —")
        self._table.setRowCount(0)
        self._btn_converge.setEnabled(False)
