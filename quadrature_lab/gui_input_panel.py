"""
Input panel (left side) for Quadrature Lab.

Integrand expression, bounds, interval and sample counts, method
selection, optional Monte Carlo seed, and the Calculate / Reset /
Export buttons.  The panel's state is read back as a
``CalculationRequest``.
"""

from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QFormLayout, QGroupBox,
    QLabel, QPushButton, QLineEdit, QCheckBox, QSpinBox, QDoubleSpinBox,
)
from PySide6.QtCore import Signal

from .constants import (
    DARK_COLORS, DEFAULT_EXPRESSION, DEFAULT_INTERVALS, DEFAULT_LOWER,
    DEFAULT_METHODS, DEFAULT_SAMPLES, DEFAULT_UPPER, MAX_INTERVALS,
    MAX_SAMPLES, METHOD_KEYS, METHOD_NAMES, MIN_INTERVALS, MIN_SAMPLES,
)
from .data_model import CalculationRequest
from .examples import ExampleIntegral

_BOUND_LIMIT = 1.0e6
_MAX_SEED = 2 ** 31 - 1


class InputPanel(QWidget):
    """Left-side panel collecting everything a calculation needs."""

    # Emitted whenever any input changes (no arguments)
    inputs_changed = Signal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self._setup_ui()
        self._connect_signals()

    # ── UI setup ─────────────────────────────────────────────────────

    def _setup_ui(self):
        layout = QVBoxLayout(self)
        layout.setContentsMargins(6, 6, 6, 6)
        layout.setSpacing(8)

        # ── Group 1: Function ────────────────────────────────────────
        grp_func = QGroupBox("Function f(x)")
        func_layout = QVBoxLayout(grp_func)
        self._edt_expression = QLineEdit(DEFAULT_EXPRESSION)
        self._edt_expression.setPlaceholderText("e.g. sin(x)^2 + exp(-x)")
        func_layout.addWidget(self._edt_expression)
        hint = QLabel(
            "Operators + - * / ^ (or **), functions sin cos tan sqrt "
            "exp log ln abs, constants pi and e."
        )
        hint.setWordWrap(True)
        hint.setStyleSheet(
            f"color: {DARK_COLORS['fg_dim']}; font-size: 11px;")
        func_layout.addWidget(hint)
        layout.addWidget(grp_func)

        # ── Group 2: Bounds ──────────────────────────────────────────
        grp_bounds = QGroupBox("Interval [a, b]")
        bounds_layout = QFormLayout(grp_bounds)
        self._spn_lower = self._make_bound_spin(DEFAULT_LOWER)
        self._spn_upper = self._make_bound_spin(DEFAULT_UPPER)
        bounds_layout.addRow("Lower (a):", self._spn_lower)
        bounds_layout.addRow("Upper (b):", self._spn_upper)
        layout.addWidget(grp_bounds)

        # ── Group 3: Precision ───────────────────────────────────────
        grp_precision = QGroupBox("Precision")
        precision_layout = QFormLayout(grp_precision)
        self._spn_intervals = QSpinBox()
        self._spn_intervals.setRange(MIN_INTERVALS, MAX_INTERVALS)
        self._spn_intervals.setValue(DEFAULT_INTERVALS)
        self._spn_intervals.setToolTip(
            "Simpson's 1/3 rounds up to an even count, "
            "Simpson's 3/8 to a multiple of 3."
        )
        self._spn_samples = QSpinBox()
        self._spn_samples.setRange(MIN_SAMPLES, MAX_SAMPLES)
        self._spn_samples.setValue(DEFAULT_SAMPLES)
        precision_layout.addRow("Intervals:", self._spn_intervals)
        precision_layout.addRow("MC samples:", self._spn_samples)
        layout.addWidget(grp_precision)

        # ── Group 4: Methods ─────────────────────────────────────────
        grp_methods = QGroupBox("Methods")
        methods_layout = QVBoxLayout(grp_methods)
        methods_layout.setSpacing(2)
        self._method_checks = {}
        for key in METHOD_KEYS:
            chk = QCheckBox(METHOD_NAMES[key])
            chk.setChecked(key in DEFAULT_METHODS)
            methods_layout.addWidget(chk)
            self._method_checks[key] = chk
        layout.addWidget(grp_methods)

        # ── Group 5: Random seed ─────────────────────────────────────
        grp_seed = QGroupBox("Monte Carlo Seed")
        seed_layout = QHBoxLayout(grp_seed)
        self._chk_seed = QCheckBox("Fixed seed")
        self._spn_seed = QSpinBox()
        self._spn_seed.setRange(0, _MAX_SEED)
        self._spn_seed.setValue(42)
        self._spn_seed.setVisible(False)
        seed_layout.addWidget(self._chk_seed)
        seed_layout.addWidget(self._spn_seed)
        seed_layout.addStretch()
        layout.addWidget(grp_seed)

        # ── Actions ──────────────────────────────────────────────────
        c = DARK_COLORS
        self._btn_calculate = QPushButton("Calculate")
        self._btn_calculate.setStyleSheet(
            f"QPushButton {{ background-color: {c['accent']}; "
            f"color: {c['bg']}; font-weight: bold; "
            f"font-size: 14px; padding: 10px; }}"
            f"QPushButton:hover {{ background-color: {c['accent_hover']}; }}"
        )
        layout.addWidget(self._btn_calculate)

        row = QHBoxLayout()
        self._btn_reset = QPushButton("Reset")
        self._btn_export = QPushButton("Export Results (JSON)...")
        self._btn_export.setEnabled(False)
        row.addWidget(self._btn_reset)
        row.addWidget(self._btn_export)
        layout.addLayout(row)

        self._lbl_status = QLabel("")
        self._lbl_status.setWordWrap(True)
        self._lbl_status.setStyleSheet("font-size: 11px;")
        layout.addWidget(self._lbl_status)

        layout.addStretch()

    @staticmethod
    def _make_bound_spin(value: float) -> QDoubleSpinBox:
        spin = QDoubleSpinBox()
        spin.setRange(-_BOUND_LIMIT, _BOUND_LIMIT)
        spin.setDecimals(6)
        spin.setSingleStep(0.5)
        spin.setValue(value)
        return spin

    # ── Signal connections ───────────────────────────────────────────

    def _connect_signals(self):
        self._chk_seed.toggled.connect(self._spn_seed.setVisible)
        self._btn_reset.clicked.connect(lambda *_: self.reset())

        # Absorb each widget signal's argument; inputs_changed has none.
        self._edt_expression.textChanged.connect(
            lambda *_: self.inputs_changed.emit())
        for spin in (self._spn_lower, self._spn_upper,
                     self._spn_intervals, self._spn_samples,
                     self._spn_seed):
            spin.valueChanged.connect(lambda *_: self.inputs_changed.emit())
        for chk in list(self._method_checks.values()) + [self._chk_seed]:
            chk.toggled.connect(lambda *_: self.inputs_changed.emit())
        self.inputs_changed.connect(lambda: self.show_status(""))

    # ── Public API ───────────────────────────────────────────────────

    def get_request(self) -> CalculationRequest:
        """Current inputs as a ``CalculationRequest``."""
        methods = tuple(
            key for key in METHOD_KEYS if self._method_checks[key].isChecked()
        )
        seed = self._spn_seed.value() if self._chk_seed.isChecked() else None
        return CalculationRequest(
            expression=self._edt_expression.text().strip(),
            lower=self._spn_lower.value(),
            upper=self._spn_upper.value(),
            intervals=self._spn_intervals.value(),
            samples=self._spn_samples.value(),
            methods=methods,
            seed=seed,
        )

    def load_example(self, example: ExampleIntegral) -> None:
        """Fill the function and bounds from *example*."""
        self._edt_expression.setText(example.expression)
        self._spn_lower.setValue(example.lower)
        self._spn_upper.setValue(example.upper)
        self.show_status(f"Loaded example: {example.label}")

    def reset(self) -> None:
        """Restore every input to its default."""
        self._edt_expression.setText(DEFAULT_EXPRESSION)
        self._spn_lower.setValue(DEFAULT_LOWER)
        self._spn_upper.setValue(DEFAULT_UPPER)
        self._spn_intervals.setValue(DEFAULT_INTERVALS)
        self._spn_samples.setValue(DEFAULT_SAMPLES)
        for key, chk in self._method_checks.items():
            chk.setChecked(key in DEFAULT_METHODS)
        self._chk_seed.setChecked(False)
        self._btn_export.setEnabled(False)
        self.show_status("")

    def show_status(self, text: str, level: str = "info") -> None:
        color = {
            "info": DARK_COLORS['fg_dim'],
            "ok": DARK_COLORS['green'],
            "warning": DARK_COLORS['yellow'],
            "error": DARK_COLORS['red'],
        }.get(level, DARK_COLORS['fg_dim'])
        self._lbl_status.setText(text)
        self._lbl_status.setStyleSheet(f"color: {color}; font-size: 11px;")

    @property
    def calculate_button(self) -> QPushButton:
        return self._btn_calculate

    @property
    def reset_button(self) -> QPushButton:
        return self._btn_reset

    @property
    def export_button(self) -> QPushButton:
        return self._btn_export
