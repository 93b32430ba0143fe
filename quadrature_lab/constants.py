"""
Constants for Quadrature Lab.

Centralises engine defaults and limits, method keys, the GUI colour
palette, the per-method plot palette, matplotlib style dicts and export
settings.
"""

# ── Method keys (registry order = display order) ─────────────────────────
METHOD_TRAPEZOIDAL = "trapezoidal"
METHOD_SIMPSON = "simpson"
METHOD_SIMPSON_38 = "simpson38"
METHOD_MONTE_CARLO = "monte-carlo"

METHOD_KEYS = (
    METHOD_TRAPEZOIDAL,
    METHOD_SIMPSON,
    METHOD_SIMPSON_38,
    METHOD_MONTE_CARLO,
)

METHOD_NAMES = {
    METHOD_TRAPEZOIDAL: "Trapezoidal Rule",
    METHOD_SIMPSON: "Simpson's 1/3 Rule",
    METHOD_SIMPSON_38: "Simpson's 3/8 Rule",
    METHOD_MONTE_CARLO: "Monte Carlo",
}

# ── Input defaults ───────────────────────────────────────────────────────
DEFAULT_EXPRESSION = "x**2"
DEFAULT_LOWER = 0.0
DEFAULT_UPPER = 1.0
DEFAULT_INTERVALS = 100
DEFAULT_SAMPLES = 1000
DEFAULT_METHODS = (METHOD_TRAPEZOIDAL, METHOD_SIMPSON)

# ── Limits ───────────────────────────────────────────────────────────────
MIN_INTERVALS = 2
MIN_SAMPLES = 10
MAX_INTERVALS = 1_000_000      # GUI spin-box ceiling
MAX_SAMPLES = 10_000_000       # GUI spin-box ceiling
LARGE_COUNT_WARNING = 10_000_000

# ── Engine parameters ────────────────────────────────────────────────────
DEFAULT_REFERENCE_INTERVALS = 10_000
DEFAULT_PROBE_POINT = 1.0
DEFAULT_CONVERGENCE_STEPS = 8
CONVERGENCE_BASE_EXPONENT = 2          # count = 2 ** (i + 2)
MONTE_CARLO_CONVERGENCE_SCALE = 10
MONTE_CARLO_CURVE_POINTS = 100
MONTE_CARLO_VISUALIZATION_CAP = 500
DEFAULT_CONFIDENCE = 0.95

# ── Font family fallback chain ───────────────────────────────────────────
FONT_FAMILIES = [
    "Segoe UI", "DejaVu Sans", "Liberation Sans", "Noto Sans",
    "Ubuntu", "Helvetica", "Arial", "sans-serif",
]

# ── Dark GUI colour palette ──────────────────────────────────────────────
DARK_COLORS = {
    'bg':           '#1e1e2e',
    'bg_alt':       '#252536',
    'bg_widget':    '#2a2a3c',
    'bg_input':     '#333348',
    'fg':           '#cdd6f4',
    'fg_dim':       '#9399b2',
    'fg_bright':    '#ffffff',
    'accent':       '#89b4fa',
    'accent_hover': '#74c7ec',
    'green':        '#a6e3a1',
    'yellow':       '#f9e2af',
    'red':          '#f38ba8',
    'border':       '#45475a',
    'selection':    '#45475a',
}

# ── Per-method plot colours (stroke, fill) ───────────────────────────────
METHOD_PALETTE = {
    METHOD_TRAPEZOIDAL: {'stroke': '#1f77b4', 'fill': '#66ccff'},
    METHOD_SIMPSON:     {'stroke': '#2ca02c', 'fill': '#66ff99'},
    METHOD_SIMPSON_38:  {'stroke': '#9467bd', 'fill': '#c5b0d5'},
    METHOD_MONTE_CARLO: {'stroke': '#d95f02', 'fill': '#ff9966'},
}
CURVE_COLOR = '#C00000'
REFERENCE_LINE_COLOR = '#333333'

# ── Export settings ──────────────────────────────────────────────────────
EXPORT_DPI = 600
EXPORT_WIDTH_INCHES = 6.0
CLIPBOARD_DPI = 150

# ── Matplotlib dark-theme style dict (GUI preview) ──────────────────────
PLOT_STYLE_DARK = {
    'figure.facecolor':  DARK_COLORS['bg_alt'],
    'axes.facecolor':    DARK_COLORS['bg_widget'],
    'axes.edgecolor':    DARK_COLORS['border'],
    'axes.labelcolor':   DARK_COLORS['fg'],
    'text.color':        DARK_COLORS['fg'],
    'xtick.color':       DARK_COLORS['fg_dim'],
    'ytick.color':       DARK_COLORS['fg_dim'],
    'xtick.labelsize':   7,
    'ytick.labelsize':   7,
    'axes.labelsize':    8,
    'axes.titlesize':    9,
    'legend.fontsize':   7,
    'grid.color':        DARK_COLORS['border'],
    'legend.facecolor':  DARK_COLORS['bg_widget'],
    'legend.edgecolor':  DARK_COLORS['border'],
}

# ── Matplotlib light-theme style dict (export) ───────────────────────────
PLOT_STYLE_LIGHT = {
    'figure.facecolor':  '#ffffff',
    'axes.facecolor':    '#ffffff',
    'axes.edgecolor':    '#333333',
    'axes.labelcolor':   '#1a1a2e',
    'text.color':        '#1a1a2e',
    'xtick.color':       '#333333',
    'ytick.color':       '#333333',
    'grid.color':        '#cccccc',
    'legend.facecolor':  '#ffffff',
    'legend.edgecolor':  '#999999',
}
