"""
Theme for Quadrature Lab.

Dark Qt stylesheet for the main window and a helper that pushes a
matplotlib style dict into ``rcParams`` before charts are drawn.
"""

from .constants import DARK_COLORS


def get_dark_stylesheet() -> str:
    """Qt stylesheet built from ``DARK_COLORS``."""
    c = DARK_COLORS
    return f"""
    QMainWindow, QWidget {{
        background-color: {c['bg']};
        color: {c['fg']};
        font-size: 13px;
    }}
    QGroupBox {{
        border: 1px solid {c['border']};
        border-radius: 6px;
        margin-top: 12px;
        padding-top: 16px;
        font-weight: bold;
        color: {c['accent']};
    }}
    QGroupBox::title {{
        subcontrol-origin: margin;
        left: 12px;
        padding: 0 6px;
    }}
    QTabWidget::pane {{
        border: 1px solid {c['border']};
    }}
    QTabBar::tab {{
        background-color: {c['bg_alt']};
        color: {c['fg_dim']};
        padding: 6px 14px;
        border: 1px solid {c['border']};
        border-bottom: none;
    }}
    QTabBar::tab:selected {{
        background-color: {c['bg_widget']};
        color: {c['accent']};
        border-bottom: 2px solid {c['accent']};
    }}
    QPushButton {{
        background-color: {c['bg_widget']};
        border: 1px solid {c['border']};
        border-radius: 4px;
        padding: 6px 14px;
    }}
    QPushButton:hover {{
        border-color: {c['accent']};
    }}
    QPushButton:disabled {{
        color: {c['fg_dim']};
        background-color: {c['bg']};
    }}
    QLineEdit, QSpinBox, QDoubleSpinBox, QComboBox {{
        background-color: {c['bg_input']};
        border: 1px solid {c['border']};
        border-radius: 4px;
        padding: 3px 6px;
    }}
    QLineEdit:focus, QSpinBox:focus, QDoubleSpinBox:focus {{
        border-color: {c['accent']};
    }}
    QTableWidget {{
        background-color: {c['bg_widget']};
        alternate-background-color: {c['bg_alt']};
        gridline-color: {c['border']};
        border: 1px solid {c['border']};
    }}
    QHeaderView::section {{
        background-color: {c['bg_alt']};
        color: {c['fg']};
        padding: 4px 6px;
        border: 1px solid {c['border']};
        font-weight: bold;
    }}
    QCheckBox::indicator {{
        width: 15px; height: 15px;
        border: 1px solid {c['border']};
        border-radius: 3px;
        background-color: {c['bg_input']};
    }}
    QCheckBox::indicator:checked {{
        background-color: {c['accent']};
    }}
    QStatusBar, QMenuBar {{
        background-color: {c['bg_alt']};
        color: {c['fg_dim']};
    }}
    QMenu {{
        background-color: {c['bg_widget']};
        border: 1px solid {c['border']};
    }}
    QMenu::item:selected, QMenuBar::item:selected {{
        background-color: {c['selection']};
    }}
    QSplitter::handle {{
        background-color: {c['border']};
    }}
    """


def apply_plot_style(style_dict: dict) -> None:
    """Copy *style_dict* (``PLOT_STYLE_DARK`` / ``_LIGHT``) into rcParams."""
    import matplotlib as mpl
    mpl.rcParams.update(style_dict)
