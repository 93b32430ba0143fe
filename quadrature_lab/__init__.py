"""
Quadrature Lab v1.0.0

Numerical integration workbench.  Compiles a single-variable expression
typed by the user, integrates it over ``[a, b]`` with the trapezoidal
rule, Simpson's 1/3 and 3/8 rules and Monte Carlo sampling, and compares
every estimate against a high-resolution Simpson reference value.

The numeric engine (``expression``, ``quadrature``, ``monte_carlo``,
``reference``, ``convergence``, ``visualization``, ``calculation``) has
no GUI dependency.  The PySide6 desktop front end lives in the ``gui_*``
modules and is started with ``python -m quadrature_lab``.
"""

APP_NAME = "Quadrature Lab"
APP_VERSION = "1.0.0"
APP_DATE = "2026-10-19"
__version__ = APP_VERSION
