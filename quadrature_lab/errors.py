"""
Exception and warning types for Quadrature Lab.

Every engine error derives from ``ValueError`` so callers that already
guard user input with ``except ValueError`` keep working.  Recoverable
conditions are reported with ``warnings.warn`` using
``IntegrationWarning``.
"""

from typing import Optional


class QuadratureError(ValueError):
    """Base class for all engine errors."""


class InvalidExpression(QuadratureError):
    """Expression failed to tokenize, parse or evaluate to a finite float.

    Parameters
    ----------
    message : str
        Human-readable description.
    expression : str
        The offending source text.
    position : int or None
        0-based character offset of the problem, when known.
    """

    def __init__(self, message: str, expression: str = "",
                 position: Optional[int] = None):
        self.expression = expression
        self.position = position
        if position is not None:
            message = f"{message} (at position {position})"
        super().__init__(message)


class InvalidBounds(QuadratureError):
    """Lower bound is not strictly below the upper bound."""


class InvalidSampleCount(QuadratureError):
    """Interval or sample count below the method's minimum."""


class NoMethodSelected(QuadratureError):
    """A calculation was requested with an empty method set."""


class IntegrationWarning(UserWarning):
    """Non-fatal numeric diagnostic (degenerate error metric, huge counts)."""
