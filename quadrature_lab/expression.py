"""
Expression compiler for Quadrature Lab.

Turns the integrand text typed by the user into a callable
``f(x) -> float`` in three stages:

1. ``tokenize``: typed tokens (number, identifier, operator,
   parenthesis) with source positions.  Identifiers are whole tokens,
   so ``exp`` is one identifier and never an ``e`` next to an ``x``.
2. ``parse``: recursive descent into a small expression tree.
   Precedence, lowest first: ``+ -``, ``* /``, unary sign, ``^``.
   Power is right-associative and binds tighter than unary minus, so
   ``-x^2`` is ``-(x^2)`` and ``2^3^2`` is ``2^9``.  ``**`` is accepted
   as a synonym for ``^``.
3. Evaluation walks the tree with plain ``float`` arithmetic.  Nothing
   is ever passed to ``eval``.

Supported names: the variable ``x``; constants ``pi``, ``π``, ``e``;
single-argument functions ``sin cos tan sqrt exp log ln abs`` (``log``
and ``ln`` are both the natural logarithm).
"""

import math
import re
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from .constants import DEFAULT_PROBE_POINT
from .errors import InvalidExpression


# ── Tokens ───────────────────────────────────────────────────────────────

NUMBER = "NUMBER"
IDENT = "IDENT"
OP = "OP"
LPAREN = "LPAREN"
RPAREN = "RPAREN"
END = "END"

_NUMBER_RE = re.compile(r"(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_IDENT_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*|π")

FUNCTIONS: Dict[str, Callable[[float], float]] = {
    "sin": math.sin,
    "cos": math.cos,
    "tan": math.tan,
    "sqrt": math.sqrt,
    "exp": math.exp,
    "log": math.log,
    "ln": math.log,
    "abs": math.fabs,
}

CONSTANTS: Dict[str, float] = {
    "pi": math.pi,
    "π": math.pi,
    "e": math.e,
}

VARIABLE = "x"


@dataclass(frozen=True)
class Token:
    kind: str
    text: str
    position: int


def tokenize(expression: str) -> List[Token]:
    """Split *expression* into typed tokens, ending with an ``END`` token.

    Raises ``InvalidExpression`` on any character that cannot start a
    token.
    """
    tokens: List[Token] = []
    pos = 0
    length = len(expression)
    while pos < length:
        ch = expression[pos]
        if ch.isspace():
            pos += 1
            continue
        # ASCII digits only; str.isdigit also accepts superscripts
        match = _NUMBER_RE.match(expression, pos)
        if match:
            tokens.append(Token(NUMBER, match.group(), pos))
            pos = match.end()
            continue
        match = _IDENT_RE.match(expression, pos)
        if match:
            tokens.append(Token(IDENT, match.group(), pos))
            pos = match.end()
            continue
        if expression.startswith("**", pos):
            tokens.append(Token(OP, "^", pos))
            pos += 2
            continue
        if ch in "+-*/^":
            tokens.append(Token(OP, ch, pos))
        elif ch == "(":
            tokens.append(Token(LPAREN, ch, pos))
        elif ch == ")":
            tokens.append(Token(RPAREN, ch, pos))
        else:
            raise InvalidExpression(
                f"Unexpected character {ch!r}", expression, pos)
        pos += 1
    tokens.append(Token(END, "", length))
    return tokens


# ── Expression tree ──────────────────────────────────────────────────────

class Node:
    """Base class for tree nodes; ``evaluate`` returns a float."""

    def evaluate(self, x: float) -> float:
        raise NotImplementedError


class Number(Node):
    def __init__(self, value: float):
        self.value = value

    def evaluate(self, x):
        return self.value

    def __repr__(self):
        return f"Number({self.value!r})"


class Variable(Node):
    def evaluate(self, x):
        return x

    def __repr__(self):
        return "Variable()"


class Negate(Node):
    def __init__(self, operand: Node):
        self.operand = operand

    def evaluate(self, x):
        return -self.operand.evaluate(x)

    def __repr__(self):
        return f"Negate({self.operand!r})"


def _divide(left, right):
    return left / right


_BINARY = {
    "+": lambda left, right: left + right,
    "-": lambda left, right: left - right,
    "*": lambda left, right: left * right,
    "/": _divide,
    # math.pow raises for a negative base with a fractional exponent
    # instead of returning a complex number.
    "^": math.pow,
}


class BinaryOp(Node):
    def __init__(self, op: str, left: Node, right: Node):
        self.op = op
        self.left = left
        self.right = right
        self._apply = _BINARY[op]

    def evaluate(self, x):
        return self._apply(self.left.evaluate(x), self.right.evaluate(x))

    def __repr__(self):
        return f"BinaryOp({self.op!r}, {self.left!r}, {self.right!r})"


class Call(Node):
    def __init__(self, name: str, argument: Node):
        self.name = name
        self.argument = argument
        self._func = FUNCTIONS[name]

    def evaluate(self, x):
        return self._func(self.argument.evaluate(x))

    def __repr__(self):
        return f"Call({self.name!r}, {self.argument!r})"


# ── Parser ───────────────────────────────────────────────────────────────

class _Parser:
    """Recursive-descent parser over a token list."""

    def __init__(self, expression: str, tokens: List[Token]):
        self._source = expression
        self._tokens = tokens
        self._index = 0

    @property
    def _current(self) -> Token:
        return self._tokens[self._index]

    def _advance(self) -> Token:
        token = self._tokens[self._index]
        if token.kind != END:
            self._index += 1
        return token

    def _error(self, message: str, token: Token) -> InvalidExpression:
        return InvalidExpression(message, self._source, token.position)

    def _expect(self, kind: str, what: str) -> Token:
        token = self._current
        if token.kind != kind:
            found = "end of input" if token.kind == END else repr(token.text)
            raise self._error(f"Expected {what}, found {found}", token)
        return self._advance()

    def parse(self) -> Node:
        node = self._expression()
        token = self._current
        if token.kind != END:
            raise self._error(f"Unexpected {token.text!r}", token)
        return node

    def _expression(self) -> Node:
        node = self._term()
        while self._current.kind == OP and self._current.text in "+-":
            op = self._advance().text
            node = BinaryOp(op, node, self._term())
        return node

    def _term(self) -> Node:
        node = self._unary()
        while self._current.kind == OP and self._current.text in "*/":
            op = self._advance().text
            node = BinaryOp(op, node, self._unary())
        return node

    def _unary(self) -> Node:
        token = self._current
        if token.kind == OP and token.text in "+-":
            self._advance()
            operand = self._unary()
            return Negate(operand) if token.text == "-" else operand
        return self._power()

    def _power(self) -> Node:
        base = self._primary()
        if self._current.kind == OP and self._current.text == "^":
            self._advance()
            return BinaryOp("^", base, self._unary())
        return base

    def _primary(self) -> Node:
        token = self._current
        if token.kind == NUMBER:
            self._advance()
            return Number(float(token.text))
        if token.kind == LPAREN:
            self._advance()
            node = self._expression()
            self._expect(RPAREN, "')'")
            return node
        if token.kind == IDENT:
            return self._identifier()
        if token.kind == END:
            raise self._error("Unexpected end of expression", token)
        raise self._error(f"Unexpected {token.text!r}", token)

    def _identifier(self) -> Node:
        token = self._advance()
        name = token.text
        if name in FUNCTIONS:
            self._expect(LPAREN, f"'(' after function {name!r}")
            argument = self._expression()
            self._expect(RPAREN, "')'")
            return Call(name, argument)
        if self._current.kind == LPAREN:
            raise self._error(f"{name!r} is not a function", token)
        if name == VARIABLE:
            return Variable()
        if name in CONSTANTS:
            return Number(CONSTANTS[name])
        raise self._error(f"Unknown identifier {name!r}", token)


def parse(expression: str) -> Node:
    """Tokenize and parse *expression* into an expression tree."""
    if not isinstance(expression, str) or not expression.strip():
        raise InvalidExpression("Expression is empty", str(expression or ""))
    return _Parser(expression, tokenize(expression)).parse()


# ── Compiled function ────────────────────────────────────────────────────

class CompiledFunction:
    """Callable ``f(x) -> float`` backed by a parsed expression tree.

    Stateless and reentrant: one instance may be shared by every method
    of a calculation.  Any arithmetic failure or non-finite value raises
    ``InvalidExpression`` naming the abscissa.
    """

    def __init__(self, expression: str, tree: Node):
        self.expression = expression
        self.tree = tree

    def __call__(self, x) -> float:
        x = float(x)
        try:
            value = self.tree.evaluate(x)
        except ZeroDivisionError as exc:
            raise InvalidExpression(
                f"Division by zero evaluating {self.expression!r} at x={x!r}",
                self.expression,
            ) from exc
        except (ValueError, OverflowError) as exc:
            raise InvalidExpression(
                f"Cannot evaluate {self.expression!r} at x={x!r}: {exc}",
                self.expression,
            ) from exc
        if not math.isfinite(value):
            raise InvalidExpression(
                f"{self.expression!r} is not finite at x={x!r}",
                self.expression,
            )
        return value

    def __repr__(self):
        return f"CompiledFunction({self.expression!r})"


def compile_expression(
    expression: str,
    probe: Optional[float] = DEFAULT_PROBE_POINT,
) -> CompiledFunction:
    """Compile *expression* into a ``CompiledFunction``.

    Parameters
    ----------
    expression : str
        Integrand text, e.g. ``"exp(-x^2) + sin(pi*x)"``.
    probe : float or None
        Abscissa at which the compiled function is evaluated once as a
        sanity check.  ``None`` skips the probe.

    Raises
    ------
    InvalidExpression
        On a tokenize/parse error, an unknown identifier, or a failed
        probe (division by zero, domain error, non-finite result).
    """
    func = CompiledFunction(expression, parse(expression))
    if probe is not None:
        func(probe)
    return func
