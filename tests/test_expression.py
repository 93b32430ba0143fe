"""Unit tests for the expression tokenizer, parser and compiled function."""
import math

import pytest

from quadrature_lab.errors import InvalidExpression
from quadrature_lab.expression import (
    END, IDENT, LPAREN, NUMBER, OP, RPAREN, compile_expression, parse,
    tokenize,
)


class TestTokenize:
    def test_exp_is_one_identifier(self):
        kinds = [(t.kind, t.text) for t in tokenize("exp(x)")]
        assert kinds == [
            (IDENT, "exp"), (LPAREN, "("), (IDENT, "x"), (RPAREN, ")"),
            (END, ""),
        ]

    @pytest.mark.parametrize("text", ["12", "1.5", ".5", "3.", "1e-3",
                                      "2.5E+4"])
    def test_number_forms(self, text):
        tokens = tokenize(text)
        assert tokens[0].kind == NUMBER
        assert tokens[0].text == text
        assert tokens[1].kind == END

    def test_double_star_is_power(self):
        tokens = tokenize("x**2")
        assert tokens[1].kind == OP
        assert tokens[1].text == "^"

    def test_positions_skip_whitespace(self):
        tokens = tokenize("  x +  1")
        assert [t.position for t in tokens] == [2, 4, 7, 8]

    def test_unexpected_character(self):
        with pytest.raises(InvalidExpression) as info:
            tokenize("x + $")
        assert info.value.position == 4
        assert "'$'" in str(info.value)

    @pytest.mark.parametrize("text, position", [
        ("x²", 1), ("x^²", 2), (".²", 0), ("2 + ①", 4),
    ])
    def test_non_ascii_digits_rejected(self, text, position):
        with pytest.raises(InvalidExpression) as info:
            compile_expression(text)
        assert info.value.position == position


class TestParse:
    def test_empty_expression(self):
        with pytest.raises(InvalidExpression):
            parse("   ")

    @pytest.mark.parametrize("text", [
        "(x + 1",
        "x + 1)",
        "x 2",
        "sin x",
        "x(2)",
        "pi(1)",
        "y + 1",
        "2 *",
        "*2",
    ])
    def test_malformed(self, text):
        with pytest.raises(InvalidExpression):
            parse(text)

    def test_unknown_identifier_names_it(self):
        with pytest.raises(InvalidExpression) as info:
            parse("x + foo")
        assert "foo" in str(info.value)
        assert info.value.position == 4

    def test_function_without_call(self):
        with pytest.raises(InvalidExpression) as info:
            parse("sqrt + 1")
        assert "'('" in str(info.value)


class TestEvaluation:
    def test_exp_at_one(self):
        assert compile_expression("exp(x)")(1.0) == pytest.approx(math.e)

    @pytest.mark.parametrize("text, x, expected", [
        ("-x^2", 3.0, -9.0),
        ("-2^2", 0.0, -4.0),
        ("2^3^2", 0.0, 512.0),
        ("2*3+4", 0.0, 10.0),
        ("2+3*4", 0.0, 14.0),
        ("(2+3)*4", 0.0, 20.0),
        ("8/4/2", 0.0, 1.0),
        ("x**2", 3.0, 9.0),
        ("2^-1", 0.0, 0.5),
        ("--x", 2.0, 2.0),
        ("+x", 2.0, 2.0),
        ("abs(x)", -2.5, 2.5),
        ("ln(e)", 0.0, 1.0),
        ("log(e^2)", 0.0, 2.0),
        ("sin(pi/2)", 0.0, 1.0),
        ("cos(π)", 0.0, -1.0),
        ("sqrt(x)*sqrt(x)", 2.0, 2.0),
        ("tan(0)", 0.0, 0.0),
        ("1e-3*x", 1000.0, 1.0),
    ])
    def test_values(self, text, x, expected):
        f = compile_expression(text, probe=None)
        assert f(x) == pytest.approx(expected)

    def test_expression_is_kept(self):
        assert compile_expression("x + 1").expression == "x + 1"


class TestEvaluationErrors:
    def test_division_by_zero(self):
        with pytest.raises(InvalidExpression):
            compile_expression("1/0")

    def test_sqrt_of_negative(self):
        with pytest.raises(InvalidExpression):
            compile_expression("sqrt(-1)")

    def test_log_of_zero(self):
        with pytest.raises(InvalidExpression):
            compile_expression("log(x - 1)")

    def test_overflow(self):
        with pytest.raises(InvalidExpression):
            compile_expression("exp(1000*x)")

    def test_fractional_power_of_negative(self):
        with pytest.raises(InvalidExpression):
            compile_expression("x^0.5", probe=-1.0)

    def test_probe_none_skips_evaluation(self):
        f = compile_expression("1/x", probe=None)
        with pytest.raises(InvalidExpression) as info:
            f(0.0)
        assert "x=0.0" in str(info.value)

    def test_custom_probe(self):
        f = compile_expression("sqrt(x - 2)", probe=3.0)
        assert f(6.0) == pytest.approx(2.0)

    def test_errors_are_value_errors(self):
        with pytest.raises(ValueError):
            compile_expression("bogus")
