"""Tests for infix to postfix conversion."""

import pytest

from exprcalc.exceptions import UnbalancedParensError, UnexpectedTokenError
from exprcalc.expression import (
    Identifier,
    Number,
    Operator,
    Paren,
    to_postfix,
    token_text,
    tokenize,
)


def postfix_text(expression: str) -> str:
    """Render the postfix form of ``expression`` as space separated tokens."""
    return " ".join(token_text(t) for t in to_postfix(tokenize(expression)))


class TestPrecedence:
    """Operator precedence and associativity."""

    def test_single_operator(self):
        tokens = [Number(2.0), Operator.PLUS, Number(3.0)]
        assert to_postfix(tokens) == [Number(2.0), Number(3.0), Operator.PLUS]

    def test_left_associative_chain(self):
        assert postfix_text("8+2+9+3") == "8 2 + 9 + 3 +"

    def test_multiplication_binds_tighter(self):
        assert postfix_text("8+9*2+3") == "8 9 2 * + 3 +"

    def test_division_and_subtraction(self):
        assert postfix_text("8/2-9/3") == "8 2 / 9 3 / -"

    def test_subtraction_is_left_associative(self):
        assert postfix_text("10-4-3") == "10 4 - 3 -"

    def test_power_is_right_associative(self):
        assert postfix_text("2^3^2") == "2 3 2 ^ ^"

    def test_parentheses_override_precedence(self):
        assert postfix_text("(2+3)*4") == "2 3 + 4 *"

    def test_nested_parentheses(self):
        assert postfix_text("((1+2)*(3-4))/5") == "1 2 + 3 4 - * 5 /"


class TestUnaryOperators:
    """Unary minus becomes ``0 x -``; unary plus is dropped."""

    def test_leading_minus(self):
        assert postfix_text("-2+3") == "0 2 - 3 +"

    def test_minus_after_parenthesis(self):
        assert postfix_text("(-x)") == "0 x -"

    def test_minus_after_operator(self):
        assert postfix_text("2*-3") == "2 0 3 - *"

    def test_minus_binds_tighter_than_power(self):
        assert postfix_text("-2^2") == "0 2 - 2 ^"

    def test_minus_in_exponent(self):
        assert postfix_text("2^-3") == "2 0 3 - ^"

    def test_double_minus(self):
        assert postfix_text("--x") == "0 0 x - -"

    def test_negated_function_call(self):
        assert postfix_text("-sin(x)") == "0 x sin -"

    def test_unary_plus_is_dropped(self):
        assert postfix_text("+2*+3") == "2 3 *"


class TestFunctionCalls:
    """Identifiers followed by '(' are emitted after their argument."""

    def test_simple_call(self):
        tokens = tokenize("sqrt(9)")
        assert to_postfix(tokens) == [Number(9.0), Identifier("sqrt")]

    def test_call_with_compound_argument(self):
        assert postfix_text("sqrt(x^2+y^2)") == "x 2 ^ y 2 ^ + sqrt"

    def test_call_then_power(self):
        assert postfix_text("cos(pi/4)^2") == "pi 4 / cos 2 ^"

    def test_nested_calls(self):
        assert postfix_text("abs(sin(-x))") == "0 x - sin abs"

    def test_identifier_without_call_is_operand(self):
        assert postfix_text("pi*r^2") == "pi r 2 ^ *"

    def test_full_expression(self):
        assert postfix_text("sin(2.0 - pi) * cos((-pi + 2.0) / 2.0)") == (
            "2 pi - sin 0 pi - 2 + 2 / cos *"
        )


class TestUnbalancedParentheses:
    """Mismatched parentheses are rejected with the offending token index."""

    def test_unclosed_left_paren(self):
        with pytest.raises(UnbalancedParensError) as exc_info:
            to_postfix(tokenize("(1+2"))
        assert exc_info.value.token_index == 0
        assert exc_info.value.code == "UNBALANCED_PARENS"
        assert exc_info.value.details["stage"] == "convert"

    def test_unmatched_right_paren(self):
        with pytest.raises(UnbalancedParensError) as exc_info:
            to_postfix(tokenize("1+2)"))
        assert exc_info.value.token_index == 3

    def test_unclosed_function_call(self):
        with pytest.raises(UnbalancedParensError):
            to_postfix(tokenize("sqrt(4"))

    def test_right_paren_before_left(self):
        with pytest.raises(UnbalancedParensError):
            to_postfix([Paren.RIGHT, Paren.LEFT])

    def test_empty_input(self):
        assert to_postfix([]) == []


class TestOperandPlacement:
    """An operand, function or '(' right after an operand is rejected."""

    @pytest.mark.parametrize("expression,token,token_index", [
        ("2 3 +", "3", 1),
        ("2*3 4+", "4", 3),
        ("4 sqrt", "sqrt", 1),
        ("x y *", "y", 1),
        ("2(3)", "(", 1),
        ("(1+2)(3)", "(", 5),
        ("pi sin(x)", "sin", 1),
    ])
    def test_adjacent_operands(self, expression, token, token_index):
        with pytest.raises(UnexpectedTokenError) as exc_info:
            to_postfix(tokenize(expression))
        assert exc_info.value.token == token
        assert exc_info.value.token_index == token_index
        assert exc_info.value.code == "UNEXPECTED_TOKEN"
        assert exc_info.value.details["stage"] == "convert"

    def test_operand_after_closing_paren(self):
        with pytest.raises(UnexpectedTokenError):
            to_postfix(tokenize("(1+2) 3"))

    def test_operands_separated_by_operators_are_accepted(self):
        assert postfix_text("x*y+sqrt(4)") == "x y * 4 sqrt +"
