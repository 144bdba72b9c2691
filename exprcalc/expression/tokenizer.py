"""Lexical scanner turning expression text into an infix token sequence."""

from __future__ import annotations

from typing import List

from exprcalc.exceptions import InvalidNumberError, UnexpectedCharacterError
from exprcalc.expression.tokens import (
    OPERATOR_SYMBOLS,
    Identifier,
    Number,
    Operator,
    Paren,
    Token,
)

_DIGITS = frozenset("0123456789")
_NUMBER_CHARS = _DIGITS | {"."}


def _is_identifier_start(c: str) -> bool:
    return c.isascii() and c.isalpha()


def _is_identifier_char(c: str) -> bool:
    return c.isascii() and (c.isalnum() or c == "_")


def _scan_while(expression: str, start: int, predicate) -> int:
    """Return the index of the first character after ``start`` failing ``predicate``."""
    end = start
    while end < len(expression) and predicate(expression[end]):
        end += 1
    return end


def _parse_number(text: str, position: int) -> float:
    if text.count(".") > 1 or not any(c in _DIGITS for c in text):
        raise InvalidNumberError(text, position)
    return float(text)


def tokenize(expression: str) -> List[Token]:
    """Split ``expression`` into tokens, dropping whitespace.

    Numbers are maximal runs of digits and decimal points, identifiers are a
    letter followed by letters, digits or underscores. Identifiers are not
    resolved here.

    Raises:
        InvalidNumberError: For literals such as ``1.2.3`` or a lone ``.``
        UnexpectedCharacterError: For any character outside the grammar
    """
    tokens: List[Token] = []
    i = 0

    while i < len(expression):
        c = expression[i]

        if c.isspace():
            i += 1
        elif c in _NUMBER_CHARS:
            end = _scan_while(expression, i, lambda ch: ch in _NUMBER_CHARS)
            tokens.append(Number(_parse_number(expression[i:end], i)))
            i = end
        elif _is_identifier_start(c):
            end = _scan_while(expression, i, _is_identifier_char)
            tokens.append(Identifier(expression[i:end]))
            i = end
        elif c in OPERATOR_SYMBOLS:
            tokens.append(Operator.from_symbol(c))
            i += 1
        elif c == "(":
            tokens.append(Paren.LEFT)
            i += 1
        elif c == ")":
            tokens.append(Paren.RIGHT)
            i += 1
        else:
            raise UnexpectedCharacterError(c, i)

    return tokens
