"""Token types shared by the tokenizer, the converter and the evaluator.

A token is exactly one of ``Number``, ``Identifier``, ``Operator`` or
``Paren``. Tokens are immutable and compare by value.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

import numpy as np


@dataclass(frozen=True)
class Number:
    value: float


@dataclass(frozen=True)
class Identifier:
    """A name resolved at evaluation time to a constant, function or variable."""

    name: str


class Operator(Enum):
    """Binary operators with their precedence and associativity."""

    PLUS = "+"
    MINUS = "-"
    MULTIPLY = "*"
    DIVIDE = "/"
    POWER = "^"

    @property
    def symbol(self) -> str:
        return self.value

    @property
    def precedence(self) -> int:
        return _PRECEDENCE[self]

    @property
    def is_left_associative(self) -> bool:
        return self is not Operator.POWER

    def apply(self, left: float, right: float) -> float:
        """Apply the operator with IEEE-754 semantics.

        Division by zero and overflow produce +/-inf or NaN instead of
        raising, e.g. ``1/0 -> inf``, ``0/0 -> nan``, ``10^400 -> inf``.
        """
        with np.errstate(all="ignore"):
            result = _UFUNCS[self](np.float64(left), np.float64(right))
        return float(result)

    @classmethod
    def from_symbol(cls, symbol: str) -> "Operator":
        return cls(symbol)


_PRECEDENCE = {
    Operator.PLUS: 2,
    Operator.MINUS: 2,
    Operator.MULTIPLY: 3,
    Operator.DIVIDE: 3,
    Operator.POWER: 4,
}

_UFUNCS = {
    Operator.PLUS: np.add,
    Operator.MINUS: np.subtract,
    Operator.MULTIPLY: np.multiply,
    Operator.DIVIDE: np.divide,
    Operator.POWER: np.power,
}

OPERATOR_SYMBOLS = frozenset(op.symbol for op in Operator)


class Paren(Enum):
    LEFT = "("
    RIGHT = ")"


Token = Union[Number, Identifier, Operator, Paren]


def format_number(value: float) -> str:
    """Render a float the way a user would type it (``2`` rather than ``2.0``)."""
    if value != value or value in (float("inf"), float("-inf")):
        return str(value)
    if value == int(value) and abs(value) < 1e15:
        return str(int(value))
    return repr(value)


def token_text(token: Token) -> str:
    """Render a single token back to expression text."""
    if isinstance(token, Number):
        return format_number(token.value)
    if isinstance(token, Identifier):
        return token.name
    if isinstance(token, (Operator, Paren)):
        return token.value
    raise TypeError(f"Not a token: {token!r}")
