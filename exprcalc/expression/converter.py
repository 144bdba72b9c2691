"""Infix to postfix conversion (shunting-yard).

Besides the binary operators, these context-sensitive rules apply:

* A ``-`` where an operand is expected is a negation. ``0`` is emitted and a
  negation is staged; it binds tighter than every binary operator and is
  emitted as a binary ``-``, so ``-x`` becomes ``0 x -`` and ``-2^2`` is
  ``(0-2)^2``. A ``+`` in the same position is dropped.
* An identifier directly followed by ``(`` is a function call. It is emitted
  right after the postfix form of its parenthesised argument.
* An operand, a function name or a ``(`` directly after another operand is
  rejected, so ``2 3 +`` or ``4 sqrt`` fail here instead of evaluating.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Union

from exprcalc.exceptions import UnbalancedParensError, UnexpectedTokenError
from exprcalc.expression.tokens import Identifier, Number, Operator, Paren, Token, token_text


@dataclass(frozen=True)
class _OpenParen:
    token_index: int


@dataclass(frozen=True)
class _FunctionCall:
    identifier: Identifier


class _Negation:
    pass


_NEGATION = _Negation()

_Staged = Union[Operator, _OpenParen, _FunctionCall, _Negation]


def _pops_before(staged: _Staged, incoming: Operator) -> bool:
    """True if ``staged`` must be emitted before ``incoming`` is staged."""
    if isinstance(staged, _Negation):
        return True
    if isinstance(staged, Operator):
        if staged.precedence > incoming.precedence:
            return True
        return staged.precedence == incoming.precedence and incoming.is_left_associative
    return False


def _emit(staged: _Staged, output: List[Token]) -> None:
    if isinstance(staged, _Negation):
        output.append(Operator.MINUS)
    elif isinstance(staged, Operator):
        output.append(staged)
    elif isinstance(staged, _FunctionCall):
        output.append(staged.identifier)
    else:
        raise UnbalancedParensError(staged.token_index, "unmatched '('")


def to_postfix(tokens: Sequence[Token]) -> List[Token]:
    """Reorder an infix token sequence into postfix (Reverse Polish) order.

    Args:
        tokens: Infix tokens as produced by ``tokenize``

    Returns:
        Tokens in postfix order, parentheses removed

    Raises:
        UnbalancedParensError: If a ``)`` has no matching ``(`` or a ``(`` is
            never closed
        UnexpectedTokenError: If an operand, a function or a ``(`` follows
            another operand, as in ``2 3 +`` or ``4 sqrt``
    """
    output: List[Token] = []
    staging: List[_Staged] = []
    expect_operand = True

    for index, token in enumerate(tokens):
        if not expect_operand and (isinstance(token, (Number, Identifier)) or token is Paren.LEFT):
            raise UnexpectedTokenError(token_text(token), index)

        if isinstance(token, Number):
            output.append(token)
            expect_operand = False

        elif isinstance(token, Identifier):
            is_call = index + 1 < len(tokens) and tokens[index + 1] is Paren.LEFT
            if is_call:
                staging.append(_FunctionCall(token))
            else:
                output.append(token)
                expect_operand = False

        elif isinstance(token, Operator):
            if expect_operand and token is Operator.MINUS:
                output.append(Number(0.0))
                staging.append(_NEGATION)
                continue
            if expect_operand and token is Operator.PLUS:
                continue

            while staging and _pops_before(staging[-1], token):
                _emit(staging.pop(), output)
            staging.append(token)
            expect_operand = True

        elif token is Paren.LEFT:
            staging.append(_OpenParen(index))
            expect_operand = True

        elif token is Paren.RIGHT:
            while staging and not isinstance(staging[-1], _OpenParen):
                _emit(staging.pop(), output)
            if not staging:
                raise UnbalancedParensError(index, "unmatched ')'")
            staging.pop()

            if staging and isinstance(staging[-1], _FunctionCall):
                _emit(staging.pop(), output)
            expect_operand = False

        else:
            raise TypeError(f"Not a token: {token!r}")

    while staging:
        _emit(staging.pop(), output)

    return output
