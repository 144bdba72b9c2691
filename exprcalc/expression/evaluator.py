"""Postfix evaluation with a single operand stack."""

from __future__ import annotations

from typing import List, Mapping, Optional, Sequence

from exprcalc.exceptions import (
    MalformedExpressionError,
    StackUnderflowError,
    UnknownIdentifierError,
)
from exprcalc.expression.tables import (
    DEFAULT_CONSTANTS,
    DEFAULT_FUNCTIONS,
    ConstantTable,
    FunctionTable,
)
from exprcalc.expression.tokens import Identifier, Number, Operator, Token, token_text


def _resolve_identifier(
    token: Identifier,
    stack: List[float],
    variables: Mapping[str, float],
    constants: ConstantTable,
    functions: FunctionTable,
) -> None:
    # Constants shadow functions, which shadow variables
    name = token.name
    if name in constants:
        stack.append(constants[name])
    elif name in functions:
        if not stack:
            raise StackUnderflowError(name, required=1, available=0)
        stack.append(functions.call(name, stack.pop()))
    elif name in variables:
        stack.append(float(variables[name]))
    else:
        raise UnknownIdentifierError(name)


def evaluate(
    postfix: Sequence[Token],
    variables: Optional[Mapping[str, float]] = None,
    constants: ConstantTable = DEFAULT_CONSTANTS,
    functions: FunctionTable = DEFAULT_FUNCTIONS,
) -> float:
    """Evaluate a postfix token sequence to a single float.

    Args:
        postfix: Tokens in postfix order, as produced by ``to_postfix``
        variables: Free-variable bindings for this evaluation
        constants: Constant table consulted first for identifiers
        functions: Function table consulted second for identifiers

    Returns:
        The computed value. Division by zero and domain errors propagate
        as inf/NaN rather than raising.

    Raises:
        UnknownIdentifierError: If a name is not a constant, function or variable
        StackUnderflowError: If an operator or function lacks operands
        MalformedExpressionError: If evaluation does not end with exactly one value
    """
    bindings: Mapping[str, float] = variables if variables is not None else {}
    stack: List[float] = []

    for token in postfix:
        if isinstance(token, Number):
            stack.append(token.value)
        elif isinstance(token, Identifier):
            _resolve_identifier(token, stack, bindings, constants, functions)
        elif isinstance(token, Operator):
            if len(stack) < 2:
                raise StackUnderflowError(token.symbol, required=2, available=len(stack))
            right = stack.pop()
            left = stack.pop()
            stack.append(token.apply(left, right))
        else:
            # Parentheses never survive conversion
            raise MalformedExpressionError(
                len(stack),
                reason=f"unexpected '{token_text(token)}' in postfix sequence",
            )

    if len(stack) != 1:
        raise MalformedExpressionError(len(stack))

    return stack[0]
