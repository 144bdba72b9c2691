"""Expression objects and the single-call evaluation entry point."""

from __future__ import annotations

import numbers
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple

from exprcalc.exceptions import InvalidInputError
from exprcalc.expression.converter import to_postfix
from exprcalc.expression.evaluator import evaluate
from exprcalc.expression.tables import (
    DEFAULT_CONSTANTS,
    DEFAULT_FUNCTIONS,
    ConstantTable,
    FunctionTable,
)
from exprcalc.expression.tokenizer import tokenize
from exprcalc.expression.tokens import Identifier, Token, token_text
from exprcalc.logger import session_logger as logger


def validate_variables(variables: Optional[Mapping[str, Any]]) -> Dict[str, float]:
    """Check caller-supplied bindings and return them as a name -> float dict.

    Raises:
        InvalidInputError: If the bindings are not a mapping of names to real numbers
    """
    if variables is None:
        return {}
    if not isinstance(variables, Mapping):
        raise InvalidInputError(
            f"Variables must be a mapping of names to numbers, got {type(variables).__name__}"
        )

    bindings: Dict[str, float] = {}
    for name, value in variables.items():
        if not isinstance(name, str):
            raise InvalidInputError(
                f"Variable names must be strings, got {name!r}",
                details={"name": repr(name)},
            )
        if not isinstance(value, numbers.Real):
            raise InvalidInputError(
                f"Variable '{name}' must be a real number, got {type(value).__name__}",
                details={"name": name, "value": repr(value)},
            )
        bindings[name] = float(value)
    return bindings


@dataclass(frozen=True)
class PostfixExpression:
    """A token sequence in Reverse Polish order, ready for evaluation."""

    tokens: Tuple[Token, ...]

    def evaluate(
        self,
        variables: Optional[Mapping[str, float]] = None,
        constants: ConstantTable = DEFAULT_CONSTANTS,
        functions: FunctionTable = DEFAULT_FUNCTIONS,
    ) -> float:
        return evaluate(self.tokens, validate_variables(variables), constants, functions)

    def __str__(self) -> str:
        return " ".join(token_text(token) for token in self.tokens)


@dataclass(frozen=True)
class InfixExpression:
    """A tokenized expression in source order."""

    tokens: Tuple[Token, ...]

    @classmethod
    def parse(cls, expression: str) -> "InfixExpression":
        """Tokenize ``expression``.

        Raises:
            InvalidInputError: If ``expression`` is not a string
            TokenizeError: If the text contains a malformed number or an
                unexpected character
        """
        if not isinstance(expression, str):
            raise InvalidInputError(
                f"Expression must be a string, got {type(expression).__name__}"
            )
        return cls(tuple(tokenize(expression)))

    def to_postfix(self) -> PostfixExpression:
        return PostfixExpression(tuple(to_postfix(self.tokens)))

    def identifiers(self) -> Tuple[str, ...]:
        """Distinct identifier names in order of first appearance."""
        seen: Dict[str, None] = {}
        for token in self.tokens:
            if isinstance(token, Identifier):
                seen.setdefault(token.name, None)
        return tuple(seen)

    def __str__(self) -> str:
        return " ".join(token_text(token) for token in self.tokens)


def evaluate_expression(
    expression: str,
    variables: Optional[Mapping[str, float]] = None,
    *,
    constants: ConstantTable = DEFAULT_CONSTANTS,
    functions: FunctionTable = DEFAULT_FUNCTIONS,
) -> float:
    """Evaluate ``expression`` with the given variable bindings.

    Composes tokenize -> to_postfix -> evaluate; the first error raised by
    any stage aborts the call.

    Example:
        >>> evaluate_expression("sqrt(x^2+y^2)", {"x": 3.0, "y": 4.0})
        5.0

    Raises:
        InvalidInputError: If the expression is not a string or a binding is
            not numeric
        ExpressionError: The stage-specific error (see exprcalc.exceptions)
    """
    bindings = validate_variables(variables)
    postfix = InfixExpression.parse(expression).to_postfix()
    result = evaluate(postfix.tokens, bindings, constants, functions)

    logger.debug(
        "Expression evaluated",
        expression=expression,
        postfix=str(postfix),
        variables=sorted(bindings),
        result=result,
    )
    return result
