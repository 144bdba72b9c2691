"""Expression Engine - Facade over the expression pipeline.

The engine owns the constant and function tables used for evaluation.
Registering a constant or function swaps in an extended copy of the
table; evaluations already running keep the table they started with.
"""

from __future__ import annotations

from typing import Dict, List, Mapping, Optional

from exprcalc.expression import (
    DEFAULT_CONSTANTS,
    DEFAULT_FUNCTIONS,
    ConstantTable,
    FunctionTable,
    InfixExpression,
    PostfixExpression,
    evaluate_expression,
)
from exprcalc.expression.tables import UnaryFunction
from exprcalc.logger import session_logger as logger


class ExpressionEngine:
    """Unified interface for evaluating expressions against named tables."""

    def __init__(
        self,
        constants: ConstantTable = DEFAULT_CONSTANTS,
        functions: FunctionTable = DEFAULT_FUNCTIONS,
    ):
        self._constants = constants
        self._functions = functions

        logger.info(
            "ExpressionEngine initialized",
            constants=len(self._constants),
            functions=len(self._functions),
        )

    @property
    def constants(self) -> ConstantTable:
        return self._constants

    @property
    def functions(self) -> FunctionTable:
        return self._functions

    def register_constant(self, name: str, value: float, replace: bool = False) -> None:
        """Add a named constant for subsequent evaluations.

        Raises:
            InvalidInputError: If the name is not an identifier or value not numeric
            RegistryError: If the name is already registered and replace is False
        """
        self._constants = self._constants.with_entry(name, value, replace=replace)
        logger.info("Constant registered", name=name, value=self._constants[name])

    def register_function(
        self, name: str, function: UnaryFunction, replace: bool = False
    ) -> None:
        """Add a named unary function for subsequent evaluations.

        Raises:
            InvalidInputError: If the name is not an identifier or function not callable
            RegistryError: If the name is already registered and replace is False
        """
        self._functions = self._functions.with_entry(name, function, replace=replace)
        logger.info("Function registered", name=name)

    def evaluate(
        self, expression: str, variables: Optional[Mapping[str, float]] = None
    ) -> float:
        """Evaluate an expression with this engine's tables."""
        return evaluate_expression(
            expression,
            variables,
            constants=self._constants,
            functions=self._functions,
        )

    def to_postfix(self, expression: str) -> PostfixExpression:
        """Tokenize and convert an expression without evaluating it."""
        return InfixExpression.parse(expression).to_postfix()

    def list_constants(self) -> Dict[str, float]:
        return {name: self._constants[name] for name in sorted(self._constants)}

    def list_functions(self) -> List[str]:
        return sorted(self._functions)


# Module-level singleton for convenience
_engine: Optional[ExpressionEngine] = None


def get_engine() -> ExpressionEngine:
    """Get or create the singleton ExpressionEngine instance."""
    global _engine
    if _engine is None:
        _engine = ExpressionEngine()
    return _engine
