"""Expression Evaluation Capability.

Evaluates infix arithmetic expressions with named constants, unary
functions and caller-bound variables, and exposes the postfix form of an
expression for inspection.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt, StrictStr

from exprcalc.exceptions import InvalidInputError
from exprcalc.expression import Operator
from exprcalc.logger import session_logger as logger
from exprcalc.logger.decorators import log_execution_time
from exprcalc.math_engine.base import MathCapability, ToolDefinition, ToolResult
from exprcalc.math_engine.engine import ExpressionEngine, get_engine


class EvaluateArguments(BaseModel):
    """Arguments of the expression_evaluate tool."""

    model_config = ConfigDict(extra="forbid")

    expression: StrictStr
    variables: Dict[str, Union[StrictInt, StrictFloat]] = Field(default_factory=dict)


class PostfixArguments(BaseModel):
    """Arguments of the expression_to_postfix tool."""

    model_config = ConfigDict(extra="forbid")

    expression: StrictStr


_EXPRESSION_SCHEMA = {
    "type": "string",
    "description": "Infix expression, e.g. 'sqrt(x^2+y^2)' or 'cos(pi/4)^2'.",
}


class ExpressionCapability(MathCapability):
    """Infix expression evaluation over the shared ExpressionEngine."""

    def __init__(self, engine: Optional[ExpressionEngine] = None):
        """Initialize the expression capability."""
        self._engine = engine or get_engine()
        logger.info("ExpressionCapability initialized")

    @property
    def name(self) -> str:
        return "expression"

    @property
    def description(self) -> str:
        return "Evaluate arithmetic expressions with constants, functions and variables"

    @property
    def engine(self) -> ExpressionEngine:
        return self._engine

    def get_tools(self) -> List[ToolDefinition]:
        """Return list of tool definitions."""
        return [
            ToolDefinition(
                name="expression_evaluate",
                description=(
                    "Evaluate an arithmetic expression (+ - * / ^, parentheses, "
                    "constants such as pi, functions such as sqrt or sin) with "
                    "optional numeric variable bindings. Returns a single number; "
                    "division by zero and domain errors give inf or nan."
                ),
                input_schema={
                    "type": "object",
                    "properties": {
                        "expression": _EXPRESSION_SCHEMA,
                        "variables": {
                            "type": "object",
                            "description": "Free variable bindings, name -> number.",
                            "additionalProperties": {"type": "number"},
                        },
                    },
                    "required": ["expression"],
                },
                handler_name="handle",
            ),
            ToolDefinition(
                name="expression_to_postfix",
                description="Convert an infix expression to postfix (Reverse Polish) notation without evaluating it.",
                input_schema={
                    "type": "object",
                    "properties": {"expression": _EXPRESSION_SCHEMA},
                    "required": ["expression"],
                },
                handler_name="handle",
            ),
            ToolDefinition(
                name="expression_list_symbols",
                description="List the operators, named constants and functions available in expressions.",
                input_schema={
                    "type": "object",
                    "properties": {},
                },
                handler_name="handle",
            ),
        ]

    @log_execution_time
    def handle(self, tool_name: str, arguments: Dict[str, Any]) -> ToolResult:
        """Route tool invocation to appropriate handler."""
        if tool_name == "expression_evaluate":
            args = EvaluateArguments.model_validate(arguments or {})
            return self.evaluate(args.expression, args.variables)
        elif tool_name == "expression_to_postfix":
            postfix_args = PostfixArguments.model_validate(arguments or {})
            return self.to_postfix(postfix_args.expression)
        elif tool_name == "expression_list_symbols":
            return ToolResult(result=self.list_symbols(), kind="catalog")
        else:
            raise InvalidInputError(f"Unknown tool: {tool_name}")

    def evaluate(
        self, expression: str, variables: Optional[Dict[str, float]] = None
    ) -> ToolResult:
        """
        Evaluate an expression to a single float.

        Args:
            expression: Infix expression text
            variables: Free variable bindings

        Returns:
            ToolResult whose result is the computed float

        Raises:
            InvalidInputError: If a binding is not numeric
            ExpressionError: If any pipeline stage rejects the expression
        """
        value = self._engine.evaluate(expression, variables)

        logger.debug(
            "Expression evaluation completed",
            expression=expression,
            variables=sorted(variables or {}),
        )

        return ToolResult(result=value, kind="float64", expression=expression)

    def to_postfix(self, expression: str) -> ToolResult:
        postfix = self._engine.to_postfix(expression)
        return ToolResult(result=str(postfix), kind="postfix", expression=expression)

    def list_symbols(self) -> Dict[str, Any]:
        return {
            "operators": [op.symbol for op in Operator],
            "constants": self._engine.list_constants(),
            "functions": self._engine.list_functions(),
        }

    def list_operations(self) -> Dict[str, Any]:
        """List supported symbols by category (same catalog as expression_list_symbols)."""
        return self.list_symbols()
