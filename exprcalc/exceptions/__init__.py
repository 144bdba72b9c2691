"""Custom exceptions for the exprcalc application.

All exceptions include a code, a message and structured details designed for
machine processing, so callers (and LLM clients of the MCP server) can tell
exactly which stage rejected an expression and why.
"""

from exprcalc.exceptions.base import (
    ExprCalcError,
    InvalidInputError,
    RegistryError,
    ConfigurationError,
    ExpressionError,
    TokenizeError,
    InvalidNumberError,
    UnexpectedCharacterError,
    ConvertError,
    UnbalancedParensError,
    UnexpectedTokenError,
    EvalError,
    UnknownIdentifierError,
    StackUnderflowError,
    MalformedExpressionError,
)

__all__ = [
    # Base exceptions
    "ExprCalcError",
    "InvalidInputError",
    "RegistryError",
    "ConfigurationError",
    # Expression pipeline exceptions
    "ExpressionError",
    "TokenizeError",
    "InvalidNumberError",
    "UnexpectedCharacterError",
    "ConvertError",
    "UnbalancedParensError",
    "UnexpectedTokenError",
    "EvalError",
    "UnknownIdentifierError",
    "StackUnderflowError",
    "MalformedExpressionError",
]
