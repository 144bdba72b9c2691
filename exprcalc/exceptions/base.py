"""Exception classes for the exprcalc application.

Every error carries a machine-readable ``code``, a human-readable ``message``
and an optional ``details`` dictionary, so the MCP and web surfaces can turn
any failure into a tagged error payload without inspecting exception types.
"""

from typing import Any, Dict, Optional


class ExprCalcError(Exception):
    """Root of all exprcalc errors."""

    def __init__(
        self,
        code: str,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"


class InvalidInputError(ExprCalcError):
    """Raised when input parameters are invalid (wrong type or value)."""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(code="INVALID_INPUT", message=message, details=details)


class RegistryError(ExprCalcError):
    """Raised on tool, constant or function registry conflicts and misses."""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(code="REGISTRY_ERROR", message=message, details=details)


class ConfigurationError(ExprCalcError):
    """Raised when environment configuration cannot be interpreted."""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(code="CONFIGURATION_ERROR", message=message, details=details)


# ---------------------------------------------------------------------------
# Expression pipeline errors
# ---------------------------------------------------------------------------


class ExpressionError(ExprCalcError):
    """Base for every error raised while evaluating an expression."""

    stage = "expression"

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        merged = {"stage": self.stage}
        merged.update(details or {})
        super().__init__(code=code, message=message, details=merged)


class TokenizeError(ExpressionError):
    """Malformed text detected while scanning the expression."""

    stage = "tokenize"


class InvalidNumberError(TokenizeError):
    """A numeric literal with several decimal points or no digit at all."""

    def __init__(self, text: str, position: int):
        super().__init__(
            code="INVALID_NUMBER",
            message=f"Invalid number '{text}' at position {position}",
            details={"text": text, "position": position},
        )
        self.text = text
        self.position = position


class UnexpectedCharacterError(TokenizeError):
    def __init__(self, character: str, position: int):
        super().__init__(
            code="UNEXPECTED_CHARACTER",
            message=f"Unexpected character '{character}' at position {position}",
            details={"character": character, "position": position},
        )
        self.character = character
        self.position = position


class ConvertError(ExpressionError):
    """Structural error detected while reordering infix tokens to postfix."""

    stage = "convert"


class UnbalancedParensError(ConvertError):
    def __init__(self, token_index: int, reason: str):
        super().__init__(
            code="UNBALANCED_PARENS",
            message=f"Unbalanced parentheses: {reason} (token {token_index})",
            details={"token_index": token_index, "reason": reason},
        )
        self.token_index = token_index


class UnexpectedTokenError(ConvertError):
    """An operand, function or '(' where a binary operator or ')' belongs."""

    def __init__(self, token: str, token_index: int):
        super().__init__(
            code="UNEXPECTED_TOKEN",
            message=f"Unexpected '{token}' at token {token_index}: expected an operator or ')'",
            details={"token": token, "token_index": token_index},
        )
        self.token = token
        self.token_index = token_index


class EvalError(ExpressionError):
    """Error raised while running the postfix stack machine."""

    stage = "evaluate"


class UnknownIdentifierError(EvalError):
    """No constant, function or variable binding exists for a name."""

    def __init__(self, name: str):
        super().__init__(
            code="UNKNOWN_IDENTIFIER",
            message=f"Unknown identifier '{name}'",
            details={"name": name},
        )
        self.name = name


class StackUnderflowError(EvalError):
    def __init__(self, token: str, required: int, available: int):
        super().__init__(
            code="STACK_UNDERFLOW",
            message=(
                f"'{token}' needs {required} operand(s) but only "
                f"{available} available"
            ),
            details={"token": token, "required": required, "available": available},
        )
        self.token = token


class MalformedExpressionError(EvalError):
    """Evaluation finished with other than exactly one value on the stack."""

    def __init__(self, remaining: int, reason: Optional[str] = None):
        if reason is None:
            reason = f"evaluation left {remaining} value(s) on the stack, expected 1"
        super().__init__(
            code="MALFORMED_EXPRESSION",
            message=f"Malformed expression: {reason}",
            details={"remaining": remaining, "reason": reason},
        )
        self.remaining = remaining
