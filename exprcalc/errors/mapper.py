"""Error response mapping for MCP and web interfaces.

Converts structured ExprCalcError exceptions into standardized error
responses with machine-readable error codes and recovery strategies.
"""

import json
from dataclasses import dataclass
from typing import Dict, Any, Optional

from pydantic import ValidationError as PydanticValidationError

from exprcalc.exceptions import (
    ConfigurationError,
    ExprCalcError,
    RegistryError,
)


@dataclass
class ErrorResponse:
    """Structured error response for API consumers."""

    error_code: str
    message: str
    details: Optional[Dict[str, Any]] = None
    recovery_strategy: Optional[str] = None


# Recovery strategy templates for common error types
RECOVERY_STRATEGIES: Dict[str, str] = {
    "INVALID_NUMBER": "Fix the numeric literal: use at most one decimal point and at least one digit (e.g. 1.5, .5, 2.).",
    "UNEXPECTED_CHARACTER": "Remove the character. Expressions may only contain numbers, names, + - * / ^ and parentheses.",
    "UNBALANCED_PARENS": "Make sure every '(' has a matching ')' and vice versa.",
    "UNEXPECTED_TOKEN": "Put an operator between adjacent operands, e.g. write 2*3 instead of 2 3 and 2*(3) instead of 2(3).",
    "UNKNOWN_IDENTIFIER": "Bind the name in 'variables', or use one of the listed constants and functions.",
    "STACK_UNDERFLOW": "An operator or function is missing an operand. Check for doubled operators or empty parentheses.",
    "MALFORMED_EXPRESSION": "The expression does not reduce to a single value. Check for missing operators between operands.",
    "INVALID_INPUT": "Check the input parameters: the expression must be a string and variables must map names to numbers.",
    "REGISTRY_ERROR": "Check that the tool, constant or function name is valid and exists in the system.",
    "CONFIGURATION_ERROR": "Check the EXPRCALC_* environment variables.",
}


def get_recovery_strategy(error_code: str) -> str:
    """Get recovery strategy for an error code.

    Args:
        error_code: The error code

    Returns:
        Recovery strategy string
    """
    return RECOVERY_STRATEGIES.get(
        error_code, "Review the error message, adjust the request, and try again."
    )


def map_exception_to_response(error: Exception) -> ErrorResponse:
    """Convert an exception to a structured ErrorResponse.

    Args:
        error: The exception to convert

    Returns:
        ErrorResponse with structured error information
    """
    if isinstance(error, ExprCalcError):
        return ErrorResponse(
            error_code=error.code,
            message=error.message,
            details=error.details if error.details else None,
            recovery_strategy=get_recovery_strategy(error.code),
        )

    if isinstance(error, PydanticValidationError):
        # Round-trip through JSON so ctx values are serializable
        errors = json.loads(error.json(include_url=False))
        return ErrorResponse(
            error_code="PYDANTIC_VALIDATION_ERROR",
            message=f"Validation failed: {len(errors)} error(s)",
            details={"errors": errors},
            recovery_strategy="Check the error details and provide valid input according to the schema.",
        )

    # Generic exceptions - wrap with minimal structure
    return ErrorResponse(
        error_code="INTERNAL_ERROR",
        message=str(error),
        details={"exception_type": type(error).__name__},
        recovery_strategy="An unexpected error occurred. Please report this issue if it persists.",
    )


def map_error_for_mcp(error: Exception) -> Dict[str, Any]:
    """Map exception to MCP tool response format.

    Args:
        error: The exception to convert

    Returns:
        Dictionary suitable for MCP tool response
    """
    response = map_exception_to_response(error)

    return {
        "status": "error",
        "error_code": response.error_code,
        "message": response.message,
        "details": response.details,
        "recovery_strategy": response.recovery_strategy,
    }


def map_error_for_web(error: Exception) -> Dict[str, Any]:
    """Map exception to web API response format.

    Args:
        error: The exception to convert

    Returns:
        Dictionary suitable for a starlette JSONResponse
    """
    response = map_exception_to_response(error)

    return {
        "status": "error",
        "error": {
            "code": response.error_code,
            "message": response.message,
            "details": response.details,
            "recovery": response.recovery_strategy,
        },
    }


def get_http_status_for_error(error: Exception) -> int:
    """Determine appropriate HTTP status code for an error.

    Args:
        error: The exception

    Returns:
        HTTP status code
    """
    if isinstance(error, RegistryError):
        return 404
    elif isinstance(error, ConfigurationError):
        return 500
    elif isinstance(error, (ExprCalcError, PydanticValidationError)):
        return 400
    else:
        return 500
