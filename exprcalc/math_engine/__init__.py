"""Math Engine - Expression evaluation capabilities.

This module wraps the expression pipeline in the capability interface
served by the MCP and web surfaces.
"""

from exprcalc.math_engine.base import MathCapability, ToolDefinition, ToolResult
from exprcalc.math_engine.engine import ExpressionEngine, get_engine

__all__ = [
    "MathCapability",
    "ToolDefinition",
    "ToolResult",
    "ExpressionEngine",
    "get_engine",
]
