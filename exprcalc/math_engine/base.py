"""Base classes for math engine capabilities.

All capability modules should inherit from MathCapability and implement
the required interface for tool registration and computation.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional


def json_safe(value: Any) -> Any:
    """Replace non-finite floats with "nan", "inf" or "-inf" for strict JSON."""
    if isinstance(value, float) and not math.isfinite(value):
        if math.isnan(value):
            return "nan"
        return "inf" if value > 0 else "-inf"
    if isinstance(value, dict):
        return {k: json_safe(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [json_safe(v) for v in value]
    return value


@dataclass
class ToolResult:
    """Result of a capability tool invocation."""

    result: Any
    kind: str
    expression: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data: Dict[str, Any] = {
            "result": json_safe(self.result),
            "kind": self.kind,
        }
        if self.expression is not None:
            data["expression"] = self.expression
        return data


@dataclass
class ToolDefinition:
    """Definition of an MCP tool provided by a capability."""

    name: str
    description: str
    input_schema: Dict[str, Any]
    handler_name: str  # Method name on the capability class


class MathCapability(ABC):
    """Base class for all math engine capabilities.

    Each capability module should:
    1. Inherit from this class
    2. Implement get_tools() to declare its MCP tools
    3. Implement handle() to route each of its tools
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique name for this capability (e.g., 'expression')."""
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        """Human-readable description of this capability."""
        pass

    @abstractmethod
    def get_tools(self) -> List[ToolDefinition]:
        """Return list of tool definitions this capability provides.

        Returns:
            List of ToolDefinition objects
        """
        pass

    @abstractmethod
    def handle(self, tool_name: str, arguments: Dict[str, Any]) -> ToolResult:
        """Handle a tool invocation.

        Args:
            tool_name: Name of the tool being called
            arguments: Tool arguments from MCP

        Returns:
            ToolResult with computed values

        Raises:
            InvalidInputError: If tool_name is unknown or arguments are invalid
            ExpressionError: If the expression itself is rejected
        """
        pass

    def list_operations(self) -> Dict[str, Any]:
        """List operations supported by this capability.

        Override this method to provide a categorized catalog.

        Returns:
            Dictionary mapping category names to the symbols in that category
        """
        return {}
