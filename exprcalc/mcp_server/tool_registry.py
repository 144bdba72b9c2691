"""Tool Registry for MCP Server.

Central registry that collects tools from all math engine capabilities
and provides them to the MCP server.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from mcp.types import Tool

from exprcalc.exceptions import RegistryError
from exprcalc.logger import session_logger as logger
from exprcalc.math_engine.base import MathCapability, ToolDefinition, ToolResult


class ToolRegistry:
    """Registry for MCP tools from math engine capabilities.

    Collects tool definitions from capability modules and provides:
    - MCP Tool objects for list_tools()
    - Routing of tool calls to appropriate capability handlers
    """

    def __init__(self):
        """Initialize an empty registry."""
        self._capabilities: Dict[str, MathCapability] = {}
        self._tool_to_capability: Dict[str, str] = {}
        self._tools: Dict[str, ToolDefinition] = {}
        logger.info("ToolRegistry initialized")

    def register_capability(self, capability: MathCapability) -> None:
        """Register a capability and its tools.

        Args:
            capability: The capability instance to register

        Raises:
            RegistryError: If capability name conflicts or tool names conflict
        """
        cap_name = capability.name

        if cap_name in self._capabilities:
            raise RegistryError(
                f"Capability '{cap_name}' already registered",
                details={"capability": cap_name},
            )

        tools = capability.get_tools()
        for tool_def in tools:
            if tool_def.name in self._tools:
                existing_cap = self._tool_to_capability[tool_def.name]
                raise RegistryError(
                    f"Tool '{tool_def.name}' already registered by capability '{existing_cap}'",
                    details={"tool": tool_def.name, "capability": existing_cap},
                )

        self._capabilities[cap_name] = capability
        for tool_def in tools:
            self._tools[tool_def.name] = tool_def
            self._tool_to_capability[tool_def.name] = cap_name

        logger.info(
            "Capability registered",
            capability=cap_name,
            tools=[t.name for t in tools],
        )

    def get_mcp_tools(self) -> List[Tool]:
        """Get all registered tools as MCP Tool objects.

        Returns:
            List of MCP Tool objects ready for list_tools() response
        """
        return [
            Tool(
                name=tool_def.name,
                description=tool_def.description,
                inputSchema=tool_def.input_schema,
            )
            for tool_def in self._tools.values()
        ]

    def get_tool_names(self) -> List[str]:
        """Get list of all registered tool names."""
        return list(self._tools.keys())

    def has_tool(self, tool_name: str) -> bool:
        """Check if a tool is registered."""
        return tool_name in self._tools

    def handle_tool(self, tool_name: str, arguments: Dict[str, Any]) -> ToolResult:
        """Route a tool call to the appropriate capability.

        Args:
            tool_name: Name of the tool to invoke
            arguments: Tool arguments from MCP

        Returns:
            ToolResult from the capability handler

        Raises:
            RegistryError: If tool is not registered
        """
        if tool_name not in self._tools:
            raise RegistryError(f"Unknown tool: '{tool_name}'", details={"tool": tool_name})

        cap_name = self._tool_to_capability[tool_name]
        capability = self._capabilities[cap_name]

        logger.debug(
            "Routing tool call",
            tool=tool_name,
            capability=cap_name,
        )

        return capability.handle(tool_name, arguments)

    def list_capabilities(self) -> Dict[str, str]:
        """List all registered capabilities.

        Returns:
            Dict mapping capability names to descriptions
        """
        return {
            name: cap.description
            for name, cap in self._capabilities.items()
        }

    def get_capability(self, name: str) -> Optional[MathCapability]:
        """Get a capability by name."""
        return self._capabilities.get(name)


# Global registry instance
_registry: Optional[ToolRegistry] = None


def get_registry() -> ToolRegistry:
    """Get or create the global tool registry."""
    global _registry
    if _registry is None:
        _registry = ToolRegistry()
    return _registry


def reset_registry() -> None:
    """Discard the global registry (used by tests)."""
    global _registry
    _registry = None


def initialize_registry() -> ToolRegistry:
    """Initialize the registry with all available capabilities.

    Call this at server startup to register all capabilities. Calling it
    again is a no-op for capabilities already registered.

    Returns:
        The initialized ToolRegistry
    """
    from exprcalc.math_engine.capabilities import ExpressionCapability

    registry = get_registry()

    # Add new capabilities here as they are implemented
    for capability_cls in (ExpressionCapability,):
        capability = capability_cls()
        if registry.get_capability(capability.name) is None:
            registry.register_capability(capability)

    logger.info(
        "Registry initialized",
        capabilities=list(registry.list_capabilities().keys()),
        tools=registry.get_tool_names(),
    )

    return registry
