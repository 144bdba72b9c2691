#!/usr/bin/env python3
"""exprcalc MCP Server - Expression Evaluation Service.

This module provides the MCP server implementation with tool routing
handled by the centralized tool registry.
"""

from __future__ import annotations

import asyncio
import contextlib
import json
from typing import Any, AsyncIterator, Dict, List

from mcp.server import Server
from mcp.server.streamable_http_manager import StreamableHTTPSessionManager
from mcp.types import TextContent, Tool
from pydantic import ValidationError as PydanticValidationError

from exprcalc.config import get_settings
from exprcalc.errors import map_error_for_mcp
from exprcalc.exceptions import ExprCalcError
from exprcalc.logger import session_logger as logger
from exprcalc.mcp_server.tool_registry import get_registry, initialize_registry

SERVICE_NAME = "exprcalc"

app = Server("exprcalc-service")


def _json_text(data: Any) -> TextContent:
    """Create JSON text content."""
    return TextContent(type="text", text=json.dumps(data, indent=2))


# Built-in tools (not from math engine)
BUILTIN_TOOLS = [
    Tool(
        name="ping",
        description="Health check - returns server status",
        inputSchema={"type": "object", "properties": {}},
    ),
]


@app.list_tools()
async def handle_list_tools() -> List[Tool]:
    """List available tools."""
    registry = get_registry()
    return BUILTIN_TOOLS + registry.get_mcp_tools()


@app.call_tool()
async def handle_call_tool(name: str, arguments: Dict[str, Any]) -> List[TextContent]:
    """Handle tool invocations."""
    logger.info("Tool called", tool=name, args=arguments)

    if name == "ping":
        return [_json_text({"status": "ok", "service": SERVICE_NAME})]

    return await _handle_registry_tool(name, arguments)


async def _handle_registry_tool(name: str, arguments: Dict[str, Any]) -> List[TextContent]:
    """Handle tool invocation via registry, turning failures into error payloads."""
    try:
        registry = get_registry()
        result = registry.handle_tool(name, arguments)
        return [_json_text({"status": "ok", **result.to_dict()})]

    except (ExprCalcError, PydanticValidationError) as e:
        logger.warning("Tool rejected input", tool=name, error=str(e))
        return [_json_text(map_error_for_mcp(e))]
    except Exception as e:
        logger.error("Tool execution failed", tool=name, error=str(e), error_type=type(e).__name__)
        return [_json_text(map_error_for_mcp(e))]


async def initialize_server() -> None:
    """Initialize server components."""
    initialize_registry()
    logger.info("exprcalc MCP server initialized")


# Streamable HTTP setup
session_manager_http = StreamableHTTPSessionManager(
    app=app,
    event_store=None,
    json_response=False,
    stateless=False,
)


async def handle_streamable_http(scope, receive, send) -> None:
    """Handle HTTP requests."""
    await session_manager_http.handle_request(scope, receive, send)


@contextlib.asynccontextmanager
async def lifespan(starlette_app) -> AsyncIterator[None]:
    """Manage server lifecycle."""
    logger.info("Starting exprcalc MCP server")
    await initialize_server()
    async with session_manager_http.run():
        yield


from starlette.applications import Starlette  # noqa: E402 - after async defs
from starlette.middleware.cors import CORSMiddleware  # noqa: E402
from starlette.routing import Mount  # noqa: E402

starlette_app = Starlette(
    debug=False,
    routes=[Mount("/mcp/", app=handle_streamable_http)],
    lifespan=lifespan,
)

starlette_app = CORSMiddleware(
    starlette_app,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "DELETE"],
    expose_headers=["Mcp-Session-Id"],
)


async def main(host: str = "0.0.0.0", port: int = 8020) -> None:
    """Run the server."""
    import uvicorn

    config = uvicorn.Config(starlette_app, host=host, port=port, log_level="info")
    server = uvicorn.Server(config)
    await server.serve()


if __name__ == "__main__":
    settings = get_settings()
    asyncio.run(main(host=settings.server.host, port=settings.server.mcp_port))
