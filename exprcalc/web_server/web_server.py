"""exprcalc Web Server - REST surface over the expression capability."""

import json
from typing import Any, Dict, Optional

from starlette.applications import Starlette
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from exprcalc.errors import get_http_status_for_error, map_error_for_web
from exprcalc.exceptions import InvalidInputError
from exprcalc.logger import session_logger as logger
from exprcalc.math_engine.capabilities import ExpressionCapability


class ExprCalcWebServer:
    """Web server exposing expression evaluation over JSON."""

    SERVICE_NAME = "exprcalc-web"

    def __init__(
        self,
        capability: Optional[ExpressionCapability] = None,
        host: str = "0.0.0.0",
        port: int = 8022,
    ):
        self.capability = capability or ExpressionCapability()
        self.host = host
        self.port = port
        self.app = self._create_app()

    def _create_app(self) -> Any:
        """Create the Starlette application."""
        routes = [
            Route("/", endpoint=self.root, methods=["GET"]),
            Route("/ping", endpoint=self.ping, methods=["GET"]),
            Route("/health", endpoint=self.health, methods=["GET"]),
            Route("/symbols", endpoint=self.symbols, methods=["GET"]),
            Route("/evaluate", endpoint=self.evaluate, methods=["POST"]),
            Route("/postfix", endpoint=self.postfix, methods=["POST"]),
        ]

        app = Starlette(debug=False, routes=routes)

        return CORSMiddleware(
            app,
            allow_origins=["*"],
            allow_methods=["GET", "POST"],
            allow_headers=["*"],
        )

    async def root(self, request: Request) -> JSONResponse:
        """Root endpoint."""
        return JSONResponse({
            "service": self.SERVICE_NAME,
            "status": "ok",
            "endpoints": ["/ping", "/health", "/symbols", "/evaluate", "/postfix"],
        })

    async def ping(self, request: Request) -> JSONResponse:
        """Health check ping endpoint."""
        return JSONResponse({"status": "ok", "service": self.SERVICE_NAME})

    async def health(self, request: Request) -> JSONResponse:
        """Health check endpoint."""
        return JSONResponse({
            "status": "healthy",
            "service": self.SERVICE_NAME,
            "functions": len(self.capability.engine.functions),
            "constants": len(self.capability.engine.constants),
        })

    async def symbols(self, request: Request) -> JSONResponse:
        return await self._run_tool("expression_list_symbols", {})

    async def evaluate(self, request: Request) -> JSONResponse:
        """Evaluate ``{"expression": ..., "variables": {...}}``."""
        try:
            body = await self._read_json(request)
        except InvalidInputError as e:
            return self._error_response(e)
        return await self._run_tool("expression_evaluate", body)

    async def postfix(self, request: Request) -> JSONResponse:
        """Convert ``{"expression": ...}`` to postfix notation."""
        try:
            body = await self._read_json(request)
        except InvalidInputError as e:
            return self._error_response(e)
        return await self._run_tool("expression_to_postfix", body)

    async def _read_json(self, request: Request) -> Dict[str, Any]:
        try:
            body = await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise InvalidInputError(f"Request body is not valid JSON: {e}") from e
        if not isinstance(body, dict):
            raise InvalidInputError("Request body must be a JSON object")
        return body

    async def _run_tool(self, tool_name: str, arguments: Dict[str, Any]) -> JSONResponse:
        try:
            result = self.capability.handle(tool_name, arguments)
        except Exception as e:
            return self._error_response(e)
        return JSONResponse({"status": "ok", **result.to_dict()})

    def _error_response(self, error: Exception) -> JSONResponse:
        status_code = get_http_status_for_error(error)
        if status_code >= 500:
            logger.error("Request failed", error=str(error), error_type=type(error).__name__)
        return JSONResponse(map_error_for_web(error), status_code=status_code)

    def get_app(self) -> Any:
        """Return the ASGI application."""
        return self.app
