"""Tests for the MCP server tool handlers.

The handlers are called directly; every response is a single TextContent
holding a JSON document with a "status" of "ok" or "error".
"""

import json

import pytest

from exprcalc.mcp_server.mcp_server import handle_call_tool, handle_list_tools
from exprcalc.mcp_server.tool_registry import initialize_registry


@pytest.fixture
def registry():
    return initialize_registry()


async def call(name, arguments):
    contents = await handle_call_tool(name, arguments)
    assert len(contents) == 1
    assert contents[0].type == "text"
    return json.loads(contents[0].text)


class TestListTools:

    @pytest.mark.asyncio
    async def test_includes_ping_and_expression_tools(self, registry):
        names = [tool.name for tool in await handle_list_tools()]
        assert names[0] == "ping"
        assert "expression_evaluate" in names
        assert "expression_to_postfix" in names
        assert "expression_list_symbols" in names


class TestCallTool:

    @pytest.mark.asyncio
    async def test_ping(self, registry):
        assert await call("ping", {}) == {"status": "ok", "service": "exprcalc"}

    @pytest.mark.asyncio
    async def test_evaluate(self, registry):
        data = await call("expression_evaluate", {"expression": "2^3^2"})
        assert data == {"status": "ok", "result": 512.0, "kind": "float64", "expression": "2^3^2"}

    @pytest.mark.asyncio
    async def test_evaluate_with_variables(self, registry):
        data = await call(
            "expression_evaluate",
            {"expression": "sqrt(x^2+y^2)", "variables": {"x": 3, "y": 4}},
        )
        assert data["result"] == 5.0

    @pytest.mark.asyncio
    async def test_non_finite_result_is_valid_json(self, registry):
        data = await call("expression_evaluate", {"expression": "sqrt(-1)"})
        assert data["status"] == "ok"
        assert data["result"] == "nan"

    @pytest.mark.asyncio
    async def test_postfix(self, registry):
        data = await call("expression_to_postfix", {"expression": "(2+3)*4"})
        assert data["result"] == "2 3 + 4 *"

    @pytest.mark.asyncio
    async def test_symbols(self, registry):
        data = await call("expression_list_symbols", {})
        assert data["kind"] == "catalog"
        assert "e" in data["result"]["constants"]


class TestToolErrors:
    """Failures come back as tagged error payloads, never as exceptions."""

    @pytest.mark.asyncio
    async def test_unknown_identifier(self, registry):
        data = await call("expression_evaluate", {"expression": "foo+1"})
        assert data["status"] == "error"
        assert data["error_code"] == "UNKNOWN_IDENTIFIER"
        assert data["details"] == {"stage": "evaluate", "name": "foo"}
        assert data["recovery_strategy"]

    @pytest.mark.asyncio
    async def test_unbalanced_parens(self, registry):
        data = await call("expression_evaluate", {"expression": "(1+2"})
        assert data["error_code"] == "UNBALANCED_PARENS"
        assert data["details"]["stage"] == "convert"

    @pytest.mark.asyncio
    async def test_invalid_number(self, registry):
        data = await call("expression_to_postfix", {"expression": "1.2.3+1"})
        assert data["error_code"] == "INVALID_NUMBER"
        assert data["details"]["stage"] == "tokenize"

    @pytest.mark.asyncio
    async def test_validation_error(self, registry):
        data = await call("expression_evaluate", {"variables": {}})
        assert data["error_code"] == "PYDANTIC_VALIDATION_ERROR"
        assert data["details"]["errors"][0]["loc"] == ["expression"]

    @pytest.mark.asyncio
    async def test_unknown_tool(self, registry):
        data = await call("math_compute", {})
        assert data["error_code"] == "REGISTRY_ERROR"

    @pytest.mark.asyncio
    async def test_adjacent_operands(self, registry):
        data = await call("expression_evaluate", {"expression": "2 3 +"})
        assert data["status"] == "error"
        assert data["error_code"] == "UNEXPECTED_TOKEN"
        assert data["details"] == {"stage": "convert", "token": "3", "token_index": 1}
