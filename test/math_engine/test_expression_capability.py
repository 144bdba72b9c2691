"""Tests for the expression capability tools.

The capability is driven through handle() with MCP-style argument dicts,
the same way the tool registry and the web server call it.
"""

import math

import pytest
from pydantic import ValidationError

from exprcalc.exceptions import (
    InvalidInputError,
    StackUnderflowError,
    UnbalancedParensError,
    UnknownIdentifierError,
)
from exprcalc.math_engine.capabilities import ExpressionCapability


class TestToolDefinitions:
    """Tool metadata exposed to the registry."""

    def test_tool_names(self, capability):
        names = [tool.name for tool in capability.get_tools()]
        assert names == ["expression_evaluate", "expression_to_postfix", "expression_list_symbols"]

    def test_schemas_are_objects(self, capability):
        for tool in capability.get_tools():
            assert tool.input_schema["type"] == "object"
            assert tool.description

    def test_evaluate_requires_expression(self, capability):
        schema = capability.get_tools()[0].input_schema
        assert schema["required"] == ["expression"]
        assert "variables" in schema["properties"]

    def test_name_and_description(self, capability):
        assert capability.name == "expression"
        assert "expression" in capability.description.lower()

    def test_default_engine(self):
        """Without an explicit engine the shared singleton is used."""
        from exprcalc.math_engine import get_engine

        assert ExpressionCapability().engine is get_engine()


class TestEvaluateTool:
    """expression_evaluate."""

    def test_basic(self, capability):
        result = capability.handle("expression_evaluate", {"expression": "2+3*4"})
        assert result.result == 14.0
        assert result.kind == "float64"
        assert result.expression == "2+3*4"

    def test_variables(self, capability):
        result = capability.handle(
            "expression_evaluate",
            {"expression": "sqrt(x^2+y^2)", "variables": {"x": 3, "y": 4.0}},
        )
        assert result.result == 5.0

    def test_division_by_zero_serializes(self, capability):
        result = capability.handle("expression_evaluate", {"expression": "1/0"})
        assert result.result == math.inf
        assert result.to_dict()["result"] == "inf"

    def test_uses_engine_registrations(self, capability):
        capability.engine.register_constant("answer", 42)
        result = capability.handle("expression_evaluate", {"expression": "answer/2"})
        assert result.result == 21.0

    def test_missing_expression(self, capability):
        with pytest.raises(ValidationError):
            capability.handle("expression_evaluate", {})

    def test_none_arguments(self, capability):
        with pytest.raises(ValidationError):
            capability.handle("expression_evaluate", None)

    def test_expression_must_be_string(self, capability):
        with pytest.raises(ValidationError):
            capability.handle("expression_evaluate", {"expression": 12})

    def test_variable_must_be_number(self, capability):
        with pytest.raises(ValidationError):
            capability.handle(
                "expression_evaluate",
                {"expression": "x", "variables": {"x": "3"}},
            )

    def test_unknown_argument(self, capability):
        with pytest.raises(ValidationError):
            capability.handle("expression_evaluate", {"expression": "1", "precision": "float32"})

    def test_expression_errors_propagate(self, capability):
        with pytest.raises(UnknownIdentifierError):
            capability.handle("expression_evaluate", {"expression": "foo+1"})
        with pytest.raises(StackUnderflowError):
            capability.handle("expression_evaluate", {"expression": "1+"})


class TestPostfixTool:
    """expression_to_postfix."""

    def test_basic(self, capability):
        result = capability.handle("expression_to_postfix", {"expression": "2^3^2"})
        assert result.result == "2 3 2 ^ ^"
        assert result.kind == "postfix"

    def test_unknown_names_are_not_checked(self, capability):
        """Conversion does not resolve identifiers."""
        result = capability.handle("expression_to_postfix", {"expression": "foo(bar)"})
        assert result.result == "bar foo"

    def test_unbalanced(self, capability):
        with pytest.raises(UnbalancedParensError):
            capability.handle("expression_to_postfix", {"expression": "(1"})


class TestListSymbolsTool:
    """expression_list_symbols and list_operations."""

    def test_catalog(self, capability):
        result = capability.handle("expression_list_symbols", {})
        assert result.kind == "catalog"
        assert result.result["operators"] == ["+", "-", "*", "/", "^"]
        assert "pi" in result.result["constants"]
        assert "sqrt" in result.result["functions"]

    def test_list_operations(self, capability):
        """list_operations returns the same catalog as the symbols tool."""
        operations = capability.list_operations()
        assert operations == capability.handle("expression_list_symbols", {}).result
        assert list(operations["constants"]) == ["c", "e", "pi"]
        assert operations["constants"]["e"] == pytest.approx(math.e)
        assert "ln" in operations["functions"]

    def test_unknown_tool(self, capability):
        with pytest.raises(InvalidInputError):
            capability.handle("expression_simplify", {"expression": "x"})
