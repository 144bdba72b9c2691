"""Pytest configuration and fixtures

Provides shared fixtures for all tests: fresh engines and capabilities so
registrations made by one test never leak into another, and isolation of
the module-level settings and tool registry singletons.
"""

import sys
from pathlib import Path

import pytest

# Add project root to sys.path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from exprcalc.config import reset_settings  # noqa: E402
from exprcalc.math_engine.capabilities import ExpressionCapability  # noqa: E402
from exprcalc.math_engine.engine import ExpressionEngine  # noqa: E402
from exprcalc.mcp_server.tool_registry import reset_registry  # noqa: E402


# ============================================================================
# SINGLETON ISOLATION
# ============================================================================


@pytest.fixture(scope="function", autouse=True)
def isolate_singletons():
    """
    Reset cached settings and the global tool registry around every test.

    Tests that change EXPRCALC_* environment variables or register
    capabilities start and finish with a clean slate.
    """
    reset_settings()
    reset_registry()

    yield

    reset_settings()
    reset_registry()


# ============================================================================
# ENGINE FIXTURES
# ============================================================================


@pytest.fixture(scope="function")
def engine():
    """
    Provide a private ExpressionEngine with the default tables.

    Use this instead of get_engine() whenever a test registers constants
    or functions.
    """
    return ExpressionEngine()


@pytest.fixture(scope="function")
def capability(engine):
    """Provide an ExpressionCapability bound to the private engine."""
    return ExpressionCapability(engine=engine)
