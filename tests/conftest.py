"""Pytest configuration for the SuccessFactors time-off MCP server tests.

Sets environment variables before any test module imports server.py, which
registers tool domains at import time.
"""

from __future__ import annotations

import os

os.environ.setdefault("SF_API_BASE_URL", "https://sf.example.com/odata/v2")
os.environ.setdefault("SF_API_KEY", "test-api-key")
os.environ.setdefault("ENABLED_DOMAINS", "timeoff,timeoff_data")

# ---------------------------------------------------------------------------
# Shared test helpers -- used by test_tools_timeoff.py, test_tools_timeoff_data.py
# ---------------------------------------------------------------------------

from fastmcp.tools.function_tool import FunctionTool

import server as server_module


def get_tool_fn(name: str):
    """Get a registered tool's underlying async function by name.

    Looks up the tool in ``mcp.local_provider._components``.
    Raises ``KeyError`` with available tool names if not found.
    """
    lp = server_module.mcp.local_provider
    for comp in lp._components.values():
        if isinstance(comp, FunctionTool) and comp.name == name:
            return comp.fn
    available = sorted(
        comp.name for comp in lp._components.values() if isinstance(comp, FunctionTool)
    )
    raise KeyError(f"Tool {name!r} not found. Available: {available}")
