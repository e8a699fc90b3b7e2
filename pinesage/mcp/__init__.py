"""MCP (Model Context Protocol) server for PineSage.

Provides the indicator tools for integration with Claude Desktop and
other MCP clients.

Usage:
    pinesage mcp serve   # Start MCP server
    pinesage mcp setup   # Print client configuration snippet
    pinesage mcp test    # Smoke-test all tools
"""

from typing import TYPE_CHECKING

from pinesage.mcp.tools import TOOL_SPECS, IndicatorTools, ToolResult

# Check if MCP is available
MCP_AVAILABLE = False
try:
    __import__("mcp")
    MCP_AVAILABLE = True
except ImportError:
    pass


def check_mcp_available() -> None:
    """Check if MCP is installed, raise helpful error if not."""
    if not MCP_AVAILABLE:
        raise ImportError(
            "MCP support requires the mcp package.\n"
            "Install with:  pip install mcp"
        )


if TYPE_CHECKING or MCP_AVAILABLE:
    from .server import PineSageMCPServer


__all__ = [
    "IndicatorTools",
    "MCP_AVAILABLE",
    "PineSageMCPServer",
    "TOOL_SPECS",
    "ToolResult",
    "check_mcp_available",
]
