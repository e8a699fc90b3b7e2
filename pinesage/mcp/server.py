"""MCP Server implementation for PineSage.

Exposes the indicator tools to MCP clients (Claude Desktop, AI IDEs)
over stdio or HTTP/SSE.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pinesage.mcp.tools import IndicatorTools
from pinesage.utils.config import Config
from pinesage.utils.logging import get_logger

logger = get_logger("mcp.server")

# Optional MCP import
try:
    from mcp.server import Server
    from mcp.server.stdio import stdio_server
    from mcp.types import CallToolResult, TextContent, Tool

    MCP_AVAILABLE = True
except ImportError:
    MCP_AVAILABLE = False
    Server = None


class PineSageMCPServer:
    """MCP Server that exposes the indicator tools.

    Tools provided:
        - list_indicators: List indicator files, optionally filtered
        - analyze_indicator: Components, counts and complexity of one file
        - search_indicators: Literal term search across all files
        - extract_functions: Brace-matched function bodies of one file
    """

    def __init__(self, config: Config, tools: Optional[IndicatorTools] = None):
        """Initialize the MCP server.

        Args:
            config: PineSage configuration
            tools: Tool dispatcher (built from config when omitted)
        """
        if not MCP_AVAILABLE:
            raise ImportError(
                "MCP support requires the mcp package. "
                "Install with: pip install mcp"
            )

        self.config = config
        self.tools = tools or IndicatorTools(config)

        self.server = Server(config.server.name, version=config.server.version)
        self._register_tools()

        logger.info(
            f"PineSage MCP Server initialized for {config.project_name} "
            f"({config.indicators_path})"
        )

    def list_tool_definitions(self) -> List[Tool]:
        """Tool definitions advertised to clients."""
        return [
            Tool(
                name=spec.name,
                description=spec.description,
                inputSchema=spec.input_schema,
            )
            for spec in self.tools.specs
        ]

    async def handle_call_tool(self, name: str, arguments: Optional[Dict[str, Any]]) -> CallToolResult:
        """Dispatch a tool call and wrap its text in a CallToolResult."""
        logger.debug(f"Tool call: {name} {arguments}")
        result = self.tools.dispatch(name, arguments or {})
        return CallToolResult(
            content=[TextContent(type="text", text=result.text)],
            isError=result.is_error,
        )

    def _register_tools(self) -> None:
        """Register MCP tool handlers."""

        @self.server.list_tools()
        async def list_tools() -> List[Tool]:
            """List available tools."""
            return self.list_tool_definitions()

        @self.server.call_tool()
        async def call_tool(name: str, arguments: Dict[str, Any]) -> CallToolResult:
            """Handle tool calls."""
            return await self.handle_call_tool(name, arguments)

    # =========================================================================
    # Server Transports
    # =========================================================================

    async def run_stdio(self) -> None:
        """Run the MCP server on stdio (single client, process-based)."""
        logger.info("Starting PineSage MCP Server (stdio transport)...")

        async with stdio_server() as (read_stream, write_stream):
            await self.server.run(
                read_stream,
                write_stream,
                self.server.create_initialization_options(),
            )

        logger.info("PineSage MCP Server stopped")

    async def run_sse(self, host: str = "localhost", port: int = 8080) -> None:
        """Run the MCP server with HTTP/SSE transport (multi-client, network-based).

        Args:
            host: Host to bind to (default: localhost)
            port: Port to bind to (default: 8080)
        """
        try:
            from mcp.server.sse import SseServerTransport
            from starlette.applications import Starlette
            from starlette.responses import Response
            from starlette.routing import Mount, Route
            import uvicorn
        except ImportError:
            logger.error(
                "SSE transport requires additional dependencies. "
                "Install with: pip install 'pinesage[sse]' or use stdio transport."
            )
            raise

        logger.info(f"Starting PineSage MCP Server (HTTP/SSE transport) on {host}:{port}")
        logger.info(f"Server endpoint: http://{host}:{port}/sse")

        sse = SseServerTransport("/messages/")

        async def handle_sse(request):
            async with sse.connect_sse(
                request.scope, request.receive, request._send
            ) as streams:
                await self.server.run(
                    streams[0],
                    streams[1],
                    self.server.create_initialization_options(),
                )
            return Response()

        starlette_app = Starlette(
            routes=[
                Route("/sse", endpoint=handle_sse),
                Mount("/messages/", app=sse.handle_post_message),
            ],
        )

        uvicorn_config = uvicorn.Config(starlette_app, host=host, port=port, log_level="info")
        await uvicorn.Server(uvicorn_config).serve()
