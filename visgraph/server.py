"""MCP server exposing graph layout and rendering tools."""

import asyncio
import json
import logging

from mcp import Tool
from mcp.server import NotificationOptions, Server
from mcp.server.models import InitializationOptions
from mcp.types import TextContent

from . import __version__
from .tools.layout_tools import LayoutTools
from .utils.response import error_response

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class VisGraphMCPServer:
    """MCP Server for graph layout and visualization."""

    def __init__(self):
        """Initialize the MCP server and its tool handlers."""
        self.layout_tools = LayoutTools()

        # Create MCP server instance
        self.server = Server("visgraph-mcp")

        # Register handlers
        self._register_handlers()

    def _register_handlers(self):
        """Register all MCP handlers."""

        @self.server.list_tools()
        async def handle_list_tools() -> list[Tool]:
            """List all available tools."""
            return self.layout_tools.get_tools()

        @self.server.call_tool()
        async def handle_call_tool(name: str, arguments: dict) -> list[TextContent]:
            """Route tool calls to appropriate handlers."""
            return await self.call_tool(name, arguments)

    async def call_tool(self, name: str, arguments: dict) -> list[TextContent]:
        """Run a tool and wrap its response envelope as text content."""
        if name.startswith("layout_"):
            result = await self.layout_tools.handle_tool(name, arguments)
        else:
            logger.error(f"Unknown tool requested: {name}")
            result = error_response(f"Unknown tool: {name}", code="UNKNOWN_TOOL")

        return [TextContent(type="text", text=json.dumps(result, indent=2))]

    async def run(self):
        """Run the MCP server."""
        from mcp.server.stdio import stdio_server

        async with stdio_server() as (read_stream, write_stream):
            await self.server.run(
                read_stream,
                write_stream,
                InitializationOptions(
                    server_name="visgraph-mcp",
                    server_version=__version__,
                    capabilities=self.server.get_capabilities(
                        notification_options=NotificationOptions(),
                        experimental_capabilities={}
                    )
                )
            )


def main():
    """Main entry point for the MCP server."""
    server = VisGraphMCPServer()
    asyncio.run(server.run())


if __name__ == "__main__":
    main()
