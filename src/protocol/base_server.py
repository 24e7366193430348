"""Base MCP server - transport-agnostic MCP protocol binding.

Registers the tool catalog and the call handler on an ``mcp`` server. The
protocol runtime owns framing and lifecycle; this class only translates a
tool call into a registry dispatch and the envelope into text content.
"""

import logging
from typing import Any, Dict, List, Optional

from mcp.server import Server
from mcp.types import TextContent, Tool

from core import __version__
from tools import TOOLS, ToolRegistry
from tools.envelopes import to_text_content

logger = logging.getLogger(__name__)


class BaseMCPServer:
    """Base MCP server providing core protocol functionality."""

    def __init__(self, registry: ToolRegistry, server_name: str = "postgres-mcp-server"):
        """Initialize base MCP server.

        Args:
            registry: ToolRegistry dispatching calls to handlers
            server_name: Name of the MCP server
        """
        self.registry = registry
        self.server = Server(server_name, version=__version__)
        self._setup_handlers()
        logger.info(f"Initialized {server_name} MCP server")

    async def list_tools(self) -> List[Tool]:
        """List all available tools."""
        return list(TOOLS)

    async def call_tool(self, name: str, arguments: Optional[Dict[str, Any]]) -> List[TextContent]:
        """Handle tool execution.

        UnknownToolError propagates so the runtime reports a protocol-level
        error instead of a payload with ``success: false``.
        """
        envelope = await self.registry.dispatch(name, arguments or {})
        return to_text_content(envelope)

    def _setup_handlers(self):
        """Setup MCP protocol handlers."""

        @self.server.list_tools()
        async def list_tools():
            return await self.list_tools()

        @self.server.call_tool()
        async def call_tool(name: str, arguments: dict):
            return await self.call_tool(name, arguments)
