"""STDIO transport MCP server."""

import logging
from typing import Optional

from mcp.server.stdio import stdio_server

from core.config import AppConfig
from database.pool import ConnectionPool
from protocol.base_server import BaseMCPServer
from tools.registry import ToolRegistry

logger = logging.getLogger(__name__)


class StdioMCPServer(BaseMCPServer):
    """MCP server using STDIO transport."""

    async def run(self):
        """Run the STDIO MCP server."""
        async with stdio_server() as (read_stream, write_stream):
            logger.info("PostgreSQL MCP server running on stdio")
            await self.server.run(
                read_stream,
                write_stream,
                self.server.create_initialization_options()
            )


async def run_stdio_server(app_config: Optional[AppConfig] = None):
    """Run STDIO MCP server with given configuration.

    The pool lives for the whole session and is closed on every exit path.

    Args:
        app_config: App configuration (optional, defaults to env)
    """
    app_config = app_config or AppConfig.from_env()
    pool = ConnectionPool(app_config.database)
    await pool.initialize()

    try:
        test_result = await pool.test_connection()
        if test_result.get("success"):
            logger.info("Database connection test passed")
        else:
            logger.warning(f"Database connection test failed: {test_result.get('error')}")

        registry = ToolRegistry(pool, app_config.defaults)
        server = StdioMCPServer(registry, app_config.server_name)
        await server.run()
    finally:
        await pool.close()
