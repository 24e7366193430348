"""Tool registry for routing MCP tool calls to handlers."""

import logging
from typing import Any, Dict, List, Optional

from core.config import ToolDefaults
from core.exceptions import UnknownToolError
from tools.base import ToolHandler
from tools.envelopes import Envelope
from tools.handlers import (
    QueryHandler,
    DescribeTableHandler,
    ListTablesHandler,
)

logger = logging.getLogger(__name__)


class ToolRegistry:
    """
    Central registry for MCP tool handlers.

    Routes tool calls to the handler registered under the tool name. Every
    handler shares the same pool and the same immutable defaults.
    """

    HANDLER_CLASSES = (
        QueryHandler,
        DescribeTableHandler,
        ListTablesHandler,
    )

    def __init__(self, pool: Any, defaults: ToolDefaults):
        self.pool = pool
        self.defaults = defaults
        self.handlers: Dict[str, ToolHandler] = {}
        self._register_handlers()

    def _register_handlers(self):
        """Register all tool handlers."""
        for handler_class in self.HANDLER_CLASSES:
            handler = handler_class(self.pool, self.defaults)
            self.handlers[handler.tool_name] = handler
            logger.debug(f"Registered {handler.tool_name} -> {handler_class.__name__}")

        logger.info(f"✅ Registered {len(self.handlers)} MCP tools")

    @property
    def tool_names(self) -> List[str]:
        return list(self.handlers)

    def is_tool_registered(self, tool_name: str) -> bool:
        """Check if a tool has a registered handler."""
        return tool_name in self.handlers

    async def dispatch(self, tool_name: str, arguments: Optional[Dict[str, Any]] = None) -> Envelope:
        """
        Route tool call to the matching handler.

        Args:
            tool_name: Name from the MCP tool call
            arguments: Raw tool arguments

        Returns:
            The handler's envelope, unchanged

        Raises:
            UnknownToolError: No handler is registered under tool_name
        """
        handler = self.handlers.get(tool_name)
        if handler is None:
            logger.warning(f"Rejected call to unknown tool: {tool_name}")
            raise UnknownToolError(tool_name)

        logger.debug(f"Routing {tool_name} to {handler.__class__.__name__}")
        return await handler.handle(arguments)
