"""MCP tools package for the PostgreSQL gateway."""

from tools.base import ToolHandler
from tools.registry import ToolRegistry
from tools.definitions import TOOLS, get_all_tools
from tools.augmenter import QueryAugmenter

__all__ = [
    'ToolHandler',
    'ToolRegistry',
    'TOOLS',
    'get_all_tools',
    'QueryAugmenter',
]
