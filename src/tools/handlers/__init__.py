"""Tool handlers package."""

from tools.handlers.query_handler import QueryHandler
from tools.handlers.describe_handler import DescribeTableHandler
from tools.handlers.list_tables_handler import ListTablesHandler

__all__ = [
    'QueryHandler',
    'DescribeTableHandler',
    'ListTablesHandler',
]
