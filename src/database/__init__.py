"""Database access for the PostgreSQL MCP gateway."""

from .pool import ConnectionPool
from .execution import ExecutionResult, FieldDescriptor, execute_statement

__all__ = [
    "ConnectionPool",
    "ExecutionResult",
    "FieldDescriptor",
    "execute_statement"
]
