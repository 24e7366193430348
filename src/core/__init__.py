"""Core modules for the PostgreSQL MCP gateway."""

from .exceptions import (
    GatewayError,
    UnknownToolError,
    DatabaseConnectionError,
    ConfigurationError
)

__version__ = "1.0.0"

__all__ = [
    "GatewayError",
    "UnknownToolError",
    "DatabaseConnectionError",
    "ConfigurationError",
    "__version__"
]
