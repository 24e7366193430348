"""Custom exceptions for the PostgreSQL MCP gateway."""


class GatewayError(Exception):
    """Base exception for all gateway errors."""

    def __init__(self, message: str, details: dict = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict:
        """Convert exception to dictionary for logging and protocol errors."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details
        }


class UnknownToolError(GatewayError):
    """Raised when a tool call names an operation with no registered handler."""

    def __init__(self, tool_name: str):
        super().__init__(f"Unknown tool: {tool_name}", {"tool": tool_name})
        self.tool_name = tool_name


class DatabaseConnectionError(GatewayError):
    """Exception raised when the connection pool cannot be created."""
    pass


class ConfigurationError(GatewayError):
    """Exception raised when configuration is invalid."""
    pass
