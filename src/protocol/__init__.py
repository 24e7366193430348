"""MCP protocol bindings."""
