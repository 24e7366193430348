"""MCP tool definitions for the PostgreSQL gateway."""

from typing import List
from mcp.types import Tool


# Tool name constants (used for registration in handlers)
TOOL_QUERY = "query"
TOOL_DESCRIBE_TABLE = "describe_table"
TOOL_LIST_TABLES = "list_tables"


def get_all_tools() -> List[Tool]:
    """Generate all MCP tool definitions.

    Returns:
        List of Tool objects, in catalog order
    """
    return [
        Tool(
            name=TOOL_QUERY,
            description="Execute a PostgreSQL query and return results",
            inputSchema={
                "type": "object",
                "properties": {
                    "query": {
                        "type": "string",
                        "description": "The PostgreSQL query to execute (SELECT, INSERT, UPDATE, DELETE, etc.)"
                    },
                    "schema": {
                        "type": "string",
                        "description": "Schema name to use (defaults to configured schema)"
                    },
                    "context": {
                        "type": "string",
                        "description": "Additional context for the query"
                    },
                    "maxRows": {
                        "type": "number",
                        "description": "Maximum number of rows to return (defaults to configured maxRows)"
                    }
                },
                "required": ["query"]
            }
        ),
        Tool(
            name=TOOL_DESCRIBE_TABLE,
            description="Get table structure and metadata",
            inputSchema={
                "type": "object",
                "properties": {
                    "tableName": {
                        "type": "string",
                        "description": "Name of the table to describe"
                    },
                    "schema": {
                        "type": "string",
                        "description": "Schema name (defaults to configured schema)"
                    }
                },
                "required": ["tableName"]
            }
        ),
        Tool(
            name=TOOL_LIST_TABLES,
            description="List all tables in the database or specific schema",
            inputSchema={
                "type": "object",
                "properties": {
                    "schema": {
                        "type": "string",
                        "description": "Schema name (defaults to configured schema)"
                    },
                    "pattern": {
                        "type": "string",
                        "description": "Pattern to filter table names (SQL LIKE pattern)"
                    }
                },
                "required": []
            }
        )
    ]


TOOLS = tuple(get_all_tools())
