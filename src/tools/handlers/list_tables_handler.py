"""Table listing handler."""

import logging
from typing import Any, Dict, List, Optional, Tuple

from core.error_handling import ErrorDetail
from tools.base import ToolHandler
from tools.definitions import TOOL_LIST_TABLES
from tools.envelopes import (
    ListFailure,
    ListMetadata,
    ListSuccess,
    table_descriptor,
)
from tools.requests import ListTablesRequest

logger = logging.getLogger(__name__)

LIST_TABLES_SQL = """
    SELECT table_name, table_type
    FROM information_schema.tables
    WHERE table_schema = $1
"""


def build_list_tables_query(schema_name: str, pattern: Optional[str] = None) -> Tuple[str, List[str]]:
    """Build the table listing statement and its bound parameters."""
    query = LIST_TABLES_SQL
    params = [schema_name]

    if pattern:
        query += " AND table_name LIKE $2"
        params.append(pattern)

    query += " ORDER BY table_name"
    return query, params


class ListTablesHandler(ToolHandler):
    """Handler for table enumeration within a schema."""

    request_model = ListTablesRequest

    @property
    def tool_name(self) -> str:
        return TOOL_LIST_TABLES

    async def execute(self, request: ListTablesRequest):
        """List tables in a schema, optionally filtered by a LIKE pattern."""
        schema_name = self.resolve_schema(request.schema_name)
        pattern = request.pattern or None

        query, params = build_list_tables_query(schema_name, pattern)
        outcome = await self.run_statement(query, params)
        if isinstance(outcome, ErrorDetail):
            return ListFailure(error=outcome, schema_name=schema_name, pattern=pattern)

        tables = [
            table_descriptor(row, position, schema_name)
            for position, row in enumerate(outcome.rows, start=1)
        ]
        return ListSuccess(
            schema_name=schema_name,
            pattern=pattern,
            tables=tables,
            metadata=ListMetadata(
                table_count=len(tables),
                found=len(tables) > 0,
                filtered=pattern is not None,
            ),
        )

    def invalid_arguments(self, error: ErrorDetail, arguments: Dict[str, Any]) -> ListFailure:
        schema_name = arguments.get("schema")
        pattern = arguments.get("pattern")
        return ListFailure(
            error=error,
            schema_name=self.resolve_schema(schema_name if isinstance(schema_name, str) else None),
            pattern=(pattern if isinstance(pattern, str) else None) or None,
        )
