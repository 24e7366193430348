"""Table structure introspection handler."""

import logging
from typing import Any, Dict

from core.error_handling import ErrorDetail
from tools.base import ToolHandler
from tools.definitions import TOOL_DESCRIBE_TABLE
from tools.envelopes import (
    DescribeFailure,
    DescribeMetadata,
    DescribeSuccess,
    TableIdentity,
    TableRef,
    column_descriptor,
)
from tools.requests import DescribeTableRequest

logger = logging.getLogger(__name__)

DESCRIBE_TABLE_SQL = """
    SELECT
        column_name,
        data_type,
        is_nullable,
        column_default,
        character_maximum_length,
        numeric_precision,
        numeric_scale
    FROM information_schema.columns
    WHERE table_schema = $1 AND table_name = $2
    ORDER BY ordinal_position
"""


class DescribeTableHandler(ToolHandler):
    """Handler for table structure requests."""

    request_model = DescribeTableRequest

    @property
    def tool_name(self) -> str:
        return TOOL_DESCRIBE_TABLE

    async def execute(self, request: DescribeTableRequest):
        """
        Describe the columns of one table.

        An unknown table is not an error: it yields an empty column list
        with ``found`` false.
        """
        schema_name = self.resolve_schema(request.schema_name)

        outcome = await self.run_statement(DESCRIBE_TABLE_SQL, (schema_name, request.table_name))
        if isinstance(outcome, ErrorDetail):
            return DescribeFailure(
                error=outcome,
                table=TableRef(name=request.table_name, schema_name=schema_name),
            )

        columns = [column_descriptor(row, position) for position, row in enumerate(outcome.rows, start=1)]
        if not columns:
            logger.info(f"No columns found for {schema_name}.{request.table_name}")

        return DescribeSuccess(
            table=TableIdentity(
                name=request.table_name,
                schema_name=schema_name,
                full_name=f"{schema_name}.{request.table_name}",
            ),
            columns=columns,
            metadata=DescribeMetadata(
                column_count=len(columns),
                found=len(columns) > 0,
            ),
        )

    def invalid_arguments(self, error: ErrorDetail, arguments: Dict[str, Any]) -> DescribeFailure:
        table_name = arguments.get("tableName")
        schema_name = arguments.get("schema")
        return DescribeFailure(
            error=error,
            table=TableRef(
                name=table_name if isinstance(table_name, str) else None,
                schema_name=self.resolve_schema(schema_name if isinstance(schema_name, str) else None),
            ),
        )
