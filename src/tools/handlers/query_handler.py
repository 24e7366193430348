"""Ad-hoc query execution handler."""

import logging
from typing import Any, Dict

from core.error_handling import ErrorDetail
from tools.augmenter import QueryAugmenter
from tools.base import ToolHandler
from tools.definitions import TOOL_QUERY
from tools.envelopes import (
    QueryFailure,
    QueryMetadata,
    QuerySuccess,
    execution_info,
    jsonable_rows,
)
from tools.requests import QueryRequest

logger = logging.getLogger(__name__)


class QueryHandler(ToolHandler):
    """Handler for caller-supplied SQL.

    The query text is the caller's own SQL and runs verbatim, never
    parameterized; the only rewrite is the automatic LIMIT.
    """

    request_model = QueryRequest

    @property
    def tool_name(self) -> str:
        return TOOL_QUERY

    async def execute(self, request: QueryRequest):
        """
        Execute the query with an automatic row limit.

        Args:
            request: Validated query arguments

        Returns:
            QuerySuccess or QueryFailure envelope
        """
        schema_name = self.resolve_schema(request.schema_name)
        context = request.context or self.defaults.context
        limit = request.max_rows if request.max_rows is not None else self.defaults.max_rows

        final_query, was_modified = QueryAugmenter.augment(request.query, limit)
        if was_modified:
            logger.debug(f"Applied automatic LIMIT {limit}")

        outcome = await self.run_statement(final_query)
        if isinstance(outcome, ErrorDetail):
            return QueryFailure(
                error=outcome,
                query=request.query,
                schema_name=schema_name,
                context=context,
            )

        rows = jsonable_rows(outcome.rows)
        return QuerySuccess(
            query=final_query,
            schema_name=schema_name,
            context=context,
            execution=execution_info(outcome),
            data=rows,
            metadata=QueryMetadata(
                has_data=len(rows) > 0,
                data_count=len(rows),
                was_limited=was_modified,
                limit_applied=limit,
            ),
        )

    def invalid_arguments(self, error: ErrorDetail, arguments: Dict[str, Any]) -> QueryFailure:
        query = arguments.get("query")
        schema_name = arguments.get("schema")
        context = arguments.get("context")
        return QueryFailure(
            error=error,
            query=query if isinstance(query, str) else None,
            schema_name=self.resolve_schema(schema_name if isinstance(schema_name, str) else None),
            context=(context if isinstance(context, str) else None) or self.defaults.context,
        )
