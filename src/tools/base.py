"""Base classes for MCP tool handlers."""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Sequence, Type, Union

import asyncpg
from pydantic import BaseModel, ValidationError

from core.config import ToolDefaults
from core.error_handling import (
    ErrorDetail,
    describe_connection_timeout,
    describe_error,
    describe_timeout,
    describe_validation_error,
)
from core.exceptions import DatabaseConnectionError
from database.execution import ExecutionResult, execute_statement
from tools.envelopes import Envelope

logger = logging.getLogger(__name__)

# Failures absorbed into a failure envelope instead of crossing the handler
DRIVER_ERRORS = (
    asyncpg.PostgresError,
    asyncpg.InterfaceError,
    asyncpg.exceptions.InternalClientError,
    OSError,
    DatabaseConnectionError,
)


class ToolHandler(ABC):
    """Abstract base class for MCP tool handlers.

    A handler owns one request/response cycle: parse arguments, borrow a
    connection, run a single statement, shape the envelope. The connection is
    scoped to ``run_statement`` so it is released on every exit path.
    """

    #: pydantic model the raw tool arguments are parsed into
    request_model: Type[BaseModel]

    def __init__(self, pool: Any, defaults: ToolDefaults):
        self.pool = pool
        self.defaults = defaults

    @property
    @abstractmethod
    def tool_name(self) -> str:
        """Return the tool name this handler serves."""
        pass

    @abstractmethod
    async def execute(self, request: BaseModel) -> Envelope:
        """Run the tool for a validated request."""
        pass

    @abstractmethod
    def invalid_arguments(self, error: ErrorDetail, arguments: Dict[str, Any]) -> Envelope:
        """Build the failure envelope for arguments that did not validate."""
        pass

    async def handle(self, arguments: Optional[Dict[str, Any]]) -> Envelope:
        """
        Handle tool invocation.

        Args:
            arguments: Raw tool call arguments

        Returns:
            Success or failure envelope; never raises for driver errors
        """
        arguments = arguments or {}
        try:
            request = self.request_model.model_validate(arguments)
        except ValidationError as e:
            detail = describe_validation_error(e)
            logger.warning(f"{self.tool_name}: {detail.message}: {detail.detail}")
            return self.invalid_arguments(detail, arguments)
        return await self.execute(request)

    def resolve_schema(self, schema_name: Optional[str]) -> str:
        return schema_name or self.defaults.schema_name

    async def run_statement(
        self,
        query: str,
        params: Sequence[Any] = ()
    ) -> Union[ExecutionResult, ErrorDetail]:
        """
        Execute one statement on a pooled connection under the call deadline.

        Returns:
            ExecutionResult on success, ErrorDetail for any driver, pool or
            deadline failure
        """
        try:
            outcome = await self._with_deadline(self._execute_pooled(query, params))
        except asyncio.TimeoutError:
            detail = describe_timeout(self.defaults.timeout_ms)
        except DRIVER_ERRORS as e:
            detail = describe_error(e)
        else:
            if isinstance(outcome, ExecutionResult):
                return outcome
            detail = outcome

        logger.error(f"{self.tool_name} failed: [{detail.code}] {detail.message}")
        return detail

    async def _execute_pooled(
        self,
        query: str,
        params: Sequence[Any]
    ) -> Union[ExecutionResult, ErrorDetail]:
        # The call deadline cancels this coroutine; a TimeoutError seen here
        # comes from the driver (connect or acquire), not from the deadline.
        try:
            async with self.pool.acquire() as connection:
                return await execute_statement(connection, query, params)
        except asyncio.TimeoutError:
            return describe_connection_timeout()

    async def _with_deadline(self, operation):
        timeout = self.defaults.timeout_seconds
        if timeout is None:
            return await operation
        return await asyncio.wait_for(operation, timeout)
