"""Normalisation of driver and argument errors into envelope error fields.

Every failure a handler absorbs (driver errors, pool acquisition failures,
deadline expiry, malformed arguments) ends up as an ``ErrorDetail`` so the
calling agent always sees the same four fields.
"""

import logging
from typing import Optional

from pydantic import BaseModel, ValidationError

logger = logging.getLogger(__name__)

# PostgreSQL SQLSTATE for "canceling statement due to user request"
QUERY_CANCELED = "57014"
INVALID_ARGUMENTS = "INVALID_ARGUMENTS"


class ErrorDetail(BaseModel):
    """Structured error fields carried by every failure envelope."""

    message: str
    code: Optional[str] = None
    detail: Optional[str] = None
    hint: Optional[str] = None


def describe_error(error: BaseException) -> ErrorDetail:
    """Convert a driver or connection exception into error fields.

    asyncpg's PostgresError exposes ``message``, ``sqlstate``, ``detail`` and
    ``hint``; connection-level failures (OSError, InterfaceError, pool
    timeouts) only have a message.
    """
    message = getattr(error, "message", None) or str(error) or type(error).__name__
    code = getattr(error, "sqlstate", None)
    return ErrorDetail(
        message=message,
        code=str(code) if code is not None else None,
        detail=getattr(error, "detail", None),
        hint=getattr(error, "hint", None),
    )


def describe_timeout(timeout_ms: int) -> ErrorDetail:
    """Error fields for a call that ran past its deadline."""
    return ErrorDetail(
        message=f"canceling statement due to timeout ({timeout_ms} ms)",
        code=QUERY_CANCELED,
        hint="Narrow the query or raise POSTGRES_TIMEOUT",
    )


def describe_connection_timeout() -> ErrorDetail:
    """Error fields for a driver-side timeout while obtaining a connection."""
    return ErrorDetail(
        message="timed out while obtaining a database connection",
        hint="Check that the server is reachable or raise POSTGRES_CONNECT_TIMEOUT",
    )


def describe_validation_error(error: ValidationError) -> ErrorDetail:
    """Error fields for tool arguments that failed request model validation."""
    problems = []
    for item in error.errors():
        location = ".".join(str(part) for part in item.get("loc", ())) or "arguments"
        problems.append(f"{location}: {item.get('msg')}")
    return ErrorDetail(
        message="Invalid tool arguments",
        code=INVALID_ARGUMENTS,
        detail="; ".join(problems),
    )
