"""Single-statement execution on a pooled asyncpg connection."""

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)

# "SELECT 5", "INSERT 0 1", "UPDATE 3", "CREATE TABLE"
_COMMAND_TAG = re.compile(r"^([A-Za-z]+)(?: (\d+))?(?: (\d+))?")


@dataclass(frozen=True)
class FieldDescriptor:
    """One column of a result set as reported by the server."""

    name: str
    type_oid: Optional[int] = None
    type_name: Optional[str] = None
    # asyncpg does not surface the row description's typlen/typmod
    type_size: Optional[int] = None
    type_modifier: Optional[int] = None


@dataclass
class ExecutionResult:
    """Outcome of one executed statement."""

    command: Optional[str]
    row_count: int
    fields: List[FieldDescriptor] = field(default_factory=list)
    rows: List[Dict[str, Any]] = field(default_factory=list)


def parse_command_tag(status: Optional[str]) -> Tuple[Optional[str], int]:
    """Split a command completion tag into (command, affected row count).

    For INSERT the tag is ``INSERT <oid> <rows>``; the row count is always the
    last number. Tags without a count (DDL) report zero rows.
    """
    if not status:
        return None, 0
    match = _COMMAND_TAG.match(status.strip())
    if not match:
        return None, 0
    command = match.group(1).upper()
    count = match.group(3) or match.group(2)
    return command, int(count) if count else 0


def describe_fields(attributes: Sequence[Any]) -> List[FieldDescriptor]:
    """Map asyncpg ``Attribute(name, type)`` tuples to field descriptors."""
    fields = []
    for attribute in attributes:
        pg_type = getattr(attribute, "type", None)
        fields.append(FieldDescriptor(
            name=attribute.name,
            type_oid=getattr(pg_type, "oid", None),
            type_name=getattr(pg_type, "name", None),
        ))
    return fields


async def execute_statement(connection: Any, query: str, params: Sequence[Any] = ()) -> ExecutionResult:
    """Prepare and run one statement, returning rows plus execution metadata.

    Args:
        connection: asyncpg connection (or anything offering ``prepare``)
        query: SQL text, executed as given
        params: values bound to ``$1..$n``

    Returns:
        ExecutionResult with command tag, row count, fields and row dicts
    """
    statement = await connection.prepare(query)
    records = await statement.fetch(*params)
    command, row_count = parse_command_tag(statement.get_statusmsg())
    rows = [dict(record) for record in records]
    logger.debug(f"{command or 'statement'} completed: {row_count} rows, {len(rows)} returned")
    return ExecutionResult(
        command=command,
        row_count=row_count,
        fields=describe_fields(statement.get_attributes()),
        rows=rows,
    )
