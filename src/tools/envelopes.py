"""Response envelopes returned by every tool handler.

Each tool has exactly two variants, a success and a failure, tagged by
``kind`` and carrying the ``success`` flag the calling agent inspects.
Envelopes serialise to camelCase JSON and travel as the text of a single
MCP ``TextContent``.
"""

import json
import math
import uuid
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from mcp.types import TextContent
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from core.error_handling import ErrorDetail
from database.execution import ExecutionResult

# information_schema reports a precision for every numeric type, but only
# these carry a user-declared (precision, scale)
PRECISION_TYPES = {"numeric", "decimal"}


class EnvelopeModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


# ----- query -----

class FieldInfo(EnvelopeModel):
    name: str
    data_type_id: Optional[int] = Field(default=None, alias="dataTypeID")
    data_type_name: Optional[str] = None
    data_type_size: Optional[int] = None
    data_type_modifier: Optional[int] = None


class ExecutionInfo(EnvelopeModel):
    command: Optional[str] = None
    row_count: int = 0
    fields: List[FieldInfo] = Field(default_factory=list)


class QueryMetadata(EnvelopeModel):
    has_data: bool
    data_count: int
    was_limited: bool
    limit_applied: int


class QuerySuccess(EnvelopeModel):
    kind: Literal["query_success"] = "query_success"
    success: Literal[True] = True
    query: str
    schema_name: str = Field(alias="schema")
    context: str
    execution: ExecutionInfo
    data: List[Dict[str, Any]]
    metadata: QueryMetadata


class QueryFailure(EnvelopeModel):
    kind: Literal["query_failure"] = "query_failure"
    success: Literal[False] = False
    error: ErrorDetail
    query: Optional[str] = None
    schema_name: str = Field(alias="schema")
    context: str


# ----- describe_table -----

class ColumnConstraints(EnvelopeModel):
    character_maximum_length: Optional[int] = None
    numeric_precision: Optional[int] = None
    numeric_scale: Optional[int] = None


class TypeInfo(EnvelopeModel):
    full_type: str


class ColumnDescriptor(EnvelopeModel):
    position: int
    name: str
    data_type: str
    nullable: bool
    default_value: Optional[str] = None
    constraints: ColumnConstraints
    type_info: TypeInfo


class TableRef(EnvelopeModel):
    name: Optional[str] = None
    schema_name: str = Field(alias="schema")


class TableIdentity(TableRef):
    full_name: str


class DescribeMetadata(EnvelopeModel):
    column_count: int
    found: bool


class DescribeSuccess(EnvelopeModel):
    kind: Literal["describe_success"] = "describe_success"
    success: Literal[True] = True
    table: TableIdentity
    columns: List[ColumnDescriptor]
    metadata: DescribeMetadata


class DescribeFailure(EnvelopeModel):
    kind: Literal["describe_failure"] = "describe_failure"
    success: Literal[False] = False
    error: ErrorDetail
    table: TableRef


# ----- list_tables -----

class TableDescriptor(EnvelopeModel):
    position: int
    name: str
    table_type: Optional[str] = Field(default=None, alias="type")
    full_name: str


class ListMetadata(EnvelopeModel):
    table_count: int
    found: bool
    filtered: bool


class ListSuccess(EnvelopeModel):
    kind: Literal["list_success"] = "list_success"
    success: Literal[True] = True
    schema_name: str = Field(alias="schema")
    pattern: Optional[str] = None
    tables: List[TableDescriptor]
    metadata: ListMetadata


class ListFailure(EnvelopeModel):
    kind: Literal["list_failure"] = "list_failure"
    success: Literal[False] = False
    error: ErrorDetail
    schema_name: str = Field(alias="schema")
    pattern: Optional[str] = None


Envelope = Annotated[
    Union[QuerySuccess, QueryFailure, DescribeSuccess, DescribeFailure, ListSuccess, ListFailure],
    Field(discriminator="kind"),
]


# ----- builders -----

def _non_finite_text(value: float) -> str:
    # PostgreSQL spelling; json cannot carry these as numbers
    if math.isnan(value):
        return "NaN"
    return "Infinity" if value > 0 else "-Infinity"


def to_jsonable(value: Any) -> Any:
    """Convert a driver value into something ``json`` can encode."""
    if isinstance(value, float) and not math.isfinite(value):
        return _non_finite_text(value)
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, (timedelta, uuid.UUID)):
        return str(value)
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value).hex()
    if isinstance(value, dict):
        return {str(key): to_jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [to_jsonable(item) for item in value]
    return str(value)


def jsonable_rows(rows: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return [{key: to_jsonable(value) for key, value in row.items()} for row in rows]


def execution_info(result: ExecutionResult) -> ExecutionInfo:
    """Execution block of a query success envelope."""
    return ExecutionInfo(
        command=result.command,
        row_count=result.row_count,
        fields=[
            FieldInfo(
                name=f.name,
                data_type_id=f.type_oid,
                data_type_name=f.type_name,
                data_type_size=f.type_size,
                data_type_modifier=f.type_modifier,
            )
            for f in result.fields
        ],
    )


def full_type(
    data_type: str,
    character_maximum_length: Optional[int] = None,
    numeric_precision: Optional[int] = None,
    numeric_scale: Optional[int] = None,
) -> str:
    """Human-readable type: ``character varying(50)``, ``numeric(10,2)``, ``integer``."""
    if character_maximum_length:
        return f"{data_type}({character_maximum_length})"
    if numeric_precision and data_type in PRECISION_TYPES:
        if numeric_scale:
            return f"{data_type}({numeric_precision},{numeric_scale})"
        return f"{data_type}({numeric_precision})"
    return data_type


def column_descriptor(row: Dict[str, Any], position: int) -> ColumnDescriptor:
    """Map one ``information_schema.columns`` row to a column descriptor."""
    return ColumnDescriptor(
        position=position,
        name=row["column_name"],
        data_type=row["data_type"],
        nullable=row.get("is_nullable") == "YES",
        default_value=row.get("column_default"),
        constraints=ColumnConstraints(
            character_maximum_length=row.get("character_maximum_length"),
            numeric_precision=row.get("numeric_precision"),
            numeric_scale=row.get("numeric_scale"),
        ),
        type_info=TypeInfo(full_type=full_type(
            row["data_type"],
            row.get("character_maximum_length"),
            row.get("numeric_precision"),
            row.get("numeric_scale"),
        )),
    )


def table_descriptor(row: Dict[str, Any], position: int, schema_name: str) -> TableDescriptor:
    """Map one ``information_schema.tables`` row to a table descriptor."""
    return TableDescriptor(
        position=position,
        name=row["table_name"],
        table_type=row.get("table_type"),
        full_name=f"{schema_name}.{row['table_name']}",
    )


def envelope_to_dict(envelope: BaseModel) -> Dict[str, Any]:
    return envelope.model_dump(mode="json", by_alias=True)


def render(envelope: BaseModel) -> str:
    """Serialise an envelope to the JSON text sent back to the caller."""
    return json.dumps(envelope_to_dict(envelope), indent=2, ensure_ascii=False)


def to_text_content(envelope: BaseModel) -> List[TextContent]:
    """Wrap an envelope as MCP tool call content."""
    return [TextContent(type="text", text=render(envelope))]
