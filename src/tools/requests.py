"""Argument models for the tool catalog."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ToolRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")


class QueryRequest(ToolRequest):
    query: str
    schema_name: Optional[str] = Field(default=None, alias="schema")
    context: Optional[str] = None
    max_rows: Optional[int] = Field(default=None, alias="maxRows")


class DescribeTableRequest(ToolRequest):
    table_name: str = Field(alias="tableName")
    schema_name: Optional[str] = Field(default=None, alias="schema")


class ListTablesRequest(ToolRequest):
    schema_name: Optional[str] = Field(default=None, alias="schema")
    pattern: Optional[str] = None
