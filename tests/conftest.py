"""
pytest 配置文件

Test fixtures: an instrumented connection pool that counts acquire/release
pairs, scripted prepared statements, and asyncpg error factories.
"""

import asyncio
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, Dict, List, NamedTuple, Optional

import pytest

# 添加 src 目錄到 Python 路徑
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from core.config import ToolDefaults  # noqa: E402


class FakeType(NamedTuple):
    oid: int
    name: str


class FakeAttribute(NamedTuple):
    name: str
    type: FakeType


class FakeStatement:
    """Stands in for asyncpg.PreparedStatement."""

    def __init__(
        self,
        rows: Optional[List[Dict[str, Any]]] = None,
        status: str = "SELECT 0",
        attributes=(),
        error: Optional[BaseException] = None,
        delay: float = 0,
    ):
        self.rows = rows or []
        self.status = status
        self.attributes = tuple(attributes)
        self.error = error
        self.delay = delay
        self.bound_args = None

    async def fetch(self, *args, timeout=None):
        self.bound_args = args
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return list(self.rows)

    def get_statusmsg(self):
        return self.status

    def get_attributes(self):
        return self.attributes


class FakeConnection:
    """Stands in for asyncpg.Connection; records every prepared query."""

    def __init__(self, statement: FakeStatement):
        self.statement = statement
        self.prepared: List[str] = []

    async def prepare(self, query: str):
        self.prepared.append(query)
        return self.statement


class CountingPool:
    """Connection pool double counting acquisitions and releases."""

    def __init__(self, connection: Optional[FakeConnection] = None, acquire_error: Optional[BaseException] = None):
        self.connection = connection
        self.acquire_error = acquire_error
        self.acquired = 0
        self.released = 0

    @asynccontextmanager
    async def acquire(self):
        if self.acquire_error is not None:
            raise self.acquire_error
        self.acquired += 1
        try:
            yield self.connection
        finally:
            self.released += 1

    @property
    def executed(self) -> List[str]:
        return self.connection.prepared if self.connection else []


@pytest.fixture
def defaults():
    """預設工具設定 fixture"""
    return ToolDefaults(schema_name="public", context="", max_rows=100, timeout_ms=30000)


@pytest.fixture
def make_statement():
    """Factory for scripted prepared statements."""
    def _make(rows=None, status="SELECT 0", columns=(), error=None, delay=0):
        attributes = [FakeAttribute(name, FakeType(oid, type_name)) for name, oid, type_name in columns]
        return FakeStatement(rows=rows, status=status, attributes=attributes, error=error, delay=delay)
    return _make


@pytest.fixture
def make_pool():
    """Factory for a counting pool wrapping one scripted statement."""
    def _make(statement: Optional[FakeStatement] = None, acquire_error: Optional[BaseException] = None):
        connection = FakeConnection(statement or FakeStatement())
        return CountingPool(connection, acquire_error=acquire_error)
    return _make


@pytest.fixture
def pg_error():
    """Factory for asyncpg server errors carrying message/detail/hint."""
    def _make(error_class, message, detail=None, hint=None):
        error = error_class(message)
        error.message = message
        error.detail = detail
        error.hint = hint
        return error
    return _make


@pytest.fixture
def users_columns():
    """information_schema.columns rows for users(id integer primary key, name varchar(50), created_at timestamp)"""
    return [
        {
            "column_name": "id",
            "data_type": "integer",
            "is_nullable": "NO",
            "column_default": None,
            "character_maximum_length": None,
            "numeric_precision": 32,
            "numeric_scale": 0,
        },
        {
            "column_name": "name",
            "data_type": "character varying",
            "is_nullable": "YES",
            "column_default": None,
            "character_maximum_length": 50,
            "numeric_precision": None,
            "numeric_scale": None,
        },
        {
            "column_name": "created_at",
            "data_type": "timestamp without time zone",
            "is_nullable": "YES",
            "column_default": None,
            "character_maximum_length": None,
            "numeric_precision": None,
            "numeric_scale": None,
        },
    ]
