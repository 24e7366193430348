"""
回應信封單元測試

Tests full-type derivation, value normalisation and camelCase serialisation.
"""

import json
import uuid
from datetime import date, datetime, timedelta
from decimal import Decimal

import pytest
from pydantic import TypeAdapter

from core.error_handling import ErrorDetail
from tools.envelopes import (
    Envelope,
    ListFailure,
    QueryMetadata,
    QuerySuccess,
    ExecutionInfo,
    column_descriptor,
    full_type,
    jsonable_rows,
    render,
    to_jsonable,
    to_text_content,
)


class TestFullType:
    """完整型別字串測試"""

    @pytest.mark.parametrize("args,expected", [
        (("integer", None, 32, 0), "integer"),
        (("bigint", None, 64, 0), "bigint"),
        (("character varying", 50, None, None), "character varying(50)"),
        (("character", 1, None, None), "character(1)"),
        (("numeric", None, 10, 2), "numeric(10,2)"),
        (("numeric", None, 10, 0), "numeric(10)"),
        (("numeric", None, None, None), "numeric"),
        (("timestamp without time zone", None, None, None), "timestamp without time zone"),
        (("text", None, None, None), "text"),
    ])
    def test_full_type(self, args, expected):
        """✅ 型別加上長度或精度"""
        assert full_type(*args) == expected


class TestColumnDescriptor:
    """欄位描述對應測試"""

    def test_users_table_columns(self, users_columns):
        """✅ users 表三個欄位"""
        columns = [column_descriptor(row, i) for i, row in enumerate(users_columns, start=1)]

        assert [c.position for c in columns] == [1, 2, 3]
        assert [c.name for c in columns] == ["id", "name", "created_at"]
        assert [c.type_info.full_type for c in columns] == [
            "integer",
            "character varying(50)",
            "timestamp without time zone",
        ]
        assert [c.nullable for c in columns] == [False, True, True]
        assert columns[1].constraints.character_maximum_length == 50

    def test_default_value_passed_through(self):
        """✅ 預設值原樣保留"""
        row = {
            "column_name": "id",
            "data_type": "integer",
            "is_nullable": "NO",
            "column_default": "nextval('users_id_seq'::regclass)",
        }
        column = column_descriptor(row, 1)
        assert column.default_value == "nextval('users_id_seq'::regclass)"
        assert column.constraints.numeric_precision is None


class TestToJsonable:
    """資料值正規化測試"""

    def test_driver_types(self):
        """✅ 常見 PostgreSQL 型別轉為 JSON 安全值"""
        uid = uuid.UUID("12345678-1234-5678-1234-567812345678")
        value = {
            "amount": Decimal("12.50"),
            "created": datetime(2024, 1, 2, 3, 4, 5),
            "day": date(2024, 1, 2),
            "elapsed": timedelta(seconds=90),
            "uid": uid,
            "raw": b"\x00\xff",
            "tags": ("a", "b"),
            "nested": {"n": Decimal("1")},
        }
        assert to_jsonable(value) == {
            "amount": "12.50",
            "created": "2024-01-02T03:04:05",
            "day": "2024-01-02",
            "elapsed": "0:01:30",
            "uid": "12345678-1234-5678-1234-567812345678",
            "raw": "00ff",
            "tags": ["a", "b"],
            "nested": {"n": "1"},
        }

    def test_primitives_unchanged(self):
        """✅ 基本型別不變"""
        for value in (None, True, 3, 1.5, "x"):
            assert to_jsonable(value) == value

    def test_unknown_objects_stringified(self):
        """✅ 其他物件以 str 表示"""
        class Point:
            def __str__(self):
                return "(1,2)"

        assert to_jsonable(Point()) == "(1,2)"

    def test_non_finite_floats_kept_as_text(self):
        """✅ NaN 與 Infinity 以文字保留，不變成 null"""
        rows = jsonable_rows([{"x": float("nan"), "y": float("inf"), "z": float("-inf"), "w": 2.5}])
        assert rows == [{"x": "NaN", "y": "Infinity", "z": "-Infinity", "w": 2.5}]

        envelope = QuerySuccess(
            query="SELECT 'NaN'::float8 AS x",
            schema_name="public",
            context="",
            execution=ExecutionInfo(command="SELECT", row_count=1, fields=[]),
            data=rows,
            metadata=QueryMetadata(has_data=True, data_count=1, was_limited=False, limit_applied=100),
        )
        assert json.loads(render(envelope))["data"] == rows


class TestSerialisation:
    """序列化格式測試"""

    def _query_success(self):
        return QuerySuccess(
            query="SELECT 1 LIMIT 5",
            schema_name="public",
            context="",
            execution=ExecutionInfo(command="SELECT", row_count=1, fields=[]),
            data=[{"?column?": 1}],
            metadata=QueryMetadata(has_data=True, data_count=1, was_limited=True, limit_applied=5),
        )

    def test_camel_case_keys(self):
        """✅ 以 camelCase 輸出"""
        payload = json.loads(render(self._query_success()))

        assert payload["kind"] == "query_success"
        assert payload["success"] is True
        assert payload["schema"] == "public"
        assert payload["execution"]["rowCount"] == 1
        assert payload["metadata"] == {
            "hasData": True,
            "dataCount": 1,
            "wasLimited": True,
            "limitApplied": 5,
        }

    def test_failure_keeps_null_fields(self):
        """✅ 失敗信封保留 null 欄位"""
        envelope = ListFailure(
            error=ErrorDetail(message="boom"),
            schema_name="public",
        )
        payload = json.loads(render(envelope))

        assert payload == {
            "kind": "list_failure",
            "success": False,
            "error": {"message": "boom", "code": None, "detail": None, "hint": None},
            "schema": "public",
            "pattern": None,
        }

    def test_discriminated_union_round_trip(self):
        """✅ 依 kind 還原正確的變體"""
        payload = json.loads(render(self._query_success()))
        envelope = TypeAdapter(Envelope).validate_python(payload)
        assert isinstance(envelope, QuerySuccess)

    def test_text_content(self):
        """✅ 包裝成 MCP TextContent"""
        content = to_text_content(self._query_success())
        assert len(content) == 1
        assert content[0].type == "text"
        assert json.loads(content[0].text)["query"] == "SELECT 1 LIMIT 5"
