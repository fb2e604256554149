"""Tests for projecting schemas onto Arrow schemas."""

from __future__ import annotations

from typing import Any

import pyarrow as pa
import pytest

from flat_schema import from_profile, to_arrow_schema
from flat_schema.arrow import arrow_type_for
from tests.test_helpers.profiles import column, override, profile


@pytest.mark.parametrize(
    ("column_type", "expected"),
    [
        ("string", pa.string()),
        ("integer", pa.int64()),
        ("number", pa.float64()),
        ("boolean", pa.bool_()),
        ("date", pa.date32()),
        ("datetime", pa.timestamp("us")),
    ],
)
def test_arrow_type_for(column_type: str, expected: pa.DataType) -> None:
    """Map each column type tag to its Arrow type."""
    assert arrow_type_for(column_type) == expected  # type: ignore[arg-type]


def test_arrow_type_for_unknown() -> None:
    """Reject unknown type tags."""
    with pytest.raises(KeyError, match="Unknown column type"):
        arrow_type_for("uuid")  # type: ignore[arg-type]


def test_to_arrow_schema(mixed_profile: dict[str, Any]) -> None:
    """Project names, types, and nullability in column order."""
    arrow_schema = to_arrow_schema(from_profile(mixed_profile))
    assert arrow_schema.names == ["id", "amount", "stamp", "notes"]
    assert [field.type for field in arrow_schema] == [
        pa.int64(),
        pa.float64(),
        pa.string(),
        pa.string(),
    ]
    assert [field.nullable for field in arrow_schema] == [False, True, True, True]
    assert arrow_schema.metadata == {
        b"flat_schema.schema_version": b"1",
        b"flat_schema.generator": b"flat_schema 0.1.0",
    }


def test_field_metadata_and_unnamed_columns() -> None:
    """Name unnamed columns by index and carry length bounds as metadata."""
    report = profile(
        column(0, "code", rows_observed=1, type_evidence={"string": 1}),
        column(2, rows_observed=1, type_evidence={"date": 1}),
    )
    schema = from_profile(report, [override(0, length={"max": 3})])
    arrow_schema = to_arrow_schema(schema)
    assert arrow_schema.names == ["code", "column_2"]
    assert arrow_schema.field("code").metadata == {b"index": b"0", b"length.max": b"3"}
    assert arrow_schema.field("column_2").metadata == {b"index": b"2"}
    assert arrow_schema.field("column_2").type == pa.date32()
