"""Tests for nullability inference."""

from __future__ import annotations

import pytest

from flat_schema.models import IssueCode, NullRate, Provenance, SchemaColumn
from flat_schema.nullability import infer_nullability, nullable_from_counts


def _column(index: int, rows_observed: int, null_count: int) -> SchemaColumn:
    return SchemaColumn(
        index=index,
        name=f"c{index}",
        type="string",
        nullable=False,
        provenance=Provenance(
            basis="profile",
            rows_observed=rows_observed,
            null_count=null_count,
            null_rate=NullRate(num=null_count, den=rows_observed),
        ),
    )


@pytest.mark.parametrize(
    ("rows_observed", "null_count", "expected"),
    [(0, 0, True), (10, 0, False), (10, 1, True), (10, 10, True)],
)
def test_nullable_from_counts(rows_observed: int, null_count: int, expected: bool) -> None:
    """Treat unobserved columns and any observed null as nullable."""
    assert nullable_from_counts(rows_observed, null_count) is expected


def test_all_null_column_warns() -> None:
    """Emit all_null_column with the counts as details."""
    columns, issues = infer_nullability([_column(0, 5, 5), _column(1, 5, 0)], rows_profiled=5)
    assert [column.nullable for column in columns] == [True, False]
    (issue,) = issues
    assert issue.code == IssueCode.ALL_NULL_COLUMN
    assert issue.column_index == 0
    assert issue.details == {"null_count": 5, "rows_observed": 5}


def test_zero_rows_profiled_makes_every_column_nullable() -> None:
    """Report no_rows_profiled once and keep every column nullable."""
    columns, issues = infer_nullability([_column(0, 0, 0), _column(1, 0, 0)], rows_profiled=0)
    assert all(column.nullable for column in columns)
    assert [issue.code for issue in issues] == [IssueCode.NO_ROWS_PROFILED]
    assert issues[0].column_index is None
    assert issues[0].details is None


def test_zero_rows_detected_without_report_count() -> None:
    """Fall back to per-column counts when rows_profiled is absent."""
    _, issues = infer_nullability([_column(0, 0, 0)])
    assert [issue.code for issue in issues] == [IssueCode.NO_ROWS_PROFILED]
    _, issues = infer_nullability([_column(0, 0, 0), _column(1, 3, 0)])
    assert issues == ()


def test_existing_nullable_is_replaced() -> None:
    """Recompute nullable regardless of the provisional value."""
    column = _column(2, 4, 1)
    (updated,), _ = infer_nullability([column], rows_profiled=4)
    assert column.nullable is False
    assert updated.nullable is True
    assert updated.index == 2
