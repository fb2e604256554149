"""Nullability inference over the assembled column set."""

from __future__ import annotations

import logging
from collections.abc import Sequence

import msgspec

from flat_schema.issues import make_issue
from flat_schema.models import Issue, IssueCode, IssueLevel, SchemaColumn

logger = logging.getLogger(__name__)


def nullable_from_counts(rows_observed: int, null_count: int) -> bool:
    """Return whether a column is nullable given its observed counts.

    Returns
    -------
    bool
        True when no rows were observed or any null was observed.
    """
    if rows_observed == 0:
        return True
    return null_count > 0


def _no_rows_profiled(columns: Sequence[SchemaColumn], rows_profiled: int | None) -> bool:
    if rows_profiled is not None:
        return rows_profiled == 0
    return not any(column.provenance.rows_observed > 0 for column in columns)


def infer_nullability(
    columns: Sequence[SchemaColumn],
    *,
    rows_profiled: int | None = None,
) -> tuple[tuple[SchemaColumn, ...], tuple[Issue, ...]]:
    """Derive ``nullable`` for every column from its provenance counts.

    Parameters
    ----------
    columns
        Columns with provenance filled in; any existing ``nullable`` is replaced.
    rows_profiled
        Report-level profiled row count when the report carries one.

    Returns
    -------
    tuple[tuple[SchemaColumn, ...], tuple[Issue, ...]]
        Updated columns in input order and the nullability diagnostics.
    """
    updated: list[SchemaColumn] = []
    issues: list[Issue] = []
    for column in columns:
        rows_observed = column.provenance.rows_observed
        null_count = column.provenance.null_count
        nullable = nullable_from_counts(rows_observed, null_count)
        if rows_observed > 0 and null_count == rows_observed:
            issues.append(
                make_issue(
                    IssueLevel.WARNING,
                    IssueCode.ALL_NULL_COLUMN,
                    "Every observed value in the column is null",
                    column_index=column.index,
                    details={"null_count": null_count, "rows_observed": rows_observed},
                )
            )
        updated.append(msgspec.structs.replace(column, nullable=nullable))

    if _no_rows_profiled(columns, rows_profiled):
        issues.append(
            make_issue(
                IssueLevel.WARNING,
                IssueCode.NO_ROWS_PROFILED,
                "No data rows were profiled; every column is nullable",
            )
        )
    logger.debug(
        "Inferred nullability for %d columns (%d issues)",
        len(updated),
        len(issues),
    )
    return tuple(updated), tuple(issues)


__all__ = ["infer_nullability", "nullable_from_counts"]
