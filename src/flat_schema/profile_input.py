"""Validated view of a profile report."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from flat_schema.errors import SchemaError, SchemaErrorKind
from flat_schema.models import ProfileMeta
from serde_msgspec import StructBaseStrict
from utils.coercion import coerce_bool, coerce_non_negative_int, coerce_non_negative_int_or_none

logger = logging.getLogger(__name__)


class ColumnEvidence(StructBaseStrict, frozen=True):
    """Observed evidence for a single column."""

    index: int
    name: str | None = None
    rows_observed: int = 0
    null_count: int = 0
    type_evidence: dict[str, Any] | None = None
    distinct_count: int | None = None
    min_length: int | None = None
    max_length: int | None = None


class ProfileReport(StructBaseStrict, frozen=True):
    """Profile report after shape validation, columns sorted by index."""

    meta: ProfileMeta
    columns: tuple[ColumnEvidence, ...]

    @property
    def rows_profiled(self) -> int | None:
        """Return the report-level profiled row count, when present."""
        return self.meta.rows_profiled


def _fail(message: str, kind: SchemaErrorKind) -> SchemaError:
    return SchemaError(f"from_profile(): {message}", kind=kind)


def _report_version(profile: Mapping[str, Any]) -> int:
    if "report_version" not in profile or profile["report_version"] is None:
        raise _fail("profile.report_version is required", SchemaErrorKind.INVALID_REPORT_VERSION)
    raw = profile["report_version"]
    try:
        version = coerce_non_negative_int(raw, label="profile.report_version")
    except TypeError as exc:
        raise _fail(
            "profile.report_version must be an integer",
            SchemaErrorKind.INVALID_REPORT_VERSION,
        ) from exc
    if version < 1:
        msg = f"unsupported profile.report_version ({version}); must be >= 1"
        raise _fail(msg, SchemaErrorKind.INVALID_REPORT_VERSION)
    return version


def _flag(value: object) -> bool:
    try:
        return coerce_bool(value, label="profile.null_empty")
    except TypeError:
        return bool(value)


def profile_meta(profile: Mapping[str, Any], *, report_version: int) -> ProfileMeta:
    """Return the recognized report-level metadata.

    ``null_empty`` is normalized to a boolean, with ``"0"``, ``""`` and false
    words read as false. ``null_tokens`` is kept when list-shaped (string items
    only) and ``rows_profiled`` when it is a non-negative integer.

    Returns
    -------
    ProfileMeta
        Filtered metadata.
    """
    null_empty: bool | None = None
    if "null_empty" in profile:
        null_empty = _flag(profile["null_empty"])
    null_tokens: tuple[str, ...] | None = None
    raw_tokens = profile.get("null_tokens")
    if isinstance(raw_tokens, (list, tuple)):
        null_tokens = tuple(token for token in raw_tokens if isinstance(token, str))
    rows_profiled = coerce_non_negative_int_or_none(profile.get("rows_profiled"))
    return ProfileMeta(
        report_version=report_version,
        null_empty=null_empty,
        null_tokens=null_tokens,
        rows_profiled=rows_profiled,
    )


def _column_index(column: Mapping[str, Any], position: int) -> int:
    raw = column.get("index")
    try:
        return coerce_non_negative_int(raw, label="column.index")
    except TypeError as exc:
        msg = f"profile.columns[{position}] must have an integer index"
        raise _fail(msg, SchemaErrorKind.INVALID_COLUMN) from exc


def column_evidence(column: object, position: int) -> ColumnEvidence:
    """Validate one column evidence entry.

    Counts that are missing or not non-negative integers default to zero (or are
    dropped for the optional observed statistics). A non-mapping
    ``type_evidence`` is treated as absent.

    Returns
    -------
    ColumnEvidence
        Validated evidence.

    Raises
    ------
    SchemaError
        Raised when the entry is not a mapping, lacks an integer ``index``, or
        has a ``name`` that is neither a string nor null.
    """
    if not isinstance(column, Mapping):
        msg = f"profile.columns[{position}] must be a mapping"
        raise _fail(msg, SchemaErrorKind.INVALID_COLUMN)
    index = _column_index(column, position)
    name = column.get("name")
    if name is not None and not isinstance(name, str):
        msg = f"profile.columns[{position}].name must be a string or null"
        raise _fail(msg, SchemaErrorKind.INVALID_COLUMN)
    type_evidence = column.get("type_evidence")
    return ColumnEvidence(
        index=index,
        name=name,
        rows_observed=coerce_non_negative_int_or_none(column.get("rows_observed")) or 0,
        null_count=coerce_non_negative_int_or_none(column.get("null_count")) or 0,
        type_evidence=dict(type_evidence) if isinstance(type_evidence, Mapping) else None,
        distinct_count=coerce_non_negative_int_or_none(column.get("distinct_count")),
        min_length=coerce_non_negative_int_or_none(column.get("min_length")),
        max_length=coerce_non_negative_int_or_none(column.get("max_length")),
    )


def read_profile_report(profile: object) -> ProfileReport:
    """Validate the outer shape of a profile report.

    Parameters
    ----------
    profile
        Report mapping as produced by the profiler. It is never mutated.

    Returns
    -------
    ProfileReport
        Validated report with column evidence sorted ascending by ``index``.

    Raises
    ------
    SchemaError
        Raised on any shape violation, including duplicate column indexes.
    """
    if not isinstance(profile, Mapping):
        raise _fail("profile must be a mapping", SchemaErrorKind.INVALID_PROFILE)
    report_version = _report_version(profile)
    raw_columns = profile.get("columns")
    if not isinstance(raw_columns, (list, tuple)):
        raise _fail("profile.columns must be a list", SchemaErrorKind.INVALID_COLUMNS)
    columns = [column_evidence(column, position) for position, column in enumerate(raw_columns)]
    columns.sort(key=lambda evidence: evidence.index)
    for previous, current in zip(columns, columns[1:]):
        if previous.index == current.index:
            msg = f"profile.columns contains duplicate index {current.index}"
            raise _fail(msg, SchemaErrorKind.DUPLICATE_COLUMN_INDEX)
    logger.debug("Read profile report with %d columns", len(columns))
    return ProfileReport(
        meta=profile_meta(profile, report_version=report_version),
        columns=tuple(columns),
    )


__all__ = [
    "ColumnEvidence",
    "ProfileReport",
    "column_evidence",
    "profile_meta",
    "read_profile_report",
]
