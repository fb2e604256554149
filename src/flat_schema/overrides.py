"""Validation and application of user override requests."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

import msgspec

from flat_schema.errors import SchemaError, SchemaErrorKind
from flat_schema.issues import make_issue, stable_text
from flat_schema.models import (
    ColumnOverrides,
    Issue,
    IssueCode,
    IssueLevel,
    LengthSpec,
    OverrideRequest,
    SchemaColumn,
)
from serde_msgspec import convert, is_unset, to_builtins, validation_error_payload
from utils.coercion import coerce_bool

logger = logging.getLogger(__name__)

OVERRIDE_FIELDS: tuple[str, ...] = tuple(sorted(ColumnOverrides.__struct_fields__))

MergedOverrides = dict[int, dict[str, Any]]


def _override_error(position: int, exc: msgspec.ValidationError) -> SchemaError:
    payload = validation_error_payload(exc)
    summary = payload.get("summary", "invalid override")
    path = payload.get("path")
    where = f" at {path}" if path else ""
    msg = f"from_profile(): overrides[{position}] is invalid: {summary}{where}"
    return SchemaError(msg, kind=SchemaErrorKind.INVALID_OVERRIDES)


def parse_override_requests(overrides: object) -> tuple[OverrideRequest, ...]:
    """Validate raw override requests.

    Each request is a mapping ``{"column_index": int, "set": {...}}`` where
    ``set`` may only name ``type``, ``nullable``, ``name``, and ``length``.
    ``nullable`` accepts boolean-like values such as ``0``, ``1`` or ``"true"``.

    Parameters
    ----------
    overrides
        Raw override list, or ``None``.

    Returns
    -------
    tuple[OverrideRequest, ...]
        Decoded requests in input order.

    Raises
    ------
    SchemaError
        Raised when the list or any request is malformed.
    """
    if overrides is None:
        return ()
    if not isinstance(overrides, (list, tuple)):
        msg = "from_profile(): overrides must be a list"
        raise SchemaError(msg, kind=SchemaErrorKind.INVALID_OVERRIDES)
    requests: list[OverrideRequest] = []
    for position, entry in enumerate(overrides):
        if isinstance(entry, OverrideRequest):
            requests.append(entry)
            continue
        if not isinstance(entry, Mapping):
            msg = f"from_profile(): overrides[{position}] must be a mapping"
            raise SchemaError(msg, kind=SchemaErrorKind.INVALID_OVERRIDES)
        try:
            requests.append(
                convert(_request_payload(entry, position), target_type=OverrideRequest)
            )
        except msgspec.ValidationError as exc:
            raise _override_error(position, exc) from exc
    return tuple(requests)


def _request_payload(entry: Mapping[str, Any], position: int) -> dict[str, Any]:
    payload = dict(entry)
    fields = payload.get("set")
    if not isinstance(fields, Mapping):
        return payload
    payload["set"] = dict(fields)
    if "nullable" not in fields:
        return payload
    try:
        nullable = coerce_bool(fields["nullable"], label=f"overrides[{position}].set.nullable")
    except TypeError as exc:
        msg = f"from_profile(): {exc}; expected a boolean-like value"
        raise SchemaError(msg, kind=SchemaErrorKind.INVALID_OVERRIDES) from exc
    payload["set"]["nullable"] = nullable
    return payload


def merge_override_requests(requests: Sequence[OverrideRequest]) -> MergedOverrides:
    """Merge requests per column with last-write-wins per field.

    Returns
    -------
    MergedOverrides
        Mapping of column index to the supplied field values.
    """
    merged: MergedOverrides = {}
    for request in requests:
        fields = merged.setdefault(request.column_index, {})
        for field in OVERRIDE_FIELDS:
            value = getattr(request.fields, field)
            if not is_unset(value):
                fields[field] = value
    return merged


def _comparable(value: object) -> str | None:
    if value is None:
        return None
    if isinstance(value, LengthSpec):
        return stable_text(to_builtins(value))
    return stable_text(value)


def _detail_value(value: object) -> object:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, LengthSpec):
        return stable_text(to_builtins(value))
    return value


def _conflict_issue(column_index: int, field: str, prior: object, value: object) -> Issue:
    return make_issue(
        IssueLevel.WARNING,
        IssueCode.OVERRIDE_CONFLICTS_WITH_PROFILE,
        f"Override for {field} replaces prior value",
        column_index=column_index,
        details={
            "field": field,
            "overridden_value": _detail_value(value),
            "inferred_value": _detail_value(prior),
        },
    )


def apply_column_overrides(
    column: SchemaColumn,
    fields: Mapping[str, Any],
) -> tuple[SchemaColumn, tuple[Issue, ...]]:
    """Apply one merged override set to a column.

    Fields are applied in sorted field-name order. Conflicts compare against the
    running value, so a field set by an earlier override is the prior value.

    Returns
    -------
    tuple[SchemaColumn, tuple[Issue, ...]]
        New column and the override diagnostics.
    """
    issues: list[Issue] = []
    touched: list[str] = []
    updates: dict[str, Any] = {}
    for field in sorted(fields):
        value = fields[field]
        prior = getattr(column, field)
        if field == "length":
            differs = prior is not None and _comparable(prior) != _comparable(value)
        else:
            differs = _comparable(prior) != _comparable(value)
        if differs:
            issues.append(_conflict_issue(column.index, field, prior, value))
        updates[field] = value
        touched.append(field)

    if not touched:
        return column, ()

    existing = column.overrides if column.overrides is not None else ColumnOverrides()
    recorded = msgspec.structs.replace(existing, **updates)
    provenance_fields = set(column.provenance.overrides or ()) | set(touched)
    provenance = msgspec.structs.replace(
        column.provenance,
        overrides=tuple(sorted(provenance_fields)),
    )
    updated = msgspec.structs.replace(
        column,
        **updates,
        overrides=recorded,
        provenance=provenance,
    )
    issues.append(
        make_issue(
            IssueLevel.INFO,
            IssueCode.OVERRIDE_APPLIED,
            "User overrides applied to column",
            column_index=column.index,
            details={"fields": sorted(touched)},
        )
    )
    return updated, tuple(issues)


def apply_overrides(
    columns: Sequence[SchemaColumn],
    overrides: object,
) -> tuple[tuple[SchemaColumn, ...], tuple[Issue, ...]]:
    """Validate, merge, and apply override requests to a column set.

    Parameters
    ----------
    columns
        Columns to override, each with a unique ``index``.
    overrides
        Raw override list, decoded requests, or ``None`` for a no-op.

    Returns
    -------
    tuple[tuple[SchemaColumn, ...], tuple[Issue, ...]]
        New columns in input order and the override diagnostics.

    Raises
    ------
    SchemaError
        Raised when a request is malformed or targets an unknown column.
    """
    requests = parse_override_requests(overrides)
    if not requests:
        return tuple(columns), ()
    merged = merge_override_requests(requests)
    by_index = {column.index: column for column in columns}
    unknown = sorted(index for index in merged if index not in by_index)
    if unknown:
        msg = f"from_profile(): override references unknown column_index {unknown[0]}"
        raise SchemaError(msg, kind=SchemaErrorKind.UNKNOWN_OVERRIDE_COLUMN)

    issues: list[Issue] = []
    for index in sorted(merged):
        updated, column_issues = apply_column_overrides(by_index[index], merged[index])
        by_index[index] = updated
        issues.extend(column_issues)
    logger.debug(
        "Applied overrides to %d columns (%d issues)",
        len(merged),
        len(issues),
    )
    return tuple(by_index[column.index] for column in columns), tuple(issues)


__all__ = [
    "OVERRIDE_FIELDS",
    "MergedOverrides",
    "apply_column_overrides",
    "apply_overrides",
    "merge_override_requests",
    "parse_override_requests",
]
