"""Column type inference from per-column type evidence."""

from __future__ import annotations

from collections.abc import Mapping

from flat_schema.issues import make_issue
from flat_schema.models import COLUMN_TYPES, ColumnType, Issue, IssueCode, IssueLevel
from utils.coercion import coerce_non_negative_int_or_none

TEMPORAL_TYPES: frozenset[str] = frozenset({"date", "datetime"})

# Scalar widening order for non-temporal evidence, narrowest first.
SCALAR_WIDENING_ORDER: tuple[ColumnType, ...] = ("boolean", "integer", "number", "string")

_DEFAULT_TYPE: ColumnType = "string"


def present_type_tags(type_evidence: Mapping[str, object] | None) -> tuple[str, ...]:
    """Return the known type tags with a positive observed count.

    Unknown tags and counts that are not non-negative integers are ignored.

    Returns
    -------
    tuple[str, ...]
        Lexically sorted tags.
    """
    if not isinstance(type_evidence, Mapping):
        return ()
    present: list[str] = []
    for tag, count in type_evidence.items():
        if tag not in COLUMN_TYPES:
            continue
        resolved = coerce_non_negative_int_or_none(count)
        if resolved:
            present.append(tag)
    return tuple(sorted(present))


def infer_column_type(
    type_evidence: Mapping[str, object] | None,
) -> tuple[ColumnType, tuple[Issue, ...]]:
    """Infer a column type by widening over the observed type tags.

    Temporal and non-temporal evidence together widen to ``string``. Temporal
    evidence alone yields ``datetime`` when datetimes were seen, else ``date``.
    Otherwise the widest tag in ``boolean < integer < number < string`` wins.

    Parameters
    ----------
    type_evidence
        Mapping of type tag to observed count, or ``None``.

    Returns
    -------
    tuple[ColumnType, tuple[Issue, ...]]
        Inferred type and any diagnostics. Issue ``column_index`` is left unset
        for the caller to fill in.
    """
    present = present_type_tags(type_evidence)
    if not present:
        return _DEFAULT_TYPE, ()

    temporal = [tag for tag in present if tag in TEMPORAL_TYPES]
    other = [tag for tag in present if tag not in TEMPORAL_TYPES]

    if temporal and other:
        issue = make_issue(
            IssueLevel.WARNING,
            IssueCode.TEMPORAL_CONFLICT_WIDENED_TO_STRING,
            "Temporal and non-temporal values observed; widened to string",
            details={
                "temporal_candidates": temporal,
                "other_candidates": other,
                "chosen": "string",
            },
        )
        return "string", (issue,)

    if temporal:
        if "datetime" in temporal and len(temporal) > 1:
            issue = make_issue(
                IssueLevel.INFO,
                IssueCode.TYPE_WIDENED,
                "Date and datetime values observed; widened to datetime",
                details={"from": "date", "to": "datetime"},
            )
            return "datetime", (issue,)
        if "datetime" in temporal:
            return "datetime", ()
        return "date", ()

    chosen = max(other, key=SCALAR_WIDENING_ORDER.index)
    if len(other) == 1:
        return chosen, ()
    issue = make_issue(
        IssueLevel.WARNING,
        IssueCode.MIXED_TYPE_EVIDENCE,
        f"Mixed type evidence observed; widened to {chosen}",
        details={"candidates": list(other), "chosen": chosen},
    )
    return chosen, (issue,)


__all__ = [
    "SCALAR_WIDENING_ORDER",
    "TEMPORAL_TYPES",
    "infer_column_type",
    "present_type_tags",
]
