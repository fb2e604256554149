"""Issue construction and canonical issue ordering.

Issues are soft diagnostics; their order in a schema must not depend on the
order in which the inference stages produced them. ``canonicalize_issues``
sorts by a composite key:

1. level rank (``info`` before ``warning``; unknown levels last),
2. ``code``,
3. ``column_index`` ascending, report-wide issues (null index) last,
4. ``message``,
5. ``stable_text(details)`` as the final tiebreaker.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from flat_schema.models import Issue, IssueLevel

logger = logging.getLogger(__name__)

_LEVEL_RANK: dict[str, int] = {
    IssueLevel.INFO: 0,
    IssueLevel.WARNING: 1,
}
_UNKNOWN_LEVEL_RANK = 9

IssueSortKey = tuple[int, str, tuple[int, int], str, str]


def make_issue(
    level: IssueLevel,
    code: str,
    message: str,
    *,
    column_index: int | None = None,
    details: Mapping[str, Any] | None = None,
) -> Issue:
    """Return a new issue record.

    Returns
    -------
    Issue
        Issue with ``details`` omitted when empty.
    """
    return Issue(
        level=level,
        code=code,
        message=message,
        column_index=column_index,
        details=dict(details) if details else None,
    )


def _scalar_text(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, int):
        return str(int(value))
    return str(value)


def _nested_text(value: object) -> str:
    if isinstance(value, Mapping):
        parts = [f"{key}={_nested_text(value[key])}" for key in sorted(value, key=str)]
        return "{" + ",".join(parts) + "}"
    if isinstance(value, (list, tuple)):
        return "[" + ",".join(_nested_text(item) for item in value) + "]"
    return _scalar_text(value)


def stable_text(value: object) -> str:
    """Render a details value as a deterministic single-line string.

    Top-level mappings render as ``key=value`` pairs joined by ``;`` with keys
    sorted. Nested mappings render as ``{k=v,...}`` and lists as ``[v,...]``.
    Null renders as the empty string and booleans as ``1``/``0``.

    Parameters
    ----------
    value
        Mapping, list, scalar, or ``None``.

    Returns
    -------
    str
        Deterministic rendering used for tie-breaking and value comparison.
    """
    if isinstance(value, Mapping):
        return ";".join(f"{key}={_nested_text(value[key])}" for key in sorted(value, key=str))
    if isinstance(value, (list, tuple)):
        return _nested_text(value)
    return _scalar_text(value)


def issue_sort_key(issue: Issue) -> IssueSortKey:
    """Return the composite canonical ordering key for an issue.

    Returns
    -------
    IssueSortKey
        Tuple comparable across any two issues.
    """
    level_rank = _LEVEL_RANK.get(issue.level, _UNKNOWN_LEVEL_RANK)
    if issue.column_index is None:
        index_key = (1, 0)
    else:
        index_key = (0, issue.column_index)
    return (
        level_rank,
        issue.code or "",
        index_key,
        issue.message or "",
        stable_text(issue.details),
    )


def canonicalize_issues(issues: Iterable[Issue]) -> tuple[Issue, ...]:
    """Return issues in canonical order.

    Returns
    -------
    tuple[Issue, ...]
        Sorted issues.
    """
    ordered = tuple(sorted(issues, key=issue_sort_key))
    logger.debug("Canonicalized %d issues", len(ordered))
    return ordered


__all__ = [
    "IssueSortKey",
    "canonicalize_issues",
    "issue_sort_key",
    "make_issue",
    "stable_text",
]
