"""Tests for canonical issue ordering and stable detail text."""

from __future__ import annotations

import itertools

from flat_schema.issues import (
    canonicalize_issues,
    issue_sort_key,
    make_issue,
    stable_text,
)
from flat_schema.models import IssueLevel


def _issues():
    return [
        make_issue(IssueLevel.WARNING, "b_code", "m", column_index=None),
        make_issue(IssueLevel.WARNING, "b_code", "m", column_index=3),
        make_issue(IssueLevel.WARNING, "a_code", "m", column_index=7),
        make_issue(IssueLevel.INFO, "z_code", "m", column_index=9),
        make_issue(IssueLevel.WARNING, "b_code", "m", column_index=3, details={"k": 2}),
        make_issue(IssueLevel.WARNING, "b_code", "m", column_index=3, details={"k": 1}),
    ]


def test_canonical_order() -> None:
    """Sort by level, code, index with nulls last, message, then details."""
    ordered = canonicalize_issues(_issues())
    assert [(issue.level, issue.code, issue.column_index) for issue in ordered] == [
        ("info", "z_code", 9),
        ("warning", "a_code", 7),
        ("warning", "b_code", 3),
        ("warning", "b_code", 3),
        ("warning", "b_code", 3),
        ("warning", "b_code", None),
    ]
    assert [issue.details for issue in ordered[2:5]] == [None, {"k": 1}, {"k": 2}]


def test_canonical_order_is_permutation_invariant() -> None:
    """Produce identical output for every input permutation."""
    expected = canonicalize_issues(_issues())
    for permutation in itertools.permutations(_issues()):
        assert canonicalize_issues(permutation) == expected


def test_message_breaks_ties() -> None:
    """Order equal level, code, and index by message text."""
    later = make_issue(IssueLevel.WARNING, "c", "Override for type", column_index=0)
    earlier = make_issue(IssueLevel.WARNING, "c", "Override for nullable", column_index=0)
    assert canonicalize_issues([later, earlier]) == (earlier, later)


def test_unknown_level_sorts_last() -> None:
    """Rank unrecognized levels after warning."""
    odd = make_issue("debug", "a", "m")  # type: ignore[arg-type]
    warning = make_issue(IssueLevel.WARNING, "z", "m")
    assert issue_sort_key(odd) > issue_sort_key(warning)


def test_make_issue_drops_empty_details() -> None:
    """Store empty details as absent."""
    assert make_issue(IssueLevel.INFO, "c", "m", details={}).details is None


def test_stable_text_rendering() -> None:
    """Render mappings, lists, nulls, and booleans deterministically."""
    assert stable_text(None) == ""
    assert stable_text(True) == "1"
    assert stable_text([1, {"k": False}]) == "[1,{k=0}]"
    assert stable_text({"b": [1, 2], "a": {"y": None, "x": "s"}}) == "a={x=s,y=};b=[1,2]"
