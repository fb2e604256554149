"""Tests for column type widening."""

from __future__ import annotations

import pytest

from flat_schema.models import IssueCode, IssueLevel
from flat_schema.type_inference import infer_column_type, present_type_tags


@pytest.mark.parametrize(
    ("evidence", "expected"),
    [
        (None, "string"),
        ({}, "string"),
        ({"integer": 0, "number": 0}, "string"),
        ({"boolean": 4}, "boolean"),
        ({"integer": 4}, "integer"),
        ({"number": 1}, "number"),
        ({"date": 3}, "date"),
        ({"datetime": 3}, "datetime"),
    ],
)
def test_single_or_absent_evidence(evidence: dict[str, int] | None, expected: str) -> None:
    """Infer the lone observed tag, or string when nothing was observed."""
    column_type, issues = infer_column_type(evidence)
    assert column_type == expected
    assert issues == ()


def test_temporal_and_scalar_widen_to_string() -> None:
    """Widen mixed temporal and non-temporal evidence to string with a warning."""
    column_type, issues = infer_column_type({"string": 2, "date": 1, "datetime": 1})
    assert column_type == "string"
    (issue,) = issues
    assert issue.level == IssueLevel.WARNING
    assert issue.code == IssueCode.TEMPORAL_CONFLICT_WIDENED_TO_STRING
    assert issue.column_index is None
    assert issue.details == {
        "temporal_candidates": ["date", "datetime"],
        "other_candidates": ["string"],
        "chosen": "string",
    }


def test_date_and_datetime_widen_to_datetime() -> None:
    """Widen date plus datetime evidence to datetime with an info issue."""
    column_type, issues = infer_column_type({"date": 5, "datetime": 1})
    assert column_type == "datetime"
    (issue,) = issues
    assert issue.level == IssueLevel.INFO
    assert issue.code == IssueCode.TYPE_WIDENED
    assert issue.details == {"from": "date", "to": "datetime"}


@pytest.mark.parametrize(
    ("evidence", "expected", "candidates"),
    [
        ({"integer": 5, "number": 3}, "number", ["integer", "number"]),
        ({"boolean": 1, "integer": 9}, "integer", ["boolean", "integer"]),
        ({"number": 1, "string": 1, "boolean": 1}, "string", ["boolean", "number", "string"]),
    ],
)
def test_mixed_scalars_widen(evidence: dict[str, int], expected: str, candidates: list[str]) -> None:
    """Pick the widest scalar tag and report the sorted candidates."""
    column_type, issues = infer_column_type(evidence)
    assert column_type == expected
    (issue,) = issues
    assert issue.code == IssueCode.MIXED_TYPE_EVIDENCE
    assert issue.level == IssueLevel.WARNING
    assert issue.details == {"candidates": candidates, "chosen": expected}
    assert issue.message == f"Mixed type evidence observed; widened to {expected}"


def test_unknown_tags_and_bad_counts_are_ignored() -> None:
    """Skip unknown tags and counts that are not non-negative integers."""
    evidence = {"uuid": 4, "integer": "3", "number": -1, "boolean": True, "date": "x"}
    assert present_type_tags(evidence) == ("integer",)
    assert infer_column_type(evidence) == ("integer", ())


def test_present_tags_ignore_evidence_order() -> None:
    """Return the same tags for any insertion order."""
    forward = {"string": 1, "date": 2, "boolean": 3}
    backward = dict(reversed(list(forward.items())))
    assert present_type_tags(forward) == present_type_tags(backward) == (
        "boolean",
        "date",
        "string",
    )
    assert infer_column_type(forward) == infer_column_type(backward)
