"""Shared profile report fixtures."""

from __future__ import annotations

from typing import Any

import pytest

from tests.test_helpers.profiles import column, profile


@pytest.fixture
def small_profile() -> dict[str, Any]:
    """Two-column report with columns listed out of index order.

    Returns
    -------
    dict[str, Any]
        Profile report.
    """
    return profile(
        column(
            1,
            "when",
            rows_observed=2,
            null_count=0,
            type_evidence={"date": 1, "datetime": 1},
        ),
        column(0, "id", rows_observed=2, null_count=0, type_evidence={"integer": 2}),
        rows_profiled=2,
    )


@pytest.fixture
def mixed_profile() -> dict[str, Any]:
    """Report exercising each inference diagnostic.

    Returns
    -------
    dict[str, Any]
        Profile report.
    """
    return profile(
        column(3, "notes", rows_observed=5, null_count=5),
        column(
            0,
            "id",
            rows_observed=5,
            null_count=0,
            type_evidence={"integer": 5},
            distinct_count=5,
        ),
        column(
            2,
            "stamp",
            rows_observed=5,
            null_count=1,
            type_evidence={"date": 2, "string": 2},
        ),
        column(
            1,
            "amount",
            rows_observed=5,
            null_count=1,
            type_evidence={"integer": 3, "number": 1, "boolean": 0},
        ),
        rows_profiled=5,
        null_empty=1,
        null_tokens=["NA", "-"],
    )
