"""Tests for scalar coercion helpers."""

from __future__ import annotations

import pytest

from utils.coercion import (
    coerce_bool,
    coerce_non_negative_int,
    coerce_non_negative_int_or_none,
    is_integer_text,
)


@pytest.mark.parametrize(("value", "expected"), [(0, 0), (7, 7), ("12", 12), ("007", 7)])
def test_coerce_non_negative_int(value: object, expected: int) -> None:
    """Accept non-negative ints and digit strings."""
    assert coerce_non_negative_int(value) == expected


@pytest.mark.parametrize("value", [-1, True, 1.0, "1.0", " 3", "", None, "-2"])
def test_coerce_non_negative_int_rejects(value: object) -> None:
    """Reject booleans, floats, negatives, and non-digit text."""
    with pytest.raises(TypeError, match="cannot coerce"):
        coerce_non_negative_int(value, label="count")
    assert coerce_non_negative_int_or_none(value) is None


def test_is_integer_text() -> None:
    """Recognize digit-only strings."""
    assert is_integer_text("42")
    assert not is_integer_text("4\n")
    assert not is_integer_text(42)


@pytest.mark.parametrize(
    ("value", "expected"),
    [(True, True), (False, False), (1, True), (0, False), (" On ", True), ("n", False)],
)
def test_coerce_bool(value: object, expected: bool) -> None:
    """Accept booleans, 0/1, and common words."""
    assert coerce_bool(value) is expected


@pytest.mark.parametrize("value", [2, -1, "maybe", None, 1.0])
def test_coerce_bool_rejects(value: object) -> None:
    """Reject values that are not boolean-like."""
    with pytest.raises(TypeError):
        coerce_bool(value)
