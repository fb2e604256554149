"""Canonical type coercion helpers."""

from __future__ import annotations

import re

_INTEGER_TEXT_RE = re.compile(r"\A\d+\Z")
_TRUE_VALUES = frozenset({"true", "1", "yes", "on", "y"})
_FALSE_VALUES = frozenset({"false", "0", "no", "off", "n"})


def is_integer_text(value: object) -> bool:
    """Return True when *value* is a string of ASCII digits.

    Returns
    -------
    bool
        True for strings such as ``"0"`` or ``"42"``.
    """
    return isinstance(value, str) and _INTEGER_TEXT_RE.match(value) is not None


def coerce_non_negative_int(value: object, *, label: str = "value") -> int:
    """Coerce an integer-shaped value to a non-negative ``int`` or raise ``TypeError``.

    Integer-shaped means a non-negative ``int`` (booleans excluded) or a string of
    ASCII digits.

    Returns
    -------
    int
        Coerced integer value.

    Raises
    ------
    TypeError
        If *value* is not integer-shaped.
    """
    if isinstance(value, int) and not isinstance(value, bool) and value >= 0:
        return value
    if isinstance(value, str) and is_integer_text(value):
        return int(value)
    msg = f"{label}: cannot coerce {type(value).__name__} to a non-negative int"
    raise TypeError(msg)


def coerce_non_negative_int_or_none(value: object) -> int | None:
    """Best-effort non-negative integer coercion that returns ``None`` when invalid.

    Returns
    -------
    int | None
        Coerced integer when possible; otherwise ``None``.
    """
    try:
        return coerce_non_negative_int(value)
    except TypeError:
        return None


def coerce_bool(value: object, *, label: str = "value") -> bool:
    """Coerce a boolean-like scalar to ``bool`` or raise ``TypeError``.

    Accepts ``bool``, the integers ``0``/``1``, and the usual true/false words.

    Returns
    -------
    bool
        Coerced boolean value.

    Raises
    ------
    TypeError
        If *value* is not boolean-like.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in {0, 1}:
        return bool(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
    msg = f"{label}: cannot coerce {value!r} to bool"
    raise TypeError(msg)


__all__ = [
    "coerce_bool",
    "coerce_non_negative_int",
    "coerce_non_negative_int_or_none",
    "is_integer_text",
]
