"""Shared msgspec struct policy and conversion helpers."""

from __future__ import annotations

import re
from typing import Any, TypeVar

import msgspec


class StructBaseStrict(
    msgspec.Struct,
    frozen=True,
    kw_only=True,
    omit_defaults=True,
    repr_omit_defaults=True,
    forbid_unknown_fields=True,
):
    """Immutable base for records that reject unknown fields."""


T = TypeVar("T")

_VALIDATION_RE = re.compile(r"^(?P<summary>.*?)(?:\s+-\s+at\s+`(?P<path>[^`]+)`)?$")


def validation_error_payload(exc: msgspec.ValidationError) -> dict[str, str]:
    """Split a msgspec validation message into summary and path.

    ``"Expected `int`, got `str` - at `$.column_index`"`` becomes
    ``{"type": "ValidationError", "summary": "Expected `int`, got `str`",
    "path": "$.column_index"}``.

    Returns
    -------
    dict[str, str]
        Payload with ``type``, ``summary``, and ``path`` when one was reported.
    """
    message = str(exc).strip()
    payload: dict[str, str] = {"type": type(exc).__name__}
    match = _VALIDATION_RE.match(message)
    if match is None:
        payload["summary"] = message
        return payload
    summary = (match.group("summary") or "").strip()
    if summary:
        payload["summary"] = summary
    if match.group("path"):
        payload["path"] = match.group("path")
    return payload


def convert(obj: object, *, target_type: type[T], strict: bool = True) -> T:
    """Convert builtin data into *target_type*.

    Returns
    -------
    T
        Typed value.

    Raises
    ------
    msgspec.ValidationError
        Raised when *obj* does not match *target_type*.
    """
    return msgspec.convert(obj, type=target_type, strict=strict)


def to_builtins(obj: object, *, str_keys: bool = True) -> Any:
    """Return *obj* as builtin containers and scalars.

    Unset struct fields and fields equal to their default are dropped.

    Returns
    -------
    Any
        Builtin representation.
    """
    return msgspec.to_builtins(obj, order="deterministic", str_keys=str_keys)


def is_unset(value: object) -> bool:
    """Return True when *value* is ``msgspec.UNSET``."""
    return value is msgspec.UNSET


def coalesce_unset(value: T | msgspec.UnsetType, default: T) -> T:
    """Return *default* when *value* is ``msgspec.UNSET``, else *value*.

    Returns
    -------
    T
        Resolved value.
    """
    if value is msgspec.UNSET:
        return default
    return value


__all__ = [
    "StructBaseStrict",
    "coalesce_unset",
    "convert",
    "is_unset",
    "to_builtins",
    "validation_error_payload",
]
