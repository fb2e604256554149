"""Deterministic JSON and YAML rendering of schema values.

Both encoders accept a ``Schema`` (or any msgspec struct) or a plain tree of
``None``, ``int``, ``bool``, ``str``, ``float``, lists/tuples and string-keyed
mappings.
Mapping keys are emitted in a canonical order chosen by the path from the root:
known keys first in a fixed priority, then unrecognized keys lexically. Native
mapping iteration order never reaches the output.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, cast

import msgspec

from flat_schema.errors import MissingArgumentError, SchemaError, SchemaErrorKind
from serde_msgspec import to_builtins
from utils.hashing import hash_text_sha256

PathElement = str | int
KeyPath = tuple[PathElement, ...]

TOP_LEVEL_KEYS = (
    "schema_version",
    "generator",
    "profile",
    "source",
    "options",
    "columns",
    "issues",
    "notes",
)
GENERATOR_KEYS = ("name", "version")
PROFILE_KEYS = ("report_version", "null_empty", "null_tokens", "rows_profiled", "generated_by")
COLUMN_KEYS = (
    "index",
    "name",
    "type",
    "nullable",
    "length",
    "values",
    "pattern",
    "overrides",
    "provenance",
)
LENGTH_KEYS = ("min", "max")
OVERRIDE_KEYS = ("name", "type", "nullable", "length")
PROVENANCE_KEYS = (
    "basis",
    "rows_observed",
    "null_count",
    "null_rate",
    "distinct_count",
    "min_length_observed",
    "max_length_observed",
    "overrides",
)
NULL_RATE_KEYS = ("num", "den")
ISSUE_KEYS = ("level", "code", "message", "column_index", "details")

# ``None`` matches any list index.
_KEY_ORDERS: tuple[tuple[tuple[str | None, ...], tuple[str, ...]], ...] = (
    ((), TOP_LEVEL_KEYS),
    (("generator",), GENERATOR_KEYS),
    (("profile",), PROFILE_KEYS),
    (("columns", None), COLUMN_KEYS),
    (("columns", None, "length"), LENGTH_KEYS),
    (("columns", None, "overrides"), OVERRIDE_KEYS),
    (("columns", None, "overrides", "length"), LENGTH_KEYS),
    (("columns", None, "provenance"), PROVENANCE_KEYS),
    (("columns", None, "provenance", "null_rate"), NULL_RATE_KEYS),
    (("issues", None), ISSUE_KEYS),
)

_MISSING = object()

_JSON_ESCAPES: dict[int, str] = {code: f"\\u{code:04x}" for code in range(0x20)}
_JSON_ESCAPES.update(
    {
        ord("\\"): "\\\\",
        ord('"'): '\\"',
        ord("\n"): "\\n",
        ord("\r"): "\\r",
        ord("\t"): "\\t",
        ord("\f"): "\\f",
        ord("\b"): "\\b",
    }
)


def _path_matches(pattern: tuple[str | None, ...], path: KeyPath) -> bool:
    if len(pattern) != len(path):
        return False
    for expected, actual in zip(pattern, path):
        if expected is None:
            if not isinstance(actual, int):
                return False
        elif expected != actual:
            return False
    return True


def key_order_for_path(path: KeyPath) -> tuple[str, ...]:
    """Return the priority key list for mappings found at *path*.

    Returns
    -------
    tuple[str, ...]
        Known keys in output order; empty when the path has no table.
    """
    for pattern, keys in _KEY_ORDERS:
        if _path_matches(pattern, path):
            return keys
    return ()


def ordered_keys(mapping: Mapping[str, Any], path: KeyPath) -> list[str]:
    """Return the mapping's keys in canonical order for *path*.

    Returns
    -------
    list[str]
        Known keys by priority, then the remaining keys lexically.
    """
    priority = key_order_for_path(path)
    rank = {key: position for position, key in enumerate(priority)}
    fallback = len(priority)
    for key in mapping:
        if not isinstance(key, str):
            msg = f"unsupported mapping key type: {type(key).__name__}"
            raise SchemaError(msg, kind=SchemaErrorKind.UNSUPPORTED_VALUE)
    return sorted(mapping, key=lambda key: (rank.get(key, fallback), key))


def _unsupported(entry: str, value: object) -> SchemaError:
    msg = f"{entry}: unsupported value type: {type(value).__name__}"
    return SchemaError(msg, kind=SchemaErrorKind.UNSUPPORTED_VALUE)


def _as_tree(value: object) -> object:
    if isinstance(value, msgspec.Struct):
        return to_builtins(value)
    return value


# Non-integer scalars are rendered as quoted text.
_QUOTED_SCALARS = (str, float)


def _integer_text(value: int) -> str:
    if isinstance(value, bool):
        return "1" if value else "0"
    return str(int(value))


# -----------------------------------------------------------------------------
# JSON
# -----------------------------------------------------------------------------


def json_quote(text: str) -> str:
    """Return *text* as a quoted JSON string.

    Returns
    -------
    str
        Quoted string with backslash, quote, and control characters escaped.
    """
    return '"' + str(text).translate(_JSON_ESCAPES) + '"'


def _encode_json(value: object, path: KeyPath) -> str:
    value = _as_tree(value)
    if value is None:
        return "null"
    if isinstance(value, int):
        return _integer_text(value)
    if isinstance(value, _QUOTED_SCALARS):
        return json_quote(str(value))
    if isinstance(value, Mapping):
        parts = [
            json_quote(key) + ":" + _encode_json(value[key], (*path, key))
            for key in ordered_keys(value, path)
        ]
        return "{" + ",".join(parts) + "}"
    if isinstance(value, (list, tuple)):
        items = [_encode_json(item, (*path, position)) for position, item in enumerate(value)]
        return "[" + ",".join(items) + "]"
    raise _unsupported("to_json()", value)


def to_json(schema: object = _MISSING) -> str:
    """Serialize a schema value to single-line canonical JSON.

    Integers are unquoted and booleans render as ``1``/``0``. Strings and
    floats are quoted. Identical logical input always yields identical text.

    Parameters
    ----------
    schema
        ``Schema`` or a tree of supported values.

    Returns
    -------
    str
        JSON text without a trailing newline.

    Raises
    ------
    MissingArgumentError
        Raised when *schema* is not supplied.
    SchemaError
        Raised when a nested value has an unsupported type.
    """
    if schema is _MISSING:
        msg = "to_json(): missing required argument: schema"
        raise MissingArgumentError(msg)
    return _encode_json(schema, ())


# -----------------------------------------------------------------------------
# YAML
# -----------------------------------------------------------------------------


def yaml_quote(text: str) -> str:
    """Return *text* single-quoted with embedded quotes doubled.

    Returns
    -------
    str
        Single-quoted scalar.
    """
    return "'" + str(text).replace("'", "''") + "'"


def _yaml_scalar(value: object) -> str | None:
    """Return the inline form of a scalar or null; ``None`` for containers."""
    if value is None:
        return "~"
    if isinstance(value, int):
        return _integer_text(value)
    if isinstance(value, _QUOTED_SCALARS):
        return yaml_quote(str(value))
    if isinstance(value, (Mapping, list, tuple)):
        return None
    raise _unsupported("to_yaml()", value)


def _encode_yaml(value: object, indent: int, path: KeyPath) -> list[str]:
    value = _as_tree(value)
    pad = " " * indent
    scalar = _yaml_scalar(value)
    if scalar is not None:
        return [pad + scalar]
    if not value:
        return [pad + ("{}" if isinstance(value, Mapping) else "[]")]
    lines: list[str] = []
    if isinstance(value, Mapping):
        for key in ordered_keys(value, path):
            child = _as_tree(value[key])
            child_scalar = _yaml_scalar(child)
            if child_scalar is not None:
                lines.append(f"{pad}{key}: {child_scalar}")
            else:
                lines.append(f"{pad}{key}:")
                lines.extend(_encode_yaml(child, indent + 2, (*path, key)))
        return lines
    for position, item in enumerate(cast("Sequence[object]", value)):
        child = _as_tree(item)
        child_scalar = _yaml_scalar(child)
        if child_scalar is not None:
            lines.append(f"{pad}- {child_scalar}")
        else:
            lines.append(f"{pad}-")
            lines.extend(_encode_yaml(child, indent + 2, (*path, position)))
    return lines


def to_yaml(schema: object = _MISSING) -> str:
    """Serialize a schema value to block-style canonical YAML.

    Nesting uses two spaces per level. Null renders as ``~``, integers and
    booleans unquoted (booleans as ``1``/``0``), strings and floats
    single-quoted with ``'`` doubled. Empty lists and maps render as ``[]`` and
    ``{}`` on their own indented line.

    Parameters
    ----------
    schema
        ``Schema`` or a tree of supported values.

    Returns
    -------
    str
        YAML text; every line, including the last, ends with a newline.

    Raises
    ------
    MissingArgumentError
        Raised when *schema* is not supplied.
    SchemaError
        Raised when a nested value has an unsupported type.
    """
    if schema is _MISSING:
        msg = "to_yaml(): missing required argument: schema"
        raise MissingArgumentError(msg)
    return "".join(f"{line}\n" for line in _encode_yaml(schema, 0, ()))


def schema_fingerprint(schema: object) -> str:
    """Return the SHA-256 hex digest of the canonical JSON form.

    Returns
    -------
    str
        Stable fingerprint of the schema.
    """
    return hash_text_sha256(to_json(schema))


__all__ = [
    "COLUMN_KEYS",
    "GENERATOR_KEYS",
    "ISSUE_KEYS",
    "LENGTH_KEYS",
    "NULL_RATE_KEYS",
    "OVERRIDE_KEYS",
    "PROFILE_KEYS",
    "PROVENANCE_KEYS",
    "TOP_LEVEL_KEYS",
    "json_quote",
    "key_order_for_path",
    "ordered_keys",
    "schema_fingerprint",
    "to_json",
    "to_yaml",
    "yaml_quote",
]
