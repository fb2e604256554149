"""Projection of schema contracts onto Arrow schemas."""

from __future__ import annotations

from collections.abc import Mapping

import msgspec
import pyarrow as pa

from flat_schema.models import ColumnType, Schema, SchemaColumn

_ARROW_TYPES: dict[ColumnType, pa.DataType] = {
    "string": pa.string(),
    "integer": pa.int64(),
    "number": pa.float64(),
    "boolean": pa.bool_(),
    "date": pa.date32(),
    "datetime": pa.timestamp("us"),
}


def _encode_metadata(metadata: Mapping[str, str]) -> dict[bytes, bytes]:
    return {str(key).encode("utf-8"): str(value).encode("utf-8") for key, value in metadata.items()}


def arrow_type_for(column_type: ColumnType) -> pa.DataType:
    """Return the Arrow type used for a column type tag.

    Returns
    -------
    pyarrow.DataType
        Arrow data type.

    Raises
    ------
    KeyError
        Raised when *column_type* is not a known type tag.
    """
    try:
        return _ARROW_TYPES[column_type]
    except KeyError as exc:
        msg = f"Unknown column type {column_type!r}"
        raise KeyError(msg) from exc


def field_name(column: SchemaColumn) -> str:
    """Return the Arrow field name for a column.

    Returns
    -------
    str
        Column name, or ``column_<index>`` for unnamed columns.
    """
    if column.name is None:
        return f"column_{column.index}"
    return column.name


def arrow_field(column: SchemaColumn) -> pa.Field:
    """Return an Arrow field for one schema column.

    Field metadata records ``index`` and any declared length bounds.

    Returns
    -------
    pyarrow.Field
        Arrow field definition.
    """
    metadata = {"index": str(column.index)}
    if column.length is not None:
        if column.length.min is not msgspec.UNSET:
            metadata["length.min"] = str(column.length.min)
        if column.length.max is not msgspec.UNSET:
            metadata["length.max"] = str(column.length.max)
    return pa.field(
        field_name(column),
        arrow_type_for(column.type),
        nullable=column.nullable,
        metadata=_encode_metadata(metadata),
    )


def to_arrow_schema(schema: Schema) -> pa.Schema:
    """Return an Arrow schema with one field per column, in column order.

    Returns
    -------
    pyarrow.Schema
        Arrow schema carrying the schema version and generator as metadata.
    """
    metadata = {
        "flat_schema.schema_version": str(schema.schema_version),
        "flat_schema.generator": f"{schema.generator.name} {schema.generator.version}",
    }
    return pa.schema(
        [arrow_field(column) for column in schema.columns],
        metadata=_encode_metadata(metadata),
    )


__all__ = ["arrow_field", "arrow_type_for", "field_name", "to_arrow_schema"]
