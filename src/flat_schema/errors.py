"""Fatal error types raised while building or serializing schema contracts."""

from __future__ import annotations

from enum import StrEnum


class SchemaErrorKind(StrEnum):
    """Machine-checkable categories of fatal schema errors."""

    MISSING_ARGUMENT = "missing_argument"
    INVALID_PROFILE = "invalid_profile"
    INVALID_REPORT_VERSION = "invalid_report_version"
    INVALID_COLUMNS = "invalid_columns"
    INVALID_COLUMN = "invalid_column"
    DUPLICATE_COLUMN_INDEX = "duplicate_column_index"
    INVALID_OVERRIDES = "invalid_overrides"
    UNKNOWN_OVERRIDE_COLUMN = "unknown_override_column"
    UNSUPPORTED_VALUE = "unsupported_value"


class SchemaError(ValueError):
    """Raised when a profile, override list, or value cannot be turned into a schema."""

    def __init__(self, message: str, *, kind: SchemaErrorKind) -> None:
        super().__init__(message)
        self.kind = kind


class MissingArgumentError(SchemaError, TypeError):
    """Raised when a required entry-point argument is not supplied."""

    def __init__(self, message: str) -> None:
        super().__init__(message, kind=SchemaErrorKind.MISSING_ARGUMENT)


__all__ = ["MissingArgumentError", "SchemaError", "SchemaErrorKind"]
