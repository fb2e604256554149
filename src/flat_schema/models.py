"""Immutable schema contract records."""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated, Any, Literal

import msgspec

from serde_msgspec import StructBaseStrict

SCHEMA_VERSION = 1
PROVENANCE_BASIS = "profile"

ColumnType = Literal["string", "integer", "number", "boolean", "date", "datetime"]

COLUMN_TYPES: tuple[str, ...] = ("boolean", "date", "datetime", "integer", "number", "string")

NonNegativeInt = Annotated[int, msgspec.Meta(ge=0)]


class IssueLevel(StrEnum):
    """Severity of a soft diagnostic."""

    INFO = "info"
    WARNING = "warning"


class IssueCode(StrEnum):
    """Fixed vocabulary of diagnostic codes."""

    TEMPORAL_CONFLICT_WIDENED_TO_STRING = "temporal_conflict_widened_to_string"
    TYPE_WIDENED = "type_widened"
    MIXED_TYPE_EVIDENCE = "mixed_type_evidence"
    ALL_NULL_COLUMN = "all_null_column"
    NO_ROWS_PROFILED = "no_rows_profiled"
    OVERRIDE_CONFLICTS_WITH_PROFILE = "override_conflicts_with_profile"
    OVERRIDE_APPLIED = "override_applied"


class GeneratorInfo(StructBaseStrict, frozen=True):
    """Identity of the tool that produced a schema."""

    name: str
    version: str


class ProfileMeta(StructBaseStrict, frozen=True):
    """Report-level metadata carried over from the profile report."""

    report_version: int
    null_empty: bool | None = None
    null_tokens: tuple[str, ...] | None = None
    rows_profiled: int | None = None


class NullRate(StructBaseStrict, frozen=True):
    """Observed null rate as an exact rational."""

    num: int
    den: int


class LengthSpec(StructBaseStrict, frozen=True):
    """String length bounds; either bound may be absent."""

    min: NonNegativeInt | msgspec.UnsetType = msgspec.UNSET
    max: NonNegativeInt | msgspec.UnsetType = msgspec.UNSET


class ColumnOverrides(StructBaseStrict, frozen=True):
    """Override field set.

    Used both for decoded override requests and for the ``overrides`` record on a
    column. Unset fields were not supplied; ``name`` may be explicitly null.
    """

    length: LengthSpec | msgspec.UnsetType = msgspec.UNSET
    name: str | None | msgspec.UnsetType = msgspec.UNSET
    nullable: bool | msgspec.UnsetType = msgspec.UNSET
    type: ColumnType | msgspec.UnsetType = msgspec.UNSET


class OverrideRequest(StructBaseStrict, frozen=True):
    """Single user override request targeting one column."""

    column_index: NonNegativeInt
    fields: ColumnOverrides = msgspec.field(name="set")


class Provenance(StructBaseStrict, frozen=True):
    """What observation produced a column's inferred values."""

    basis: str
    rows_observed: int
    null_count: int
    null_rate: NullRate
    distinct_count: int | None = None
    min_length_observed: int | None = None
    max_length_observed: int | None = None
    overrides: tuple[str, ...] | None = None


class SchemaColumn(StructBaseStrict, frozen=True, kw_only=True):
    """Inferred (and possibly overridden) contract for one column."""

    index: int
    name: str | None
    type: ColumnType
    nullable: bool
    length: LengthSpec | None = None
    overrides: ColumnOverrides | None = None
    provenance: Provenance


class Issue(StructBaseStrict, frozen=True):
    """Non-fatal diagnostic explaining an inference or override decision."""

    level: str
    code: str
    message: str
    column_index: int | None
    details: dict[str, Any] | None = None


class Schema(StructBaseStrict, frozen=True):
    """Canonical schema contract derived from a profile report."""

    schema_version: int
    generator: GeneratorInfo
    profile: ProfileMeta
    columns: tuple[SchemaColumn, ...]
    issues: tuple[Issue, ...]


__all__ = [
    "COLUMN_TYPES",
    "PROVENANCE_BASIS",
    "SCHEMA_VERSION",
    "ColumnOverrides",
    "ColumnType",
    "GeneratorInfo",
    "Issue",
    "IssueCode",
    "IssueLevel",
    "LengthSpec",
    "NonNegativeInt",
    "NullRate",
    "OverrideRequest",
    "ProfileMeta",
    "Provenance",
    "Schema",
    "SchemaColumn",
]
