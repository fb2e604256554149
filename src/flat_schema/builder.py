"""Schema assembly from a profile report."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

import msgspec

from flat_schema.config import SchemaBuildOptions
from flat_schema.errors import MissingArgumentError
from flat_schema.issues import canonicalize_issues
from flat_schema.models import (
    PROVENANCE_BASIS,
    SCHEMA_VERSION,
    GeneratorInfo,
    Issue,
    NullRate,
    Provenance,
    Schema,
    SchemaColumn,
)
from flat_schema.nullability import infer_nullability
from flat_schema.overrides import apply_overrides
from flat_schema.profile_input import ColumnEvidence, ProfileReport, read_profile_report
from flat_schema.serialization import to_json, to_yaml
from flat_schema.type_inference import infer_column_type

logger = logging.getLogger(__name__)

_MISSING = object()


def build_column(
    evidence: ColumnEvidence,
    *,
    record_observed_stats: bool = True,
) -> tuple[SchemaColumn, tuple[Issue, ...]]:
    """Build a column from its evidence with a provisional ``nullable``.

    Returns
    -------
    tuple[SchemaColumn, tuple[Issue, ...]]
        Column and its type inference issues, tagged with the column index.
    """
    column_type, type_issues = infer_column_type(evidence.type_evidence)
    issues = tuple(
        msgspec.structs.replace(issue, column_index=evidence.index) for issue in type_issues
    )
    provenance = Provenance(
        basis=PROVENANCE_BASIS,
        rows_observed=evidence.rows_observed,
        null_count=evidence.null_count,
        null_rate=NullRate(num=evidence.null_count, den=evidence.rows_observed),
    )
    if record_observed_stats:
        provenance = msgspec.structs.replace(
            provenance,
            distinct_count=evidence.distinct_count,
            min_length_observed=evidence.min_length,
            max_length_observed=evidence.max_length,
        )
    column = SchemaColumn(
        index=evidence.index,
        name=evidence.name,
        type=column_type,
        nullable=True,
        provenance=provenance,
    )
    return column, issues


def build_schema(
    report: ProfileReport,
    overrides: object = None,
    *,
    options: SchemaBuildOptions | None = None,
) -> Schema:
    """Assemble a schema from a validated report.

    Parameters
    ----------
    report
        Validated profile report.
    overrides
        Optional override request list.
    options
        Build options; defaults to ``SchemaBuildOptions()``.

    Returns
    -------
    Schema
        Complete schema with canonically ordered issues.
    """
    resolved = options if options is not None else SchemaBuildOptions()
    issues: list[Issue] = []
    columns: list[SchemaColumn] = []
    for evidence in report.columns:
        column, column_issues = build_column(
            evidence,
            record_observed_stats=resolved.record_observed_stats,
        )
        columns.append(column)
        issues.extend(column_issues)

    inferred, nullability_issues = infer_nullability(columns, rows_profiled=report.rows_profiled)
    issues.extend(nullability_issues)
    final_columns, override_issues = apply_overrides(inferred, overrides)
    issues.extend(override_issues)

    schema = Schema(
        schema_version=SCHEMA_VERSION,
        generator=GeneratorInfo(
            name=resolved.generator_name,
            version=resolved.generator_version,
        ),
        profile=report.meta,
        columns=final_columns,
        issues=canonicalize_issues(issues),
    )
    logger.info(
        "Built schema with %d columns and %d issues",
        len(schema.columns),
        len(schema.issues),
    )
    return schema


def from_profile(
    profile: object = _MISSING,
    overrides: Sequence[object] | None = None,
    *,
    options: SchemaBuildOptions | None = None,
) -> Schema:
    """Derive a schema contract from a profile report.

    Parameters
    ----------
    profile
        Profile report mapping. Never mutated.
    overrides
        Optional list of ``{"column_index": int, "set": {...}}`` requests.
    options
        Build options; defaults to ``SchemaBuildOptions()``.

    Returns
    -------
    Schema
        Newly constructed schema.

    Raises
    ------
    MissingArgumentError
        Raised when *profile* is not supplied.
    """
    if profile is _MISSING:
        msg = "from_profile(): missing required argument: profile"
        raise MissingArgumentError(msg)
    report = read_profile_report(profile)
    return build_schema(report, overrides, options=options)


@dataclass(frozen=True)
class SchemaBuilder:
    """Configured entry point for building and serializing schemas."""

    options: SchemaBuildOptions = field(default_factory=SchemaBuildOptions)

    def from_profile(
        self,
        profile: object = _MISSING,
        overrides: Sequence[object] | None = None,
    ) -> Schema:
        """Derive a schema using this builder's options.

        Returns
        -------
        Schema
            Newly constructed schema.
        """
        return from_profile(profile, overrides, options=self.options)

    @staticmethod
    def to_json(schema: object = _MISSING) -> str:
        """Serialize a schema to canonical JSON.

        Returns
        -------
        str
            Single-line JSON text.
        """
        if schema is _MISSING:
            msg = "to_json(): missing required argument: schema"
            raise MissingArgumentError(msg)
        return to_json(schema)

    @staticmethod
    def to_yaml(schema: object = _MISSING) -> str:
        """Serialize a schema to canonical YAML.

        Returns
        -------
        str
            Block-style YAML text.
        """
        if schema is _MISSING:
            msg = "to_yaml(): missing required argument: schema"
            raise MissingArgumentError(msg)
        return to_yaml(schema)


__all__ = ["SchemaBuilder", "build_column", "build_schema", "from_profile"]
