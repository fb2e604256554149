"""Deterministic schema contracts derived from tabular profile reports."""

from flat_schema.arrow import to_arrow_schema
from flat_schema.builder import SchemaBuilder, build_schema, from_profile
from flat_schema.config import GENERATOR_VERSION, SchemaBuildOptions, options_from_env
from flat_schema.errors import MissingArgumentError, SchemaError, SchemaErrorKind
from flat_schema.issues import canonicalize_issues
from flat_schema.models import (
    ColumnOverrides,
    GeneratorInfo,
    Issue,
    IssueCode,
    IssueLevel,
    LengthSpec,
    NullRate,
    ProfileMeta,
    Provenance,
    Schema,
    SchemaColumn,
)
from flat_schema.serialization import schema_fingerprint, to_json, to_yaml

__version__ = GENERATOR_VERSION

__all__ = [
    "ColumnOverrides",
    "GeneratorInfo",
    "Issue",
    "IssueCode",
    "IssueLevel",
    "LengthSpec",
    "MissingArgumentError",
    "NullRate",
    "ProfileMeta",
    "Provenance",
    "Schema",
    "SchemaBuildOptions",
    "SchemaBuilder",
    "SchemaColumn",
    "SchemaError",
    "SchemaErrorKind",
    "__version__",
    "build_schema",
    "canonicalize_issues",
    "from_profile",
    "options_from_env",
    "schema_fingerprint",
    "to_arrow_schema",
    "to_json",
    "to_yaml",
]
