"""Schema build options and environment overrides."""

from __future__ import annotations

import logging

import msgspec
from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError

from serde_msgspec import StructBaseStrict, coalesce_unset
from utils.env_utils import env_bool, env_text

_LOGGER = logging.getLogger(__name__)

GENERATOR_NAME = "flat_schema"
GENERATOR_VERSION = "0.1.0"

ENV_GENERATOR_NAME = "FLAT_SCHEMA_GENERATOR_NAME"
ENV_GENERATOR_VERSION = "FLAT_SCHEMA_GENERATOR_VERSION"
ENV_RECORD_OBSERVED_STATS = "FLAT_SCHEMA_RECORD_OBSERVED_STATS"


class SchemaBuildOptions(StructBaseStrict, frozen=True):
    """Options controlling schema construction.

    Options never change inference rules. They only control what metadata the
    produced schema carries.
    """

    generator_name: str = GENERATOR_NAME
    generator_version: str = GENERATOR_VERSION
    record_observed_stats: bool = True


class SchemaOptionsEnvPatch(StructBaseStrict, frozen=True):
    """Patch payload for schema option environment overrides."""

    generator_name: str | msgspec.UnsetType = msgspec.UNSET
    generator_version: str | msgspec.UnsetType = msgspec.UNSET
    record_observed_stats: bool | msgspec.UnsetType = msgspec.UNSET


class _SchemaOptionsEnvPatchRuntime(BaseModel):
    model_config = ConfigDict(
        extra="forbid",
        validate_default=True,
        frozen=True,
        arbitrary_types_allowed=True,
        revalidate_instances="always",
    )

    generator_name: str | msgspec.UnsetType = msgspec.UNSET
    generator_version: str | msgspec.UnsetType = msgspec.UNSET
    record_observed_stats: bool | msgspec.UnsetType = msgspec.UNSET


_SCHEMA_OPTIONS_ENV_ADAPTER = TypeAdapter(_SchemaOptionsEnvPatchRuntime)


def _env_patch_text(name: str) -> str | msgspec.UnsetType:
    value = env_text(name)
    if value is None:
        return msgspec.UNSET
    return value


def _env_patch_bool(name: str) -> bool | msgspec.UnsetType:
    value = env_bool(name)
    if value is None:
        return msgspec.UNSET
    return value


def schema_options_env_patch() -> SchemaOptionsEnvPatch:
    """Read schema option overrides from the environment.

    Returns
    -------
    SchemaOptionsEnvPatch
        Patch with ``UNSET`` for every variable that is missing or empty.

    Raises
    ------
    ValueError
        Raised when the collected payload fails validation.
    """
    payload = {
        "generator_name": _env_patch_text(ENV_GENERATOR_NAME),
        "generator_version": _env_patch_text(ENV_GENERATOR_VERSION),
        "record_observed_stats": _env_patch_bool(ENV_RECORD_OBSERVED_STATS),
    }
    try:
        validated = _SCHEMA_OPTIONS_ENV_ADAPTER.validate_python(payload)
    except ValidationError as exc:
        msg = f"Schema options env patch validation failed: {exc}"
        raise ValueError(msg) from exc
    return SchemaOptionsEnvPatch(**validated.model_dump())


def options_from_env(base: SchemaBuildOptions | None = None) -> SchemaBuildOptions:
    """Return build options with environment overrides applied.

    Parameters
    ----------
    base
        Options to patch. Defaults to ``SchemaBuildOptions()``.

    Returns
    -------
    SchemaBuildOptions
        Patched options.
    """
    resolved = base if base is not None else SchemaBuildOptions()
    patch = schema_options_env_patch()
    options = msgspec.structs.replace(
        resolved,
        generator_name=coalesce_unset(patch.generator_name, resolved.generator_name),
        generator_version=coalesce_unset(patch.generator_version, resolved.generator_version),
        record_observed_stats=coalesce_unset(
            patch.record_observed_stats,
            resolved.record_observed_stats,
        ),
    )
    _LOGGER.debug("Resolved schema build options from environment: %r", options)
    return options


__all__ = [
    "ENV_GENERATOR_NAME",
    "ENV_GENERATOR_VERSION",
    "ENV_RECORD_OBSERVED_STATS",
    "GENERATOR_NAME",
    "GENERATOR_VERSION",
    "SchemaBuildOptions",
    "SchemaOptionsEnvPatch",
    "options_from_env",
    "schema_options_env_patch",
]
