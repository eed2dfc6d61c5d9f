# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Read configuration values from build properties, the environment, and TOML."""

from __future__ import annotations

import logging
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final

from pydantic import ValidationError

from .config import (
    AutoDetectionConfig,
    ConfigError,
    ConfigurationSource,
    DeveloperConfig,
    FieldPath,
    PublisherConfig,
    get_value,
    with_values,
)
from .context import ProjectContext

LOGGER = logging.getLogger(__name__)

PROPERTY_MAPPINGS: Final[dict[str, FieldPath]] = {
    "SONATYPE_USERNAME": "credentials.username",
    "SONATYPE_PASSWORD": "credentials.password",
    "POM_NAME": "project_info.name",
    "POM_DESCRIPTION": "project_info.description",
    "POM_URL": "project_info.url",
    "POM_SCM_URL": "project_info.scm.url",
    "POM_SCM_CONNECTION": "project_info.scm.connection",
    "POM_SCM_DEV_CONNECTION": "project_info.scm.developer_connection",
    "POM_LICENCE_NAME": "project_info.license.name",
    "POM_LICENCE_URL": "project_info.license.url",
    "POM_LICENCE_DIST": "project_info.license.distribution",
    "signing.keyId": "signing.key_id",
    "signing.password": "signing.password",
    "signing.secretKeyRingFile": "signing.secret_key_ring_file",
    "autoPublish": "publishing.auto_publish",
    "aggregation": "publishing.aggregation",
}

DEVELOPER_PROPERTIES: Final[dict[str, str]] = {
    "POM_DEVELOPER_ID": "id",
    "POM_DEVELOPER_NAME": "name",
    "POM_DEVELOPER_EMAIL": "email",
    "POM_DEVELOPER_ORGANIZATION": "organization",
    "POM_DEVELOPER_ORGANIZATION_URL": "organization_url",
}

ENVIRONMENT_MAPPINGS: Final[dict[str, FieldPath]] = {
    "SONATYPE_USERNAME": "credentials.username",
    "SONATYPE_PASSWORD": "credentials.password",
    "SIGNING_KEY": "signing.key_id",
    "SIGNING_PASSWORD": "signing.password",
}

_LOOKUP_NAMES: Final[dict[ConfigurationSource, tuple[dict[FieldPath, str], str]]] = {
    ConfigurationSource.PROPERTIES: (
        {path: name for name, path in PROPERTY_MAPPINGS.items()} | {"project_info.developers": "POM_DEVELOPER_*"},
        "Property",
    ),
    ConfigurationSource.ENVIRONMENT: (
        {path: name for name, path in ENVIRONMENT_MAPPINGS.items()},
        "Environment variable",
    ),
}

_SECTION_LISTS: Final[dict[FieldPath, type[DeveloperConfig]]] = {
    "project_info.developers": DeveloperConfig,
}
_RESERVED_SECTIONS: Final[frozenset[str]] = frozenset({"metadata"})


def _is_credential(path: FieldPath) -> bool:
    return path.startswith("credentials.")


def property_values(
    context: ProjectContext,
    *,
    options: AutoDetectionConfig | None = None,
) -> dict[FieldPath, Any]:
    """Return the values declared as build properties.

    Blank properties are treated as absent. The developer properties are
    grouped into a single developer entry.

    Args:
        context: Project context supplying declared properties.
        options: Auto-detection flags; credential properties are skipped
            when ``options.credentials`` is off.

    Returns:
        dict[FieldPath, Any]: Values keyed by configuration field path.
    """

    include_credentials = options is None or options.credentials
    values: dict[FieldPath, Any] = {}
    for name, path in PROPERTY_MAPPINGS.items():
        if _is_credential(path) and not include_credentials:
            continue
        raw = context.property(name)
        if raw is not None and raw.strip():
            values[path] = raw
    developer = {
        field: raw.strip()
        for name, field in DEVELOPER_PROPERTIES.items()
        if (raw := context.property(name)) is not None and raw.strip()
    }
    if developer:
        values["project_info.developers"] = (DeveloperConfig(**developer),)
    return values


def environment_values(
    context: ProjectContext,
    *,
    options: AutoDetectionConfig | None = None,
) -> dict[FieldPath, Any]:
    """Return the values supplied through environment variables."""

    include_credentials = options is None or options.credentials
    values: dict[FieldPath, Any] = {}
    for name, path in ENVIRONMENT_MAPPINGS.items():
        if _is_credential(path) and not include_credentials:
            continue
        raw = context.env(name)
        if raw is not None and raw.strip():
            values[path] = raw
    return values


def apply_values(
    base: PublisherConfig,
    values: Mapping[FieldPath, Any],
    source: ConfigurationSource,
) -> PublisherConfig:
    """Write ``values`` over ``base`` and record ``source`` when anything was written."""

    if not values:
        return base
    LOGGER.debug("%s supplied %s", source.value, sorted(values))
    return with_values(base, values, source=source)


def apply_lookup_values(
    base: PublisherConfig,
    values: Mapping[FieldPath, Any],
    source: ConfigurationSource,
) -> tuple[PublisherConfig, list[str]]:
    """Write property or environment ``values`` over ``base``, skipping bad entries.

    Lookup layers are best effort: a value that cannot be coerced into its
    field is dropped and reported instead of failing the whole layer.

    Args:
        base: Configuration accumulated so far.
        values: Values keyed by field path, as returned by the lookups.
        source: Lookup layer the values came from.

    Returns:
        tuple[PublisherConfig, list[str]]: Updated configuration and one
        warning per ignored entry.
    """

    names, label = _LOOKUP_NAMES.get(source, ({}, source.value))
    accepted: dict[FieldPath, Any] = {}
    warnings: list[str] = []
    for path, value in values.items():
        try:
            with_values(base, {path: value})
        except ConfigError as exc:
            warning = f"{label} '{names.get(path, path)}' ignored: {exc}"
            LOGGER.warning("%s", warning)
            warnings.append(warning)
            continue
        accepted[path] = value
    return apply_values(base, accepted, source), warnings


def _flatten(table: Mapping[str, Any], prefix: str, into: dict[FieldPath, Any]) -> None:
    for key, value in table.items():
        path = f"{prefix}{key}"
        if not prefix and key in _RESERVED_SECTIONS:
            raise ConfigError(f"'{key}' cannot be set in an explicit configuration file")
        if isinstance(value, Mapping):
            _flatten(value, f"{path}.", into)
        elif path in _SECTION_LISTS:
            into[path] = _section_list(path, value)
        else:
            into[path] = value


def _section_list(path: FieldPath, value: Any) -> tuple[Any, ...]:
    model = _SECTION_LISTS[path]
    if not isinstance(value, list):
        raise ConfigError(f"{path} must be an array of tables")
    try:
        return tuple(model.model_validate(item) for item in value)
    except ValidationError as exc:
        raise ConfigError(f"invalid entry in {path}: {exc}") from exc


def explicit_values(data: Mapping[str, Any]) -> dict[FieldPath, Any]:
    """Flatten a nested mapping of explicit settings into field paths.

    Raises:
        ConfigError: If a key does not name a configuration field or a value
            has the wrong shape.
    """

    values: dict[FieldPath, Any] = {}
    _flatten(data, "", values)
    blank = PublisherConfig()
    for path in values:
        get_value(blank, path)
    return values


def load_explicit_config(path: Path) -> dict[FieldPath, Any]:
    """Load explicit settings from a TOML file.

    Args:
        path: TOML document keyed by configuration section.

    Returns:
        dict[FieldPath, Any]: Explicit values keyed by field path.

    Raises:
        ConfigError: If the file cannot be read or is not a valid
            configuration document.
    """

    try:
        with path.open("rb") as handle:
            data = tomllib.load(handle)
    except OSError as exc:
        raise ConfigError(f"cannot read configuration file {path}: {exc}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"malformed configuration file {path}: {exc}") from exc
    values = explicit_values(data)
    # validate shapes up front so a bad file fails before resolution starts
    with_values(PublisherConfig(), values)
    return values


__all__ = [
    "DEVELOPER_PROPERTIES",
    "ENVIRONMENT_MAPPINGS",
    "PROPERTY_MAPPINGS",
    "apply_lookup_values",
    "apply_values",
    "environment_values",
    "explicit_values",
    "load_explicit_config",
    "property_values",
]
