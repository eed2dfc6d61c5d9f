# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Immutable configuration models describing a publishing setup."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_serializer

from .types import ConfigError

SCHEMA_VERSION: Final[str] = "1.0.0"

_MODEL_CONFIG: Final[ConfigDict] = ConfigDict(frozen=True, extra="forbid")


class ConfigurationSource(str, Enum):
    """Labels describing where configuration values originated."""

    EXPLICIT = "explicit"
    PROPERTIES = "properties"
    ENVIRONMENT = "environment"
    AUTO_DETECTED = "auto_detected"
    SMART_DEFAULTS = "smart_defaults"
    DEFAULTS = "defaults"


class CredentialsConfig(BaseModel):
    """Repository credentials used when uploading a deployment."""

    model_config = _MODEL_CONFIG

    username: str = ""
    password: str = ""
    load_from_environment: bool = True


class ScmConfig(BaseModel):
    """Source-control coordinates advertised in published metadata."""

    model_config = _MODEL_CONFIG

    url: str = ""
    connection: str = ""
    developer_connection: str = ""


class LicenseConfig(BaseModel):
    """License declaration for the published artifacts."""

    model_config = _MODEL_CONFIG

    name: str = ""
    url: str = ""
    distribution: str = ""


class DeveloperConfig(BaseModel):
    """A single developer entry."""

    model_config = _MODEL_CONFIG

    id: str = ""
    name: str = ""
    email: str = ""
    organization: str = ""
    organization_url: str = ""


class IssueManagementConfig(BaseModel):
    """Issue tracker coordinates."""

    model_config = _MODEL_CONFIG

    system: str = ""
    url: str = ""


class ProjectInfoConfig(BaseModel):
    """Descriptive project metadata required by artifact repositories."""

    model_config = _MODEL_CONFIG

    name: str = ""
    description: str = ""
    url: str = ""
    scm: ScmConfig = Field(default_factory=ScmConfig)
    license: LicenseConfig = Field(default_factory=LicenseConfig)
    developers: tuple[DeveloperConfig, ...] = ()
    issue_management: IssueManagementConfig = Field(default_factory=IssueManagementConfig)


class SigningConfig(BaseModel):
    """Artifact signing inputs. Secrets are never defaulted."""

    model_config = _MODEL_CONFIG

    key_id: str = ""
    password: str = ""
    secret_key_ring_file: str = ""
    use_gpg_agent: bool = True
    auto_detect: bool = True


class PublishingConfig(BaseModel):
    """Options steering how the deployment is published."""

    model_config = _MODEL_CONFIG

    auto_publish: bool = False
    dry_run: bool = False
    aggregation: bool = True
    publications: tuple[str, ...] = ()
    exclude_modules: tuple[str, ...] = ()


class ValidationConfig(BaseModel):
    """Options controlling the validation pass."""

    model_config = _MODEL_CONFIG

    enabled: bool = True
    strict_mode: bool = False
    skip_on_error: bool = False


class AutoDetectionConfig(BaseModel):
    """Per-category switches for the auto-detection pass."""

    model_config = _MODEL_CONFIG

    project_info: bool = True
    credentials: bool = True
    signing: bool = True
    git_info: bool = True


class ConfigurationMetadata(BaseModel):
    """Bookkeeping attached to a resolved configuration."""

    model_config = _MODEL_CONFIG

    version: str = SCHEMA_VERSION
    sources: frozenset[ConfigurationSource] = frozenset()
    last_modified: str = ""

    @field_serializer("sources")
    def _serialize_sources(self, sources: frozenset[ConfigurationSource]) -> list[str]:
        """Emit source labels in a stable order so serialisation is deterministic."""

        return sorted(source.value for source in sources)


class PublisherConfig(BaseModel):
    """Root configuration value consumed by the publishing workflow."""

    model_config = _MODEL_CONFIG

    credentials: CredentialsConfig = Field(default_factory=CredentialsConfig)
    project_info: ProjectInfoConfig = Field(default_factory=ProjectInfoConfig)
    signing: SigningConfig = Field(default_factory=SigningConfig)
    publishing: PublishingConfig = Field(default_factory=PublishingConfig)
    validation: ValidationConfig = Field(default_factory=ValidationConfig)
    auto_detection: AutoDetectionConfig = Field(default_factory=AutoDetectionConfig)
    metadata: ConfigurationMetadata = Field(default_factory=ConfigurationMetadata)

    def serialize(self) -> str:
        """Return a stable JSON representation of the configuration.

        Returns:
            str: JSON document that :meth:`deserialize` turns back into an
            equal configuration.
        """

        return self.model_dump_json(indent=2)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-compatible mapping of the configuration."""

        return self.model_dump(mode="json")

    @classmethod
    def deserialize(cls, payload: str) -> PublisherConfig:
        """Parse a configuration previously produced by :meth:`serialize`.

        Args:
            payload: JSON text describing a configuration.

        Returns:
            PublisherConfig: Configuration equal to the serialised value.

        Raises:
            ConfigError: If ``payload`` is not a valid configuration document.
        """

        try:
            return cls.model_validate_json(payload)
        except ValidationError as exc:
            raise ConfigError(f"invalid serialized configuration: {exc}") from exc

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> PublisherConfig:
        """Build a configuration from a plain mapping such as parsed TOML.

        Args:
            data: Nested mapping keyed by section and field names.

        Returns:
            PublisherConfig: Validated configuration value.

        Raises:
            ConfigError: If ``data`` contains unknown keys or invalid values.
        """

        if not isinstance(data, Mapping):
            raise ConfigError("configuration payload must be a table")
        try:
            return cls.model_validate(dict(data))
        except ValidationError as exc:
            raise ConfigError(f"invalid configuration: {exc}") from exc


def empty_config() -> PublisherConfig:
    """Return a configuration with every field at its empty value."""

    return PublisherConfig()


__all__ = [
    "AutoDetectionConfig",
    "ConfigurationMetadata",
    "ConfigurationSource",
    "CredentialsConfig",
    "DeveloperConfig",
    "IssueManagementConfig",
    "LicenseConfig",
    "ProjectInfoConfig",
    "PublisherConfig",
    "PublishingConfig",
    "SCHEMA_VERSION",
    "ScmConfig",
    "SigningConfig",
    "ValidationConfig",
    "empty_config",
]
