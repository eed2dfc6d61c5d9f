# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration model, merge algebra, and field-path helpers."""

from __future__ import annotations

from .fields import changed_paths, coerce_bool, get_value, iter_leaves, with_values
from .merge import fill_gaps, has_values, is_empty, merge, stamp
from .models import (
    SCHEMA_VERSION,
    AutoDetectionConfig,
    ConfigurationMetadata,
    ConfigurationSource,
    CredentialsConfig,
    DeveloperConfig,
    IssueManagementConfig,
    LicenseConfig,
    ProjectInfoConfig,
    PublisherConfig,
    PublishingConfig,
    ScmConfig,
    SigningConfig,
    ValidationConfig,
    empty_config,
)
from .types import ConfigError, FieldPath

__all__ = [
    "SCHEMA_VERSION",
    "AutoDetectionConfig",
    "ConfigError",
    "ConfigurationMetadata",
    "ConfigurationSource",
    "CredentialsConfig",
    "DeveloperConfig",
    "FieldPath",
    "IssueManagementConfig",
    "LicenseConfig",
    "ProjectInfoConfig",
    "PublisherConfig",
    "PublishingConfig",
    "ScmConfig",
    "SigningConfig",
    "ValidationConfig",
    "changed_paths",
    "coerce_bool",
    "empty_config",
    "fill_gaps",
    "get_value",
    "has_values",
    "is_empty",
    "iter_leaves",
    "merge",
    "stamp",
    "with_values",
]
