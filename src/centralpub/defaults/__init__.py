# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Priority-ordered smart default providers."""

from __future__ import annotations

from .base import (
    GENERIC_PRIORITY,
    HOSTING_PRIORITY,
    DefaultProvider,
    FunctionDefaultProvider,
    SmartDefaultManager,
)
from .generic import GenericProjectDefaultProvider, infer_project_name
from .github import GitHubProjectDefaultProvider, github_repository


def default_providers() -> list[DefaultProvider]:
    """Return a fresh list of the built-in default providers."""

    return [GitHubProjectDefaultProvider(), GenericProjectDefaultProvider()]


__all__ = [
    "GENERIC_PRIORITY",
    "HOSTING_PRIORITY",
    "DefaultProvider",
    "FunctionDefaultProvider",
    "GenericProjectDefaultProvider",
    "GitHubProjectDefaultProvider",
    "SmartDefaultManager",
    "default_providers",
    "github_repository",
    "infer_project_name",
]
