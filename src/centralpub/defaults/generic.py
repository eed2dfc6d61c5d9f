# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Conservative fallback defaults that apply to every project."""

from __future__ import annotations

from typing import Final

from ..config import (
    LicenseConfig,
    ProjectInfoConfig,
    PublisherConfig,
    PublishingConfig,
    SigningConfig,
)
from ..context import ProjectContext
from ..detection.project import PLACEHOLDER_PROJECT_NAMES
from .base import GENERIC_PRIORITY

GENERIC_DESCRIPTION: Final[str] = "A library for publishing to Maven Central"
DEFAULT_LICENSE: Final[LicenseConfig] = LicenseConfig(
    name="Apache License 2.0",
    url="https://www.apache.org/licenses/LICENSE-2.0.txt",
    distribution="repo",
)


def infer_project_name(context: ProjectContext, config: PublisherConfig) -> str:
    """Return the project name to fall back on.

    An already-set name wins. Otherwise a subproject whose name differs from
    the root project is published as ``root-leaf``; a single module uses its
    own name, then the root name, then the directory name.
    """

    if existing := config.project_info.name.strip():
        return existing
    leaf = context.name.strip()
    root = context.root_name.strip()
    leaf_known = leaf not in PLACEHOLDER_PROJECT_NAMES
    root_known = root not in PLACEHOLDER_PROJECT_NAMES
    if leaf_known and root_known and leaf != root:
        return f"{root}-{leaf}"
    if leaf_known:
        return leaf
    if root_known:
        return root
    return context.project_dir.name


def default_key_ring_path(context: ProjectContext) -> str:
    return str(context.home_dir / ".gnupg" / "secring.gpg")


class GenericProjectDefaultProvider:
    """Lowest-priority provider that always applies.

    Credentials and signing secrets are never defaulted; they stay empty
    unless explicit input, the environment, or detection supplies them.
    """

    name = "GenericProjectDefaults"
    priority = GENERIC_PRIORITY

    def applies_to(self, context: ProjectContext) -> bool:
        return True

    def provide(self, context: ProjectContext, config: PublisherConfig) -> PublisherConfig:
        return PublisherConfig(
            project_info=ProjectInfoConfig(
                name=infer_project_name(context, config),
                description=GENERIC_DESCRIPTION,
                license=DEFAULT_LICENSE,
            ),
            signing=SigningConfig(secret_key_ring_file=default_key_ring_path(context)),
            publishing=PublishingConfig(auto_publish=False, aggregation=True, dry_run=False),
        )


__all__ = [
    "DEFAULT_LICENSE",
    "GENERIC_DESCRIPTION",
    "GenericProjectDefaultProvider",
    "default_key_ring_path",
    "infer_project_name",
]
