# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Defaults for projects hosted on GitHub."""

from __future__ import annotations

import re
from typing import Final

from ..config import IssueManagementConfig, ProjectInfoConfig, PublisherConfig, ScmConfig
from ..context import ProjectContext
from ..detection.git import find_git_config
from .base import HOSTING_PRIORITY

GITHUB_HOST: Final[str] = "github.com"

_GITHUB_URL_RE = re.compile(r"^https?://github\.com/(?P<owner>[^/\s]+)/(?P<repo>[^/\s]+?)(?:\.git)?/?$")


def github_repository(url: str) -> tuple[str, str] | None:
    """Return ``(owner, repo)`` for a GitHub browser URL, else ``None``."""

    match = _GITHUB_URL_RE.match(url.strip())
    if match is None:
        return None
    return match.group("owner"), match.group("repo")


class GitHubProjectDefaultProvider:
    """Derive SCM coordinates and the issue tracker from a GitHub project URL."""

    name = "GitHubProjectDefaults"
    priority = HOSTING_PRIORITY

    def applies_to(self, context: ProjectContext) -> bool:
        config_path = find_git_config(context.project_dir)
        if config_path is None:
            return False
        return GITHUB_HOST in (context.read_file(config_path) or "")

    def provide(self, context: ProjectContext, config: PublisherConfig) -> PublisherConfig:
        repository = github_repository(config.project_info.url)
        if repository is None:
            return PublisherConfig()
        owner, repo = repository
        base = f"https://github.com/{owner}/{repo}"
        return PublisherConfig(
            project_info=ProjectInfoConfig(
                url=base,
                scm=ScmConfig(
                    url=base,
                    connection=f"scm:git:{base}.git",
                    developer_connection=f"scm:git:git@github.com:{owner}/{repo}.git",
                ),
                issue_management=IssueManagementConfig(system="GitHub", url=f"{base}/issues"),
            )
        )


__all__ = ["GITHUB_HOST", "GitHubProjectDefaultProvider", "github_repository"]
