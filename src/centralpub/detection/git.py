# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Detect source-control coordinates from the project's Git configuration."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from ..config import ConfigurationSource, DeveloperConfig, FieldPath, empty_config, with_values
from ..context import ProjectContext
from .base import Confidence, DetectedValue, DetectionResult

GIT_CONFIG_SOURCE: Final[str] = ".git/config"
PRIMARY_REMOTE: Final[str] = "origin"

_SECTION_RE = re.compile(r'^\[\s*([\w.-]+)(?:\s+"([^"]*)")?\s*\]$')

GitSections = dict[tuple[str, str | None], dict[str, str]]


@dataclass(frozen=True, slots=True)
class RemoteUrls:
    """Browser URL and SCM connection strings derived from a Git remote."""

    https_url: str
    connection: str
    developer_connection: str


def find_git_config(start: Path) -> Path | None:
    """Return the ``.git/config`` path governing ``start``.

    Parent directories are searched until a ``.git`` entry is found. A
    ``.git`` file (worktrees, submodules) yields ``None``.
    """

    for candidate in (start, *start.parents):
        git_entry = candidate / ".git"
        if git_entry.exists():
            return git_entry / "config" if git_entry.is_dir() else None
    return None


def parse_git_config(text: str) -> GitSections:
    """Parse Git's INI-like config into ``{(section, subsection): {key: value}}``."""

    sections: GitSections = {}
    current: dict[str, str] | None = None
    for raw in text.splitlines():
        line = raw.strip()
        if not line or line.startswith(("#", ";")):
            continue
        if header := _SECTION_RE.match(line):
            key = (header.group(1).lower(), header.group(2))
            current = sections.setdefault(key, {})
            continue
        if current is None or "=" not in line:
            continue
        name, value = line.split("=", 1)
        current[name.strip().lower()] = value.strip().strip('"')
    return sections


def extract_remote_url(sections: GitSections) -> str | None:
    """Return the primary remote URL, falling back to the first remote declared."""

    primary = sections.get(("remote", PRIMARY_REMOTE), {}).get("url")
    if primary:
        return primary
    for (section, _), values in sections.items():
        if section == "remote" and values.get("url"):
            return values["url"]
    return None


def convert_remote_url(remote: str) -> RemoteUrls | None:
    """Translate a Git remote into repository metadata URLs.

    Args:
        remote: Remote URL in SSH (``git@host:owner/repo.git``) or HTTP(S) form.

    Returns:
        RemoteUrls | None: Derived URLs, or ``None`` for unsupported schemes.
    """

    remote = remote.strip()
    if remote.startswith("git@"):
        host, sep, repo_path = remote[len("git@") :].partition(":")
        if not sep or not host or not repo_path:
            return None
        https_url = f"https://{host}/{repo_path.removesuffix('.git')}"
        developer_connection = f"scm:git:{remote}"
    elif remote.startswith(("https://", "http://")):
        https_url = remote.removesuffix(".git")
        developer_connection = ""
    else:
        return None
    connection = f"scm:git:{https_url}.git"
    return RemoteUrls(
        https_url=https_url,
        connection=connection,
        developer_connection=developer_connection or connection,
    )


class GitInfoDetector:
    """Detect project URL, SCM connections, and the committer from Git."""

    name = "GitInfoDetector"
    category = "git_info"
    enabled_by_default = True

    def detect(self, context: ProjectContext) -> DetectionResult | None:
        """Inspect the Git configuration governing the project directory.

        Args:
            context: Project context to inspect.

        Returns:
            DetectionResult | None: Detected SCM values, or ``None`` when the
            project is not inside a Git repository.
        """

        config_path = find_git_config(context.project_dir)
        if config_path is None:
            return None
        sections = parse_git_config(context.read_file(config_path) or "")

        values: dict[FieldPath, object] = {}
        detected: dict[FieldPath, DetectedValue] = {}
        warnings: list[str] = []

        remote = extract_remote_url(sections)
        urls = convert_remote_url(remote) if remote else None
        if urls is not None:
            for path, value in (
                ("project_info.url", urls.https_url),
                ("project_info.scm.url", urls.https_url),
                ("project_info.scm.connection", urls.connection),
                ("project_info.scm.developer_connection", urls.developer_connection),
            ):
                values[path] = value
                detected[path] = DetectedValue(path, value, GIT_CONFIG_SOURCE, Confidence.HIGH)
        else:
            warnings.append("No suitable Git remote URL found for SCM configuration")

        user = sections.get(("user", None), {})
        user_name, user_email = user.get("name", ""), user.get("email", "")
        if user_name and user_email:
            values["project_info.developers"] = (
                DeveloperConfig(id=user_email.split("@", 1)[0], name=user_name, email=user_email),
            )
            detected["project_info.developers"] = DetectedValue(
                "project_info.developers", f"{user_name} <{user_email}>", GIT_CONFIG_SOURCE, Confidence.HIGH
            )

        if not detected:
            return None
        return DetectionResult(
            config=with_values(empty_config(), values, source=ConfigurationSource.AUTO_DETECTED),
            detected_values=detected,
            warnings=tuple(warnings),
        )


__all__ = [
    "GitInfoDetector",
    "RemoteUrls",
    "convert_remote_url",
    "extract_remote_url",
    "find_git_config",
    "parse_git_config",
]
