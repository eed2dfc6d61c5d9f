# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Detect the project name and description from build files and READMEs."""

from __future__ import annotations

import re
from typing import Final

from ..config import ConfigurationSource, FieldPath, empty_config, with_values
from ..context import ProjectContext
from .base import Confidence, DetectedValue, DetectionResult

PLACEHOLDER_PROJECT_NAMES: Final[frozenset[str]] = frozenset({"", "root"})
BUILD_SCRIPTS: Final[tuple[str, ...]] = ("build.gradle.kts", "build.gradle")
README_FILES: Final[tuple[str, ...]] = ("README.md", "README.txt", "README.rst", "README")
MAX_DESCRIPTION_LENGTH: Final[int] = 200
MIN_PLAIN_TEXT_LENGTH: Final[int] = 10

_DESCRIPTION_RE = re.compile(r"""description\s*=\s*(["'])(?P<value>[^"']+)\1""")
_BADGE_PREFIXES: Final[tuple[str, ...]] = ("[![", "[!")


def description_from_build_script(content: str) -> str | None:
    """Return the ``description = "..."`` assignment found in a build script."""

    match = _DESCRIPTION_RE.search(content)
    if match is None:
        return None
    return match.group("value").strip() or None


def description_from_readme(filename: str, content: str) -> str | None:
    """Return the first meaningful paragraph line of a README.

    Markdown headings and badge lines are skipped; plain-text READMEs use the
    first line longer than a single word.
    """

    for raw in content.splitlines():
        line = raw.strip()
        if not line:
            continue
        if filename.endswith((".md", ".markdown")):
            if line.startswith("#") or line.startswith(_BADGE_PREFIXES):
                continue
            return line[:MAX_DESCRIPTION_LENGTH]
        if len(line) > MIN_PLAIN_TEXT_LENGTH:
            return line[:MAX_DESCRIPTION_LENGTH]
    return None


class ProjectInfoDetector:
    """Detect project name and description."""

    name = "ProjectInfoDetector"
    category = "project_info"
    enabled_by_default = True

    def detect(self, context: ProjectContext) -> DetectionResult | None:
        """Inspect the declared project name, build scripts, and README files.

        Args:
            context: Project context to inspect.

        Returns:
            DetectionResult | None: Partial configuration with the detected
            name/description plus warnings for anything that was not found.
        """

        detected: dict[FieldPath, DetectedValue] = {}
        warnings: list[str] = []

        if (project_name := self._detect_name(context)) is not None:
            detected[project_name.path] = project_name
        else:
            warnings.append("Could not auto-detect project name from the build configuration")

        if (description := self._detect_description(context)) is not None:
            detected[description.path] = description
        else:
            warnings.append("Could not auto-detect project description from build scripts or README files")

        values = {path: value.value for path, value in detected.items()}
        return DetectionResult(
            config=with_values(empty_config(), values, source=ConfigurationSource.AUTO_DETECTED),
            detected_values=detected,
            warnings=tuple(warnings),
        )

    @staticmethod
    def _detect_name(context: ProjectContext) -> DetectedValue | None:
        path = "project_info.name"
        declared = context.name.strip()
        if declared not in PLACEHOLDER_PROJECT_NAMES:
            return DetectedValue(path, declared, "Build project", Confidence.HIGH)
        directory = context.project_dir.name
        if directory and directory not in {".", ".."} and not directory.startswith("tmp"):
            return DetectedValue(path, directory, "Directory name", Confidence.MEDIUM)
        return None

    @staticmethod
    def _detect_description(context: ProjectContext) -> DetectedValue | None:
        path = "project_info.description"
        for script in BUILD_SCRIPTS:
            content = context.read_file(script)
            if content is not None and (description := description_from_build_script(content)):
                return DetectedValue(path, description, script, Confidence.HIGH)
        for readme in README_FILES:
            content = context.read_file(readme)
            if content is not None and (description := description_from_readme(readme, content)):
                return DetectedValue(path, description, readme, Confidence.MEDIUM)
        return None


__all__ = [
    "PLACEHOLDER_PROJECT_NAMES",
    "ProjectInfoDetector",
    "description_from_build_script",
    "description_from_readme",
]
