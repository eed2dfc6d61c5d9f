# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Read-only access to the project being published."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol, runtime_checkable

LOGGER = logging.getLogger(__name__)

PROPERTIES_FILE = "gradle.properties"


@runtime_checkable
class ProjectContext(Protocol):
    """Describe the project facts detectors and default providers may consult.

    Implementations never mutate the project; every accessor is a read.
    """

    @property
    def name(self) -> str:
        """Return the declared project (or module) name."""
        ...

    @property
    def root_name(self) -> str:
        """Return the declared root project name for multi-module builds."""
        ...

    @property
    def project_dir(self) -> Path:
        """Return the project directory."""
        ...

    @property
    def home_dir(self) -> Path:
        """Return the home directory of the invoking user."""
        ...

    def read_file(self, path: str | Path) -> str | None:
        """Return the text of ``path`` (relative to the project) when it exists."""
        ...

    def env(self, name: str) -> str | None:
        """Return the environment variable ``name`` if it is set."""
        ...

    def property(self, name: str) -> str | None:
        """Return the declared build property ``name`` if it is set."""
        ...


def parse_properties(text: str) -> dict[str, str]:
    """Parse ``key=value`` / ``key: value`` lines into a mapping.

    Args:
        text: Contents of a properties file.

    Returns:
        dict[str, str]: Parsed properties, later keys overriding earlier ones.
    """

    result: dict[str, str] = {}
    for raw in text.splitlines():
        line = raw.strip()
        if not line or line.startswith(("#", "!")):
            continue
        separators = [index for index in (line.find("="), line.find(":")) if index >= 0]
        if not separators:
            result[line] = ""
            continue
        cut = min(separators)
        result[line[:cut].strip()] = line[cut + 1 :].strip()
    return result


@dataclass(frozen=True, slots=True)
class LocalProjectContext:
    """Filesystem-backed :class:`ProjectContext` implementation."""

    name: str
    project_dir: Path
    root_name: str = ""
    environ: Mapping[str, str] = field(default_factory=lambda: dict(os.environ))
    properties: Mapping[str, str] = field(default_factory=dict)
    home_dir: Path = field(default_factory=Path.home)

    @classmethod
    def from_directory(
        cls,
        project_dir: Path,
        *,
        name: str | None = None,
        root_name: str = "",
        environ: Mapping[str, str] | None = None,
        properties_file: str | None = PROPERTIES_FILE,
        home_dir: Path | None = None,
    ) -> LocalProjectContext:
        """Build a context for ``project_dir`` loading declared properties.

        Args:
            project_dir: Directory holding the project.
            name: Declared project name. Defaults to the directory name.
            root_name: Declared root project name for multi-module builds.
            environ: Environment mapping. Defaults to ``os.environ``.
            properties_file: Properties file (relative to ``project_dir``) to
                load, or ``None`` to skip property loading.
            home_dir: Home directory override.

        Returns:
            LocalProjectContext: Context bound to ``project_dir``.
        """

        directory = project_dir.resolve()
        properties: dict[str, str] = {}
        if properties_file is not None:
            candidate = directory / properties_file
            if candidate.is_file():
                properties = parse_properties(candidate.read_text(encoding="utf-8", errors="replace"))
        return cls(
            name=name if name is not None else directory.name,
            project_dir=directory,
            root_name=root_name,
            environ=dict(os.environ) if environ is None else dict(environ),
            properties=properties,
            home_dir=home_dir or Path.home(),
        )

    def read_file(self, path: str | Path) -> str | None:
        """Return the text of ``path`` resolved against the project directory.

        Args:
            path: Relative or absolute file path.

        Returns:
            str | None: File contents, or ``None`` when the file does not exist
            or cannot be read. Bytes that are not UTF-8 are replaced.
        """

        target = self.project_dir / path
        if not target.is_file():
            return None
        try:
            return target.read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            LOGGER.debug("cannot read %s: %s", target, exc)
            return None

    def env(self, name: str) -> str | None:
        """Return the environment variable ``name`` if it is set."""

        return self.environ.get(name)

    def property(self, name: str) -> str | None:
        """Return the declared build property ``name`` if it is set."""

        return self.properties.get(name)


__all__ = ["LocalProjectContext", "PROPERTIES_FILE", "ProjectContext", "parse_properties"]
