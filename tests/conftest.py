# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from pathlib import Path

import pytest

from centralpub.context import LocalProjectContext

ContextFactory = Callable[..., LocalProjectContext]


@pytest.fixture
def home_dir(tmp_path: Path) -> Path:
    home = tmp_path / "home"
    home.mkdir()
    return home


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """Return an empty project directory named like a real library."""
    project = tmp_path / "my-lib"
    project.mkdir()
    return project


@pytest.fixture
def make_context(project_dir: Path, home_dir: Path) -> ContextFactory:
    """Return a factory building isolated contexts for ``project_dir``."""

    def factory(
        *,
        name: str = "my-lib",
        root_name: str = "",
        directory: Path | None = None,
        environ: Mapping[str, str] | None = None,
        properties: Mapping[str, str] | None = None,
    ) -> LocalProjectContext:
        return LocalProjectContext(
            name=name,
            project_dir=directory or project_dir,
            root_name=root_name,
            environ=dict(environ or {}),
            properties=dict(properties or {}),
            home_dir=home_dir,
        )

    return factory


@pytest.fixture
def write_git_config() -> Callable[..., None]:
    """Return a helper creating ``.git/config`` with an optional origin remote."""

    def write(project: Path, remote: str | None, *, user: tuple[str, str] | None = None) -> None:
        git_dir = project / ".git"
        git_dir.mkdir(exist_ok=True)
        lines = ["[core]", "\trepositoryformatversion = 0"]
        if remote is not None:
            lines += ['[remote "origin"]', f"\turl = {remote}", "\tfetch = +refs/heads/*:refs/remotes/origin/*"]
        if user is not None:
            lines += ["[user]", f"\tname = {user[0]}", f"\temail = {user[1]}"]
        (git_dir / "config").write_text("\n".join(lines) + "\n", encoding="utf-8")

    return write
