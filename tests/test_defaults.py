# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for smart default providers."""

from __future__ import annotations

from pathlib import Path

import pytest

from centralpub.config import (
    ConfigurationSource,
    ProjectInfoConfig,
    PublisherConfig,
    PublishingConfig,
    empty_config,
    with_values,
)
from centralpub.defaults import (
    FunctionDefaultProvider,
    GenericProjectDefaultProvider,
    GitHubProjectDefaultProvider,
    SmartDefaultManager,
    default_providers,
    github_repository,
    infer_project_name,
)


def _proposing(name: str, priority: int, description: str, *, applies: bool = True) -> FunctionDefaultProvider:
    return FunctionDefaultProvider(
        name=name,
        priority=priority,
        provider=lambda _context, _config: PublisherConfig(project_info=ProjectInfoConfig(description=description)),
        predicate=lambda _context: applies,
    )


def test_higher_priority_provider_wins(make_context) -> None:
    low = _proposing("low", 10, "from low")
    high = _proposing("high", 100, "from high")

    for providers in ([low, high], [high, low]):
        config = SmartDefaultManager(providers).apply(make_context(), empty_config())
        assert config.project_info.description == "from high"


def test_existing_values_are_never_overwritten(make_context) -> None:
    explicit = with_values(empty_config(), {"project_info.description": "explicit"})
    manager = SmartDefaultManager([_proposing("high", 100, "default"), GenericProjectDefaultProvider()])

    config = manager.apply(make_context(), explicit)

    assert config.project_info.description == "explicit"


def test_inapplicable_providers_are_skipped(make_context) -> None:
    manager = SmartDefaultManager([_proposing("never", 100, "nope", applies=False), _proposing("low", 1, "yes")])

    assert [provider.name for provider in manager.active_providers(make_context())] == ["low"]
    assert manager.apply(make_context(), empty_config()).project_info.description == "yes"


def test_smart_defaults_source_recorded_only_when_something_changed(make_context) -> None:
    manager = SmartDefaultManager([_proposing("p", 5, "filled")])

    filled = manager.apply(make_context(), empty_config())
    untouched = manager.apply(make_context(), with_values(empty_config(), {"project_info.description": "set"}))

    assert ConfigurationSource.SMART_DEFAULTS in filled.metadata.sources
    assert ConfigurationSource.SMART_DEFAULTS not in untouched.metadata.sources


def test_provider_failures_propagate(make_context) -> None:
    def explode(_context, _config):
        raise ValueError("defect")

    manager = SmartDefaultManager([FunctionDefaultProvider(name="bad", priority=1, provider=explode)])

    with pytest.raises(ValueError, match="defect"):
        manager.apply(make_context(), empty_config())


def test_generic_provider_infers_directory_name_for_placeholder(make_context, home_dir: Path) -> None:
    config = SmartDefaultManager([GenericProjectDefaultProvider()]).apply(make_context(name="root"), empty_config())

    assert config.project_info.name == "my-lib"
    assert config.project_info.description == "A library for publishing to Maven Central"
    assert config.project_info.license.name == "Apache License 2.0"
    assert config.project_info.license.url == "https://www.apache.org/licenses/LICENSE-2.0.txt"
    assert config.project_info.license.distribution == "repo"
    assert config.signing.secret_key_ring_file == str(home_dir / ".gnupg" / "secring.gpg")
    assert config.publishing.auto_publish is False
    assert config.publishing.aggregation is True
    assert config.credentials.username == ""
    assert config.credentials.password == ""
    assert config.signing.key_id == ""
    assert config.signing.password == ""


def test_generic_provider_keeps_publishing_flags(make_context) -> None:
    base = PublisherConfig(publishing=PublishingConfig(auto_publish=True, aggregation=False))

    config = SmartDefaultManager([GenericProjectDefaultProvider()]).apply(make_context(), base)

    assert config.publishing.auto_publish is True
    assert config.publishing.aggregation is False


@pytest.mark.parametrize(
    ("name", "root_name", "existing", "expected"),
    [
        ("core", "toolkit", "", "toolkit-core"),
        ("toolkit", "toolkit", "", "toolkit"),
        ("lib", "", "", "lib"),
        ("root", "toolkit", "", "toolkit"),
        ("", "", "", "my-lib"),
        ("core", "toolkit", "chosen", "chosen"),
    ],
)
def test_infer_project_name(make_context, name: str, root_name: str, existing: str, expected: str) -> None:
    config = with_values(empty_config(), {"project_info.name": existing})

    assert infer_project_name(make_context(name=name, root_name=root_name), config) == expected


def test_github_provider_derives_scm_and_issue_tracker(make_context, project_dir: Path, write_git_config) -> None:
    write_git_config(project_dir, "git@github.com:org/repo.git")
    context = make_context()
    accumulated = with_values(empty_config(), {"project_info.url": "https://github.com/org/repo"})

    provider = GitHubProjectDefaultProvider()
    config = SmartDefaultManager([provider]).apply(context, accumulated)

    assert provider.applies_to(context)
    assert config.project_info.scm.url == "https://github.com/org/repo"
    assert config.project_info.scm.connection == "scm:git:https://github.com/org/repo.git"
    assert config.project_info.scm.developer_connection == "scm:git:git@github.com:org/repo.git"
    assert config.project_info.issue_management.system == "GitHub"
    assert config.project_info.issue_management.url == "https://github.com/org/repo/issues"


def test_github_provider_requires_github_remote(make_context, project_dir: Path, write_git_config) -> None:
    assert not GitHubProjectDefaultProvider().applies_to(make_context())

    write_git_config(project_dir, "git@gitlab.com:org/repo.git")

    assert not GitHubProjectDefaultProvider().applies_to(make_context())


def test_github_provider_reads_latin1_git_config(make_context, project_dir: Path) -> None:
    (project_dir / ".git").mkdir()
    (project_dir / ".git" / "config").write_bytes(
        b'[remote "origin"]\n\turl = git@github.com:org/repo.git\n[user]\n\tname = Jos\xe9\n'
    )

    assert GitHubProjectDefaultProvider().applies_to(make_context())


def test_github_repository_parsing() -> None:
    assert github_repository("https://github.com/org/repo.git") == ("org", "repo")
    assert github_repository("https://github.com/org/repo/") == ("org", "repo")
    assert github_repository("https://gitlab.com/org/repo") is None


def test_default_providers_order() -> None:
    manager = SmartDefaultManager(default_providers())

    assert [provider.priority for provider in manager.providers] == [50, 10]
