# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for layered configuration resolution."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

import pytest

from centralpub.config import ConfigError, ConfigurationSource, PublisherConfig, PublishingConfig
from centralpub.defaults import SmartDefaultManager
from centralpub.detection import AutoDetectionManager, default_detectors
from centralpub.resolver import ConfigurationResolver
from centralpub.validation import ValidationEngine

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def github_project(project_dir: Path, write_git_config) -> Path:
    write_git_config(project_dir, "git@github.com:org/my-lib.git", user=("Jane Doe", "jane@example.com"))
    (project_dir / "build.gradle.kts").write_text(
        'plugins { `maven-publish` }\ndescription = "Detected description"\n', encoding="utf-8"
    )
    return project_dir


def test_resolution_precedence(make_context, github_project: Path) -> None:
    context = make_context(
        properties={"POM_NAME": "from-properties", "POM_DESCRIPTION": "from properties", "SONATYPE_USERNAME": "prop"},
        environ={"SONATYPE_USERNAME": "env-user", "SONATYPE_PASSWORD": "env-password-123"},
    )

    result = ConfigurationResolver().resolve(context, {"project_info": {"name": "explicit-name"}}, now=NOW)
    config = result.config

    assert config.project_info.name == "explicit-name"
    assert config.project_info.description == "from properties"
    assert config.credentials.username == "env-user"
    assert config.project_info.url == "https://github.com/org/my-lib"
    assert config.project_info.issue_management.url == "https://github.com/org/my-lib/issues"
    assert config.project_info.license.name == "Apache License 2.0"
    assert config.metadata.last_modified == NOW.isoformat()
    assert config.metadata.sources == {
        ConfigurationSource.AUTO_DETECTED,
        ConfigurationSource.PROPERTIES,
        ConfigurationSource.ENVIRONMENT,
        ConfigurationSource.EXPLICIT,
        ConfigurationSource.SMART_DEFAULTS,
    }
    assert result.sources_for("credentials.username") == [
        ConfigurationSource.PROPERTIES,
        ConfigurationSource.ENVIRONMENT,
    ]
    assert set(result.snapshots) == {"auto_detected", "properties", "environment", "explicit", "smart_defaults"}
    assert result.snapshots["auto_detected"]["project_info"]["description"] == "Detected description"


def test_defaults_fill_only_empty_fields(make_context, github_project: Path) -> None:
    result = ConfigurationResolver().resolve(make_context(), now=NOW)

    assert result.config.project_info.description == "Detected description"
    assert result.config.project_info.name == "my-lib"
    assert result.config.credentials.username == ""
    assert result.sources_for("project_info.license.name") == [ConfigurationSource.SMART_DEFAULTS]


def test_resolution_reports_invalid_configuration(make_context) -> None:
    result = ConfigurationResolver().resolve(make_context(), now=NOW)

    assert result.validation is not None
    assert not result.is_valid
    assert result.should_abort
    assert "REQ-CREDENTIALS_USERNAME" in {violation.code for violation in result.validation.errors()}


def test_skip_on_error_and_disabled_validation(make_context) -> None:
    skipping = ConfigurationResolver().resolve(make_context(), {"validation": {"skip_on_error": True}})
    disabled = ConfigurationResolver().resolve(make_context(), {"validation": {"enabled": False}})

    assert not skipping.is_valid and not skipping.should_abort
    assert disabled.validation is None and not disabled.should_abort


def test_strict_mode_promotes_warnings(make_context) -> None:
    explicit = {
        "credentials": {"username": "alice", "password": "a-long-token-value"},
        "project_info": {"developers": [{"id": "a", "name": "A"}], "scm": {"url": "https://x"}},
        "validation": {"strict_mode": True},
    }

    lenient = ConfigurationResolver().resolve(make_context(), {**explicit, "validation": {"strict_mode": False}})
    strict = ConfigurationResolver().resolve(make_context(), explicit)

    assert lenient.is_valid
    assert [violation.code for violation in lenient.validation.warnings()] == ["SIGN-KEY_ID"]
    assert not strict.is_valid
    assert [violation.code for violation in strict.validation.errors()] == ["SIGN-KEY_ID"]


def test_environment_lookup_can_be_disabled(make_context) -> None:
    context = make_context(environ={"SONATYPE_USERNAME": "env-user"})

    result = ConfigurationResolver().resolve(context, {"credentials": {"load_from_environment": False}})

    assert result.config.credentials.username == ""
    assert "environment" not in result.snapshots


def test_layers_keep_booleans_they_do_not_mention(make_context) -> None:
    context = make_context(properties={"autoPublish": "true", "aggregation": "false"})

    result = ConfigurationResolver().resolve(context, {"project_info": {"name": "lib"}})

    assert result.config.publishing.auto_publish is True
    assert result.config.publishing.aggregation is False


def test_explicit_configuration_object_wins(make_context) -> None:
    context = make_context(properties={"autoPublish": "true"})
    explicit = PublisherConfig(publishing=PublishingConfig(auto_publish=False, publications=("maven",)))

    result = ConfigurationResolver().resolve(context, explicit)

    assert result.config.publishing.auto_publish is False
    assert result.config.publishing.publications == ("maven",)
    assert ConfigurationSource.EXPLICIT in result.config.metadata.sources


def test_detection_options_come_from_explicit_input(make_context, github_project: Path) -> None:
    result = ConfigurationResolver().resolve(make_context(), {"auto_detection": {"git_info": False}})

    assert "GitInfoDetector" not in result.detection.detectors_run
    assert result.config.project_info.url == ""


def test_malformed_explicit_input_fails_fast(make_context) -> None:
    with pytest.raises(ConfigError):
        ConfigurationResolver().resolve(make_context(), {"credentials": {"user": "x"}})


def test_injected_collaborators(make_context) -> None:
    resolver = ConfigurationResolver(
        detection=AutoDetectionManager(default_detectors()),
        defaults=SmartDefaultManager([]),
        engine=ValidationEngine([]),
    )

    result = resolver.resolve(make_context(name="lib"))

    assert result.is_valid
    assert result.config.project_info.name == "lib"
    assert result.config.project_info.license.name == ""
    assert ConfigurationSource.SMART_DEFAULTS not in result.config.metadata.sources


def test_unusable_property_is_ignored_with_warning(make_context) -> None:
    context = make_context(properties={"autoPublish": "maybe", "aggregation": "no", "POM_DESCRIPTION": "kept"})

    result = ConfigurationResolver().resolve(context, now=NOW)

    assert result.warnings == ("Property 'autoPublish' ignored: publishing.auto_publish must be a boolean",)
    assert result.config.publishing.auto_publish is False
    assert result.config.publishing.aggregation is False
    assert result.config.project_info.description == "kept"
    assert ConfigurationSource.PROPERTIES in result.config.metadata.sources
    assert result.sources_for("publishing.auto_publish") == []


def test_undecodable_git_config_does_not_abort(make_context, project_dir: Path) -> None:
    git_dir = project_dir / ".git"
    git_dir.mkdir()
    (git_dir / "config").write_bytes(
        b'[remote "origin"]\n\turl = https://github.com/org/my-lib.git\n'
        b"[user]\n\tname = Jos\xe9\n\temail = jose@example.com\n"
    )

    result = ConfigurationResolver().resolve(make_context(), now=NOW)

    assert result.warnings == ()
    assert result.config.project_info.url == "https://github.com/org/my-lib"
    assert result.config.project_info.issue_management.url == "https://github.com/org/my-lib/issues"
    (developer,) = result.config.project_info.developers
    assert developer.email == "jose@example.com"
    assert developer.name.startswith("Jos")
