# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI tests for the resolve, validate, and detect commands."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from centralpub.cli.app import app


@pytest.fixture
def runner(monkeypatch: pytest.MonkeyPatch, home_dir: Path) -> CliRunner:
    monkeypatch.setattr(Path, "home", lambda: home_dir)
    for name in ("SONATYPE_USERNAME", "SONATYPE_PASSWORD", "SIGNING_KEY", "SIGNING_PASSWORD", "GNUPGHOME"):
        monkeypatch.delenv(name, raising=False)
    return CliRunner()


def _json_prefix(stdout: str) -> dict:
    return json.loads(stdout[: stdout.rindex("\n}") + 2])


def test_resolve_outputs_json_with_masked_secrets(runner: CliRunner, project_dir: Path) -> None:
    (project_dir / "gradle.properties").write_text(
        "SONATYPE_USERNAME=alice\nSONATYPE_PASSWORD=very-secret-token\nPOM_DESCRIPTION=Props description\n",
        encoding="utf-8",
    )

    result = runner.invoke(app, ["resolve", "--root", str(project_dir), "--no-emoji"])

    assert result.exit_code == 0, result.stdout
    payload = _json_prefix(result.stdout)
    assert payload["credentials"]["username"] == "alice"
    assert payload["credentials"]["password"] == "********"
    assert payload["project_info"]["name"] == "my-lib"
    assert payload["project_info"]["description"] == "Props description"
    assert "very-secret-token" not in result.stdout


def test_resolve_trace_lists_sources(runner: CliRunner, project_dir: Path, tmp_path: Path) -> None:
    config = tmp_path / "publishing.toml"
    config.write_text('[project_info]\nname = "explicit-lib"\n', encoding="utf-8")

    result = runner.invoke(app, ["resolve", "--root", str(project_dir), "--config", str(config), "--trace"])

    assert result.exit_code == 0, result.stdout
    assert "- project_info.name <- explicit: 'explicit-lib'" in result.stdout


def test_resolve_rejects_malformed_config(runner: CliRunner, project_dir: Path, tmp_path: Path) -> None:
    config = tmp_path / "publishing.toml"
    config.write_text("[credentials\n", encoding="utf-8")

    result = runner.invoke(app, ["resolve", "--root", str(project_dir), "--config", str(config)])

    assert result.exit_code == 1
    assert "malformed" in result.stdout.lower()


def test_validate_fails_for_incomplete_project(runner: CliRunner, project_dir: Path) -> None:
    result = runner.invoke(app, ["validate", "--root", str(project_dir), "--no-emoji"])

    assert result.exit_code == 1
    assert "Configuration validation failed" in result.stdout
    assert "REQ-CREDENTIALS_USERNAME" in result.stdout


def test_validate_passes_with_credentials(runner: CliRunner, project_dir: Path) -> None:
    (project_dir / "gradle.properties").write_text(
        "SONATYPE_USERNAME=alice\nSONATYPE_PASSWORD=very-secret-token\n", encoding="utf-8"
    )

    lenient = runner.invoke(app, ["validate", "--root", str(project_dir)])
    strict = runner.invoke(app, ["validate", "--root", str(project_dir), "--strict"])

    assert lenient.exit_code == 0, lenient.stdout
    assert "✅ Configuration validation passed" in lenient.stdout
    assert "Ready to publish to Maven Central" in lenient.stdout
    assert strict.exit_code == 1


def test_resolve_warns_about_ignored_properties(runner: CliRunner, project_dir: Path) -> None:
    (project_dir / "gradle.properties").write_text("autoPublish=maybe\n", encoding="utf-8")

    result = runner.invoke(app, ["resolve", "--root", str(project_dir), "--no-emoji"])

    assert result.exit_code == 0, result.stdout
    assert _json_prefix(result.stdout)["publishing"]["auto_publish"] is False
    assert "Property 'autoPublish' ignored" in result.stdout


def test_detect_renders_table(runner: CliRunner, project_dir: Path) -> None:
    (project_dir / "build.gradle.kts").write_text('description = "Table test"\n', encoding="utf-8")

    result = runner.invoke(app, ["detect", "--root", str(project_dir)])

    assert result.exit_code == 0, result.stdout
    assert "Auto-detected values" in result.stdout
    assert "project_info.description" in result.stdout


def test_missing_root_exits_with_usage_error(runner: CliRunner, tmp_path: Path) -> None:
    result = runner.invoke(app, ["detect", "--root", str(tmp_path / "nope")])

    assert result.exit_code == 2
