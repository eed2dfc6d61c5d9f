# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration resolution, validation, and detection commands."""

from __future__ import annotations

import json
from pathlib import Path

import typer

from ..context import PROPERTIES_FILE
from ._services import (
    build_context,
    configure_logging,
    detection_table,
    masked_mapping,
    resolve_project,
    summarise_updates,
)
from .shared import CLIError, build_cli_logger, register_command

ROOT_OPTION = typer.Option(Path("."), "--root", "-r", help="Project root.")
NAME_OPTION = typer.Option(None, "--name", help="Declared project name (defaults to the directory name).")
ROOT_NAME_OPTION = typer.Option("", "--root-name", help="Root project name for multi-module builds.")
CONFIG_OPTION = typer.Option(None, "--config", "-c", help="Explicit settings in TOML.")
PROPERTIES_OPTION = typer.Option(
    PROPERTIES_FILE,
    "--properties",
    help="Build properties file relative to the project root.",
)
EMOJI_OPTION = typer.Option(True, "--emoji/--no-emoji", help="Decorate output with emoji.")
DEBUG_OPTION = typer.Option(False, "--debug", help="Emit debug logging.")


def register(app: typer.Typer) -> None:
    """Register the configuration commands on ``app``."""

    @register_command(app, name="resolve", help_text="Print the resolved configuration as JSON.")
    def resolve_command(
        root: Path = ROOT_OPTION,
        name: str | None = NAME_OPTION,
        root_name: str = ROOT_NAME_OPTION,
        config: Path | None = CONFIG_OPTION,
        properties: str = PROPERTIES_OPTION,
        trace: bool = typer.Option(False, "--trace", help="Show which source set each field."),
        emoji: bool = EMOJI_OPTION,
        debug: bool = DEBUG_OPTION,
    ) -> None:
        """Print the resolved configuration as JSON."""

        configure_logging(debug)
        logger = build_cli_logger(emoji=emoji, debug=debug)
        try:
            context = build_context(root, name=name, root_name=root_name, properties_file=properties)
            result = resolve_project(context, config_path=config, logger=logger)
        except CLIError as exc:
            raise typer.Exit(code=exc.exit_code) from exc
        logger.echo(json.dumps(masked_mapping(result), indent=2, sort_keys=True))
        if trace and result.updates:
            logger.echo("\n# Sources")
            for line in summarise_updates(result.updates):
                logger.echo(line)
        for warning in (*result.detection.warnings, *result.warnings):
            logger.warn(warning)

    @register_command(app, name="validate", help_text="Validate the resolved configuration.")
    def validate_command(
        root: Path = ROOT_OPTION,
        name: str | None = NAME_OPTION,
        root_name: str = ROOT_NAME_OPTION,
        config: Path | None = CONFIG_OPTION,
        properties: str = PROPERTIES_OPTION,
        strict: bool = typer.Option(False, "--strict", help="Treat warnings as errors."),
        emoji: bool = EMOJI_OPTION,
        debug: bool = DEBUG_OPTION,
    ) -> None:
        """Validate the resolved configuration; exit with status 1 when invalid."""

        configure_logging(debug)
        logger = build_cli_logger(emoji=emoji, debug=debug)
        try:
            context = build_context(root, name=name, root_name=root_name, properties_file=properties)
            result = resolve_project(context, config_path=config, logger=logger)
        except CLIError as exc:
            raise typer.Exit(code=exc.exit_code) from exc
        for warning in result.warnings:
            logger.warn(warning)
        validation = result.validation
        if validation is None:
            logger.warn("Validation is disabled for this project")
            return
        if strict:
            validation = validation.with_strict_mode()
        logger.echo(validation.format_report(use_emoji=emoji))
        if not validation.is_valid:
            raise typer.Exit(code=1)
        logger.ok("Ready to publish to Maven Central")

    @register_command(app, name="detect", help_text="Show values discovered by auto-detection.")
    def detect_command(
        root: Path = ROOT_OPTION,
        name: str | None = NAME_OPTION,
        root_name: str = ROOT_NAME_OPTION,
        properties: str = PROPERTIES_OPTION,
        emoji: bool = EMOJI_OPTION,
        debug: bool = DEBUG_OPTION,
    ) -> None:
        """Show values discovered by auto-detection."""

        configure_logging(debug)
        logger = build_cli_logger(emoji=emoji, debug=debug)
        try:
            context = build_context(root, name=name, root_name=root_name, properties_file=properties)
            result = resolve_project(context, config_path=None, logger=logger)
        except CLIError as exc:
            raise typer.Exit(code=exc.exit_code) from exc
        summary = result.detection
        logger.section("Auto-detection")
        logger.info(f"Ran {len(summary.detectors_run)} detector(s): {', '.join(summary.detectors_run)}")
        if not summary.has_detected_values:
            logger.warn("No values were auto-detected")
        else:
            logger.console.print(detection_table(summary))
        for warning in summary.warnings:
            logger.warn(warning)


__all__ = ["register"]
