# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Helpers backing the CLI commands."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from rich.table import Table

from ..config import ConfigError, FieldPath
from ..context import LocalProjectContext
from ..detection import AutoDetectionSummary
from ..resolver import ConfigurationResolver, FieldUpdate, ResolutionResult
from ..sources import load_explicit_config
from .shared import CLIError, CLILogger

SECRET_PATHS: frozenset[FieldPath] = frozenset({"credentials.password", "signing.password"})
MASK = "********"


def configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def build_context(
    root: Path,
    *,
    name: str | None,
    root_name: str,
    properties_file: str | None,
) -> LocalProjectContext:
    """Return the project context for ``root``.

    Raises:
        CLIError: If ``root`` is not a directory.
    """

    if not root.is_dir():
        raise CLIError(f"project root {root} is not a directory", exit_code=2)
    return LocalProjectContext.from_directory(
        root,
        name=name,
        root_name=root_name,
        properties_file=properties_file,
    )


def resolve_project(
    context: LocalProjectContext,
    *,
    config_path: Path | None,
    logger: CLILogger,
) -> ResolutionResult:
    """Resolve the configuration, converting input errors into :class:`CLIError`."""

    try:
        explicit = load_explicit_config(config_path) if config_path is not None else None
        result = ConfigurationResolver().resolve(context, explicit)
    except ConfigError as exc:
        logger.fail(str(exc))
        raise CLIError(str(exc)) from exc
    for warning in result.detection.warnings:
        logger.debug(warning)
    return result


def masked_mapping(result: ResolutionResult) -> dict[str, Any]:
    """Return the resolved configuration as JSON data with secrets masked."""

    payload = result.config.to_dict()
    for path in SECRET_PATHS:
        *parents, leaf = path.split(".")
        section = payload
        for part in parents:
            section = section[part]
        if section.get(leaf):
            section[leaf] = MASK
    return payload


def summarise_updates(updates: list[FieldUpdate] | tuple[FieldUpdate, ...]) -> list[str]:
    lines = []
    for update in updates:
        value = MASK if update.path in SECRET_PATHS and update.value else update.value
        lines.append(f"- {update.path} <- {update.source.value}: {value!r}")
    return lines


def detection_table(summary: AutoDetectionSummary) -> Table:
    """Render detected values as a Rich table."""

    table = Table(title="Auto-detected values", show_lines=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")
    table.add_column("Source", style="dim")
    table.add_column("Confidence")
    for path, detected in sorted(summary.detected_values.items()):
        table.add_row(path, str(detected.value), detected.source, detected.confidence.value)
    return table


__all__ = [
    "build_context",
    "configure_logging",
    "detection_table",
    "masked_mapping",
    "resolve_project",
    "summarise_updates",
]
