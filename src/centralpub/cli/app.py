# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point wiring commands."""

from __future__ import annotations

import typer

from .commands import register

app = typer.Typer(
    name="centralpub",
    help="Resolve and validate Maven Central publishing configuration.",
    no_args_is_help=True,
    add_completion=False,
)
register(app)

__all__ = ["app"]
