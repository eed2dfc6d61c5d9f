# SPDX-License-Identifier: MIT
"""Shared typing utilities and errors for configuration payloads."""

from __future__ import annotations

from typing import TypeAlias

FieldPath: TypeAlias = str


class ConfigError(Exception):
    """Raised when configuration input is invalid."""


__all__ = ["ConfigError", "FieldPath"]
