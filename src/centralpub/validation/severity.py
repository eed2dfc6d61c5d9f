# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Severity levels attached to validation violations."""

from __future__ import annotations

from enum import Enum


class ValidationSeverity(str, Enum):
    """Severity of a validation violation. Only ``ERROR`` blocks publishing."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"

    @property
    def blocking(self) -> bool:
        return self is ValidationSeverity.ERROR


SEVERITY_ORDER: tuple[ValidationSeverity, ...] = (
    ValidationSeverity.ERROR,
    ValidationSeverity.WARNING,
    ValidationSeverity.INFO,
)


__all__ = ["SEVERITY_ORDER", "ValidationSeverity"]
