# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Severity-classified configuration validation."""

from __future__ import annotations

from .engine import ConfigurationValidator, ValidationEngine, ValidationResult, ValidationViolation
from .rules import ProjectInfoValidator, RequiredFieldValidator, SigningValidator, default_validators
from .severity import ValidationSeverity

__all__ = [
    "ConfigurationValidator",
    "ProjectInfoValidator",
    "RequiredFieldValidator",
    "SigningValidator",
    "ValidationEngine",
    "ValidationResult",
    "ValidationSeverity",
    "ValidationViolation",
    "default_validators",
]
