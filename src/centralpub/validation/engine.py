# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Extensible validation engine with structured, deterministic reports."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, replace
from typing import Final, Protocol, runtime_checkable

from ..config import PublisherConfig
from .severity import SEVERITY_ORDER, ValidationSeverity

LOGGER = logging.getLogger(__name__)

_EMOJI_HEADERS: Final[dict[ValidationSeverity, str]] = {
    ValidationSeverity.ERROR: "❌ Errors",
    ValidationSeverity.WARNING: "⚠️  Warnings",
    ValidationSeverity.INFO: "ℹ️  Information",
}
_PLAIN_HEADERS: Final[dict[ValidationSeverity, str]] = {
    ValidationSeverity.ERROR: "Errors",
    ValidationSeverity.WARNING: "Warnings",
    ValidationSeverity.INFO: "Information",
}


@dataclass(frozen=True, slots=True)
class ValidationViolation:
    """A single finding produced by a validator."""

    field: str
    message: str
    severity: ValidationSeverity
    code: str
    suggestion: str | None = None
    fix_command: str | None = None
    documentation_url: str | None = None

    def detail_lines(self, *, use_emoji: bool = True) -> list[str]:
        """Return the indented remediation lines printed beneath the violation."""

        markers = ("💡", "🔧", "📖") if use_emoji else ("suggestion:", "fix:", "docs:")
        values = (self.suggestion, self.fix_command, self.documentation_url)
        return [f"    {marker} {value}" for marker, value in zip(markers, values) if value]


@runtime_checkable
class ConfigurationValidator(Protocol):
    """Protocol implemented by validation rules."""

    @property
    def name(self) -> str:
        """Return the validator name."""
        ...

    @property
    def description(self) -> str:
        """Return a one-line description of what the validator checks."""
        ...

    def validate(self, config: PublisherConfig) -> list[ValidationViolation]:
        """Return every violation found in ``config``."""
        ...


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Outcome of a validation pass over a configuration."""

    config: PublisherConfig
    violations: tuple[ValidationViolation, ...] = ()

    @property
    def is_valid(self) -> bool:
        return not any(violation.severity.blocking for violation in self.violations)

    def by_severity(self, severity: ValidationSeverity) -> list[ValidationViolation]:
        return [violation for violation in self.violations if violation.severity is severity]

    def errors(self) -> list[ValidationViolation]:
        return self.by_severity(ValidationSeverity.ERROR)

    def warnings(self) -> list[ValidationViolation]:
        return self.by_severity(ValidationSeverity.WARNING)

    def infos(self) -> list[ValidationViolation]:
        return self.by_severity(ValidationSeverity.INFO)

    @property
    def error_count(self) -> int:
        return len(self.errors())

    @property
    def warning_count(self) -> int:
        return len(self.warnings())

    @property
    def info_count(self) -> int:
        return len(self.infos())

    def with_strict_mode(self) -> ValidationResult:
        """Return a copy in which every warning is promoted to an error."""

        promoted = tuple(
            replace(violation, severity=ValidationSeverity.ERROR)
            if violation.severity is ValidationSeverity.WARNING
            else violation
            for violation in self.violations
        )
        return replace(self, violations=promoted)

    def format_report(self, *, use_emoji: bool = True) -> str:
        """Render the result as deterministic console text.

        The report opens with a pass/fail header and the violation counts,
        followed by one block per severity in the order errors, warnings,
        information. Empty blocks are omitted and violations keep the order
        in which the validators produced them.

        Args:
            use_emoji: Whether to decorate headers and detail lines with emoji.

        Returns:
            str: Report text without a trailing newline.
        """

        if self.is_valid:
            header = "Configuration validation passed"
            lines = [f"✅ {header}" if use_emoji else header]
        else:
            header = "Configuration validation failed"
            lines = [f"❌ {header}" if use_emoji else header]
        lines.append(
            f"Summary: {self.error_count} errors, {self.warning_count} warnings, {self.info_count} info"
        )
        headers = _EMOJI_HEADERS if use_emoji else _PLAIN_HEADERS
        for severity in SEVERITY_ORDER:
            group = self.by_severity(severity)
            if not group:
                continue
            lines.append("")
            lines.append(headers[severity])
            for violation in group:
                lines.append(f"  {violation.code}: {violation.message}")
                lines.extend(violation.detail_lines(use_emoji=use_emoji))
        return "\n".join(lines)


class ValidationEngine:
    """Run an ordered, mutable list of validators against a configuration."""

    def __init__(self, validators: Iterable[ConfigurationValidator] | None = None) -> None:
        """Create an engine.

        Args:
            validators: Validators to run in order. ``None`` installs the
                built-in rule set; an empty iterable installs none.
        """

        if validators is None:
            from .rules import default_validators

            validators = default_validators()
        self._validators: list[ConfigurationValidator] = list(validators)

    @property
    def validators(self) -> Sequence[ConfigurationValidator]:
        return tuple(self._validators)

    def add_validator(self, validator: ConfigurationValidator) -> None:
        self._validators.append(validator)

    def remove_validator(self, validator_type: type) -> None:
        """Remove every validator whose exact type is ``validator_type``."""

        self._validators = [item for item in self._validators if type(item) is not validator_type]

    def validate(self, config: PublisherConfig) -> ValidationResult:
        """Concatenate the violations reported by every validator.

        Args:
            config: Configuration to validate.

        Returns:
            ValidationResult: Result whose ``is_valid`` is true iff no
            violation has ``ERROR`` severity.
        """

        violations: list[ValidationViolation] = []
        for validator in self._validators:
            found = validator.validate(config)
            LOGGER.debug("validator %s reported %d violation(s)", validator.name, len(found))
            violations.extend(found)
        return ValidationResult(config=config, violations=tuple(violations))


__all__ = [
    "ConfigurationValidator",
    "ValidationEngine",
    "ValidationResult",
    "ValidationViolation",
]
