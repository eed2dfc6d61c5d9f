# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Built-in validation rules for Maven Central publishing."""

from __future__ import annotations

from typing import Final

from ..config import PublisherConfig, is_empty
from .engine import ConfigurationValidator, ValidationViolation
from .severity import ValidationSeverity

DOCUMENTATION_ROOT: Final[str] = "https://github.com/tddworks/central-portal-publisher"
MIN_USERNAME_LENGTH: Final[int] = 3
MIN_PASSWORD_LENGTH: Final[int] = 8
WEAK_PASSWORDS: Final[frozenset[str]] = frozenset({"password"})
URL_SCHEMES: Final[tuple[str, ...]] = ("http://", "https://")


def _docs(anchor: str) -> str:
    return f"{DOCUMENTATION_ROOT}#{anchor}"


class RequiredFieldValidator:
    """Check credentials, the project name, and the project URL."""

    name = "RequiredFieldValidator"
    description = "Validates that required fields for Maven Central publishing are present"

    def validate(self, config: PublisherConfig) -> list[ValidationViolation]:
        violations: list[ValidationViolation] = []
        violations.extend(self._check_credentials(config))

        project = config.project_info
        if not project.name.strip():
            violations.append(
                ValidationViolation(
                    field="project_info.name",
                    message="Project name is required",
                    severity=ValidationSeverity.ERROR,
                    code="REQ-PROJECT_NAME",
                    suggestion="Set project_info.name or POM_NAME in gradle.properties",
                    fix_command="echo 'POM_NAME=my-library' >> gradle.properties",
                    documentation_url=_docs("project-information"),
                )
            )
        url = project.url.strip()
        if url and not url.startswith(URL_SCHEMES):
            violations.append(
                ValidationViolation(
                    field="project_info.url",
                    message=f"Project URL must start with http:// or https:// (got '{url}')",
                    severity=ValidationSeverity.ERROR,
                    code="REQ-PROJECT_URL",
                    suggestion="Use the browser URL of the repository, e.g. https://github.com/org/repo",
                    documentation_url=_docs("project-information"),
                )
            )
        return violations

    @staticmethod
    def _check_credentials(config: PublisherConfig) -> list[ValidationViolation]:
        violations: list[ValidationViolation] = []
        username = config.credentials.username.strip()
        password = config.credentials.password
        if not username:
            violations.append(
                ValidationViolation(
                    field="credentials.username",
                    message="Username is required for publishing to Maven Central",
                    severity=ValidationSeverity.ERROR,
                    code="REQ-CREDENTIALS_USERNAME",
                    suggestion="Generate a user token on central.sonatype.com and export it",
                    fix_command="export SONATYPE_USERNAME=<token-username>",
                    documentation_url=_docs("authentication"),
                )
            )
        elif len(username) < MIN_USERNAME_LENGTH:
            violations.append(
                ValidationViolation(
                    field="credentials.username",
                    message="Username is very short and may be invalid",
                    severity=ValidationSeverity.WARNING,
                    code="REQ-USERNAME_SHORT",
                    suggestion="Use the token username issued by the Central Portal",
                    documentation_url=_docs("authentication"),
                )
            )
        if not password.strip():
            violations.append(
                ValidationViolation(
                    field="credentials.password",
                    message="Password is required for publishing to Maven Central",
                    severity=ValidationSeverity.ERROR,
                    code="REQ-CREDENTIALS_PASSWORD",
                    suggestion="Export the token password generated alongside the username",
                    fix_command="export SONATYPE_PASSWORD=<token-password>",
                    documentation_url=_docs("authentication"),
                )
            )
        elif password in WEAK_PASSWORDS or len(password) < MIN_PASSWORD_LENGTH:
            violations.append(
                ValidationViolation(
                    field="credentials.password",
                    message="Password appears to be weak",
                    severity=ValidationSeverity.WARNING,
                    code="REQ-WEAK_PASSWORD",
                    suggestion="Use a generated user token instead of an account password",
                    documentation_url=_docs("authentication"),
                )
            )
        return violations


class ProjectInfoValidator:
    """Warn about POM metadata that Maven Central expects."""

    name = "ProjectInfoValidator"
    description = "Checks that POM metadata required by Maven Central is present"

    def validate(self, config: PublisherConfig) -> list[ValidationViolation]:
        project = config.project_info
        checks = (
            (
                is_empty(project.description),
                "project_info.description",
                "POM-DESCRIPTION",
                "Project description is missing",
                "Add description = \"...\" to the build script or POM_DESCRIPTION to gradle.properties",
            ),
            (
                not (project.license.name and project.license.url),
                "project_info.license",
                "POM-LICENSE",
                "License information is missing",
                "Set POM_LICENCE_NAME and POM_LICENCE_URL in gradle.properties",
            ),
            (
                not project.scm.url,
                "project_info.scm",
                "POM-SCM",
                "Source control information is missing",
                "Push the project to a Git remote or set POM_SCM_URL in gradle.properties",
            ),
            (
                not project.developers,
                "project_info.developers",
                "POM-DEVELOPERS",
                "No developers are listed",
                "Set POM_DEVELOPER_ID and POM_DEVELOPER_NAME in gradle.properties",
            ),
        )
        return [
            ValidationViolation(
                field=field,
                message=message,
                severity=ValidationSeverity.WARNING,
                code=code,
                suggestion=suggestion,
                documentation_url=_docs("project-information"),
            )
            for missing, field, code, message, suggestion in checks
            if missing
        ]


class SigningValidator:
    """Check that artifacts can be signed."""

    name = "SigningValidator"
    description = "Checks that a signing key is configured"

    def validate(self, config: PublisherConfig) -> list[ValidationViolation]:
        signing = config.signing
        violations: list[ValidationViolation] = []
        if not signing.key_id.strip():
            violations.append(
                ValidationViolation(
                    field="signing.key_id",
                    message="No signing key is configured; Maven Central rejects unsigned artifacts",
                    severity=ValidationSeverity.WARNING,
                    code="SIGN-KEY_ID",
                    suggestion="Export the ID of a published GPG key",
                    fix_command="export SIGNING_KEY=<key-id>",
                    documentation_url=_docs("signing"),
                )
            )
        if not signing.secret_key_ring_file.strip():
            violations.append(
                ValidationViolation(
                    field="signing.secret_key_ring_file",
                    message="No secret key ring file is configured",
                    severity=ValidationSeverity.INFO,
                    code="SIGN-KEY_RING",
                    suggestion="Set signing.secretKeyRingFile or enable the GPG agent",
                    documentation_url=_docs("signing"),
                )
            )
        return violations


def default_validators() -> list[ConfigurationValidator]:
    """Return a fresh list of the built-in validators in registration order."""

    return [RequiredFieldValidator(), ProjectInfoValidator(), SigningValidator()]


__all__ = [
    "ProjectInfoValidator",
    "RequiredFieldValidator",
    "SigningValidator",
    "default_validators",
]
