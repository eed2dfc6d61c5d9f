# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Detect an existing GnuPG secret key ring."""

from __future__ import annotations

from pathlib import Path
from typing import Final

from ..config import ConfigurationSource, empty_config, with_values
from ..context import ProjectContext
from .base import Confidence, DetectedValue, DetectionResult

KEY_RING_NAME: Final[str] = "secring.gpg"
GNUPG_HOME_ENV: Final[str] = "GNUPGHOME"


def key_ring_candidates(context: ProjectContext) -> list[tuple[Path, str]]:
    """Return ``(path, source label)`` pairs in lookup order."""

    candidates: list[tuple[Path, str]] = []
    if gnupg_home := context.env(GNUPG_HOME_ENV):
        candidates.append((Path(gnupg_home) / KEY_RING_NAME, GNUPG_HOME_ENV))
    candidates.append((context.home_dir / ".gnupg" / KEY_RING_NAME, "~/.gnupg"))
    return candidates


class SigningKeyRingDetector:
    """Point the signing configuration at a key ring that already exists."""

    name = "SigningKeyRingDetector"
    category = "signing"
    enabled_by_default = True

    def detect(self, context: ProjectContext) -> DetectionResult | None:
        path = "signing.secret_key_ring_file"
        for candidate, source in key_ring_candidates(context):
            if candidate.is_file():
                value = str(candidate)
                return DetectionResult(
                    config=with_values(empty_config(), {path: value}, source=ConfigurationSource.AUTO_DETECTED),
                    detected_values={path: DetectedValue(path, value, source, Confidence.MEDIUM)},
                )
        return None


__all__ = ["SigningKeyRingDetector", "key_ring_candidates"]
