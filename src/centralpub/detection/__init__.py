# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Pluggable auto-detection of configuration values."""

from __future__ import annotations

from .base import (
    Confidence,
    DetectedValue,
    DetectionResult,
    Detector,
    DetectorOutcome,
    OutcomeKind,
    run_detector,
)
from .git import GitInfoDetector
from .manager import AutoDetectionManager, AutoDetectionSummary
from .modules import ModuleStructureDetector
from .project import ProjectInfoDetector
from .signing import SigningKeyRingDetector


def default_detectors() -> list[Detector]:
    """Return a fresh list of the built-in detectors in fold order."""

    return [
        GitInfoDetector(),
        ProjectInfoDetector(),
        ModuleStructureDetector(),
        SigningKeyRingDetector(),
    ]


__all__ = [
    "AutoDetectionManager",
    "AutoDetectionSummary",
    "Confidence",
    "DetectedValue",
    "DetectionResult",
    "Detector",
    "DetectorOutcome",
    "GitInfoDetector",
    "ModuleStructureDetector",
    "OutcomeKind",
    "ProjectInfoDetector",
    "SigningKeyRingDetector",
    "default_detectors",
    "run_detector",
]
