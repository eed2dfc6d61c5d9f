# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core types shared by auto-detectors."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Final, Protocol, runtime_checkable

from ..config import FieldPath, PublisherConfig
from ..context import ProjectContext


class Confidence(str, Enum):
    """Trust attached to a detected value, best first."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        """Return the ordinal rank where a lower number means more trust."""

        return _CONFIDENCE_RANK[self]

    def outranks(self, other: Confidence) -> bool:
        """Return whether this confidence is strictly better than ``other``."""

        return self.rank < other.rank


_CONFIDENCE_RANK: Final[dict[Confidence, int]] = {
    Confidence.HIGH: 0,
    Confidence.MEDIUM: 1,
    Confidence.LOW: 2,
}


@dataclass(frozen=True, slots=True)
class DetectedValue:
    """A single value discovered by a detector."""

    path: FieldPath
    value: str
    source: str
    confidence: Confidence


@dataclass(frozen=True, slots=True)
class DetectionResult:
    """Partial configuration plus diagnostics produced by one detector."""

    config: PublisherConfig
    detected_values: Mapping[FieldPath, DetectedValue] = field(default_factory=dict)
    warnings: tuple[str, ...] = ()


@runtime_checkable
class Detector(Protocol):
    """Protocol implemented by auto-detectors.

    ``category`` names the :class:`~centralpub.config.AutoDetectionConfig`
    switch that can disable the detector.
    """

    @property
    def name(self) -> str:
        """Return the detector name used in diagnostics."""
        ...

    @property
    def category(self) -> str:
        """Return the auto-detection category this detector belongs to."""
        ...

    @property
    def enabled_by_default(self) -> bool:
        """Return whether the detector runs unless explicitly disabled."""
        ...

    def detect(self, context: ProjectContext) -> DetectionResult | None:
        """Inspect ``context`` returning a result, or ``None`` without signal."""
        ...


class OutcomeKind(str, Enum):
    """Discriminator for :class:`DetectorOutcome`."""

    DETECTED = "detected"
    ABSENT = "absent"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class DetectorOutcome:
    """Explicit result of running a detector: a value, no signal, or a failure."""

    detector: str
    kind: OutcomeKind
    result: DetectionResult | None = None
    error: Exception | None = None

    @property
    def failure_message(self) -> str | None:
        """Return the warning text describing a failed run."""

        if self.kind is not OutcomeKind.FAILED:
            return None
        return f"Detector '{self.detector}' failed: {self.error}"


def run_detector(detector: Detector, context: ProjectContext) -> DetectorOutcome:
    """Run ``detector`` and capture its outcome without letting failures escape.

    Args:
        detector: Detector to execute.
        context: Project context handed to the detector.

    Returns:
        DetectorOutcome: Detected result, absence, or the captured failure.
    """

    try:
        result = detector.detect(context)
    except Exception as exc:  # noqa: BLE001
        return DetectorOutcome(detector=detector.name, kind=OutcomeKind.FAILED, error=exc)
    if result is None:
        return DetectorOutcome(detector=detector.name, kind=OutcomeKind.ABSENT)
    return DetectorOutcome(detector=detector.name, kind=OutcomeKind.DETECTED, result=result)


__all__ = [
    "Confidence",
    "DetectedValue",
    "DetectionResult",
    "Detector",
    "DetectorOutcome",
    "OutcomeKind",
    "run_detector",
]
