# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Run auto-detectors and fold their findings into a single summary."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from ..config import AutoDetectionConfig, FieldPath, PublisherConfig, empty_config, merge
from ..context import ProjectContext
from .base import Confidence, DetectedValue, Detector, DetectorOutcome, OutcomeKind, run_detector

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class AutoDetectionSummary:
    """Aggregated outcome of one detection pass.

    ``config`` is folded in detector list order while ``detected_values``
    keeps the best confidence seen per field. The two tracks are independent,
    so the value in ``config`` is not necessarily the highest-confidence one.
    """

    config: PublisherConfig
    detected_values: Mapping[FieldPath, DetectedValue]
    warnings: tuple[str, ...]
    detectors_run: tuple[str, ...]

    @property
    def has_detected_values(self) -> bool:
        """Return whether any detector reported a value."""

        return bool(self.detected_values)

    @property
    def has_warnings(self) -> bool:
        """Return whether any detector emitted a warning or failed."""

        return bool(self.warnings)

    def values_by_confidence(self, confidence: Confidence) -> dict[FieldPath, DetectedValue]:
        """Return the detected values recorded at ``confidence``."""

        return {path: value for path, value in self.detected_values.items() if value.confidence is confidence}


class AutoDetectionManager:
    """Execute an ordered list of detectors with per-detector fault isolation."""

    def __init__(
        self,
        detectors: Sequence[Detector],
        *,
        options: AutoDetectionConfig | None = None,
    ) -> None:
        """Create a manager for ``detectors``.

        Args:
            detectors: Detectors in the order their configurations are folded.
            options: Optional category switches disabling groups of detectors.
        """

        self._detectors = tuple(detectors)
        self._options = options or AutoDetectionConfig()

    def with_options(self, options: AutoDetectionConfig) -> AutoDetectionManager:
        """Return a manager running the same detectors under ``options``."""

        return AutoDetectionManager(self._detectors, options=options)

    def enabled_detectors(self) -> list[Detector]:
        """Return detectors that are enabled by default and by category switch."""

        return [
            detector
            for detector in self._detectors
            if detector.enabled_by_default and getattr(self._options, detector.category, True)
        ]

    def detect(self, context: ProjectContext) -> AutoDetectionSummary:
        """Run every enabled detector against ``context``.

        Args:
            context: Project context inspected by the detectors.

        Returns:
            AutoDetectionSummary: Folded configuration, confidence table,
            warnings, and the names of the detectors that ran.
        """

        enabled = self.enabled_detectors()
        outcomes = [run_detector(detector, context) for detector in enabled]
        return AutoDetectionSummary(
            config=_fold_configs(outcomes),
            detected_values=_best_confidence(outcomes),
            warnings=tuple(_collect_warnings(outcomes)),
            detectors_run=tuple(detector.name for detector in enabled),
        )


def _best_confidence(outcomes: Sequence[DetectorOutcome]) -> dict[FieldPath, DetectedValue]:
    table: dict[FieldPath, DetectedValue] = {}
    for outcome in outcomes:
        if outcome.result is None:
            continue
        for path, detected in outcome.result.detected_values.items():
            existing = table.get(path)
            if existing is None or detected.confidence.outranks(existing.confidence):
                table[path] = detected
    return table


def _fold_configs(outcomes: Sequence[DetectorOutcome]) -> PublisherConfig:
    config = empty_config()
    for outcome in outcomes:
        if outcome.result is not None:
            config = merge(config, outcome.result.config)
    return config


def _collect_warnings(outcomes: Sequence[DetectorOutcome]) -> list[str]:
    warnings: list[str] = []
    for outcome in outcomes:
        if outcome.kind is OutcomeKind.FAILED:
            LOGGER.debug("detector %s failed", outcome.detector, exc_info=outcome.error)
            warnings.append(outcome.failure_message or "")
        elif outcome.result is not None:
            warnings.extend(outcome.result.warnings)
    return warnings


__all__ = ["AutoDetectionManager", "AutoDetectionSummary"]
