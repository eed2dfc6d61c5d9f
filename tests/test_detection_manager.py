# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the auto-detection orchestrator."""

from __future__ import annotations

from dataclasses import dataclass

from centralpub.config import AutoDetectionConfig, ConfigurationSource, empty_config, with_values
from centralpub.context import ProjectContext
from centralpub.detection import (
    AutoDetectionManager,
    Confidence,
    DetectedValue,
    DetectionResult,
    OutcomeKind,
    default_detectors,
    run_detector,
)


@dataclass
class StaticDetector:
    name: str
    path: str
    value: str
    confidence: Confidence
    category: str = "project_info"
    enabled_by_default: bool = True

    def detect(self, context: ProjectContext) -> DetectionResult | None:
        return DetectionResult(
            config=with_values(empty_config(), {self.path: self.value}, source=ConfigurationSource.AUTO_DETECTED),
            detected_values={self.path: DetectedValue(self.path, self.value, self.name, self.confidence)},
            warnings=(f"{self.name} ran",),
        )


class FailingDetector:
    name = "Boom"
    category = "project_info"
    enabled_by_default = True

    def detect(self, context: ProjectContext) -> DetectionResult | None:
        raise RuntimeError("kaput")


class SilentDetector:
    name = "Silent"
    category = "signing"
    enabled_by_default = True

    def detect(self, context: ProjectContext) -> DetectionResult | None:
        return None


def test_run_detector_captures_each_outcome(make_context) -> None:
    context = make_context()

    detected = run_detector(StaticDetector("A", "project_info.name", "lib", Confidence.HIGH), context)
    absent = run_detector(SilentDetector(), context)
    failed = run_detector(FailingDetector(), context)

    assert detected.kind is OutcomeKind.DETECTED and detected.result is not None
    assert absent.kind is OutcomeKind.ABSENT and absent.failure_message is None
    assert failed.kind is OutcomeKind.FAILED
    assert failed.failure_message == "Detector 'Boom' failed: kaput"


def test_failing_detector_does_not_stop_others(make_context) -> None:
    manager = AutoDetectionManager(
        [
            FailingDetector(),
            StaticDetector("After", "project_info.description", "desc", Confidence.MEDIUM),
        ]
    )

    summary = manager.detect(make_context())

    assert summary.config.project_info.description == "desc"
    assert summary.warnings == ("Detector 'Boom' failed: kaput", "After ran")
    assert summary.detectors_run == ("Boom", "After")
    assert summary.has_warnings


def test_confidence_table_and_config_fold_are_independent(make_context) -> None:
    confident = StaticDetector("Confident", "project_info.name", "first", Confidence.HIGH)
    hesitant = StaticDetector("Hesitant", "project_info.name", "second", Confidence.LOW)

    forward = AutoDetectionManager([confident, hesitant]).detect(make_context())
    backward = AutoDetectionManager([hesitant, confident]).detect(make_context())

    # the table keeps the best confidence regardless of order
    assert forward.detected_values["project_info.name"].value == "first"
    assert backward.detected_values["project_info.name"].value == "first"
    # the configuration follows list order: the later detector wins
    assert forward.config.project_info.name == "second"
    assert backward.config.project_info.name == "first"


def test_confidence_ties_keep_earliest_entry(make_context) -> None:
    summary = AutoDetectionManager(
        [
            StaticDetector("One", "project_info.url", "https://one", Confidence.MEDIUM),
            StaticDetector("Two", "project_info.url", "https://two", Confidence.MEDIUM),
        ]
    ).detect(make_context())

    assert summary.detected_values["project_info.url"].source == "One"


def test_category_switch_disables_detectors(make_context) -> None:
    detectors = [
        StaticDetector("Git", "project_info.url", "https://x", Confidence.HIGH, category="git_info"),
        StaticDetector("Info", "project_info.name", "lib", Confidence.HIGH),
    ]
    manager = AutoDetectionManager(detectors, options=AutoDetectionConfig(git_info=False))

    summary = manager.detect(make_context())

    assert summary.detectors_run == ("Info",)
    assert summary.config.project_info.url == ""
    assert [detector.name for detector in manager.with_options(AutoDetectionConfig()).enabled_detectors()] == [
        "Git",
        "Info",
    ]


def test_detectors_disabled_by_default_do_not_run(make_context) -> None:
    optional = StaticDetector("Optional", "project_info.name", "lib", Confidence.HIGH, enabled_by_default=False)

    summary = AutoDetectionManager([optional]).detect(make_context())

    assert summary.detectors_run == ()
    assert not summary.has_detected_values


def test_values_by_confidence(make_context) -> None:
    summary = AutoDetectionManager(
        [
            StaticDetector("A", "project_info.name", "lib", Confidence.HIGH),
            StaticDetector("B", "project_info.description", "desc", Confidence.MEDIUM),
        ]
    ).detect(make_context())

    assert list(summary.values_by_confidence(Confidence.HIGH)) == ["project_info.name"]
    assert list(summary.values_by_confidence(Confidence.MEDIUM)) == ["project_info.description"]
    assert summary.values_by_confidence(Confidence.LOW) == {}


def test_confidence_ordering() -> None:
    assert Confidence.HIGH.outranks(Confidence.MEDIUM)
    assert Confidence.MEDIUM.outranks(Confidence.LOW)
    assert not Confidence.LOW.outranks(Confidence.LOW)


def test_default_detectors_are_fresh_lists() -> None:
    first, second = default_detectors(), default_detectors()

    assert [detector.name for detector in first] == [
        "GitInfoDetector",
        "ProjectInfoDetector",
        "ModuleStructureDetector",
        "SigningKeyRingDetector",
    ]
    assert first is not second
    assert len(AutoDetectionManager(first)) == 4
