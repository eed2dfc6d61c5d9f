# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Resolve the effective publishing configuration from every source."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict

from .config import (
    ConfigurationSource,
    FieldPath,
    PublisherConfig,
    changed_paths,
    empty_config,
    merge,
    stamp,
)
from .context import ProjectContext
from .defaults import SmartDefaultManager, default_providers
from .detection import AutoDetectionManager, AutoDetectionSummary, default_detectors
from .sources import apply_lookup_values, apply_values, environment_values, explicit_values, property_values
from .validation import ValidationEngine, ValidationResult

LOGGER = logging.getLogger(__name__)

ExplicitInput = PublisherConfig | Mapping[str, Any]


class FieldUpdate(BaseModel):
    """Description of a single configuration field set by a source layer."""

    model_config = ConfigDict(validate_assignment=True)

    path: FieldPath
    source: ConfigurationSource
    value: Any


@dataclass(frozen=True, slots=True)
class ResolutionResult:
    """Container bundling a resolved configuration with provenance metadata."""

    config: PublisherConfig
    detection: AutoDetectionSummary
    validation: ValidationResult | None = None
    updates: tuple[FieldUpdate, ...] = ()
    snapshots: Mapping[str, dict[str, Any]] = field(default_factory=dict)
    warnings: tuple[str, ...] = ()

    @property
    def is_valid(self) -> bool:
        return self.validation is None or self.validation.is_valid

    @property
    def should_abort(self) -> bool:
        """Return whether the consumer should stop before publishing."""

        return not self.is_valid and not self.config.validation.skip_on_error

    def sources_for(self, path: FieldPath) -> list[ConfigurationSource]:
        """Return every source that set ``path``, lowest precedence first."""

        return [update.source for update in self.updates if update.path == path]


class ConfigurationResolver:
    """Apply layered configuration sources with predictable precedence.

    Precedence from lowest to highest: auto-detected values, build
    properties, environment variables, explicit input. Smart defaults fill
    only the fields that are still empty afterwards.
    """

    def __init__(
        self,
        *,
        detection: AutoDetectionManager | None = None,
        defaults: SmartDefaultManager | None = None,
        engine: ValidationEngine | None = None,
    ) -> None:
        """Initialise a resolver from its collaborators.

        Args:
            detection: Detector orchestrator; the built-in detectors when omitted.
            defaults: Default provider manager; the built-in providers when omitted.
            engine: Validation engine; the built-in rules when omitted.
        """

        self._detection = detection if detection is not None else AutoDetectionManager(default_detectors())
        self._defaults = defaults if defaults is not None else SmartDefaultManager(default_providers())
        self._engine = engine if engine is not None else ValidationEngine()

    def resolve(
        self,
        context: ProjectContext,
        explicit: ExplicitInput | None = None,
        *,
        now: datetime | None = None,
    ) -> ResolutionResult:
        """Resolve the configuration for ``context``.

        Resolution never aborts on bad data from detection or lookups. Lookup
        entries that cannot be used are dropped and listed in
        ``ResolutionResult.warnings``; the returned validation result tells
        the caller whether to proceed.

        Args:
            context: Project context to resolve against.
            explicit: Highest-precedence input, either a configuration or a
                mapping of settings keyed by section or dotted field path.
            now: Timestamp recorded as ``metadata.last_modified``.

        Returns:
            ResolutionResult: Final configuration, validation outcome,
            detection summary, and per-layer provenance.

        Raises:
            ConfigError: If ``explicit`` names unknown fields or holds values
                of the wrong shape.
        """

        explicit_layer = self._explicit_layer(explicit)
        preview = explicit_layer if explicit_layer is not None else empty_config()
        options = preview.auto_detection

        updates: list[FieldUpdate] = []
        warnings: list[str] = []
        snapshots: dict[str, dict[str, Any]] = {}

        def record(source: ConfigurationSource, before: PublisherConfig, after: PublisherConfig) -> None:
            for path, value in changed_paths(before, after).items():
                updates.append(FieldUpdate(path=path, source=source, value=value))
            snapshots[source.value] = after.to_dict()

        detection = self._detection.with_options(options).detect(context)
        accumulated = merge(empty_config(), detection.config)
        record(ConfigurationSource.AUTO_DETECTED, empty_config(), accumulated)

        # Each lookup layer is written over the accumulated value before the
        # merge, so booleans it does not mention keep their current value
        # instead of being reset by merge's incoming-boolean rule.
        layers: list[tuple[ConfigurationSource, Mapping[FieldPath, Any]]] = [
            (ConfigurationSource.PROPERTIES, property_values(context, options=options)),
        ]
        if preview.credentials.load_from_environment:
            layers.append((ConfigurationSource.ENVIRONMENT, environment_values(context, options=options)))
        for source, values in layers:
            before = accumulated
            layer, ignored = apply_lookup_values(accumulated, values, source)
            warnings.extend(ignored)
            accumulated = merge(accumulated, layer)
            record(source, before, accumulated)

        if explicit is not None:
            before = accumulated
            accumulated = self._merge_explicit(accumulated, explicit)
            record(ConfigurationSource.EXPLICIT, before, accumulated)

        before = accumulated
        accumulated = self._defaults.apply(context, accumulated)
        record(ConfigurationSource.SMART_DEFAULTS, before, accumulated)

        config = stamp(accumulated, now)
        validation = self._validate(config)
        LOGGER.debug(
            "resolved configuration from %s with %d field update(s)",
            sorted(source.value for source in config.metadata.sources),
            len(updates),
        )
        return ResolutionResult(
            config=config,
            detection=detection,
            validation=validation,
            updates=tuple(updates),
            snapshots=snapshots,
            warnings=tuple(warnings),
        )

    def _validate(self, config: PublisherConfig) -> ValidationResult | None:
        if not config.validation.enabled:
            LOGGER.debug("validation disabled by configuration")
            return None
        result = self._engine.validate(config)
        if config.validation.strict_mode:
            result = result.with_strict_mode()
        return result

    @staticmethod
    def _explicit_layer(explicit: ExplicitInput | None) -> PublisherConfig | None:
        if explicit is None:
            return None
        if isinstance(explicit, PublisherConfig):
            return explicit
        return apply_values(empty_config(), explicit_values(explicit), ConfigurationSource.EXPLICIT)

    @staticmethod
    def _merge_explicit(accumulated: PublisherConfig, explicit: ExplicitInput) -> PublisherConfig:
        if isinstance(explicit, PublisherConfig):
            # a full configuration is authoritative for every boolean it carries
            metadata = explicit.metadata.model_copy(
                update={"sources": explicit.metadata.sources | {ConfigurationSource.EXPLICIT}}
            )
            return merge(accumulated, explicit.model_copy(update={"metadata": metadata}))
        values = explicit_values(explicit)
        return merge(accumulated, apply_values(accumulated, values, ConfigurationSource.EXPLICIT))


__all__ = ["ConfigurationResolver", "ExplicitInput", "FieldUpdate", "ResolutionResult"]
