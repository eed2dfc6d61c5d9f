# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Priority-ordered fallback value providers."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from ..config import ConfigurationSource, PublisherConfig, changed_paths, fill_gaps
from ..context import ProjectContext

LOGGER = logging.getLogger(__name__)

HOSTING_PRIORITY = 50
GENERIC_PRIORITY = 10


@runtime_checkable
class DefaultProvider(Protocol):
    """Protocol implemented by smart default providers.

    Higher ``priority`` values are consulted first and claim still-empty
    fields before lower-priority providers run. ``provide`` must be pure: it
    may propose full values without regard to what is already set.
    """

    @property
    def name(self) -> str:
        """Return the provider name used in diagnostics."""
        ...

    @property
    def priority(self) -> int:
        """Return the provider priority."""
        ...

    def applies_to(self, context: ProjectContext) -> bool:
        """Return whether the provider has anything to offer for ``context``."""
        ...

    def provide(self, context: ProjectContext, config: PublisherConfig) -> PublisherConfig:
        """Return a candidate configuration for ``context``."""
        ...


@dataclass(frozen=True, slots=True)
class FunctionDefaultProvider:
    """Default provider descriptor assembled from plain callables."""

    name: str
    priority: int
    provider: Callable[[ProjectContext, PublisherConfig], PublisherConfig]
    predicate: Callable[[ProjectContext], bool] = lambda _context: True

    def applies_to(self, context: ProjectContext) -> bool:
        return self.predicate(context)

    def provide(self, context: ProjectContext, config: PublisherConfig) -> PublisherConfig:
        return self.provider(context, config)


class SmartDefaultManager:
    """Apply default providers in descending priority order."""

    def __init__(self, providers: Sequence[DefaultProvider]) -> None:
        """Create a manager for ``providers``.

        Args:
            providers: Candidate providers; ties in priority keep this order.
        """

        self._providers = tuple(providers)

    @property
    def providers(self) -> tuple[DefaultProvider, ...]:
        """Return every registered provider."""

        return self._providers

    def active_providers(self, context: ProjectContext) -> list[DefaultProvider]:
        """Return applicable providers sorted by descending priority."""

        applicable = [provider for provider in self._providers if provider.applies_to(context)]
        return sorted(applicable, key=lambda provider: provider.priority, reverse=True)

    def apply(self, context: ProjectContext, config: PublisherConfig) -> PublisherConfig:
        """Fill the empty fields of ``config`` from applicable providers.

        Fields that are already non-empty are never overwritten. A provider
        that raises is treated as a defect and the exception propagates.

        Args:
            context: Project context consulted by the providers.
            config: Configuration produced by the higher-precedence layers.

        Returns:
            PublisherConfig: Configuration with defaults applied. The smart
            defaults source label is recorded when any field was filled.
        """

        accumulated = config
        for provider in self.active_providers(context):
            candidate = provider.provide(context, accumulated)
            filled = fill_gaps(accumulated, candidate)
            if changes := changed_paths(accumulated, filled):
                LOGGER.debug("default provider %s filled %s", provider.name, sorted(changes))
            accumulated = filled
        if not changed_paths(config, accumulated):
            return accumulated
        metadata = accumulated.metadata.model_copy(
            update={"sources": accumulated.metadata.sources | {ConfigurationSource.SMART_DEFAULTS}}
        )
        return accumulated.model_copy(update={"metadata": metadata})


__all__ = [
    "DefaultProvider",
    "FunctionDefaultProvider",
    "GENERIC_PRIORITY",
    "HOSTING_PRIORITY",
    "SmartDefaultManager",
]
