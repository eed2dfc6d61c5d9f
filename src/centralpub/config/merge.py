# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Merge algebra shared by every configuration layer.

Two combinators live here:

* :func:`merge` is right-biased: the incoming value wins wherever it is
  non-empty and the base survives only where the incoming side is empty.
* :func:`fill_gaps` is left-biased: the base keeps every non-empty value and
  the candidate only fills fields still empty in the base.

Both treat the provenance set (``metadata.sources``) as a union. Boolean
fields have no representable "unset" state, so :func:`merge` always takes the
incoming boolean while :func:`fill_gaps` always keeps the base boolean.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any, TypeVar

from pydantic import BaseModel

from .models import ConfigurationMetadata, PublisherConfig

ModelT = TypeVar("ModelT", bound=BaseModel)

_LeafCombiner = Callable[[Any, Any], Any]


def is_empty(value: Any) -> bool:
    """Return whether ``value`` expresses no opinion.

    Args:
        value: Leaf or section value drawn from a configuration model.

    Returns:
        bool: ``True`` for blank strings, ``False`` booleans, empty
        collections, and sections whose every field is empty.
    """

    if value is None:
        return True
    if isinstance(value, bool):
        return not value
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (tuple, list, frozenset, set)):
        return not value
    if isinstance(value, BaseModel):
        return all(is_empty(getattr(value, name)) for name in type(value).model_fields)
    return False


def has_values(config: PublisherConfig) -> bool:
    """Return whether ``config`` differs from an empty configuration outside metadata."""

    stripped = config.model_copy(update={"metadata": ConfigurationMetadata()})
    return stripped != PublisherConfig()


def _prefer_incoming(base: Any, incoming: Any) -> Any:
    if isinstance(incoming, bool):
        # no unset state for booleans: the incoming side always wins
        return incoming
    return base if is_empty(incoming) else incoming


def _prefer_base(base: Any, candidate: Any) -> Any:
    if isinstance(base, bool):
        return base
    return candidate if is_empty(base) else base


def _combine(base: ModelT, other: ModelT, leaf: _LeafCombiner) -> ModelT:
    updates: dict[str, Any] = {}
    for name in type(base).model_fields:
        left = getattr(base, name)
        right = getattr(other, name)
        if isinstance(left, frozenset):
            updates[name] = left | right
        elif isinstance(left, BaseModel):
            updates[name] = _combine(left, right, leaf)
        else:
            updates[name] = leaf(left, right)
    return base.model_copy(update=updates)


def merge(base: ModelT, incoming: ModelT) -> ModelT:
    """Return ``base`` overlaid with every non-empty field of ``incoming``.

    Lists are replaced wholesale when the incoming list is non-empty and the
    provenance set accumulates as a union. Neither argument is modified.

    Args:
        base: Lower-precedence configuration (or section).
        incoming: Higher-precedence configuration of the same type.

    Returns:
        ModelT: Newly constructed merged value.
    """

    if type(base) is not type(incoming):
        raise TypeError(f"cannot merge {type(base).__name__} with {type(incoming).__name__}")
    return _combine(base, incoming, _prefer_incoming)


def fill_gaps(base: ModelT, candidate: ModelT) -> ModelT:
    """Return ``base`` with its empty fields filled from ``candidate``.

    Args:
        base: Authoritative configuration whose non-empty fields are kept.
        candidate: Configuration proposing values for still-empty fields.

    Returns:
        ModelT: Newly constructed value.
    """

    if type(base) is not type(candidate):
        raise TypeError(f"cannot merge {type(base).__name__} with {type(candidate).__name__}")
    return _combine(base, candidate, _prefer_base)


def stamp(config: PublisherConfig, when: datetime | None = None) -> PublisherConfig:
    """Return ``config`` with ``metadata.last_modified`` set to ``when`` (UTC now by default)."""

    moment = when or datetime.now(timezone.utc)
    metadata = config.metadata.model_copy(update={"last_modified": moment.isoformat()})
    return config.model_copy(update={"metadata": metadata})


__all__ = ["fill_gaps", "has_values", "is_empty", "merge", "stamp"]
