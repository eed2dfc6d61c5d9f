# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Dotted field-path helpers for reading and replacing configuration values."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import Any, Final

from pydantic import BaseModel, ValidationError

from .models import ConfigurationSource, PublisherConfig
from .types import ConfigError, FieldPath

_TRUE_VALUES: Final[frozenset[str]] = frozenset({"true", "yes", "on", "1"})
_FALSE_VALUES: Final[frozenset[str]] = frozenset({"false", "no", "off", "0", ""})


def _split(path: FieldPath) -> list[str]:
    parts = [part for part in path.split(".") if part]
    if not parts:
        raise ConfigError("field path must not be empty")
    return parts


def get_value(config: BaseModel, path: FieldPath) -> Any:
    """Return the value stored at ``path``.

    Args:
        config: Configuration (or section) to read from.
        path: Dotted path such as ``project_info.scm.url``.

    Returns:
        Any: Leaf or section value located at ``path``.

    Raises:
        ConfigError: If ``path`` does not name a field.
    """

    current: Any = config
    for part in _split(path):
        if not isinstance(current, BaseModel) or part not in type(current).model_fields:
            raise ConfigError(f"unknown configuration field '{path}'")
        current = getattr(current, part)
    return current


def coerce_bool(value: Any, *, context: str) -> bool:
    """Interpret textual booleans such as ``"true"`` or ``"no"``."""

    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
    raise ConfigError(f"{context} must be a boolean")


def _coerce_leaf(current: Any, value: Any, path: FieldPath) -> Any:
    if isinstance(current, BaseModel):
        if isinstance(value, type(current)):
            return value
        raise ConfigError(f"'{path}' names a section, not a field")
    if isinstance(current, bool):
        return coerce_bool(value, context=path)
    if isinstance(current, str):
        if not isinstance(value, str):
            raise ConfigError(f"{path} must be a string")
        return value.strip()
    if isinstance(current, tuple):
        if isinstance(value, str):
            return tuple(item.strip() for item in value.split(",") if item.strip())
        if isinstance(value, Iterable):
            return tuple(value)
        raise ConfigError(f"{path} must be a list")
    return value


def _replace(model: BaseModel, parts: list[str], value: Any, path: FieldPath) -> BaseModel:
    head, *rest = parts
    if head not in type(model).model_fields:
        raise ConfigError(f"unknown configuration field '{path}'")
    current = getattr(model, head)
    if rest:
        if not isinstance(current, BaseModel):
            raise ConfigError(f"unknown configuration field '{path}'")
        replacement: Any = _replace(current, rest, value, path)
    else:
        replacement = _coerce_leaf(current, value, path)
    return model.model_copy(update={head: replacement})


def with_values(
    config: PublisherConfig,
    values: Mapping[FieldPath, Any],
    *,
    source: ConfigurationSource | None = None,
) -> PublisherConfig:
    """Return a copy of ``config`` with ``values`` written at their paths.

    Args:
        config: Configuration to start from. It is not modified.
        values: Mapping of dotted paths to replacement values. Textual values
            are coerced for boolean and list fields.
        source: Optional provenance label recorded in ``metadata.sources``.

    Returns:
        PublisherConfig: Newly constructed configuration.

    Raises:
        ConfigError: If a path is unknown or a value has the wrong shape.
    """

    updated: BaseModel = config
    for path, value in values.items():
        updated = _replace(updated, _split(path), value, path)
    try:
        result = PublisherConfig.model_validate(updated.model_dump())
    except ValidationError as exc:
        raise ConfigError(f"invalid configuration values: {exc}") from exc
    if source is not None:
        metadata = result.metadata.model_copy(update={"sources": result.metadata.sources | {source}})
        result = result.model_copy(update={"metadata": metadata})
    return result


def iter_leaves(model: BaseModel, prefix: str = "") -> Iterator[tuple[FieldPath, Any]]:
    """Yield ``(path, value)`` pairs for every leaf field of ``model``."""

    for name in type(model).model_fields:
        value = getattr(model, name)
        path = f"{prefix}{name}"
        if isinstance(value, BaseModel):
            yield from iter_leaves(value, f"{path}.")
        else:
            yield path, value


def changed_paths(before: PublisherConfig, after: PublisherConfig) -> dict[FieldPath, Any]:
    """Return the leaves of ``after`` that differ from ``before`` (metadata excluded)."""

    previous = dict(iter_leaves(before))
    return {
        path: value
        for path, value in iter_leaves(after)
        if not path.startswith("metadata.") and previous.get(path) != value
    }


__all__ = [
    "changed_paths",
    "coerce_bool",
    "get_value",
    "iter_leaves",
    "with_values",
]
