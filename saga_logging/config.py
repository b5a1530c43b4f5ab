# SPDX-License-Identifier: MIT
# Copyright (c) 2025 saga-logging contributors

"""Immutable logger configuration and its derivation rules.

A :class:`LoggerConfig` is never mutated once built. Child configurations
are produced with :func:`derive`, which replaces every given field except
``metadata``; metadata is merged one level deep, the child winning on
key collisions.

Example:
    >>> parent = LoggerConfig(metadata={"service": "main"})
    >>> child = derive(parent, metadata={"component": "auth"}, level="debug")
    >>> dict(child.metadata)
    {'service': 'main', 'component': 'auth'}
    >>> dict(parent.metadata)
    {'service': 'main'}
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, fields, replace
from types import MappingProxyType
from typing import Any

from .entry import merge_metadata
from .exceptions import ConfigurationError
from .failures import TransportError
from .formatters import (
    DEFAULT_TIMESTAMP_PRESET,
    MessageFormatter,
    TimestampFormatter,
    TimestampSpec,
    create_timestamp_formatter,
    validate_pattern,
)
from .levels import LogLevel, parse_level
from .validation import ValidationPolicy

ErrorCallback = Callable[[TransportError], None]


@dataclass(frozen=True)
class Formatters:
    """Optional overrides for the timestamp and message formatters."""

    timestamp: TimestampFormatter | None = None
    message: MessageFormatter | None = None


@dataclass(frozen=True)
class LoggerConfig:
    """Immutable configuration bundle for a Logger.

    Attributes:
        level: Minimum level that is dispatched
        pattern: Optional ``str.format`` template for the message
        formatters: Timestamp/message formatter overrides
        metadata: Metadata added to every entry (read-only mapping)
        timestamp: Preset name, TimestampConfig, or custom callable
        transports: Transports to attach; None selects a console transport
        failure_threshold: Consecutive failures before a transport is evicted;
            None disables eviction
        on_error: Callback receiving a TransportError for every failure
        validation: Policy applied when attaching transports
    """

    level: LogLevel = LogLevel.INFO
    pattern: str | None = None
    formatters: Formatters = field(default_factory=Formatters)
    metadata: Mapping[str, Any] = field(default_factory=dict)
    timestamp: TimestampSpec = DEFAULT_TIMESTAMP_PRESET
    transports: tuple[Any, ...] | None = None
    failure_threshold: int | None = None
    on_error: ErrorCallback | None = None
    validation: ValidationPolicy = field(default_factory=ValidationPolicy)

    def __post_init__(self) -> None:
        # Normalise loosely-typed input; frozen, so bypass __setattr__.
        object.__setattr__(self, "level", parse_level(self.level))
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata or {})))

        if self.transports is not None:
            object.__setattr__(self, "transports", tuple(self.transports))

        if self.formatters is None:
            object.__setattr__(self, "formatters", Formatters())
        elif isinstance(self.formatters, Mapping):
            object.__setattr__(self, "formatters", Formatters(**self.formatters))

        if self.validation is None:
            object.__setattr__(self, "validation", ValidationPolicy())
        elif isinstance(self.validation, Mapping):
            object.__setattr__(self, "validation", ValidationPolicy(**self.validation))

        if self.pattern is not None and not isinstance(self.pattern, str):
            raise ConfigurationError(f"pattern must be a string, got {type(self.pattern).__name__}")
        if self.pattern is not None:
            validate_pattern(self.pattern)

        threshold = self.failure_threshold
        if threshold is not None and (
            isinstance(threshold, bool) or not isinstance(threshold, int) or threshold < 1
        ):
            raise ConfigurationError(
                f"failure_threshold must be a positive integer, got {threshold!r}"
            )

        if self.on_error is not None and not callable(self.on_error):
            raise ConfigurationError("on_error must be callable")

        # Fail fast on unknown presets
        create_timestamp_formatter(self.timestamp)

    def derive(self, **overrides: Any) -> "LoggerConfig":
        """Return a new configuration with overrides applied. See :func:`derive`."""
        return derive(self, **overrides)


FIELD_NAMES = frozenset(f.name for f in fields(LoggerConfig))


def derive(parent: LoggerConfig, **overrides: Any) -> LoggerConfig:
    """Derive a child configuration from a parent.

    Args:
        parent: Configuration to inherit from (left untouched)
        **overrides: Fields to replace; ``metadata`` is merged instead

    Returns:
        A new LoggerConfig

    Raises:
        ConfigurationError: If an override names an unknown field or a
            value is invalid
    """
    unknown = set(overrides) - FIELD_NAMES
    if unknown:
        raise ConfigurationError(
            f"Unknown configuration field(s): {sorted(unknown)}. Must be among {sorted(FIELD_NAMES)}"
        )

    if "metadata" in overrides:
        overrides["metadata"] = merge_metadata(parent.metadata, overrides["metadata"])

    return replace(parent, **overrides)


def coerce_config(
    config: LoggerConfig | Mapping[str, Any] | None = None,
    **overrides: Any,
) -> LoggerConfig:
    """Build a LoggerConfig from a config object, a plain mapping, or keywords.

    Keyword overrides are applied last, with :func:`derive` semantics.
    """
    if isinstance(config, LoggerConfig):
        base = config
    elif config is None:
        base = LoggerConfig()
    elif isinstance(config, Mapping):
        base = derive(LoggerConfig(), **config)
    else:
        raise ConfigurationError(
            f"config must be a LoggerConfig or a mapping, got {type(config).__name__}"
        )

    if not overrides:
        return base
    return derive(base, **overrides)
