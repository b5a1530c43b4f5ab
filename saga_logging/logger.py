# SPDX-License-Identifier: MIT
# Copyright (c) 2025 saga-logging contributors

"""Logger: level filtering, formatting and transport fan-out."""

import itertools
import logging
import sys
import traceback
from collections.abc import Mapping
from dataclasses import replace
from typing import Any

from .config import LoggerConfig, coerce_config, derive
from .entry import LogEntry, build_entry, merge_metadata
from .exceptions import TransportValidationError
from .failures import FailureTracker, TransportError, TransportStatus
from .formatters import (
    MessageFormatter,
    create_default_message_formatter,
    create_pattern_formatter,
    create_timestamp_formatter,
)
from .levels import LOG_LEVELS, LogLevel, parse_level
from .transports.console import ConsoleTransport
from .validation import validate_transport

logger = logging.getLogger(__name__)


def _describe(transport: Any) -> str:
    return type(transport).__name__


class Logger:
    """Structured, leveled logger dispatching entries to transports.

    A logger holds an immutable :class:`LoggerConfig` plus two pieces of
    private mutable state: the ordered list of active transports and the
    failure tracker. Child loggers copy the transport list but start with an
    empty tracker.

    Logging calls never raise because of a transport: failures are counted,
    reported to ``on_error`` and, once ``failure_threshold`` is reached, the
    transport is evicted. If that leaves no transports, a fresh console
    transport is attached.

    Example:
        >>> from saga_logging import Logger, MemoryTransport
        >>> memory = MemoryTransport()
        >>> log = Logger(transports=[memory], metadata={"service": "api"})
        >>> log.info("Service started", version="1.0.0")
        >>> memory.get_last_log().metadata["version"]
        '1.0.0'
    """

    def __init__(self, config: LoggerConfig | Mapping[str, Any] | None = None, **fields: Any):
        """Initialize logger.

        Args:
            config: LoggerConfig or plain mapping of configuration fields
            **fields: Configuration fields applied over ``config``

        Raises:
            ConfigurationError: If the configuration is invalid
            TransportValidationError: If a transport is invalid and the
                validation policy says to throw
        """
        self._config = coerce_config(config, **fields)
        self._timestamp_formatter = (
            self._config.formatters.timestamp
            or create_timestamp_formatter(self._config.timestamp)
        )
        self._message_formatter = self._build_message_formatter()
        self._tracker = FailureTracker(self._config.failure_threshold)
        self._handles = itertools.count(1)
        self._slots: list[tuple[int, Any]] = []

        if self._config.transports is not None:
            for transport in self._config.transports:
                self._attach(transport)
        if not self._slots:
            self._slots.append((next(self._handles), ConsoleTransport()))

    @classmethod
    def create(cls, config: LoggerConfig | Mapping[str, Any] | None = None, **fields: Any) -> "Logger":
        """Factory method equivalent to the constructor."""
        return cls(config, **fields)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(level={self._config.level.value!r}, "
            f"transports={[_describe(t) for _, t in self._slots]})"
        )

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    @property
    def level(self) -> LogLevel:
        """Minimum level that is dispatched."""
        return self._config.level

    def get_config(self) -> LoggerConfig:
        """Return an immutable snapshot of the configuration.

        The ``transports`` field reflects the currently active transports.
        """
        return replace(self._config, transports=tuple(t for _, t in self._slots))

    def child(self, **overrides: Any) -> "Logger":
        """Create an independent logger inheriting this logger's configuration.

        Args:
            **overrides: Configuration fields to replace; ``metadata`` is
                merged over the parent's

        Returns:
            New logger; this logger is left unchanged
        """
        return type(self)(derive(self.get_config(), **overrides))

    def with_metadata(self, metadata: Mapping[str, Any] | None = None, **fields: Any) -> "Logger":
        """Create a child logger with additional metadata."""
        return self.child(metadata=merge_metadata(metadata, fields))

    def _build_message_formatter(self) -> MessageFormatter:
        if self._config.formatters.message is not None:
            return self._config.formatters.message
        if self._config.pattern is not None:
            return create_pattern_formatter(self._config.pattern, self._timestamp_formatter)
        return create_default_message_formatter(self._timestamp_formatter)

    # ------------------------------------------------------------------
    # Transport management
    # ------------------------------------------------------------------

    def _attach(self, transport: Any) -> bool:
        policy = self._config.validation
        result = validate_transport(transport, policy)
        if not result.valid:
            if policy.throw_on_invalid:
                raise TransportValidationError(result.reason or "invalid transport", transport)
            logger.warning(f"Skipping invalid transport: {result.reason}")
            return False

        self._slots.append((next(self._handles), transport))
        return True

    def add_transport(self, transport: Any) -> bool:
        """Attach a transport after validating it.

        Args:
            transport: Object with a callable ``log(entry)``

        Returns:
            True if attached, False if skipped as invalid

        Raises:
            TransportValidationError: If invalid and the policy says to throw
        """
        return self._attach(transport)

    def remove_transport(self, transport: Any) -> bool:
        """Detach the first occurrence of a transport (matched by identity).

        Returns:
            True if a transport was removed, False if it was not attached
        """
        for index, (handle, attached) in enumerate(self._slots):
            if attached is transport:
                del self._slots[index]
                self._tracker.forget(handle)
                return True
        return False

    def clear_transports(self) -> None:
        """Detach every transport. No fallback transport is added."""
        for handle, _ in self._slots:
            self._tracker.forget(handle)
        self._slots.clear()

    def get_transports(self) -> list[Any]:
        """Return a new list of the active transports."""
        return [t for _, t in self._slots]

    def get_transport_status(self) -> list[TransportStatus]:
        """Return each active transport with its consecutive failure count."""
        return [TransportStatus(t, self._tracker.failures(handle)) for handle, t in self._slots]

    def close(self) -> None:
        """Close every active transport that has a ``close`` method.

        A failing close is logged and does not stop the remaining ones.
        """
        for _, transport in list(self._slots):
            close = getattr(transport, "close", None)
            if not callable(close):
                continue
            try:
                close()
            except Exception as e:
                logger.error(f"Failed to close transport {_describe(transport)}: {e}", exc_info=True)

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def is_enabled_for(self, level: LogLevel | str) -> bool:
        """Check whether entries at ``level`` would be dispatched."""
        return LOG_LEVELS[parse_level(level)] >= LOG_LEVELS[self._config.level]

    def log(
        self,
        level: LogLevel | str,
        message: str,
        metadata: Mapping[str, Any] | None = None,
        **fields: Any,
    ) -> None:
        """Log a message at the given level.

        Args:
            level: Severity of the entry
            message: The log message
            metadata: Optional call-site metadata
            **fields: Additional metadata, merged over ``metadata``

        Raises:
            ConfigurationError: If ``level`` is not a known level
        """
        level = parse_level(level)
        if not self.is_enabled_for(level):
            return

        call_metadata = merge_metadata(metadata, fields) if (metadata or fields) else None
        entry = build_entry(level, message, self._config.metadata, call_metadata)
        entry = replace(entry, formatted_message=self._message_formatter(entry))
        self._dispatch(entry)

    def _is_attached(self, handle: int) -> bool:
        return any(slot[0] == handle for slot in self._slots)

    def _dispatch(self, entry: LogEntry) -> None:
        for handle, transport in list(self._slots):
            try:
                transport.log(entry)
            except Exception as e:
                self._handle_failure(handle, transport, e, entry)
            else:
                self._tracker.record_success(handle)

    def _handle_failure(self, handle: int, transport: Any, error: Exception, entry: LogEntry) -> None:
        if not self._is_attached(handle):
            # Detached while this entry was in flight
            logger.debug(
                f"Ignoring failure of detached transport {_describe(transport)}: "
                f"{type(error).__name__}: {error}"
            )
            return

        failures = self._tracker.record_failure(handle)
        evicted = self._tracker.should_evict(handle)
        logger.debug(
            f"Transport {_describe(transport)} failed ({failures} consecutive): "
            f"{type(error).__name__}: {error}"
        )

        # The callback sees the transport before it is removed
        on_error = self._config.on_error
        if on_error is not None:
            try:
                on_error(TransportError(transport, error, entry, failures, evicted))
            except Exception:
                logger.exception(f"on_error callback failed for transport {_describe(transport)}")

        # The callback may have detached it already
        if evicted and self._is_attached(handle):
            self._evict(handle, transport, failures)

    def _evict(self, handle: int, transport: Any, failures: int) -> None:
        remaining = [slot for slot in self._slots if slot[0] != handle]
        if len(remaining) == len(self._slots):
            return
        self._slots = remaining
        self._tracker.forget(handle)
        logger.warning(
            f"Evicted transport {_describe(transport)} after {failures} consecutive failures"
        )

        if not self._slots:
            self._slots.append((next(self._handles), ConsoleTransport()))
            logger.warning("No transports left after eviction, falling back to console")

    # ------------------------------------------------------------------
    # Level methods
    # ------------------------------------------------------------------

    def debug(self, message: str, metadata: Mapping[str, Any] | None = None, **fields: Any) -> None:
        """Log a debug-level message.

        Args:
            message: The log message
            metadata: Optional call-site metadata
            **fields: Additional structured data to log
        """
        self.log(LogLevel.DEBUG, message, metadata, **fields)

    def info(self, message: str, metadata: Mapping[str, Any] | None = None, **fields: Any) -> None:
        """Log an info-level message.

        Args:
            message: The log message
            metadata: Optional call-site metadata
            **fields: Additional structured data to log
        """
        self.log(LogLevel.INFO, message, metadata, **fields)

    def warning(self, message: str, metadata: Mapping[str, Any] | None = None, **fields: Any) -> None:
        """Log a warning-level message.

        Args:
            message: The log message
            metadata: Optional call-site metadata
            **fields: Additional structured data to log
        """
        self.log(LogLevel.WARNING, message, metadata, **fields)

    def success(self, message: str, metadata: Mapping[str, Any] | None = None, **fields: Any) -> None:
        """Log a success-level message.

        Args:
            message: The log message
            metadata: Optional call-site metadata
            **fields: Additional structured data to log
        """
        self.log(LogLevel.SUCCESS, message, metadata, **fields)

    def error(self, message: str, metadata: Mapping[str, Any] | None = None, **fields: Any) -> None:
        """Log an error-level message.

        Args:
            message: The log message
            metadata: Optional call-site metadata
            **fields: Additional structured data to log
        """
        self.log(LogLevel.ERROR, message, metadata, **fields)

    def critical(self, message: str, metadata: Mapping[str, Any] | None = None, **fields: Any) -> None:
        """Log a critical-level message.

        Args:
            message: The log message
            metadata: Optional call-site metadata
            **fields: Additional structured data to log
        """
        self.log(LogLevel.CRITICAL, message, metadata, **fields)

    def exception(self, message: str, metadata: Mapping[str, Any] | None = None, **fields: Any) -> None:
        """Log an error-level message with exception context.

        Intended for use inside an exception handler: the traceback of the
        exception being handled is added as ``exc_info``.
        """
        exc_type, exc, tb = sys.exc_info()
        if exc is not None and "exc_info" not in fields and "exc_info" not in (metadata or {}):
            fields["exc_info"] = "".join(traceback.format_exception(exc_type, exc, tb))
        self.log(LogLevel.ERROR, message, metadata, **fields)
