# SPDX-License-Identifier: MIT
# Copyright (c) 2025 saga-logging contributors

"""Transport bridging entries into the standard library logging module."""

import logging

from ..entry import LogEntry
from ..levels import LogLevel
from .base import Transport

# Map saga levels to Python logging levels
_LEVEL_MAP: dict[LogLevel, int] = {
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.INFO: logging.INFO,
    LogLevel.WARNING: logging.WARNING,
    LogLevel.SUCCESS: logging.INFO,
    LogLevel.ERROR: logging.ERROR,
    LogLevel.CRITICAL: logging.CRITICAL,
}


class StdlibTransport(Transport):
    """Transport that forwards entries to a stdlib ``logging.Logger``.

    Level filtering is done by the saga logger; the stdlib logger is left at
    NOTSET so existing handlers (and test harnesses such as caplog) receive
    every forwarded record.
    """

    def __init__(self, name: str = "saga", logger: logging.Logger | None = None):
        """Initialize stdlib transport.

        Args:
            name: Name of the stdlib logger to forward to
            logger: Explicit stdlib logger (takes precedence over name)
        """
        self._stdlib_logger = logger or logging.getLogger(name)
        if logger is None:
            # Use NOTSET to inherit the root level
            self._stdlib_logger.setLevel(logging.NOTSET)

    @property
    def name(self) -> str:
        """Name of the stdlib logger entries are forwarded to."""
        return self._stdlib_logger.name

    def log(self, entry: LogEntry) -> None:
        """Emit the entry as a stdlib log record.

        The record message is the entry's formatted message (raw message when
        unformatted). Metadata and the saga level travel as record attributes.
        """
        text = entry.formatted_message if entry.formatted_message is not None else entry.message
        self._stdlib_logger.log(
            _LEVEL_MAP[entry.level],
            text,
            extra={"metadata": dict(entry.metadata), "saga_level": entry.level.value},
        )
