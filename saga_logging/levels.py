# SPDX-License-Identifier: MIT
# Copyright (c) 2025 saga-logging contributors

"""Severity levels, their ordering and display symbols."""

from enum import Enum
from typing import Any

from .exceptions import ConfigurationError


class LogLevel(str, Enum):
    """Severity level of a log entry, in increasing order."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    SUCCESS = "success"
    ERROR = "error"
    CRITICAL = "critical"


LOG_LEVELS: dict[LogLevel, int] = {
    LogLevel.DEBUG: 0,
    LogLevel.INFO: 1,
    LogLevel.WARNING: 2,
    LogLevel.SUCCESS: 3,
    LogLevel.ERROR: 4,
    LogLevel.CRITICAL: 5,
}

LOG_SYMBOLS: dict[LogLevel, str] = {
    LogLevel.DEBUG: "●",
    LogLevel.INFO: "◆",
    LogLevel.WARNING: "▼",
    LogLevel.SUCCESS: "▲",
    LogLevel.ERROR: "✕",
    LogLevel.CRITICAL: "⚡",
}

_ALIASES: dict[str, LogLevel] = {
    "warn": LogLevel.WARNING,
}


def parse_level(value: Any) -> LogLevel:
    """Convert untyped input to a LogLevel.

    Args:
        value: A LogLevel or a level name (case-insensitive)

    Returns:
        The matching LogLevel

    Raises:
        ConfigurationError: If the value does not name a known level
    """
    if isinstance(value, LogLevel):
        return value
    if not isinstance(value, str):
        raise ConfigurationError(f"Invalid log level: {value!r}")

    name = value.strip().lower()
    if name in _ALIASES:
        return _ALIASES[name]
    try:
        return LogLevel(name)
    except ValueError:
        raise ConfigurationError(
            f"Invalid log level: {value!r}. Must be one of {[lvl.value for lvl in LogLevel]}"
        ) from None


def rank(level: LogLevel | str) -> int:
    """Return the numeric rank of a level (higher is more severe)."""
    return LOG_LEVELS[parse_level(level)]


def symbol(level: LogLevel | str) -> str:
    """Return the display symbol for a level."""
    return LOG_SYMBOLS[parse_level(level)]
