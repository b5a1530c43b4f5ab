# SPDX-License-Identifier: MIT
# Copyright (c) 2025 saga-logging contributors

"""Factory functions for creating loggers and transports."""

import os
from typing import Any

from .levels import parse_level
from .logger import Logger
from .transports.base import Transport
from .transports.console import ConsoleTransport
from .transports.csv_file import CSVFileTransport
from .transports.memory import MemoryTransport
from .transports.stdlib import StdlibTransport

TRANSPORT_TYPES = ("console", "memory", "stdlib", "csv")

# Global logger state
_default_logger: Logger | None = None
_logger_registry: dict[str, Logger] = {}


def _default(value: str | None, env_var: str, fallback: str) -> str:
    """Helper to pick an explicit value, then env var, then fallback."""
    return (value or os.getenv(env_var) or fallback)


def create_transport(transport_type: str, **kwargs: Any) -> Transport:
    """Factory function to create a built-in transport.

    Args:
        transport_type: One of "console", "memory", "stdlib", "csv"
        **kwargs: Constructor arguments for the transport. The "csv"
            transport defaults its path to SAGA_LOG_FILE or "saga.csv".

    Returns:
        Transport instance

    Raises:
        ValueError: If transport_type is not recognized
    """
    transport_type = transport_type.strip().lower()

    if transport_type == "console":
        return ConsoleTransport(**kwargs)
    elif transport_type == "memory":
        return MemoryTransport(**kwargs)
    elif transport_type == "stdlib":
        return StdlibTransport(**kwargs)
    elif transport_type == "csv":
        kwargs.setdefault("path", os.getenv("SAGA_LOG_FILE", "saga.csv"))
        return CSVFileTransport(**kwargs)
    else:
        raise ValueError(
            f"Unknown transport_type: {transport_type}. "
            f"Must be one of: {', '.join(TRANSPORT_TYPES)}"
        )


def create_logger(
    level: str | None = None,
    timestamp: str | None = None,
    transport_type: str | None = None,
    **fields: Any,
) -> Logger:
    """Factory function to create a logger instance.

    Args:
        level: Minimum level. Defaults to SAGA_LOG_LEVEL env or "info".
        timestamp: Timestamp preset. Defaults to SAGA_LOG_TIMESTAMP env or
            "datetime".
        transport_type: Built-in transport to attach when ``transports`` is
            not given. Defaults to SAGA_LOG_TRANSPORT env or "console".
        **fields: Any other LoggerConfig field

    Returns:
        Logger instance

    Raises:
        ConfigurationError: If the level or preset is invalid
        ValueError: If transport_type is not recognized

    Example:
        >>> # Create logger from environment variables
        >>> logger = create_logger()
        >>>
        >>> # Create a debug logger writing to memory
        >>> logger = create_logger(level="debug", transport_type="memory")
    """
    level = _default(level, "SAGA_LOG_LEVEL", "info")
    timestamp = _default(timestamp, "SAGA_LOG_TIMESTAMP", "datetime")

    if "transports" not in fields:
        transport_type = _default(transport_type, "SAGA_LOG_TRANSPORT", "console")
        fields["transports"] = [create_transport(transport_type)]

    return Logger(level=parse_level(level), timestamp=timestamp, **fields)


def set_default_logger(logger: Logger) -> None:
    """Set the logger returned by :func:`get_logger`.

    Clears the per-name cache so later lookups resolve to the new default.
    """
    global _default_logger, _logger_registry
    _default_logger = logger
    _logger_registry = {}


def get_logger(name: str | None = None) -> Logger:
    """Return the default logger, creating a fallback if none is set.

    Args:
        name: Optional name; cached per name. Fallback loggers created for a
            name carry it as ``metadata["logger"]``.

    Returns:
        Logger instance
    """
    global _default_logger

    if name is None:
        if _default_logger is None:
            _default_logger = create_logger()
        return _default_logger

    if name not in _logger_registry:
        if _default_logger is not None:
            _logger_registry[name] = _default_logger
        else:
            _logger_registry[name] = create_logger(metadata={"logger": name})
    return _logger_registry[name]
