# SPDX-License-Identifier: MIT
# Copyright (c) 2025 saga-logging contributors

"""saga-logging: structured, leveled logging with pluggable transports.

Entries carry a level, a message, merged metadata and a timestamp, and are
delivered to every transport attached to the logger. Child loggers inherit
and extend their parent's configuration without modifying it. Failing
transports are tracked and, past a configurable threshold, evicted.

Example:
    >>> from saga_logging import Logger, MemoryTransport
    >>>
    >>> memory = MemoryTransport()
    >>> logger = Logger(transports=[memory], metadata={"service": "main"}, timestamp="short")
    >>> auth = logger.child(metadata={"component": "auth"})
    >>> auth.info("User logged in", user_id=123)
    >>> dict(memory.get_last_log().metadata)
    {'service': 'main', 'component': 'auth', 'user_id': 123}
"""

__version__ = "0.1.0"

from .config import Formatters, LoggerConfig, derive
from .entry import LogEntry, build_entry
from .exceptions import ConfigurationError, SagaError, TransportValidationError
from .factory import create_logger, create_transport, get_logger, set_default_logger
from .failures import FailureTracker, TransportError, TransportStatus
from .formatters import TIMESTAMP_PRESETS, TimestampConfig, create_timestamp_formatter
from .levels import LOG_LEVELS, LOG_SYMBOLS, LogLevel, parse_level
from .logger import Logger
from .transports import (
    ConsoleTransport,
    CSVFileTransport,
    MemoryTransport,
    StdlibTransport,
    Transport,
)
from .validation import ValidationPolicy, ValidationResult, validate_transport

__all__ = [
    "__version__",
    "Logger",
    "LoggerConfig",
    "Formatters",
    "derive",
    "LogEntry",
    "build_entry",
    "LogLevel",
    "LOG_LEVELS",
    "LOG_SYMBOLS",
    "parse_level",
    "TimestampConfig",
    "TIMESTAMP_PRESETS",
    "create_timestamp_formatter",
    "Transport",
    "ConsoleTransport",
    "CSVFileTransport",
    "MemoryTransport",
    "StdlibTransport",
    "ValidationPolicy",
    "ValidationResult",
    "validate_transport",
    "FailureTracker",
    "TransportError",
    "TransportStatus",
    "SagaError",
    "ConfigurationError",
    "TransportValidationError",
    "create_logger",
    "create_transport",
    "get_logger",
    "set_default_logger",
]
