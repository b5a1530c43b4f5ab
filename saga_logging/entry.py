# SPDX-License-Identifier: MIT
# Copyright (c) 2025 saga-logging contributors

"""Log entry model and builder."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Any

from .levels import LOG_SYMBOLS, LogLevel


@dataclass(frozen=True)
class LogEntry:
    """A single log event as delivered to transports.

    Attributes:
        level: Severity of the event
        symbol: Display symbol derived from the level
        message: Raw message text passed by the caller
        timestamp: Instant the entry was created (timezone-aware, local zone)
        metadata: Read-only merge of logger and call-site metadata
        formatted_message: Final rendered text, attached once before dispatch
    """

    level: LogLevel
    symbol: str
    message: str
    timestamp: datetime
    metadata: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))
    formatted_message: str | None = None


def merge_metadata(
    base: Mapping[str, Any] | None,
    extra: Mapping[str, Any] | None,
) -> dict[str, Any]:
    """Shallow-merge two metadata mappings; keys in ``extra`` win."""
    merged: dict[str, Any] = dict(base or {})
    if extra:
        merged.update(extra)
    return merged


def build_entry(
    level: LogLevel,
    message: str,
    config_metadata: Mapping[str, Any] | None = None,
    call_metadata: Mapping[str, Any] | None = None,
) -> LogEntry:
    """Create an unformatted entry stamped with the current time.

    Args:
        level: Severity of the entry
        message: Message text
        config_metadata: Metadata configured on the logger
        call_metadata: Metadata passed at the call site (wins on collision)

    Returns:
        A new LogEntry without ``formatted_message``
    """
    return LogEntry(
        level=level,
        symbol=LOG_SYMBOLS[level],
        message=message,
        timestamp=datetime.now().astimezone(),
        metadata=MappingProxyType(merge_metadata(config_metadata, call_metadata)),
    )
