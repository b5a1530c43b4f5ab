# SPDX-License-Identifier: MIT
# Copyright (c) 2025 saga-logging contributors

"""In-memory transport for testing."""

from ..entry import LogEntry
from ..levels import LogLevel, parse_level
from .base import Transport


class MemoryTransport(Transport):
    """Transport that stores entries in memory without output.

    Useful for testing to verify logging behavior without cluttering test output.
    """

    def __init__(self) -> None:
        self._logs: list[LogEntry] = []

    def log(self, entry: LogEntry) -> None:
        """Store the entry."""
        self._logs.append(entry)

    def get_logs(self, level: LogLevel | str | None = None) -> list[LogEntry]:
        """Get stored entries, optionally filtered by level.

        Args:
            level: Optional level to filter by

        Returns:
            A new list of entries; mutating it does not affect the transport
        """
        if level is None:
            return list(self._logs)
        wanted = parse_level(level)
        return [entry for entry in self._logs if entry.level == wanted]

    def get_last_log(self) -> LogEntry | None:
        """Return the most recent entry, or None when empty."""
        return self._logs[-1] if self._logs else None

    def clear(self) -> None:
        """Clear all stored entries."""
        self._logs.clear()

    def has_log(self, message: str, level: LogLevel | str | None = None) -> bool:
        """Check if an entry containing the given text exists.

        Args:
            message: Substring to search for in the raw message
            level: Optional level to filter by

        Returns:
            True if a matching entry is found, False otherwise
        """
        return any(message in entry.message for entry in self.get_logs(level))
