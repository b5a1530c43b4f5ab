# SPDX-License-Identifier: MIT
# Copyright (c) 2025 saga-logging contributors

"""Per-transport failure tracking for eviction decisions.

Each transport attached to a logger receives an integer handle. The tracker
counts consecutive failures per handle:

- a failure increments the count (created lazily at 1),
- a success removes the count (full reset, not a decrement),
- reaching the configured threshold marks the transport for eviction.

Tracker state belongs to one logger instance and is never shared with
child loggers.
"""

from dataclasses import dataclass
from typing import Any

from .entry import LogEntry


@dataclass(frozen=True)
class TransportError:
    """Payload delivered to the ``on_error`` callback for a failed transport.

    Attributes:
        transport: The transport whose ``log`` raised
        error: The exception it raised
        entry: The entry being delivered
        failures: Consecutive failure count including this one
        evicted: True when this failure removes the transport
    """

    transport: Any
    error: BaseException
    entry: LogEntry
    failures: int = 1
    evicted: bool = False


@dataclass(frozen=True)
class TransportStatus:
    """Current health of an active transport."""

    transport: Any
    failures: int = 0


class FailureTracker:
    """Consecutive-failure counter keyed by transport handle."""

    def __init__(self, threshold: int | None = None):
        """Initialize failure tracker.

        Args:
            threshold: Failures that trigger eviction; None disables eviction
        """
        self.threshold = threshold
        self._counts: dict[int, int] = {}

    def record_failure(self, handle: int) -> int:
        """Increment and return the failure count for a handle."""
        count = self._counts.get(handle, 0) + 1
        self._counts[handle] = count
        return count

    def record_success(self, handle: int) -> None:
        """Reset a handle to healthy."""
        self._counts.pop(handle, None)

    def should_evict(self, handle: int) -> bool:
        """Check whether a handle has reached the eviction threshold."""
        if self.threshold is None:
            return False
        return self._counts.get(handle, 0) >= self.threshold

    def forget(self, handle: int) -> None:
        """Drop all state for a handle (after eviction or removal)."""
        self._counts.pop(handle, None)

    def failures(self, handle: int) -> int:
        """Return the current consecutive failure count for a handle."""
        return self._counts.get(handle, 0)
