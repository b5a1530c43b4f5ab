# SPDX-License-Identifier: MIT
# Copyright (c) 2025 saga-logging contributors

"""Abstract transport interface."""

from abc import ABC, abstractmethod

from ..entry import LogEntry


class Transport(ABC):
    """Abstract base class for transports.

    A transport receives fully built, already formatted entries from a
    :class:`~saga_logging.logger.Logger`. Subclassing is optional: any object
    with a callable ``log(entry)`` is accepted by the logger.
    """

    @abstractmethod
    def log(self, entry: LogEntry) -> None:
        """Process and output a log entry.

        Args:
            entry: The entry to deliver; ``formatted_message`` is set
        """
        pass

    def close(self) -> None:
        """Release transport resources. Only called on explicit request."""
        pass
