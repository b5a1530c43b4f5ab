# SPDX-License-Identifier: MIT
# Copyright (c) 2025 saga-logging contributors

"""Console transport writing formatted entries to stdout."""

import sys
from typing import TextIO

from ..entry import LogEntry
from .base import Transport


class ConsoleTransport(Transport):
    """Transport that prints each entry's formatted message.

    The stream is resolved at call time, so redirection of ``sys.stdout``
    (e.g. by pytest's ``capsys``) is honoured.
    """

    def __init__(self, stream: TextIO | None = None):
        """Initialize console transport.

        Args:
            stream: Optional stream to write to (defaults to sys.stdout)
        """
        self._stream = stream

    def log(self, entry: LogEntry) -> None:
        """Print the entry's formatted message."""
        text = entry.formatted_message
        if text is None:
            text = f"{entry.timestamp.isoformat()} {entry.symbol} {entry.message}"
        print(text, file=self._stream or sys.stdout, flush=True)
