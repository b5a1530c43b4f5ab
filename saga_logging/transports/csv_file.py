# SPDX-License-Identifier: MIT
# Copyright (c) 2025 saga-logging contributors

"""CSV file transport for writing structured entries to disk."""

import csv
import json
from pathlib import Path

from ..entry import LogEntry
from .base import Transport


class CSVFileTransport(Transport):
    """Transport that appends entries to a CSV file.

    Entries are written with a fixed schema; metadata goes into a JSON
    encoded ``json_extras`` column. The file is opened per write, so the
    transport holds no handle between calls. There is no rotation.
    """

    fieldnames = [
        "ts",
        "level",
        "symbol",
        "component",
        "message",
        "formatted_message",
        "json_extras",
    ]

    def __init__(self, path: str | Path, component: str = "saga"):
        """Initialize CSV file transport.

        Args:
            path: Target CSV file; parent directories are created
            component: Component/service name written to every row
        """
        self.path = Path(path)
        self.component = component
        self._closed = False

        self.path.parent.mkdir(parents=True, exist_ok=True)

    @property
    def closed(self) -> bool:
        """Whether close() has been called."""
        return self._closed

    def log(self, entry: LogEntry) -> None:
        """Append the entry as one CSV row.

        Raises:
            RuntimeError: If the transport has been closed
            OSError: If the file cannot be written
        """
        if self._closed:
            raise RuntimeError(f"CSVFileTransport for {self.path} is closed")

        row = {
            "ts": entry.timestamp.isoformat(),
            "level": entry.level.value,
            "symbol": entry.symbol,
            "component": self.component,
            "message": entry.message,
            "formatted_message": entry.formatted_message or "",
            "json_extras": (
                json.dumps(dict(entry.metadata), ensure_ascii=False, default=str)
                if entry.metadata
                else ""
            ),
        }

        write_header = not self.path.exists() or self.path.stat().st_size == 0
        with open(self.path, "a", newline="", encoding="utf-8") as f:
            writer = csv.DictWriter(f, fieldnames=self.fieldnames)
            if write_header:
                writer.writeheader()
            writer.writerow(row)

    def close(self) -> None:
        """Mark the transport closed; later writes fail."""
        self._closed = True
