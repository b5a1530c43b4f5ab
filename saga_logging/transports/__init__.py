# SPDX-License-Identifier: MIT
# Copyright (c) 2025 saga-logging contributors

"""Built-in transports."""

from .base import Transport
from .console import ConsoleTransport
from .csv_file import CSVFileTransport
from .memory import MemoryTransport
from .stdlib import StdlibTransport

__all__ = [
    "Transport",
    "ConsoleTransport",
    "CSVFileTransport",
    "MemoryTransport",
    "StdlibTransport",
]
