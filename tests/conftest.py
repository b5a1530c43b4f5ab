# SPDX-License-Identifier: MIT
# Copyright (c) 2025 saga-logging contributors

"""Shared test transports and fixtures."""

from collections.abc import Callable, Iterable

import pytest

import saga_logging.factory as factory
from saga_logging import LogEntry, MemoryTransport


class FailingTransport:
    """Duck-typed transport whose log always raises."""

    def __init__(self, error: Exception | None = None):
        self.error = error or RuntimeError("sink unavailable")
        self.calls = 0

    def log(self, entry: LogEntry) -> None:
        self.calls += 1
        raise self.error


class ScriptedTransport:
    """Transport that fails or succeeds according to a script.

    ``outcomes`` is consumed one item per call; True means success. Once
    exhausted every call succeeds.
    """

    def __init__(self, outcomes: Iterable[bool]):
        self.outcomes = list(outcomes)
        self.received: list[LogEntry] = []

    def log(self, entry: LogEntry) -> None:
        ok = self.outcomes.pop(0) if self.outcomes else True
        if not ok:
            raise ConnectionError("scripted failure")
        self.received.append(entry)


@pytest.fixture
def memory() -> MemoryTransport:
    return MemoryTransport()


@pytest.fixture
def failing_transport() -> FailingTransport:
    return FailingTransport()


@pytest.fixture
def scripted_transport() -> Callable[[Iterable[bool]], ScriptedTransport]:
    """Factory for transports following a success/failure script."""
    return ScriptedTransport


@pytest.fixture(autouse=True)
def reset_logger_state():
    """Reset global logger state before and after each test."""
    factory._logger_registry = {}
    factory._default_logger = None
    yield
    factory._logger_registry = {}
    factory._default_logger = None
