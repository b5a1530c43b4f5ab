# SPDX-License-Identifier: MIT
# Copyright (c) 2025 saga-logging contributors

"""Exceptions for saga_logging."""

from typing import Any


class SagaError(Exception):
    """Base exception for saga_logging errors.

    Every error carries a short code; the rendered message is prefixed
    with ``SAG-<code>``.
    """

    def __init__(self, code: str, message: str):
        """Initialize the error.

        Args:
            code: Short error code (e.g. "CFG")
            message: Human-readable description
        """
        super().__init__(f"SAG-{code}: {message}")
        self.code = code


class ConfigurationError(SagaError, ValueError):
    """Raised when a logger configuration value is invalid."""

    def __init__(self, message: str):
        super().__init__("CFG", message)


class TransportValidationError(SagaError):
    """Raised when a transport does not satisfy the transport contract."""

    def __init__(self, reason: str, transport: Any = None):
        """Initialize transport validation error.

        Args:
            reason: Why the transport was rejected
            transport: The rejected candidate
        """
        super().__init__("TRN", f"Invalid transport: {reason}")
        self.reason = reason
        self.transport = transport
