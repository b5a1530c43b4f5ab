# SPDX-License-Identifier: MIT
# Copyright (c) 2025 saga-logging contributors

"""Transport shape validation."""

from dataclasses import dataclass
from typing import Any

# Values that can never be a transport
_SCALAR_TYPES = (str, bytes, bytearray, int, float, complex, bool)


@dataclass(frozen=True)
class ValidationPolicy:
    """How a logger treats transports that fail validation.

    Attributes:
        throw_on_invalid: Raise TransportValidationError when True; otherwise
            skip the transport and emit a warning
        require_close: Also require a callable ``close``
    """

    throw_on_invalid: bool = True
    require_close: bool = False


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating a transport candidate."""

    valid: bool
    reason: str | None = None

    def __bool__(self) -> bool:
        return self.valid


def _has_callable(candidate: Any, name: str) -> bool:
    # Only AttributeError means "missing"; anything else propagates.
    return callable(getattr(candidate, name, None))


def validate_transport(candidate: Any, policy: ValidationPolicy | None = None) -> ValidationResult:
    """Check that a candidate satisfies the transport contract.

    Args:
        candidate: Object to check
        policy: Validation policy (defaults apply when None)

    Returns:
        ValidationResult with the rejection reason when invalid
    """
    policy = policy or ValidationPolicy()

    if candidate is None or isinstance(candidate, _SCALAR_TYPES):
        return ValidationResult(False, f"transport must be an object, got {type(candidate).__name__}")
    if not _has_callable(candidate, "log"):
        return ValidationResult(False, f"{type(candidate).__name__} has no callable 'log' method")
    if policy.require_close and not _has_callable(candidate, "close"):
        return ValidationResult(False, f"{type(candidate).__name__} has no callable 'close' method")
    return ValidationResult(True)
