# SPDX-License-Identifier: MIT
# Copyright (c) 2025 saga-logging contributors

"""Timestamp presets and message formatters.

A timestamp formatter is a pure function from an instant to a string. A
message formatter turns a :class:`~saga_logging.entry.LogEntry` into the
final text handed to every transport.

Example:
    >>> fmt = create_timestamp_formatter("short")
    >>> fmt(datetime(2024, 11, 22, 14, 32, 24))
    '14:32:24'
"""

import math
import string
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Literal, Union

from .entry import LogEntry
from .exceptions import ConfigurationError

TimestampPreset = Literal[
    "short",     # 14:32:24
    "time",      # 14:32:24.432
    "iso",       # 2024-11-22T14:32:24.432Z
    "date",      # 2024-11-22
    "datetime",  # 2024-11-22 14:32:24
    "compact",   # 20241122143224
    "relative",  # 2s ago, 5m ago, ...
    "unix",      # 1734877944432
    "none",      # empty
]

TimestampFormatter = Callable[[datetime], str]
MessageFormatter = Callable[[LogEntry], str]

DEFAULT_TIMESTAMP_PRESET = "datetime"


@dataclass(frozen=True)
class TimestampConfig:
    """Timestamp selection: a preset, or a custom callable that overrides it."""

    preset: str = DEFAULT_TIMESTAMP_PRESET
    custom: TimestampFormatter | None = None


TimestampSpec = Union[str, TimestampConfig, TimestampFormatter, None]


def _short(date: datetime) -> str:
    return date.strftime("%H:%M:%S")


def _time(date: datetime) -> str:
    return f"{_short(date)}.{date.microsecond // 1000:03d}"


def _iso(date: datetime) -> str:
    return date.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _date(date: datetime) -> str:
    return date.strftime("%Y-%m-%d")


def _datetime(date: datetime) -> str:
    return f"{_date(date)} {_short(date)}"


def _compact(date: datetime) -> str:
    return date.strftime("%Y%m%d%H%M%S")


def _relative(date: datetime) -> str:
    # Measured against the clock at format time, not entry creation.
    now = datetime.now(date.tzinfo) if date.tzinfo else datetime.now()
    seconds = max(0, math.floor((now - date).total_seconds()))
    minutes = seconds // 60
    hours = minutes // 60

    if seconds < 60:
        return f"{seconds}s ago"
    if minutes < 60:
        return f"{minutes}m ago"
    if hours < 24:
        return f"{hours}h ago"
    return f"{hours // 24}d ago"


def _unix(date: datetime) -> str:
    return str(int(date.timestamp() * 1000))


def _none(date: datetime) -> str:
    return ""


_PRESETS: dict[str, TimestampFormatter] = {
    "short": _short,
    "time": _time,
    "iso": _iso,
    "date": _date,
    "datetime": _datetime,
    "compact": _compact,
    "relative": _relative,
    "unix": _unix,
    "none": _none,
}

TIMESTAMP_PRESETS = tuple(_PRESETS)


def create_timestamp_formatter(spec: TimestampSpec = None) -> TimestampFormatter:
    """Resolve a timestamp setting to a formatter function.

    Args:
        spec: Preset name, TimestampConfig, custom callable, or None for
            the "datetime" preset

    Returns:
        A function rendering an instant as a string

    Raises:
        ConfigurationError: If the preset name is unknown
    """
    if spec is None:
        return _PRESETS[DEFAULT_TIMESTAMP_PRESET]
    if isinstance(spec, TimestampConfig):
        if spec.custom is not None:
            return spec.custom
        spec = spec.preset
    if callable(spec):
        return spec
    if not isinstance(spec, str) or spec not in _PRESETS:
        raise ConfigurationError(
            f"Unknown timestamp preset: {spec!r}. Must be one of {list(TIMESTAMP_PRESETS)}"
        )
    return _PRESETS[spec]


def create_default_message_formatter(timestamp_formatter: TimestampFormatter) -> MessageFormatter:
    """Build the ``"<timestamp> <symbol> <message>"`` formatter.

    The timestamp and its separator are left out when the timestamp renders
    empty.
    """

    def format_message(entry: LogEntry) -> str:
        stamp = timestamp_formatter(entry.timestamp)
        if stamp:
            return f"{stamp} {entry.symbol} {entry.message}"
        return f"{entry.symbol} {entry.message}"

    return format_message


_MISSING = object()


class _PatternFormatter(string.Formatter):
    """Template renderer; missing fields render empty whatever their spec."""

    def get_field(self, field_name: str, args: Any, kwargs: Any) -> tuple[Any, str]:
        return kwargs.get(field_name, _MISSING), field_name

    def convert_field(self, value: Any, conversion: str | None) -> Any:
        if value is _MISSING:
            return value
        return super().convert_field(value, conversion)

    def format_field(self, value: Any, format_spec: str) -> str:
        if value is _MISSING:
            return ""
        try:
            return super().format_field(value, format_spec)
        except (TypeError, ValueError):
            # Metadata of an unexpected type for the spec
            return str(value)


_pattern_formatter = _PatternFormatter()


def validate_pattern(pattern: str) -> None:
    """Check that a pattern is a usable template.

    Fields must be plain names: no positional (``{}``, ``{0}``), attribute
    (``{user.name}``) or index (``{items[0]}``) access.

    Raises:
        ConfigurationError: If the template is malformed
    """
    try:
        parsed = list(_pattern_formatter.parse(pattern))
    except ValueError as e:
        raise ConfigurationError(f"Invalid pattern {pattern!r}: {e}") from e

    for _, field_name, format_spec, conversion in parsed:
        if field_name is None:
            continue
        if not field_name or field_name.isdigit() or any(c in field_name for c in ".["):
            raise ConfigurationError(
                f"Invalid pattern {pattern!r}: field {field_name!r} must be a plain name"
            )
        if conversion is not None and conversion not in ("r", "s", "a"):
            raise ConfigurationError(
                f"Invalid pattern {pattern!r}: unknown conversion {conversion!r}"
            )
        if format_spec and "{" in format_spec:
            validate_pattern(format_spec)


def create_pattern_formatter(pattern: str, timestamp_formatter: TimestampFormatter) -> MessageFormatter:
    """Build a formatter from a ``str.format`` template.

    Available fields are ``timestamp``, ``symbol``, ``level`` and
    ``message``, plus every metadata key of the entry. The built-in fields
    take precedence over metadata keys of the same name. Fields absent from
    an entry render empty, including those with a format spec.

    Args:
        pattern: Template such as ``"[{level}] {message} ({request_id})"``
        timestamp_formatter: Formatter used for the ``timestamp`` field

    Returns:
        Message formatter

    Raises:
        ConfigurationError: If the template is malformed
    """
    validate_pattern(pattern)

    def format_message(entry: LogEntry) -> str:
        fields: dict[str, Any] = dict(entry.metadata)
        fields.update(
            timestamp=timestamp_formatter(entry.timestamp),
            symbol=entry.symbol,
            level=entry.level.value,
            message=entry.message,
        )
        return _pattern_formatter.vformat(pattern, (), fields).strip()

    return format_message
