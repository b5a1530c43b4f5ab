# SPDX-License-Identifier: MIT
# Copyright (c) 2025 saga-logging contributors

"""Tests for timestamp presets and message formatters."""

import re
from datetime import datetime, timedelta, timezone

import pytest

from saga_logging import (
    ConfigurationError,
    Logger,
    LogLevel,
    MemoryTransport,
    TimestampConfig,
    build_entry,
)
from saga_logging.formatters import (
    TIMESTAMP_PRESETS,
    create_default_message_formatter,
    create_pattern_formatter,
    create_timestamp_formatter,
    validate_pattern,
)

SAMPLE = datetime(2024, 11, 22, 14, 32, 24, 432000)
SAMPLE_UTC = datetime(2024, 11, 22, 14, 32, 24, 432000, tzinfo=timezone.utc)


class TestTimestampPresets:
    """Tests for each timestamp preset."""

    def test_short(self):
        assert create_timestamp_formatter("short")(SAMPLE) == "14:32:24"

    def test_short_shape(self):
        """Test the short preset renders HH:MM:SS for the current time."""
        stamp = create_timestamp_formatter("short")(datetime.now().astimezone())
        assert re.fullmatch(r"\d{2}:\d{2}:\d{2}", stamp)

    def test_time_includes_milliseconds(self):
        assert create_timestamp_formatter("time")(SAMPLE) == "14:32:24.432"

    def test_time_pads_milliseconds(self):
        assert create_timestamp_formatter("time")(SAMPLE.replace(microsecond=7000)) == "14:32:24.007"

    def test_iso_is_utc(self):
        assert create_timestamp_formatter("iso")(SAMPLE_UTC) == "2024-11-22T14:32:24.432Z"

    def test_iso_converts_offsets_to_utc(self):
        """Test that non-UTC instants are converted before rendering."""
        plus_two = SAMPLE_UTC.astimezone(timezone(timedelta(hours=2)))
        assert create_timestamp_formatter("iso")(plus_two) == "2024-11-22T14:32:24.432Z"

    def test_date(self):
        assert create_timestamp_formatter("date")(SAMPLE) == "2024-11-22"

    def test_date_shape(self):
        stamp = create_timestamp_formatter("date")(datetime.now().astimezone())
        assert re.fullmatch(r"\d{4}-\d{2}-\d{2}", stamp)

    def test_datetime(self):
        assert create_timestamp_formatter("datetime")(SAMPLE) == "2024-11-22 14:32:24"

    def test_compact(self):
        assert create_timestamp_formatter("compact")(SAMPLE) == "20241122143224"

    def test_unix_milliseconds(self):
        instant = datetime(2024, 11, 22, 14, 32, 24, tzinfo=timezone.utc)
        assert create_timestamp_formatter("unix")(instant) == "1734877944000"

    def test_none_is_empty(self):
        assert create_timestamp_formatter("none")(SAMPLE) == ""

    def test_default_is_datetime(self):
        assert create_timestamp_formatter()(SAMPLE) == "2024-11-22 14:32:24"

    def test_all_presets_listed(self):
        assert set(TIMESTAMP_PRESETS) == {
            "short", "time", "iso", "date", "datetime", "compact", "relative", "unix", "none",
        }

    def test_unknown_preset_raises(self):
        with pytest.raises(ConfigurationError, match="Unknown timestamp preset"):
            create_timestamp_formatter("weekday")


class TestRelativePreset:
    """Tests for the relative preset."""

    @pytest.mark.parametrize(
        "delta, expected",
        [
            (timedelta(seconds=5), "5s ago"),
            (timedelta(minutes=5, seconds=1), "5m ago"),
            (timedelta(hours=3, seconds=1), "3h ago"),
            (timedelta(days=2, seconds=1), "2d ago"),
        ],
    )
    def test_thresholds(self, delta, expected):
        fmt = create_timestamp_formatter("relative")
        assert fmt(datetime.now().astimezone() - delta) == expected

    def test_naive_datetimes(self):
        fmt = create_timestamp_formatter("relative")
        assert fmt(datetime.now() - timedelta(seconds=90)) == "1m ago"

    def test_future_instants_clamp_to_zero(self):
        fmt = create_timestamp_formatter("relative")
        assert fmt(datetime.now().astimezone() + timedelta(seconds=30)) == "0s ago"


class TestCustomTimestamp:
    """Tests for custom timestamp callables."""

    def test_callable_is_used_directly(self):
        custom = lambda date: f"[{date.hour}h]"  # noqa: E731
        assert create_timestamp_formatter(custom)(SAMPLE) == "[14h]"

    def test_custom_overrides_preset(self):
        config = TimestampConfig(preset="iso", custom=lambda date: "[TEST]")
        assert create_timestamp_formatter(config)(SAMPLE) == "[TEST]"

    def test_config_preset(self):
        assert create_timestamp_formatter(TimestampConfig(preset="date"))(SAMPLE) == "2024-11-22"


class TestMessageFormatters:
    """Tests for the default and pattern message formatters."""

    def _entry(self, **metadata):
        return build_entry(LogLevel.INFO, "Test message", None, metadata)

    def test_default_layout(self):
        fmt = create_default_message_formatter(lambda date: "12:00:00")
        assert fmt(self._entry()) == "12:00:00 ◆ Test message"

    def test_default_drops_empty_timestamp(self):
        fmt = create_default_message_formatter(lambda date: "")
        assert fmt(self._entry()) == "◆ Test message"

    def test_pattern_fields(self):
        fmt = create_pattern_formatter("[{level}] {symbol} {message} ({request_id})", lambda date: "T")
        assert fmt(self._entry(request_id="r-1")) == "[info] ◆ Test message (r-1)"

    def test_pattern_missing_fields_render_empty(self):
        fmt = create_pattern_formatter("{timestamp} {message} {user}", lambda date: "")
        assert fmt(self._entry()) == "Test message"

    def test_pattern_builtin_fields_win_over_metadata(self):
        fmt = create_pattern_formatter("{message}", lambda date: "")
        assert fmt(self._entry(message="shadow")) == "Test message"
    def test_pattern_missing_field_with_format_spec_renders_empty(self):
        """Test that a format spec on an absent field does not raise."""
        fmt = create_pattern_formatter("{message} took {duration:.2f}s", lambda date: "")
        assert fmt(self._entry()) == "Test message took s"
        assert fmt(self._entry(duration=1.5)) == "Test message took 1.50s"

    def test_pattern_missing_field_with_conversion_renders_empty(self):
        fmt = create_pattern_formatter("{message} {user!r:>10}", lambda date: "")
        assert fmt(self._entry()) == "Test message"

    def test_pattern_spec_mismatch_falls_back_to_str(self):
        fmt = create_pattern_formatter("{message} {duration:.2f}", lambda date: "")
        assert fmt(self._entry(duration="slow")) == "Test message slow"

    def test_pattern_non_identifier_metadata_key(self):
        fmt = create_pattern_formatter("{message} ({request-id})", lambda date: "")
        assert fmt(self._entry(**{"request-id": "r-9"})) == "Test message (r-9)"


class TestPatternValidation:
    """Tests that malformed patterns are rejected up front."""

    @pytest.mark.parametrize(
        "pattern",
        ["{message", "message}", "{}", "{0}", "{user.name}", "{items[0]}", "{message!z}"],
    )
    def test_malformed_patterns_rejected(self, pattern):
        with pytest.raises(ConfigurationError, match="Invalid pattern"):
            validate_pattern(pattern)

    def test_formatter_factory_rejects_malformed_pattern(self):
        with pytest.raises(ConfigurationError):
            create_pattern_formatter("{message", lambda date: "")

    def test_logger_config_rejects_malformed_pattern(self):
        with pytest.raises(ConfigurationError, match="Invalid pattern"):
            Logger(transports=[MemoryTransport()], pattern="{message")

    def test_escaped_braces_allowed(self):
        validate_pattern("{{literal}} {message}")

    def test_logging_with_format_spec_on_absent_field(self):
        """Test that a logging call never raises because of pattern fields."""
        memory = MemoryTransport()
        logger = Logger(transports=[memory], pattern="{message} took {duration:.2f}s")

        logger.info("no duration")
        logger.info("timed", duration=0.25)

        assert [e.formatted_message for e in memory.get_logs()] == [
            "no duration took s",
            "timed took 0.25s",
        ]
