"""Unit tests for utility modules."""

import io
import json
import sys

import pytest
from identifier import EPOCH_MS, set_random_source, validate
from internal.logging import LogLevel, StructuredLogger, get_logger
from utils.timestamp import datetime_from_millis, format_timestamp, now_micros, now_millis


class TestTimestamp:
    """Tests for timestamp utilities."""

    def test_format_timestamp_iso_format(self):
        """Timestamp is ISO 8601 format."""
        ts = format_timestamp()
        assert "T" in ts
        assert ts.endswith("Z")

    def test_format_timestamp_has_microseconds(self):
        """Timestamp includes microseconds."""
        ts = format_timestamp()
        decimal_part = ts.split(".")[1].rstrip("Z")
        assert len(decimal_part) == 6

    def test_format_timestamp_explicit(self):
        """Explicit microsecond value is formatted exactly."""
        assert format_timestamp(1_500_000) == "1970-01-01T00:00:01.500000Z"

    def test_now_micros_returns_int(self):
        """now_micros returns integer."""
        assert isinstance(now_micros(), int)

    def test_now_millis_reasonable_value(self):
        """now_millis returns a timestamp after 2020."""
        millis = now_millis()
        assert isinstance(millis, int)
        assert millis > 1577836800000  # 2020-01-01

    def test_datetime_from_millis(self):
        """Millisecond counts map to exact UTC datetimes."""
        dt = datetime_from_millis(EPOCH_MS + 1_234)
        assert dt.isoformat() == "1985-05-17T00:00:01.234000+00:00"

    def test_datetime_from_millis_overflow(self):
        """Instants past year 9999 overflow."""
        with pytest.raises(OverflowError):
            datetime_from_millis(2**48 + EPOCH_MS)


class TestStructuredLogger:
    """Tests for the JSON logger."""

    def test_emits_json_line(self):
        """Records are one JSON object per line."""
        stream = io.StringIO()
        logger = StructuredLogger(LogLevel.DEBUG, stream)
        logger.info("minted", count=3)
        record = json.loads(stream.getvalue())
        assert record["level"] == "INFO"
        assert record["msg"] == "minted"
        assert record["count"] == 3
        assert "timestamp" in record

    def test_error_field(self):
        """Errors are stringified under err."""
        stream = io.StringIO()
        StructuredLogger(LogLevel.DEBUG, stream).warn("oops", error=ValueError("bad"))
        assert json.loads(stream.getvalue())["err"] == "bad"

    def test_level_filter(self):
        """Records below the level are dropped."""
        stream = io.StringIO()
        logger = StructuredLogger(LogLevel.WARN, stream)
        logger.info("hidden")
        logger.debug("hidden")
        assert stream.getvalue() == ""

    def test_level_from_name(self):
        """Config names map to levels."""
        assert LogLevel.from_name("debug") is LogLevel.DEBUG
        assert LogLevel.from_name("WARN") is LogLevel.WARN
        assert LogLevel.from_name("nonsense") is LogLevel.INFO

    def test_configure_replaces_global(self):
        """configure() swaps the process-wide logger."""
        StructuredLogger.configure(LogLevel.ERROR)
        assert get_logger().level is LogLevel.ERROR
        StructuredLogger.configure(LogLevel.INFO)


class TestCrashHandler:
    """Tests for crash handling utilities."""

    def test_configure_sets_path(self):
        """configure() sets crash log path."""
        from utils.crash import configure, _crash_log
        original = _crash_log

        configure("/tmp/test_crash.log")
        from utils import crash
        assert crash._crash_log == "/tmp/test_crash.log"

        # Restore
        configure(original)

    def test_install_crash_handler(self):
        """install_crash_handler sets sys.excepthook."""
        from utils.crash import install_crash_handler, log_crash

        original_hook = sys.excepthook
        install_crash_handler()

        assert sys.excepthook == log_crash

        # Restore
        sys.excepthook = original_hook

    def test_log_crash_writes_record(self, tmp_path, capsys):
        """Crash records are tagged with a valid SOLID ID."""
        from utils import crash
        original = crash._crash_log
        crash.configure(str(tmp_path / "logs" / "crash.log"))
        try:
            try:
                raise RuntimeError("boom")
            except RuntimeError:
                crash.log_crash(*sys.exc_info())
        finally:
            crash.configure(original)

        record = json.loads((tmp_path / "logs" / "crash.log").read_text().splitlines()[0])
        assert record["type"] == "RuntimeError"
        assert record["msg"] == "boom"
        assert validate(record["id"])
        assert "CRASH" in capsys.readouterr().err

    def test_log_crash_without_random_source(self, tmp_path, capsys):
        """Crash logging survives a missing random source."""
        from utils import crash
        original = crash._crash_log
        crash.configure(str(tmp_path / "crash.log"))
        set_random_source(None)
        try:
            crash.log_crash(ValueError, ValueError("x"), None)
        finally:
            crash.configure(original)

        record = json.loads((tmp_path / "crash.log").read_text())
        assert record["id"] == "unavailable"

    def test_crash_handlers_survive_failing_source(self, tmp_path, capsys):
        """A source raising a non-domain error still yields crash records."""
        from utils import crash

        def broken_source():
            raise TypeError("bad source")

        original = crash._crash_log
        crash.configure(str(tmp_path / "crash.log"))
        set_random_source(broken_source)
        try:
            crash.log_crash(ValueError, ValueError("x"), None)
            crash.create_async_handler()(None, {"exception": KeyError("k")})
        finally:
            crash.configure(original)

        records = [json.loads(line) for line in (tmp_path / "crash.log").read_text().splitlines()]
        assert [r["id"] for r in records] == ["unavailable", "unavailable"]
        assert [r["type"] for r in records] == ["ValueError", "KeyError"]

    def test_async_handler(self, tmp_path):
        """Event-loop handler writes a crash record."""
        from utils import crash
        original = crash._crash_log
        crash.configure(str(tmp_path / "crash.log"))
        try:
            handler = crash.create_async_handler()
            handler(None, {"exception": KeyError("k"), "message": "task failed"})
        finally:
            crash.configure(original)

        record = json.loads((tmp_path / "crash.log").read_text())
        assert record["type"] == "KeyError"
        assert "task failed" in record["context"]
