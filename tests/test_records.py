"""
Tests for levels, content and records.

Covers:
- Level ordering and name/value resolution
- Message / ErrorContent invariants
- Content.of normalization and with_error
- LogRecord factory
"""

import pytest

from loggerkit.records import (
    Content,
    ErrorContent,
    Level,
    LogRecord,
    Message,
    with_error,
)


# ═══════════════════════════════════════════════════════════════════
#  Level
# ═══════════════════════════════════════════════════════════════════

class TestLevel:
    def test_levels_ordered(self):
        assert Level.DEBUG < Level.INFO < Level.WARN < Level.ERROR

    def test_python_compatible_values(self):
        assert Level.DEBUG == 10
        assert Level.INFO == 20
        assert Level.WARN == 30
        assert Level.ERROR == 40

    def test_from_name_case_insensitive(self):
        assert Level.from_name("debug") == Level.DEBUG
        assert Level.from_name("Info") == Level.INFO
        assert Level.from_name("WARN") == Level.WARN

    def test_warning_alias(self):
        assert Level.from_name("warning") is Level.WARN

    def test_from_name_invalid(self):
        with pytest.raises(ValueError, match="Unknown log level"):
            Level.from_name("critical")

    def test_from_value(self):
        assert Level.from_value(40) is Level.ERROR
        assert Level.from_value("info") is Level.INFO
        assert Level.from_value(Level.WARN) is Level.WARN

    def test_from_value_unknown_int(self):
        with pytest.raises(ValueError, match="No level with value 15"):
            Level.from_value(15)

    def test_from_value_wrong_type(self):
        with pytest.raises(TypeError):
            Level.from_value(2.5)


# ═══════════════════════════════════════════════════════════════════
#  Content
# ═══════════════════════════════════════════════════════════════════

class TestContent:
    def test_message_has_no_error(self):
        content = Message("hello")
        assert content.message == "hello"
        assert content.error is None
        assert str(content) == "hello"

    def test_error_content_always_has_error(self):
        exc = RuntimeError("boom")
        content = ErrorContent("failed", exc)
        assert content.message == "failed"
        assert content.error is exc

    def test_error_content_rejects_missing_error(self):
        with pytest.raises(TypeError):
            ErrorContent("failed", None)

    def test_with_error(self):
        exc = KeyError("id")
        content = with_error("lookup failed", exc)
        assert isinstance(content, ErrorContent)
        assert content.error is exc

    def test_of_passes_content_through(self):
        content = with_error("x", ValueError())
        assert Content.of(content) is content

    def test_of_wraps_plain_values(self):
        assert Content.of("text") == Message("text")
        assert Content.of(42) == Message("42")

    def test_immutable(self):
        content = Message("a")
        with pytest.raises(AttributeError):
            content.message = "b"


# ═══════════════════════════════════════════════════════════════════
#  LogRecord
# ═══════════════════════════════════════════════════════════════════

class TestLogRecord:
    def test_create_basic(self):
        record = LogRecord.create(Level.INFO, "App", "started")
        assert record.level is Level.INFO
        assert record.tag == "App"
        assert record.message == "started"
        assert record.error is None

    def test_create_resolves_int_level(self):
        record = LogRecord.create(30, "App", "careful")
        assert record.level is Level.WARN

    def test_timestamp_is_utc(self):
        record = LogRecord.create(Level.INFO, "App", "x")
        assert record.timestamp.tzinfo is not None
