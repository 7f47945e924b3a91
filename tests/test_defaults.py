"""
Tests for the process-wide default logger and the top-level functions.

Covers:
- Platform logger as the initial default
- Reassignment announces itself through the new logger, exactly once
- Top-level debug/info/warn/error/log routing, message-less warnings
- Lazy top-level calls against the default filter
- Thread-safe publication of the default slot
"""

import threading

import pytest

import loggerkit
from loggerkit import filters
from loggerkit.adapters import SYSTEM, MemorySink, TerminalSink
from loggerkit.core import (
    Logger,
    _reset_default_logger,
    get_default_logger,
    set_default_logger,
)
from loggerkit.filters import at_least, set_default_filter
from loggerkit.records import Level, with_error


@pytest.fixture(autouse=True)
def reset_defaults():
    """Reset default logger and filter before and after each test."""
    _reset_default_logger()
    filters._reset_default_filter()
    yield
    _reset_default_logger()
    filters._reset_default_filter()


@pytest.fixture
def memory():
    """A MemorySink installed as default, with its confirmation cleared."""
    sink = MemorySink()
    set_default_logger(sink)
    sink.clear()
    return sink


# ═══════════════════════════════════════════════════════════════════
#  Default logger slot
# ═══════════════════════════════════════════════════════════════════

class TestDefaultLogger:
    def test_initial_default_is_system(self):
        assert get_default_logger() is SYSTEM
        assert isinstance(SYSTEM, TerminalSink)

    def test_reassignment_announced_once_through_new_logger(self):
        old = MemorySink(name="old")
        set_default_logger(old)
        old.clear()

        new = MemorySink(name="new")
        set_default_logger(new)

        assert old.count == 0
        assert new.count == 1
        record = new.records[0]
        assert record.level is Level.INFO
        assert record.tag == "Logger"
        assert record.message == "Default logger changed to MemorySink(new)."

    def test_announcement_precedes_caller_logs(self):
        sink = MemorySink()
        set_default_logger(sink)
        loggerkit.info("App", "first caller message")
        assert [r.message for r in sink.records] == [
            "Default logger changed to MemorySink(memory).",
            "first caller message",
        ]

    def test_announcement_uses_composite_display(self):
        a, b = MemorySink(name="a"), MemorySink(name="b")
        set_default_logger(a + b)
        assert a.records[0].message == "Default logger changed to [MemorySink(a), MemorySink(b)]."
        assert b.count == 1

    def test_new_value_published_before_announcement(self):
        seen = []

        class Probe(Logger):
            def log(self, level, tag, message, error=None):
                seen.append(get_default_logger() is self)

        set_default_logger(Probe())
        assert seen == [True]

    def test_rejects_non_logger(self):
        with pytest.raises(TypeError):
            set_default_logger(print)
        assert get_default_logger() is SYSTEM

    def test_reset_hook_is_silent(self, capsys):
        set_default_logger(MemorySink())
        _reset_default_logger()
        assert get_default_logger() is SYSTEM
        assert capsys.readouterr().out == ""

    def test_concurrent_reads_and_writes(self):
        sinks = [MemorySink(name=f"s{i}") for i in range(8)]
        seen = []

        def writer(sink):
            set_default_logger(sink)

        def reader():
            for _ in range(100):
                seen.append(get_default_logger())

        threads = [threading.Thread(target=writer, args=(s,)) for s in sinks]
        threads += [threading.Thread(target=reader) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert get_default_logger() in sinks
        assert all(isinstance(logger, Logger) for logger in seen)


# ═══════════════════════════════════════════════════════════════════
#  Top-level functions
# ═══════════════════════════════════════════════════════════════════

class TestTopLevelFunctions:
    def test_levels_route_to_default(self, memory):
        loggerkit.debug("T", "d")
        loggerkit.info("T", "i")
        loggerkit.warn("T", "w")
        loggerkit.error("T", "e")
        assert [(r.level, r.message) for r in memory.records] == [
            (Level.DEBUG, "d"),
            (Level.INFO, "i"),
            (Level.WARN, "w"),
            (Level.ERROR, "e"),
        ]

    def test_error_argument(self, memory):
        exc = OSError("disk full")
        loggerkit.error("Db", "write failed", exc)
        assert memory.records[0].error is exc

    def test_warn_with_only_error(self, memory):
        exc = TimeoutError("slow")
        loggerkit.warn("Net", exc)
        record = memory.records[0]
        assert record.level is Level.WARN
        assert record.message == ""
        assert record.error is exc

    def test_error_passed_twice_rejected(self, memory):
        with pytest.raises(TypeError):
            loggerkit.warn("Net", TimeoutError(), TimeoutError())

    def test_generic_log(self, memory):
        loggerkit.log("warn", "T", "by name")
        loggerkit.log(Level.ERROR, "T", "by level")
        assert [r.level for r in memory.records] == [Level.WARN, Level.ERROR]

    def test_content_argument(self, memory):
        exc = ValueError("x")
        loggerkit.info("T", with_error("wrapped", exc))
        record = memory.records[0]
        assert record.message == "wrapped"
        assert record.error is exc

    def test_follows_reassignment(self, memory):
        other = MemorySink(name="other")
        set_default_logger(other)
        loggerkit.info("T", "after")
        assert memory.count == 0
        assert other.records[-1].message == "after"

    def test_system_output(self, capsys):
        loggerkit.info("App", "hello")
        loggerkit.error("App", "failed")
        captured = capsys.readouterr()
        assert "[INFO /App] hello" in captured.out
        assert "[ERROR/App] failed" in captured.err


# ═══════════════════════════════════════════════════════════════════
#  Lazy top-level calls
# ═══════════════════════════════════════════════════════════════════

class TestLazyTopLevel:
    def test_producer_gated_by_default_filter(self, memory):
        set_default_filter(at_least(Level.INFO))
        memory.clear()
        counter = 0

        def producer():
            nonlocal counter
            counter += 1
            return "computed"

        loggerkit.debug("T", producer)
        assert counter == 0

        loggerkit.info("T", producer)
        assert counter == 1
        assert [r.message for r in memory.records] == ["computed"]

    def test_lazy_error_content(self, memory):
        exc = RuntimeError("negative")
        loggerkit.warn("T", lambda: with_error("At least one element is negative", exc))
        record = memory.records[0]
        assert record.level is Level.WARN
        assert record.error is exc

    def test_filtered_default_logger(self):
        sink = MemorySink()
        set_default_logger(sink.with_filter(at_least(Level.ERROR)))
        calls = []
        loggerkit.warn("T", lambda: calls.append(1) or "w")
        loggerkit.error("T", lambda: calls.append(2) or "e")
        assert calls == [2]
        assert [r.message for r in sink.records] == ["e"]
