"""
Runtime reconfiguration of the process-wide defaults.

Provides control over logging without restart:
- Apply a LoggerConfig (or a plain dict) at startup
- Add or remove sinks from the default logger
- Change the level floor, trace individual tags
- Get a status overview

``configure`` installs the sinks behind a FilterLogger that follows the
default filter, so eager and lazy calls alike honor the configured level
and tag rules, and later ``set_level`` / ``trace_tag`` calls take effect
immediately.

Usage:
    configure(LoggerConfig.from_yaml("logging.yaml"))

    reconfig = LoggerReconfig()
    reconfig.add_sink(MemorySink())
    reconfig.set_level("WARN")
    reconfig.trace_tag("net.handshake")
    reconfig.remove_sink(MemorySink)      # by family
    status = reconfig.status()
"""

from __future__ import annotations

from typing import Any, Callable

from loggerkit.config import LoggerConfig
from loggerkit.core import CompositeLogger, Key, Logger, get_default_logger, set_default_logger
from loggerkit.filter_logger import FilterLogger
from loggerkit.filters import at_least, get_default_filter, set_default_filter, tag_equals


def configure(config: LoggerConfig | dict) -> Logger:
    """
    Install the filter and logger described by ``config``.

    The filter goes first so the logger's confirmation is already subject
    to it. Returns the new default logger, a FilterLogger over the sinks.
    """
    if isinstance(config, dict):
        config = LoggerConfig.from_dict(config)
    set_default_filter(config.build_filter())
    logger = FilterLogger(config.build_logger())
    set_default_logger(logger)
    return logger


class LoggerReconfig:
    """
    Runtime reconfiguration interface for the default logger and filter.

    Sink operations act on the pipeline behind an outer FilterLogger, so
    added sinks stay behind the same filter.
    """

    # ── Sink management ───────────────────────────────────────

    def add_sink(self, logger: Logger) -> Logger:
        """Append ``logger`` to the default pipeline."""
        pipeline, rewrap = _unwrap(get_default_logger())
        updated = rewrap(pipeline + logger)
        set_default_logger(updated)
        return updated

    def remove_sink(self, target: Logger | Key | type) -> Logger:
        """
        Remove an instance (first occurrence) or a whole family.
        Leaves the default untouched when nothing matched.
        """
        current = get_default_logger()
        pipeline, rewrap = _unwrap(current)
        remaining = pipeline - target
        if remaining is pipeline:
            return current
        updated = rewrap(remaining)
        set_default_logger(updated)
        return updated

    def list_sinks(self) -> list[str]:
        """Leaf loggers of the default pipeline, in dispatch order."""
        return [repr(m) for m in _members(get_default_logger())]

    # ── Filter management ─────────────────────────────────────

    def set_level(self, level: str | int) -> None:
        """Replace the default filter with a plain level floor."""
        set_default_filter(at_least(level))

    def trace_tag(self, tag: str) -> None:
        """Let ``tag`` through at any level, on top of the current filter."""
        set_default_filter(get_default_filter() | tag_equals(tag))

    # ── Status ────────────────────────────────────────────────

    def status(self) -> dict[str, Any]:
        """
        Get a status overview.

        Returns:
            {
                "logger": "[TerminalSink(system), MemorySink(memory)]",
                "sinks": [{"name": ..., "type": ...}, ...],
                "filter": "Filter.at_least(INFO)",
            }
        """
        logger = get_default_logger()
        sinks = []
        for member in _members(logger):
            sinks.append({
                "name": getattr(member, "name", repr(member)),
                "type": type(member).__name__,
            })
        return {
            "logger": repr(logger),
            "sinks": sinks,
            "filter": repr(get_default_filter()),
        }


def _unwrap(logger: Logger) -> tuple[Logger, Callable[[Logger], Logger]]:
    """Split an outer FilterLogger from the pipeline it guards."""
    if isinstance(logger, FilterLogger):
        flt = None if logger.inherits_default else logger.filter
        return logger.logger, lambda inner: FilterLogger(inner, flt)
    return logger, lambda inner: inner


def _members(logger: Logger) -> tuple[Logger, ...]:
    logger, _ = _unwrap(logger)
    if isinstance(logger, CompositeLogger):
        return logger.members
    return (logger,)
