"""
loggerkit: a small logging facade with composable loggers and filters.

Application code logs through one interface; the sinks behind it are
swapped per deployment:

    import loggerkit
    from loggerkit import FileSink, SYSTEM, at_least, tag_equals

    loggerkit.set_default_logger(SYSTEM + FileSink(path="logs/app.log"))
    loggerkit.set_default_filter(at_least("INFO") | tag_equals("net"))

    loggerkit.info("App", "Started")
    loggerkit.debug("net", lambda: f"frame={frame.hex()}")   # lazy
    loggerkit.warn("Db", exc)
"""

from loggerkit.records import Level, Content, Message, ErrorContent, LogRecord, with_error
from loggerkit.core import (
    Key,
    Logger,
    EmptyLogger,
    EMPTY,
    CompositeLogger,
    combine,
    exclude,
    get_default_logger,
    set_default_logger,
    log,
    debug,
    info,
    warn,
    error,
)
from loggerkit.filters import (
    Filter,
    AnyFilter,
    LevelFilter,
    TagFilter,
    CompositeFilter,
    ALL,
    NONE,
    evaluate,
    at_least,
    tag_equals,
    tag_in,
    tag_startswith,
    either,
    both,
    negate,
    get_default_filter,
    set_default_filter,
)
from loggerkit.filter_logger import FilterLogger, with_filter, without_filter
from loggerkit.formatters import LogFormatter, CompactFormatter, DetailedFormatter, JsonFormatter
from loggerkit.adapters import Sink, TerminalSink, FileSink, MemorySink, SYSTEM
from loggerkit.config import LoggerConfig, SinkConfig, TagRulesConfig
from loggerkit.reconfig import LoggerReconfig, configure

__version__ = "1.0.0"

__all__ = [
    # Records
    "Level",
    "Content",
    "Message",
    "ErrorContent",
    "LogRecord",
    "with_error",
    # Loggers and composition
    "Key",
    "Logger",
    "EmptyLogger",
    "EMPTY",
    "CompositeLogger",
    "combine",
    "exclude",
    # Default logger and top-level calls
    "get_default_logger",
    "set_default_logger",
    "log",
    "debug",
    "info",
    "warn",
    "error",
    # Filters
    "Filter",
    "AnyFilter",
    "LevelFilter",
    "TagFilter",
    "CompositeFilter",
    "ALL",
    "NONE",
    "evaluate",
    "at_least",
    "tag_equals",
    "tag_in",
    "tag_startswith",
    "either",
    "both",
    "negate",
    "get_default_filter",
    "set_default_filter",
    "FilterLogger",
    "with_filter",
    "without_filter",
    # Formatters and sinks
    "LogFormatter",
    "CompactFormatter",
    "DetailedFormatter",
    "JsonFormatter",
    "Sink",
    "TerminalSink",
    "FileSink",
    "MemorySink",
    "SYSTEM",
    # Configuration
    "LoggerConfig",
    "SinkConfig",
    "TagRulesConfig",
    "LoggerReconfig",
    "configure",
]
