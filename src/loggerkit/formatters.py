"""
Log formatters.

Each sink can use a different formatter.
  - compact:  "[{timestamp:%Y-%m-%d %H:%M:%S.mmm}] [{level:<5}/{tag}] {message}"
  - detailed: compact line plus the error's traceback, if any
  - json:     one JSON object per line for machine parsing
"""

import json
import traceback
from abc import ABC, abstractmethod
from typing import Any

from loggerkit.records import LogRecord


class LogFormatter(ABC):
    """Base formatter. Transforms LogRecord → string."""

    # True when format() already includes the attached error's traceback
    renders_error = False

    @abstractmethod
    def format(self, record: LogRecord) -> str: ...


class CompactFormatter(LogFormatter):
    """
    Single-line format for terminal display. The traceback, if any, is
    printed by the sink rather than folded into the line.
    Example: [2026-10-19 14:32:05.123] [INFO /Net] Request sent
    """

    def format(self, record: LogRecord) -> str:
        ts = record.timestamp.strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]
        return f"[{ts}] [{record.level.name:<5}/{record.tag}] {record.message}"


class DetailedFormatter(CompactFormatter):
    """
    Compact line followed by the formatted exception, for files.
    Example:
        [2026-10-19 14:32:05.123] [ERROR/Db] Query failed
        Traceback (most recent call last):
          ...
        TimeoutError: pool exhausted
    """

    renders_error = True

    def format(self, record: LogRecord) -> str:
        line = super().format(record)
        if record.error is None:
            return line
        return line + "\n" + format_error(record.error)


class JsonFormatter(LogFormatter):
    """One JSON object per line."""

    renders_error = True

    def format(self, record: LogRecord) -> str:
        obj: dict[str, Any] = {
            "timestamp": record.timestamp.isoformat(),
            "level": record.level.value,
            "level_name": record.level.name,
            "tag": record.tag,
            "message": record.message,
        }
        if record.error is not None:
            obj["error"] = {
                "type": type(record.error).__name__,
                "message": str(record.error),
                "traceback": format_error(record.error),
            }
        return json.dumps(obj, default=str)


def format_error(error: BaseException) -> str:
    """Full traceback text for an exception, without the trailing newline."""
    return "".join(
        traceback.format_exception(type(error), error, error.__traceback__)
    ).rstrip("\n")


FORMATTERS: dict[str, type[LogFormatter]] = {
    "compact": CompactFormatter,
    "detailed": DetailedFormatter,
    "json": JsonFormatter,
}


def resolve_formatter(name: str | None) -> LogFormatter | None:
    """Formatter instance for a config name; None keeps the sink's default."""
    if name is None:
        return None
    try:
        return FORMATTERS[name.lower()]()
    except KeyError:
        raise ValueError(
            f"Unknown formatter '{name}'. Valid formatters: {', '.join(FORMATTERS)}"
        )
