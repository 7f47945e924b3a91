"""
Sinks: leaf loggers that perform the actual write.

Sinks hold no filtering or routing logic; that is what FilterLogger and
composition are for. Each one turns a call into a LogRecord, renders it
with its formatter and writes it somewhere:

  TerminalSink  stdout/stderr, the platform default (SYSTEM)
  FileSink      append-only file, one per UTC day or a single file
  MemorySink    bounded in-memory ring buffer

Write errors are not caught here; they propagate to the caller.
"""

import sys
import threading
from abc import abstractmethod
from collections import deque
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from loggerkit.core import Logger
from loggerkit.formatters import (
    LogFormatter,
    CompactFormatter,
    DetailedFormatter,
    format_error,
)
from loggerkit.records import Level, LogRecord


class Sink(Logger):
    """Base sink. Receives every call that reaches it."""

    def __init__(self, name: str, formatter: LogFormatter | None = None):
        self.name = name
        self._formatter = formatter

    @property
    def formatter(self) -> LogFormatter:
        if self._formatter is None:
            self._formatter = self._default_formatter()
        return self._formatter

    @formatter.setter
    def formatter(self, value: LogFormatter) -> None:
        self._formatter = value

    def _default_formatter(self) -> LogFormatter:
        """Subclass-specific default."""
        return CompactFormatter()

    def log(self, level, tag, message, error=None) -> None:
        self.emit(LogRecord.create(level, tag, message, error))

    @abstractmethod
    def emit(self, record: LogRecord) -> None:
        """Write a log record."""
        ...

    def flush(self) -> None:
        """Flush any buffered records. Override in buffered sinks."""
        pass

    def close(self) -> None:
        """Cleanup. Override if the sink holds resources."""
        self.flush()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name})"


class TerminalSink(Sink):
    """
    Writes to stdout/stderr, optionally with ANSI color.
    WARN+ goes to stderr, everything else to stdout. An attached error's
    traceback follows the message line on the same stream.
    """

    COLORS = {
        Level.DEBUG: "\033[36m",   # cyan
        Level.INFO: "\033[37m",    # white/default
        Level.WARN: "\033[33m",    # yellow
        Level.ERROR: "\033[31m",   # red
    }
    RESET = "\033[0m"

    def __init__(
        self,
        name: str = "terminal",
        formatter: LogFormatter | None = None,
        color: bool = False,
    ):
        super().__init__(name, formatter)
        self.color = color

    def emit(self, record: LogRecord) -> None:
        formatted = self.formatter.format(record)
        if record.error is not None and not self.formatter.renders_error:
            formatted = f"{formatted}\n{format_error(record.error)}"
        if self.color:
            formatted = f"{self.COLORS[record.level]}{formatted}{self.RESET}"
        stream = sys.stderr if record.level >= Level.WARN else sys.stdout
        print(formatted, file=stream, flush=True)


class FileSink(Sink):
    """
    Appends rendered records to a file, tracebacks included.

    rotation="daily" writes to ``<stem>_<YYYY-MM-DD><suffix>`` next to
    ``path`` and switches files when a record's UTC date changes.
    rotation="none" writes to ``path`` itself for the life of the sink.
    """

    def __init__(
        self,
        name: str = "logfile",
        formatter: LogFormatter | None = None,
        path: str | Path = "logs/app.log",
        rotation: str = "daily",
        retention_days: int = 30,
    ):
        super().__init__(name, formatter)
        if rotation not in ("daily", "none"):
            raise ValueError(f"Unknown rotation '{rotation}'. Valid: daily, none")
        self.base_path = Path(path)
        self.rotation = rotation
        self.retention_days = retention_days
        self._current_path: Optional[Path] = None
        self._file = None
        self._lock = threading.Lock()

    def _default_formatter(self) -> LogFormatter:
        return DetailedFormatter()

    @property
    def current_path(self) -> Optional[Path]:
        """File currently open for writing, None before the first record."""
        return self._current_path

    def _dated(self, date_str: str) -> Path:
        suffix = self.base_path.suffix or ".log"
        return self.base_path.with_name(f"{self.base_path.stem}_{date_str}{suffix}")

    def _target(self, record: LogRecord) -> Path:
        if self.rotation == "daily":
            return self._dated(record.timestamp.strftime("%Y-%m-%d"))
        return self.base_path

    def emit(self, record: LogRecord) -> None:
        formatted = self.formatter.format(record)
        target = self._target(record)
        with self._lock:
            if target != self._current_path or self._file is None:
                if self._file is not None:
                    self._file.close()
                target.parent.mkdir(parents=True, exist_ok=True)
                self._file = open(target, "a", encoding="utf-8")
                self._current_path = target
            self._file.write(formatted + "\n")

    def flush(self) -> None:
        with self._lock:
            if self._file:
                self._file.flush()

    def close(self) -> None:
        """Flush and close the open file. The next record reopens it."""
        self.flush()
        with self._lock:
            if self._file:
                self._file.close()
                self._file = None

    def cleanup_old_files(self) -> int:
        """
        Delete dated files older than ``retention_days`` by modification time.

        Only ``<stem>_*<suffix>`` files are candidates, and the file being
        written is always kept. With rotation="none" the single log file is
        never removed; only dated files left by earlier daily runs are.
        Returns the number of files deleted.
        """
        folder = self.base_path.parent
        if not folder.exists():
            return 0

        cutoff = datetime.now(timezone.utc).timestamp() - self.retention_days * 86400
        suffix = self.base_path.suffix or ".log"
        removed = 0
        for candidate in folder.glob(f"{self.base_path.stem}_*{suffix}"):
            if candidate == self._current_path:
                continue
            if candidate.stat().st_mtime < cutoff:
                candidate.unlink()
                removed += 1
        return removed


class MemorySink(Sink):
    """
    Ring buffer of the last N records.
    Does not grow unbounded; useful for in-process diagnostics and tests.
    """

    def __init__(
        self,
        name: str = "memory",
        formatter: LogFormatter | None = None,
        capacity: int = 10000,
    ):
        super().__init__(name, formatter)
        self._buffer: deque[LogRecord] = deque(maxlen=capacity)
        self._lock = threading.Lock()

    def emit(self, record: LogRecord) -> None:
        with self._lock:
            self._buffer.append(record)

    def get_recent(self, n: int = 100, tags: set[str] | None = None) -> list[LogRecord]:
        """Most recent records, oldest first, optionally limited to ``tags``."""
        with self._lock:
            records = list(self._buffer)

        if tags:
            records = [r for r in records if r.tag in tags]

        return records[-n:] if n > 0 else []

    @property
    def records(self) -> list[LogRecord]:
        with self._lock:
            return list(self._buffer)

    @property
    def messages(self) -> list[str]:
        """Rendered lines, one per buffered record."""
        return [self.formatter.format(r) for r in self.records]

    def clear(self) -> None:
        with self._lock:
            self._buffer.clear()

    @property
    def count(self) -> int:
        return len(self._buffer)

    @property
    def capacity(self) -> int:
        return self._buffer.maxlen


# Platform logger: the initial default.
SYSTEM = TerminalSink(name="system")
