"""
Levels, log payloads and records.

Level values are Python-compatible so they line up with the stdlib
``logging`` module. Content is the transient "what to log" half of a call;
LogRecord is what a sink hands to its formatter.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import IntEnum
from typing import Any, Optional


class Level(IntEnum):
    """Log severity, ordered DEBUG < INFO < WARN < ERROR."""
    DEBUG = 10
    INFO = 20
    WARN = 30
    ERROR = 40

    @classmethod
    def from_name(cls, name: str) -> "Level":
        """Resolve level from string name, case-insensitive."""
        name_upper = name.upper()
        if name_upper == "WARNING":
            return cls.WARN
        try:
            return cls[name_upper]
        except KeyError:
            raise ValueError(
                f"Unknown log level '{name}'. "
                f"Valid levels: {', '.join(m.name for m in cls)}"
            )

    @classmethod
    def from_value(cls, value: "int | str | Level") -> "Level":
        """Resolve level from int or string."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            return cls.from_name(value)
        if isinstance(value, int) and not isinstance(value, bool):
            for member in cls:
                if member.value == value:
                    return member
            raise ValueError(
                f"No level with value {value}. "
                f"Valid values: {', '.join(f'{m.name}={m.value}' for m in cls)}"
            )
        raise TypeError(f"Expected int or str, got {type(value).__name__}")


# ── Content ───────────────────────────────────────────────────────────

class Content:
    """
    Payload of a single log call: a message, optionally paired with an error.

    Lazy producers return either a plain value (wrapped as Message) or a
    Content built with ``with_error``.
    """

    __slots__ = ()

    message: str

    @property
    def error(self) -> Optional[BaseException]:
        return None

    @staticmethod
    def of(value: Any) -> "Content":
        """Normalize a producer's return value into Content."""
        if isinstance(value, Content):
            return value
        return Message(str(value))


@dataclass(frozen=True)
class Message(Content):
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class ErrorContent(Content):
    message: str
    exception: BaseException

    def __post_init__(self) -> None:
        if self.exception is None:
            raise TypeError("ErrorContent requires an exception")

    @property
    def error(self) -> BaseException:
        return self.exception


def with_error(message: str, error: BaseException) -> ErrorContent:
    """
    Pair a message with an error, for use inside lazy producers:

        log.warn("Net", lambda: with_error(f"retry {n} failed", exc))
    """
    return ErrorContent(message, error)


# ── Records ───────────────────────────────────────────────────────────

@dataclass(frozen=True)
class LogRecord:
    """Immutable record built by a sink for its formatter."""
    timestamp: datetime
    level: Level
    tag: str
    message: str
    error: Optional[BaseException] = None

    @classmethod
    def create(
        cls,
        level: Level,
        tag: str,
        message: str,
        error: Optional[BaseException] = None,
    ) -> "LogRecord":
        """Factory method with auto-timestamp."""
        return cls(
            timestamp=datetime.now(timezone.utc),
            level=Level.from_value(level),
            tag=tag,
            message=message,
            error=error,
        )
