"""
Logger core: dispatch, composition and the process-wide default logger.

Every logger implements one method, ``log(level, tag, message, error)``.
The per-level methods are routing sugar over it. Loggers compose into
immutable binary trees:

    console + logfile            # fan out, console first
    (console + logfile) - logfile
    tree - FileSink              # strip every FileSink by family key

Removal never mutates a tree. It returns a new tree, the same tree when
nothing matched, EMPTY when nothing is left, or the single survivor
unwrapped.
"""

import threading
from abc import ABC, abstractmethod
from typing import Any, Callable, ClassVar, Optional

from loggerkit.records import Content, Level

TAG = "Logger"


class Key:
    """
    Family identity of a logger type, used for bulk removal from a tree.

    Compared by identity only, so loggers overriding ``__eq__`` do not
    affect family matching.
    """

    __slots__ = ("name",)

    def __init__(self, name: str):
        self.name = name

    def __repr__(self) -> str:
        return f"Key({self.name})"


class Logger(ABC):
    """
    Base logger. Subclasses implement ``log`` only.

    Usage:
        log = TerminalSink() + MemorySink()
        log.info("Net", "Request sent")
        log.warn("Net", exc)                       # message-less warning
        log.debug("Net", lambda: f"payload={dump(body)}")  # lazy
    """

    key: ClassVar[Key]

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        # One family per class unless the class names its own key
        if "key" not in cls.__dict__:
            cls.key = Key(cls.__name__)

    @abstractmethod
    def log(
        self,
        level: Level,
        tag: str,
        message: str,
        error: Optional[BaseException] = None,
    ) -> None:
        """Record ``message`` at ``level`` for ``tag``."""
        ...

    def log_lazy(self, level: Level, tag: str, producer: Callable[[], Any]) -> None:
        """
        Log a message built by ``producer``, only if the default filter passes.

        Plain loggers are wrapped on demand so lazy calls behave the same
        whether or not the receiver is already filtered.
        """
        from loggerkit.filter_logger import FilterLogger

        FilterLogger(self).log_lazy(level, tag, producer)

    # ── Convenience Methods ───────────────────────────────────────

    def debug(self, tag: str, message: Any = "", error: Optional[BaseException] = None) -> None:
        self._dispatch(Level.DEBUG, tag, message, error)

    def info(self, tag: str, message: Any = "", error: Optional[BaseException] = None) -> None:
        self._dispatch(Level.INFO, tag, message, error)

    def warn(self, tag: str, message: Any = "", error: Optional[BaseException] = None) -> None:
        self._dispatch(Level.WARN, tag, message, error)

    def error(self, tag: str, message: Any = "", error: Optional[BaseException] = None) -> None:
        self._dispatch(Level.ERROR, tag, message, error)

    def _dispatch(self, level: Level, tag: str, message: Any, error: Optional[BaseException]) -> None:
        if isinstance(message, BaseException):
            # warn(tag, exc) is warn(tag, "", exc)
            if error is not None:
                raise TypeError("Pass the error either positionally or as error=, not both")
            self.log(level, tag, "", message)
        elif callable(message):
            if error is not None:
                raise TypeError("Lazy producers carry their own error; use with_error()")
            self.log_lazy(level, tag, message)
        elif isinstance(message, Content):
            self.log(level, tag, message.message, message.error)
        else:
            self.log(level, tag, message, error)

    # ── Composition ───────────────────────────────────────────────

    def __add__(self, other: "Logger") -> "Logger":
        if not isinstance(other, Logger):
            return NotImplemented
        return combine(self, other)

    def __sub__(self, other: Any) -> "Logger":
        return exclude(self, other)

    def with_filter(self, filter: Any) -> "Logger":
        from loggerkit.filter_logger import with_filter

        return with_filter(self, filter)

    def without_filter(self) -> "Logger":
        from loggerkit.filter_logger import without_filter

        return without_filter(self)


class EmptyLogger(Logger):
    """No-op logger. Result of removing every member of a tree."""

    _instance: Optional["EmptyLogger"] = None

    def __new__(cls) -> "EmptyLogger":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def log(self, level, tag, message, error=None) -> None:
        pass

    def log_lazy(self, level, tag, producer) -> None:
        pass

    def __repr__(self) -> str:
        return "EmptyLogger"


EMPTY = EmptyLogger()


class CompositeLogger(Logger):
    """Fans every call out to ``head`` then ``tail``."""

    def __init__(self, head: Logger, tail: Logger):
        self.head = head
        self.tail = tail
        self._members: Optional[tuple[Logger, ...]] = None

    @property
    def members(self) -> tuple[Logger, ...]:
        """Leaf loggers in dispatch order, nested composites inlined."""
        if self._members is None:
            self._members = tuple(_flatten(self))
        return self._members

    def log(self, level, tag, message, error=None) -> None:
        self.head.log(level, tag, message, error)
        self.tail.log(level, tag, message, error)

    def __len__(self) -> int:
        return len(self.members)

    def __repr__(self) -> str:
        return "[" + ", ".join(repr(m) for m in self.members) + "]"


def _flatten(logger: Logger):
    stack = [logger]
    while stack:
        node = stack.pop()
        if isinstance(node, CompositeLogger):
            stack.append(node.tail)
            stack.append(node.head)
        else:
            yield node


# ── Algebra ───────────────────────────────────────────────────────────

def combine(a: Logger, b: Logger) -> Logger:
    """``a + b``: a composite dispatching to ``a`` then ``b``."""
    if not isinstance(a, Logger) or not isinstance(b, Logger):
        raise TypeError(
            f"Can only combine loggers, got {type(a).__name__} and {type(b).__name__}"
        )
    return CompositeLogger(a, b)


def exclude(logger: Logger, target: Any) -> Logger:
    """
    ``logger - target``.

    target may be a Key or a Logger subclass (removes every member of that
    family), a composite (removes each distinct member once, left to
    right) or a single logger (removes its first occurrence).
    """
    if isinstance(target, type) and issubclass(target, Logger):
        target = target.key
    if isinstance(target, Key):
        return _remove_family(logger, target)
    if not isinstance(target, Logger):
        raise TypeError(f"Cannot exclude {type(target).__name__} from a logger")
    if logger == target:
        return EMPTY
    if isinstance(target, CompositeLogger):
        distinct: list[Logger] = []
        for member in target.members:
            if member not in distinct:
                distinct.append(member)
        result = logger
        for member in distinct:
            result = _remove_first(result, member)
        return result
    return _remove_first(logger, target)


def _remove_first(node: Logger, target: Logger) -> Logger:
    if node == target:
        return EMPTY
    if not isinstance(node, CompositeLogger):
        return node

    head = _remove_first(node.head, target)
    if head is not node.head:
        if head is EMPTY:
            return node.tail
        return CompositeLogger(head, node.tail)

    tail = _remove_first(node.tail, target)
    if tail is node.tail:
        return node
    if tail is EMPTY:
        return node.head
    return CompositeLogger(node.head, tail)


def _remove_family(node: Logger, key: Key) -> Logger:
    if node.key is key:
        return EMPTY
    if not isinstance(node, CompositeLogger):
        return node

    head = _remove_family(node.head, key)
    tail = _remove_family(node.tail, key)
    if head is node.head and tail is node.tail:
        return node
    if head is EMPTY:
        return tail
    if tail is EMPTY:
        return head
    return CompositeLogger(head, tail)


# ── Default Logger ────────────────────────────────────────────────────

_default_logger: Optional[Logger] = None
_default_lock = threading.Lock()


def get_default_logger() -> Logger:
    """The process-wide logger behind the top-level functions."""
    logger = _default_logger
    if logger is None:
        with _default_lock:
            if _default_logger is None:
                _install(_system_logger())
            logger = _default_logger
    return logger


def set_default_logger(logger: Logger) -> None:
    """
    Replace the default logger.

    The new value is published first, then announces itself at INFO, so
    the confirmation goes through the new pipeline rather than the old one.
    """
    if not isinstance(logger, Logger):
        raise TypeError(f"Expected Logger, got {type(logger).__name__}")
    with _default_lock:
        _install(logger)
    logger.info(TAG, f"Default logger changed to {logger!r}.")


def _reset_default_logger() -> None:
    """Back to the platform logger, silently. For testing only."""
    with _default_lock:
        _install(None)


def _install(logger: Optional[Logger]) -> None:
    global _default_logger
    _default_logger = logger


def _system_logger() -> Logger:
    from loggerkit.adapters import SYSTEM

    return SYSTEM


# ── Top-level functions ───────────────────────────────────────────────

def log(level: Level, tag: str, message: Any = "", error: Optional[BaseException] = None) -> None:
    get_default_logger()._dispatch(Level.from_value(level), tag, message, error)


def debug(tag: str, message: Any = "", error: Optional[BaseException] = None) -> None:
    get_default_logger().debug(tag, message, error)


def info(tag: str, message: Any = "", error: Optional[BaseException] = None) -> None:
    get_default_logger().info(tag, message, error)


def warn(tag: str, message: Any = "", error: Optional[BaseException] = None) -> None:
    get_default_logger().warn(tag, message, error)


def error(tag: str, message: Any = "", error: Optional[BaseException] = None) -> None:
    get_default_logger().error(tag, message, error)
