"""
FilterLogger: consults a Filter before forwarding to a wrapped logger.

The lazy path is the point of this module. ``log_lazy`` evaluates the
filter before calling the producer, so formatting, serialization or
exception wrapping inside the producer costs nothing for rejected calls:

    log = sink.with_filter(at_least(Level.WARN))
    log.debug("Net", lambda: f"frame={frame.hex()}")   # producer never runs
"""

from typing import Any, Callable, Optional

from loggerkit.core import Logger
from loggerkit.filters import Filter, evaluate, get_default_filter
from loggerkit.records import Content, Level


class FilterLogger(Logger):
    """
    Wraps ``logger`` with ``filter``.

    Without an explicit filter the global default is looked up on every
    call, so later ``set_default_filter`` calls apply to existing wrappers.
    """

    def __init__(self, logger: Logger, filter: Optional[Filter] = None):
        if not isinstance(logger, Logger):
            raise TypeError(f"Expected Logger, got {type(logger).__name__}")
        if filter is not None and not isinstance(filter, Filter):
            raise TypeError(f"Expected Filter, got {type(filter).__name__}")
        self.logger = logger
        self._filter = filter

    @property
    def filter(self) -> Filter:
        if self._filter is None:
            return get_default_filter()
        return self._filter

    @property
    def inherits_default(self) -> bool:
        return self._filter is None

    def log(self, level, tag, message, error=None) -> None:
        if evaluate(self.filter, level, tag):
            self.logger.log(level, tag, message, error)

    def log_lazy(self, level: Level, tag: str, producer: Callable[[], Any]) -> None:
        if evaluate(self.filter, level, tag):
            content = Content.of(producer())
            self.logger.log(level, tag, content.message, content.error)

    def __repr__(self) -> str:
        return f"FilterLogger(filter={self.filter!r}, logger={self.logger!r})"


def with_filter(logger: Logger, filter: Filter) -> Logger:
    """Wrap ``logger`` so calls rejected by ``filter`` go nowhere."""
    return FilterLogger(logger, filter)


def without_filter(logger: Logger) -> Logger:
    """Peel one FilterLogger layer. Anything else comes back unchanged."""
    if isinstance(logger, FilterLogger):
        return logger.logger
    return logger
