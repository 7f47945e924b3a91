"""
Filters: predicates over (level, tag) deciding whether a call proceeds.

Four closed variants, each declaring only the inputs it needs:

  AnyFilter        ignores both          ALL, NONE
  LevelFilter      level only            at_least(WARN)
  TagFilter        tag only              tag_equals("net"), tag_startswith("db.")
  CompositeFilter  level and tag         a | b, a & b, ~a

``evaluate`` is the single dispatch point. Composition short-circuits
left to right. Built-in predicates are total and side-effect-free.
"""

import threading
from typing import Callable, Optional

from loggerkit.records import Level


class Filter:
    """Base of the four filter variants."""

    def __init__(self, description: str):
        self.description = description

    def __call__(self, level: Level, tag: str) -> bool:
        return evaluate(self, level, tag)

    def __or__(self, other: "Filter") -> "Filter":
        if not isinstance(other, Filter):
            return NotImplemented
        return either(self, other)

    def __and__(self, other: "Filter") -> "Filter":
        if not isinstance(other, Filter):
            return NotImplemented
        return both(self, other)

    __add__ = __or__
    __sub__ = __and__

    def __invert__(self) -> "Filter":
        return negate(self)

    def __repr__(self) -> str:
        return self.description


class AnyFilter(Filter):
    def __init__(self, predicate: Callable[[], bool], description: str):
        super().__init__(description)
        self._predicate = predicate

    def filter(self) -> bool:
        return self._predicate()


class LevelFilter(Filter):
    def __init__(self, predicate: Callable[[Level], bool], description: str):
        super().__init__(description)
        self._predicate = predicate

    def filter(self, level: Level) -> bool:
        return self._predicate(level)


class TagFilter(Filter):
    def __init__(self, predicate: Callable[[str], bool], description: str):
        super().__init__(description)
        self._predicate = predicate

    def filter(self, tag: str) -> bool:
        return self._predicate(tag)


class CompositeFilter(Filter):
    def __init__(self, predicate: Callable[[Level, str], bool], description: str):
        super().__init__(description)
        self._predicate = predicate

    def filter(self, level: Level, tag: str) -> bool:
        return self._predicate(level, tag)


def evaluate(filter: Filter, level: Level, tag: str) -> bool:
    """Apply ``filter`` to a call, supplying only what its variant reads."""
    if isinstance(filter, AnyFilter):
        return filter.filter()
    if isinstance(filter, LevelFilter):
        return filter.filter(level)
    if isinstance(filter, TagFilter):
        return filter.filter(tag)
    if isinstance(filter, CompositeFilter):
        return filter.filter(level, tag)
    raise TypeError(f"Unknown filter type {type(filter).__name__}")


ALL: Filter = AnyFilter(lambda: True, "Filter.ALL")
NONE: Filter = AnyFilter(lambda: False, "Filter.NONE")


# ── Factories ─────────────────────────────────────────────────────────

def at_least(level: "Level | int | str") -> Filter:
    """Pass calls at ``level`` or above. DEBUG is the floor, so that is ALL."""
    threshold = Level.from_value(level)
    if threshold == Level.DEBUG:
        return ALL
    return LevelFilter(lambda lvl: lvl >= threshold, f"Filter.at_least({threshold.name})")


def tag_equals(tag: str) -> Filter:
    return TagFilter(lambda t: t == tag, f"Filter.tag_equals({tag!r})")


def tag_in(*tags: str) -> Filter:
    """Pass calls whose tag is any of ``tags``. No tags passes nothing."""
    if not tags:
        return NONE
    members = frozenset(tags)
    return TagFilter(lambda t: t in members, f"Filter.tag_in({', '.join(map(repr, sorted(members)))})")


def tag_startswith(prefix: str) -> Filter:
    """Match a dotted tag family: ``tag_startswith("db")`` passes "db" and "db.pool"."""
    dotted = prefix.rstrip(".") + "."

    def matches(tag: str) -> bool:
        return tag == prefix or tag.startswith(dotted)

    return TagFilter(matches, f"Filter.tag_startswith({prefix!r})")


# ── Combinators ───────────────────────────────────────────────────────

def either(a: Filter, b: Filter) -> Filter:
    """OR. ``b`` is consulted only when ``a`` rejects."""
    return CompositeFilter(
        lambda level, tag: evaluate(a, level, tag) or evaluate(b, level, tag),
        f"({a!r} | {b!r})",
    )


def both(a: Filter, b: Filter) -> Filter:
    """AND. ``b`` is consulted only when ``a`` passes."""
    return CompositeFilter(
        lambda level, tag: evaluate(a, level, tag) and evaluate(b, level, tag),
        f"({a!r} & {b!r})",
    )


def negate(f: Filter) -> Filter:
    return CompositeFilter(lambda level, tag: not evaluate(f, level, tag), f"~{f!r}")


# ── Default Filter ────────────────────────────────────────────────────

_default_filter: Optional[Filter] = None
_default_lock = threading.Lock()


def platform_filter() -> Filter:
    """Starting policy used until a default filter is set."""
    return ALL


def get_default_filter() -> Filter:
    current = _default_filter
    if current is None:
        return platform_filter()
    return current


def set_default_filter(filter: Filter) -> None:
    """
    Replace the default filter.

    The confirmation goes through the default logger with any FilterLogger
    stripped out, so it is not swallowed by the filter being installed. An
    outermost wrapper is peeled rather than removed, so a filtered default
    such as the one ``configure`` installs still receives it.
    """
    global _default_filter
    if not isinstance(filter, Filter):
        raise TypeError(f"Expected Filter, got {type(filter).__name__}")
    with _default_lock:
        _default_filter = filter

    from loggerkit.core import TAG, get_default_logger
    from loggerkit.filter_logger import FilterLogger, without_filter

    route = get_default_logger()
    while isinstance(route, FilterLogger):
        route = without_filter(route)
    (route - FilterLogger.key).info(TAG, f"Default filter changed to {filter!r}.")


def _reset_default_filter() -> None:
    """Back to "never set". For testing only."""
    global _default_filter
    with _default_lock:
        _default_filter = None
