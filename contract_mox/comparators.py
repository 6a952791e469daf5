"""Argument matchers used in setups and verification queries."""

from __future__ import annotations

import abc
import logging
import re
import typing as t

logger = logging.getLogger(__name__)


class ArgumentMatcher(abc.ABC):
    """Placeholder that matches a class of values instead of one literal."""

    @abc.abstractmethod
    def __call__(self, value: object) -> bool:
        """Return ``True`` if *value* satisfies the comparison."""

    def matches(self, value: object) -> bool:
        """Evaluate the matcher, treating any exception as a mismatch."""
        try:
            return bool(self(value))
        except Exception:  # noqa: BLE001 - a failing matcher never matches
            logger.debug("%r raised while matching %r", self, value, exc_info=True)
            return False


class Any(ArgumentMatcher):
    """Match any value.

    ``typ`` documents the slot the wildcard stands in for; it is never
    checked.
    """

    def __init__(self, typ: type | None = None) -> None:
        self.typ = typ

    def __call__(self, value: object) -> bool:
        """Return ``True`` for any input."""
        return True

    def __repr__(self) -> str:
        """Return a debug representation."""
        if self.typ is None:
            return "Any()"
        return f"Any(typ={self.typ!r})"


class Predicate(ArgumentMatcher):
    """Use a custom ``func`` to determine a match."""

    def __init__(self, func: t.Callable[[t.Any], object]) -> None:
        self.func = func

    def __call__(self, value: object) -> bool:
        """Return ``True`` if ``func(value)`` is truthy."""
        return bool(self.func(value))

    def __repr__(self) -> str:
        """Return a debug representation."""
        return f"Predicate(func={self.func!r})"


class IsA(ArgumentMatcher):
    """Match instances of ``typ``."""

    def __init__(self, typ: type | tuple[type, ...]) -> None:
        self.typ = typ

    def __call__(self, value: object) -> bool:
        """Return ``True`` when ``value`` is an instance of ``typ``."""
        return isinstance(value, self.typ)

    def __repr__(self) -> str:
        """Return a debug representation."""
        return f"IsA(typ={self.typ!r})"


class Regex(ArgumentMatcher):
    """Match if *value* matches ``pattern``."""

    def __init__(self, pattern: str) -> None:
        self._pattern = re.compile(pattern)

    def __call__(self, value: object) -> bool:
        """Return ``True`` if the regex matches *value*."""
        return bool(self._pattern.search(t.cast("str", value)))

    def __repr__(self) -> str:
        """Return a debug representation."""
        return f"Regex(pattern={self._pattern.pattern!r})"


class Contains(ArgumentMatcher):
    """Match if ``item`` is found in *value*."""

    def __init__(self, item: object) -> None:
        self.item = item

    def __call__(self, value: object) -> bool:
        """Return ``True`` if ``item`` is in *value*."""
        return self.item in t.cast("t.Container[object]", value)

    def __repr__(self) -> str:
        """Return a debug representation."""
        return f"Contains(item={self.item!r})"


class StartsWith(ArgumentMatcher):
    """Match if *value* begins with ``prefix``."""

    def __init__(self, prefix: str) -> None:
        self.prefix = prefix

    def __call__(self, value: object) -> bool:
        """Return ``True`` if *value* starts with ``prefix``."""
        return t.cast("str", value).startswith(self.prefix)

    def __repr__(self) -> str:
        """Return a debug representation."""
        return f"StartsWith(prefix={self.prefix!r})"


def any_value(typ: type | None = None) -> t.Any:
    """Return a wildcard for one argument slot."""
    return Any(typ)


def matching(predicate: t.Callable[[t.Any], object]) -> t.Any:
    """Return a matcher accepting values for which *predicate* is truthy."""
    return Predicate(predicate)


def is_matcher(value: object) -> bool:
    """Return ``True`` when *value* is an argument matcher."""
    return isinstance(value, ArgumentMatcher)


__all__ = [
    "Any",
    "ArgumentMatcher",
    "Contains",
    "IsA",
    "Predicate",
    "Regex",
    "StartsWith",
    "any_value",
    "is_matcher",
    "matching",
]
