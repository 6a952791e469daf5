"""Already-resolved awaitables returned by asynchronous operations."""

from __future__ import annotations

import typing as t

from typing_extensions import TypeVar

ResultT = TypeVar("ResultT", default=t.Any)

_UNSET: t.Final = object()


class Deferred(t.Generic[ResultT]):
    """Awaitable whose outcome is known at construction time.

    Awaiting a :class:`Deferred` never suspends: it returns the stored value
    or raises the stored exception unchanged. The engine uses it to model
    asynchronous results without an event loop.
    """

    __slots__ = ("_exception", "_value")

    def __init__(
        self,
        value: ResultT | object = _UNSET,
        exception: BaseException | None = None,
    ) -> None:
        if (value is _UNSET) == (exception is None):
            msg = "Deferred requires exactly one of value or exception"
            raise ValueError(msg)
        self._value = value
        self._exception = exception

    @classmethod
    def resolved(cls, value: ResultT | None = None) -> Deferred[ResultT]:
        """Return a deferred completed with *value*."""
        return cls(value)

    @classmethod
    def failed(cls, exception: BaseException) -> Deferred[ResultT]:
        """Return a deferred completed with *exception*."""
        return cls(exception=exception)

    def done(self) -> bool:
        """Return ``True``; a deferred is complete from the start."""
        return True

    def exception(self) -> BaseException | None:
        """Return the stored exception, if any."""
        return self._exception

    def result(self) -> ResultT:
        """Return the stored value or raise the stored exception."""
        if self._exception is not None:
            raise self._exception
        return t.cast("ResultT", self._value)

    def __await__(self) -> t.Generator[t.Any, None, ResultT]:
        """Complete immediately with :meth:`result`."""
        return self.result()
        yield  # pragma: no cover - marks this method as a generator

    def __repr__(self) -> str:
        """Return a debug representation."""
        if self._exception is not None:
            return f"Deferred.failed({self._exception!r})"
        return f"Deferred.resolved({self._value!r})"


__all__ = ["Deferred"]
