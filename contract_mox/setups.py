"""Fluent builders returned by :meth:`Mock.setup` and friends.

Each builder owns the behaviour it configures. The behaviour is registered
with the interceptor as soon as the builder is created, so later calls on
the builder take effect immediately.
"""

from __future__ import annotations

import typing as t

from .behaviors import (
    Callback,
    Computed,
    Fault,
    Immediate,
    Sequence,
    SequenceStep,
    Value,
)
from .deferred import Deferred

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .behaviors import Outcome
    from .descriptors import CallDescriptor

ExceptionSpec = BaseException | type[BaseException]


def _as_exception(exc: ExceptionSpec) -> BaseException:
    """Return *exc* as an instance, instantiating exception classes."""
    if isinstance(exc, BaseException):
        return exc
    if isinstance(exc, type) and issubclass(exc, BaseException):
        return exc()
    msg = f"expected an exception instance or class, got {exc!r}"
    raise TypeError(msg)


class ActionSetup:
    """Configure callbacks and faults for one call shape."""

    def __init__(self, descriptor: CallDescriptor) -> None:
        self.descriptor = descriptor
        self.behavior = Immediate()

    def callback(self, func: t.Callable[..., object], *, arity: int | None = None) -> t.Self:
        """Run *func* with the call's arguments whenever the setup matches.

        Before an outcome is configured the callback runs ahead of it;
        afterwards it runs once the value has been produced. ``arity``
        overrides the number of arguments passed, which is otherwise taken
        from the callback's signature.
        """
        wrapped = Callback.wrap(func, arity)
        if self.behavior.outcome is None:
            self.behavior.precallback = wrapped
        else:
            self.behavior.postcallback = wrapped
        return self

    def throws(self, exc: ExceptionSpec) -> t.Self:
        """Raise *exc* for every matching call."""
        return self._set_outcome(Fault(_as_exception(exc)))

    def throws_async(self, exc: ExceptionSpec) -> t.Self:
        """Answer with an awaitable that raises *exc* when awaited."""
        return self._set_outcome(Value(Deferred.failed(_as_exception(exc))))

    def _set_outcome(self, outcome: Outcome) -> t.Self:
        self.behavior.outcome = outcome
        return self

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.descriptor.describe()})"


class Setup(ActionSetup):
    """Configure the result of an operation that produces a value."""

    def returns(self, value: object = None) -> t.Self:
        """Answer every matching call with *value*."""
        return self._set_outcome(Value(value))

    def returns_using(self, producer: t.Callable[[], object]) -> t.Self:
        """Answer with ``producer()``, evaluated afresh for each call."""
        return self._set_outcome(Computed(producer))

    def returns_async(self, value: object = None) -> t.Self:
        """Answer with an already-resolved awaitable yielding *value*."""
        return self._set_outcome(Value(Deferred.resolved(value)))

    def returns_async_using(self, producer: t.Callable[[], object]) -> t.Self:
        """Answer with a resolved awaitable of ``producer()`` for each call."""
        return self._set_outcome(Computed(lambda: Deferred.resolved(producer())))


class SequenceSetup:
    """Queue one answer per matching call.

    Every ``returns``/``throws`` appends a step. A :meth:`callback` is held
    until the next step is appended and runs only for that step. Once every
    step has been consumed further calls get the operation's default value.
    """

    def __init__(self, descriptor: CallDescriptor) -> None:
        self.descriptor = descriptor
        self.behavior = Sequence()
        self._pending: Callback | None = None

    def callback(self, func: t.Callable[..., object], *, arity: int | None = None) -> t.Self:
        """Run *func* when the next appended step is consumed."""
        self._pending = Callback.wrap(func, arity)
        return self

    def returns(self, value: object = None) -> t.Self:
        """Append a step answering with *value*."""
        return self._append(Value(value))

    def returns_using(self, producer: t.Callable[[], object]) -> t.Self:
        """Append a step answering with ``producer()``, evaluated now."""
        return self._append(Value(producer()))

    def returns_async(self, value: object = None) -> t.Self:
        """Append a step answering with a resolved awaitable of *value*."""
        return self._append(Value(Deferred.resolved(value)))

    def throws(self, exc: ExceptionSpec) -> t.Self:
        """Append a step raising *exc*."""
        return self._append(Fault(_as_exception(exc)))

    def throws_async(self, exc: ExceptionSpec) -> t.Self:
        """Append a step answering with an awaitable that raises *exc*."""
        return self._append(Value(Deferred.failed(_as_exception(exc))))

    @property
    def remaining(self) -> int:
        """Return how many steps are still queued."""
        return self.behavior.remaining

    def _append(self, outcome: Outcome) -> t.Self:
        self.behavior.enqueue(SequenceStep(outcome, self._pending))
        self._pending = None
        return self

    def __repr__(self) -> str:
        return f"SequenceSetup({self.descriptor.describe()}, remaining={self.remaining})"


__all__ = ["ActionSetup", "SequenceSetup", "Setup"]
