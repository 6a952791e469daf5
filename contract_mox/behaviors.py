"""What happens when an intercepted call matches a setup.

A behaviour is either :class:`Immediate` (one outcome, answered for every
matching call) or :class:`Sequence` (a queue of steps, one consumed per
matching call). Outcomes are a fixed :class:`Value`, a :class:`Computed`
value produced on demand, or a :class:`Fault` that is raised.

Callbacks run before the outcome. An exception raised by a callback
propagates unchanged and therefore pre-empts any configured fault.
"""

from __future__ import annotations

import collections
import dataclasses as dc
import inspect
import logging
import typing as t

logger = logging.getLogger(__name__)


class _Default:
    """Marker telling the interceptor to answer with the default value."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "DEFAULT"


DEFAULT: t.Final = _Default()

_POSITIONAL_KINDS = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)


def declared_arity(func: t.Callable[..., object]) -> int | None:
    """Return how many positional arguments *func* accepts.

    ``None`` means the callback takes every argument (it declares
    ``*args`` or its signature cannot be inspected).
    """
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        return None
    count = 0
    for param in signature.parameters.values():
        if param.kind is inspect.Parameter.VAR_POSITIONAL:
            return None
        if param.kind in _POSITIONAL_KINDS:
            count += 1
    return count


@dc.dataclass(frozen=True, slots=True)
class Callback:
    """User callback together with the number of arguments it receives."""

    func: t.Callable[..., object]
    arity: int | None = None

    @classmethod
    def wrap(cls, func: t.Callable[..., object], arity: int | None = None) -> Callback:
        """Fix the callback's arity now rather than on every call."""
        if arity is not None and arity < 0:
            msg = "arity must be >= 0"
            raise ValueError(msg)
        return cls(func, declared_arity(func) if arity is None else arity)

    def __call__(self, args: t.Sequence[object]) -> None:
        """Invoke the callback with an arity-adapted prefix of *args*."""
        if self.arity is None:
            self.func(*args)
            return
        if self.arity > len(args):
            logger.debug(
                "Skipping callback %r: needs %d argument(s), call has %d",
                self.func,
                self.arity,
                len(args),
            )
            return
        self.func(*args[: self.arity])


@dc.dataclass(frozen=True, slots=True)
class Value:
    """Outcome returning a fixed value."""

    value: object

    def produce(self) -> object:
        """Return the stored value."""
        return self.value


@dc.dataclass(frozen=True, slots=True)
class Computed:
    """Outcome calling a zero-argument producer on every matching call."""

    producer: t.Callable[[], object]

    def produce(self) -> object:
        """Return the producer's current result."""
        return self.producer()


@dc.dataclass(frozen=True, slots=True)
class Fault:
    """Outcome raising a configured exception."""

    exception: BaseException

    def produce(self) -> t.NoReturn:
        """Raise the configured exception."""
        raise self.exception


Outcome = Value | Computed | Fault


class Behavior(t.Protocol):
    """Anything the interceptor can execute for a matching call."""

    def execute(self, args: t.Sequence[object]) -> object:
        """Run the behaviour for a call with *args*."""
        ...


@dc.dataclass(slots=True)
class Immediate:
    """Answer every matching call with the same outcome."""

    precallback: Callback | None = None
    postcallback: Callback | None = None
    outcome: Outcome | None = None

    def execute(self, args: t.Sequence[object]) -> object:
        """Run callbacks around the outcome and return its value."""
        if self.precallback is not None:
            self.precallback(args)
        result = DEFAULT if self.outcome is None else self.outcome.produce()
        if self.postcallback is not None:
            self.postcallback(args)
        return result


@dc.dataclass(frozen=True, slots=True)
class SequenceStep:
    """One queued answer of a :class:`Sequence`."""

    outcome: Outcome
    callback: Callback | None = None

    def execute(self, args: t.Sequence[object]) -> object:
        """Run the step's callback, then its outcome."""
        if self.callback is not None:
            self.callback(args)
        return self.outcome.produce()


@dc.dataclass(slots=True)
class Sequence:
    """Answer successive matching calls with successive steps.

    Once the queue is empty every further call receives :data:`DEFAULT`.
    """

    steps: collections.deque[SequenceStep] = dc.field(default_factory=collections.deque)

    def enqueue(self, step: SequenceStep) -> None:
        """Append *step* to the end of the queue."""
        self.steps.append(step)

    @property
    def remaining(self) -> int:
        """Return how many steps have not been consumed."""
        return len(self.steps)

    def execute(self, args: t.Sequence[object]) -> object:
        """Consume and run the next step."""
        if not self.steps:
            return DEFAULT
        step = self.steps.popleft()
        return step.execute(args)


__all__ = [
    "DEFAULT",
    "Behavior",
    "Callback",
    "Computed",
    "Fault",
    "Immediate",
    "Outcome",
    "Sequence",
    "SequenceStep",
    "Value",
    "declared_arity",
]
