"""Unit tests for the behaviour execution model."""

from __future__ import annotations

import typing as t

import pytest

from contract_mox.behaviors import (
    DEFAULT,
    Callback,
    Computed,
    Fault,
    Immediate,
    Sequence,
    SequenceStep,
    Value,
    declared_arity,
)


def _recorder() -> tuple[list[tuple[object, ...]], t.Callable[..., None]]:
    calls: list[tuple[object, ...]] = []

    def record(*args: object) -> None:
        calls.append(args)

    return calls, record


def test_declared_arity() -> None:
    """Arity counts positional parameters; ``*args`` means all."""

    def none() -> None: ...

    def two(a: object, b: object, *, key: object = None) -> None: ...

    def var(a: object, *rest: object) -> None: ...

    assert declared_arity(none) == 0
    assert declared_arity(two) == 2
    assert declared_arity(var) is None


def test_callback_receives_argument_prefix() -> None:
    """A callback declaring fewer parameters gets the leading arguments."""
    seen: list[object] = []
    Callback.wrap(lambda first: seen.append(first))((1, 2, 3))
    assert seen == [1]


def test_callback_needing_more_arguments_is_skipped() -> None:
    """A callback that cannot be satisfied does not run."""
    seen: list[object] = []
    Callback.wrap(lambda a, b, c: seen.append((a, b, c)))((1,))
    assert seen == []


def test_variadic_callback_receives_everything() -> None:
    """``*args`` callbacks receive every argument."""
    calls, record = _recorder()
    Callback.wrap(record)((1, 2))
    assert calls == [(1, 2)]


def test_explicit_arity_overrides_signature() -> None:
    """An explicit arity is used instead of inspection."""
    calls, record = _recorder()
    Callback.wrap(record, arity=1)((1, 2))
    assert calls == [(1,)]
    with pytest.raises(ValueError, match="arity"):
        Callback.wrap(record, arity=-1)


def test_outcomes() -> None:
    """Values are returned, producers called afresh, faults raised."""
    counter = iter(range(10))
    computed = Computed(lambda: next(counter))
    assert Value(5).produce() == 5
    assert computed.produce() == 0
    assert computed.produce() == 1
    with pytest.raises(KeyError):
        Fault(KeyError("k")).produce()


def test_immediate_without_outcome_answers_default() -> None:
    """An immediate behaviour with only callbacks falls through."""
    calls, record = _recorder()
    behavior = Immediate(precallback=Callback.wrap(record))
    assert behavior.execute(("a",)) is DEFAULT
    assert calls == [("a",)]


def test_immediate_runs_callbacks_around_value() -> None:
    """Pre-callbacks run before the value, post-callbacks after."""
    order: list[str] = []

    def produce() -> str:
        order.append("value")
        return "v"

    behavior = Immediate(
        precallback=Callback.wrap(lambda: order.append("pre")),
        postcallback=Callback.wrap(lambda: order.append("post")),
        outcome=Computed(produce),
    )
    assert behavior.execute(()) == "v"
    assert order == ["pre", "value", "post"]


def test_fault_skips_post_callback() -> None:
    """A raised fault ends execution before the post-callback."""
    calls, record = _recorder()
    behavior = Immediate(postcallback=Callback.wrap(record), outcome=Fault(OSError()))
    with pytest.raises(OSError):  # noqa: PT011
        behavior.execute(())
    assert calls == []


def test_callback_exception_wins_over_fault() -> None:
    """The callback's own exception propagates instead of the fault."""

    def boom() -> None:
        raise LookupError("from callback")

    behavior = Immediate(precallback=Callback.wrap(boom), outcome=Fault(OSError()))
    with pytest.raises(LookupError, match="from callback"):
        behavior.execute(())


def test_sequence_consumes_steps_then_answers_default() -> None:
    """Each call dequeues one step; an empty queue answers DEFAULT."""
    sequence = Sequence()
    for value in (10, 20, 30):
        sequence.enqueue(SequenceStep(Value(value)))
    assert [sequence.execute(()) for _ in range(5)] == [10, 20, 30, DEFAULT, DEFAULT]
    assert sequence.remaining == 0


def test_sequence_step_fault_is_consumed() -> None:
    """A faulting step is dequeued like any other."""
    sequence = Sequence()
    sequence.enqueue(SequenceStep(Fault(ValueError("once"))))
    sequence.enqueue(SequenceStep(Value("after")))
    with pytest.raises(ValueError, match="once"):
        sequence.execute(())
    assert sequence.execute(()) == "after"


def test_default_sentinel_repr() -> None:
    """The sentinel is recognisable in logs."""
    assert repr(DEFAULT) == "DEFAULT"
