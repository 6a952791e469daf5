"""Step definitions for contract_mox behavioural tests."""
# pyright: reportMissingImports=false, reportUnknownMemberType=false

from __future__ import annotations

import builtins
import typing as t

from behave import given, then, when  # type: ignore[attr-defined]

from contract_mox import Mock, Times, VerificationError, any_value


class Counter(t.Protocol):
    """Source of counts used by the scenarios."""

    def get_count(self) -> int: ...

    def add(self, a: int, b: int) -> int: ...


class Thermostat(t.Protocol):
    """Device with a writable target temperature."""

    @property
    def target(self) -> float: ...

    @target.setter
    def target(self, value: float) -> None: ...


CONTRACTS: dict[str, type] = {"counter": Counter, "thermostat": Thermostat}


class BehaveContext(t.Protocol):
    """Behave step context with attributes used in tests."""

    mock: Mock
    results: list[object]
    raised: list[BaseException]


@given("a mock of the {contract} contract")
def step_create_mock(context: BehaveContext, contract: str) -> None:
    """Create a mock of one of the sample contracts."""
    context.mock = Mock(CONTRACTS[contract])
    context.results = []
    context.raised = []


@given("get_count is set up to return {value:d}")
def step_setup_get_count(context: BehaveContext, value: int) -> None:
    """Configure a fixed answer for ``get_count``."""
    context.mock.setup("get_count").returns(value)


@given('get_count is set up to return the sequence "{values}"')
def step_setup_sequence(context: BehaveContext, values: str) -> None:
    """Queue successive answers for ``get_count``."""
    sequence = context.mock.setup_sequence("get_count")
    for value in values.split(","):
        sequence.returns(int(value))


@given("add with first argument {a:d} and any second argument returns {value:d}")
def step_setup_add(context: BehaveContext, a: int, value: int) -> None:
    """Configure ``add`` with a literal and a wildcard argument."""
    context.mock.setup("add", a, any_value(int)).returns(value)


@given("assigning the target property raises {name}")
def step_setup_target_fault(context: BehaveContext, name: str) -> None:
    """Make assignments to ``target`` raise the named builtin exception."""
    context.mock.setup_set("target").throws(getattr(builtins, name))


@when("I call get_count {count:d} times")
def step_call_get_count(context: BehaveContext, count: int) -> None:
    """Invoke ``get_count`` repeatedly."""
    context.results.extend(context.mock.object.get_count() for _ in range(count))


@when("I call add with {a:d} and {b:d}")
def step_call_add(context: BehaveContext, a: int, b: int) -> None:
    """Invoke ``add`` once."""
    context.results.append(context.mock.object.add(a, b))


@when("I assign {value:d} to the target property")
def step_assign_target(context: BehaveContext, value: int) -> None:
    """Assign to ``target``, keeping any exception for later steps."""
    try:
        context.mock.object.target = value
    except Exception as exc:  # noqa: BLE001 - inspected by a later step
        context.raised.append(exc)


@then('the results are "{expected}"')
def step_check_results(context: BehaveContext, expected: str) -> None:
    """Compare collected results with a comma separated list."""
    actual = [str(value) for value in context.results]
    assert actual == expected.split(",")  # noqa: S101


@then("verifying get_count was called exactly {count:d} times succeeds")
def step_verify_succeeds(context: BehaveContext, count: int) -> None:
    """Verification passes for the observed count."""
    observed = context.mock.verify("get_count", times=Times.exactly(count))
    assert observed == count  # noqa: S101


@then(
    "verifying get_count was called exactly {count:d} times fails "
    "with actual count {actual:d}"
)
def step_verify_fails(context: BehaveContext, count: int, actual: int) -> None:
    """Verification reports the actual count."""
    try:
        context.mock.verify("get_count", times=Times.exactly(count))
    except VerificationError as exc:
        assert exc.actual == actual  # noqa: S101
    else:
        msg = "verification unexpectedly succeeded"
        raise AssertionError(msg)


@then("a {name} was raised")
def step_check_raised(context: BehaveContext, name: str) -> None:
    """Exactly one exception of the named type was raised."""
    assert [type(exc).__name__ for exc in context.raised] == [name]  # noqa: S101
