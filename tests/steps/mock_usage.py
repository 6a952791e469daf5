"""pytest-bdd steps for configuring, calling and verifying mocks."""

from __future__ import annotations

import builtins

import pytest
from pytest_bdd import given, parsers, then, when

from contract_mox import Mock, Times, VerificationError, any_value
from tests.helpers.contracts import CONTRACTS


@pytest.fixture
def results() -> list[object]:
    """Collect values returned by calls made in a scenario."""
    return []


@pytest.fixture
def raised() -> list[BaseException]:
    """Collect exceptions raised by calls made in a scenario."""
    return []


@given(parsers.cfparse("a mock of the {contract} contract"), target_fixture="mock")
def create_mock(contract: str) -> Mock:
    """Create a mock of one of the sample contracts."""
    return Mock(CONTRACTS[contract])


@given(parsers.cfparse("get_count is set up to return {value:d}"))
def setup_get_count(mock: Mock, value: int) -> None:
    """Configure a fixed answer for ``get_count``."""
    mock.setup("get_count").returns(value)


@given(parsers.cfparse('get_count is set up to return the sequence "{values}"'))
def setup_get_count_sequence(mock: Mock, values: str) -> None:
    """Queue successive answers for ``get_count``."""
    sequence = mock.setup_sequence("get_count")
    for value in values.split(","):
        sequence.returns(int(value))


@given(
    parsers.cfparse(
        "add with first argument {a:d} and any second argument returns {value:d}"
    )
)
def setup_add_wildcard(mock: Mock, a: int, value: int) -> None:
    """Configure ``add`` with a literal and a wildcard argument."""
    mock.setup("add", a, any_value(int)).returns(value)


@given(parsers.cfparse("assigning the target property raises {name}"))
def setup_target_fault(mock: Mock, name: str) -> None:
    """Make assignments to ``target`` raise the named builtin exception."""
    mock.setup_set("target").throws(getattr(builtins, name))


@when(parsers.cfparse("I call get_count {count:d} times"))
def call_get_count(mock: Mock, results: list[object], count: int) -> None:
    """Invoke ``get_count`` repeatedly."""
    results.extend(mock.object.get_count() for _ in range(count))


@when(parsers.cfparse("I call add with {a:d} and {b:d}"))
def call_add(mock: Mock, results: list[object], a: int, b: int) -> None:
    """Invoke ``add`` once."""
    results.append(mock.object.add(a, b))


@when(parsers.cfparse("I assign {value:d} to the target property"))
def assign_target(mock: Mock, raised: list[BaseException], value: int) -> None:
    """Assign to ``target``, keeping any exception for later steps."""
    try:
        mock.object.target = value
    except Exception as exc:  # noqa: BLE001 - inspected by a later step
        raised.append(exc)


@then(parsers.cfparse('the results are "{expected}"'))
def check_results(results: list[object], expected: str) -> None:
    """Compare collected results with a comma separated list."""
    assert [str(value) for value in results] == expected.split(",")


@then(parsers.cfparse("verifying get_count was called exactly {count:d} times succeeds"))
def verify_count_succeeds(mock: Mock, count: int) -> None:
    """Verification passes for the observed count."""
    assert mock.verify("get_count", times=Times.exactly(count)) == count


@then(
    parsers.cfparse(
        "verifying get_count was called exactly {count:d} times fails "
        "with actual count {actual:d}"
    )
)
def verify_count_fails(mock: Mock, count: int, actual: int) -> None:
    """Verification reports the expected range and the actual count."""
    with pytest.raises(VerificationError) as excinfo:
        mock.verify("get_count", times=Times.exactly(count))
    assert excinfo.value.expected == Times.exactly(count)
    assert excinfo.value.actual == actual


@then(parsers.cfparse("a {name} was raised"))
def check_raised(raised: list[BaseException], name: str) -> None:
    """Exactly one exception of the named type was raised."""
    assert [type(exc).__name__ for exc in raised] == [name]
