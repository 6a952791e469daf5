"""Unit tests for call descriptors and the matching rules."""

from __future__ import annotations

import pytest

from contract_mox.comparators import any_value, matching
from contract_mox.contracts import OperationKind, describe_contract
from contract_mox.descriptors import CallDescriptor, OperationIdentity, arguments_match
from contract_mox.unittests._contracts import Converter, Counter, Service


def _call(name: str, *args: object) -> CallDescriptor:
    op = describe_contract(Counter).method(name)
    assert op is not None
    return CallDescriptor(op.identity(), args)


class _Grumpy:
    """Value whose equality check always fails."""

    def __eq__(self, other: object) -> bool:
        raise RuntimeError("no comparisons")

    __hash__ = object.__hash__


def test_value_against_value_uses_equality() -> None:
    """Plain arguments compare with ``==``."""
    assert _call("add", 1, 2).matches(_call("add", 1, 2))
    assert not _call("add", 1, 2).matches(_call("add", 1, 3))


def test_matcher_against_value_evaluates_matcher() -> None:
    """Matchers on either side are evaluated against the other value."""
    setup = _call("add", 5, any_value(int))
    assert setup.matches(_call("add", 5, 999))
    assert _call("add", 5, 999).matches(setup)
    assert not setup.matches(_call("add", 10, 999))


def test_matcher_against_matcher_is_always_compatible() -> None:
    """Two matchers in the same slot are considered equal."""
    positive = matching(lambda value: value > 0)
    negative = matching(lambda value: value < 0)
    assert _call("add", positive, 1).matches(_call("add", negative, 1))


def test_raising_equality_counts_as_unequal() -> None:
    """An ``__eq__`` that raises never matches."""
    grumpy = _Grumpy()
    assert not arguments_match(grumpy, 1)
    assert arguments_match(grumpy, grumpy)


def test_nested_variadic_slots_match_element_wise() -> None:
    """Tuples and dicts compare element by element with matchers inside."""
    assert arguments_match(("a", any_value()), ("a", "b"))
    assert not arguments_match(("a",), ("a", "b"))
    assert arguments_match({"user": any_value()}, {"user": "x"})
    assert not arguments_match({"user": any_value()}, {"group": "x"})


def test_different_operations_never_match() -> None:
    """Identity must agree before arguments are considered."""
    assert not _call("get_count").matches(_call("reset"))


def test_same_name_on_different_contracts_never_matches() -> None:
    """Identity includes the contract."""
    counter_label = describe_contract(Counter).method("label")
    assert counter_label is not None
    renamed = OperationIdentity(
        contract=Service,
        name="label",
        kind=OperationKind.METHOD,
        arity=1,
    )
    assert not CallDescriptor(counter_label.identity(), ("x",)).matches(
        CallDescriptor(renamed, ("x",))
    )


def test_argument_count_must_equal_arity() -> None:
    """Descriptors always carry one argument per parameter."""
    with pytest.raises(ValueError, match="takes 2 argument"):
        _call("add", 1)


def test_unbound_generic_identity_matches_any_binding() -> None:
    """A setup without a binding applies to every instantiation."""
    op = describe_contract(Converter).method("convert")
    assert op is not None
    unbound = CallDescriptor(op.identity(), (any_value(),))
    as_int = CallDescriptor(op.identity((int,)), (1,))
    as_str = CallDescriptor(op.identity((str,)), ("a",))
    assert unbound.matches(as_int)
    assert unbound.matches(as_str)
    assert not CallDescriptor(op.identity((str,)), (any_value(),)).matches(as_int)


def test_unknown_binding_elements_unify() -> None:
    """``None`` inside a binding stands for an uninferred parameter."""
    op = describe_contract(Converter).method("pair")
    assert op is not None
    assert op.identity((str, None)).is_compatible(op.identity((str, int)))
    assert not op.identity((str, None)).is_compatible(op.identity((int, int)))


def test_describe_renders_call() -> None:
    """Descriptors render like a call expression."""
    assert _call("add", 5, any_value()).describe() == "Counter.add(5, Any())"
    assert _call("add", 5, any_value()).has_matchers
    assert not _call("add", 5, 6).has_matchers
