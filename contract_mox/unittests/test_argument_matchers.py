"""Unit tests for argument matchers."""

from __future__ import annotations

import typing as t

import pytest

from contract_mox.comparators import (
    Any as AnyValue,
)
from contract_mox.comparators import (
    ArgumentMatcher,
    Contains,
    IsA,
    Predicate,
    Regex,
    StartsWith,
    any_value,
    is_matcher,
    matching,
)


@pytest.mark.parametrize(
    ("matcher", "good", "bad", "expected_repr"),
    [
        (AnyValue(), "anything", None, "Any()"),
        (AnyValue(int), 3, None, "Any(typ=<class 'int'>)"),
        (IsA(int), 42, "42", "IsA(typ=<class 'int'>)"),
        (Regex(r"^\d+$"), "123", "12a", "Regex(pattern='^\\\\d+$')"),
        (Contains("bar"), "foobarbaz", "qux", "Contains(item='bar')"),
        (StartsWith("bar"), "barfly", "foobar", "StartsWith(prefix='bar')"),
    ],
)
def test_matchers_match_and_repr(
    matcher: ArgumentMatcher,
    good: object,
    bad: object | None,
    expected_repr: str,
) -> None:
    """Matchers evaluate values and provide helpful reprs."""
    assert matcher.matches(good)
    if bad is not None:
        assert not matcher.matches(bad)
    assert repr(matcher) == expected_repr


def test_any_value_matches_every_value() -> None:
    """A wildcard accepts repeated distinct values of any type."""
    wildcard = any_value(int)
    assert all(wildcard.matches(value) for value in (0, -1, 999, None, "x"))


def test_matching_uses_predicate_truthiness() -> None:
    """``matching`` accepts values for which the predicate is truthy."""
    even = matching(lambda value: value % 2 == 0)
    assert even.matches(4)
    assert not even.matches(3)


def test_throwing_predicate_never_matches() -> None:
    """An exception inside a predicate is reported as a mismatch."""

    def explode(value: object) -> bool:
        raise RuntimeError(value)

    assert not Predicate(explode).matches(1)


def test_raw_call_propagates_predicate_errors() -> None:
    """Calling a matcher directly exposes the predicate's exception."""
    with pytest.raises(ZeroDivisionError):
        Predicate(lambda value: 1 / value)(0)


def test_type_mismatch_in_string_matchers_is_a_mismatch() -> None:
    """String matchers given non-strings do not match instead of raising."""
    assert not StartsWith("a").matches(5)
    assert not Regex("a").matches(None)
    assert not Contains(1).matches(7)


def test_is_matcher() -> None:
    """Only :class:`ArgumentMatcher` instances count as matchers."""
    assert is_matcher(any_value())
    assert is_matcher(IsA(str))
    assert not is_matcher(t.Any)
    assert not is_matcher(lambda value: True)


def test_base_matcher_is_abstract() -> None:
    """The base class cannot be instantiated without a comparison."""
    with pytest.raises(TypeError, match="abstract"):
        ArgumentMatcher()  # type: ignore[abstract]


def test_subclass_failures_count_as_mismatches() -> None:
    """``matches`` turns an exception from ``__call__`` into ``False``."""

    class Broken(ArgumentMatcher):
        def __call__(self, value: object) -> bool:
            raise RuntimeError(value)

    assert not Broken().matches(1)
