"""Call descriptors and the argument matching rules."""

from __future__ import annotations

import dataclasses as dc
import typing as t

from .comparators import is_matcher

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .contracts import OperationKind, ReturnShape

Binding = tuple[type | None, ...]


def _bindings_unify(left: Binding | None, right: Binding | None) -> bool:
    """Return ``True`` when two type-parameter bindings are compatible.

    An unbound side (``None``) unifies with anything, as does an unknown
    element within a binding.
    """
    if left is None or right is None:
        return True
    if len(left) != len(right):
        return False
    return all(
        lhs is None or rhs is None or lhs == rhs
        for lhs, rhs in zip(left, right, strict=True)
    )


@dc.dataclass(frozen=True, slots=True)
class OperationIdentity:
    """Identity of one contract operation, optionally with a generic binding."""

    contract: type
    name: str
    kind: OperationKind
    arity: int
    type_params: tuple[str, ...] = ()
    binding: Binding | None = None
    returns: ReturnShape | None = dc.field(default=None, compare=False)

    @property
    def display_name(self) -> str:
        """Return ``Contract.name`` for diagnostics."""
        return f"{self.contract.__name__}.{self.name}"

    def is_compatible(self, other: OperationIdentity) -> bool:
        """Return ``True`` if *other* names the same operation.

        Generic operations match across instantiations unless both sides
        carry conflicting bindings.
        """
        return (
            self.contract is other.contract
            and self.name == other.name
            and self.kind == other.kind
            and self.arity == other.arity
            and _bindings_unify(self.binding, other.binding)
        )


def _values_equal(left: object, right: object) -> bool:
    if left is right:
        return True
    try:
        return bool(left == right)
    except Exception:  # noqa: BLE001 - exotic __eq__ implementations
        return False


def arguments_match(left: object, right: object) -> bool:
    """Compare one argument slot of two descriptors.

    Matchers on either side are evaluated against the other side's value;
    two matchers are always compatible; plain values compare by equality.
    Tuples and dicts (``*args``/``**kwargs`` slots) are compared element by
    element so matchers may appear inside them.
    """
    if is_matcher(left):
        return True if is_matcher(right) else t.cast("t.Any", left).matches(right)
    if is_matcher(right):
        return t.cast("t.Any", right).matches(left)
    if type(left) is tuple and type(right) is tuple:
        return len(left) == len(right) and all(
            arguments_match(lhs, rhs) for lhs, rhs in zip(left, right, strict=True)
        )
    if type(left) is dict and type(right) is dict:
        return left.keys() == right.keys() and all(
            arguments_match(left[key], right[key]) for key in left
        )
    return _values_equal(left, right)


@dc.dataclass(frozen=True, slots=True)
class CallDescriptor:
    """An operation identity plus one argument (or matcher) per parameter."""

    operation: OperationIdentity
    arguments: tuple[object, ...] = ()

    def __post_init__(self) -> None:
        """Ensure the argument list covers every parameter."""
        if len(self.arguments) != self.operation.arity:
            msg = (
                f"{self.operation.display_name} takes {self.operation.arity} "
                f"argument(s), got {len(self.arguments)}"
            )
            raise ValueError(msg)

    @property
    def has_matchers(self) -> bool:
        """Return ``True`` when any argument is a matcher."""
        return any(is_matcher(arg) for arg in self.arguments)

    def matches(self, other: CallDescriptor) -> bool:
        """Return ``True`` if *other* describes a compatible invocation."""
        if not self.operation.is_compatible(other.operation):
            return False
        if len(self.arguments) != len(other.arguments):
            return False
        return all(
            arguments_match(lhs, rhs)
            for lhs, rhs in zip(self.arguments, other.arguments, strict=True)
        )

    def describe(self) -> str:
        """Return ``Contract.name(arg, ...)`` for diagnostics."""
        args = ", ".join(repr(arg) for arg in self.arguments)
        return f"{self.operation.display_name}({args})"


__all__ = ["Binding", "CallDescriptor", "OperationIdentity", "arguments_match"]
