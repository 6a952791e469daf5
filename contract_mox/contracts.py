"""Structural descriptions of the contracts a proxy can implement.

A contract is an open capability boundary: a :class:`typing.Protocol`
subclass or an abstract base class with at least one abstract member.
:func:`describe_contract` walks such a class and records, for every
operation, its parameters, the shape of its return value and any
operation-local type parameters. Everything downstream (proxy synthesis,
call matching and default values) works from this description rather than
from the class itself.
"""

from __future__ import annotations

import asyncio
import collections.abc as cabc
import dataclasses as dc
import enum
import inspect
import logging
import types
import typing as t

import typing_extensions as tx

from .deferred import Deferred
from .descriptors import OperationIdentity
from .errors import UnsupportedContractError

logger = logging.getLogger(__name__)

_EMPTY = inspect.Parameter.empty

_ZERO_VALUES: dict[t.Any, object] = {
    bool: False,
    int: 0,
    float: 0.0,
    complex: 0j,
    str: "",
    bytes: b"",
}

_EMPTY_CONTAINERS: dict[t.Any, t.Callable[[], object]] = {
    list: list,
    dict: dict,
    set: set,
    frozenset: frozenset,
    tuple: tuple,
    bytearray: bytearray,
}

_DEFERRED_ORIGINS: tuple[t.Any, ...] = (
    cabc.Awaitable,
    cabc.Coroutine,
    asyncio.Future,
    asyncio.Task,
)

_VOID_ANNOTATIONS: tuple[t.Any, ...] = (None, type(None), t.NoReturn, tx.Never)


class OperationKind(enum.StrEnum):
    """How an operation is reached on the proxy."""

    METHOD = "method"
    GETTER = "getter"
    SETTER = "setter"


class ReturnKind(enum.StrEnum):
    """Broad category of an operation's return value."""

    VOID = "void"
    VALUE = "value"
    DEFERRED = "deferred"


def _strip_annotated(annotation: t.Any) -> t.Any:
    if t.get_origin(annotation) is t.Annotated:
        return t.get_args(annotation)[0]
    return annotation


def default_for_annotation(annotation: t.Any) -> object:
    """Return the canonical default value for *annotation*.

    Scalars default to their zero value, builtin containers to a fresh empty
    instance and everything else (optionals, classes, unknown shapes) to
    ``None``.
    """
    annotation = _strip_annotated(annotation)
    origin = t.get_origin(annotation) or annotation
    try:
        if origin in _ZERO_VALUES:
            return _ZERO_VALUES[origin]
        factory = _EMPTY_CONTAINERS.get(origin)
    except TypeError:  # unhashable annotation objects
        return None
    return factory() if factory is not None else None


@dc.dataclass(frozen=True, slots=True)
class ReturnShape:
    """Declared return shape of an operation.

    For deferred shapes ``annotation`` is the type of the eventual result.
    """

    kind: ReturnKind
    annotation: t.Any = _EMPTY

    @classmethod
    def void(cls) -> ReturnShape:
        """Return the shape of an operation without a result."""
        return cls(ReturnKind.VOID, None)

    @classmethod
    def from_annotation(cls, annotation: t.Any, *, is_async: bool = False) -> ReturnShape:
        """Classify *annotation*, treating ``async def`` results as deferred."""
        annotation = _strip_annotated(annotation)
        if is_async:
            return cls(ReturnKind.DEFERRED, annotation)
        if annotation == "None" or any(annotation is void for void in _VOID_ANNOTATIONS):
            return cls.void()
        origin = t.get_origin(annotation)
        if origin in _DEFERRED_ORIGINS or annotation in _DEFERRED_ORIGINS:
            args = t.get_args(annotation)
            return cls(ReturnKind.DEFERRED, args[-1] if args else _EMPTY)
        return cls(ReturnKind.VALUE, annotation)

    def default(self) -> object:
        """Return the value produced when no behaviour applies."""
        if self.kind is ReturnKind.VOID:
            return None
        value = default_for_annotation(self.annotation)
        if self.kind is ReturnKind.DEFERRED:
            return Deferred.resolved(value)
        return value

    def coerce(self, result: object) -> object:
        """Convert an interceptor *result* into this shape."""
        if self.kind is ReturnKind.VOID:
            return None
        if self.kind is ReturnKind.DEFERRED:
            if inspect.isawaitable(result):
                return result
            return Deferred.resolved(result)
        return result


@dc.dataclass(frozen=True, slots=True)
class OperationDescription:
    """One operation of a contract."""

    contract: type
    name: str
    kind: OperationKind
    signature: inspect.Signature
    returns: ReturnShape
    type_params: tuple[t.Any, ...] = ()
    type_param_slots: tuple[int | None, ...] = ()
    doc: str | None = None

    @property
    def arity(self) -> int:
        """Return the number of parameters, excluding ``self``."""
        return len(self.signature.parameters)

    @property
    def is_generic(self) -> bool:
        """Return ``True`` for operations with local type parameters."""
        return bool(self.type_params)

    @property
    def display_name(self) -> str:
        """Return ``Contract.name`` for diagnostics."""
        return f"{self.contract.__name__}.{self.name}"

    def bind(
        self, args: t.Sequence[object], kwargs: t.Mapping[str, object]
    ) -> tuple[object, ...]:
        """Normalise a call into one value per parameter.

        Defaults are applied, ``*args`` collapse into a tuple slot and
        ``**kwargs`` into a dict slot. Malformed calls raise ``TypeError``.
        """
        bound = self.signature.bind(*args, **kwargs)
        bound.apply_defaults()
        return tuple(bound.arguments[name] for name in self.signature.parameters)

    def infer_binding(self, arguments: t.Sequence[object]) -> tuple[type | None, ...] | None:
        """Derive the type-parameter binding of a concrete call.

        Each type parameter binds to the runtime type of the first argument
        annotated with it; parameters that cannot be inferred stay ``None``.
        """
        if not self.type_params:
            return None
        return tuple(
            None if slot is None else type(arguments[slot])
            for slot in self.type_param_slots
        )

    def identity(
        self, binding: tuple[type | None, ...] | None = None
    ) -> OperationIdentity:
        """Return the identity used in call descriptors."""
        return OperationIdentity(
            contract=self.contract,
            name=self.name,
            kind=self.kind,
            arity=self.arity,
            type_params=tuple(param.__name__ for param in self.type_params),
            binding=binding,
            returns=self.returns,
        )


@dc.dataclass(frozen=True, slots=True)
class PropertyDescription:
    """Accessor operations of one property."""

    name: str
    getter: OperationDescription
    setter: OperationDescription | None = None


@dc.dataclass(frozen=True, slots=True)
class ContractDescription:
    """Every operation a proxy for ``contract`` must implement."""

    contract: type
    methods: t.Mapping[str, OperationDescription]
    properties: t.Mapping[str, PropertyDescription]

    @property
    def name(self) -> str:
        """Return the contract's class name."""
        return self.contract.__name__

    def method(self, name: str) -> OperationDescription | None:
        """Return the method called *name*, if any."""
        return self.methods.get(name)

    def property(self, name: str) -> PropertyDescription | None:
        """Return the property called *name*, if any."""
        return self.properties.get(name)

    def operations(self) -> t.Iterator[OperationDescription]:
        """Yield every operation, accessors included."""
        yield from self.methods.values()
        for prop in self.properties.values():
            yield prop.getter
            if prop.setter is not None:
                yield prop.setter


# ----------------------------------------------------------------------
# Annotation helpers
# ----------------------------------------------------------------------
def _local_namespace(func: t.Any) -> dict[str, t.Any]:
    return {param.__name__: param for param in getattr(func, "__type_params__", ())}


def _resolve_hints(func: t.Any) -> dict[str, t.Any]:
    """Return evaluated annotations of *func*, tolerating unresolvable names.

    Annotations that cannot be evaluated (names local to a test function,
    for instance) are kept as strings, which yields ``None`` defaults.
    """
    localns = _local_namespace(func)
    try:
        return t.get_type_hints(func, localns=localns, include_extras=True)
    except (NameError, TypeError, AttributeError, SyntaxError):
        pass
    hints: dict[str, t.Any] = {}
    globalns = getattr(func, "__globals__", {})
    for key, value in inspect.get_annotations(func).items():
        if isinstance(value, str):
            try:
                value = tx.evaluate_forward_ref(
                    t.ForwardRef(value), globals=globalns, locals=localns
                )
            except Exception:  # noqa: BLE001 - keep the raw string
                logger.debug("Leaving annotation %r of %r unresolved", value, func)
        hints[key] = value
    return hints


def _collect_type_vars(annotation: t.Any, found: list[t.Any]) -> None:
    if isinstance(annotation, t.TypeVar):
        if annotation not in found:
            found.append(annotation)
        return
    for arg in t.get_args(annotation):
        _collect_type_vars(arg, found)


def _class_type_params(contract: type) -> set[t.Any]:
    params: set[t.Any] = set(getattr(contract, "__type_params__", ()))
    for base in contract.__mro__:
        params.update(getattr(base, "__parameters__", ()))
    return params


def _type_params_for(
    func: t.Any,
    hints: t.Mapping[str, t.Any],
    class_params: set[t.Any],
) -> tuple[t.Any, ...]:
    found: list[t.Any] = list(getattr(func, "__type_params__", ()))
    for annotation in hints.values():
        _collect_type_vars(annotation, found)
    return tuple(
        param
        for param in found
        if isinstance(param, t.TypeVar) and param not in class_params
    )


def _type_param_slots(
    type_params: tuple[t.Any, ...],
    signature: inspect.Signature,
    hints: t.Mapping[str, t.Any],
) -> tuple[int | None, ...]:
    names = list(signature.parameters)
    slots: list[int | None] = []
    for param in type_params:
        slot = next(
            (index for index, name in enumerate(names) if hints.get(name) is param),
            None,
        )
        slots.append(slot)
    return tuple(slots)


def _drop_self(signature: inspect.Signature) -> inspect.Signature:
    params = list(signature.parameters.values())
    return signature.replace(parameters=params[1:])


# ----------------------------------------------------------------------
# Member descriptions
# ----------------------------------------------------------------------
def _describe_function(
    contract: type,
    name: str,
    func: t.Any,
    kind: OperationKind,
    class_params: set[t.Any],
) -> OperationDescription:
    hints = _resolve_hints(func)
    signature = _drop_self(inspect.signature(func))
    if kind is OperationKind.SETTER:
        returns = ReturnShape.void()
    else:
        returns = ReturnShape.from_annotation(
            hints.get("return", _EMPTY),
            is_async=inspect.iscoroutinefunction(func),
        )
    type_params = _type_params_for(func, hints, class_params)
    return OperationDescription(
        contract=contract,
        name=name,
        kind=kind,
        signature=signature,
        returns=returns,
        type_params=type_params,
        type_param_slots=_type_param_slots(type_params, signature, hints),
        doc=inspect.getdoc(func),
    )


def _describe_property(
    contract: type, name: str, prop: property, class_params: set[t.Any]
) -> PropertyDescription:
    if prop.fget is None:
        msg = f"{contract.__name__}.{name} is a property without a getter"
        raise UnsupportedContractError(msg)
    getter = _describe_function(
        contract, name, prop.fget, OperationKind.GETTER, class_params
    )
    setter = None
    if prop.fset is not None:
        setter = _describe_function(
            contract, name, prop.fset, OperationKind.SETTER, class_params
        )
    return PropertyDescription(name=name, getter=getter, setter=setter)


def _describe_attribute(
    contract: type, name: str, annotation: t.Any
) -> PropertyDescription:
    """Model an annotated protocol attribute as a read-write property."""
    getter = OperationDescription(
        contract=contract,
        name=name,
        kind=OperationKind.GETTER,
        signature=inspect.Signature(),
        returns=ReturnShape.from_annotation(annotation),
    )
    value = inspect.Parameter(
        "value", inspect.Parameter.POSITIONAL_OR_KEYWORD, annotation=annotation
    )
    setter = OperationDescription(
        contract=contract,
        name=name,
        kind=OperationKind.SETTER,
        signature=inspect.Signature([value]),
        returns=ReturnShape.void(),
    )
    return PropertyDescription(name=name, getter=getter, setter=setter)


def _class_hints(contract: type) -> dict[str, t.Any]:
    try:
        return t.get_type_hints(contract, include_extras=True)
    except (NameError, TypeError, AttributeError, SyntaxError):
        hints: dict[str, t.Any] = {}
        for base in reversed(contract.__mro__):
            hints.update(inspect.get_annotations(base))
        return hints


def _member_names(contract: type) -> list[str]:
    if tx.is_protocol(contract):
        return sorted(tx.get_protocol_members(contract))
    return sorted(getattr(contract, "__abstractmethods__", ()))


def check_contract(contract: object) -> type:
    """Return *contract* when it is a class that a proxy can subclass."""
    if not isinstance(contract, type):
        msg = f"{contract!r} is not a class and cannot be mocked"
        raise UnsupportedContractError(msg)
    if getattr(contract, "__final__", False):
        msg = f"{contract.__name__} is final and cannot be subclassed"
        raise UnsupportedContractError(msg)
    if not tx.is_protocol(contract) and not inspect.isabstract(contract):
        msg = (
            f"{contract.__name__} is not a contract: expected a typing.Protocol "
            "or an abstract base class with abstract members"
        )
        raise UnsupportedContractError(msg)
    return contract


def describe_contract(contract: object) -> ContractDescription:
    """Return the structural description of *contract*.

    Raises
    ------
    UnsupportedContractError
        If *contract* is not a protocol or abstract class, or one of its
        operations cannot be implemented by a proxy.
    """
    cls = check_contract(contract)
    class_params = _class_type_params(cls)
    class_hints = _class_hints(cls)
    methods: dict[str, OperationDescription] = {}
    properties: dict[str, PropertyDescription] = {}

    for name in _member_names(cls):
        member = inspect.getattr_static(cls, name, None)
        if isinstance(member, property):
            properties[name] = _describe_property(cls, name, member, class_params)
        elif isinstance(member, (staticmethod, classmethod)):
            msg = f"{cls.__name__}.{name} is a static or class method and cannot be proxied"
            raise UnsupportedContractError(msg)
        elif inspect.isfunction(member):
            methods[name] = _describe_function(
                cls, name, member, OperationKind.METHOD, class_params
            )
        elif name in class_hints:
            properties[name] = _describe_attribute(cls, name, class_hints[name])
        elif tx.is_protocol(cls):
            logger.debug("Skipping protocol member %s.%s (%r)", cls.__name__, name, member)
        else:
            msg = f"{cls.__name__}.{name} is abstract but cannot be proxied"
            raise UnsupportedContractError(msg)

    return ContractDescription(
        contract=cls,
        methods=types.MappingProxyType(methods),
        properties=types.MappingProxyType(properties),
    )


__all__ = [
    "ContractDescription",
    "OperationDescription",
    "OperationKind",
    "PropertyDescription",
    "ReturnKind",
    "ReturnShape",
    "check_contract",
    "default_for_annotation",
    "describe_contract",
]
