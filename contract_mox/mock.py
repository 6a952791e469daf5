"""The :class:`Mock` facade tying proxy, interceptor and builders together."""

from __future__ import annotations

import typing as t

from typing_extensions import TypeVar

from .comparators import any_value
from .contracts import OperationKind
from .descriptors import CallDescriptor
from .errors import MissingAccessorError, UnsupportedCallShapeError
from .interceptor import CallInterceptor
from .proxy import get_or_build
from .setups import ActionSetup, SequenceSetup, Setup
from .times import Times

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .contracts import ContractDescription, OperationDescription, PropertyDescription

ContractT = TypeVar("ContractT", default=t.Any)

TypeArgs = type | t.Sequence[type] | None

_UNSET: t.Final = object()


class Mock(t.Generic[ContractT]):
    """Test double for a contract.

    ``mock.object`` is an instance of a synthesised subclass of the contract.
    Every call made on it is recorded and answered by whatever has been
    configured with :meth:`setup` and friends; unconfigured calls return the
    default value of the operation's return type.

    Operations are named by string. Arguments given to ``setup``/``verify``
    are bound against the operation's signature, so they may be passed
    positionally or by keyword and may be :mod:`~contract_mox.comparators`
    matchers.
    """

    def __init__(
        self,
        contract: type[ContractT],
        *,
        name: str | None = None,
        log_calls: bool = False,
    ) -> None:
        """Create a mock of *contract*.

        Parameters
        ----------
        contract:
            A :class:`typing.Protocol` or an abstract base class.
        name:
            Label used in ``repr``; defaults to the contract name.
        log_calls:
            Log every intercepted call at ``INFO`` rather than ``DEBUG``.

        Raises
        ------
        UnsupportedContractError
            If *contract* cannot be proxied.
        """
        factory = get_or_build(contract)
        self.description: ContractDescription = factory.description
        self.name = name or self.description.name
        self.interceptor = CallInterceptor(log_calls=log_calls)
        self.object: ContractT = factory.create(self.interceptor)

    @property
    def invocations(self) -> tuple[CallDescriptor, ...]:
        """Return every call made on :attr:`object` so far."""
        return self.interceptor.invocations

    def __repr__(self) -> str:
        return f"Mock({self.name!r}, invocations={len(self.invocations)})"

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------
    def setup(
        self,
        operation: str,
        /,
        *args: object,
        type_args: TypeArgs = None,
        **kwargs: object,
    ) -> Setup:
        """Configure what calls of *operation* with these arguments do.

        A property name configures its getter.
        """
        op = self._callable(operation)
        builder = Setup(self._descriptor(op, args, kwargs, type_args))
        self.interceptor.register(builder.descriptor, builder.behavior)
        return builder

    def setup_sequence(
        self,
        operation: str,
        /,
        *args: object,
        type_args: TypeArgs = None,
        **kwargs: object,
    ) -> SequenceSetup:
        """Configure successive answers for matching calls of *operation*."""
        op = self._callable(operation)
        builder = SequenceSetup(self._descriptor(op, args, kwargs, type_args))
        self.interceptor.register(builder.descriptor, builder.behavior)
        return builder

    def setup_get(self, prop: str) -> Setup:
        """Configure reads of the property *prop*."""
        op = self._property(prop, "setup_get").getter
        builder = Setup(self._descriptor(op, (), {}, None))
        self.interceptor.register(builder.descriptor, builder.behavior)
        return builder

    def setup_set(self, prop: str, /, value: object = _UNSET) -> ActionSetup:
        """Configure assignments of *value* to the property *prop*.

        Without *value* every assignment matches.
        """
        op = self._setter(prop, "setup_set")
        builder = ActionSetup(self._descriptor(op, (_or_any(value),), {}, None))
        self.interceptor.register(builder.descriptor, builder.behavior)
        return builder

    # ------------------------------------------------------------------
    # Verification
    # ------------------------------------------------------------------
    def verify(
        self,
        operation: str,
        /,
        *args: object,
        times: Times | None = None,
        type_args: TypeArgs = None,
        **kwargs: object,
    ) -> int:
        """Assert how often *operation* was called with matching arguments.

        ``times`` defaults to :meth:`Times.at_least_once`. Returns the number
        of matching calls.

        Raises
        ------
        VerificationError
            If the number of matching calls is outside ``times``.
        """
        op = self._callable(operation)
        return self._verify(self._descriptor(op, args, kwargs, type_args), times)

    def verify_get(self, prop: str, *, times: Times | None = None) -> int:
        """Assert how often the property *prop* was read."""
        op = self._property(prop, "verify_get").getter
        return self._verify(self._descriptor(op, (), {}, None), times)

    def verify_set(
        self, prop: str, /, value: object = _UNSET, *, times: Times | None = None
    ) -> int:
        """Assert how often *value* was assigned to the property *prop*."""
        op = self._setter(prop, "verify_set")
        return self._verify(self._descriptor(op, (_or_any(value),), {}, None), times)

    def _verify(self, query: CallDescriptor, times: Times | None) -> int:
        return self.interceptor.verify(
            query, Times.at_least_once() if times is None else times
        )

    # ------------------------------------------------------------------
    # Call-shape resolution
    # ------------------------------------------------------------------
    def _callable(self, name: str) -> OperationDescription:
        op = self.description.method(name)
        if op is not None:
            return op
        prop = self.description.property(name)
        if prop is not None:
            return prop.getter
        raise self._unknown(name)

    def _property(self, name: str, action: str) -> PropertyDescription:
        prop = self.description.property(name)
        if prop is not None:
            return prop
        if self.description.method(name) is not None:
            msg = f"{action}: {self.description.name}.{name} is a method, not a property"
            raise UnsupportedCallShapeError(msg)
        raise self._unknown(name)

    def _setter(self, name: str, action: str) -> OperationDescription:
        prop = self._property(name, action)
        if prop.setter is None:
            msg = f"{action}: {self.description.name}.{name} has no setter"
            raise MissingAccessorError(msg)
        return prop.setter

    def _unknown(self, name: str) -> UnsupportedCallShapeError:
        known = sorted([*self.description.methods, *self.description.properties])
        msg = (
            f"{self.description.name} has no operation {name!r}; "
            f"known operations: {', '.join(known) or '(none)'}"
        )
        return UnsupportedCallShapeError(msg)

    def _descriptor(
        self,
        op: OperationDescription,
        args: t.Sequence[object],
        kwargs: t.Mapping[str, object],
        type_args: TypeArgs,
    ) -> CallDescriptor:
        try:
            arguments = op.bind(args, kwargs)
        except TypeError as exc:
            msg = f"Cannot bind arguments for {op.display_name}: {exc}"
            raise UnsupportedCallShapeError(msg) from exc
        binding = _binding_for(op, type_args)
        return CallDescriptor(op.identity(binding), arguments)


def _or_any(value: object) -> object:
    return any_value() if value is _UNSET else value


def _binding_for(op: OperationDescription, type_args: TypeArgs) -> tuple[type, ...] | None:
    """Validate explicit type arguments for a generic operation."""
    if type_args is None:
        return None
    binding = (type_args,) if isinstance(type_args, type) else tuple(type_args)
    if op.kind is not OperationKind.METHOD or not op.is_generic:
        msg = f"{op.display_name} is not generic and takes no type_args"
        raise UnsupportedCallShapeError(msg)
    if len(binding) != len(op.type_params):
        msg = (
            f"{op.display_name} has {len(op.type_params)} type parameter(s), "
            f"got {len(binding)} type_args"
        )
        raise UnsupportedCallShapeError(msg)
    return binding


__all__ = ["Mock"]
