"""Runtime synthesis of proxy classes for contracts.

For each contract a subclass is built once with :func:`type`, its namespace
holding one forwarding function per operation. The resulting
:class:`ProxyFactory` is cached for the lifetime of the process.
"""

from __future__ import annotations

import inspect
import logging
import threading
import typing as t

from .contracts import (
    ContractDescription,
    OperationDescription,
    ReturnKind,
    check_contract,
    describe_contract,
)
from .deferred import Deferred
from .descriptors import CallDescriptor

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .interceptor import CallInterceptor

logger = logging.getLogger(__name__)

INTERCEPTOR_ATTR = "_contract_mox_interceptor"

_FACTORIES: dict[type, ProxyFactory] = {}
_FACTORIES_LOCK = threading.Lock()


def _interceptor_of(proxy: object) -> CallInterceptor:
    return t.cast("CallInterceptor", object.__getattribute__(proxy, INTERCEPTOR_ATTR))


def _forwarder_signature(op: OperationDescription) -> inspect.Signature:
    self_param = inspect.Parameter("self", inspect.Parameter.POSITIONAL_OR_KEYWORD)
    return op.signature.replace(
        parameters=[self_param, *op.signature.parameters.values()]
    )


def _copy_metadata(func: t.Callable[..., object], op: OperationDescription, qualname: str) -> None:
    func.__name__ = op.name
    func.__qualname__ = f"{qualname}.{op.name}"
    func.__doc__ = op.doc
    func.__signature__ = _forwarder_signature(op)  # type: ignore[attr-defined]


def _make_forwarder(op: OperationDescription, qualname: str) -> t.Callable[..., object]:
    """Return a function routing calls of *op* to the bound interceptor."""
    unbound = None if op.is_generic else op.identity()
    returns = op.returns

    def _intercept(proxy: object, arguments: tuple[object, ...]) -> object:
        identity = unbound or op.identity(op.infer_binding(arguments))
        call = CallDescriptor(identity, arguments)
        return _interceptor_of(proxy).intercept(call, arguments)

    if returns.kind is ReturnKind.DEFERRED:

        def forward(self: object, /, *args: object, **kwargs: object) -> object:
            arguments = op.bind(args, kwargs)
            try:
                result = _intercept(self, arguments)
            except Exception as exc:  # noqa: BLE001 - surfaces when awaited
                return Deferred.failed(exc)
            return returns.coerce(result)

    else:

        def forward(self: object, /, *args: object, **kwargs: object) -> object:
            return returns.coerce(_intercept(self, op.bind(args, kwargs)))

    _copy_metadata(forward, op, qualname)
    return forward


def _build_namespace(description: ContractDescription, qualname: str) -> dict[str, object]:
    namespace: dict[str, object] = {
        "__module__": __name__,
        "__qualname__": qualname,
        "__doc__": f"Synthesised proxy implementing {description.name}.",
    }
    for name, op in description.methods.items():
        namespace[name] = _make_forwarder(op, qualname)
    for name, prop in description.properties.items():
        fget = _make_forwarder(prop.getter, qualname)
        fset = None if prop.setter is None else _make_forwarder(prop.setter, qualname)
        namespace[name] = property(fget, fset, doc=prop.getter.doc)
    if "__repr__" not in namespace:
        namespace["__repr__"] = lambda self: f"<{description.name} proxy>"
    return namespace


class ProxyFactory:
    """Builds proxy instances of one synthesised class."""

    def __init__(self, description: ContractDescription, proxy_class: type) -> None:
        self.description = description
        self.proxy_class = proxy_class

    @classmethod
    def synthesise(cls, description: ContractDescription) -> ProxyFactory:
        """Build the proxy class for *description*."""
        contract = description.contract
        qualname = f"{contract.__qualname__}Proxy"
        namespace = _build_namespace(description, qualname)
        try:
            proxy_class = type(f"{contract.__name__}Proxy", (contract,), namespace)
        except TypeError as exc:
            from .errors import UnsupportedContractError

            msg = f"Cannot subclass {contract.__name__}: {exc}"
            raise UnsupportedContractError(msg) from exc
        logger.debug(
            "Synthesised %s with %d method(s) and %d property(ies)",
            proxy_class.__qualname__,
            len(description.methods),
            len(description.properties),
        )
        return cls(description, proxy_class)

    def create(self, interceptor: CallInterceptor) -> t.Any:
        """Return a new proxy forwarding every call to *interceptor*."""
        instance = object.__new__(self.proxy_class)
        object.__setattr__(instance, INTERCEPTOR_ATTR, interceptor)
        return instance


def get_or_build(contract: type | ContractDescription) -> ProxyFactory:
    """Return the cached factory for *contract*, synthesising it on first use.

    Raises
    ------
    UnsupportedContractError
        If *contract* cannot be proxied.
    """
    key = (
        contract.contract
        if isinstance(contract, ContractDescription)
        else check_contract(contract)
    )
    with _FACTORIES_LOCK:
        factory = _FACTORIES.get(key)
        if factory is None:
            description = (
                contract
                if isinstance(contract, ContractDescription)
                else describe_contract(contract)
            )
            factory = ProxyFactory.synthesise(description)
            _FACTORIES[description.contract] = factory
        return factory


def create_proxy(contract: type | ContractDescription, interceptor: CallInterceptor) -> t.Any:
    """Return a proxy for *contract* bound to *interceptor*."""
    return get_or_build(contract).create(interceptor)


def interceptor_of(proxy: object) -> CallInterceptor:
    """Return the interceptor a proxy forwards to."""
    try:
        return _interceptor_of(proxy)
    except AttributeError:
        msg = f"{proxy!r} is not a contract_mox proxy"
        raise TypeError(msg) from None


__all__ = [
    "INTERCEPTOR_ATTR",
    "ProxyFactory",
    "create_proxy",
    "get_or_build",
    "interceptor_of",
]
