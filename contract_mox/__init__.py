"""Runtime test doubles for typing protocols and abstract base classes.

:class:`Mock` synthesises a subclass of a contract whose every call goes
through one interceptor. Calls are journalled, answered by configured
setups (or by the default value of their return type) and can be verified
afterwards against a :class:`Times` range.
"""

from __future__ import annotations

from .behaviors import DEFAULT
from .comparators import (
    Any,
    ArgumentMatcher,
    Contains,
    IsA,
    Predicate,
    Regex,
    StartsWith,
    any_value,
    matching,
)
from .contracts import ContractDescription, describe_contract
from .deferred import Deferred
from .descriptors import CallDescriptor, OperationIdentity
from .errors import (
    ContractMoxError,
    MissingAccessorError,
    UnsupportedCallShapeError,
    UnsupportedContractError,
    VerificationError,
)
from .interceptor import CallInterceptor
from .mock import Mock
from .proxy import create_proxy, get_or_build
from .pytest_plugin import MockFactory
from .pytest_plugin import contract_mox as contract_mox_fixture
from .setups import ActionSetup, SequenceSetup, Setup
from .times import Times

__all__ = [
    "DEFAULT",
    "ActionSetup",
    "Any",
    "ArgumentMatcher",
    "CallDescriptor",
    "CallInterceptor",
    "Contains",
    "ContractDescription",
    "ContractMoxError",
    "Deferred",
    "IsA",
    "MissingAccessorError",
    "Mock",
    "MockFactory",
    "OperationIdentity",
    "Predicate",
    "Regex",
    "SequenceSetup",
    "Setup",
    "StartsWith",
    "Times",
    "UnsupportedCallShapeError",
    "UnsupportedContractError",
    "VerificationError",
    "any_value",
    "contract_mox_fixture",
    "create_proxy",
    "describe_contract",
    "get_or_build",
    "matching",
]
