"""Exception hierarchy for :mod:`contract_mox`."""

from __future__ import annotations

import typing as t

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .times import Times


class ContractMoxError(Exception):
    """Base class for errors raised by the mocking engine itself."""


class UnsupportedContractError(ContractMoxError, TypeError):
    """Raised when a type cannot be turned into a proxy.

    Only ``typing.Protocol`` subclasses and abstract base classes with at
    least one abstract member describe an open capability boundary.
    """


class UnsupportedCallShapeError(ContractMoxError, ValueError):
    """Raised when a setup or verify call cannot be resolved to an operation."""


class MissingAccessorError(UnsupportedCallShapeError):
    """Raised when a setter is configured for a read-only property."""


class VerificationError(ContractMoxError, AssertionError):
    """Raised when an invocation count falls outside the expected range."""

    def __init__(self, message: str, *, expected: Times, actual: int) -> None:
        super().__init__(message)
        self.expected = expected
        self.actual = actual


__all__ = [
    "ContractMoxError",
    "MissingAccessorError",
    "UnsupportedCallShapeError",
    "UnsupportedContractError",
    "VerificationError",
]
