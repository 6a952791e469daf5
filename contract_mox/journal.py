"""Append-only record of actual invocations."""

from __future__ import annotations

import typing as t

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .descriptors import CallDescriptor


class InvocationLog:
    """Ordered log with one entry per intercepted call.

    Entries are never removed; a fresh mock starts with a fresh log. The
    owning interceptor serialises access.
    """

    __slots__ = ("_entries",)

    def __init__(self) -> None:
        self._entries: list[CallDescriptor] = []

    def append(self, call: CallDescriptor) -> None:
        """Record *call* at the end of the log."""
        self._entries.append(call)

    def entries(self) -> tuple[CallDescriptor, ...]:
        """Return a snapshot of every recorded call."""
        return tuple(self._entries)

    def matching(self, query: CallDescriptor) -> list[CallDescriptor]:
        """Return recorded calls that match *query*, in call order."""
        return [call for call in self._entries if query.matches(call)]

    def count(self, query: CallDescriptor) -> int:
        """Return how many recorded calls match *query*."""
        return len(self.matching(query))

    def for_operation(self, query: CallDescriptor) -> list[CallDescriptor]:
        """Return recorded calls of the same operation, whatever the arguments."""
        return [
            call for call in self._entries if query.operation.is_compatible(call.operation)
        ]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> t.Iterator[CallDescriptor]:
        return iter(self.entries())
