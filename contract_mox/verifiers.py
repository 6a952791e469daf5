"""Verification helpers for :class:`~contract_mox.interceptor.CallInterceptor`."""

from __future__ import annotations

import typing as t
from textwrap import indent

from .errors import VerificationError

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .descriptors import CallDescriptor
    from .journal import InvocationLog
    from .times import Times


def _numbered(entries: t.Sequence[str], *, start: int = 1) -> str:
    if not entries:
        return "(none)"
    return "\n".join(
        f"{index}. {entry}" for index, entry in enumerate(entries, start=start)
    )


def _format_sections(title: str, sections: list[tuple[str, str]]) -> str:
    parts = [title]
    for label, body in sections:
        if not body:
            continue
        parts.append("")
        parts.append(f"{label}:")
        parts.append(indent(body, "  "))
    return "\n".join(parts)


def _describe_range(times: Times) -> str:
    upper = "inf" if times.max is None else str(times.max)
    return f"{times.describe()} [{times.min}, {upper}]"


class CountVerifier:
    """Check that a call pattern occurred an acceptable number of times."""

    def verify(self, journal: InvocationLog, query: CallDescriptor, times: Times) -> int:
        """Return the matching count, raising when it falls outside *times*."""
        actual = journal.count(query)
        if times.contains(actual):
            return actual
        related = [call.describe() for call in journal.for_operation(query)]
        msg = _format_sections(
            "Invocation count outside the expected range.",
            [
                ("Expected call", query.describe()),
                ("Expected count", _describe_range(times)),
                ("Observed calls", str(actual)),
                ("Recorded invocations of this operation", _numbered(related)),
            ],
        )
        raise VerificationError(msg, expected=times, actual=actual)


__all__ = ["CountVerifier"]
