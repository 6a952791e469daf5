"""Shared validation helpers."""

from __future__ import annotations


def validate_call_count(count: int, *, name: str = "count") -> None:
    """Ensure *count* is usable as a bound of an invocation range."""
    if isinstance(count, bool) or not isinstance(count, int):
        msg = f"{name} must be an integer"
        raise TypeError(msg)

    if count < 0:
        msg = f"{name} must be >= 0"
        raise ValueError(msg)
