"""Invocation count ranges used by :meth:`Mock.verify`."""

from __future__ import annotations

import dataclasses as dc

from ._validators import validate_call_count


@dc.dataclass(frozen=True, slots=True)
class Times:
    """Inclusive range of acceptable invocation counts.

    ``max`` is ``None`` when the range has no upper bound.
    """

    min: int
    max: int | None

    def __post_init__(self) -> None:
        """Reject negative bounds and inverted ranges."""
        validate_call_count(self.min, name="min")
        if self.max is not None:
            validate_call_count(self.max, name="max")
            if self.min > self.max:
                msg = f"min ({self.min}) must not exceed max ({self.max})"
                raise ValueError(msg)

    @classmethod
    def never(cls) -> Times:
        """Expect no calls at all."""
        return cls(0, 0)

    @classmethod
    def once(cls) -> Times:
        """Expect exactly one call."""
        return cls(1, 1)

    @classmethod
    def at_least_once(cls) -> Times:
        """Expect one or more calls."""
        return cls(1, None)

    @classmethod
    def at_most_once(cls) -> Times:
        """Expect zero or one call."""
        return cls(0, 1)

    @classmethod
    def exactly(cls, count: int) -> Times:
        """Expect exactly ``count`` calls."""
        return cls(count, count)

    @classmethod
    def at_least(cls, count: int) -> Times:
        """Expect ``count`` or more calls."""
        return cls(count, None)

    @classmethod
    def at_most(cls, count: int) -> Times:
        """Expect between zero and ``count`` calls."""
        return cls(0, count)

    @classmethod
    def between(cls, minimum: int, maximum: int) -> Times:
        """Expect between ``minimum`` and ``maximum`` calls inclusive."""
        return cls(minimum, maximum)

    def contains(self, count: int) -> bool:
        """Return ``True`` when *count* lies within the range."""
        if count < self.min:
            return False
        return self.max is None or count <= self.max

    def describe(self) -> str:
        """Return a short human readable form such as ``exactly 2``."""
        if self.max is None:
            return f"at least {self.min}"
        if self.min == self.max:
            return f"exactly {self.min}"
        return f"between {self.min} and {self.max}"


__all__ = ["Times"]
