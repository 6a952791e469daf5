"""Setup-side descriptors mapped to the behaviours they trigger."""

from __future__ import annotations

import dataclasses as dc
import logging
import typing as t

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .behaviors import Behavior
    from .descriptors import CallDescriptor

logger = logging.getLogger(__name__)


@dc.dataclass(slots=True)
class RegistryEntry:
    """A configured call shape and its behaviour."""

    descriptor: CallDescriptor
    behavior: Behavior


class BehaviorRegistry:
    """Ordered registry with overwrite-on-equal semantics.

    Two descriptors are equal when :meth:`CallDescriptor.matches` says so.
    Registering over an equal key replaces the behaviour of that entry and
    keeps its original key, so lookup order stays the order in which call
    shapes were first configured.
    """

    __slots__ = ("_entries",)

    def __init__(self) -> None:
        self._entries: list[RegistryEntry] = []

    def register(self, descriptor: CallDescriptor, behavior: Behavior) -> bool:
        """Store *behavior* for *descriptor*.

        Returns ``True`` when an existing entry was replaced.
        """
        for entry in self._entries:
            if entry.descriptor.matches(descriptor):
                logger.debug(
                    "Replacing behaviour of %s (configured as %s)",
                    entry.descriptor.describe(),
                    descriptor.describe(),
                )
                entry.behavior = behavior
                return True
        self._entries.append(RegistryEntry(descriptor, behavior))
        logger.debug("Registered setup %s", descriptor.describe())
        return False

    def lookup(self, call: CallDescriptor) -> RegistryEntry | None:
        """Return the first entry whose key matches *call*."""
        return next(
            (entry for entry in self._entries if entry.descriptor.matches(call)),
            None,
        )

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> t.Iterator[RegistryEntry]:
        return iter(list(self._entries))
