"""Contracts mocked by the behavioural tests."""

from __future__ import annotations

import typing as t


class Counter(t.Protocol):
    """Source of counts used by the scenarios."""

    def get_count(self) -> int: ...

    def add(self, a: int, b: int) -> int: ...


class Thermostat(t.Protocol):
    """Device with a writable target temperature."""

    @property
    def target(self) -> float: ...

    @target.setter
    def target(self, value: float) -> None: ...


CONTRACTS: dict[str, type] = {
    "counter": Counter,
    "thermostat": Thermostat,
}
