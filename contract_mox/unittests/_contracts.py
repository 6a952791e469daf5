"""Sample contracts shared by the unit tests."""

from __future__ import annotations

import abc
import collections.abc as cabc
import typing as t


class Counter(t.Protocol):
    """Counter with a handful of differently shaped operations."""

    def get_count(self) -> int: ...

    def add(self, a: int, b: int) -> int: ...

    def reset(self) -> None: ...

    def label(self, value: object) -> str: ...

    def names(self) -> list[str]: ...

    def lookup(self, key: str, default: str | None = None) -> str | None: ...

    def ratio(self) -> float: ...

    def enabled(self) -> bool: ...


class Thermostat(t.Protocol):
    @property
    def target(self) -> float: ...

    @target.setter
    def target(self, value: float) -> None: ...

    @property
    def reading(self) -> float: ...

    def calibrate(self, offset: float) -> bool: ...


class Named(t.Protocol):
    name: str


class Store(abc.ABC):
    """Abstract key-value store with one concrete template method."""

    @property
    @abc.abstractmethod
    def size(self) -> int: ...

    @abc.abstractmethod
    def get(self, key: str) -> str: ...

    @abc.abstractmethod
    def put(self, key: str, value: str) -> None: ...

    def get_or(self, key: str, fallback: str) -> str:
        return self.get(key) or fallback


class Fetcher(t.Protocol):
    async def fetch(self, url: str) -> bytes: ...

    def fetch_count(self, url: str) -> cabc.Awaitable[int]: ...

    async def close(self) -> None: ...


class Converter(t.Protocol):
    def convert[T](self, value: T) -> T: ...

    def pair[K, V](self, key: K, value: V) -> tuple[K, V]: ...

    def name(self) -> str: ...


class Repository[T](t.Protocol):
    def load(self, key: str) -> T: ...

    def save(self, item: T) -> None: ...


class Journal(t.Protocol):
    def log(self, level: str, *parts: object, **fields: object) -> None: ...


class Table(t.Protocol):
    def __getitem__(self, key: str) -> int: ...

    def __setitem__(self, key: str, value: int) -> None: ...


class Service(t.Protocol):
    def handle(self, request: str) -> str: ...

    def notify(self, event: str) -> None: ...


class Concrete:
    def run(self) -> int:
        return 1


class PlainAbstract(abc.ABC):
    """ABC without abstract members, which is concrete in practice."""

    def run(self) -> int:
        return 1


class StaticFactory(abc.ABC):
    @staticmethod
    @abc.abstractmethod
    def build() -> int: ...


@t.final
class Sealed(t.Protocol):
    def run(self) -> int: ...
