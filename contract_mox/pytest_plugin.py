"""Pytest plugin providing the ``contract_mox`` fixture."""

from __future__ import annotations

import logging
import typing as t

import pytest

from .mock import Mock

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from typing_extensions import TypeVar

    ContractT = TypeVar("ContractT")

logger = logging.getLogger(__name__)


def pytest_addoption(parser: pytest.Parser) -> None:
    """Register command-line and ini options for the plugin."""
    group = parser.getgroup("contract_mox")
    group.addoption(
        "--contract-mox-log-calls",
        action="store_true",
        dest="contract_mox_log_calls",
        default=None,
        help=(
            "Log every call made on a contract_mox mock at INFO level. "
            "Overrides the pytest.ini setting."
        ),
    )
    group.addoption(
        "--no-contract-mox-log-calls",
        action="store_false",
        dest="contract_mox_log_calls",
        default=None,
        help=(
            "Log calls made on contract_mox mocks at DEBUG level only. "
            "Overrides the pytest.ini setting."
        ),
    )
    parser.addini(
        "contract_mox_log_calls",
        "Log every call made on a contract_mox mock at INFO level.",
        type="bool",
        default=False,
    )


def pytest_configure(config: pytest.Config) -> None:
    """Register plugin-specific markers."""
    config.addinivalue_line(
        "markers",
        (
            "contract_mox(log_calls: bool = False): override call logging of "
            "the contract_mox fixture for a single test."
        ),
    )


def _log_calls_enabled(request: pytest.FixtureRequest) -> bool:
    """Return whether mocks created by the fixture log calls at INFO."""
    # Priority order: marker > CLI option > INI setting
    marker = request.node.get_closest_marker("contract_mox")
    if marker is not None and "log_calls" in marker.kwargs:
        return bool(marker.kwargs["log_calls"])

    config = request.config
    cli_value = config.getoption("contract_mox_log_calls")
    if cli_value is not None:
        return bool(cli_value)

    return bool(config.getini("contract_mox_log_calls"))


class MockFactory:
    """Create mocks sharing the fixture's configuration."""

    def __init__(self, *, log_calls: bool = False) -> None:
        self.log_calls = log_calls
        self._mocks: list[Mock[t.Any]] = []

    @property
    def mocks(self) -> tuple[Mock[t.Any], ...]:
        """Return every mock created so far."""
        return tuple(self._mocks)

    def create(self, contract: type[ContractT], *, name: str | None = None) -> Mock[ContractT]:
        """Return a new :class:`Mock` of *contract*."""
        mock = Mock(contract, name=name, log_calls=self.log_calls)
        self._mocks.append(mock)
        return mock

    def summary(self) -> str:
        """Return one line per mock with its invocation count."""
        return "\n".join(
            f"{mock.name}: {len(mock.invocations)} invocation(s)" for mock in self._mocks
        )


@pytest.fixture
def contract_mox(request: pytest.FixtureRequest) -> t.Generator[MockFactory, None, None]:
    """Provide a :class:`MockFactory` scoped to the test."""
    factory = MockFactory()
    try:
        factory.log_calls = _log_calls_enabled(request)
        yield factory
    except Exception:
        logger.exception("Error during contract_mox fixture setup")
        raise
    finally:
        if factory.mocks:
            logger.debug("contract_mox summary for %s:\n%s", request.node.nodeid, factory.summary())


__all__ = ["MockFactory", "contract_mox"]
