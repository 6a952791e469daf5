"""Global test configuration and shared fixtures."""

from __future__ import annotations

import logging
import typing as t

import pytest


@pytest.fixture(autouse=True)
def debug_logging(caplog: pytest.LogCaptureFixture) -> t.Generator[None, None, None]:
    """Run every test with DEBUG logging enabled for ``contract_mox``.

    Diagnostics render descriptors and matchers, so formatting problems in
    their reprs show up as test failures rather than in production logs.
    """
    caplog.set_level(logging.DEBUG, logger="contract_mox")
    yield
    for record in caplog.get_records("call"):
        record.getMessage()
