"""Behavioural tests for contract mocks using pytest-bdd."""

from __future__ import annotations

from pathlib import Path

from pytest_bdd import scenario

from tests.steps import *  # noqa: F403

FEATURES_DIR = Path(__file__).resolve().parent.parent / "features"


@scenario(str(FEATURES_DIR / "mock.feature"), "configured value is returned")
def test_configured_value() -> None:
    """Return a configured value."""
    pass


@scenario(str(FEATURES_DIR / "mock.feature"), "sequence answers are consumed in order")
def test_sequence_answers() -> None:
    """Consume sequence answers then fall back to the default."""
    pass


@scenario(str(FEATURES_DIR / "mock.feature"), "wildcard arguments match any value")
def test_wildcard_arguments() -> None:
    """Match a literal plus wildcard argument list."""
    pass


@scenario(str(FEATURES_DIR / "mock.feature"), "verification checks the call count")
def test_verification() -> None:
    """Verify exact call counts."""
    pass


@scenario(
    str(FEATURES_DIR / "mock.feature"), "property setter raises a configured fault"
)
def test_property_setter_fault() -> None:
    """Raise a configured fault from a property assignment."""
    pass


@scenario(str(FEATURES_DIR / "mock.feature"), "unconfigured calls return defaults")
def test_unconfigured_defaults() -> None:
    """Answer unconfigured calls with default values."""
    pass
