"""Shared fixtures for the sfctools tests."""

import pytest

from sfctools.parsers import DecodeContext
from sfctools.utils import close_logging

from sfc_builders import SfcBuilder


@pytest.fixture
def builder():
    """Fresh stream builder (no classes headered yet)."""
    return SfcBuilder()


@pytest.fixture
def ctx():
    """Fresh decode context for one parse."""
    return DecodeContext()


@pytest.fixture(autouse=True)
def reset_logging():
    """Logging state is module-global; start and end every test clean."""
    close_logging()
    yield
    close_logging()
