"""Pytest configuration and shared fixtures."""

import pytest

from recordgen import clear_generators
from tests.records import FIXED_NOW


@pytest.fixture
def fixed_clock():
    """Clock that always returns FIXED_NOW."""
    return lambda: FIXED_NOW


@pytest.fixture(autouse=True)
def clean_registry():
    """Clear registered generators after each test."""
    yield
    clear_generators()
