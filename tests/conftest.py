"""
Shared pytest fixtures and configuration for chronicle tests.

This module provides:
- Settings cache isolation between tests
- The hunger scenario: ``v0`` .. ``v3`` built by repeated ``eat()``
"""

from typing import Generator

import pytest

from chronicle.core.settings import get_settings
from chronicle.versioning import VersionedValue, construct
from tests._support.hosts import eat, people


# =============================================================================
# Test Markers Configuration
# =============================================================================


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Auto-mark tests based on their name."""
    for item in items:
        if "scenario" in item.path.name or "scenario" in item.name:
            item.add_marker(pytest.mark.integration)

        markers = {mark.name for mark in item.iter_markers()}
        if not markers.intersection({"unit", "integration"}):
            item.add_marker(pytest.mark.unit)


# =============================================================================
# Settings Isolation
# =============================================================================


@pytest.fixture(autouse=True)
def clean_settings_cache() -> Generator[None, None, None]:
    """
    Clear cached settings before and after each test.

    Tests that set CHRONICLE_* variables through monkeypatch would otherwise
    leak the cached instance into later tests.
    """
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# =============================================================================
# Hunger Scenario Fixtures
# =============================================================================


@pytest.fixture
def v0() -> VersionedValue:
    """A 20 year old with hunger 100 and no history."""
    return construct(people(), 20)


@pytest.fixture
def v1(v0: VersionedValue) -> VersionedValue:
    return v0.transform(eat())


@pytest.fixture
def v2(v1: VersionedValue) -> VersionedValue:
    return v1.transform(eat())


@pytest.fixture
def v3(v2: VersionedValue) -> VersionedValue:
    return v2.transform(eat())
