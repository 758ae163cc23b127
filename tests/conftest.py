"""Root test fixtures shared across all test types.

This conftest contains fixtures that can be used by both unit and integration tests.
Database-specific fixtures are in tests/integration/conftest.py.
"""

import os

os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("DEPLOYMENT", "local")

# ruff: noqa: E402 - Imports must be after env var setup
import pytest

from src.funding.core.config import SchemaVariant, get_settings
from src.funding.repositories.factory import Repositories, in_memory_repositories

# Clear settings cache to ensure test environment variables are picked up
get_settings.cache_clear()


@pytest.fixture
def repositories() -> Repositories:
    """In-memory repositories for the current (uuid + request) layout."""
    return in_memory_repositories(SchemaVariant.CURRENT)


@pytest.fixture
def legacy_repositories() -> Repositories:
    """In-memory repositories for the slot-based layout."""
    return in_memory_repositories(SchemaVariant.LEGACY)
