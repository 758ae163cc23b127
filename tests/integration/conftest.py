"""Integration test fixtures for PostgreSQL-backed repositories.

These fixtures require external resources (PostgreSQL at DATABASE_URL).
Tests are skipped when the database cannot be reached.
"""

from collections.abc import AsyncGenerator

import pytest
from sqlalchemy import text
from sqlalchemy.exc import DBAPIError, OperationalError
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import NullPool

from src.funding.core.config import SchemaVariant, get_settings
from src.funding.repositories.factory import Repositories, postgres_repositories
from tests.utils.cleanup import drop_all_tables


@pytest.fixture(scope="function")
async def engine() -> AsyncGenerator[AsyncEngine]:
    """Create a test engine on an empty database.

    Both layouts use a table named `project`, so tables are dropped before
    and after every test.
    """
    settings = get_settings()
    test_engine = create_async_engine(settings.database_url, poolclass=NullPool)
    try:
        async with test_engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except (OSError, OperationalError, DBAPIError) as e:
        await test_engine.dispose()
        pytest.skip(f"PostgreSQL not reachable: {e}")

    await drop_all_tables(test_engine)
    yield test_engine
    await drop_all_tables(test_engine)
    await test_engine.dispose()


@pytest.fixture
async def repositories(engine: AsyncEngine) -> Repositories:
    """Initialized repositories for the current (uuid + request) layout."""
    repos = postgres_repositories(engine, SchemaVariant.CURRENT)
    await repos.init()
    return repos


@pytest.fixture
async def legacy_repositories(engine: AsyncEngine) -> Repositories:
    """Initialized repositories for the slot-based layout."""
    repos = postgres_repositories(engine, SchemaVariant.LEGACY)
    await repos.init()
    return repos
