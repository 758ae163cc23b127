"""Database cleanup utilities for test fixtures.

Both layouts declare a `project` table, so each test starts from an empty
database. The drop order matters due to foreign key relationships.
"""

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine

OWNED_TABLES = ("withdrawal_request", "withdrawal", "project")


async def drop_all_tables(engine: AsyncEngine) -> None:
    """Drop every table owned by either layout. Children before parents."""
    async with engine.begin() as conn:
        for table in OWNED_TABLES:
            await conn.execute(text(f"DROP TABLE IF EXISTS {table} CASCADE"))
