"""Database engine management.

The engine (with its connection pool) is the single shared handle to the
store. It is created once at startup and passed to every repository.
"""

import ssl
from typing import Any

from sqlalchemy import text
from sqlalchemy.exc import DBAPIError, OperationalError
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from src.funding.core.config import Settings, get_settings
from src.funding.core.exceptions import ConnectionFailure
from src.funding.core.logging import get_logger

logger = get_logger(__name__)


def _get_connect_args(settings: Settings) -> dict[str, Any]:
    """Get connection arguments including SSL configuration."""
    connect_args: dict[str, Any] = {}

    ssl_mode = settings.database_ssl_mode
    if ssl_mode != "disable":
        ssl_context = ssl.create_default_context()
        if ssl_mode == "prefer" or ssl_mode == "require":
            ssl_context.check_hostname = False
            ssl_context.verify_mode = ssl.CERT_NONE
        elif ssl_mode in ("verify-ca", "verify-full"):
            ssl_context.check_hostname = ssl_mode == "verify-full"
            ssl_context.verify_mode = ssl.CERT_REQUIRED
        connect_args["ssl"] = ssl_context

    return connect_args


def create_db_engine(settings: Settings | None = None) -> AsyncEngine:
    """Build the engine without touching the network."""
    settings = settings or get_settings()
    return create_async_engine(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        pool_pre_ping=True,
        connect_args=_get_connect_args(settings),
    )


async def open_engine(settings: Settings | None = None) -> AsyncEngine:
    """Build the engine and prove the store is reachable.

    Raises:
        ConnectionFailure: If the first connection cannot be established.
            Startup must abort; there is no retry.
    """
    engine = create_db_engine(settings)
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except (OSError, OperationalError, DBAPIError) as e:
        await engine.dispose()
        raise ConnectionFailure(f"Could not connect to the database: {e}") from e
    logger.info("Database connection established", url=engine.url.render_as_string())
    return engine


async def dispose_engine(engine: AsyncEngine | None) -> None:
    """Dispose the database engine. Call during shutdown."""
    if engine is not None:
        await engine.dispose()
