"""Shared plumbing for the Postgres repositories."""

import re
from collections.abc import Sequence

from sqlalchemy import Table, text
from sqlalchemy.ext.asyncio import AsyncEngine
from sqlalchemy.schema import CreateIndex, CreateTable

from src.funding.core.db import make_session_factory
from src.funding.core.exceptions import IntegrityError, NotFound, ValidationError

# SERIAL columns are 32-bit; larger ids can never match a row
MAX_SERIAL_ID = 2**31 - 1

# Serializes table creation across processes
INIT_LOCK_KEY = 0x66756E64

_ID_PATTERN = re.compile(r"-?[0-9]+")


def parse_id(value: str | int, kind: str = "id") -> int:
    """Parse an outward-facing string id into a surrogate row id."""
    if isinstance(value, bool):
        raise ValidationError(f"Invalid {kind}: {value!r}")
    if isinstance(value, int):
        return value
    if not _ID_PATTERN.fullmatch(value):
        raise ValidationError(f"Invalid {kind}: {value[:64]!r}")
    try:
        return int(value)
    except ValueError as e:
        raise ValidationError(f"Invalid {kind}: too many digits") from e


def check_text(value: str, field: str) -> None:
    """Reject text PostgreSQL cannot hold in a TEXT column."""
    if "\x00" in value:
        raise ValidationError(f"{field} must not contain NUL characters")


def is_storable_id(value: int) -> bool:
    return 1 <= value <= MAX_SERIAL_ID


def exactly_one[T](rows: Sequence[T], not_found: str) -> T:
    """Return the single row, or fail on zero or several."""
    match rows:
        case [row]:
            return row
        case []:
            raise NotFound(not_found)
        case _:
            raise IntegrityError(f"Unexpected row count: {len(rows)}")


class PostgresRepository:
    """Base for repositories that share the process-wide engine.

    Repositories handle data access only; each call runs in its own
    session and transaction.
    """

    tables: tuple[Table, ...] = ()

    def __init__(self, engine: AsyncEngine):
        self.engine = engine
        self._sessions = make_session_factory(engine)

    async def init(self) -> None:
        """Create the owned tables unless they already exist.

        Concurrent calls queue on a transaction-scoped advisory lock;
        racing IF NOT EXISTS creates can otherwise collide in the catalog.
        """
        async with self.engine.begin() as conn:
            await conn.execute(
                text("SELECT pg_advisory_xact_lock(:key)"), {"key": INIT_LOCK_KEY}
            )
            for table in self.tables:
                await conn.execute(CreateTable(table, if_not_exists=True))
                for index in table.indexes:
                    await conn.execute(CreateIndex(index, if_not_exists=True))
