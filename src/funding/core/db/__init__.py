"""Database utilities - engine and sessions."""

from src.funding.core.db.engine import (
    create_db_engine,
    dispose_engine,
    open_engine,
)
from src.funding.core.db.session import make_session_factory

__all__ = [
    # Engine
    "create_db_engine",
    "dispose_engine",
    "open_engine",
    # Session
    "make_session_factory",
]
