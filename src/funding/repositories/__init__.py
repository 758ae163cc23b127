"""Repository layer - data access abstraction."""

from src.funding.repositories.base import PostgresRepository
from src.funding.repositories.memory import (
    InMemoryProjectRepository,
    InMemoryWithdrawalRepository,
    InMemoryWithdrawalRequestRepository,
)
from src.funding.repositories.project import (
    LegacyPostgresProjectRepository,
    PostgresProjectRepository,
    ProjectRepository,
)
from src.funding.repositories.withdrawal import (
    PostgresWithdrawalRepository,
    PostgresWithdrawalRequestRepository,
    WithdrawalRepository,
    WithdrawalRequestRepository,
)

__all__ = [
    # Base
    "PostgresRepository",
    # Contracts
    "ProjectRepository",
    "WithdrawalRepository",
    "WithdrawalRequestRepository",
    # Postgres
    "LegacyPostgresProjectRepository",
    "PostgresProjectRepository",
    "PostgresWithdrawalRepository",
    "PostgresWithdrawalRequestRepository",
    # In-memory
    "InMemoryProjectRepository",
    "InMemoryWithdrawalRepository",
    "InMemoryWithdrawalRequestRepository",
]
