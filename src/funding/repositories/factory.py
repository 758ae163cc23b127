"""Repository wiring for one schema layout."""

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncEngine

from src.funding.core.config import SchemaVariant
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


@dataclass
class Repositories:
    """The repositories of one layout.

    Legacy layouts have `withdrawals`, current layouts `withdrawal_requests`.
    """

    projects: ProjectRepository
    withdrawals: WithdrawalRepository | None = None
    withdrawal_requests: WithdrawalRequestRepository | None = None

    async def init(self) -> None:
        """Create missing tables. Projects first, withdrawals reference them."""
        await self.projects.init()
        if self.withdrawals is not None:
            await self.withdrawals.init()
        if self.withdrawal_requests is not None:
            await self.withdrawal_requests.init()


def postgres_repositories(engine: AsyncEngine, variant: SchemaVariant) -> Repositories:
    if variant is SchemaVariant.LEGACY:
        return Repositories(
            projects=LegacyPostgresProjectRepository(engine),
            withdrawals=PostgresWithdrawalRepository(engine),
        )
    return Repositories(
        projects=PostgresProjectRepository(engine),
        withdrawal_requests=PostgresWithdrawalRequestRepository(engine),
    )


def in_memory_repositories(variant: SchemaVariant) -> Repositories:
    projects = InMemoryProjectRepository(variant)
    if variant is SchemaVariant.LEGACY:
        return Repositories(projects=projects, withdrawals=InMemoryWithdrawalRepository(projects))
    return Repositories(
        projects=projects,
        withdrawal_requests=InMemoryWithdrawalRequestRepository(projects),
    )
