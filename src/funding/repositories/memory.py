"""In-memory repositories with the same contracts as the Postgres ones.

Projects are kept in their encoded record form, so every save and load goes
through the same codec as the database path.
"""

from itertools import count
from uuid import UUID

from src.funding.core.config import SchemaVariant
from src.funding.core.exceptions import IntegrityError, NotFound
from src.funding.core.logging import get_logger
from src.funding.models.domain import (
    Project,
    SavedWithdrawal,
    SavedWithdrawalRequest,
    Withdrawal,
    WithdrawalRequest,
)
from src.funding.models.records import LegacyProjectRecord, ProjectRecord
from src.funding.repositories.project import (
    ProjectRepository,
    legacy_record_to_project,
    project_to_legacy_record,
    project_to_record,
    record_to_project,
)
from src.funding.repositories.withdrawal import (
    WithdrawalRepository,
    WithdrawalRequestRepository,
    check_withdrawal,
)

logger = get_logger(__name__)


class InMemoryProjectRepository(ProjectRepository):
    def __init__(self, variant: SchemaVariant = SchemaVariant.CURRENT):
        self.variant = variant
        self._ids = count(1)
        self._records: dict[int, ProjectRecord | LegacyProjectRecord] = {}

    async def init(self) -> None:
        pass

    def exists(self, project_id: int) -> bool:
        return project_id in self._records

    async def save(self, project: Project) -> str:
        if self.variant is SchemaVariant.LEGACY:
            record: ProjectRecord | LegacyProjectRecord = project_to_legacy_record(project)
        else:
            record = project_to_record(project)
            if any(
                isinstance(r, ProjectRecord) and r.uuid == record.uuid
                for r in self._records.values()
            ):
                raise IntegrityError(f"Project {record.uuid} violates a constraint")
        record.id = next(self._ids)
        self._records[record.id] = record
        logger.debug("Saved project", project_id=record.id)
        return str(record.id)

    async def load(self, project_id: int) -> Project:
        record = self._records.get(project_id)
        if record is None:
            raise NotFound(f"Project not found: {project_id}")
        return self._decode(record)

    async def load_by_external_id(self, project_uuid: UUID) -> Project:
        for record in self._records.values():
            if isinstance(record, ProjectRecord) and record.uuid == project_uuid:
                return self._decode(record)
        raise NotFound(f"Project not found: {project_uuid}")

    @staticmethod
    def _decode(record: ProjectRecord | LegacyProjectRecord) -> Project:
        if isinstance(record, LegacyProjectRecord):
            return legacy_record_to_project(record)
        return record_to_project(record)


class InMemoryWithdrawalRepository(WithdrawalRepository):
    def __init__(self, projects: InMemoryProjectRepository):
        self.projects = projects
        self._ids = count(1)
        self._withdrawals: list[SavedWithdrawal] = []

    async def init(self) -> None:
        pass

    async def save(self, withdrawal: Withdrawal) -> SavedWithdrawal:
        project_id = check_withdrawal(withdrawal)
        if not self.projects.exists(project_id):
            raise IntegrityError(f"Project {project_id} does not exist")
        saved = SavedWithdrawal(
            id=str(next(self._ids)),
            **withdrawal.model_dump(exclude={"project_id"}),
            project_id=str(project_id),
        )
        self._withdrawals.append(saved)
        return saved

    async def load_all(self, project_id: int) -> list[SavedWithdrawal]:
        rows = [w for w in self._withdrawals if int(w.project_id) == project_id]
        return sorted(rows, key=lambda w: (w.date, int(w.id)), reverse=True)


class InMemoryWithdrawalRequestRepository(WithdrawalRequestRepository):
    def __init__(self, projects: InMemoryProjectRepository):
        self.projects = projects
        self._ids = count(1)
        self._requests: dict[int, SavedWithdrawalRequest] = {}

    async def init(self) -> None:
        pass

    async def save(self, request: WithdrawalRequest) -> SavedWithdrawalRequest:
        project_id = check_withdrawal(request)
        if not self.projects.exists(project_id):
            raise IntegrityError(f"Project {project_id} does not exist")
        request_id = next(self._ids)
        saved = SavedWithdrawalRequest(
            id=str(request_id),
            complete=False,
            **request.model_dump(exclude={"project_id"}),
            project_id=str(project_id),
        )
        self._requests[request_id] = saved
        return saved

    async def load_all(self, project_id: int) -> list[SavedWithdrawalRequest]:
        rows = [r for r in self._requests.values() if int(r.project_id) == project_id]
        return sorted(rows, key=lambda r: (r.date, int(r.id)), reverse=True)

    async def complete(self, request_id: int) -> None:
        request = self._requests.get(request_id)
        if request is None:
            logger.warning("Completing unknown withdrawal request", request_id=request_id)
            return
        self._requests[request_id] = request.model_copy(update={"complete": True})
