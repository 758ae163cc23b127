"""Withdrawal repositories: immutable legacy withdrawals and completable requests."""

from abc import ABC, abstractmethod

from sqlalchemy import exc as sa_exc
from sqlalchemy import update
from sqlmodel import select

from src.funding.core.codec import decode_uint, encode_uint
from src.funding.core.exceptions import IntegrityError, ValidationError
from src.funding.core.logging import get_logger
from src.funding.models.domain import (
    SavedWithdrawal,
    SavedWithdrawalRequest,
    Withdrawal,
    WithdrawalRequest,
)
from src.funding.models.records import LegacyWithdrawalRecord, WithdrawalRequestRecord
from src.funding.repositories.base import (
    PostgresRepository,
    check_text,
    is_storable_id,
    parse_id,
)

logger = get_logger(__name__)


class WithdrawalRepository(ABC):
    """Storage contract for legacy withdrawals. Append-only."""

    @abstractmethod
    async def init(self) -> None:
        """Ensure the withdrawal table exists. Requires the project table."""

    @abstractmethod
    async def save(self, withdrawal: Withdrawal) -> SavedWithdrawal:
        """Insert a withdrawal, raising IntegrityError for an unknown project."""

    @abstractmethod
    async def load_all(self, project_id: int) -> list[SavedWithdrawal]:
        """All withdrawals of a project, most recent first."""


class WithdrawalRequestRepository(ABC):
    """Storage contract for withdrawal requests (pending -> complete)."""

    @abstractmethod
    async def init(self) -> None:
        """Ensure the withdrawal_request table exists. Requires the project table."""

    @abstractmethod
    async def save(self, request: WithdrawalRequest) -> SavedWithdrawalRequest:
        """Insert a pending request, raising IntegrityError for an unknown project."""

    @abstractmethod
    async def load_all(self, project_id: int) -> list[SavedWithdrawalRequest]:
        """All requests of a project, most recent first."""

    @abstractmethod
    async def complete(self, request_id: int) -> None:
        """Mark a request complete.

        Idempotent. Completing an unknown id is a no-op, not an error.
        """


def check_withdrawal(withdrawal: Withdrawal) -> int:
    """Validate the caller-supplied fields and return the parsed project id."""
    project_id = parse_id(withdrawal.project_id, "project id")
    check_text(withdrawal.description, "Description")
    if withdrawal.date.tzinfo is None or withdrawal.date.utcoffset() is None:
        raise ValidationError("Withdrawal date must be timezone-aware")
    return project_id


def _unknown_project(project_id: int) -> IntegrityError:
    return IntegrityError(f"Project {project_id} does not exist")


class PostgresWithdrawalRepository(PostgresRepository, WithdrawalRepository):
    tables = (LegacyWithdrawalRecord.__table__,)

    async def save(self, withdrawal: Withdrawal) -> SavedWithdrawal:
        project_id = check_withdrawal(withdrawal)
        if not is_storable_id(project_id):
            raise _unknown_project(project_id)
        record = LegacyWithdrawalRecord(
            project_id=project_id,
            amount=encode_uint(withdrawal.amount),
            description=withdrawal.description,
            date=withdrawal.date,
        )
        try:
            async with self._sessions.begin() as session:
                session.add(record)
                await session.flush()
                withdrawal_id = record.id
        except sa_exc.IntegrityError as e:
            raise _unknown_project(project_id) from e

        logger.debug("Saved withdrawal", withdrawal_id=withdrawal_id, project_id=project_id)
        return SavedWithdrawal(
            id=str(withdrawal_id),
            project_id=str(project_id),
            amount=withdrawal.amount,
            description=withdrawal.description,
            date=withdrawal.date,
        )

    async def load_all(self, project_id: int) -> list[SavedWithdrawal]:
        if not is_storable_id(project_id):
            return []
        async with self._sessions() as session:
            result = await session.execute(
                select(LegacyWithdrawalRecord)
                .where(LegacyWithdrawalRecord.project_id == project_id)
                .order_by(LegacyWithdrawalRecord.date.desc(), LegacyWithdrawalRecord.id.desc())
            )
            records = result.scalars().all()
        return [
            SavedWithdrawal(
                id=str(r.id),
                project_id=str(r.project_id),
                amount=decode_uint(r.amount),
                description=r.description,
                date=r.date,
            )
            for r in records
        ]


class PostgresWithdrawalRequestRepository(PostgresRepository, WithdrawalRequestRepository):
    tables = (WithdrawalRequestRecord.__table__,)

    async def save(self, request: WithdrawalRequest) -> SavedWithdrawalRequest:
        project_id = check_withdrawal(request)
        if not is_storable_id(project_id):
            raise _unknown_project(project_id)
        record = WithdrawalRequestRecord(
            project_id=project_id,
            amount=encode_uint(request.amount),
            description=request.description,
            date=request.date,
            complete=False,
        )
        try:
            async with self._sessions.begin() as session:
                session.add(record)
                await session.flush()
                request_id = record.id
        except sa_exc.IntegrityError as e:
            raise _unknown_project(project_id) from e

        logger.debug("Saved withdrawal request", request_id=request_id, project_id=project_id)
        return SavedWithdrawalRequest(
            id=str(request_id),
            project_id=str(project_id),
            amount=request.amount,
            description=request.description,
            date=request.date,
            complete=False,
        )

    async def load_all(self, project_id: int) -> list[SavedWithdrawalRequest]:
        if not is_storable_id(project_id):
            return []
        async with self._sessions() as session:
            result = await session.execute(
                select(WithdrawalRequestRecord)
                .where(WithdrawalRequestRecord.project_id == project_id)
                .order_by(
                    WithdrawalRequestRecord.date.desc(), WithdrawalRequestRecord.id.desc()
                )
            )
            records = result.scalars().all()
        return [
            SavedWithdrawalRequest(
                id=str(r.id),
                project_id=str(r.project_id),
                amount=decode_uint(r.amount),
                description=r.description,
                date=r.date,
                complete=r.complete,
            )
            for r in records
        ]

    async def complete(self, request_id: int) -> None:
        if not is_storable_id(request_id):
            logger.warning("Completing unknown withdrawal request", request_id=request_id)
            return
        async with self._sessions.begin() as session:
            result = await session.execute(
                update(WithdrawalRequestRecord)
                .where(WithdrawalRequestRecord.id == request_id)
                .values(complete=True)
            )
        if result.rowcount == 0:
            logger.warning("Completing unknown withdrawal request", request_id=request_id)
        else:
            logger.debug("Completed withdrawal request", request_id=request_id)
