"""Project repositories for the current and legacy table layouts."""

from abc import ABC, abstractmethod
from uuid import UUID

from sqlalchemy import exc as sa_exc
from sqlmodel import select

from src.funding.core.codec import (
    decode_address,
    decode_program,
    decode_uint,
    encode_address,
    encode_program,
    encode_uint,
)
from src.funding.core.exceptions import IntegrityError, NotFound, ValidationError
from src.funding.core.logging import get_logger
from src.funding.models.domain import ContractAccount, Project, ProjectSpecs, SharesSpecs
from src.funding.models.records import EscrowColumns, LegacyProjectRecord, ProjectRecord
from src.funding.repositories.base import (
    PostgresRepository,
    check_text,
    exactly_one,
    is_storable_id,
)

logger = get_logger(__name__)

WITHDRAWAL_SLOT_COUNT = 3

ESCROW_ROLES = ("invest", "staking", "central", "customer")


class ProjectRepository(ABC):
    """Storage contract for projects. Projects are saved once and never updated."""

    @abstractmethod
    async def init(self) -> None:
        """Ensure the project table exists. Safe on every startup."""

    @abstractmethod
    async def save(self, project: Project) -> str:
        """Insert a project and return its generated id."""

    @abstractmethod
    async def load(self, project_id: int) -> Project:
        """Load a project by surrogate id, raising NotFound if absent."""

    @abstractmethod
    async def load_by_external_id(self, project_uuid: UUID) -> Project:
        """Load a project by its external identifier, raising NotFound if absent."""


def _check_names(project: Project) -> None:
    check_text(project.specs.name, "Project name")
    check_text(project.specs.shares.token_name, "Token name")


def check_current_shape(project: Project) -> None:
    """Reject projects the current layout cannot store losslessly."""
    _check_names(project)
    if project.uuid is None:
        raise ValidationError("Project has no uuid")
    if project.specs.investors_share is None:
        raise ValidationError("Project has no investors share")
    if project.specs.vote_threshold is not None:
        raise ValidationError("Vote threshold is only stored by the legacy layout")
    if project.withdrawal_slot_ids is not None:
        raise ValidationError("Withdrawal slots are only stored by the legacy layout")


def check_legacy_shape(project: Project) -> None:
    """Reject projects the slot-based layout cannot store losslessly."""
    _check_names(project)
    slot_count = len(project.withdrawal_slot_ids or ())
    if slot_count != WITHDRAWAL_SLOT_COUNT:
        raise ValidationError(
            f"Expected {WITHDRAWAL_SLOT_COUNT} withdrawal slot ids, got {slot_count}"
        )
    if project.specs.vote_threshold is None:
        raise ValidationError("Project has no vote threshold")
    if project.uuid is not None:
        raise ValidationError("The legacy layout does not store a uuid")
    if project.specs.investors_share is not None:
        raise ValidationError("The legacy layout does not store an investors share")


def _escrow_columns(project: Project) -> dict[str, str]:
    columns: dict[str, str] = {}
    for role in ESCROW_ROLES:
        escrow: ContractAccount = getattr(project, f"{role}_escrow")
        columns[f"{role}_e"] = encode_address(escrow.address)
        columns[f"{role}_b"] = encode_program(escrow.program)
    return columns


def _escrows(record: EscrowColumns) -> dict[str, ContractAccount]:
    return {
        f"{role}_escrow": ContractAccount(
            address=decode_address(getattr(record, f"{role}_e")),
            program=decode_program(getattr(record, f"{role}_b")),
        )
        for role in ESCROW_ROLES
    }


def project_to_record(project: Project) -> ProjectRecord:
    """Encode every field for the current layout. Fails before any I/O."""
    check_current_shape(project)
    return ProjectRecord(
        uuid=project.uuid,
        name=project.specs.name,
        creator=encode_address(project.creator),
        asset_price=encode_uint(project.specs.asset_price),
        investors_share=encode_uint(project.specs.investors_share),
        token_name=project.specs.shares.token_name,
        share_count=encode_uint(project.specs.shares.count),
        share_id=encode_uint(project.shares_asset_id),
        app_id=encode_uint(project.central_app_id),
        **_escrow_columns(project),
    )


def record_to_project(record: ProjectRecord) -> Project:
    return Project(
        uuid=record.uuid,
        specs=ProjectSpecs(
            name=record.name,
            shares=SharesSpecs(
                token_name=record.token_name,
                count=decode_uint(record.share_count),
            ),
            asset_price=decode_uint(record.asset_price),
            investors_share=decode_uint(record.investors_share),
        ),
        creator=decode_address(record.creator),
        shares_asset_id=decode_uint(record.share_id),
        central_app_id=decode_uint(record.app_id),
        **_escrows(record),
    )


def project_to_legacy_record(project: Project) -> LegacyProjectRecord:
    """Encode every field for the slot-based layout. Fails before any I/O."""
    check_legacy_shape(project)
    slot1_id, slot2_id, slot3_id = project.withdrawal_slot_ids
    return LegacyProjectRecord(
        name=project.specs.name,
        creator=encode_address(project.creator),
        asset_price=encode_uint(project.specs.asset_price),
        vote_threshold=encode_uint(project.specs.vote_threshold),
        token_name=project.specs.shares.token_name,
        share_count=encode_uint(project.specs.shares.count),
        share_id=encode_uint(project.shares_asset_id),
        app_id=encode_uint(project.central_app_id),
        slot1_id=encode_uint(slot1_id),
        slot2_id=encode_uint(slot2_id),
        slot3_id=encode_uint(slot3_id),
        **_escrow_columns(project),
    )


def legacy_record_to_project(record: LegacyProjectRecord) -> Project:
    return Project(
        specs=ProjectSpecs(
            name=record.name,
            shares=SharesSpecs(
                token_name=record.token_name,
                count=decode_uint(record.share_count),
            ),
            asset_price=decode_uint(record.asset_price),
            vote_threshold=decode_uint(record.vote_threshold),
        ),
        creator=decode_address(record.creator),
        shares_asset_id=decode_uint(record.share_id),
        central_app_id=decode_uint(record.app_id),
        withdrawal_slot_ids=(
            decode_uint(record.slot1_id),
            decode_uint(record.slot2_id),
            decode_uint(record.slot3_id),
        ),
        **_escrows(record),
    )


class PostgresProjectRepository(PostgresRepository, ProjectRepository):
    """Current layout: surrogate id plus a unique uuid."""

    tables = (ProjectRecord.__table__,)

    async def save(self, project: Project) -> str:
        record = project_to_record(project)
        try:
            # Insert and id read-back commit together
            async with self._sessions.begin() as session:
                session.add(record)
                await session.flush()
                project_id = record.id
        except sa_exc.IntegrityError as e:
            raise IntegrityError(f"Project {project.uuid} violates a constraint") from e

        logger.debug("Saved project", project_id=project_id, uuid=str(project.uuid))
        return str(project_id)

    async def load(self, project_id: int) -> Project:
        if not is_storable_id(project_id):
            raise NotFound(f"Project not found: {project_id}")
        async with self._sessions() as session:
            result = await session.execute(
                select(ProjectRecord).where(ProjectRecord.id == project_id)
            )
            records = result.scalars().all()
        return record_to_project(exactly_one(records, f"Project not found: {project_id}"))

    async def load_by_external_id(self, project_uuid: UUID) -> Project:
        async with self._sessions() as session:
            result = await session.execute(
                select(ProjectRecord).where(ProjectRecord.uuid == project_uuid)
            )
            records = result.scalars().all()
        return record_to_project(exactly_one(records, f"Project not found: {project_uuid}"))


class LegacyPostgresProjectRepository(PostgresRepository, ProjectRepository):
    """Slot-based layout. Has no external identifiers."""

    tables = (LegacyProjectRecord.__table__,)

    async def save(self, project: Project) -> str:
        record = project_to_legacy_record(project)
        async with self._sessions.begin() as session:
            session.add(record)
            await session.flush()
            project_id = record.id

        logger.debug("Saved project", project_id=project_id)
        return str(project_id)

    async def load(self, project_id: int) -> Project:
        if not is_storable_id(project_id):
            raise NotFound(f"Project not found: {project_id}")
        async with self._sessions() as session:
            result = await session.execute(
                select(LegacyProjectRecord).where(LegacyProjectRecord.id == project_id)
            )
            records = result.scalars().all()
        return legacy_record_to_project(
            exactly_one(records, f"Project not found: {project_id}")
        )

    async def load_by_external_id(self, project_uuid: UUID) -> Project:
        raise NotFound(f"Project not found: {project_uuid} (legacy layout has no uuids)")
