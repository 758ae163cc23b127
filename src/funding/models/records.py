"""Table layouts.

Two independently versioned schemas live here. The current layout registers
in the default SQLModel metadata; the legacy slot-based layout has its own
MetaData so both can declare a `project` table. Every numeric column is
decimal TEXT, every `*_b` column base64 TEXT, every address column
(`creator`, `*_e`) the canonical address string.
"""

from datetime import datetime
from typing import ClassVar
from uuid import UUID

from sqlalchemy import Boolean, DateTime, MetaData, Text, false
from sqlmodel import Field, SQLModel

legacy_metadata = MetaData()


class EscrowColumns(SQLModel):
    invest_e: str = Field(sa_type=Text)
    invest_b: str = Field(sa_type=Text)
    staking_e: str = Field(sa_type=Text)
    staking_b: str = Field(sa_type=Text)
    central_e: str = Field(sa_type=Text)
    central_b: str = Field(sa_type=Text)
    customer_e: str = Field(sa_type=Text)
    customer_b: str = Field(sa_type=Text)


class ProjectRecord(EscrowColumns, table=True):
    """Current project layout, keyed externally by uuid."""

    __tablename__ = "project"

    id: int | None = Field(default=None, primary_key=True)
    uuid: UUID = Field(unique=True, nullable=False)
    name: str = Field(sa_type=Text)
    creator: str = Field(sa_type=Text)
    asset_price: str = Field(sa_type=Text)
    investors_share: str = Field(sa_type=Text)
    token_name: str = Field(sa_type=Text)
    share_count: str = Field(sa_type=Text)
    share_id: str = Field(sa_type=Text)
    app_id: str = Field(sa_type=Text)


class WithdrawalRequestRecord(SQLModel, table=True):
    __tablename__ = "withdrawal_request"

    id: int | None = Field(default=None, primary_key=True)
    project_id: int = Field(foreign_key="project.id", nullable=False, index=True)
    amount: str = Field(sa_type=Text)
    description: str = Field(sa_type=Text)
    date: datetime = Field(sa_type=DateTime(timezone=True), nullable=False)
    complete: bool = Field(
        default=False,
        sa_type=Boolean,
        sa_column_kwargs={"server_default": false()},
    )


class LegacyRecord(SQLModel):
    metadata: ClassVar[MetaData] = legacy_metadata


class LegacyProjectRecord(LegacyRecord, EscrowColumns, table=True):
    """Slot-based project layout: three fixed withdrawal slot app ids."""

    __tablename__ = "project"

    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(sa_type=Text)
    creator: str = Field(sa_type=Text)
    asset_price: str = Field(sa_type=Text)
    vote_threshold: str = Field(sa_type=Text)
    token_name: str = Field(sa_type=Text)
    share_count: str = Field(sa_type=Text)
    share_id: str = Field(sa_type=Text)
    app_id: str = Field(sa_type=Text)
    slot1_id: str = Field(sa_type=Text)
    slot2_id: str = Field(sa_type=Text)
    slot3_id: str = Field(sa_type=Text)


class LegacyWithdrawalRecord(LegacyRecord, table=True):
    __tablename__ = "withdrawal"

    id: int | None = Field(default=None, primary_key=True)
    project_id: int = Field(foreign_key="project.id", nullable=False, index=True)
    amount: str = Field(sa_type=Text)
    description: str = Field(sa_type=Text)
    date: datetime = Field(sa_type=DateTime(timezone=True), nullable=False)
