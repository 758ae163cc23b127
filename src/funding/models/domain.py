"""Domain values stored and loaded by the repositories.

These are already-constructed values: escrow programs and project specs are
built elsewhere and only persisted here.
"""

from datetime import datetime
from typing import Annotated
from uuid import UUID

from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    PlainSerializer,
)

from src.funding.core.codec import decode_program, encode_program, is_valid_address
from src.funding.core.exceptions import MalformedEncoding


def _check_address(value: str) -> str:
    if not is_valid_address(value):
        raise ValueError(f"Invalid address: {value!r}")
    return value


Address = Annotated[str, AfterValidator(_check_address)]


def _program_from_text(value: object) -> object:
    if isinstance(value, str):
        try:
            return decode_program(value)
        except MalformedEncoding as e:
            raise ValueError(str(e)) from e
    return value


# Bytes in Python, base64 text in JSON
Program = Annotated[
    bytes,
    BeforeValidator(_program_from_text),
    PlainSerializer(encode_program, return_type=str, when_used="json"),
]
MicroAlgos = Annotated[int, Field(ge=0)]
Uint = Annotated[int, Field(ge=0)]


class DomainModel(BaseModel):
    model_config = ConfigDict(frozen=True)


class ContractAccount(DomainModel):
    """An escrow: an address plus its compiled program, stored verbatim."""

    address: Address
    program: Program


class SharesSpecs(DomainModel):
    token_name: str
    count: Uint


class ProjectSpecs(DomainModel):
    name: str
    shares: SharesSpecs
    asset_price: MicroAlgos
    investors_share: Uint | None = None  # current layout
    vote_threshold: Uint | None = None  # legacy layout


class Project(DomainModel):
    specs: ProjectSpecs
    creator: Address
    shares_asset_id: Uint
    central_app_id: Uint
    invest_escrow: ContractAccount
    staking_escrow: ContractAccount
    central_escrow: ContractAccount
    customer_escrow: ContractAccount
    uuid: UUID | None = None  # current layout
    withdrawal_slot_ids: tuple[Uint, ...] | None = None  # legacy layout


class WithdrawalInputs(DomainModel):
    """What a client submits; the date is always set server-side."""

    project_id: str
    amount: MicroAlgos
    description: str


class Withdrawal(DomainModel):
    project_id: str
    amount: MicroAlgos
    description: str
    date: datetime


class SavedWithdrawal(Withdrawal):
    id: str


class WithdrawalRequestInputs(WithdrawalInputs):
    pass


class WithdrawalRequest(Withdrawal):
    pass


class SavedWithdrawalRequest(WithdrawalRequest):
    id: str
    complete: bool = False
