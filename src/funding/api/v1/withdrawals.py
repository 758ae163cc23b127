"""Withdrawal and withdrawal request endpoints."""

from fastapi import APIRouter, status

from src.funding.api.dependencies import WithdrawalRequestSvc, WithdrawalSvc
from src.funding.models.domain import (
    SavedWithdrawal,
    SavedWithdrawalRequest,
    WithdrawalInputs,
    WithdrawalRequestInputs,
)

router = APIRouter(tags=["withdrawals"])


@router.post(
    "/withdrawals",
    response_model=SavedWithdrawal,
    status_code=status.HTTP_201_CREATED,
    summary="Save withdrawal",
    responses={409: {"description": "Project does not exist"}},
)
async def save_withdrawal(inputs: WithdrawalInputs, service: WithdrawalSvc) -> SavedWithdrawal:
    return await service.save_withdrawal(inputs)


@router.get(
    "/projects/{project_id}/withdrawals",
    response_model=list[SavedWithdrawal],
    summary="List withdrawals",
    description="Withdrawals of a project, most recent first.",
)
async def list_withdrawals(project_id: str, service: WithdrawalSvc) -> list[SavedWithdrawal]:
    return await service.load_withdrawals(project_id)


@router.post(
    "/withdrawal-requests",
    response_model=SavedWithdrawalRequest,
    status_code=status.HTTP_201_CREATED,
    summary="Save withdrawal request",
    responses={409: {"description": "Project does not exist"}},
)
async def save_withdrawal_request(
    inputs: WithdrawalRequestInputs, service: WithdrawalRequestSvc
) -> SavedWithdrawalRequest:
    return await service.save_withdrawal_request(inputs)


@router.get(
    "/projects/{project_id}/withdrawal-requests",
    response_model=list[SavedWithdrawalRequest],
    summary="List withdrawal requests",
    description="Withdrawal requests of a project, most recent first.",
)
async def list_withdrawal_requests(
    project_id: str, service: WithdrawalRequestSvc
) -> list[SavedWithdrawalRequest]:
    return await service.load_withdrawal_requests(project_id)


@router.post(
    "/withdrawal-requests/{request_id}/complete",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Complete withdrawal request",
    description="Idempotent. Unknown ids are accepted and change nothing.",
)
async def complete_withdrawal_request(request_id: str, service: WithdrawalRequestSvc) -> None:
    await service.complete_withdrawal_request(request_id)
