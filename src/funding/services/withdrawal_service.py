"""Withdrawal and withdrawal request services."""

from src.funding.models.base import utc_now
from src.funding.models.domain import (
    SavedWithdrawal,
    SavedWithdrawalRequest,
    Withdrawal,
    WithdrawalInputs,
    WithdrawalRequest,
    WithdrawalRequestInputs,
)
from src.funding.repositories import WithdrawalRepository, WithdrawalRequestRepository
from src.funding.repositories.base import parse_id


class WithdrawalService:
    """Legacy withdrawals: immutable records dated on arrival."""

    def __init__(self, withdrawal_repo: WithdrawalRepository):
        self.withdrawal_repo = withdrawal_repo

    async def save_withdrawal(self, inputs: WithdrawalInputs) -> SavedWithdrawal:
        withdrawal = Withdrawal(
            project_id=inputs.project_id,
            amount=inputs.amount,
            description=inputs.description,
            date=utc_now(),
        )
        return await self.withdrawal_repo.save(withdrawal)

    async def load_withdrawals(self, project_id: str) -> list[SavedWithdrawal]:
        return await self.withdrawal_repo.load_all(parse_id(project_id, "project id"))


class WithdrawalRequestService:
    """Withdrawal requests: pending until explicitly completed."""

    def __init__(self, request_repo: WithdrawalRequestRepository):
        self.request_repo = request_repo

    async def save_withdrawal_request(
        self, inputs: WithdrawalRequestInputs
    ) -> SavedWithdrawalRequest:
        request = WithdrawalRequest(
            project_id=inputs.project_id,
            amount=inputs.amount,
            description=inputs.description,
            date=utc_now(),
        )
        return await self.request_repo.save(request)

    async def load_withdrawal_requests(self, project_id: str) -> list[SavedWithdrawalRequest]:
        return await self.request_repo.load_all(parse_id(project_id, "project id"))

    async def complete_withdrawal_request(self, request_id: str) -> None:
        """Mark a request complete. Repeating it, or naming an unknown id, is a no-op."""
        await self.request_repo.complete(parse_id(request_id, "withdrawal request id"))
