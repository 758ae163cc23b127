"""Tests for withdrawal and withdrawal request services."""

from datetime import UTC, datetime, timedelta

import pytest

from src.funding.core.exceptions import IntegrityError, ValidationError
from src.funding.models.domain import WithdrawalInputs, WithdrawalRequestInputs
from src.funding.repositories.factory import Repositories
from src.funding.services.withdrawal_service import (
    WithdrawalRequestService,
    WithdrawalService,
)
from tests.factories import ProjectFactory

pytestmark = [pytest.mark.unit, pytest.mark.asyncio]


@pytest.fixture
def withdrawal_service(legacy_repositories: Repositories) -> WithdrawalService:
    return WithdrawalService(legacy_repositories.withdrawals)


@pytest.fixture
def request_service(repositories: Repositories) -> WithdrawalRequestService:
    return WithdrawalRequestService(repositories.withdrawal_requests)


class TestWithdrawalService:
    async def test_date_set_on_arrival(
        self, legacy_repositories: Repositories, withdrawal_service: WithdrawalService
    ):
        project_id = await legacy_repositories.projects.save(ProjectFactory.legacy())
        before = datetime.now(UTC)

        saved = await withdrawal_service.save_withdrawal(
            WithdrawalInputs(project_id=project_id, amount=5_000_000, description="Rent")
        )

        assert saved.date.tzinfo is not None
        assert before <= saved.date <= datetime.now(UTC) + timedelta(seconds=1)
        assert saved.amount == 5_000_000
        assert await withdrawal_service.load_withdrawals(project_id) == [saved]

    async def test_later_withdrawals_listed_first(
        self, legacy_repositories: Repositories, withdrawal_service: WithdrawalService
    ):
        project_id = await legacy_repositories.projects.save(ProjectFactory.legacy())
        inputs = [
            WithdrawalInputs(project_id=project_id, amount=i, description=f"#{i}")
            for i in range(3)
        ]
        saved = [await withdrawal_service.save_withdrawal(i) for i in inputs]

        loaded = await withdrawal_service.load_withdrawals(project_id)

        assert loaded == list(reversed(saved))

    async def test_unknown_project(self, withdrawal_service: WithdrawalService):
        with pytest.raises(IntegrityError):
            await withdrawal_service.save_withdrawal(
                WithdrawalInputs(project_id="77", amount=1, description="x")
            )

    async def test_invalid_project_id(self, withdrawal_service: WithdrawalService):
        with pytest.raises(ValidationError):
            await withdrawal_service.load_withdrawals("seventy")


class TestWithdrawalRequestService:
    async def test_request_lifecycle(
        self, repositories: Repositories, request_service: WithdrawalRequestService
    ):
        project_id = await repositories.projects.save(ProjectFactory.build())

        saved = await request_service.save_withdrawal_request(
            WithdrawalRequestInputs(project_id=project_id, amount=2**64, description="Salary")
        )
        assert saved.complete is False
        assert saved.date.tzinfo is not None

        await request_service.complete_withdrawal_request(saved.id)
        await request_service.complete_withdrawal_request(saved.id)

        [loaded] = await request_service.load_withdrawal_requests(project_id)
        assert loaded.id == saved.id
        assert loaded.amount == 2**64
        assert loaded.complete is True

    async def test_complete_unknown_request(self, request_service: WithdrawalRequestService):
        await request_service.complete_withdrawal_request("987654")

    async def test_complete_invalid_id(self, request_service: WithdrawalRequestService):
        with pytest.raises(ValidationError):
            await request_service.complete_withdrawal_request("first")
