"""Service factory dependencies.

Repositories are built once in the app lifespan and kept on `app.state`.
"""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status

from src.funding.core.config import get_settings
from src.funding.repositories.factory import Repositories
from src.funding.services.project_service import ProjectService
from src.funding.services.withdrawal_service import (
    WithdrawalRequestService,
    WithdrawalService,
)


def get_repositories(request: Request) -> Repositories:
    return request.app.state.repositories


Repos = Annotated[Repositories, Depends(get_repositories)]


def get_project_service(repos: Repos) -> ProjectService:
    """Get project service with the configured frontend host."""
    return ProjectService(repos.projects, get_settings().frontend_host)


def get_withdrawal_service(repos: Repos) -> WithdrawalService:
    """Get legacy withdrawal service; only the legacy layout stores withdrawals."""
    if repos.withdrawals is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Withdrawals are not stored by this schema layout",
        )
    return WithdrawalService(repos.withdrawals)


def get_withdrawal_request_service(repos: Repos) -> WithdrawalRequestService:
    """Get withdrawal request service; only the current layout stores requests."""
    if repos.withdrawal_requests is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Withdrawal requests are not stored by this schema layout",
        )
    return WithdrawalRequestService(repos.withdrawal_requests)


ProjectSvc = Annotated[ProjectService, Depends(get_project_service)]
WithdrawalSvc = Annotated[WithdrawalService, Depends(get_withdrawal_service)]
WithdrawalRequestSvc = Annotated[
    WithdrawalRequestService, Depends(get_withdrawal_request_service)
]
