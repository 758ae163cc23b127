from src.funding.services.project_service import ProjectService
from src.funding.services.withdrawal_service import WithdrawalRequestService, WithdrawalService

__all__ = ["ProjectService", "WithdrawalRequestService", "WithdrawalService"]
