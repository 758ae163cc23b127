"""Model exports.

Import from here: `from src.funding.models import Project, SavedWithdrawal`
"""

from src.funding.models.domain import (
    ContractAccount,
    Project,
    ProjectSpecs,
    SavedWithdrawal,
    SavedWithdrawalRequest,
    SharesSpecs,
    Withdrawal,
    WithdrawalInputs,
    WithdrawalRequest,
    WithdrawalRequestInputs,
)
from src.funding.models.records import (
    LegacyProjectRecord,
    LegacyWithdrawalRecord,
    ProjectRecord,
    WithdrawalRequestRecord,
    legacy_metadata,
)

__all__ = [
    # Domain values
    "ContractAccount",
    "Project",
    "ProjectSpecs",
    "SavedWithdrawal",
    "SavedWithdrawalRequest",
    "SharesSpecs",
    "Withdrawal",
    "WithdrawalInputs",
    "WithdrawalRequest",
    "WithdrawalRequestInputs",
    # Table layouts
    "LegacyProjectRecord",
    "LegacyWithdrawalRecord",
    "ProjectRecord",
    "WithdrawalRequestRecord",
    "legacy_metadata",
]
