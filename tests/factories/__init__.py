"""Test factories for generating test data.

Re-exports all factories for convenient imports:
    from tests.factories import ProjectFactory, random_address, ...
"""

from tests.factories.base import random_address, random_program, utc_now
from tests.factories.project import (
    ContractAccountFactory,
    ProjectFactory,
    ProjectSpecsFactory,
    SharesSpecsFactory,
)

__all__ = [
    # Base
    "random_address",
    "random_program",
    "utc_now",
    # Project
    "ContractAccountFactory",
    "ProjectFactory",
    "ProjectSpecsFactory",
    "SharesSpecsFactory",
]
