"""Project factories for test data generation."""

import random
from uuid import uuid4

from polyfactory import Use
from polyfactory.factories.pydantic_factory import ModelFactory

from src.funding.models.domain import ContractAccount, Project, ProjectSpecs, SharesSpecs
from tests.factories.base import random_address, random_program


class ContractAccountFactory(ModelFactory[ContractAccount]):
    """Factory for escrow accounts with valid addresses and random programs."""

    __model__ = ContractAccount

    address = Use(random_address)
    program = Use(random_program)


class SharesSpecsFactory(ModelFactory[SharesSpecs]):
    __model__ = SharesSpecs

    token_name = Use(lambda: f"TKN{random.randint(0, 9999)}")
    count = Use(random.randint, 1, 10**12)


class ProjectSpecsFactory(ModelFactory[ProjectSpecs]):
    __model__ = ProjectSpecs

    name = Use(lambda: f"Project {uuid4().hex[-8:]}")
    shares = Use(SharesSpecsFactory.build)
    asset_price = Use(random.randint, 0, 10**15)
    investors_share = Use(random.randint, 0, 100)
    vote_threshold = None


class ProjectFactory(ModelFactory[Project]):
    """Factory for projects in the current (uuid) layout."""

    __model__ = Project

    specs = Use(ProjectSpecsFactory.build)
    creator = Use(random_address)
    shares_asset_id = Use(random.randint, 0, 2**64 - 1)
    central_app_id = Use(random.randint, 0, 2**64 - 1)
    invest_escrow = Use(ContractAccountFactory.build)
    staking_escrow = Use(ContractAccountFactory.build)
    central_escrow = Use(ContractAccountFactory.build)
    customer_escrow = Use(ContractAccountFactory.build)
    uuid = Use(uuid4)
    withdrawal_slot_ids = None

    @classmethod
    def legacy(cls, **kwargs):
        """Create a project in the slot-based layout."""
        kwargs.setdefault(
            "specs",
            ProjectSpecsFactory.build(investors_share=None, vote_threshold=70),
        )
        kwargs.setdefault("withdrawal_slot_ids", (1, 2, 3))
        return cls.build(uuid=None, **kwargs)
