"""Tests for the mapping between projects and their table records."""

import pytest

from src.funding.core.exceptions import (
    EncodingFailure,
    MalformedAddress,
    MalformedEncoding,
    ValidationError,
)
from src.funding.models.domain import ContractAccount
from src.funding.repositories.project import (
    legacy_record_to_project,
    project_to_legacy_record,
    project_to_record,
    record_to_project,
)
from tests.factories import ContractAccountFactory, ProjectFactory, random_address

pytestmark = pytest.mark.unit


class TestCurrentLayout:
    def test_round_trip(self):
        project = ProjectFactory.build()

        assert record_to_project(project_to_record(project)) == project

    def test_round_trip_preserves_large_values_and_empty_programs(self):
        large_program = bytes(range(256)) * 64
        project = ProjectFactory.build(
            shares_asset_id=2**64 - 1,
            central_app_id=2**63,
            invest_escrow=ContractAccount(address=random_address(), program=b""),
            staking_escrow=ContractAccount(address=random_address(), program=large_program),
        )

        loaded = record_to_project(project_to_record(project))

        assert loaded == project
        assert loaded.shares_asset_id == 2**64 - 1
        assert loaded.central_app_id == 2**63
        assert loaded.invest_escrow.program == b""
        assert loaded.staking_escrow.program == large_program

    def test_numbers_are_stored_as_decimal_text(self):
        project = ProjectFactory.build(shares_asset_id=2**64 + 5)

        record = project_to_record(project)

        assert record.share_id == str(2**64 + 5)
        assert record.asset_price == str(project.specs.asset_price)
        assert record.creator == project.creator
        assert record.uuid == project.uuid

    def test_requires_uuid(self):
        with pytest.raises(ValidationError, match="uuid"):
            project_to_record(ProjectFactory.build(uuid=None))

    def test_rejects_legacy_only_fields(self):
        with pytest.raises(ValidationError):
            project_to_record(ProjectFactory.build(withdrawal_slot_ids=(1, 2, 3)))

    def test_malformed_stored_address(self):
        record = project_to_record(ProjectFactory.build())
        record.central_e = "NOT-AN-ADDRESS"

        with pytest.raises(MalformedAddress):
            record_to_project(record)

    def test_malformed_stored_program(self):
        record = project_to_record(ProjectFactory.build())
        record.customer_b = "%%%"

        with pytest.raises(MalformedEncoding):
            record_to_project(record)

    def test_malformed_stored_number(self):
        record = project_to_record(ProjectFactory.build())
        record.app_id = "12.5"

        with pytest.raises(EncodingFailure):
            record_to_project(record)


class TestLegacyLayout:
    def test_round_trip(self):
        project = ProjectFactory.legacy(withdrawal_slot_ids=(7, 2**64 - 1, 0))

        loaded = legacy_record_to_project(project_to_legacy_record(project))

        assert loaded == project
        assert loaded.withdrawal_slot_ids == (7, 2**64 - 1, 0)

    @pytest.mark.parametrize("slots", [None, (), (1,), (1, 2), (1, 2, 3, 4)])
    def test_slot_count_must_be_three(self, slots):
        project = ProjectFactory.legacy(withdrawal_slot_ids=slots)

        with pytest.raises(ValidationError, match="withdrawal slot"):
            project_to_legacy_record(project)

    def test_requires_vote_threshold(self):
        project = ProjectFactory.legacy()
        project = project.model_copy(
            update={"specs": project.specs.model_copy(update={"vote_threshold": None})}
        )

        with pytest.raises(ValidationError, match="vote threshold"):
            project_to_legacy_record(project)

    def test_rejects_uuid(self):
        project = ProjectFactory.legacy().model_copy(update={"uuid": ProjectFactory.build().uuid})

        with pytest.raises(ValidationError):
            project_to_legacy_record(project)


def test_encoding_failure_happens_before_record_exists():
    """An unencodable escrow aborts the whole mapping."""
    project = ProjectFactory.build(central_escrow=ContractAccountFactory.build())
    broken = project.model_copy(
        update={
            "central_escrow": ContractAccount.model_construct(
                address="BROKEN", program=b"\x01"
            )
        }
    )

    with pytest.raises(MalformedAddress):
        project_to_record(broken)


@pytest.mark.parametrize("field", ["name", "token_name"])
def test_nul_characters_rejected_by_both_layouts(field: str):
    def with_nul(project):
        specs = project.specs
        if field == "name":
            specs = specs.model_copy(update={"name": "Farm\x00"})
        else:
            shares = specs.shares.model_copy(update={"token_name": "TK\x00"})
            specs = specs.model_copy(update={"shares": shares})
        return project.model_copy(update={"specs": specs})

    with pytest.raises(ValidationError, match="NUL"):
        project_to_record(with_nul(ProjectFactory.build()))
    with pytest.raises(ValidationError, match="NUL"):
        project_to_legacy_record(with_nul(ProjectFactory.legacy()))
