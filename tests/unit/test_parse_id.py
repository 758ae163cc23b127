"""Tests for outward id parsing and stored text checks."""

import pytest

from src.funding.core.exceptions import ValidationError
from src.funding.repositories.base import check_text, parse_id

pytestmark = pytest.mark.unit


@pytest.mark.parametrize(("value", "expected"), [("7", 7), ("007", 7), ("-3", -3), (12, 12)])
def test_parses_decimal_ids(value, expected: int):
    assert parse_id(value) == expected


@pytest.mark.parametrize("value", ["", "--5", "+5", "5 ", "0x1f", "١", True])
def test_rejects_malformed_ids(value):
    with pytest.raises(ValidationError):
        parse_id(value, "project id")


def test_rejects_ids_beyond_conversion_limit():
    with pytest.raises(ValidationError, match="too many digits"):
        parse_id("9" * 5000, "project id")


def test_check_text_rejects_nul():
    check_text("Rent for May", "Description")

    with pytest.raises(ValidationError, match="Description"):
        check_text("Rent\x00", "Description")
