"""Tests for amount parsing."""

from decimal import Decimal

import pytest
from banksync.utils.amount_parser import parse_amount


@pytest.mark.parametrize(
    "text,expected",
    [
        ("123.45", Decimal("123.45")),
        ("-30", Decimal("-30")),
        ("$1,234.56", Decimal("1234.56")),
        ("-$12.50", Decimal("-12.50")),
        ("(45.00)", Decimal("-45.00")),
        (" 7 ", Decimal("7")),
    ],
)
def test_parse_amount(text, expected):
    assert parse_amount(text) == expected


@pytest.mark.parametrize("text", ["", "   ", "abc", "NaN", "Infinity"])
def test_parse_amount_invalid(text):
    with pytest.raises(ValueError):
        parse_amount(text)
