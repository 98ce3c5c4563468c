"""Tests for amount parsing."""

from decimal import Decimal

import pytest

from finboard.utils.amount_parser import parse_amount, parse_month_assignment


@pytest.mark.parametrize(
    "text, expected",
    [
        ("1500.50", Decimal("1500.50")),
        ("R1500", Decimal("1500")),
        ("R 1 500.50", Decimal("1500.50")),
        ("ZAR 2,000", Decimal("2000")),
        ("-1500", Decimal("-1500")),
        ("(123.45)", Decimal("-123.45")),
        ("$99", Decimal("99")),
    ],
)
def test_parse_amount(text, expected):
    assert parse_amount(text) == expected


@pytest.mark.parametrize("text", ["", "   ", "abc", "NaN", "Infinity"])
def test_parse_amount_invalid(text):
    with pytest.raises(ValueError):
        parse_amount(text)


def test_parse_month_assignment():
    assert parse_month_assignment("3=1500") == (2, Decimal("1500"))
    assert parse_month_assignment(" 12 = R 10 ") == (11, Decimal("10"))


@pytest.mark.parametrize("text", ["3", "0=10", "13=10", "x=10", "3=abc"])
def test_parse_month_assignment_invalid(text):
    with pytest.raises(ValueError):
        parse_month_assignment(text)
