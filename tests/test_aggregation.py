"""Tests for monthly, quarterly and yearly arithmetic."""

from decimal import Decimal

import pytest

from finboard.domain.aggregation import (
    add_quarterly,
    growth_rate,
    metric_record_total,
    monthly_total,
    net_profit,
    normalize_months,
    percentage,
    performance_indicators,
    quarterly_totals,
    round_money,
    sanitize_monthly_values,
    section_month_total,
    section_total,
    sum_months,
    to_decimal,
)
from finboard.domain.entities import PeriodType


def test_to_decimal():
    assert to_decimal(None) == Decimal("0")
    assert to_decimal("") == Decimal("0")
    assert to_decimal("12.50") == Decimal("12.50")
    assert to_decimal(0.1) == Decimal("0.1")
    assert to_decimal(7) == Decimal("7")


def test_to_decimal_rejects_text():
    with pytest.raises(ValueError, match="not numeric"):
        to_decimal("abc")


def test_monthly_total_treats_none_as_zero():
    assert monthly_total([100, None, "50.5", Decimal("10")]) == Decimal("160.5")


def test_normalize_months_pads_and_truncates():
    assert normalize_months([1, 2]) == (Decimal("1"), Decimal("2")) + (Decimal("0"),) * 10
    assert len(normalize_months(range(20))) == 12


def test_sanitize_monthly_values():
    values = ["100", "abc", -5, float("nan"), None, "Infinity", 25]
    result = sanitize_monthly_values(values)

    assert len(result) == 12
    assert result[:7] == (
        Decimal("100"),
        Decimal("0"),
        Decimal("0"),
        Decimal("0"),
        Decimal("0"),
        Decimal("0"),
        Decimal("25"),
    )


def test_quarterly_totals_are_positional():
    result = quarterly_totals(range(1, 13))

    assert result.q1 == Decimal("6")
    assert result.q2 == Decimal("15")
    assert result.q3 == Decimal("24")
    assert result.q4 == Decimal("33")
    assert result.total == Decimal("78")
    assert result.total == sum(result.as_tuple())


def test_quarterly_totals_of_partial_year():
    result = quarterly_totals([100, 100, 100, 50])

    assert result.as_tuple() == (Decimal("300"), Decimal("50"), Decimal("0"), Decimal("0"))
    assert result.total == Decimal("350")


def test_add_quarterly():
    combined = add_quarterly(quarterly_totals([1] * 12), quarterly_totals([2] * 12))

    assert combined.as_tuple() == (Decimal("9"),) * 4
    assert combined.total == Decimal("36")
    assert add_quarterly().total == Decimal("0")


def test_sum_months_and_sections():
    rows = [[10] * 12, [5] * 6]

    assert sum_months(rows)[0] == Decimal("15")
    assert sum_months(rows)[11] == Decimal("10")
    assert section_month_total(rows, 0) == Decimal("15")
    assert section_total(rows) == Decimal("150")


def test_section_month_total_rejects_bad_index():
    with pytest.raises(ValueError):
        section_month_total([[1] * 12], 12)


def test_metric_record_total_sums_present_quarters():
    assert metric_record_total(10, None, 5, None, 999, PeriodType.QUARTERLY) == Decimal("15")
    assert metric_record_total(None, None, None, None, 999, PeriodType.QUARTERLY) is None


def test_metric_record_total_yearly_keeps_entered_total():
    assert metric_record_total(1, 2, 3, 4, "40", PeriodType.YEARLY) == Decimal("40")
    assert metric_record_total(1, 2, 3, 4, None, PeriodType.YEARLY) is None


def test_growth_rate():
    assert growth_rate(150, 100) == Decimal("50")
    assert growth_rate(50, 0) == Decimal("100")
    assert growth_rate(0, 0) == Decimal("0")


def test_percentage():
    assert percentage(300, 1000) == Decimal("30")
    assert percentage(10, 0) == Decimal("0")
    assert percentage(10, -5) == Decimal("0")


def test_net_profit_and_indicators():
    assert net_profit(1000, 300, 200) == Decimal("500")

    indicators = performance_indicators(1000, 250)
    assert indicators["profit_margin"] == Decimal("75")
    assert indicators["expense_ratio"] == Decimal("25")
    assert indicators["net_profitability"] == Decimal("750")


def test_round_money():
    assert round_money(Decimal("1.234")) == Decimal("1.23")
    assert round_money(Decimal("2")) == Decimal("2.00")


@pytest.mark.parametrize("value", ["NaN", "Infinity", "-inf", float("nan"), Decimal("Infinity")])
def test_to_decimal_rejects_non_finite(value):
    with pytest.raises(ValueError, match="not a finite number"):
        to_decimal(value)


def test_quarterly_totals_of_sparse_year():
    months = [100, None, 0, 200, 0, None, 0, 0, 300, None, 0, 0]

    result = quarterly_totals(months)

    assert result.as_tuple() == (Decimal("100"), Decimal("200"), Decimal("300"), Decimal("0"))
    assert result.total == Decimal("600")
    assert result.total == monthly_total(months)
