"""Tests for revenue capture and revenue reports."""

from decimal import Decimal

import pytest

from finboard.domain.entities import AccountType
from finboard.domain.errors import NotFoundError, ValidationError
from finboard.domain.revenue import COMPANY_TOTAL_LABEL


def test_upsert_creates_then_replaces(revenue_service, sample_company, sample_fy, sample_accounts):
    account_id = sample_accounts["domestic"]
    first_id = revenue_service.upsert(sample_company.id, account_id, sample_fy.id, [100] * 12)
    second_id = revenue_service.upsert(
        sample_company.id, account_id, sample_fy.id, [200, 300], notes="Revised"
    )

    assert first_id == second_id
    stats = revenue_service.get_stats(first_id)
    assert stats.months[:3] == (Decimal("200"), Decimal("300"), Decimal("0"))
    assert stats.total_amount == Decimal("500")
    assert stats.notes == "Revised"


def test_company_total_row_is_separate(revenue_service, sample_company, sample_fy, sample_accounts):
    total_id = revenue_service.upsert(sample_company.id, None, sample_fy.id, [10] * 12)
    account_row_id = revenue_service.upsert(
        sample_company.id, sample_accounts["domestic"], sample_fy.id, [10] * 12
    )

    assert total_id != account_row_id
    assert revenue_service.find_stats(sample_company.id, None, sample_fy.id).id == total_id


def test_upsert_validation(revenue_service, company_service, account_service, sample_company, sample_fy):
    other_company = company_service.create_company(name="Other Co")
    foreign_account = account_service.create_account(other_company, "Their Sales")

    with pytest.raises(ValidationError, match="does not belong"):
        revenue_service.upsert(sample_company.id, foreign_account, sample_fy.id, [1])
    with pytest.raises(NotFoundError):
        revenue_service.upsert(sample_company.id, None, 999, [1])
    with pytest.raises(NotFoundError):
        revenue_service.upsert(999, None, sample_fy.id, [1])
    with pytest.raises(ValidationError):
        revenue_service.upsert(sample_company.id, None, sample_fy.id, ["ten"])


def test_update_months(revenue_service, sample_company, sample_fy):
    stats_id = revenue_service.upsert(sample_company.id, None, sample_fy.id, [1] * 12)
    revenue_service.update_months(stats_id, [5] * 12)

    assert revenue_service.get_stats(stats_id).total_amount == Decimal("60")
    with pytest.raises(NotFoundError):
        revenue_service.update_months(999, [1])


def test_delete_stats_and_clear_year(revenue_service, sample_company, sample_fy, sample_accounts):
    first = revenue_service.upsert(sample_company.id, None, sample_fy.id, [1])
    revenue_service.upsert(sample_company.id, sample_accounts["domestic"], sample_fy.id, [1])
    revenue_service.upsert(sample_company.id, sample_accounts["export"], sample_fy.id, [1])

    revenue_service.delete_stats(first)
    assert revenue_service.get_stats(first) is None

    assert revenue_service.delete_by_company_and_year(sample_company.id, sample_fy.id) == 2
    assert revenue_service.list_stats(company_id=sample_company.id) == []


def test_yearly_totals_classifies_rows(revenue_service, account_service, sample_company, sample_fy, sample_accounts):
    other = account_service.create_account(sample_company.id, "Misc", account_type="other")
    revenue_service.upsert(sample_company.id, sample_accounts["domestic"], sample_fy.id, [100] * 12)
    revenue_service.upsert(sample_company.id, sample_accounts["export"], sample_fy.id, [50] * 12)
    revenue_service.upsert(sample_company.id, sample_accounts["expense"], sample_fy.id, [30] * 12)
    revenue_service.upsert(sample_company.id, other, sample_fy.id, [999] * 12)

    totals = revenue_service.yearly_totals(sample_company.id, sample_fy.id)

    assert totals.revenue_total == Decimal("1800")
    assert totals.expense_total == Decimal("360")
    assert totals.revenue_accounts == 2
    assert totals.expense_accounts == 1
    assert totals.net_total == Decimal("1440")


def test_monthly_breakdown(revenue_service, sample_company, sample_fy, sample_accounts):
    revenue_service.upsert(sample_company.id, sample_accounts["domestic"], sample_fy.id, [100, 200])
    revenue_service.upsert(sample_company.id, None, sample_fy.id, [1, 2])
    revenue_service.upsert(sample_company.id, sample_accounts["expense"], sample_fy.id, [40])

    breakdown = revenue_service.monthly_breakdown(sample_company.id, sample_fy.id)

    assert breakdown["revenue"][:2] == (Decimal("101"), Decimal("202"))
    assert breakdown["expense"][0] == Decimal("40")


def test_quarterly_revenue(revenue_service, sample_company, sample_fy, sample_accounts):
    revenue_service.upsert(
        sample_company.id, sample_accounts["domestic"], sample_fy.id, [100] * 12
    )
    revenue_service.upsert(sample_company.id, sample_accounts["export"], sample_fy.id, [0, 0, 300])
    revenue_service.upsert(sample_company.id, sample_accounts["expense"], sample_fy.id, [999] * 12)

    report = revenue_service.quarterly_revenue(sample_company.id, sample_fy.id)

    assert report.financial_year_name == "FY 2024/25"
    assert report.revenue.as_tuple() == (
        Decimal("600"),
        Decimal("300"),
        Decimal("300"),
        Decimal("300"),
    )
    assert report.revenue.total == Decimal("1500")
    assert report.export.q1 == Decimal("300")
    assert report.export.total == Decimal("300")
    assert report.export_ratio == Decimal("20")
    assert report.quarter_months[0] == ("March", "April", "May")
    assert report.quarter_months[3] == ("December", "January", "February")
    assert {row.account_type for row in report.account_breakdown} == {
        AccountType.DOMESTIC_REVENUE,
        AccountType.EXPORT_REVENUE,
    }


def test_quarterly_revenue_without_data(revenue_service, sample_company, sample_fy):
    report = revenue_service.quarterly_revenue(sample_company.id, sample_fy.id)

    assert report.revenue.total == Decimal("0")
    assert report.export_ratio == Decimal("0")
    assert report.account_breakdown == ()


def test_quarterly_revenue_all_years_oldest_first(
    revenue_service, financial_year_service, sample_company, sample_fy
):
    newer = financial_year_service.create_financial_year(fy_start_year=2025, fy_end_year=2026)
    financial_year_service.create_financial_year(fy_start_year=2026, fy_end_year=2027)
    revenue_service.upsert(sample_company.id, None, newer, [5])
    revenue_service.upsert(sample_company.id, None, sample_fy.id, [1])

    reports = revenue_service.quarterly_revenue_all_years(sample_company.id)

    assert [r.financial_year_id for r in reports] == [sample_fy.id, newer]


def test_year_groups(revenue_service, financial_year_service, sample_company, sample_fy, sample_accounts):
    newer = financial_year_service.create_financial_year(fy_start_year=2025, fy_end_year=2026)
    revenue_service.upsert(sample_company.id, None, sample_fy.id, [10] * 12)
    revenue_service.upsert(sample_company.id, sample_accounts["domestic"], sample_fy.id, [5] * 12)
    revenue_service.upsert(sample_company.id, sample_accounts["export"], newer, [1] * 12)

    groups = revenue_service.year_groups(sample_company.id)

    assert [g.financial_year_id for g in groups] == [newer, sample_fy.id]
    current = groups[1]
    assert current.is_active
    assert current.month_labels[0] == "Mar"
    assert current.total == Decimal("180")
    assert COMPANY_TOTAL_LABEL in [row.account_name for row in current.accounts]
    assert "Local Sales" in [row.account_name for row in current.accounts]


@pytest.mark.parametrize("value", ["NaN", "Infinity", float("inf")])
def test_upsert_rejects_non_finite_months(revenue_service, sample_company, sample_fy, value):
    with pytest.raises(ValidationError, match="not a finite number"):
        revenue_service.upsert(sample_company.id, None, sample_fy.id, [100, value])

    assert revenue_service.find_stats(sample_company.id, None, sample_fy.id) is None
    # The session is still usable after the rejected write
    stats_id = revenue_service.upsert(sample_company.id, None, sample_fy.id, [100])
    assert revenue_service.get_stats(stats_id).total_amount == Decimal("100")
