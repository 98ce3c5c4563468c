"""Tests for database mappers."""

from datetime import UTC, datetime
from decimal import Decimal

from finboard.database.mappers import (
    apply_months,
    company_account_to_domain,
    costing_stats_to_domain,
    financial_year_to_domain,
    metric_type_to_domain,
    months_from_row,
    revenue_stats_to_domain,
)
from finboard.database.models import (
    CompanyAccount as ORMCompanyAccount,
    CostingYearlyStats as ORMCostingYearlyStats,
    FinancialYear as ORMFinancialYear,
    MetricType as ORMMetricType,
    RevenueYearlyStats as ORMRevenueYearlyStats,
)
from finboard.domain.entities import AccountType, CostType, FinancialYear, PeriodType


class TestFinancialYearMapper:
    """Tests for FinancialYear mapper."""

    def test_financial_year_to_domain(self):
        now = datetime.now(UTC)
        orm_fy = ORMFinancialYear(
            id=1,
            name="FY 2024/25",
            start_month=3,
            end_month=2,
            fy_start_year=2024,
            fy_end_year=2025,
            is_active=1,
            description=None,
            created_at=now,
            updated_at=now,
        )
        fy = financial_year_to_domain(orm_fy)

        assert isinstance(fy, FinancialYear)
        assert fy.name == "FY 2024/25"
        assert fy.is_active is True
        assert fy.created_at == now


class TestAccountMapper:
    """Tests for CompanyAccount mapper."""

    def test_account_type_becomes_enum(self):
        orm_account = ORMCompanyAccount(
            id=3,
            company_id=1,
            account_name="Exports",
            account_type="export_revenue",
            is_active=True,
            created_at=datetime.now(UTC),
        )
        account = company_account_to_domain(orm_account)

        assert account.account_type == AccountType.EXPORT_REVENUE
        assert account.account_type.is_revenue


class TestMetricTypeMapper:
    def test_period_type_becomes_enum(self):
        orm_type = ORMMetricType(
            id=1,
            group_id=1,
            code="HEADCOUNT",
            name="Headcount",
            unit="people",
            show_total=True,
            show_margin=False,
            period_type="YEARLY",
        )

        assert metric_type_to_domain(orm_type).period_type == PeriodType.YEARLY


class TestMonthlyValues:
    """Tests for the m1..m12 column mapping."""

    def test_apply_and_read_months(self):
        row = ORMRevenueYearlyStats()
        apply_months(row, [Decimal(i) for i in range(1, 13)])

        assert row.m1 == Decimal("1")
        assert row.m12 == Decimal("12")
        assert row.total_amount == Decimal("78")
        assert months_from_row(row) == tuple(Decimal(i) for i in range(1, 13))

    def test_null_columns_read_as_zero(self):
        row = ORMRevenueYearlyStats(m1=Decimal("5"))

        months = months_from_row(row)
        assert months[0] == Decimal("5")
        assert months[1:] == (Decimal("0"),) * 11

    def test_stats_to_domain(self):
        now = datetime.now(UTC)
        revenue_row = ORMRevenueYearlyStats(
            id=1, company_id=1, account_id=None, financial_year_id=1, created_at=now, updated_at=now
        )
        apply_months(revenue_row, [Decimal("10")] * 12)
        costing_row = ORMCostingYearlyStats(
            id=2,
            company_id=1,
            financial_year_id=1,
            cost_type="operational",
            category_id=None,
            created_at=now,
            updated_at=now,
        )
        apply_months(costing_row, [Decimal("1")] * 12)

        revenue = revenue_stats_to_domain(revenue_row)
        costing = costing_stats_to_domain(costing_row)

        assert revenue.account_id is None
        assert revenue.total_amount == Decimal("120")
        assert costing.cost_type == CostType.OPERATIONAL
        assert costing.total_amount == Decimal("12")
