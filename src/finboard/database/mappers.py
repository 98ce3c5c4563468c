"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so the m1..m12 column layout of the
yearly stats tables never leaks into the domain (which uses a months tuple).
"""

from decimal import Decimal
from typing import Sequence

from finboard.domain import entities as domain
from finboard.database.models import (
    MONTH_COLUMNS,
    FinancialYear as ORMFinancialYear,
    Industry as ORMIndustry,
    Company as ORMCompany,
    CompanyAccount as ORMCompanyAccount,
    CostCategory as ORMCostCategory,
    MetricGroup as ORMMetricGroup,
    MetricType as ORMMetricType,
    MetricRecord as ORMMetricRecord,
    RevenueYearlyStats as ORMRevenueYearlyStats,
    CostingYearlyStats as ORMCostingYearlyStats,
)


def months_from_row(row) -> tuple[Decimal, ...]:
    """Read m1..m12 from an ORM row; NULL columns read as zero."""
    return tuple(
        Decimal(getattr(row, column)) if getattr(row, column) is not None else Decimal("0")
        for column in MONTH_COLUMNS
    )


def apply_months(row, months: Sequence[Decimal]) -> None:
    """Write twelve values to m1..m12 and keep total_amount in step."""
    for column, value in zip(MONTH_COLUMNS, months):
        setattr(row, column, value)
    row.total_amount = sum(months, Decimal("0"))


def financial_year_to_domain(orm_fy: ORMFinancialYear) -> domain.FinancialYear:
    """Convert SQLAlchemy FinancialYear model to domain FinancialYear entity."""
    return domain.FinancialYear(
        id=orm_fy.id,
        name=orm_fy.name,
        start_month=orm_fy.start_month,
        end_month=orm_fy.end_month,
        fy_start_year=orm_fy.fy_start_year,
        fy_end_year=orm_fy.fy_end_year,
        is_active=bool(orm_fy.is_active),
        description=orm_fy.description,
        created_at=orm_fy.created_at,
        updated_at=orm_fy.updated_at,
    )


def industry_to_domain(orm_industry: ORMIndustry) -> domain.Industry:
    """Convert SQLAlchemy Industry model to domain Industry entity."""
    return domain.Industry(
        id=orm_industry.id,
        name=orm_industry.name,
        parent_id=orm_industry.parent_id,
        created_at=orm_industry.created_at,
    )


def company_to_domain(orm_company: ORMCompany) -> domain.Company:
    """Convert SQLAlchemy Company model to domain Company entity."""
    return domain.Company(
        id=orm_company.id,
        name=orm_company.name,
        industry_id=orm_company.industry_id,
        turnover_actual=orm_company.turnover_actual,
        permanent_employees=orm_company.permanent_employees or 0,
        temporary_employees=orm_company.temporary_employees or 0,
        created_at=orm_company.created_at,
    )


def company_account_to_domain(orm_account: ORMCompanyAccount) -> domain.CompanyAccount:
    """Convert SQLAlchemy CompanyAccount model to domain CompanyAccount entity."""
    return domain.CompanyAccount(
        id=orm_account.id,
        company_id=orm_account.company_id,
        account_name=orm_account.account_name,
        account_type=domain.AccountType(orm_account.account_type),
        description=orm_account.description,
        account_number=orm_account.account_number,
        is_active=bool(orm_account.is_active),
        created_at=orm_account.created_at,
    )


def cost_category_to_domain(orm_category: ORMCostCategory) -> domain.CostCategory:
    """Convert SQLAlchemy CostCategory model to domain CostCategory entity."""
    return domain.CostCategory(
        id=orm_category.id,
        name=orm_category.name,
        cost_type=domain.CostType(orm_category.cost_type),
        description=orm_category.description,
        is_active=bool(orm_category.is_active),
        created_at=orm_category.created_at,
    )


def metric_group_to_domain(orm_group: ORMMetricGroup) -> domain.MetricGroup:
    """Convert SQLAlchemy MetricGroup model to domain MetricGroup entity."""
    return domain.MetricGroup(
        id=orm_group.id,
        code=orm_group.code,
        name=orm_group.name,
        description=orm_group.description,
        show_total=bool(orm_group.show_total),
        show_margin=bool(orm_group.show_margin),
        graph_color=orm_group.graph_color,
        order_no=orm_group.order_no or 0,
    )


def metric_type_to_domain(orm_type: ORMMetricType) -> domain.MetricType:
    """Convert SQLAlchemy MetricType model to domain MetricType entity."""
    return domain.MetricType(
        id=orm_type.id,
        group_id=orm_type.group_id,
        code=orm_type.code,
        name=orm_type.name,
        description=orm_type.description,
        unit=orm_type.unit,
        show_total=bool(orm_type.show_total),
        show_margin=bool(orm_type.show_margin),
        graph_color=orm_type.graph_color,
        period_type=domain.PeriodType(orm_type.period_type),
    )


def metric_record_to_domain(orm_record: ORMMetricRecord) -> domain.MetricRecord:
    """Convert SQLAlchemy MetricRecord model to domain MetricRecord entity."""
    return domain.MetricRecord(
        id=orm_record.id,
        metric_type_id=orm_record.metric_type_id,
        company_id=orm_record.company_id,
        year=orm_record.year,
        q1=orm_record.q1,
        q2=orm_record.q2,
        q3=orm_record.q3,
        q4=orm_record.q4,
        total=orm_record.total,
        margin_pct=orm_record.margin_pct,
        notes=orm_record.notes,
        unit=orm_record.unit,
    )


def revenue_stats_to_domain(orm_stats: ORMRevenueYearlyStats) -> domain.RevenueYearlyStats:
    """Convert SQLAlchemy RevenueYearlyStats model to domain entity."""
    months = months_from_row(orm_stats)
    return domain.RevenueYearlyStats(
        id=orm_stats.id,
        company_id=orm_stats.company_id,
        account_id=orm_stats.account_id,
        financial_year_id=orm_stats.financial_year_id,
        months=months,
        total_amount=sum(months, Decimal("0")),
        notes=orm_stats.notes,
        created_at=orm_stats.created_at,
        updated_at=orm_stats.updated_at,
    )


def costing_stats_to_domain(orm_stats: ORMCostingYearlyStats) -> domain.CostingYearlyStats:
    """Convert SQLAlchemy CostingYearlyStats model to domain entity."""
    months = months_from_row(orm_stats)
    return domain.CostingYearlyStats(
        id=orm_stats.id,
        company_id=orm_stats.company_id,
        financial_year_id=orm_stats.financial_year_id,
        cost_type=domain.CostType(orm_stats.cost_type),
        category_id=orm_stats.category_id,
        months=months,
        total_amount=sum(months, Decimal("0")),
        notes=orm_stats.notes,
        created_at=orm_stats.created_at,
        updated_at=orm_stats.updated_at,
    )
