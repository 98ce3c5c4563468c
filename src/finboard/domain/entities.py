"""Domain model entities for finboard.

These are pure data classes representing business concepts, independent of
database schema. Monthly values are stored positionally: ``months[0]`` is the
first month of the financial year, not January.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional


class AccountType(str, Enum):
    """Company account classification."""

    DOMESTIC_REVENUE = "domestic_revenue"
    EXPORT_REVENUE = "export_revenue"
    EXPENSE = "expense"
    OTHER = "other"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").title()

    @property
    def is_revenue(self) -> bool:
        return self in (AccountType.DOMESTIC_REVENUE, AccountType.EXPORT_REVENUE)


class CostType(str, Enum):
    """Cost structure section."""

    DIRECT = "direct"
    OPERATIONAL = "operational"


class PeriodType(str, Enum):
    """How a metric type is captured."""

    QUARTERLY = "QUARTERLY"
    YEARLY = "YEARLY"
    YEARLY_SIDE_BY_SIDE = "YEARLY_SIDE_BY_SIDE"


@dataclass(frozen=True)
class FinancialYear:
    """Financial year that may start on any calendar month."""

    id: int
    name: str
    start_month: int
    end_month: int
    fy_start_year: int
    fy_end_year: int
    is_active: bool
    description: Optional[str]
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class FinancialYearMonth:
    """One month of a financial year."""

    month: int
    year: int
    name: str


@dataclass(frozen=True)
class FinancialYearSummary:
    """Aggregate counts over all financial years."""

    total_years: int
    active_years: int
    earliest_year: Optional[int]
    latest_year: Optional[int]


@dataclass(frozen=True)
class Industry:
    """Industry (sector) a company belongs to."""

    id: int
    name: str
    parent_id: Optional[int]
    created_at: datetime


@dataclass(frozen=True)
class Company:
    """Company domain entity."""

    id: int
    name: str
    industry_id: Optional[int]
    turnover_actual: Optional[Decimal]
    permanent_employees: int
    temporary_employees: int
    created_at: datetime


@dataclass(frozen=True)
class CompanyAccount:
    """Revenue or expense account owned by a company."""

    id: int
    company_id: int
    account_name: str
    account_type: AccountType
    description: Optional[str]
    account_number: Optional[str]
    is_active: bool
    created_at: datetime


@dataclass(frozen=True)
class CompanyAccountSummary:
    """Account counts by status and type."""

    total_accounts: int
    active_accounts: int
    inactive_accounts: int
    by_type: dict[AccountType, int]


@dataclass(frozen=True)
class CostCategory:
    """Cost category used to classify costing rows."""

    id: int
    name: str
    cost_type: CostType
    description: Optional[str]
    is_active: bool
    created_at: datetime


@dataclass(frozen=True)
class MetricGroup:
    """Top level of the metrics hierarchy."""

    id: int
    code: str
    name: str
    description: Optional[str]
    show_total: bool
    show_margin: bool
    graph_color: Optional[str]
    order_no: int


@dataclass(frozen=True)
class MetricType:
    """A tracked KPI inside a metric group."""

    id: int
    group_id: int
    code: str
    name: str
    description: Optional[str]
    unit: str
    show_total: bool
    show_margin: bool
    graph_color: Optional[str]
    period_type: PeriodType


@dataclass(frozen=True)
class MetricRecord:
    """One year of values for a metric type and company."""

    id: int
    metric_type_id: int
    company_id: int
    year: int
    q1: Optional[Decimal]
    q2: Optional[Decimal]
    q3: Optional[Decimal]
    q4: Optional[Decimal]
    total: Optional[Decimal]
    margin_pct: Optional[Decimal]
    notes: Optional[str]
    unit: str


@dataclass(frozen=True)
class MetricTypeNode:
    """Metric type with its records, for hierarchy views."""

    type: MetricType
    records: tuple[MetricRecord, ...] = ()


@dataclass(frozen=True)
class MetricGroupNode:
    """Metric group with its types, for hierarchy views."""

    group: MetricGroup
    types: tuple[MetricTypeNode, ...] = ()


@dataclass(frozen=True)
class RevenueYearlyStats:
    """Twelve monthly revenue values for one account and financial year.

    ``account_id`` of None is the company-total row.
    """

    id: int
    company_id: int
    account_id: Optional[int]
    financial_year_id: int
    months: tuple[Decimal, ...]
    total_amount: Decimal
    notes: Optional[str]
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class CostingYearlyStats:
    """Twelve monthly cost values for one category and financial year."""

    id: int
    company_id: int
    financial_year_id: int
    cost_type: CostType
    category_id: Optional[int]
    months: tuple[Decimal, ...]
    total_amount: Decimal
    notes: Optional[str]
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class QuarterlyTotals:
    """Quarter sums over a fiscal year; ``total`` equals their sum."""

    q1: Decimal
    q2: Decimal
    q3: Decimal
    q4: Decimal
    total: Decimal

    def as_tuple(self) -> tuple[Decimal, Decimal, Decimal, Decimal]:
        return (self.q1, self.q2, self.q3, self.q4)


@dataclass(frozen=True)
class AccountBreakdown:
    """Per-account monthly values inside a quarterly revenue report."""

    account_id: Optional[int]
    account_name: str
    account_type: Optional[AccountType]
    months: tuple[Decimal, ...]
    total: Decimal


@dataclass(frozen=True)
class QuarterlyRevenue:
    """Quarterly revenue and export figures for one financial year."""

    financial_year_id: int
    financial_year_name: str
    fy_start_year: int
    fy_end_year: int
    start_month: int
    revenue: QuarterlyTotals
    export: QuarterlyTotals
    export_ratio: Decimal
    account_breakdown: tuple[AccountBreakdown, ...]
    quarter_months: tuple[tuple[str, ...], ...]


@dataclass(frozen=True)
class YearlyTotals:
    """Revenue against expense totals for one company and year."""

    revenue_total: Decimal
    expense_total: Decimal
    revenue_accounts: int
    expense_accounts: int
    net_total: Decimal


@dataclass(frozen=True)
class CategoryCostBreakdown:
    """Per-category costs inside a quarterly cost report."""

    category_id: Optional[int]
    category_name: str
    cost_type: CostType
    months: tuple[Decimal, ...]
    quarters: QuarterlyTotals


@dataclass(frozen=True)
class QuarterlyCosts:
    """Direct, operational and combined quarter sums for one financial year."""

    financial_year_id: int
    financial_year_name: str
    fy_start_year: Optional[int]
    fy_end_year: Optional[int]
    start_month: int
    direct: QuarterlyTotals
    operational: QuarterlyTotals
    total: QuarterlyTotals
    category_breakdown: tuple[CategoryCostBreakdown, ...]
    quarter_months: tuple[tuple[str, ...], ...]


@dataclass(frozen=True)
class CostTypeSummary:
    """Aggregated costs for one cost type."""

    cost_type: CostType
    record_count: int
    total_cost: Decimal
    monthly_totals: tuple[Decimal, ...]


@dataclass(frozen=True)
class CostStructure:
    """Cost structure view: section totals against revenue."""

    financial_year_id: int
    month_labels: tuple[str, ...]
    direct_total: Decimal
    operational_total: Decimal
    direct_monthly: tuple[Decimal, ...]
    operational_monthly: tuple[Decimal, ...]
    revenue_total: Decimal
    net_profit: Decimal


@dataclass(frozen=True)
class AccountRow:
    """Revenue row inside a year group."""

    stats_id: int
    account_id: Optional[int]
    account_name: str
    months: tuple[Decimal, ...]
    total: Decimal


@dataclass(frozen=True)
class YearGroup:
    """Financial year with its captured revenue rows."""

    financial_year_id: int
    name: str
    is_active: bool
    month_labels: tuple[str, ...]
    accounts: tuple[AccountRow, ...] = field(default_factory=tuple)

    @property
    def total(self) -> Decimal:
        return sum((row.total for row in self.accounts), Decimal("0"))
