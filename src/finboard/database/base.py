"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional, Sequence
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from finboard.domain.entities import (
    FinancialYear,
    Industry,
    Company,
    CompanyAccount,
    CostCategory,
    MetricGroup,
    MetricType,
    MetricRecord,
    RevenueYearlyStats,
    CostingYearlyStats,
)


class Database(ABC):
    """Abstract database interface for finboard."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Financial year operations
    @abstractmethod
    def create_financial_year(
        self,
        name: str,
        start_month: int,
        end_month: int,
        fy_start_year: int,
        fy_end_year: int,
        is_active: bool = False,
        description: Optional[str] = None,
    ) -> int:
        """Create a financial year. Returns financial year ID."""
        pass

    @abstractmethod
    def get_financial_year(self, financial_year_id: int) -> Optional[FinancialYear]:
        """Get financial year by ID."""
        pass

    @abstractmethod
    def get_financial_year_by_name(self, name: str) -> Optional[FinancialYear]:
        """Get financial year by name."""
        pass

    @abstractmethod
    def get_financial_year_by_period(
        self, fy_start_year: int, fy_end_year: int
    ) -> Optional[FinancialYear]:
        """Get the financial year covering the given start and end years."""
        pass

    @abstractmethod
    def list_financial_years(
        self,
        is_active: Optional[bool] = None,
        year: Optional[int] = None,
        start_year: Optional[int] = None,
        end_year: Optional[int] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> list[FinancialYear]:
        """List financial years ordered by ID.

        Args:
            is_active: Only active (True) or inactive (False) years
            year: Years whose start or end year equals this value
            start_year: Years starting on or after this year
            end_year: Years ending on or before this year
            limit: Maximum number of rows
            offset: Rows to skip (only with limit)
        """
        pass

    @abstractmethod
    def update_financial_year(
        self,
        financial_year_id: int,
        name: Optional[str] = None,
        start_month: Optional[int] = None,
        end_month: Optional[int] = None,
        fy_start_year: Optional[int] = None,
        fy_end_year: Optional[int] = None,
        description: Optional[str] = None,
    ) -> None:
        """Update financial year fields; None leaves a field unchanged."""
        pass

    @abstractmethod
    def set_active_financial_year(self, financial_year_id: int) -> None:
        """Activate one financial year and deactivate all others."""
        pass

    @abstractmethod
    def delete_financial_year(self, financial_year_id: int) -> None:
        """Delete a financial year."""
        pass

    @abstractmethod
    def count_financial_year_stats(self, financial_year_id: int) -> dict[str, int]:
        """Count revenue and costing rows referencing a financial year."""
        pass

    # Industry and company operations
    @abstractmethod
    def create_industry(self, name: str, parent_id: Optional[int] = None) -> int:
        """Create an industry. Returns industry ID."""
        pass

    @abstractmethod
    def get_industry(self, industry_id: int) -> Optional[Industry]:
        """Get industry by ID."""
        pass

    @abstractmethod
    def get_industry_by_name(self, name: str) -> Optional[Industry]:
        """Get industry by name."""
        pass

    @abstractmethod
    def list_industries(self) -> list[Industry]:
        """List all industries ordered by name."""
        pass

    @abstractmethod
    def create_company(
        self,
        name: str,
        industry_id: Optional[int] = None,
        turnover_actual: Optional[Decimal] = None,
        permanent_employees: int = 0,
        temporary_employees: int = 0,
    ) -> int:
        """Create a company. Returns company ID."""
        pass

    @abstractmethod
    def get_company(self, company_id: int) -> Optional[Company]:
        """Get company by ID."""
        pass

    @abstractmethod
    def get_company_by_name(self, name: str) -> Optional[Company]:
        """Get company by name."""
        pass

    @abstractmethod
    def list_companies(self, industry_id: Optional[int] = None) -> list[Company]:
        """List companies, optionally filtered by industry."""
        pass

    # Company account operations
    @abstractmethod
    def create_company_account(
        self,
        company_id: int,
        account_name: str,
        account_type: str,
        description: Optional[str] = None,
        account_number: Optional[str] = None,
        is_active: bool = True,
    ) -> int:
        """Create a company account. Returns account ID."""
        pass

    @abstractmethod
    def get_company_account(self, account_id: int) -> Optional[CompanyAccount]:
        """Get company account by ID."""
        pass

    @abstractmethod
    def list_company_accounts(
        self,
        company_id: Optional[int] = None,
        account_type: Optional[str] = None,
        is_active: Optional[bool] = None,
    ) -> list[CompanyAccount]:
        """List company accounts with optional filters."""
        pass

    @abstractmethod
    def update_company_account(
        self,
        account_id: int,
        account_name: Optional[str] = None,
        account_type: Optional[str] = None,
        description: Optional[str] = None,
        account_number: Optional[str] = None,
    ) -> None:
        """Update company account fields; None leaves a field unchanged."""
        pass

    @abstractmethod
    def set_company_account_active(self, account_id: int, is_active: bool) -> None:
        """Set the active flag on a company account."""
        pass

    @abstractmethod
    def delete_company_account(self, account_id: int) -> None:
        """Delete a company account."""
        pass

    @abstractmethod
    def count_account_stats(self, account_id: int) -> int:
        """Count revenue stats rows referencing an account."""
        pass

    # Cost category operations
    @abstractmethod
    def create_cost_category(
        self,
        name: str,
        cost_type: str,
        description: Optional[str] = None,
        is_active: bool = True,
    ) -> int:
        """Create a cost category. Returns category ID."""
        pass

    @abstractmethod
    def get_cost_category(self, category_id: int) -> Optional[CostCategory]:
        """Get cost category by ID."""
        pass

    @abstractmethod
    def get_cost_category_by_name(self, name: str) -> Optional[CostCategory]:
        """Get cost category by name (case-insensitive)."""
        pass

    @abstractmethod
    def list_cost_categories(
        self, active_only: bool = False, cost_type: Optional[str] = None
    ) -> list[CostCategory]:
        """List cost categories ordered by name."""
        pass

    @abstractmethod
    def update_cost_category(
        self,
        category_id: int,
        name: Optional[str] = None,
        cost_type: Optional[str] = None,
        description: Optional[str] = None,
    ) -> None:
        """Update cost category fields; None leaves a field unchanged."""
        pass

    @abstractmethod
    def set_cost_category_active(self, category_id: int, is_active: bool) -> None:
        """Set the active flag on a cost category."""
        pass

    @abstractmethod
    def delete_cost_category(self, category_id: int) -> None:
        """Delete a cost category."""
        pass

    @abstractmethod
    def count_cost_category_usage(self, category_id: int) -> int:
        """Count costing rows referencing a cost category."""
        pass

    # Metric group operations
    @abstractmethod
    def create_metric_group(
        self,
        code: str,
        name: str,
        description: Optional[str] = None,
        show_total: bool = True,
        show_margin: bool = False,
        graph_color: Optional[str] = None,
        order_no: int = 0,
    ) -> int:
        """Create a metric group. Returns group ID."""
        pass

    @abstractmethod
    def get_metric_group(self, group_id: int) -> Optional[MetricGroup]:
        """Get metric group by ID."""
        pass

    @abstractmethod
    def get_metric_group_by_code(self, code: str) -> Optional[MetricGroup]:
        """Get metric group by code."""
        pass

    @abstractmethod
    def list_metric_groups(self) -> list[MetricGroup]:
        """List metric groups ordered by order number, then name."""
        pass

    @abstractmethod
    def update_metric_group(
        self,
        group_id: int,
        code: Optional[str] = None,
        name: Optional[str] = None,
        description: Optional[str] = None,
        show_total: Optional[bool] = None,
        show_margin: Optional[bool] = None,
        graph_color: Optional[str] = None,
        order_no: Optional[int] = None,
    ) -> None:
        """Update metric group fields; None leaves a field unchanged."""
        pass

    @abstractmethod
    def delete_metric_group(self, group_id: int) -> None:
        """Delete a metric group with its types and records."""
        pass

    # Metric type operations
    @abstractmethod
    def create_metric_type(
        self,
        group_id: int,
        code: str,
        name: str,
        description: Optional[str] = None,
        unit: str = "ZAR",
        show_total: bool = True,
        show_margin: bool = False,
        graph_color: Optional[str] = None,
        period_type: str = "QUARTERLY",
    ) -> int:
        """Create a metric type. Returns type ID."""
        pass

    @abstractmethod
    def get_metric_type(self, type_id: int) -> Optional[MetricType]:
        """Get metric type by ID."""
        pass

    @abstractmethod
    def get_metric_type_by_code(self, code: str) -> Optional[MetricType]:
        """Get metric type by code."""
        pass

    @abstractmethod
    def list_metric_types(self, group_id: Optional[int] = None) -> list[MetricType]:
        """List metric types ordered by name, optionally filtered by group."""
        pass

    @abstractmethod
    def update_metric_type(
        self,
        type_id: int,
        group_id: Optional[int] = None,
        code: Optional[str] = None,
        name: Optional[str] = None,
        description: Optional[str] = None,
        unit: Optional[str] = None,
        show_total: Optional[bool] = None,
        show_margin: Optional[bool] = None,
        graph_color: Optional[str] = None,
        period_type: Optional[str] = None,
    ) -> None:
        """Update metric type fields; None leaves a field unchanged."""
        pass

    @abstractmethod
    def delete_metric_type(self, type_id: int) -> None:
        """Delete a metric type with its records."""
        pass

    # Metric record operations
    @abstractmethod
    def create_metric_record(
        self,
        metric_type_id: int,
        company_id: int,
        year: int,
        q1: Optional[Decimal] = None,
        q2: Optional[Decimal] = None,
        q3: Optional[Decimal] = None,
        q4: Optional[Decimal] = None,
        total: Optional[Decimal] = None,
        margin_pct: Optional[Decimal] = None,
        notes: Optional[str] = None,
        unit: str = "ZAR",
    ) -> int:
        """Create a metric record. Returns record ID."""
        pass

    @abstractmethod
    def get_metric_record(self, record_id: int) -> Optional[MetricRecord]:
        """Get metric record by ID."""
        pass

    @abstractmethod
    def find_metric_record(
        self, metric_type_id: int, company_id: int, year: int
    ) -> Optional[MetricRecord]:
        """Get the record for a metric type, company and year."""
        pass

    @abstractmethod
    def list_metric_records(
        self,
        metric_type_id: Optional[int] = None,
        company_id: Optional[int] = None,
        year: Optional[int] = None,
    ) -> list[MetricRecord]:
        """List metric records, newest year first."""
        pass

    @abstractmethod
    def replace_metric_record_values(
        self,
        record_id: int,
        year: int,
        q1: Optional[Decimal],
        q2: Optional[Decimal],
        q3: Optional[Decimal],
        q4: Optional[Decimal],
        total: Optional[Decimal],
        margin_pct: Optional[Decimal],
        notes: Optional[str],
        unit: str,
    ) -> None:
        """Overwrite every value of a metric record (None clears a value)."""
        pass

    @abstractmethod
    def delete_metric_record(self, record_id: int) -> None:
        """Delete a metric record."""
        pass

    # Revenue yearly stats operations
    @abstractmethod
    def create_revenue_stats(
        self,
        company_id: int,
        account_id: Optional[int],
        financial_year_id: int,
        months: Sequence[Decimal],
        notes: Optional[str] = None,
    ) -> int:
        """Create a revenue stats row. Returns stats ID."""
        pass

    @abstractmethod
    def get_revenue_stats(self, stats_id: int) -> Optional[RevenueYearlyStats]:
        """Get revenue stats by ID."""
        pass

    @abstractmethod
    def find_revenue_stats(
        self, company_id: int, account_id: Optional[int], financial_year_id: int
    ) -> Optional[RevenueYearlyStats]:
        """Get revenue stats by company, account (None for company total) and year."""
        pass

    @abstractmethod
    def list_revenue_stats(
        self,
        company_id: Optional[int] = None,
        financial_year_id: Optional[int] = None,
    ) -> list[RevenueYearlyStats]:
        """List revenue stats ordered by company, year (newest first), account."""
        pass

    @abstractmethod
    def update_revenue_stats(
        self,
        stats_id: int,
        months: Optional[Sequence[Decimal]] = None,
        notes: Optional[str] = None,
    ) -> None:
        """Update monthly values and/or notes of a revenue stats row."""
        pass

    @abstractmethod
    def delete_revenue_stats(self, stats_id: int) -> None:
        """Delete a revenue stats row."""
        pass

    @abstractmethod
    def delete_revenue_stats_for_year(self, company_id: int, financial_year_id: int) -> int:
        """Delete all revenue rows for a company and year. Returns count."""
        pass

    # Costing yearly stats operations
    @abstractmethod
    def create_costing_stats(
        self,
        company_id: int,
        financial_year_id: int,
        cost_type: str,
        category_id: Optional[int],
        months: Sequence[Decimal],
        notes: Optional[str] = None,
    ) -> int:
        """Create a costing stats row. Returns stats ID."""
        pass

    @abstractmethod
    def get_costing_stats(self, stats_id: int) -> Optional[CostingYearlyStats]:
        """Get costing stats by ID."""
        pass

    @abstractmethod
    def find_costing_stats(
        self,
        company_id: int,
        financial_year_id: int,
        cost_type: str,
        category_id: Optional[int],
    ) -> Optional[CostingYearlyStats]:
        """Get costing stats by its unique key."""
        pass

    @abstractmethod
    def list_costing_stats(
        self,
        company_id: Optional[int] = None,
        financial_year_id: Optional[int] = None,
        cost_type: Optional[str] = None,
        category_id: Optional[int] = None,
    ) -> list[CostingYearlyStats]:
        """List costing stats in insertion order."""
        pass

    @abstractmethod
    def update_costing_stats(
        self,
        stats_id: int,
        cost_type: Optional[str] = None,
        category_id: Optional[int] = None,
        months: Optional[Sequence[Decimal]] = None,
        notes: Optional[str] = None,
    ) -> None:
        """Update costing stats fields; None leaves a field unchanged."""
        pass

    @abstractmethod
    def delete_costing_stats(self, stats_id: int) -> None:
        """Delete a costing stats row."""
        pass

    @abstractmethod
    def delete_costing_stats_for_year(self, company_id: int, financial_year_id: int) -> int:
        """Delete all costing rows for a company and year. Returns count."""
        pass
