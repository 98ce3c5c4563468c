"""Revenue yearly stats domain service.

Revenue is captured as twelve monthly values per company account and
financial year. A row without an account holds the company total.
"""

import logging
from decimal import Decimal
from typing import Optional, Sequence

from finboard.database.base import Database
from finboard.domain.aggregation import (
    ZERO,
    add_quarterly,
    normalize_months,
    percentage,
    quarterly_totals,
    sum_months,
)
from finboard.domain.entities import (
    AccountBreakdown,
    AccountRow,
    AccountType,
    CompanyAccount,
    FinancialYear,
    QuarterlyRevenue,
    RevenueYearlyStats,
    YearGroup,
    YearlyTotals,
)
from finboard.domain.errors import (
    NotFoundError,
    ValidationError,
    account_not_found,
    company_not_found,
    financial_year_not_found,
    stats_not_found,
)
from finboard.domain.fiscal import all_quarter_month_names, month_labels

logger = logging.getLogger(__name__)

COMPANY_TOTAL_LABEL = "Company Total"


def _validated_months(months: Sequence) -> tuple[Decimal, ...]:
    try:
        return normalize_months(months)
    except ValueError as e:
        raise ValidationError(str(e)) from e


class RevenueStatsService:
    """Service for per-account monthly revenue and the reports built on it."""

    def __init__(self, db: Database):
        """Initialize revenue stats service.

        Args:
            db: Database instance
        """
        self.db = db

    def upsert(
        self,
        company_id: int,
        account_id: Optional[int],
        financial_year_id: int,
        months: Sequence,
        notes: Optional[str] = None,
    ) -> int:
        """Create or replace the monthly values for one account and year.

        Args:
            company_id: Company ID
            account_id: Account ID, or None for the company-total row
            financial_year_id: Financial year ID
            months: Up to twelve values in financial-year order; missing
                months are zero
            notes: Optional notes

        Returns:
            Stats ID of the created or updated row

        Raises:
            NotFoundError: If the company, account or financial year does not exist
            ValidationError: If the account belongs to another company or a
                value is not numeric
        """
        self._require_company(company_id)
        self._require_financial_year(financial_year_id)
        if account_id is not None:
            account = self.db.get_company_account(account_id)
            if account is None:
                raise NotFoundError(account_not_found(account_id))
            if account.company_id != company_id:
                raise ValidationError(
                    f"Account {account_id} does not belong to company {company_id}"
                )

        values = _validated_months(months)
        existing = self.db.find_revenue_stats(company_id, account_id, financial_year_id)
        if existing is not None:
            self.db.update_revenue_stats(existing.id, months=values, notes=notes)
            logger.info("Updated revenue stats %s", existing.id)
            return existing.id

        stats_id = self.db.create_revenue_stats(
            company_id=company_id,
            account_id=account_id,
            financial_year_id=financial_year_id,
            months=values,
            notes=notes,
        )
        logger.info(
            "Created revenue stats %s (company %s, account %s, year %s)",
            stats_id,
            company_id,
            account_id,
            financial_year_id,
        )
        return stats_id

    def update_months(self, stats_id: int, months: Sequence) -> None:
        """Replace the monthly values of an existing row.

        Raises:
            NotFoundError: If the row does not exist
            ValidationError: If a value is not numeric
        """
        if self.db.get_revenue_stats(stats_id) is None:
            raise NotFoundError(stats_not_found("Revenue", stats_id))
        self.db.update_revenue_stats(stats_id, months=_validated_months(months))
        logger.info("Updated revenue stats %s", stats_id)

    def get_stats(self, stats_id: int) -> Optional[RevenueYearlyStats]:
        return self.db.get_revenue_stats(stats_id)

    def find_stats(
        self, company_id: int, account_id: Optional[int], financial_year_id: int
    ) -> Optional[RevenueYearlyStats]:
        """Get the row of one account (None for the company total) and year."""
        return self.db.find_revenue_stats(company_id, account_id, financial_year_id)

    def list_stats(
        self, company_id: Optional[int] = None, financial_year_id: Optional[int] = None
    ) -> list[RevenueYearlyStats]:
        return self.db.list_revenue_stats(company_id=company_id, financial_year_id=financial_year_id)

    def delete_stats(self, stats_id: int) -> None:
        """Delete a revenue row.

        Raises:
            NotFoundError: If the row does not exist
        """
        if self.db.get_revenue_stats(stats_id) is None:
            raise NotFoundError(stats_not_found("Revenue", stats_id))
        self.db.delete_revenue_stats(stats_id)
        logger.info("Deleted revenue stats %s", stats_id)

    def delete_by_company_and_year(self, company_id: int, financial_year_id: int) -> int:
        """Delete every revenue row of a company for one year.

        Returns:
            Number of rows deleted
        """
        count = self.db.delete_revenue_stats_for_year(company_id, financial_year_id)
        logger.info(
            "Deleted %d revenue rows for company %s, year %s", count, company_id, financial_year_id
        )
        return count

    def yearly_totals(self, company_id: int, financial_year_id: int) -> YearlyTotals:
        """Revenue against expense totals for a company and year.

        Revenue covers domestic and export accounts plus the company-total
        row; expense covers expense accounts. Other accounts are ignored.
        """
        accounts = self._accounts_by_id(company_id)
        revenue_rows, expense_rows = [], []
        for stats in self.db.list_revenue_stats(company_id, financial_year_id):
            account = accounts.get(stats.account_id)
            if self._is_revenue_row(stats, account):
                revenue_rows.append(stats)
            elif account is not None and account.account_type == AccountType.EXPENSE:
                expense_rows.append(stats)

        revenue_total = sum((s.total_amount for s in revenue_rows), ZERO)
        expense_total = sum((s.total_amount for s in expense_rows), ZERO)
        return YearlyTotals(
            revenue_total=revenue_total,
            expense_total=expense_total,
            revenue_accounts=len(revenue_rows),
            expense_accounts=len(expense_rows),
            net_total=revenue_total - expense_total,
        )

    def monthly_breakdown(self, company_id: int, financial_year_id: int) -> dict[str, tuple[Decimal, ...]]:
        """Per-month revenue and expense sums for a company and year."""
        accounts = self._accounts_by_id(company_id)
        revenue, expense = [], []
        for stats in self.db.list_revenue_stats(company_id, financial_year_id):
            account = accounts.get(stats.account_id)
            if self._is_revenue_row(stats, account):
                revenue.append(stats.months)
            elif account is not None and account.account_type == AccountType.EXPENSE:
                expense.append(stats.months)
        return {"revenue": sum_months(revenue), "expense": sum_months(expense)}

    def quarterly_revenue(self, company_id: int, financial_year_id: int) -> QuarterlyRevenue:
        """Quarterly revenue and export figures for one financial year.

        Raises:
            NotFoundError: If the company or financial year does not exist
        """
        self._require_company(company_id)
        fy = self._require_financial_year(financial_year_id)
        return self._quarterly_revenue(company_id, fy, self._accounts_by_id(company_id))

    def quarterly_revenue_all_years(self, company_id: int) -> list[QuarterlyRevenue]:
        """Quarterly revenue for every financial year with captured data, oldest first."""
        self._require_company(company_id)
        accounts = self._accounts_by_id(company_id)
        return [
            self._quarterly_revenue(company_id, fy, accounts)
            for fy in self._years_with_data(company_id)
        ]

    def year_groups(self, company_id: int) -> list[YearGroup]:
        """Financial years with captured revenue, newest first, each with its rows."""
        self._require_company(company_id)
        accounts = self._accounts_by_id(company_id)
        groups = []
        for fy in reversed(self._years_with_data(company_id)):
            rows = tuple(
                AccountRow(
                    stats_id=stats.id,
                    account_id=stats.account_id,
                    account_name=self._account_name(stats.account_id, accounts),
                    months=stats.months,
                    total=stats.total_amount,
                )
                for stats in self.db.list_revenue_stats(company_id, fy.id)
            )
            groups.append(
                YearGroup(
                    financial_year_id=fy.id,
                    name=fy.name,
                    is_active=fy.is_active,
                    month_labels=tuple(month_labels(fy)),
                    accounts=rows,
                )
            )
        return groups

    def _quarterly_revenue(
        self, company_id: int, fy: FinancialYear, accounts: dict[int, CompanyAccount]
    ) -> QuarterlyRevenue:
        revenue_quarters, export_quarters, breakdown = [], [], []
        for stats in self.db.list_revenue_stats(company_id, fy.id):
            account = accounts.get(stats.account_id)
            if not self._is_revenue_row(stats, account):
                continue
            quarters = quarterly_totals(stats.months)
            revenue_quarters.append(quarters)
            if account is not None and account.account_type == AccountType.EXPORT_REVENUE:
                export_quarters.append(quarters)
            breakdown.append(
                AccountBreakdown(
                    account_id=stats.account_id,
                    account_name=self._account_name(stats.account_id, accounts),
                    account_type=account.account_type if account is not None else None,
                    months=stats.months,
                    total=stats.total_amount,
                )
            )

        revenue = add_quarterly(*revenue_quarters)
        export = add_quarterly(*export_quarters)
        return QuarterlyRevenue(
            financial_year_id=fy.id,
            financial_year_name=fy.name,
            fy_start_year=fy.fy_start_year,
            fy_end_year=fy.fy_end_year,
            start_month=fy.start_month,
            revenue=revenue,
            export=export,
            export_ratio=percentage(export.total, revenue.total),
            account_breakdown=tuple(breakdown),
            quarter_months=all_quarter_month_names(fy.start_month),
        )

    def _years_with_data(self, company_id: int) -> list[FinancialYear]:
        year_ids = {stats.financial_year_id for stats in self.db.list_revenue_stats(company_id)}
        years = [self.db.get_financial_year(year_id) for year_id in year_ids]
        return sorted((fy for fy in years if fy is not None), key=lambda fy: (fy.fy_start_year, fy.id))

    def _accounts_by_id(self, company_id: int) -> dict[int, CompanyAccount]:
        return {a.id: a for a in self.db.list_company_accounts(company_id=company_id)}

    @staticmethod
    def _is_revenue_row(stats: RevenueYearlyStats, account: Optional[CompanyAccount]) -> bool:
        if stats.account_id is None:
            return True
        return account is not None and account.account_type.is_revenue

    @staticmethod
    def _account_name(account_id: Optional[int], accounts: dict[int, CompanyAccount]) -> str:
        if account_id is None:
            return COMPANY_TOTAL_LABEL
        account = accounts.get(account_id)
        return account.account_name if account is not None else f"Account {account_id}"

    def _require_company(self, company_id: int) -> None:
        if self.db.get_company(company_id) is None:
            raise NotFoundError(company_not_found(company_id))

    def _require_financial_year(self, financial_year_id: int) -> FinancialYear:
        fy = self.db.get_financial_year(financial_year_id)
        if fy is None:
            raise NotFoundError(financial_year_not_found(financial_year_id))
        return fy
