"""Costing yearly stats domain service.

Costs are captured as twelve monthly values per company, financial year,
cost type (direct or operational) and optional cost category.
"""

import logging
from decimal import Decimal
from typing import Any, Mapping, Optional, Sequence

from finboard.database.base import Database
from finboard.database.models import MONTH_COLUMNS
from finboard.domain.aggregation import (
    ZERO,
    add_quarterly,
    net_profit,
    normalize_months,
    quarterly_totals,
    section_total,
    sum_months,
    to_decimal,
)
from finboard.domain.cost_category import parse_cost_type
from finboard.domain.entities import (
    CategoryCostBreakdown,
    CostingYearlyStats,
    CostStructure,
    CostType,
    CostTypeSummary,
    FinancialYear,
    QuarterlyCosts,
)
from finboard.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    company_not_found,
    cost_category_not_found,
    financial_year_not_found,
    stats_not_found,
)
from finboard.domain.fiscal import all_quarter_month_names, month_labels
from finboard.domain.revenue import RevenueStatsService

logger = logging.getLogger(__name__)

UNCATEGORIZED_LABEL = "Uncategorized"


def _validated_months(months: Sequence) -> tuple[Decimal, ...]:
    try:
        return normalize_months(months)
    except ValueError as e:
        raise ValidationError(str(e)) from e


class CostingStatsService:
    """Service for monthly cost capture and the cost reports built on it."""

    def __init__(self, db: Database):
        """Initialize costing stats service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_stats(
        self,
        company_id: int,
        financial_year_id: int,
        cost_type=None,
        category_id: Optional[int] = None,
        months: Sequence = (),
        notes: Optional[str] = None,
    ) -> int:
        """Create a costing row.

        Args:
            company_id: Company ID
            financial_year_id: Financial year ID
            cost_type: CostType or its string value; defaults to the
                category's cost type, or direct without a category
            category_id: Optional cost category ID
            months: Up to twelve values in financial-year order
            notes: Optional notes

        Returns:
            Stats ID

        Raises:
            NotFoundError: If the company, year or category does not exist
            ValidationError: If the cost type or a monthly value is invalid
            ConflictError: If a row with the same key exists
        """
        cost_type = self._resolve_key(company_id, financial_year_id, cost_type, category_id)
        values = _validated_months(months)

        if self.db.find_costing_stats(company_id, financial_year_id, cost_type.value, category_id):
            raise ConflictError(
                f"A {cost_type.value} cost row for this category already exists "
                f"for company {company_id} in financial year {financial_year_id}"
            )

        stats_id = self.db.create_costing_stats(
            company_id=company_id,
            financial_year_id=financial_year_id,
            cost_type=cost_type.value,
            category_id=category_id,
            months=values,
            notes=notes,
        )
        logger.info(
            "Created costing stats %s (company %s, year %s, %s)",
            stats_id,
            company_id,
            financial_year_id,
            cost_type.value,
        )
        return stats_id

    def get_stats(self, stats_id: int) -> Optional[CostingYearlyStats]:
        return self.db.get_costing_stats(stats_id)

    def find_stats(
        self, company_id: int, financial_year_id: int, cost_type=None, category_id: Optional[int] = None
    ) -> Optional[CostingYearlyStats]:
        """Get the row with this key; cost_type defaults as in create_stats."""
        cost_type = self._resolve_key(company_id, financial_year_id, cost_type, category_id)
        return self.db.find_costing_stats(company_id, financial_year_id, cost_type.value, category_id)

    def list_stats(
        self,
        company_id: Optional[int] = None,
        financial_year_id: Optional[int] = None,
        cost_type=None,
        category_id: Optional[int] = None,
    ) -> list[CostingYearlyStats]:
        """List costing rows with optional filters."""
        type_value = parse_cost_type(cost_type).value if cost_type is not None else None
        return self.db.list_costing_stats(
            company_id=company_id,
            financial_year_id=financial_year_id,
            cost_type=type_value,
            category_id=category_id,
        )

    def update_stats(
        self,
        stats_id: int,
        cost_type=None,
        category_id: Optional[int] = None,
        months: Optional[Sequence] = None,
        notes: Optional[str] = None,
    ) -> None:
        """Update a costing row.

        Raises:
            NotFoundError: If the row or the new category does not exist
            ValidationError: If the cost type or a monthly value is invalid
            ConflictError: If the new key collides with another row
        """
        current = self.db.get_costing_stats(stats_id)
        if current is None:
            raise NotFoundError(stats_not_found("Costing", stats_id))

        type_value = parse_cost_type(cost_type).value if cost_type is not None else None
        if category_id is not None and self.db.get_cost_category(category_id) is None:
            raise NotFoundError(cost_category_not_found(category_id))

        if type_value is not None or category_id is not None:
            other = self.db.find_costing_stats(
                current.company_id,
                current.financial_year_id,
                type_value or current.cost_type.value,
                category_id if category_id is not None else current.category_id,
            )
            if other is not None and other.id != stats_id:
                raise ConflictError(f"Costing row {other.id} already uses this cost type and category")

        self.db.update_costing_stats(
            stats_id,
            cost_type=type_value,
            category_id=category_id,
            months=_validated_months(months) if months is not None else None,
            notes=notes,
        )
        logger.info("Updated costing stats %s", stats_id)

    def update_monthly_values(self, stats_id: int, monthly_data: Mapping[str, Any]) -> CostingYearlyStats:
        """Update selected months of a costing row.

        Args:
            stats_id: Stats ID
            monthly_data: Mapping of "m1".."m12" to new values; other keys
                are ignored

        Returns:
            The updated row

        Raises:
            NotFoundError: If the row does not exist
            ValidationError: If a value is not numeric
        """
        current = self.db.get_costing_stats(stats_id)
        if current is None:
            raise NotFoundError(stats_not_found("Costing", stats_id))

        months = list(current.months)
        for index, column in enumerate(MONTH_COLUMNS):
            if column not in monthly_data:
                continue
            value = monthly_data[column]
            try:
                months[index] = to_decimal(value)
            except ValueError as e:
                raise ValidationError(f"Monthly value for {column} must be numeric") from e

        self.db.update_costing_stats(stats_id, months=months)
        logger.info("Updated monthly values of costing stats %s", stats_id)
        return self.db.get_costing_stats(stats_id)

    def upsert(
        self,
        company_id: int,
        financial_year_id: int,
        cost_type=None,
        category_id: Optional[int] = None,
        months: Sequence = (),
        notes: Optional[str] = None,
    ) -> int:
        """Create a costing row, or replace the months of the existing one.

        Returns:
            Stats ID of the created or updated row
        """
        cost_type = self._resolve_key(company_id, financial_year_id, cost_type, category_id)
        existing = self.db.find_costing_stats(
            company_id, financial_year_id, cost_type.value, category_id
        )
        if existing is None:
            return self.create_stats(
                company_id, financial_year_id, cost_type, category_id, months, notes
            )
        self.db.update_costing_stats(existing.id, months=_validated_months(months), notes=notes)
        logger.info("Updated costing stats %s", existing.id)
        return existing.id

    def delete_stats(self, stats_id: int) -> None:
        """Delete a costing row.

        Raises:
            NotFoundError: If the row does not exist
        """
        if self.db.get_costing_stats(stats_id) is None:
            raise NotFoundError(stats_not_found("Costing", stats_id))
        self.db.delete_costing_stats(stats_id)
        logger.info("Deleted costing stats %s", stats_id)

    def delete_by_company_and_year(self, company_id: int, financial_year_id: int) -> int:
        """Delete every costing row of a company for one year.

        Returns:
            Number of rows deleted
        """
        count = self.db.delete_costing_stats_for_year(company_id, financial_year_id)
        logger.info(
            "Deleted %d costing rows for company %s, year %s", count, company_id, financial_year_id
        )
        return count

    def summary(self, company_id: int, financial_year_id: int) -> dict[CostType, CostTypeSummary]:
        """Row count, total and per-month totals for each cost type present."""
        rows_by_type: dict[CostType, list[CostingYearlyStats]] = {}
        for stats in self.db.list_costing_stats(company_id, financial_year_id):
            rows_by_type.setdefault(stats.cost_type, []).append(stats)

        return {
            cost_type: CostTypeSummary(
                cost_type=cost_type,
                record_count=len(rows),
                total_cost=sum((r.total_amount for r in rows), ZERO),
                monthly_totals=sum_months(r.months for r in rows),
            )
            for cost_type, rows in rows_by_type.items()
        }

    def comparison(self, company_id: int, financial_year_ids: Sequence[int]) -> list[dict]:
        """Cost totals per cost type for several years.

        Returns:
            One entry per year that has data, in ID order:
            ``{"financial_year_id": id, "costs": {"direct": Decimal, ...}}``
        """
        result = []
        for financial_year_id in sorted(set(financial_year_ids)):
            rows = self.db.list_costing_stats(company_id, financial_year_id)
            if not rows:
                continue
            costs: dict[str, Decimal] = {}
            for stats in rows:
                key = stats.cost_type.value
                costs[key] = costs.get(key, ZERO) + stats.total_amount
            result.append({"financial_year_id": financial_year_id, "costs": costs})
        return result

    def copy_to_new_year(self, company_id: int, from_year_id: int, to_year_id: int) -> list[int]:
        """Copy a year's cost rows to another year with all months reset to zero.

        Rows whose key already exists in the target year are skipped.

        Returns:
            IDs of the created rows

        Raises:
            NotFoundError: If the company or either year does not exist
        """
        self._require_company(company_id)
        self._require_financial_year(from_year_id)
        self._require_financial_year(to_year_id)

        created = []
        for stats in self.db.list_costing_stats(company_id, from_year_id):
            if self.db.find_costing_stats(
                company_id, to_year_id, stats.cost_type.value, stats.category_id
            ):
                logger.debug("Skipping existing costing row for category %s", stats.category_id)
                continue
            created.append(
                self.db.create_costing_stats(
                    company_id=company_id,
                    financial_year_id=to_year_id,
                    cost_type=stats.cost_type.value,
                    category_id=stats.category_id,
                    months=normalize_months([]),
                    notes=stats.notes,
                )
            )
        logger.info(
            "Copied %d costing rows from year %s to %s for company %s",
            len(created),
            from_year_id,
            to_year_id,
            company_id,
        )
        return created

    def quarterly_costs(self, company_id: int, financial_year_id: int) -> QuarterlyCosts:
        """Direct, operational and combined quarter sums with a category breakdown.

        Raises:
            NotFoundError: If the financial year does not exist
        """
        fy = self._require_financial_year(financial_year_id)
        return self._quarterly_costs(company_id, fy)

    def quarterly_costs_by_category(self, company_id: int, financial_year_id: int) -> list[CategoryCostBreakdown]:
        """Quarter sums per cost category for one year."""
        return list(self.quarterly_costs(company_id, financial_year_id).category_breakdown)

    def quarterly_costs_all_years(self, company_id: int) -> list[QuarterlyCosts]:
        """Quarterly costs for every year with costing data, newest first."""
        year_ids = {s.financial_year_id for s in self.db.list_costing_stats(company_id=company_id)}
        years = [self.db.get_financial_year(year_id) for year_id in year_ids]
        years = sorted(
            (fy for fy in years if fy is not None),
            key=lambda fy: (fy.fy_start_year, fy.id),
            reverse=True,
        )
        return [self._quarterly_costs(company_id, fy) for fy in years]

    def cost_structure(self, company_id: int, financial_year_id: int) -> CostStructure:
        """Section totals and per-month section totals against revenue.

        Raises:
            NotFoundError: If the company or financial year does not exist
        """
        self._require_company(company_id)
        fy = self._require_financial_year(financial_year_id)

        direct_rows, operational_rows = [], []
        for stats in self.db.list_costing_stats(company_id, financial_year_id):
            target = direct_rows if stats.cost_type == CostType.DIRECT else operational_rows
            target.append(stats.months)

        revenue_total = RevenueStatsService(self.db).yearly_totals(
            company_id, financial_year_id
        ).revenue_total
        direct_total = section_total(direct_rows)
        operational_total = section_total(operational_rows)
        return CostStructure(
            financial_year_id=financial_year_id,
            month_labels=tuple(month_labels(fy)),
            direct_total=direct_total,
            operational_total=operational_total,
            direct_monthly=sum_months(direct_rows),
            operational_monthly=sum_months(operational_rows),
            revenue_total=revenue_total,
            net_profit=net_profit(revenue_total, direct_total, operational_total),
        )

    def _quarterly_costs(self, company_id: int, fy: FinancialYear) -> QuarterlyCosts:
        category_names = {c.id: c.name for c in self.db.list_cost_categories()}
        direct, operational, breakdown = [], [], []
        for stats in self.db.list_costing_stats(company_id, fy.id):
            quarters = quarterly_totals(stats.months)
            if stats.cost_type == CostType.OPERATIONAL:
                operational.append(quarters)
            else:
                direct.append(quarters)
            breakdown.append(
                CategoryCostBreakdown(
                    category_id=stats.category_id,
                    category_name=category_names.get(stats.category_id, UNCATEGORIZED_LABEL),
                    cost_type=stats.cost_type,
                    months=stats.months,
                    quarters=quarters,
                )
            )

        direct_totals = add_quarterly(*direct)
        operational_totals = add_quarterly(*operational)
        return QuarterlyCosts(
            financial_year_id=fy.id,
            financial_year_name=fy.name,
            fy_start_year=fy.fy_start_year,
            fy_end_year=fy.fy_end_year,
            start_month=fy.start_month,
            direct=direct_totals,
            operational=operational_totals,
            total=add_quarterly(direct_totals, operational_totals),
            category_breakdown=tuple(breakdown),
            quarter_months=all_quarter_month_names(fy.start_month),
        )

    def _resolve_key(
        self, company_id: int, financial_year_id: int, cost_type, category_id: Optional[int]
    ) -> CostType:
        self._require_company(company_id)
        self._require_financial_year(financial_year_id)
        category = None
        if category_id is not None:
            category = self.db.get_cost_category(category_id)
            if category is None:
                raise NotFoundError(cost_category_not_found(category_id))
        if cost_type is not None:
            return parse_cost_type(cost_type)
        return category.cost_type if category is not None else CostType.DIRECT

    def _require_company(self, company_id: int) -> None:
        if self.db.get_company(company_id) is None:
            raise NotFoundError(company_not_found(company_id))

    def _require_financial_year(self, financial_year_id: int) -> FinancialYear:
        fy = self.db.get_financial_year(financial_year_id)
        if fy is None:
            raise NotFoundError(financial_year_not_found(financial_year_id))
        return fy
