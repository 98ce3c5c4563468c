"""Financial year domain service."""

import logging
from typing import Optional

from finboard.database.base import Database
from finboard.domain.entities import (
    FinancialYear as FinancialYearEntity,
    FinancialYearMonth,
    FinancialYearSummary,
)
from finboard.domain.errors import (
    ConflictError,
    DependencyError,
    NotFoundError,
    ValidationError,
    delete_blocked,
    financial_year_conflict,
    financial_year_not_found,
)
from finboard.domain.fiscal import (
    financial_year_months,
    generate_financial_year_name,
    month_sequence,
    validate_financial_year,
)

logger = logging.getLogger(__name__)


class FinancialYearService:
    """Service for managing financial years."""

    def __init__(self, db: Database):
        """Initialize financial year service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_financial_year(
        self,
        fy_start_year: int,
        fy_end_year: int,
        start_month: int = 3,
        end_month: int = 2,
        name: Optional[str] = None,
        is_active: bool = False,
        description: Optional[str] = None,
    ) -> int:
        """Create a financial year.

        Args:
            fy_start_year: Calendar year of the first month
            fy_end_year: Calendar year of the last month
            start_month: First month (1-12), March by default
            end_month: Last month (1-12), February by default
            name: Display name; generated as "FY 2024/25" when omitted
            is_active: Make this the only active financial year
            description: Optional description

        Returns:
            Financial year ID

        Raises:
            ValidationError: If the fields are invalid
            ConflictError: If a year with the same start and end years exists
        """
        if name is None or not name.strip():
            name = generate_financial_year_name(fy_start_year, fy_end_year)

        self._validate(name, start_month, end_month, fy_start_year, fy_end_year)

        if self.db.get_financial_year_by_period(fy_start_year, fy_end_year) is not None:
            raise ConflictError(financial_year_conflict(fy_start_year, fy_end_year))

        financial_year_id = self.db.create_financial_year(
            name=name.strip(),
            start_month=start_month,
            end_month=end_month,
            fy_start_year=fy_start_year,
            fy_end_year=fy_end_year,
            is_active=is_active,
            description=description,
        )
        logger.info("Created financial year %s (%s)", financial_year_id, name)
        return financial_year_id

    def get_financial_year(self, financial_year_id: int) -> Optional[FinancialYearEntity]:
        """Get financial year by ID.

        Returns:
            Financial year entity or None if not found
        """
        return self.db.get_financial_year(financial_year_id)

    def get_financial_year_by_name(self, name: str) -> Optional[FinancialYearEntity]:
        """Get financial year by display name."""
        return self.db.get_financial_year_by_name(name)

    def list_financial_years(
        self,
        is_active: Optional[bool] = None,
        year: Optional[int] = None,
        start_year: Optional[int] = None,
        end_year: Optional[int] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> list[FinancialYearEntity]:
        """List financial years.

        Args:
            is_active: Only active (True) or inactive (False) years
            year: Years whose start or end year equals this value
            start_year: Years starting on or after this year
            end_year: Years ending on or before this year
            limit: Maximum number of results
            offset: Results to skip (only applied with limit)

        Returns:
            List of financial year entities ordered by ID
        """
        return self.db.list_financial_years(
            is_active=is_active,
            year=year,
            start_year=start_year,
            end_year=end_year,
            limit=limit,
            offset=offset,
        )

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
        """Update a financial year.

        Fields left as None keep their current value. The merged record is
        validated as a whole.

        Raises:
            NotFoundError: If the financial year does not exist
            ValidationError: If the merged fields are invalid
            ConflictError: If another year already covers the new period
        """
        current = self.db.get_financial_year(financial_year_id)
        if current is None:
            raise NotFoundError(financial_year_not_found(financial_year_id))

        merged_name = name if name is not None else current.name
        merged_start_month = start_month if start_month is not None else current.start_month
        merged_end_month = end_month if end_month is not None else current.end_month
        merged_start_year = fy_start_year if fy_start_year is not None else current.fy_start_year
        merged_end_year = fy_end_year if fy_end_year is not None else current.fy_end_year

        self._validate(
            merged_name, merged_start_month, merged_end_month, merged_start_year, merged_end_year
        )

        existing = self.db.get_financial_year_by_period(merged_start_year, merged_end_year)
        if existing is not None and existing.id != financial_year_id:
            raise ConflictError(financial_year_conflict(merged_start_year, merged_end_year))

        self.db.update_financial_year(
            financial_year_id,
            name=name.strip() if name is not None else None,
            start_month=start_month,
            end_month=end_month,
            fy_start_year=fy_start_year,
            fy_end_year=fy_end_year,
            description=description,
        )
        logger.info("Updated financial year %s", financial_year_id)

    def delete_financial_year(self, financial_year_id: int) -> None:
        """Delete a financial year.

        Raises:
            NotFoundError: If the financial year does not exist
            DependencyError: If revenue or costing rows still reference it
        """
        if self.db.get_financial_year(financial_year_id) is None:
            raise NotFoundError(financial_year_not_found(financial_year_id))

        dependents = self.db.count_financial_year_stats(financial_year_id)
        if any(dependents.values()):
            raise DependencyError(delete_blocked("financial year", financial_year_id, dependents))

        self.db.delete_financial_year(financial_year_id)
        logger.info("Deleted financial year %s", financial_year_id)

    def set_active(self, financial_year_id: int) -> None:
        """Make a financial year the only active one.

        Raises:
            NotFoundError: If the financial year does not exist
        """
        if self.db.get_financial_year(financial_year_id) is None:
            raise NotFoundError(financial_year_not_found(financial_year_id))
        self.db.set_active_financial_year(financial_year_id)
        logger.info("Activated financial year %s", financial_year_id)

    def list_active(self) -> list[FinancialYearEntity]:
        """List active financial years."""
        return self.db.list_financial_years(is_active=True)

    def get_current_active(self) -> Optional[FinancialYearEntity]:
        """Return the first active financial year, or None."""
        active = self.list_active()
        return active[0] if active else None

    def months_in_year(self, financial_year_id: int) -> list[FinancialYearMonth]:
        """Month sequence of a stored financial year.

        Raises:
            NotFoundError: If the financial year does not exist
        """
        fy = self.db.get_financial_year(financial_year_id)
        if fy is None:
            raise NotFoundError(financial_year_not_found(financial_year_id))
        return financial_year_months(fy)

    def summary(self) -> FinancialYearSummary:
        """Counts and year range over all financial years."""
        years = self.db.list_financial_years()
        return FinancialYearSummary(
            total_years=len(years),
            active_years=sum(1 for fy in years if fy.is_active),
            earliest_year=min((fy.fy_start_year for fy in years), default=None),
            latest_year=max((fy.fy_end_year for fy in years), default=None),
        )

    def options(self) -> list[dict]:
        """Select options for financial years, newest first."""
        years = sorted(
            self.db.list_financial_years(),
            key=lambda fy: (fy.fy_start_year, fy.id),
            reverse=True,
        )
        return [{"value": fy.id, "label": fy.name, "is_active": fy.is_active} for fy in years]

    def _validate(
        self, name: str, start_month: int, end_month: int, fy_start_year: int, fy_end_year: int
    ) -> None:
        errors = validate_financial_year(
            {
                "name": name,
                "start_month": start_month,
                "end_month": end_month,
                "fy_start_year": fy_start_year,
                "fy_end_year": fy_end_year,
            }
        )
        if errors:
            raise ValidationError("; ".join(errors))
        # Ensures the end month comes after the start month once years are applied
        month_sequence(start_month, end_month, fy_start_year, fy_end_year)
