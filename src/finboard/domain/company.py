"""Company and industry domain services."""

import logging
from decimal import Decimal
from typing import Optional

from finboard.database.base import Database
from finboard.domain.entities import Company as CompanyEntity, Industry as IndustryEntity
from finboard.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    industry_not_found,
)

logger = logging.getLogger(__name__)


class IndustryService:
    """Service for managing industries."""

    def __init__(self, db: Database):
        self.db = db

    def create_industry(self, name: str, parent_id: Optional[int] = None) -> int:
        """Create an industry.

        Args:
            name: Industry name
            parent_id: Optional parent (sector) industry ID

        Returns:
            Industry ID

        Raises:
            ValidationError: If the name is blank
            ConflictError: If an industry with the same name exists
            NotFoundError: If the parent does not exist
        """
        name = name.strip()
        if not name:
            raise ValidationError("Industry name is required")
        if self.db.get_industry_by_name(name) is not None:
            raise ConflictError(f"Industry '{name}' already exists")
        if parent_id is not None and self.db.get_industry(parent_id) is None:
            raise NotFoundError(industry_not_found(parent_id))

        industry_id = self.db.create_industry(name=name, parent_id=parent_id)
        logger.info("Created industry %s (%s)", industry_id, name)
        return industry_id

    def get_industry(self, industry_id: int) -> Optional[IndustryEntity]:
        return self.db.get_industry(industry_id)

    def get_industry_by_name(self, name: str) -> Optional[IndustryEntity]:
        return self.db.get_industry_by_name(name)

    def list_industries(self) -> list[IndustryEntity]:
        return self.db.list_industries()


class CompanyService:
    """Service for managing companies."""

    def __init__(self, db: Database):
        self.db = db

    def create_company(
        self,
        name: str,
        industry_id: Optional[int] = None,
        turnover_actual: Optional[Decimal] = None,
        permanent_employees: int = 0,
        temporary_employees: int = 0,
    ) -> int:
        """Create a company.

        Args:
            name: Company name
            industry_id: Optional industry ID
            turnover_actual: Reported annual turnover
            permanent_employees: Permanent headcount
            temporary_employees: Temporary headcount

        Returns:
            Company ID

        Raises:
            ValidationError: If the name is blank or headcounts are negative
            ConflictError: If a company with the same name exists
            NotFoundError: If the industry does not exist
        """
        name = name.strip()
        if not name:
            raise ValidationError("Company name is required")
        if permanent_employees < 0 or temporary_employees < 0:
            raise ValidationError("Employee counts cannot be negative")
        if self.db.get_company_by_name(name) is not None:
            raise ConflictError(f"Company '{name}' already exists")
        if industry_id is not None and self.db.get_industry(industry_id) is None:
            raise NotFoundError(industry_not_found(industry_id))

        company_id = self.db.create_company(
            name=name,
            industry_id=industry_id,
            turnover_actual=turnover_actual,
            permanent_employees=permanent_employees,
            temporary_employees=temporary_employees,
        )
        logger.info("Created company %s (%s)", company_id, name)
        return company_id

    def get_company(self, company_id: int) -> Optional[CompanyEntity]:
        return self.db.get_company(company_id)

    def get_company_by_name(self, name: str) -> Optional[CompanyEntity]:
        return self.db.get_company_by_name(name)

    def list_companies(self, industry_id: Optional[int] = None) -> list[CompanyEntity]:
        """List companies, optionally only those in one industry."""
        return self.db.list_companies(industry_id=industry_id)
