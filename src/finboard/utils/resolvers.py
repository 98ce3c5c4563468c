"""Utilities for resolving names or IDs given on the command line."""

from typing import Optional

from finboard.domain.company import CompanyService
from finboard.domain.company_account import CompanyAccountService
from finboard.domain.cost_category import CostCategoryService
from finboard.domain.errors import NotFoundError
from finboard.domain.financial_year import FinancialYearService


def _as_int(value: str | int) -> Optional[int]:
    if isinstance(value, int):
        return value
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def resolve_company(service: CompanyService, company: str | int) -> int:
    """Resolve company name or ID to company ID.

    Raises:
        NotFoundError: If no company matches
    """
    company_id = _as_int(company)
    if company_id is not None:
        if service.get_company(company_id) is None:
            raise NotFoundError(f"Company ID {company_id} not found")
        return company_id

    found = service.get_company_by_name(str(company).strip())
    if found is None:
        raise NotFoundError(f"Company '{company}' not found")
    return found.id


def resolve_financial_year(service: FinancialYearService, financial_year: str | int) -> int:
    """Resolve a financial year name ("FY 2024/25"), ID or "active" to its ID.

    Raises:
        NotFoundError: If no financial year matches
    """
    if str(financial_year).strip().lower() == "active":
        active = service.get_current_active()
        if active is None:
            raise NotFoundError("No active financial year")
        return active.id

    financial_year_id = _as_int(financial_year)
    if financial_year_id is not None:
        if service.get_financial_year(financial_year_id) is None:
            raise NotFoundError(f"Financial year ID {financial_year_id} not found")
        return financial_year_id

    found = service.get_financial_year_by_name(str(financial_year).strip())
    if found is None:
        raise NotFoundError(f"Financial year '{financial_year}' not found")
    return found.id


def resolve_account(service: CompanyAccountService, company_id: int, account: str | int) -> int:
    """Resolve an account name or ID within a company to its ID.

    Raises:
        NotFoundError: If no account of the company matches
    """
    account_id = _as_int(account)
    if account_id is not None:
        found = service.get_account(account_id)
        if found is None or found.company_id != company_id:
            raise NotFoundError(f"Account ID {account_id} not found for company {company_id}")
        return account_id

    for candidate in service.list_accounts(company_id=company_id):
        if candidate.account_name == account:
            return candidate.id
    raise NotFoundError(f"Account '{account}' not found for company {company_id}")


def resolve_cost_category(service: CostCategoryService, category: str | int) -> int:
    """Resolve a cost category name (case-insensitive) or ID to its ID.

    Raises:
        NotFoundError: If no category matches
    """
    category_id = _as_int(category)
    if category_id is not None:
        if service.get_category(category_id) is None:
            raise NotFoundError(f"Cost category ID {category_id} not found")
        return category_id

    found = service.get_by_name(str(category))
    if found is None:
        raise NotFoundError(f"Cost category '{category}' not found")
    return found.id
