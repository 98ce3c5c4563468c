"""Company account domain service."""

import logging
from typing import Optional

from finboard.database.base import Database
from finboard.domain.entities import (
    AccountType,
    CompanyAccount as CompanyAccountEntity,
    CompanyAccountSummary,
)
from finboard.domain.errors import (
    ConflictError,
    DependencyError,
    NotFoundError,
    ValidationError,
    account_name_conflict,
    account_not_found,
    company_not_found,
    delete_blocked,
)

logger = logging.getLogger(__name__)


def parse_account_type(value) -> AccountType:
    """Coerce a string or AccountType to AccountType.

    Raises:
        ValidationError: If the value is not a known account type
    """
    if isinstance(value, AccountType):
        return value
    try:
        return AccountType(str(value).strip().lower())
    except ValueError as e:
        valid = ", ".join(t.value for t in AccountType)
        raise ValidationError(f"Invalid account type '{value}'. Valid types: {valid}") from e


class CompanyAccountService:
    """Service for managing company revenue and expense accounts."""

    def __init__(self, db: Database):
        """Initialize company account service.

        Args:
            db: Database instance
        """
        self.db = db

    @staticmethod
    def valid_types() -> list[AccountType]:
        """Account types an account may have."""
        return list(AccountType)

    def create_account(
        self,
        company_id: int,
        account_name: str,
        account_type=AccountType.DOMESTIC_REVENUE,
        description: Optional[str] = None,
        account_number: Optional[str] = None,
        is_active: bool = True,
    ) -> int:
        """Create a company account.

        Args:
            company_id: Owning company ID
            account_name: Account name, unique within the company
            account_type: AccountType or its string value
            description: Optional description
            account_number: Optional external account number
            is_active: Whether the account is active

        Returns:
            Account ID

        Raises:
            NotFoundError: If the company does not exist
            ValidationError: If the name is blank or the type is invalid
            ConflictError: If the company already has an account with this name
        """
        if self.db.get_company(company_id) is None:
            raise NotFoundError(company_not_found(company_id))

        account_name = (account_name or "").strip()
        if not account_name:
            raise ValidationError("Account name is required")
        account_type = parse_account_type(account_type)

        for account in self.db.list_company_accounts(company_id=company_id):
            if account.account_name == account_name:
                raise ConflictError(account_name_conflict(account_name))

        account_id = self.db.create_company_account(
            company_id=company_id,
            account_name=account_name,
            account_type=account_type.value,
            description=description,
            account_number=account_number,
            is_active=is_active,
        )
        logger.info("Created account %s (%s) for company %s", account_id, account_name, company_id)
        return account_id

    def get_account(self, account_id: int) -> Optional[CompanyAccountEntity]:
        """Get account by ID.

        Returns:
            Account entity or None if not found
        """
        return self.db.get_company_account(account_id)

    def list_accounts(
        self,
        company_id: Optional[int] = None,
        account_type=None,
        is_active: Optional[bool] = None,
    ) -> list[CompanyAccountEntity]:
        """List accounts filtered by company, type and active flag."""
        type_value = parse_account_type(account_type).value if account_type is not None else None
        return self.db.list_company_accounts(
            company_id=company_id, account_type=type_value, is_active=is_active
        )

    def update_account(
        self,
        account_id: int,
        account_name: Optional[str] = None,
        account_type=None,
        description: Optional[str] = None,
        account_number: Optional[str] = None,
    ) -> None:
        """Update an account.

        Raises:
            NotFoundError: If the account does not exist
            ValidationError: If the new name is blank or the type is invalid
            ConflictError: If another account of the company has the new name
        """
        account = self.db.get_company_account(account_id)
        if account is None:
            raise NotFoundError(account_not_found(account_id))

        if account_name is not None:
            account_name = account_name.strip()
            if not account_name:
                raise ValidationError("Account name is required")
            for other in self.db.list_company_accounts(company_id=account.company_id):
                if other.id != account_id and other.account_name == account_name:
                    raise ConflictError(account_name_conflict(account_name))

        type_value = parse_account_type(account_type).value if account_type is not None else None

        self.db.update_company_account(
            account_id,
            account_name=account_name,
            account_type=type_value,
            description=description,
            account_number=account_number,
        )
        logger.info("Updated account %s", account_id)

    def set_active(self, account_id: int, is_active: bool) -> None:
        """Activate or deactivate an account.

        Raises:
            NotFoundError: If the account does not exist
        """
        if self.db.get_company_account(account_id) is None:
            raise NotFoundError(account_not_found(account_id))
        self.db.set_company_account_active(account_id, is_active)
        logger.info("Set account %s active=%s", account_id, is_active)

    def delete_account(self, account_id: int) -> None:
        """Delete an account.

        Raises:
            NotFoundError: If the account does not exist
            DependencyError: If revenue rows still reference the account
        """
        if self.db.get_company_account(account_id) is None:
            raise NotFoundError(account_not_found(account_id))

        stats_count = self.db.count_account_stats(account_id)
        if stats_count > 0:
            raise DependencyError(
                delete_blocked("account", account_id, {"revenue row": stats_count})
            )

        self.db.delete_company_account(account_id)
        logger.info("Deleted account %s", account_id)

    def summary(self, company_id: Optional[int] = None) -> CompanyAccountSummary:
        """Account counts by status and type."""
        accounts = self.db.list_company_accounts(company_id=company_id)
        by_type = {account_type: 0 for account_type in AccountType}
        for account in accounts:
            by_type[account.account_type] += 1
        active = sum(1 for a in accounts if a.is_active)
        return CompanyAccountSummary(
            total_accounts=len(accounts),
            active_accounts=active,
            inactive_accounts=len(accounts) - active,
            by_type=by_type,
        )
