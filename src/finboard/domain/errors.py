"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class DependencyError(DomainError):
    """Operation blocked due to dependent domain data."""


def financial_year_not_found(financial_year_id: int) -> str:
    """Return message for missing financial year."""
    return f"Financial year {financial_year_id} not found"


def financial_year_conflict(start_year: int, end_year: int) -> str:
    """Return message for a duplicate financial year period."""
    return f"A financial year covering {start_year}/{end_year} already exists"


def company_not_found(company_id: int) -> str:
    """Return message for missing company."""
    return f"Company {company_id} not found"


def industry_not_found(industry_id: int) -> str:
    """Return message for missing industry."""
    return f"Industry {industry_id} not found"


def account_not_found(account_id: int) -> str:
    """Return message for missing company account."""
    return f"Account {account_id} not found"


def account_name_conflict(account_name: str) -> str:
    """Return message for a duplicate account name within a company."""
    return f"An account named '{account_name}' already exists for this company"


def cost_category_not_found(category_id: int) -> str:
    """Return message for missing cost category."""
    return f"Cost category {category_id} not found"


def metric_group_not_found(group_id: int) -> str:
    """Return message for missing metric group."""
    return f"Metric group {group_id} not found"


def metric_type_not_found(type_id: int) -> str:
    """Return message for missing metric type."""
    return f"Metric type {type_id} not found"


def metric_record_not_found(record_id: int) -> str:
    """Return message for missing metric record."""
    return f"Metric record {record_id} not found"


def stats_not_found(kind: str, stats_id: int) -> str:
    """Return message for a missing yearly stats row."""
    return f"{kind} stats {stats_id} not found"


def delete_blocked(entity: str, entity_id: int, dependents: dict[str, int]) -> str:
    """Return message when an entity still has dependent rows."""
    parts = [
        f"{count} {name}{'s' if count != 1 else ''}"
        for name, count in dependents.items()
        if count > 0
    ]
    return (
        f"Cannot delete {entity} {entity_id}: it has {', '.join(parts)}. "
        "Please reassign or delete them first."
    )
