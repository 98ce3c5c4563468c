"""Cost category domain service."""

import logging
from typing import Optional

from finboard.database.base import Database
from finboard.domain.entities import CostCategory as CostCategoryEntity, CostType
from finboard.domain.errors import (
    ConflictError,
    DependencyError,
    NotFoundError,
    ValidationError,
    cost_category_not_found,
    delete_blocked,
)

logger = logging.getLogger(__name__)


# Starter categories for a new database, grouped by cost structure section
DEFAULT_COST_CATEGORIES = [
    ("Raw Materials", CostType.DIRECT),
    ("Direct Labour", CostType.DIRECT),
    ("Packaging", CostType.DIRECT),
    ("Freight & Delivery", CostType.DIRECT),
    ("Subcontractors", CostType.DIRECT),
    ("Rent", CostType.OPERATIONAL),
    ("Salaries & Wages", CostType.OPERATIONAL),
    ("Utilities", CostType.OPERATIONAL),
    ("Insurance", CostType.OPERATIONAL),
    ("Marketing", CostType.OPERATIONAL),
    ("Telephone & Internet", CostType.OPERATIONAL),
    ("Professional Fees", CostType.OPERATIONAL),
    ("Bank Charges", CostType.OPERATIONAL),
]


def parse_cost_type(value) -> CostType:
    """Coerce a string or CostType to CostType.

    Raises:
        ValidationError: If the value is not a known cost type
    """
    if isinstance(value, CostType):
        return value
    try:
        return CostType(str(value).strip().lower())
    except ValueError as e:
        valid = ", ".join(t.value for t in CostType)
        raise ValidationError(f"Invalid cost type '{value}'. Valid types: {valid}") from e


class CostCategoryService:
    """Service for managing cost categories."""

    def __init__(self, db: Database):
        """Initialize cost category service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_category(
        self,
        name: str,
        cost_type=CostType.DIRECT,
        description: Optional[str] = None,
        is_active: bool = True,
    ) -> int:
        """Create a cost category.

        Args:
            name: Category name (unique, compared case-insensitively)
            cost_type: CostType or its string value
            description: Optional description
            is_active: Whether the category is offered for new rows

        Returns:
            Category ID

        Raises:
            ValidationError: If the name is blank or the cost type is invalid
            ConflictError: If a category with the same name exists
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError("Cost category name is required")
        cost_type = parse_cost_type(cost_type)
        if self.db.get_cost_category_by_name(name) is not None:
            raise ConflictError(f"Cost category '{name}' already exists")

        category_id = self.db.create_cost_category(
            name=name, cost_type=cost_type.value, description=description, is_active=is_active
        )
        logger.info("Created cost category %s (%s)", category_id, name)
        return category_id

    def get_category(self, category_id: int) -> Optional[CostCategoryEntity]:
        return self.db.get_cost_category(category_id)

    def get_by_name(self, name: str) -> Optional[CostCategoryEntity]:
        """Get category by name, ignoring case."""
        return self.db.get_cost_category_by_name(name.strip())

    def list_categories(
        self, active_only: bool = False, cost_type=None
    ) -> list[CostCategoryEntity]:
        """List categories ordered by name.

        Args:
            active_only: Only include active categories
            cost_type: Only include categories of this cost type
        """
        type_value = parse_cost_type(cost_type).value if cost_type is not None else None
        return self.db.list_cost_categories(active_only=active_only, cost_type=type_value)

    def update_category(
        self,
        category_id: int,
        name: Optional[str] = None,
        cost_type=None,
        description: Optional[str] = None,
    ) -> None:
        """Update a cost category.

        Raises:
            NotFoundError: If the category does not exist
            ValidationError: If the new name is blank or the type is invalid
            ConflictError: If another category has the new name
        """
        if self.db.get_cost_category(category_id) is None:
            raise NotFoundError(cost_category_not_found(category_id))

        if name is not None:
            name = name.strip()
            if not name:
                raise ValidationError("Cost category name is required")
            existing = self.db.get_cost_category_by_name(name)
            if existing is not None and existing.id != category_id:
                raise ConflictError(f"Cost category '{name}' already exists")

        type_value = parse_cost_type(cost_type).value if cost_type is not None else None
        self.db.update_cost_category(
            category_id, name=name, cost_type=type_value, description=description
        )
        logger.info("Updated cost category %s", category_id)

    def set_active(self, category_id: int, is_active: bool) -> None:
        """Activate or deactivate a cost category.

        Raises:
            NotFoundError: If the category does not exist
        """
        if self.db.get_cost_category(category_id) is None:
            raise NotFoundError(cost_category_not_found(category_id))
        self.db.set_cost_category_active(category_id, is_active)

    def delete_category(self, category_id: int) -> None:
        """Delete a cost category.

        Raises:
            NotFoundError: If the category does not exist
            DependencyError: If costing rows still reference it
        """
        if self.db.get_cost_category(category_id) is None:
            raise NotFoundError(cost_category_not_found(category_id))

        usage = self.db.count_cost_category_usage(category_id)
        if usage > 0:
            raise DependencyError(
                delete_blocked("cost category", category_id, {"costing row": usage})
            )

        self.db.delete_cost_category(category_id)
        logger.info("Deleted cost category %s", category_id)

    def init_defaults(self) -> tuple[int, int]:
        """Create the default categories that do not exist yet.

        Returns:
            Tuple of (created, skipped) counts
        """
        created = 0
        skipped = 0
        for name, cost_type in DEFAULT_COST_CATEGORIES:
            if self.db.get_cost_category_by_name(name) is not None:
                skipped += 1
                continue
            self.db.create_cost_category(name=name, cost_type=cost_type.value)
            created += 1
        logger.info("Default cost categories: %d created, %d skipped", created, skipped)
        return created, skipped
