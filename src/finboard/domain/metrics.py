"""Metrics domain service: groups, types and yearly records."""

import logging
from decimal import Decimal
from typing import Any, Mapping, Optional, Sequence

from finboard.database.base import Database
from finboard.domain.aggregation import metric_record_total, to_decimal
from finboard.domain.entities import (
    MetricGroup,
    MetricGroupNode,
    MetricRecord,
    MetricType,
    MetricTypeNode,
    PeriodType,
)
from finboard.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    company_not_found,
    metric_group_not_found,
    metric_record_not_found,
    metric_type_not_found,
)

logger = logging.getLogger(__name__)

RECORD_FIELDS = ("year", "q1", "q2", "q3", "q4", "total", "margin_pct", "notes", "unit")


def parse_period_type(value) -> PeriodType:
    """Coerce a string or PeriodType to PeriodType.

    Raises:
        ValidationError: If the value is not a known period type
    """
    if isinstance(value, PeriodType):
        return value
    try:
        return PeriodType(str(value).strip().upper())
    except ValueError as e:
        valid = ", ".join(t.value for t in PeriodType)
        raise ValidationError(f"Invalid period type '{value}'. Valid types: {valid}") from e


def _optional_decimal(value) -> Optional[Decimal]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    try:
        return to_decimal(value)
    except ValueError as e:
        raise ValidationError(str(e)) from e


class MetricsService:
    """Service for the metric group / type / record hierarchy."""

    def __init__(self, db: Database):
        """Initialize metrics service.

        Args:
            db: Database instance
        """
        self.db = db

    # Groups
    def create_group(
        self,
        code: str,
        name: str,
        description: Optional[str] = None,
        show_total: bool = True,
        show_margin: bool = False,
        graph_color: Optional[str] = None,
        order_no: Optional[int] = None,
    ) -> int:
        """Create a metric group.

        Args:
            code: Unique group code (e.g. "REVENUE")
            name: Display name
            description: Optional description
            show_total: Whether totals are shown for the group
            show_margin: Whether margins are shown for the group
            graph_color: Optional chart color
            order_no: Display position; appended after existing groups when None

        Returns:
            Group ID

        Raises:
            ValidationError: If code or name is blank
            ConflictError: If the code is already used
        """
        code, name = self._require_code_and_name(code, name)
        if self.db.get_metric_group_by_code(code) is not None:
            raise ConflictError(f"Metric group code '{code}' already exists")

        if order_no is None:
            groups = self.db.list_metric_groups()
            order_no = max((g.order_no for g in groups), default=0) + 1

        group_id = self.db.create_metric_group(
            code=code,
            name=name,
            description=description,
            show_total=show_total,
            show_margin=show_margin,
            graph_color=graph_color,
            order_no=order_no,
        )
        logger.info("Created metric group %s (%s)", group_id, code)
        return group_id

    def get_group(self, group_id: int) -> Optional[MetricGroup]:
        return self.db.get_metric_group(group_id)

    def get_group_by_code(self, code: str) -> Optional[MetricGroup]:
        return self.db.get_metric_group_by_code(code.strip().upper())

    def list_groups(self) -> list[MetricGroup]:
        """List groups in display order."""
        return self.db.list_metric_groups()

    def update_group(
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
        """Update a metric group.

        Raises:
            NotFoundError: If the group does not exist
            ConflictError: If the new code belongs to another group
        """
        if self.db.get_metric_group(group_id) is None:
            raise NotFoundError(metric_group_not_found(group_id))
        if code is not None:
            code = code.strip().upper()
            existing = self.db.get_metric_group_by_code(code)
            if existing is not None and existing.id != group_id:
                raise ConflictError(f"Metric group code '{code}' already exists")

        self.db.update_metric_group(
            group_id,
            code=code,
            name=name,
            description=description,
            show_total=show_total,
            show_margin=show_margin,
            graph_color=graph_color,
            order_no=order_no,
        )
        logger.info("Updated metric group %s", group_id)

    def delete_group(self, group_id: int) -> None:
        """Delete a group together with its types and their records.

        Raises:
            NotFoundError: If the group does not exist
        """
        if self.db.get_metric_group(group_id) is None:
            raise NotFoundError(metric_group_not_found(group_id))
        self.db.delete_metric_group(group_id)
        logger.info("Deleted metric group %s", group_id)

    def reorder_groups(self, group_ids: Sequence[int]) -> None:
        """Assign order numbers 1..n following the given ID order.

        Raises:
            NotFoundError: If any group does not exist
        """
        for group_id in group_ids:
            if self.db.get_metric_group(group_id) is None:
                raise NotFoundError(metric_group_not_found(group_id))
        for position, group_id in enumerate(group_ids, start=1):
            self.db.update_metric_group(group_id, order_no=position)

    # Types
    def create_type(
        self,
        group_id: int,
        code: str,
        name: str,
        description: Optional[str] = None,
        unit: str = "ZAR",
        show_total: bool = True,
        show_margin: bool = False,
        graph_color: Optional[str] = None,
        period_type=PeriodType.QUARTERLY,
    ) -> int:
        """Create a metric type inside a group.

        Returns:
            Type ID

        Raises:
            NotFoundError: If the group does not exist
            ValidationError: If code, name or period type is invalid
            ConflictError: If the code is already used
        """
        if self.db.get_metric_group(group_id) is None:
            raise NotFoundError(metric_group_not_found(group_id))
        code, name = self._require_code_and_name(code, name)
        period_type = parse_period_type(period_type)
        if self.db.get_metric_type_by_code(code) is not None:
            raise ConflictError(f"Metric type code '{code}' already exists")

        type_id = self.db.create_metric_type(
            group_id=group_id,
            code=code,
            name=name,
            description=description,
            unit=unit or "ZAR",
            show_total=show_total,
            show_margin=show_margin,
            graph_color=graph_color,
            period_type=period_type.value,
        )
        logger.info("Created metric type %s (%s) in group %s", type_id, code, group_id)
        return type_id

    def get_type(self, type_id: int) -> Optional[MetricType]:
        return self.db.get_metric_type(type_id)

    def get_type_by_code(self, code: str) -> Optional[MetricType]:
        return self.db.get_metric_type_by_code(code.strip().upper())

    def list_types(self, group_id: Optional[int] = None) -> list[MetricType]:
        return self.db.list_metric_types(group_id=group_id)

    def update_type(
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
        period_type=None,
    ) -> None:
        """Update a metric type.

        Raises:
            NotFoundError: If the type or the new group does not exist
            ValidationError: If the period type is invalid
            ConflictError: If the new code belongs to another type
        """
        if self.db.get_metric_type(type_id) is None:
            raise NotFoundError(metric_type_not_found(type_id))
        if group_id is not None and self.db.get_metric_group(group_id) is None:
            raise NotFoundError(metric_group_not_found(group_id))
        if code is not None:
            code = code.strip().upper()
            existing = self.db.get_metric_type_by_code(code)
            if existing is not None and existing.id != type_id:
                raise ConflictError(f"Metric type code '{code}' already exists")
        period_value = parse_period_type(period_type).value if period_type is not None else None

        self.db.update_metric_type(
            type_id,
            group_id=group_id,
            code=code,
            name=name,
            description=description,
            unit=unit,
            show_total=show_total,
            show_margin=show_margin,
            graph_color=graph_color,
            period_type=period_value,
        )
        logger.info("Updated metric type %s", type_id)

    def delete_type(self, type_id: int) -> None:
        """Delete a metric type and its records.

        Raises:
            NotFoundError: If the type does not exist
        """
        if self.db.get_metric_type(type_id) is None:
            raise NotFoundError(metric_type_not_found(type_id))
        self.db.delete_metric_type(type_id)
        logger.info("Deleted metric type %s", type_id)

    # Records
    def create_record(
        self,
        metric_type_id: int,
        company_id: int,
        year: int,
        q1=None,
        q2=None,
        q3=None,
        q4=None,
        total=None,
        margin_pct=None,
        notes: Optional[str] = None,
        unit: Optional[str] = None,
    ) -> int:
        """Create a yearly record for a metric type and company.

        For YEARLY metric types the entered total is kept and quarters are
        cleared; for other period types the total is the sum of the entered
        quarters.

        Returns:
            Record ID

        Raises:
            NotFoundError: If the metric type or company does not exist
            ValidationError: If a value is not numeric
            ConflictError: If a record already exists for that year
        """
        metric_type = self.db.get_metric_type(metric_type_id)
        if metric_type is None:
            raise NotFoundError(metric_type_not_found(metric_type_id))
        if self.db.get_company(company_id) is None:
            raise NotFoundError(company_not_found(company_id))
        if self.db.find_metric_record(metric_type_id, company_id, year) is not None:
            raise ConflictError(
                f"A {metric_type.code} record for {year} already exists for company {company_id}"
            )

        values = self._normalize_record_values(
            metric_type,
            {
                "year": year,
                "q1": q1,
                "q2": q2,
                "q3": q3,
                "q4": q4,
                "total": total,
                "margin_pct": margin_pct,
                "notes": notes,
                "unit": unit or metric_type.unit,
            },
        )
        record_id = self.db.create_metric_record(
            metric_type_id=metric_type_id, company_id=company_id, **values
        )
        logger.info(
            "Created metric record %s (%s, company %s, %s)",
            record_id,
            metric_type.code,
            company_id,
            year,
        )
        return record_id

    def get_record(self, record_id: int) -> Optional[MetricRecord]:
        return self.db.get_metric_record(record_id)

    def list_records(
        self,
        metric_type_id: Optional[int] = None,
        company_id: Optional[int] = None,
        year: Optional[int] = None,
    ) -> list[MetricRecord]:
        """List records, newest year first."""
        return self.db.list_metric_records(
            metric_type_id=metric_type_id, company_id=company_id, year=year
        )

    def update_record(self, record_id: int, changes: Mapping[str, Any]) -> MetricRecord:
        """Update a metric record.

        Only keys present in ``changes`` are touched; an explicit None clears a
        value. The total is re-derived from the merged values.

        Args:
            record_id: Record ID
            changes: Mapping of field name to new value; allowed keys are
                year, q1-q4, total, margin_pct, notes and unit

        Returns:
            The updated record

        Raises:
            NotFoundError: If the record does not exist
            ValidationError: If an unknown field or non-numeric value is given
        """
        record = self.db.get_metric_record(record_id)
        if record is None:
            raise NotFoundError(metric_record_not_found(record_id))
        unknown = set(changes) - set(RECORD_FIELDS)
        if unknown:
            raise ValidationError(f"Unknown metric record fields: {', '.join(sorted(unknown))}")

        merged = {field: getattr(record, field) for field in RECORD_FIELDS}
        merged.update(changes)
        metric_type = self.db.get_metric_type(record.metric_type_id)
        values = self._normalize_record_values(metric_type, merged)

        self.db.replace_metric_record_values(record_id, **values)
        logger.info("Updated metric record %s", record_id)
        return self.db.get_metric_record(record_id)

    def delete_record(self, record_id: int) -> None:
        """Delete a metric record.

        Raises:
            NotFoundError: If the record does not exist
        """
        if self.db.get_metric_record(record_id) is None:
            raise NotFoundError(metric_record_not_found(record_id))
        self.db.delete_metric_record(record_id)
        logger.info("Deleted metric record %s", record_id)

    def full_metrics(self, company_id: int, year: Optional[int] = None) -> list[MetricGroupNode]:
        """Whole hierarchy for a company: groups, their types, their records.

        Groups follow display order; types are ordered by name and records by
        year, newest first.
        """
        records = self.db.list_metric_records(company_id=company_id, year=year)
        records_by_type: dict[int, list[MetricRecord]] = {}
        for record in records:
            records_by_type.setdefault(record.metric_type_id, []).append(record)

        hierarchy = []
        for group in self.db.list_metric_groups():
            types = tuple(
                MetricTypeNode(type=metric_type, records=tuple(records_by_type.get(metric_type.id, [])))
                for metric_type in self.db.list_metric_types(group_id=group.id)
            )
            hierarchy.append(MetricGroupNode(group=group, types=types))
        return hierarchy

    def _require_code_and_name(self, code: str, name: str) -> tuple[str, str]:
        code = (code or "").strip().upper()
        name = (name or "").strip()
        if not code:
            raise ValidationError("Code is required")
        if not name:
            raise ValidationError("Name is required")
        return code, name

    def _normalize_record_values(self, metric_type: MetricType, values: dict) -> dict:
        quarters = [_optional_decimal(values.get(q)) for q in ("q1", "q2", "q3", "q4")]
        entered_total = _optional_decimal(values.get("total"))
        if metric_type.period_type == PeriodType.YEARLY:
            quarters = [None, None, None, None]
        total = metric_record_total(*quarters, entered_total, metric_type.period_type)
        q1, q2, q3, q4 = quarters
        return {
            "year": int(values["year"]),
            "q1": q1,
            "q2": q2,
            "q3": q3,
            "q4": q4,
            "total": total,
            "margin_pct": _optional_decimal(values.get("margin_pct")),
            "notes": values.get("notes"),
            "unit": values.get("unit") or metric_type.unit,
        }
