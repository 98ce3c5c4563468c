"""Financial-year calendar helpers.

A financial year starts on any calendar month and may wrap into the next
calendar year (for example March 2024 to February 2025). Month positions
inside a financial year are 1-based: position 1 is the start month.
"""

from datetime import date
from typing import Any, Mapping

from dateutil.relativedelta import relativedelta

from finboard.domain.entities import FinancialYear, FinancialYearMonth
from finboard.domain.errors import ValidationError

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

MONTH_ABBREVIATIONS = tuple(name[:3] for name in MONTH_NAMES)

MIN_YEAR = 2000
MAX_YEAR = 2100


def month_sequence(
    start_month: int, end_month: int, fy_start_year: int, fy_end_year: int
) -> list[FinancialYearMonth]:
    """Generate the months of a financial year in order.

    Starts at ``start_month`` of ``fy_start_year``, wraps from December to
    January (incrementing the calendar year) and stops after ``end_month`` of
    ``fy_end_year``.

    Args:
        start_month: First month (1-12)
        end_month: Last month (1-12)
        fy_start_year: Calendar year of the first month
        fy_end_year: Calendar year of the last month

    Returns:
        List of FinancialYearMonth entries

    Raises:
        ValidationError: If a month is out of range or the end precedes the start
    """
    for label, month in (("start", start_month), ("end", end_month)):
        if not 1 <= month <= 12:
            raise ValidationError(f"Invalid {label} month {month}: expected 1-12")
    if (fy_end_year, end_month) < (fy_start_year, start_month):
        raise ValidationError("Financial year ends before it starts")

    first = date(fy_start_year, start_month, 1)
    last = date(fy_end_year, end_month, 1)

    months = []
    current = first
    while current <= last:
        months.append(
            FinancialYearMonth(
                month=current.month,
                year=current.year,
                name=f"{MONTH_NAMES[current.month - 1]} {current.year}",
            )
        )
        current += relativedelta(months=1)
    return months


def financial_year_months(fy: FinancialYear) -> list[FinancialYearMonth]:
    """Month sequence for a stored financial year."""
    return month_sequence(fy.start_month, fy.end_month, fy.fy_start_year, fy.fy_end_year)


def month_labels(fy: FinancialYear) -> list[str]:
    """Short month labels ("Mar", "Apr", ...) in financial-year order."""
    return [MONTH_ABBREVIATIONS[m.month - 1] for m in financial_year_months(fy)]


def month_names(fy: FinancialYear) -> list[str]:
    """Long month names with year ("March 2024", ...) in financial-year order."""
    return [m.name for m in financial_year_months(fy)]


def default_month_labels(start_month: int = 1) -> list[str]:
    """Twelve short labels starting at ``start_month``, without a year context."""
    return [MONTH_ABBREVIATIONS[(start_month - 1 + i) % 12] for i in range(12)]


def quarter_for_month(month: int, start_month: int) -> int:
    """Return the financial quarter (1-4) a calendar month falls in."""
    adjusted = month + 12 if month < start_month else month
    return (adjusted - start_month) // 3 + 1


def quarter_month_names(start_month: int, quarter: int) -> list[str]:
    """Full month names making up a financial quarter."""
    if not 1 <= quarter <= 4:
        raise ValidationError(f"Invalid quarter {quarter}: expected 1-4")
    offset = (quarter - 1) * 3
    return [MONTH_NAMES[(start_month - 1 + offset + i) % 12] for i in range(3)]


def all_quarter_month_names(start_month: int) -> tuple[tuple[str, ...], ...]:
    """Month names for all four quarters."""
    return tuple(tuple(quarter_month_names(start_month, q)) for q in range(1, 5))


def is_date_in_financial_year(value: date, fy: FinancialYear) -> bool:
    """Check whether a date falls within a financial year."""
    month, year = value.month, value.year
    if fy.start_month <= fy.end_month and fy.fy_start_year == fy.fy_end_year:
        return year == fy.fy_start_year and fy.start_month <= month <= fy.end_month
    # Wraps the calendar year boundary (e.g. March to February)
    return (year == fy.fy_start_year and month >= fy.start_month) or (
        year == fy.fy_end_year and month <= fy.end_month
    )


def month_position(value: date, fy: FinancialYear) -> int:
    """Return the 1-based position of a date's month inside a financial year.

    Raises:
        ValidationError: If the date lies outside the financial year
    """
    if not is_date_in_financial_year(value, fy):
        raise ValidationError(f"{value.isoformat()} is not in {fy.name}")
    return (value.year - fy.fy_start_year) * 12 + value.month - fy.start_month + 1


def generate_financial_year_name(start_year: int, end_year: int) -> str:
    """Build a display name such as "FY 2024/25"."""
    return f"FY {start_year}/{str(end_year)[-2:]}"


def _valid_month(value) -> bool:
    return isinstance(value, int) and 1 <= value <= 12


def validate_financial_year(data: Mapping[str, Any]) -> list[str]:
    """Validate raw financial year fields.

    Returns:
        List of error messages; empty when the data is valid
    """
    errors = []

    name = data.get("name")
    if not name or not str(name).strip():
        errors.append("Financial year name is required")

    start_month = data.get("start_month")
    end_month = data.get("end_month")
    for value, label in ((start_month, "start month"), (end_month, "end month")):
        if not _valid_month(value):
            errors.append(f"Valid {label} (1-12) is required")

    for key, label in (("fy_start_year", "start year"), ("fy_end_year", "end year")):
        value = data.get(key)
        if not isinstance(value, int) or not MIN_YEAR <= value <= MAX_YEAR:
            errors.append(f"Valid {label} ({MIN_YEAR}-{MAX_YEAR}) is required")

    start_year = data.get("fy_start_year")
    end_year = data.get("fy_end_year")
    if isinstance(start_year, int) and isinstance(end_year, int):
        if end_year < start_year:
            errors.append("End year must be greater than or equal to start year")
        elif (
            end_year == start_year
            and _valid_month(start_month)
            and _valid_month(end_month)
            and end_month < start_month
        ):
            errors.append("End month cannot be before start month in the same year")

    return errors
