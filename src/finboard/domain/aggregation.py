"""Monthly, quarterly and yearly arithmetic over fiscal-year values."""

from decimal import Decimal, InvalidOperation
from typing import Iterable, Optional, Sequence, Union

from finboard.domain.entities import PeriodType, QuarterlyTotals

MONTHS_PER_YEAR = 12
ZERO = Decimal("0")
HUNDRED = Decimal("100")

Number = Union[Decimal, int, float, str, None]


def to_decimal(value: Number) -> Decimal:
    """Convert a loosely typed value to Decimal; None and blanks become zero.

    Raises:
        ValueError: If the value is not numeric or not finite
    """
    if value is None:
        return ZERO
    if isinstance(value, str) and not value.strip():
        return ZERO
    if isinstance(value, Decimal):
        number = value
    else:
        try:
            # str() keeps floats like 0.1 from expanding to binary noise
            number = Decimal(str(value))
        except InvalidOperation as e:
            raise ValueError(f"Value '{value}' is not numeric") from e
    if not number.is_finite():
        raise ValueError(f"Value '{value}' is not a finite number")
    return number


def monthly_total(values: Iterable[Number]) -> Decimal:
    """Sum monthly values, treating None as zero."""
    return sum((to_decimal(v) for v in values), ZERO)


def normalize_months(values: Sequence[Number]) -> tuple[Decimal, ...]:
    """Coerce monthly values to exactly twelve Decimals.

    Missing trailing months are zero; extra values are dropped.
    """
    months = [to_decimal(v) for v in list(values)[:MONTHS_PER_YEAR]]
    months.extend([ZERO] * (MONTHS_PER_YEAR - len(months)))
    return tuple(months)


def sanitize_monthly_values(values: Sequence[Number]) -> tuple[Decimal, ...]:
    """Normalize monthly values, replacing non-numeric, non-finite or negative
    entries with zero."""
    result = []
    for value in list(values)[:MONTHS_PER_YEAR]:
        try:
            number = to_decimal(value)
        except ValueError:
            number = ZERO
        if number < 0:
            number = ZERO
        result.append(number)
    result.extend([ZERO] * (MONTHS_PER_YEAR - len(result)))
    return tuple(result)


def quarterly_totals(values: Sequence[Number]) -> QuarterlyTotals:
    """Sum twelve fiscal-year months into four quarters and a grand total.

    Quarters are positional (months 1-3, 4-6, 7-9, 10-12 of the financial
    year), so the fiscal start month never needs rotating here.

    Args:
        values: Twelve monthly values; None counts as zero

    Returns:
        QuarterlyTotals whose total equals q1 + q2 + q3 + q4
    """
    months = normalize_months(values)
    q1, q2, q3, q4 = (sum(months[i:i + 3], ZERO) for i in range(0, MONTHS_PER_YEAR, 3))
    return QuarterlyTotals(q1=q1, q2=q2, q3=q3, q4=q4, total=q1 + q2 + q3 + q4)


def add_quarterly(*totals: QuarterlyTotals) -> QuarterlyTotals:
    """Add several QuarterlyTotals quarter by quarter."""
    q1 = sum((t.q1 for t in totals), ZERO)
    q2 = sum((t.q2 for t in totals), ZERO)
    q3 = sum((t.q3 for t in totals), ZERO)
    q4 = sum((t.q4 for t in totals), ZERO)
    return QuarterlyTotals(q1=q1, q2=q2, q3=q3, q4=q4, total=q1 + q2 + q3 + q4)


def sum_months(rows: Iterable[Sequence[Number]]) -> tuple[Decimal, ...]:
    """Add monthly rows position by position."""
    totals = [ZERO] * MONTHS_PER_YEAR
    for row in rows:
        for i, value in enumerate(normalize_months(row)):
            totals[i] += value
    return tuple(totals)


def section_month_total(rows: Iterable[Sequence[Number]], month_index: int) -> Decimal:
    """Total of one month position across several rows."""
    if not 0 <= month_index < MONTHS_PER_YEAR:
        raise ValueError(f"Month index {month_index} out of range")
    return sum_months(rows)[month_index]


def section_total(rows: Iterable[Sequence[Number]]) -> Decimal:
    """Grand total across several monthly rows."""
    return sum(sum_months(rows), ZERO)


def metric_record_total(
    q1: Number,
    q2: Number,
    q3: Number,
    q4: Number,
    total: Number,
    period_type: PeriodType,
) -> Optional[Decimal]:
    """Total for a metric record.

    Yearly metrics carry a directly entered total. Other period types sum the
    quarters that have values; with no quarter values the total is None.
    """
    if period_type == PeriodType.YEARLY:
        return None if total is None else to_decimal(total)

    quarters = [q for q in (q1, q2, q3, q4) if q is not None]
    if not quarters:
        return None
    return monthly_total(quarters)


def growth_rate(current: Number, previous: Number) -> Decimal:
    """Percentage change from ``previous`` to ``current``."""
    current_value = to_decimal(current)
    previous_value = to_decimal(previous)
    if previous_value == 0:
        return HUNDRED if current_value > 0 else ZERO
    return (current_value - previous_value) / previous_value * HUNDRED


def percentage(part: Number, whole: Number) -> Decimal:
    """``part`` as a percentage of ``whole``; zero when ``whole`` is not positive."""
    whole_value = to_decimal(whole)
    if whole_value <= 0:
        return ZERO
    return to_decimal(part) / whole_value * HUNDRED


def net_profit(revenue: Number, direct_costs: Number, operational_costs: Number) -> Decimal:
    """Revenue less direct and operational costs."""
    return to_decimal(revenue) - to_decimal(direct_costs) - to_decimal(operational_costs)


def performance_indicators(revenue_total: Number, expense_total: Number) -> dict[str, Decimal]:
    """Profit margin, expense ratio and net profitability for a year."""
    revenue = to_decimal(revenue_total)
    expenses = to_decimal(expense_total)
    net = revenue - expenses
    return {
        "profit_margin": percentage(net, revenue),
        "expense_ratio": percentage(expenses, revenue),
        "net_profitability": net,
    }


def round_money(value: Decimal) -> Decimal:
    """Round to cents."""
    return value.quantize(Decimal("0.01"))
