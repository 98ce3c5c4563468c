"""Date parsing utilities."""

from datetime import date, timedelta
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports absolute dates ("2024-03-15", "15 March 2024") and a few
    relative forms: "today", "yesterday", "tomorrow", and "last", "this" or
    "next" followed by "month" or "year" (first day of that period).

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }
    if date_str in relative_dates:
        return relative_dates[date_str]

    offsets = {"last": -1, "this": 0, "next": 1}
    word, _, period = date_str.partition(" ")
    if word in offsets and period in ("month", "year"):
        if period == "month":
            return today.replace(day=1) + relativedelta(months=offsets[word])
        return today.replace(month=1, day=1) + relativedelta(years=offsets[word])

    try:
        return date_parser.parse(date_str).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}") from e
