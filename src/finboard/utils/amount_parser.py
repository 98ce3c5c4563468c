"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles various formats:
    - "1500.50"
    - "R1500.50" or "R 1 500.50" (rand, with space grouping)
    - "-1500"
    - "1,234.56"
    - "(123.45)" (negative in parentheses)

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    amount_str = amount_str.strip()

    # Handle parentheses notation (negative)
    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1]

    # Currency markers and grouping separators
    amount_str = re.sub(r"^(ZAR|R)\s*", "", amount_str.strip(), flags=re.IGNORECASE)
    amount_str = re.sub(r"[$€£]", "", amount_str)
    amount_str = amount_str.replace(",", "").replace(" ", "")

    try:
        amount = Decimal(amount_str)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount_str}'") from e
    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}'")
    return -amount if is_negative else amount


def parse_month_assignment(text: str) -> tuple[int, Decimal]:
    """Parse "POSITION=AMOUNT" into a 0-based month index and amount.

    POSITION is the 1-based month of the financial year (1-12).

    Raises:
        ValueError: If the text is malformed or the position is out of range
    """
    position, sep, amount = text.partition("=")
    if not sep:
        raise ValueError(f"Expected MONTH=AMOUNT, got '{text}'")
    try:
        month = int(position.strip())
    except ValueError as e:
        raise ValueError(f"Month must be a number from 1 to 12, got '{position}'") from e
    if not 1 <= month <= 12:
        raise ValueError(f"Month must be a number from 1 to 12, got {month}")
    return month - 1, parse_amount(amount)
