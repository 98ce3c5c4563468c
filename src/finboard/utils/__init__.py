"""Utility functions for finboard."""

from finboard.utils.date_parser import parse_date
from finboard.utils.amount_parser import parse_amount, parse_month_assignment

__all__ = ["parse_date", "parse_amount", "parse_month_assignment"]
