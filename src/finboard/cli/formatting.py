"""Output formatting helpers for CLI commands."""

from decimal import Decimal
from typing import Optional, Sequence

import click

from finboard.domain.entities import QuarterlyTotals


def format_money(value: Optional[Decimal], currency: str = "R") -> str:
    """Format an amount as rand with thousands separators, e.g. "R 1,234.50"."""
    if value is None:
        return "-"
    sign = "-" if value < 0 else ""
    return f"{sign}{currency} {abs(value):,.2f}"


def format_percent(value: Optional[Decimal]) -> str:
    if value is None:
        return "-"
    return f"{value:.1f}%"


def echo_months(labels: Sequence[str], values: Sequence[Decimal], indent: int = 2) -> None:
    """Print monthly values one per line under their labels."""
    pad = " " * indent
    for label, value in zip(labels, values):
        click.echo(f"{pad}{label:<10s} {format_money(value):>18s}")


def echo_quarters(title: str, quarters: QuarterlyTotals, quarter_months=None) -> None:
    """Print Q1-Q4 and the total of a QuarterlyTotals."""
    click.echo(f"{title}:")
    for number, value in enumerate(quarters.as_tuple(), start=1):
        months = ""
        if quarter_months:
            months = f"  ({', '.join(m[:3] for m in quarter_months[number - 1])})"
        click.echo(f"  Q{number}: {format_money(value):>18s}{months}")
    click.echo(f"  Total: {format_money(quarters.total):>15s}")
