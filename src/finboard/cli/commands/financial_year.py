"""Financial year commands."""

import click
from finboard.cli.error_handling import handle_domain_error
from finboard.domain.financial_year import FinancialYearService
from finboard.domain.fiscal import (
    all_quarter_month_names,
    is_date_in_financial_year,
)
from finboard.utils.date_parser import parse_date
from finboard.utils.resolvers import resolve_financial_year


def _resolve_or_exit(ctx, service: FinancialYearService, financial_year: str) -> int:
    try:
        return resolve_financial_year(service, financial_year)
    except ValueError as e:
        handle_domain_error(ctx, e)


@click.group()
def fy_group():
    """Manage financial years."""
    pass


@fy_group.command("create")
@click.option("--start-year", type=int, required=True, help="Calendar year of the first month")
@click.option("--end-year", type=int, help="Calendar year of the last month (derived if omitted)")
@click.option("--start-month", type=click.IntRange(1, 12), default=3, show_default=True)
@click.option("--end-month", type=click.IntRange(1, 12), help="Last month (month before start if omitted)")
@click.option("--name", help='Display name (defaults to e.g. "FY 2024/25")')
@click.option("--active", is_flag=True, help="Make this the active financial year")
@click.option("--description", help="Optional description")
@click.pass_context
def create_financial_year(
    ctx,
    start_year: int,
    end_year: int | None,
    start_month: int,
    end_month: int | None,
    name: str | None,
    active: bool,
    description: str | None,
):
    """Create a financial year.

    Without --end-month the year ends the month before it starts, and
    without --end-year it ends in the following calendar year (or the same
    year for a January start).

    Examples:
        finboard fy create --start-year 2024
        finboard fy create --start-year 2024 --start-month 1 --active
        finboard fy create --start-year 2024 --start-month 7 --name "FY 2025"
    """
    db = ctx.obj["db"]
    service = FinancialYearService(db)

    if end_month is None:
        end_month = 12 if start_month == 1 else start_month - 1
    if end_year is None:
        end_year = start_year if end_month >= start_month else start_year + 1

    try:
        financial_year_id = service.create_financial_year(
            fy_start_year=start_year,
            fy_end_year=end_year,
            start_month=start_month,
            end_month=end_month,
            name=name,
            is_active=active,
            description=description,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    fy = service.get_financial_year(financial_year_id)
    click.echo(f"Created financial year '{fy.name}' (ID: {financial_year_id})")


@fy_group.command("list")
@click.option("--active", "active_only", is_flag=True, help="Only show active years")
@click.option("--year", type=int, help="Only years starting or ending in this year")
@click.pass_context
def list_financial_years(ctx, active_only: bool, year: int | None):
    """List financial years."""
    db = ctx.obj["db"]
    service = FinancialYearService(db)

    years = service.list_financial_years(is_active=True if active_only else None, year=year)
    if not years:
        click.echo("No financial years found.")
        return

    click.echo("\nFinancial years:")
    click.echo("-" * 60)
    for fy in years:
        marker = " (active)" if fy.is_active else ""
        click.echo(
            f"ID: {fy.id:3d} | {fy.name:12s} | "
            f"{fy.start_month:02d}/{fy.fy_start_year} - {fy.end_month:02d}/{fy.fy_end_year}{marker}"
        )


@fy_group.command("show")
@click.argument("financial_year", metavar="FINANCIAL_YEAR")
@click.pass_context
def show_financial_year(ctx, financial_year: str):
    """Show a financial year with its months and quarters.

    FINANCIAL_YEAR can be a name ("FY 2024/25"), an ID, or "active".
    """
    db = ctx.obj["db"]
    service = FinancialYearService(db)
    financial_year_id = _resolve_or_exit(ctx, service, financial_year)

    fy = service.get_financial_year(financial_year_id)
    click.echo(f"{fy.name} (ID: {fy.id}){' - active' if fy.is_active else ''}")
    if fy.description:
        click.echo(fy.description)
    click.echo("\nMonths:")
    for position, month in enumerate(service.months_in_year(financial_year_id), start=1):
        click.echo(f"  {position:2d}. {month.name}")
    click.echo("\nQuarters:")
    for number, names in enumerate(all_quarter_month_names(fy.start_month), start=1):
        click.echo(f"  Q{number}: {', '.join(names)}")


@fy_group.command("update")
@click.argument("financial_year", metavar="FINANCIAL_YEAR")
@click.option("--name", help="New name")
@click.option("--start-month", type=click.IntRange(1, 12))
@click.option("--end-month", type=click.IntRange(1, 12))
@click.option("--start-year", type=int)
@click.option("--end-year", type=int)
@click.option("--description")
@click.pass_context
def update_financial_year(
    ctx,
    financial_year: str,
    name: str | None,
    start_month: int | None,
    end_month: int | None,
    start_year: int | None,
    end_year: int | None,
    description: str | None,
):
    """Update a financial year."""
    db = ctx.obj["db"]
    service = FinancialYearService(db)
    financial_year_id = _resolve_or_exit(ctx, service, financial_year)

    try:
        service.update_financial_year(
            financial_year_id,
            name=name,
            start_month=start_month,
            end_month=end_month,
            fy_start_year=start_year,
            fy_end_year=end_year,
            description=description,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated financial year {financial_year_id}")


@fy_group.command("activate")
@click.argument("financial_year", metavar="FINANCIAL_YEAR")
@click.pass_context
def activate_financial_year(ctx, financial_year: str):
    """Make a financial year the active one (deactivates all others)."""
    db = ctx.obj["db"]
    service = FinancialYearService(db)
    financial_year_id = _resolve_or_exit(ctx, service, financial_year)

    try:
        service.set_active(financial_year_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Activated '{service.get_financial_year(financial_year_id).name}'")


@fy_group.command("delete")
@click.argument("financial_year", metavar="FINANCIAL_YEAR")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_financial_year(ctx, financial_year: str, yes: bool):
    """Delete a financial year without captured revenue or costs."""
    db = ctx.obj["db"]
    service = FinancialYearService(db)
    financial_year_id = _resolve_or_exit(ctx, service, financial_year)
    fy = service.get_financial_year(financial_year_id)

    if not yes and not click.confirm(
        f"Are you sure you want to delete financial year '{fy.name}' (ID: {fy.id})?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_financial_year(financial_year_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted financial year '{fy.name}'")


@fy_group.command("summary")
@click.pass_context
def financial_year_summary(ctx):
    """Show counts and the year range of all financial years."""
    db = ctx.obj["db"]
    summary = FinancialYearService(db).summary()
    click.echo(f"Total years:  {summary.total_years}")
    click.echo(f"Active years: {summary.active_years}")
    if summary.earliest_year is not None:
        click.echo(f"Range:        {summary.earliest_year} - {summary.latest_year}")


@fy_group.command("which")
@click.argument("when", metavar="DATE", default="today")
@click.pass_context
def which_financial_year(ctx, when: str):
    """Show the financial year(s) containing DATE (default: today).

    Examples:
        finboard fy which
        finboard fy which 2025-01-15
    """
    db = ctx.obj["db"]
    service = FinancialYearService(db)

    try:
        target = parse_date(when)
    except ValueError as e:
        handle_domain_error(ctx, e)

    matches = [fy for fy in service.list_financial_years() if is_date_in_financial_year(target, fy)]
    if not matches:
        click.echo(f"No financial year contains {target.isoformat()}.")
        return
    for fy in matches:
        click.echo(f"{target.isoformat()} is in {fy.name} (ID: {fy.id})")


def register_commands(cli):
    """Register financial year commands with main CLI."""
    cli.add_command(fy_group, name="fy")
