"""Revenue capture and reporting commands."""

import click
from finboard.cli.editing import apply_month_edits
from finboard.cli.error_handling import handle_domain_error
from finboard.cli.formatting import echo_months, echo_quarters, format_money, format_percent
from finboard.domain.autosave import DEFAULT_DEBOUNCE_SECONDS
from finboard.domain.company import CompanyService
from finboard.domain.company_account import CompanyAccountService
from finboard.domain.financial_year import FinancialYearService
from finboard.domain.fiscal import month_labels
from finboard.domain.revenue import COMPANY_TOTAL_LABEL, RevenueStatsService
from finboard.utils.amount_parser import parse_amount
from finboard.utils.resolvers import resolve_account, resolve_company, resolve_financial_year


def _resolve(ctx, db, company: str, financial_year: str | None = None, account: str | None = None):
    """Resolve COMPANY, FINANCIAL_YEAR and --account to IDs, exiting on failure."""
    try:
        company_id = resolve_company(CompanyService(db), company)
        fy_id = None
        if financial_year is not None:
            fy_id = resolve_financial_year(FinancialYearService(db), financial_year)
        account_id = None
        if account is not None:
            account_id = resolve_account(CompanyAccountService(db), company_id, account)
        return company_id, fy_id, account_id
    except ValueError as e:
        handle_domain_error(ctx, e)


@click.group()
def revenue_group():
    """Capture and report monthly revenue."""
    pass


@revenue_group.command("set")
@click.argument("company", metavar="COMPANY")
@click.argument("financial_year", metavar="FINANCIAL_YEAR")
@click.argument("amounts", nargs=-1, metavar="[AMOUNT]...")
@click.option("--account", help="Account name or ID (company total if omitted)")
@click.option("--notes", help="Optional notes")
@click.pass_context
def set_revenue(ctx, company: str, financial_year: str, amounts, account: str | None, notes):
    """Set the monthly amounts of one account for a financial year.

    AMOUNTs are given in financial-year order (first month first); months
    not given are zero.

    Examples:
        finboard revenue set Acme "FY 2024/25" 1000 1200 900 --account "Local Sales"
        finboard revenue set Acme active 5000 5000 5000
    """
    db = ctx.obj["db"]
    company_id, fy_id, account_id = _resolve(ctx, db, company, financial_year, account)

    try:
        if len(amounts) > 12:
            raise ValueError(f"At most 12 monthly amounts can be given, got {len(amounts)}")
        months = [parse_amount(amount) for amount in amounts]
        service = RevenueStatsService(db)
        stats_id = service.upsert(company_id, account_id, fy_id, months, notes=notes)
    except ValueError as e:
        handle_domain_error(ctx, e)

    stats = service.get_stats(stats_id)
    click.echo(f"Saved revenue row {stats_id}: total {format_money(stats.total_amount)}")


@revenue_group.command("edit")
@click.argument("company", metavar="COMPANY")
@click.argument("financial_year", metavar="FINANCIAL_YEAR")
@click.option("--account", help="Account name or ID (company total if omitted)")
@click.option(
    "--set",
    "assignments",
    multiple=True,
    required=True,
    metavar="MONTH=AMOUNT",
    help="Month position in the financial year (1-12) and its new amount",
)
@click.option(
    "--debounce",
    type=float,
    default=DEFAULT_DEBOUNCE_SECONDS,
    show_default=True,
    help="Seconds of quiet before an edited row is saved",
)
@click.pass_context
def edit_revenue(ctx, company: str, financial_year: str, account, assignments, debounce: float):
    """Change individual months of a revenue row.

    Negative or invalid amounts are stored as zero. Edits that arrive within
    the debounce window are saved together.

    Examples:
        finboard revenue edit Acme active --account "Local Sales" --set 1=1500 --set 2=1750
    """
    db = ctx.obj["db"]
    company_id, fy_id, account_id = _resolve(ctx, db, company, financial_year, account)
    service = RevenueStatsService(db)
    existing = service.find_stats(company_id, account_id, fy_id)

    def save(_key, months):
        service.upsert(company_id, account_id, fy_id, months)

    try:
        months, saves, errors = apply_month_edits(
            account_id, existing.months if existing else [], assignments, save, debounce
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
    if errors:
        handle_domain_error(ctx, errors[0])

    fy = FinancialYearService(db).get_financial_year(fy_id)
    echo_months(month_labels(fy), months)
    click.echo(f"Saved {saves} row(s); total {format_money(sum(months))}")


@revenue_group.command("show")
@click.argument("company", metavar="COMPANY")
@click.pass_context
def show_revenue(ctx, company: str):
    """Show captured revenue grouped by financial year, newest first."""
    db = ctx.obj["db"]
    company_id, _, _ = _resolve(ctx, db, company)

    groups = RevenueStatsService(db).year_groups(company_id)
    if not groups:
        click.echo("No revenue captured.")
        return
    for group in groups:
        active = " (active)" if group.is_active else ""
        click.echo(f"\n{group.name}{active}: {format_money(group.total)}")
        for row in group.accounts:
            click.echo(f"  [{row.stats_id}] {row.account_name:25s} {format_money(row.total):>18s}")


@revenue_group.command("totals")
@click.argument("company", metavar="COMPANY")
@click.argument("financial_year", metavar="FINANCIAL_YEAR")
@click.option("--monthly", is_flag=True, help="Also show per-month revenue and expense")
@click.pass_context
def revenue_totals(ctx, company: str, financial_year: str, monthly: bool):
    """Show revenue against expense totals for one financial year."""
    db = ctx.obj["db"]
    company_id, fy_id, _ = _resolve(ctx, db, company, financial_year)
    service = RevenueStatsService(db)

    totals = service.yearly_totals(company_id, fy_id)
    click.echo(f"Revenue: {format_money(totals.revenue_total):>18s} ({totals.revenue_accounts} rows)")
    click.echo(f"Expense: {format_money(totals.expense_total):>18s} ({totals.expense_accounts} rows)")
    click.echo(f"Net:     {format_money(totals.net_total):>18s}")

    if monthly:
        labels = month_labels(FinancialYearService(db).get_financial_year(fy_id))
        breakdown = service.monthly_breakdown(company_id, fy_id)
        click.echo("\nRevenue by month:")
        echo_months(labels, breakdown["revenue"])
        click.echo("\nExpense by month:")
        echo_months(labels, breakdown["expense"])


@revenue_group.command("quarterly")
@click.argument("company", metavar="COMPANY")
@click.argument("financial_year", metavar="FINANCIAL_YEAR", required=False)
@click.option("--accounts", "show_accounts", is_flag=True, help="Include per-account totals")
@click.pass_context
def quarterly_revenue(ctx, company: str, financial_year: str | None, show_accounts: bool):
    """Show quarterly revenue and export share.

    Without FINANCIAL_YEAR every year with captured revenue is shown.
    """
    db = ctx.obj["db"]
    company_id, fy_id, _ = _resolve(ctx, db, company, financial_year)
    service = RevenueStatsService(db)

    try:
        if fy_id is not None:
            reports = [service.quarterly_revenue(company_id, fy_id)]
        else:
            reports = service.quarterly_revenue_all_years(company_id)
    except ValueError as e:
        handle_domain_error(ctx, e)

    if not reports:
        click.echo("No revenue captured.")
        return
    for report in reports:
        click.echo(f"\n{report.financial_year_name}")
        echo_quarters("Revenue", report.revenue, report.quarter_months)
        echo_quarters("Export", report.export)
        click.echo(f"Export share: {format_percent(report.export_ratio)}")
        if show_accounts:
            click.echo("Accounts:")
            for row in report.account_breakdown:
                kind = row.account_type.label if row.account_type else COMPANY_TOTAL_LABEL
                click.echo(f"  {row.account_name:25s} {kind:18s} {format_money(row.total):>18s}")


@revenue_group.command("delete")
@click.argument("stats_id", type=int)
@click.pass_context
def delete_revenue(ctx, stats_id: int):
    """Delete one revenue row by its ID."""
    try:
        RevenueStatsService(ctx.obj["db"]).delete_stats(stats_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted revenue row {stats_id}")


@revenue_group.command("clear-year")
@click.argument("company", metavar="COMPANY")
@click.argument("financial_year", metavar="FINANCIAL_YEAR")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def clear_revenue_year(ctx, company: str, financial_year: str, yes: bool):
    """Delete all revenue rows of COMPANY for one financial year."""
    db = ctx.obj["db"]
    company_id, fy_id, _ = _resolve(ctx, db, company, financial_year)

    if not yes and not click.confirm("Delete all revenue rows for this company and year?"):
        click.echo("Deletion cancelled.")
        return
    count = RevenueStatsService(db).delete_by_company_and_year(company_id, fy_id)
    click.echo(f"Deleted {count} revenue row(s)")


def register_commands(cli):
    """Register revenue commands with main CLI."""
    cli.add_command(revenue_group, name="revenue")
