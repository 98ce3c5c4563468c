"""Cost capture and reporting commands."""

import click
from finboard.cli.editing import apply_month_edits
from finboard.cli.error_handling import handle_domain_error
from finboard.cli.formatting import echo_months, echo_quarters, format_money
from finboard.domain.autosave import DEFAULT_DEBOUNCE_SECONDS
from finboard.domain.company import CompanyService
from finboard.domain.cost_category import CostCategoryService
from finboard.domain.costing import UNCATEGORIZED_LABEL, CostingStatsService
from finboard.domain.entities import CostType
from finboard.domain.financial_year import FinancialYearService
from finboard.domain.fiscal import month_labels
from finboard.utils.amount_parser import parse_amount
from finboard.utils.resolvers import resolve_company, resolve_cost_category, resolve_financial_year

COST_TYPES = [t.value for t in CostType]


def _resolve(ctx, db, company: str, financial_year: str | None = None, category: str | None = None):
    """Resolve COMPANY, FINANCIAL_YEAR and --category to IDs, exiting on failure."""
    try:
        company_id = resolve_company(CompanyService(db), company)
        fy_id = None
        if financial_year is not None:
            fy_id = resolve_financial_year(FinancialYearService(db), financial_year)
        category_id = None
        if category is not None:
            category_id = resolve_cost_category(CostCategoryService(db), category)
        return company_id, fy_id, category_id
    except ValueError as e:
        handle_domain_error(ctx, e)


@click.group()
def costs_group():
    """Capture and report monthly direct and operational costs."""
    pass


@costs_group.command("add")
@click.argument("company", metavar="COMPANY")
@click.argument("financial_year", metavar="FINANCIAL_YEAR")
@click.argument("amounts", nargs=-1, metavar="[AMOUNT]...")
@click.option("--category", help="Cost category name or ID")
@click.option("--type", "cost_type", type=click.Choice(COST_TYPES), help="Defaults to the category's type")
@click.option("--notes", help="Optional notes")
@click.option("--replace", is_flag=True, help="Replace the months of an existing row")
@click.pass_context
def add_costs(ctx, company, financial_year, amounts, category, cost_type, notes, replace: bool):
    """Add a cost row with monthly AMOUNTs in financial-year order.

    Examples:
        finboard costs add Acme active 500 500 500 --category "Raw Materials"
        finboard costs add Acme "FY 2024/25" 12000 --category Rent --replace
    """
    db = ctx.obj["db"]
    company_id, fy_id, category_id = _resolve(ctx, db, company, financial_year, category)
    service = CostingStatsService(db)

    try:
        if len(amounts) > 12:
            raise ValueError(f"At most 12 monthly amounts can be given, got {len(amounts)}")
        months = [parse_amount(amount) for amount in amounts]
        save = service.upsert if replace else service.create_stats
        stats_id = save(company_id, fy_id, cost_type, category_id, months, notes)
    except ValueError as e:
        handle_domain_error(ctx, e)

    stats = service.get_stats(stats_id)
    click.echo(f"Saved cost row {stats_id}: total {format_money(stats.total_amount)}")


@costs_group.command("edit")
@click.argument("company", metavar="COMPANY")
@click.argument("financial_year", metavar="FINANCIAL_YEAR")
@click.option("--category", help="Cost category name or ID")
@click.option("--type", "cost_type", type=click.Choice(COST_TYPES), help="Defaults to the category's type")
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
def edit_costs(ctx, company, financial_year, category, cost_type, assignments, debounce: float):
    """Change individual months of a cost row, creating it if needed.

    Negative or invalid amounts are stored as zero. Edits that arrive within
    the debounce window are saved together.

    Examples:
        finboard costs edit Acme active --category Rent --set 4=12500
    """
    db = ctx.obj["db"]
    company_id, fy_id, category_id = _resolve(ctx, db, company, financial_year, category)
    service = CostingStatsService(db)

    def save(_key, months):
        service.upsert(company_id, fy_id, cost_type, category_id, months)

    try:
        existing = service.find_stats(company_id, fy_id, cost_type, category_id)
        months, saves, errors = apply_month_edits(
            category_id, existing.months if existing else [], assignments, save, debounce
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
    if errors:
        handle_domain_error(ctx, errors[0])

    fy = FinancialYearService(db).get_financial_year(fy_id)
    echo_months(month_labels(fy), months)
    click.echo(f"Saved {saves} row(s); total {format_money(sum(months))}")


@costs_group.command("list")
@click.argument("company", metavar="COMPANY")
@click.argument("financial_year", metavar="FINANCIAL_YEAR", required=False)
@click.option("--type", "cost_type", type=click.Choice(COST_TYPES), help="Only this cost type")
@click.pass_context
def list_costs(ctx, company: str, financial_year: str | None, cost_type: str | None):
    """List cost rows of COMPANY."""
    db = ctx.obj["db"]
    company_id, fy_id, _ = _resolve(ctx, db, company, financial_year)

    rows = CostingStatsService(db).list_stats(
        company_id=company_id, financial_year_id=fy_id, cost_type=cost_type
    )
    if not rows:
        click.echo("No cost rows found.")
        return
    categories = {c.id: c.name for c in CostCategoryService(db).list_categories()}
    years = {fy.id: fy.name for fy in FinancialYearService(db).list_financial_years()}
    for stats in rows:
        click.echo(
            f"ID: {stats.id:3d} | {years.get(stats.financial_year_id, '?'):12s} | "
            f"{stats.cost_type.value:11s} | "
            f"{categories.get(stats.category_id, UNCATEGORIZED_LABEL):25s} | "
            f"{format_money(stats.total_amount):>18s}"
        )


@costs_group.command("summary")
@click.argument("company", metavar="COMPANY")
@click.argument("financial_year", metavar="FINANCIAL_YEAR")
@click.pass_context
def cost_summary(ctx, company: str, financial_year: str):
    """Show row count and total per cost type for one year."""
    db = ctx.obj["db"]
    company_id, fy_id, _ = _resolve(ctx, db, company, financial_year)

    summary = CostingStatsService(db).summary(company_id, fy_id)
    if not summary:
        click.echo("No cost rows found.")
        return
    for cost_type, item in summary.items():
        click.echo(
            f"{cost_type.value.title():12s} {item.record_count:3d} rows "
            f"{format_money(item.total_cost):>18s}"
        )


@costs_group.command("quarterly")
@click.argument("company", metavar="COMPANY")
@click.argument("financial_year", metavar="FINANCIAL_YEAR", required=False)
@click.option("--by-category", is_flag=True, help="Show quarter sums per cost category")
@click.pass_context
def quarterly_costs(ctx, company: str, financial_year: str | None, by_category: bool):
    """Show quarterly direct, operational and total costs.

    Without FINANCIAL_YEAR every year with cost data is shown, newest first.
    """
    db = ctx.obj["db"]
    company_id, fy_id, _ = _resolve(ctx, db, company, financial_year)
    service = CostingStatsService(db)

    try:
        if fy_id is not None:
            reports = [service.quarterly_costs(company_id, fy_id)]
        else:
            reports = service.quarterly_costs_all_years(company_id)
    except ValueError as e:
        handle_domain_error(ctx, e)

    if not reports:
        click.echo("No cost rows found.")
        return
    for report in reports:
        click.echo(f"\n{report.financial_year_name}")
        if by_category:
            for item in report.category_breakdown:
                echo_quarters(f"{item.category_name} ({item.cost_type.value})", item.quarters)
            continue
        echo_quarters("Direct", report.direct, report.quarter_months)
        echo_quarters("Operational", report.operational)
        echo_quarters("Total", report.total)


@costs_group.command("compare")
@click.argument("company", metavar="COMPANY")
@click.argument("financial_years", nargs=-1, required=True, metavar="FINANCIAL_YEAR...")
@click.pass_context
def compare_costs(ctx, company: str, financial_years: tuple[str, ...]):
    """Compare cost totals per cost type across financial years."""
    db = ctx.obj["db"]
    company_id, _, _ = _resolve(ctx, db, company)
    fy_service = FinancialYearService(db)
    try:
        fy_ids = [resolve_financial_year(fy_service, fy) for fy in financial_years]
    except ValueError as e:
        handle_domain_error(ctx, e)

    comparison = CostingStatsService(db).comparison(company_id, fy_ids)
    if not comparison:
        click.echo("No cost rows found.")
        return
    for entry in comparison:
        fy = fy_service.get_financial_year(entry["financial_year_id"])
        costs = ", ".join(
            f"{cost_type} {format_money(amount)}" for cost_type, amount in entry["costs"].items()
        )
        click.echo(f"{fy.name:12s} {costs}")


@costs_group.command("copy")
@click.argument("company", metavar="COMPANY")
@click.argument("from_year", metavar="FROM_YEAR")
@click.argument("to_year", metavar="TO_YEAR")
@click.pass_context
def copy_costs(ctx, company: str, from_year: str, to_year: str):
    """Copy the cost rows of FROM_YEAR to TO_YEAR with zeroed months."""
    db = ctx.obj["db"]
    company_id, from_id, _ = _resolve(ctx, db, company, from_year)
    _, to_id, _ = _resolve(ctx, db, company, to_year)

    try:
        created = CostingStatsService(db).copy_to_new_year(company_id, from_id, to_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Copied {len(created)} cost row(s)")


@costs_group.command("structure")
@click.argument("company", metavar="COMPANY")
@click.argument("financial_year", metavar="FINANCIAL_YEAR")
@click.option("--monthly", is_flag=True, help="Also show per-month section totals")
@click.pass_context
def cost_structure(ctx, company: str, financial_year: str, monthly: bool):
    """Show direct and operational costs against revenue and net profit."""
    db = ctx.obj["db"]
    company_id, fy_id, _ = _resolve(ctx, db, company, financial_year)

    try:
        structure = CostingStatsService(db).cost_structure(company_id, fy_id)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Revenue:           {format_money(structure.revenue_total):>18s}")
    click.echo(f"Direct costs:      {format_money(structure.direct_total):>18s}")
    click.echo(f"Operational costs: {format_money(structure.operational_total):>18s}")
    click.echo(f"Net profit:        {format_money(structure.net_profit):>18s}")
    if monthly:
        click.echo("\nDirect by month:")
        echo_months(structure.month_labels, structure.direct_monthly)
        click.echo("\nOperational by month:")
        echo_months(structure.month_labels, structure.operational_monthly)


@costs_group.command("delete")
@click.argument("stats_id", type=int)
@click.pass_context
def delete_costs(ctx, stats_id: int):
    """Delete one cost row by its ID."""
    try:
        CostingStatsService(ctx.obj["db"]).delete_stats(stats_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted cost row {stats_id}")


@costs_group.command("clear-year")
@click.argument("company", metavar="COMPANY")
@click.argument("financial_year", metavar="FINANCIAL_YEAR")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def clear_cost_year(ctx, company: str, financial_year: str, yes: bool):
    """Delete all cost rows of COMPANY for one financial year."""
    db = ctx.obj["db"]
    company_id, fy_id, _ = _resolve(ctx, db, company, financial_year)

    if not yes and not click.confirm("Delete all cost rows for this company and year?"):
        click.echo("Deletion cancelled.")
        return
    count = CostingStatsService(db).delete_by_company_and_year(company_id, fy_id)
    click.echo(f"Deleted {count} cost row(s)")


def register_commands(cli):
    """Register cost commands with main CLI."""
    cli.add_command(costs_group, name="costs")
