"""Industry commands and reports."""

import click
from finboard.cli.error_handling import handle_domain_error
from finboard.cli.formatting import format_money
from finboard.domain.company import IndustryService
from finboard.domain.industry_reports import IndustryReportService


@click.group()
def industry_group():
    """Manage industries and view industry reports."""
    pass


@industry_group.command("create")
@click.argument("name", metavar="INDUSTRY_NAME")
@click.option("--parent", help="Parent sector name")
@click.pass_context
def create_industry(ctx, name: str, parent: str | None):
    """Create an industry, optionally under a parent sector."""
    db = ctx.obj["db"]
    service = IndustryService(db)

    try:
        parent_id = None
        if parent is not None:
            found = service.get_industry_by_name(parent)
            if found is None:
                raise ValueError(f"Industry '{parent}' not found")
            parent_id = found.id
        industry_id = service.create_industry(name=name, parent_id=parent_id)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created industry '{name}' (ID: {industry_id})")


@industry_group.command("list")
@click.pass_context
def list_industries(ctx):
    """List all industries."""
    industries = IndustryService(ctx.obj["db"]).list_industries()
    if not industries:
        click.echo("No industries found.")
        return
    names = {i.id: i.name for i in industries}
    for industry in industries:
        parent = f" (in {names[industry.parent_id]})" if industry.parent_id in names else ""
        click.echo(f"ID: {industry.id:3d} | {industry.name}{parent}")


@industry_group.command("report")
@click.argument(
    "kind",
    type=click.Choice(["companies", "financial", "employment", "top"]),
    default="companies",
)
@click.option("--limit", type=int, default=5, show_default=True, help="Rows for the 'top' report")
@click.pass_context
def industry_report(ctx, kind: str, limit: int):
    """Show an industry report.

    KIND is one of: companies, financial, employment, top.
    """
    service = IndustryReportService(ctx.obj["db"])

    if kind == "companies":
        for row in service.companies_per_industry():
            click.echo(f"{row['industry']:30s} {row['total_companies']:5d}")
    elif kind == "financial":
        for row in service.financial_by_industry():
            click.echo(
                f"{row['industry']:30s} total {format_money(row['total_turnover']):>18s} "
                f"avg {format_money(row['avg_turnover']):>18s}"
            )
    elif kind == "employment":
        for row in service.employment_by_industry():
            click.echo(
                f"{row['industry']:30s} {row['permanent']:6d} permanent "
                f"{row['temporary']:6d} temporary {row['total_employees']:6d} total"
            )
    else:
        for position, row in enumerate(service.top_industries(limit), start=1):
            click.echo(f"{position}. {row['industry']} ({row['total']})")


def register_commands(cli):
    """Register industry commands with main CLI."""
    cli.add_command(industry_group, name="industry")
