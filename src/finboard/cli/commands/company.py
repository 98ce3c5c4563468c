"""Company commands."""

import click
from finboard.cli.error_handling import handle_domain_error
from finboard.cli.formatting import format_money
from finboard.domain.company import CompanyService, IndustryService
from finboard.utils.amount_parser import parse_amount
from finboard.utils.resolvers import resolve_company


@click.group()
def company_group():
    """Manage companies."""
    pass


@company_group.command("create")
@click.argument("name", metavar="COMPANY_NAME")
@click.option("--industry", help="Industry name")
@click.option("--turnover", help="Reported annual turnover, e.g. 1500000 or 'R 1 500 000'")
@click.option("--permanent", type=int, default=0, help="Permanent employees")
@click.option("--temporary", type=int, default=0, help="Temporary employees")
@click.pass_context
def create_company(
    ctx, name: str, industry: str | None, turnover: str | None, permanent: int, temporary: int
):
    """Create a company.

    Examples:
        finboard company create "Acme Manufacturing" --industry Manufacturing
        finboard company create "Beta Foods" --turnover 2500000 --permanent 12
    """
    db = ctx.obj["db"]
    service = CompanyService(db)

    try:
        industry_id = None
        if industry is not None:
            found = IndustryService(db).get_industry_by_name(industry)
            if found is None:
                raise ValueError(f"Industry '{industry}' not found")
            industry_id = found.id
        company_id = service.create_company(
            name=name,
            industry_id=industry_id,
            turnover_actual=parse_amount(turnover) if turnover is not None else None,
            permanent_employees=permanent,
            temporary_employees=temporary,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created company '{name}' (ID: {company_id})")


@company_group.command("list")
@click.pass_context
def list_companies(ctx):
    """List all companies."""
    db = ctx.obj["db"]
    companies = CompanyService(db).list_companies()
    if not companies:
        click.echo("No companies found.")
        return

    industries = {i.id: i.name for i in IndustryService(db).list_industries()}
    click.echo("\nCompanies:")
    click.echo("-" * 60)
    for company in companies:
        industry = industries.get(company.industry_id, "-")
        click.echo(f"ID: {company.id:3d} | {company.name:25s} | {industry}")


@company_group.command("show")
@click.argument("company", metavar="COMPANY")
@click.pass_context
def show_company(ctx, company: str):
    """Show company details. COMPANY can be a name or ID."""
    db = ctx.obj["db"]
    service = CompanyService(db)
    try:
        company_id = resolve_company(service, company)
    except ValueError as e:
        handle_domain_error(ctx, e)

    found = service.get_company(company_id)
    industry = IndustryService(db).get_industry(found.industry_id) if found.industry_id else None
    click.echo(f"{found.name} (ID: {found.id})")
    click.echo(f"  Industry:  {industry.name if industry else '-'}")
    click.echo(f"  Turnover:  {format_money(found.turnover_actual)}")
    click.echo(
        f"  Employees: {found.permanent_employees} permanent, "
        f"{found.temporary_employees} temporary"
    )


def register_commands(cli):
    """Register company commands with main CLI."""
    cli.add_command(company_group, name="company")
