"""Company account commands."""

import click
from finboard.cli.error_handling import handle_domain_error
from finboard.domain.company import CompanyService
from finboard.domain.company_account import CompanyAccountService
from finboard.domain.entities import AccountType
from finboard.utils.resolvers import resolve_account, resolve_company

ACCOUNT_TYPES = [t.value for t in AccountType]


def _resolve_or_exit(ctx, db, company: str, account: str | None = None):
    try:
        company_id = resolve_company(CompanyService(db), company)
        if account is None:
            return company_id, None
        return company_id, resolve_account(CompanyAccountService(db), company_id, account)
    except ValueError as e:
        handle_domain_error(ctx, e)


@click.group()
def account_group():
    """Manage company revenue and expense accounts."""
    pass


@account_group.command("create")
@click.argument("company", metavar="COMPANY")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.option(
    "--type",
    "account_type",
    type=click.Choice(ACCOUNT_TYPES),
    default=AccountType.DOMESTIC_REVENUE.value,
    show_default=True,
)
@click.option("--number", "account_number", help="External account number")
@click.option("--description", help="Optional description")
@click.option("--inactive", is_flag=True, help="Create the account as inactive")
@click.pass_context
def create_account(
    ctx,
    company: str,
    name: str,
    account_type: str,
    account_number: str | None,
    description: str | None,
    inactive: bool,
):
    """Create an account for COMPANY (name or ID).

    Examples:
        finboard account create "Acme" "Local Sales"
        finboard account create "Acme" "Exports EU" --type export_revenue
    """
    db = ctx.obj["db"]
    company_id, _ = _resolve_or_exit(ctx, db, company)

    try:
        account_id = CompanyAccountService(db).create_account(
            company_id=company_id,
            account_name=name,
            account_type=account_type,
            description=description,
            account_number=account_number,
            is_active=not inactive,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created account '{name.strip()}' (ID: {account_id})")


@account_group.command("list")
@click.argument("company", metavar="COMPANY", required=False)
@click.option("--type", "account_type", type=click.Choice(ACCOUNT_TYPES), help="Only this type")
@click.option("--active/--inactive", "is_active", default=None, help="Filter by status")
@click.pass_context
def list_accounts(ctx, company: str | None, account_type: str | None, is_active: bool | None):
    """List accounts, optionally only those of COMPANY."""
    db = ctx.obj["db"]
    company_id = None
    if company is not None:
        company_id, _ = _resolve_or_exit(ctx, db, company)

    accounts = CompanyAccountService(db).list_accounts(
        company_id=company_id, account_type=account_type, is_active=is_active
    )
    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 70)
    for account in accounts:
        status = "" if account.is_active else " (inactive)"
        number = f" [{account.account_number}]" if account.account_number else ""
        click.echo(
            f"ID: {account.id:3d} | {account.account_name:25s} | "
            f"{account.account_type.label}{number}{status}"
        )


@account_group.command("update")
@click.argument("company", metavar="COMPANY")
@click.argument("account", metavar="ACCOUNT")
@click.option("--name", help="New account name")
@click.option("--type", "account_type", type=click.Choice(ACCOUNT_TYPES), help="New type")
@click.option("--number", "account_number", help="New account number")
@click.option("--description", help="New description")
@click.pass_context
def update_account(
    ctx,
    company: str,
    account: str,
    name: str | None,
    account_type: str | None,
    account_number: str | None,
    description: str | None,
):
    """Update an account. ACCOUNT can be a name or ID."""
    db = ctx.obj["db"]
    _, account_id = _resolve_or_exit(ctx, db, company, account)

    try:
        CompanyAccountService(db).update_account(
            account_id,
            account_name=name,
            account_type=account_type,
            description=description,
            account_number=account_number,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated account {account_id}")


def _set_active(ctx, company: str, account: str, is_active: bool):
    db = ctx.obj["db"]
    _, account_id = _resolve_or_exit(ctx, db, company, account)
    try:
        CompanyAccountService(db).set_active(account_id, is_active)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"{'Activated' if is_active else 'Deactivated'} account {account_id}")


@account_group.command("activate")
@click.argument("company", metavar="COMPANY")
@click.argument("account", metavar="ACCOUNT")
@click.pass_context
def activate_account(ctx, company: str, account: str):
    """Activate an account."""
    _set_active(ctx, company, account, True)


@account_group.command("deactivate")
@click.argument("company", metavar="COMPANY")
@click.argument("account", metavar="ACCOUNT")
@click.pass_context
def deactivate_account(ctx, company: str, account: str):
    """Deactivate an account. Its captured revenue is kept."""
    _set_active(ctx, company, account, False)


@account_group.command("delete")
@click.argument("company", metavar="COMPANY")
@click.argument("account", metavar="ACCOUNT")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_account(ctx, company: str, account: str, yes: bool):
    """Delete an account that has no captured revenue."""
    db = ctx.obj["db"]
    _, account_id = _resolve_or_exit(ctx, db, company, account)
    service = CompanyAccountService(db)
    found = service.get_account(account_id)

    if not yes and not click.confirm(
        f"Are you sure you want to delete account '{found.account_name}' (ID: {account_id})?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_account(account_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted account '{found.account_name}'")


@account_group.command("summary")
@click.argument("company", metavar="COMPANY", required=False)
@click.pass_context
def account_summary(ctx, company: str | None):
    """Show account counts by status and type."""
    db = ctx.obj["db"]
    company_id = None
    if company is not None:
        company_id, _ = _resolve_or_exit(ctx, db, company)

    summary = CompanyAccountService(db).summary(company_id)
    click.echo(f"Total accounts:    {summary.total_accounts}")
    click.echo(f"Active accounts:   {summary.active_accounts}")
    click.echo(f"Inactive accounts: {summary.inactive_accounts}")
    click.echo("By type:")
    for account_type, count in summary.by_type.items():
        click.echo(f"  {account_type.label:18s} {count}")


@account_group.command("types")
def account_types():
    """List the valid account types."""
    for account_type in CompanyAccountService.valid_types():
        click.echo(f"{account_type.value:18s} {account_type.label}")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
