"""Cost category commands."""

import click
from finboard.cli.error_handling import handle_domain_error
from finboard.domain.cost_category import CostCategoryService
from finboard.domain.entities import CostType
from finboard.utils.resolvers import resolve_cost_category

COST_TYPES = [t.value for t in CostType]


def _resolve_or_exit(ctx, service: CostCategoryService, category: str) -> int:
    try:
        return resolve_cost_category(service, category)
    except ValueError as e:
        handle_domain_error(ctx, e)


@click.group()
def cost_category_group():
    """Manage cost categories."""
    pass


@cost_category_group.command("create")
@click.argument("name", metavar="CATEGORY_NAME")
@click.option(
    "--type",
    "cost_type",
    type=click.Choice(COST_TYPES),
    default=CostType.DIRECT.value,
    show_default=True,
    help="Cost structure section",
)
@click.option("--description", help="Optional description")
@click.pass_context
def create_category(ctx, name: str, cost_type: str, description: str | None):
    """Create a cost category.

    Examples:
        finboard cost-category create "Raw Materials"
        finboard cost-category create "Rent" --type operational
    """
    service = CostCategoryService(ctx.obj["db"])
    try:
        category_id = service.create_category(
            name=name, cost_type=cost_type, description=description
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created cost category '{name.strip()}' (ID: {category_id})")


@cost_category_group.command("list")
@click.option("--active-only", is_flag=True, help="Hide inactive categories")
@click.option("--type", "cost_type", type=click.Choice(COST_TYPES), help="Only this cost type")
@click.pass_context
def list_categories(ctx, active_only: bool, cost_type: str | None):
    """List cost categories."""
    service = CostCategoryService(ctx.obj["db"])
    categories = service.list_categories(active_only=active_only, cost_type=cost_type)
    if not categories:
        click.echo("No cost categories found.")
        return

    for cost_type_value in COST_TYPES:
        in_section = [c for c in categories if c.cost_type.value == cost_type_value]
        if not in_section:
            continue
        click.echo(f"\n{cost_type_value.title()} costs:")
        for category in in_section:
            status = "" if category.is_active else " (inactive)"
            click.echo(f"  ID: {category.id:3d} | {category.name}{status}")


@cost_category_group.command("update")
@click.argument("category", metavar="CATEGORY")
@click.option("--name", help="New name")
@click.option("--type", "cost_type", type=click.Choice(COST_TYPES), help="New cost type")
@click.option("--description", help="New description")
@click.pass_context
def update_category(
    ctx, category: str, name: str | None, cost_type: str | None, description: str | None
):
    """Update a cost category. CATEGORY can be a name or ID."""
    service = CostCategoryService(ctx.obj["db"])
    category_id = _resolve_or_exit(ctx, service, category)
    try:
        service.update_category(
            category_id, name=name, cost_type=cost_type, description=description
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated cost category {category_id}")


@cost_category_group.command("activate")
@click.argument("category", metavar="CATEGORY")
@click.pass_context
def activate_category(ctx, category: str):
    """Activate a cost category."""
    service = CostCategoryService(ctx.obj["db"])
    category_id = _resolve_or_exit(ctx, service, category)
    service.set_active(category_id, True)
    click.echo(f"Activated cost category {category_id}")


@cost_category_group.command("deactivate")
@click.argument("category", metavar="CATEGORY")
@click.pass_context
def deactivate_category(ctx, category: str):
    """Deactivate a cost category so it is no longer offered for new rows."""
    service = CostCategoryService(ctx.obj["db"])
    category_id = _resolve_or_exit(ctx, service, category)
    service.set_active(category_id, False)
    click.echo(f"Deactivated cost category {category_id}")


@cost_category_group.command("delete")
@click.argument("category", metavar="CATEGORY")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_category(ctx, category: str, yes: bool):
    """Delete a cost category that no costing row uses."""
    service = CostCategoryService(ctx.obj["db"])
    category_id = _resolve_or_exit(ctx, service, category)
    found = service.get_category(category_id)

    if not yes and not click.confirm(
        f"Are you sure you want to delete cost category '{found.name}' (ID: {category_id})?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_category(category_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted cost category '{found.name}'")


def register_commands(cli):
    """Register cost category commands with main CLI."""
    cli.add_command(cost_category_group, name="cost-category")
