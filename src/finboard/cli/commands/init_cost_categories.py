"""Initialize the default cost categories."""

import click
from finboard.domain.cost_category import CostCategoryService


@click.command("init-cost-categories")
@click.pass_context
def init_cost_categories(ctx):
    """Create the standard direct and operational cost categories.

    Categories that already exist (by name, ignoring case) are left alone,
    so the command can be run again safely.
    """
    created, skipped = CostCategoryService(ctx.obj["db"]).init_defaults()
    click.echo(f"Created {created} cost categories ({skipped} already existed).")


def register_commands(cli):
    """Register init-cost-categories command with main CLI."""
    cli.add_command(init_cost_categories)
