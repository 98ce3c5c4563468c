"""Main CLI entry point."""

import logging

import click
from finboard.database.factories import create_sqlite_database

# Import and register all commands at module level
from finboard.cli.commands import (
    account,
    company,
    cost_category,
    costs,
    financial_year,
    industry,
    init_cost_categories,
    metrics,
    revenue,
)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides FINBOARD_DB_PATH environment variable)",
    envvar="FINBOARD_DB_PATH",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    envvar="FINBOARD_LOG_LEVEL",
    help="Logging level (overrides FINBOARD_LOG_LEVEL environment variable)",
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str):
    """Finboard - Company financial dashboard.

    Capture monthly revenue and costs per financial year, manage company
    accounts, cost categories and metrics, and view quarterly reports.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
financial_year.register_commands(cli)
company.register_commands(cli)
industry.register_commands(cli)
account.register_commands(cli)
cost_category.register_commands(cli)
init_cost_categories.register_commands(cli)
metrics.register_commands(cli)
revenue.register_commands(cli)
costs.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
