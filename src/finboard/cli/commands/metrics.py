"""Metric group, type and record commands."""

import click
from finboard.cli.error_handling import handle_domain_error
from finboard.cli.formatting import format_percent
from finboard.domain.company import CompanyService
from finboard.domain.entities import PeriodType
from finboard.domain.errors import NotFoundError
from finboard.domain.metrics import MetricsService
from finboard.utils.amount_parser import parse_amount
from finboard.utils.resolvers import resolve_company

PERIOD_TYPES = [t.value for t in PeriodType]


def _resolve_group(service: MetricsService, group: str) -> int:
    if group.isdigit():
        if service.get_group(int(group)) is None:
            raise NotFoundError(f"Metric group ID {group} not found")
        return int(group)
    found = service.get_group_by_code(group)
    if found is None:
        raise NotFoundError(f"Metric group '{group}' not found")
    return found.id


def _resolve_type(service: MetricsService, metric_type: str) -> int:
    if metric_type.isdigit():
        if service.get_type(int(metric_type)) is None:
            raise NotFoundError(f"Metric type ID {metric_type} not found")
        return int(metric_type)
    found = service.get_type_by_code(metric_type)
    if found is None:
        raise NotFoundError(f"Metric type '{metric_type}' not found")
    return found.id


def _optional_amount(value: str | None):
    return parse_amount(value) if value is not None else None


def _format_value(value, unit: str) -> str:
    if value is None:
        return "-"
    return f"{value:,.2f} {unit}"


@click.group()
def metrics_group():
    """Manage metric groups, metric types and yearly records."""
    pass


@metrics_group.command("add-group")
@click.argument("code")
@click.argument("name")
@click.option("--description", help="Optional description")
@click.option("--show-total/--hide-total", default=True, show_default=True)
@click.option("--show-margin/--hide-margin", default=False, show_default=True)
@click.option("--color", "graph_color", help="Chart color, e.g. #1f77b4")
@click.option("--order", "order_no", type=int, help="Display position (appended if omitted)")
@click.pass_context
def add_group(
    ctx,
    code: str,
    name: str,
    description: str | None,
    show_total: bool,
    show_margin: bool,
    graph_color: str | None,
    order_no: int | None,
):
    """Create a metric group with a unique CODE."""
    service = MetricsService(ctx.obj["db"])
    try:
        group_id = service.create_group(
            code=code,
            name=name,
            description=description,
            show_total=show_total,
            show_margin=show_margin,
            graph_color=graph_color,
            order_no=order_no,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created metric group {code.strip().upper()} (ID: {group_id})")


@metrics_group.command("list-groups")
@click.pass_context
def list_groups(ctx):
    """List metric groups in display order."""
    groups = MetricsService(ctx.obj["db"]).list_groups()
    if not groups:
        click.echo("No metric groups found.")
        return
    for group in groups:
        click.echo(f"{group.order_no:3d}. {group.code:15s} {group.name} (ID: {group.id})")


@metrics_group.command("delete-group")
@click.argument("group")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_group(ctx, group: str, yes: bool):
    """Delete a metric group with all its types and records."""
    service = MetricsService(ctx.obj["db"])
    try:
        group_id = _resolve_group(service, group)
    except ValueError as e:
        handle_domain_error(ctx, e)

    if not yes and not click.confirm(
        f"Delete metric group {group} including all its types and records?"
    ):
        click.echo("Deletion cancelled.")
        return
    service.delete_group(group_id)
    click.echo(f"Deleted metric group {group}")


@metrics_group.command("reorder")
@click.argument("groups", nargs=-1, required=True)
@click.pass_context
def reorder_groups(ctx, groups: tuple[str, ...]):
    """Set the display order of GROUPS (codes or IDs), first to last."""
    service = MetricsService(ctx.obj["db"])
    try:
        service.reorder_groups([_resolve_group(service, group) for group in groups])
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Reordered {len(groups)} metric groups")


@metrics_group.command("add-type")
@click.argument("group")
@click.argument("code")
@click.argument("name")
@click.option("--description", help="Optional description")
@click.option("--unit", default="ZAR", show_default=True)
@click.option(
    "--period",
    "period_type",
    type=click.Choice(PERIOD_TYPES, case_sensitive=False),
    default=PeriodType.QUARTERLY.value,
    show_default=True,
)
@click.option("--show-total/--hide-total", default=True, show_default=True)
@click.option("--show-margin/--hide-margin", default=False, show_default=True)
@click.option("--color", "graph_color", help="Chart color")
@click.pass_context
def add_type(
    ctx,
    group: str,
    code: str,
    name: str,
    description: str | None,
    unit: str,
    period_type: str,
    show_total: bool,
    show_margin: bool,
    graph_color: str | None,
):
    """Create a metric type with a unique CODE inside GROUP."""
    service = MetricsService(ctx.obj["db"])
    try:
        type_id = service.create_type(
            group_id=_resolve_group(service, group),
            code=code,
            name=name,
            description=description,
            unit=unit,
            show_total=show_total,
            show_margin=show_margin,
            graph_color=graph_color,
            period_type=period_type,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created metric type {code.strip().upper()} (ID: {type_id})")


@metrics_group.command("list-types")
@click.argument("group", required=False)
@click.pass_context
def list_types(ctx, group: str | None):
    """List metric types, optionally only those in GROUP."""
    service = MetricsService(ctx.obj["db"])
    group_id = None
    if group is not None:
        try:
            group_id = _resolve_group(service, group)
        except ValueError as e:
            handle_domain_error(ctx, e)

    types = service.list_types(group_id)
    if not types:
        click.echo("No metric types found.")
        return
    for metric_type in types:
        click.echo(
            f"ID: {metric_type.id:3d} | {metric_type.code:15s} | {metric_type.name} "
            f"[{metric_type.period_type.value}, {metric_type.unit}]"
        )


@metrics_group.command("delete-type")
@click.argument("metric_type", metavar="TYPE")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_type(ctx, metric_type: str, yes: bool):
    """Delete a metric type with all its records."""
    service = MetricsService(ctx.obj["db"])
    try:
        type_id = _resolve_type(service, metric_type)
    except ValueError as e:
        handle_domain_error(ctx, e)

    if not yes and not click.confirm(f"Delete metric type {metric_type} and its records?"):
        click.echo("Deletion cancelled.")
        return
    service.delete_type(type_id)
    click.echo(f"Deleted metric type {metric_type}")


@metrics_group.command("add-record")
@click.argument("metric_type", metavar="TYPE")
@click.argument("company", metavar="COMPANY")
@click.argument("year", type=int)
@click.option("--q1")
@click.option("--q2")
@click.option("--q3")
@click.option("--q4")
@click.option("--total", help="Yearly total (used as-is for YEARLY metrics)")
@click.option("--margin", "margin_pct", help="Margin percentage")
@click.option("--notes")
@click.pass_context
def add_record(
    ctx,
    metric_type: str,
    company: str,
    year: int,
    q1: str | None,
    q2: str | None,
    q3: str | None,
    q4: str | None,
    total: str | None,
    margin_pct: str | None,
    notes: str | None,
):
    """Record a year of values for metric TYPE and COMPANY.

    Examples:
        finboard metrics add-record SALES Acme 2024 --q1 100 --q2 120 --q3 90 --q4 140
        finboard metrics add-record HEADCOUNT Acme 2024 --total 35
    """
    db = ctx.obj["db"]
    service = MetricsService(db)
    try:
        record_id = service.create_record(
            metric_type_id=_resolve_type(service, metric_type),
            company_id=resolve_company(CompanyService(db), company),
            year=year,
            q1=_optional_amount(q1),
            q2=_optional_amount(q2),
            q3=_optional_amount(q3),
            q4=_optional_amount(q4),
            total=_optional_amount(total),
            margin_pct=_optional_amount(margin_pct),
            notes=notes,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    record = service.get_record(record_id)
    click.echo(
        f"Created record {record_id}: total {_format_value(record.total, record.unit)}"
    )


@metrics_group.command("update-record")
@click.argument("record_id", type=int)
@click.option(
    "--set",
    "assignments",
    multiple=True,
    metavar="FIELD=VALUE",
    help="Field to change (q1-q4, total, margin_pct, notes, unit, year); empty VALUE clears it",
)
@click.pass_context
def update_record(ctx, record_id: int, assignments: tuple[str, ...]):
    """Change fields of a metric record; the total is recomputed.

    Examples:
        finboard metrics update-record 3 --set q2=130 --set notes="Revised"
        finboard metrics update-record 3 --set q4=
    """
    service = MetricsService(ctx.obj["db"])
    changes = {}
    for assignment in assignments:
        field, sep, value = assignment.partition("=")
        if not sep:
            handle_domain_error(ctx, ValueError(f"Expected FIELD=VALUE, got '{assignment}'"))
        changes[field.strip()] = value if value != "" else None

    try:
        record = service.update_record(record_id, changes)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated record {record_id}: total {_format_value(record.total, record.unit)}")


@metrics_group.command("list-records")
@click.argument("company", metavar="COMPANY")
@click.option("--type", "metric_type", help="Only records of this metric type")
@click.option("--year", type=int, help="Only this year")
@click.pass_context
def list_records(ctx, company: str, metric_type: str | None, year: int | None):
    """List metric records of COMPANY, newest year first."""
    db = ctx.obj["db"]
    service = MetricsService(db)
    try:
        company_id = resolve_company(CompanyService(db), company)
        type_id = _resolve_type(service, metric_type) if metric_type is not None else None
    except ValueError as e:
        handle_domain_error(ctx, e)

    records = service.list_records(metric_type_id=type_id, company_id=company_id, year=year)
    if not records:
        click.echo("No metric records found.")
        return
    codes = {t.id: t.code for t in service.list_types()}
    for record in records:
        quarters = " ".join(
            _format_value(q, "").strip() for q in (record.q1, record.q2, record.q3, record.q4)
        )
        click.echo(
            f"ID: {record.id:3d} | {codes.get(record.metric_type_id, '?'):12s} | {record.year} | "
            f"{quarters} | total {_format_value(record.total, record.unit)}"
        )


@metrics_group.command("delete-record")
@click.argument("record_id", type=int)
@click.pass_context
def delete_record(ctx, record_id: int):
    """Delete a metric record."""
    try:
        MetricsService(ctx.obj["db"]).delete_record(record_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted record {record_id}")


@metrics_group.command("show")
@click.argument("company", metavar="COMPANY")
@click.option("--year", type=int, help="Only this year")
@click.pass_context
def show_metrics(ctx, company: str, year: int | None):
    """Show all metric groups, types and records of COMPANY."""
    db = ctx.obj["db"]
    try:
        company_id = resolve_company(CompanyService(db), company)
    except ValueError as e:
        handle_domain_error(ctx, e)

    hierarchy = MetricsService(db).full_metrics(company_id, year=year)
    if not hierarchy:
        click.echo("No metric groups found.")
        return
    for node in hierarchy:
        click.echo(f"\n{node.group.name} [{node.group.code}]")
        for type_node in node.types:
            click.echo(f"  {type_node.type.name} [{type_node.type.code}]")
            if not type_node.records:
                click.echo("    (no records)")
            for record in type_node.records:
                margin = ""
                if node.group.show_margin or type_node.type.show_margin:
                    margin = f"  margin {format_percent(record.margin_pct)}"
                click.echo(
                    f"    {record.year}: {_format_value(record.total, record.unit)}{margin}"
                )


def register_commands(cli):
    """Register metrics commands with main CLI."""
    cli.add_command(metrics_group, name="metrics")
