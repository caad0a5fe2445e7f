"""Summary commands."""

import json
from datetime import timedelta
from typing import Optional

import click
from finboard.cli.date_filters import resolve_cli_datetime, resolve_cli_range_selection
from finboard.domain.entities import RANGE_TOKENS, DashboardSummary
from finboard.domain.summary import SummaryService


def format_delta(delta: Optional[float]) -> str:
    """Render a delta as a signed percentage, or 'n/a' when undefined."""
    if delta is None:
        return "n/a"
    return f"{delta * 100:+.1f}%"


def _display_summary(summary: DashboardSummary, show_days: bool) -> None:
    click.echo(f"\n{summary.month_label}")
    click.echo("=" * 60)

    for kpi in summary.kpis:
        click.echo(f"{kpi.label:<30} {kpi.value:>16,.2f} {format_delta(kpi.delta):>12}")

    planned = summary.planned_recurring
    click.echo(
        f"\nPlanned recurring: expenses {planned.expenses:,.2f}, income {planned.income:,.2f}"
    )

    if summary.by_category:
        click.echo("\nExpenses by category")
        click.echo("-" * 60)
        for item in summary.by_category:
            click.echo(f"{item.category:<30} {item.total:>16,.2f}")

    click.echo("\nBy month")
    click.echo("-" * 60)
    click.echo(f"{'Month':<12} {'Expenses':>16} {'Income':>16}")
    for point in summary.by_month:
        click.echo(f"{point.month:<12} {point.expenses:>16,.2f} {point.income:>16,.2f}")

    if show_days and summary.by_day:
        click.echo("\nBy day")
        click.echo("-" * 60)
        click.echo(f"{'Date':<12} {'Expenses':>16} {'Income':>16}")
        for point in summary.by_day:
            click.echo(f"{point.date:<12} {point.expenses:>16,.2f} {point.income:>16,.2f}")


@click.command("summary")
@click.option(
    "--range",
    "range_token",
    type=click.Choice(RANGE_TOKENS),
    default="month",
    show_default=True,
    help="Current month, last 3 months, rolling 12 months, or a custom month range",
)
@click.option("--from", "from_month", help="First month of a custom range (YYYY-MM)")
@click.option("--to", "to_month", help="Last month of a custom range (YYYY-MM)")
@click.option("--to-now", is_flag=True, help="End a custom range at the current time")
@click.option("--as-of", help="Treat this date as today (YYYY-MM-DD)")
@click.option("--daily", is_flag=True, help="Also show the daily series")
@click.option("--json", "as_json", is_flag=True, help="Print the summary as JSON")
@click.pass_context
def summary(
    ctx,
    range_token: str,
    from_month: str | None,
    to_month: str | None,
    to_now: bool,
    as_of: str | None,
    daily: bool,
    as_json: bool,
):
    """Show income, expenses and balance with changes against the previous period.

    Recurring rules are counted as planned payments in every period they fall in.

    Examples:
        finboard summary
        finboard summary --range 3m
        finboard summary --range custom --from 2024-01 --to 2024-06 --json
    """
    db = ctx.obj["db"]
    calendar = ctx.obj["calendar"]
    service = SummaryService(db, calendar)

    selection = resolve_cli_range_selection(
        ctx,
        range_token=range_token,
        from_month=from_month,
        to_month=to_month,
        to_now=to_now,
        calendar=calendar,
    )

    now = None
    as_of_start = resolve_cli_datetime(ctx, as_of, calendar, "as-of date")
    if as_of_start is not None:
        # Last instant of the given day
        now = calendar.midnight(calendar.local_date(as_of_start) + timedelta(days=1)) - timedelta(
            microseconds=1
        )

    result = service.build_summary(selection, now=now)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
        return

    _display_summary(result, show_days=daily)


def register_commands(cli):
    """Register summary commands with main CLI."""
    cli.add_command(summary)
