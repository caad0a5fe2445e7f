"""CLI helpers for date and range resolution."""

from datetime import datetime

import click

from finboard.domain.entities import RangeSelection
from finboard.domain.local_calendar import LocalCalendar
from finboard.utils.date_parser import parse_date, parse_month


def resolve_cli_range_selection(
    ctx,
    *,
    range_token: str,
    from_month: str | None,
    to_month: str | None,
    to_now: bool,
    calendar: LocalCalendar,
) -> RangeSelection:
    """Build a range selection from CLI options.

    Month bounds are only accepted with the custom range. Unparseable months
    are rejected here; the summary itself falls back to a single month.
    Default months follow the current date in ``calendar``.
    """
    if range_token != "custom" and (from_month or to_month or to_now):
        click.echo(
            "Error: --from, --to and --to-now can only be used with --range custom.",
            err=True,
        )
        ctx.exit(1)

    if to_month and to_now:
        click.echo("Error: --to cannot be combined with --to-now.", err=True)
        ctx.exit(1)

    for label, value in (("from", from_month), ("to", to_month)):
        if value:
            try:
                parse_month(value)
            except ValueError as e:
                click.echo(f"Error: Invalid {label} month: {e}", err=True)
                ctx.exit(1)

    # Custom range defaults to January through the current month
    if range_token == "custom":
        today = calendar.now()
        from_month = from_month or today.strftime("%Y-01")
        if not to_month and not to_now:
            to_month = today.strftime("%Y-%m")

    return RangeSelection(
        range=range_token, from_month=from_month, to_month=to_month, to_now=to_now
    )


def resolve_cli_datetime(
    ctx, value: str | None, calendar: LocalCalendar, label: str
) -> datetime | None:
    """Parse a CLI date option into local midnight of that day.

    Relative words such as 'today' resolve against ``calendar``'s current day.
    """
    if not value:
        return None
    try:
        return calendar.midnight(parse_date(value, today=calendar.now().date()))
    except ValueError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)
