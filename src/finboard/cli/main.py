"""Main CLI entry point."""

import logging

import click
from finboard.database.factories import create_sqlite_database
from finboard.domain.local_calendar import LocalCalendar

# Import and register all commands at module level
from finboard.cli.commands import (
    add,
    transaction,
    recurring,
    salary,
    summary,
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
    "--timezone",
    "timezone_name",
    help="Timezone that defines the local day, e.g. 'Asia/Jerusalem' (default: system timezone)",
    envvar="FINBOARD_TIMEZONE",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    envvar="FINBOARD_LOG_LEVEL",
    help="Logging verbosity",
)
@click.pass_context
def cli(ctx, db_path: str | None, timezone_name: str | None, log_level: str):
    """Finboard - Personal finance tracker.

    Record expenses and income, define recurring payments, and view monthly
    or range-based summaries with period-over-period changes.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        try:
            calendar = LocalCalendar.from_name(timezone_name)
        except ValueError as e:
            raise click.BadParameter(str(e), param_hint="--timezone")
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.obj["calendar"] = calendar


# Register all commands
add.register_commands(cli)
transaction.register_commands(cli)
recurring.register_commands(cli)
salary.register_commands(cli)
summary.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
