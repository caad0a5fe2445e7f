"""Add transaction command."""

import click
from finboard.cli.date_filters import resolve_cli_datetime
from finboard.cli.error_handling import handle_domain_error
from finboard.domain.entities import CATEGORIES, TRANSACTION_TYPES
from finboard.domain.transaction import TransactionService
from finboard.utils.amount_parser import parse_amount


@click.command("add")
@click.option("--amount", required=True, help="Transaction amount (e.g., 123.45)")
@click.option("--description", required=True, help="Transaction description")
@click.option(
    "--category",
    type=click.Choice(CATEGORIES),
    default="Other",
    show_default=True,
    help="Transaction category",
)
@click.option(
    "--type",
    "type_",
    type=click.Choice(TRANSACTION_TYPES),
    default="expense",
    show_default=True,
    help="Expense or income",
)
@click.option("--date", help="Transaction date (YYYY-MM-DD or 'today', 'yesterday'); defaults to now")
@click.option("--notes", help="Notes")
@click.option("--tags", help="Comma-separated tags")
@click.option("--receipt", help="Path of a stored receipt")
@click.pass_context
def add_transaction(
    ctx,
    amount: str,
    description: str,
    category: str,
    type_: str,
    date: str | None,
    notes: str | None,
    tags: str | None,
    receipt: str | None,
):
    """Add a transaction manually.

    Examples:
        finboard add --amount 42.50 --description "Groceries" --category Food
        finboard add --amount 1000 --description "Bonus" --category Salary --type income
    """
    db = ctx.obj["db"]
    calendar = ctx.obj["calendar"]
    transaction_service = TransactionService(db)

    created_at = resolve_cli_datetime(ctx, date, calendar, "date format")

    try:
        txn_amount = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    try:
        transaction_id = transaction_service.create_transaction(
            amount=txn_amount,
            description=description,
            category=category,
            type=type_,
            created_at=created_at,
            notes=notes,
            tags=tags,
            receipt_path=receipt,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    txn = transaction_service.get_transaction(transaction_id)
    click.echo(f"Created transaction {transaction_id}")
    click.echo(f"  Date: {calendar.date_key(txn.created_at)}")
    click.echo(f"  Amount: {txn.amount:,.2f} ({txn.type})")
    click.echo(f"  Category: {txn.category}")
    click.echo(f"  Description: {txn.description}")
    if txn.tags:
        click.echo(f"  Tags: {', '.join(txn.tags)}")


def register_commands(cli):
    """Register add command with main CLI."""
    cli.add_command(add_transaction)
