"""Transaction management commands."""

from datetime import timedelta

import click
from finboard.cli.date_filters import resolve_cli_datetime
from finboard.cli.error_handling import handle_domain_error
from finboard.domain.entities import CATEGORIES, EXPENSE, INCOME, TRANSACTION_TYPES
from finboard.domain.transaction import TransactionService
from finboard.utils.amount_parser import parse_amount


@click.group()
def transaction_group():
    """Manage transactions."""
    pass


@transaction_group.command("update")
@click.argument("transaction_id", type=int)
@click.option("--amount", help="Transaction amount (e.g., 123.45)")
@click.option("--description", help="Transaction description")
@click.option("--category", type=click.Choice(CATEGORIES), help="Transaction category")
@click.option("--type", "type_", type=click.Choice(TRANSACTION_TYPES), help="Expense or income")
@click.option("--notes", help="Notes (empty string clears)")
@click.option("--tags", help="Comma-separated tags (replaces existing tags, empty string clears)")
@click.option("--receipt", help="Path of a stored receipt (empty string clears)")
@click.pass_context
def update_transaction(
    ctx,
    transaction_id: int,
    amount: str | None,
    description: str | None,
    category: str | None,
    type_: str | None,
    notes: str | None,
    tags: str | None,
    receipt: str | None,
) -> None:
    """Update a transaction.

    Updates only the fields that are provided.

    Examples:
        finboard transaction update 1 --amount 75.00
        finboard transaction update 1 --category Food --tags "weekly,market"
    """
    db = ctx.obj["db"]
    transaction_service = TransactionService(db)

    txn_amount = None
    if amount is not None:
        try:
            txn_amount = parse_amount(amount)
        except ValueError as e:
            click.echo(f"Error: Invalid amount format: {e}", err=True)
            ctx.exit(1)

    try:
        transaction_service.update_transaction(
            transaction_id=transaction_id,
            amount=txn_amount,
            description=description,
            category=category,
            type=type_,
            notes=notes,
            tags=tags,
            receipt_path=receipt,
        )
        click.echo(f"Updated transaction {transaction_id}")
    except ValueError as e:
        handle_domain_error(ctx, e)


@transaction_group.command("list")
@click.option("--start-date", help="Start date, inclusive (YYYY-MM-DD or 'today', 'yesterday')")
@click.option("--end-date", help="End date, inclusive (YYYY-MM-DD or 'today', 'yesterday')")
@click.option("--verbose", "-v", is_flag=True, help="Show notes, tags and receipt paths")
@click.pass_context
def list_transactions(ctx, start_date: str | None, end_date: str | None, verbose: bool):
    """View transactions, newest first."""
    db = ctx.obj["db"]
    calendar = ctx.obj["calendar"]
    service = TransactionService(db)

    start = resolve_cli_datetime(ctx, start_date, calendar, "start date")
    end = resolve_cli_datetime(ctx, end_date, calendar, "end date")
    if end is not None:
        # Inclusive end date becomes an exclusive bound
        end = calendar.midnight(calendar.local_date(end) + timedelta(days=1))

    transactions = service.list_transactions(start=start, end=end)

    if not transactions:
        click.echo("No transactions found.")
        return

    click.echo(f"\nFound {len(transactions)} transaction(s):")
    click.echo("-" * 100)
    click.echo(
        f"{'ID':<6} {'Date':<12} {'Type':<8} {'Amount':>12}  {'Category':<14} {'Description':<40}"
    )
    click.echo("-" * 100)

    for txn in transactions:
        description = txn.description[:40]
        click.echo(
            f"{txn.id:<6} {calendar.date_key(txn.created_at):<12} {txn.type:<8} "
            f"{txn.amount:>12,.2f}  {txn.category:<14} {description:<40}"
        )
        if verbose:
            if txn.notes:
                click.echo(f"{'':<6} Notes: {txn.notes}")
            if txn.tags:
                click.echo(f"{'':<6} Tags: {', '.join(txn.tags)}")
            if txn.receipt_path:
                click.echo(f"{'':<6} Receipt: {txn.receipt_path}")

    total_expenses = sum(txn.amount for txn in transactions if txn.type == EXPENSE)
    total_income = sum(txn.amount for txn in transactions if txn.type == INCOME)
    click.echo("-" * 100)
    click.echo(
        f"{'TOTAL':<6} Expenses: {total_expenses:,.2f} | "
        f"Income: {total_income:,.2f} | Count: {len(transactions)}"
    )


@transaction_group.command("delete")
@click.argument("transaction_id", type=int)
@click.option("--yes", is_flag=True, help="Delete without asking for confirmation")
@click.pass_context
def delete_transaction(ctx, transaction_id: int, yes: bool) -> None:
    """Delete a transaction.

    Examples:
        finboard transaction delete 1
    """
    db = ctx.obj["db"]
    transaction_service = TransactionService(db)

    txn = transaction_service.get_transaction(transaction_id)
    if txn is None:
        click.echo(f"Error: Transaction {transaction_id} not found", err=True)
        ctx.exit(1)

    if not yes and not click.confirm(
        f"Are you sure you want to delete transaction {transaction_id}?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        transaction_service.delete_transaction(transaction_id)
        click.echo(f"Deleted transaction {transaction_id}")
    except ValueError as e:
        handle_domain_error(ctx, e)


def register_commands(cli: click.Group) -> None:
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
