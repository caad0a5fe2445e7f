"""Recurring rule commands."""

import click
from finboard.cli.error_handling import handle_domain_error
from finboard.domain.entities import CATEGORIES, FREQUENCIES, MONTHLY, TRANSACTION_TYPES
from finboard.domain.recurring import RecurringRuleService
from finboard.utils.amount_parser import parse_amount
from finboard.utils.date_parser import parse_date

WEEKDAY_NAMES = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]


@click.group()
def recurring_group():
    """Manage recurring payments and income."""
    pass


@recurring_group.command("add")
@click.option("--amount", required=True, help="Amount per occurrence (e.g., 3600)")
@click.option("--description", required=True, help="Rule description")
@click.option(
    "--category",
    type=click.Choice(CATEGORIES),
    default="Bills",
    show_default=True,
    help="Category of the generated payments",
)
@click.option(
    "--type",
    "type_",
    type=click.Choice(TRANSACTION_TYPES),
    default="expense",
    show_default=True,
    help="Expense or income",
)
@click.option(
    "--frequency",
    type=click.Choice(FREQUENCIES),
    default=MONTHLY,
    show_default=True,
    help="How often the rule repeats",
)
@click.option("--day-of-month", type=click.IntRange(1, 31), help="Day of month for monthly rules")
@click.option(
    "--day-of-week",
    type=click.IntRange(0, 6),
    help="Day of week for weekly rules (0 = Sunday, 6 = Saturday)",
)
@click.option("--start-date", help="First date the rule applies (YYYY-MM-DD)")
@click.pass_context
def add_rule(
    ctx,
    amount: str,
    description: str,
    category: str,
    type_: str,
    frequency: str,
    day_of_month: int | None,
    day_of_week: int | None,
    start_date: str | None,
):
    """Add a recurring rule.

    Examples:
        finboard recurring add --amount 3600 --description Rent --day-of-month 1
        finboard recurring add --amount 50 --description Gym --frequency weekly --day-of-week 1
    """
    db = ctx.obj["db"]
    calendar = ctx.obj["calendar"]
    service = RecurringRuleService(db)

    try:
        rule_amount = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    start = None
    if start_date:
        try:
            start = parse_date(start_date, today=calendar.now().date())
        except ValueError as e:
            click.echo(f"Error: Invalid start date: {e}", err=True)
            ctx.exit(1)

    try:
        rule_id = service.create_rule(
            amount=rule_amount,
            description=description,
            category=category,
            type=type_,
            frequency=frequency,
            day_of_month=day_of_month,
            day_of_week=day_of_week,
            start_date=start,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Created recurring rule {rule_id}")


@recurring_group.command("list")
@click.option("--active-only", is_flag=True, help="Hide inactive rules")
@click.pass_context
def list_rules(ctx, active_only: bool):
    """List recurring rules, newest first."""
    db = ctx.obj["db"]
    service = RecurringRuleService(db)

    rules = service.list_rules(active_only=active_only)
    if not rules:
        click.echo("No recurring rules found.")
        return

    click.echo(
        f"{'ID':<6} {'Schedule':<14} {'Type':<8} {'Amount':>12}  {'Category':<14} "
        f"{'Active':<7} {'Description':<30}"
    )
    click.echo("-" * 100)
    for rule in rules:
        click.echo(
            f"{rule.id:<6} {format_schedule(rule):<14} {rule.type:<8} {rule.amount:>12,.2f}  "
            f"{rule.category:<14} {'yes' if rule.active else 'no':<7} {rule.description[:30]:<30}"
        )


def format_schedule(rule) -> str:
    """Short schedule text such as 'day 15' or 'every Mon'."""
    if rule.frequency == MONTHLY:
        return f"day {rule.day_of_month}"
    if rule.day_of_week is not None and 0 <= rule.day_of_week <= 6:
        return f"every {WEEKDAY_NAMES[rule.day_of_week]}"
    return rule.frequency


@recurring_group.command("toggle")
@click.argument("rule_id", type=int)
@click.option("--active/--inactive", default=True, help="Activate or deactivate the rule")
@click.pass_context
def toggle_rule(ctx, rule_id: int, active: bool):
    """Activate or deactivate a recurring rule."""
    db = ctx.obj["db"]
    service = RecurringRuleService(db)
    try:
        service.toggle_rule(rule_id, active)
        click.echo(f"Recurring rule {rule_id} is now {'active' if active else 'inactive'}")
    except ValueError as e:
        handle_domain_error(ctx, e)


@recurring_group.command("delete")
@click.argument("rule_id", type=int)
@click.pass_context
def delete_rule(ctx, rule_id: int):
    """Delete a recurring rule."""
    db = ctx.obj["db"]
    service = RecurringRuleService(db)
    try:
        service.delete_rule(rule_id)
        click.echo(f"Deleted recurring rule {rule_id}")
    except ValueError as e:
        handle_domain_error(ctx, e)


def register_commands(cli: click.Group) -> None:
    """Register recurring commands with main CLI."""
    cli.add_command(recurring_group, name="recurring")
