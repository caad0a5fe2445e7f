"""Monthly salary setting commands."""

import click
from finboard.cli.error_handling import handle_domain_error
from finboard.domain.settings import SettingsService
from finboard.utils.amount_parser import parse_amount


@click.group()
def salary_group():
    """Show or set the monthly salary counted in every summary month."""
    pass


@salary_group.command("show")
@click.pass_context
def show_salary(ctx):
    """Show the monthly salary."""
    service = SettingsService(ctx.obj["db"])
    click.echo(f"Monthly salary: {service.get_monthly_salary():,.2f}")


@salary_group.command("set")
@click.argument("amount")
@click.pass_context
def set_salary(ctx, amount: str):
    """Set the monthly salary (0 to disable)."""
    service = SettingsService(ctx.obj["db"])
    try:
        service.set_monthly_salary(parse_amount(amount))
    except ValueError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Monthly salary set to {service.get_monthly_salary():,.2f}")


def register_commands(cli: click.Group) -> None:
    """Register salary commands with main CLI."""
    cli.add_command(salary_group, name="salary")
