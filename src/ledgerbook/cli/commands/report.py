"""Financial report commands."""

from decimal import Decimal

import click

from ledgerbook.cli.context import get_ledger
from ledgerbook.domain.entities import ACCOUNT_TYPES
from ledgerbook.utils.amount_parser import format_currency


@click.group()
def report_group():
    """Financial reports."""
    pass


@report_group.command("trial-balance")
@click.pass_context
def trial_balance(ctx):
    """List every active account balance, grouped by type."""
    ledger = get_ledger(ctx)
    lines = ledger.calculate_trial_balance()

    click.echo("\nTrial Balance:")
    click.echo("=" * 60)
    for account_type in ACCOUNT_TYPES:
        group = [line for line in lines if line.type == account_type]
        if not group:
            continue
        click.echo(f"\n{account_type.capitalize()}")
        click.echo("-" * 60)
        for line in group:
            click.echo(
                f"  {line.account.account_number:6s} {line.account.name:30s} "
                f"{format_currency(line.balance):>18s}"
            )
        total = sum((line.balance for line in group), Decimal("0"))
        click.echo(f"  {'Total ' + account_type:37s} {format_currency(total):>18s}")


@report_group.command("net-income")
@click.pass_context
def net_income(ctx):
    """Show revenue minus expenses."""
    ledger = get_ledger(ctx)
    click.echo(f"Revenue:    {format_currency(ledger.total_balance('revenue')):>18s}")
    click.echo(f"Expenses:   {format_currency(ledger.total_balance('expense')):>18s}")
    click.echo(f"Net income: {format_currency(ledger.calculate_net_income()):>18s}")


@report_group.command("dashboard")
@click.pass_context
def dashboard(ctx):
    """Show headline figures and the five most recent postings."""
    ledger = get_ledger(ctx)
    metrics = ledger.dashboard_metrics()

    click.echo(f"Total assets:      {format_currency(metrics['total-assets']):>18s}")
    click.echo(f"Total liabilities: {format_currency(metrics['total-liabilities']):>18s}")
    click.echo(f"Net income:        {format_currency(metrics['net-income']):>18s}")
    click.echo(f"Cash balance:      {format_currency(metrics['cash-balance']):>18s}")

    click.echo("\nRecent transactions:")
    click.echo("-" * 72)
    for txn in metrics["recent-transactions"]:
        click.echo(f"{txn.date} | {txn.description[:40]:40s} | +{format_currency(txn.amount)}")


def register_commands(cli):
    """Register report commands with main CLI."""
    cli.add_command(report_group, name="report")
