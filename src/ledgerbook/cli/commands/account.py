"""Chart-of-accounts commands."""

import click

from ledgerbook.cli.account_resolution import resolve_account_or_exit
from ledgerbook.cli.context import get_ledger
from ledgerbook.cli.error_handling import handle_domain_error
from ledgerbook.domain.entities import ACCOUNT_TYPES
from ledgerbook.utils.amount_parser import format_currency


@click.group()
def account_group():
    """Manage the chart of accounts."""
    pass


@account_group.command("list")
@click.option("--all", "show_all", is_flag=True, help="Include deactivated accounts")
@click.pass_context
def list_accounts(ctx, show_all: bool):
    """List accounts with their balances."""
    ledger = get_ledger(ctx)

    accounts = [a for a in ledger.accounts if show_all or a.active]
    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 72)
    for acc in accounts:
        status = "" if acc.active else " (inactive)"
        click.echo(
            f"ID: {acc.id:3d} | {acc.account_number:6s} | {acc.name:24s} | "
            f"{acc.type:9s} | {format_currency(acc.balance):>14s}{status}"
        )


@account_group.command("create")
@click.argument("number", metavar="ACCOUNT_NUMBER")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.option("--type", "account_type", required=True, type=click.Choice(ACCOUNT_TYPES), help="Account type")
@click.option("--description", default="", help="Account description")
@click.pass_context
def create_account(ctx, number: str, name: str, account_type: str, description: str):
    """Create a new account with a zero balance.

    Examples:
        ledgerbook account create 1400 "Prepaid Rent" --type asset
        ledgerbook account create 5600 "Travel" --type expense --description "Trips"
    """
    ledger = get_ledger(ctx)

    try:
        account = ledger.add_account(number, name, account_type, description)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created account {account.account_number} '{account.name}' (ID: {account.id})")


@account_group.command("update")
@click.argument("account", metavar="ACCOUNT")
@click.option("--number", help="New account number")
@click.option("--name", help="New account name")
@click.option("--type", "account_type", type=click.Choice(ACCOUNT_TYPES), help="New account type")
@click.option("--description", help="New description")
@click.pass_context
def update_account(
    ctx,
    account: str,
    number: str | None,
    name: str | None,
    account_type: str | None,
    description: str | None,
):
    """Update account fields.

    ACCOUNT can be an account number, ID or name.

    Examples:
        ledgerbook account update 1000 --name "Cash at Bank"
        ledgerbook account update "Travel" --description "Business travel"
    """
    ledger = get_ledger(ctx)
    account_id = resolve_account_or_exit(ctx, ledger, account)

    patch = {}
    if number is not None:
        patch["account_number"] = number
    if name is not None:
        patch["name"] = name
    if account_type is not None:
        patch["type"] = account_type
    if description is not None:
        patch["description"] = description

    if not patch:
        click.echo("Nothing to update. Use --number, --name, --type or --description.")
        return

    try:
        updated = ledger.update_account(account_id, **patch)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated account {updated.account_number} '{updated.name}'")


@account_group.command("deactivate")
@click.argument("account", metavar="ACCOUNT")
@click.pass_context
def deactivate_account(ctx, account: str):
    """Deactivate an account.

    The account keeps its balance and postings but no longer appears in
    the trial balance or totals.
    """
    ledger = get_ledger(ctx)
    account_id = resolve_account_or_exit(ctx, ledger, account)

    ledger.deactivate_account(account_id)
    deactivated = ledger.get_account(account_id)
    click.echo(f"Deactivated account {deactivated.account_number} '{deactivated.name}'")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
