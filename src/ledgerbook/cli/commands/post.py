"""Posting and journal commands."""

import click

from ledgerbook.cli.account_resolution import resolve_account_or_exit
from ledgerbook.cli.context import get_ledger
from ledgerbook.cli.error_handling import handle_domain_error
from ledgerbook.utils.amount_parser import format_currency, parse_amount
from ledgerbook.utils.date_parser import parse_date


@click.command("post")
@click.option("--debit", required=True, help="Debited account (number, ID or name)")
@click.option("--credit", required=True, help="Credited account (number, ID or name)")
@click.option("--amount", required=True, help="Positive amount (e.g., 100 or $1,250.00)")
@click.option("--description", default="", help="Transaction description")
@click.option("--date", "posting_date", help="Posting date (YYYY-MM-DD or 'today', 'yesterday'); defaults to today")
@click.pass_context
def post_transaction(
    ctx,
    debit: str,
    credit: str,
    amount: str,
    description: str,
    posting_date: str | None,
):
    """Post a double-entry transaction.

    Examples:
        ledgerbook post --debit 1000 --credit 4000 --amount 100 --description "Cash sale"
        ledgerbook post --debit "Rent Expense" --credit Cash --amount 2000 --date yesterday
    """
    ledger = get_ledger(ctx)

    debit_id = resolve_account_or_exit(ctx, ledger, debit)
    credit_id = resolve_account_or_exit(ctx, ledger, credit)

    try:
        value = parse_amount(amount)
        txn_date = parse_date(posting_date) if posting_date else None
        transaction = ledger.add_transaction(
            description=description,
            debit_account_id=debit_id,
            credit_account_id=credit_id,
            amount=value,
            date=txn_date,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    debit_account = ledger.get_account(debit_id)
    credit_account = ledger.get_account(credit_id)
    click.echo(f"Posted transaction {transaction.reference_number} ({transaction.date})")
    click.echo(f"  Debit  {debit_account.name}: {format_currency(debit_account.balance)}")
    click.echo(f"  Credit {credit_account.name}: {format_currency(credit_account.balance)}")


@click.command("journal")
@click.option("--limit", type=int, help="Show only the N most recent postings")
@click.pass_context
def show_journal(ctx, limit: int | None):
    """List posted transactions, newest first."""
    ledger = get_ledger(ctx)

    transactions = ledger.recent_transactions(limit=len(ledger.transactions))
    if limit is not None:
        transactions = transactions[:limit]
    if not transactions:
        click.echo("No transactions found.")
        return

    names = {a.id: a.name for a in ledger.accounts}
    click.echo("\nJournal:")
    click.echo("-" * 96)
    for txn in transactions:
        debit_name = names.get(txn.debit_account_id, f"#{txn.debit_account_id}")
        credit_name = names.get(txn.credit_account_id, f"#{txn.credit_account_id}")
        click.echo(
            f"{txn.reference_number} | {txn.date} | {txn.description[:30]:30s} | "
            f"Dr {debit_name[:18]:18s} | Cr {credit_name[:18]:18s} | {format_currency(txn.amount):>12s}"
        )


def register_commands(cli):
    """Register posting commands with main CLI."""
    cli.add_command(post_transaction)
    cli.add_command(show_journal)
