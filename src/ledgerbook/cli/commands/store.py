"""Record store commands: seeding, backup and restore, date-range queries."""

import json

import click

from ledgerbook.cli.context import get_store
from ledgerbook.cli.date_filters import period_options, resolve_cli_date_range
from ledgerbook.cli.error_handling import fail, handle_domain_error
from ledgerbook.utils.amount_parser import format_currency


@click.group()
def store_group():
    """Manage the record store."""
    pass


@store_group.command("info")
@click.pass_context
def store_info(ctx):
    """Show the active backend and record counts."""
    store = get_store(ctx)
    click.echo(f"Backend: {store.backend_name}")
    click.echo(f"Accounts: {len(store.get_all_accounts())}")
    click.echo(f"Transactions: {len(store.get_all_transactions())}")
    click.echo(f"Users: {len(store.get_all_users())}")


@store_group.command("seed")
@click.pass_context
def seed_store(ctx):
    """Seed the default chart of accounts into an empty store."""
    store = get_store(ctx)
    if store.seed_initial_data():
        click.echo(f"Seeded {len(store.get_all_accounts())} accounts.")
    else:
        click.echo("Store already has accounts; nothing seeded.")


@store_group.command("export")
@click.option("--output", "-o", type=click.Path(dir_okay=False, writable=True), help="Write to FILE instead of stdout")
@click.pass_context
def export_store(ctx, output: str | None):
    """Export accounts, transactions and users as JSON."""
    store = get_store(ctx)
    text = json.dumps(store.export_data(), indent=2)
    if output is None:
        click.echo(text)
        return
    with open(output, "w", encoding="utf-8") as handle:
        handle.write(text)
    click.echo(f"Exported to {output}")


@store_group.command("import")
@click.argument("snapshot_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def import_store(ctx, snapshot_file: str, yes: bool):
    """Replace store contents with an exported JSON snapshot.

    Existing accounts, transactions and users are removed first.
    """
    store = get_store(ctx)

    with open(snapshot_file, encoding="utf-8") as handle:
        try:
            snapshot = json.load(handle)
        except json.JSONDecodeError as e:
            fail(ctx, f"{snapshot_file} is not valid JSON: {e}")
    if not isinstance(snapshot, dict):
        fail(ctx, "Malformed snapshot: expected a JSON object")

    if not yes and not click.confirm("This replaces all accounts, transactions and users. Continue?"):
        click.echo("Import cancelled.")
        return

    try:
        store.import_data(snapshot)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(
        f"Imported {len(snapshot.get('accounts') or [])} accounts, "
        f"{len(snapshot.get('transactions') or [])} transactions, "
        f"{len(snapshot.get('users') or [])} users."
    )


@store_group.command("transactions")
@click.option("--start-date", help="First date to include")
@click.option("--end-date", help="Last date to include")
@period_options
@click.pass_context
def list_transactions(ctx, start_date: str | None, end_date: str | None, **period_flags: bool):
    """List stored transactions in a date range.

    Examples:
        ledgerbook store transactions --start-date 2024-01-01 --end-date 2024-01-31
        ledgerbook store transactions --last-month
    """
    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags={k.replace("_", "-"): v for k, v in period_flags.items()},
    )
    store = get_store(ctx)

    transactions = store.get_transactions_by_date_range(start, end)
    if not transactions:
        click.echo("No transactions found.")
        return

    for txn in transactions:
        click.echo(
            f"{txn.reference_number} | {txn.date} | {txn.description[:30]:30s} | "
            f"{txn.debit_account_id:>4d} -> {txn.credit_account_id:<4d} | {format_currency(txn.amount):>12s}"
        )


def register_commands(cli):
    """Register record store commands with main CLI."""
    cli.add_command(store_group, name="store")
