"""CLI helpers for account resolution."""

from __future__ import annotations

import click

from ledgerbook.cli.error_handling import handle_domain_error
from ledgerbook.domain.ledger import Ledger
from ledgerbook.utils.account_resolver import resolve_account


def resolve_account_or_exit(ctx: click.Context, ledger: Ledger, account: str | int) -> int:
    """Resolve account number, ID or name, or exit with a CLI error.

    This keeps error messaging and exit behavior consistent across commands.
    """
    try:
        return resolve_account(ledger, account)
    except ValueError as exc:
        handle_domain_error(ctx, exc)
