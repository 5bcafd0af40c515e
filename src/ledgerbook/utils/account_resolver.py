"""Utility for resolving account references to IDs."""

from ledgerbook.domain.errors import NotFoundError, account_not_found, account_reference_not_found
from ledgerbook.domain.ledger import Ledger


def resolve_account(ledger: Ledger, account: str | int) -> int:
    """Resolve an account number, ID or name to an account ID.

    Lookup order for strings is account number, then numeric ID, then exact
    name, so "1000" means account number 1000 rather than ID 1000.

    Raises:
        NotFoundError: If nothing matches
    """
    if isinstance(account, int):
        if ledger.get_account(account) is None:
            raise NotFoundError(account_not_found(account))
        return account

    reference = account.strip()
    for acc in ledger.accounts:
        if acc.account_number == reference:
            return acc.id

    try:
        account_id = int(reference)
    except ValueError:
        account_id = None
    if account_id is not None and ledger.get_account(account_id) is not None:
        return account_id

    for acc in ledger.accounts:
        if acc.name == reference:
            return acc.id

    raise NotFoundError(account_reference_not_found(reference))
