"""Tests for account reference resolution."""

import pytest

from ledgerbook.domain.errors import NotFoundError
from ledgerbook.utils.account_resolver import resolve_account


def test_resolves_account_number_before_id(fresh_ledger):
    """Test "4" resolves to ID 4 but "1000" to the account numbered 1000."""
    assert resolve_account(fresh_ledger, "1000") == 1
    assert resolve_account(fresh_ledger, "4") == 4


def test_resolves_name(fresh_ledger):
    assert resolve_account(fresh_ledger, "Sales Revenue") == 10
    assert resolve_account(fresh_ledger, " Cash ") == 1


def test_resolves_integer_id(fresh_ledger):
    assert resolve_account(fresh_ledger, 14) == 14


def test_number_shadowing_an_id(fresh_ledger):
    account = fresh_ledger.add_account("7", "Seven", "asset")
    assert resolve_account(fresh_ledger, "7") == account.id


@pytest.mark.parametrize("reference", ["Petty Cash", "9999", 99])
def test_not_found(fresh_ledger, reference):
    with pytest.raises(NotFoundError, match="not found"):
        resolve_account(fresh_ledger, reference)
