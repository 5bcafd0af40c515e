"""Tests for account commands."""

from ledgerbook.cli.main import cli


def _invoke(cli_runner, home, *args):
    return cli_runner.invoke(cli, ["--home", home, *args])


def test_account_list_seeds_chart(cli_runner, home):
    """Test the first command run seeds the default chart of accounts."""
    result = _invoke(cli_runner, home, "account", "list")

    assert result.exit_code == 0
    assert "Accounts:" in result.output
    assert "Cash" in result.output
    assert "$35,000.00" in result.output
    assert "Insurance Expense" in result.output


def test_account_list_empty(cli_runner, home, tmp_path):
    ledger_dir = tmp_path / "home" / "ledger"
    ledger_dir.mkdir()
    (ledger_dir / "aibos_accounts.json").write_text("[]", encoding="utf-8")

    result = _invoke(cli_runner, home, "account", "list")

    assert result.exit_code == 0
    assert "No accounts found" in result.output


def test_account_create(cli_runner, home):
    result = _invoke(cli_runner, home, "account", "create", "1400", "Prepaid Rent", "--type", "asset")

    assert result.exit_code == 0
    assert "Created account 1400 'Prepaid Rent' (ID: 19)" in result.output

    listing = _invoke(cli_runner, home, "account", "list")
    assert "Prepaid Rent" in listing.output


def test_account_create_invalid_type(cli_runner, home):
    result = _invoke(cli_runner, home, "account", "create", "9000", "Mystery", "--type", "income")
    assert result.exit_code == 2


def test_account_update_by_number(cli_runner, home):
    result = _invoke(cli_runner, home, "account", "update", "1000", "--name", "Cash at Bank")

    assert result.exit_code == 0
    assert "Updated account 1000 'Cash at Bank'" in result.output


def test_account_update_by_name(cli_runner, home):
    result = _invoke(cli_runner, home, "account", "update", "Rent Expense", "--number", "5150")

    assert result.exit_code == 0
    assert "Updated account 5150 'Rent Expense'" in result.output


def test_account_update_nothing(cli_runner, home):
    result = _invoke(cli_runner, home, "account", "update", "1000")

    assert result.exit_code == 0
    assert "Nothing to update" in result.output


def test_account_update_unknown(cli_runner, home):
    result = _invoke(cli_runner, home, "account", "update", "Petty Cash", "--name", "X")

    assert result.exit_code == 1
    assert "Account 'Petty Cash' not found" in result.output


def test_account_deactivate(cli_runner, home):
    result = _invoke(cli_runner, home, "account", "deactivate", "Sales Revenue")

    assert result.exit_code == 0
    assert "Deactivated account 4000 'Sales Revenue'" in result.output

    active = _invoke(cli_runner, home, "account", "list")
    assert "Sales Revenue" not in active.output

    everything = _invoke(cli_runner, home, "account", "list", "--all")
    assert "Sales Revenue" in everything.output
    assert "(inactive)" in everything.output
