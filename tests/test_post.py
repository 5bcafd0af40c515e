"""Tests for posting and journal commands."""

from datetime import date

from ledgerbook.cli.main import cli


def _invoke(cli_runner, home, *args):
    return cli_runner.invoke(cli, ["--home", home, *args])


def test_post_cash_sale(cli_runner, home):
    result = _invoke(
        cli_runner, home, "post", "--debit", "1000", "--credit", "4000", "--amount", "100", "--description", "Test"
    )

    assert result.exit_code == 0
    assert f"Posted transaction 000006 ({date.today()})" in result.output
    assert "Debit  Cash: $35,100.00" in result.output
    assert "Credit Sales Revenue: $50,100.00" in result.output


def test_post_by_account_name_and_date(cli_runner, home):
    result = _invoke(
        cli_runner,
        home,
        "post",
        "--debit", "Rent Expense",
        "--credit", "Cash",
        "--amount", "$2,000.00",
        "--date", "2024-03-01",
    )

    assert result.exit_code == 0
    assert "Posted transaction 000006 (2024-03-01)" in result.output
    assert "Debit  Rent Expense: $14,000.00" in result.output
    assert "Credit Cash: $33,000.00" in result.output


def test_post_persists_between_runs(cli_runner, home):
    _invoke(cli_runner, home, "post", "--debit", "1000", "--credit", "4000", "--amount", "100")
    result = _invoke(cli_runner, home, "post", "--debit", "1000", "--credit", "4000", "--amount", "100")

    assert "Posted transaction 000007" in result.output
    assert "Debit  Cash: $35,200.00" in result.output


def test_post_rejects_zero_amount(cli_runner, home):
    result = _invoke(cli_runner, home, "post", "--debit", "1000", "--credit", "4000", "--amount", "0")

    assert result.exit_code == 1
    assert "Invalid transaction: Debits must equal credits" in result.output

    journal = _invoke(cli_runner, home, "journal")
    assert "000006" not in journal.output


def test_post_rejects_unparseable_amount(cli_runner, home):
    result = _invoke(cli_runner, home, "post", "--debit", "1000", "--credit", "4000", "--amount", "lots")

    assert result.exit_code == 1
    assert "Could not parse amount" in result.output


def test_post_unknown_account(cli_runner, home):
    result = _invoke(cli_runner, home, "post", "--debit", "Petty Cash", "--credit", "4000", "--amount", "5")

    assert result.exit_code == 1
    assert "not found" in result.output


def test_post_requires_accounts(cli_runner, home):
    result = _invoke(cli_runner, home, "post", "--amount", "5")
    assert result.exit_code == 2


def test_journal_lists_newest_first(cli_runner, home):
    result = _invoke(cli_runner, home, "journal")

    assert result.exit_code == 0
    assert "Journal:" in result.output
    assert result.output.index("000001") < result.output.index("000005")
    assert "Dr Cash" in result.output
    assert "Cr Sales Revenue" in result.output


def test_journal_limit(cli_runner, home):
    _invoke(cli_runner, home, "post", "--debit", "1000", "--credit", "4000", "--amount", "1", "--date", "2024-06-30")

    result = _invoke(cli_runner, home, "journal", "--limit", "1")

    assert result.exit_code == 0
    assert "000006" in result.output
    assert "000001" not in result.output


def test_journal_empty(cli_runner, home, tmp_path):
    ledger_dir = tmp_path / "home" / "ledger"
    ledger_dir.mkdir()
    (ledger_dir / "aibos_transactions.json").write_text("[]", encoding="utf-8")

    result = _invoke(cli_runner, home, "journal")

    assert "No transactions found" in result.output
