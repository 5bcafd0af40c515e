"""Ledger posting engine.

The ledger keeps the chart of accounts and the journal in memory, applies
each posting to the two accounts it references under the normal-balance
convention, and writes its whole state back to a key-value store after
every change.
"""

import logging
from dataclasses import replace
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from ledgerbook.database.kv import KeyValueStore
from ledgerbook.database.records import (
    account_from_record,
    account_to_record,
    transaction_from_record,
    transaction_to_record,
    user_from_record,
    user_to_record,
)
from ledgerbook.domain.entities import (
    ASSET,
    EXPENSE,
    LIABILITY,
    REVENUE,
    Account,
    Transaction,
    TrialBalanceLine,
    User,
    validate_account_type,
    validate_patch,
)
from ledgerbook.domain.errors import ValidationError, invalid_transaction
from ledgerbook.domain.seed import CHART_OF_ACCOUNTS, SAMPLE_TRANSACTIONS

logger = logging.getLogger(__name__)

ACCOUNTS_KEY = "aibos_accounts"
TRANSACTIONS_KEY = "aibos_transactions"
USER_KEY = "aibos_user"

REFERENCE_WIDTH = 6
CASH_ACCOUNT_ID = 1
DEFAULT_USER_ID = 1


class Ledger:
    """Chart of accounts, journal and the double-entry posting rule."""

    def __init__(
        self,
        kv: KeyValueStore,
        seed_sample_transactions: bool = True,
        strict_references: bool = False,
    ):
        """Initialize ledger.

        Args:
            kv: Key-value store holding the ledger state
            seed_sample_transactions: Seed the sample postings into an empty
                journal on first load
            strict_references: Reject postings whose account ids do not
                resolve instead of skipping the missing side
        """
        self.kv = kv
        self.seed_sample_transactions = seed_sample_transactions
        self.strict_references = strict_references
        self.current_user: Optional[User] = None
        self._accounts: list[Account] = []
        self._transactions: list[Transaction] = []

    @classmethod
    def open(cls, kv: KeyValueStore, **options: Any) -> "Ledger":
        """Create a ledger and load its state."""
        ledger = cls(kv, **options)
        ledger.load()
        return ledger

    # Persistence
    def load(self) -> None:
        """Load state, seeding the chart and journal on first run.

        Seeded postings are not re-applied; the seeded balances include them.
        """
        seeded = False

        account_records = self.kv.get_json(ACCOUNTS_KEY)
        if account_records is None:
            self._accounts = list(CHART_OF_ACCOUNTS)
            logger.info("Seeded chart of accounts (%d accounts)", len(self._accounts))
            seeded = True
        else:
            self._accounts = [account_from_record(r) for r in account_records]

        transaction_records = self.kv.get_json(TRANSACTIONS_KEY)
        if transaction_records is None:
            self._transactions = list(SAMPLE_TRANSACTIONS) if self.seed_sample_transactions else []
            seeded = True
        else:
            self._transactions = [transaction_from_record(r) for r in transaction_records]

        user_record = self.kv.get_json(USER_KEY)
        self.current_user = user_from_record(user_record) if user_record else None

        if seeded:
            self.save()

    def save(self) -> None:
        """Write accounts, transactions and the current user."""
        self.kv.set_json(ACCOUNTS_KEY, [account_to_record(a) for a in self._accounts])
        self.kv.set_json(TRANSACTIONS_KEY, [transaction_to_record(t) for t in self._transactions])
        if self.current_user is not None:
            self.kv.set_json(USER_KEY, user_to_record(self.current_user))

    def set_current_user(self, user: Optional[User]) -> None:
        """Set the actor recorded on new postings."""
        self.current_user = user
        if user is None:
            self.kv.remove_item(USER_KEY)
        self.save()

    # Read access
    @property
    def accounts(self) -> tuple[Account, ...]:
        return tuple(self._accounts)

    @property
    def transactions(self) -> tuple[Transaction, ...]:
        return tuple(self._transactions)

    def get_account(self, account_id: int) -> Optional[Account]:
        index = self._account_index(account_id)
        return None if index is None else self._accounts[index]

    def _account_index(self, account_id: Optional[int]) -> Optional[int]:
        for index, account in enumerate(self._accounts):
            if account.id == account_id:
                return index
        return None

    # Account management
    def add_account(
        self, account_number: str, name: str, type: str, description: str = ""
    ) -> Account:
        """Add an account with a zero balance.

        Account numbers are not checked for uniqueness here.

        Raises:
            ValidationError: If the account type is unknown
        """
        validate_account_type(type)
        account = Account(
            id=max((a.id for a in self._accounts), default=0) + 1,
            account_number=account_number,
            name=name,
            type=type,
            description=description,
            active=True,
            balance=Decimal("0"),
        )
        self._accounts.append(account)
        self.save()
        return account

    def update_account(self, account_id: int, **patch: Any) -> Optional[Account]:
        """Merge fields into an account. Unknown ids are ignored.

        Returns:
            The updated account, or None if the id did not resolve

        Raises:
            ValidationError: If the patch names ``id`` or unknown fields
        """
        validate_patch(Account, patch)
        index = self._account_index(account_id)
        if index is None:
            return None
        if "balance" in patch:
            patch["balance"] = Decimal(str(patch["balance"]))
        account = replace(self._accounts[index], **patch)
        self._accounts[index] = account
        self.save()
        return account

    def deactivate_account(self, account_id: int) -> None:
        """Soft-delete an account. Its balance and postings are kept."""
        index = self._account_index(account_id)
        if index is None:
            return
        self._accounts[index] = replace(self._accounts[index], active=False)
        self.save()

    # Postings
    def next_reference_number(self) -> str:
        """Return the reference that follows the last posted transaction."""
        last_number = int(self._transactions[-1].reference_number) if self._transactions else 0
        return str(last_number + 1).zfill(REFERENCE_WIDTH)

    def _posting_problems(
        self, debit_account_id: Any, credit_account_id: Any, amount: Optional[Decimal]
    ) -> list[str]:
        problems = []
        if not debit_account_id:
            problems.append("debit account is required")
        if not credit_account_id:
            problems.append("credit account is required")
        if amount is None or not amount > 0:
            problems.append("amount must be positive")
        if self.strict_references:
            if debit_account_id and self.get_account(debit_account_id) is None:
                problems.append(f"debit account {debit_account_id} not found")
            if credit_account_id and self.get_account(credit_account_id) is None:
                problems.append(f"credit account {credit_account_id} not found")
        return problems

    def validate_transaction(
        self, debit_account_id: Any, credit_account_id: Any, amount: Any
    ) -> bool:
        """True if a posting with these fields would be accepted."""
        try:
            return not self._posting_problems(debit_account_id, credit_account_id, _to_amount(amount))
        except ValidationError:
            return False

    def add_transaction(
        self,
        description: str,
        debit_account_id: Optional[int],
        credit_account_id: Optional[int],
        amount: Any,
        date: Optional[date | str] = None,
    ) -> Transaction:
        """Post a transaction and update both account balances.

        Args:
            description: Free-text description
            debit_account_id: Account debited
            credit_account_id: Account credited
            amount: Positive amount (Decimal, int, float or numeric string)
            date: Posting date or ISO date string; defaults to today

        Returns:
            The recorded transaction

        Raises:
            ValidationError: If an account id is missing or the amount is not
                positive. Nothing is recorded in that case.
        """
        value = _to_amount(amount)
        problems = self._posting_problems(debit_account_id, credit_account_id, value)
        if problems:
            raise ValidationError(invalid_transaction(problems))

        if isinstance(date, str):
            posting_date = _parse_iso_date(date)
        else:
            posting_date = date or _today()

        transaction = Transaction(
            id=max((t.id for t in self._transactions), default=0) + 1,
            reference_number=self.next_reference_number(),
            date=posting_date,
            description=description or "",
            debit_account_id=debit_account_id,
            credit_account_id=credit_account_id,
            amount=value,
            user_id=self.current_user.id if self.current_user else DEFAULT_USER_ID,
        )

        self._transactions.append(transaction)
        self._apply_posting(transaction)
        self.save()
        logger.debug(
            "Posted %s: %s debit %s credit %s",
            transaction.reference_number,
            transaction.amount,
            transaction.debit_account_id,
            transaction.credit_account_id,
        )
        return transaction

    def _apply_posting(self, transaction: Transaction) -> None:
        """Move both balances by the posting amount.

        A side whose account id does not resolve is skipped.
        """
        amount = transaction.amount
        sides = (
            ("debit", transaction.debit_account_id, True),
            ("credit", transaction.credit_account_id, False),
        )
        for side, account_id, is_debit in sides:
            index = self._account_index(account_id)
            if index is None:
                logger.warning(
                    "Transaction %s: %s account %s not found, balance not updated",
                    transaction.reference_number,
                    side,
                    account_id,
                )
                continue
            account = self._accounts[index]
            # A side increases the balance when it matches the normal side
            delta = amount if account.is_debit_normal == is_debit else -amount
            self._accounts[index] = replace(account, balance=account.balance + delta)

    # Reports
    def calculate_trial_balance(self) -> list[TrialBalanceLine]:
        """List every active account with its balance and type."""
        return [
            TrialBalanceLine(account=a, balance=a.balance, type=a.type)
            for a in self._accounts
            if a.active
        ]

    def total_balance(self, account_type: str) -> Decimal:
        """Sum the balances of active accounts of one type."""
        return sum(
            (a.balance for a in self._accounts if a.type == account_type and a.active),
            Decimal("0"),
        )

    def calculate_net_income(self) -> Decimal:
        """Active revenue balances minus active expense balances."""
        return self.total_balance(REVENUE) - self.total_balance(EXPENSE)

    def get_account_balance(self, account_id: int) -> Decimal:
        account = self.get_account(account_id)
        return account.balance if account else Decimal("0")

    def recent_transactions(self, limit: int = 5) -> list[Transaction]:
        """Most recent postings by date, newest first."""
        return sorted(self._transactions, key=lambda t: t.date, reverse=True)[:limit]

    def dashboard_metrics(self) -> dict[str, Any]:
        """Headline figures keyed by their dashboard element ids."""
        return {
            "total-assets": self.total_balance(ASSET),
            "total-liabilities": self.total_balance(LIABILITY),
            "net-income": self.calculate_net_income(),
            "cash-balance": self.get_account_balance(CASH_ACCOUNT_ID),
            "recent-transactions": self.recent_transactions(),
        }


def _to_amount(amount: Any) -> Optional[Decimal]:
    if amount is None:
        return None
    try:
        value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
    except InvalidOperation:
        value = None
    if value is None or not value.is_finite():
        raise ValidationError(invalid_transaction([f"amount '{amount}' is not a number"]))
    return value


def _parse_iso_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise ValidationError(f"Invalid transaction date '{value}'") from None


def _today() -> date:
    return date.today()
