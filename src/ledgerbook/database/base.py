"""Abstract record store interface."""

import logging
from abc import ABC, abstractmethod
from datetime import UTC, date, datetime
from decimal import Decimal
from typing import Any, Iterable, Optional

# Import entities directly to avoid circular import through domain/__init__.py
from ledgerbook.domain.entities import (
    Account,
    Setting,
    Transaction,
    User,
    validate_account_type,
    validate_patch,
)
from ledgerbook.domain.errors import ValidationError
from ledgerbook.domain.seed import CHART_OF_ACCOUNTS, SAMPLE_TRANSACTIONS, SEED_USERS
from ledgerbook.database.records import (
    RECORD_CODECS,
    account_from_record,
    account_to_record,
    entity_values,
    to_decimal,
    transaction_from_record,
    transaction_to_record,
    user_from_record,
    user_to_record,
)

logger = logging.getLogger(__name__)

ACCOUNTS = "accounts"
TRANSACTIONS = "transactions"
USERS = "users"

# Collections covered by export/import
COLLECTIONS = (ACCOUNTS, TRANSACTIONS, USERS)

# Money columns hold cents
MONEY_PLACES = 2

# Secondary unique indexes per collection, by entity field name
UNIQUE_FIELDS = {
    ACCOUNTS: ("account_number",),
    TRANSACTIONS: ("reference_number",),
    USERS: ("email",),
}


def entity_type(collection: str) -> type:
    """Return the entity type stored in a collection.

    Raises:
        ValueError: If the collection is unknown
    """
    try:
        return RECORD_CODECS[collection][0]
    except KeyError:
        raise ValueError(f"Unknown collection '{collection}'") from None


def to_money(value: Any, field: str) -> Decimal:
    """Return a money value as a Decimal with at most two decimal places.

    Finer amounts are rejected, not rounded.

    Raises:
        ValidationError: If the value is not a number or has more than two
            decimal places
    """
    amount = to_decimal(value)
    if amount.normalize().as_tuple().exponent < -MONEY_PLACES:
        raise ValidationError(f"{field} '{value}' has more than {MONEY_PLACES} decimal places")
    return amount


class RecordStore(ABC):
    """Abstract record store for ledgerbook.

    Backends implement the collection primitives; the typed account,
    transaction and user operations, seeding and export/import are shared.
    """

    backend_name = "abstract"

    @abstractmethod
    def open(self) -> "RecordStore":
        """Open the backend and return self."""
        pass

    @abstractmethod
    def close(self) -> None:
        """Release backend resources."""
        pass

    def __enter__(self) -> "RecordStore":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # Collection primitives
    @abstractmethod
    def insert(self, collection: str, values: dict[str, Any]) -> int:
        """Insert a record. Returns its ID.

        ``values`` is keyed by entity field name. A non-None ``id`` is kept;
        otherwise the backend assigns the next id.

        Raises:
            ConflictError: If the id or a unique field is already taken
        """
        pass

    @abstractmethod
    def fetch_all(self, collection: str) -> list[Any]:
        """Return every entity in a collection, ordered by id."""
        pass

    @abstractmethod
    def fetch(self, collection: str, record_id: int) -> Optional[Any]:
        """Return one entity by id, or None."""
        pass

    @abstractmethod
    def fetch_by_field(self, collection: str, field: str, value: Any) -> Optional[Any]:
        """Return the first entity whose field equals value, or None."""
        pass

    @abstractmethod
    def update(self, collection: str, record_id: int, patch: dict[str, Any]) -> Optional[Any]:
        """Merge a patch into a record. Returns the new entity, or None if absent."""
        pass

    @abstractmethod
    def delete(self, collection: str, record_id: int) -> None:
        """Delete a record. Deleting an absent record is a no-op."""
        pass

    @abstractmethod
    def clear(self, collections: Iterable[str]) -> None:
        """Remove every record from the given collections."""
        pass

    @abstractmethod
    def get_transactions_by_date_range(self, start: date, end: date) -> list[Transaction]:
        """List transactions dated within [start, end], ordered by date then id."""
        pass

    # Settings
    @abstractmethod
    def get_setting(self, key: str, default: Any = None) -> Any:
        """Return a setting value, or default if unset."""
        pass

    @abstractmethod
    def set_setting(self, key: str, value: Any) -> None:
        """Create or replace a setting."""
        pass

    @abstractmethod
    def delete_setting(self, key: str) -> None:
        """Remove a setting. Removing an unset key is a no-op."""
        pass

    @abstractmethod
    def get_all_settings(self) -> list[Setting]:
        """List all settings ordered by key."""
        pass

    # Account operations
    def add_account(
        self,
        account_number: str,
        name: str,
        type: str,
        description: str = "",
        active: bool = True,
        balance: Decimal = Decimal("0"),
        id: Optional[int] = None,
    ) -> int:
        """Create an account. Returns account ID."""
        validate_account_type(type)
        return self.insert(
            ACCOUNTS,
            {
                "id": id,
                "account_number": account_number,
                "name": name,
                "type": type,
                "description": description,
                "active": active,
                "balance": to_money(balance, "balance"),
            },
        )

    def get_all_accounts(self) -> list[Account]:
        return self.fetch_all(ACCOUNTS)

    def get_account_by_id(self, account_id: int) -> Optional[Account]:
        return self.fetch(ACCOUNTS, account_id)

    def get_account_by_number(self, account_number: str) -> Optional[Account]:
        return self.fetch_by_field(ACCOUNTS, "account_number", account_number)

    def update_account(self, account_id: int, **patch: Any) -> Optional[Account]:
        validate_patch(Account, patch)
        if "balance" in patch:
            patch["balance"] = to_money(patch["balance"], "balance")
        return self.update(ACCOUNTS, account_id, patch)

    def delete_account(self, account_id: int) -> None:
        self.delete(ACCOUNTS, account_id)

    # Transaction operations
    def add_transaction(
        self,
        reference_number: str,
        date: date,
        description: str,
        debit_account_id: int,
        credit_account_id: int,
        amount: Decimal,
        user_id: int = 1,
        id: Optional[int] = None,
    ) -> int:
        """Create a transaction record. Returns transaction ID.

        This stores the record only; balances are the ledger's concern.
        """
        return self.insert(
            TRANSACTIONS,
            {
                "id": id,
                "reference_number": reference_number,
                "date": date,
                "description": description,
                "debit_account_id": debit_account_id,
                "credit_account_id": credit_account_id,
                "amount": to_money(amount, "amount"),
                "user_id": user_id,
            },
        )

    def get_all_transactions(self) -> list[Transaction]:
        return self.fetch_all(TRANSACTIONS)

    def get_transaction_by_id(self, transaction_id: int) -> Optional[Transaction]:
        return self.fetch(TRANSACTIONS, transaction_id)

    def update_transaction(self, transaction_id: int, **patch: Any) -> Optional[Transaction]:
        validate_patch(Transaction, patch)
        if "amount" in patch:
            patch["amount"] = to_money(patch["amount"], "amount")
        return self.update(TRANSACTIONS, transaction_id, patch)

    def delete_transaction(self, transaction_id: int) -> None:
        self.delete(TRANSACTIONS, transaction_id)

    # User operations
    def add_user(
        self,
        email: str,
        first_name: str = "",
        last_name: str = "",
        role: str = "user",
        active: bool = True,
        id: Optional[int] = None,
    ) -> int:
        """Create a user. Returns user ID."""
        return self.insert(
            USERS,
            {
                "id": id,
                "email": email,
                "first_name": first_name,
                "last_name": last_name,
                "role": role,
                "active": active,
            },
        )

    def get_all_users(self) -> list[User]:
        return self.fetch_all(USERS)

    def get_user_by_id(self, user_id: int) -> Optional[User]:
        return self.fetch(USERS, user_id)

    def get_user_by_email(self, email: str) -> Optional[User]:
        return self.fetch_by_field(USERS, "email", email)

    def update_user(self, user_id: int, **patch: Any) -> Optional[User]:
        validate_patch(User, patch)
        return self.update(USERS, user_id, patch)

    def delete_user(self, user_id: int) -> None:
        self.delete(USERS, user_id)

    # Seeding, backup and restore
    def seed_initial_data(self) -> bool:
        """Seed the default chart, sample postings and admin user.

        Runs only when there are no accounts; transactions and users are
        seeded only into collections that are still empty.

        Returns:
            True if anything was seeded
        """
        if self.get_all_accounts():
            return False

        for account in CHART_OF_ACCOUNTS:
            self.insert(ACCOUNTS, entity_values(account))
        if not self.get_all_transactions():
            for transaction in SAMPLE_TRANSACTIONS:
                self.insert(TRANSACTIONS, entity_values(transaction))
        if not self.get_all_users():
            for user in SEED_USERS:
                self.insert(USERS, entity_values(user))

        logger.info("Seeded %s store with default chart of accounts", self.backend_name)
        return True

    def export_data(self) -> dict[str, Any]:
        """Dump accounts, transactions and users as a JSON-ready snapshot."""
        return {
            "accounts": [account_to_record(a) for a in self.get_all_accounts()],
            "transactions": [transaction_to_record(t) for t in self.get_all_transactions()],
            "users": [user_to_record(u) for u in self.get_all_users()],
            "exportDate": datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z"),
        }

    def import_data(self, snapshot: dict[str, Any]) -> None:
        """Replace accounts, transactions and users with a snapshot's records.

        Every record is parsed before anything is removed. Existing records
        are then cleared and every snapshot record is inserted in order,
        keeping its id. A failure part-way leaves the records inserted so
        far in place.

        Raises:
            ValidationError: If the snapshot cannot be parsed
            ConflictError: If two snapshot records share an id or unique field
        """
        try:
            accounts = [account_from_record(r) for r in _snapshot_records(snapshot, ACCOUNTS)]
            transactions = [transaction_from_record(r) for r in _snapshot_records(snapshot, TRANSACTIONS)]
            users = [user_from_record(r) for r in _snapshot_records(snapshot, USERS)]
            for account in accounts:
                to_money(account.balance, "balance")
            for transaction in transactions:
                to_money(transaction.amount, "amount")
        except (KeyError, TypeError, AttributeError, ValueError) as e:
            raise ValidationError(f"Malformed snapshot: {e}") from e

        self.clear(COLLECTIONS)

        for account in accounts:
            self.insert(ACCOUNTS, entity_values(account))
        for transaction in transactions:
            self.insert(TRANSACTIONS, entity_values(transaction))
        for user in users:
            self.insert(USERS, entity_values(user))

        logger.info(
            "Imported %d accounts, %d transactions, %d users into %s store",
            len(accounts),
            len(transactions),
            len(users),
            self.backend_name,
        )


def _snapshot_records(snapshot: dict[str, Any], collection: str) -> list[Any]:
    """Return a snapshot collection; a missing collection is empty."""
    records = snapshot.get(collection) or []
    if not isinstance(records, list):
        raise ValidationError(f"'{collection}' must be a list of records")
    return records
