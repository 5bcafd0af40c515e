"""Tests for ORM mappers and JSON record codecs."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from ledgerbook.database.mappers import (
    account_to_domain,
    setting_to_domain,
    transaction_to_domain,
    user_to_domain,
)
from ledgerbook.database.models import (
    Account as ORMAccount,
    Setting as ORMSetting,
    Transaction as ORMTransaction,
    User as ORMUser,
)
from ledgerbook.database.records import (
    account_from_record,
    account_to_record,
    to_date,
    to_decimal,
    to_json_number,
    transaction_from_record,
    transaction_to_record,
    user_from_record,
)
from ledgerbook.domain.entities import Account, Setting, Transaction, User
from ledgerbook.domain.errors import ValidationError


class TestORMMappers:
    """Tests for SQLAlchemy model to entity conversion."""

    def test_account_to_domain(self):
        orm_account = ORMAccount(
            id=1,
            account_number="1000",
            name="Cash",
            type="asset",
            description=None,
            active=True,
            balance=Decimal("35000.00"),
        )
        account = account_to_domain(orm_account)

        assert isinstance(account, Account)
        assert account.account_number == "1000"
        assert account.description == ""
        assert account.balance == Decimal("35000")

    def test_account_without_balance(self):
        orm_account = ORMAccount(id=2, account_number="1200", name="Inventory", type="asset", active=False)
        account = account_to_domain(orm_account)

        assert account.balance == Decimal("0")
        assert account.active is False

    def test_transaction_to_domain(self):
        orm_transaction = ORMTransaction(
            id=1,
            reference_number="000001",
            date=date(2024, 1, 15),
            description="Sale of services to ABC Company",
            debit_account_id=1,
            credit_account_id=10,
            amount=Decimal("5000.00"),
            user_id=1,
        )
        transaction = transaction_to_domain(orm_transaction)

        assert isinstance(transaction, Transaction)
        assert transaction.reference_number == "000001"
        assert transaction.amount == Decimal("5000")
        assert (transaction.debit_account_id, transaction.credit_account_id) == (1, 10)

    def test_user_to_domain(self):
        orm_user = ORMUser(id=1, email="admin@aibos.com", first_name="Admin", last_name=None, role="admin", active=True)
        user = user_to_domain(orm_user)

        assert isinstance(user, User)
        assert user.last_name == ""
        assert user.role == "admin"

    def test_setting_to_domain(self):
        setting = setting_to_domain(ORMSetting(key="currency", value={"code": "USD"}))
        assert setting == Setting(key="currency", value={"code": "USD"})


class TestRecordCodecs:
    """Tests for camelCase JSON records."""

    def test_account_record(self):
        account = Account(1, "1000", "Cash", "asset", "Cash on hand", True, Decimal("35000"))

        record = account_to_record(account)

        assert record == {
            "id": 1,
            "accountNumber": "1000",
            "name": "Cash",
            "type": "asset",
            "description": "Cash on hand",
            "active": True,
            "balance": 35000,
        }
        assert account_from_record(record) == account

    def test_account_record_defaults(self):
        account = account_from_record({"accountNumber": 1000, "name": "Cash", "type": "asset"})

        assert account.id is None
        assert account.account_number == "1000"
        assert account.active is True
        assert account.balance == Decimal("0")

    def test_transaction_record(self):
        transaction = Transaction(3, "000003", date(2024, 1, 13), "Supplies", 17, 1, Decimal("500.25"), 2)

        record = transaction_to_record(transaction)

        assert record["referenceNumber"] == "000003"
        assert record["date"] == "2024-01-13"
        assert record["amount"] == 500.25
        assert record["userId"] == 2

    def test_transaction_record_accepts_timestamp_dates(self):
        record = {
            "id": 1,
            "referenceNumber": "000001",
            "date": "2024-01-15T10:30:00.000Z",
            "description": "Sale",
            "debitAccountId": "1",
            "creditAccountId": 10,
            "amount": 0.1,
        }
        transaction = transaction_from_record(record)

        assert transaction.date == date(2024, 1, 15)
        assert transaction.debit_account_id == 1
        assert transaction.amount == Decimal("0.1")
        assert transaction.user_id == 1

    def test_transaction_record_missing_field(self):
        with pytest.raises(KeyError):
            transaction_from_record({"referenceNumber": "000001", "date": "2024-01-15"})

    def test_user_record(self):
        user = user_from_record({"id": 1, "email": "admin@aibos.com", "firstName": "Admin", "role": None})
        assert user.first_name == "Admin"
        assert user.role == "user"


@pytest.mark.parametrize(
    "value,expected",
    [(Decimal("35000.00"), 35000), (Decimal("0"), 0), (Decimal("4.35"), 4.35), (Decimal("-2.5"), -2.5)],
)
def test_to_json_number(value, expected):
    result = to_json_number(value)
    assert result == expected
    assert type(result) is type(expected)


def test_to_decimal_avoids_float_noise():
    assert to_decimal(0.1) == Decimal("0.1")
    assert to_decimal("12.30") == Decimal("12.30")
    assert to_decimal(Decimal("7")) == Decimal("7")


def test_to_date():
    assert to_date("2024-01-15") == date(2024, 1, 15)
    assert to_date(datetime(2024, 1, 15, 9, 0)) == date(2024, 1, 15)
    assert to_date(date(2024, 1, 15)) == date(2024, 1, 15)


@pytest.mark.parametrize("value", ["abc", "NaN", "Infinity", None, ""])
def test_to_decimal_rejects_non_numbers(value):
    with pytest.raises(ValidationError, match="Invalid number"):
        to_decimal(value)
