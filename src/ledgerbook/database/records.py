"""Codecs between domain entities and persisted JSON records.

JSON records use camelCase field names (``accountNumber``,
``debitAccountId`` ...). Ledger state, fallback-store collections and
export snapshots all share this layout. Amounts are written
as JSON numbers and read back as ``Decimal``.
"""

from dataclasses import asdict
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Optional

from ledgerbook.domain.entities import Account, Setting, Transaction, User
from ledgerbook.domain.errors import ValidationError


def to_json_number(value: Decimal) -> int | float:
    """Render a Decimal as the JSON number it was stored as."""
    if value == value.to_integral_value():
        return int(value)
    return float(value)


def to_decimal(value: Any) -> Decimal:
    """Read a stored number back as a Decimal without float noise.

    Raises:
        ValidationError: If the value is not a finite number
    """
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value))
        except InvalidOperation:
            raise ValidationError(f"Invalid number '{value}'") from None
    if not result.is_finite():
        raise ValidationError(f"Invalid number '{value}'")
    return result


def to_date(value: Any) -> date:
    """Read a stored ISO date (or timestamp) back as a date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def _optional_id(value: Any) -> Optional[int]:
    return None if value is None else int(value)


def account_to_record(account: Account) -> dict[str, Any]:
    """Convert an Account entity to its JSON record."""
    return {
        "id": account.id,
        "accountNumber": account.account_number,
        "name": account.name,
        "type": account.type,
        "description": account.description,
        "active": account.active,
        "balance": to_json_number(account.balance),
    }


def account_from_record(record: dict[str, Any]) -> Account:
    """Convert a JSON record to an Account entity."""
    return Account(
        id=_optional_id(record.get("id")),
        account_number=str(record["accountNumber"]),
        name=record["name"],
        type=record["type"],
        description=record.get("description") or "",
        active=bool(record.get("active", True)),
        balance=to_decimal(record.get("balance", 0)),
    )


def transaction_to_record(transaction: Transaction) -> dict[str, Any]:
    """Convert a Transaction entity to its JSON record."""
    return {
        "id": transaction.id,
        "referenceNumber": transaction.reference_number,
        "date": transaction.date.isoformat(),
        "description": transaction.description,
        "debitAccountId": transaction.debit_account_id,
        "creditAccountId": transaction.credit_account_id,
        "amount": to_json_number(transaction.amount),
        "userId": transaction.user_id,
    }


def transaction_from_record(record: dict[str, Any]) -> Transaction:
    """Convert a JSON record to a Transaction entity."""
    return Transaction(
        id=_optional_id(record.get("id")),
        reference_number=str(record["referenceNumber"]),
        date=to_date(record["date"]),
        description=record.get("description") or "",
        debit_account_id=int(record["debitAccountId"]),
        credit_account_id=int(record["creditAccountId"]),
        amount=to_decimal(record["amount"]),
        user_id=int(record.get("userId") or 1),
    )


def user_to_record(user: User) -> dict[str, Any]:
    """Convert a User entity to its JSON record."""
    return {
        "id": user.id,
        "email": user.email,
        "firstName": user.first_name,
        "lastName": user.last_name,
        "role": user.role,
        "active": user.active,
    }


def user_from_record(record: dict[str, Any]) -> User:
    """Convert a JSON record to a User entity."""
    return User(
        id=_optional_id(record.get("id")),
        email=record["email"],
        first_name=record.get("firstName") or "",
        last_name=record.get("lastName") or "",
        role=record.get("role") or "user",
        active=bool(record.get("active", True)),
    )


def setting_to_record(setting: Setting) -> dict[str, Any]:
    return {"key": setting.key, "value": setting.value}


def setting_from_record(record: dict[str, Any]) -> Setting:
    return Setting(key=record["key"], value=record.get("value"))


def entity_values(entity: Any) -> dict[str, Any]:
    """Return an entity's fields as a dict keyed by field name."""
    return asdict(entity)


# Collection name -> (entity type, to_record, from_record)
RECORD_CODECS: dict[str, tuple[type, Callable[[Any], dict], Callable[[dict], Any]]] = {
    "accounts": (Account, account_to_record, account_from_record),
    "transactions": (Transaction, transaction_to_record, transaction_from_record),
    "users": (User, user_to_record, user_from_record),
}
