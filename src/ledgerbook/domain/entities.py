"""Domain model entities for ledgerbook.

These are pure data classes representing accounting concepts, independent of
how a backend stores them. Both the ledger engine and the record store hand
these out; updates produce new instances via ``dataclasses.replace``.
"""

from dataclasses import dataclass, fields
from datetime import date
from decimal import Decimal
from typing import Any, Optional

from ledgerbook.domain.errors import ValidationError

ASSET = "asset"
LIABILITY = "liability"
EQUITY = "equity"
REVENUE = "revenue"
EXPENSE = "expense"

ACCOUNT_TYPES = (ASSET, LIABILITY, EQUITY, REVENUE, EXPENSE)

# Normal balance sides
DEBIT_NORMAL_TYPES = frozenset({ASSET, EXPENSE})
CREDIT_NORMAL_TYPES = frozenset({LIABILITY, EQUITY, REVENUE})


@dataclass(frozen=True)
class Account:
    """Chart-of-accounts entry."""

    id: Optional[int]
    account_number: str
    name: str
    type: str
    description: str = ""
    active: bool = True
    balance: Decimal = Decimal("0")

    @property
    def is_debit_normal(self) -> bool:
        """True for account types that increase on debit."""
        return self.type in DEBIT_NORMAL_TYPES


@dataclass(frozen=True)
class Transaction:
    """A posting: one debit account, one credit account, one amount."""

    id: Optional[int]
    reference_number: str
    date: date
    description: str
    debit_account_id: int
    credit_account_id: int
    amount: Decimal
    user_id: int = 1


@dataclass(frozen=True)
class User:
    """Actor referenced by postings."""

    id: Optional[int]
    email: str
    first_name: str = ""
    last_name: str = ""
    role: str = "user"
    active: bool = True

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass(frozen=True)
class Setting:
    """Free-form application setting keyed by name."""

    key: str
    value: Any


@dataclass(frozen=True)
class TrialBalanceLine:
    """One row of a trial balance."""

    account: Account
    balance: Decimal
    type: str


def validate_account_type(account_type: str) -> str:
    """Return the account type if it is known.

    Raises:
        ValidationError: If the type is not one of ACCOUNT_TYPES
    """
    if account_type not in ACCOUNT_TYPES:
        raise ValidationError(
            f"Unknown account type '{account_type}'. "
            f"Expected one of: {', '.join(ACCOUNT_TYPES)}"
        )
    return account_type


def validate_patch(entity_type: type, patch: dict[str, Any]) -> None:
    """Check that a patch only names mutable fields of an entity type.

    Raises:
        ValidationError: If the patch touches ``id`` or an unknown field
    """
    names = {f.name for f in fields(entity_type)}
    if "id" in patch:
        raise ValidationError(f"{entity_type.__name__} id cannot be changed")
    unknown = sorted(set(patch) - names)
    if unknown:
        raise ValidationError(
            f"Unknown {entity_type.__name__} field(s): {', '.join(unknown)}"
        )
    if entity_type is Account and "type" in patch:
        validate_account_type(patch["type"])
