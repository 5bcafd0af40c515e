"""Mapper functions to convert SQLAlchemy models to domain entities.

This layer isolates the conversion logic, so backends can change their
schema without the ledger or callers noticing.
"""

from decimal import Decimal

from ledgerbook.domain import entities as domain
from ledgerbook.database.models import (
    Account as ORMAccount,
    Setting as ORMSetting,
    Transaction as ORMTransaction,
    User as ORMUser,
)


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        account_number=orm_account.account_number,
        name=orm_account.name,
        type=orm_account.type,
        description=orm_account.description or "",
        active=bool(orm_account.active),
        balance=Decimal(orm_account.balance if orm_account.balance is not None else 0),
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        reference_number=orm_transaction.reference_number,
        date=orm_transaction.date,
        description=orm_transaction.description or "",
        debit_account_id=orm_transaction.debit_account_id,
        credit_account_id=orm_transaction.credit_account_id,
        amount=Decimal(orm_transaction.amount),
        user_id=orm_transaction.user_id,
    )


def user_to_domain(orm_user: ORMUser) -> domain.User:
    """Convert SQLAlchemy User model to domain User entity."""
    return domain.User(
        id=orm_user.id,
        email=orm_user.email,
        first_name=orm_user.first_name or "",
        last_name=orm_user.last_name or "",
        role=orm_user.role,
        active=bool(orm_user.active),
    )


def setting_to_domain(orm_setting: ORMSetting) -> domain.Setting:
    """Convert SQLAlchemy Setting model to domain Setting entity."""
    return domain.Setting(key=orm_setting.key, value=orm_setting.value)
