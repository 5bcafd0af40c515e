"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class StorageError(Exception):
    """A record store could not be used."""


class SchemaVersionError(StorageError):
    """The on-disk schema is newer than this version understands."""


INVALID_TRANSACTION = "Invalid transaction: Debits must equal credits"


def account_not_found(account_id: int) -> str:
    """Return message for missing account."""
    return f"Account {account_id} not found"


def account_reference_not_found(account: str) -> str:
    """Return message for an account reference that matched nothing."""
    return f"Account '{account}' not found"


def invalid_transaction(problems: list[str]) -> str:
    """Return message for a rejected posting."""
    return f"{INVALID_TRANSACTION} ({'; '.join(problems)})"


def duplicate_value(collection: str, field: str, value: object) -> str:
    """Return message for a unique-index violation."""
    return f"Duplicate {field} '{value}' in {collection}"


def duplicate_id(collection: str, record_id: int) -> str:
    """Return message for an id that is already taken."""
    return f"Record {record_id} already exists in {collection}"
