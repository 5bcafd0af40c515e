"""Structured record store backed by SQLAlchemy."""

from datetime import date
from typing import Any, Callable, Iterable, Optional

from sqlalchemy import Engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker

from ledgerbook.database.base import RecordStore, UNIQUE_FIELDS, entity_type
from ledgerbook.database.mappers import (
    account_to_domain,
    setting_to_domain,
    transaction_to_domain,
    user_to_domain,
)
from ledgerbook.database.models import (
    Account,
    Setting,
    Transaction,
    User,
    create_session_factory,
)
from ledgerbook.domain.entities import Setting as DomainSetting
from ledgerbook.domain.entities import Transaction as DomainTransaction
from ledgerbook.domain.errors import (
    ConflictError,
    StorageError,
    duplicate_id,
    duplicate_value,
)

# Collection name -> (ORM model, mapper)
ORM_MODELS: dict[str, tuple[type, Callable[[Any], Any]]] = {
    "accounts": (Account, account_to_domain),
    "transactions": (Transaction, transaction_to_domain),
    "users": (User, user_to_domain),
}


class SQLAlchemyRecordStore(RecordStore):
    """SQLAlchemy-based implementation of RecordStore."""

    backend_name = "sqlite"

    def __init__(self, database_url: str):
        """Initialize SQLAlchemy record store.

        Args:
            database_url: SQLAlchemy database URL (e.g., 'sqlite:///path/to.db')
        """
        self.database_url = database_url
        self.engine: Optional[Engine] = None
        self.session_factory: Optional[sessionmaker[Session]] = None
        self._session: Optional[Session] = None

    def open(self) -> "SQLAlchemyRecordStore":
        """Connect and create the schema if needed."""
        if self.session_factory is None:
            self.engine, self.session_factory = create_session_factory(self.database_url)
        return self

    def close(self) -> None:
        """Close the session and dispose of the engine."""
        if self._session is not None:
            self._session.close()
            self._session = None
        if self.engine is not None:
            self.engine.dispose()
            self.engine = None
        self.session_factory = None

    def _get_session(self) -> Session:
        """Get current session, creating one if needed."""
        if self.session_factory is None:
            raise StorageError("Record store is not open")
        if self._session is None:
            self._session = self.session_factory()
        return self._session

    def _model(self, collection: str) -> tuple[type, Callable[[Any], Any]]:
        entity_type(collection)
        return ORM_MODELS[collection]

    def _commit(self, session: Session, collection: str, values: dict[str, Any]) -> None:
        """Commit, translating unique-index violations into ConflictError."""
        try:
            session.commit()
        except IntegrityError as exc:
            session.rollback()
            for field in UNIQUE_FIELDS.get(collection, ()):
                if field in values and f"{collection}.{field}" in str(exc.orig):
                    raise ConflictError(duplicate_value(collection, field, values[field])) from exc
            if values.get("id") is not None:
                raise ConflictError(duplicate_id(collection, values["id"])) from exc
            raise ConflictError(f"Constraint violation in {collection}: {exc.orig}") from exc

    def insert(self, collection: str, values: dict[str, Any]) -> int:
        model, _ = self._model(collection)
        session = self._get_session()
        values = dict(values)
        if values.get("id") is None:
            values.pop("id", None)
        elif session.get(model, values["id"]) is not None:
            raise ConflictError(duplicate_id(collection, values["id"]))
        record = model(**values)
        session.add(record)
        self._commit(session, collection, values)
        return record.id

    def fetch_all(self, collection: str) -> list[Any]:
        model, to_domain = self._model(collection)
        session = self._get_session()
        return [to_domain(r) for r in session.query(model).order_by(model.id).all()]

    def fetch(self, collection: str, record_id: int) -> Optional[Any]:
        model, to_domain = self._model(collection)
        record = self._get_session().get(model, record_id)
        if record is None:
            return None
        return to_domain(record)

    def fetch_by_field(self, collection: str, field: str, value: Any) -> Optional[Any]:
        model, to_domain = self._model(collection)
        session = self._get_session()
        record = (
            session.query(model)
            .filter(getattr(model, field) == value)
            .order_by(model.id)
            .first()
        )
        if record is None:
            return None
        return to_domain(record)

    def update(self, collection: str, record_id: int, patch: dict[str, Any]) -> Optional[Any]:
        model, to_domain = self._model(collection)
        session = self._get_session()
        record = session.get(model, record_id)
        if record is None:
            return None
        for field, value in patch.items():
            setattr(record, field, value)
        self._commit(session, collection, patch)
        return to_domain(record)

    def delete(self, collection: str, record_id: int) -> None:
        model, _ = self._model(collection)
        session = self._get_session()
        record = session.get(model, record_id)
        if record is None:
            return
        session.delete(record)
        session.commit()

    def clear(self, collections: Iterable[str]) -> None:
        """Clear several collections in one database transaction."""
        session = self._get_session()
        try:
            for collection in collections:
                model, _ = self._model(collection)
                session.query(model).delete()
            session.commit()
        except BaseException:
            session.rollback()
            raise
        session.expunge_all()

    def get_transactions_by_date_range(self, start: date, end: date) -> list[DomainTransaction]:
        session = self._get_session()
        transactions = (
            session.query(Transaction)
            .filter(Transaction.date >= start, Transaction.date <= end)
            .order_by(Transaction.date, Transaction.id)
            .all()
        )
        return [transaction_to_domain(t) for t in transactions]

    # Settings
    def get_setting(self, key: str, default: Any = None) -> Any:
        setting = self._get_session().get(Setting, key)
        if setting is None:
            return default
        return setting.value

    def set_setting(self, key: str, value: Any) -> None:
        session = self._get_session()
        session.merge(Setting(key=key, value=value))
        session.commit()

    def delete_setting(self, key: str) -> None:
        session = self._get_session()
        setting = session.get(Setting, key)
        if setting is None:
            return
        session.delete(setting)
        session.commit()

    def get_all_settings(self) -> list[DomainSetting]:
        session = self._get_session()
        return [setting_to_domain(s) for s in session.query(Setting).order_by(Setting.key).all()]
