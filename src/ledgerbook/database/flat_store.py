"""Fallback record store over a flat key-value store.

Each collection is one JSON array of camelCase records under an
``aibos_<collection>`` key. Ids come from a counter persisted under
``aibos_<collection>_seq``, so deleting a record never frees its id.
"""

from dataclasses import replace
from datetime import date
from typing import Any, Iterable, Optional

from ledgerbook.database.base import RecordStore, UNIQUE_FIELDS, entity_type
from ledgerbook.database.kv import KeyValueStore
from ledgerbook.database.records import (
    RECORD_CODECS,
    setting_from_record,
    setting_to_record,
)
from ledgerbook.domain.entities import Setting, Transaction
from ledgerbook.domain.errors import ConflictError, StorageError, duplicate_id, duplicate_value

KEY_PREFIX = "aibos_"
SETTINGS_KEY = "aibos_settings"


def collection_key(collection: str) -> str:
    return f"{KEY_PREFIX}{collection}"


def sequence_key(collection: str) -> str:
    return f"{KEY_PREFIX}{collection}_seq"


class FlatRecordStore(RecordStore):
    """Key-value implementation of RecordStore."""

    backend_name = "flat"

    def __init__(self, kv: KeyValueStore):
        """Initialize flat record store.

        Args:
            kv: Key-value store holding the collection documents
        """
        self.kv = kv
        self._open = False

    def open(self) -> "FlatRecordStore":
        self._open = True
        return self

    def close(self) -> None:
        self._open = False

    def _check_open(self) -> None:
        if not self._open:
            raise StorageError("Record store is not open")

    def _load(self, collection: str) -> list[Any]:
        self._check_open()
        entity_type(collection)
        _, _, from_record = RECORD_CODECS[collection]
        return [from_record(r) for r in self.kv.get_json(collection_key(collection), [])]

    def _save(self, collection: str, entities: list[Any]) -> None:
        _, to_record, _ = RECORD_CODECS[collection]
        self.kv.set_json(collection_key(collection), [to_record(e) for e in entities])

    def _next_id(self, collection: str, entities: list[Any]) -> int:
        counter = int(self.kv.get_item(sequence_key(collection)) or 0)
        # Data written without a counter still yields fresh ids
        highest = max((e.id for e in entities if e.id is not None), default=0)
        return max(counter, highest) + 1

    def _bump_sequence(self, collection: str, record_id: int) -> None:
        counter = int(self.kv.get_item(sequence_key(collection)) or 0)
        if record_id > counter:
            self.kv.set_item(sequence_key(collection), str(record_id))

    def _check_unique(self, collection: str, candidate: Any, entities: list[Any]) -> None:
        for field in UNIQUE_FIELDS.get(collection, ()):
            value = getattr(candidate, field)
            for existing in entities:
                if existing.id != candidate.id and getattr(existing, field) == value:
                    raise ConflictError(duplicate_value(collection, field, value))

    def insert(self, collection: str, values: dict[str, Any]) -> int:
        entities = self._load(collection)
        record_id = values.get("id")
        if record_id is None:
            record_id = self._next_id(collection, entities)
        elif any(e.id == record_id for e in entities):
            raise ConflictError(duplicate_id(collection, record_id))

        entity = entity_type(collection)(**{**values, "id": record_id})
        self._check_unique(collection, entity, entities)

        entities.append(entity)
        self._save(collection, entities)
        self._bump_sequence(collection, record_id)
        return record_id

    def fetch_all(self, collection: str) -> list[Any]:
        return sorted(self._load(collection), key=lambda e: e.id)

    def fetch(self, collection: str, record_id: int) -> Optional[Any]:
        for entity in self._load(collection):
            if entity.id == record_id:
                return entity
        return None

    def fetch_by_field(self, collection: str, field: str, value: Any) -> Optional[Any]:
        for entity in self.fetch_all(collection):
            if getattr(entity, field) == value:
                return entity
        return None

    def update(self, collection: str, record_id: int, patch: dict[str, Any]) -> Optional[Any]:
        entities = self._load(collection)
        for index, entity in enumerate(entities):
            if entity.id == record_id:
                updated = replace(entity, **patch)
                self._check_unique(collection, updated, entities)
                entities[index] = updated
                self._save(collection, entities)
                return updated
        return None

    def delete(self, collection: str, record_id: int) -> None:
        entities = self._load(collection)
        remaining = [e for e in entities if e.id != record_id]
        if len(remaining) != len(entities):
            self._save(collection, remaining)

    def clear(self, collections: Iterable[str]) -> None:
        self._check_open()
        for collection in collections:
            entity_type(collection)
            self.kv.remove_item(collection_key(collection))

    def get_transactions_by_date_range(self, start: date, end: date) -> list[Transaction]:
        matches = [t for t in self._load("transactions") if start <= t.date <= end]
        return sorted(matches, key=lambda t: (t.date, t.id))

    # Settings
    def _load_settings(self) -> list[Setting]:
        self._check_open()
        return [setting_from_record(r) for r in self.kv.get_json(SETTINGS_KEY, [])]

    def _save_settings(self, settings: list[Setting]) -> None:
        self.kv.set_json(SETTINGS_KEY, [setting_to_record(s) for s in settings])

    def get_setting(self, key: str, default: Any = None) -> Any:
        for setting in self._load_settings():
            if setting.key == key:
                return setting.value
        return default

    def set_setting(self, key: str, value: Any) -> None:
        settings = [s for s in self._load_settings() if s.key != key]
        settings.append(Setting(key=key, value=value))
        self._save_settings(settings)

    def delete_setting(self, key: str) -> None:
        settings = self._load_settings()
        remaining = [s for s in settings if s.key != key]
        if len(remaining) != len(settings):
            self._save_settings(remaining)

    def get_all_settings(self) -> list[Setting]:
        return sorted(self._load_settings(), key=lambda s: s.key)
