"""Storage layer for ledgerbook."""

from ledgerbook.database.base import RecordStore
from ledgerbook.database.factories import open_record_store
from ledgerbook.database.kv import FileKeyValueStore, KeyValueStore, MemoryKeyValueStore

__all__ = [
    "RecordStore",
    "open_record_store",
    "KeyValueStore",
    "FileKeyValueStore",
    "MemoryKeyValueStore",
]
