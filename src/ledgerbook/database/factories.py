"""Factory functions for record stores and key-value stores."""

import logging
import os
from pathlib import Path
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from ledgerbook.database.base import RecordStore
from ledgerbook.database.flat_store import FlatRecordStore
from ledgerbook.database.kv import FileKeyValueStore
from ledgerbook.database.models import DATABASE_NAME
from ledgerbook.database.sqlalchemy_db import SQLAlchemyRecordStore
from ledgerbook.domain.errors import StorageError

logger = logging.getLogger(__name__)

HOME_ENV = "LEDGERBOOK_HOME"
BACKEND_ENV = "LEDGERBOOK_BACKEND"
BACKENDS = ("auto", "sqlite", "flat")


def resolve_home(home: Optional[str | Path] = None) -> Path:
    """Return the data home directory, creating it if needed.

    Args:
        home: Data directory. If None, checks LEDGERBOOK_HOME environment
            variable, then defaults to ~/.ledgerbook
    """
    if home is None:
        # Check environment variable
        home = os.environ.get(HOME_ENV)

    if home is None:
        # Default to ~/.ledgerbook
        home = Path.home() / ".ledgerbook"

    path = Path(home).expanduser()
    path.mkdir(parents=True, exist_ok=True)
    return path


def create_sqlite_store(home: Optional[str | Path] = None) -> SQLAlchemyRecordStore:
    """Create (but do not open) the structured store under the data home."""
    database_path = resolve_home(home) / f"{DATABASE_NAME}.db"
    return SQLAlchemyRecordStore(f"sqlite:///{database_path}")


def create_flat_store(home: Optional[str | Path] = None) -> FlatRecordStore:
    """Create (but do not open) the fallback store under the data home."""
    return FlatRecordStore(FileKeyValueStore(resolve_home(home) / "local"))


def create_ledger_kv(home: Optional[str | Path] = None) -> FileKeyValueStore:
    """Create the key-value store holding ledger state."""
    return FileKeyValueStore(resolve_home(home) / "ledger")


def open_record_store(
    home: Optional[str | Path] = None,
    backend: Optional[str] = None,
) -> RecordStore:
    """Open a record store, degrading to the flat store if SQL is unusable.

    Args:
        home: Data directory (see resolve_home)
        backend: "auto", "sqlite" or "flat". If None, checks LEDGERBOOK_BACKEND
            environment variable, then defaults to "auto"

    Returns:
        An opened RecordStore. In "auto" mode a failure to open the structured
        store returns the flat store instead; the choice is final for the
        returned object.
    """
    if backend is None:
        backend = os.environ.get(BACKEND_ENV, "auto")
    if backend not in BACKENDS:
        raise ValueError(f"Unknown backend '{backend}'. Expected one of: {', '.join(BACKENDS)}")

    if backend == "flat":
        return create_flat_store(home).open()

    store = create_sqlite_store(home)
    if backend == "sqlite":
        return store.open()

    try:
        return store.open()
    except (SQLAlchemyError, OSError, StorageError) as exc:
        logger.warning("Structured store unavailable, using flat store instead: %s", exc)
        store.close()
        return create_flat_store(home).open()
