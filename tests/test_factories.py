"""Tests for record store selection and data home resolution."""

import logging
import sqlite3
from pathlib import Path

import pytest

from ledgerbook.database.factories import (
    BACKEND_ENV,
    HOME_ENV,
    create_ledger_kv,
    open_record_store,
    resolve_home,
)
from ledgerbook.database.flat_store import FlatRecordStore
from ledgerbook.database.models import SCHEMA_VERSION
from ledgerbook.database.sqlalchemy_db import SQLAlchemyRecordStore
from ledgerbook.domain.errors import SchemaVersionError


@pytest.fixture
def data_home(tmp_path, monkeypatch):
    monkeypatch.delenv(HOME_ENV, raising=False)
    monkeypatch.delenv(BACKEND_ENV, raising=False)
    return tmp_path / "data"


def _user_version(path: Path) -> int:
    conn = sqlite3.connect(path)
    try:
        return conn.execute("PRAGMA user_version").fetchone()[0]
    finally:
        conn.close()


def test_resolve_home_creates_directory(data_home):
    assert resolve_home(data_home) == data_home
    assert data_home.is_dir()


def test_resolve_home_from_environment(data_home, monkeypatch):
    monkeypatch.setenv(HOME_ENV, str(data_home))
    assert resolve_home() == data_home


def test_auto_prefers_sqlite(data_home):
    store = open_record_store(data_home)
    try:
        assert isinstance(store, SQLAlchemyRecordStore)
        assert store.backend_name == "sqlite"
        store.seed_initial_data()
    finally:
        store.close()

    database = data_home / "aibos_accounting.db"
    assert database.exists()
    assert _user_version(database) == SCHEMA_VERSION


def test_falls_back_when_database_is_unreadable(data_home, caplog):
    """Test a corrupt database file degrades to the flat store."""
    data_home.mkdir()
    (data_home / "aibos_accounting.db").write_bytes(b"this is not a sqlite database" * 64)

    with caplog.at_level(logging.WARNING, logger="ledgerbook"):
        store = open_record_store(data_home)

    assert isinstance(store, FlatRecordStore)
    assert "using flat store instead" in caplog.text
    store.add_account("1000", "Cash", "asset")
    assert (data_home / "local" / "aibos_accounts.json").exists()


def test_falls_back_on_newer_schema(data_home):
    data_home.mkdir()
    conn = sqlite3.connect(data_home / "aibos_accounting.db")
    conn.execute(f"PRAGMA user_version = {SCHEMA_VERSION + 1}")
    conn.close()

    store = open_record_store(data_home)

    assert store.backend_name == "flat"


def test_forced_sqlite_does_not_fall_back(data_home):
    data_home.mkdir()
    conn = sqlite3.connect(data_home / "aibos_accounting.db")
    conn.execute(f"PRAGMA user_version = {SCHEMA_VERSION + 1}")
    conn.close()

    with pytest.raises(SchemaVersionError):
        open_record_store(data_home, backend="sqlite")


def test_forced_flat(data_home):
    store = open_record_store(data_home, backend="flat")
    assert isinstance(store, FlatRecordStore)
    assert not (data_home / "aibos_accounting.db").exists()


def test_backend_from_environment(data_home, monkeypatch):
    monkeypatch.setenv(BACKEND_ENV, "flat")
    assert open_record_store(data_home).backend_name == "flat"


def test_unknown_backend(data_home):
    with pytest.raises(ValueError, match="Unknown backend"):
        open_record_store(data_home, backend="indexeddb")


def test_backends_keep_separate_data(data_home):
    """Test the flat store does not see records written to SQL."""
    sql = open_record_store(data_home, backend="sqlite")
    try:
        sql.seed_initial_data()
    finally:
        sql.close()

    assert open_record_store(data_home, backend="flat").get_all_accounts() == []


def test_ledger_kv_lives_under_home(data_home):
    kv = create_ledger_kv(data_home)
    kv.set_item("aibos_user", "{}")
    assert (data_home / "ledger" / "aibos_user.json").exists()
