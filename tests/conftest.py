"""Shared pytest fixtures for ledgerbook tests."""

import pytest

from ledgerbook.database.flat_store import FlatRecordStore
from ledgerbook.database.kv import FileKeyValueStore, MemoryKeyValueStore
from ledgerbook.database.sqlalchemy_db import SQLAlchemyRecordStore
from ledgerbook.domain.ledger import Ledger


@pytest.fixture
def kv():
    """Create an empty in-memory key-value store."""
    return MemoryKeyValueStore()


@pytest.fixture
def ledger(kv):
    """Create a ledger seeded with the chart of accounts and sample postings."""
    return Ledger.open(kv)


@pytest.fixture
def fresh_ledger():
    """Create a ledger seeded with the chart of accounts and no postings."""
    return Ledger.open(MemoryKeyValueStore(), seed_sample_transactions=False)


@pytest.fixture
def sqlite_store(tmp_path):
    """Create a structured record store in a temporary database file."""
    store = SQLAlchemyRecordStore(f"sqlite:///{tmp_path / 'test.db'}").open()
    yield store
    store.close()


@pytest.fixture
def flat_store(tmp_path):
    """Create a fallback record store in a temporary directory."""
    store = FlatRecordStore(FileKeyValueStore(tmp_path / "local")).open()
    yield store
    store.close()


@pytest.fixture(params=["sqlite", "flat"])
def store(request):
    """Run a test against both record store backends."""
    return request.getfixturevalue(f"{request.param}_store")


@pytest.fixture
def home(tmp_path):
    """Return a temporary data home for CLI tests."""
    path = tmp_path / "home"
    path.mkdir()
    return str(path)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
