"""Lazily opened ledger and record store for CLI commands."""

import json

import click
from sqlalchemy.exc import SQLAlchemyError

from ledgerbook.cli.error_handling import handle_storage_error
from ledgerbook.database.base import RecordStore
from ledgerbook.database.factories import create_ledger_kv, open_record_store
from ledgerbook.domain.errors import StorageError
from ledgerbook.domain.ledger import Ledger


def get_ledger(ctx: click.Context) -> Ledger:
    """Return the ledger for this invocation, loading it on first use."""
    obj = ctx.find_root().obj
    if "ledger" not in obj:
        try:
            obj["ledger"] = Ledger.open(create_ledger_kv(obj["home"]))
        except json.JSONDecodeError as e:
            handle_storage_error(ctx, f"ledger state is corrupted ({e})")
        except OSError as e:
            handle_storage_error(ctx, e)
    return obj["ledger"]


def get_store(ctx: click.Context) -> RecordStore:
    """Return the record store for this invocation, opening it on first use.

    The store is closed when the root context tears down.
    """
    root = ctx.find_root()
    obj = root.obj
    if "store" not in obj:
        try:
            store = open_record_store(home=obj["home"], backend=obj["backend"])
        except (StorageError, SQLAlchemyError, OSError) as e:
            handle_storage_error(ctx, e)
        root.call_on_close(store.close)
        obj["store"] = store
    return obj["store"]
