# tests/test_kv_store.py

from __future__ import annotations

import sqlite3
from pathlib import Path

import pytest

from taskkeeper.storage.kv_store import MemoryKeyValueStore, SQLiteKeyValueStore, StorageWriteError


def test_sqlite_set_get_overwrite_remove(tmp_path: Path) -> None:
    kv = SQLiteKeyValueStore(tmp_path / "nested" / "storage.sqlite3")

    assert kv.get_item("tasks") is None

    kv.set_item("tasks", "[]")
    assert kv.get_item("tasks") == "[]"

    kv.set_item("tasks", '[{"a": 1}]')
    assert kv.get_item("tasks") == '[{"a": 1}]'

    kv.remove_item("tasks")
    assert kv.get_item("tasks") is None

    # removing a missing key is fine
    kv.remove_item("tasks")


def test_sqlite_values_survive_reopen(tmp_path: Path) -> None:
    db = tmp_path / "storage.sqlite3"
    SQLiteKeyValueStore(db).set_item("k", "välue ✓")

    assert SQLiteKeyValueStore(db).get_item("k") == "välue ✓"


def test_sqlite_write_failure_becomes_storage_write_error(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    kv = SQLiteKeyValueStore(tmp_path / "storage.sqlite3")

    def broken_conn() -> sqlite3.Connection:
        raise sqlite3.OperationalError("database or disk is full")

    monkeypatch.setattr(kv, "_get_conn", broken_conn)

    with pytest.raises(StorageWriteError):
        kv.set_item("tasks", "[]")
    with pytest.raises(StorageWriteError):
        kv.remove_item("tasks")


def test_memory_store_basics() -> None:
    kv = MemoryKeyValueStore({"a": "1"})
    assert kv.get_item("a") == "1"

    kv.set_item("b", "2")
    kv.remove_item("a")
    kv.remove_item("missing")

    assert kv.get_item("a") is None
    assert kv.get_item("b") == "2"
