# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from taskkeeper.core.state import AppState
from taskkeeper.tasks.task_store import TaskStore

from .fakes import FakeAssigneeDirectory, RecordingStorage


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the CLI.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="taskkeeper-test",
        log_level="DEBUG",
        storage_backend="memory",
        storage_key="tasks",
        data_dir=tmp_path,
        storage_db_path=tmp_path / "storage.sqlite3",
        assignees_path=None,
    )


@pytest.fixture()
def storage() -> RecordingStorage:
    return RecordingStorage()


@pytest.fixture()
def store(storage: RecordingStorage) -> TaskStore:
    """Empty, not yet initialized store over in-memory storage."""
    return TaskStore(storage, key="tasks")


@pytest.fixture()
def directory() -> FakeAssigneeDirectory:
    return FakeAssigneeDirectory()


@pytest.fixture()
def state(
    settings: SimpleNamespace,
    storage: RecordingStorage,
    store: TaskStore,
    directory: FakeAssigneeDirectory,
) -> AppState:
    """AppState wired with in-memory storage and a fake directory."""
    return AppState(
        settings=settings,
        storage=storage,
        task_store=store,
        assignees=directory,
    )
