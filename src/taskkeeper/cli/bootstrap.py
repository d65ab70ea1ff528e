# src/taskkeeper/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires concrete implementations into AppState (storage/tasks/assignees),
- runs the first-use setup of the task list.
"""

from __future__ import annotations

import logging

from ..assignees.directory import JsonAssigneeDirectory
from ..config import get_settings
from ..core.ports import KeyValueStorage
from ..core.state import AppState
from ..storage.kv_store import MemoryKeyValueStore, SQLiteKeyValueStore
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    if settings.storage_backend == "sqlite":
        settings.storage_db_path.parent.mkdir(parents=True, exist_ok=True)


def create_storage(settings) -> KeyValueStorage:
    if settings.storage_backend == "memory":
        logger.info("Using in-memory storage; tasks will not survive this process.")
        return MemoryKeyValueStore()
    return SQLiteKeyValueStore(settings.storage_db_path)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    storage = create_storage(settings)
    task_store = TaskStore(storage, key=settings.storage_key)
    task_store.initialize()

    state = AppState(
        settings=settings,
        storage=storage,
        task_store=task_store,
        assignees=JsonAssigneeDirectory(settings.assignees_path),
    )
    logger.info(
        "State ready backend=%s key=%s tasks=%d",
        settings.storage_backend,
        settings.storage_key,
        task_store.count(),
    )
    return state
