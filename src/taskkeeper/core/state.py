# src/taskkeeper/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..assignees.directory import Assignee
from ..core.ports import AssigneeDirectory, KeyValueStorage
from ..tasks.task_store import TaskStore


@dataclass
class AppState:
    # Store Settings on the state for easy access in other modules later.
    settings: Any

    storage: KeyValueStorage
    task_store: TaskStore
    assignees: AssigneeDirectory

    # Last directory result, fetched lazily by the console commands.
    assignee_cache: list[Assignee] | None = None
