# src/taskkeeper/tasks/task_store.py

from __future__ import annotations

import copy
import logging
import uuid
from datetime import datetime, timedelta, timezone

from ..core.ports import KeyValueStorage
from .task_models import LoadResult, LoadStatus, Task, dump_task_list, parse_task_list

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "tasks"

SEED_DESCRIPTION = "My First Task!"
SEED_ASSIGNEE = "Me"
SEED_DUE_IN = timedelta(hours=1)


class TaskNotFoundError(KeyError):
    """No task with the given id in the current list."""


def new_task_id() -> str:
    return uuid.uuid4().hex


class TaskStore:
    """
    Task list kept as one JSON array in a single key-value slot.

    Every mutation reads the whole list, changes it, and writes the whole list
    back with one set_item call. Due dates are datetimes in memory and epoch
    milliseconds in storage.

    Index-based methods address the list as returned by the last list() call;
    indices shift after any add/remove. Id-based methods are the stable way to
    point at a task.

    Concurrency:
    - no locking; two writers on the same slot can lose updates
    """

    def __init__(self, storage: KeyValueStorage, key: str = DEFAULT_STORAGE_KEY) -> None:
        if not key:
            raise ValueError("storage key is required")
        self._storage = storage
        self._key = key

    @property
    def key(self) -> str:
        return self._key

    def initialize(self, *, now: datetime | None = None) -> None:
        """
        First-run setup.

        - no valid list in the slot -> write a single seed task
        - valid list with tasks that predate ids -> back-fill ids once
        """
        result = self.load()

        if not result.ok:
            if now is None:
                now = datetime.now(timezone.utc)
            seed = Task(
                description=SEED_DESCRIPTION,
                assignee=SEED_ASSIGNEE,
                due_date=now + SEED_DUE_IN,
            )
            self.add(seed)
            logger.info("TaskStore seeded key=%s (slot was %s)", self._key, result.status.value)
            return

        missing = [t for t in result.tasks if t.id is None]
        if missing:
            for task in missing:
                task.id = new_task_id()
            self.save(result.tasks)
            logger.info("TaskStore migration: assigned ids to %d task(s) key=%s", len(missing), self._key)

    # ---- reads ----

    def load(self) -> LoadResult:
        """Read the slot and say what was there (missing / corrupt / ok)."""
        raw = self._storage.get_item(self._key)
        if raw is None or raw.strip() == "":
            return LoadResult(status=LoadStatus.MISSING)

        try:
            tasks = parse_task_list(raw)
        except (ValueError, RecursionError) as e:
            # RecursionError: nesting deeper than the JSON decoder can follow.
            logger.warning("Stored task list is corrupt key=%s: %s", self._key, e)
            return LoadResult(status=LoadStatus.CORRUPT, error=str(e))

        return LoadResult(status=LoadStatus.OK, tasks=tasks)

    def list(self) -> list[Task]:
        """All tasks in insertion order; [] when the slot is missing or corrupt."""
        return self.load().tasks

    def count(self) -> int:
        return len(self.list())

    def get_by_index(self, index: int) -> Task | None:
        tasks = self.list()
        if 0 <= index < len(tasks):
            return tasks[index]
        return None

    def get(self, task_id: str) -> Task | None:
        for task in self.list():
            if task.id == task_id:
                return task
        return None

    def index_of(self, task_id: str) -> int | None:
        for i, task in enumerate(self.list()):
            if task.id == task_id:
                return i
        return None

    # ---- writes ----

    def add(self, task: Task) -> Task:
        """Append a new task. completed is always reset to False."""
        task.completed = False
        if task.id is None:
            task.id = new_task_id()

        tasks = self.list()
        tasks.append(task)
        self.save(tasks)
        logger.debug("Task added id=%s index=%d", task.id, len(tasks) - 1)
        return task

    def edit_at(self, index: int, task: Task) -> None:
        tasks = self.list()
        if not 0 <= index < len(tasks):
            raise IndexError(f"task index {index} out of range (0..{len(tasks) - 1})")
        tasks[index] = task
        self.save(tasks)
        logger.debug("Task edited index=%d id=%s", index, task.id)

    def edit(self, task_id: str, task: Task) -> None:
        """Replace the task with this id; the stored id is kept."""
        index = self.index_of(task_id)
        if index is None:
            raise TaskNotFoundError(task_id)
        task.id = task_id
        self.edit_at(index, task)

    def remove_at(self, index: int) -> None:
        """Remove by position; out-of-range positions are ignored."""
        tasks = self.list()
        if not 0 <= index < len(tasks):
            logger.debug("remove_at ignored index=%d size=%d", index, len(tasks))
            return
        removed = tasks.pop(index)
        self.save(tasks)
        logger.debug("Task removed index=%d id=%s", index, removed.id)

    def remove(self, task_id: str) -> bool:
        index = self.index_of(task_id)
        if index is None:
            return False
        self.remove_at(index)
        return True

    def save(self, tasks: list[Task]) -> None:
        """
        The only write primitive: serialize a deep copy and store it in one call.

        Storage errors (StorageWriteError) propagate to the caller.
        """
        payload = dump_task_list(copy.deepcopy(list(tasks)))
        self._storage.set_item(self._key, payload)
        logger.debug("TaskStore saved key=%s tasks=%d", self._key, len(tasks))
