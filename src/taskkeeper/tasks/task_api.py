# src/taskkeeper/tasks/task_api.py

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone

from ..assignees.directory import Assignee
from ..core.ports import AssigneeDirectory
from .task_models import AssigneeValue, Task
from .task_store import TaskStore

logger = logging.getLogger(__name__)


def default_due_date(now: datetime | None = None) -> datetime:
    """
    Create-form default: this time tomorrow, at the start of the minute.

    "Tomorrow" is the next local calendar day at the same wall-clock time, so a
    DST change in between shifts the UTC distance to 23 or 25 hours.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    wall = now.astimezone().replace(tzinfo=None)
    tomorrow = (wall + timedelta(days=1)).replace(second=0, microsecond=0)
    # Re-attach the local offset that is valid on the new day.
    return tomorrow.astimezone()


async def default_assignee(directory: AssigneeDirectory) -> AssigneeValue:
    """First directory entry, as a stored record."""
    assignees = await directory.list_assignees()
    if not assignees:
        return ""
    return assignees[0].to_record()


async def create_task(
    store: TaskStore,
    directory: AssigneeDirectory,
    *,
    description: str,
    assignee: Assignee | AssigneeValue | None = None,
    due_date: datetime | None = None,
    now: datetime | None = None,
) -> Task:
    """
    Convenience helper: build a task the way the create form does and store it.

    Unset assignee -> first entry of the directory.
    Unset due date -> tomorrow (see default_due_date).
    """
    if isinstance(assignee, Assignee):
        value: AssigneeValue = assignee.to_record()
    elif assignee is None or assignee == "":
        value = await default_assignee(directory)
    else:
        value = assignee

    task = Task(
        description=description,
        assignee=value,
        due_date=due_date if due_date is not None else default_due_date(now),
    )
    stored = store.add(task)
    logger.info("Task created id=%s assignee=%s", stored.id, stored.assignee_name)
    return stored


def toggle_completed(store: TaskStore, index: int) -> Task:
    """Flip the completed flag of the task at index and persist the list."""
    tasks = store.list()
    if not 0 <= index < len(tasks):
        raise IndexError(f"task index {index} out of range (0..{len(tasks) - 1})")
    task = tasks[index]
    task.completed = not task.completed
    store.save(tasks)
    logger.debug("Task toggled id=%s completed=%s", task.id, task.completed)
    return task
