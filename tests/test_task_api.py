# tests/test_task_api.py

from __future__ import annotations

import time
from datetime import datetime, timezone

import pytest

from taskkeeper.assignees.directory import Assignee, AssigneeDirectoryError
from taskkeeper.tasks.task_api import create_task, default_due_date, toggle_completed
from taskkeeper.tasks.task_store import TaskStore

from .fakes import FakeAssigneeDirectory

NOW = datetime(2026, 10, 18, 12, 34, 56, 789000, tzinfo=timezone.utc)


def test_default_due_date_is_tomorrow_at_minute_start() -> None:
    assert default_due_date(NOW) == datetime(2026, 10, 19, 12, 34, tzinfo=timezone.utc)


@pytest.fixture
def us_eastern(monkeypatch: pytest.MonkeyPatch):
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset is not available on this platform")
    monkeypatch.setenv("TZ", "EST5EDT,M3.2.0,M11.1.0")
    time.tzset()
    yield
    monkeypatch.undo()
    time.tzset()


@pytest.mark.usefixtures("us_eastern")
def test_default_due_date_keeps_wall_clock_across_dst() -> None:
    # Saturday 12:00 EST; clocks spring forward early on Sunday 2026-03-08.
    now = datetime(2026, 3, 7, 17, 0, 30, tzinfo=timezone.utc)

    due = default_due_date(now)

    assert due.replace(tzinfo=None) == datetime(2026, 3, 8, 12, 0)
    assert due == datetime(2026, 3, 8, 16, 0, tzinfo=timezone.utc)


@pytest.mark.asyncio
async def test_create_task_fills_defaults(store: TaskStore, directory: FakeAssigneeDirectory) -> None:
    task = await create_task(store, directory, description="Buy milk", now=NOW)

    assert task.assignee == {"name": "Alice"}
    assert task.due_date == datetime(2026, 10, 19, 12, 34, tzinfo=timezone.utc)
    assert task.completed is False
    assert directory.calls == 1

    stored = store.list()
    assert len(stored) == 1
    assert stored[0].assignee_name == "Alice"
    assert stored[0].id == task.id


@pytest.mark.asyncio
async def test_create_task_keeps_explicit_values(store: TaskStore, directory: FakeAssigneeDirectory) -> None:
    due = datetime(2026, 12, 24, 18, 0, tzinfo=timezone.utc)

    task = await create_task(
        store,
        directory,
        description="Wrap presents",
        assignee=Assignee(name="Bob", extra={"email": "bob@example.com"}),
        due_date=due,
    )

    assert task.assignee == {"name": "Bob", "email": "bob@example.com"}
    assert store.list()[0].due_date == due
    assert directory.calls == 0


@pytest.mark.asyncio
async def test_create_task_with_plain_name_skips_directory(store: TaskStore) -> None:
    directory = FakeAssigneeDirectory(fail=True)
    task = await create_task(store, directory, description="x", assignee="Carol", now=NOW)
    assert task.assignee == "Carol"


@pytest.mark.asyncio
async def test_create_task_with_empty_directory(store: TaskStore) -> None:
    task = await create_task(store, FakeAssigneeDirectory(names=[]), description="x", now=NOW)
    assert task.assignee == ""


@pytest.mark.asyncio
async def test_create_task_surfaces_directory_errors(store: TaskStore) -> None:
    with pytest.raises(AssigneeDirectoryError):
        await create_task(store, FakeAssigneeDirectory(fail=True), description="x", now=NOW)
    assert store.list() == []


@pytest.mark.asyncio
async def test_toggle_completed_round_trip(store: TaskStore, directory: FakeAssigneeDirectory) -> None:
    await create_task(store, directory, description="a", now=NOW)
    await create_task(store, directory, description="b", now=NOW)

    assert toggle_completed(store, 1).completed is True
    assert [t.completed for t in store.list()] == [False, True]

    assert toggle_completed(store, 1).completed is False
    assert [t.completed for t in store.list()] == [False, False]

    with pytest.raises(IndexError):
        toggle_completed(store, 5)
