# src/taskkeeper/tasks/task_models.py

from __future__ import annotations

import copy
import json
import math
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import StrEnum
from typing import Any

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ONE_MS = timedelta(milliseconds=1)

_KNOWN_KEYS = ("description", "assignee", "due_date", "completed", "id")

AssigneeValue = str | dict[str, Any]


class TaskRecordError(ValueError):
    """A stored record cannot be turned into a Task."""


def to_timestamp_ms(value: datetime) -> int:
    """
    In-use -> at-rest: datetime to Unix epoch milliseconds.

    Naive datetimes are taken as local time. Sub-millisecond precision is dropped.
    """
    if not isinstance(value, datetime):
        raise TypeError(f"due_date must be a datetime, got {type(value).__name__}")
    if value.tzinfo is None:
        value = value.astimezone()
    return (value - EPOCH) // _ONE_MS


def from_timestamp_ms(ms: int) -> datetime:
    """At-rest -> in-use: epoch milliseconds to an aware UTC datetime."""
    return EPOCH + timedelta(milliseconds=int(ms))


@dataclass(slots=True)
class Task:
    description: str
    assignee: AssigneeValue
    due_date: datetime
    completed: bool = False

    # Stable opaque identifier; None only for records written before ids existed.
    id: str | None = None

    # Unknown keys found in the stored record, written back untouched.
    extra: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Naive due dates are local wall-clock time; pin the offset so they
        # compare equal to what a load gives back.
        if isinstance(self.due_date, datetime) and self.due_date.tzinfo is None:
            self.due_date = self.due_date.astimezone()

    @property
    def assignee_name(self) -> str:
        if isinstance(self.assignee, dict):
            return str(self.assignee.get("name", ""))
        return str(self.assignee or "")

    def to_record(self) -> dict[str, Any]:
        """Deep-copied at-rest form; the task itself is left as is."""
        record: dict[str, Any] = copy.deepcopy(self.extra)
        record["description"] = self.description
        record["assignee"] = copy.deepcopy(self.assignee)
        record["due_date"] = to_timestamp_ms(self.due_date)
        record["completed"] = bool(self.completed)
        if self.id is not None:
            record["id"] = self.id
        return record

    @classmethod
    def from_record(cls, raw: Any) -> Task:
        if not isinstance(raw, dict):
            raise TaskRecordError(f"task record must be an object, got {type(raw).__name__}")

        due_raw = raw.get("due_date")
        if isinstance(due_raw, bool) or not isinstance(due_raw, (int, float)):
            raise TaskRecordError(f"due_date must be an epoch timestamp, got {due_raw!r}")
        if isinstance(due_raw, float) and not math.isfinite(due_raw):
            raise TaskRecordError(f"due_date is not finite: {due_raw!r}")

        try:
            due_date = from_timestamp_ms(int(due_raw))
        except OverflowError as e:
            raise TaskRecordError(f"due_date out of range: {due_raw!r}") from e

        task_id = raw.get("id")
        return cls(
            description=str(raw.get("description") or ""),
            assignee=copy.deepcopy(raw.get("assignee") or ""),
            due_date=due_date,
            # Only a real JSON true counts; "false", 1 and friends read as open.
            completed=raw.get("completed") is True,
            id=str(task_id) if task_id not in (None, "") else None,
            extra={k: copy.deepcopy(v) for k, v in raw.items() if k not in _KNOWN_KEYS},
        )


def dump_task_list(tasks: list[Task]) -> str:
    return json.dumps([t.to_record() for t in tasks], ensure_ascii=False, separators=(",", ":"))


def parse_task_list(raw: str) -> list[Task]:
    """Decode the stored JSON array. Raises ValueError on anything malformed."""
    data = json.loads(raw)
    if not isinstance(data, list):
        raise TaskRecordError(f"stored value must be a JSON array, got {type(data).__name__}")
    return [Task.from_record(item) for item in data]


class LoadStatus(StrEnum):
    """What the storage slot held when it was read."""

    MISSING = "missing"  # absent or empty
    CORRUPT = "corrupt"  # present but not a valid task list
    OK = "ok"


@dataclass(frozen=True, slots=True)
class LoadResult:
    status: LoadStatus
    tasks: list[Task] = field(default_factory=list)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status is LoadStatus.OK
