# src/taskkeeper/assignees/directory.py

from __future__ import annotations

import asyncio
import copy
import json
import logging
from dataclasses import dataclass, field
from importlib import resources
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

BUNDLED_RESOURCE = "assignees.json"


class AssigneeDirectoryError(RuntimeError):
    """The assignee resource is missing or not a list of assignees."""


@dataclass(frozen=True, slots=True)
class Assignee:
    name: str
    extra: dict[str, Any] = field(default_factory=dict)

    def to_record(self) -> dict[str, Any]:
        """Form stored inside a task's assignee field."""
        record = copy.deepcopy(self.extra)
        record["name"] = self.name
        return record

    @classmethod
    def from_raw(cls, raw: Any) -> Assignee:
        if isinstance(raw, str):
            if not raw.strip():
                raise AssigneeDirectoryError("assignee name is empty")
            return cls(name=raw.strip())
        if isinstance(raw, dict):
            name = raw.get("name")
            if not isinstance(name, str) or not name.strip():
                raise AssigneeDirectoryError(f"assignee record without a name: {raw!r}")
            extra = {k: v for k, v in raw.items() if k != "name"}
            return cls(name=name.strip(), extra=extra)
        raise AssigneeDirectoryError(f"unsupported assignee entry: {raw!r}")


def parse_assignees(text: str) -> list[Assignee]:
    try:
        data = json.loads(text)
    except ValueError as e:
        raise AssigneeDirectoryError(f"assignee resource is not valid JSON: {e}") from e
    if not isinstance(data, list):
        raise AssigneeDirectoryError("assignee resource must be a JSON array")
    return [Assignee.from_raw(item) for item in data]


class JsonAssigneeDirectory:
    """
    Assignees read from a static JSON file.

    The file is a JSON array of names or objects with a "name" key. Without an
    explicit path the list bundled with the package is used. Each call re-reads
    the file in a worker thread; nothing is cached here.
    """

    def __init__(self, path: str | Path | None = None) -> None:
        self._path = Path(path) if path is not None else None

    @property
    def source(self) -> str:
        return str(self._path) if self._path is not None else f"taskkeeper.resources/{BUNDLED_RESOURCE}"

    def _read_text(self) -> str:
        try:
            if self._path is None:
                return resources.files("taskkeeper.resources").joinpath(BUNDLED_RESOURCE).read_text("utf-8")
            return self._path.read_text("utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise AssigneeDirectoryError(f"cannot read assignees from {self.source}: {e}") from e

    async def list_assignees(self) -> list[Assignee]:
        text = await asyncio.to_thread(self._read_text)
        out = parse_assignees(text)
        logger.debug("Loaded %d assignee(s) from %s", len(out), self.source)
        return out
