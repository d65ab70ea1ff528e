# src/taskkeeper/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The task layer depends on Protocols instead of concrete implementations.
This keeps storage backends and the assignee source swappable and makes testing easier.
"""

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..assignees.directory import Assignee


class KeyValueStorage(Protocol):
    """
    Named text slots (localStorage-like).

    set_item/remove_item raise StorageWriteError when the backend cannot persist.
    """

    def get_item(self, key: str) -> str | None: ...
    def set_item(self, key: str, value: str) -> None: ...
    def remove_item(self, key: str) -> None: ...


class AssigneeDirectory(Protocol):
    """Read-only source of selectable assignees. One call, one result."""

    async def list_assignees(self) -> list[Assignee]: ...

