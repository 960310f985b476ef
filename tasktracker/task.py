"""
Task — The persisted unit of work
==================================
A plain data entity with an identity, a description and an immutable
creation timestamp.

Equality rule:
    Two tasks are equal when both have an assigned id and the ids match.
    A task without an id is only equal to itself. The hash follows the
    same rule, so assigning an id to a task that already sits in a set
    or dict key changes its hash; persist first, then index.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional


class Task:
    """A simple task.

    Construction forms:
        Task()                          # timestamp only
        Task("Buy milk")                # timestamp + description
        Task("Buy milk", task_id=7)     # rebuilt from storage
    """

    __slots__ = ("_created_at", "id", "description")

    def __init__(self, description: Optional[str] = None, task_id: Optional[int] = None):
        # The timestamp is always established before any other field.
        self._created_at: datetime = datetime.now()
        self.id: Optional[int] = task_id
        self.description: Optional[str] = description

    @classmethod
    def restore(cls, task_id: int, description: str, created_at: datetime) -> Task:
        """Rebuild a stored task, keeping its original creation time."""
        task = cls(description, task_id=task_id)
        task._created_at = created_at
        return task

    @property
    def created_at(self) -> datetime:
        return self._created_at

    def copy(self) -> Task:
        return Task.restore(self.id, self.description, self._created_at)

    # ─── Identity ─────────────────────────────────────────

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Task):
            return NotImplemented
        if self.id is None or other.id is None:
            return self is other
        return self.id == other.id

    def __hash__(self) -> int:
        if self.id is None:
            return object.__hash__(self)
        return hash(("Task", self.id))

    def __repr__(self) -> str:
        return (
            f"Task(id={self.id!r}, description={self.description!r}, "
            f"created_at={self._created_at.isoformat()})"
        )
