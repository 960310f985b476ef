"""
Memory Store — In-process task storage
=======================================
Dict-backed store. Used as the default backend and as the fake in tests.
"""

from __future__ import annotations

import itertools
import threading
from typing import Optional

from tasktracker.errors import DuplicateDescriptionError
from tasktracker.stores.base import BaseTaskStore, StoreConfig
from tasktracker.task import Task


class MemoryTaskStore(BaseTaskStore):
    """Keeps snapshots of saved tasks; callers never hold the stored copy."""

    def __init__(self, config: Optional[StoreConfig] = None):
        super().__init__(config or StoreConfig(store_name="memory"))
        self._tasks: dict[int, Task] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def save(self, task: Task) -> Task:
        with self._lock:
            if any(t.description == task.description for t in self._tasks.values()):
                raise DuplicateDescriptionError(task.description)
            task.id = next(self._ids)
            self._tasks[task.id] = task.copy()
        return task

    def find_by_id(self, task_id: int) -> Optional[Task]:
        with self._lock:
            stored = self._tasks.get(task_id)
            return stored.copy() if stored is not None else None

    def exists_description(self, description: str) -> bool:
        with self._lock:
            return any(t.description == description for t in self._tasks.values())

    def count(self) -> int:
        with self._lock:
            return len(self._tasks)
