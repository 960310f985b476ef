"""
Task Store Base — Abstract Interface
=====================================
Persistence collaborator consumed by the task handler.
All stores (memory, sqlite) implement this.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Optional

from tasktracker.task import Task


@dataclass
class StoreConfig:
    """Configuration for a task store.

    Only populate the fields that apply to your chosen backend.
    """

    store_name: str = "memory"  # "memory", "sqlite"
    db_path: str = ""           # Database file (sqlite only)
    extra: dict[str, Any] = field(default_factory=dict)  # Store-specific options


class BaseTaskStore(ABC):
    """Abstract base class for task stores.

    All stores must implement:
        - save(): Insert a task and assign its id
        - find_by_id(): Look a task up by id
        - exists_description(): Check the unique description constraint
        - count(): Number of stored tasks

    Implementations must be safe for concurrent use by several
    in-flight requests.
    """

    def __init__(self, config: StoreConfig):
        self.config = config

    @abstractmethod
    def save(self, task: Task) -> Task:
        """Insert ``task``, assign its id in place and return it.

        Raises:
            DuplicateDescriptionError: If the description is already stored.
        """
        ...

    @abstractmethod
    def find_by_id(self, task_id: int) -> Optional[Task]:
        """Return the stored task, or None when the id is unknown."""
        ...

    @abstractmethod
    def exists_description(self, description: str) -> bool:
        ...

    @abstractmethod
    def count(self) -> int:
        ...

    @property
    def name(self) -> str:
        return self.config.store_name
