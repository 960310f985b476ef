"""
SQLite Store — File-backed task storage
========================================
The ``tasks`` table carries the entity's column constraints:
description up to 120 chars, NOT NULL and UNIQUE; created_at NOT NULL.
"""

from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Optional

from tasktracker.errors import DuplicateDescriptionError
from tasktracker.stores.base import BaseTaskStore, StoreConfig
from tasktracker.task import Task

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = Path.home() / ".tasktracker" / "tasks.db"


class SQLiteTaskStore(BaseTaskStore):
    """Store backed by a SQLite file. One connection per call."""

    def __init__(self, config: Optional[StoreConfig] = None):
        super().__init__(config or StoreConfig(store_name="sqlite"))
        self.db_path = self.config.db_path or str(DEFAULT_DB_PATH)
        Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _init_db(self) -> None:
        with self._get_connection() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS tasks (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    description VARCHAR(120) NOT NULL UNIQUE,
                    created_at TEXT NOT NULL
                )
            """)
            conn.commit()
        logger.debug("Task table ready in %s", self.db_path)

    @contextmanager
    def _get_connection(self):
        """Context manager for database connections."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        try:
            yield conn
        finally:
            conn.close()

    def save(self, task: Task) -> Task:
        with self._get_connection() as conn:
            try:
                cursor = conn.execute(
                    "INSERT INTO tasks (description, created_at) VALUES (?, ?)",
                    (task.description, task.created_at.isoformat()),
                )
            except sqlite3.IntegrityError as e:
                if "UNIQUE" in str(e):
                    raise DuplicateDescriptionError(task.description) from e
                raise
            conn.commit()
            task.id = cursor.lastrowid
        return task

    def find_by_id(self, task_id: int) -> Optional[Task]:
        with self._get_connection() as conn:
            row = conn.execute(
                "SELECT id, description, created_at FROM tasks WHERE id = ?",
                (task_id,),
            ).fetchone()
        if row is None:
            return None
        return Task.restore(
            row["id"], row["description"], datetime.fromisoformat(row["created_at"])
        )

    def exists_description(self, description: str) -> bool:
        with self._get_connection() as conn:
            row = conn.execute(
                "SELECT 1 FROM tasks WHERE description = ? LIMIT 1", (description,)
            ).fetchone()
        return row is not None

    def count(self) -> int:
        with self._get_connection() as conn:
            return conn.execute("SELECT COUNT(*) FROM tasks").fetchone()[0]
