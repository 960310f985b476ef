"""
Wire models for the /tasks resource.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from tasktracker.task import Task


class TaskPayload(BaseModel):
    """JSON form of a Task. ``createdAt`` is a naive local date-time."""

    model_config = ConfigDict(populate_by_name=True)

    id: Optional[int] = None
    description: Optional[str] = None
    created_at: datetime = Field(alias="createdAt")

    @classmethod
    def from_task(cls, task: Task) -> TaskPayload:
        return cls(id=task.id, description=task.description, created_at=task.created_at)


class ErrorPayload(BaseModel):
    code: int
    error: str


class HealthPayload(BaseModel):
    status: str
    store: str
    tasks: int
