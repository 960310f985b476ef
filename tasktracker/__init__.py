"""
Task Tracker — A minimal task-tracking HTTP endpoint
=====================================================
A persisted Task record exposed on a single /tasks resource.

Architecture:
    Task        — id, description, creation timestamp
    Validation  — explicit rules run before any write
    Stores      — persistence collaborators (memory, sqlite)
    Handler     — request handling and JSON response shaping
    Server      — FastAPI app mounting the handler
"""

__version__ = "0.1.0"

from tasktracker.task import Task
from tasktracker.errors import (
    ConstraintViolationError, DuplicateDescriptionError, TaskTrackerError, Violation,
)
from tasktracker.validation import TaskValidator, validate_task
from tasktracker.handler import HandlerResponse, TaskHandler

__all__ = [
    "Task",
    "ConstraintViolationError", "DuplicateDescriptionError", "TaskTrackerError", "Violation",
    "TaskValidator", "validate_task",
    "HandlerResponse", "TaskHandler",
]
