"""
Task Tracker Errors
===================
Exceptions raised inside the library. The request handler is the only
place these are turned into HTTP responses.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Violation:
    """A single failed field-level validation rule."""

    field: str        # "description"
    rule: str         # "not_blank", "size", "unique"
    message: str      # Human-readable message (e.g. "must not be blank")

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


class TaskTrackerError(Exception):
    """Base class for all task tracker errors."""


class ConstraintViolationError(TaskTrackerError):
    """One or more constraints were not met by a Task."""

    def __init__(self, violations: list[Violation]):
        self.violations = list(violations)
        super().__init__(", ".join(str(v) for v in self.violations))


class DuplicateDescriptionError(ConstraintViolationError):
    """A store refused to insert a Task whose description already exists."""

    def __init__(self, description: str):
        self.description = description
        super().__init__([Violation("description", "unique", "must be unique")])
