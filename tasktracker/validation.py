"""
Task Validation
===============
Explicit field rules for a Task, run uniformly before any write.

Rules (checked in order, all on ``description``):
    not_blank — None, empty or whitespace-only
    size      — length outside [min_length, max_length]; skipped for None
    unique    — already stored; only asked when the other rules pass
"""

from __future__ import annotations

from typing import Optional, Protocol

from tasktracker.errors import ConstraintViolationError, Violation
from tasktracker.task import Task

DEFAULT_MIN_LENGTH = 3
DEFAULT_MAX_LENGTH = 120


class DescriptionLookup(Protocol):
    def exists_description(self, description: str) -> bool: ...


def validate_task(
    task: Task,
    store: Optional[DescriptionLookup] = None,
    min_length: int = DEFAULT_MIN_LENGTH,
    max_length: int = DEFAULT_MAX_LENGTH,
) -> list[Violation]:
    """Return every violation found on ``task`` (empty list when valid)."""
    violations: list[Violation] = []
    description = task.description

    if description is None or not description.strip():
        violations.append(Violation("description", "not_blank", "must not be blank"))

    if description is not None and not (min_length <= len(description) <= max_length):
        violations.append(Violation(
            "description", "size",
            f"size must be between {min_length} and {max_length}",
        ))

    if not violations and store is not None and store.exists_description(description):
        violations.append(Violation("description", "unique", "must be unique"))

    return violations


class TaskValidator:
    """Injectable validator bound to a store and length limits."""

    def __init__(
        self,
        store: Optional[DescriptionLookup] = None,
        min_length: int = DEFAULT_MIN_LENGTH,
        max_length: int = DEFAULT_MAX_LENGTH,
    ):
        if min_length > max_length:
            raise ValueError(
                f"min_length ({min_length}) must not exceed max_length ({max_length})"
            )
        self.store = store
        self.min_length = min_length
        self.max_length = max_length

    def validate(self, task: Task) -> list[Violation]:
        return validate_task(task, self.store, self.min_length, self.max_length)

    def check(self, task: Task) -> None:
        """Raise ConstraintViolationError if ``task`` breaks any rule."""
        violations = self.validate(task)
        if violations:
            raise ConstraintViolationError(violations)
