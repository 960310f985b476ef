"""
Task Handler — Request handling for the /tasks resource
========================================================
Framework-independent: receives the request parameters as a mapping and
returns a HandlerResponse. The HTTP layer (tasktracker.server) only
adapts requests and responses around it.

Verbs:
    POST    description=...  → 201 task | 422 violations
    GET     id=...           → 200 task | 404 "ID not found"
    PUT     id=...           → same as GET; nothing is updated
    DELETE                   → 200 "DELETE OK"; nothing is removed

A malformed, missing or out-of-range ``id`` raises ValueError out of the
handler; it is not converted into a JSON error. Accepted ids are an
optional sign followed by ASCII digits, within the signed 64-bit range.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Mapping, Optional

from tasktracker.errors import ConstraintViolationError
from tasktracker.schemas import ErrorPayload, TaskPayload
from tasktracker.stores.base import BaseTaskStore
from tasktracker.task import Task
from tasktracker.validation import TaskValidator

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"
JSON_ERROR_CONTENT_TYPE = "application/json; charset=UTF-8"
TEXT_CONTENT_TYPE = "text/plain"

NOT_FOUND_MESSAGE = "ID not found"

ID_PATTERN = re.compile(r"[+-]?[0-9]+")
ID_MIN = -(2 ** 63)
ID_MAX = 2 ** 63 - 1


def parse_task_id(raw: Optional[str]) -> int:
    """Parse a task id as a signed 64-bit integer; raise ValueError otherwise."""
    if raw is None or not ID_PATTERN.fullmatch(raw):
        raise ValueError(f"Malformed task id: {raw!r}")
    task_id = int(raw)
    if not ID_MIN <= task_id <= ID_MAX:
        raise ValueError(f"Task id out of range: {raw!r}")
    return task_id


@dataclass
class HandlerResponse:
    """Status, content type and raw body of a handled request."""

    status: int = 200
    content_type: str = TEXT_CONTENT_TYPE
    body: bytes = b""

    @property
    def text(self) -> str:
        return self.body.decode("utf-8")


class TaskHandler:
    """Handles GET/POST/PUT/DELETE against the single task resource.

    Args:
        store: Persistence collaborator (save / find_by_id).
        validator: Optional validator; defaults to a TaskValidator bound
            to ``store`` so the unique rule is checked.
    """

    def __init__(self, store: BaseTaskStore, validator: Optional[TaskValidator] = None):
        self.store = store
        self.validator = validator or TaskValidator(store=store)

    def handle(self, method: str, params: Mapping[str, str]) -> HandlerResponse:
        """Dispatch by HTTP method name."""
        handlers = {
            "POST": self.do_post,
            "GET": self.do_get,
            "PUT": self.do_put,
            "DELETE": self.do_delete,
        }
        verb = handlers.get(method.upper())
        if verb is None:
            return self.generate_json_error(405, f"Method {method.upper()} not allowed")
        return verb(params)

    # ─── Verbs ────────────────────────────────────────────

    def do_post(self, params: Mapping[str, str]) -> HandlerResponse:
        task = Task(params.get("description"))

        try:
            self.validator.check(task)
            self.store.save(task)
        except ConstraintViolationError as e:
            logger.info("Rejected task: %s", e)
            return self.generate_json_error(422, str(e))

        logger.info("Created task %s", task.id)
        return self.generate_json_output(201, task)

    def do_get(self, params: Mapping[str, str]) -> HandlerResponse:
        return self._lookup(params)

    def do_put(self, params: Mapping[str, str]) -> HandlerResponse:
        # Update is not implemented: returns the stored record unchanged.
        return self._lookup(params)

    def do_delete(self, params: Mapping[str, str]) -> HandlerResponse:
        # Delete is not implemented: nothing is removed.
        return HandlerResponse(200, TEXT_CONTENT_TYPE, b"DELETE OK")

    def _lookup(self, params: Mapping[str, str]) -> HandlerResponse:
        task_id = parse_task_id(params.get("id"))
        task = self.store.find_by_id(task_id)

        if task is None:
            logger.info("Task %s not found", task_id)
            return self.generate_json_error(404, NOT_FOUND_MESSAGE)
        return self.generate_json_output(200, task)

    # ─── Response shaping ─────────────────────────────────

    def generate_json_output(self, code: int, task: Optional[Task]) -> HandlerResponse:
        """Serialize ``task`` with status ``code``; empty body when task is None."""
        if task is None:
            return HandlerResponse(code, JSON_CONTENT_TYPE, b"")

        try:
            body = TaskPayload.from_task(task).model_dump_json(by_alias=True)
        except (ValueError, TypeError) as e:
            logger.error("Could not serialize task %s: %s", task.id, e)
            return self.generate_json_error(500, str(e))

        return HandlerResponse(code, JSON_CONTENT_TYPE, body.encode("utf-8"))

    def generate_json_error(self, code: int, message: str) -> HandlerResponse:
        body = ErrorPayload(code=code, error=message).model_dump_json()
        return HandlerResponse(code, JSON_ERROR_CONTENT_TYPE, body.encode("utf-8"))
