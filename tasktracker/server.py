"""
Task Tracker Server — HTTP surface for the /tasks resource
===========================================================
FastAPI application that mounts a TaskHandler on a single path.

Launch:
    python -m tasktracker.server        # Direct
    python -m tasktracker.cli serve     # Via CLI

Endpoints:
    POST   /tasks?description=...   → 201 task | 422 error
    GET    /tasks?id=...            → 200 task | 404 error
    PUT    /tasks?id=...            → 200 task (unchanged) | 404 error
    DELETE /tasks                   → 200 "DELETE OK"
    GET    /health                  → store name and task count

Parameters are read the servlet way: query string first, then an
urlencoded or multipart form body.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse

from tasktracker import __version__
from tasktracker.config import ServiceConfig, configure_logging
from tasktracker.handler import HandlerResponse, TaskHandler
from tasktracker.schemas import HealthPayload
from tasktracker.stores.registry import get_store
from tasktracker.validation import TaskValidator

logger = logging.getLogger("tasktracker.server")

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


# ─────────────────────────────────────────────────────────────
#  Helpers
# ─────────────────────────────────────────────────────────────

async def extract_params(request: Request) -> dict[str, str]:
    """Merge query parameters with form fields.

    The first occurrence of a name wins: query string before form body,
    and earlier values before later repeats of the same key.
    """
    params: dict[str, str] = {}
    for key, value in request.query_params.multi_items():
        params.setdefault(key, value)
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        for key, value in form.multi_items():
            if isinstance(value, str):
                params.setdefault(key, value)
    return params


def to_response(result: HandlerResponse) -> Response:
    return Response(
        content=result.body,
        status_code=result.status,
        media_type=result.content_type,
    )


def build_handler(config: ServiceConfig) -> TaskHandler:
    """Wire a store and validator from config into a TaskHandler."""
    store = get_store(config.to_store_config())
    validator = TaskValidator(
        store=store, min_length=config.min_length, max_length=config.max_length,
    )
    return TaskHandler(store, validator)


# ─────────────────────────────────────────────────────────────
#  App Factory
# ─────────────────────────────────────────────────────────────

def create_app(
    config: Optional[ServiceConfig] = None,
    handler: Optional[TaskHandler] = None,
) -> FastAPI:
    config = config or ServiceConfig.from_env()
    configure_logging(config.log_level)

    handler = handler or build_handler(config)
    app = FastAPI(title="Task Tracker", version=__version__)
    app.state.handler = handler
    app.state.config = config

    async def dispatch(method: str, request: Request) -> Response:
        params = await extract_params(request)
        # Stores block; keep them off the event loop.
        result = await asyncio.to_thread(handler.handle, method, params)
        logger.info("%s /tasks -> %d", method, result.status)
        return to_response(result)

    @app.post("/tasks")
    async def post_task(request: Request):
        return await dispatch("POST", request)

    @app.get("/tasks")
    async def get_task(request: Request):
        return await dispatch("GET", request)

    @app.put("/tasks")
    async def put_task(request: Request):
        return await dispatch("PUT", request)

    @app.delete("/tasks")
    async def delete_task(request: Request):
        return await dispatch("DELETE", request)

    @app.get("/health")
    async def health():
        store = handler.store
        count = await asyncio.to_thread(store.count)
        payload = HealthPayload(status="ok", store=store.name, tasks=count)
        return JSONResponse(payload.model_dump())

    logger.info("Task Tracker ready (store=%s)", handler.store.name)
    return app


# ─────────────────────────────────────────────────────────────
#  Startup
# ─────────────────────────────────────────────────────────────

def run_server(config: Optional[ServiceConfig] = None):
    """Launch the task service with uvicorn."""
    import uvicorn

    config = config or ServiceConfig.from_env()
    app = create_app(config)

    print("\n─── Task Tracker ───")
    print(f"  http://{config.host}:{config.port}/tasks")
    print(f"  Store: {config.store}")
    print("  Press Ctrl+C to stop\n")

    uvicorn.run(app, host=config.host, port=config.port, log_level=config.uvicorn_log_level)


if __name__ == "__main__":
    run_server()
