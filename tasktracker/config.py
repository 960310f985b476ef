"""
Service Configuration
=====================
Settings for the task service, read from ``TASKTRACKER_*`` environment
variables. CLI flags override whatever the environment provides.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

from tasktracker.stores.base import StoreConfig
from tasktracker.validation import DEFAULT_MAX_LENGTH, DEFAULT_MIN_LENGTH

LOG_FORMAT = "%(asctime)s %(levelname)s %(message)s"

# Names both the logging module and uvicorn accept.
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")
LOG_LEVEL_ALIASES = {"WARN": "WARNING", "FATAL": "CRITICAL"}


def normalize_log_level(level: str) -> str:
    """Upper-case ``level`` and resolve stdlib aliases such as WARN."""
    name = level.strip().upper()
    name = LOG_LEVEL_ALIASES.get(name, name)
    if name not in LOG_LEVELS:
        raise ValueError(f"Unknown log level '{level}'. Available: {list(LOG_LEVELS)}")
    return name


@dataclass
class ServiceConfig:
    host: str = "127.0.0.1"
    port: int = 8080
    store: str = "memory"       # "memory", "sqlite"
    db_path: str = ""           # SQLite file; empty = ~/.tasktracker/tasks.db
    log_level: str = "INFO"
    min_length: int = DEFAULT_MIN_LENGTH
    max_length: int = DEFAULT_MAX_LENGTH

    def __post_init__(self):
        self.log_level = normalize_log_level(self.log_level)

    @property
    def uvicorn_log_level(self) -> str:
        return normalize_log_level(self.log_level).lower()

    @classmethod
    def from_env(cls, environ: Optional[dict] = None) -> ServiceConfig:
        env = os.environ if environ is None else environ
        defaults = cls()
        return cls(
            host=env.get("TASKTRACKER_HOST", defaults.host),
            port=int(env.get("TASKTRACKER_PORT", defaults.port)),
            store=env.get("TASKTRACKER_STORE", defaults.store),
            db_path=env.get("TASKTRACKER_DB", defaults.db_path),
            log_level=env.get("TASKTRACKER_LOG_LEVEL", defaults.log_level),
        )

    def to_store_config(self) -> StoreConfig:
        return StoreConfig(store_name=self.store, db_path=self.db_path)


def configure_logging(level: str = "INFO") -> None:
    """Install a root handler once; later calls only adjust the level."""
    root = logging.getLogger()
    resolved = getattr(logging, level.upper(), logging.INFO)
    if root.handlers:
        logging.getLogger("tasktracker").setLevel(resolved)
        return
    logging.basicConfig(level=resolved, format=LOG_FORMAT)
