"""
Task Store Layer
================
Persistence collaborators for Task records: insert and find-by-id.
Ships a memory store and a SQLite store.
"""

from tasktracker.stores.base import BaseTaskStore, StoreConfig
from tasktracker.stores.registry import get_store, list_stores, register_store

__all__ = [
    "BaseTaskStore", "StoreConfig",
    "get_store", "list_stores", "register_store",
]
