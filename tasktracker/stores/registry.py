"""
Store Registry — Discover, Register, and Instantiate Task Stores
=================================================================
Central registry that maps store names to their implementation classes.
"""

from __future__ import annotations

from typing import Type

from tasktracker.stores.base import BaseTaskStore, StoreConfig

# ─────────────────────────────────────────────────────────────
#  Registry
# ─────────────────────────────────────────────────────────────

_REGISTRY: dict[str, Type[BaseTaskStore]] = {}

BUILTIN_STORES = ("memory", "sqlite")


def register_store(name: str, store_class: Type[BaseTaskStore]):
    """Register a store class under a name."""
    _REGISTRY[name.lower()] = store_class


def get_store(config: StoreConfig) -> BaseTaskStore:
    """Instantiate a store from config.

    If the store isn't registered yet, tries to import it lazily.

    Raises:
        ValueError: If the store is not supported.
    """
    name = config.store_name.lower()

    if name not in _REGISTRY:
        _try_lazy_import(name)

    if name not in _REGISTRY:
        available = list_stores() or ["(none registered)"]
        raise ValueError(
            f"Unknown store '{name}'. Available: {available}. "
            f"Register a custom store with register_store()."
        )

    return _REGISTRY[name](config)


def list_stores() -> list[str]:
    """List all registered store names."""
    for name in BUILTIN_STORES:
        if name not in _REGISTRY:
            _try_lazy_import(name)
    return sorted(_REGISTRY.keys())


def _try_lazy_import(name: str):
    """Import and register a built-in store."""
    if name == "memory":
        from tasktracker.stores.memory_store import MemoryTaskStore
        register_store("memory", MemoryTaskStore)
    elif name == "sqlite":
        from tasktracker.stores.sqlite_store import SQLiteTaskStore
        register_store("sqlite", SQLiteTaskStore)
