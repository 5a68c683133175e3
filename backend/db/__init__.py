"""
db/
----
Storage for records kept around the planner (saved itineraries, bookings).

Storage architecture:
  in_memory (default) — db.memory_store.InMemoryStore, process-local
  redis               — db.redis_client.RedisStore, one hash per collection
                        {REDIS_KEY_PREFIX}:{collection}

Selected by config.MEMORY_BACKEND.  Both expose:
    put(collection, id, record) / get(collection, id) /
    delete(collection, id) -> bool / list(collection) / clear(collection)

Public exports:
    from db import get_store, KeyValueStore
"""

from __future__ import annotations

from typing import Protocol

import config
from db.memory_store import InMemoryStore
from db.redis_client import RedisStore, get_redis


class KeyValueStore(Protocol):
    def put(self, collection: str, record_id: str, record: dict) -> None: ...
    def get(self, collection: str, record_id: str) -> dict | None: ...
    def delete(self, collection: str, record_id: str) -> bool: ...
    def list(self, collection: str) -> list[dict]: ...
    def clear(self, collection: str) -> None: ...


_store: KeyValueStore | None = None


def get_store() -> KeyValueStore:
    """Return the process-wide store for config.MEMORY_BACKEND."""
    global _store
    if _store is None:
        backend = config.MEMORY_BACKEND.lower()
        if backend == "redis":
            _store = RedisStore()
        elif backend == "in_memory":
            _store = InMemoryStore()
        else:
            raise ValueError(
                f"Unknown MEMORY_BACKEND {config.MEMORY_BACKEND!r}; expected 'in_memory' or 'redis'"
            )
    return _store


def reset_store() -> None:
    """Drop the cached store (tests / backend switch)."""
    global _store
    _store = None


__all__ = ["KeyValueStore", "InMemoryStore", "RedisStore", "get_redis", "get_store", "reset_store"]
