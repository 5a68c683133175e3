"""
db/memory_store.py
------------------
Process-local store used when MEMORY_BACKEND=in_memory (the default).
Same interface as db.redis_client.RedisStore; nothing survives a restart.
"""

from __future__ import annotations

import copy
import threading


class InMemoryStore:
    """Dict-of-dicts store; records are deep-copied in and out."""

    def __init__(self) -> None:
        self._data: dict[str, dict[str, dict]] = {}
        self._lock = threading.Lock()

    def put(self, collection: str, record_id: str, record: dict) -> None:
        with self._lock:
            self._data.setdefault(collection, {})[record_id] = copy.deepcopy(record)

    def get(self, collection: str, record_id: str) -> dict | None:
        with self._lock:
            rec = self._data.get(collection, {}).get(record_id)
            return copy.deepcopy(rec) if rec is not None else None

    def delete(self, collection: str, record_id: str) -> bool:
        with self._lock:
            return self._data.get(collection, {}).pop(record_id, None) is not None

    def list(self, collection: str) -> list[dict]:
        """All records of *collection* in insertion order."""
        with self._lock:
            return [copy.deepcopy(r) for r in self._data.get(collection, {}).values()]

    def clear(self, collection: str) -> None:
        with self._lock:
            self._data.pop(collection, None)
