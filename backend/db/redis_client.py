"""
db/redis_client.py
-------------------
redis-py client: singleton plus a RedisStore over one hash per collection.

Key schema:

  {REDIS_KEY_PREFIX}:{collection}
       Type : Hash
       Field: record id
       Value: JSON-encoded record
       TTL  : SAVED_PLAN_TTL seconds, reset on every write (0 = no expiry)

Collections in use: "plans" (saved itineraries), "bookings".

Environment variables (set in config.py):
    REDIS_HOST        default: localhost
    REDIS_PORT        default: 6379
    REDIS_DB          default: 0
    REDIS_PASSWORD    default: ""  (empty = no auth)
    REDIS_KEY_PREFIX  default: tripbudget
    SAVED_PLAN_TTL    default: 0
"""

from __future__ import annotations

import json
from typing import Any

import redis

import config

# Module-level singleton; initialised lazily on first call to get_redis()
_client: redis.Redis | None = None


def get_redis() -> redis.Redis:
    """Return the singleton Redis client, creating it on first call."""
    global _client
    if _client is None:
        kwargs: dict[str, Any] = {
            "host":             config.REDIS_HOST,
            "port":             config.REDIS_PORT,
            "db":               config.REDIS_DB,
            "decode_responses": True,   # return str, not bytes
        }
        if config.REDIS_PASSWORD:
            kwargs["password"] = config.REDIS_PASSWORD
        _client = redis.Redis(**kwargs)
    return _client


class RedisStore:
    """Key-value store backed by one Redis hash per collection."""

    def __init__(
        self,
        client: redis.Redis | None = None,
        prefix: str | None = None,
        ttl: int | None = None,
    ) -> None:
        self._client = client
        self.prefix = prefix or config.REDIS_KEY_PREFIX
        self.ttl = config.SAVED_PLAN_TTL if ttl is None else ttl

    @property
    def client(self) -> redis.Redis:
        if self._client is None:
            self._client = get_redis()
        return self._client

    def _key(self, collection: str) -> str:
        return f"{self.prefix}:{collection}"

    def put(self, collection: str, record_id: str, record: dict) -> None:
        key = self._key(collection)
        self.client.hset(key, record_id, json.dumps(record, default=str))
        if self.ttl > 0:
            self.client.expire(key, self.ttl)

    def get(self, collection: str, record_id: str) -> dict | None:
        raw = self.client.hget(self._key(collection), record_id)
        return json.loads(raw) if raw is not None else None

    def delete(self, collection: str, record_id: str) -> bool:
        return bool(self.client.hdel(self._key(collection), record_id))

    def list(self, collection: str) -> list[dict]:
        """All records of *collection* (hash order; callers sort as needed)."""
        data = self.client.hgetall(self._key(collection))
        return [json.loads(v) for v in data.values()]

    def clear(self, collection: str) -> None:
        self.client.delete(self._key(collection))
