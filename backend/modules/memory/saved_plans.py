"""
modules/memory/saved_plans.py
-----------------------------
Saved itineraries. Each is a TravelPlan snapshot stored under a generated id.

Plans are stored as TravelPlan.to_dict() JSON and reloaded verbatim with
TravelPlan.from_dict(); nothing is recomputed on load.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from db import KeyValueStore, get_store
from schemas.itinerary import TravelPlan

logger = logging.getLogger(__name__)

_COLLECTION = "plans"


@dataclass(frozen=True)
class SavedPlan:
    id: str
    saved_at: str           # ISO-8601, UTC
    plan: TravelPlan

    def to_dict(self) -> dict:
        return {"id": self.id, "savedAt": self.saved_at, **self.plan.to_dict()}

    @classmethod
    def from_dict(cls, data: dict) -> "SavedPlan":
        return cls(id=data["id"], saved_at=data["savedAt"], plan=TravelPlan.from_dict(data))


class SavedPlanStore:
    def __init__(self, store: KeyValueStore | None = None) -> None:
        self._store = store

    @property
    def store(self) -> KeyValueStore:
        # resolved per call so MEMORY_BACKEND can be switched before first use
        return self._store if self._store is not None else get_store()

    def save(self, plan: TravelPlan) -> SavedPlan:
        saved = SavedPlan(
            id=str(uuid.uuid4()),
            saved_at=datetime.now(timezone.utc).isoformat(),
            plan=plan,
        )
        self.store.put(_COLLECTION, saved.id, saved.to_dict())
        logger.info("saved plan %s (%s, %d days)", saved.id, plan.city, plan.days)
        return saved

    def list(self) -> list[SavedPlan]:
        """Newest first."""
        records = [SavedPlan.from_dict(r) for r in self.store.list(_COLLECTION)]
        return sorted(records, key=lambda s: s.saved_at, reverse=True)

    def get(self, plan_id: str) -> Optional[SavedPlan]:
        data = self.store.get(_COLLECTION, plan_id)
        return SavedPlan.from_dict(data) if data is not None else None

    def delete(self, plan_id: str) -> bool:
        return self.store.delete(_COLLECTION, plan_id)
