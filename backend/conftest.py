"""
conftest.py
-----------
Shared pytest fixtures.  Environment knobs are pinned before config is
imported so no test writes JSONL logs or reaches for Redis.
"""

from __future__ import annotations

import os
import random

os.environ["STRUCTURED_LOG_ENABLED"] = "false"
os.environ["MEMORY_BACKEND"] = "in_memory"
os.environ.setdefault("ROUTE_CLUSTER_MODE", "seed")

import pytest  # noqa: E402

import db  # noqa: E402
from db.memory_store import InMemoryStore  # noqa: E402
from schemas.itinerary import Activity, Location  # noqa: E402
from schemas.preferences import ActivityCategory, DEFAULT_PRIORITIES  # noqa: E402
from modules.planning.budget_planner import BudgetPlanner  # noqa: E402
from modules.planning.route_planner import RouteEstimator  # noqa: E402


@pytest.fixture(autouse=True)
def fresh_store(monkeypatch):
    """Every test sees an empty process-wide store."""
    store = InMemoryStore()
    monkeypatch.setattr(db, "_store", store)
    return store


@pytest.fixture
def planner() -> BudgetPlanner:
    return BudgetPlanner(rng=random.Random(42))


@pytest.fixture
def estimator() -> RouteEstimator:
    return RouteEstimator(rng=random.Random(7), cluster_mode="seed")


@pytest.fixture
def priorities():
    return dict(DEFAULT_PRIORITIES)


def make_activity(
    name: str,
    cost: float,
    category: ActivityCategory = ActivityCategory.sightseeing,
    lat: float | None = None,
    lng: float | None = None,
    address: str = "",
) -> Activity:
    """Off-catalog activity; pass lat/lng to pin its coordinate."""
    loc = Location(lat, lng, address) if lat is not None and lng is not None else None
    return Activity(
        name=name,
        category=category,
        estimated_cost=cost,
        duration="1 hour",
        description=f"{name} (test)",
        location=loc,
    )
