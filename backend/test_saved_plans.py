"""
test_saved_plans.py
───────────────────
Saved itineraries: stored verbatim, listed newest first.
"""

from __future__ import annotations

import random

from db.memory_store import InMemoryStore
from schemas.preferences import DEFAULT_PREFERENCES, DEFAULT_PRIORITIES
from modules.planning.budget_planner import BudgetPlanner
from modules.memory.saved_plans import SavedPlan, SavedPlanStore


def _plan(budget=3000, days=3):
    return BudgetPlanner(rng=random.Random(5)).plan(
        budget=budget,
        days=days,
        city="Kyoto",
        preferences=DEFAULT_PREFERENCES,
        priorities=DEFAULT_PRIORITIES,
    )


def test_save_and_load_verbatim():
    store = SavedPlanStore(InMemoryStore())
    plan = _plan()
    saved = store.save(plan)
    loaded = store.get(saved.id)
    assert loaded is not None
    assert loaded.plan == plan
    assert loaded.saved_at == saved.saved_at


def test_to_dict_carries_id_and_saved_at():
    saved = SavedPlanStore(InMemoryStore()).save(_plan())
    data = saved.to_dict()
    assert data["id"] == saved.id
    assert "savedAt" in data
    assert data["totalCost"] == saved.plan.total_cost
    assert SavedPlan.from_dict(data) == saved


def test_list_newest_first():
    backing = InMemoryStore()
    store = SavedPlanStore(backing)
    old = SavedPlan(id="a", saved_at="2026-01-01T00:00:00+00:00", plan=_plan(days=1))
    new = SavedPlan(id="b", saved_at="2026-02-01T00:00:00+00:00", plan=_plan(days=2))
    backing.put("plans", old.id, old.to_dict())
    backing.put("plans", new.id, new.to_dict())
    assert [s.id for s in store.list()] == ["b", "a"]


def test_delete_and_missing():
    store = SavedPlanStore(InMemoryStore())
    saved = store.save(_plan())
    assert store.delete(saved.id)
    assert store.get(saved.id) is None
    assert not store.delete(saved.id)


def test_default_store_is_process_wide(fresh_store):
    saved = SavedPlanStore().save(_plan())
    assert fresh_store.get("plans", saved.id)["id"] == saved.id
