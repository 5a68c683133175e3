"""
api/routes/itinerary.py
------------------------
POST /v1/itinerary/generate          — run the planner, return TravelPlan JSON
POST /v1/itinerary/saved             — store a TravelPlan JSON verbatim
GET  /v1/itinerary/saved             — saved plans, newest first
GET  /v1/itinerary/saved/{plan_id}
DELETE /v1/itinerary/saved/{plan_id}

The planner reports an over-tight budget as data (isFeasible=false), so
generate never fails for a well-formed request.
"""

from __future__ import annotations

import random
from typing import Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

import config
from schemas.itinerary import TravelPlan
from schemas.preferences import (
    ActivityPriority,
    DEFAULT_PREFERENCES,
    parse_preferences,
    parse_priorities,
)
from modules.planning.budget_planner import BudgetPlanner
from modules.memory.saved_plans import SavedPlanStore

router = APIRouter()

_saved = SavedPlanStore()


# ── Request schemas ────────────────────────────────────────────────────────────

class GenerateRequest(BaseModel):
    budget: float = Field(..., gt=0, description="Total activity budget")
    days:   int   = Field(..., ge=1, le=config.MAX_TRIP_DAYS)
    city:   str   = Field(..., min_length=1)
    preferences: dict[str, bool] = Field(
        default_factory=lambda: {k.value: v for k, v in DEFAULT_PREFERENCES.items()},
        description="category -> enabled",
    )
    priorities: dict[str, ActivityPriority] = Field(
        default_factory=dict,
        description="category -> must-have | nice-to-have | optional (defaults applied per category)",
    )
    seed: Optional[int] = Field(None, description="Pin the planner RNG for a reproducible plan")


class SavePlanRequest(BaseModel):
    plan: dict = Field(..., description="TravelPlan JSON as returned by /generate")


# ── Endpoints ──────────────────────────────────────────────────────────────────

@router.post("/generate", summary="Generate a budget-constrained itinerary")
def generate_itinerary(req: GenerateRequest) -> dict:
    if not req.city.strip():
        raise HTTPException(status_code=422, detail="city must not be blank")

    seed = req.seed if req.seed is not None else config.PLANNER_SEED
    planner = BudgetPlanner(rng=random.Random(seed))
    plan = planner.plan(
        budget=req.budget,
        days=req.days,
        city=req.city.strip(),
        preferences=parse_preferences(req.preferences),
        priorities=parse_priorities({k: v.value for k, v in req.priorities.items()}),
    )
    return plan.to_dict()


@router.post("/saved", status_code=201, summary="Save a generated plan")
def save_plan(req: SavePlanRequest) -> dict:
    try:
        plan = TravelPlan.from_dict(req.plan)
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        raise HTTPException(status_code=422, detail=f"Malformed plan: {exc}") from exc
    return _saved.save(plan).to_dict()


@router.get("/saved", summary="List saved plans (newest first)")
def list_saved() -> list[dict]:
    return [s.to_dict() for s in _saved.list()]


@router.get("/saved/{plan_id}", summary="Load one saved plan")
def get_saved(plan_id: str) -> dict:
    saved = _saved.get(plan_id)
    if saved is None:
        raise HTTPException(status_code=404, detail=f"Saved plan '{plan_id}' not found")
    return saved.to_dict()


@router.delete("/saved/{plan_id}", summary="Delete a saved plan")
def delete_saved(plan_id: str) -> dict:
    if not _saved.delete(plan_id):
        raise HTTPException(status_code=404, detail=f"Saved plan '{plan_id}' not found")
    return {"deleted": plan_id}
