"""
api/routes/catalog.py
---------------------
Read-only view of the activity catalog (what the planner can choose from).
"""
from __future__ import annotations

from fastapi import APIRouter, HTTPException

from schemas.preferences import ActivityCategory
from modules.tool_usage.activity_catalog import ActivityCatalog

router = APIRouter()


@router.get("", summary="List every catalog activity grouped by category")
def list_catalog() -> dict:
    catalog = ActivityCatalog()
    return {
        cat.value: [a.to_dict() for a in catalog.activities_for(cat)]
        for cat in ActivityCategory
    }


@router.get("/{category}", summary="Activities of one category, cheapest first")
def category_activities(category: str) -> list[dict]:
    try:
        cat = ActivityCategory(category)
    except ValueError:
        raise HTTPException(status_code=404, detail=f"Unknown category '{category}'")
    return [a.to_dict() for a in ActivityCatalog().cheapest_first(cat)]
