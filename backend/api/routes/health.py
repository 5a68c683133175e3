"""
api/routes/health.py
--------------------
Health-check endpoint for load balancers and container probes.
"""
from __future__ import annotations

from fastapi import APIRouter

import config

router = APIRouter()


@router.get("/health", summary="Health check")
def health() -> dict:
    """Returns 200 OK when the service is running."""
    return {
        "status": "ok",
        "service": "tripbudget-backend",
        "storage": config.MEMORY_BACKEND,
    }
