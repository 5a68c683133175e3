"""
api/server.py
-------------
FastAPI application entry point.

Run dev server:
    cd backend
    uvicorn api.server:app --reload --port 8000

Endpoints:
    GET    /v1/health
    GET    /v1/catalog
    GET    /v1/catalog/{category}
    POST   /v1/itinerary/generate
    POST   /v1/itinerary/saved
    GET    /v1/itinerary/saved
    GET    /v1/itinerary/saved/{plan_id}
    DELETE /v1/itinerary/saved/{plan_id}
    POST   /v1/bookings
    GET    /v1/bookings[?type=flight|hotel|car|ticket]
    DELETE /v1/bookings/{booking_id}
"""
from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import config
from api.routes import bookings, catalog, health, itinerary

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="Trip Budget Planner API",
    version="1.0.0",
    description=(
        "Budget-constrained itinerary planner with priority-based re-planning "
        "and per-day route estimates."
    ),
    docs_url="/docs",
    redoc_url="/redoc",
)

# Allow the browser client (any origin during development)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router,    prefix="/v1",           tags=["Health"])
app.include_router(catalog.router,   prefix="/v1/catalog",   tags=["Catalog"])
app.include_router(itinerary.router, prefix="/v1/itinerary", tags=["Itinerary"])
app.include_router(bookings.router,  prefix="/v1/bookings",  tags=["Bookings"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("api.server:app", host="0.0.0.0", port=8000, reload=True)
