"""
api/routes/bookings.py
----------------------
Booking records: create / list (optionally by type) / delete.
"""

from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Body, HTTPException, Query
from pydantic import ValidationError

from schemas.booking import BookingType
from modules.tool_usage.booking_manager import BookingManager

router = APIRouter()

_manager = BookingManager()


@router.post("", status_code=201, summary="Add a booking record")
def create_booking(payload: dict[str, Any] = Body(...)) -> dict:
    """Body is one flight / hotel / car / ticket record, discriminated by `type`."""
    try:
        created = _manager.create(payload)
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=exc.errors(include_url=False, include_context=False)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return created.model_dump()


@router.get("", summary="List bookings")
def list_bookings(type: Optional[BookingType] = Query(None)) -> list[dict]:  # noqa: A002
    found = _manager.filter_by_type(type) if type else _manager.list()
    return [b.model_dump() for b in found]


@router.delete("/{booking_id}", summary="Delete a booking")
def delete_booking(booking_id: str) -> dict:
    if not _manager.delete(booking_id):
        raise HTTPException(status_code=404, detail=f"Booking '{booking_id}' not found")
    return {"deleted": booking_id}
