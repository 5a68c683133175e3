"""
modules/tool_usage/booking_manager.py
--------------------------------------
Keeps the traveller's booking records (flights, hotels, car rentals, event
tickets) alongside a trip.  Records are entered by the user; no booking
provider is contacted.

Operations:
    create(payload)         — validate, assign a unique id, store
    list()                  — every stored booking
    delete(booking_id)      — True if a record was removed
    filter_by_type(type)    — bookings of one variant

Usage example:

    from modules.tool_usage.booking_manager import BookingManager

    bm = BookingManager()
    hotel = bm.create({
        "type": "hotel",
        "hotel_name": "Harbour Inn",
        "address": "1 Pier Rd",
        "city": "Lisbon",
        "check_in": "2026-05-01",
        "check_out": "2026-05-04",
        "room_type": "Double",
        "confirmation_number": "HX-1234",
        "guest_name": "A. Traveller",
    })
    bm.filter_by_type("hotel")
"""

from __future__ import annotations

import logging
import uuid
from typing import Any

from pydantic import TypeAdapter

from db import KeyValueStore, get_store
from schemas.booking import BOOKING_TYPES, Booking
from modules.validation import validate_booking

logger = logging.getLogger(__name__)

_COLLECTION = "bookings"
_booking_adapter: TypeAdapter = TypeAdapter(Booking)


def generate_booking_id() -> str:
    return f"booking_{uuid.uuid4().hex[:12]}"


class BookingManager:
    def __init__(self, store: KeyValueStore | None = None) -> None:
        self._store = store

    @property
    def store(self) -> KeyValueStore:
        return self._store if self._store is not None else get_store()

    def create(self, payload: dict[str, Any] | Booking) -> Booking:
        """
        Parse *payload* into its booking variant and store it under a new id.
        Any id supplied by the caller is replaced.  Raises ValueError when the
        record fails validate_booking(), pydantic.ValidationError when a
        variant field is missing or mistyped.
        """
        data = payload.model_dump() if hasattr(payload, "model_dump") else dict(payload)
        check = validate_booking(data)
        if not check:
            raise ValueError("; ".join(check.errors))
        data["id"] = generate_booking_id()
        booking = _booking_adapter.validate_python(data)
        self.store.put(_COLLECTION, booking.id, booking.model_dump())
        logger.info("created %s booking %s", booking.type, booking.id)
        return booking

    def list(self) -> list[Booking]:
        return [_booking_adapter.validate_python(r) for r in self.store.list(_COLLECTION)]

    def get(self, booking_id: str) -> Booking | None:
        data = self.store.get(_COLLECTION, booking_id)
        return _booking_adapter.validate_python(data) if data is not None else None

    def delete(self, booking_id: str) -> bool:
        removed = self.store.delete(_COLLECTION, booking_id)
        if removed:
            logger.info("deleted booking %s", booking_id)
        return removed

    def filter_by_type(self, booking_type: str) -> list[Booking]:
        if booking_type not in BOOKING_TYPES:
            raise ValueError(f"Unknown booking type {booking_type!r}; expected one of {BOOKING_TYPES}")
        return [b for b in self.list() if b.type == booking_type]
