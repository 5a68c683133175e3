"""
schemas/booking.py
------------------
Booking records (flight / hotel / car rental / event ticket).

Bookings are free-form travel documents kept alongside a trip; they have no
relationship to TravelPlan and are never read by the planner.  The `type`
field discriminates the four variants.
"""

from __future__ import annotations

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field

BookingType = Literal["flight", "hotel", "car", "ticket"]
BOOKING_TYPES: tuple[str, ...] = ("flight", "hotel", "car", "ticket")


class FlightEndpoint(BaseModel):
    airport: str
    city: str
    date: str
    time: str


class _BookingBase(BaseModel):
    id: str = ""
    confirmation_number: str
    price: Optional[float] = Field(None, ge=0)
    notes: Optional[str] = None


class FlightBooking(_BookingBase):
    type: Literal["flight"] = "flight"
    airline: str
    flight_number: str
    departure: FlightEndpoint
    arrival: FlightEndpoint
    passenger_name: str
    seat_number: Optional[str] = None
    booking_class: Optional[str] = None


class HotelBooking(_BookingBase):
    type: Literal["hotel"] = "hotel"
    hotel_name: str
    address: str
    city: str
    check_in: str
    check_out: str
    room_type: str
    guest_name: str
    number_of_guests: int = Field(1, ge=1)
    amenities: list[str] = Field(default_factory=list)


class CarRentalBooking(_BookingBase):
    type: Literal["car"] = "car"
    company: str
    vehicle_type: str
    pickup_location: str
    pickup_date: str
    pickup_time: str
    dropoff_location: str
    dropoff_date: str
    dropoff_time: str
    driver_name: str
    insurance: bool = False


class TicketBooking(_BookingBase):
    type: Literal["ticket"] = "ticket"
    event_name: str
    venue: str
    city: str
    event_date: str
    event_time: str
    ticket_type: str
    attendee_name: str
    number_of_tickets: int = Field(1, ge=1)
    seat_number: Optional[str] = None


Booking = Annotated[
    Union[FlightBooking, HotelBooking, CarRentalBooking, TicketBooking],
    Field(discriminator="type"),
]
