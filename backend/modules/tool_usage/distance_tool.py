"""
modules/tool_usage/distance_tool.py
-------------------------------------
Great-circle distance and city travel-time helpers (Haversine, R = 6371 km).
No external HTTP calls are made.
"""

from __future__ import annotations
import math
from typing import Iterable

from schemas.itinerary import Location

# ---------------------------------------------------------------------------
# Pure maths
# ---------------------------------------------------------------------------

_EARTH_RADIUS_KM = 6371.0

CITY_SPEED_KMH: float = 30.0        # average door-to-door speed in the city
STOP_TRANSITION_MIN: int = 5        # fixed overhead per hop between activities


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance between two points (Haversine formula) in km."""
    r = _EARTH_RADIUS_KM
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lam = math.radians(lon2 - lon1)
    a = (
        math.sin(d_phi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(d_lam / 2) ** 2
    )
    return 2 * r * math.asin(math.sqrt(a))


def location_distance_km(a: Location, b: Location) -> float:
    return haversine_km(a.lat, a.lng, b.lat, b.lng)


def path_distance_km(points: Iterable[Location]) -> float:
    """Sum of hop distances between consecutive points, in the given order."""
    total = 0.0
    prev: Location | None = None
    for p in points:
        if prev is not None:
            total += location_distance_km(prev, p)
        prev = p
    return total


def travel_time_minutes(total_km: float, num_stops: int, speed_kmh: float = CITY_SPEED_KMH) -> int:
    """
    Driving time for *total_km* at *speed_kmh* (rounded up to whole minutes)
    plus STOP_TRANSITION_MIN for each hop between *num_stops* stops.
    """
    if num_stops <= 0:
        return 0
    drive = math.ceil((total_km / speed_kmh) * 60.0)
    return drive + STOP_TRANSITION_MIN * (num_stops - 1)


# ---------------------------------------------------------------------------
# DistanceTool
# ---------------------------------------------------------------------------


class DistanceTool:
    """Distance / travel-time calculator at a fixed city speed."""

    def __init__(self, speed_kmh: float = CITY_SPEED_KMH) -> None:
        self.speed_kmh = speed_kmh

    def calculate(self, a: Location, b: Location) -> float:
        """Return Haversine distance in km."""
        return location_distance_km(a, b)

    def path_km(self, points: list[Location]) -> float:
        return path_distance_km(points)

    def travel_time(self, total_km: float, num_stops: int) -> int:
        return travel_time_minutes(total_km, num_stops, self.speed_kmh)
