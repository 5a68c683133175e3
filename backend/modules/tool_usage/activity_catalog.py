"""
modules/tool_usage/activity_catalog.py
---------------------------------------
Static, read-only activity catalog.

Activity data is a fixed fixture: no pricing or availability lookups are made.
Every city shares the "default" table; the destination label is otherwise
opaque to the planner.

Catalog invariants (checked by test_activity_catalog.py):
  - at least one activity per ActivityCategory
  - every estimated_cost > 0
  - every activity name has a coordinate in _ACTIVITY_LOCATIONS
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from schemas.itinerary import Activity, Location
from schemas.preferences import ActivityCategory

_C = ActivityCategory

# Fallback point for activities without a known coordinate (Midtown Manhattan)
CITY_CENTER: Location = Location(lat=40.7500, lng=-73.9800, address="City Center")


def _a(name: str, cat: ActivityCategory, cost: float, duration: str, desc: str) -> Activity:
    return Activity(
        name=name,
        category=cat,
        estimated_cost=cost,
        duration=duration,
        description=desc,
        location=_ACTIVITY_LOCATIONS.get(name),
    )


# ---------------------------------------------------------------------------
# Coordinates (simulated positions around one city centre)
# ---------------------------------------------------------------------------
_ACTIVITY_LOCATIONS: Mapping[str, Location] = MappingProxyType({
    "City Museum":            Location(40.7589, -73.9851, "Downtown Cultural District"),
    "Historic Walking Tour":  Location(40.7614, -73.9776, "Old Town Square"),
    "Botanical Gardens":      Location(40.7489, -73.9680, "City Park East"),
    "Fine Dining":            Location(40.7580, -73.9855, "Restaurant Row"),
    "Local Street Food Tour": Location(40.7520, -73.9830, "Food District"),
    "Casual Restaurant":      Location(40.7560, -73.9800, "Midtown Area"),
    "Hiking Excursion":       Location(40.7850, -73.9500, "Nature Reserve North"),
    "Rock Climbing":          Location(40.7650, -73.9950, "Adventure Sports Center"),
    "Water Sports":           Location(40.7400, -73.9900, "Waterfront Marina"),
    "Designer Boutiques":     Location(40.7600, -73.9750, "Fashion Avenue"),
    "Local Market":           Location(40.7450, -73.9850, "Market District"),
    "Shopping Mall":          Location(40.7550, -73.9820, "Commercial Center"),
    "Spa & Wellness":         Location(40.7620, -73.9700, "Wellness Quarter"),
    "Yoga Class":             Location(40.7540, -73.9780, "Fitness District"),
    "Beach Relaxation":       Location(40.7350, -73.9950, "Beachfront"),
})


# ---------------------------------------------------------------------------
# Activity table. Catalog order within a category is significant
# (tie-breaks in cheapest_first, first-match in cheaper_alternative)
# ---------------------------------------------------------------------------
_DEFAULT_TABLE: Mapping[ActivityCategory, tuple[Activity, ...]] = MappingProxyType({
    _C.sightseeing: (
        _a("City Museum",           _C.sightseeing, 25, "3 hours", "Explore history and art collections"),
        _a("Historic Walking Tour", _C.sightseeing, 30, "2 hours", "Guided tour of historic landmarks"),
        _a("Botanical Gardens",     _C.sightseeing, 15, "2 hours", "Peaceful gardens with scenic views"),
    ),
    _C.food: (
        _a("Fine Dining",            _C.food, 80, "2 hours",   "Upscale restaurant experience"),
        _a("Local Street Food Tour", _C.food, 20, "2 hours",   "Taste authentic local cuisine"),
        _a("Casual Restaurant",      _C.food, 35, "1.5 hours", "Comfortable dining with local flavors"),
    ),
    _C.adventure: (
        _a("Hiking Excursion", _C.adventure, 40, "4 hours", "Trail hiking in natural surroundings"),
        _a("Rock Climbing",    _C.adventure, 75, "3 hours", "Indoor or outdoor climbing experience"),
        _a("Water Sports",     _C.adventure, 60, "3 hours", "Kayaking, paddleboarding, or jet skiing"),
    ),
    _C.shopping: (
        _a("Designer Boutiques", _C.shopping, 150, "3 hours", "High-end shopping experience"),
        _a("Local Market",       _C.shopping, 40,  "2 hours", "Traditional market with local goods"),
        _a("Shopping Mall",      _C.shopping, 80,  "3 hours", "Modern shopping complex"),
    ),
    _C.relaxation: (
        _a("Spa & Wellness",   _C.relaxation, 120, "2 hours",   "Massage and spa treatments"),
        _a("Yoga Class",       _C.relaxation, 25,  "1.5 hours", "Morning or evening yoga session"),
        _a("Beach Relaxation", _C.relaxation, 10,  "4 hours",   "Relax on the beach"),
    ),
})

_CITY_TABLES: Mapping[str, Mapping[ActivityCategory, tuple[Activity, ...]]] = MappingProxyType({
    "default": _DEFAULT_TABLE,
})


class ActivityCatalog:
    """
    Read-only view over one city table.

    All lookups are pure; an unknown category yields an empty tuple.
    """

    def __init__(self, city: str = "default") -> None:
        self.city = city
        self._table = _CITY_TABLES.get(city.strip().lower(), _DEFAULT_TABLE)

    def activities_for(self, category: ActivityCategory | str) -> tuple[Activity, ...]:
        """Activities of *category* in catalog order."""
        try:
            cat = ActivityCategory(category)
        except ValueError:
            return ()
        return self._table.get(cat, ())

    def cheapest_first(self, category: ActivityCategory | str) -> list[Activity]:
        """Activities of *category* ascending by cost; ties keep catalog order."""
        # sorted() is stable, so equal costs keep their catalog position
        return sorted(self.activities_for(category), key=lambda a: a.estimated_cost)

    def cheaper_alternative(
        self,
        activity: Activity,
        exclude_names: Iterable[str] = (),
    ) -> Optional[Activity]:
        """
        First activity (catalog order) in the same category that costs strictly
        less than *activity* and whose name is not in *exclude_names*.
        """
        excluded = set(exclude_names)
        for candidate in self.activities_for(activity.category):
            if candidate.estimated_cost < activity.estimated_cost and candidate.name not in excluded:
                return candidate
        return None

    def categories(self) -> list[ActivityCategory]:
        return [cat for cat in ActivityCategory if self._table.get(cat)]

    def all_activities(self) -> list[Activity]:
        return [a for cat in ActivityCategory for a in self._table.get(cat, ())]


def location_for(name: str) -> Optional[Location]:
    """Static coordinate for a catalog activity name, or None."""
    return _ACTIVITY_LOCATIONS.get(name)


def activities_for_city(city: str) -> ActivityCatalog:
    """Catalog for *city* (every city currently resolves to the default table)."""
    return ActivityCatalog(city)
