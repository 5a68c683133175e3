"""
schemas/itinerary.py
--------------------
Dataclass definitions for the planner's input catalog entries and its output
itinerary structures.

All records are frozen: a change to a day (replanning, substitution) builds a
new DayItinerary and a new TravelPlan rather than mutating one in place.

Wire shape
~~~~~~~~~~
to_dict() / from_dict() use the camelCase keys the web client consumes
(estimatedCost, totalCost, isWithinBudget, ...) so a stored plan can be
reloaded verbatim.  from_dict() coerces numeric fields and raises
ValueError / TypeError / KeyError on values that do not fit.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, Optional

from schemas.preferences import ActivityCategory

Impact = Literal["positive", "neutral", "constraint"]


@dataclass(frozen=True)
class Location:
    lat: float
    lng: float
    address: str = ""

    def to_dict(self) -> dict:
        return {"lat": self.lat, "lng": self.lng, "address": self.address}

    @classmethod
    def from_dict(cls, data: dict) -> "Location":
        return cls(lat=float(data["lat"]), lng=float(data["lng"]), address=data.get("address", ""))


@dataclass(frozen=True)
class Activity:
    """A catalog entry.  Costs are in config.CURRENCY_UNIT."""
    name: str
    category: ActivityCategory
    estimated_cost: float
    duration: str
    description: str
    location: Optional[Location] = None

    def to_dict(self) -> dict:
        data: dict[str, Any] = {
            "name":          self.name,
            "category":      self.category.value,
            "estimatedCost": self.estimated_cost,
            "duration":      self.duration,
            "description":   self.description,
        }
        if self.location is not None:
            data["location"] = self.location.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Activity":
        loc = data.get("location")
        return cls(
            name=data["name"],
            category=ActivityCategory(data["category"]),
            estimated_cost=float(data["estimatedCost"]),
            duration=data.get("duration", ""),
            description=data.get("description", ""),
            location=Location.from_dict(loc) if loc else None,
        )


@dataclass(frozen=True)
class ActivityGroup:
    """Activities of one day judged to be geographically co-located."""
    name: str
    activities: tuple[str, ...]
    center: Location
    reason: str

    def to_dict(self) -> dict:
        return {
            "name":       self.name,
            "activities": list(self.activities),
            "center":     self.center.to_dict(),
            "reason":     self.reason,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ActivityGroup":
        return cls(
            name=data["name"],
            activities=tuple(data.get("activities", [])),
            center=Location.from_dict(data["center"]),
            reason=data.get("reason", ""),
        )


@dataclass(frozen=True)
class RouteInfo:
    """
    Route estimate for one day.

    total_distance         — km, consecutive stops in assignment order
    estimated_travel_time  — minutes
    efficiency             — 0–100
    """
    total_distance: float = 0.0
    estimated_travel_time: int = 0
    groupings: tuple[ActivityGroup, ...] = ()
    efficiency: int = 100
    reasoning: str = ""
    all_activity_locations: tuple[tuple[str, Location], ...] = ()

    def to_dict(self) -> dict:
        data: dict[str, Any] = {
            "totalDistance":       self.total_distance,
            "estimatedTravelTime": self.estimated_travel_time,
            "groupings":           [g.to_dict() for g in self.groupings],
            "efficiency":          self.efficiency,
            "reasoning":           self.reasoning,
        }
        if self.all_activity_locations:
            data["allActivityLocations"] = [
                {"name": name, "location": loc.to_dict()}
                for name, loc in self.all_activity_locations
            ]
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "RouteInfo":
        return cls(
            total_distance=float(data.get("totalDistance", 0.0)),
            estimated_travel_time=int(data.get("estimatedTravelTime", 0)),
            groupings=tuple(ActivityGroup.from_dict(g) for g in data.get("groupings", [])),
            efficiency=int(data.get("efficiency", 100)),
            reasoning=data.get("reasoning", ""),
            all_activity_locations=tuple(
                (entry["name"], Location.from_dict(entry["location"]))
                for entry in data.get("allActivityLocations", [])
            ),
        )


@dataclass(frozen=True)
class DayItinerary:
    """One day's activities, in assignment order (not time-of-day order)."""
    day: int
    activities: tuple[Activity, ...] = ()
    route: Optional[RouteInfo] = None

    @property
    def total_cost(self) -> float:
        """Always the exact sum of this day's activity costs."""
        return sum(a.estimated_cost for a in self.activities)

    def to_dict(self) -> dict:
        data: dict[str, Any] = {
            "day":        self.day,
            "activities": [a.to_dict() for a in self.activities],
            "totalCost":  self.total_cost,
        }
        if self.route is not None:
            data["route"] = self.route.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "DayItinerary":
        route = data.get("route")
        return cls(
            day=int(data["day"]),
            activities=tuple(Activity.from_dict(a) for a in data.get("activities", [])),
            route=RouteInfo.from_dict(route) if route else None,
        )


@dataclass(frozen=True)
class DecisionExplanation:
    reason: str
    detail: str
    impact: Impact = "neutral"

    def to_dict(self) -> dict:
        return {"reason": self.reason, "detail": self.detail, "impact": self.impact}


def _as_bool(value: Any) -> bool:
    if not isinstance(value, bool):
        raise ValueError(f"expected a boolean, got {value!r}")
    return value


def total_cost_of(itinerary: "tuple[DayItinerary, ...] | list[DayItinerary]") -> float:
    return sum(d.total_cost for d in itinerary)


def activity_count_of(itinerary: "tuple[DayItinerary, ...] | list[DayItinerary]") -> int:
    return sum(len(d.activities) for d in itinerary)


@dataclass(frozen=True)
class TravelPlan:
    """
    Top-level output of BudgetPlanner.plan().

    total_cost is the sum of the itinerary for feasible plans.  An infeasible
    plan carries an empty itinerary and reports the feasibility floor
    (min_required_budget) as its total_cost.
    """
    budget: float
    total_cost: float
    days: int
    city: str
    itinerary: tuple[DayItinerary, ...] = ()
    re_planned: bool = False
    is_feasible: bool = True
    min_required_budget: float = 0.0
    explanations: tuple[DecisionExplanation, ...] = field(default_factory=tuple)

    @property
    def is_within_budget(self) -> bool:
        return self.total_cost <= self.budget

    @property
    def budget_status(self) -> str:
        return "within" if self.is_within_budget else "exceeded"

    @property
    def activity_count(self) -> int:
        return activity_count_of(self.itinerary)

    def to_dict(self) -> dict:
        return {
            "budget":            self.budget,
            "totalCost":         self.total_cost,
            "days":              self.days,
            "city":              self.city,
            "itinerary":         [d.to_dict() for d in self.itinerary],
            "isWithinBudget":    self.is_within_budget,
            "budgetStatus":      self.budget_status,
            "rePlanned":         self.re_planned,
            "isFeasible":        self.is_feasible,
            "minRequiredBudget": self.min_required_budget,
            "explanations":      [e.to_dict() for e in self.explanations],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "TravelPlan":
        return cls(
            budget=float(data["budget"]),
            total_cost=float(data["totalCost"]),
            days=int(data["days"]),
            city=str(data.get("city", "")),
            itinerary=tuple(DayItinerary.from_dict(d) for d in data.get("itinerary", [])),
            re_planned=_as_bool(data.get("rePlanned", False)),
            is_feasible=_as_bool(data.get("isFeasible", True)),
            min_required_budget=float(data.get("minRequiredBudget", 0.0)),
            explanations=tuple(
                DecisionExplanation(e["reason"], e["detail"], e.get("impact", "neutral"))
                for e in data.get("explanations", [])
            ),
        )
