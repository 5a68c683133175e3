"""
modules/reoptimization/budget_replanner.py
-------------------------------------------
Replanner: priority-tiered greedy cost reduction for an over-budget itinerary.

Algorithm
─────────
Tiers are visited least-protected first:  optional → nice-to-have → must-have.

For the current tier, while total > budget and any activity remains:
  1. Scan (day, position) day-major; pick the activity of this tier with the
     strictly greatest cost (first occurrence wins ties).
     None at this tier → move to the next tier.
  2. SUBSTITUTE: the first catalog activity of the same category that is
     strictly cheaper and not already on that day replaces it in place.
  3. REMOVE: otherwise the activity is dropped from its day.
  4. Rebuild that day (cost + route) and recompute the itinerary total.

Once a tier finishes with total ≤ budget, weaker tiers are never touched.

Each iteration either removes an activity or swaps one for a strictly cheaper
one, so the loop terminates.  The result is a greedy heuristic, not the
cheapest itinerary that respects the priorities.

The caller's itinerary is never mutated: days are frozen DayItinerary records
and every change replaces the affected day wholesale in a fresh list.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Literal, Mapping, Optional

from schemas.itinerary import Activity, DayItinerary, total_cost_of
from schemas.preferences import (
    REMOVAL_ORDER,
    ActivityCategory,
    ActivityPriority,
)
from modules.tool_usage.activity_catalog import ActivityCatalog
from modules.planning.route_planner import RouteEstimator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReplanStep:
    """One change made by the replanner."""
    action:      Literal["substituted", "removed"]
    day:         int
    tier:        ActivityPriority
    removed:     str
    replacement: Optional[str]
    saving:      float


@dataclass
class ReplanResult:
    """
    itinerary:     the reduced days (same length and day numbers as the input)
    steps:         every substitution / removal in the order applied
    initial_cost:  total before replanning
    final_cost:    total after replanning
    """
    itinerary:    list[DayItinerary]
    steps:        list[ReplanStep] = field(default_factory=list)
    initial_cost: float = 0.0
    final_cost:   float = 0.0

    @property
    def saved(self) -> float:
        return self.initial_cost - self.final_cost

    @property
    def removed_count(self) -> int:
        return sum(1 for s in self.steps if s.action == "removed")

    @property
    def substituted_count(self) -> int:
        return sum(1 for s in self.steps if s.action == "substituted")


class Replanner:
    """Reduces an itinerary's cost to the budget by tier-ordered greedy edits."""

    def __init__(
        self,
        catalog: ActivityCatalog | None = None,
        route_estimator: RouteEstimator | None = None,
    ) -> None:
        self.catalog = catalog or ActivityCatalog()
        self.route_estimator = route_estimator or RouteEstimator()

    def reduce(
        self,
        itinerary: list[DayItinerary] | tuple[DayItinerary, ...],
        budget: float,
        priorities: Mapping[ActivityCategory, ActivityPriority],
    ) -> list[DayItinerary]:
        return self.reduce_with_trace(itinerary, budget, priorities).itinerary

    def reduce_with_trace(
        self,
        itinerary: list[DayItinerary] | tuple[DayItinerary, ...],
        budget: float,
        priorities: Mapping[ActivityCategory, ActivityPriority],
    ) -> ReplanResult:
        days = list(itinerary)
        total = total_cost_of(days)
        result = ReplanResult(itinerary=days, initial_cost=total)

        for tier in REMOVAL_ORDER:
            while total > budget and any(d.activities for d in days):
                target = self._most_expensive(days, tier, priorities)
                if target is None:
                    break
                day_idx, act_idx = target
                step = self._apply(days, day_idx, act_idx, tier)
                result.steps.append(step)
                total = total_cost_of(days)
                logger.debug(
                    "replan %s day %d: %s -> %s (saved %.2f, total %.2f)",
                    step.action, step.day, step.removed, step.replacement, step.saving, total,
                )

            if total <= budget:
                break

        result.final_cost = total
        return result

    # ── internals ─────────────────────────────────────────────────────────────

    @staticmethod
    def _most_expensive(
        days: list[DayItinerary],
        tier: ActivityPriority,
        priorities: Mapping[ActivityCategory, ActivityPriority],
    ) -> Optional[tuple[int, int]]:
        """(day index, activity index) of the first strictly-greatest cost at *tier*."""
        best: Optional[tuple[int, int]] = None
        max_cost = 0.0
        for d_idx, day in enumerate(days):
            for a_idx, activity in enumerate(day.activities):
                if priorities.get(activity.category) != tier:
                    continue
                if activity.estimated_cost > max_cost:
                    max_cost = activity.estimated_cost
                    best = (d_idx, a_idx)
        return best

    def _apply(
        self,
        days: list[DayItinerary],
        day_idx: int,
        act_idx: int,
        tier: ActivityPriority,
    ) -> ReplanStep:
        day = days[day_idx]
        activity = day.activities[act_idx]
        alternative = self.catalog.cheaper_alternative(
            activity, exclude_names=(a.name for a in day.activities)
        )

        activities: list[Activity] = list(day.activities)
        if alternative is not None:
            activities[act_idx] = alternative
            step = ReplanStep(
                action="substituted",
                day=day.day,
                tier=tier,
                removed=activity.name,
                replacement=alternative.name,
                saving=activity.estimated_cost - alternative.estimated_cost,
            )
        else:
            del activities[act_idx]
            step = ReplanStep(
                action="removed",
                day=day.day,
                tier=tier,
                removed=activity.name,
                replacement=None,
                saving=activity.estimated_cost,
            )

        days[day_idx] = DayItinerary(
            day=day.day,
            activities=tuple(activities),
            route=self.route_estimator.estimate(activities),
        )
        return step
