"""
modules/planning/budget_planner.py
------------------------------------
Budget-constrained itinerary allocator.

Pipeline for one plan() call
  1. Feasibility floor  — cost of the cheapest itinerary for the same
                          preferences and day count.
  2. Infeasible         — budget < floor: empty itinerary, no partial plan.
  3. Initial itinerary  — proportional per-category sample, shuffled, spread
                          over the days in order.
  4. Replan             — total > budget → Replanner.reduce().
  5. Explanations       — append-only decision trail returned on the plan.

Quota per enabled category
  ceil(num_days × 2 / enabled_count), capped at the category's size.

All amounts are in config.CURRENCY_UNIT.  Randomness (activity shuffle, route
coordinate fallback) comes from one seedable random.Random.
"""

from __future__ import annotations

import logging
import math
import random
import time as _time_mod
from typing import Mapping, Sequence

import config
from schemas.itinerary import (
    Activity,
    DayItinerary,
    DecisionExplanation,
    TravelPlan,
    activity_count_of,
    total_cost_of,
)
from schemas.preferences import (
    ActivityCategory,
    ActivityPriority,
    enabled_categories,
)
from modules.tool_usage.activity_catalog import ActivityCatalog
from modules.planning.route_planner import RouteEstimator
from modules.reoptimization.budget_replanner import Replanner
from modules.observability.logger import StructuredLogger

logger = logging.getLogger(__name__)
_perf_logger = StructuredLogger()

_ACTIVITIES_PER_DAY_TARGET = 2


def _money(amount: float) -> str:
    return f"{config.CURRENCY_SYMBOL}{amount:.0f}"


class BudgetPlanner:
    """
    Builds a TravelPlan from budget, day count, city label, preferences and
    priorities.

    Args:
        rng:             random source shared with the route estimator.
        catalog:         activity catalog (default table when omitted).
        route_estimator: per-day route builder.
        replanner:       over-budget reducer.
    """

    def __init__(
        self,
        rng: random.Random | None = None,
        catalog: ActivityCatalog | None = None,
        route_estimator: RouteEstimator | None = None,
        replanner: Replanner | None = None,
    ) -> None:
        self.rng = rng or random.Random(config.PLANNER_SEED)
        self.catalog = catalog or ActivityCatalog()
        self.route_estimator = route_estimator or RouteEstimator(rng=self.rng)
        self.replanner = replanner or Replanner(
            catalog=self.catalog, route_estimator=self.route_estimator
        )

    # =========================================================================
    # Selection
    # =========================================================================

    @staticmethod
    def _quota(num_days: int, num_categories: int) -> int:
        return max(1, math.ceil((num_days * _ACTIVITIES_PER_DAY_TARGET) / num_categories))

    def select_activities(
        self,
        preferences: Mapping[ActivityCategory, bool],
        num_days: int,
    ) -> list[Activity]:
        """Proportional sample of each enabled category, shuffled."""
        categories = enabled_categories(preferences)
        if not categories:
            return []

        quota = self._quota(num_days, len(categories))
        selected: list[Activity] = []
        for cat in categories:
            pool = self.catalog.activities_for(cat)
            if not pool:
                continue
            for i in range(min(quota, len(pool))):
                selected.append(pool[i % len(pool)])

        self.rng.shuffle(selected)
        return selected

    def select_cheapest_activities(
        self,
        preferences: Mapping[ActivityCategory, bool],
        num_days: int,
    ) -> list[Activity]:
        """Same quota as select_activities, cheapest first, no shuffle."""
        categories = enabled_categories(preferences)
        if not categories:
            return []

        quota = self._quota(num_days, len(categories))
        selected: list[Activity] = []
        for cat in categories:
            selected.extend(self.catalog.cheapest_first(cat)[:quota])
        return selected

    # =========================================================================
    # Itinerary construction
    # =========================================================================

    def build_itinerary(
        self,
        activities: Sequence[Activity],
        num_days: int,
    ) -> list[DayItinerary]:
        """
        Fill days 1..num_days in input order, ceil(len / num_days) per day.
        Always returns num_days entries; trailing days may be short or empty.
        """
        per_day = math.ceil(len(activities) / num_days) if num_days > 0 else 0
        days: list[DayItinerary] = []
        cursor = 0
        for day in range(1, num_days + 1):
            chunk = tuple(activities[cursor:cursor + per_day])
            cursor += len(chunk)
            days.append(DayItinerary(
                day=day,
                activities=chunk,
                route=self.route_estimator.estimate(chunk),
            ))
        return days

    def compute_feasibility_floor(
        self,
        preferences: Mapping[ActivityCategory, bool],
        num_days: int,
    ) -> float:
        cheapest = self.select_cheapest_activities(preferences, num_days)
        return total_cost_of(self.build_itinerary(cheapest, num_days))

    # =========================================================================
    # PUBLIC: plan
    # =========================================================================

    def plan(
        self,
        budget: float,
        days: int,
        city: str,
        preferences: Mapping[ActivityCategory, bool],
        priorities: Mapping[ActivityCategory, ActivityPriority],
    ) -> TravelPlan:
        """
        Generate a TravelPlan.  Inputs are assumed pre-validated
        (budget > 0, 1 ≤ days ≤ MAX_TRIP_DAYS, non-empty city); see
        modules.validation.validate_plan_request.
        """
        _t0 = _time_mod.perf_counter()
        explanations: list[DecisionExplanation] = []

        floor = self.compute_feasibility_floor(preferences, days)
        is_feasible = budget >= floor

        enabled = [c.value for c in enabled_categories(preferences)]
        explanations.append(DecisionExplanation(
            reason="Activity Selection Based on Your Preferences",
            detail=(
                f"You selected {len(enabled)} activity type(s): {', '.join(enabled)}. "
                "The planner prioritized activities from these categories to match your interests."
            ),
            impact="positive",
        ))

        # ── Infeasible: no partial plan is offered ───────────────────────────
        if not is_feasible:
            explanations.append(DecisionExplanation(
                reason="Budget Constraint Detected",
                detail=(
                    f"Your budget of {_money(budget)} is below the minimum required budget of "
                    f"{_money(floor)} for the selected preferences and {days} days. "
                    "This is based on selecting only the most affordable activities in each category."
                ),
                impact="constraint",
            ))
            plan = TravelPlan(
                budget=budget,
                total_cost=floor,
                days=days,
                city=city,
                itinerary=(),
                re_planned=False,
                is_feasible=False,
                min_required_budget=floor,
                explanations=tuple(explanations),
            )
            self._log_plan(plan, _t0)
            return plan

        # ── Initial itinerary ────────────────────────────────────────────────
        selected = self.select_activities(preferences, days)
        itinerary = self.build_itinerary(selected, days)
        explanations.append(DecisionExplanation(
            reason="Activity Distribution Strategy",
            detail=(
                f"Distributed {len(selected)} activities across {days} days "
                f"(approximately {len(selected) // days} activities per day) to create a "
                "balanced itinerary without overwhelming your schedule."
            ),
            impact="neutral",
        ))

        initial_cost = total_cost_of(itinerary)
        re_planned = False

        if initial_cost > budget:
            # ── Replan ───────────────────────────────────────────────────────
            explanations.append(DecisionExplanation(
                reason="Budget Optimization Required",
                detail=(
                    f"Initial plan cost {_money(initial_cost)}, exceeding your budget by "
                    f"{_money(initial_cost - budget)}. Automatically re-planning using "
                    "priority-based logic: removing optional activities first, then nice-to-have, "
                    "while preserving must-have experiences."
                ),
                impact="constraint",
            ))
            result = self.replanner.reduce_with_trace(itinerary, budget, priorities)
            itinerary = result.itinerary
            re_planned = True

            final_count = activity_count_of(itinerary)
            explanations.append(DecisionExplanation(
                reason="Priority-Based Cost Reduction Achieved",
                detail=(
                    f"Reduced costs by {_money(result.saved)} by removing "
                    f"{len(selected) - final_count} activities"
                    + (
                        f" and swapping {result.substituted_count} for cheaper alternatives"
                        if result.substituted_count else ""
                    )
                    + ". Followed your priority preferences: optional activities removed first, "
                    "then nice-to-have if needed, while protecting all must-have experiences."
                ),
                impact="positive",
            ))
            _perf_logger.log("default", "REPLAN", {
                "budget":       budget,
                "initial_cost": result.initial_cost,
                "final_cost":   result.final_cost,
                "steps":        [
                    {"action": s.action, "day": s.day, "tier": s.tier.value,
                     "removed": s.removed, "replacement": s.replacement, "saving": s.saving}
                    for s in result.steps
                ],
            })
        else:
            explanations.append(DecisionExplanation(
                reason="Budget Well-Aligned",
                detail=(
                    f"Your budget of {_money(budget)} comfortably covers the planned activities "
                    f"(total cost: {_money(initial_cost)}). This leaves you with "
                    f"{_money(budget - initial_cost)} for meals, transportation, and unexpected expenses."
                ),
                impact="positive",
            ))

        # ── Day-cost variation ───────────────────────────────────────────────
        costs = [d.total_cost for d in itinerary]
        non_zero = [c for c in costs if c > 0]
        if itinerary and non_zero:
            explanations.append(DecisionExplanation(
                reason="Daily Cost Variation",
                detail=(
                    f"Daily costs range from {_money(min(non_zero))} to {_money(max(costs))}. "
                    "Higher-cost days include premium experiences, while lower-cost days balance "
                    "the budget and provide relaxation time."
                ),
                impact="neutral",
            ))

        plan = TravelPlan(
            budget=budget,
            total_cost=total_cost_of(itinerary),
            days=days,
            city=city,
            itinerary=tuple(itinerary),
            re_planned=re_planned,
            is_feasible=True,
            min_required_budget=floor,
            explanations=tuple(explanations),
        )
        self._log_plan(plan, _t0)
        return plan

    # =========================================================================
    # PRIVATE
    # =========================================================================

    @staticmethod
    def _log_plan(plan: TravelPlan, t0: float) -> None:
        elapsed_ms = round((_time_mod.perf_counter() - t0) * 1000, 2)
        logger.info(
            "plan %s: %d days, cost %.2f / budget %.2f, feasible=%s, replanned=%s",
            plan.city, plan.days, plan.total_cost, plan.budget,
            plan.is_feasible, plan.re_planned,
        )
        _perf_logger.log("default", "PLAN_GENERATED", {
            "city":                plan.city,
            "days":                plan.days,
            "budget":              plan.budget,
            "total_cost":          plan.total_cost,
            "min_required_budget": plan.min_required_budget,
            "is_feasible":         plan.is_feasible,
            "re_planned":          plan.re_planned,
            "activity_count":      plan.activity_count,
            "elapsed_ms":          elapsed_ms,
        })
