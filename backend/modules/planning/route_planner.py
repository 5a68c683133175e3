"""
modules/planning/route_planner.py
-----------------------------------
Per-day route estimate: proximity grouping, travel distance / time, and a
0–100 efficiency score with a plain-language rationale.

This is a heuristic distance estimate, not a shortest-path solver: stops are
visited in assignment order and the route is never reordered.

Each day:
  1. Resolve a coordinate per activity (static table, else jittered fallback
     around the city centre using the estimator's RNG).
  2. Group activities closer than CLUSTER_RADIUS_KM.
  3. Sum haversine hops in input order → total_distance.
  4. travel time = ceil(km / 30 km/h · 60) + 5 min per hop.
  5. efficiency  = clamp(round_half_up((1 − km / (3 km · n)) · 100), 0, 100).

Grouping modes (config.ROUTE_CLUSTER_MODE):
  "seed"           — each unclustered activity seeds a group and absorbs every
                     later unclustered activity within the radius *of the seed*.
                     Order-dependent; A–B close, B–C close, A–C far can leave C
                     outside A's group.
  "single_linkage" — transitive closure: members connected by any chain of
                     hops shorter than the radius share a group.
"""

from __future__ import annotations

import logging
import math
import random
from typing import Optional

import config
from schemas.itinerary import Activity, ActivityGroup, Location, RouteInfo
from modules.tool_usage.activity_catalog import CITY_CENTER, location_for
from modules.tool_usage.distance_tool import DistanceTool

logger = logging.getLogger(__name__)

CLUSTER_RADIUS_KM: float = 1.5
EFFICIENCY_BASELINE_KM: float = 3.0     # assumed hop between two random activities
FALLBACK_JITTER_DEG: float = 0.025      # ± per axis around CITY_CENTER

CLUSTER_MODES: tuple[str, ...] = ("seed", "single_linkage")

_FREE_DAY_REASONING = "No activities planned for this day - enjoy free time!"


def round_half_up(value: float) -> int:
    """Nearest integer with halves rounded up (2.5 -> 3, -2.5 -> -2)."""
    return math.floor(value + 0.5)


def efficiency_score(total_km: float, num_stops: int) -> int:
    """clamp(round_half_up((1 - km / (3 km * n)) * 100), 0, 100); 100 for no stops."""
    if num_stops <= 0:
        return 100
    ratio = 1 - total_km / (num_stops * EFFICIENCY_BASELINE_KM)
    return max(0, min(100, round_half_up(ratio * 100)))


class RouteEstimator:
    """
    Builds a RouteInfo for one day's ordered activity list.

    Args:
        rng:          random source for coordinate fallback (seed it in tests).
        cluster_mode: "seed" or "single_linkage"; defaults to config.ROUTE_CLUSTER_MODE.
    """

    def __init__(
        self,
        rng: random.Random | None = None,
        cluster_mode: str | None = None,
        distance_tool: DistanceTool | None = None,
    ) -> None:
        self.rng = rng or random.Random(config.PLANNER_SEED)
        self.cluster_mode = cluster_mode or config.ROUTE_CLUSTER_MODE
        if self.cluster_mode not in CLUSTER_MODES:
            raise ValueError(
                f"Unknown cluster mode {self.cluster_mode!r}; expected one of {CLUSTER_MODES}"
            )
        self.distance_tool = distance_tool or DistanceTool()

    # ── Public entry point ────────────────────────────────────────────────────

    def estimate(self, activities: list[Activity] | tuple[Activity, ...]) -> RouteInfo:
        if not activities:
            return RouteInfo(
                total_distance=0.0,
                estimated_travel_time=0,
                groupings=(),
                efficiency=100,
                reasoning=_FREE_DAY_REASONING,
            )

        located = [(a, self.resolve_location(a)) for a in activities]
        points = [loc for _, loc in located]
        n = len(located)

        if self.cluster_mode == "single_linkage":
            index_groups = self._single_linkage_groups(points)
        else:
            index_groups = self._seed_groups(points)
        groups = [self._build_group([located[i] for i in idx]) for idx in index_groups]

        total_km = self.distance_tool.path_km(points)
        travel_min = self.distance_tool.travel_time(total_km, n)

        efficiency = efficiency_score(total_km, n)

        reasoning = self._reasoning(len(groups), n, total_km)
        logger.debug(
            "route estimate: %d stops, %d groups, %.2f km, efficiency %d",
            n, len(groups), total_km, efficiency,
        )

        return RouteInfo(
            total_distance=round(total_km, 2),
            estimated_travel_time=travel_min,
            groupings=tuple(groups),
            efficiency=efficiency,
            reasoning=reasoning,
            all_activity_locations=tuple((a.name, loc) for a, loc in located),
        )

    def resolve_location(self, activity: Activity) -> Location:
        """Static coordinate for *activity*, else a jittered point near the city centre."""
        loc = location_for(activity.name) or activity.location
        if loc is not None:
            return loc
        return Location(
            lat=CITY_CENTER.lat + (self.rng.random() - 0.5) * 2 * FALLBACK_JITTER_DEG,
            lng=CITY_CENTER.lng + (self.rng.random() - 0.5) * 2 * FALLBACK_JITTER_DEG,
            address=CITY_CENTER.address,
        )

    # ── Grouping ──────────────────────────────────────────────────────────────

    def _seed_groups(self, points: list[Location]) -> list[list[int]]:
        grouped: set[int] = set()
        groups: list[list[int]] = []
        for i, seed in enumerate(points):
            if i in grouped:
                continue
            group = [i]
            grouped.add(i)
            for j in range(i + 1, len(points)):
                if j in grouped:
                    continue
                if self.distance_tool.calculate(seed, points[j]) < CLUSTER_RADIUS_KM:
                    group.append(j)
                    grouped.add(j)
            groups.append(group)
        return groups

    def _single_linkage_groups(self, points: list[Location]) -> list[list[int]]:
        # Flood fill over the "closer than radius" graph; groups are seeded in
        # input order and members listed in input order.
        n = len(points)
        assigned: list[Optional[int]] = [None] * n
        groups: list[list[int]] = []
        for i in range(n):
            if assigned[i] is not None:
                continue
            gid = len(groups)
            assigned[i] = gid
            stack = [i]
            members = [i]
            while stack:
                cur = stack.pop()
                for j in range(n):
                    if assigned[j] is None and self.distance_tool.calculate(points[cur], points[j]) < CLUSTER_RADIUS_KM:
                        assigned[j] = gid
                        stack.append(j)
                        members.append(j)
            groups.append(sorted(members))
        return groups

    @staticmethod
    def _build_group(members: list[tuple[Activity, Location]]) -> ActivityGroup:
        seed_loc = members[0][1]
        center = Location(
            lat=sum(loc.lat for _, loc in members) / len(members),
            lng=sum(loc.lng for _, loc in members) / len(members),
            address=seed_loc.address,
        )
        categories = {a.category for a, _ in members}
        if len(members) > 1:
            mix = (
                "Mixed activities keep the day interesting!"
                if len(categories) > 1
                else "Same-category activities in one area."
            )
            reason = f"Clustered {len(members)} activities to minimize travel time. {mix}"
            name = f"{seed_loc.address} Cluster"
        else:
            reason = "Single activity location - easy to find!"
            name = seed_loc.address
        return ActivityGroup(
            name=name,
            activities=tuple(a.name for a, _ in members),
            center=center,
            reason=reason,
        )

    # ── Reasoning text ────────────────────────────────────────────────────────

    @staticmethod
    def _reasoning(num_groups: int, num_stops: int, total_km: float) -> str:
        avg_hop = total_km / (num_stops - 1) if num_stops > 1 else 0.0
        text = f"Smart grouping created {num_groups} cluster{'s' if num_groups > 1 else ''}. "
        if num_groups == 1:
            text += (
                f"All {num_stops} activities are in the same area - maximum efficiency! "
                f"Total walking distance: {total_km:.2f}km."
            )
        elif avg_hop < 1:
            text += f"Activities are very close (avg {avg_hop:.2f}km apart). Easy walking distance!"
        elif avg_hop < 2:
            text += (
                f"Activities are closely grouped (avg {avg_hop:.2f}km between stops). "
                "Consider walking or short taxi rides."
            )
        else:
            text += (
                f"Average {avg_hop:.1f}km between activities. "
                "Consider metro, taxi, or ride-sharing for efficiency."
            )
        return text
