"""
test_route_planner.py
─────────────────────
Route estimate: grouping modes, distance / time / efficiency formulas.
"""

from __future__ import annotations

import math
import random

import pytest

from conftest import make_activity
from schemas.preferences import ActivityCategory
from modules.tool_usage.activity_catalog import ActivityCatalog, CITY_CENTER
from modules.tool_usage.distance_tool import (
    DistanceTool,
    haversine_km,
    path_distance_km,
    travel_time_minutes,
)
from modules.planning.route_planner import RouteEstimator, efficiency_score, round_half_up

_LAT0 = 40.70
_LNG0 = -74.00


def _north(km: float) -> float:
    """Latitude *km* due north of _LAT0 (exact along a meridian)."""
    return _LAT0 + math.degrees(km / 6371.0)


def _chain():
    # A–B 1.0 km, B–C 1.0 km, A–C 2.0 km
    return [
        make_activity("A", 10, lat=_LAT0,       lng=_LNG0, address="Stop A"),
        make_activity("B", 10, lat=_north(1.0), lng=_LNG0, address="Stop B"),
        make_activity("C", 10, lat=_north(2.0), lng=_LNG0, address="Stop C"),
    ]


# ── distance helpers ──────────────────────────────────────────────────────────

def test_haversine_zero_and_symmetric():
    assert haversine_km(_LAT0, _LNG0, _LAT0, _LNG0) == 0.0
    d1 = haversine_km(40.7589, -73.9851, 40.7350, -73.9950)
    d2 = haversine_km(40.7350, -73.9950, 40.7589, -73.9851)
    assert d1 == pytest.approx(d2)
    assert d1 > 0


def test_travel_time_formula():
    assert travel_time_minutes(0.0, 0) == 0
    assert travel_time_minutes(0.0, 1) == 0
    assert travel_time_minutes(0.4, 2) == 6          # ceil(0.8) + 5
    assert travel_time_minutes(6.0, 3) == 12 + 10


def test_path_distance_follows_input_order():
    pts = [a.location for a in _chain()]
    assert DistanceTool().calculate(pts[0], pts[2]) == pytest.approx(2.0, abs=1e-6)
    assert path_distance_km([pts[0], pts[2], pts[1]]) == pytest.approx(3.0, abs=1e-6)
    assert path_distance_km(pts) == pytest.approx(2.0, abs=1e-6)


# ── estimate() ────────────────────────────────────────────────────────────────

def test_empty_day_is_free_time(estimator):
    route = estimator.estimate([])
    assert route.total_distance == 0.0
    assert route.estimated_travel_time == 0
    assert route.groupings == ()
    assert route.efficiency == 100
    assert "free time" in route.reasoning


def test_single_activity(estimator):
    museum = ActivityCatalog().activities_for(ActivityCategory.sightseeing)[0]
    route = estimator.estimate([museum])
    assert route.total_distance == 0.0
    assert route.estimated_travel_time == 0
    assert route.efficiency == 100
    assert len(route.groupings) == 1
    assert route.groupings[0].reason == "Single activity location - easy to find!"
    assert route.groupings[0].name == "Downtown Cultural District"


def test_two_stops_half_km_apart(estimator):
    acts = [
        make_activity("X", 10, lat=_LAT0,       lng=_LNG0, address="X St"),
        make_activity("Y", 10, lat=_north(0.5), lng=_LNG0, address="Y St"),
    ]
    route = estimator.estimate(acts)
    assert route.total_distance == pytest.approx(0.5, abs=0.01)
    assert route.efficiency == 92
    assert len(route.groupings) == 1
    assert route.groupings[0].name == "X St Cluster"
    assert route.groupings[0].activities == ("X", "Y")
    assert "same area" in route.reasoning


def test_seed_mode_is_not_transitive():
    route = RouteEstimator(cluster_mode="seed").estimate(_chain())
    assert [g.activities for g in route.groupings] == [("A", "B"), ("C",)]
    assert route.efficiency == 78                   # round((1 - 2/9) * 100)
    assert route.total_distance == pytest.approx(2.0, abs=0.01)


def test_single_linkage_mode_is_transitive():
    route = RouteEstimator(cluster_mode="single_linkage").estimate(_chain())
    assert [g.activities for g in route.groupings] == [("A", "B", "C")]
    assert route.groupings[0].name == "Stop A Cluster"


def test_groupings_partition_the_day():
    catalog = ActivityCatalog()
    acts = catalog.all_activities()[:7]
    for mode in ("seed", "single_linkage"):
        route = RouteEstimator(cluster_mode=mode).estimate(acts)
        grouped = [name for g in route.groupings for name in g.activities]
        assert sorted(grouped) == sorted(a.name for a in acts)
        assert 0 <= route.efficiency <= 100


def test_efficiency_clamped_at_zero():
    far = [
        make_activity("P", 10, lat=_LAT0,        lng=_LNG0),
        make_activity("Q", 10, lat=_north(50.0), lng=_LNG0),
    ]
    route = RouteEstimator().estimate(far)
    assert route.efficiency == 0
    assert "metro, taxi" in route.reasoning


def test_unknown_activity_falls_back_near_city_center():
    ghost = make_activity("Ghost Tour", 10)
    est = RouteEstimator(rng=random.Random(3))
    loc = est.resolve_location(ghost)
    assert abs(loc.lat - CITY_CENTER.lat) <= 0.025
    assert abs(loc.lng - CITY_CENTER.lng) <= 0.025


def test_fallback_is_reproducible_with_same_seed():
    ghost = make_activity("Ghost Tour", 10)
    a = RouteEstimator(rng=random.Random(11)).resolve_location(ghost)
    b = RouteEstimator(rng=random.Random(11)).resolve_location(ghost)
    assert a == b


def test_unknown_cluster_mode_rejected():
    with pytest.raises(ValueError):
        RouteEstimator(cluster_mode="kmeans")


def test_half_scores_round_up():
    assert round_half_up(62.5) == 63
    assert round_half_up(2.5) == 3
    assert round_half_up(91.4) == 91
    # 4 stops, 4.5 km: (1 - 4.5 / 12) * 100 == 62.5 exactly
    assert efficiency_score(4.5, 4) == 63
    assert efficiency_score(0.0, 0) == 100
    assert efficiency_score(100.0, 2) == 0


class _EverythingAdjacent(DistanceTool):
    def calculate(self, a, b):
        return 0.0


def test_grouping_uses_injected_distance_tool():
    spread = [
        make_activity("P", 10, lat=_LAT0,        lng=_LNG0, address="P"),
        make_activity("Q", 10, lat=_north(40.0), lng=_LNG0, address="Q"),
    ]
    for mode in ("seed", "single_linkage"):
        route = RouteEstimator(cluster_mode=mode, distance_tool=_EverythingAdjacent()).estimate(spread)
        assert [g.activities for g in route.groupings] == [("P", "Q")]
        # path distance still comes from the haversine helpers
        assert route.total_distance == pytest.approx(40.0, abs=0.01)
