"""
test_api.py
───────────
HTTP surface via FastAPI's TestClient.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from api.server import app
from test_booking_manager import FLIGHT, HOTEL

_STANDARD = {"sightseeing": True, "food": True, "relaxation": True}


@pytest.fixture
def client():
    return TestClient(app)


def _generate(client, **overrides):
    body = {"budget": 3000, "days": 5, "city": "Paris", "preferences": _STANDARD, "seed": 1}
    body.update(overrides)
    return client.post("/v1/itinerary/generate", json=body)


def test_health(client):
    r = client.get("/v1/health")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"
    assert r.json()["storage"] == "in_memory"


def test_catalog(client):
    data = client.get("/v1/catalog").json()
    assert list(data) == ["sightseeing", "food", "adventure", "shopping", "relaxation"]
    assert all(len(v) == 3 for v in data.values())

    food = client.get("/v1/catalog/food").json()
    assert [a["name"] for a in food] == ["Local Street Food Tour", "Casual Restaurant", "Fine Dining"]
    assert food[0]["estimatedCost"] == 20

    assert client.get("/v1/catalog/nightlife").status_code == 404


def test_generate_feasible_plan(client):
    r = _generate(client)
    assert r.status_code == 200
    plan = r.json()
    assert plan["isFeasible"] is True
    assert plan["rePlanned"] is False
    assert plan["totalCost"] == 360
    assert plan["budgetStatus"] == "within"
    assert len(plan["itinerary"]) == 5
    assert plan["itinerary"][0]["route"]["efficiency"] <= 100
    assert sum(d["totalCost"] for d in plan["itinerary"]) == 360


def test_generate_infeasible_plan(client):
    all_on = {k: True for k in ("sightseeing", "food", "adventure", "shopping", "relaxation")}
    plan = _generate(client, budget=300, days=7, preferences=all_on).json()
    assert plan["isFeasible"] is False
    assert plan["minRequiredBudget"] == 805
    assert plan["itinerary"] == []
    assert plan["isWithinBudget"] is False


def test_generate_with_priorities_replans(client):
    plan = _generate(
        client,
        budget=50,
        days=1,
        preferences={"sightseeing": True, "food": True},
        priorities={"food": "nice-to-have", "sightseeing": "must-have"},
    ).json()
    assert plan["rePlanned"] is True
    assert plan["totalCost"] == 45


@pytest.mark.parametrize("overrides", [
    {"budget": 0},
    {"days": 0},
    {"city": ""},
    {"city": "   "},
    {"priorities": {"food": "urgent"}},
])
def test_generate_rejects_bad_input(client, overrides):
    assert _generate(client, **overrides).status_code == 422


def test_saved_plan_lifecycle(client):
    plan = _generate(client).json()

    r = client.post("/v1/itinerary/saved", json={"plan": plan})
    assert r.status_code == 201
    saved = r.json()
    assert saved["totalCost"] == plan["totalCost"]
    plan_id = saved["id"]

    listed = client.get("/v1/itinerary/saved").json()
    assert [p["id"] for p in listed] == [plan_id]

    loaded = client.get(f"/v1/itinerary/saved/{plan_id}").json()
    assert loaded["itinerary"] == plan["itinerary"]

    assert client.delete(f"/v1/itinerary/saved/{plan_id}").status_code == 200
    assert client.get(f"/v1/itinerary/saved/{plan_id}").status_code == 404
    assert client.delete(f"/v1/itinerary/saved/{plan_id}").status_code == 404


def test_save_malformed_plan(client):
    assert client.post("/v1/itinerary/saved", json={"plan": {"city": "x"}}).status_code == 422


def test_bookings_lifecycle(client):
    r = client.post("/v1/bookings", json=HOTEL)
    assert r.status_code == 201
    hotel = r.json()
    assert hotel["id"].startswith("booking_")
    client.post("/v1/bookings", json=FLIGHT)

    assert len(client.get("/v1/bookings").json()) == 2
    hotels = client.get("/v1/bookings", params={"type": "hotel"}).json()
    assert [b["hotel_name"] for b in hotels] == ["Harbour Inn"]

    assert client.delete(f"/v1/bookings/{hotel['id']}").status_code == 200
    assert client.delete(f"/v1/bookings/{hotel['id']}").status_code == 404


def test_bookings_reject_bad_records(client):
    assert client.post("/v1/bookings", json={**HOTEL, "type": "cruise"}).status_code == 422
    broken = {k: v for k, v in HOTEL.items() if k != "guest_name"}
    assert client.post("/v1/bookings", json=broken).status_code == 422
    assert client.get("/v1/bookings", params={"type": "cruise"}).status_code == 422


def _single_activity_plan(**activity_overrides):
    activity = {"name": "Yoga Class", "category": "relaxation", "estimatedCost": 25}
    activity.update(activity_overrides)
    return {
        "budget": 100,
        "totalCost": 25,
        "days": 1,
        "city": "Goa",
        "itinerary": [{"day": 1, "activities": [activity]}],
    }


def test_save_coerces_numeric_strings(client):
    r = client.post("/v1/itinerary/saved", json={"plan": _single_activity_plan(estimatedCost="25")})
    assert r.status_code == 201
    saved = r.json()
    assert saved["itinerary"][0]["activities"][0]["estimatedCost"] == 25
    assert saved["itinerary"][0]["totalCost"] == 25


@pytest.mark.parametrize("plan", [
    _single_activity_plan(estimatedCost="abc"),
    {**_single_activity_plan(), "budget": "abc"},
    {**_single_activity_plan(), "isFeasible": "yes"},
    {**_single_activity_plan(), "itinerary": ["not a day"]},
    _single_activity_plan(category="nightlife"),
])
def test_save_mistyped_values_rejected(client, plan):
    assert client.post("/v1/itinerary/saved", json={"plan": plan}).status_code == 422
    assert client.get("/v1/itinerary/saved").json() == []
