"""
test_activity_catalog.py
────────────────────────
Catalog table shape and lookup helpers.
"""

from __future__ import annotations

from schemas.preferences import ActivityCategory
from modules.tool_usage.activity_catalog import (
    ActivityCatalog,
    activities_for_city,
    location_for,
)


def test_every_category_has_activities_with_positive_cost():
    catalog = ActivityCatalog()
    for cat in ActivityCategory:
        acts = catalog.activities_for(cat)
        assert len(acts) >= 1, cat
        assert all(a.estimated_cost > 0 for a in acts)
        assert all(a.category is cat for a in acts)


def test_every_activity_has_a_static_location():
    for a in ActivityCatalog().all_activities():
        assert location_for(a.name) is not None, a.name
        assert a.location == location_for(a.name)


def test_catalog_totals_match_table():
    catalog = ActivityCatalog()
    totals = {cat.value: sum(a.estimated_cost for a in catalog.activities_for(cat)) for cat in ActivityCategory}
    assert totals == {
        "sightseeing": 70,
        "food": 135,
        "adventure": 175,
        "shopping": 270,
        "relaxation": 155,
    }
    assert len(catalog.all_activities()) == 15


def test_unknown_category_is_empty():
    assert ActivityCatalog().activities_for("nightlife") == ()


def test_cheapest_first_orders_by_cost():
    names = [a.name for a in ActivityCatalog().cheapest_first(ActivityCategory.food)]
    assert names == ["Local Street Food Tour", "Casual Restaurant", "Fine Dining"]


def test_cheaper_alternative_is_first_in_catalog_order():
    catalog = ActivityCatalog()
    spa = catalog.activities_for(ActivityCategory.relaxation)[0]
    assert spa.name == "Spa & Wellness"
    # Yoga Class (25) precedes Beach Relaxation (10) in the table
    assert catalog.cheaper_alternative(spa).name == "Yoga Class"
    assert catalog.cheaper_alternative(spa, exclude_names={"Yoga Class"}).name == "Beach Relaxation"
    assert catalog.cheaper_alternative(spa, exclude_names={"Yoga Class", "Beach Relaxation"}) is None


def test_cheapest_activity_has_no_alternative():
    catalog = ActivityCatalog()
    beach = catalog.activities_for(ActivityCategory.relaxation)[2]
    assert catalog.cheaper_alternative(beach) is None


def test_any_city_resolves_to_default_table():
    assert activities_for_city("Lisbon").all_activities() == ActivityCatalog().all_activities()
    assert ActivityCatalog("Paris").categories() == list(ActivityCategory)
