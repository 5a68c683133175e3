"""
test_request_validator.py
─────────────────────────
Edge guards for plan requests and booking records.
"""

from __future__ import annotations

import pytest

import config
from modules.validation import validate_booking, validate_plan_request


def _req(**overrides):
    base = {"budget": 1000, "days": 3, "city": "Lisbon"}
    base.update(overrides)
    return base


def test_valid_minimal_request():
    result = validate_plan_request(_req())
    assert result
    assert result.errors == []


@pytest.mark.parametrize("budget", [0, -5, "abc", None])
def test_bad_budget(budget):
    result = validate_plan_request(_req(budget=budget))
    assert not result
    assert any("budget" in e for e in result.errors)


@pytest.mark.parametrize("days", [0, config.MAX_TRIP_DAYS + 1, "two", True])
def test_bad_days(days):
    result = validate_plan_request(_req(days=days))
    assert not result
    assert any("days" in e for e in result.errors)


def test_max_days_accepted():
    assert validate_plan_request(_req(days=config.MAX_TRIP_DAYS))


@pytest.mark.parametrize("city", ["", "   ", None])
def test_blank_city(city):
    result = validate_plan_request(_req(city=city))
    assert "city must not be empty" in result.errors


def test_unknown_priority_value():
    result = validate_plan_request(_req(
        preferences={"food": True},
        priorities={"food": "urgent"},
    ))
    assert not result
    assert "urgent" in result.errors[0]


def test_partial_priorities_fall_back_to_defaults():
    result = validate_plan_request(_req(
        preferences={"food": True, "shopping": True},
        priorities={"food": "optional"},
    ))
    assert result
    assert result.errors == []


def test_priorities_omitted_means_defaults():
    assert validate_plan_request(_req(preferences={"adventure": True}))


def test_errors_accumulate():
    result = validate_plan_request({"budget": -1, "days": 0, "city": ""})
    assert len(result.errors) == 3


def test_booking_checks():
    assert validate_booking({"type": "hotel", "confirmation_number": "H1"})
    bad = validate_booking({"type": "cruise", "confirmation_number": " ", "price": -3})
    assert len(bad.errors) == 3
