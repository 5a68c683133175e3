"""
modules/validation/request_validator.py
----------------------------------------
Input guards applied at the edges (CLI, HTTP, store writes) before any
record reaches the planner or the booking store.

The planner itself assumes well-formed input and reports outcomes as data;
these checks are where malformed input is turned into an error list.

  Plan request:
    ✓ budget is numeric and > 0
    ✓ days is an integer in [1, MAX_TRIP_DAYS]
    ✓ city is a non-empty string
    ✓ every enabled category has a priority once DEFAULT_PRIORITIES fills gaps
    ✓ priority values are recognised

  Booking record:
    ✓ type ∈ {flight, hotel, car, ticket}
    ✓ confirmation_number non-empty
    ✓ price >= 0 if present

Usage:
    from modules.validation import validate_plan_request

    result = validate_plan_request({"budget": 3000, "days": 5, "city": "Paris"})
    if not result:
        print(result.errors)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import config
from schemas.booking import BOOKING_TYPES
from schemas.preferences import ActivityCategory, ActivityPriority, DEFAULT_PRIORITIES


# ── Result dataclass ───────────────────────────────────────────────────────────

@dataclass
class ValidationResult:
    """
    Outcome of a single validation run.

    Attributes:
        valid:  True iff there are zero errors.
        errors: Human-readable list of failure reasons.
        record: The input record dict (for logging purposes).
    """
    valid: bool
    errors: list[str] = field(default_factory=list)
    record: dict = field(default_factory=dict, repr=False)

    def __bool__(self) -> bool:
        return self.valid


# ── Plan request validation ────────────────────────────────────────────────────

def validate_plan_request(record: dict[str, Any]) -> ValidationResult:
    """
    Validate a planning request before BudgetPlanner.plan().

    Keys: budget, days, city, and optionally preferences / priorities
    (str-keyed mappings, as received from a form or JSON body).
    """
    errors: list[str] = []

    # ── Budget ─────────────────────────────────────────────────────────────
    budget = record.get("budget")
    try:
        b = float(budget)  # type: ignore[arg-type]
        if not b > 0:
            errors.append(f"budget={b} must be > 0")
    except (TypeError, ValueError):
        errors.append(f"budget={budget!r} must be numeric")

    # ── Days ───────────────────────────────────────────────────────────────
    days = record.get("days")
    if isinstance(days, bool) or not isinstance(days, int):
        try:
            days_i = int(str(days))
        except (TypeError, ValueError):
            days_i = None
            errors.append(f"days={days!r} must be an integer")
    else:
        days_i = days
    if days_i is not None and not (1 <= days_i <= config.MAX_TRIP_DAYS):
        errors.append(f"days={days_i} must be between 1 and {config.MAX_TRIP_DAYS}")

    # ── City ───────────────────────────────────────────────────────────────
    city = record.get("city")
    if not isinstance(city, str) or not city.strip():
        errors.append("city must not be empty")

    # ── Priorities ─────────────────────────────────────────────────────────
    preferences = record.get("preferences") or {}
    priorities = record.get("priorities")
    if priorities is not None:
        known = {c.value for c in ActivityCategory}
        for key, value in priorities.items():
            if str(key) not in known:
                continue
            try:
                ActivityPriority(value)
            except ValueError:
                errors.append(
                    f"priority {value!r} for {key!r} is not one of "
                    f"{[p.value for p in ActivityPriority]}"
                )
        # partial maps are overrides; DEFAULT_PRIORITIES covers the rest
        covered = {c.value for c in DEFAULT_PRIORITIES} | {str(k) for k in priorities}
        for key, enabled in preferences.items():
            if enabled and str(key) in known and str(key) not in covered:
                errors.append(f"enabled category {key!r} has no priority")

    return ValidationResult(valid=len(errors) == 0, errors=errors, record=record)


# ── Booking validation ─────────────────────────────────────────────────────────

def validate_booking(record: dict[str, Any]) -> ValidationResult:
    """Minimal structural checks for a booking record before it is stored."""
    errors: list[str] = []

    btype = record.get("type")
    if btype not in BOOKING_TYPES:
        errors.append(f"type={btype!r} must be one of {list(BOOKING_TYPES)}")

    conf = record.get("confirmation_number")
    if not conf or not str(conf).strip():
        errors.append("confirmation_number must not be empty")

    price = record.get("price")
    if price is not None:
        try:
            if float(price) < 0:
                errors.append(f"price={price} must be >= 0")
        except (TypeError, ValueError):
            errors.append(f"price={price!r} must be numeric")

    return ValidationResult(valid=len(errors) == 0, errors=errors, record=record)
