"""
schemas/preferences.py
----------------------
Activity categories, removal priorities, and the user-facing preference /
priority mappings consumed by the planner.
"""

from __future__ import annotations

from enum import Enum
from typing import Mapping


class ActivityCategory(str, Enum):
    """Closed set of catalog categories.  Declaration order is canonical."""
    sightseeing = "sightseeing"
    food = "food"
    adventure = "adventure"
    shopping = "shopping"
    relaxation = "relaxation"


class ActivityPriority(str, Enum):
    must_have = "must-have"
    nice_to_have = "nice-to-have"
    optional = "optional"


# Replanner walks tiers in this order (least protected first)
REMOVAL_ORDER: tuple[ActivityPriority, ...] = (
    ActivityPriority.optional,
    ActivityPriority.nice_to_have,
    ActivityPriority.must_have,
)

ActivityPreferences = dict[ActivityCategory, bool]
ActivityPriorities = dict[ActivityCategory, ActivityPriority]

DEFAULT_PREFERENCES: ActivityPreferences = {
    ActivityCategory.sightseeing: True,
    ActivityCategory.food:        True,
    ActivityCategory.adventure:   False,
    ActivityCategory.shopping:    False,
    ActivityCategory.relaxation:  True,
}

DEFAULT_PRIORITIES: ActivityPriorities = {
    ActivityCategory.sightseeing: ActivityPriority.must_have,
    ActivityCategory.food:        ActivityPriority.nice_to_have,
    ActivityCategory.adventure:   ActivityPriority.optional,
    ActivityCategory.shopping:    ActivityPriority.optional,
    ActivityCategory.relaxation:  ActivityPriority.nice_to_have,
}


def parse_preferences(raw: Mapping[str, bool] | None) -> ActivityPreferences:
    """
    Normalise a str-keyed mapping into ActivityPreferences.

    Unknown keys are ignored; categories absent from *raw* are disabled.
    The result is always in canonical category order.
    """
    raw = raw or {}
    lookup = {str(k.value if isinstance(k, Enum) else k).lower(): bool(v) for k, v in raw.items()}
    return {cat: lookup.get(cat.value, False) for cat in ActivityCategory}


def parse_priorities(raw: Mapping[str, str] | None) -> ActivityPriorities:
    """
    Normalise a str-keyed mapping into ActivityPriorities.

    Missing categories fall back to DEFAULT_PRIORITIES; unknown keys are ignored.
    An unrecognised priority value raises ValueError (caller programming error).
    """
    result = dict(DEFAULT_PRIORITIES)
    for key, value in (raw or {}).items():
        name = str(key.value if isinstance(key, Enum) else key).lower()
        try:
            cat = ActivityCategory(name)
        except ValueError:
            continue
        result[cat] = ActivityPriority(value.value if isinstance(value, Enum) else value)
    return result


def enabled_categories(preferences: Mapping[ActivityCategory, bool]) -> list[ActivityCategory]:
    """Enabled categories in canonical order."""
    return [cat for cat in ActivityCategory if preferences.get(cat, False)]
