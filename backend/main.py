"""
main.py
--------
Trip budget planner, command-line entry point.

Stages printed to stdout:
  Stage 1: Request validation
  Stage 2: Feasibility floor
  Stage 3: Itinerary (per day, with route estimate)
  Stage 4: Decision explanations

Run:
  python main.py --budget 3000 --days 5 --city Paris
  python main.py --budget 300 --days 7 --city Rome --prefer all
  python main.py --budget 900 --days 3 --city Lisbon \\
      --prefer sightseeing,food,adventure --priority adventure=optional --seed 7
  python main.py --budget 900 --days 3 --city Lisbon --json
"""

from __future__ import annotations

import argparse
import json
import random
import sys

import config
from schemas.itinerary import TravelPlan
from schemas.preferences import (
    ActivityCategory,
    DEFAULT_PREFERENCES,
    parse_preferences,
    parse_priorities,
)
from modules.planning.budget_planner import BudgetPlanner
from modules.validation import validate_plan_request


# ── Argument parsing ───────────────────────────────────────────────────────────

def _parse_prefer(value: str | None) -> dict[str, bool]:
    if value is None:
        return {cat.value: enabled for cat, enabled in DEFAULT_PREFERENCES.items()}
    if value.strip().lower() == "all":
        return {cat.value: True for cat in ActivityCategory}
    if value.strip().lower() == "none":
        return {}
    return {name.strip().lower(): True for name in value.split(",") if name.strip()}


def _parse_priority_pairs(pairs: list[str]) -> dict[str, str]:
    """E.g. ["food=optional", "sightseeing=must-have"] → {"food": "optional", ...}."""
    out: dict[str, str] = {}
    for pair in pairs:
        if "=" not in pair:
            raise argparse.ArgumentTypeError(f"--priority expects category=level, got {pair!r}")
        key, level = pair.split("=", 1)
        out[key.strip().lower()] = level.strip().lower()
    return out


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        description="Generate a budget-constrained trip itinerary",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    p.add_argument("--budget", required=True, type=float, help="Total activity budget")
    p.add_argument("--days",   required=True, type=int,   help=f"Trip length (1-{config.MAX_TRIP_DAYS})")
    p.add_argument("--city",   required=True,             help="Destination label e.g. 'Paris'")
    p.add_argument(
        "--prefer",
        default=None,
        help=(
            "Comma-separated enabled categories, or 'all' / 'none' "
            f"(choices: {', '.join(c.value for c in ActivityCategory)}; "
            "default: sightseeing,food,relaxation)"
        ),
    )
    p.add_argument(
        "--priority",
        action="append",
        default=[],
        metavar="CATEGORY=LEVEL",
        help="Override a category priority (must-have | nice-to-have | optional); repeatable",
    )
    p.add_argument("--seed", type=int, default=None, help="Pin the planner RNG")
    p.add_argument("--json", action="store_true", help="Print the plan as JSON only")
    return p.parse_args(argv)


# ── Output ─────────────────────────────────────────────────────────────────────

def _money(amount: float) -> str:
    return f"{config.CURRENCY_SYMBOL}{amount:,.0f}"


def _print_plan(plan: TravelPlan) -> None:
    print("\n[Stage 2] Feasibility")
    print(f"  Budget        : {_money(plan.budget)}")
    print(f"  Minimum needed: {_money(plan.min_required_budget)}")
    if not plan.is_feasible:
        print("  ✗ Budget is below the minimum for these preferences; no itinerary produced.")
    else:
        print("  ✓ Feasible")

    if plan.is_feasible:
        print("\n[Stage 3] Itinerary")
        for day in plan.itinerary:
            print(f"  Day {day.day}: {len(day.activities)} activities, {_money(day.total_cost)}")
            for a in day.activities:
                print(f"    - {a.name:<28} {a.category.value:<12} {_money(a.estimated_cost):>8}  ({a.duration})")
            if day.route is not None:
                r = day.route
                print(
                    f"    route: {r.total_distance:.2f} km | {r.estimated_travel_time} min | "
                    f"efficiency {r.efficiency}% | {len(r.groupings)} group(s)"
                )
        status = "within" if plan.is_within_budget else "EXCEEDED"
        print(f"\n  Total cost   : {_money(plan.total_cost)} ({status} budget)")
        if plan.re_planned:
            print("  Re-planned   : yes (priority-based reduction applied)")

    print("\n[Stage 4] Decisions")
    for e in plan.explanations:
        print(f"  [{e.impact}] {e.reason}")
        print(f"      {e.detail}")


# ── Entry point ────────────────────────────────────────────────────────────────

def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)

    try:
        raw_priorities = _parse_priority_pairs(args.priority)
    except argparse.ArgumentTypeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    raw_preferences = _parse_prefer(args.prefer)
    request = {
        "budget":      args.budget,
        "days":        args.days,
        "city":        args.city,
        "preferences": raw_preferences,
        "priorities":  raw_priorities or None,
    }
    result = validate_plan_request(request)
    if not result:
        for err in result.errors:
            print(f"error: {err}", file=sys.stderr)
        return 2

    seed = args.seed if args.seed is not None else config.PLANNER_SEED
    planner = BudgetPlanner(rng=random.Random(seed))
    preferences = parse_preferences(raw_preferences)
    priorities = parse_priorities(raw_priorities)

    if not args.json:
        print("\n" + "=" * 60)
        print("  TRIP BUDGET PLANNER")
        print("=" * 60)
        print("\n[Stage 1] Request")
        enabled = [c.value for c, on in preferences.items() if on] or ["(none)"]
        print(f"  {args.city.strip()} | {args.days} day(s) | budget {_money(args.budget)}")
        print(f"  Preferences: {', '.join(enabled)}")
        print("  Priorities : " + ", ".join(f"{c.value}={p.value}" for c, p in priorities.items()))

    plan = planner.plan(
        budget=args.budget,
        days=args.days,
        city=args.city.strip(),
        preferences=preferences,
        priorities=priorities,
    )

    if args.json:
        print(json.dumps(plan.to_dict(), indent=2, ensure_ascii=False))
    else:
        _print_plan(plan)
        print("\n" + "=" * 60)
    return 0


if __name__ == "__main__":
    sys.exit(main())
