"""modules/reoptimization: over-budget itinerary re-planning."""

from modules.reoptimization.budget_replanner import Replanner, ReplanResult, ReplanStep

__all__ = ["Replanner", "ReplanResult", "ReplanStep"]
