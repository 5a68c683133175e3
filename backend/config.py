"""
config.py
---------
Central configuration for the trip budget planner.
Every knob is read from an environment variable; nothing is hard-coded
beyond the defaults below.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the backend directory (if it exists) so env vars in that file
# are picked up by os.getenv() below.  Won't override vars already set in the shell.
_env_path = Path(__file__).parent / ".env"
if _env_path.exists():
    load_dotenv(_env_path, override=False)


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


# ── Planning ──────────────────────────────────────────────────────────────────
# Seed for the planner / route estimator RNG.  Empty = fresh randomness per call.
_seed_raw: str = os.getenv("PLANNER_SEED", "")
PLANNER_SEED: int | None = int(_seed_raw) if _seed_raw.strip() else None

# "seed"           : group by distance to each group's first member only
# "single_linkage" : transitive closure over pairs closer than the radius
ROUTE_CLUSTER_MODE: str = os.getenv("ROUTE_CLUSTER_MODE", "seed")

MAX_TRIP_DAYS: int = int(os.getenv("MAX_TRIP_DAYS", "30"))

# Catalog costs are expressed in this unit; explanations format amounts with it.
CURRENCY_UNIT: str   = os.getenv("CURRENCY_UNIT", "USD")
CURRENCY_SYMBOL: str = os.getenv("CURRENCY_SYMBOL", "$")

# ── Storage (saved itineraries + booking records) ─────────────────────────────
MEMORY_BACKEND: str = os.getenv("MEMORY_BACKEND", "in_memory")    # "in_memory" | "redis"

REDIS_HOST: str     = os.getenv("REDIS_HOST",     "localhost")
REDIS_PORT: int     = int(os.getenv("REDIS_PORT", "6379"))
REDIS_DB: int       = int(os.getenv("REDIS_DB",   "0"))
REDIS_PASSWORD: str = os.getenv("REDIS_PASSWORD", "")
REDIS_KEY_PREFIX: str = os.getenv("REDIS_KEY_PREFIX", "tripbudget")
# 0 = keep collections until explicitly deleted
SAVED_PLAN_TTL: int = int(os.getenv("SAVED_PLAN_TTL", "0"))

# ── Logging ───────────────────────────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
STRUCTURED_LOG_ENABLED: bool = _flag("STRUCTURED_LOG_ENABLED", "true")
# JSONL event logs; defaults to logs/ next to main.py
LOGS_DIR: str = os.getenv("LOGS_DIR", str(Path(__file__).resolve().parent / "logs"))
