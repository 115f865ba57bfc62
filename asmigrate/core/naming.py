"""App Service Plan name generation.

Plan names combine a timestamp with a random six-digit suffix, e.g.
``Migration_ASP_2024_05_01T13_45_10_482913``. Collisions across runs are
possible but improbable; within one generator the suffix is re-rolled
until unused.
"""

from __future__ import annotations

import random
from datetime import datetime
from typing import Callable

PLAN_NAME_PREFIX = "Migration_ASP"
_TIMESTAMP_FORMAT = "%Y_%m_%dT%H_%M_%S"
_SUFFIX_MIN = 100000
_SUFFIX_MAX = 999999

PlanNameGenerator = Callable[[], str]


def generate_plan_name(
    now: datetime | None = None,
    rng: random.Random | None = None,
) -> str:
    """Build a single plan name from a timestamp and a random suffix."""
    now = now or datetime.now()
    suffix = (rng or random).randint(_SUFFIX_MIN, _SUFFIX_MAX)
    return f"{PLAN_NAME_PREFIX}_{now.strftime(_TIMESTAMP_FORMAT)}_{suffix}"


def make_plan_name_generator(
    seed: int | None = None,
    clock: Callable[[], datetime] | None = None,
) -> PlanNameGenerator:
    """Create a plan name generator that never repeats a name.

    Args:
        seed: Seed for the suffix RNG (same seed + same clock = same names)
        clock: Returns the timestamp to embed; defaults to datetime.now

    Returns:
        Zero-argument callable producing a fresh plan name on each call
    """
    rng = random.Random(seed)
    clock = clock or datetime.now
    issued: set[str] = set()

    def _next_name() -> str:
        name = generate_plan_name(clock(), rng)
        while name in issued:
            name = generate_plan_name(clock(), rng)
        issued.add(name)
        return name

    return _next_name
