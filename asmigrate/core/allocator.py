"""Site allocation: positional chunking of sites into App Service Plans.

Sites are walked once in input order. Each plan is filled to capacity
before the next one starts, so the last plan holds the remainder.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from ..utils.paths import resolve_relative_to
from .models import PackagedSite, PlanAllocation, SiteAssignment, Tier
from .naming import PlanNameGenerator, make_plan_name_generator


@dataclass(frozen=True)
class PlanParameters:
    """Fields shared by every plan in a run."""

    subscription_id: str
    region: str
    resource_group: str
    tier: Tier
    worker_count: int = 1
    worker_size: str = "Small"
    app_service_environment: str | None = None


def plan_count(site_count: int, capacity: int) -> int:
    return math.ceil(site_count / capacity)


def chunk_sites(
    sites: Sequence[PackagedSite], capacity: int
) -> list[list[PackagedSite]]:
    """Split sites into consecutive chunks of at most capacity.

    Raises:
        ValueError: If capacity < 1 or sites is empty.
    """
    if capacity < 1:
        raise ValueError(f"Plan capacity must be at least 1, got {capacity}")
    if not sites:
        raise ValueError("Cannot allocate an empty site list")
    return [list(sites[i : i + capacity]) for i in range(0, len(sites), capacity)]


def assign_site(site: PackagedSite, input_path: str | Path) -> SiteAssignment:
    """Map a packaged site to its target, resolving the package path."""
    package_path = resolve_relative_to(site.site_package_path, input_path)
    return SiteAssignment(
        iis_site_name=site.site_name,
        site_package_path=str(package_path),
        azure_site_name=site.site_name,
    )


def allocate(
    sites: Sequence[PackagedSite],
    capacity: int,
    params: PlanParameters,
    input_path: str | Path,
    name_generator: PlanNameGenerator | None = None,
) -> list[PlanAllocation]:
    """Distribute sites across ceil(N / capacity) plans.

    Args:
        sites: Packaged sites in input order
        capacity: Sites per plan
        params: Fields shared by every plan
        input_path: Package-results file; relative package paths resolve
            against its directory
        name_generator: Produces plan names; defaults to timestamp + random

    Returns:
        Plans in order, each holding its sites in input order
    """
    next_name = name_generator or make_plan_name_generator()

    plans = []
    for chunk in chunk_sites(sites, capacity):
        plans.append(
            PlanAllocation(
                app_service_plan=next_name(),
                subscription_id=params.subscription_id,
                region=params.region,
                resource_group=params.resource_group,
                tier=params.tier,
                number_of_workers=params.worker_count,
                worker_size=params.worker_size,
                app_service_environment=params.app_service_environment,
                sites=[assign_site(site, input_path) for site in chunk],
            )
        )
    return plans
