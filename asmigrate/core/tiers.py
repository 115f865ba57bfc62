"""Tier resolution: which App Service tier to target and how many sites per plan.

Decision table, evaluated top to bottom:

    ASE given, kind ASEV2            -> Isolated,   8 sites per plan
    ASE given, kind other than ASEV2 -> IsolatedV2, 16
    ASE given, kind unknown          -> IsolatedV2, 16 (with warning)
    no ASE, region offers PremiumV3  -> PremiumV3,  16
    no ASE, otherwise                -> PremiumV2,  8

An unknown ASE kind is assumed to be a newer generation environment.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ..azure.base import EnvironmentInfo, ResourceLookup, regions_match
from .errors import ResourceNotFoundError
from .models import Tier, TierDecision

logger = logging.getLogger(__name__)

ASE_V2_KIND = "ASEV2"
PREMIUM_V3_SKU = "PremiumV3"

_CAPACITY = {
    Tier.ISOLATED: 8,
    Tier.ISOLATED_V2: 16,
    Tier.PREMIUM_V3: 16,
    Tier.PREMIUM_V2: 8,
}


def sites_per_plan(tier: Tier) -> int:
    return _CAPACITY[tier]


def resolve_tier(
    has_ase: bool, ase_kind: str | None, can_use_p1v3: bool
) -> TierDecision:
    """Apply the tier decision table. Pure; performs no lookups."""
    if has_ase:
        if ase_kind and ase_kind.strip().upper() == ASE_V2_KIND:
            tier = Tier.ISOLATED
        else:
            tier = Tier.ISOLATED_V2
    elif can_use_p1v3:
        tier = Tier.PREMIUM_V3
    else:
        tier = Tier.PREMIUM_V2
    return TierDecision(tier=tier, sites_per_plan=_CAPACITY[tier])


@dataclass
class TierResolution:
    """Outcome of tier resolution against live Azure data."""

    decision: TierDecision
    region: str
    environment: EnvironmentInfo | None = None
    warnings: list[str] = field(default_factory=list)

    @property
    def used_fallback(self) -> bool:
        return bool(self.warnings)


def resolve_target_tier(
    lookup: ResourceLookup,
    region: str,
    app_service_environment: str | None = None,
) -> TierResolution:
    """Resolve the tier, capacity and effective region for a migration.

    Args:
        lookup: Azure resource lookup for the target subscription
        region: Region requested by the user
        app_service_environment: Optional ASE name to deploy into

    Returns:
        TierResolution with any warnings raised along the way

    Raises:
        ResourceNotFoundError: The named ASE does not exist in the subscription.
        ResourceLookupError: The ASE lookup itself failed.
    """
    warnings: list[str] = []

    # Collected warnings are shown to the user by the caller
    def _warn(message: str) -> None:
        logger.info(message)
        warnings.append(message)

    if app_service_environment:
        env = lookup.find_app_service_environment(app_service_environment)
        if env is None:
            raise ResourceNotFoundError(
                f"App Service Environment {app_service_environment!r} was not "
                "found in the target subscription"
            )

        effective_region = region
        if env.location and not regions_match(env.location, region):
            _warn(
                f"App Service Environment {env.name!r} is in {env.location}, not "
                f"{region}; using {env.location} as the migration region"
            )
            effective_region = env.location

        if not env.kind:
            _warn(
                f"Could not determine the version of App Service Environment "
                f"{env.name!r}; assuming an ASEv3 and using "
                f"{Tier.ISOLATED_V2.value} with "
                f"{_CAPACITY[Tier.ISOLATED_V2]} sites per plan"
            )

        decision = resolve_tier(True, env.kind, False)
        logger.info(
            "Using %s (%d sites per plan) for App Service Environment %s (kind=%s)",
            decision.tier.value,
            decision.sites_per_plan,
            env.name,
            env.kind,
        )
        return TierResolution(
            decision=decision,
            region=effective_region,
            environment=env,
            warnings=warnings,
        )

    try:
        can_use_p1v3 = lookup.region_supports_sku(region, PREMIUM_V3_SKU)
    except Exception as e:
        can_use_p1v3 = False
        _warn(
            f"Could not check {PREMIUM_V3_SKU} availability in {region} ({e}); "
            f"defaulting to {Tier.PREMIUM_V2.value} with "
            f"{_CAPACITY[Tier.PREMIUM_V2]} sites per plan"
        )
    else:
        if not can_use_p1v3:
            logger.info(
                "%s is not offered in %s; using %s",
                PREMIUM_V3_SKU,
                region,
                Tier.PREMIUM_V2.value,
            )

    decision = resolve_tier(False, None, can_use_p1v3)
    return TierResolution(decision=decision, region=region, warnings=warnings)
