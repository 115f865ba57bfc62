"""End-to-end generation of migration settings.

load sites -> resolve tier -> allocate plans -> emit settings

Configuration, Azure lookups, telemetry and plan naming are all passed in,
so a run depends on nothing but its arguments.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path

from ..azure.base import ResourceLookup
from ..config import AsmigrateConfig
from ..telemetry import (
    RUN_FAILED,
    RUN_STARTED,
    RUN_SUCCEEDED,
    TIER_FALLBACK,
    TelemetrySink,
    safe_emit,
)
from .allocator import PlanParameters, allocate
from .emitter import check_output_path, emit
from .errors import MigrationSettingsError, ValidationError
from .loader import load_sites
from .models import PlanAllocation, TierDecision
from .naming import PlanNameGenerator
from .tiers import resolve_target_tier

logger = logging.getLogger(__name__)

_SUBSCRIPTION_ID_RE = re.compile(
    r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$"
)
_RESOURCE_GROUP_RE = re.compile(r"^[-\w.()]{1,90}$")


@dataclass
class MigrationRequest:
    """User-supplied parameters for one run."""

    input_path: Path
    region: str
    subscription_id: str
    resource_group: str
    app_service_environment: str | None = None
    output_path: Path | None = None
    overwrite: bool = False


@dataclass
class MigrationResult:
    output_path: Path
    decision: TierDecision
    region: str
    plans: list[PlanAllocation]
    warnings: list[str] = field(default_factory=list)

    @property
    def site_count(self) -> int:
        return sum(len(plan.sites) for plan in self.plans)


def validate_request(request: MigrationRequest) -> None:
    """Check required parameters before any Azure call is made.

    Raises:
        ValidationError: A parameter is missing or malformed.
    """
    if not request.region or not request.region.strip():
        raise ValidationError("Region is required")
    if not request.subscription_id or not _SUBSCRIPTION_ID_RE.match(
        request.subscription_id.strip()
    ):
        raise ValidationError(
            f"Subscription ID must be a GUID, got {request.subscription_id!r}"
        )
    rg = request.resource_group or ""
    if not _RESOURCE_GROUP_RE.match(rg) or rg.endswith("."):
        raise ValidationError(
            f"Invalid resource group name {rg!r}: use 1-90 letters, digits, "
            "underscores, hyphens, periods or parentheses, not ending in a period"
        )
    if request.app_service_environment is not None and not request.app_service_environment.strip():
        raise ValidationError("App Service Environment name must not be blank")


def validate_worker_defaults(config: AsmigrateConfig) -> None:
    """Check the worker sizing every plan will be created with.

    Raises:
        ValidationError: worker_count is below 1 or worker_size is blank.
    """
    count = config.defaults.worker_count
    if not isinstance(count, int) or isinstance(count, bool) or count < 1:
        raise ValidationError(
            f"defaults.worker_count must be an integer of at least 1, got {count!r}"
        )
    size = config.defaults.worker_size
    if not isinstance(size, str) or not size.strip():
        raise ValidationError(f"defaults.worker_size must not be blank, got {size!r}")


def generate_migration_settings(
    request: MigrationRequest,
    lookup: ResourceLookup,
    config: AsmigrateConfig,
    telemetry: TelemetrySink | None = None,
    name_generator: PlanNameGenerator | None = None,
) -> MigrationResult:
    """Generate and write the migration settings file for a set of sites.

    Args:
        request: Run parameters
        lookup: Azure resource lookup for request.subscription_id
        config: Defaults for output path and worker sizing
        telemetry: Optional sink for checkpoint events
        name_generator: Optional plan name generator

    Returns:
        MigrationResult describing what was written

    Raises:
        MigrationSettingsError: Any fatal failure; nothing is written.
    """
    safe_emit(
        telemetry,
        RUN_STARTED,
        {
            "region": request.region,
            "has_ase": bool(request.app_service_environment),
        },
    )
    try:
        result = _run(request, lookup, config, telemetry, name_generator)
    except MigrationSettingsError as e:
        safe_emit(
            telemetry,
            RUN_FAILED,
            {"error_type": type(e).__name__, "message": str(e)},
        )
        raise

    safe_emit(
        telemetry,
        RUN_SUCCEEDED,
        {
            "tier": result.decision.tier.value,
            "plans": len(result.plans),
            "sites": result.site_count,
        },
    )
    return result


def _run(
    request: MigrationRequest,
    lookup: ResourceLookup,
    config: AsmigrateConfig,
    telemetry: TelemetrySink | None,
    name_generator: PlanNameGenerator | None,
) -> MigrationResult:
    validate_request(request)
    validate_worker_defaults(config)
    output_path = check_output_path(
        request.output_path or config.defaults.output_path, request.overwrite
    )
    input_path = Path(request.input_path)

    sites = load_sites(input_path)

    lookup.authenticate()
    resolution = resolve_target_tier(
        lookup, request.region.strip(), request.app_service_environment
    )
    for warning in resolution.warnings:
        safe_emit(telemetry, TIER_FALLBACK, {"message": warning})

    params = PlanParameters(
        subscription_id=request.subscription_id.strip(),
        region=resolution.region,
        resource_group=request.resource_group,
        tier=resolution.decision.tier,
        worker_count=config.defaults.worker_count,
        worker_size=config.defaults.worker_size,
        app_service_environment=(
            resolution.environment.name if resolution.environment else None
        ),
    )
    plans = allocate(
        sites,
        resolution.decision.sites_per_plan,
        params,
        input_path,
        name_generator=name_generator,
    )
    logger.info(
        "Allocated %d site(s) to %d %s plan(s)",
        len(sites),
        len(plans),
        resolution.decision.tier.value,
    )

    written = emit(plans, output_path, overwrite=request.overwrite)
    return MigrationResult(
        output_path=written,
        decision=resolution.decision,
        region=resolution.region,
        plans=plans,
        warnings=list(resolution.warnings),
    )
