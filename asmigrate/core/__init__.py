"""Migration settings pipeline: loader, tier resolver, allocator, emitter."""

from .allocator import PlanParameters, allocate, chunk_sites, plan_count
from .emitter import emit
from .errors import (
    AlreadyExistsError,
    AuthenticationError,
    EmptyInputError,
    MigrationSettingsError,
    ParseError,
    ResourceLookupError,
    ResourceNotFoundError,
    SettingsWriteError,
    ValidationError,
)
from .loader import load_sites
from .models import (
    MigrationSettingsDocument,
    PackagedSite,
    PackageResult,
    PlanAllocation,
    SiteAssignment,
    Tier,
    TierDecision,
)
from .naming import generate_plan_name, make_plan_name_generator
from .pipeline import MigrationRequest, MigrationResult, generate_migration_settings
from .tiers import TierResolution, resolve_target_tier, resolve_tier

__all__ = [
    # Pipeline
    "MigrationRequest",
    "MigrationResult",
    "generate_migration_settings",
    # Stages
    "load_sites",
    "resolve_tier",
    "resolve_target_tier",
    "TierResolution",
    "allocate",
    "chunk_sites",
    "plan_count",
    "PlanParameters",
    "emit",
    "generate_plan_name",
    "make_plan_name_generator",
    # Models
    "PackageResult",
    "PackagedSite",
    "Tier",
    "TierDecision",
    "SiteAssignment",
    "PlanAllocation",
    "MigrationSettingsDocument",
    # Errors
    "MigrationSettingsError",
    "ValidationError",
    "AlreadyExistsError",
    "ParseError",
    "EmptyInputError",
    "ResourceLookupError",
    "ResourceNotFoundError",
    "AuthenticationError",
    "SettingsWriteError",
]
