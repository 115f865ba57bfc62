"""Pydantic models for package results and migration settings.

Field aliases match the wire format shared with the packaging step (input)
and the migration-execution step (output), so models are populated and
dumped with ``by_alias=True``.
"""

import json
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, RootModel


# =============================================================================
# Input
# =============================================================================


class PackageResult(BaseModel):
    """One record of the package-results file, as written by the packager."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    site_name: str = Field(alias="SiteName", min_length=1)
    site_package_path: str | None = Field(default=None, alias="SitePackagePath")

    @property
    def has_package(self) -> bool:
        return bool(self.site_package_path and self.site_package_path.strip())


class PackagedSite(BaseModel):
    """A site with a package ready to migrate."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    site_name: str = Field(alias="SiteName")
    site_package_path: str = Field(alias="SitePackagePath")


# =============================================================================
# Tier decision
# =============================================================================


class Tier(str, Enum):
    PREMIUM_V2 = "PremiumV2"
    PREMIUM_V3 = "PremiumV3"
    ISOLATED = "Isolated"
    ISOLATED_V2 = "IsolatedV2"


class TierDecision(BaseModel):
    """Hosting tier and per-plan capacity, applied to every plan in a run."""

    model_config = ConfigDict(frozen=True)

    tier: Tier
    sites_per_plan: int = Field(ge=1)


# =============================================================================
# Output
# =============================================================================


class SiteAssignment(BaseModel):
    """A source IIS site placed in a plan."""

    model_config = ConfigDict(populate_by_name=True)

    iis_site_name: str = Field(alias="IISSiteName")
    site_package_path: str = Field(alias="SitePackagePath")
    azure_site_name: str = Field(alias="AzureSiteName")


class PlanAllocation(BaseModel):
    """One App Service Plan and the sites assigned to it."""

    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)

    app_service_plan: str = Field(alias="AppServicePlan")
    subscription_id: str = Field(alias="SubscriptionId")
    region: str = Field(alias="Region")
    resource_group: str = Field(alias="ResourceGroup")
    tier: Tier = Field(alias="Tier")
    number_of_workers: int = Field(alias="NumberOfWorkers", ge=1)
    worker_size: str = Field(alias="WorkerSize")
    app_service_environment: str | None = Field(
        default=None, alias="AppServiceEnvironment"
    )
    sites: list[SiteAssignment] = Field(alias="Sites")


class MigrationSettingsDocument(RootModel[list[PlanAllocation]]):
    """The settings file consumed by the migration-execution step."""

    def to_json(self) -> str:
        data = self.model_dump(mode="json", by_alias=True, exclude_none=True)
        return json.dumps(data, indent=2)
