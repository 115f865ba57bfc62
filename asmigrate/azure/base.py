"""Abstract interface for Azure resource lookups.

The tier resolver only needs three answers from Azure: whether sign-in
works, where an App Service Environment lives (and which version it is),
and whether a region offers a given App Service SKU tier.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

ARM_SCOPE = "https://management.azure.com/.default"
HOSTING_ENVIRONMENT_TYPE = "Microsoft.Web/hostingEnvironments"


@dataclass(frozen=True)
class EnvironmentInfo:
    """An App Service Environment as found in the subscription."""

    name: str
    resource_group: str
    location: str
    kind: str | None = None  # "ASEV2", "ASEV3", or None if not reported
    resource_id: str = ""


def normalize_region(region: str) -> str:
    """Normalize a region name so "East US" and "eastus" compare equal."""
    return "".join(region.split()).lower()


def regions_match(a: str, b: str) -> bool:
    return normalize_region(a) == normalize_region(b)


class ResourceLookup(ABC):
    """Read-only queries against Azure Resource Manager for one subscription.

    Implementations raise asmigrate.core.errors.ResourceLookupError for
    service failures and AuthenticationError when no token can be acquired.
    """

    @abstractmethod
    def authenticate(self) -> None:
        """Acquire an access token, failing fast if sign-in is not possible."""

    @abstractmethod
    def find_app_service_environment(self, name: str) -> EnvironmentInfo | None:
        """Find an App Service Environment by name.

        Returns:
            EnvironmentInfo, or None if no such environment exists
        """

    @abstractmethod
    def region_supports_sku(self, region: str, sku: str) -> bool:
        """Check whether App Service offers the SKU tier in the region."""
