"""Resource lookups backed by the Azure management SDKs."""

import logging

from azure.core.credentials import TokenCredential
from azure.core.exceptions import AzureError, ClientAuthenticationError
from azure.mgmt.resource import ResourceManagementClient
from azure.mgmt.web import WebSiteManagementClient

from ..core.errors import AuthenticationError, ResourceLookupError
from .base import (
    ARM_SCOPE,
    HOSTING_ENVIRONMENT_TYPE,
    EnvironmentInfo,
    ResourceLookup,
    regions_match,
)

logger = logging.getLogger(__name__)


def resource_group_from_id(resource_id: str) -> str:
    """Extract the resource group name from an ARM resource ID.

    Example:
        /subscriptions/x/resourceGroups/rg1/providers/Microsoft.Web/... -> "rg1"
    """
    parts = resource_id.strip("/").split("/")
    for i, part in enumerate(parts[:-1]):
        if part.lower() == "resourcegroups":
            return parts[i + 1]
    raise ValueError(f"No resource group in resource ID: {resource_id!r}")


class ArmResourceLookup(ResourceLookup):
    """ResourceLookup over azure-mgmt-resource and azure-mgmt-web.

    Clients are created lazily so that a failed sign-in surfaces from
    authenticate() rather than from the first query.
    """

    def __init__(self, credential: TokenCredential, subscription_id: str) -> None:
        self._credential = credential
        self._subscription_id = subscription_id
        self._resource_client: ResourceManagementClient | None = None
        self._web_client: WebSiteManagementClient | None = None

    @property
    def subscription_id(self) -> str:
        return self._subscription_id

    def _resources(self) -> ResourceManagementClient:
        if self._resource_client is None:
            self._resource_client = ResourceManagementClient(
                credential=self._credential, subscription_id=self._subscription_id
            )
        return self._resource_client

    def _web(self) -> WebSiteManagementClient:
        if self._web_client is None:
            self._web_client = WebSiteManagementClient(
                credential=self._credential, subscription_id=self._subscription_id
            )
        return self._web_client

    def authenticate(self) -> None:
        try:
            self._credential.get_token(ARM_SCOPE)
        except ClientAuthenticationError as e:
            raise AuthenticationError(
                "Could not acquire an Azure access token. Sign in with "
                "`az login` or set AZURE_CLIENT_ID / AZURE_TENANT_ID / "
                f"AZURE_CLIENT_SECRET.\n{e}"
            ) from e
        logger.debug("Acquired ARM token for subscription %s", self._subscription_id)

    def find_app_service_environment(self, name: str) -> EnvironmentInfo | None:
        resource_filter = (
            f"resourceType eq '{HOSTING_ENVIRONMENT_TYPE}' and name eq '{name}'"
        )
        try:
            matches = list(self._resources().resources.list(filter=resource_filter))
        except AzureError as e:
            raise ResourceLookupError(
                f"Failed to search subscription {self._subscription_id} "
                f"for App Service Environment {name!r}: {e}"
            ) from e

        matches = [m for m in matches if (m.name or "").lower() == name.lower()]
        if not matches:
            return None
        if len(matches) > 1:
            logger.warning(
                "Found %d App Service Environments named %r, using %s",
                len(matches),
                name,
                matches[0].id,
            )

        generic = matches[0]
        resource_group = resource_group_from_id(generic.id)
        try:
            details = self._web().app_service_environments.get(
                resource_group, generic.name
            )
        except AzureError as e:
            raise ResourceLookupError(
                f"Failed to read App Service Environment {name!r} in "
                f"resource group {resource_group}: {e}"
            ) from e

        return EnvironmentInfo(
            name=generic.name,
            resource_group=resource_group,
            location=details.location or generic.location,
            kind=details.kind or generic.kind or None,
            resource_id=generic.id,
        )

    def region_supports_sku(self, region: str, sku: str) -> bool:
        try:
            geo_regions = list(self._web().list_geo_regions(sku=sku))
        except AzureError as e:
            raise ResourceLookupError(
                f"Failed to list regions offering {sku}: {e}"
            ) from e
        return any(regions_match(r.name or "", region) for r in geo_regions)
