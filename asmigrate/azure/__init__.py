"""Azure collaborators: credentials and resource lookups.

Provides:
- ResourceLookup: interface consumed by the tier resolver
- get_resource_lookup(): build the ARM-backed lookup for a subscription
"""

from .base import (
    EnvironmentInfo,
    ResourceLookup,
    normalize_region,
    regions_match,
)


def get_resource_lookup(subscription_id: str, credential_mode: str = "default") -> ResourceLookup:
    """Create an ARM-backed ResourceLookup for a subscription.

    The Azure SDK modules are imported lazily to keep CLI start-up fast.
    """
    from .arm import ArmResourceLookup
    from .credentials import get_credential

    return ArmResourceLookup(get_credential(credential_mode), subscription_id)


__all__ = [
    "EnvironmentInfo",
    "ResourceLookup",
    "get_resource_lookup",
    "normalize_region",
    "regions_match",
]
