"""Credential selection for Azure Resource Manager access."""

from azure.core.credentials import TokenCredential
from azure.identity import AzureCliCredential, DefaultAzureCredential


def get_credential(mode: str = "default") -> TokenCredential:
    """Create a credential for the given mode.

    - "cli": AzureCliCredential, reuses an existing `az login` session.
    - "default": DefaultAzureCredential (env vars, workload identity, CLI, ...).
      Managed identity is excluded; it rarely exists where migrations run
      and its probe slows sign-in down.
    """
    if mode == "cli":
        return AzureCliCredential()
    if mode == "default":
        return DefaultAzureCredential(exclude_managed_identity_credential=True)
    raise ValueError(f"Unknown credential mode: {mode!r}. Expected 'default' or 'cli'")
