"""Tests for tier selection and the lookup fallback policy."""

import logging

import pytest

from asmigrate.azure.base import EnvironmentInfo
from asmigrate.core.errors import ResourceLookupError, ResourceNotFoundError
from asmigrate.core.models import Tier
from asmigrate.core.tiers import resolve_target_tier, resolve_tier

from fakes import FakeLookup


def _ase(kind: str | None = "ASEV3", location: str = "East US") -> EnvironmentInfo:
    return EnvironmentInfo(
        name="my-ase",
        resource_group="ase-rg",
        location=location,
        kind=kind,
        resource_id="/subscriptions/x/resourceGroups/ase-rg/providers/Microsoft.Web/hostingEnvironments/my-ase",
    )


class TestResolveTier:
    @pytest.mark.parametrize(
        "has_ase,kind,p1v3,tier,capacity",
        [
            (True, "ASEV2", False, Tier.ISOLATED, 8),
            (True, "asev2", True, Tier.ISOLATED, 8),
            (True, "ASEV3", False, Tier.ISOLATED_V2, 16),
            (True, None, False, Tier.ISOLATED_V2, 16),
            (True, "", True, Tier.ISOLATED_V2, 16),
            (False, None, True, Tier.PREMIUM_V3, 16),
            (False, None, False, Tier.PREMIUM_V2, 8),
            (False, "ASEV2", False, Tier.PREMIUM_V2, 8),
        ],
    )
    def test_decision_table(self, has_ase, kind, p1v3, tier, capacity):
        decision = resolve_tier(has_ase, kind, p1v3)
        assert decision.tier == tier
        assert decision.sites_per_plan == capacity


class TestResolveTargetTier:
    def test_premium_v3_when_region_supports_it(self):
        lookup = FakeLookup(premium_v3_regions=["East US", "West Europe"])
        resolution = resolve_target_tier(lookup, "eastus")

        assert resolution.decision.tier == Tier.PREMIUM_V3
        assert resolution.decision.sites_per_plan == 16
        assert resolution.region == "eastus"
        assert resolution.environment is None
        assert resolution.warnings == []

    def test_premium_v2_when_region_lacks_premium_v3(self):
        lookup = FakeLookup(premium_v3_regions=["West Europe"])
        resolution = resolve_target_tier(lookup, "eastus")

        assert resolution.decision.tier == Tier.PREMIUM_V2
        assert resolution.decision.sites_per_plan == 8
        assert not resolution.used_fallback

    def test_sku_check_failure_falls_back_to_premium_v2(self, caplog):
        lookup = FakeLookup(sku_error=ResourceLookupError("throttled"))
        with caplog.at_level(logging.INFO, logger="asmigrate.core.tiers"):
            resolution = resolve_target_tier(lookup, "eastus")

        assert resolution.decision.tier == Tier.PREMIUM_V2
        assert resolution.decision.sites_per_plan == 8
        assert len(resolution.warnings) == 1
        assert "PremiumV2" in resolution.warnings[0]
        assert "throttled" in resolution.warnings[0]
        assert "PremiumV2" in caplog.text

    @pytest.mark.parametrize(
        "error", [RuntimeError("sdk blew up"), TypeError("unexpected keyword 'sku'")]
    )
    def test_unexpected_sku_check_error_falls_back_to_premium_v2(self, error):
        lookup = FakeLookup(sku_error=error)
        resolution = resolve_target_tier(lookup, "eastus")

        assert resolution.decision.tier == Tier.PREMIUM_V2
        assert resolution.decision.sites_per_plan == 8
        assert len(resolution.warnings) == 1
        assert str(error) in resolution.warnings[0]

    def test_fallback_warnings_not_logged_as_warnings(self, caplog):
        lookup = FakeLookup(sku_error=ResourceLookupError("throttled"))
        with caplog.at_level(logging.WARNING, logger="asmigrate.core.tiers"):
            resolution = resolve_target_tier(lookup, "eastus")

        assert resolution.warnings
        assert caplog.records == []

    def test_ase_v2_uses_isolated(self):
        lookup = FakeLookup(environments=[_ase(kind="ASEV2")])
        resolution = resolve_target_tier(lookup, "eastus", "my-ase")

        assert resolution.decision.tier == Tier.ISOLATED
        assert resolution.decision.sites_per_plan == 8
        assert resolution.environment.name == "my-ase"
        assert resolution.warnings == []

    def test_ase_skips_premium_v3_check(self):
        lookup = FakeLookup(environments=[_ase()])
        resolve_target_tier(lookup, "eastus", "my-ase")
        assert not any(call[0] == "region_supports_sku" for call in lookup.calls)

    def test_ase_v3_uses_isolated_v2(self):
        lookup = FakeLookup(environments=[_ase(kind="ASEV3")])
        resolution = resolve_target_tier(lookup, "eastus", "my-ase")

        assert resolution.decision.tier == Tier.ISOLATED_V2
        assert resolution.decision.sites_per_plan == 16

    def test_ase_unknown_kind_assumes_isolated_v2_with_warning(self):
        lookup = FakeLookup(environments=[_ase(kind=None)])
        resolution = resolve_target_tier(lookup, "eastus", "my-ase")

        assert resolution.decision.tier == Tier.ISOLATED_V2
        assert resolution.decision.sites_per_plan == 16
        assert len(resolution.warnings) == 1
        assert "Could not determine the version" in resolution.warnings[0]

    def test_missing_ase_is_fatal(self):
        lookup = FakeLookup(environments=[])
        with pytest.raises(ResourceNotFoundError, match="my-ase"):
            resolve_target_tier(lookup, "eastus", "my-ase")

    def test_ase_region_overrides_requested_region(self):
        lookup = FakeLookup(environments=[_ase(location="West Europe")])
        resolution = resolve_target_tier(lookup, "eastus", "my-ase")

        assert resolution.region == "West Europe"
        assert any("West Europe" in w and "eastus" in w for w in resolution.warnings)

    def test_same_region_in_other_spelling_is_not_overridden(self):
        lookup = FakeLookup(environments=[_ase(location="East US")])
        resolution = resolve_target_tier(lookup, "eastus", "my-ase")

        assert resolution.region == "eastus"
        assert resolution.warnings == []
