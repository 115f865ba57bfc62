"""Shared fixtures: isolated config, fake Azure lookup, package-results files."""

import pytest

from asmigrate import config as config_module

from fakes import FakeLookup, make_records, write_package_results


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point config and telemetry at tmp_path and ignore ambient env vars."""
    config_dir = tmp_path / "config"
    monkeypatch.setattr(config_module, "CONFIG_DIR", config_dir)
    monkeypatch.setattr(config_module, "CONFIG_FILE", config_dir / "config.json")
    monkeypatch.setattr(config_module, "_dotenv_loaded", True)
    for var in (
        "ASMIGRATE_OUTPUT_PATH",
        "ASMIGRATE_WORKER_COUNT",
        "ASMIGRATE_WORKER_SIZE",
        "ASMIGRATE_CREDENTIAL",
        "ASMIGRATE_TELEMETRY",
        "ASMIGRATE_TELEMETRY_LEDGER",
        "AZURE_SUBSCRIPTION_ID",
    ):
        monkeypatch.delenv(var, raising=False)
    config_module.reset_config()
    yield
    config_module.reset_config()


@pytest.fixture
def fake_lookup():
    return FakeLookup(premium_v3_regions=["East US"])


@pytest.fixture
def package_results(tmp_path):
    return write_package_results(
        tmp_path / "data" / "PackageResults.json", make_records(20)
    )
