"""Tests for config loading, env overrides, and persistence."""

import json

from asmigrate import config as config_module
from asmigrate.config import AsmigrateConfig, get_config, configure, reset_config


def test_defaults():
    config = AsmigrateConfig.load()
    assert config.defaults.output_path == "MigrationSettings.json"
    assert config.defaults.worker_count == 1
    assert config.defaults.worker_size == "Small"
    assert config.azure.credential == "default"
    assert config.telemetry.enabled is True


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("ASMIGRATE_OUTPUT_PATH", "out/settings.json")
    monkeypatch.setenv("ASMIGRATE_WORKER_COUNT", "3")
    monkeypatch.setenv("ASMIGRATE_WORKER_SIZE", "Large")
    monkeypatch.setenv("ASMIGRATE_CREDENTIAL", "cli")
    monkeypatch.setenv("ASMIGRATE_TELEMETRY", "false")

    config = AsmigrateConfig.load()
    assert config.defaults.output_path == "out/settings.json"
    assert config.defaults.worker_count == 3
    assert config.defaults.worker_size == "Large"
    assert config.azure.credential == "cli"
    assert config.telemetry.enabled is False


def test_invalid_env_values_ignored(monkeypatch, caplog):
    monkeypatch.setenv("ASMIGRATE_WORKER_COUNT", "many")
    monkeypatch.setenv("ASMIGRATE_CREDENTIAL", "browser")

    config = AsmigrateConfig.load()
    assert config.defaults.worker_count == 1
    assert config.azure.credential == "default"
    assert "ASMIGRATE_WORKER_COUNT" in caplog.text
    assert "ASMIGRATE_CREDENTIAL" in caplog.text


def test_non_positive_worker_count_ignored(monkeypatch, caplog):
    monkeypatch.setenv("ASMIGRATE_WORKER_COUNT", "0")
    assert AsmigrateConfig.load().defaults.worker_count == 1
    assert "ASMIGRATE_WORKER_COUNT" in caplog.text

    monkeypatch.delenv("ASMIGRATE_WORKER_COUNT")
    config_module.CONFIG_DIR.mkdir(parents=True)
    config_module.CONFIG_FILE.write_text(json.dumps({"defaults": {"worker_count": 0}}))
    assert AsmigrateConfig.load().defaults.worker_count == 1
    assert "defaults.worker_count" in caplog.text


def test_file_then_env_priority(monkeypatch):
    config_module.CONFIG_DIR.mkdir(parents=True)
    config_module.CONFIG_FILE.write_text(
        json.dumps(
            {
                "defaults": {"worker_size": "Medium", "worker_count": "2"},
                "telemetry": {"enabled": False},
            }
        )
    )
    monkeypatch.setenv("ASMIGRATE_WORKER_SIZE", "Large")

    config = AsmigrateConfig.load()
    assert config.defaults.worker_size == "Large"
    assert config.defaults.worker_count == 2
    assert config.telemetry.enabled is False


def test_corrupt_config_file_falls_back_to_defaults(caplog):
    config_module.CONFIG_DIR.mkdir(parents=True)
    config_module.CONFIG_FILE.write_text("{broken")

    config = AsmigrateConfig.load()
    assert config.defaults.worker_size == "Small"
    assert "Failed to load config" in caplog.text


def test_save_and_reload():
    config = AsmigrateConfig()
    config.defaults.worker_size = "Medium"
    config.azure.credential = "cli"
    config.save()

    reloaded = AsmigrateConfig.load()
    assert reloaded.defaults.worker_size == "Medium"
    assert reloaded.azure.credential == "cli"


def test_ledger_path_default_and_override(tmp_path):
    config = AsmigrateConfig()
    assert config.ledger_path_resolved == config_module.CONFIG_DIR / "telemetry.db"

    config.telemetry.ledger_path = str(tmp_path / "custom.db")
    assert config.ledger_path_resolved == tmp_path / "custom.db"


def test_configure_and_reset():
    custom = AsmigrateConfig()
    custom.defaults.worker_count = 4
    configure(custom)
    assert get_config() is custom

    reset_config()
    assert get_config() is not custom
