"""Configuration management for asmigrate.

Three config zones:
- defaults: output path and App Service Plan worker sizing
- azure: how credentials are acquired
- telemetry: local event ledger settings

Config resolution order (highest priority first):
1. Programmatic (AsmigrateConfig constructed in code)
2. Environment variables (ASMIGRATE_OUTPUT_PATH, ASMIGRATE_WORKER_COUNT, etc.)
3. Config file (~/.config/asmigrate/config.json, managed by `asmigrate config`)
4. Hardcoded defaults

The pipeline never reads the global config itself: the CLI loads it once and
passes it in.
"""

import json
import logging
import os
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any

from dotenv import find_dotenv, load_dotenv


logger = logging.getLogger(__name__)


# =============================================================================
# Config file location
# =============================================================================

CONFIG_DIR = Path.home() / ".config" / "asmigrate"
CONFIG_FILE = CONFIG_DIR / "config.json"

CREDENTIAL_MODES = ("default", "cli")


# =============================================================================
# Config dataclasses
# =============================================================================


@dataclass
class DefaultsConfig:
    """Defaults applied to every generated App Service Plan."""

    output_path: str = "MigrationSettings.json"
    worker_count: int = 1
    worker_size: str = "Small"


@dataclass
class AzureConfig:
    """Azure sign-in settings.

    - credential: "default" (DefaultAzureCredential) or "cli" (AzureCliCredential)
    """

    credential: str = "default"


@dataclass
class TelemetryConfig:
    """Local telemetry ledger settings."""

    enabled: bool = True
    ledger_path: str = ""  # empty = ~/.config/asmigrate/telemetry.db


@dataclass
class AsmigrateConfig:
    """Top-level asmigrate configuration.

    Examples:
        # Package use, no files needed
        config = AsmigrateConfig(defaults=DefaultsConfig(worker_size="Medium"))

        # CLI use, loads from ~/.config/asmigrate/config.json
        config = AsmigrateConfig.load()
    """

    defaults: DefaultsConfig = field(default_factory=DefaultsConfig)
    azure: AzureConfig = field(default_factory=AzureConfig)
    telemetry: TelemetryConfig = field(default_factory=TelemetryConfig)

    @classmethod
    def load(cls) -> "AsmigrateConfig":
        """Load config from file + env vars.

        Priority: env var values > config.json values > defaults.
        """
        config = cls()

        # Layer 1: Load from config file if it exists
        if CONFIG_FILE.exists():
            try:
                with open(CONFIG_FILE) as f:
                    data = json.load(f)
                _apply_dict(config, data)
            except (json.JSONDecodeError, OSError) as exc:
                logger.warning("Failed to load config from %s: %s", CONFIG_FILE, exc)

        # Layer 2: Env var overrides
        _ensure_dotenv()
        if val := os.environ.get("ASMIGRATE_OUTPUT_PATH"):
            config.defaults.output_path = val
        if val := os.environ.get("ASMIGRATE_WORKER_COUNT"):
            try:
                config.defaults.worker_count = coerce_value("worker_count", val)
            except ValueError:
                logger.warning("Invalid ASMIGRATE_WORKER_COUNT=%r, ignoring", val)
        if val := os.environ.get("ASMIGRATE_WORKER_SIZE"):
            config.defaults.worker_size = val
        if val := os.environ.get("ASMIGRATE_CREDENTIAL"):
            if val in CREDENTIAL_MODES:
                config.azure.credential = val
            else:
                logger.warning("Invalid ASMIGRATE_CREDENTIAL=%r, ignoring", val)
        if val := os.environ.get("ASMIGRATE_TELEMETRY"):
            config.telemetry.enabled = _parse_bool(val)
        if val := os.environ.get("ASMIGRATE_TELEMETRY_LEDGER"):
            config.telemetry.ledger_path = val

        return config

    def save(self) -> None:
        """Save config to ~/.config/asmigrate/config.json."""
        CONFIG_DIR.mkdir(parents=True, exist_ok=True)
        with open(CONFIG_FILE, "w") as f:
            json.dump(self.to_dict(), f, indent=2)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for display."""
        return {
            "defaults": asdict(self.defaults),
            "azure": asdict(self.azure),
            "telemetry": asdict(self.telemetry),
        }

    @property
    def ledger_path_resolved(self) -> Path:
        """Resolve the telemetry ledger path."""
        if self.telemetry.ledger_path:
            return Path(self.telemetry.ledger_path).expanduser()
        return CONFIG_DIR / "telemetry.db"


# =============================================================================
# Config dict application
# =============================================================================

INT_FIELDS = {"worker_count"}
BOOL_FIELDS = {"enabled"}


def _parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("1", "true", "yes", "on")


def coerce_value(field_name: str, value: Any) -> Any:
    """Coerce a raw config value to the type its field expects.

    Raises:
        ValueError: If an integer field receives a non-integer value or a
            value below 1.
    """
    if field_name in INT_FIELDS:
        number = int(value)
        if number < 1:
            raise ValueError(f"{field_name} must be at least 1, got {number}")
        return number
    if field_name in BOOL_FIELDS:
        return _parse_bool(value)
    return value


def _apply_dict(config: AsmigrateConfig, data: dict) -> None:
    """Apply a dict of values onto an AsmigrateConfig."""
    zones = {
        "defaults": config.defaults,
        "azure": config.azure,
        "telemetry": config.telemetry,
    }
    for zone_name, target in zones.items():
        zone = data.get(zone_name)
        if not isinstance(zone, dict):
            continue
        for k, v in zone.items():
            if not hasattr(target, k):
                continue
            try:
                setattr(target, k, coerce_value(k, v))
            except (TypeError, ValueError):
                logger.warning("Invalid %s.%s=%r in config file, ignoring", zone_name, k, v)


# =============================================================================
# .env loading
# =============================================================================

_dotenv_loaded = False


def _ensure_dotenv() -> None:
    """Load .env file into os.environ if not already loaded."""
    global _dotenv_loaded
    if not _dotenv_loaded:
        _dotenv_loaded = True
        dotenv_path = find_dotenv(usecwd=True)
        if dotenv_path:
            load_dotenv(dotenv_path=dotenv_path, override=False)


# =============================================================================
# Global config instance (CLI only)
# =============================================================================

_config: AsmigrateConfig | None = None


def get_config() -> AsmigrateConfig:
    """Get the CLI's AsmigrateConfig instance.

    First call loads from file + env vars. Subsequent calls return cached instance.
    """
    global _config
    if _config is None:
        _config = AsmigrateConfig.load()
    return _config


def configure(config: AsmigrateConfig) -> None:
    """Set the CLI's AsmigrateConfig programmatically."""
    global _config
    _config = config


def reset_config() -> None:
    """Reset the cached config (forces reload on next get_config())."""
    global _config
    _config = None
