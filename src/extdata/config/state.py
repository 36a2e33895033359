"""
Unified configuration state for the collector.

This module provides a single source of truth for all application
configuration, combining YAML files with environment and command-line
overrides, type validation, and sensible defaults.
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from extdata.ingestion.config.value_objects import (
    DCR_LAUNCH_TIME,
    CollectorSettings,
    HttpClientConfig,
    SchedulerSettings,
)

logger = logging.getLogger(__name__)


# =============================================================================
# PYDANTIC MODELS - Type-Safe Configuration
# =============================================================================


class DatabaseConfig(BaseModel):
    """Database connection configuration."""

    model_config = ConfigDict(extra="allow")

    host: str = Field(default="localhost")
    port: int = Field(default=5432, ge=1, le=65535)
    user: str = Field(default="postgres")
    password: str = Field(default="")
    name: str = Field(default="extdata")
    pool_min_size: int = Field(default=1, ge=1)
    pool_max_size: int = Field(default=5, ge=1, le=100)
    command_timeout: float = Field(default=60.0, gt=0)


class LoggingConfig(BaseModel):
    """Logging configuration."""

    model_config = ConfigDict(extra="allow")

    level: str = Field(default="DEBUG")
    json_logs: bool = Field(default=False)
    quiet: bool = Field(default=False)

    @property
    def effective_level(self) -> str:
        """Quiet mode keeps only errors."""
        return "ERROR" if self.quiet else self.level.upper()


class CollectorConfig(BaseModel):
    """Source and cadence settings."""

    model_config = ConfigDict(extra="allow")

    epoch: int = Field(default=DCR_LAUNCH_TIME, ge=0)
    binance_limit: int = Field(default=1000, ge=1, le=1000)
    candle_period: int = Field(default=1800, ge=60)
    http_timeout: float = Field(default=300.0, gt=0)
    poll_interval: int = Field(default=1800, ge=1)
    poll_lead: int = Field(default=30, ge=0)
    safety_interval: int = Field(default=3600, ge=0)

    @field_validator("poll_lead")
    @classmethod
    def validate_lead(cls, v: int, info: ValidationInfo) -> int:
        interval = info.data.get("poll_interval")
        if interval is not None and v >= interval:
            raise ValueError("poll_lead must be shorter than poll_interval")
        return v


class SourcesConfig(BaseModel):
    """Enabled adapters per record family."""

    model_config = ConfigDict(extra="allow")

    exchange: list[str] = Field(default_factory=lambda: ["bleutrade", "binance"])
    pow: list[str] = Field(default_factory=lambda: ["luxor", "f2pool"])

    @field_validator("exchange", "pow")
    @classmethod
    def validate_unique(cls, v: list[str]) -> list[str]:
        names = [name.strip().lower() for name in v if name.strip()]
        if len(set(names)) != len(names):
            raise ValueError(f"Duplicate source names: {v}")
        return names


class ConfigState(BaseModel):
    """
    Root configuration state - single source of truth for all app config.
    """

    model_config = ConfigDict(extra="allow")

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    collector: CollectorConfig = Field(default_factory=CollectorConfig)
    sources: SourcesConfig = Field(default_factory=SourcesConfig)

    # Administrative reset: drop both tables and exit without collecting
    drop_tables: bool = Field(default=False)

    env: str = Field(default="dev")
    config_dir: str = Field(default="./config")

    def collector_settings(self) -> CollectorSettings:
        return CollectorSettings(
            epoch=self.collector.epoch,
            binance_limit=self.collector.binance_limit,
            candle_period=self.collector.candle_period,
        )

    def scheduler_settings(self) -> SchedulerSettings:
        return SchedulerSettings(
            poll_interval=self.collector.poll_interval,
            poll_lead=self.collector.poll_lead,
        )

    def http_config(self) -> HttpClientConfig:
        return HttpClientConfig(timeout=self.collector.http_timeout)


# =============================================================================
# CONFIG LOADER - Clean, Validated Loading
# =============================================================================

_TRUE_VALUES = {"1", "true", "yes", "on"}

# (env var, section, key)
_ENV_OVERRIDES = [
    ("EXTDATA_DB_HOST", "database", "host"),
    ("EXTDATA_DB_PORT", "database", "port"),
    ("EXTDATA_DB_USER", "database", "user"),
    ("EXTDATA_DB_PASS", "database", "password"),
    ("EXTDATA_DB_NAME", "database", "name"),
    ("LOG_LEVEL", "logging", "level"),
]


class ConfigLoader:
    """
    Load and validate configuration.

    Merges, in increasing precedence:
      1. Global defaults (model defaults)
      2. <config_dir>/extdata.yaml
      3. <config_dir>/env/<EXTDATA_ENV>.yaml
      4. Environment variable overrides
      5. Explicit overrides (command line)
    """

    def __init__(self, config_dir: str | None = None):
        self.config_dir = Path(config_dir or os.getenv("EXTDATA_CONFIG_DIR", "./config"))
        self.env = os.getenv("EXTDATA_ENV", "dev")

    def _load_yaml(self, path: Path) -> dict[str, Any]:
        """Load a YAML mapping; a missing file is an empty mapping."""
        if not path.exists():
            logger.debug(f"Config file not found (using defaults): {path}")
            return {}

        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"{path} must contain a mapping, got {type(data).__name__}")
        logger.debug(f"Loaded config: {path}")
        return data

    def _apply_env_overrides(self, config: dict[str, Any]) -> dict[str, Any]:
        """Apply environment variable overrides to config."""
        for var, section, key in _ENV_OVERRIDES:
            if (value := os.getenv(var)) is not None:
                config.setdefault(section, {})[key] = value

        if (quiet := os.getenv("EXTDATA_QUIET")) is not None:
            config.setdefault("logging", {})["quiet"] = quiet.strip().lower() in _TRUE_VALUES

        return config

    def _merge_dicts(self, base: dict, override: dict) -> dict:
        """Deep merge override into base dict."""
        result = base.copy()
        for key, value in override.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = self._merge_dicts(result[key], value)
            else:
                result[key] = value
        return result

    def load(self, overrides: dict[str, Any] | None = None) -> ConfigState:
        """
        Load complete configuration state.

        Args:
            overrides: Nested mapping applied last (e.g. parsed CLI flags)

        Returns:
            ConfigState: Validated configuration object

        Raises:
            ValidationError: If configuration is invalid
        """
        config = self._load_yaml(self.config_dir / "extdata.yaml")
        config = self._merge_dicts(
            config, self._load_yaml(self.config_dir / "env" / f"{self.env}.yaml")
        )
        config = self._apply_env_overrides(config)
        config.pop("env", None)
        config.pop("config_dir", None)
        if overrides:
            config = self._merge_dicts(config, overrides)

        state = ConfigState(env=self.env, config_dir=str(self.config_dir), **config)
        logger.debug(
            f"Configuration loaded: db={state.database.host}:{state.database.port}/"
            f"{state.database.name}, exchange={state.sources.exchange}, "
            f"pow={state.sources.pow}"
        )
        return state


def get_config(
    config_dir: str | None = None, overrides: dict[str, Any] | None = None
) -> ConfigState:
    """
    Load and return the configuration state.

    Args:
        config_dir: Override config directory. Defaults to $EXTDATA_CONFIG_DIR or ./config
        overrides: Nested mapping applied after files and environment

    Returns:
        ConfigState: Validated configuration object
    """
    return ConfigLoader(config_dir=config_dir).load(overrides)


__all__ = [
    "CollectorConfig",
    "ConfigLoader",
    "ConfigState",
    "DatabaseConfig",
    "LoggingConfig",
    "SourcesConfig",
    "get_config",
]
