"""
User settings for glove80-flash.

Settings are resolved from several sources:
1. Command-line options (applied on top, see ``FlashSettings.to_flash_config``)
2. Environment variables prefixed with ``GLOVE80_FLASH_``
3. The first config file found on the search path
4. Default values
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from glove80_flash.config.defaults import (
    DEFAULT_DEVICE_TIMEOUT,
    DEFAULT_FIRMWARE_PATH,
    DEFAULT_POLL_INTERVAL,
    DEFAULT_REMOVAL_POLL_INTERVAL,
    DEFAULT_SETTLE_DELAY,
    default_halves,
)
from glove80_flash.config.models import FlashConfig
from glove80_flash.core.errors import ConfigError
from glove80_flash.core.structlog_logger import get_struct_logger
from glove80_flash.models.half import HalfSpec


logger = get_struct_logger(__name__)

ENV_PREFIX = "GLOVE80_FLASH_"
CONFIG_DIR_NAME = "glove80-flash"
VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class FlashSettings(BaseSettings):
    """Settings with automatic environment variable support.

    Precedence order (highest to lowest):
    1. Environment variables
    2. Constructor arguments (config file data)
    3. Default values
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="forbid",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: Any,
        env_settings: Any,
        dotenv_settings: Any,
        file_secret_settings: Any,
    ) -> tuple[Any, ...]:
        """Environment variables override config file values."""
        return (env_settings, init_settings)

    firmware_path: Path = DEFAULT_FIRMWARE_PATH
    device_timeout: float = Field(default=DEFAULT_DEVICE_TIMEOUT, gt=0)
    poll_interval: float = Field(default=DEFAULT_POLL_INTERVAL, gt=0)
    removal_poll_interval: float = Field(default=DEFAULT_REMOVAL_POLL_INTERVAL, gt=0)
    settle_delay: float = Field(default=DEFAULT_SETTLE_DELAY, ge=0)
    removal_timeout: float | None = Field(default=None, gt=0)
    halves: list[HalfSpec] = Field(default_factory=default_halves, min_length=1)

    log_level: str = "WARNING"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is recognized."""
        upper_v = v.strip().upper()
        if upper_v not in VALID_LOG_LEVELS:
            raise ValueError(f"Log level must be one of {VALID_LOG_LEVELS}")
        return upper_v

    def get_log_level_int(self) -> int:
        """Get log level as integer for logging module."""
        return int(getattr(logging, self.log_level, logging.WARNING))

    def to_flash_config(self, **overrides: Any) -> FlashConfig:
        """Build the immutable run configuration.

        Args:
            **overrides: Values from the command line; ``None`` means "not given"

        Raises:
            ConfigError: If the combined values are invalid
        """
        data = self.model_dump(exclude={"log_level"})
        data.update({k: v for k, v in overrides.items() if v is not None})
        try:
            return FlashConfig(**data)
        except ValidationError as e:
            raise ConfigError(f"Invalid flash configuration: {e}") from e


def generate_config_paths(cli_config_path: str | Path | None = None) -> list[Path]:
    """Generate a list of config paths to search in order of precedence."""
    config_paths = []

    if cli_config_path:
        config_paths.append(Path(cli_config_path).expanduser().resolve())

    config_paths.extend(
        [Path.cwd() / "glove80-flash.yaml", Path.cwd() / ".glove80-flash.yml"]
    )

    xdg_config_home = os.environ.get("XDG_CONFIG_HOME")
    config_home = (
        Path(xdg_config_home) if xdg_config_home else Path.home() / ".config"
    )
    config_paths.extend(
        [
            config_home / CONFIG_DIR_NAME / "config.yaml",
            config_home / CONFIG_DIR_NAME / "config.yml",
        ]
    )

    return config_paths


def read_config_file(path: Path) -> dict[str, Any]:
    """Read a YAML config file into a mapping.

    Raises:
        ConfigError: If the file cannot be read or is not a YAML mapping
    """
    try:
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Could not read config file {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")
    return data


def search_config_files(paths: list[Path]) -> tuple[dict[str, Any], Path | None]:
    """Load the first existing config file among ``paths``."""
    for path in paths:
        if path.is_file():
            return read_config_file(path), path
    return {}, None


def load_settings(cli_config_path: str | Path | None = None) -> FlashSettings:
    """Resolve settings from config files and environment variables.

    Args:
        cli_config_path: Config file given on the command line; must exist

    Raises:
        ConfigError: If the config file is missing, unreadable or invalid
    """
    if cli_config_path and not Path(cli_config_path).expanduser().is_file():
        raise ConfigError(f"Config file not found: {cli_config_path}")

    config_data, found_path = search_config_files(
        generate_config_paths(cli_config_path)
    )
    if found_path:
        logger.debug("config_file_loaded", path=str(found_path))
    else:
        logger.debug("no_config_file_found")

    try:
        return FlashSettings(**config_data)
    except ValidationError as e:
        source = found_path or "environment"
        raise ConfigError(f"Invalid configuration from {source}: {e}") from e
