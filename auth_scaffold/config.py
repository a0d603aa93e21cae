"""Application configuration loaded from a TOML/YAML/JSON file with environment overlay."""

import json
import logging
import os
import tomllib
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigError

logger = logging.getLogger(__name__)

# Configuration file path, extension optional
CONFIG_FILE = Path("./config")
CONFIG_FILE_ENV = "AUTH_CONFIG_FILE"

# Tried in order when the configured path has no matching file
CONFIG_EXTENSIONS = (".toml", ".yaml", ".yml", ".json")


class AppSettings(BaseModel):
    """Application settings."""

    env: str = Field("development", description="Application environment")
    prefix: str = Field(..., description="Prefix for environment variables")
    env_file_path: str = Field(".env", description="Path to the environment file")


class ValidationConfig(BaseModel):
    """Environment validation behaviour."""

    strict_unknown: bool = Field(
        False, description="Fail on undeclared variables under the prefix"
    )
    override_existing: bool = Field(
        False, description="Let the environment file replace variables already set"
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field("INFO", description="Logging level")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level: {v}")
        return v.upper()


class Settings(BaseSettings):
    """Unified settings for the auth service."""

    app: AppSettings
    validation: ValidationConfig = Field(default_factory=ValidationConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = SettingsConfigDict(
        env_prefix="AUTH_",
        env_nested_delimiter="__",  # Allows AUTH_APP__PREFIX env var
        extra="ignore",
        validate_default=True,
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        """File values arrive as init kwargs; environment variables override them."""
        # Precedence (left to right - first source wins):
        # env > config file > defaults
        return (env_settings, init_settings, file_secret_settings)

    @classmethod
    def from_file(cls, config_file: Optional[Union[str, Path]] = None) -> "Settings":
        """Load settings from ``config_file`` (or the default location)."""
        path = resolve_config_path(config_file)
        data = read_config_file(path)

        try:
            settings = cls(**data)
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration in {path}: {e}", e) from e

        logger.debug(f"Loaded configuration from {path}")
        return settings


def resolve_config_path(config_file: Optional[Union[str, Path]] = None) -> Path:
    """Find the configuration file.

    The explicit argument wins over ``AUTH_CONFIG_FILE``, which wins over the
    default ``./config``. A path that does not exist as given is retried with
    each supported extension appended.
    """
    if config_file is None:
        config_file = os.getenv(CONFIG_FILE_ENV, str(CONFIG_FILE))
    path = Path(config_file)

    if path.is_file():
        return path

    for extension in CONFIG_EXTENSIONS:
        candidate = path.with_name(path.name + extension)
        if candidate.is_file():
            return candidate

    raise ConfigError(f"Configuration file is missing: {path}")


def read_config_file(path: Path) -> Dict[str, Any]:
    """Parse a configuration file according to its extension (default TOML)."""
    suffix = path.suffix.lower()

    try:
        if suffix in (".yaml", ".yml"):
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        elif suffix == ".json":
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        else:
            with open(path, "rb") as f:
                data = tomllib.load(f)
    except OSError as e:
        raise ConfigError(f"Failed to read configuration file {path}: {e}", e) from e
    except (tomllib.TOMLDecodeError, yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigError(f"Failed to parse configuration file {path}: {e}", e) from e

    if not isinstance(data, dict):
        raise ConfigError(f"Configuration file {path} must contain a mapping")

    # Handle None values from YAML (e.g., "logging:" with no content)
    for key in list(data.keys()):
        if data[key] is None:
            data[key] = {}

    return data


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings.from_file()


def load_settings(config_file: Optional[Union[str, Path]] = None) -> Settings:
    """Settings for ``config_file``, or the cached default-location settings."""
    if config_file is None:
        return get_settings()
    return Settings.from_file(config_file)
