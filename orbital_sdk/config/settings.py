"""
Bootstrap settings management.

Provides the settings the configurator itself needs before it can read
the properties source:
- Where the properties source and templates live
- Which keys are sensitive
- How SDK-created loggers are set up

Settings are taken from defaults, an optional YAML file and
environment variables (prefixed with ORBITAL_SDK_).
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CONFIG_SOURCE = "config/linehandler.properties"
DEFAULT_RESOURCE_PACKAGE = "orbital_sdk.resources"
DEFAULT_SENSITIVE_KEYS = ["OrbitalConnectionPassword"]


class LoggingConfig(BaseModel):
    """Configuration for SDK-created loggers."""

    log_level: str = "INFO"
    log_file: Optional[str] = None
    json_format: bool = False
    use_colors: bool = True

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()


class SDKSettings(BaseSettings):
    """
    Settings for bootstrapping the configurator.

    Configuration is loaded from:
    1. Default values
    2. YAML settings file
    3. Environment variables (prefixed with ORBITAL_SDK_)
    """

    model_config = SettingsConfigDict(
        env_prefix="ORBITAL_SDK_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    config_source: str = DEFAULT_CONFIG_SOURCE
    resource_package: str = DEFAULT_RESOURCE_PACKAGE
    resource_dir: Optional[str] = None
    encoding: str = "iso-8859-1"
    sensitive_keys: List[str] = Field(
        default_factory=lambda: list(DEFAULT_SENSITIVE_KEYS)
    )
    engine_logger_name: str = "engineLogger"
    ecommerce_logger_name: str = "eCommerceLogger"
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("config_source")
    @classmethod
    def validate_config_source(cls, v: str) -> str:
        """Validate the default source is a non-blank identifier."""
        if not v or not v.strip():
            raise ValueError("config_source must be a non-empty string")
        return v.strip()

    @field_validator("encoding")
    @classmethod
    def validate_encoding(cls, v: str) -> str:
        """Validate the encoding is known to the codec registry."""
        import codecs

        try:
            codecs.lookup(v)
        except LookupError as e:
            raise ValueError(f"Unknown encoding: {v}") from e
        return v

    @classmethod
    def from_yaml(cls, path: str) -> "SDKSettings":
        """
        Load settings from a YAML file.

        Args:
            path: Path to YAML settings file.

        Returns:
            SDKSettings instance with loaded values.

        Raises:
            FileNotFoundError: If the settings file doesn't exist.
            ValueError: If the settings are invalid.
        """
        settings_path = Path(path)
        if not settings_path.is_file():
            raise FileNotFoundError(f"Settings file not found: {path}")

        with open(settings_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ValueError(f"Settings file must contain a mapping: {path}")

        return cls(**data)

    def to_yaml(self, path: str) -> None:
        """
        Save settings to a YAML file.

        Args:
            path: Path to save settings.
        """
        settings_path = Path(path)
        settings_path.parent.mkdir(parents=True, exist_ok=True)

        with open(settings_path, "w", encoding="utf-8") as f:
            yaml.dump(
                self.model_dump(),
                f,
                default_flow_style=False,
                sort_keys=False,
            )


def find_settings_file() -> Optional[str]:
    """
    Find a settings file in standard locations.

    Returns:
        Path to settings file or None if not found.
    """
    search_paths = [
        os.environ.get("ORBITAL_SDK_SETTINGS"),
        "./orbital_sdk.yaml",
        "./orbital_sdk.yml",
        str(Path.home() / ".config" / "orbital_sdk" / "settings.yaml"),
    ]

    for path in search_paths:
        if path and Path(path).is_file():
            return path

    return None


@lru_cache
def get_settings(settings_path: Optional[str] = None) -> SDKSettings:
    """
    Get settings singleton.

    Args:
        settings_path: Optional path to a YAML settings file.

    Returns:
        SDKSettings instance.
    """
    if settings_path is None:
        settings_path = find_settings_file()

    if settings_path:
        return SDKSettings.from_yaml(settings_path)

    return SDKSettings()
