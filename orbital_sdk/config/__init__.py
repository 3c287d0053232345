"""
Bootstrap configuration module.

Provides the settings and logging setup the configurator needs before
it can read the properties source.
"""

from orbital_sdk.config.settings import SDKSettings, LoggingConfig, get_settings
from orbital_sdk.config.logging_config import setup_logging, get_logger

__all__ = [
    "SDKSettings",
    "LoggingConfig",
    "get_settings",
    "setup_logging",
    "get_logger",
]
