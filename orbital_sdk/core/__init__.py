"""
Core module containing the configurator and its building blocks.

This module provides:
- ConfigurationManager: the process-wide configurator singleton
- Extraction rules for deriving sub-configurations from properties
- Custom exceptions
"""

from orbital_sdk.core.exceptions import (
    OrbitalSDKError,
    InitializationError,
    ConfigurationError,
    ConfigurationConflictError,
    ProviderRegistrationError,
    TemplateNotFoundError,
)
from orbital_sdk.core.extractor import (
    ExtractionRule,
    TEMPLATE_RULE,
    SECURITY_PROVIDER_RULE,
    LOG_ROUTING_RULE,
    extract,
)
from orbital_sdk.core.configurator import ConfigurationManager

__all__ = [
    "ConfigurationManager",
    "ExtractionRule",
    "TEMPLATE_RULE",
    "SECURITY_PROVIDER_RULE",
    "LOG_ROUTING_RULE",
    "extract",
    "OrbitalSDKError",
    "InitializationError",
    "ConfigurationError",
    "ConfigurationConflictError",
    "ProviderRegistrationError",
    "TemplateNotFoundError",
]
