"""
Orbital SDK Configurator - process-wide configuration for the Orbital
payment-processing client SDK.

Loads the linehandler properties source once per process, installs the
declared security providers, materializes the XML request templates and
exposes the result through a lock-guarded singleton.
"""

__version__ = "1.0.0"
__license__ = "MIT"

from orbital_sdk.core.configurator import (
    ConfigurationManager,
    get_configuration_manager,
    reset_configuration_manager,
)
from orbital_sdk.core.exceptions import (
    OrbitalSDKError,
    InitializationError,
    ConfigurationError,
    ConfigurationConflictError,
    ProviderRegistrationError,
    TemplateNotFoundError,
)

__all__ = [
    "ConfigurationManager",
    "get_configuration_manager",
    "reset_configuration_manager",
    "OrbitalSDKError",
    "InitializationError",
    "ConfigurationError",
    "ConfigurationConflictError",
    "ProviderRegistrationError",
    "TemplateNotFoundError",
]
