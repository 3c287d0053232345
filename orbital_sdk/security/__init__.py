"""
Security providers.

Provides:
- SecurityProvider: capability interface
- Built-in providers (hashlib digests, HMAC, TLS)
- SecurityProviderRegistry and the process-wide provider catalog
"""

from orbital_sdk.security.providers import (
    SecurityProvider,
    HashlibProvider,
    HmacProvider,
    TLSProvider,
)
from orbital_sdk.security.registry import (
    PROVIDER_FACTORIES,
    SecurityProviderCatalog,
    SecurityProviderRegistry,
    get_provider_catalog,
    register_provider_factory,
    unregister_provider_factory,
)

__all__ = [
    "SecurityProvider",
    "HashlibProvider",
    "HmacProvider",
    "TLSProvider",
    "PROVIDER_FACTORIES",
    "SecurityProviderCatalog",
    "SecurityProviderRegistry",
    "get_provider_catalog",
    "register_provider_factory",
    "unregister_provider_factory",
]
