"""
Security provider registry.

Provider identifiers from the properties source are looked up in a
static factory table; nothing is imported by name at runtime. Created
providers are installed in the process-wide SecurityProviderCatalog,
which the configurator does not own and never rolls back.
"""

from __future__ import annotations

import threading
from typing import Any, Callable, Dict, Iterable, List, Optional

from orbital_sdk.config.logging_config import get_logger
from orbital_sdk.core.exceptions import ProviderRegistrationError
from orbital_sdk.security.providers import (
    HashlibProvider,
    HmacProvider,
    SecurityProvider,
    TLSProvider,
)

logger = get_logger(__name__)

ProviderFactory = Callable[[], Any]

# Identifiers accepted in security.provider<suffix> properties
PROVIDER_FACTORIES: Dict[str, ProviderFactory] = {
    "orbital_sdk.security.HashlibProvider": HashlibProvider,
    "orbital_sdk.security.HmacProvider": HmacProvider,
    "orbital_sdk.security.TLSProvider": TLSProvider,
    # Names used by older linehandler.properties files
    "sun.security.provider.Sun": HashlibProvider,
    "com.sun.net.ssl.internal.ssl.Provider": TLSProvider,
}

_factories_lock = threading.Lock()


def register_provider_factory(
    identifier: str, factory: Optional[ProviderFactory] = None
) -> Any:
    """
    Add a provider factory to the static table.

    Usable directly or as a class decorator::

        @register_provider_factory("com.example.FooProvider")
        class FooProvider(SecurityProvider):
            ...

    Args:
        identifier: Identifier used in the properties source.
        factory: Zero-argument callable returning a SecurityProvider.

    Returns:
        The factory, or a decorator when ``factory`` is omitted.
    """
    def _register(target: ProviderFactory) -> ProviderFactory:
        with _factories_lock:
            if identifier in PROVIDER_FACTORIES:
                logger.warning(f"Overriding existing provider factory: {identifier}")
            PROVIDER_FACTORIES[identifier] = target
        return target

    if factory is None:
        return _register
    return _register(factory)


def unregister_provider_factory(identifier: str) -> None:
    """Remove a provider factory from the static table, if present."""
    with _factories_lock:
        PROVIDER_FACTORIES.pop(identifier, None)


class SecurityProviderCatalog:
    """
    Ordered, process-wide list of installed security providers.

    Providers are unique by name; adding a second provider with an
    installed name is a no-op.
    """

    def __init__(self) -> None:
        self._providers: List[SecurityProvider] = []
        self._lock = threading.Lock()

    def add_provider(self, provider: SecurityProvider) -> int:
        """
        Install a provider at the end of the list.

        Args:
            provider: Provider instance.

        Returns:
            1-based position of the provider, or -1 if a provider with the
            same name was already installed.
        """
        with self._lock:
            if any(p.name == provider.name for p in self._providers):
                return -1
            self._providers.append(provider)
            return len(self._providers)

    def get_provider(self, name: str) -> Optional[SecurityProvider]:
        """Return the installed provider called ``name``, if any."""
        with self._lock:
            for provider in self._providers:
                if provider.name == name:
                    return provider
        return None

    def find(self, algorithm: str) -> Optional[SecurityProvider]:
        """Return the first installed provider offering ``algorithm``."""
        with self._lock:
            for provider in self._providers:
                if provider.supports(algorithm):
                    return provider
        return None

    def providers(self) -> List[SecurityProvider]:
        """Return the installed providers in preference order."""
        with self._lock:
            return list(self._providers)

    def remove_provider(self, name: str) -> None:
        """Uninstall the provider called ``name``, if installed."""
        with self._lock:
            self._providers = [p for p in self._providers if p.name != name]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.get_provider(name) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._providers)


_catalog = SecurityProviderCatalog()


def get_provider_catalog() -> SecurityProviderCatalog:
    """
    Get the process-wide provider catalog.

    Returns:
        Global SecurityProviderCatalog.
    """
    return _catalog


class SecurityProviderRegistry:
    """
    Creates providers from identifiers and installs them in a catalog.

    The registry keeps no record of what it installed; repeated
    registrations rely on the catalog's de-duplication by name.
    """

    def __init__(
        self,
        factories: Optional[Dict[str, ProviderFactory]] = None,
        catalog: Optional[SecurityProviderCatalog] = None,
    ) -> None:
        """
        Initialize the registry.

        Args:
            factories: Identifier -> factory table (defaults to the static table).
            catalog: Catalog to install into (defaults to the global one).
        """
        self.factories = PROVIDER_FACTORIES if factories is None else factories
        self.catalog = get_provider_catalog() if catalog is None else catalog

    def create(self, identifier: str) -> SecurityProvider:
        """
        Create a provider instance without installing it.

        Args:
            identifier: Provider identifier.

        Returns:
            SecurityProvider instance.

        Raises:
            ProviderRegistrationError: If the identifier is unknown, the
                factory fails, or the result is not a SecurityProvider.
        """
        try:
            factory = self.factories[identifier]
        except KeyError as e:
            raise ProviderRegistrationError(
                f"Security provider not found: {identifier}",
                provider_id=identifier,
                cause=e,
            ) from e

        try:
            provider = factory()
        except Exception as e:
            raise ProviderRegistrationError(
                f"Security provider could not be instantiated: {identifier}",
                provider_id=identifier,
                cause=e,
            ) from e

        if not isinstance(provider, SecurityProvider):
            raise ProviderRegistrationError(
                f"Not a security provider: {identifier} "
                f"produced {type(provider).__name__}",
                provider_id=identifier,
            )

        return provider

    def register(self, identifier: str) -> SecurityProvider:
        """
        Create a provider and install it in the catalog.

        Args:
            identifier: Provider identifier.

        Returns:
            The created provider.

        Raises:
            ProviderRegistrationError: See create().
        """
        provider = self.create(identifier)
        position = self.catalog.add_provider(provider)

        if position < 0:
            logger.debug(f"Security provider {provider.name} already installed")
        else:
            logger.debug(
                f"Installed security provider {provider.name} "
                f"from {identifier} at position {position}"
            )
        return provider

    def register_all(self, identifiers: Iterable[str]) -> List[SecurityProvider]:
        """Register identifiers in order, stopping at the first failure."""
        return [self.register(identifier) for identifier in identifiers]
