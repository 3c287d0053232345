"""
Pytest configuration and fixtures for Orbital SDK configurator tests.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Dict, FrozenSet, Generator

import pytest

from orbital_sdk.config.settings import SDKSettings
from orbital_sdk.core.configurator import ConfigurationManager
from orbital_sdk.security.providers import SecurityProvider
from orbital_sdk.security.registry import (
    PROVIDER_FACTORIES,
    SecurityProviderCatalog,
    SecurityProviderRegistry,
)
from orbital_sdk.sources.resources import DirectoryResourceNamespace


SAMPLE_PROPERTIES = """\
# Sample line handler configuration
OrbitalConnectionUsername=merchant
OrbitalConnectionPassword=secret123
HTTPClientLogLevel=DEBUG

security.provider.1=com.example.FooProvider

XMLTemplates.Request.NewOrder=templates/NewOrder.xml
XMLTemplates.Request.Reversal=templates/Reversal.xml
XMLTemplates.Request.ComplexRoot.NewOrder=NewOrder

log4j.appender.ENGINE.File=logs/engine=main.log
"""


class FooProvider(SecurityProvider):
    """Provider registered under com.example.FooProvider in tests."""

    name = "FOO"
    info = "Test provider"

    def algorithms(self) -> FrozenSet[str]:
        return frozenset({"FOO"})


@pytest.fixture(autouse=True)
def reset_configurator() -> Generator[None, None, None]:
    """Start and finish every test without a configurator or bound source."""
    ConfigurationManager.reset()
    ConfigurationManager._bound_source = None
    yield
    ConfigurationManager.reset()
    ConfigurationManager._bound_source = None


@pytest.fixture
def resource_root(tmp_path: Path) -> Path:
    """Create a resource root with a sample properties file and templates."""
    root = tmp_path / "resources"
    (root / "config").mkdir(parents=True)
    (root / "templates").mkdir()

    (root / "config" / "linehandler.properties").write_text(SAMPLE_PROPERTIES, encoding="latin-1")
    (root / "templates" / "NewOrder.xml").write_text("<NewOrder/>", encoding="utf-8")
    (root / "templates" / "Reversal.xml").write_text("<Reversal/>", encoding="utf-8")

    return root


@pytest.fixture
def write_properties(resource_root: Path) -> Callable[[str, str], str]:
    """Return a helper that writes a properties file and returns its identifier."""

    def _write(name: str, content: str) -> str:
        path = resource_root / "config" / name
        path.write_text(content, encoding="latin-1")
        return f"config/{name}"

    return _write


@pytest.fixture
def namespace(resource_root: Path) -> DirectoryResourceNamespace:
    """Resource namespace rooted at the sample resource root."""
    return DirectoryResourceNamespace(str(resource_root))


@pytest.fixture
def settings(resource_root: Path) -> SDKSettings:
    """Bootstrap settings pointing at the sample resource root."""
    return SDKSettings(resource_dir=str(resource_root))


@pytest.fixture
def catalog() -> SecurityProviderCatalog:
    """A private provider catalog so tests never touch the global one."""
    return SecurityProviderCatalog()


@pytest.fixture
def registry(catalog: SecurityProviderCatalog) -> SecurityProviderRegistry:
    """Registry with the built-in factories plus com.example.FooProvider."""
    factories = dict(PROVIDER_FACTORIES)
    factories["com.example.FooProvider"] = FooProvider
    return SecurityProviderRegistry(factories=factories, catalog=catalog)


@pytest.fixture
def loggers() -> Dict[str, logging.Logger]:
    """Caller-supplied engine and eCommerce loggers."""
    return {
        "engine_logger": logging.getLogger("tests.engine"),
        "ecommerce_logger": logging.getLogger("tests.ecommerce"),
    }


@pytest.fixture
def initialize(
    settings: SDKSettings,
    namespace: DirectoryResourceNamespace,
    registry: SecurityProviderRegistry,
) -> Callable[..., ConfigurationManager]:
    """Return ConfigurationManager.initialize bound to the test collaborators."""

    def _initialize(source: Any = None, **kwargs: Any) -> ConfigurationManager:
        kwargs.setdefault("settings", settings)
        kwargs.setdefault("namespace", namespace)
        kwargs.setdefault("provider_registry", registry)
        return ConfigurationManager.initialize(source, **kwargs)

    return _initialize


# Markers for test categorization
def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest markers."""
    config.addinivalue_line("markers", "slow: marks tests as slow")
    config.addinivalue_line("markers", "integration: marks integration tests")
