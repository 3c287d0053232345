"""Integration tests against the resources packaged with the SDK."""

from __future__ import annotations

import logging

import pytest

from orbital_sdk import get_configuration_manager
from orbital_sdk.config.logging_config import ROOT_LOGGER_NAME
from orbital_sdk.config.settings import DEFAULT_CONFIG_SOURCE, SDKSettings
from orbital_sdk.security.registry import SecurityProviderCatalog, SecurityProviderRegistry
from orbital_sdk.utils.sanitizers import REDACTED


@pytest.fixture
def sdk_root_logger():
    """Restore the SDK root logger after log routing changes it."""
    sdk_root = logging.getLogger(ROOT_LOGGER_NAME)
    level, handlers = sdk_root.level, list(sdk_root.handlers)
    yield sdk_root
    sdk_root.setLevel(level)
    sdk_root.handlers = handlers


@pytest.mark.integration
class TestPackagedResources:
    """Tests for a configurator built from packaged defaults."""

    def test_loads_packaged_configuration(self, sdk_root_logger: logging.Logger) -> None:
        """The packaged properties, providers and templates should all load."""
        catalog = SecurityProviderCatalog()
        manager = get_configuration_manager(
            settings=SDKSettings(config_source=DEFAULT_CONFIG_SOURCE, resource_dir=None),
            provider_registry=SecurityProviderRegistry(catalog=catalog),
        )

        assert manager.source == DEFAULT_CONFIG_SOURCE
        assert sorted(manager.xml_templates) == [
            "EndOfDay",
            "Inquiry",
            "MarkForCapture",
            "NewOrder",
            "Reversal",
        ]
        assert [p.name for p in catalog.providers()] == ["HASHLIB", "TLS", "HMAC"]
        assert "<Inquiry>" in manager.get_template("Inquiry")

    def test_packaged_log_routing(self, sdk_root_logger: logging.Logger) -> None:
        """log4j keys in the packaged file should set SDK logger levels."""
        manager = get_configuration_manager(
            settings=SDKSettings(config_source=DEFAULT_CONFIG_SOURCE, resource_dir=None),
            provider_registry=SecurityProviderRegistry(catalog=SecurityProviderCatalog()),
        )

        assert manager.loggers_created_by_sdk
        assert sdk_root_logger.level == logging.INFO
        assert manager.engine_logger.level == logging.INFO

    def test_packaged_password_redacted(self, sdk_root_logger: logging.Logger) -> None:
        """The packaged password entry should still be redacted."""
        manager = get_configuration_manager(
            settings=SDKSettings(config_source=DEFAULT_CONFIG_SOURCE, resource_dir=None),
            provider_registry=SecurityProviderRegistry(catalog=SecurityProviderCatalog()),
        )
        assert f"OrbitalConnectionPassword={REDACTED}" in manager.describe()
