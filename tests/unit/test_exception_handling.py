"""Tests for exception handling."""

from __future__ import annotations

import pytest

from orbital_sdk.core.exceptions import (
    ConfigurationConflictError,
    ConfigurationError,
    InitializationError,
    OrbitalSDKError,
    ProviderRegistrationError,
    TemplateNotFoundError,
)


class TestOrbitalSDKError:
    """Tests for base OrbitalSDKError class."""

    def test_base_exception_creation(self) -> None:
        """Should create base exception."""
        error = OrbitalSDKError("Test error")
        assert str(error) == "Test error"
        assert error.message == "Test error"
        assert error.details == {}
        assert error.error_code is None

    def test_exception_with_details(self) -> None:
        """Should create exception with details."""
        error = OrbitalSDKError(
            "Test error",
            details={"key": "value"},
            error_code="TEST_ERROR",
        )
        assert error.details == {"key": "value"}
        assert error.error_code == "TEST_ERROR"
        assert "[TEST_ERROR]" in str(error)

    def test_exception_to_dict(self) -> None:
        """Should convert exception to dictionary."""
        error = OrbitalSDKError("Test error", details={"key": "value"}, error_code="TEST_ERROR")
        error_dict = error.to_dict()

        assert error_dict["error_type"] == "OrbitalSDKError"
        assert error_dict["message"] == "Test error"
        assert error_dict["details"] == {"key": "value"}
        assert error_dict["error_code"] == "TEST_ERROR"


class TestInitializationError:
    """Tests for InitializationError."""

    def test_phase_recorded(self) -> None:
        """Should record the failing phase."""
        error = InitializationError("Load failed", phase="templates")
        assert error.error_code == "INIT_ERROR"
        assert error.details["phase"] == "templates"


class TestConfigurationError:
    """Tests for ConfigurationError."""

    def test_config_error_creation(self) -> None:
        """Should create configuration error."""
        error = ConfigurationError(
            "Invalid config",
            config_key="OrbitalConnectionUsername",
            config_file="config/linehandler.properties",
        )
        assert error.error_code == "CONFIG_ERROR"
        assert error.details["config_key"] == "OrbitalConnectionUsername"
        assert error.details["config_file"] == "config/linehandler.properties"


class TestConfigurationConflictError:
    """Tests for ConfigurationConflictError."""

    def test_conflict_error_details(self) -> None:
        """Should carry both the bound and the requested source."""
        error = ConfigurationConflictError(
            "Already initialized",
            bound_source="config/a.properties",
            requested_source="config/b.properties",
        )
        assert error.error_code == "CONFIG_CONFLICT"
        assert error.details["config_file"] == "config/a.properties"
        assert error.details["requested_source"] == "config/b.properties"
        assert isinstance(error, ConfigurationError)


class TestProviderRegistrationError:
    """Tests for ProviderRegistrationError."""

    def test_cause_preserved(self) -> None:
        """Should keep the underlying cause."""
        cause = KeyError("com.example.Missing")
        error = ProviderRegistrationError(
            "Provider not found",
            provider_id="com.example.Missing",
            cause=cause,
        )
        assert error.error_code == "PROVIDER_ERROR"
        assert error.cause is cause
        assert error.details["provider_id"] == "com.example.Missing"
        assert error.details["cause"].startswith("KeyError")
        assert error.details["phase"] == "security_providers"


class TestTemplateNotFoundError:
    """Tests for TemplateNotFoundError."""

    def test_template_not_found(self) -> None:
        """Should record the template path."""
        error = TemplateNotFoundError("Missing", template_path="templates/x.xml")
        assert error.error_code == "TEMPLATE_NOT_FOUND"
        assert error.details["template_path"] == "templates/x.xml"


class TestExceptionHierarchy:
    """Tests for exception hierarchy."""

    def test_all_exceptions_inherit_from_initialization_error(self) -> None:
        """Every configurator failure should be an InitializationError."""
        exceptions = [
            ConfigurationError("test"),
            ConfigurationConflictError("test"),
            ProviderRegistrationError("test"),
            TemplateNotFoundError("test"),
        ]

        for exc in exceptions:
            assert isinstance(exc, InitializationError)
            assert isinstance(exc, OrbitalSDKError)

    def test_exception_catching(self) -> None:
        """Should be able to catch all exceptions with base class."""
        with pytest.raises(OrbitalSDKError) as exc_info:
            raise ConfigurationConflictError("Test error")
        assert isinstance(exc_info.value, ConfigurationError)
        assert exc_info.value.message == "Test error"
