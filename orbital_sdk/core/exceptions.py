"""
Custom exception classes for the Orbital SDK configurator.

Provides a hierarchy of exceptions for the failure modes of
configuration bootstrapping, so callers can catch everything with
InitializationError or react to one specific condition.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class OrbitalSDKError(Exception):
    """
    Base exception for all Orbital SDK errors.

    Attributes:
        message: Human-readable error description.
        details: Additional context about the error.
        error_code: Optional error code for categorization.
    """

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None,
    ) -> None:
        """
        Initialize the exception.

        Args:
            message: Human-readable error description.
            details: Additional context about the error.
            error_code: Optional error code for categorization.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.error_code = error_code

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.error_code:
            return f"[{self.error_code}] {self.message}"
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert exception to dictionary for serialization.

        Returns:
            Dictionary representation of the exception.
        """
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
            "error_code": self.error_code,
        }


class InitializationError(OrbitalSDKError):
    """
    Exception raised when the configurator cannot reach its ready state.

    Raised when:
    - A declared template has no source or cannot be resolved
    - Any load phase fails for a reason not covered by a subclass
    """

    def __init__(
        self,
        message: str,
        phase: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        """
        Initialize initialization error.

        Args:
            message: Error description.
            phase: Name of the load phase that failed.
            **kwargs: Additional arguments passed to parent.
        """
        details = kwargs.pop("details", {})
        if phase:
            details["phase"] = phase
        kwargs.setdefault("error_code", "INIT_ERROR")

        super().__init__(message, details=details, **kwargs)


class ConfigurationError(InitializationError):
    """
    Exception raised for configuration source errors.

    Raised when:
    - The configuration source is missing or unreadable
    - The configuration source parses to zero entries
    - Invalid source identifiers or logger objects are supplied
    """

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        config_file: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        """
        Initialize configuration error.

        Args:
            message: Error description.
            config_key: The configuration key that caused the error.
            config_file: Identifier of the configuration source.
            **kwargs: Additional arguments passed to parent.
        """
        details = kwargs.pop("details", {})
        if config_key:
            details["config_key"] = config_key
        if config_file:
            details["config_file"] = config_file
        kwargs.setdefault("error_code", "CONFIG_ERROR")

        super().__init__(message, details=details, **kwargs)


class ConfigurationConflictError(ConfigurationError):
    """
    Exception raised when the singleton is asked to switch sources.

    The configurator binds exactly one source per process; requesting a
    different one while an instance exists is always an error.
    """

    def __init__(
        self,
        message: str,
        bound_source: Optional[str] = None,
        requested_source: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        """
        Initialize configuration conflict error.

        Args:
            message: Error description.
            bound_source: Source the singleton is bound to.
            requested_source: Source the caller asked for.
            **kwargs: Additional arguments passed to parent.
        """
        details = kwargs.pop("details", {})
        if requested_source:
            details["requested_source"] = requested_source
        kwargs.setdefault("error_code", "CONFIG_CONFLICT")

        super().__init__(message, config_file=bound_source, details=details, **kwargs)


class ProviderRegistrationError(InitializationError):
    """
    Exception raised when a security provider cannot be registered.

    Raised when:
    - The provider identifier is unknown
    - The provider factory cannot be invoked
    - The factory result is not a SecurityProvider
    """

    def __init__(
        self,
        message: str,
        provider_id: Optional[str] = None,
        cause: Optional[BaseException] = None,
        **kwargs: Any,
    ) -> None:
        """
        Initialize provider registration error.

        Args:
            message: Error description.
            provider_id: Identifier of the provider that failed.
            cause: Underlying exception, if any.
            **kwargs: Additional arguments passed to parent.
        """
        details = kwargs.pop("details", {})
        if provider_id:
            details["provider_id"] = provider_id
        if cause is not None:
            details["cause"] = f"{type(cause).__name__}: {cause}"
        kwargs.setdefault("error_code", "PROVIDER_ERROR")

        super().__init__(message, phase="security_providers", details=details, **kwargs)
        self.cause = cause


class TemplateNotFoundError(InitializationError):
    """
    Exception raised when a template path cannot be resolved.

    Raised when:
    - The template resource does not exist
    - The template resource cannot be fully read
    """

    def __init__(
        self,
        message: str,
        template_path: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        """
        Initialize template not found error.

        Args:
            message: Error description.
            template_path: Logical path that failed to resolve.
            **kwargs: Additional arguments passed to parent.
        """
        details = kwargs.pop("details", {})
        if template_path:
            details["template_path"] = template_path
        kwargs.setdefault("error_code", "TEMPLATE_NOT_FOUND")

        super().__init__(message, phase="templates", details=details, **kwargs)
