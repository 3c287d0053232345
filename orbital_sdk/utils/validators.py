"""
Input validation utilities.

Validates and normalizes configuration source identifiers. Source
identifiers name entries in a resource namespace, so they are always
relative, slash-separated and free of traversal components.
"""

from __future__ import annotations

import logging
import posixpath
from typing import Any, Optional

from orbital_sdk.core.exceptions import ConfigurationError


def validate_source_identifier(source: Optional[str]) -> bool:
    """
    Validate a configuration source identifier.

    Args:
        source: Resource-relative identifier such as
            ``config/linehandler.properties``.

    Returns:
        True if the identifier is valid.

    Raises:
        ConfigurationError: If the identifier is blank, absolute or
            escapes the resource namespace.
    """
    if source is None or not isinstance(source, str) or not source.strip():
        raise ConfigurationError(
            "Exception while initializing the configurator - "
            "Invalid config file name provided"
        )

    if "\x00" in source:
        raise ConfigurationError("Source identifier contains null byte", config_file=source)

    unified = source.strip().replace("\\", "/")

    if unified.startswith("/") or (len(unified) > 1 and unified[1] == ":"):
        raise ConfigurationError(
            "Source identifier must be relative to the resource namespace",
            config_file=source,
        )

    if ".." in unified.split("/"):
        raise ConfigurationError("Path traversal not allowed", config_file=source)

    return True


def normalize_source(source: str) -> str:
    """
    Normalize a source identifier to its canonical form.

    Args:
        source: Source identifier.

    Returns:
        Slash-separated, collapsed identifier.
    """
    validate_source_identifier(source)
    return posixpath.normpath(source.strip().replace("\\", "/"))


def sources_match(first: str, second: str) -> bool:
    """
    Compare two source identifiers as normalized, case-insensitive paths.

    Args:
        first: First identifier.
        second: Second identifier.

    Returns:
        True if both name the same source.
    """
    return normalize_source(first).casefold() == normalize_source(second).casefold()


def is_logger(candidate: Any) -> bool:
    """
    Check that an object can serve as a diagnostic destination.

    Args:
        candidate: Object supplied by the caller.

    Returns:
        True for logging.Logger and logging.LoggerAdapter instances.
    """
    return isinstance(candidate, (logging.Logger, logging.LoggerAdapter))
