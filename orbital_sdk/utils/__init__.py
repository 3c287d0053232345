"""
Utility modules for the Orbital SDK configurator.

Provides common functionality:
- validators: Source identifier validation
- sanitizers: Redaction of sensitive values
"""

from orbital_sdk.utils.validators import (
    validate_source_identifier,
    normalize_source,
    sources_match,
    is_logger,
)
from orbital_sdk.utils.sanitizers import (
    REDACTED,
    redact_properties,
    sanitize_log_message,
)

__all__ = [
    "validate_source_identifier",
    "normalize_source",
    "sources_match",
    "is_logger",
    "REDACTED",
    "redact_properties",
    "sanitize_log_message",
]
