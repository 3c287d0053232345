"""
Data sanitization utilities.

Provides functions to keep secrets out of diagnostic output.
"""

from __future__ import annotations

import re
from typing import Dict, Iterable, Mapping

REDACTED = "########"

# Patterns for sensitive data inside free-form messages
SENSITIVE_PATTERNS = [
    (re.compile(r"(password[=:]\s*)\S+", re.IGNORECASE), r"\1" + REDACTED),
    (re.compile(r"(passwd[=:]\s*)\S+", re.IGNORECASE), r"\1" + REDACTED),
    (re.compile(r"(secret[=:]\s*)\S+", re.IGNORECASE), r"\1" + REDACTED),
    (re.compile(r"(token[=:]\s*)\S+", re.IGNORECASE), r"\1" + REDACTED),
]

# Control characters to remove
CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")


def redact_properties(
    properties: Mapping[str, str],
    sensitive_keys: Iterable[str],
) -> Dict[str, str]:
    """
    Copy a property mapping with sensitive values replaced.

    Only keys exactly equal to one of ``sensitive_keys`` are redacted.

    Args:
        properties: Property mapping.
        sensitive_keys: Keys whose values must never be shown.

    Returns:
        New mapping with redacted values.
    """
    sensitive = frozenset(sensitive_keys)
    return {
        key: (REDACTED if key in sensitive else value)
        for key, value in properties.items()
    }


def sanitize_log_message(message: str) -> str:
    """
    Remove sensitive data and control characters from a log message.

    Args:
        message: Log message to sanitize.

    Returns:
        Sanitized message.
    """
    if not message:
        return ""

    sanitized = message
    for pattern, replacement in SENSITIVE_PATTERNS:
        sanitized = pattern.sub(replacement, sanitized)

    return CONTROL_CHARS.sub("", sanitized)
