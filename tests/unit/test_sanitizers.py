"""Tests for data sanitization utilities."""

from __future__ import annotations

from orbital_sdk.utils.sanitizers import REDACTED, redact_properties, sanitize_log_message


class TestRedactProperties:
    """Tests for property redaction."""

    def test_redacts_exact_key(self) -> None:
        """Only keys equal to a sensitive key should be redacted."""
        properties = {
            "OrbitalConnectionPassword": "secret123",
            "OrbitalConnectionUsername": "merchant",
        }
        redacted = redact_properties(properties, ["OrbitalConnectionPassword"])

        assert redacted["OrbitalConnectionPassword"] == REDACTED
        assert redacted["OrbitalConnectionUsername"] == "merchant"

    def test_similar_keys_untouched(self) -> None:
        """Keys that merely contain a sensitive key are not redacted."""
        properties = {"OrbitalConnectionPasswordHint": "ask admin"}
        redacted = redact_properties(properties, ["OrbitalConnectionPassword"])
        assert redacted["OrbitalConnectionPasswordHint"] == "ask admin"

    def test_input_not_modified(self) -> None:
        """The source mapping should not change."""
        properties = {"OrbitalConnectionPassword": "secret123"}
        redact_properties(properties, ["OrbitalConnectionPassword"])
        assert properties["OrbitalConnectionPassword"] == "secret123"


class TestSanitizeLogMessage:
    """Tests for log message sanitization."""

    def test_removes_passwords(self) -> None:
        """Password values should be redacted."""
        sanitized = sanitize_log_message("Bad line OrbitalConnectionPassword=secret123")
        assert "secret123" not in sanitized
        assert f"OrbitalConnectionPassword={REDACTED}" in sanitized

    def test_removes_control_chars(self) -> None:
        """Control characters should be removed."""
        sanitized = sanitize_log_message("Normal text\x00with\x01control")
        assert "\x00" not in sanitized
        assert "\x01" not in sanitized

    def test_empty_message(self) -> None:
        """Empty input should give empty output."""
        assert sanitize_log_message("") == ""
