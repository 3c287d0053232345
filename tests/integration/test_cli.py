"""Integration tests for the orbital-config command line."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Callable

import pytest
import yaml
from click.testing import CliRunner

from orbital_sdk import __version__
from orbital_sdk.cli.main import cli
from orbital_sdk.config.logging_config import ROOT_LOGGER_NAME
from orbital_sdk.config.settings import get_settings

CLI_PROPERTIES = """\
OrbitalConnectionUsername=merchant
OrbitalConnectionPassword=hunter2
security.provider.1=orbital_sdk.security.HmacProvider
XMLTemplates.Request.NewOrder=templates/NewOrder.xml
XMLTemplates.Request.ComplexRoot.NewOrder=NewOrder
"""


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture(autouse=True)
def restore_logging():
    """The CLI configures SDK logging; put it back afterwards."""
    sdk_root = logging.getLogger(ROOT_LOGGER_NAME)
    level, handlers = sdk_root.level, list(sdk_root.handlers)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    sdk_root.setLevel(level)
    sdk_root.handlers = handlers


@pytest.fixture
def cli_source(write_properties: Callable[[str, str], str]) -> str:
    return write_properties("cli.properties", CLI_PROPERTIES)


@pytest.mark.integration
class TestCLI:
    """Tests for orbital-config commands."""

    def test_version(self, runner: CliRunner) -> None:
        """--version should print the package version."""
        result = runner.invoke(cli, ["--version"], obj={})
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_validate(self, runner: CliRunner, resource_root: Path, cli_source: str) -> None:
        """validate should report counts for a good source."""
        result = runner.invoke(cli, ["-r", str(resource_root), "validate", cli_source], obj={})

        assert result.exit_code == 0, result.output
        assert "Configuration is valid" in result.output
        assert "Templates: 1" in result.output

    def test_validate_missing_source(self, runner: CliRunner, resource_root: Path) -> None:
        """validate should exit 1 for a missing source."""
        result = runner.invoke(
            cli, ["-r", str(resource_root), "validate", "config/missing.properties"], obj={}
        )
        assert result.exit_code == 1
        assert "Configuration failed" in result.output

    def test_describe_redacts(self, runner: CliRunner, resource_root: Path, cli_source: str) -> None:
        """describe should never print the password."""
        result = runner.invoke(cli, ["-r", str(resource_root), "describe", cli_source], obj={})

        assert result.exit_code == 0, result.output
        assert "OrbitalConnectionPassword=########" in result.output
        assert "hunter2" not in result.output
        assert "NewOrder=<NewOrder/>" in result.output

    def test_describe_json(self, runner: CliRunner, resource_root: Path, cli_source: str) -> None:
        """describe --json should emit the dictionary form."""
        result = runner.invoke(
            cli, ["-r", str(resource_root), "describe", "--json", cli_source], obj={}
        )

        assert result.exit_code == 0, result.output
        payload = json.loads(result.output)
        assert payload["templates"] == ["NewOrder"]
        assert payload["configurations"]["OrbitalConnectionPassword"] == "########"

    def test_templates_table(self, runner: CliRunner, resource_root: Path, cli_source: str) -> None:
        """templates should list each template with its declared path."""
        result = runner.invoke(cli, ["-r", str(resource_root), "templates", cli_source], obj={})

        assert result.exit_code == 0, result.output
        assert "NewOrder" in result.output
        assert "templates/NewOrder.xml" in result.output

    def test_providers_table(self, runner: CliRunner, resource_root: Path, cli_source: str) -> None:
        """providers should list the installed HMAC provider."""
        result = runner.invoke(cli, ["-r", str(resource_root), "providers", cli_source], obj={})

        assert result.exit_code == 0, result.output
        assert "HMAC" in result.output

    def test_settings_init_and_show(self, runner: CliRunner, tmp_path: Path) -> None:
        """settings init should write a file that settings show can read."""
        output = tmp_path / "orbital_sdk.yaml"

        result = runner.invoke(cli, ["settings", "init", "-o", str(output)], obj={})
        assert result.exit_code == 0, result.output
        assert output.exists()

        result = runner.invoke(cli, ["-s", str(output), "settings", "show"], obj={})
        assert result.exit_code == 0, result.output
        assert yaml.safe_load(result.output)["config_source"] == "config/linehandler.properties"

    def test_settings_init_refuses_overwrite(self, runner: CliRunner, tmp_path: Path) -> None:
        """settings init should not overwrite without --force."""
        output = tmp_path / "orbital_sdk.yaml"
        output.write_text("keep: me\n")

        result = runner.invoke(cli, ["settings", "init", "-o", str(output)], obj={})

        assert "already exists" in result.output
        assert output.read_text() == "keep: me\n"
