#!/usr/bin/env python3
"""
Main CLI entry point for the Orbital SDK configurator.

Provides commands for:
- Validating a properties source
- Dumping the loaded configuration (sensitive values redacted)
- Listing templates and installed security providers
- Managing bootstrap settings files
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import click
import yaml
from rich.console import Console
from rich.table import Table
from rich import box

from orbital_sdk.config.logging_config import get_logger, setup_logging
from orbital_sdk.config.settings import SDKSettings, get_settings
from orbital_sdk.core.configurator import ConfigurationManager
from orbital_sdk.core.exceptions import OrbitalSDKError
from orbital_sdk.security.registry import get_provider_catalog

logger = get_logger(__name__)


def get_version() -> str:
    """Get package version."""
    from orbital_sdk import __version__

    return __version__


def _load_manager(ctx: click.Context, source: Optional[str]) -> ConfigurationManager:
    settings: SDKSettings = ctx.obj["settings"]
    try:
        return ConfigurationManager.initialize(source, settings=settings)
    except OrbitalSDKError as e:
        click.echo(click.style(f"Configuration failed: {e}", fg="red"), err=True)
        if e.details:
            for key, value in e.details.items():
                click.echo(f"  {key}: {value}", err=True)
        ctx.exit(1)


@click.group(invoke_without_command=True)
@click.option("-v", "--version", is_flag=True, help="Show version and exit")
@click.option("-s", "--settings", "settings_path", type=click.Path(exists=True), help="Settings YAML file")
@click.option("-r", "--resource-dir", type=click.Path(exists=True, file_okay=False), help="Resource root directory")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(
    ctx: click.Context,
    version: bool,
    settings_path: Optional[str],
    resource_dir: Optional[str],
    debug: bool,
) -> None:
    """Orbital SDK configurator - inspect and validate SDK configuration."""
    ctx.ensure_object(dict)

    if version:
        click.echo(f"Orbital SDK configurator, version {get_version()}")
        ctx.exit(0)

    try:
        settings = get_settings(settings_path)
    except (FileNotFoundError, ValueError) as e:
        click.echo(click.style(f"Failed to load settings: {e}", fg="red"), err=True)
        ctx.exit(1)

    if resource_dir:
        settings = settings.model_copy(update={"resource_dir": resource_dir})

    setup_logging(level="DEBUG" if debug else "WARNING", use_colors=True)
    ctx.obj["settings"] = settings

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@cli.command()
@click.argument("source", required=False)
@click.pass_context
def validate(ctx: click.Context, source: Optional[str]) -> None:
    """Load SOURCE and report whether initialization succeeds."""
    manager = _load_manager(ctx, source)
    click.echo(click.style(f"Configuration is valid: {manager.source}", fg="green"))
    click.echo(f"  Properties: {len(manager.configurations)}")
    click.echo(f"  Templates: {len(manager.xml_templates)}")
    click.echo(f"  Security providers installed: {len(get_provider_catalog())}")


@cli.command()
@click.argument("source", required=False)
@click.option("--json", "as_json", is_flag=True, help="Print as JSON")
@click.pass_context
def describe(ctx: click.Context, source: Optional[str], as_json: bool) -> None:
    """Dump properties and templates with sensitive values redacted."""
    manager = _load_manager(ctx, source)

    if as_json:
        click.echo(json.dumps(manager.to_dict(), indent=2))
    else:
        click.echo(manager.describe())


@cli.command()
@click.argument("source", required=False)
@click.pass_context
def templates(ctx: click.Context, source: Optional[str]) -> None:
    """List the loaded XML request templates."""
    manager = _load_manager(ctx, source)

    table = Table(title=f"Templates ({manager.source})", box=box.SIMPLE)
    table.add_column("Name", style="cyan")
    table.add_column("Source")
    table.add_column("Size", justify="right")

    for name in sorted(manager.xml_templates):
        declared = manager.get(f"XMLTemplates.Request.{name}", "")
        table.add_row(name, declared, str(len(manager.xml_templates[name])))

    Console().print(table)


@cli.command()
@click.argument("source", required=False)
@click.pass_context
def providers(ctx: click.Context, source: Optional[str]) -> None:
    """List installed security providers in preference order."""
    _load_manager(ctx, source)

    table = Table(title="Security Providers", box=box.SIMPLE)
    table.add_column("#", justify="right")
    table.add_column("Name", style="cyan")
    table.add_column("Version")
    table.add_column("Algorithms")

    for position, provider in enumerate(get_provider_catalog().providers(), start=1):
        table.add_row(
            str(position),
            provider.name,
            provider.version,
            ", ".join(sorted(provider.algorithms())),
        )

    Console().print(table)


@cli.group("settings")
def settings_group() -> None:
    """Bootstrap settings commands."""
    pass


@settings_group.command("show")
@click.pass_context
def settings_show(ctx: click.Context) -> None:
    """Show the effective bootstrap settings."""
    settings: SDKSettings = ctx.obj["settings"]
    click.echo(yaml.dump(settings.model_dump(), default_flow_style=False, sort_keys=False))


@settings_group.command("init")
@click.option("-o", "--output", type=click.Path(), default="orbital_sdk.yaml", help="Output file path")
@click.option("--force", is_flag=True, help="Overwrite existing file")
def settings_init(output: str, force: bool) -> None:
    """Create a default settings file."""
    output_path = Path(output)

    if output_path.exists() and not force:
        click.echo(f"File already exists: {output}. Use --force to overwrite.", err=True)
        return

    SDKSettings().to_yaml(str(output_path))
    click.echo(f"Created default settings: {output}")


def main() -> None:
    """Main entry point."""
    cli(obj={})


if __name__ == "__main__":
    main()
