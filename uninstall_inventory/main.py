"""
Uninstall inventory — CLI entrypoint.

Usage:
    uninv --help
    uninv status
    uninv list --json
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from uninstall_inventory import __version__
from uninstall_inventory.core.observability.logging_config import (
    ENV_FILE,
    ENV_FILE_LEVEL,
    resolve_level,
    setup_logging,
)


def build_registry(config_path: Path | None):
    """Composition root: settings → shared locator/catalog → adapters."""
    from uninstall_inventory.adapters.chocolatey import ChocolateyAdapter, ManagerLocator, set_locator
    from uninstall_inventory.adapters.registry import AdapterRegistry
    from uninstall_inventory.core.config.loader import load_settings
    from uninstall_inventory.core.models.confidence import set_catalog

    settings = load_settings(config_path)
    choco = settings.chocolatey

    catalog = settings.confidence.catalog()
    set_catalog(catalog)
    locator = ManagerLocator(
        brand=choco.brand,
        executable=choco.executable,
        path_variable=choco.path_variable,
    )
    set_locator(locator)

    registry = AdapterRegistry()
    registry.register(ChocolateyAdapter(settings=settings, locator=locator, catalog=catalog))
    return registry


@click.group()
@click.version_option(version=__version__, prog_name="uninv")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to inventory.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """Uninstall inventory — list removable software from package managers."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    setup_logging(
        level=resolve_level(debug=debug, verbose=verbose, quiet=quiet),
        log_file=os.environ.get(ENV_FILE),
        log_file_level=os.environ.get(ENV_FILE_LEVEL),
    )


def _registry_or_exit(ctx: click.Context):
    from uninstall_inventory.core.config.loader import ConfigError

    try:
        return build_registry(ctx.obj.get("config_path"))
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def status(ctx: click.Context, as_json: bool) -> None:
    """Show which package-manager sources are enabled and available."""
    registry = _registry_or_exit(ctx)
    result = registry.adapter_status()

    if as_json:
        click.echo(json.dumps(result, indent=2))
        return

    click.secho("📦 Sources:", fg="cyan", bold=True)
    for info in result.values():
        if not info["enabled"]:
            icon, note = "⏸️", "disabled"
        elif info["available"]:
            icon, note = "✅", "available"
        else:
            icon, note = "❌", "not installed"
        click.echo(f"   {icon} {info['display_name']} ({info['name']}): {note}")


@cli.command("list")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def list_cmd(ctx: click.Context, as_json: bool) -> None:
    """List removable software from every enabled source."""
    from uninstall_inventory.adapters.chocolatey.client import ManagerInvocationError

    registry = _registry_or_exit(ctx)

    entries = []
    for name in registry.list_adapters():
        try:
            entries.extend(registry.list_entries(name))
        except ManagerInvocationError as e:
            click.secho(f"❌ {name}: {e}", fg="red", err=True)
            sys.exit(1)

    if as_json:
        payload = [entry.model_dump(mode="json", exclude={"icon_bitmap"}) for entry in entries]
        click.echo(json.dumps(payload, indent=2))
        return

    if not entries:
        click.secho("No removable packages found", fg="yellow")
        return

    click.secho(f"📦 Entries ({len(entries)}):", fg="cyan", bold=True)
    for entry in entries:
        click.echo(f"   {entry.display_name:<40} {entry.display_version:<14} {entry.uninstall_command}")
        for action in entry.additional_actions:
            confidence = action.confidence
            click.echo(f"      ↳ {action.display_name} [{confidence.level()}, {confidence.total:+d}]")


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
