"""
CLI command for one-time PostGIS module initialization.

Thin wrapper over ``postgis_point.core.services.module_init``.
"""

from __future__ import annotations

import json
import sys

import click

from postgis_point.ui.cli.app_context import load_app_or_exit, welcome


@click.command("init")
@click.option("--yes", "-y", is_flag=True, help="Initialize without asking.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output result as JSON.")
@click.pass_context
def init(ctx: click.Context, yes: bool, as_json: bool) -> None:
    """Install the PostGIS dialect, dependency and changelogs into the app."""
    from postgis_point.core.services.field_wizard import Choice
    from postgis_point.core.services.module_init import (
        ModuleInitError,
        initialize_module,
        is_initialized,
    )
    from postgis_point.core.services.splicer import MarkerNotFoundError
    from postgis_point.ui.cli.prompts import ClickPrompter

    project_root, app = load_app_or_exit(ctx)

    if not yes:
        welcome(ctx)
        wanted = ClickPrompter().select(
            "Do you want to initialize postgis point module?",
            [Choice("Yes", True), Choice("No, continue", False)],
            default=False,
        )
        if not wanted:
            click.echo("End of entity-postgis-point generator")
            return

    if is_initialized(project_root, app) and not as_json:
        click.secho("The module is initialized.", fg="green")

    try:
        result = initialize_module(project_root, app)
    except (ModuleInitError, MarkerNotFoundError) as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    for path in result.created:
        click.secho(f"   ✚ {path}", fg="green")
    for path in result.patched:
        click.secho(f"   ✎ {path}", fg="cyan")
    if not result.created and not result.patched:
        click.echo("   Nothing to change.")
    if result.hook_registered:
        click.echo("   Registered as a post entity creation hook.")
    click.echo(f"   {result.hook_note}")
    for warning in result.warnings:
        click.secho(f"   ⚠️  {warning}", fg="yellow")

    click.echo()
    click.echo("End of entity-postgis-point generator")
