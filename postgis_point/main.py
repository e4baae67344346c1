"""
postgis-point — CLI entrypoint.

Usage:
    postgis-point --help
    postgis-point init
    postgis-point entity [ENTITY_NAME]
    postgis-point entity Delivery --regenerate
    postgis-point status
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from postgis_point import __version__
from postgis_point.core.observability.logging_config import setup_cli_logging


def _register_project_root(config_path: Path | None) -> None:
    """Record the app root in the process context (cwd when no .yo-rc.json)."""
    from postgis_point.core.config.loader import find_project_file, project_root
    from postgis_point.core.context import set_project_root

    found = config_path or find_project_file()
    set_project_root(project_root(found) if found else Path.cwd())


@click.group()
@click.version_option(version=__version__, prog_name="postgis-point")
@click.option("--verbose", "-v", is_flag=True, help="Log progress (INFO).")
@click.option("--quiet", "-q", is_flag=True, help="Only print errors and results.")
@click.option("--debug", is_flag=True, help="Log every file decision (DEBUG).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Path to the app's .yo-rc.json (default: nearest one upward from cwd).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """postgis-point — add PostGIS point fields to JHipster entities."""
    setup_cli_logging(debug=debug, verbose=verbose, quiet=quiet)

    ctx.ensure_object(dict)
    ctx.obj.update(
        verbose=verbose,
        quiet=quiet,
        debug=debug,
        config_path=Path(config_path) if config_path else None,
    )
    _register_project_root(ctx.obj["config_path"])


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def status(ctx: click.Context, as_json: bool) -> None:
    """Show PostGIS setup and point fields per entity."""
    from postgis_point.core.use_cases.status import get_status

    result = get_status(config_path=ctx.obj.get("config_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    app = result.app
    assert app is not None  # guaranteed after error check above

    if not ctx.obj.get("quiet", False):
        click.secho(f"\n📋 {app.base_name or app.package_name}", fg="cyan", bold=True)
        click.echo(f"   Package: {app.package_name}")
        if app.jhipster_version:
            click.echo(f"   JHipster: {app.jhipster_version}")
        click.echo()

    db = "✅ PostgreSQL" if result.postgresql else "❌ not PostgreSQL"
    click.echo(f"   Database:    {db}")
    module = "✅ initialized" if result.initialized else "❌ not initialized (run 'postgis-point init')"
    click.echo(f"   Module:      {module}")
    for profile, platform in result.dialects.items():
        click.echo(f"   Dialect ({profile}): {platform or '-'}")

    click.echo()
    click.secho(f"   Entities: {len(result.entities)}", fg="white", bold=True)
    for entity in result.entities:
        if entity.error:
            click.secho(f"     • {entity.name}  ⚠️  {entity.error}", fg="yellow")
        elif entity.fields:
            click.echo(f"     • {entity.name}  → {', '.join(entity.fields)}")
        else:
            click.echo(f"     • {entity.name}")

    for warning in result.warnings:
        click.secho(f"   ⚠️  {warning}", fg="yellow")

    click.echo()


# ── Register sub-commands from postgis_point/ui/cli/ ─────────────

from postgis_point.ui.cli.entity import entity
from postgis_point.ui.cli.init import init

cli.add_command(init)
cli.add_command(entity)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
