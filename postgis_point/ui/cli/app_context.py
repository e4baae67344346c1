"""
Shared CLI helpers — resolve the app root and load its descriptor.
"""

from __future__ import annotations

import sys
from pathlib import Path

import click

from postgis_point import __version__
from postgis_point.core.config.loader import (
    ConfigError,
    check_jhipster_version,
    find_project_file,
    load_app_config,
    require_postgresql,
)
from postgis_point.core.context import get_project_root
from postgis_point.core.models.app import AppConfig


def resolve_config_path(ctx: click.Context) -> Path | None:
    """Explicit --config, else the nearest .yo-rc.json from the project root."""
    config_path: Path | None = ctx.obj.get("config_path")
    return config_path or find_project_file(get_project_root())


def load_app_or_exit(ctx: click.Context) -> tuple[Path, AppConfig]:
    """Load the app descriptor and check its database, exiting on failure."""
    config_path = resolve_config_path(ctx)
    try:
        app = load_app_config(config_path)
        require_postgresql(app)
    except ConfigError as e:
        click.secho(f"❌ ERROR! {e}", fg="red", bold=True, err=True)
        sys.exit(1)

    warning = check_jhipster_version(app)
    if warning and not ctx.obj.get("quiet"):
        click.secho(f"⚠️  {warning}", fg="yellow", err=True)

    assert config_path is not None  # load_app_config raises otherwise
    return config_path.parent.resolve(), app


def welcome(ctx: click.Context) -> None:
    if ctx.obj.get("quiet"):
        return
    click.echo()
    click.echo("Welcome to the ", nl=False)
    click.secho("JHipster entity-postgis-point", fg="yellow", bold=True, nl=False)
    click.echo(" generator! ", nl=False)
    click.secho(f"v{__version__}", fg="yellow")
    click.echo()
