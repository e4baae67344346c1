"""
CLI command for the point field wizard.

Thin wrapper over ``postgis_point.core.services.field_wizard`` and
``postgis_point.core.services.entity_regenerate``.
"""

from __future__ import annotations

import json
import sys

import click

from postgis_point.ui.cli.app_context import load_app_or_exit, welcome


@click.command("entity")
@click.argument("entity_name", required=False)
@click.option(
    "--regenerate",
    is_flag=True,
    help="Rewrite point field code from the stored field list, without prompting.",
)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output result as JSON.")
@click.pass_context
def entity(ctx: click.Context, entity_name: str | None, regenerate: bool, as_json: bool) -> None:
    """Add or remove point fields on an entity, then regenerate its code."""
    from postgis_point.core.persistence.entity_store import EntityStoreError, list_entities
    from postgis_point.core.services.entity_regenerate import (
        RegenerationError,
        load_entity_fields,
        regenerate_entity,
    )
    from postgis_point.core.services.field_validate import (
        FieldValidationError,
        validate_field_set,
    )
    from postgis_point.core.services.field_wizard import (
        FieldWizard,
        WizardAborted,
        choose_entity,
    )
    from postgis_point.core.services.splicer import MarkerNotFoundError
    from postgis_point.ui.cli.prompts import ClickPrompter

    project_root, app = load_app_or_exit(ctx)

    if regenerate and not entity_name:
        raise click.UsageError("--regenerate needs an ENTITY_NAME.")

    try:
        if regenerate:
            if not as_json:
                click.secho("\nRe-generating postgis fields", fg="green", bold=True)
            fields = load_entity_fields(project_root, entity_name)
        else:
            welcome(ctx)
            prompter = ClickPrompter()
            names = list_entities(project_root)
            if entity_name is None:
                entity_name = choose_entity(names, prompter)
            elif entity_name not in names:
                raise EntityStoreError(f"Unknown entity '{entity_name}'. Known: {', '.join(names) or 'none'}")
            fields = load_entity_fields(project_root, entity_name)
            fields = FieldWizard(entity_name, fields, prompter).run()

        validate_field_set(entity_name, [f.to_json() for f in fields])
        result = regenerate_entity(project_root, app, entity_name, fields)

    except WizardAborted as e:
        click.secho(str(e), fg="green")
        return
    except (EntityStoreError, FieldValidationError) as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)
    except (MarkerNotFoundError, RegenerationError) as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        click.secho(
            "   The file doesn't match the layout this plugin expects; nothing was written.",
            fg="red",
            err=True,
        )
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    click.secho(f"\n✅ {result.entity}: {len(result.fields)} point field(s)", fg="green", bold=True)
    for f in result.fields:
        rules = f" [{', '.join(f.validation_rules)}]" if f.validation_rules else ""
        click.echo(f"   • {f.name} → {f.column_name}{rules}")
    if result.changed:
        click.secho("   Updated:", fg="cyan")
        for path in result.changed:
            click.echo(f"     {path}")
    else:
        click.echo("   Generated code already up to date.")
    if result.changelog is None:
        click.secho("   No Liquibase changelog found, geometry columns skipped.", fg="yellow")
    click.echo(f"   Saved {result.descriptor}")
    click.echo()
