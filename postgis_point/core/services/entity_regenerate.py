"""
Entity regeneration — rewrite an entity's point-field code from its field list.

For one entity and its current field list:

1. Locate the JPA domain class and the entity's Liquibase changelog
   (the changelog is optional; without it column entries are skipped).
2. Domain class: drop the plugin's imports and regions, re-add the
   imports, then add one field region and one accessor region per field.
3. Changelog: drop the plugin's column regions, add one per field.
4. Save the field list into ``.jhipster/<Entity>.json``.

All edits are computed in memory first.  A missing needle in any file
aborts before the first write, so a failed run leaves the project as it
was.  The descriptor is written last.

Channel-independent: no click dependency.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import partial
from pathlib import Path

from postgis_point.core.config.layout import (
    LIQUIBASE_CHANGELOG_DIR,
    NEEDLE_ENTITY_ACCESSORS,
    NEEDLE_ENTITY_FIELD,
    NEEDLE_LIQUIBASE_COLUMN,
    changelog_suffix,
    entity_source_path,
)
from postgis_point.core.models.app import AppConfig
from postgis_point.core.models.field import FieldDefinition
from postgis_point.core.models.template import GeneratedFile
from postgis_point.core.persistence.entity_store import read_point_fields, write_point_fields
from postgis_point.core.persistence.text_file import read_text, write_text_atomic
from postgis_point.core.services.field_validate import validate_field_set
from postgis_point.core.services.generators.point_field import (
    COLUMN_REGION,
    FIELD_REGION,
    FUNCTIONS_REGION,
    IMPORT_ANCHOR,
    OWNED_IMPORTS,
    render_accessors,
    render_changelog_column,
    render_field_declaration,
    render_imports,
)
from postgis_point.core.services.splicer import (
    Edit,
    apply_edits,
    collapse_blank_lines,
    insert_at,
    remove_lines,
    remove_regions,
)

logger = logging.getLogger(__name__)


class RegenerationError(Exception):
    """Raised when a file the regeneration depends on is missing."""


@dataclass
class RegenerationResult:
    """Outcome of regenerating one entity."""

    entity: str
    fields: list[FieldDefinition] = field(default_factory=list)
    changed: list[str] = field(default_factory=list)
    changelog: str | None = None
    descriptor: str = ""

    def to_dict(self) -> dict:
        return {
            "entity": self.entity,
            "fields": [f.name for f in self.fields],
            "changed": self.changed,
            "changelog": self.changelog,
            "descriptor": self.descriptor,
        }


def load_entity_fields(project_root: Path, entity_name: str) -> list[FieldDefinition]:
    """Read and validate an entity's stored point fields."""
    return validate_field_set(entity_name, read_point_fields(project_root, entity_name))


def find_changelog(project_root: Path, entity_name: str) -> str | None:
    """Find the entity's ``*_added_entity_<Entity>.xml`` changelog.

    Returns:
        Path relative to the project root, or None when there is none.
    """
    folder = project_root / LIQUIBASE_CHANGELOG_DIR
    if not folder.is_dir():
        logger.info("No changelog folder at %s", folder)
        return None

    suffix = changelog_suffix(entity_name)
    matches = sorted(p.name for p in folder.iterdir() if suffix in p.name)
    if not matches:
        logger.info("No changelog for %s in %s", entity_name, folder)
        return None
    if len(matches) > 1:
        logger.warning("Several changelogs for %s, using %s", entity_name, matches[-1])
    return f"{LIQUIBASE_CHANGELOG_DIR}/{matches[-1]}"


def entity_source_edits(fields: list[FieldDefinition]) -> list[Edit]:
    """Edits that rebuild the plugin's code in a domain class."""
    edits: list[Edit] = [
        partial(remove_lines, owned=OWNED_IMPORTS),
        partial(remove_regions, region=FIELD_REGION),
        partial(remove_regions, region=FUNCTIONS_REGION),
        collapse_blank_lines,
        partial(insert_at, anchor=IMPORT_ANCHOR, snippet=render_imports(), after=True),
    ]
    for f in fields:
        edits.append(partial(insert_at, anchor=NEEDLE_ENTITY_FIELD,
                             snippet=render_field_declaration(f)))
        edits.append(partial(insert_at, anchor=NEEDLE_ENTITY_ACCESSORS,
                             snippet=render_accessors(f)))
    return edits


def changelog_edits(fields: list[FieldDefinition]) -> list[Edit]:
    """Edits that rebuild the plugin's columns in an entity changelog."""
    edits: list[Edit] = [
        partial(remove_regions, region=COLUMN_REGION),
        collapse_blank_lines,
    ]
    for f in fields:
        edits.append(partial(insert_at, anchor=NEEDLE_LIQUIBASE_COLUMN,
                             snippet=render_changelog_column(f)))
    return edits


def _plan_file(project_root: Path, rel_path: str, edits: list[Edit], reason: str) -> GeneratedFile:
    path = project_root / rel_path
    if not path.is_file():
        raise RegenerationError(f"File not found: {rel_path}")
    content = apply_edits(read_text(path), edits, target=rel_path)
    return GeneratedFile(path=rel_path, content=content, overwrite=True, reason=reason)


def plan_regeneration(
    project_root: Path,
    app: AppConfig,
    entity_name: str,
    fields: list[FieldDefinition],
) -> list[GeneratedFile]:
    """Compute the new content of every file touched for an entity.

    Nothing is written.

    Raises:
        RegenerationError: If the domain class doesn't exist.
        MarkerNotFoundError: If a needle is missing from a file.
    """
    planned = [
        _plan_file(
            project_root,
            entity_source_path(app, entity_name),
            entity_source_edits(fields),
            f"{len(fields)} point field(s) on {entity_name}",
        ),
    ]

    changelog = find_changelog(project_root, entity_name)
    if changelog:
        planned.append(_plan_file(
            project_root,
            changelog,
            changelog_edits(fields),
            f"{len(fields)} geometry column(s) for {entity_name}",
        ))

    return planned


def write_plan(project_root: Path, files: list[GeneratedFile]) -> list[str]:
    """Write planned files whose content differs from disk.

    Returns:
        Relative paths that changed.
    """
    changed: list[str] = []
    for gf in files:
        if not gf.overwrite and gf.target(project_root).exists():
            logger.info("Skipping existing %s", gf.path)
            continue
        if gf.matches_disk(project_root):
            logger.debug("Unchanged %s", gf.path)
            continue
        write_text_atomic(gf.target(project_root), gf.content)
        logger.info("Wrote %s (%s)", gf.path, gf.reason)
        changed.append(gf.path)
    return changed


def regenerate_entity(
    project_root: Path,
    app: AppConfig,
    entity_name: str,
    fields: list[FieldDefinition],
) -> RegenerationResult:
    """Rewrite an entity's point-field code and save its field list.

    Raises:
        RegenerationError: If the domain class doesn't exist.
        MarkerNotFoundError: If a needle is missing; nothing is written.
    """
    logger.info("Regenerating %d point field(s) on %s", len(fields), entity_name)
    planned = plan_regeneration(project_root, app, entity_name, fields)
    changed = write_plan(project_root, planned)
    descriptor = write_point_fields(project_root, entity_name, fields)

    return RegenerationResult(
        entity=entity_name,
        fields=list(fields),
        changed=changed,
        changelog=planned[1].path if len(planned) > 1 else None,
        descriptor=str(descriptor.relative_to(project_root)),
    )
