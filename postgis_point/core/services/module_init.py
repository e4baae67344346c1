"""
Module initialization — one-time PostGIS setup of a JHipster app.

Copies the support files (dialect, PostGIS changelog) and patches the
shared project files:

    application-{dev,prod}.yml   default dialect → <package>.config.PostgresDialect
    pom.xml                      hibernate-spatial dependency,
                                 Liquibase diffExcludeObjects for PostGIS tables
    liquibase/master.xml         include changelog/postgis.xml

Every patch checks whether it was already applied, so ``init`` can be
re-run safely.  Edits are computed for every file before the first
write; a missing needle aborts the whole run.

Channel-independent: no click dependency.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from functools import partial
from pathlib import Path

from postgis_point.core.config.layout import (
    HOOKS_FILE,
    LIQUIBASE_MASTER,
    NEEDLE_MAVEN_DEPENDENCY,
    POM_FILE,
    PROFILE_FILES,
    RESOURCES_CONFIG_DIR,
    dialect_source_path,
)
from postgis_point.core.models.app import AppConfig
from postgis_point.core.models.template import GeneratedFile
from postgis_point.core.persistence.text_file import read_text, write_text_atomic
from postgis_point.core.services.entity_regenerate import write_plan
from postgis_point.core.services.generators.module_files import (
    dialect_class,
    generate_module_files,
)
from postgis_point.core.services.splicer import (
    Edit,
    apply_edits,
    insert_at,
    replace_literal,
)

logger = logging.getLogger(__name__)

NPM_PACKAGE_NAME = "generator-jhipster-entity-postgis-point"
HOOK_CALLBACK = f"{NPM_PACKAGE_NAME}:entity"

# JHipster hooks can only start a Yeoman generator, so the hook entry
# needs the npm generator installed; without it this is the command to
# run after "jhipster entity"
REGENERATE_COMMAND = "postgis-point entity {entity} --regenerate"
HOOK_NOTE = (
    f"The entity hook runs through the npm generator {NPM_PACKAGE_NAME}. "
    f"Without it, run \"{REGENERATE_COMMAND.format(entity='<Entity>')}\" "
    "after \"jhipster entity\"."
)

# Dialect JHipster configures for PostgreSQL apps
DEFAULT_DIALECT = "io.github.jhipster.domain.util.FixedPostgreSQL82Dialect"

HIBERNATE_SPATIAL_DEPENDENCY = """\
<dependency>
    <groupId>org.hibernate</groupId>
    <artifactId>hibernate-spatial</artifactId>
    <version>5.2.4.Final</version>
</dependency>"""

CHANGELOG_FILE_LINE = (
    "<changeLogFile>src/main/resources/config/liquibase/master.xml</changeLogFile>"
)
DIFF_EXCLUDE_LINE = (
    "<diffExcludeObjects>geography_columns, geometry_columns, raster_columns, "
    "raster_overviews, spatial_ref_sys</diffExcludeObjects>"
)

INITIAL_SCHEMA_INCLUDE = "config/liquibase/changelog/00000000000000_initial_schema.xml"
POSTGIS_INCLUDE = (
    '<include file="config/liquibase/changelog/postgis.xml" '
    'relativeToChangelogFile="false"/>'
)


class ModuleInitError(Exception):
    """Raised when a file the initialization must patch is missing."""


@dataclass
class InitResult:
    """Outcome of ``initialize_module``."""

    already_initialized: bool = False
    created: list[str] = field(default_factory=list)
    patched: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    hook_registered: bool = False
    hook_note: str = HOOK_NOTE

    def to_dict(self) -> dict:
        return {
            "already_initialized": self.already_initialized,
            "created": self.created,
            "patched": self.patched,
            "warnings": self.warnings,
            "hook_registered": self.hook_registered,
            "hook_note": self.hook_note,
        }


def is_initialized(project_root: Path, app: AppConfig) -> bool:
    """True once the PostGIS dialect exists in the app."""
    return (project_root / dialect_source_path(app)).is_file()


# ── Patches ─────────────────────────────────────────────────────


def _profile_edits(app: AppConfig) -> list[Edit]:
    return [partial(replace_literal, old=DEFAULT_DIALECT, new=dialect_class(app))]


def _pom_edits(pom: str, warnings: list[str]) -> list[Edit]:
    edits: list[Edit] = []
    if "<artifactId>hibernate-spatial</artifactId>" not in pom:
        edits.append(partial(insert_at, anchor=NEEDLE_MAVEN_DEPENDENCY,
                             snippet=HIBERNATE_SPATIAL_DEPENDENCY))
    if "<diffExcludeObjects>" not in pom:
        if CHANGELOG_FILE_LINE in pom:
            edits.append(partial(insert_at, anchor=CHANGELOG_FILE_LINE,
                                 snippet=DIFF_EXCLUDE_LINE, after=True))
        else:
            warnings.append(
                f"{POM_FILE}: no Liquibase <changeLogFile> configuration, "
                "PostGIS tables not excluded from liquibase:diff"
            )
    return edits


def _master_edits(master: str) -> list[Edit]:
    if "changelog/postgis.xml" in master:
        return []
    return [partial(insert_at, anchor=INITIAL_SCHEMA_INCLUDE, snippet=POSTGIS_INCLUDE, after=True)]


def _plan_patch(project_root: Path, rel_path: str, edits: list[Edit], reason: str) -> GeneratedFile | None:
    original = read_text(project_root / rel_path)
    updated = apply_edits(original, edits, target=rel_path)
    if updated == original:
        return None
    return GeneratedFile(path=rel_path, content=updated, overwrite=True, reason=reason)


def plan_initialization(project_root: Path, app: AppConfig) -> tuple[list[GeneratedFile], list[str]]:
    """Compute support files and patched project files.

    Returns:
        (files to write, warnings).

    Raises:
        ModuleInitError: If pom.xml or master.xml is missing.
        MarkerNotFoundError: If a needle is missing.
    """
    warnings: list[str] = []
    planned: list[GeneratedFile] = [
        gf for gf in generate_module_files(app)
        if not (project_root / gf.path).exists()
    ]

    for rel_path in (POM_FILE, LIQUIBASE_MASTER):
        if not (project_root / rel_path).is_file():
            raise ModuleInitError(f"File not found: {rel_path}")

    for profile, filename in PROFILE_FILES.items():
        rel_path = f"{RESOURCES_CONFIG_DIR}/{filename}"
        path = project_root / rel_path
        if not path.is_file():
            warnings.append(f"{rel_path} not found, {profile} dialect not configured")
            continue
        text = read_text(path)
        if DEFAULT_DIALECT not in text and dialect_class(app) not in text:
            warnings.append(f"{rel_path}: no {DEFAULT_DIALECT} to replace")
        patch = _plan_patch(project_root, rel_path, _profile_edits(app), f"{profile} dialect")
        if patch:
            planned.append(patch)

    pom = read_text(project_root / POM_FILE)
    patch = _plan_patch(project_root, POM_FILE, _pom_edits(pom, warnings), "hibernate-spatial")
    if patch:
        planned.append(patch)

    master = read_text(project_root / LIQUIBASE_MASTER)
    patch = _plan_patch(project_root, LIQUIBASE_MASTER, _master_edits(master), "postgis changelog")
    if patch:
        planned.append(patch)

    return planned, warnings


# ── Hook registration ──────────────────────────────────────────


def register_hook(project_root: Path) -> bool:
    """Register the post-entity hook in ``.jhipster/modules/jhi-hooks.json``.

    Returns:
        True if the hook was added, False if it was already there.

    Raises:
        OSError / ValueError: If the hooks file can't be read or written.
    """
    path = project_root / HOOKS_FILE
    hooks: list = []
    if path.is_file():
        hooks = json.loads(read_text(path))
        if not isinstance(hooks, list):
            raise ValueError(f"Expected a JSON array in {HOOKS_FILE}")

    hook = {
        "name": "Entity postgis point generator",
        "npmPackageName": NPM_PACKAGE_NAME,
        "description": "Add PostGIS point fields to entities",
        "hookFor": "entity",
        "hookType": "post",
        "generatorCallback": HOOK_CALLBACK,
    }
    if any(
        h.get("npmPackageName") == NPM_PACKAGE_NAME and h.get("hookFor") == "entity"
        for h in hooks if isinstance(h, dict)
    ):
        return False

    hooks.append(hook)
    write_text_atomic(path, json.dumps(hooks, indent=4) + "\n")
    logger.info("Registered post-entity hook in %s", HOOKS_FILE)
    return True


# ── Entry point ────────────────────────────────────────────────


def initialize_module(project_root: Path, app: AppConfig) -> InitResult:
    """Install PostGIS support into the app.

    Raises:
        ModuleInitError: If a required project file is missing.
        MarkerNotFoundError: If a needle is missing; nothing is written.
    """
    result = InitResult(already_initialized=is_initialized(project_root, app))

    planned, result.warnings = plan_initialization(project_root, app)
    created = {gf.path for gf in planned if not gf.overwrite}
    for path in write_plan(project_root, planned):
        (result.created if path in created else result.patched).append(path)

    try:
        result.hook_registered = register_hook(project_root)
    except (OSError, ValueError) as e:
        logger.warning("Could not register as a post entity creation hook: %s", e)
        result.warnings.append(f"Could not register as a post entity creation hook: {e}")

    for warning in result.warnings:
        logger.warning("%s", warning)
    logger.info("Initialized: %d created, %d patched", len(result.created), len(result.patched))
    return result
