"""
JHipster project layout — paths and needles owned by the host generator.

These are fixed contracts: the plugin locates files and insertion points
by them and never rewrites the needle text itself.
"""

from __future__ import annotations

from pathlib import Path

from postgis_point.core.models.app import AppConfig

# ── Directories ─────────────────────────────────────────────────

ENTITY_CONFIG_DIR = ".jhipster"
MODULES_DIR = ".jhipster/modules"
SERVER_MAIN_SRC_DIR = "src/main/java"
RESOURCES_CONFIG_DIR = "src/main/resources/config"
LIQUIBASE_DIR = "src/main/resources/config/liquibase"
LIQUIBASE_CHANGELOG_DIR = "src/main/resources/config/liquibase/changelog"

# ── Files ───────────────────────────────────────────────────────

POM_FILE = "pom.xml"
LIQUIBASE_MASTER = f"{LIQUIBASE_DIR}/master.xml"
HOOKS_FILE = f"{MODULES_DIR}/jhi-hooks.json"

PROFILE_FILES: dict[str, str] = {
    "dev": "application-dev.yml",
    "prod": "application-prod.yml",
}

# ── Needles (host generator insertion points) ──────────────────

NEEDLE_ENTITY_FIELD = "jhipster-needle-entity-add-field"
NEEDLE_ENTITY_ACCESSORS = "jhipster-needle-entity-add-getters-setters"
NEEDLE_LIQUIBASE_COLUMN = "jhipster-needle-liquibase-add-column"
NEEDLE_MAVEN_DEPENDENCY = "jhipster-needle-maven-add-dependency"


def entity_source_path(app: AppConfig, entity_name: str) -> str:
    """Relative path of the JPA domain class for an entity."""
    return f"{SERVER_MAIN_SRC_DIR}/{app.java_package_folder}/domain/{entity_name}.java"


def dialect_source_path(app: AppConfig) -> str:
    """Relative path of the PostGIS Hibernate dialect."""
    return f"{SERVER_MAIN_SRC_DIR}/{app.java_package_folder}/config/PostgresDialect.java"


def entity_descriptor_path(project_root: Path, entity_name: str) -> Path:
    """Absolute path of ``.jhipster/<Entity>.json``."""
    return project_root / ENTITY_CONFIG_DIR / f"{entity_name}.json"


def changelog_suffix(entity_name: str) -> str:
    """File-name fragment identifying an entity's Liquibase changelog."""
    return f"_added_entity_{entity_name}.xml"
