"""
Module support files — the one-time files ``init`` copies into the app.

Returns ``GeneratedFile`` instances with ``overwrite=False``: once a
developer has the dialect or PostGIS changelog, the plugin never
replaces them.
"""

from __future__ import annotations

from postgis_point.core.config.layout import LIQUIBASE_DIR, dialect_source_path
from postgis_point.core.data import get_registry
from postgis_point.core.models.app import AppConfig
from postgis_point.core.models.template import GeneratedFile

# Placeholder package declaration in the bundled dialect
_TEMPLATE_PACKAGE = "package com;"

POSTGIS_SQL_PATH = f"{LIQUIBASE_DIR}/postgis.sql"
POSTGIS_CHANGELOG_PATH = f"{LIQUIBASE_DIR}/changelog/postgis.xml"


def dialect_class(app: AppConfig) -> str:
    """Fully qualified name of the generated dialect class."""
    return f"{app.package_name}.config.PostgresDialect"


def generate_dialect(app: AppConfig) -> GeneratedFile:
    """PostgresDialect.java in the app's ``config`` package."""
    content = get_registry().dialect_java.replace(
        _TEMPLATE_PACKAGE, f"package {app.package_name}.config;", 1,
    )
    return GeneratedFile(
        path=dialect_source_path(app),
        content=content,
        reason="PostGIS-aware Hibernate dialect",
    )


def generate_module_files(app: AppConfig) -> list[GeneratedFile]:
    """All support files, dialect first."""
    registry = get_registry()
    return [
        generate_dialect(app),
        GeneratedFile(
            path=POSTGIS_SQL_PATH,
            content=registry.postgis_sql,
            reason="Enable the PostGIS extension",
        ),
        GeneratedFile(
            path=POSTGIS_CHANGELOG_PATH,
            content=registry.postgis_changelog,
            reason="Liquibase changeset running postgis.sql",
        ),
    ]
