"""
Bundled support files copied into a JHipster app by ``postgis-point init``.

Templates live in ``postgis_point/core/data/templates/`` and are read
once at first access, then cached for the process lifetime.

Usage::

    from postgis_point.core.data import get_registry

    registry = get_registry()
    dialect = registry.dialect_java     # str, still "package com;"
"""

from __future__ import annotations

import logging
from functools import cached_property
from pathlib import Path

logger = logging.getLogger(__name__)

_DATA_DIR = Path(__file__).parent
_TEMPLATES_DIR = _DATA_DIR / "templates"


def load_template(relative_path: str) -> str:
    """Read a bundled template relative to the templates directory.

    Raises:
        FileNotFoundError: If the template isn't bundled.
    """
    path = _TEMPLATES_DIR / relative_path
    with open(path, encoding="utf-8") as f:
        content = f.read()
    logger.debug("Loaded template %s (%d bytes)", relative_path, len(content))
    return content


class TemplateRegistry:
    """Lazily loaded support-file templates."""

    @cached_property
    def dialect_java(self) -> str:
        """Hibernate dialect extending PostgisDialect."""
        return load_template("java/PostgresDialect.java")

    @cached_property
    def postgis_sql(self) -> str:
        """SQL enabling the PostGIS extension."""
        return load_template("liquibase/postgis.sql")

    @cached_property
    def postgis_changelog(self) -> str:
        """Liquibase changelog running ``postgis.sql``."""
        return load_template("liquibase/changelog/postgis.xml")


# ── Module-level singleton ───────────────────────────────────────

_registry: TemplateRegistry | None = None


def get_registry() -> TemplateRegistry:
    """Return the process-level TemplateRegistry singleton."""
    global _registry  # noqa: PLW0603
    if _registry is None:
        _registry = TemplateRegistry()
    return _registry
