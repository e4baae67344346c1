"""
Status use case — what PostGIS support the app has, and which entities carry point fields.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from postgis_point.core.config.layout import PROFILE_FILES
from postgis_point.core.config.loader import (
    ConfigError,
    check_jhipster_version,
    database_platform,
    find_project_file,
    load_app_config,
    load_profile_settings,
)
from postgis_point.core.models.app import AppConfig
from postgis_point.core.persistence.entity_store import EntityStoreError, list_entities
from postgis_point.core.services.entity_regenerate import load_entity_fields
from postgis_point.core.services.field_validate import FieldValidationError
from postgis_point.core.services.generators.module_files import dialect_class
from postgis_point.core.services.module_init import is_initialized


@dataclass
class EntityStatus:
    """Point fields of one entity, or why they couldn't be read."""

    name: str
    fields: list[str] = field(default_factory=list)
    error: str | None = None


@dataclass
class StatusResult:
    """Aggregated plugin status."""

    app: AppConfig | None = None
    project_root: Path | None = None
    error: str | None = None

    initialized: bool = False
    postgresql: bool = False
    dialects: dict[str, str | None] = field(default_factory=dict)
    entities: list[EntityStatus] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def dialect_configured(self) -> bool:
        if not self.app or not self.dialects:
            return False
        expected = dialect_class(self.app)
        return all(value == expected for value in self.dialects.values())

    def to_dict(self) -> dict:
        """Convert to a JSON-serializable dictionary."""
        if self.error:
            return {"error": self.error}

        return {
            "app": {
                "base_name": self.app.base_name if self.app else "",
                "package_name": self.app.package_name if self.app else "",
                "jhipster_version": self.app.jhipster_version if self.app else "",
            },
            "project_root": str(self.project_root) if self.project_root else None,
            "postgresql": self.postgresql,
            "initialized": self.initialized,
            "dialects": self.dialects,
            "dialect_configured": self.dialect_configured,
            "entities": [
                {"name": e.name, "point_fields": e.fields, "error": e.error}
                for e in self.entities
            ],
            "warnings": self.warnings,
        }


def get_status(config_path: Path | None = None) -> StatusResult:
    """Get the plugin status for the app at ``config_path`` (or the nearest one).

    Errors are reported in ``result.error``, never raised.
    """
    result = StatusResult()

    if config_path is None:
        config_path = find_project_file()
    try:
        app = load_app_config(config_path)
    except ConfigError as e:
        result.error = str(e)
        return result

    assert config_path is not None  # load_app_config raises otherwise
    root = config_path.parent.resolve()
    result.app = app
    result.project_root = root
    result.postgresql = app.uses_postgresql()
    result.initialized = is_initialized(root, app)

    warning = check_jhipster_version(app)
    if warning:
        result.warnings.append(warning)

    for profile in PROFILE_FILES:
        try:
            result.dialects[profile] = database_platform(load_profile_settings(root, profile))
        except ConfigError as e:
            result.dialects[profile] = None
            result.warnings.append(str(e))

    try:
        names = list_entities(root)
    except EntityStoreError as e:
        result.warnings.append(str(e))
        names = []

    for name in names:
        entity = EntityStatus(name=name)
        try:
            entity.fields = [f.name for f in load_entity_fields(root, name)]
        except (EntityStoreError, FieldValidationError) as e:
            entity.error = str(e)
        result.entities.append(entity)

    return result
