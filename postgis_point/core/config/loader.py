"""
Configuration loader — the app descriptor and its Spring profiles.

``.yo-rc.json`` (JSON, owned by JHipster) gives the package, database
and generator version; its ``generator-jhipster`` section becomes an
``AppConfig``.  ``application-<profile>.yml`` (YAML) is only read, to
report which Hibernate dialect each profile runs.

Everything here raises ``ConfigError``; the CLI turns it into exit code 1.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from postgis_point.core.config.layout import PROFILE_FILES, RESOURCES_CONFIG_DIR
from postgis_point.core.models.app import AppConfig

logger = logging.getLogger(__name__)

# JHipster project descriptor
PROJECT_CONFIG_FILE = ".yo-rc.json"
GENERATOR_KEY = "generator-jhipster"

# Oldest JHipster release whose entity templates carry the needles we use
MIN_JHIPSTER_VERSION = "4.14.0"


class ConfigError(Exception):
    """Raised when the application descriptor is missing, invalid or unsupported."""


def find_project_file(start_dir: Path | None = None) -> Path | None:
    """Return the nearest .yo-rc.json at or above ``start_dir`` (default: cwd).

    JHipster writes the descriptor at the app root, so commands run from
    ``src/main/java/...`` still find their app.
    """
    start = (start_dir or Path.cwd()).resolve()
    for directory in (start, *start.parents):
        candidate = directory / PROJECT_CONFIG_FILE
        if candidate.is_file():
            logger.debug("Found %s in %s", PROJECT_CONFIG_FILE, directory)
            return candidate
    return None


def _read_generator_section(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {path}: {e}") from e

    section = data.get(GENERATOR_KEY) if isinstance(data, dict) else None
    if not isinstance(section, dict):
        raise ConfigError(f"No '{GENERATOR_KEY}' section in {path}")
    return section


def load_app_config(path: Path | None = None) -> AppConfig:
    """Load the ``generator-jhipster`` section of .yo-rc.json.

    Args:
        path: Explicit descriptor path; searched upward from the cwd when None.

    Raises:
        ConfigError: If no descriptor is found, or it can't be read or validated.
    """
    path = path or find_project_file()
    if path is None:
        raise ConfigError(
            f"Can't read {PROJECT_CONFIG_FILE}. "
            "Run this command from a JHipster application, or specify --config."
        )
    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading app config from %s", path)
    try:
        app = AppConfig.model_validate(_read_generator_section(path))
    except ValidationError as e:
        raise ConfigError(f"Invalid application configuration in {path}: {e}") from e

    logger.info("Loaded app '%s' (package %s)", app.base_name, app.package_name)
    return app


def require_postgresql(app: AppConfig) -> None:
    """Refuse to run against anything but a PostgreSQL SQL application.

    Raises:
        ConfigError: If the dev or prod database is not PostgreSQL.
    """
    if not app.uses_postgresql():
        raise ConfigError(
            "This sub generator should be used only from Postgresql database "
            f"(databaseType={app.database_type or '?'}, "
            f"devDatabaseType={app.dev_database_type or '?'}, "
            f"prodDatabaseType={app.prod_database_type or '?'})"
        )


def _version_tuple(version: str) -> tuple[int, ...]:
    parts: list[int] = []
    for piece in version.strip().lstrip("v").split("."):
        digits = ""
        for ch in piece:
            if not ch.isdigit():
                break
            digits += ch
        if not digits:
            break
        parts.append(int(digits))
    return tuple(parts)


def check_jhipster_version(app: AppConfig) -> str | None:
    """Return a warning when the app was generated by an old JHipster.

    An empty or unparsable version is not an error; the descriptor of
    very old apps simply doesn't carry it.
    """
    current = _version_tuple(app.jhipster_version)
    if not current:
        return None
    if current < _version_tuple(MIN_JHIPSTER_VERSION):
        return (
            f"Your generated project used an old JHipster version "
            f"({app.jhipster_version})... you need at least ({MIN_JHIPSTER_VERSION})"
        )
    return None


def load_profile_settings(project_root: Path, profile: str) -> dict[str, Any]:
    """Load a Spring ``application-<profile>.yml`` as a dict.

    Returns an empty dict when the profile file doesn't exist.

    Raises:
        ConfigError: If the file exists but isn't valid YAML.
    """
    path = project_root / RESOURCES_CONFIG_DIR / PROFILE_FILES[profile]
    if not path.is_file():
        return {}

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    return data if isinstance(data, dict) else {}


def database_platform(settings: dict[str, Any]) -> str | None:
    """Extract ``spring.jpa.database-platform`` from profile settings."""
    spring = settings.get("spring") or {}
    jpa = spring.get("jpa") if isinstance(spring, dict) else None
    if not isinstance(jpa, dict):
        return None
    value = jpa.get("database-platform")
    return str(value) if value else None


def project_root(config_path: Path) -> Path:
    """Get the project root directory from a config file path."""
    return config_path.parent.resolve()
