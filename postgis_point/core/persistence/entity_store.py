"""
Entity descriptor persistence — the ``.jhipster/<Entity>.json`` sidecars.

JHipster owns these documents; the plugin owns exactly one key in each
(``postgisFields``).  Descriptors are read whole and written whole, with
4-space indentation so the diff after a regeneration only shows the
point-field records.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from postgis_point.core.config.layout import ENTITY_CONFIG_DIR, entity_descriptor_path
from postgis_point.core.models.field import FieldDefinition
from postgis_point.core.persistence.text_file import read_text, write_text_atomic

logger = logging.getLogger(__name__)

# Plugin-owned key inside the entity descriptor
POINT_FIELDS_KEY = "postgisFields"

_JSON_INDENT = 4


class EntityStoreError(Exception):
    """Raised when entity descriptors can't be listed or read."""


def list_entities(project_root: Path) -> list[str]:
    """List entity names from the descriptor directory.

    Returns:
        Sorted entity names (file stems of ``.jhipster/*.json``).

    Raises:
        EntityStoreError: If the directory can't be read.
    """
    config_dir = project_root / ENTITY_CONFIG_DIR
    try:
        entries = list(config_dir.iterdir())
    except OSError as e:
        raise EntityStoreError(
            f"Could not read entities from {config_dir}, "
            f"you might not have generated any entities yet: {e}"
        ) from e

    names = sorted(p.stem for p in entries if p.is_file() and p.suffix == ".json")
    logger.debug("Found %d entities in %s", len(names), config_dir)
    return names


def read_descriptor(project_root: Path, entity_name: str) -> dict[str, Any]:
    """Read an entity descriptor.

    Raises:
        EntityStoreError: If the file is missing, unreadable or not a JSON object.
    """
    path = entity_descriptor_path(project_root, entity_name)
    try:
        data = json.loads(read_text(path))
    except FileNotFoundError as e:
        raise EntityStoreError(f"No descriptor for entity '{entity_name}' at {path}") from e
    except OSError as e:
        raise EntityStoreError(f"Cannot read {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise EntityStoreError(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(data, dict):
        raise EntityStoreError(f"Expected a JSON object in {path}, got {type(data).__name__}")
    return data


def read_point_fields(project_root: Path, entity_name: str) -> list[Any]:
    """Return the raw ``postgisFields`` records of an entity (``[]`` when absent)."""
    data = read_descriptor(project_root, entity_name)
    raw = data.get(POINT_FIELDS_KEY)
    if not raw:
        return []
    if not isinstance(raw, list):
        raise EntityStoreError(
            f"'{POINT_FIELDS_KEY}' is not an array in "
            f"{entity_descriptor_path(project_root, entity_name)}"
        )
    return raw


def dump_descriptor(data: dict[str, Any]) -> str:
    """Serialize a descriptor the way JHipster writes it."""
    return json.dumps(data, indent=_JSON_INDENT, ensure_ascii=False) + "\n"


def write_point_fields(
    project_root: Path,
    entity_name: str,
    fields: list[FieldDefinition],
) -> Path:
    """Replace the entity's point fields and write the descriptor back.

    Every other key of the descriptor is preserved as read.

    Returns:
        Path of the written descriptor.
    """
    path = entity_descriptor_path(project_root, entity_name)
    data = read_descriptor(project_root, entity_name)
    data[POINT_FIELDS_KEY] = [f.to_json() for f in fields]
    write_text_atomic(path, dump_descriptor(data))
    logger.info("Saved %d point field(s) to %s", len(fields), path)
    return path
