"""
Domain models — Pydantic types for the plugin.

All models are re-exported here for convenient access:

    from postgis_point.core.models import AppConfig, FieldDefinition, GeneratedFile
"""

from postgis_point.core.models.app import AppConfig
from postgis_point.core.models.field import (
    POINT_KIND,
    FieldDefinition,
    snake_case,
    upper_first,
)
from postgis_point.core.models.template import GeneratedFile

__all__ = [
    # app.py
    "AppConfig",
    # field.py
    "FieldDefinition",
    "POINT_KIND",
    "snake_case",
    "upper_first",
    # template.py
    "GeneratedFile",
]
