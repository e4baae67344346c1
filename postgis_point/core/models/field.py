"""
Point field model — one geospatial field attached to an entity.

Serialized inside ``.jhipster/<Entity>.json`` under ``postgisFields``
using JHipster's own field naming (``fieldName``, ``fieldKey`` …) so the
records read naturally next to the entity's regular ``fields``.
"""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Only kind this plugin generates
POINT_KIND = "point"

# Older descriptors tagged point fields as "postgis"
_LEGACY_KINDS = frozenset({"postgis"})

_WORD_RE = re.compile(r"[A-Z]+(?=[A-Z][a-z])|[A-Z]?[a-z]+|[A-Z]+|[0-9]+")


def snake_case(name: str) -> str:
    """Split a name into words and join them with underscores.

    ``myField`` → ``my_field``, ``HTTPServer`` → ``http_server``,
    ``field2`` → ``field_2``.
    """
    return "_".join(word.lower() for word in _WORD_RE.findall(name))


def upper_first(name: str) -> str:
    """Capitalize the first character only."""
    return name[:1].upper() + name[1:]


class FieldDefinition(BaseModel):
    """A point field on an entity.

    Attributes:
        name:             Java field name as typed by the user.
        key:              snake_case form, used for the column name.
        kind:             Always ``point``.
        validation_rules: Rule tags, e.g. ``["required"]``.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(alias="fieldName")
    key: str = Field(default="", alias="fieldKey")
    kind: str = Field(default=POINT_KIND, alias="fieldType")
    validation_rules: list[str] = Field(default_factory=list, alias="fieldValidateRules")

    @field_validator("kind")
    @classmethod
    def _normalize_kind(cls, value: str) -> str:
        if value in _LEGACY_KINDS:
            return POINT_KIND
        return value

    def model_post_init(self, __context: object) -> None:
        if not self.key:
            self.key = snake_case(self.name)

    @classmethod
    def create(cls, name: str, validation_rules: list[str] | None = None) -> FieldDefinition:
        """Build a field from a freshly entered name."""
        return cls(
            name=name,
            key=snake_case(name),
            kind=POINT_KIND,
            validation_rules=list(validation_rules or []),
        )

    @property
    def java_name(self) -> str:
        """Name of the generated JPA attribute (``locationPoint``)."""
        return f"{self.name}Point"

    @property
    def column_name(self) -> str:
        """Name of the generated geometry column (``location_point``)."""
        return f"{self.key}_point"

    @property
    def required(self) -> bool:
        return "required" in self.validation_rules

    def to_json(self) -> dict:
        """Serialize with the descriptor's key names."""
        return self.model_dump(by_alias=True)
