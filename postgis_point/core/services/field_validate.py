"""
Point field validation — name checks at entry time, record checks before writing.

Two passes:

- ``validate_field_name`` runs while the user types a name.  It only
  decides whether the name is legal and unused; rules are checked in a
  fixed order and the first failure is reported.
- ``validate_field_set`` runs over the records read back from the entity
  descriptor before any file is regenerated, catching hand edits
  (missing keys, unknown validation rules, repeated names).

Channel-independent: no click dependency.
"""

from __future__ import annotations

import json
import re
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from postgis_point.core.models.field import FieldDefinition, snake_case
from postgis_point.core.services.reserved_keywords import is_reserved_field_name

_NAME_RE = re.compile(r"^[a-zA-Z0-9_]*$")

# Validation rule tags JHipster understands on an entity field
SUPPORTED_VALIDATION_RULES: tuple[str, ...] = (
    "required",
    "unique",
    "minlength",
    "maxlength",
    "pattern",
    "min",
    "max",
    "minbytes",
    "maxbytes",
)

# Rules offered by the wizard for a point field
POINT_VALIDATION_RULES: tuple[str, ...] = ("required",)

# ── Rejection codes ─────────────────────────────────────────────

INVALID_CHARACTERS = "invalid_characters"
EMPTY_NAME = "empty_name"
UPPERCASE_START = "uppercase_start"
NAME_ALREADY_USED = "name_already_used"
RESERVED_KEYWORD = "reserved_keyword"

_MESSAGES: dict[str, str] = {
    INVALID_CHARACTERS: "Your field name cannot contain special characters",
    EMPTY_NAME: "Your field name cannot be empty",
    UPPERCASE_START: "Your field name cannot start with an upper case letter",
    NAME_ALREADY_USED: "Your field name cannot use an already existing field name",
    RESERVED_KEYWORD: "Your field name cannot contain a Java or Angular reserved keyword",
}


class FieldValidationError(Exception):
    """Raised when a stored point field record is malformed."""


@dataclass(frozen=True)
class FieldNameCheck:
    """Outcome of a field name check.

    ``code`` is None when the name was accepted.
    """

    name: str
    code: str | None = None

    @property
    def ok(self) -> bool:
        return self.code is None

    @property
    def message(self) -> str:
        return _MESSAGES.get(self.code, "") if self.code else ""


def validate_field_name(name: str, used_names: Iterable[str]) -> FieldNameCheck:
    """Check a candidate field name against the entity's used names.

    Args:
        name: The raw name as typed.
        used_names: snake_case names already taken on the entity.

    Returns:
        FieldNameCheck: ``ok``, or the first rule the name violates.
    """
    if not _NAME_RE.match(name):
        return FieldNameCheck(name, INVALID_CHARACTERS)
    if name == "":
        return FieldNameCheck(name, EMPTY_NAME)
    if name[0] == name[0].upper():
        return FieldNameCheck(name, UPPERCASE_START)
    if name == "id" or snake_case(name) in set(used_names):
        return FieldNameCheck(name, NAME_ALREADY_USED)
    if is_reserved_field_name(name):
        return FieldNameCheck(name, RESERVED_KEYWORD)
    return FieldNameCheck(name)


def _describe(record: Any) -> str:
    return json.dumps(record, indent=4, default=str)


def validate_field_set(entity_name: str, raw_fields: list[Any]) -> list[FieldDefinition]:
    """Validate stored point field records and build the field list.

    Args:
        entity_name: Entity the records belong to (used in messages).
        raw_fields: Records as read from ``postgisFields``.

    Returns:
        Parsed FieldDefinitions, in stored order.

    Raises:
        FieldValidationError: On the first malformed record.
    """
    where = f".jhipster/{entity_name}.json"
    fields: list[FieldDefinition] = []
    taken: set[str] = set()

    for record in raw_fields:
        if not isinstance(record, dict):
            raise FieldValidationError(f"Field is not an object in {where}: {_describe(record)}")
        if record.get("fieldName") is None:
            raise FieldValidationError(
                f"fieldName is missing in {where} for field {_describe(record)}"
            )
        if record.get("fieldType") is None:
            raise FieldValidationError(
                f"fieldType is missing in {where} for field {_describe(record)}"
            )

        rules = record.get("fieldValidateRules")
        if rules is not None:
            if not isinstance(rules, list):
                raise FieldValidationError(
                    f"fieldValidateRules is not an array in {where} for field {_describe(record)}"
                )
            for rule in rules:
                if rule not in SUPPORTED_VALIDATION_RULES:
                    raise FieldValidationError(
                        f"fieldValidateRules contains unknown validation rule {rule} in "
                        f"{where} for field {_describe(record)} "
                        f"[supported validation rules {', '.join(SUPPORTED_VALIDATION_RULES)}]"
                    )

        try:
            field = FieldDefinition.model_validate({
                **record,
                "fieldValidateRules": list(rules or []),
            })
        except ValidationError as e:
            raise FieldValidationError(
                f"Invalid field in {where}: {_describe(record)}: {e}"
            ) from e

        names = {snake_case(field.name), field.key}
        if "id" in names or names & taken:
            raise FieldValidationError(
                f"fieldName {field.name} is already used in {where}: {_describe(record)}"
            )
        taken |= names
        fields.append(field)

    return fields
