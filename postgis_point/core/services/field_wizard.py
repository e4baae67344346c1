"""
Point field wizard — the interactive add/remove flow for one entity.

The wizard is a short list of questions per step.  Each question says
how to ask (confirm / text / select / checkbox) and *when* to ask, as a
pure predicate over the answers given so far in the same step:

    fieldAdd ──yes──▶ fieldName ──▶ fieldValidate ──yes──▶ fieldValidateRules
       │
       no ──▶ done

``ask_questions`` interprets such a list against a ``Prompter``.  The CLI
supplies a click-backed prompter; tests supply a scripted one.

Channel-independent: no click dependency.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol

from postgis_point.core.models.field import FieldDefinition, snake_case
from postgis_point.core.persistence.entity_store import EntityStoreError
from postgis_point.core.services.field_validate import (
    POINT_VALIDATION_RULES,
    validate_field_name,
)

logger = logging.getLogger(__name__)

# ── Update modes ────────────────────────────────────────────────

UPDATE_ADD = "add"
UPDATE_REMOVE = "remove"
UPDATE_REGENERATE = "regenerate"
UPDATE_NONE = "none"

Answers = dict[str, Any]
Validator = Callable[[str], "str | None"]


class WizardAborted(Exception):
    """Raised when the user chooses to leave without changes."""


@dataclass(frozen=True)
class Choice:
    """One option of a select or checkbox question."""

    label: str
    value: Any


class Prompter(Protocol):
    """What the wizard needs from an interactive surface.

    ``text`` must keep asking until ``validate`` returns None.
    """

    def confirm(self, message: str, default: bool = False) -> bool: ...

    def text(self, message: str, validate: Validator | None = None) -> str: ...

    def select(self, message: str, choices: Sequence[Choice], default: Any = None) -> Any: ...

    def checkbox(self, message: str, choices: Sequence[Choice]) -> list[Any]: ...

    def note(self, message: str, style: str = "") -> None: ...


def _always(_answers: Answers) -> bool:
    return True


@dataclass
class Question:
    """A single prompt in a wizard step."""

    name: str
    kind: str  # confirm, text, select, checkbox
    message: str
    choices: Sequence[Choice] | Callable[[Answers], Sequence[Choice]] = ()
    default: Any = None
    when: Callable[[Answers], bool] = _always
    validate: Validator | None = None

    def resolve_choices(self, answers: Answers) -> list[Choice]:
        if callable(self.choices):
            return list(self.choices(answers))
        return list(self.choices)


def ask_questions(questions: Sequence[Question], prompter: Prompter) -> Answers:
    """Ask each question whose ``when`` holds, in order.

    Returns:
        Answers keyed by question name; skipped questions are absent.
    """
    answers: Answers = {}
    for q in questions:
        if not q.when(answers):
            continue
        if q.kind == "confirm":
            answers[q.name] = prompter.confirm(q.message, default=bool(q.default))
        elif q.kind == "text":
            answers[q.name] = prompter.text(q.message, validate=q.validate)
        elif q.kind == "select":
            answers[q.name] = prompter.select(q.message, q.resolve_choices(answers), default=q.default)
        elif q.kind == "checkbox":
            answers[q.name] = prompter.checkbox(q.message, q.resolve_choices(answers))
        else:
            raise ValueError(f"Unknown question kind: {q.kind!r}")
    return answers


# ═══════════════════════════════════════════════════════════════════
#  Entity selection
# ═══════════════════════════════════════════════════════════════════


def choose_entity(entities: Sequence[str], prompter: Prompter) -> str:
    """Ask which entity to update.

    Raises:
        EntityStoreError: If there are no entities at all.
    """
    if not entities:
        raise EntityStoreError("Aborting entity update, no entities found.")
    answers = ask_questions([
        Question(
            name="entityToUpdate",
            kind="select",
            message="Please choose the entity to update",
            choices=[Choice(name, name) for name in entities],
        ),
    ], prompter)
    return answers["entityToUpdate"]


# ═══════════════════════════════════════════════════════════════════
#  Field wizard
# ═══════════════════════════════════════════════════════════════════


UPDATE_CHOICES: tuple[Choice, ...] = (
    Choice("Yes, add more fields", UPDATE_ADD),
    Choice("Yes, remove fields", UPDATE_REMOVE),
    Choice("Yes, re generate the entity", UPDATE_REGENERATE),
    Choice("No, exit", UPDATE_NONE),
)

_RULE_LABELS = {"required": "Required"}


@dataclass
class FieldWizard:
    """Edits one entity's point fields in memory.

    Attributes:
        entity_name: Entity being edited.
        fields:      Current field list, mutated by the wizard.
        prompter:    Interactive surface.
    """

    entity_name: str
    fields: list[FieldDefinition]
    prompter: Prompter
    used_names: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.fields = list(self.fields)
        self.used_names = [snake_case(f.name) for f in self.fields]

    # ── Summary ─────────────────────────────────────────────────

    def summary_lines(self) -> list[str]:
        """Human-readable listing of the current fields."""
        if not self.fields:
            return []
        lines = [f"================= {self.entity_name} =================", "Fields"]
        for f in self.fields:
            rules = " ".join(r for r in f.validation_rules if r in POINT_VALIDATION_RULES)
            lines.append(f"{f.name} ({f.kind}) {rules}".rstrip())
        return lines

    def log_fields(self) -> None:
        for line in self.summary_lines():
            self.prompter.note(line)
            logger.info("%s", line)

    # ── Update mode ─────────────────────────────────────────────

    def ask_update_mode(self) -> str:
        answers = ask_questions([
            Question(
                name="updateEntity",
                kind="select",
                message=(
                    "Do you want to update point fields? This will replace the existing "
                    "point field code for this entity, all your custom code will be overwritten"
                ),
                choices=UPDATE_CHOICES,
                default=UPDATE_ADD,
            ),
        ], self.prompter)
        return answers["updateEntity"]

    # ── Add ─────────────────────────────────────────────────────

    def check_name(self, name: str) -> str | None:
        """Validator for the name prompt: None when accepted, else the reason."""
        result = validate_field_name(name, self.used_names)
        return None if result.ok else result.message

    def field_questions(self) -> list[Question]:
        def adding(a: Answers) -> bool:
            return a.get("fieldAdd") is True

        return [
            Question(
                name="fieldAdd",
                kind="confirm",
                message="Do you want to add a field to your entity?",
                default=True,
            ),
            Question(
                name="fieldName",
                kind="text",
                message="What is the name of your field?",
                when=adding,
                validate=self.check_name,
            ),
            Question(
                name="fieldValidate",
                kind="confirm",
                message="Do you want to add validation rules to your field?",
                default=False,
                when=adding,
            ),
            Question(
                name="fieldValidateRules",
                kind="checkbox",
                message="Which validation rules do you want to add?",
                choices=[Choice(_RULE_LABELS[r], r) for r in POINT_VALIDATION_RULES],
                when=lambda a: adding(a) and a.get("fieldValidate") is True,
            ),
        ]

    def add_field(self, name: str, rules: Sequence[str] = ()) -> FieldDefinition:
        """Append a field, re-checking the name.

        Raises:
            ValueError: If the name is rejected.
        """
        reason = self.check_name(name)
        if reason:
            raise ValueError(reason)
        new_field = FieldDefinition.create(name, list(rules))
        self.fields.append(new_field)
        self.used_names.append(new_field.key)
        logger.info("Added point field %s to %s", name, self.entity_name)
        return new_field

    def ask_for_field(self) -> FieldDefinition | None:
        """Ask for one field; None when the user declines."""
        self.prompter.note(f"\nGenerating field #{len(self.fields) + 1}\n", style="green")
        answers = ask_questions(self.field_questions(), self.prompter)
        if not answers.get("fieldAdd"):
            return None
        new_field = self.add_field(answers["fieldName"], answers.get("fieldValidateRules") or [])
        self.log_fields()
        return new_field

    def ask_for_fields(self) -> list[FieldDefinition]:
        """Keep asking for fields until the user declines."""
        self.log_fields()
        while self.ask_for_field() is not None:
            pass
        return self.fields

    # ── Remove ──────────────────────────────────────────────────

    def remove_fields(self, names: Sequence[str]) -> list[FieldDefinition]:
        """Delete every field whose name is in ``names``."""
        wanted = set(names)
        removed: list[FieldDefinition] = []
        for i in range(len(self.fields) - 1, -1, -1):
            if self.fields[i].name in wanted:
                removed.insert(0, self.fields.pop(i))
        self.used_names = [snake_case(f.name) for f in self.fields]
        if removed:
            logger.info("Removed point field(s) %s from %s",
                        ", ".join(f.name for f in removed), self.entity_name)
        return removed

    def ask_for_fields_to_remove(self) -> list[FieldDefinition]:
        if not self.fields:
            self.prompter.note(f"{self.entity_name} has no point fields to remove.", style="yellow")
            return []
        answers = ask_questions([
            Question(
                name="fieldsToRemove",
                kind="checkbox",
                message="Please choose the fields you want to remove",
                choices=lambda _a: [Choice(f.name, f.name) for f in self.fields],
            ),
            Question(
                name="confirmRemove",
                kind="confirm",
                message="Are you sure to remove these fields?",
                default=True,
                when=lambda a: len(a.get("fieldsToRemove") or []) != 0,
            ),
        ], self.prompter)
        if not answers.get("confirmRemove"):
            return []
        names = answers["fieldsToRemove"]
        self.prompter.note(f"\nRemoving fields: {', '.join(names)}\n", style="red")
        return self.remove_fields(names)

    # ── Flow ────────────────────────────────────────────────────

    def run(self) -> list[FieldDefinition]:
        """Ask for the update mode and apply it.

        Raises:
            WizardAborted: If the user picks "No, exit".
        """
        mode = self.ask_update_mode()
        logger.debug("Update mode for %s: %s", self.entity_name, mode)
        if mode == UPDATE_NONE:
            raise WizardAborted("Aborting entity update, no changes were made.")
        if mode == UPDATE_ADD:
            self.ask_for_fields()
        elif mode == UPDATE_REMOVE:
            self.ask_for_fields_to_remove()
        return self.fields
