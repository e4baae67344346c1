"""
Tests for the point field wizard — question interpreter, add/remove flows.

A scripted prompter replays answers in order and records what was asked.
"""

from collections.abc import Sequence
from typing import Any

import pytest

from postgis_point.core.models.field import FieldDefinition
from postgis_point.core.persistence.entity_store import EntityStoreError
from postgis_point.core.services.field_wizard import (
    UPDATE_ADD,
    UPDATE_NONE,
    UPDATE_REGENERATE,
    UPDATE_REMOVE,
    Choice,
    FieldWizard,
    Question,
    WizardAborted,
    ask_questions,
    choose_entity,
)


class ScriptedPrompter:
    """Prompter replaying a fixed list of answers."""

    def __init__(self, answers: Sequence[Any]):
        self.answers = list(answers)
        self.asked: list[str] = []
        self.rejected: list[str] = []
        self.notes: list[str] = []

    def _next(self, message: str) -> Any:
        self.asked.append(message)
        if not self.answers:
            raise AssertionError(f"No scripted answer for: {message}")
        return self.answers.pop(0)

    def confirm(self, message, default=False):
        return self._next(message)

    def text(self, message, validate=None):
        while True:
            value = self._next(message)
            reason = validate(value) if validate else None
            if reason is None:
                return value
            self.rejected.append(reason)

    def select(self, message, choices, default=None):
        value = self._next(message)
        assert value in [c.value for c in choices]
        return value

    def checkbox(self, message, choices):
        values = self._next(message)
        assert all(v in [c.value for c in choices] for v in values)
        return values

    def note(self, message, style=""):
        self.notes.append(message)


def _fields(*names: str) -> list[FieldDefinition]:
    return [FieldDefinition.create(n) for n in names]


# ═══════════════════════════════════════════════════════════════════
#  Question interpreter
# ═══════════════════════════════════════════════════════════════════


class TestAskQuestions:
    def test_skips_questions_whose_when_is_false(self):
        questions = [
            Question(name="more", kind="confirm", message="More?"),
            Question(name="what", kind="text", message="What?", when=lambda a: a["more"]),
        ]
        prompter = ScriptedPrompter([False])
        assert ask_questions(questions, prompter) == {"more": False}
        assert prompter.asked == ["More?"]

    def test_when_sees_earlier_answers(self):
        questions = [
            Question(name="more", kind="confirm", message="More?"),
            Question(name="what", kind="text", message="What?", when=lambda a: a["more"]),
        ]
        answers = ask_questions(questions, ScriptedPrompter([True, "x"]))
        assert answers == {"more": True, "what": "x"}

    def test_dynamic_choices(self):
        questions = [
            Question(name="n", kind="select", message="N?",
                     choices=[Choice("one", 1), Choice("two", 2)]),
            Question(name="pick", kind="checkbox", message="Pick",
                     choices=lambda a: [Choice(str(i), i) for i in range(a["n"])]),
        ]
        answers = ask_questions(questions, ScriptedPrompter([2, [0, 1]]))
        assert answers["pick"] == [0, 1]

    def test_unknown_kind(self):
        with pytest.raises(ValueError, match="Unknown question kind"):
            ask_questions([Question(name="x", kind="slider", message="?")], ScriptedPrompter([]))


class TestChooseEntity:
    def test_picks_entity(self):
        prompter = ScriptedPrompter(["Parcel"])
        assert choose_entity(["Delivery", "Parcel"], prompter) == "Parcel"
        assert prompter.asked == ["Please choose the entity to update"]

    def test_no_entities(self):
        with pytest.raises(EntityStoreError, match="no entities found"):
            choose_entity([], ScriptedPrompter([]))


# ═══════════════════════════════════════════════════════════════════
#  Add flow
# ═══════════════════════════════════════════════════════════════════


class TestAddFields:
    def test_add_one_field(self):
        prompter = ScriptedPrompter([
            UPDATE_ADD,
            True, "location", False,
            False,
        ])
        fields = FieldWizard("Delivery", [], prompter).run()
        assert [f.to_json() for f in fields] == [{
            "fieldName": "location",
            "fieldKey": "location",
            "fieldType": "point",
            "fieldValidateRules": [],
        }]

    def test_add_with_required_rule(self):
        prompter = ScriptedPrompter([
            UPDATE_ADD,
            True, "homeBase", True, ["required"],
            False,
        ])
        fields = FieldWizard("Delivery", [], prompter).run()
        assert fields[0].key == "home_base"
        assert fields[0].validation_rules == ["required"]

    def test_declining_first_prompt_keeps_fields(self):
        existing = _fields("location")
        prompter = ScriptedPrompter([UPDATE_ADD, False])
        fields = FieldWizard("Delivery", existing, prompter).run()
        assert [f.name for f in fields] == ["location"]

    def test_adds_until_declined(self):
        prompter = ScriptedPrompter([
            UPDATE_ADD,
            True, "pickup", False,
            True, "dropOff", False,
            False,
        ])
        fields = FieldWizard("Delivery", [], prompter).run()
        assert [f.name for f in fields] == ["pickup", "dropOff"]
        assert any("Generating field #3" in n for n in prompter.notes)

    def test_invalid_names_are_asked_again(self):
        prompter = ScriptedPrompter([
            UPDATE_ADD,
            True, "Location", "location", "location2", False,
            False,
        ])
        wizard = FieldWizard("Delivery", _fields("location"), prompter)
        fields = wizard.run()
        assert [f.name for f in fields] == ["location", "location2"]
        assert prompter.rejected == [
            "Your field name cannot start with an upper case letter",
            "Your field name cannot use an already existing field name",
        ]

    def test_new_name_counts_as_used(self):
        prompter = ScriptedPrompter([
            UPDATE_ADD,
            True, "homeBase", False,
            True, "home_base", "base", False,
            False,
        ])
        fields = FieldWizard("Delivery", [], prompter).run()
        assert [f.name for f in fields] == ["homeBase", "base"]
        assert len(prompter.rejected) == 1

    def test_summary_lists_fields(self):
        wizard = FieldWizard("Delivery", [FieldDefinition.create("location", ["required"])],
                             ScriptedPrompter([]))
        assert wizard.summary_lines() == [
            "================= Delivery =================",
            "Fields",
            "location (point) required",
        ]

    def test_add_field_rejects_bad_name(self):
        wizard = FieldWizard("Delivery", [], ScriptedPrompter([]))
        with pytest.raises(ValueError, match="upper case"):
            wizard.add_field("Location")


# ═══════════════════════════════════════════════════════════════════
#  Remove flow / other modes
# ═══════════════════════════════════════════════════════════════════


class TestRemoveFields:
    def test_remove_selected(self):
        prompter = ScriptedPrompter([UPDATE_REMOVE, ["a"], True])
        fields = FieldWizard("Delivery", _fields("a", "b"), prompter).run()
        assert [f.name for f in fields] == ["b"]

    def test_remove_several_keeps_order(self):
        prompter = ScriptedPrompter([UPDATE_REMOVE, ["c", "a"], True])
        fields = FieldWizard("Delivery", _fields("a", "b", "c", "d"), prompter).run()
        assert [f.name for f in fields] == ["b", "d"]

    def test_not_confirmed_keeps_fields(self):
        prompter = ScriptedPrompter([UPDATE_REMOVE, ["a"], False])
        fields = FieldWizard("Delivery", _fields("a", "b"), prompter).run()
        assert [f.name for f in fields] == ["a", "b"]

    def test_empty_selection_skips_confirmation(self):
        prompter = ScriptedPrompter([UPDATE_REMOVE, []])
        fields = FieldWizard("Delivery", _fields("a"), prompter).run()
        assert [f.name for f in fields] == ["a"]
        assert "Are you sure to remove these fields?" not in prompter.asked

    def test_nothing_to_remove(self):
        prompter = ScriptedPrompter([UPDATE_REMOVE])
        assert FieldWizard("Delivery", [], prompter).run() == []
        assert any("no point fields" in n for n in prompter.notes)

    def test_removed_name_can_be_reused(self):
        wizard = FieldWizard("Delivery", _fields("a"), ScriptedPrompter([]))
        wizard.remove_fields(["a"])
        assert wizard.check_name("a") is None


class TestUpdateModes:
    def test_regenerate_returns_fields_unchanged(self):
        existing = _fields("a", "b")
        fields = FieldWizard("Delivery", existing, ScriptedPrompter([UPDATE_REGENERATE])).run()
        assert [f.name for f in fields] == ["a", "b"]

    def test_none_aborts(self):
        with pytest.raises(WizardAborted, match="no changes were made"):
            FieldWizard("Delivery", _fields("a"), ScriptedPrompter([UPDATE_NONE])).run()

    def test_does_not_mutate_callers_list(self):
        existing = _fields("a")
        prompter = ScriptedPrompter([UPDATE_ADD, True, "b", False, False])
        FieldWizard("Delivery", existing, prompter).run()
        assert [f.name for f in existing] == ["a"]
