"""
Click-backed prompter for the point field wizard.

Lists and checkboxes are rendered as numbered menus:

    Which validation rules do you want to add?
      1) Required
    Numbers, comma-separated (blank for none):

Invalid input is reported and asked again; click's ``value_proc``
re-prompt loop does the work.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import click

from postgis_point.core.services.field_wizard import Choice, Validator


def _echo_choices(message: str, choices: Sequence[Choice]) -> None:
    click.secho(message, bold=True)
    for i, choice in enumerate(choices, start=1):
        click.echo(f"  {i}) {choice.label}")


def parse_selection(raw: str, count: int) -> list[int]:
    """Parse ``"1, 3"`` into zero-based indices, keeping input order.

    Raises:
        click.BadParameter: On anything but numbers in ``1..count``.
    """
    indices: list[int] = []
    for token in raw.replace(",", " ").split():
        if not token.isdigit() or not 1 <= int(token) <= count:
            raise click.BadParameter(f"{token!r} is not a number between 1 and {count}")
        index = int(token) - 1
        if index not in indices:
            indices.append(index)
    return indices


class ClickPrompter:
    """Prompter implementation on top of click.prompt / click.confirm."""

    def confirm(self, message: str, default: bool = False) -> bool:
        return click.confirm(message, default=default)

    def text(self, message: str, validate: Validator | None = None) -> str:
        def check(value: str) -> str:
            value = value.strip()
            if validate:
                reason = validate(value)
                if reason:
                    raise click.BadParameter(reason)
            return value

        return click.prompt(message, value_proc=check)

    def select(self, message: str, choices: Sequence[Choice], default: Any = None) -> Any:
        _echo_choices(message, choices)
        default_index = next(
            (i for i, c in enumerate(choices, start=1) if c.value == default),
            1,
        )
        picked = click.prompt(
            "Choice",
            type=click.IntRange(1, len(choices)),
            default=default_index,
        )
        return choices[picked - 1].value

    def checkbox(self, message: str, choices: Sequence[Choice]) -> list[Any]:
        _echo_choices(message, choices)
        indices = click.prompt(
            "Numbers, comma-separated (blank for none)",
            default="",
            show_default=False,
            value_proc=lambda raw: parse_selection(raw, len(choices)),
        )
        return [choices[i].value for i in indices]

    def note(self, message: str, style: str = "") -> None:
        click.secho(message, fg=style or None)
