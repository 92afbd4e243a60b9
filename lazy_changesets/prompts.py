"""Interactive prompts.

The authoring workflow talks to the operator only through the
``Prompter`` protocol: multi-select, yes/no, and free text. Each call
blocks until the operator answers. ``ClickPrompter`` is the terminal
implementation; tests substitute a scripted prompter.
"""

from __future__ import annotations

import fnmatch
from collections.abc import Callable, Sequence
from typing import Protocol, Union

import click
from pydantic import BaseModel, Field


class Choice(BaseModel):
    """A selectable entry. ``message`` is the label shown; ``name`` is returned."""

    name: str
    message: str | None = None

    @property
    def label(self) -> str:
        return self.message or self.name


class ChoiceGroup(BaseModel):
    """A named group of choices. Selecting the group selects all members."""

    name: str
    choices: list[str] = Field(default_factory=list)


ChoiceList = Sequence[Union[str, Choice, ChoiceGroup]]
SelectionFormatter = Callable[[list[str]], str]


class Prompter(Protocol):
    def ask_checkbox(
        self,
        message: str,
        choices: ChoiceList,
        format_selection: SelectionFormatter | None = None,
    ) -> list[str]: ...

    def ask_confirm(self, message: str) -> bool: ...

    def ask_question(self, message: str) -> str: ...


class _Option(BaseModel):
    key: str
    label: str
    members: list[str] = Field(default_factory=list)
    indent: int = 0


def _flatten(choices: ChoiceList) -> list[_Option]:
    """Lay out choices as a numbered list; group members follow their header."""
    options: list[_Option] = []
    for choice in choices:
        if isinstance(choice, ChoiceGroup):
            options.append(
                _Option(key=choice.name, label=choice.name, members=choice.choices)
            )
            options.extend(_Option(key=m, label=m, indent=1) for m in choice.choices)
        elif isinstance(choice, Choice):
            options.append(_Option(key=choice.name, label=choice.label))
        else:
            options.append(_Option(key=choice, label=choice))
    return options


def parse_selection(options: list[_Option], raw: str) -> list[str]:
    """Turn a comma-separated answer into the selected keys.

    Each token may be a 1-based option number, an option key, or an
    ``fnmatch`` pattern filtering the keys. Selecting a group yields the
    group key followed by its members. Duplicates are dropped, first
    occurrence order kept.

    Raises:
        click.BadParameter: If a token matches nothing.
    """
    selected: dict[str, None] = {}
    by_key = {o.key: o for o in options}
    for token in (t.strip() for t in raw.split(",")):
        if not token:
            continue
        if token.isdigit():
            index = int(token) - 1
            if not 0 <= index < len(options):
                raise click.BadParameter(f"no choice numbered {token}")
            matched = [options[index]]
        elif token in by_key:
            matched = [by_key[token]]
        else:
            matched = [o for o in options if fnmatch.fnmatchcase(o.key, token)]
            if not matched:
                raise click.BadParameter(f"no choice matches {token!r}")
        for option in matched:
            selected[option.key] = None
            selected.update(dict.fromkeys(option.members))
    return list(selected)


class ClickPrompter:
    """Terminal prompts built on click.

    Prompts go to stderr so stdout carries only command output.
    ``click.Abort`` (Ctrl-C, EOF) propagates to the caller.
    """

    def ask_checkbox(
        self,
        message: str,
        choices: ChoiceList,
        format_selection: SelectionFormatter | None = None,
    ) -> list[str]:
        options = _flatten(choices)
        click.echo(message, err=True)
        for number, option in enumerate(options, 1):
            pad = "    " * option.indent
            click.echo(f"  {pad}{number:>2}) {option.label}", err=True)
        selected: list[str] = click.prompt(
            "Select (numbers, names or patterns, comma-separated)",
            default="",
            show_default=False,
            value_proc=lambda raw: parse_selection(options, raw),
            err=True,
        )
        if format_selection is not None and selected:
            click.echo(f"  {format_selection(selected)}", err=True)
        return selected

    def ask_confirm(self, message: str) -> bool:
        return click.confirm(message, default=False, err=True)

    def ask_question(self, message: str) -> str:
        return click.prompt(message, default="", show_default=False, err=True)
