# Popyx Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Declarations and live events for Popyx combos.

A combo is declared once with four kinds of entries:

- `Switch`: a no-value flag such as `-f` or `--all`.
- `Option`: a flag that takes a value such as `--author=`, read with a reader.
- `Variable`: a command that changes some external state, plus a formatter that
  renders that state.
- `Action`: a plain command bound to a key.

Plain strings between entries are headings for the display and are carried
along untouched.

When a combo session opens, every declared entry is turned into a live event
(`SwitchEvent`, `OptionEvent`, `VariableEvent`, `ActionEvent`). Live events
are the mutable state that key presses toggle; declarations never change
during a session.

`EventKind` names the per-combo binding lists. Its lookup folds the usual
spellings ("switch", ":switches", "Sequence-Action") to the canonical plural.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Union

from popyx.exceptions import InvalidEventKindError
from popyx.protocols import Command, ValueReader

LISP_ARG_MARKER = "++"
ASSIGNMENT_MARKER = "="


class EventKind(Enum):
    """
    Enum of the binding lists held by a combo.

    Aliases:
        "switch" → "switches"
        "option" → "options"
        "variable" → "variables"
        "action" → "actions"
        "sequence_action" → "sequence_actions"

    Leading colons, surrounding whitespace, case and dashes are ignored, so
    `EventKind(":Sequence-Action")` is `EventKind.SEQUENCE_ACTIONS`.
    """

    SWITCHES = "switches"
    OPTIONS = "options"
    VARIABLES = "variables"
    ACTIONS = "actions"
    SEQUENCE_ACTIONS = "sequence_actions"

    @classmethod
    def _get_alias(cls, value: str) -> str:
        aliases = {
            "switch": "switches",
            "option": "options",
            "variable": "variables",
            "action": "actions",
            "sequence_action": "sequence_actions",
        }
        return aliases.get(value, value)

    @classmethod
    def _missing_(cls, value: object) -> EventKind:
        if not isinstance(value, str):
            raise InvalidEventKindError(f"Invalid {cls.__name__}: {value!r}")
        normalized = value.strip().lower().lstrip(":").replace("-", "_")
        alias = cls._get_alias(normalized)
        for member in cls:
            if member.value == alias:
                return member
        valid = ", ".join(member.value for member in cls)
        raise InvalidEventKindError(
            f"Invalid {cls.__name__}: '{value}'. Must be one of: {valid}"
        )

    def __str__(self) -> str:
        return self.value


def _require_key(owner: object, key: Any) -> None:
    if not isinstance(key, str) or not key:
        raise ValueError(f"{type(owner).__name__} requires a non-empty string key.")


@dataclass
class Switch:
    """
    Declares a boolean flag.

    Attributes:
        key (str): Key that toggles the switch (typed as `-<key>`).
        description (str): Label shown next to the key.
        arg (str): Flag contributed to the argument list when on, e.g. `"-f"`.
        enabled (bool): Whether the flag is part of the authored defaults.
        function (Callable | None): Implementation of a `++` pseudo argument.
            Only looked up for help; never called by Popyx.
    """

    key: str
    description: str
    arg: str
    enabled: bool = False
    function: Callable[..., Any] | None = None

    def __post_init__(self):
        _require_key(self, self.key)


@dataclass
class Option:
    """
    Declares a flag with a value, e.g. `--author=` or `-n`.

    `reader` is called as `reader(prompt, previous)` and returns the new value
    or `None` to cancel. When omitted, the line-prompt reader is used.
    """

    key: str
    description: str
    arg: str
    reader: ValueReader | None = None
    default: str | None = None

    def __post_init__(self):
        _require_key(self, self.key)


@dataclass
class Variable:
    """Declares a command that mutates external state, shown via `formatter`."""

    key: str
    description: str
    command: Command
    formatter: Callable[[], str | None] | None = None

    def __post_init__(self):
        _require_key(self, self.key)


@dataclass
class Action:
    """Declares a command invoked with the resolved arguments."""

    key: str
    description: str
    command: Command

    def __post_init__(self):
        _require_key(self, self.key)


Entry = Union[Switch, Option, Variable, Action]

ENTRY_TYPES: dict[EventKind, type] = {
    EventKind.SWITCHES: Switch,
    EventKind.OPTIONS: Option,
    EventKind.VARIABLES: Variable,
    EventKind.ACTIONS: Action,
    EventKind.SEQUENCE_ACTIONS: Action,
}


@dataclass
class SwitchEvent:
    key: str
    description: str
    arg: str
    use: bool = False
    fun: Callable[..., Any] | None = None

    def __post_init__(self):
        _require_key(self, self.key)


@dataclass
class OptionEvent:
    key: str
    description: str
    arg: str
    fun: Callable[..., Any]
    use: bool = False
    val: str | None = None

    def __post_init__(self):
        _require_key(self, self.key)

    @property
    def prompt(self) -> str:
        """Prompt passed to the reader: the flag, plus `": "` unless it ends in `=`."""
        if self.arg.endswith(ASSIGNMENT_MARKER):
            return self.arg
        return f"{self.arg}: "


@dataclass
class VariableEvent:
    key: str
    description: str
    fun: Callable[..., Any]
    formatter: Callable[[], str | None] | None = None

    def __post_init__(self):
        _require_key(self, self.key)

    @property
    def has_state(self) -> bool:
        """Whether the variable has a displayable state of its own."""
        return self.formatter is not None

    def format(self) -> str | None:
        if self.formatter is None:
            return None
        return self.formatter()


@dataclass
class ActionEvent:
    key: str
    description: str
    fun: Callable[..., Any]

    def __post_init__(self):
        _require_key(self, self.key)


LiveEvent = Union[SwitchEvent, OptionEvent, VariableEvent, ActionEvent]
