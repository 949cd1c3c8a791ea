# Popyx Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Turns a combo's declarations into live events.

The `active` argument list is what the session starts from: the combo's
defaults, or the arguments of a session being restored. A switch is on when
its flag appears verbatim in `active`; an option is on when an argument
starts with its flag, and its value is the rest of that argument. The first
matching argument wins, so options of one combo need disjoint flags.

Headings are passed through unchanged.
"""
from __future__ import annotations

from typing import Sequence

from popyx.combo import Combo
from popyx.event import (
    LISP_ARG_MARKER,
    Action,
    ActionEvent,
    EventKind,
    LiveEvent,
    Option,
    OptionEvent,
    Switch,
    SwitchEvent,
    Variable,
    VariableEvent,
)
from popyx.prompt_utils import read_from_prompt


def convert_switch(switch: Switch, active: Sequence[str]) -> SwitchEvent:
    return SwitchEvent(
        key=switch.key,
        description=switch.description,
        arg=switch.arg,
        use=switch.arg in active,
        # Only kept so help can describe `++` pseudo arguments.
        fun=switch.function if switch.arg.startswith(LISP_ARG_MARKER) else None,
    )


def convert_option(option: Option, active: Sequence[str]) -> OptionEvent:
    match = next((arg for arg in active if arg.startswith(option.arg)), None)
    return OptionEvent(
        key=option.key,
        description=option.description,
        arg=option.arg,
        fun=option.reader or read_from_prompt,
        use=match is not None,
        val=None if match is None else match[len(option.arg) :],
    )


def convert_variable(variable: Variable) -> VariableEvent:
    return VariableEvent(
        key=variable.key,
        description=variable.description,
        fun=variable.command,
        formatter=variable.formatter,
    )


def convert_action(action: Action) -> ActionEvent:
    return ActionEvent(key=action.key, description=action.description, fun=action.command)


def convert_events(
    combo: Combo, kind: EventKind | str, active: Sequence[str]
) -> list[LiveEvent | str]:
    """Live events for one kind of `combo`, in declaration order."""
    kind = EventKind(kind)
    events: list[LiveEvent | str] = []
    for entry in combo.bindings.get(kind):
        if isinstance(entry, str):
            events.append(entry)
        elif isinstance(entry, Switch):
            events.append(convert_switch(entry, active))
        elif isinstance(entry, Option):
            events.append(convert_option(entry, active))
        elif isinstance(entry, Variable):
            events.append(convert_variable(entry))
        elif isinstance(entry, Action):
            events.append(convert_action(entry))
        else:
            raise TypeError(f"Cannot convert {type(entry).__name__} in {kind}.")
    return events
