# Popyx Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `ComboSession`, the live state of one open popup.

A session converts its combo's declarations into live events once, when it
opens, starting from the combo's default arguments (or an explicit argument
list when restoring a session). From then on only key presses change it:

- `toggle_switch(key)` flips a switch.
- `toggle_option(key)` clears a set option, or reads a value for an unset one.
- `lookup_command(key)` finds the action or variable a key invokes.
- `get_args()` flattens the active switches and options.
- `write_defaults(persist)` stores them in the combo's defaults cell.

The session itself never calls commands and never talks to a display; that is
the job of `Popyx`.
"""
from __future__ import annotations

from typing import Sequence

from popyx.arguments import filter_args, resolve_args
from popyx.combo import Combo
from popyx.converter import convert_events
from popyx.event import (
    ActionEvent,
    EventKind,
    LiveEvent,
    OptionEvent,
    SwitchEvent,
    VariableEvent,
)
from popyx.exceptions import NothingToSetError, UnboundKeyError
from popyx.logger import logger
from popyx.signals import CancelSignal
from popyx.utils import ensure_async


def resolve_default_args(combo: Combo) -> list[str]:
    """The argument list a fresh session of `combo` would resolve to."""
    active = combo.get_default_arguments()
    return resolve_args(
        [
            *convert_events(combo, EventKind.SWITCHES, active),
            *convert_events(combo, EventKind.OPTIONS, active),
        ]
    )


class ComboSession:
    """
    Live events of one open combo.

    Args:
        combo (Combo): The combo being composed.
        active (Sequence[str] | None): Arguments to start from. Defaults to
            `combo.get_default_arguments()`.
        previous (ComboSession | None): The suspended session this one was
            opened from, resumed when this one is quit.

    Attributes:
        switches, options, variables, actions: Live events and headings, in
            declaration order. `actions` holds the sequence actions when the
            combo's sequence predicate held at open time.
    """

    def __init__(
        self,
        combo: Combo,
        active: Sequence[str] | None = None,
        previous: ComboSession | None = None,
    ) -> None:
        self.combo = combo
        self.previous = previous
        active = combo.get_default_arguments() if active is None else list(active)
        self.action_kind = (
            EventKind.SEQUENCE_ACTIONS if combo.in_sequence() else EventKind.ACTIONS
        )
        self.switches = convert_events(combo, EventKind.SWITCHES, active)
        self.options = convert_events(combo, EventKind.OPTIONS, active)
        self.variables = convert_events(combo, EventKind.VARIABLES, active)
        self.actions = convert_events(combo, self.action_kind, active)

    @property
    def name(self) -> str:
        return self.combo.name

    def events(self, kind: EventKind | str) -> list[LiveEvent | str]:
        kind = EventKind(kind)
        if kind in (EventKind.ACTIONS, EventKind.SEQUENCE_ACTIONS):
            return self.actions
        return {
            EventKind.SWITCHES: self.switches,
            EventKind.OPTIONS: self.options,
            EventKind.VARIABLES: self.variables,
        }[kind]

    def lookup(self, kind: EventKind | str, key: str) -> LiveEvent | None:
        return next(
            (
                event
                for event in self.events(kind)
                if not isinstance(event, str) and event.key == key
            ),
            None,
        )

    def get_args(
        self, patterns: Sequence[str] | None = None, mode: str | None = None
    ) -> list[str]:
        """Resolved arguments, optionally filtered (see `filter_args`)."""
        args = resolve_args([*self.switches, *self.options])
        if patterns is None:
            return args
        return filter_args(args, patterns, mode)

    def toggle_switch(self, key: str) -> SwitchEvent:
        event = self.lookup(EventKind.SWITCHES, key)
        if not isinstance(event, SwitchEvent):
            raise UnboundKeyError(f"'{key}' isn't bound to any switch")
        event.use = not event.use
        logger.debug("[Combo:%s] Switch %s -> %s", self.name, event.arg, event.use)
        return event

    async def toggle_option(self, key: str) -> OptionEvent:
        """
        Clear the option bound to `key`, or read and set its value.

        The reader gets the option's prompt and its previous value. Returning
        `None` or raising `CancelSignal` leaves the option unchanged; any other
        value, the empty string included, sets it.
        """
        event = self.lookup(EventKind.OPTIONS, key)
        if not isinstance(event, OptionEvent):
            raise UnboundKeyError(f"'{key}' isn't bound to any option")
        if event.use:
            event.use = False
            event.val = None
            logger.debug("[Combo:%s] Option %s cleared", self.name, event.arg)
            return event
        try:
            value = await ensure_async(event.fun)(event.prompt, event.val)
        except CancelSignal:
            logger.debug("[Combo:%s] Reading %s cancelled", self.name, event.arg)
            return event
        if value is None:
            return event
        event.use = True
        event.val = str(value)
        logger.debug("[Combo:%s] Option %s set to %r", self.name, event.arg, event.val)
        return event

    def lookup_command(self, key: str) -> tuple[ActionEvent | VariableEvent | None, bool]:
        """
        Find the command `key` invokes and whether invoking it ends the session.

        A variable without a formatter has no state to show, so it takes the
        place of an action bound to the same key and ends the session. Otherwise
        an action wins over a variable, and a variable with a formatter keeps
        the session open.
        """
        variable = self.lookup(EventKind.VARIABLES, key)
        if isinstance(variable, VariableEvent) and not variable.has_state:
            return variable, True
        action = self.lookup(self.action_kind, key)
        if isinstance(action, ActionEvent):
            return action, True
        if isinstance(variable, VariableEvent):
            return variable, False
        return None, False

    def write_defaults(self, persist: bool = False) -> list[str]:
        """Write the resolved arguments into the combo's defaults cell."""
        cell = self.combo.defaults_cell
        if cell is None:
            raise NothingToSetError("Nothing to save" if persist else "Nothing to set")
        args = self.get_args()
        cell.set(args, persist=persist)
        return args

    def keys(self) -> list[str]:
        """Every key the session responds to, as typed: `-x`, `=x` or `x`."""
        keys = [f"-{event.key}" for event in self.switches if not isinstance(event, str)]
        keys += [f"={event.key}" for event in self.options if not isinstance(event, str)]
        keys += [
            event.key
            for event in (*self.variables, *self.actions)
            if not isinstance(event, str)
        ]
        return keys

    def __repr__(self) -> str:
        return f"ComboSession(combo={self.name!r}, args={self.get_args()!r})"
