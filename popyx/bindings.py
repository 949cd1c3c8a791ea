# Popyx Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Ordered, per-kind binding lists for a single combo.

`BindingTable` owns the switches, options, variables, actions and sequence
actions of one combo. Order matters: it is the display order and decides which
entry wins when a key is ambiguous. Call sites outside the combo declaration
edit the lists only through `bind`, `rebind` and `unbind`:

    table.bind("switch", "x", ("Extra", "--extra"))
    table.bind("action", "P", Action("P", "Push", push), at="p")
    table.rebind("options", "a", "A")
    table.unbind("action", "z")

Kind names are folded with `EventKind`, so `"switch"`, `":switches"` and
`EventKind.SWITCHES` address the same list.
"""
from __future__ import annotations

from dataclasses import replace
from typing import Any, Iterable

from popyx.console import console
from popyx.event import ENTRY_TYPES, Entry, EventKind
from popyx.logger import logger
from popyx.themes import OneColors


class BindingTable:
    """
    Binding lists of one combo, keyed by `EventKind`.

    Each list holds declaration entries and, between them, plain string
    headings. Keys are unique within a kind; the same key may appear under
    several kinds.

    Methods:
        get(kind): The entries and headings of a kind, in order.
        lookup(kind, key): The entry bound to `key`, or None.
        bind(kind, key, definition, at, prepend): Add, replace or move a binding.
        rebind(kind, from_key, to_key): Rename a key in place.
        unbind(kind, key): Remove a binding if present.
    """

    def __init__(
        self,
        name: str,
        events: dict[EventKind | str, Iterable[Entry | str]] | None = None,
    ) -> None:
        self.name = name
        self._events: dict[EventKind, list[Entry | str]] = {
            kind: [] for kind in EventKind
        }
        for kind, entries in (events or {}).items():
            kind = EventKind(kind)
            for entry in entries:
                self._add_declared(kind, entry)

    def _add_declared(self, kind: EventKind, entry: Entry | str) -> None:
        if isinstance(entry, str):
            self._events[kind].append(entry)
            return
        if not isinstance(entry, ENTRY_TYPES[kind]):
            raise TypeError(
                f"[Combo:{self.name}] {kind} entries must be "
                f"{ENTRY_TYPES[kind].__name__}, got {type(entry).__name__}."
            )
        if self._index(self._events[kind], entry.key) is not None:
            raise ValueError(
                f"[Combo:{self.name}] Key '{entry.key}' is bound twice in {kind}."
            )
        self._events[kind].append(entry)

    @staticmethod
    def _index(value: list[Entry | str], key: str) -> int | None:
        for index, entry in enumerate(value):
            if not isinstance(entry, str) and entry.key == key:
                return index
        return None

    @staticmethod
    def _coerce(kind: EventKind, key: str, definition: Any) -> Entry:
        entry_type = ENTRY_TYPES[kind]
        if isinstance(definition, entry_type):
            return replace(definition, key=key)
        if isinstance(definition, dict):
            return entry_type(key=key, **definition)
        if isinstance(definition, (tuple, list)):
            return entry_type(key, *definition)
        raise TypeError(
            f"Cannot bind {type(definition).__name__} as {kind}; expected "
            f"{entry_type.__name__}, a tuple of its fields or a dict."
        )

    def get(self, kind: EventKind | str) -> list[Entry | str]:
        return list(self._events[EventKind(kind)])

    def entries(self, kind: EventKind | str) -> list[Entry]:
        """Entries of a kind without the headings."""
        return [
            entry for entry in self._events[EventKind(kind)] if not isinstance(entry, str)
        ]

    def keys(self, kind: EventKind | str) -> list[str]:
        return [entry.key for entry in self.entries(kind)]

    def lookup(self, kind: EventKind | str, key: str) -> Entry | None:
        value = self._events[EventKind(kind)]
        index = self._index(value, key)
        return None if index is None else value[index]  # type: ignore[return-value]

    def bind(
        self,
        kind: EventKind | str,
        key: str,
        definition: Any,
        at: str | None = None,
        prepend: bool = False,
    ) -> None:
        """
        Bind `key` in the `kind` list.

        Args:
            kind (EventKind | str): Kind of binding, synonyms allowed.
            key (str): Key to bind.
            definition: An entry of the kind's type, a tuple of its fields after
                the key, or a dict of its fields.
            at (str | None): Key of an existing entry to place the binding next
                to. An existing binding for `key` is moved there. When `at` is
                not bound, the binding goes to the end of the list.
            prepend (bool): Place before `at` instead of after it; without `at`,
                place a new binding first.

        Without `at`, an existing binding is replaced where it stands.
        """
        kind = EventKind(kind)
        value = self._events[kind]
        entry = self._coerce(kind, key, definition)
        index = self._index(value, key)

        if at is not None and at != key:
            if index is not None:
                del value[index]
            anchor = self._index(value, at)
            if anchor is None:
                logger.debug(
                    "[Combo:%s] Anchor '%s' not bound in %s; appending '%s'.",
                    self.name,
                    at,
                    kind,
                    key,
                )
                value.append(entry)
            elif prepend:
                value.insert(anchor, entry)
            else:
                value.insert(anchor + 1, entry)
        elif index is not None:
            value[index] = entry
        elif prepend:
            value.insert(0, entry)
        else:
            value.append(entry)
        logger.debug("[Combo:%s] Bound '%s' in %s.", self.name, key, kind)

    def rebind(self, kind: EventKind | str, from_key: str, to_key: str) -> bool:
        """Rename `from_key` to `to_key`, keeping its position. Reports failures."""
        kind = EventKind(kind)
        value = self._events[kind]
        index = self._index(value, from_key)
        if index is None:
            self._report(f"{kind} key '{from_key}' is undefined")
            return False
        if from_key != to_key and self._index(value, to_key) is not None:
            self._report(f"{kind} key '{to_key}' is already bound")
            return False
        value[index] = replace(value[index], key=to_key)  # type: ignore[type-var]
        logger.debug(
            "[Combo:%s] Rebound '%s' to '%s' in %s.", self.name, from_key, to_key, kind
        )
        return True

    def unbind(self, kind: EventKind | str, key: str) -> bool:
        kind = EventKind(kind)
        value = self._events[kind]
        index = self._index(value, key)
        if index is None:
            return False
        del value[index]
        logger.debug("[Combo:%s] Unbound '%s' from %s.", self.name, key, kind)
        return True

    def _report(self, message: str) -> None:
        logger.warning("[Combo:%s] %s.", self.name, message)
        console.print(f"[{OneColors.DARK_YELLOW}]⚠️ {self.name}: {message}.[/]")

    def __len__(self) -> int:
        return sum(len(self.entries(kind)) for kind in EventKind)
