# Popyx Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Provides `ComboRegistry`, the name → `Combo` store with deferred bindings.

Code that extends a combo may run before the combo itself is declared, e.g. a
plugin adding a switch to a popup defined in a module imported later.
`ComboRegistry.bind` queues such calls under the combo name; `declare` replays
them in call order once the combo exists. A queued call that fails is reported
and skipped, and the remaining calls still run.

Example:
    registry = ComboRegistry()
    registry.bind("log", "switch", "f", ("Follow renames", "--follow"))
    registry.declare(Combo("log", switches=[Switch("g", "Graph", "--graph")]))
    registry.get("log").bindings.keys("switches")  # ["g", "f"]
"""
from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from typing import Any

from popyx.combo import Combo
from popyx.console import console
from popyx.event import EventKind
from popyx.exceptions import ComboAlreadyExistsError, ComboNotFoundError
from popyx.logger import logger
from popyx.themes import OneColors


@dataclass
class PendingBinding:
    """A `bind` call waiting for its combo to be declared."""

    kind: EventKind
    key: str
    definition: Any
    at: str | None = None
    prepend: bool = False


class ComboRegistry:
    """
    Registry of declared combos and of bindings waiting for one.

    Methods:
        declare(combo, replace): Register a combo and replay its pending bindings.
        get(name): The combo declared under `name`.
        bind / rebind / unbind: Edit a combo's bindings by name.
        pending(name): Bindings still queued for `name`.
    """

    def __init__(self) -> None:
        self._combos: dict[str, Combo] = {}
        self._pending: defaultdict[str, list[PendingBinding]] = defaultdict(list)

    def declare(self, combo: Combo, replace: bool = False) -> Combo:
        if combo.name in self._combos and not replace:
            raise ComboAlreadyExistsError(f"Combo '{combo.name}' is already declared.")
        self._combos[combo.name] = combo
        logger.debug("[Combo:%s] Declared.", combo.name)
        self._replay_pending(combo)
        return combo

    def _replay_pending(self, combo: Combo) -> None:
        pending = self._pending.pop(combo.name, [])
        for call in pending:
            try:
                combo.bind(
                    call.kind, call.key, call.definition, at=call.at, prepend=call.prepend
                )
            except Exception as error:
                logger.error(
                    "[Combo:%s] Deferred binding of %s '%s' failed: %s",
                    combo.name,
                    call.kind,
                    call.key,
                    error,
                )
                console.print(
                    f"[{OneColors.DARK_RED}]❌ {combo.name}: could not bind "
                    f"{call.kind} '{call.key}':[/] {error}"
                )
        if pending:
            logger.debug(
                "[Combo:%s] Replayed %d deferred binding(s).", combo.name, len(pending)
            )

    def get(self, name: str) -> Combo:
        try:
            return self._combos[name]
        except KeyError:
            raise ComboNotFoundError(f"No combo named '{name}'.") from None

    def __contains__(self, name: object) -> bool:
        return name in self._combos

    def __iter__(self):
        return iter(self._combos.values())

    def __len__(self) -> int:
        return len(self._combos)

    def bind(
        self,
        name: str,
        kind: EventKind | str,
        key: str,
        definition: Any,
        at: str | None = None,
        prepend: bool = False,
    ) -> None:
        """Bind `key` in combo `name`, or queue the call if `name` is undeclared."""
        kind = EventKind(kind)
        if name in self._combos:
            self._combos[name].bind(kind, key, definition, at=at, prepend=prepend)
            return
        self._pending[name].append(PendingBinding(kind, key, definition, at, prepend))
        logger.debug("[Combo:%s] Deferred binding of %s '%s'.", name, kind, key)

    def rebind(self, name: str, kind: EventKind | str, from_key: str, to_key: str) -> bool:
        kind = EventKind(kind)
        if name not in self._combos:
            logger.warning("[Combo:%s] Cannot rebind '%s': combo undeclared.", name, from_key)
            console.print(
                f"[{OneColors.DARK_YELLOW}]⚠️ {name}: {kind} key '{from_key}' is undefined.[/]"
            )
            return False
        return self._combos[name].rebind(kind, from_key, to_key)

    def unbind(self, name: str, kind: EventKind | str, key: str) -> bool:
        kind = EventKind(kind)
        if name not in self._combos:
            return False
        return self._combos[name].unbind(kind, key)

    def pending(self, name: str) -> list[PendingBinding]:
        return list(self._pending.get(name, []))
