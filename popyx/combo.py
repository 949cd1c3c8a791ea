# Popyx Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `Combo`, the declaration of a popup: a named group of switches,
options, variables and actions plus an optional default action.

Example:
    log = Combo(
        "log",
        description="Show history",
        switches=[
            "Switches",
            Switch("g", "Show graph", "--graph", enabled=True),
            Switch("d", "Show refnames", "--decorate"),
        ],
        options=[
            Option("n", "Limit count", "-n", reader=read_number, default="256"),
            Option("a", "Author", "--author="),
        ],
        actions=[
            "Log",
            Action("l", "Log current", log_current),
            Action("o", "Log other", log_other),
        ],
        default_action=log_current,
        defaults_cell=DefaultsCell(),
    )

Each list may interleave string headings; the display uses them to group
entries. After construction the lists are edited only through `bind`,
`rebind` and `unbind`.
"""
from __future__ import annotations

from typing import Any, Callable, Iterable

from popyx.bindings import BindingTable
from popyx.event import Action, Entry, EventKind, Option, Switch, Variable
from popyx.logger import logger
from popyx.protocols import DefaultsCellProtocol


class Combo:
    """
    Declaration of a popup.

    Args:
        name (str): Unique name of the combo.
        description (str): Title shown by the display.
        switches / options / variables / actions: Entries and headings, in
            display order.
        sequence_actions: Actions shown instead of `actions` while
            `sequence_predicate` returns True, e.g. "continue" and "abort"
            while an operation is in progress.
        sequence_predicate (Callable[[], bool] | None): Checked when a session
            opens.
        default_action (Callable | None): Command run directly by the
            invocation policy, skipping the popup.
        use_prefix (str | Callable | None): Combo-local policy mode ("default",
            "popup" or "none") or a callable returning one. None defers to the
            process-wide `use_prefix` setting.
        default_arguments (list[str] | None): Authored default arguments. When
            None, they are derived from `Switch.enabled` and `Option.default`.
        defaults_cell (DefaultsCellProtocol | None): Cell holding user-set
            defaults. A combo without one cannot set or save defaults.
    """

    def __init__(
        self,
        name: str,
        *,
        description: str = "",
        switches: Iterable[Switch | str] = (),
        options: Iterable[Option | str] = (),
        variables: Iterable[Variable | str] = (),
        actions: Iterable[Action | str] = (),
        sequence_actions: Iterable[Action | str] = (),
        sequence_predicate: Callable[[], bool] | None = None,
        default_action: Callable[..., Any] | None = None,
        use_prefix: str | Callable[[], Any] | None = None,
        default_arguments: Iterable[str] | None = None,
        defaults_cell: DefaultsCellProtocol | None = None,
    ) -> None:
        if not isinstance(name, str) or not name:
            raise ValueError("Combo name must be a non-empty string.")
        self.name = name
        self.description = description or name
        self.bindings = BindingTable(
            name,
            {
                EventKind.SWITCHES: switches,
                EventKind.OPTIONS: options,
                EventKind.VARIABLES: variables,
                EventKind.ACTIONS: actions,
                EventKind.SEQUENCE_ACTIONS: sequence_actions,
            },
        )
        self.sequence_predicate = sequence_predicate
        self.default_action = default_action
        self.use_prefix = use_prefix
        self.default_arguments = (
            None if default_arguments is None else list(default_arguments)
        )
        self.defaults_cell = defaults_cell

    @property
    def switches(self) -> list[Switch | str]:
        return self.bindings.get(EventKind.SWITCHES)  # type: ignore[return-value]

    @property
    def options(self) -> list[Option | str]:
        return self.bindings.get(EventKind.OPTIONS)  # type: ignore[return-value]

    @property
    def variables(self) -> list[Variable | str]:
        return self.bindings.get(EventKind.VARIABLES)  # type: ignore[return-value]

    @property
    def actions(self) -> list[Action | str]:
        return self.bindings.get(EventKind.ACTIONS)  # type: ignore[return-value]

    @property
    def sequence_actions(self) -> list[Action | str]:
        return self.bindings.get(EventKind.SEQUENCE_ACTIONS)  # type: ignore[return-value]

    def bind(
        self,
        kind: EventKind | str,
        key: str,
        definition: Any,
        at: str | None = None,
        prepend: bool = False,
    ) -> None:
        self.bindings.bind(kind, key, definition, at=at, prepend=prepend)

    def rebind(self, kind: EventKind | str, from_key: str, to_key: str) -> bool:
        return self.bindings.rebind(kind, from_key, to_key)

    def unbind(self, kind: EventKind | str, key: str) -> bool:
        return self.bindings.unbind(kind, key)

    def lookup(self, kind: EventKind | str, key: str) -> Entry | None:
        return self.bindings.lookup(kind, key)

    def authored_arguments(self) -> list[str]:
        """Defaults written into the declaration itself."""
        if self.default_arguments is not None:
            return list(self.default_arguments)
        args = [
            switch.arg
            for switch in self.bindings.entries(EventKind.SWITCHES)
            if switch.enabled  # type: ignore[union-attr]
        ]
        for option in self.bindings.entries(EventKind.OPTIONS):
            if option.default is not None:  # type: ignore[union-attr]
                args.append(f"{option.arg}{option.default}")  # type: ignore[union-attr]
        return args

    def get_default_arguments(self) -> list[str]:
        """Defaults a new session starts from: the cell's value, else the authored ones."""
        if self.defaults_cell is not None:
            value = self.defaults_cell.get()
            if value is not None:
                return list(value)
        return self.authored_arguments()

    def in_sequence(self) -> bool:
        """Whether sessions should offer the sequence actions right now."""
        if self.sequence_predicate is None:
            return False
        if not self.bindings.entries(EventKind.SEQUENCE_ACTIONS):
            logger.warning(
                "[Combo:%s] sequence_predicate set without sequence_actions.", self.name
            )
            return False
        return bool(self.sequence_predicate())

    def __repr__(self) -> str:
        return f"Combo(name={self.name!r}, bindings={len(self.bindings)})"
