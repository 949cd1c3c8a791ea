# Popyx Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Displays for combo sessions.

Popyx opens the display when a session starts, refreshes it after every
change and closes it on every way out, including errors. Any object with
`open`, `refresh` and `close` works (see `DisplayProtocol`).

- `RichDisplay`: prints the session as Rich tables on the Popyx console.
- `NullDisplay`: renders nothing and counts calls; for headless runs and tests.
"""
from __future__ import annotations

from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table

from popyx.console import console
from popyx.event import OptionEvent, SwitchEvent, VariableEvent
from popyx.logger import logger
from popyx.options_manager import OptionsManager
from popyx.session import ComboSession
from popyx.themes import OneColors

COMMON_COMMANDS = (
    ("C-g", "Quit"),
    ("C-c C-c", "Set defaults"),
    ("C-x C-s", "Save defaults"),
    ("C-t", "Hide common commands"),
)


class NullDisplay:
    """Display that renders nothing."""

    def __init__(self) -> None:
        self.is_open = False
        self.opened = 0
        self.refreshed = 0
        self.closed = 0
        self.session: ComboSession | None = None

    def open(self, session: ComboSession) -> None:
        self.is_open = True
        self.opened += 1
        self.session = session

    def refresh(self, session: ComboSession) -> None:
        self.refreshed += 1
        self.session = session

    def close(self) -> None:
        self.is_open = False
        self.closed += 1
        self.session = None


class RichDisplay:
    """
    Prints a session as a panel of Rich tables.

    Switches are listed as `-key`, options as `=key`, variables and actions by
    their bare key. Active arguments are highlighted and the resolved argument
    list is shown at the bottom.

    Args:
        options (OptionsManager | None): Source of `show_common_commands`.
        console (Console): Console to print on.
    """

    def __init__(
        self, options: OptionsManager | None = None, console: Console = console
    ) -> None:
        self.options = options or OptionsManager()
        self.console = console
        self.is_open = False

    def open(self, session: ComboSession) -> None:
        self.is_open = True
        self.refresh(session)

    def refresh(self, session: ComboSession) -> None:
        if not self.is_open:
            logger.debug("[Display] Refresh of %s while closed.", session.name)
            return
        self.console.print(self.render(session))

    def close(self) -> None:
        self.is_open = False

    def _section(self, title: str) -> Table:
        table = Table.grid(padding=(0, 2))
        table.title = f"[popup.heading]{title}[/]"
        table.title_justify = "left"
        table.add_column(style="popup.key", no_wrap=True)
        table.add_column()
        table.add_column()
        return table

    def _render_kind(self, events: list, default_title: str, prefix: str) -> list[Table]:
        tables: list[Table] = []
        table: Table | None = None
        for event in events:
            if isinstance(event, str):
                table = self._section(event)
                tables.append(table)
                continue
            if table is None:
                table = self._section(default_title)
                tables.append(table)
            table.add_row(f"{prefix}{event.key}", event.description, self._state(event))
        return tables

    @staticmethod
    def _state(event) -> str:
        if isinstance(event, SwitchEvent):
            style = "popup.argument.active" if event.use else "popup.argument"
            return f"[{style}]({event.arg})[/]"
        if isinstance(event, OptionEvent):
            if event.use:
                return (
                    f"[popup.argument.active]({event.arg}"
                    f"[popup.option.value]{event.val}[/])[/]"
                )
            return f"[popup.argument]({event.arg})[/]"
        if isinstance(event, VariableEvent):
            state = event.format()
            return "" if state is None else f"[popup.option.value]{state}[/]"
        return ""

    def render(self, session: ComboSession) -> Panel:
        parts: list = []
        parts += self._render_kind(session.switches, "Switches", "-")
        parts += self._render_kind(session.options, "Options", "=")
        parts += self._render_kind(session.variables, "Variables", "")
        parts += self._render_kind(session.actions, "Actions", "")
        if self.options.get("show_common_commands", False):
            table = self._section("Common commands")
            for key, description in COMMON_COMMANDS:
                table.add_row(key, description, "")
            parts.append(table)
        args = " ".join(session.get_args()) or "[popup.inapt](no arguments)[/]"
        parts.append(f"[{OneColors.COMMENT_GREY}]Arguments:[/] {args}")
        return Panel(
            Group(*parts),
            title=f"[{OneColors.BLUE_b}]{session.combo.description}[/]",
            expand=False,
        )
