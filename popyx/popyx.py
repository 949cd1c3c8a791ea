# Popyx Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Main class for declaring and running Popyx combos.

`Popyx` is the dispatch engine behind "pick some flags, then run one of
several related commands" popups:

- Invocation policy: decides whether invoking a combo runs its default action
  right away or opens the interactive popup.
- Session transitions: toggling switches and options, invoking actions and
  variables, quitting, setting and saving defaults.
- Nesting: a command invoked from a popup may open another combo; quitting the
  nested popup with the quit key resumes the suspended one.
- Lifecycle hooks around every command it calls.

Example:
    popyx = Popyx()
    popyx.declare(log_combo)
    await popyx.popup("log")                # interactive
    await popyx.invoke("log", prefix=True)  # policy only, no key loop
"""
from __future__ import annotations

from functools import cached_property
from typing import Any, Awaitable, Callable, Sequence

from prompt_toolkit import PromptSession
from prompt_toolkit.formatted_text import FormattedText
from rich.console import Console

from popyx.combo import Combo
from popyx.console import console
from popyx.context import InvocationContext
from popyx.debug import register_debug_hooks
from popyx.display import RichDisplay
from popyx.event import EventKind
from popyx.exceptions import NothingToSetError, UnboundKeyError
from popyx.hook_manager import HookManager, HookType
from popyx.logger import logger
from popyx.mode import PolicyMode
from popyx.options_manager import OptionsManager
from popyx.protocols import DisplayProtocol
from popyx.registry import ComboRegistry
from popyx.session import ComboSession, resolve_default_args
from popyx.signals import CancelSignal, QuitSignal
from popyx.themes import OneColors
from popyx.utils import callable_name, ensure_async

QUIT_KEY = "q"


class Popyx:
    """
    Dispatch engine for Popyx combos.

    At most one session is active at a time. Every operation runs to
    completion before the next key is handled.

    Args:
        registry (ComboRegistry | None): Declared combos and pending bindings.
        options (OptionsManager | None): Process-wide settings (`use_prefix`,
            `show_common_commands`).
        display (DisplayProtocol | None): Renders the active session. Defaults
            to a `RichDisplay`.
        console (Console): Console for user-facing messages.
        prompt_session (PromptSession | None): Reads keys in `popup()`.
        quit_key (str): Key that quits and resumes the previous popup, unless
            an action is bound to it.
        debug_hooks (bool): Register the logging hooks from `popyx.debug`.

    Methods:
        invoke(name, prefix): Apply the invocation policy.
        popup(name, prefix): Apply the policy and run the key loop.
        handle_key(key): Route one key press.
        toggle_switch / toggle_option / invoke_key: Session transitions.
        quit(): Close the active session.
        set_default_arguments / save_default_arguments: Write the defaults cell.
        get_args(patterns, mode): Resolved arguments of the active session.
    """

    def __init__(
        self,
        *,
        registry: ComboRegistry | None = None,
        options: OptionsManager | None = None,
        display: DisplayProtocol | None = None,
        console: Console = console,
        prompt_session: PromptSession | None = None,
        quit_key: str = QUIT_KEY,
        debug_hooks: bool = False,
    ) -> None:
        self.registry = registry or ComboRegistry()
        self.options = options or OptionsManager()
        self.display = display or RichDisplay(self.options, console)
        self.console = console
        self.quit_key = quit_key
        self.hooks = HookManager()
        if debug_hooks:
            register_debug_hooks(self.hooks)
        self.session: ComboSession | None = None
        self._invoking: ComboSession | None = None
        if prompt_session is not None:
            self.prompt_session = prompt_session

    @cached_property
    def prompt_session(self) -> PromptSession:
        return PromptSession()

    @property
    def common_commands(self) -> dict[str, Callable[[], Awaitable[bool]]]:
        return {
            "C-g": self.quit,
            "C-c C-c": self.set_default_arguments,
            "C-x C-s": self.save_default_arguments,
            "C-t": self.toggle_common_commands,
        }

    def declare(self, combo: Combo, replace: bool = False) -> Combo:
        return self.registry.declare(combo, replace=replace)

    def bind(
        self,
        name: str,
        kind: EventKind | str,
        key: str,
        definition: Any,
        at: str | None = None,
        prepend: bool = False,
    ) -> None:
        self.registry.bind(name, kind, key, definition, at=at, prepend=prepend)

    def resolve_policy(self, combo: Combo) -> PolicyMode:
        """The policy mode of `combo`: its own `use_prefix`, else the process-wide one."""
        value = combo.use_prefix
        if callable(value):
            value = value()
        if value is None:
            value = self.options.get("use_prefix")
        return PolicyMode(value)

    async def invoke(self, name: str, prefix: bool = False) -> Any:
        """
        Invoke combo `name` the way its policy mode says.

        Runs the default action with the arguments resolved from the combo's
        defaults and returns its result, or opens a session and returns None.
        A combo without a default action opens a session instead, with a notice.

        Raises:
            InvalidPolicyModeError: If the policy mode is not a known mode.
            ComboNotFoundError: If no combo is declared under `name`.
        """
        combo = self.registry.get(name)
        mode = self.resolve_policy(combo)
        if mode.runs_default(prefix):
            if combo.default_action is not None:
                previous = self.session or self._invoking
                context = InvocationContext(
                    combo=combo.name,
                    args=resolve_default_args(combo),
                    origin="default",
                    command=combo.default_action,
                    previous=previous.name if previous else None,
                )
                logger.info("[Combo:%s] Running default action.", combo.name)
                return await self._run_command(combo.default_action, context)
            logger.info("[Combo:%s] No default action; opening popup.", combo.name)
            self.console.print(
                f"[{OneColors.DARK_YELLOW}]{combo.name} has no default action; "
                "showing popup instead.[/]"
            )
        self.open_session(combo)
        return None

    def open_session(
        self, combo: Combo | str, active: Sequence[str] | None = None
    ) -> ComboSession:
        """Open a session of `combo`, suspending the current one if any."""
        if isinstance(combo, str):
            combo = self.registry.get(combo)
        previous = self.session or self._invoking
        if self.session is not None:
            self.display.close()
        session = ComboSession(combo, active, previous=previous)
        self.session = session
        self.display.open(session)
        logger.debug(
            "[Combo:%s] Session opened (previous: %s).",
            combo.name,
            previous.name if previous else None,
        )
        return session

    def close_session(self) -> ComboSession | None:
        """Discard the active session and release the display."""
        session, self.session = self.session, None
        if session is not None:
            self.display.close()
            logger.debug("[Combo:%s] Session closed.", session.name)
        return session

    def _resume(self, session: ComboSession) -> None:
        self.session = session
        self.display.open(session)
        logger.debug("[Combo:%s] Session resumed.", session.name)

    def _report(self, message: str) -> None:
        logger.info(message)
        self.console.print(f"[{OneColors.DARK_RED}]{message}[/]")

    def _require_session(self) -> ComboSession | None:
        if self.session is None:
            self._report("No popup is active.")
        return self.session

    async def toggle_switch(self, key: str) -> bool:
        session = self._require_session()
        if session is None:
            return False
        try:
            session.toggle_switch(key)
        except UnboundKeyError as error:
            self._report(str(error))
            return False
        self.display.refresh(session)
        return True

    async def toggle_option(self, key: str) -> bool:
        session = self._require_session()
        if session is None:
            return False
        try:
            await session.toggle_option(key)
        except UnboundKeyError as error:
            self._report(str(error))
            return False
        if self.session is session:
            self.display.refresh(session)
        return True

    async def invoke_key(self, key: str) -> bool:
        """
        Invoke the action or variable bound to `key` in the active session.

        Actions close the session before their command runs; variables keep it
        open and the display is refreshed afterwards. The quit key, when no
        action is bound to it, quits and resumes the suspended session.
        """
        session = self._require_session()
        if session is None:
            return False
        event, closes = session.lookup_command(key)
        if event is None:
            if key == self.quit_key:
                await self.quit(resume=True)
                return True
            self._report(f"'{key}' is undefined")
            return False

        context = InvocationContext(
            combo=session.name,
            args=session.get_args(),
            origin="popup",
            key=key,
            command=event.fun,
            previous=session.previous.name if session.previous else None,
        )
        if closes:
            self.close_session()
        invoking, self._invoking = self._invoking, session
        try:
            await self._run_command(event.fun, context)
        finally:
            self._invoking = invoking
        if not closes and self.session is session:
            self.display.refresh(session)
        return True

    async def _run_command(self, command: Any, context: InvocationContext) -> Any:
        context.start_timer()
        try:
            await self.hooks.trigger(HookType.BEFORE, context)
            result = await ensure_async(command)(context)
            context.result = result
            await self.hooks.trigger(HookType.ON_SUCCESS, context)
        except Exception as error:
            context.exception = error
            await self.hooks.trigger(HookType.ON_ERROR, context)
            self._handle_command_error(context, error)
        finally:
            context.stop_timer()
            await self.hooks.trigger(HookType.AFTER, context)
            await self.hooks.trigger(HookType.ON_TEARDOWN, context)
        return context.result

    def _handle_command_error(self, context: InvocationContext, error: Exception) -> None:
        logger.debug(
            "[%s] '%s' failed with error: %s",
            context.name,
            callable_name(context.command),
            error,
            exc_info=True,
        )
        self.console.print(
            f"[{OneColors.DARK_RED}]An error occurred while executing "
            f"{callable_name(context.command)}:[/] {error}"
        )

    async def quit(self, resume: bool = False) -> bool:
        """Close the active session; with `resume`, reopen the suspended one."""
        closed = self.close_session()
        if closed is None:
            return False
        if resume and closed.previous is not None:
            self._resume(closed.previous)
        return True

    async def set_default_arguments(self, keep_open: bool = False) -> bool:
        """Write the resolved arguments into the combo's defaults cell for this process."""
        return await self._write_defaults(persist=False, keep_open=keep_open)

    async def save_default_arguments(self, keep_open: bool = False) -> bool:
        """Like `set_default_arguments`, but also marks the defaults as saved."""
        return await self._write_defaults(persist=True, keep_open=keep_open)

    async def _write_defaults(self, persist: bool, keep_open: bool) -> bool:
        session = self._require_session()
        if session is None:
            return False
        try:
            args = session.write_defaults(persist)
        except NothingToSetError as error:
            self._report(str(error))
            return False
        logger.info(
            "[Combo:%s] Defaults %s: %s",
            session.name,
            "saved" if persist else "set",
            args,
        )
        if not keep_open:
            self.close_session()
        return True

    async def toggle_common_commands(self) -> bool:
        self.options.toggle("show_common_commands")
        if self.session is not None:
            self.display.refresh(self.session)
        return True

    async def handle_key(self, key: str) -> bool:
        """
        Route one key press.

        Common commands (`C-g`, `C-c C-c`, `C-x C-s`, `C-t`) come first; `-x`
        toggles switch `x`; `=x` toggles option `x`; any other key invokes.
        Returns False when the key was not handled.
        """
        key = key.strip()
        if key in self.common_commands:
            return await self.common_commands[key]()
        if len(key) > 1 and key[0] == "-":
            return await self.toggle_switch(key[1:])
        if len(key) > 1 and key[0] == "=":
            return await self.toggle_option(key[1:])
        return await self.invoke_key(key)

    def get_args(
        self, patterns: Sequence[str] | None = None, mode: str | None = None
    ) -> list[str]:
        """Resolved arguments of the active session, or [] when none is open."""
        if self.session is None:
            return []
        return self.session.get_args(patterns, mode)

    def _prompt_message(self, session: ComboSession) -> FormattedText:
        return FormattedText([(OneColors.BLUE_b, f"{session.combo.description} > ")])

    async def popup(self, name: str, prefix: bool = False) -> Any:
        """
        Invoke combo `name` and, if a session opened, read and route keys until
        no session is left. The display is released however the loop ends.
        """
        result = await self.invoke(name, prefix)
        if self.session is None:
            return result
        try:
            while self.session is not None:
                try:
                    key = await self.prompt_session.prompt_async(
                        self._prompt_message(self.session)
                    )
                    await self.handle_key(key)
                except CancelSignal:
                    logger.info("[CancelSignal]. <- Returning to the popup.")
        except (EOFError, KeyboardInterrupt):
            logger.info("EOF or KeyboardInterrupt. Leaving popup.")
        except QuitSignal:
            logger.info("[QuitSignal]. <- Leaving popup.")
        finally:
            self.close_session()
        return None
