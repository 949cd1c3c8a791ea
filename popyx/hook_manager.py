# Popyx Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Lifecycle hooks around the commands Popyx invokes.

Every command run from a combo (an action, a variable, or the default action)
goes through the same lifecycle, and each phase can carry callbacks that
receive the command's `InvocationContext`:

    before → command → on_success | on_error → after → on_teardown

Hooks may be plain functions or coroutine functions. A failing hook is logged
and skipped, except during `on_error`, where the command's own exception is
re-raised from the hook's.

Usage:
    popyx.hooks.register("before", lambda context: audit(context.args))
"""
from __future__ import annotations

import inspect
from enum import Enum
from typing import Awaitable, Callable, Union

from popyx.context import InvocationContext
from popyx.logger import logger
from popyx.utils import callable_name

Hook = Union[
    Callable[[InvocationContext], None], Callable[[InvocationContext], Awaitable[None]]
]


class HookType(Enum):
    """
    Lifecycle phases of a command invocation.

    Aliases:
        "success" → "on_success"
        "error" → "on_error"
        "teardown" → "on_teardown"
    """

    BEFORE = "before"
    ON_SUCCESS = "on_success"
    ON_ERROR = "on_error"
    AFTER = "after"
    ON_TEARDOWN = "on_teardown"

    @classmethod
    def _missing_(cls, value: object) -> HookType:
        if not isinstance(value, str):
            raise ValueError(f"Invalid {cls.__name__}: {value!r}")
        normalized = value.strip().lower()
        alias = {
            "success": "on_success",
            "error": "on_error",
            "teardown": "on_teardown",
        }.get(normalized, normalized)
        for member in cls:
            if member.value == alias:
                return member
        valid = ", ".join(member.value for member in cls)
        raise ValueError(f"Invalid {cls.__name__}: '{value}'. Must be one of: {valid}")

    def __str__(self) -> str:
        return self.value


class HookManager:
    """Registers and triggers lifecycle hooks."""

    def __init__(self) -> None:
        self._hooks: dict[HookType, list[Hook]] = {
            hook_type: [] for hook_type in HookType
        }

    def register(self, hook_type: HookType | str, hook: Hook) -> None:
        if not callable(hook):
            raise TypeError(f"Hook {hook!r} is not callable.")
        self._hooks[HookType(hook_type)].append(hook)

    def clear(self, hook_type: HookType | None = None) -> None:
        if hook_type:
            self._hooks[hook_type] = []
        else:
            for each in self._hooks:
                self._hooks[each] = []

    async def trigger(self, hook_type: HookType, context: InvocationContext) -> None:
        for hook in self._hooks[hook_type]:
            try:
                if inspect.iscoroutinefunction(hook):
                    await hook(context)
                else:
                    hook(context)
            except Exception as hook_error:
                logger.warning(
                    "[Hook:%s] raised an exception during '%s' for '%s': %s",
                    callable_name(hook),
                    hook_type,
                    context.name,
                    hook_error,
                )
                if hook_type == HookType.ON_ERROR:
                    assert isinstance(
                        context.exception, Exception
                    ), "Context exception should be set for ON_ERROR hook"
                    raise context.exception from hook_error
