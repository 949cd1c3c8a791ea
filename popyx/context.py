# Popyx Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `InvocationContext`, the request-scoped data handed to every command
Popyx invokes.

A command bound in a combo is called with a single positional argument, the
`InvocationContext`. It tells the command which combo triggered it, how
(`origin` is "popup" for a key pressed in an open session, "default" for the
default action run by the invocation policy) and with which resolved
arguments. The same command can be called directly with `None`; use
`InvocationContext.args_for` to fall back to the command's own defaults then:

    def log_current(context: InvocationContext | None = None):
        args = InvocationContext.args_for(context, "log", fallback=["--graph"])
        ...

Tests can construct a context directly without any session machinery.
"""
from __future__ import annotations

import time
from typing import Any, Literal, Sequence

from pydantic import BaseModel, ConfigDict, Field

from popyx.arguments import export_file_args, filter_args
from popyx.utils import callable_name


class InvocationContext(BaseModel):
    """
    Request-scoped data for one command invocation.

    Attributes:
        combo (str): Name of the combo the command was invoked from.
        args (list[str]): Resolved argument list at invocation time.
        origin (str): "popup" or "default".
        key (str | None): Key that invoked the command; None for the default action.
        command (Any): The command being invoked.
        previous (str | None): Name of the suspended combo, if any.
        result (Any | None): The command's return value.
        exception (Exception | None): The exception it raised, if any.
    """

    combo: str
    args: list[str] = Field(default_factory=list)
    origin: Literal["popup", "default"] = "popup"
    key: str | None = None
    command: Any = None
    previous: str | None = None

    result: Any | None = None
    exception: Exception | None = None
    start_time: float | None = None
    end_time: float | None = None

    model_config = ConfigDict(arbitrary_types_allowed=True)

    @property
    def name(self) -> str:
        return f"{self.combo}:{self.key or self.origin}"

    def get_args(
        self, patterns: Sequence[str] | None = None, mode: str | None = None
    ) -> list[str]:
        """The resolved arguments, optionally filtered with `filter_args`."""
        if patterns is None:
            return list(self.args)
        return filter_args(self.args, patterns, mode)

    def file_args(self) -> tuple[list[str], list[str] | None]:
        """Resolved arguments split into flags and file paths."""
        return export_file_args(self.args)

    @staticmethod
    def args_for(
        context: InvocationContext | None, combo: str, fallback: Sequence[str] = ()
    ) -> list[str]:
        """
        Arguments for a command that may run inside or outside `combo`.

        Returns the context's arguments when the command was invoked from
        `combo`, otherwise `fallback`.
        """
        if context is not None and context.combo == combo:
            return list(context.args)
        return list(fallback)

    def start_timer(self) -> None:
        self.start_time = time.perf_counter()

    def stop_timer(self) -> None:
        self.end_time = time.perf_counter()

    @property
    def duration(self) -> float | None:
        if self.start_time is None:
            return None
        if self.end_time is None:
            return time.perf_counter() - self.start_time
        return self.end_time - self.start_time

    @property
    def success(self) -> bool:
        return self.exception is None

    @property
    def status(self) -> str:
        return "OK" if self.success else "ERROR"

    def to_log_line(self) -> str:
        duration_str = f"{self.duration:.3f}s" if self.duration is not None else "n/a"
        exception_str = (
            f"{type(self.exception).__name__}: {self.exception}"
            if self.exception
            else "None"
        )
        return (
            f"[{self.name}] status={self.status} duration={duration_str} "
            f"args={self.args} result={self.result!r} exception={exception_str}"
        )

    def __str__(self) -> str:
        return (
            f"<InvocationContext '{self.name}' | {self.status} | "
            f"{callable_name(self.command)}({' '.join(self.args)})>"
        )
