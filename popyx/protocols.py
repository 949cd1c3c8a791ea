# Popyx Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Structural protocols for the collaborators Popyx talks to.

- ValueReader: reads a new option value, `(prompt, previous) -> str | None`.
  May be a plain function or a coroutine function.
- Command: an action or variable command, called with one
  `InvocationContext`. May be a plain function or a coroutine function.
- DefaultsCellProtocol: holds a combo's default argument list.
- DisplayProtocol: renders a combo session. Opened when a session starts,
  refreshed after every state change and closed on every way out.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Awaitable, Protocol, Sequence, runtime_checkable

if TYPE_CHECKING:
    from popyx.context import InvocationContext
    from popyx.session import ComboSession


@runtime_checkable
class ValueReader(Protocol):
    def __call__(
        self, prompt: str, previous: str | None
    ) -> str | None | Awaitable[str | None]: ...


@runtime_checkable
class Command(Protocol):
    def __call__(self, context: InvocationContext) -> Any: ...


@runtime_checkable
class DefaultsCellProtocol(Protocol):
    def get(self) -> list[str] | None: ...

    def set(self, args: Sequence[str], persist: bool = False) -> Any: ...


@runtime_checkable
class DisplayProtocol(Protocol):
    def open(self, session: ComboSession) -> None: ...

    def refresh(self, session: ComboSession) -> None: ...

    def close(self) -> None: ...
