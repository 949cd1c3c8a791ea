# Popyx Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Cells holding a combo's default argument list.

A combo session reads its cell once when it opens and writes it only when the
user sets or saves the defaults. `set(args, persist=False)` changes the value
for the rest of the process; `persist=True` also marks it as saved. Where the
saved value goes beyond that is up to the host application.

- `DefaultsCell`: a standalone in-memory cell.
- `OptionsDefaultsCell`: a cell stored in an `OptionsManager`, keyed by combo
  name, so all combos of an application share one configuration store.
"""
from __future__ import annotations

from typing import Sequence

from popyx.logger import logger
from popyx.options_manager import OptionsManager

DEFAULTS = "defaults"
SAVED_DEFAULTS = "saved_defaults"


class DefaultsCell:
    """In-memory defaults cell. `None` means "never set"."""

    def __init__(self, value: Sequence[str] | None = None) -> None:
        self.value: list[str] | None = None if value is None else list(value)
        self.saved: list[str] | None = None

    def get(self) -> list[str] | None:
        return None if self.value is None else list(self.value)

    def set(self, args: Sequence[str], persist: bool = False) -> None:
        self.value = list(args)
        if persist:
            self.saved = list(args)
        logger.debug("Defaults %s: %s", "saved" if persist else "set", self.value)

    def __repr__(self) -> str:
        return f"DefaultsCell(value={self.value!r}, saved={self.saved!r})"


class OptionsDefaultsCell:
    """Defaults cell backed by the "defaults" namespaces of an `OptionsManager`."""

    def __init__(self, options: OptionsManager, name: str) -> None:
        self.options = options
        self.name = name

    def get(self) -> list[str] | None:
        value = self.options.get(self.name, namespace_name=DEFAULTS)
        return None if value is None else list(value)

    def set(self, args: Sequence[str], persist: bool = False) -> None:
        self.options.set(self.name, list(args), namespace_name=DEFAULTS)
        if persist:
            self.options.set(self.name, list(args), namespace_name=SAVED_DEFAULTS)
        logger.debug(
            "[Combo:%s] Defaults %s: %s", self.name, "saved" if persist else "set", args
        )

    @property
    def saved(self) -> list[str] | None:
        return self.options.get(self.name, namespace_name=SAVED_DEFAULTS)
