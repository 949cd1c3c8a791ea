# Popyx Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `PolicyMode`, which decides what invoking a combo does.

- DEFAULT: run the default action when invoked with a prefix, else open the popup.
- POPUP: open the popup when invoked with a prefix, else run the default action.
- NONE: always open the popup.

`PolicyMode(None)` is NONE. Any other unknown value raises
`InvalidPolicyModeError`.
"""
from __future__ import annotations

from enum import Enum

from popyx.exceptions import InvalidPolicyModeError


class PolicyMode(Enum):
    DEFAULT = "default"
    POPUP = "popup"
    NONE = "none"

    @classmethod
    def _missing_(cls, value: object) -> PolicyMode:
        if value is None:
            return cls.NONE
        if isinstance(value, str):
            normalized = value.strip().lower().lstrip(":")
            for member in cls:
                if member.value == normalized:
                    return member
        valid = ", ".join(member.value for member in cls)
        raise InvalidPolicyModeError(
            f"Invalid use_prefix value: {value!r}. Must be one of: {valid}"
        )

    def runs_default(self, prefix: bool) -> bool:
        """Whether a combo invoked with/without a prefix should run its default action."""
        return (self is PolicyMode.DEFAULT and prefix) or (
            self is PolicyMode.POPUP and not prefix
        )
