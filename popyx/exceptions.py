# Popyx Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines all custom exception classes used in Popyx.

Exception Hierarchy:
- PopyxError
    ├── ComboAlreadyExistsError
    ├── ComboNotFoundError
    ├── UnboundKeyError
    ├── NothingToSetError
    ├── InvalidPolicyModeError
    └── InvalidEventKindError (also a ValueError)

`UnboundKeyError` and `NothingToSetError` describe recoverable user mistakes and
are reported by `Popyx` as console messages. `InvalidPolicyModeError` and
`InvalidEventKindError` describe a broken combo declaration and propagate.
"""


class PopyxError(Exception):
    """Base exception for Popyx."""


class ComboAlreadyExistsError(PopyxError):
    """Exception raised when a combo with the same name is declared twice."""


class ComboNotFoundError(PopyxError):
    """Exception raised when a combo name is not declared."""


class UnboundKeyError(PopyxError):
    """Exception raised when a key has no binding in the active session."""


class NothingToSetError(PopyxError):
    """Exception raised when a combo has no defaults cell to write to."""


class InvalidPolicyModeError(PopyxError):
    """Exception raised when a `use_prefix` value is not a known policy mode."""


class InvalidEventKindError(PopyxError, ValueError):
    """Exception raised when a binding kind cannot be folded to a known kind."""
