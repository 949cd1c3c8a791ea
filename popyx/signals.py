# Popyx Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Flow control signals used internally by Popyx.

Signals inherit from `FlowSignal`, a subclass of `BaseException`, so they
bypass the `except Exception` blocks that report command failures.

Signals:
- QuitSignal: Close every open combo session and leave the popup loop.
- CancelSignal: Cancel the current prompt (e.g. Ctrl-C while reading a value).
"""


class FlowSignal(BaseException):
    """Base class for all flow control signals in Popyx."""


class QuitSignal(FlowSignal):
    """Raised to leave the interactive popup loop immediately."""

    def __init__(self, message: str = "Quit signal received."):
        super().__init__(message)


class CancelSignal(FlowSignal):
    """Raised to cancel the current prompt or command."""

    def __init__(self, message: str = "Cancel signal received."):
        super().__init__(message)
