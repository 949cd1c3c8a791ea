"""
Popyx Framework

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

from .combo import Combo
from .context import InvocationContext
from .defaults import DefaultsCell, OptionsDefaultsCell
from .event import Action, EventKind, Option, Switch, Variable
from .popyx import Popyx
from .registry import ComboRegistry
from .version import __version__

__all__ = [
    "Action",
    "Combo",
    "ComboRegistry",
    "DefaultsCell",
    "EventKind",
    "InvocationContext",
    "Option",
    "OptionsDefaultsCell",
    "Popyx",
    "Switch",
    "Variable",
    "__version__",
]
