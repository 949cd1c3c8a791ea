# Popyx Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Process-wide Popyx settings, grouped in named `argparse.Namespace` objects.

The "settings" namespace carries the options every combo falls back to:

- `use_prefix`: the invocation policy mode ("default", "popup" or "none") used
  when a combo has no `use_prefix` of its own.
- `show_common_commands`: whether displays list the common commands
  (quit, set defaults, save defaults, toggle this list).

Other namespaces hold per-combo argument defaults (see `OptionsDefaultsCell`),
so every piece of shared configuration lives in one place.

Typical Usage:
    options = OptionsManager()
    options.set("use_prefix", "popup")
    options.toggle("show_common_commands")
    options.from_namespace(args, namespace_name="cli_args")
"""
from argparse import Namespace
from collections import defaultdict
from typing import Any

from popyx.logger import logger

SETTINGS = "settings"

DEFAULT_SETTINGS = {
    "use_prefix": "default",
    "show_common_commands": False,
}


class OptionsManager:
    """
    Named namespaces of runtime options.

    Missing namespaces are created on first access, so getters never fail on
    an unknown namespace; they return the supplied default instead.
    """

    def __init__(self, namespaces: list[tuple[str, Namespace]] | None = None) -> None:
        self.options: defaultdict = defaultdict(Namespace)
        self.options[SETTINGS] = Namespace(**DEFAULT_SETTINGS)
        if namespaces:
            for namespace_name, namespace in namespaces:
                self.from_namespace(namespace, namespace_name)

    def from_namespace(self, namespace: Namespace, namespace_name: str = SETTINGS) -> None:
        """Merge a namespace's values over the existing ones."""
        for name, value in vars(namespace).items():
            self.set(name, value, namespace_name)

    def get(self, option_name: str, default: Any = None, namespace_name: str = SETTINGS) -> Any:
        return getattr(self.options[namespace_name], option_name, default)

    def set(self, option_name: str, value: Any, namespace_name: str = SETTINGS) -> None:
        setattr(self.options[namespace_name], option_name, value)

    def has_option(self, option_name: str, namespace_name: str = SETTINGS) -> bool:
        return hasattr(self.options[namespace_name], option_name)

    def toggle(self, option_name: str, namespace_name: str = SETTINGS) -> bool:
        """Toggle a boolean option and return its new value."""
        current = self.get(option_name, namespace_name=namespace_name)
        if not isinstance(current, bool):
            raise TypeError(
                f"Cannot toggle non-boolean option: '{option_name}' in '{namespace_name}'"
            )
        self.set(option_name, not current, namespace_name=namespace_name)
        logger.debug("Toggled '%s' in '%s' to %s", option_name, namespace_name, not current)
        return not current

    def get_namespace_dict(self, namespace_name: str) -> dict[str, Any]:
        if namespace_name not in self.options:
            raise ValueError(f"Namespace '{namespace_name}' not found.")
        return vars(self.options[namespace_name])
