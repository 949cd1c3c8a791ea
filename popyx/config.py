# Popyx Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""config.py
Configuration loader for Popyx combos.

A YAML or TOML file declares process-wide settings and a list of combos.
Commands, readers, formatters and predicates are dotted import paths:

    use_prefix: default
    combos:
      - name: log
        description: Show history
        default_action: myapp.git.log_current
        switches:
          - Switches
          - {key: g, description: Show graph, arg: --graph, enabled: true}
        options:
          - {key: n, description: Limit count, arg: "-n", reader: number, default: "256"}
        actions:
          - {key: l, description: Log current, command: myapp.git.log_current}

The readers "line" and "number" name the built-in readers.
"""
from __future__ import annotations

import importlib
import sys
from pathlib import Path
from typing import Any

import toml
import yaml
from pydantic import BaseModel, Field, field_validator

from popyx.combo import Combo
from popyx.console import console
from popyx.defaults import OptionsDefaultsCell
from popyx.event import Action, Option, Switch, Variable
from popyx.exceptions import InvalidPolicyModeError
from popyx.logger import logger
from popyx.mode import PolicyMode
from popyx.options_manager import OptionsManager
from popyx.popyx import Popyx
from popyx.prompt_utils import read_from_prompt, read_number
from popyx.themes import OneColors

BUILTIN_READERS = {
    "line": read_from_prompt,
    "number": read_number,
}


def import_object(dotted_path: str) -> Any:
    """Dynamically imports an object from a dotted path like 'my.module.func'."""
    module_path, _, attr = dotted_path.rpartition(".")
    if not module_path:
        console.print(f"[{OneColors.DARK_RED}]❌ Invalid import path:[/] {dotted_path}")
        sys.exit(1)
    try:
        module = importlib.import_module(module_path)
    except ModuleNotFoundError as error:
        logger.error("Failed to import module '%s': %s", module_path, error)
        console.print(
            f"[{OneColors.DARK_RED}]❌ Could not import '{dotted_path}': {error}[/]\n"
            f"[{OneColors.COMMENT_GREY}]Ensure the module is installed and discoverable "
            "via PYTHONPATH."
        )
        sys.exit(1)
    try:
        return getattr(module, attr)
    except AttributeError as error:
        logger.error(
            "Module '%s' does not have attribute '%s': %s", module_path, attr, error
        )
        console.print(
            f"[{OneColors.DARK_RED}]❌ Module '{module_path}' has no attribute "
            f"'{attr}': {error}[/]"
        )
        sys.exit(1)


def _import_optional(dotted_path: str | None) -> Any:
    return None if dotted_path is None else import_object(dotted_path)


def _validate_policy_mode(value: str | None) -> str | None:
    if value is None:
        return None
    try:
        return PolicyMode(value).value
    except InvalidPolicyModeError as error:
        raise ValueError(str(error)) from error


class RawSwitch(BaseModel):
    key: str
    description: str
    arg: str
    enabled: bool = False
    function: str | None = None

    def to_entry(self) -> Switch:
        return Switch(
            self.key,
            self.description,
            self.arg,
            enabled=self.enabled,
            function=_import_optional(self.function),
        )


class RawOption(BaseModel):
    key: str
    description: str
    arg: str
    reader: str | None = None
    default: str | None = None

    def to_entry(self) -> Option:
        if self.reader is None:
            reader = None
        elif self.reader in BUILTIN_READERS:
            reader = BUILTIN_READERS[self.reader]
        else:
            reader = import_object(self.reader)
        return Option(self.key, self.description, self.arg, reader, self.default)


class RawVariable(BaseModel):
    key: str
    description: str
    command: str
    formatter: str | None = None

    def to_entry(self) -> Variable:
        return Variable(
            self.key,
            self.description,
            import_object(self.command),
            _import_optional(self.formatter),
        )


class RawAction(BaseModel):
    key: str
    description: str
    command: str

    def to_entry(self) -> Action:
        return Action(self.key, self.description, import_object(self.command))


def _entries(raw_entries: list) -> list:
    return [raw if isinstance(raw, str) else raw.to_entry() for raw in raw_entries]


class RawCombo(BaseModel):
    """Raw combo model for Popyx configuration."""

    name: str
    description: str = ""
    switches: list[RawSwitch | str] = Field(default_factory=list)
    options: list[RawOption | str] = Field(default_factory=list)
    variables: list[RawVariable | str] = Field(default_factory=list)
    actions: list[RawAction | str] = Field(default_factory=list)
    sequence_actions: list[RawAction | str] = Field(default_factory=list)
    sequence_predicate: str | None = None
    default_action: str | None = None
    use_prefix: str | None = None
    default_arguments: list[str] | None = None

    @field_validator("use_prefix")
    @classmethod
    def validate_use_prefix(cls, value: str | None) -> str | None:
        return _validate_policy_mode(value)

    def to_combo(self, options: OptionsManager) -> Combo:
        return Combo(
            self.name,
            description=self.description,
            switches=_entries(self.switches),
            options=_entries(self.options),
            variables=_entries(self.variables),
            actions=_entries(self.actions),
            sequence_actions=_entries(self.sequence_actions),
            sequence_predicate=_import_optional(self.sequence_predicate),
            default_action=_import_optional(self.default_action),
            use_prefix=self.use_prefix,
            default_arguments=self.default_arguments,
            defaults_cell=OptionsDefaultsCell(options, self.name),
        )


class PopyxConfig(BaseModel):
    """Popyx configuration model."""

    use_prefix: str | None = "default"
    show_common_commands: bool = False
    combos: list[RawCombo] = Field(default_factory=list)

    @field_validator("use_prefix")
    @classmethod
    def validate_use_prefix(cls, value: str | None) -> str | None:
        return _validate_policy_mode(value)

    def to_popyx(self) -> Popyx:
        options = OptionsManager()
        options.set("use_prefix", self.use_prefix)
        options.set("show_common_commands", self.show_common_commands)
        popyx = Popyx(options=options)
        for raw_combo in self.combos:
            popyx.declare(raw_combo.to_combo(options))
        return popyx


def loader(file_path: Path | str) -> Popyx:
    """
    Load Popyx combos from a YAML or TOML file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the format is unsupported or the file is not a mapping.
    """
    if isinstance(file_path, (str, Path)):
        path = Path(file_path)
    else:
        raise TypeError("file_path must be a string or Path object.")

    if not path.is_file():
        raise FileNotFoundError(f"No such config file: {file_path}")

    suffix = path.suffix
    with path.open("r", encoding="UTF-8") as config_file:
        if suffix in (".yaml", ".yml"):
            raw_config = yaml.safe_load(config_file)
        elif suffix == ".toml":
            raw_config = toml.load(config_file)
        else:
            raise ValueError(f"Unsupported config format: {suffix}")

    if not isinstance(raw_config, dict):
        raise ValueError(
            "Configuration file must contain a mapping with a list of combos.\n"
            "Example:\n"
            "combos:\n"
            "  - name: log\n"
            "    actions:\n"
            "      - {key: l, description: Log, command: my_module.log}"
        )

    return PopyxConfig.model_validate(raw_config).to_popyx()
