import pytest

from popyx.config import PopyxConfig, import_object, loader
from popyx.defaults import OptionsDefaultsCell
from popyx.display import NullDisplay
from popyx.event import Option, Switch
from popyx.prompt_utils import read_number

YAML_CONFIG = """
use_prefix: popup
show_common_commands: true
combos:
  - name: log
    description: Show history
    default_action: builtins.repr
    switches:
      - Switches
      - {key: g, description: Graph, arg: --graph, enabled: true}
      - {key: a, description: All, arg: --all}
    options:
      - {key: n, description: Count, arg: "-n", reader: number, default: "256"}
      - {key: A, description: Author, arg: "--author="}
    actions:
      - Log
      - {key: l, description: Log current, command: builtins.repr}
  - name: status
    use_prefix: none
    actions:
      - {key: s, description: Status, command: builtins.repr}
"""

TOML_CONFIG = """
use_prefix = "none"

[[combos]]
name = "status"
description = "Status"
sequence_predicate = "builtins.bool"
actions = [{key = "s", description = "Status", command = "builtins.repr"}]
sequence_actions = [{key = "c", description = "Continue", command = "builtins.repr"}]
"""


def write(tmp_path, name, content):
    path = tmp_path / name
    path.write_text(content, encoding="UTF-8")
    return path


def test_yaml_loader(tmp_path):
    popyx = loader(write(tmp_path, "popyx.yaml", YAML_CONFIG))

    assert popyx.options.get("use_prefix") == "popup"
    assert popyx.options.get("show_common_commands") is True
    combo = popyx.registry.get("log")
    assert combo.description == "Show history"
    assert combo.default_action is repr
    assert combo.switches[0] == "Switches"
    assert combo.lookup("switches", "g") == Switch("g", "Graph", "--graph", enabled=True)
    assert combo.lookup("options", "n") == Option(
        "n", "Count", "-n", reader=read_number, default="256"
    )
    assert combo.lookup("options", "A").reader is None
    assert combo.lookup("actions", "l").command is repr
    assert isinstance(combo.defaults_cell, OptionsDefaultsCell)
    assert combo.authored_arguments() == ["--graph", "-n256"]
    assert popyx.registry.get("status").use_prefix == "none"


@pytest.mark.asyncio
async def test_loaded_combo_runs(tmp_path):
    popyx = loader(write(tmp_path, "popyx.yml", YAML_CONFIG))
    popyx.display = NullDisplay()

    result = await popyx.invoke("log")
    assert "--graph" in result
    assert "-n256" in result

    await popyx.invoke("log", prefix=True)
    await popyx.handle_key("-a")
    await popyx.handle_key("C-c C-c")
    assert popyx.options.get("log", namespace_name="defaults") == ["--graph", "--all", "-n256"]


def test_toml_loader(tmp_path):
    popyx = loader(write(tmp_path, "popyx.toml", TOML_CONFIG))
    combo = popyx.registry.get("status")
    assert popyx.options.get("use_prefix") == "none"
    assert combo.sequence_predicate is bool
    assert combo.in_sequence() is False
    assert [action.key for action in combo.sequence_actions] == ["c"]


def test_invalid_use_prefix(tmp_path):
    path = write(tmp_path, "popyx.yaml", "use_prefix: sometimes\ncombos: []\n")
    with pytest.raises(ValueError):
        loader(path)


def test_unsupported_format(tmp_path):
    with pytest.raises(ValueError):
        loader(write(tmp_path, "popyx.json", "{}"))


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        loader(tmp_path / "missing.yaml")


def test_config_must_be_mapping(tmp_path):
    with pytest.raises(ValueError):
        loader(write(tmp_path, "popyx.yaml", "- just\n- a list\n"))


def test_import_object():
    assert import_object("builtins.repr") is repr
    with pytest.raises(SystemExit):
        import_object("repr")
    with pytest.raises(SystemExit):
        import_object("popyx_missing_module.run")
    with pytest.raises(SystemExit):
        import_object("builtins.not_a_builtin")


def test_config_model_defaults():
    config = PopyxConfig()
    assert config.use_prefix == "default"
    assert config.combos == []
