import pytest

from popyx.combo import Combo
from popyx.defaults import DefaultsCell
from popyx.event import Action, ActionEvent, Option, Switch, Variable, VariableEvent
from popyx.exceptions import NothingToSetError, UnboundKeyError
from popyx.session import ComboSession, resolve_default_args
from popyx.signals import CancelSignal


def command(context=None):
    return None


def make_combo(**kwargs):
    return Combo(
        "demo",
        switches=[Switch("a", "All", "-a"), Switch("b", "B", "-b")],
        options=[Option("o", "Opt", "--opt=")],
        **kwargs,
    )


def test_switch_scenario():
    session = ComboSession(make_combo(default_arguments=["-a"]))
    assert session.get_args() == ["-a"]
    session.toggle_switch("b")
    assert session.get_args() == ["-a", "-b"]
    session.toggle_switch("a")
    assert session.get_args() == ["-b"]


def test_explicit_active_list_overrides_enabled_switches():
    combo = Combo(
        "demo",
        switches=[Switch("a", "All", "-a"), Switch("b", "B", "-b", enabled=True)],
    )
    session = ComboSession(combo, active=["-a"])
    assert session.lookup("switches", "a").use is True
    assert session.lookup("switches", "b").use is False
    assert session.get_args() == ["-a"]

    session.toggle_switch("a")
    assert session.get_args() == []


@pytest.mark.parametrize(
    "active",
    [
        [],
        ["-a"],
        ["-b", "-a"],
        ["--opt=9"],
        ["-n5", "-b"],
        ["--opt=", "-n12", "-a", "-b"],
        ["-a", "-a", "--opt=x"],
    ],
)
def test_resolved_args_come_from_active_list(active):
    combo = Combo(
        "demo",
        switches=[Switch("a", "All", "-a"), Switch("b", "B", "-b", enabled=True)],
        options=[Option("o", "Opt", "--opt="), Option("n", "Count", "-n")],
    )
    args = ComboSession(combo, active=active).get_args()
    assert set(args) == set(active)
    assert len(args) == len(set(args))


@pytest.mark.asyncio
async def test_option_scenario():
    calls = []

    def reader(prompt, previous):
        calls.append((prompt, previous))
        return "9"

    combo = Combo(
        "demo",
        switches=[Switch("a", "All", "-a"), Switch("b", "B", "-b")],
        options=[Option("o", "Opt", "--opt=", reader=reader)],
        default_arguments=["-a"],
    )
    session = ComboSession(combo)
    session.toggle_switch("b")
    await session.toggle_option("o")
    assert calls == [("--opt=", None)]
    assert session.get_args() == ["-a", "-b", "--opt=9"]

    await session.toggle_option("o")
    option = session.lookup("options", "o")
    assert option.use is False
    assert option.val is None
    assert session.get_args() == ["-a", "-b"]
    assert len(calls) == 1


@pytest.mark.asyncio
async def test_reader_after_clearing_gets_no_previous_value():
    seen = []

    async def reader(prompt, previous):
        seen.append(previous)
        return "7"

    combo = Combo("demo", options=[Option("n", "Count", "-n", reader=reader)])
    session = ComboSession(combo, active=["-n5"])
    assert session.get_args() == ["-n5"]
    await session.toggle_option("n")
    assert session.get_args() == []
    await session.toggle_option("n")
    assert seen == [None]
    assert session.get_args() == ["-n7"]


@pytest.mark.asyncio
async def test_reader_returning_none_leaves_option_unset():
    combo = Combo("demo", options=[Option("o", "Opt", "--opt=", reader=lambda p, v: None)])
    session = ComboSession(combo)
    await session.toggle_option("o")
    assert session.lookup("options", "o").use is False
    assert session.get_args() == []


@pytest.mark.asyncio
async def test_reader_cancel_leaves_option_unset():
    def reader(prompt, previous):
        raise CancelSignal()

    combo = Combo("demo", options=[Option("o", "Opt", "--opt=", reader=reader)])
    session = ComboSession(combo)
    await session.toggle_option("o")
    assert session.get_args() == []


@pytest.mark.asyncio
async def test_empty_answer_sets_option():
    combo = Combo("demo", options=[Option("m", "Message", "--message=", reader=lambda p, v: "")])
    session = ComboSession(combo)
    await session.toggle_option("m")
    assert session.get_args() == ["--message="]


@pytest.mark.asyncio
async def test_toggling_unbound_keys_raises():
    session = ComboSession(make_combo())
    with pytest.raises(UnboundKeyError, match="isn't bound to any switch"):
        session.toggle_switch("z")
    with pytest.raises(UnboundKeyError):
        await session.toggle_option("z")


def test_defaults_from_declaration():
    combo = Combo(
        "demo",
        switches=[Switch("a", "All", "-a", enabled=True), Switch("b", "B", "-b")],
        options=[Option("n", "Count", "-n", default="256"), Option("o", "Opt", "--opt=")],
    )
    assert combo.authored_arguments() == ["-a", "-n256"]
    assert resolve_default_args(combo) == ["-a", "-n256"]


def test_defaults_cell_takes_precedence():
    combo = make_combo(default_arguments=["-a"], defaults_cell=DefaultsCell(["-b"]))
    assert ComboSession(combo).get_args() == ["-b"]


def test_args_are_switches_then_options_in_declaration_order():
    combo = Combo(
        "demo",
        switches=[Switch("b", "B", "-b"), Switch("a", "A", "-a")],
        options=[Option("o", "Opt", "--opt=")],
    )
    session = ComboSession(combo, active=["--opt=1", "-a", "-b", "--unknown"])
    assert session.get_args() == ["-b", "-a", "--opt=1"]
    assert session.get_args(["-a"], ":not") == ["-b", "--opt=1"]
    assert session.get_args(["--opt="]) == ["--opt=1"]


def test_lookup_command_resolution():
    combo = Combo(
        "demo",
        variables=[
            Variable("x", "Stateless, shadows action", command),
            Variable("y", "Shadowed by action", command, formatter=lambda: "on"),
            Variable("v", "Stateful", command, formatter=lambda: "on"),
            Variable("w", "Stateless", command),
        ],
        actions=[Action("x", "Run", command), Action("y", "Run", command)],
    )
    session = ComboSession(combo)

    event, closes = session.lookup_command("x")
    assert isinstance(event, VariableEvent)
    assert event.description == "Stateless, shadows action"
    assert closes is True

    event, closes = session.lookup_command("y")
    assert isinstance(event, ActionEvent)
    assert closes is True

    event, closes = session.lookup_command("v")
    assert isinstance(event, VariableEvent)
    assert closes is False

    event, closes = session.lookup_command("w")
    assert isinstance(event, VariableEvent)
    assert closes is True

    assert session.lookup_command("z") == (None, False)


def test_sequence_actions_replace_actions_while_in_sequence():
    state = {"running": True}
    combo = Combo(
        "rebase",
        actions=[Action("r", "Rebase", command)],
        sequence_actions=[Action("c", "Continue", command), Action("a", "Abort", command)],
        sequence_predicate=lambda: state["running"],
    )
    assert [event.key for event in ComboSession(combo).actions] == ["c", "a"]
    state["running"] = False
    assert [event.key for event in ComboSession(combo).actions] == ["r"]


def test_predicate_without_sequence_actions_is_ignored():
    combo = Combo("demo", actions=[Action("r", "Run", command)], sequence_predicate=lambda: True)
    assert combo.in_sequence() is False
    assert [event.key for event in ComboSession(combo).actions] == ["r"]


def test_keys():
    combo = Combo(
        "demo",
        switches=["Switches", Switch("a", "All", "-a")],
        options=[Option("o", "Opt", "--opt=")],
        variables=[Variable("v", "Var", command)],
        actions=[Action("c", "Commit", command)],
    )
    assert ComboSession(combo).keys() == ["-a", "=o", "v", "c"]


def test_write_defaults():
    cell = DefaultsCell()
    session = ComboSession(make_combo(defaults_cell=cell), active=["-b"])
    assert session.write_defaults(persist=True) == ["-b"]
    assert cell.get() == ["-b"]
    assert cell.saved == ["-b"]


def test_write_defaults_without_cell():
    session = ComboSession(make_combo())
    with pytest.raises(NothingToSetError, match="Nothing to set"):
        session.write_defaults()
    with pytest.raises(NothingToSetError, match="Nothing to save"):
        session.write_defaults(persist=True)
