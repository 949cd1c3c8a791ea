import io

import pytest
from rich.console import Console

from popyx import Combo, DefaultsCell, Popyx
from popyx.display import NullDisplay
from popyx.event import Action, Option, Switch, Variable


class Recorder:
    def __init__(self, result=None):
        self.calls = []
        self.result = result

    def __call__(self, context):
        self.calls.append(context)
        return self.result


@pytest.fixture
def display():
    return NullDisplay()


@pytest.fixture
def popyx(display):
    return Popyx(
        display=display, console=Console(file=io.StringIO(), record=True, width=120)
    )


def output(popyx):
    return popyx.console.export_text()


def make_combo(name="commit", **kwargs):
    kwargs.setdefault("switches", [Switch("a", "All", "-a"), Switch("v", "Verbose", "-v")])
    kwargs.setdefault("options", [Option("m", "Message", "--message=", reader=lambda p, v: "wip")])
    return Combo(name, use_prefix="none", **kwargs)


@pytest.mark.asyncio
async def test_action_closes_session_and_gets_args(popyx, display):
    commit = Recorder("done")
    popyx.declare(make_combo(actions=[Action("c", "Commit", commit)]))
    await popyx.invoke("commit")

    assert await popyx.handle_key("-a") is True
    assert await popyx.handle_key("=m") is True
    assert popyx.get_args() == ["-a", "--message=wip"]
    assert await popyx.handle_key("c") is True

    (context,) = commit.calls
    assert context.args == ["-a", "--message=wip"]
    assert context.origin == "popup"
    assert context.key == "c"
    assert context.result == "done"
    assert popyx.session is None
    assert display.is_open is False
    assert display.opened == display.closed == 1


@pytest.mark.asyncio
async def test_stateful_variable_keeps_session_open(popyx, display):
    state = {"upstream": "origin"}

    def set_upstream(context):
        state["upstream"] = "fork"

    popyx.declare(
        make_combo(
            variables=[Variable("u", "Upstream", set_upstream, lambda: state["upstream"])]
        )
    )
    await popyx.invoke("commit")
    refreshed = display.refreshed

    assert await popyx.handle_key("u") is True
    assert state["upstream"] == "fork"
    assert popyx.session is not None
    assert display.is_open is True
    assert display.refreshed == refreshed + 1


@pytest.mark.asyncio
async def test_variable_without_formatter_acts_like_action(popyx, display):
    fetch = Recorder()
    popyx.declare(make_combo(variables=[Variable("f", "Fetch", fetch)]))
    await popyx.invoke("commit")

    await popyx.handle_key("f")
    assert len(fetch.calls) == 1
    assert popyx.session is None
    assert display.is_open is False


@pytest.mark.asyncio
async def test_stateless_variable_takes_the_place_of_action(popyx, display):
    calls = []
    popyx.declare(
        make_combo(
            variables=[Variable("x", "Fetch", lambda context: calls.append("variable"))],
            actions=[Action("x", "Push", lambda context: calls.append("action"))],
        )
    )
    await popyx.invoke("commit")

    assert await popyx.handle_key("x") is True
    assert calls == ["variable"]
    assert popyx.session is None
    assert display.is_open is False


@pytest.mark.asyncio
async def test_undefined_key_is_reported(popyx):
    popyx.declare(make_combo())
    await popyx.invoke("commit")

    assert await popyx.handle_key("z") is False
    assert await popyx.handle_key("-z") is False
    assert popyx.session is not None
    assert "'z' is undefined" in output(popyx)
    assert "'z' isn't bound to any switch" in output(popyx)


@pytest.mark.asyncio
async def test_nested_session_quit_resumes_previous(popyx, display):
    async def open_branch(context):
        popyx.open_session("branch")

    fetch = Recorder()
    popyx.declare(make_combo(actions=[Action("b", "Branch popup", open_branch)]))
    popyx.declare(Combo("branch", use_prefix="none", actions=[Action("f", "Fetch", fetch)]))

    await popyx.invoke("commit")
    await popyx.handle_key("-a")
    outer = popyx.session
    await popyx.handle_key("b")

    assert popyx.session.name == "branch"
    assert popyx.session.previous is outer

    assert await popyx.handle_key("q") is True
    assert popyx.session is outer
    assert popyx.get_args() == ["-a"]
    assert display.is_open is True

    assert await popyx.handle_key("q") is True
    assert popyx.session is None
    assert display.is_open is False


@pytest.mark.asyncio
async def test_nested_context_names_previous_combo(popyx):
    fetch = Recorder()

    async def open_branch(context):
        popyx.open_session("branch")

    popyx.declare(make_combo(actions=[Action("b", "Branch popup", open_branch)]))
    popyx.declare(Combo("branch", use_prefix="none", actions=[Action("f", "Fetch", fetch)]))
    await popyx.invoke("commit")
    await popyx.handle_key("b")
    await popyx.handle_key("f")

    assert fetch.calls[0].previous == "commit"
    assert popyx.session is None


@pytest.mark.asyncio
async def test_action_bound_to_quit_key_wins(popyx):
    quiet = Recorder()
    popyx.declare(make_combo(actions=[Action("q", "Quiet", quiet)]))
    await popyx.invoke("commit")
    await popyx.handle_key("q")
    assert len(quiet.calls) == 1


@pytest.mark.asyncio
async def test_set_default_arguments(popyx, display):
    cell = DefaultsCell()
    popyx.declare(make_combo(defaults_cell=cell))
    await popyx.invoke("commit")
    await popyx.handle_key("-v")

    assert await popyx.handle_key("C-c C-c") is True
    assert cell.get() == ["-v"]
    assert cell.saved is None
    assert popyx.session is None

    await popyx.invoke("commit")
    assert popyx.get_args() == ["-v"]


@pytest.mark.asyncio
async def test_save_default_arguments_keep_open(popyx):
    cell = DefaultsCell()
    popyx.declare(make_combo(defaults_cell=cell))
    await popyx.invoke("commit")
    await popyx.handle_key("-a")

    assert await popyx.save_default_arguments(keep_open=True) is True
    assert cell.get() == ["-a"]
    assert cell.saved == ["-a"]
    assert popyx.session is not None


@pytest.mark.asyncio
async def test_set_defaults_without_cell(popyx):
    popyx.declare(make_combo())
    await popyx.invoke("commit")

    assert await popyx.handle_key("C-c C-c") is False
    assert await popyx.handle_key("C-x C-s") is False
    assert popyx.session is not None
    assert "Nothing to set" in output(popyx)
    assert "Nothing to save" in output(popyx)


@pytest.mark.asyncio
async def test_common_commands(popyx, display):
    popyx.declare(make_combo())
    await popyx.invoke("commit")

    assert popyx.options.get("show_common_commands") is False
    await popyx.handle_key(" C-t ")
    assert popyx.options.get("show_common_commands") is True

    await popyx.handle_key("C-g")
    assert popyx.session is None
    assert display.is_open is False


@pytest.mark.asyncio
async def test_transitions_without_session(popyx):
    assert await popyx.toggle_switch("a") is False
    assert await popyx.invoke_key("c") is False
    assert await popyx.set_default_arguments() is False
    assert await popyx.quit() is False
    assert popyx.get_args() == []


@pytest.mark.asyncio
async def test_failing_command_is_reported(popyx, display):
    def boom(context):
        raise RuntimeError("no repository")

    popyx.declare(make_combo(actions=[Action("c", "Commit", boom)]))
    await popyx.invoke("commit")

    assert await popyx.handle_key("c") is True
    assert "no repository" in output(popyx)
    assert popyx.session is None
    assert display.is_open is False


@pytest.mark.asyncio
async def test_hooks_run_around_commands(popyx):
    events = []
    popyx.hooks.register("before", lambda context: events.append(("before", context.key)))
    popyx.hooks.register("success", lambda context: events.append(("success", context.result)))
    popyx.hooks.register("error", lambda context: events.append(("error", context.exception)))
    popyx.hooks.register("after", lambda context: events.append(("after", context.success)))

    popyx.declare(make_combo(actions=[Action("c", "Commit", Recorder("ok"))]))
    await popyx.invoke("commit")
    await popyx.handle_key("c")

    assert events == [("before", "c"), ("success", "ok"), ("after", True)]


@pytest.mark.asyncio
async def test_deferred_binding_reaches_session(popyx):
    push = Recorder()
    popyx.bind("commit", "action", "P", ("Push", push))
    popyx.declare(make_combo(actions=[Action("c", "Commit", Recorder())]))
    await popyx.invoke("commit")
    await popyx.handle_key("P")
    assert len(push.calls) == 1
