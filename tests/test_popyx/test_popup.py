import io

import pytest
from rich.console import Console

from popyx import Combo, Popyx
from popyx.display import NullDisplay
from popyx.event import Action, Switch
from popyx.signals import CancelSignal, QuitSignal


class FakePromptSession:
    def __init__(self, keys):
        self.keys = list(keys)
        self.messages = []

    async def prompt_async(self, message):
        self.messages.append(message)
        if not self.keys:
            raise EOFError
        key = self.keys.pop(0)
        if isinstance(key, BaseException):
            raise key
        return key


def make_popyx(keys):
    display = NullDisplay()
    popyx = Popyx(
        display=display,
        console=Console(file=io.StringIO(), record=True, width=120),
        prompt_session=FakePromptSession(keys),
    )
    return popyx, display


def make_combo(calls, **kwargs):
    return Combo(
        "commit",
        switches=[Switch("a", "All", "-a"), Switch("v", "Verbose", "-v")],
        actions=[Action("c", "Commit", lambda context: calls.append(context.args))],
        default_action=lambda context: "default",
        **kwargs,
    )


@pytest.mark.asyncio
async def test_popup_loop_routes_keys_until_action():
    calls = []
    popyx, display = make_popyx(["-a", "-v", "-a", "c", "never read"])
    popyx.declare(make_combo(calls))

    assert await popyx.popup("commit") is None
    assert calls == [["-v"]]
    assert popyx.prompt_session.keys == ["never read"]
    assert display.is_open is False


@pytest.mark.asyncio
async def test_popup_runs_default_without_loop():
    popyx, display = make_popyx(["c"])
    popyx.declare(make_combo([]))

    assert await popyx.popup("commit", prefix=True) == "default"
    assert popyx.prompt_session.messages == []
    assert display.opened == 0


@pytest.mark.asyncio
async def test_popup_survives_cancel_and_stops_on_eof():
    calls = []
    popyx, display = make_popyx([CancelSignal(), "-a"])
    popyx.declare(make_combo(calls))

    await popyx.popup("commit")
    assert calls == []
    assert popyx.session is None
    assert display.is_open is False
    assert display.closed == 1


@pytest.mark.asyncio
async def test_popup_stops_on_quit_signal():
    popyx, display = make_popyx([QuitSignal(), "c"])
    popyx.declare(make_combo([]))

    await popyx.popup("commit")
    assert popyx.session is None
    assert popyx.prompt_session.keys == ["c"]
    assert display.is_open is False


@pytest.mark.asyncio
async def test_popup_quit_key():
    popyx, display = make_popyx(["q", "c"])
    popyx.declare(make_combo([]))

    await popyx.popup("commit")
    assert popyx.prompt_session.keys == ["c"]
    assert display.opened == display.closed == 1
