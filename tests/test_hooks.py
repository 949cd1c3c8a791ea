import pytest

from popyx.context import InvocationContext
from popyx.debug import register_debug_hooks
from popyx.hook_manager import HookManager, HookType


@pytest.mark.parametrize(
    "value, expected",
    [
        ("before", HookType.BEFORE),
        ("success", HookType.ON_SUCCESS),
        ("Error", HookType.ON_ERROR),
        ("teardown", HookType.ON_TEARDOWN),
    ],
)
def test_hook_type_aliases(value, expected):
    assert HookType(value) is expected


def test_hook_type_invalid():
    with pytest.raises(ValueError):
        HookType("during")


def test_register_requires_callable():
    with pytest.raises(TypeError):
        HookManager().register("before", "not callable")


@pytest.mark.asyncio
async def test_trigger_sync_and_async_hooks():
    hooks = HookManager()
    seen = []

    async def async_hook(context):
        seen.append(("async", context.key))

    hooks.register("before", lambda context: seen.append(("sync", context.key)))
    hooks.register(HookType.BEFORE, async_hook)
    await hooks.trigger(HookType.BEFORE, InvocationContext(combo="log", key="l"))
    assert seen == [("sync", "l"), ("async", "l")]


@pytest.mark.asyncio
async def test_failing_hook_is_skipped():
    hooks = HookManager()
    seen = []

    def broken(context):
        raise RuntimeError("hook failed")

    hooks.register("after", broken)
    hooks.register("after", lambda context: seen.append(context.combo))
    await hooks.trigger(HookType.AFTER, InvocationContext(combo="log"))
    assert seen == ["log"]


@pytest.mark.asyncio
async def test_failing_error_hook_reraises_command_error():
    hooks = HookManager()

    def broken(context):
        raise RuntimeError("hook failed")

    hooks.register("error", broken)
    context = InvocationContext(combo="log", exception=KeyError("boom"))
    with pytest.raises(KeyError):
        await hooks.trigger(HookType.ON_ERROR, context)


def test_clear():
    hooks = HookManager()
    register_debug_hooks(hooks)
    hooks.clear(HookType.BEFORE)
    assert hooks._hooks[HookType.BEFORE] == []
    assert hooks._hooks[HookType.AFTER]
    hooks.clear()
    assert all(not registered for registered in hooks._hooks.values())


@pytest.mark.asyncio
async def test_debug_hooks_log(caplog):
    hooks = HookManager()
    register_debug_hooks(hooks)
    context = InvocationContext(combo="log", key="l", args=["--graph"])
    context.start_timer()
    with caplog.at_level("DEBUG", logger="popyx"):
        await hooks.trigger(HookType.BEFORE, context)
        context.stop_timer()
        await hooks.trigger(HookType.AFTER, context)
    assert "[log:l] Starting" in caplog.text
    assert "[log:l] Finished in" in caplog.text
