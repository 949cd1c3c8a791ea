# Popyx Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""Logging hooks for command invocations."""
from popyx.context import InvocationContext
from popyx.hook_manager import HookManager, HookType
from popyx.logger import logger


def log_before(context: InvocationContext):
    logger.info("[%s] Starting -> %s", context.name, context)


def log_success(context: InvocationContext):
    result_str = repr(context.result)
    if len(result_str) > 100:
        result_str = f"{result_str[:100]} ..."
    logger.debug("[%s] Success -> Result: %s", context.name, result_str)


def log_after(context: InvocationContext):
    logger.debug("[%s] Finished in %.3fs", context.name, context.duration or 0.0)


def log_error(context: InvocationContext):
    logger.error(
        "[%s] Error (%s): %s",
        context.name,
        type(context.exception).__name__,
        context.exception,
        exc_info=context.exception,
    )


def register_debug_hooks(hooks: HookManager):
    hooks.register(HookType.BEFORE, log_before)
    hooks.register(HookType.AFTER, log_after)
    hooks.register(HookType.ON_SUCCESS, log_success)
    hooks.register(HookType.ON_ERROR, log_error)
