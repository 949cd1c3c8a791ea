# Popyx Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Value readers for popup options.

Readers take the prompt built from the option's flag and the option's previous
value, and return the new value, or `None` when the user backs out. Ctrl-C
raises `CancelSignal`; Ctrl-D returns `None`. Both leave the option untouched.

Includes:
- `read_from_prompt()`: free-form line input, seeded with the previous value.
- `read_number()`: integer input, e.g. for `-n` / `--max-count=`.
"""
from prompt_toolkit import PromptSession
from prompt_toolkit.formatted_text import FormattedText
from prompt_toolkit.validation import Validator

from popyx.signals import CancelSignal
from popyx.themes import OneColors
from popyx.validators import number_validator


async def _prompt(
    prompt: str,
    previous: str | None,
    validator: Validator | None = None,
    session: PromptSession | None = None,
) -> str | None:
    session = session or PromptSession(interrupt_exception=CancelSignal)
    try:
        return await session.prompt_async(
            FormattedText([(OneColors.CYAN_b, prompt)]),
            default=previous or "",
            validator=validator,
        )
    except EOFError:
        return None


async def read_from_prompt(
    prompt: str, previous: str | None, session: PromptSession | None = None
) -> str | None:
    """Read a line. An empty answer is a valid value."""
    return await _prompt(prompt, previous, session=session)


async def read_number(
    prompt: str, previous: str | None, session: PromptSession | None = None
) -> str | None:
    """Read a whole number. An empty answer cancels."""
    answer = await _prompt(prompt, previous, number_validator(), session=session)
    if answer is None or not answer.strip():
        return None
    return str(int(answer))
