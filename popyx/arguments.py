# Popyx Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Flattening and matching of popup argument strings.

- `resolve_args`: live switch/option events → ordered argument list.
- `arg_matches`: does an argument string match a declared flag pattern?
- `filter_args`: keep (or drop) the arguments matching a set of patterns.
- `export_file_args` / `import_file_args`: move the synthetic file-list
  argument (`"-- a.py,b.py"`) out of, and back into, an argument list.

Pattern matching follows the shape of the declared flag. A pattern ending in
`=` (`--author=`) or a single dash followed by an uppercase letter (`-S`, whose
value is glued on as in `-Skey`) matches by prefix; anything else must match
exactly, so `-a` does not match `-ab`.
"""
from __future__ import annotations

import re
from typing import Iterable, Sequence

from popyx.event import ASSIGNMENT_MARKER, OptionEvent, SwitchEvent

FILE_ARGS_MARKER = "-- "
FILE_ARGS_SEPARATOR = ","

SHORT_VALUE_FLAG = re.compile(r"^-[A-Z]$")

ONLY_MODES = (None, "only", ":only")
NOT_MODES = ("not", ":not")


def resolve_args(events: Iterable[object]) -> list[str]:
    """Flatten the active switches and options, in the order given."""
    args: list[str] = []
    for event in events:
        if isinstance(event, SwitchEvent) and event.use:
            args.append(event.arg)
        elif isinstance(event, OptionEvent) and event.use:
            args.append(f"{event.arg}{event.val or ''}")
    return args


def is_prefix_pattern(pattern: str) -> bool:
    return pattern.endswith(ASSIGNMENT_MARKER) or bool(SHORT_VALUE_FLAG.match(pattern))


def arg_matches(pattern: str, candidate: str) -> bool:
    if is_prefix_pattern(pattern):
        return candidate.startswith(pattern)
    return candidate == pattern


def filter_args(
    args: Sequence[str], patterns: Sequence[str], mode: str | None = None
) -> list[str]:
    """
    Filter resolved arguments against declared flag patterns.

    Args:
        args (Sequence[str]): Resolved arguments, e.g. from `ComboSession.get_args`.
        patterns (Sequence[str]): Flags as declared, e.g. `["-a", "--author="]`.
        mode (str | None): `None`, `"only"` or `":only"` keeps matching
            arguments; `"not"` or `":not"` keeps the others.

    Raises:
        ValueError: If `mode` is not one of the above.
    """
    if mode in ONLY_MODES:
        keep = True
    elif mode in NOT_MODES:
        keep = False
    else:
        raise ValueError(f"Invalid filter mode: {mode!r}. Use ':only' or ':not'.")
    return [
        arg
        for arg in args
        if any(arg_matches(pattern, arg) for pattern in patterns) is keep
    ]


def export_file_args(
    args: Sequence[str], marker: str = FILE_ARGS_MARKER
) -> tuple[list[str], list[str] | None]:
    """
    Split the file-list argument out of `args`.

    Returns the remaining arguments and the file paths, or `None` when no
    file-list argument is present. Only the first file-list argument is used.
    A bare marker with no paths (`"-- "`) yields `[""]`, not an empty list.
    """
    files_arg = next((arg for arg in args if arg.startswith(marker)), None)
    if files_arg is None:
        return list(args), None
    remaining = [arg for arg in args if arg != files_arg]
    files = files_arg[len(marker) :].split(FILE_ARGS_SEPARATOR)
    return remaining, files


def import_file_args(
    args: Sequence[str], files: Sequence[str] | None, marker: str = FILE_ARGS_MARKER
) -> list[str]:
    """Put `files` back in front of `args` as a single file-list argument."""
    if not files:
        return list(args)
    return [f"{marker}{FILE_ARGS_SEPARATOR.join(files)}", *args]
