"""
Popyx Framework

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

import asyncio
import os
import sys
from argparse import ArgumentParser, Namespace
from pathlib import Path
from typing import Any

from popyx.config import loader
from popyx.console import console
from popyx.exceptions import ComboNotFoundError
from popyx.themes import OneColors
from popyx.utils import setup_logging
from popyx.version import __version__


def find_popyx_config() -> Path | None:
    candidates = [
        Path.cwd() / "popyx.yaml",
        Path.cwd() / "popyx.toml",
        Path(os.environ.get("POPYX_CONFIG", "popyx.yaml")),
        Path.home() / ".config" / "popyx" / "popyx.yaml",
        Path.home() / ".config" / "popyx" / "popyx.toml",
    ]
    return next((p for p in candidates if p.exists()), None)


def get_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog="popyx",
        description="Open a Popyx combo declared in a YAML or TOML file.",
    )
    parser.add_argument("combo", help="Name of the combo to invoke.")
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        help="Config file. Defaults to popyx.yaml/.toml in the cwd or ~/.config/popyx.",
    )
    parser.add_argument(
        "-p",
        "--prefix",
        action="store_true",
        help="Invoke with a prefix (see the combo's use_prefix policy).",
    )
    parser.add_argument("--log-mode", choices=["cli", "json"], help="Logging output mode.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def run(args: Namespace) -> Any:
    setup_logging(mode=args.log_mode)
    config_path = args.config or find_popyx_config()
    if config_path is None:
        console.print(f"[{OneColors.DARK_RED}]❌ No popyx.yaml or popyx.toml found.[/]")
        sys.exit(1)
    if str(config_path.parent) not in sys.path:
        sys.path.insert(0, str(config_path.parent))
    popyx = loader(config_path)
    try:
        return asyncio.run(popyx.popup(args.combo, prefix=args.prefix))
    except ComboNotFoundError as error:
        console.print(f"[{OneColors.DARK_RED}]❌ {error}[/]")
        sys.exit(1)


def main() -> Any:
    return run(get_parser().parse_args())


if __name__ == "__main__":
    main()
