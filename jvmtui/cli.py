"""Command-line options."""

from __future__ import annotations

import argparse
import os
from datetime import timedelta
from pathlib import Path
from typing import Sequence

from .config import CONFIG_ENV_VAR
from .durations import parse_duration

_VERSION = "0.1.0"
_U32_MAX = 2**32 - 1


def _pid(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid process id {text!r}") from None
    if not 0 <= value <= _U32_MAX:
        raise argparse.ArgumentTypeError(f"process id {text!r} is out of range")
    return value


def _interval(text: str) -> timedelta:
    try:
        return parse_duration(text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="jvm-tui", description="A TUI for JVM monitoring")
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {_VERSION}")
    parser.add_argument("-p", "--pid", type=_pid, help="Attach to specific JVM process ID")
    parser.add_argument(
        "-i", "--interval", type=_interval, help="Polling interval (e.g. 500ms, 1s, 2s)"
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        help=f"Path to configuration file [env: {CONFIG_ENV_VAR}]",
    )
    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse options; the config path falls back to the environment variable."""
    args = build_parser().parse_args(argv)
    if args.config is None:
        from_env = os.environ.get(CONFIG_ENV_VAR)
        if from_env:
            args.config = Path(from_env)
    return args