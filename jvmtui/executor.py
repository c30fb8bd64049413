"""Running external tools with a time limit."""

from __future__ import annotations

import os
import subprocess
from datetime import timedelta
from typing import Iterable

from .errors import CommandFailedError, CommandTimeoutError

DEFAULT_TIMEOUT = timedelta(seconds=5)


def execute_command(
    tool: str | os.PathLike[str],
    args: Iterable[str] = (),
    timeout: timedelta | float | None = None,
) -> subprocess.CompletedProcess[bytes]:
    """Run ``tool`` with ``args`` and capture its output.

    A non-zero exit status is not an error; the caller inspects the result.
    Raises CommandTimeoutError when the limit passes and CommandFailedError
    when the program cannot be started.
    """
    arguments = [str(arg) for arg in args]
    limit = DEFAULT_TIMEOUT if timeout is None else timeout
    seconds = limit.total_seconds() if isinstance(limit, timedelta) else float(limit)
    command = f"{tool} {' '.join(arguments)}"
    try:
        return subprocess.run(
            [os.fspath(tool), *arguments],
            stdin=subprocess.DEVNULL,
            capture_output=True,
            timeout=seconds,
            check=False,
        )
    except subprocess.TimeoutExpired:
        raise CommandTimeoutError(command) from None
    except OSError as exc:
        raise CommandFailedError(command, exc) from exc