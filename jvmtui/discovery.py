"""Discovery of JVM processes running on the local machine."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path

from .detector import JdkToolsStatus
from .errors import ConfigError
from .executor import execute_command

DISCOVERY_TIMEOUT = timedelta(seconds=2)

_PID = re.compile(r"\+?[0-9]+")
_U32_MAX = 2**32 - 1

_FILTERED_FRAGMENTS = (
    "jdk.jcmd",
    "sun.tools.jcmd.JCmd",
    "sun.tools.jps.Jps",
    "sun.tools.jstat.Jstat",
)
_FILTERED_NAMES = frozenset({"Jps", "JCmd", "Jstat"})


@dataclass(frozen=True)
class DiscoveredJvm:
    pid: int
    main_class: str


def should_filter(main_class: str) -> bool:
    """Whether the process is one of the JDK tools themselves."""
    return (
        any(fragment in main_class for fragment in _FILTERED_FRAGMENTS)
        or main_class in _FILTERED_NAMES
    )


def _parse_pid(text: str) -> int | None:
    if not _PID.fullmatch(text):
        return None
    value = int(text)
    return value if value <= _U32_MAX else None


def _parse_process_list(output: str) -> list[DiscoveredJvm]:
    jvms: list[DiscoveredJvm] = []
    for raw in output.splitlines():
        line = raw.strip()
        if not line:
            continue
        pid_text, separator, main_class = line.partition(" ")
        if not separator:
            continue
        pid = _parse_pid(pid_text)
        if pid is None or should_filter(main_class):
            continue
        jvms.append(DiscoveredJvm(pid=pid, main_class=main_class))
    return jvms


def parse_jcmd_list(output: str) -> list[DiscoveredJvm]:
    """JVMs listed by ``jcmd -l``, without the JDK tools."""
    return _parse_process_list(output)


def parse_jps_list(output: str) -> list[DiscoveredJvm]:
    """JVMs listed by ``jps -l``, without the JDK tools."""
    return _parse_process_list(output)


def _list_with(tool: Path) -> str:
    result = execute_command(tool, ["-l"], DISCOVERY_TIMEOUT)
    return result.stdout.decode("utf-8", errors="replace")


def discover_local_jvms(status: JdkToolsStatus | None = None) -> list[DiscoveredJvm]:
    """List local JVMs with jcmd, falling back to jps.

    Raises ConfigError when neither tool is available.
    """
    tools = status if status is not None else JdkToolsStatus.detect()
    if tools.jcmd.is_available() and tools.jcmd.path is not None:
        return parse_jcmd_list(_list_with(tools.jcmd.path))
    if tools.jps.is_available() and tools.jps.path is not None:
        return parse_jps_list(_list_with(tools.jps.path))
    raise ConfigError("No JDK tools available for JVM discovery")