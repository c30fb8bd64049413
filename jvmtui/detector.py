"""Detection of the JDK command-line tools."""

from __future__ import annotations

import os
import subprocess
import sys
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from .errors import ToolNotFoundError


class ToolState(Enum):
    AVAILABLE = "available"
    NOT_FOUND = "not_found"
    NOT_EXECUTABLE = "not_executable"


@dataclass(frozen=True)
class ToolStatus:
    """Outcome of probing one tool; ``path`` is set unless it was not found."""

    state: ToolState
    path: Path | None = None
    version: str | None = None

    def is_available(self) -> bool:
        return self.state is ToolState.AVAILABLE


@dataclass(frozen=True)
class Capabilities:
    can_discover: bool
    can_heap_info: bool
    can_gc_stats: bool
    can_thread_dump: bool
    can_class_histogram: bool
    can_trigger_gc: bool


def _platform_name() -> str:
    if sys.platform == "darwin":
        return "macOS"
    if sys.platform.startswith("linux"):
        return "Linux"
    if sys.platform == "win32":
        return "Windows"
    return "Unknown"


_GUIDANCE = {
    "macOS": (
        "Using Homebrew:\n"
        "  brew install openjdk@21\n"
        "  echo 'export PATH=\"/opt/homebrew/opt/openjdk@21/bin:$PATH\"' >> ~/.zshrc\n\n"
        "Or download an OpenJDK build such as Eclipse Temurin.\n"
    ),
    "Linux": (
        "Ubuntu/Debian:\n"
        "  sudo apt update\n"
        "  sudo apt install openjdk-21-jdk\n\n"
        "RHEL/CentOS/Fedora:\n"
        "  sudo dnf install java-21-openjdk-devel\n"
    ),
    "Windows": (
        "Download and install an OpenJDK build such as Eclipse Temurin.\n\n"
        "Then add to PATH:\n"
        "  System Properties > Environment Variables > Path\n"
        "  Add: C:\\Program Files\\Eclipse Adoptium\\jdk-21\\bin\n"
    ),
}

_GUIDANCE_FALLBACK = (
    "Please install a JDK (version 11 or higher).\n"
    "An OpenJDK build such as Eclipse Temurin works.\n"
)


@dataclass(frozen=True)
class JdkToolsStatus:
    jcmd: ToolStatus
    jstat: ToolStatus
    jps: ToolStatus
    java_home: Path | None = None

    @classmethod
    def detect(cls) -> "JdkToolsStatus":
        """Probe jcmd, jstat and jps under $JAVA_HOME/bin and on the PATH."""
        home = os.environ.get("JAVA_HOME")
        java_home = Path(home) if home is not None else None
        return cls(
            jcmd=detect_tool("jcmd", java_home),
            jstat=detect_tool("jstat", java_home),
            jps=detect_tool("jps", java_home),
            java_home=java_home,
        )

    def is_usable(self) -> bool:
        return self.jcmd.is_available() or (
            self.jps.is_available() and self.jstat.is_available()
        )

    def capabilities(self) -> Capabilities:
        jcmd = self.jcmd.is_available()
        return Capabilities(
            can_discover=jcmd or self.jps.is_available(),
            can_heap_info=jcmd,
            can_gc_stats=self.jstat.is_available() or jcmd,
            can_thread_dump=jcmd,
            can_class_histogram=jcmd,
            can_trigger_gc=jcmd,
        )

    def validate(self) -> None:
        """Raise ToolNotFoundError for the first missing tool when unusable."""
        if self.is_usable():
            return
        for name, status in (("jcmd", self.jcmd), ("jstat", self.jstat), ("jps", self.jps)):
            if not status.is_available():
                raise ToolNotFoundError(name)

    def installation_guidance(self) -> str:
        platform = _platform_name()
        parts = [f"JDK tools detection failed on {platform}\n\n"]
        for name, status in (("jcmd", self.jcmd), ("jstat", self.jstat), ("jps", self.jps)):
            if not status.is_available():
                parts.append(f"❌ {name} not found\n")
        parts.append("\nInstallation Instructions:\n\n")
        parts.append(_GUIDANCE.get(platform, _GUIDANCE_FALLBACK))
        if self.java_home is not None:
            parts.append(f"\n💡 JAVA_HOME is set to: {self.java_home}\n")
            parts.append("Make sure this JDK includes the required tools.\n")
        else:
            parts.append("\n💡 JAVA_HOME is not set.\n")
            parts.append("Set it to your JDK installation directory.\n")
        return "".join(parts)


class _Probe(Enum):
    NOT_FOUND = "not_found"
    NOT_EXECUTABLE = "not_executable"


def _probe(path: Path) -> str | _Probe:
    """Run ``path -h``; return a version line, or why it could not run."""
    try:
        result = subprocess.run(
            [str(path), "-h"], stdin=subprocess.DEVNULL, capture_output=True, check=False
        )
    except FileNotFoundError:
        return _Probe.NOT_FOUND
    except OSError:
        return _Probe.NOT_EXECUTABLE

    if result.returncode not in (0, 1):
        return _Probe.NOT_EXECUTABLE
    combined = result.stdout.decode(errors="replace") + result.stderr.decode(errors="replace")
    return next(
        (line for line in combined.splitlines() if "version" in line or "JDK" in line),
        "unknown",
    )


def detect_tool(name: str, java_home: Path | None) -> ToolStatus:
    """Look for ``name`` in ``java_home/bin`` first, then on the PATH."""
    candidates: list[Path] = []
    if java_home is not None:
        path = Path(java_home) / "bin" / name
        if sys.platform == "win32" and not name.endswith(".exe"):
            path = path.with_suffix(".exe")
        candidates.append(path)
    candidates.append(Path(name))

    for path in candidates:
        outcome = _probe(path)
        if outcome is _Probe.NOT_FOUND:
            continue
        if outcome is _Probe.NOT_EXECUTABLE:
            return ToolStatus(ToolState.NOT_EXECUTABLE, path=path)
        return ToolStatus(ToolState.AVAILABLE, path=path, version=outcome)
    return ToolStatus(ToolState.NOT_FOUND)