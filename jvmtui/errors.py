"""Exception hierarchy used throughout the package."""

from __future__ import annotations


class AppError(Exception):
    """Base class for every error the application reports."""

    prefix = ""

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"{self.prefix}{self.message}"


class JvmConnectionError(AppError):
    """The JVM could not be reached or the connection was lost."""

    prefix = "JVM connection error: "


class ParseError(AppError):
    """Tool or server output could not be understood."""

    prefix = "Parse error: "


class TuiError(AppError):
    """The terminal interface failed."""

    prefix = "TUI error: "


class ConfigError(AppError):
    """The environment or configuration does not allow the operation."""

    prefix = "Configuration error: "


class ConfigLoadError(AppError):
    """A configuration file could not be read, parsed or validated."""

    prefix = "Configuration load error: "


class ProcessError(AppError):
    """A process-level operation failed."""

    prefix = "Process error: "


class JdkToolsError(AppError):
    """A JDK command-line tool is missing or misbehaved."""

    prefix = "JDK tools error: "


class ToolNotFoundError(JdkToolsError):
    """A required JDK tool could not be located."""

    def __init__(self, tool: str) -> None:
        super().__init__(f"{tool} not found in PATH")
        self.tool = tool


class CommandFailedError(JdkToolsError):
    """A command could not be started or run."""

    def __init__(self, command: str, reason: object) -> None:
        super().__init__(f"Failed to execute {command}: {reason}")
        self.command = command
        self.reason = reason


class CommandTimeoutError(JdkToolsError):
    """A command did not finish within its time limit."""

    def __init__(self, command: str) -> None:
        super().__init__(f"Command timed out: {command}")
        self.command = command