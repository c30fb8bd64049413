"""Configuration file loading, validation and saved connection profiles."""

from __future__ import annotations

import os
import re
import tomllib
from dataclasses import dataclass, field
from datetime import timedelta
from pathlib import Path
from typing import Any, Callable, ClassVar

import platformdirs

from .durations import parse_duration
from .errors import ConfigLoadError

CONFIG_ENV_VAR = "JVM_TUI_CONFIG"
MIN_INTERVAL = timedelta(milliseconds=100)

_U16_MAX = 2**16 - 1
_U32_MAX = 2**32 - 1
_U64_MAX = 2**64 - 1

_MISSING = object()


class _SchemaError(ValueError):
    """A configuration document does not have the expected shape."""


Converter = Callable[[str, Any], Any]


def _get(data: dict[str, Any], key: str, convert: Converter, default: Any = _MISSING) -> Any:
    if key not in data:
        if default is _MISSING:
            raise _SchemaError(f"missing field `{key}`")
        return default
    return convert(key, data[key])


def _string(key: str, value: Any) -> str:
    if not isinstance(value, str):
        raise _SchemaError(f"invalid type for `{key}`: expected a string")
    return value


def _unsigned(limit: int) -> Converter:
    def convert(key: str, value: Any) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise _SchemaError(f"invalid type for `{key}`: expected an integer")
        if not 0 <= value <= limit:
            raise _SchemaError(f"invalid value for `{key}`: {value} is out of range")
        return value

    return convert


_u16 = _unsigned(_U16_MAX)
_u32 = _unsigned(_U32_MAX)
_u64 = _unsigned(_U64_MAX)


def _duration(key: str, value: Any) -> timedelta:
    text = _string(key, value)
    try:
        return parse_duration(text)
    except ValueError as exc:
        raise _SchemaError(f"invalid value for `{key}`: {exc}") from exc


def _table(key: str, value: Any) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise _SchemaError(f"invalid type for `{key}`: expected a table")
    return value


@dataclass
class Preferences:
    default_interval: timedelta = timedelta(seconds=1)
    max_history_samples: int = 300
    export_directory: str | None = None


@dataclass
class AdvancedSettings:
    http_timeout_ms: int = 5000
    ssh_timeout_sec: int = 10
    connection_retry_attempts: int = 3
    connection_retry_delay_ms: int = 1000


@dataclass(kw_only=True)
class ConnectionProfile:
    """A saved connection; the subclasses carry the transport details."""

    name: str

    TAG: ClassVar[str] = ""
    TYPE_LABEL: ClassVar[str] = ""
    _FIELDS: ClassVar[tuple[tuple[str, Converter, Any], ...]] = ()

    def connection_type(self) -> str:
        return self.TYPE_LABEL

    @classmethod
    def _from_mapping(cls, data: dict[str, Any]) -> "ConnectionProfile":
        values = {key: _get(data, key, convert, default) for key, convert, default in cls._FIELDS}
        return cls(**values)


@dataclass(kw_only=True)
class LocalProfile(ConnectionProfile):
    pid: int | None = None

    TAG: ClassVar[str] = "local"
    TYPE_LABEL: ClassVar[str] = "Local"
    _FIELDS = (("name", _string, _MISSING), ("pid", _u32, None))


@dataclass(kw_only=True)
class JolokiaProfile(ConnectionProfile):
    url: str
    username: str | None = None
    password: str | None = None

    TAG: ClassVar[str] = "jolokia"
    TYPE_LABEL: ClassVar[str] = "Jolokia (HTTP)"
    _FIELDS = (
        ("name", _string, _MISSING),
        ("url", _string, _MISSING),
        ("username", _string, None),
        ("password", _string, None),
    )


@dataclass(kw_only=True)
class SshJdkProfile(ConnectionProfile):
    ssh_host: str
    ssh_user: str
    pid: int
    ssh_port: int = 22
    ssh_key: str | None = None
    ssh_password: str | None = None

    TAG: ClassVar[str] = "ssh-jdk"
    TYPE_LABEL: ClassVar[str] = "SSH + JDK Tools"
    _FIELDS = (
        ("name", _string, _MISSING),
        ("ssh_host", _string, _MISSING),
        ("ssh_user", _string, _MISSING),
        ("ssh_port", _u16, 22),
        ("ssh_key", _string, None),
        ("ssh_password", _string, None),
        ("pid", _u32, _MISSING),
    )


@dataclass(kw_only=True)
class SshJolokiaProfile(ConnectionProfile):
    ssh_host: str
    ssh_user: str
    jolokia_port: int
    ssh_port: int = 22
    ssh_key: str | None = None
    ssh_password: str | None = None
    local_port: int | None = None

    TAG: ClassVar[str] = "ssh-jolokia"
    TYPE_LABEL: ClassVar[str] = "SSH + Jolokia"
    _FIELDS = (
        ("name", _string, _MISSING),
        ("ssh_host", _string, _MISSING),
        ("ssh_user", _string, _MISSING),
        ("ssh_port", _u16, 22),
        ("ssh_key", _string, None),
        ("ssh_password", _string, None),
        ("jolokia_port", _u16, _MISSING),
        ("local_port", _u16, None),
    )


_PROFILE_TYPES: dict[str, type[ConnectionProfile]] = {
    cls.TAG: cls for cls in (LocalProfile, JolokiaProfile, SshJdkProfile, SshJolokiaProfile)
}


def _profile(data: Any) -> ConnectionProfile:
    if not isinstance(data, dict):
        raise _SchemaError("invalid type for connection: expected a table")
    tag = _get(data, "type", _string)
    cls = _PROFILE_TYPES.get(tag)
    if cls is None:
        expected = ", ".join(f"`{name}`" for name in _PROFILE_TYPES)
        raise _SchemaError(f"unknown variant `{tag}`, expected one of {expected}")
    return cls._from_mapping(data)


def profile_from_dict(data: Any) -> ConnectionProfile:
    """Build a connection profile from a mapping tagged by its ``type`` key."""
    try:
        return _profile(data)
    except _SchemaError as exc:
        raise ConfigLoadError(f"Failed to parse config: {exc}") from exc


def _preferences(data: dict[str, Any]) -> Preferences:
    defaults = Preferences()
    return Preferences(
        default_interval=_get(data, "default_interval", _duration, defaults.default_interval),
        max_history_samples=_get(
            data, "max_history_samples", _u64, defaults.max_history_samples
        ),
        export_directory=_get(data, "export_directory", _string, None),
    )


def _advanced(data: dict[str, Any]) -> AdvancedSettings:
    defaults = AdvancedSettings()
    return AdvancedSettings(
        http_timeout_ms=_get(data, "http_timeout_ms", _u64, defaults.http_timeout_ms),
        ssh_timeout_sec=_get(data, "ssh_timeout_sec", _u64, defaults.ssh_timeout_sec),
        connection_retry_attempts=_get(
            data, "connection_retry_attempts", _u64, defaults.connection_retry_attempts
        ),
        connection_retry_delay_ms=_get(
            data, "connection_retry_delay_ms", _u64, defaults.connection_retry_delay_ms
        ),
    )


def _expand_tilde(text: str) -> str:
    if text != "~" and not text.startswith("~/"):
        return text
    try:
        home = Path.home()
    except RuntimeError:
        return text
    return str(home) + text[1:]


_ENV_VAR = re.compile(r"\$(?:\{([^}]*)\}|([A-Za-z0-9_]+))")


def _expand_env(text: str) -> str:
    """Substitute $NAME and ${NAME}; leave the text alone if any is unset."""
    missing = False

    def replace(match: re.Match[str]) -> str:
        nonlocal missing
        name = match.group(1) if match.group(1) is not None else match.group(2)
        value = os.environ.get(name)
        if value is None:
            missing = True
            return match.group(0)
        return value

    expanded = _ENV_VAR.sub(replace, text)
    return text if missing else expanded


@dataclass
class Config:
    preferences: Preferences = field(default_factory=Preferences)
    connections: list[ConnectionProfile] = field(default_factory=list)
    advanced: AdvancedSettings = field(default_factory=AdvancedSettings)

    @classmethod
    def from_dict(cls, data: Any) -> "Config":
        """Build a configuration from parsed TOML data, applying defaults."""
        try:
            if not isinstance(data, dict):
                raise _SchemaError("configuration must be a table")
            preferences = _preferences(_get(data, "preferences", _table, {}))
            raw_connections = data.get("connections", [])
            if not isinstance(raw_connections, list):
                raise _SchemaError("invalid type for `connections`: expected an array")
            connections = [_profile(item) for item in raw_connections]
            advanced = _advanced(_get(data, "advanced", _table, {}))
        except _SchemaError as exc:
            raise ConfigLoadError(f"Failed to parse config: {exc}") from exc
        return cls(preferences=preferences, connections=connections, advanced=advanced)

    @classmethod
    def from_toml(cls, text: str) -> "Config":
        """Parse TOML text without expanding or validating it."""
        try:
            data = tomllib.loads(text)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigLoadError(f"Failed to parse config: {exc}") from exc
        return cls.from_dict(data)

    @classmethod
    def load(cls) -> "Config":
        """Load the first configuration file found, or the defaults."""
        path = find_config_file()
        if path is None:
            return cls()
        return cls.load_from_file(path)

    @classmethod
    def load_from_file(cls, path: str | os.PathLike[str]) -> "Config":
        try:
            content = Path(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ConfigLoadError(f"Failed to read config file: {exc}") from exc
        config = cls.from_toml(content)
        config.expand_environment_variables()
        config.validate()
        return config

    def expand_environment_variables(self) -> None:
        """Expand ``~`` and environment variables in path settings."""
        export_dir = self.preferences.export_directory
        if export_dir is not None:
            self.preferences.export_directory = _expand_env(_expand_tilde(export_dir))
        for connection in self.connections:
            if isinstance(connection, (SshJdkProfile, SshJolokiaProfile)):
                if connection.ssh_key is not None:
                    connection.ssh_key = _expand_tilde(connection.ssh_key)

    def validate(self) -> None:
        """Raise ConfigLoadError when a setting is out of its allowed range."""
        if self.preferences.max_history_samples == 0:
            raise ConfigLoadError("max_history_samples must be greater than 0")
        if self.preferences.default_interval < MIN_INTERVAL:
            raise ConfigLoadError("default_interval must be at least 100ms")

        for idx, conn in enumerate(self.connections):
            if isinstance(conn, JolokiaProfile):
                if not conn.url.startswith(("http://", "https://")):
                    raise ConfigLoadError(
                        f"Connection '{idx}': Jolokia URL must start with http:// or https://"
                    )
            elif isinstance(conn, SshJdkProfile):
                if not conn.ssh_host:
                    raise ConfigLoadError(f"Connection '{idx}': ssh_host cannot be empty")
                if conn.pid == 0:
                    raise ConfigLoadError(f"Connection '{idx}': pid must be greater than 0")
            elif isinstance(conn, SshJolokiaProfile):
                if not conn.ssh_host:
                    raise ConfigLoadError(f"Connection '{idx}': ssh_host cannot be empty")
                if conn.jolokia_port == 0:
                    raise ConfigLoadError(
                        f"Connection '{idx}': jolokia_port must be greater than 0"
                    )

    def get_connection(self, name: str) -> ConnectionProfile | None:
        return next((conn for conn in self.connections if conn.name == name), None)


def config_search_paths() -> list[Path]:
    """Candidate configuration files, most specific first."""
    paths: list[Path] = []
    custom = os.environ.get(CONFIG_ENV_VAR)
    if custom is not None:
        paths.append(Path(custom))
    paths.append(Path("./config.toml"))
    paths.append(Path("./jvm-tui.toml"))
    paths.append(platformdirs.user_config_path() / "jvm-tui" / "config.toml")
    try:
        home = Path.home()
    except RuntimeError:
        return paths
    paths.append(home / ".jvm-tui.toml")
    paths.append(home / ".config" / "jvm-tui" / "config.toml")
    return paths


def find_config_file() -> Path | None:
    return next((path for path in config_search_paths() if path.exists()), None)