"""Request and response records of the Jolokia JSON protocol."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .errors import ParseError


@dataclass
class JolokiaRequest:
    request_type: str
    mbean: str
    attribute: str | None = None
    operation: str | None = None
    arguments: list[Any] | None = None

    @classmethod
    def read(cls, mbean: str, attribute: str) -> "JolokiaRequest":
        return cls("read", mbean, attribute=attribute)

    @classmethod
    def exec(cls, mbean: str, operation: str, arguments: list[Any]) -> "JolokiaRequest":
        return cls("exec", mbean, operation=operation, arguments=list(arguments))

    def to_dict(self) -> dict[str, Any]:
        """Wire form: ``type`` key, unset optional fields left out."""
        body: dict[str, Any] = {"type": self.request_type, "mbean": self.mbean}
        for key in ("attribute", "operation", "arguments"):
            value = getattr(self, key)
            if value is not None:
                body[key] = value
        return body


@dataclass
class JolokiaResponse:
    status: int
    timestamp: int
    request: Any
    value: Any = None
    error: str | None = None
    error_type: str | None = None

    @classmethod
    def from_dict(cls, data: Any) -> "JolokiaResponse":
        if not isinstance(data, dict):
            raise ParseError("Jolokia response must be a JSON object")
        for key in ("status", "timestamp", "request"):
            if key not in data:
                raise ParseError(f"missing field `{key}`")
        status, timestamp = data["status"], data["timestamp"]
        for key, number in (("status", status), ("timestamp", timestamp)):
            if isinstance(number, bool) or not isinstance(number, int) or number < 0:
                raise ParseError(f"invalid value for `{key}`: {number!r}")
        return cls(
            status=status,
            timestamp=timestamp,
            request=data["request"],
            value=data.get("value"),
            error=data.get("error"),
            error_type=data.get("error_type"),
        )