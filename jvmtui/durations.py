"""Parsing of human-friendly durations such as ``500ms`` or ``1h 30m``."""

from __future__ import annotations

import re
from datetime import timedelta

_NS = 1
_US = 1_000
_MS = 1_000_000
_S = 1_000_000_000

_UNITS: dict[str, int] = {
    "nsec": _NS,
    "ns": _NS,
    "usec": _US,
    "us": _US,
    "msec": _MS,
    "ms": _MS,
    "seconds": _S,
    "second": _S,
    "sec": _S,
    "s": _S,
    "minutes": 60 * _S,
    "minute": 60 * _S,
    "min": 60 * _S,
    "m": 60 * _S,
    "hours": 3600 * _S,
    "hour": 3600 * _S,
    "hr": 3600 * _S,
    "h": 3600 * _S,
    "days": 86_400 * _S,
    "day": 86_400 * _S,
    "d": 86_400 * _S,
    "weeks": 604_800 * _S,
    "week": 604_800 * _S,
    "w": 604_800 * _S,
    "months": 2_630_016 * _S,
    "month": 2_630_016 * _S,
    "M": 2_630_016 * _S,
    "years": 31_557_600 * _S,
    "year": 31_557_600 * _S,
    "y": 31_557_600 * _S,
}

_PAIR = re.compile(r"(\d+)\s*([^\d\s]+)\s*")


def parse_duration(text: str) -> timedelta:
    """Parse a sequence of number-unit pairs into a timedelta.

    Raises ValueError on empty input, a missing unit or an unknown unit.
    """
    source = text.strip()
    if not source:
        raise ValueError("value was empty")
    total_ns = 0
    pos = 0
    while pos < len(source):
        match = _PAIR.match(source, pos)
        if match is None:
            raise ValueError(f"invalid duration {text!r}: time unit needed")
        number, unit = match.groups()
        factor = _UNITS.get(unit)
        if factor is None:
            raise ValueError(f"invalid duration {text!r}: unknown time unit {unit!r}")
        total_ns += int(number) * factor
        pos = match.end()
    try:
        return timedelta(microseconds=total_ns // 1000)
    except OverflowError as exc:
        raise ValueError(f"duration {text!r} is too large") from exc