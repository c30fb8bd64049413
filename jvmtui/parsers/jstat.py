"""Parsing of ``jstat -gcutil`` output."""

from __future__ import annotations

import math
import re

from ..errors import ParseError
from ..types import GcStats

_COUNT = re.compile(r"\+?\d+")
_U64_MAX = 2**64 - 1


def _count(text: str, label: str) -> int:
    if not _COUNT.fullmatch(text):
        raise ParseError(f"Failed to parse {label}: invalid digit found in string")
    return int(text)


def _seconds(text: str, label: str) -> float:
    try:
        return float(text)
    except ValueError:
        raise ParseError(f"Failed to parse {label}: invalid float literal") from None


def _to_millis(seconds: float) -> int:
    millis = seconds * 1000.0
    if math.isnan(millis) or millis <= 0:
        return 0
    if millis >= _U64_MAX:
        return _U64_MAX
    return int(millis)


def parse_gc_stats(output: str) -> GcStats:
    """Read young and full GC counts and times from the data row."""
    lines = output.splitlines()
    if len(lines) < 2:
        raise ParseError("Invalid jstat output format")

    values = lines[1].split()
    if len(values) < 13:
        raise ParseError(f"Expected at least 13 values, got {len(values)}")

    young_count = _count(values[6], "YGC")
    young_time = _seconds(values[7], "YGCT")
    full_count = _count(values[8], "FGC")
    full_time = _seconds(values[9], "FGCT")

    return GcStats(
        young_gc_count=young_count,
        young_gc_time_ms=_to_millis(young_time),
        old_gc_count=full_count,
        old_gc_time_ms=_to_millis(full_time),
    )