"""In-memory history of collected JVM metrics."""

from __future__ import annotations

import copy
import dataclasses
from datetime import datetime
from enum import Enum
from typing import Any, Iterable

from .ring_buffer import RingBuffer
from .types import ClassInfo, GcStats, HeapInfo, ThreadInfo


def _scalar(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    return value


def _record_dict(record: Any) -> dict[str, Any]:
    return dataclasses.asdict(
        record, dict_factory=lambda pairs: {k: _scalar(v) for k, v in pairs}
    )


def _buffer_dict(buffer: RingBuffer) -> dict[str, Any]:
    return {"buffer": [_record_dict(item) for item in buffer], "capacity": buffer.capacity}


class MetricsStore:
    """Bounded heap and GC history plus the latest thread and class snapshots."""

    def __init__(self, history_size: int) -> None:
        self.heap_history: RingBuffer[HeapInfo] = RingBuffer(history_size)
        self.gc_history: RingBuffer[GcStats] = RingBuffer(history_size)
        self.thread_snapshot: list[ThreadInfo] = []
        self.class_histogram: list[ClassInfo] = []

    def record_heap(self, info: HeapInfo) -> None:
        self.heap_history.push(info)

    def record_gc(self, stats: GcStats) -> None:
        self.gc_history.push(stats)

    def record_threads(self, threads: Iterable[ThreadInfo]) -> None:
        self.thread_snapshot = list(threads)

    def record_class_histogram(self, classes: Iterable[ClassInfo]) -> None:
        self.class_histogram = list(classes)

    def latest_heap(self) -> HeapInfo | None:
        return self.heap_history.last()

    def latest_gc(self) -> GcStats | None:
        return self.gc_history.last()

    def snapshot(self) -> "MetricsStore":
        """An independent copy, safe to read while collection continues."""
        return copy.deepcopy(self)

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready representation of the whole store."""
        return {
            "heap_history": _buffer_dict(self.heap_history),
            "gc_history": _buffer_dict(self.gc_history),
            "thread_snapshot": [_record_dict(t) for t in self.thread_snapshot],
            "class_histogram": [_record_dict(c) for c in self.class_histogram],
        }