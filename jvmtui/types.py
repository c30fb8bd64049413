"""Data records describing a monitored JVM."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class PoolType(Enum):
    EDEN = "Eden"
    SURVIVOR = "Survivor"
    OLD = "Old"
    METASPACE = "Metaspace"
    CODE_CACHE = "CodeCache"
    OTHER = "Other"


class ThreadState(Enum):
    RUNNABLE = "Runnable"
    BLOCKED = "Blocked"
    WAITING = "Waiting"
    TIMED_WAITING = "TimedWaiting"
    TERMINATED = "Terminated"
    NEW = "New"

    @classmethod
    def from_java(cls, text: str) -> "ThreadState":
        """Map a java.lang.Thread.State name; unknown names count as runnable."""
        try:
            return cls[text]
        except KeyError:
            return cls.RUNNABLE


@dataclass
class JvmInfo:
    pid: int
    main_class: str
    version: str
    uptime_seconds: int
    vm_flags: list[str] = field(default_factory=list)


@dataclass
class MemoryPool:
    name: str
    pool_type: PoolType
    used_bytes: int
    max_bytes: int
    committed_bytes: int


@dataclass
class HeapInfo:
    used_bytes: int
    max_bytes: int
    committed_bytes: int
    pools: list[MemoryPool] = field(default_factory=list)

    def usage_ratio(self) -> float:
        """Used over max, or 0.0 when the maximum is unknown."""
        if self.max_bytes <= 0:
            return 0.0
        return self.used_bytes / self.max_bytes


@dataclass
class GcStats:
    young_gc_count: int
    young_gc_time_ms: int
    old_gc_count: int
    old_gc_time_ms: int
    timestamp: datetime = field(default_factory=lambda: datetime.now().astimezone())


@dataclass
class StackFrame:
    class_name: str
    method_name: str
    file_name: str | None = None
    line_number: int | None = None

    def location(self) -> str:
        """Source position in the usual stack-trace form."""
        if self.file_name is not None and self.line_number is not None:
            return f"({self.file_name}:{self.line_number})"
        if self.file_name is not None:
            return f"({self.file_name})"
        return "(Unknown Source)"


@dataclass
class ThreadInfo:
    id: int
    name: str
    state: ThreadState
    stack_trace: list[StackFrame] = field(default_factory=list)


@dataclass
class ClassInfo:
    rank: int
    instances: int
    bytes: int
    name: str