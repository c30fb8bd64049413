"""Parsing of ``jcmd`` diagnostic command output."""

from __future__ import annotations

import re

from ..errors import ParseError
from ..types import (
    ClassInfo,
    HeapInfo,
    MemoryPool,
    PoolType,
    StackFrame,
    ThreadInfo,
    ThreadState,
)

_U32_MAX = 2**32 - 1
_U64_MAX = 2**64 - 1

_HEAP_TOTAL_USED = re.compile(r"total\s+([0-9]+)K,\s+used\s+([0-9]+)K")
_METASPACE = re.compile(
    r"Metaspace\s+used\s+([0-9]+)K,\s+committed\s+([0-9]+)K,\s+reserved\s+([0-9]+)K"
)
_CLASS_SPACE = re.compile(
    r"class space\s+used\s+([0-9]+)K,\s+committed\s+([0-9]+)K,\s+reserved\s+([0-9]+)K"
)
_UPTIME = re.compile(r"([0-9]+\.[0-9]+)\s+s")
_THREAD_HEADER = re.compile(
    r'"([^"]+)"\s+#([0-9]+).*tid=0x[0-9a-f]+\s+nid=[0-9]+\s+(.*)\s+\['
)
_THREAD_STATE = re.compile(r"java\.lang\.Thread\.State:\s+(\w+)")
_STACK_FRAME = re.compile(
    r"^\s+at\s+([a-zA-Z0-9_.$<>]+)\.([a-zA-Z0-9_<>]+)\((?:([^:)]+):([0-9]+)|([^)]+))\)"
)
_CLASS_HISTOGRAM_LINE = re.compile(
    r"^\s*([0-9]+):\s+([0-9]+)\s+([0-9]+)\s+(.+?)\s*(?:\(.*\))?$"
)

# A thread's state and frames are looked for at most this many lines below its header.
_LOOKAHEAD = 100


def _uint(text: str, limit: int, label: str) -> int:
    value = int(text)
    if value > limit:
        raise ParseError(
            f"Failed to parse {label}: number too large to fit in target type"
        )
    return value


def _kib(text: str) -> int:
    return _uint(text, _U64_MAX, "size") * 1024


def _pool(name: str, match: re.Match[str]) -> MemoryPool:
    used, committed, reserved = (_kib(group) for group in match.groups())
    return MemoryPool(
        name=name,
        pool_type=PoolType.METASPACE,
        used_bytes=used,
        max_bytes=reserved,
        committed_bytes=committed,
    )


def parse_heap_info(output: str) -> HeapInfo:
    """Read heap totals and metaspace pools from ``GC.heap_info`` output."""
    used_bytes = max_bytes = committed_bytes = 0
    pools: list[MemoryPool] = []

    for line in output.splitlines():
        if match := _HEAP_TOTAL_USED.search(line):
            max_bytes = _kib(match.group(1))
            used_bytes = _kib(match.group(2))
            committed_bytes = max_bytes
        if match := _METASPACE.search(line):
            pools.append(_pool("Metaspace", match))
        if match := _CLASS_SPACE.search(line):
            pools.append(_pool("Class Space", match))

    if used_bytes == 0 and max_bytes == 0:
        raise ParseError("Failed to parse heap info")

    return HeapInfo(
        used_bytes=used_bytes,
        max_bytes=max_bytes,
        committed_bytes=committed_bytes,
        pools=pools,
    )


def parse_jvm_version(output: str) -> str:
    """The version word of the ``JDK <version>`` line of ``VM.version``."""
    for line in output.splitlines():
        trimmed = line.strip()
        if trimmed.startswith("JDK "):
            parts = trimmed.split()
            if len(parts) >= 2:
                return parts[1]
    raise ParseError("Failed to parse JVM version")


def parse_vm_uptime(output: str) -> int:
    """Whole seconds from ``VM.uptime`` output."""
    for line in output.splitlines():
        if match := _UPTIME.search(line):
            return int(float(match.group(1)))
    raise ParseError("Failed to parse VM uptime")


def parse_vm_flags(output: str) -> list[str]:
    """Every dash-prefixed token on lines carrying -XX:, -Xms or -Xmx options."""
    flags = [
        token
        for line in output.splitlines()
        if "-XX:" in line or "-Xms" in line or "-Xmx" in line
        for token in line.split()
        if token.startswith("-")
    ]
    if not flags:
        raise ParseError("No VM flags found")
    return flags


def _stack_frame(match: re.Match[str]) -> StackFrame:
    class_name, method_name, file_name, line_text, other = match.groups()
    if file_name is not None:
        line_number = int(line_text)
        return StackFrame(
            class_name=class_name,
            method_name=method_name,
            file_name=file_name,
            line_number=line_number if line_number <= _U32_MAX else None,
        )
    return StackFrame(class_name=class_name, method_name=method_name, file_name=other)


def parse_thread_dump(output: str) -> list[ThreadInfo]:
    """Threads with their state and stack frames from ``Thread.print`` output."""
    threads: list[ThreadInfo] = []
    lines = output.splitlines()
    i = 0

    while i < len(lines):
        header = _THREAD_HEADER.search(lines[i])
        if header is None:
            i += 1
            continue

        name = header.group(1)
        thread_id = _uint(header.group(2), _U64_MAX, "thread id")
        state = ThreadState.RUNNABLE
        stack_trace: list[StackFrame] = []

        j = i + 1
        end = min(len(lines), i + _LOOKAHEAD)
        while j < end:
            line = lines[j]
            if _THREAD_HEADER.search(line):
                break
            if state_match := _THREAD_STATE.search(line):
                state = ThreadState.from_java(state_match.group(1))
            if frame_match := _STACK_FRAME.search(line):
                stack_trace.append(_stack_frame(frame_match))
            j += 1

        threads.append(
            ThreadInfo(id=thread_id, name=name, state=state, stack_trace=stack_trace)
        )
        i = j

    if not threads:
        raise ParseError("No threads found in dump")
    return threads


def parse_class_histogram(output: str) -> list[ClassInfo]:
    """Ranked rows of ``GC.class_histogram`` output."""
    classes = [
        ClassInfo(
            rank=_uint(match.group(1), _U32_MAX, "rank"),
            instances=_uint(match.group(2), _U64_MAX, "instances"),
            bytes=_uint(match.group(3), _U64_MAX, "bytes"),
            name=match.group(4).strip(),
        )
        for line in output.splitlines()
        if (match := _CLASS_HISTOGRAM_LINE.search(line))
    ]
    if not classes:
        raise ParseError("No classes found in histogram")
    return classes