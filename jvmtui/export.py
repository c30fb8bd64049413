"""Writing thread dumps and metric snapshots to files."""

from __future__ import annotations

import json
import os
from collections import Counter
from datetime import datetime
from pathlib import Path
from typing import Iterable

import platformdirs

from .store import MetricsStore
from .types import ThreadInfo

_RULE = "=" * 80


def default_export_dir() -> Path:
    """The per-user data directory used when no export directory is configured."""
    return platformdirs.user_data_path("JVM-TUI", "jvmtui")


def _expand_tilde(text: str) -> str:
    if text != "~" and not text.startswith("~/"):
        return text
    try:
        home = Path.home()
    except RuntimeError:
        return text
    return str(home) + text[1:]


def _new_file(base_dir: str | os.PathLike[str] | None, stem: str, suffix: str) -> Path:
    if base_dir is not None:
        directory = Path(_expand_tilde(os.fspath(base_dir)))
    else:
        directory = default_export_dir()
    directory.mkdir(parents=True, exist_ok=True)
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return directory / f"{stem}_{stamp}.{suffix}"


def _now() -> datetime:
    return datetime.now().astimezone()


def render_thread_dump(threads: Iterable[ThreadInfo]) -> str:
    """Plain-text thread dump with one block per thread."""
    threads = list(threads)
    lines = [
        "JVM-TUI Thread Dump",
        f"Generated: {_now()}",
        f"Total Threads: {len(threads)}",
        "",
        _RULE,
        "",
    ]
    for thread in threads:
        lines.append(f'Thread #{thread.id}: "{thread.name}"')
        lines.append(f"  State: {thread.state.value}")
        lines.append(f"  Stack Trace ({len(thread.stack_trace)} frames):")
        for i, frame in enumerate(thread.stack_trace):
            lines.append(
                f"    #{i}: {frame.class_name}.{frame.method_name} {frame.location()}"
            )
        lines.append("")
    lines.append(_RULE)
    lines.append("End of thread dump")
    return "\n".join(lines) + "\n"


def _thread_counts(store: MetricsStore) -> Counter[str]:
    return Counter(thread.state.value for thread in store.thread_snapshot)


def _total_instances(store: MetricsStore) -> int:
    return sum(entry.instances for entry in store.class_histogram)


def _metric(lines: list[str], name: str, help_text: str, kind: str, samples: list[str]) -> None:
    lines.append(f"# HELP {name} {help_text}")
    lines.append(f"# TYPE {name} {kind}")
    lines.extend(samples)
    lines.append("")


def render_prometheus(store: MetricsStore) -> str:
    """Latest metrics in the Prometheus text exposition format."""
    lines = ["# JVM-TUI Metrics Export", f"# Generated: {_now()}", ""]

    heap = store.latest_heap()
    if heap is not None:
        _metric(lines, "jvm_memory_heap_used_bytes", "Heap memory used in bytes", "gauge",
                [f"jvm_memory_heap_used_bytes {heap.used_bytes}"])
        _metric(lines, "jvm_memory_heap_max_bytes", "Heap memory max in bytes", "gauge",
                [f"jvm_memory_heap_max_bytes {heap.max_bytes}"])
        _metric(lines, "jvm_memory_heap_committed_bytes", "Heap memory committed in bytes",
                "gauge", [f"jvm_memory_heap_committed_bytes {heap.committed_bytes}"])

    gc = store.latest_gc()
    if gc is not None:
        _metric(lines, "jvm_gc_collections_total", "Total number of GC collections", "counter", [
            f'jvm_gc_collections_total{{gc="young"}} {gc.young_gc_count}',
            f'jvm_gc_collections_total{{gc="old"}} {gc.old_gc_count}',
        ])
        _metric(lines, "jvm_gc_time_seconds_total", "Total time spent in GC in seconds",
                "counter", [
                    f'jvm_gc_time_seconds_total{{gc="young"}} {gc.young_gc_time_ms / 1000.0:.3f}',
                    f'jvm_gc_time_seconds_total{{gc="old"}} {gc.old_gc_time_ms / 1000.0:.3f}',
                ])

    if heap is not None:
        for pool in heap.pools:
            _metric(lines, "jvm_memory_pool_used_bytes", "Memory pool used in bytes", "gauge",
                    [f'jvm_memory_pool_used_bytes{{pool="{pool.name}"}} {pool.used_bytes}'])
            _metric(lines, "jvm_memory_pool_max_bytes", "Memory pool max in bytes", "gauge",
                    [f'jvm_memory_pool_max_bytes{{pool="{pool.name}"}} {pool.max_bytes}'])
            _metric(lines, "jvm_memory_pool_committed_bytes",
                    "Memory pool committed in bytes", "gauge",
                    [f'jvm_memory_pool_committed_bytes{{pool="{pool.name}"}} '
                     f"{pool.committed_bytes}"])

    _metric(lines, "jvm_threads_total", "Total number of threads by state", "gauge", [
        f'jvm_threads_total{{state="{state}"}} {count}'
        for state, count in _thread_counts(store).items()
    ])
    _metric(lines, "jvm_classes_loaded_total", "Total number of classes loaded", "gauge",
            [f"jvm_classes_loaded_total {_total_instances(store)}"])
    return "\n".join(lines) + "\n"


def _usage_percent(used: int, maximum: int) -> str:
    if maximum == 0:
        return "NaN" if used == 0 else "inf"
    return f"{used / maximum * 100.0:.2f}"


def render_csv(store: MetricsStore) -> str:
    """Latest metrics as ``metric_name,value,unit,timestamp`` rows."""
    ts = _now().isoformat()
    rows = ["metric_name,value,unit,timestamp"]

    def row(name: str, value: object, unit: str) -> None:
        rows.append(f"{name},{value},{unit},{ts}")

    heap = store.latest_heap()
    if heap is not None:
        row("heap_used", heap.used_bytes, "bytes")
        row("heap_max", heap.max_bytes, "bytes")
        row("heap_committed", heap.committed_bytes, "bytes")
        row("heap_usage_percent", _usage_percent(heap.used_bytes, heap.max_bytes), "percent")

    gc = store.latest_gc()
    if gc is not None:
        row("young_gc_count", gc.young_gc_count, "count")
        row("old_gc_count", gc.old_gc_count, "count")
        row("young_gc_time_ms", gc.young_gc_time_ms, "milliseconds")
        row("old_gc_time_ms", gc.old_gc_time_ms, "milliseconds")

    if heap is not None:
        for pool in heap.pools:
            pool_name = pool.name.replace(",", "_")
            row(f"pool_{pool_name}_used", pool.used_bytes, "bytes")
            row(f"pool_{pool_name}_max", pool.max_bytes, "bytes")
            row(f"pool_{pool_name}_committed", pool.committed_bytes, "bytes")

    for state, count in _thread_counts(store).items():
        row(f"threads_{state.lower()}", count, "count")

    row("classes_loaded", _total_instances(store), "count")
    return "\n".join(rows) + "\n"


def export_thread_dump(
    threads: Iterable[ThreadInfo], base_dir: str | os.PathLike[str] | None = None
) -> Path:
    """Write a thread dump file and return its path; raises OSError on failure."""
    path = _new_file(base_dir, "thread_dump", "txt")
    path.write_text(render_thread_dump(threads), encoding="utf-8")
    return path


def export_metrics_json(store: MetricsStore, base_dir: str | os.PathLike[str] | None = None) -> Path:
    path = _new_file(base_dir, "metrics", "json")
    path.write_text(json.dumps(store.to_dict(), indent=2), encoding="utf-8")
    return path


def export_metrics_prometheus(
    store: MetricsStore, base_dir: str | os.PathLike[str] | None = None
) -> Path:
    path = _new_file(base_dir, "metrics", "prom")
    path.write_text(render_prometheus(store), encoding="utf-8")
    return path


def export_metrics_csv(store: MetricsStore, base_dir: str | os.PathLike[str] | None = None) -> Path:
    path = _new_file(base_dir, "metrics", "csv")
    path.write_text(render_csv(store), encoding="utf-8")
    return path