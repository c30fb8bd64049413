"""Thread search, state summary and table rows for the threads view."""

from __future__ import annotations

from collections import Counter
from typing import Iterable

from .store import MetricsStore
from .types import ThreadInfo, ThreadState


def search_threads(store: MetricsStore, query: str) -> list[int]:
    """Indices of threads whose name (case-insensitive) or id matches."""
    if not query:
        return []
    needle = query.lower()
    return [
        index
        for index, thread in enumerate(store.thread_snapshot)
        if needle in thread.name.lower() or query in str(thread.id)
    ]


def state_counts(threads: Iterable[ThreadInfo]) -> Counter[ThreadState]:
    return Counter(thread.state for thread in threads)


def summary_text(store: MetricsStore) -> str:
    threads = store.thread_snapshot
    counts = state_counts(threads)
    return (
        f"Total Threads: {len(threads)}\n\n"
        f"Runnable:      {counts[ThreadState.RUNNABLE]}\n"
        f"Blocked:       {counts[ThreadState.BLOCKED]}\n"
        f"Waiting:       {counts[ThreadState.WAITING]}\n"
        f"Timed Waiting: {counts[ThreadState.TIMED_WAITING]}\n"
        f"Terminated:    {counts[ThreadState.TERMINATED]}"
    )


def thread_rows(
    store: MetricsStore, scroll: int = 0, limit: int = 50
) -> list[tuple[int, str, ThreadState, str, int]]:
    """Rows of (id, name, state, state label, stack depth) for the visible window."""
    visible = store.thread_snapshot[scroll : scroll + limit]
    return [
        (thread.id, thread.name, thread.state, thread.state.name, len(thread.stack_trace))
        for thread in visible
    ]