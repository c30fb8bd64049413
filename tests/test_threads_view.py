import pytest

from jvmtui.store import MetricsStore
from jvmtui.threads_view import search_threads, state_counts, summary_text, thread_rows
from jvmtui.types import StackFrame, ThreadInfo, ThreadState


@pytest.fixture
def store():
    s = MetricsStore(5)
    frame = StackFrame("java.lang.Object", "wait")
    s.record_threads(
        [
            ThreadInfo(1, "main", ThreadState.RUNNABLE, [frame, frame]),
            ThreadInfo(12, "Worker-1", ThreadState.WAITING, [frame]),
            ThreadInfo(21, "worker-2", ThreadState.TIMED_WAITING),
            ThreadInfo(30, "Reaper", ThreadState.WAITING),
        ]
    )
    return s


def test_empty_query_matches_nothing(store):
    assert search_threads(store, "") == []


def test_search_is_case_insensitive_on_name(store):
    assert search_threads(store, "MAIN") == [0]
    assert search_threads(store, "worker") == [1, 2]


def test_search_matches_id(store):
    assert search_threads(store, "30") == [3]


def test_search_no_match(store):
    assert search_threads(store, "gc-thread") == []


def test_state_counts(store):
    counts = state_counts(store.thread_snapshot)
    assert counts[ThreadState.WAITING] == 2
    assert counts[ThreadState.BLOCKED] == 0
    assert sum(counts.values()) == len(store.thread_snapshot)


def test_summary_text(store):
    text = summary_text(store)
    assert text.splitlines() == [
        "Total Threads: 4",
        "",
        "Runnable:      1",
        "Blocked:       0",
        "Waiting:       2",
        "Timed Waiting: 1",
        "Terminated:    0",
    ]


def test_thread_rows_window(store):
    rows = thread_rows(store, 1, 2)
    assert [row[0] for row in rows] == [12, 21]
    assert rows[1][3] == "TIMED_WAITING"
    assert rows[0][4] == 1


def test_thread_rows_default_limit():
    s = MetricsStore(5)
    s.record_threads(ThreadInfo(i, f"t{i}", ThreadState.NEW) for i in range(60))
    rows = thread_rows(s)
    assert len(rows) == 50
    assert rows[0][3] == "NEW"