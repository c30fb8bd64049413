import pytest

from jvmtui.types import HeapInfo, MemoryPool, PoolType, StackFrame, ThreadState


@pytest.mark.parametrize(
    "text, expected",
    [
        ("RUNNABLE", ThreadState.RUNNABLE),
        ("BLOCKED", ThreadState.BLOCKED),
        ("WAITING", ThreadState.WAITING),
        ("TIMED_WAITING", ThreadState.TIMED_WAITING),
        ("TERMINATED", ThreadState.TERMINATED),
        ("NEW", ThreadState.NEW),
    ],
)
def test_thread_state_from_java(text, expected):
    assert ThreadState.from_java(text) is expected


def test_unknown_thread_state_is_runnable():
    assert ThreadState.from_java("PARKED") is ThreadState.RUNNABLE


def test_thread_state_values_match_serialised_names():
    assert ThreadState("TimedWaiting") is ThreadState.TIMED_WAITING
    assert PoolType("CodeCache") is PoolType.CODE_CACHE
    assert ThreadState.from_java("TIMED_WAITING").value == "TimedWaiting"


def test_location_with_file_and_line():
    frame = StackFrame("java.lang.Thread", "run", "Thread.java", 840)
    assert frame.location() == "(Thread.java:840)"


def test_location_with_file_only():
    frame = StackFrame("jdk.internal.misc.Unsafe", "park", "Native Method")
    assert frame.location() == "(Native Method)"


def test_location_unknown():
    assert StackFrame("A", "b").location() == "(Unknown Source)"


def test_usage_ratio():
    heap = HeapInfo(used_bytes=50, max_bytes=200, committed_bytes=200)
    assert heap.usage_ratio() == 50 / 200


def test_usage_ratio_without_max():
    pool = MemoryPool("Metaspace", PoolType.METASPACE, 10, 20, 15)
    heap = HeapInfo(used_bytes=10, max_bytes=0, committed_bytes=0, pools=[pool])
    assert heap.usage_ratio() == 0.0
    assert heap.pools[0].pool_type is PoolType.METASPACE