import json
from datetime import datetime, timezone

from jvmtui.store import MetricsStore
from jvmtui.types import (
    ClassInfo,
    GcStats,
    HeapInfo,
    MemoryPool,
    PoolType,
    StackFrame,
    ThreadInfo,
    ThreadState,
)


def _heap(used):
    pool = MemoryPool("Metaspace", PoolType.METASPACE, used, used * 2, used)
    return HeapInfo(used_bytes=used, max_bytes=used * 4, committed_bytes=used * 2, pools=[pool])


def test_empty_store():
    store = MetricsStore(5)
    assert store.latest_heap() is None
    assert store.latest_gc() is None
    assert store.thread_snapshot == []
    assert store.class_histogram == []


def test_history_is_bounded():
    store = MetricsStore(2)
    for used in (10, 20, 30):
        store.record_heap(_heap(used))
    assert [h.used_bytes for h in store.heap_history] == [20, 30]
    assert store.latest_heap().used_bytes == 30


def test_threads_and_classes_are_replaced():
    store = MetricsStore(3)
    store.record_threads([ThreadInfo(1, "main", ThreadState.RUNNABLE)])
    store.record_threads([ThreadInfo(2, "worker", ThreadState.WAITING)])
    store.record_class_histogram([ClassInfo(1, 5, 80, "[B")])
    assert [t.name for t in store.thread_snapshot] == ["worker"]
    assert store.class_histogram[0].name == "[B"


def test_snapshot_is_independent():
    store = MetricsStore(3)
    store.record_heap(_heap(10))
    copy = store.snapshot()
    store.record_heap(_heap(20))
    assert len(copy.heap_history) == 1
    assert len(store.heap_history) == 2


def test_to_dict_round_trips_through_json():
    store = MetricsStore(3)
    store.record_heap(_heap(10))
    stamp = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    store.record_gc(GcStats(1, 2, 3, 4, stamp))
    frame = StackFrame("java.lang.Thread", "run", "Thread.java", 840)
    store.record_threads([ThreadInfo(7, "main", ThreadState.TIMED_WAITING, [frame])])

    data = json.loads(json.dumps(store.to_dict()))
    assert data["heap_history"]["capacity"] == 3
    assert data["heap_history"]["buffer"][0]["pools"][0]["pool_type"] == "Metaspace"
    assert data["gc_history"]["buffer"][0]["timestamp"] == stamp.isoformat()
    assert data["thread_snapshot"][0]["state"] == "TimedWaiting"
    assert data["thread_snapshot"][0]["stack_trace"][0]["line_number"] == 840