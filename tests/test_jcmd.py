import pytest

from jvmtui.errors import ParseError
from jvmtui.parsers.jcmd import (
    parse_class_histogram,
    parse_heap_info,
    parse_jvm_version,
    parse_thread_dump,
    parse_vm_flags,
    parse_vm_uptime,
)
from jvmtui.types import PoolType, ThreadState

HEAP_INFO = """12345:
 garbage-first heap   total 798720K, used 618493K [0x0000000700000000, 0x0000000800000000)
  region size 2048K, 120 young (245760K), 12 survivors (24576K)
 Metaspace       used 505590K, committed 512000K, reserved 1507328K
  class space    used 61234K, committed 64000K, reserved 1048576K
"""

VM_VERSION = """12345:
OpenJDK 64-Bit Server VM version 21.0.8+9-LTS
JDK 21.0.8
"""

VM_UPTIME = """12345:
390327.482 s
"""

VM_FLAGS = """12345:
-XX:CICompilerCount=4 -XX:ConcGCThreads=2 -XX:G1ConcRefinementThreads=8 \
-XX:G1HeapRegionSize=2097152 -XX:+HeapDumpOnOutOfMemoryError -XX:InitialHeapSize=268435456 \
-XX:MarkStackSize=4194304 -XX:MaxHeapSize=4294967296 -XX:MinHeapDeltaBytes=2097152 \
-XX:+UseCompressedOops -XX:+UseG1GC -XX:-UseLargePages
"""


def _header(name, number, what):
    return (
        f'"{name}" #{number} [4355] prio=5 os_prio=31 cpu=1.23ms elapsed=100.00s '
        f"tid=0x00007f8b1c00a000 nid=10755 {what}  [0x000070000d2f4000]"
    )


def _thread_dump():
    lines = [
        "12345:",
        "Full thread dump OpenJDK 64-Bit Server VM (21.0.8+9-LTS mixed mode):",
        "",
        _header("main", 1, "waiting on condition"),
        "   java.lang.Thread.State: TIMED_WAITING (parking)",
        "\tat jdk.internal.misc.Unsafe.park(java.base@21.0.8/Native Method)",
        "\t- parking to wait for  <0x00000007ffe00000> (a java.lang.Object)",
        "\tat java.util.concurrent.locks.LockSupport.parkNanos"
        "(java.base@21.0.8/LockSupport.java:269)",
        "\tat com.example.App.main(App.java:42)",
        "",
        _header("lock-holder", 2, "waiting for monitor entry"),
        "   java.lang.Thread.State: BLOCKED (on object monitor)",
        "\tat com.example.Worker.run(Worker.java:10)",
        "",
    ]
    for number in range(3, 13):
        lines += [
            _header(f"pool-1-thread-{number}", number, "runnable"),
            "   java.lang.Thread.State: RUNNABLE",
            "\tat com.example.Task.call(Task.java:7)",
            "",
        ]
    lines.append('"VM Thread" os_prio=31 cpu=5.00ms elapsed=100.00s tid=0x1 nid=2 runnable')
    return "\n".join(lines)


def _class_histogram():
    lines = [
        "12345:",
        " num     #instances         #bytes  class name (module)",
        "-------------------------------------------------------",
        "   1:        123456       98765432  [B (java.base@21.0.8)",
        "   2:         54321        1303704  java.lang.String (java.base@21.0.8)",
    ]
    lines += [f"{rank:4d}:  {rank * 3}  {rank * 48}  com.example.Type{rank}" for rank in range(3, 121)]
    lines.append("Total       1000000      200000000")
    return "\n".join(lines)


def test_parse_heap_info():
    heap = parse_heap_info(HEAP_INFO)
    assert heap.used_bytes == 618493 * 1024
    assert heap.max_bytes == 798720 * 1024
    assert heap.committed_bytes == heap.max_bytes
    assert len(heap.pools) == 2

    metaspace = heap.pools[0]
    assert metaspace.name == "Metaspace"
    assert metaspace.used_bytes == 505590 * 1024
    assert metaspace.committed_bytes == 512000 * 1024
    assert metaspace.max_bytes == 1507328 * 1024
    assert metaspace.pool_type is PoolType.METASPACE

    class_space = heap.pools[1]
    assert class_space.name == "Class Space"
    assert class_space.used_bytes == 61234 * 1024


def test_parse_heap_info_without_totals_fails():
    with pytest.raises(ParseError, match="Failed to parse heap info"):
        parse_heap_info(" Metaspace used 1K, committed 2K, reserved 3K\n")


def test_parse_jvm_version():
    assert parse_jvm_version(VM_VERSION) == "21.0.8"


def test_parse_jvm_version_missing():
    with pytest.raises(ParseError):
        parse_jvm_version("12345:\nOpenJDK 64-Bit Server VM\n")


def test_parse_vm_uptime():
    assert parse_vm_uptime(VM_UPTIME) == 390327


def test_parse_vm_uptime_missing():
    with pytest.raises(ParseError):
        parse_vm_uptime("12345:\nno uptime here\n")


def test_parse_vm_flags():
    flags = parse_vm_flags(VM_FLAGS)
    assert len(flags) > 10
    assert "-XX:+UseG1GC" in flags
    assert "-XX:+HeapDumpOnOutOfMemoryError" in flags
    assert all(flag.startswith("-") for flag in flags)


def test_parse_vm_flags_ignores_lines_without_options():
    flags = parse_vm_flags("12345:\n-Dfoo=bar\n-Xmx512m -Dkeep=yes\n")
    assert flags == ["-Xmx512m", "-Dkeep=yes"]


def test_parse_vm_flags_empty():
    with pytest.raises(ParseError, match="No VM flags found"):
        parse_vm_flags("12345:\n")


def test_parse_thread_dump():
    threads = parse_thread_dump(_thread_dump())

    assert len(threads) > 10
    assert len(threads) == 12

    main = next(t for t in threads if t.name == "main")
    assert main.id == 1
    assert main.state in (ThreadState.TIMED_WAITING, ThreadState.WAITING)
    assert main.stack_trace

    first_frame = main.stack_trace[0]
    assert "Unsafe" in first_frame.class_name or "misc" in first_frame.class_name
    assert first_frame.class_name == "jdk.internal.misc.Unsafe"
    assert first_frame.method_name == "park"
    assert first_frame.file_name == "java.base@21.0.8/Native Method"
    assert first_frame.line_number is None

    assert len(main.stack_trace) == 3
    assert main.stack_trace[1].file_name == "java.base@21.0.8/LockSupport.java"
    assert main.stack_trace[1].line_number == 269
    assert main.stack_trace[2].class_name == "com.example.App"


def test_parse_thread_dump_states_and_separation():
    threads = parse_thread_dump(_thread_dump())
    holder = next(t for t in threads if t.name == "lock-holder")
    assert holder.state is ThreadState.BLOCKED
    assert [f.method_name for f in holder.stack_trace] == ["run"]
    workers = [t for t in threads if t.name.startswith("pool-1-thread-")]
    assert all(t.state is ThreadState.RUNNABLE for t in workers)
    assert all(len(t.stack_trace) == 1 for t in workers)


def test_parse_thread_dump_unknown_state_is_runnable():
    dump = _header("odd", 7, "runnable") + "\n   java.lang.Thread.State: SLEEPY\n"
    (thread,) = parse_thread_dump(dump)
    assert thread.state is ThreadState.RUNNABLE
    assert thread.id == 7


def test_parse_thread_dump_empty():
    with pytest.raises(ParseError, match="No threads found"):
        parse_thread_dump("12345:\nnothing\n")


def test_parse_class_histogram():
    classes = parse_class_histogram(_class_histogram())

    assert classes
    assert len(classes) > 100

    first_class = classes[0]
    assert first_class.rank == 1
    assert first_class.instances > 0
    assert first_class.bytes > 0
    assert first_class.name

    byte_array = next((c for c in classes if "[B" in c.name), None)
    assert byte_array is not None
    assert byte_array.name == "[B"
    assert classes[1].name == "java.lang.String"
    assert classes[1].instances == 54321


def test_parse_class_histogram_empty():
    with pytest.raises(ParseError, match="No classes found"):
        parse_class_histogram("Total 1 2\n")