"""Main monitoring screen: header, tabs, the current view, footer and overlays."""

from __future__ import annotations

from enum import Enum
from typing import Any

from .app import App, ExportFormat, Tab
from .picker import _attr, _draw
from .store import MetricsStore
from .threads_view import summary_text, thread_rows

_MB = 1024 * 1024

OVERVIEW, MEMORY, THREADS, GC, CLASSES = (Tab.from_index(i) for i in range(5))
_ALL_TABS = (OVERVIEW, MEMORY, THREADS, GC, CLASSES)

_NAV_FOOTER = (
    "1-5: Switch Tab | h/l/←/→: Prev/Next | g: Trigger GC | r: Reset | ?: Help | q: Quit"
)
_SCROLL_FOOTER = (
    "1-5: Switch Tab | j/k/↑/↓: Scroll | g: Trigger GC | r: Reset | ?: Help | q: Quit"
)
_CONFIRM_PROMPT = "Press [Y] to confirm, [N] to cancel"

_HELP_SECTIONS = (
    ("Global", (("q", "Quit application"), ("?", "Toggle this help screen"))),
    ("Navigation", (
        ("1-5", "Switch to tab (Overview/Memory/Threads/GC/Classes)"),
        ("h / ←", "Previous tab"),
        ("l / →", "Next tab"),
        ("Tab", "Next tab"),
        ("Shift+Tab", "Previous tab"),
    )),
    ("Actions", (
        ("g", "Trigger garbage collection (with confirmation)"),
        ("r", "Reset metrics store"),
        ("e", "Export current view data"),
    )),
    ("View-Specific", (
        ("j / ↓", "Scroll down (Threads/Classes views)"),
        ("k / ↑", "Scroll up (Threads/Classes views)"),
        ("/", "Search threads (Threads view)"),
        ("n", "Next search result (during search)"),
        ("N", "Previous search result (during search)"),
        ("Esc", "Cancel search (during search)"),
    )),
)


def _mode_key(app: App) -> str:
    mode = app.mode
    name = mode.name if isinstance(mode, Enum) else type(mode).__name__
    return name.replace("_", "").upper()


def _mode_message(app: App) -> str:
    for holder, attribute in (
        (app.mode, "message"),
        (app, "message"),
        (app, "mode_message"),
        (app, "status_message"),
    ):
        value = getattr(holder, attribute, None)
        if isinstance(value, str):
            return value
    return ""


def header_text(app: App) -> str:
    info = app.jvm_info
    if info is None:
        return "Loading JVM info..."
    hours = info.uptime_seconds // 3600
    minutes = (info.uptime_seconds % 3600) // 60
    return f"PID: {info.pid} │ JDK {info.version} │ Uptime: {hours}h {minutes}m"


def tab_titles(app: App) -> list[str]:
    """Numbered tab titles; the current one is bracketed."""
    titles = []
    for number, tab in enumerate(_ALL_TABS, start=1):
        title = f"{number}:{tab.title()}"
        titles.append(f"[{title}]" if tab == app.current_tab else title)
    return titles


def footer_text(tab: Tab) -> str:
    return _SCROLL_FOOTER if tab in (THREADS, CLASSES) else _NAV_FOOTER


def _avg(total: int, count: int) -> float:
    return total / count if count > 0 else 0.0


def _overview_lines(store: MetricsStore) -> list[str]:
    lines: list[str] = []
    heap = store.latest_heap()
    if heap is not None:
        lines.append(
            f"Heap Usage: {heap.used_bytes // _MB} / {heap.max_bytes // _MB} MB "
            f"({heap.usage_ratio() * 100.0:.1f}%)"
        )
    else:
        lines.append("Heap Usage")
    lines.append("")

    gc = store.latest_gc()
    if gc is not None:
        lines += [
            f"Young GC: {gc.young_gc_count} collections ({gc.young_gc_time_ms / 1000:.2f}s total)",
            f"Full GC: {gc.old_gc_count} collections ({gc.old_gc_time_ms / 1000:.2f}s total)",
            f"Total GC Time: {(gc.young_gc_time_ms + gc.old_gc_time_ms) / 1000:.2f}s",
            f"Avg Young GC: {_avg(gc.young_gc_time_ms, gc.young_gc_count):.2f}ms",
            f"Avg Full GC: {_avg(gc.old_gc_time_ms, gc.old_gc_count):.2f}ms",
        ]
    else:
        lines.append("No GC data available")
    lines.append("")

    if heap is not None:
        metaspace = next((p for p in heap.pools if p.name == "Metaspace"), None)
        meta_text = (
            f"Metaspace: {metaspace.used_bytes // _MB} / {metaspace.max_bytes // _MB} MB"
            if metaspace is not None
            else "Metaspace: N/A"
        )
        lines += [
            "Memory Pools:",
            "",
            meta_text,
            f"Total Pools: {len(heap.pools)}",
            "",
            f"Samples Collected: {len(store.heap_history)} heap, {len(store.gc_history)} GC",
        ]
    else:
        lines.append("No memory data available")
    return lines


def _memory_lines(store: MetricsStore) -> list[str]:
    heap = store.latest_heap()
    if heap is None:
        return ["Heap Usage Timeline", "", "No memory pool data available"]
    max_heap = max((h.used_bytes // _MB for h in store.heap_history), default=1)
    lines = [f"Heap Usage Timeline (max: {max_heap} MB)", ""]
    for pool in heap.pools:
        ratio = pool.used_bytes / pool.max_bytes if pool.max_bytes > 0 else 0.0
        lines.append(
            f"{pool.name}: {pool.used_bytes // _MB} / {pool.max_bytes // _MB} MB "
            f"({ratio * 100.0:.1f}%)"
        )
    return lines


def _row_text(row: Any) -> str:
    if isinstance(row, (tuple, list)):
        return "  ".join(str(cell) for cell in row)
    return str(row)


def _threads_lines(store: MetricsStore, scroll: int) -> list[str]:
    lines = summary_text(store).splitlines()
    lines += ["", "Thread List (Top 50)", "ID  Name  State  Stack Depth"]
    lines += [_row_text(row) for row in thread_rows(store, scroll, 50)]
    return lines


def _gc_lines(store: MetricsStore) -> list[str]:
    history = list(store.gc_history)
    if not history:
        return ["No GC data available yet...", "", "Waiting for GC statistics..."]
    first, latest = history[0], history[-1]
    young_diff = max(latest.young_gc_count - first.young_gc_count, 0)
    old_diff = max(latest.old_gc_count - first.old_gc_count, 0)
    young_time = max(latest.young_gc_time_ms - first.young_gc_time_ms, 0)
    old_time = max(latest.old_gc_time_ms - first.old_gc_time_ms, 0)
    return [
        f"Total Collections: {latest.young_gc_count + latest.old_gc_count}",
        f"Young GC: {latest.young_gc_count} collections, {latest.young_gc_time_ms / 1000:.2f}s "
        f"total (avg {_avg(latest.young_gc_time_ms, latest.young_gc_count):.2f}ms)",
        f"Full GC: {latest.old_gc_count} collections, {latest.old_gc_time_ms / 1000:.2f}s "
        f"total (avg {_avg(latest.old_gc_time_ms, latest.old_gc_count):.2f}ms)",
        "",
        f"Total GC Time: {(latest.young_gc_time_ms + latest.old_gc_time_ms) / 1000:.2f}s",
        "GC Overhead: Calculating...",
        "",
        f"Statistics (Last {len(history)} samples):",
        "",
        f"Young GC Events: {latest.young_gc_count} (Δ{young_diff})",
        f"Young GC Time: {latest.young_gc_time_ms / 1000:.2f}s (Δ{young_time / 1000:.2f}s)",
        "",
        f"Full GC Events: {latest.old_gc_count} (Δ{old_diff})",
        f"Full GC Time: {latest.old_gc_time_ms / 1000:.2f}s (Δ{old_time / 1000:.2f}s)",
        "",
        f"Recent Avg Young GC: {_avg(young_time, young_diff):.2f}ms",
        f"Recent Avg Full GC: {_avg(old_time, old_diff):.2f}ms",
    ]


def _classes_lines(store: MetricsStore, scroll: int) -> list[str]:
    classes = store.class_histogram
    total_instances = sum(c.instances for c in classes)
    total_bytes = sum(c.bytes for c in classes)
    lines = [
        f"Total Classes: {len(classes)}",
        f"Total Instances: {total_instances}",
        f"Total Memory: {total_bytes / _MB:.2f} MB",
        "",
        "Showing top memory consumers...",
        "",
    ]
    if not classes:
        return lines + [
            "No class histogram data available.",
            "",
            "Class histogram collection is expensive and runs less frequently.",
            "Wait a moment for data to appear...",
        ]
    lines.append("Top 100 Classes by Memory Usage")
    lines.append(f"{'Rank':<6}{'Instances':<12}{'Bytes':<12}{'MB':<8}Class Name")
    for entry in classes[scroll:scroll + 100]:
        lines.append(
            f"{entry.rank:<6}{entry.instances:<12}{entry.bytes:<12}"
            f"{entry.bytes / _MB:<8.2f}{entry.name}"
        )
    return lines


def content_lines(app: App, store: MetricsStore) -> list[str]:
    """Text of the view belonging to the current tab."""
    tab = app.current_tab
    if tab == MEMORY:
        return _memory_lines(store)
    if tab == THREADS:
        return _threads_lines(store, app.scroll_offset)
    if tab == GC:
        return _gc_lines(store)
    if tab == CLASSES:
        return _classes_lines(store, app.scroll_offset)
    return _overview_lines(store)


def _help_lines() -> list[str]:
    lines = [" Help - Press ? or Esc to close ", ""]
    for title, bindings in _HELP_SECTIONS:
        lines.append(f" {title} ")
        lines += [f"{key:<15}  {desc}" for key, desc in bindings]
        lines.append("")
    lines += [" About ", "JVM-TUI v0.1.0",
              "A beautiful, lightweight terminal interface for JVM monitoring."]
    return lines


def _dialog(title: str, message: str) -> list[str]:
    return [f" {title} ", "", *message.split("\n"), "", _CONFIRM_PROMPT]


def overlay_lines(app: App) -> list[str]:
    """Text of the popup for the current mode; empty in normal mode."""
    key = _mode_key(app)
    if key == "HELP":
        return _help_lines()
    if key == "CONFIRMGC":
        return _dialog(
            "Trigger Garbage Collection",
            "Are you sure you want to trigger a garbage collection?\n\n"
            "This may pause the JVM briefly.",
        )
    if key == "SELECTEXPORTFORMAT":
        lines = [" Select Export Format ", ""]
        for fmt in ExportFormat:
            symbol = "  >> " if fmt == app.selected_export_format else "     "
            lines.append(f"{symbol}{fmt.display_name()} (.{fmt.extension()})")
        return lines + ["", "↑/k: Up | ↓/j: Down | Enter: Confirm | Esc/q: Cancel"]
    if key == "CONFIRMEXPORT":
        if app.current_tab == THREADS:
            message = "Export thread dump to file?"
        else:
            message = (
                f"Export current metrics to {app.selected_export_format.display_name()} file?"
            )
        return _dialog("Export Data", message)
    if key == "EXPORTSUCCESS":
        return _dialog(
            "Export Successful",
            f"Data exported to:\n\n{_mode_message(app)}\n\nPress Enter to continue",
        )
    if key == "ERROR":
        return [" Error ", "", "⚠️  Connection Error", "", _mode_message(app), "",
                "Press 'r' to retry connection", "Press 'q' to quit"]
    if key == "LOADING":
        return [" Loading ", "", f"⏳ {_mode_message(app)}", "", "Please wait..."]
    if key == "SEARCH":
        count = len(app.search_results)
        if count > 0:
            info = f" [{app.search_index + 1}/{count}] "
        elif app.search_query:
            info = " [No matches] "
        else:
            info = ""
        return [" / to search | n: next | N: prev | Esc: cancel ",
                f"Search: {app.search_query}{info}"]
    return []


def _overlay_color(app: App) -> str:
    theme = app.theme
    return {
        "HELP": theme.border_focused,
        "CONFIRMGC": theme.warning,
        "CONFIRMEXPORT": theme.warning,
        "EXPORTSUCCESS": theme.warning,
        "SELECTEXPORTFORMAT": theme.info,
        "ERROR": theme.error,
        "LOADING": theme.info,
        "SEARCH": theme.highlight,
    }.get(_mode_key(app), theme.text)


def render(window: Any, app: App, store: MetricsStore) -> None:
    """Draw the whole monitoring screen on a curses window."""
    theme = app.theme
    window.erase()
    height, width = window.getmaxyx()

    _draw(window, [(header_text(app), _attr(theme.primary, bold=True))])

    x = 0
    for tab, title in zip(_ALL_TABS, tab_titles(app)):
        current = tab == app.current_tab
        attr = _attr(theme.highlight, bold=True) if current else _attr(theme.text_dim)
        _draw(window, [(title, attr)], top=1, left=x)
        x += len(title) + 1

    body = max(height - 4, 0)
    _draw(window, [(line, _attr(theme.text)) for line in content_lines(app, store)[:body]], top=3)
    if height > 1:
        _draw(window, [(footer_text(app.current_tab), _attr(theme.text_dim))], top=height - 1)

    overlay = overlay_lines(app)
    if overlay:
        box_width = max(width // 2, max(len(line) for line in overlay) + 2)
        left = max((width - box_width) // 2, 0)
        top = max((height - len(overlay)) // 2, 0)
        attr = _attr(_overlay_color(app))
        _draw(window, [(line.center(box_width), attr) for line in overlay], top=top, left=left)

    window.refresh()