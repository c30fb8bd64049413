import pytest

from jvmtui.app import App, ExportFormat, Mode, Tab
from jvmtui.store import MetricsStore
from jvmtui.types import JvmInfo


def test_tab_cycle():
    assert Tab.OVERVIEW.next() is Tab.MEMORY
    assert Tab.CLASSES.next() is Tab.OVERVIEW
    assert Tab.OVERVIEW.previous() is Tab.CLASSES
    for tab in Tab:
        assert tab.next().previous() is tab


def test_tab_from_index_and_title():
    assert Tab.from_index(3) is Tab.GC
    assert Tab.from_index(5) is None
    assert [t.title() for t in Tab] == ["Overview", "Memory", "Threads", "GC", "Classes"]


def test_export_format_cycle():
    assert ExportFormat.JSON.next() is ExportFormat.PROMETHEUS
    assert ExportFormat.CSV.next() is ExportFormat.JSON
    assert ExportFormat.JSON.previous() is ExportFormat.CSV
    assert ExportFormat.PROMETHEUS.extension() == "prom"
    assert ExportFormat.PROMETHEUS.display_name() == "Prometheus"


def test_default_app():
    app = App()
    assert app.current_tab is Tab.OVERVIEW
    assert app.mode is Mode.NORMAL
    assert app.selected_export_format is ExportFormat.JSON
    assert app.metrics_store.heap_history.capacity == 300


def test_tab_navigation_resets_scroll():
    app = App(MetricsStore(10))
    app.scroll_down()
    app.next_tab()
    assert app.current_tab is Tab.MEMORY
    assert app.scroll_offset == 0
    app.scroll_down()
    app.previous_tab()
    assert app.current_tab is Tab.OVERVIEW
    assert app.scroll_offset == 0


def test_select_tab_ignores_bad_index():
    app = App()
    app.select_tab(2)
    assert app.current_tab is Tab.THREADS
    app.select_tab(9)
    assert app.current_tab is Tab.THREADS


def test_scroll_saturates_at_zero():
    app = App()
    app.scroll_up()
    assert app.scroll_offset == 0
    app.scroll_down()
    app.scroll_down()
    app.scroll_up()
    assert app.scroll_offset == 1
    app.reset_scroll()
    assert app.scroll_offset == 0


def test_help_toggle():
    app = App()
    app.toggle_help()
    assert app.mode is Mode.HELP
    app.toggle_help()
    assert app.mode is Mode.NORMAL


def test_error_and_loading_clear_only_their_mode():
    app = App()
    app.show_error("boom")
    assert (app.mode, app.mode_message) == (Mode.ERROR, "boom")
    app.clear_loading()
    assert app.mode is Mode.ERROR
    app.clear_error()
    assert app.mode is Mode.NORMAL

    app.show_loading("Exporting data...")
    app.clear_error()
    assert app.mode is Mode.LOADING
    app.clear_loading()
    assert app.mode is Mode.NORMAL


def test_export_flow():
    app = App()
    app.show_export_format_selector()
    assert app.mode is Mode.SELECT_EXPORT_FORMAT
    app.next_export_format()
    app.next_export_format()
    assert app.selected_export_format is ExportFormat.CSV
    app.previous_export_format()
    assert app.selected_export_format is ExportFormat.PROMETHEUS
    app.show_export_confirmation()
    assert app.mode is Mode.CONFIRM_EXPORT
    app.show_export_success("/tmp/out.prom")
    assert app.mode_message == "/tmp/out.prom"
    app.cancel_confirmation()
    assert app.mode is Mode.NORMAL
    assert app.mode_message is None


def test_gc_confirmation_and_quit():
    app = App()
    app.show_gc_confirmation()
    assert app.mode is Mode.CONFIRM_GC
    app.quit()
    assert app.should_quit is True


def test_set_jvm_info():
    app = App()
    info = JvmInfo(pid=42, main_class="PID 42", version="21.0.8", uptime_seconds=10)
    app.set_jvm_info(info)
    assert app.jvm_info is info


def test_search_editing():
    app = App()
    app.start_search()
    assert app.mode is Mode.SEARCH
    for c in "main":
        app.push_search_char(c)
    app.pop_search_char()
    assert app.search_query == "mai"
    app.cancel_search()
    assert app.mode is Mode.NORMAL
    assert app.search_query == ""


@pytest.mark.parametrize("step", ["next_search_result", "prev_search_result"])
def test_search_navigation_without_results(step):
    app = App()
    app.scroll_down()
    getattr(app, step)()
    assert app.search_index == 0
    assert app.scroll_offset == 1


def test_search_navigation_wraps():
    app = App()
    app.update_search_results([4, 9, 15])
    app.next_search_result()
    assert (app.search_index, app.scroll_offset) == (1, 9)
    app.next_search_result()
    app.next_search_result()
    assert (app.search_index, app.scroll_offset) == (0, 4)
    app.prev_search_result()
    assert (app.search_index, app.scroll_offset) == (2, 15)