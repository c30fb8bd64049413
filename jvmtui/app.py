"""Interactive application state: tabs, modes, scrolling and search."""

from __future__ import annotations

from enum import Enum

from .store import MetricsStore
from .types import JvmInfo

_TAB_TITLES = {
    "OVERVIEW": "Overview",
    "MEMORY": "Memory",
    "THREADS": "Threads",
    "GC": "GC",
    "CLASSES": "Classes",
}


class Tab(Enum):
    OVERVIEW = 0
    MEMORY = 1
    THREADS = 2
    GC = 3
    CLASSES = 4

    def next(self) -> "Tab":
        return Tab((self.value + 1) % len(Tab))

    def previous(self) -> "Tab":
        return Tab((self.value - 1) % len(Tab))

    @classmethod
    def from_index(cls, index: int) -> "Tab | None":
        try:
            return cls(index)
        except ValueError:
            return None

    def title(self) -> str:
        return _TAB_TITLES[self.name]


class ExportFormat(Enum):
    JSON = ("json", "JSON")
    PROMETHEUS = ("prom", "Prometheus")
    CSV = ("csv", "CSV")

    def _step(self, offset: int) -> "ExportFormat":
        members = list(ExportFormat)
        return members[(members.index(self) + offset) % len(members)]

    def next(self) -> "ExportFormat":
        return self._step(1)

    def previous(self) -> "ExportFormat":
        return self._step(-1)

    def extension(self) -> str:
        return self.value[0]

    def display_name(self) -> str:
        return self.value[1]


class Mode(Enum):
    NORMAL = "normal"
    HELP = "help"
    CONFIRM_GC = "confirm_gc"
    CONFIRM_EXPORT = "confirm_export"
    SELECT_EXPORT_FORMAT = "select_export_format"
    ERROR = "error"
    LOADING = "loading"
    EXPORT_SUCCESS = "export_success"
    SEARCH = "search"


class App:
    """State of the monitoring screen; ``mode_message`` carries the text of
    the error, loading and export-success modes."""

    def __init__(self, metrics_store: MetricsStore | None = None) -> None:
        self.should_quit = False
        self.current_tab = Tab.OVERVIEW
        self.jvm_info: JvmInfo | None = None
        self.metrics_store = metrics_store if metrics_store is not None else MetricsStore(300)
        self.mode = Mode.NORMAL
        self.mode_message: str | None = None
        self.scroll_offset = 0
        self.search_query = ""
        self.search_results: list[int] = []
        self.search_index = 0
        self.selected_export_format = ExportFormat.JSON

    def _set_mode(self, mode: Mode, message: str | None = None) -> None:
        self.mode = mode
        self.mode_message = message

    def quit(self) -> None:
        self.should_quit = True

    def next_tab(self) -> None:
        self.current_tab = self.current_tab.next()
        self.scroll_offset = 0

    def previous_tab(self) -> None:
        self.current_tab = self.current_tab.previous()
        self.scroll_offset = 0

    def select_tab(self, index: int) -> None:
        tab = Tab.from_index(index)
        if tab is not None:
            self.current_tab = tab
            self.scroll_offset = 0

    def set_jvm_info(self, info: JvmInfo) -> None:
        self.jvm_info = info

    def toggle_help(self) -> None:
        self._set_mode(Mode.NORMAL if self.mode is Mode.HELP else Mode.HELP)

    def show_gc_confirmation(self) -> None:
        self._set_mode(Mode.CONFIRM_GC)

    def show_export_format_selector(self) -> None:
        self._set_mode(Mode.SELECT_EXPORT_FORMAT)

    def show_export_confirmation(self) -> None:
        self._set_mode(Mode.CONFIRM_EXPORT)

    def cancel_confirmation(self) -> None:
        self._set_mode(Mode.NORMAL)

    def next_export_format(self) -> None:
        self.selected_export_format = self.selected_export_format.next()

    def previous_export_format(self) -> None:
        self.selected_export_format = self.selected_export_format.previous()

    def show_export_success(self, path: str) -> None:
        self._set_mode(Mode.EXPORT_SUCCESS, path)

    def scroll_down(self) -> None:
        self.scroll_offset += 1

    def scroll_up(self) -> None:
        self.scroll_offset = max(self.scroll_offset - 1, 0)

    def reset_scroll(self) -> None:
        self.scroll_offset = 0

    def show_error(self, message: str) -> None:
        self._set_mode(Mode.ERROR, message)

    def clear_error(self) -> None:
        if self.mode is Mode.ERROR:
            self._set_mode(Mode.NORMAL)

    def show_loading(self, message: str) -> None:
        self._set_mode(Mode.LOADING, message)

    def clear_loading(self) -> None:
        if self.mode is Mode.LOADING:
            self._set_mode(Mode.NORMAL)

    def _reset_search(self) -> None:
        self.search_query = ""
        self.search_results = []
        self.search_index = 0

    def start_search(self) -> None:
        self._set_mode(Mode.SEARCH)
        self._reset_search()

    def cancel_search(self) -> None:
        self._set_mode(Mode.NORMAL)
        self._reset_search()

    def push_search_char(self, c: str) -> None:
        self.search_query += c

    def pop_search_char(self) -> None:
        self.search_query = self.search_query[:-1]

    def update_search_results(self, results: list[int]) -> None:
        self.search_results = list(results)
        self.search_index = 0

    def next_search_result(self) -> None:
        if self.search_results:
            self.search_index = (self.search_index + 1) % len(self.search_results)
            self.scroll_offset = self.search_results[self.search_index]

    def prev_search_result(self) -> None:
        if self.search_results:
            self.search_index = (self.search_index - 1) % len(self.search_results)
            self.scroll_offset = self.search_results[self.search_index]