"""Screen for choosing a saved connection or a discovered local JVM."""

from __future__ import annotations

import curses
from dataclasses import dataclass
from typing import Any, Iterable

from .config import ConnectionProfile
from .discovery import DiscoveredJvm
from .theme import Theme

_CURSES_COLORS = {
    "red": curses.COLOR_RED,
    "green": curses.COLOR_GREEN,
    "yellow": curses.COLOR_YELLOW,
    "blue": curses.COLOR_BLUE,
    "cyan": curses.COLOR_CYAN,
}
_pairs: dict[str, int] = {}


def _attr(color: str, *, bold: bool = False, reverse: bool = False) -> int:
    """curses attributes for a theme colour name; plain text when colours are unavailable."""
    attr = 0
    if bold:
        attr |= curses.A_BOLD
    if reverse:
        attr |= curses.A_REVERSE
    if color == "dark_gray":
        return attr | curses.A_DIM
    foreground = _CURSES_COLORS.get(color)
    if foreground is None:
        return attr
    try:
        if color not in _pairs:
            number = len(_pairs) + 1
            curses.init_pair(number, foreground, -1)
            _pairs[color] = number
        attr |= curses.color_pair(_pairs[color])
    except curses.error:
        pass
    return attr


def _draw(window: Any, rows: Iterable[tuple[str, int]], top: int = 0, left: int = 0) -> None:
    """Write rows of (text, attr) downwards from (top, left), clipped to the window."""
    height, width = window.getmaxyx()
    room = max(width - left - 1, 0)
    for offset, (text, attr) in enumerate(rows):
        y = top + offset
        if y >= height:
            break
        try:
            window.addnstr(y, left, text, room, attr)
        except curses.error:
            pass


def truncate(text: str, max_len: int) -> str:
    """Shorten ``text`` to ``max_len`` characters, ending in an ellipsis."""
    if len(text) <= max_len:
        return text
    return text[: max(max_len - 3, 0)] + "..."


@dataclass
class PickerItem:
    """One entry of the picker list."""

    target: ConnectionProfile | DiscoveredJvm

    def display_name(self) -> str:
        if isinstance(self.target, DiscoveredJvm):
            return f"PID: {self.target.pid} - {truncate(self.target.main_class, 60)}"
        return f"[Saved] {self.target.name} ({self.target.connection_type()})"

    def is_saved(self) -> bool:
        return not isinstance(self.target, DiscoveredJvm)


_EMPTY_MESSAGE = (
    "No JVM processes or saved connections found.",
    "",
    " - Make sure you have running Java applications, or",
    " - Add saved connections to your config file",
)
_HELP = "↑/k: Up | ↓/j: Down | Enter: Connect | r: Refresh | q: Quit"


class JvmPickerScreen:
    """Saved connections first, then discovered JVMs; the first is selected."""

    def __init__(
        self,
        jvms: Iterable[DiscoveredJvm],
        saved_connections: Iterable[ConnectionProfile],
    ) -> None:
        self.items = [PickerItem(conn) for conn in saved_connections]
        self.items.extend(PickerItem(jvm) for jvm in jvms)
        self.selected: int | None = 0 if self.items else None

    def next(self) -> None:
        if not self.items:
            return
        if self.selected is None:
            self.selected = 0
        else:
            self.selected = (self.selected + 1) % len(self.items)

    def previous(self) -> None:
        if not self.items:
            return
        if self.selected is None:
            self.selected = 0
        else:
            self.selected = (self.selected - 1) % len(self.items)

    def selected_item(self) -> PickerItem | None:
        if self.selected is None or not 0 <= self.selected < len(self.items):
            return None
        return self.items[self.selected]

    def selected_jvm(self) -> DiscoveredJvm | None:
        item = self.selected_item()
        if item is not None and isinstance(item.target, DiscoveredJvm):
            return item.target
        return None

    def selected_connection(self) -> ConnectionProfile | None:
        item = self.selected_item()
        if item is not None and item.is_saved():
            return item.target
        return None

    def _rows(self, theme: Theme) -> list[tuple[str, int]]:
        rows = [("JVM-TUI - Select Connection", _attr(theme.primary, bold=True)), ("", 0)]
        if not self.items:
            rows.append(("Empty", _attr(theme.warning, bold=True)))
            rows.extend((line, _attr(theme.warning)) for line in _EMPTY_MESSAGE)
        else:
            title = (
                "Saved Connections & Discovered JVMs"
                if any(item.is_saved() for item in self.items)
                else "Discovered JVMs"
            )
            rows.append((title, _attr(theme.text, bold=True)))
            for index, item in enumerate(self.items):
                if index == self.selected:
                    rows.append((">> " + item.display_name(),
                                 _attr(theme.primary, bold=True, reverse=True)))
                else:
                    color = theme.info if item.is_saved() else theme.text
                    rows.append(("   " + item.display_name(), _attr(color)))
        rows.append(("", 0))
        rows.append((_HELP, _attr(theme.text_dim)))
        return rows

    def render(self, window: Any, theme: Theme | None = None) -> None:
        """Draw the picker on a curses window."""
        window.erase()
        _draw(window, self._rows(theme if theme is not None else Theme()))
        window.refresh()