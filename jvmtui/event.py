"""Mapping of key presses to navigation events."""

from __future__ import annotations

from enum import Enum


class Event(Enum):
    """Navigation events; the ``TAB_n`` members carry the tab index as value."""

    TAB_0 = 0
    TAB_1 = 1
    TAB_2 = 2
    TAB_3 = 3
    TAB_4 = 4
    QUIT = "quit"
    NEXT_TAB = "next_tab"
    PREV_TAB = "prev_tab"
    UP = "up"
    DOWN = "down"
    ENTER = "enter"
    REFRESH = "refresh"
    HELP = "help"
    NONE = "none"


CTRL_C = "\x03"

_KEYMAP: dict[str, Event] = {
    "q": Event.QUIT,
    CTRL_C: Event.QUIT,
    "1": Event.TAB_0,
    "2": Event.TAB_1,
    "3": Event.TAB_2,
    "4": Event.TAB_3,
    "5": Event.TAB_4,
    "l": Event.NEXT_TAB,
    "\t": Event.NEXT_TAB,
    "h": Event.PREV_TAB,
    "KEY_BTAB": Event.PREV_TAB,
    "k": Event.UP,
    "KEY_UP": Event.UP,
    "j": Event.DOWN,
    "KEY_DOWN": Event.DOWN,
    "\n": Event.ENTER,
    "\r": Event.ENTER,
    "KEY_ENTER": Event.ENTER,
    "r": Event.REFRESH,
    "?": Event.HELP,
}


def map_key(key: str) -> Event:
    """Translate a key, given as a character or a curses key name such as
    ``KEY_UP``, into an event; unbound keys give ``Event.NONE``."""
    return _KEYMAP.get(key, Event.NONE)