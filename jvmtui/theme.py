"""Colour scheme of the terminal interface.

Colours are names understood by the renderer: ``reset`` (terminal default),
``red``, ``green``, ``yellow``, ``blue``, ``cyan`` and ``dark_gray``.
"""

from __future__ import annotations

from dataclasses import dataclass

from .types import ThreadState


@dataclass(frozen=True)
class Theme:
    primary: str = "cyan"
    secondary: str = "yellow"
    text: str = "reset"
    text_dim: str = "dark_gray"
    background: str = "reset"
    success: str = "green"
    warning: str = "yellow"
    error: str = "red"
    info: str = "cyan"
    border: str = "dark_gray"
    border_focused: str = "cyan"
    highlight: str = "yellow"
    gauge_filled: str = "cyan"
    gauge_background: str = "reset"
    thread_state_runnable: str = "green"
    thread_state_blocked: str = "red"
    thread_state_waiting: str = "yellow"
    thread_state_timed_waiting: str = "cyan"
    thread_state_terminated: str = "dark_gray"
    thread_state_new: str = "blue"
    memory_critical: str = "red"
    memory_high: str = "yellow"
    memory_normal: str = "reset"
    chart_line_primary: str = "cyan"
    chart_line_secondary: str = "red"

    def thread_state_color(self, state: ThreadState) -> str:
        return {
            ThreadState.RUNNABLE: self.thread_state_runnable,
            ThreadState.BLOCKED: self.thread_state_blocked,
            ThreadState.WAITING: self.thread_state_waiting,
            ThreadState.TIMED_WAITING: self.thread_state_timed_waiting,
            ThreadState.TERMINATED: self.thread_state_terminated,
            ThreadState.NEW: self.thread_state_new,
        }[state]

    def memory_color(self, ratio: float) -> str:
        """Gauge colour for a usage ratio: critical above 0.9, high above 0.7."""
        if ratio > 0.9:
            return self.memory_critical
        if ratio > 0.7:
            return self.memory_high
        return self.success